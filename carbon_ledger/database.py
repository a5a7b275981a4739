# carbon_ledger/database.py
import os

from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

from .settings import settings

SQLALCHEMY_DATABASE_URL = settings.database_url


def make_engine(url, **kwargs):
    if url.startswith("sqlite"):
        path = url.split("sqlite:///", 1)[-1]
        if path and path != url and path != ":memory:":
            os.makedirs(os.path.dirname(os.path.abspath(path)), exist_ok=True)
        kwargs.setdefault("connect_args", {"check_same_thread": False})
    return create_engine(url, **kwargs)


engine = make_engine(SQLALCHEMY_DATABASE_URL)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()

"""Shared fixtures: a fixed clock, sequential ids, and isolated stores."""
import itertools
import os
from datetime import datetime, timedelta

# keep the app from creating data/carbon.db during tests
os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from carbon_ledger.database import Base
from carbon_ledger.engine import CarbonLedger
from carbon_ledger.factors import Category, InputKind, unit_for
from carbon_ledger.schemas import ActivityRecord, PositiveActionRecord
from carbon_ledger.storage import MemoryStore


class FixedClock:
    def __init__(self, now):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, **kwargs):
        self.now += timedelta(**kwargs)


@pytest.fixture
def clock():
    return FixedClock(datetime(2025, 1, 5, 9, 30))


@pytest.fixture
def ids():
    counter = itertools.count(1)
    return lambda: f"rec_{next(counter)}"


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture
def ledger(store, clock, ids):
    return CarbonLedger(store, clock=clock, id_factory=ids, strict_factors=False, default_region="global")


@pytest.fixture
def session_factory():
    engine = create_engine(
        "sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool
    )
    Base.metadata.create_all(bind=engine)
    yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


_seq = itertools.count(1)


def _make_activity(category, type_, co2, when, value=1.0, unit=None):
    return ActivityRecord(
        id=f"a{next(_seq)}",
        category=Category(category),
        type=type_,
        value=value,
        unit=unit or unit_for(category, type_),
        co2_impact=co2,
        timestamp=when,
    )


def _make_action(co2, when, action_id="plant_tree", value=1.0):
    kind = InputKind.BOOLEAN if isinstance(value, bool) else InputKind.QUANTITY
    return PositiveActionRecord(
        id=f"p{next(_seq)}",
        action_id=action_id,
        input_kind=kind,
        value=value,
        co2_saved=co2,
        timestamp=when,
    )


@pytest.fixture
def make_activity():
    return _make_activity


@pytest.fixture
def make_action():
    return _make_action

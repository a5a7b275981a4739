# carbon_ledger/settings.py
import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field

load_dotenv()

BASE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
DEFAULT_DATA_DIR = os.path.join(BASE_DIR, "data")


class Settings(BaseModel):
    database_url: str = Field(
        default=f"sqlite:///{os.path.join(DEFAULT_DATA_DIR, 'carbon.db')}", alias="DATABASE_URL"
    )
    store_backend: str = Field(default="sql", alias="STORE_BACKEND")
    data_dir: str = Field(default=DEFAULT_DATA_DIR, alias="DATA_DIR")
    default_region: str = Field(default="global", alias="DEFAULT_REGION")
    strict_factors: bool = Field(default=False, alias="STRICT_FACTORS")
    monthly_target_kg: float = Field(default=300.0, alias="MONTHLY_TARGET_KG")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    @classmethod
    def from_env(cls):
        # unset variables fall back to the field defaults
        keys = [
            "DATABASE_URL",
            "STORE_BACKEND",
            "DATA_DIR",
            "DEFAULT_REGION",
            "STRICT_FACTORS",
            "MONTHLY_TARGET_KG",
            "LOG_LEVEL",
        ]
        data = {k: os.environ[k] for k in keys if os.getenv(k) is not None}
        return cls.model_validate(data)


settings = Settings.from_env()

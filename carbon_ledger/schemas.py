# carbon_ledger/schemas.py
from datetime import date, datetime
from typing import List, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .factors import Category, InputKind, unit_for


class ActivityInput(BaseModel):
    category: str
    type: str
    value: float


class CarbonCalculation(BaseModel):
    co2_amount: float = Field(..., description="kg CO2e, rounded half-up to 2 places")
    unit: str
    category: str


class ActivityRecord(BaseModel):
    model_config = ConfigDict(frozen=True, from_attributes=True)

    id: str
    category: Category
    type: str
    value: float
    unit: str
    co2_impact: float = Field(..., description="Frozen at log time, never recomputed")
    timestamp: datetime

    @model_validator(mode="after")
    def check_unit(self):
        expected = unit_for(self.category, self.type)
        if self.unit != expected:
            raise ValueError(f"unit {self.unit!r} does not match {expected!r} for {self.category.value}/{self.type}")
        return self


class PositiveActionRecord(BaseModel):
    model_config = ConfigDict(frozen=True, from_attributes=True)

    id: str
    action_id: str
    input_kind: InputKind
    value: Union[bool, float]
    co2_saved: float = Field(..., gt=0)
    timestamp: datetime


class TimeBucket(BaseModel):
    label: str
    start: date
    end: date
    total: float = 0.0
    saved: float = 0.0
    net: float = 0.0
    running_total: float = 0.0


class Comparison(BaseModel):
    percentage_delta: int
    status: str
    message: str


class Achievement(BaseModel):
    id: str
    title: str
    description: str
    earned: bool


class DashboardSummary(BaseModel):
    as_of: date
    today_footprint: float
    total_emissions: float
    total_savings: float
    net_footprint: float
    logging_days: int
    average_daily_emissions: float
    monthly_progress: float
    current_streak: int
    streak_status: str
    footprint_status: str
    achievements: List[Achievement]


# API payloads
class LogActivityIn(BaseModel):
    category: str
    type: str
    value: float


class LogPositiveActionIn(BaseModel):
    action_id: str
    value: Union[bool, float]


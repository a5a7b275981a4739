# carbon_ledger/models.py
from sqlalchemy import Column, DateTime, Float, Index, String

from .database import Base

# Rows are insert/delete only; co2 figures are frozen at log time.


class Activity(Base):
    __tablename__ = "activities"
    id = Column(String, primary_key=True)
    user_id = Column(String, nullable=False)
    category = Column(String, nullable=False)  # transportation, energy, food, waste, consumption
    type = Column(String, nullable=False)
    value = Column(Float, nullable=False)
    unit = Column(String, nullable=False)
    co2_impact = Column(Float, nullable=False)
    timestamp = Column(DateTime, nullable=False)

    __table_args__ = (Index("ix_activities_user_ts", "user_id", "timestamp"),)


class PositiveAction(Base):
    __tablename__ = "positive_actions"
    id = Column(String, primary_key=True)
    user_id = Column(String, nullable=False)
    action_id = Column(String, nullable=False)
    input_kind = Column(String, nullable=False)  # quantity | boolean
    value = Column(Float, nullable=False)  # booleans stored as 1.0
    co2_saved = Column(Float, nullable=False)
    timestamp = Column(DateTime, nullable=False)

    __table_args__ = (Index("ix_positive_actions_user_ts", "user_id", "timestamp"),)

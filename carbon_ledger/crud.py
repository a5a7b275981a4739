# carbon_ledger/crud.py
import logging

from sqlalchemy.orm import Session

from . import models
from .database import SessionLocal
from .errors import RecordNotFound
from .factors import InputKind
from .schemas import ActivityRecord, PositiveActionRecord

logger = logging.getLogger(__name__)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def _to_positive_action(row):
    value = row.value
    if row.input_kind == InputKind.BOOLEAN.value:
        value = bool(value)
    return PositiveActionRecord(
        id=row.id,
        action_id=row.action_id,
        input_kind=row.input_kind,
        value=value,
        co2_saved=row.co2_saved,
        timestamp=row.timestamp,
    )


class SqlStore:
    """Activity store over the SQLAlchemy tables, scoped to one user."""

    def __init__(self, db: Session, user_id):
        self.db = db
        self.user_id = user_id

    # Activities
    def list_activities(self):
        rows = (
            self.db.query(models.Activity)
            .filter(models.Activity.user_id == self.user_id)
            .order_by(models.Activity.timestamp, models.Activity.id)
            .all()
        )
        return [ActivityRecord.model_validate(r) for r in rows]

    def add_activity(self, record):
        row = models.Activity(
            id=record.id,
            user_id=self.user_id,
            category=record.category.value,
            type=record.type,
            value=record.value,
            unit=record.unit,
            co2_impact=record.co2_impact,
            timestamp=record.timestamp,
        )
        self.db.add(row); self.db.commit()
        return record

    def remove_activity(self, record_id):
        row = (
            self.db.query(models.Activity)
            .filter(models.Activity.user_id == self.user_id, models.Activity.id == record_id)
            .first()
        )
        if row is None:
            raise RecordNotFound("activity", record_id)
        self.db.delete(row); self.db.commit()
        logger.debug("Removed activity %s for user %s", record_id, self.user_id)

    # Positive actions
    def list_positive_actions(self):
        rows = (
            self.db.query(models.PositiveAction)
            .filter(models.PositiveAction.user_id == self.user_id)
            .order_by(models.PositiveAction.timestamp, models.PositiveAction.id)
            .all()
        )
        return [_to_positive_action(r) for r in rows]

    def add_positive_action(self, record):
        row = models.PositiveAction(
            id=record.id,
            user_id=self.user_id,
            action_id=record.action_id,
            input_kind=record.input_kind.value,
            value=float(record.value),
            co2_saved=record.co2_saved,
            timestamp=record.timestamp,
        )
        self.db.add(row); self.db.commit()
        return record

    def remove_positive_action(self, record_id):
        row = (
            self.db.query(models.PositiveAction)
            .filter(models.PositiveAction.user_id == self.user_id, models.PositiveAction.id == record_id)
            .first()
        )
        if row is None:
            raise RecordNotFound("positive action", record_id)
        self.db.delete(row); self.db.commit()
        logger.debug("Removed positive action %s for user %s", record_id, self.user_id)


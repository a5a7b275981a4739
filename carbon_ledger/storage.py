# carbon_ledger/storage.py
import json
import logging
from pathlib import Path
from threading import RLock
from typing import List, Protocol

from .errors import RecordNotFound
from .schemas import ActivityRecord, PositiveActionRecord

logger = logging.getLogger(__name__)

# Shared by every JsonStore instance; guards reads and read-modify-write cycles.
lock = RLock()


class ActivityStore(Protocol):
    """What the ledger needs from persistence: ordered reads, append, remove."""

    def list_activities(self) -> List[ActivityRecord]: ...

    def add_activity(self, record: ActivityRecord) -> ActivityRecord: ...

    def remove_activity(self, record_id: str) -> None: ...

    def list_positive_actions(self) -> List[PositiveActionRecord]: ...

    def add_positive_action(self, record: PositiveActionRecord) -> PositiveActionRecord: ...

    def remove_positive_action(self, record_id: str) -> None: ...


def _without(records, record_id, kind):
    kept = [r for r in records if r.id != record_id]
    if len(kept) == len(records):
        raise RecordNotFound(kind, record_id)
    return kept


class MemoryStore:
    def __init__(self, activities=None, positive_actions=None):
        self._activities = list(activities or [])
        self._positive_actions = list(positive_actions or [])

    def list_activities(self):
        return list(self._activities)

    def add_activity(self, record):
        self._activities.append(record)
        return record

    def remove_activity(self, record_id):
        self._activities = _without(self._activities, record_id, "activity")

    def list_positive_actions(self):
        return list(self._positive_actions)

    def add_positive_action(self, record):
        self._positive_actions.append(record)
        return record

    def remove_positive_action(self, record_id):
        self._positive_actions = _without(self._positive_actions, record_id, "positive action")


class JsonStore:
    ACTIVITIES = "activities.json"
    POSITIVE_ACTIONS = "positive_actions.json"

    def __init__(self, data_dir):
        self.data_dir = Path(data_dir)
        self.data_dir.mkdir(exist_ok=True, parents=True)

    def _path(self, name):
        return self.data_dir / name

    def _read(self, name, model):
        p = self._path(name)
        with lock:
            if not p.exists():
                return []
            with p.open("r", encoding="utf-8") as f:
                return [model.model_validate(item) for item in json.load(f)]

    def _write(self, name, records):
        p = self._path(name)
        with p.open("w", encoding="utf-8") as f:
            json.dump([r.model_dump(mode="json") for r in records], f, ensure_ascii=False, indent=2)

    def list_activities(self):
        return self._read(self.ACTIVITIES, ActivityRecord)

    def add_activity(self, record):
        with lock:
            self._write(self.ACTIVITIES, self.list_activities() + [record])
        logger.debug("Stored activity %s in %s", record.id, self.data_dir)
        return record

    def remove_activity(self, record_id):
        with lock:
            self._write(self.ACTIVITIES, _without(self.list_activities(), record_id, "activity"))

    def list_positive_actions(self):
        return self._read(self.POSITIVE_ACTIONS, PositiveActionRecord)

    def add_positive_action(self, record):
        with lock:
            self._write(self.POSITIVE_ACTIONS, self.list_positive_actions() + [record])
        logger.debug("Stored positive action %s in %s", record.id, self.data_dir)
        return record

    def remove_positive_action(self, record_id):
        with lock:
            self._write(
                self.POSITIVE_ACTIONS,
                _without(self.list_positive_actions(), record_id, "positive action"),
            )

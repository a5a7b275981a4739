# carbon_ledger/main.py
import logging
import os
from datetime import date
from typing import Dict, List, Optional

from fastapi import Depends, FastAPI, HTTPException, Path
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.orm import Session

from . import schemas
from .benchmarks import compare_to_average
from .crud import SqlStore, get_db
from .database import Base, engine
from .engine import CarbonLedger, catalogue
from .errors import CarbonLedgerError, InvalidActionValue, InvalidInput, RecordNotFound, UnknownFactor
from .settings import settings
from .storage import JsonStore

logging.basicConfig(level=settings.log_level.upper())
logger = logging.getLogger(__name__)

# Create DB tables
Base.metadata.create_all(bind=engine)

app = FastAPI(title="Carbon Ledger API")
app.add_middleware(CORSMiddleware, allow_origins=["*"], allow_methods=["*"], allow_headers=["*"])

USER_ID = Path(..., pattern=r"^[A-Za-z0-9_-]+$")


def get_ledger(user_id: str = USER_ID, db: Session = Depends(get_db)):
    if settings.store_backend == "json":
        store = JsonStore(os.path.join(settings.data_dir, user_id))
    else:
        store = SqlStore(db, user_id)
    return CarbonLedger(store)


def _http_error(exc: CarbonLedgerError):
    if isinstance(exc, RecordNotFound):
        return HTTPException(status_code=404, detail=str(exc))
    if isinstance(exc, UnknownFactor):
        return HTTPException(status_code=422, detail=str(exc))
    if isinstance(exc, (InvalidInput, InvalidActionValue)):
        return HTTPException(status_code=400, detail=str(exc))
    logger.exception("Unhandled ledger error: %s", exc)
    return HTTPException(status_code=500, detail="Ledger error")


@app.get("/health")
def health():
    return {"status": "ok", "service": "carbon-ledger"}


@app.get("/catalogue")
def get_catalogue():
    return catalogue()


@app.get("/benchmarks/compare", response_model=schemas.Comparison)
def compare(footprint: float, region: Optional[str] = None):
    try:
        return compare_to_average(footprint, region or settings.default_region)
    except CarbonLedgerError as exc:
        raise _http_error(exc) from exc


# -----------------
# Activities
# -----------------
@app.post("/users/{user_id}/activities", response_model=schemas.ActivityRecord)
def log_activity(payload: schemas.LogActivityIn, ledger: CarbonLedger = Depends(get_ledger)):
    try:
        return ledger.log_activity(payload.category, payload.type, payload.value)
    except CarbonLedgerError as exc:
        raise _http_error(exc) from exc


@app.get("/users/{user_id}/activities", response_model=List[schemas.ActivityRecord])
def list_activities(ledger: CarbonLedger = Depends(get_ledger)):
    return ledger.activities()


@app.delete("/users/{user_id}/activities/{record_id}", status_code=204)
def remove_activity(record_id: str, ledger: CarbonLedger = Depends(get_ledger)):
    try:
        ledger.remove_activity(record_id)
    except CarbonLedgerError as exc:
        raise _http_error(exc) from exc


# -----------------
# Positive actions
# -----------------
@app.post("/users/{user_id}/positive-actions", response_model=schemas.PositiveActionRecord)
def log_positive_action(payload: schemas.LogPositiveActionIn, ledger: CarbonLedger = Depends(get_ledger)):
    try:
        return ledger.log_positive_action(payload.action_id, payload.value)
    except CarbonLedgerError as exc:
        raise _http_error(exc) from exc


@app.get("/users/{user_id}/positive-actions", response_model=List[schemas.PositiveActionRecord])
def list_positive_actions(ledger: CarbonLedger = Depends(get_ledger)):
    return ledger.positive_actions()


@app.delete("/users/{user_id}/positive-actions/{record_id}", status_code=204)
def remove_positive_action(record_id: str, ledger: CarbonLedger = Depends(get_ledger)):
    try:
        ledger.remove_positive_action(record_id)
    except CarbonLedgerError as exc:
        raise _http_error(exc) from exc


# -----------------
# Dashboard queries
# -----------------
@app.get("/users/{user_id}/footprint/daily")
def daily_footprint(day: Optional[date] = None, ledger: CarbonLedger = Depends(get_ledger)):
    return {"day": day, "co2_kg": ledger.daily_footprint(day)}


@app.get("/users/{user_id}/footprint/net")
def net_footprint(start: Optional[date] = None, end: Optional[date] = None, ledger: CarbonLedger = Depends(get_ledger)):
    return {"start": start, "end": end, "co2_kg": ledger.net_footprint(start, end)}


@app.get("/users/{user_id}/breakdown", response_model=Dict[str, int])
def category_breakdown(ledger: CarbonLedger = Depends(get_ledger)):
    return ledger.category_breakdown()


@app.get("/users/{user_id}/timeseries", response_model=List[schemas.TimeBucket])
def time_series(start: date, end: date, bucket: str = "day", ledger: CarbonLedger = Depends(get_ledger)):
    try:
        return ledger.time_series(bucket, start, end)
    except CarbonLedgerError as exc:
        raise _http_error(exc) from exc


@app.get("/users/{user_id}/streak")
def streak(as_of: Optional[date] = None, ledger: CarbonLedger = Depends(get_ledger)):
    return {"as_of": as_of, "streak": ledger.current_streak(as_of)}


@app.get("/users/{user_id}/suggestions", response_model=List[str])
def suggestions(ledger: CarbonLedger = Depends(get_ledger)):
    return ledger.reduction_suggestions()


@app.get("/users/{user_id}/summary", response_model=schemas.DashboardSummary)
def summary(as_of: Optional[date] = None, ledger: CarbonLedger = Depends(get_ledger)):
    return ledger.summary(as_of)

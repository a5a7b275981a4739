# carbon_ledger/streaks.py
from datetime import timedelta

from .aggregator import as_date


def logged_dates(records):
    return {r.timestamp.date() for r in records}


def current_streak(records, as_of) -> int:
    """Consecutive days with at least one record, counting back from ``as_of``.

    Records after ``as_of`` are ignored and a missing ``as_of`` ends the
    streak at 0. Always derived from the records, never stored.
    """
    as_of = as_date(as_of)
    dates = {d for d in logged_dates(records) if d <= as_of}
    streak = 0
    day = as_of
    while day in dates:
        streak += 1
        day -= timedelta(days=1)
    return streak


def streak_status(streak):
    if streak == 0:
        return "Start today!"
    if streak >= 30:
        return "Incredible dedication!"
    if streak >= 14:
        return "Amazing consistency!"
    if streak >= 7:
        return "Great momentum!"
    return "Building habits!"

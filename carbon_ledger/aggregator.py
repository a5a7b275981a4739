# carbon_ledger/aggregator.py
import calendar
from bisect import bisect_right
from collections import defaultdict
from datetime import date, datetime, timedelta
from typing import Dict, List

from .errors import InvalidInput
from .factors import Category
from .schemas import TimeBucket
from .utils import round_half_up, round_int

BUCKET_DAYS = {"day": 1, "week": 7}
BUCKET_SIZES = ("day", "week", "month")


def as_date(value):
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    raise InvalidInput(f"Expected a date, got {value!r}")


def _category_key(category):
    return category.value if isinstance(category, Category) else str(category)


def category_totals(records) -> Dict[str, float]:
    totals = defaultdict(float)
    for r in records:
        totals[_category_key(r.category)] += r.co2_impact
    return {c.value: totals.get(c.value, 0.0) for c in Category}


def aggregate_by_category(records) -> Dict[str, int]:
    """Percentage share of the grand total per category.

    Each share is rounded on its own, so the values can miss 100 by a few
    points. With a zero grand total every share is 0.
    """
    totals = category_totals(records)
    grand_total = sum(totals.values())
    if grand_total == 0:
        return {c: 0 for c in totals}
    return {c: round_int(v / grand_total * 100) for c, v in totals.items()}


def add_months(d, months):
    y, m = divmod(d.month - 1 + months, 12)
    year, month = d.year + y, m + 1
    day = min(d.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


def bucket_bounds(bucket_size, window_start, window_end):
    """Contiguous half-open [start, end) intervals covering the window."""
    if bucket_size not in BUCKET_SIZES:
        raise InvalidInput(f"Unknown bucket size {bucket_size!r}, expected one of {BUCKET_SIZES}")
    window_start, window_end = as_date(window_start), as_date(window_end)
    if window_end < window_start:
        raise InvalidInput(f"Window end {window_end} is before start {window_start}")

    bounds = []
    k = 0
    while True:
        if bucket_size == "month":
            start = add_months(window_start, k)
            end = add_months(window_start, k + 1)
        else:
            width = BUCKET_DAYS[bucket_size]
            start = window_start + timedelta(days=k * width)
            end = start + timedelta(days=width)
        if start >= window_end:
            break
        bounds.append((start, min(end, window_end)))
        k += 1
    return bounds


def _label(bucket_size, start):
    if bucket_size == "month":
        return start.strftime("%Y-%m")
    return start.isoformat()


def _bucket_index(starts, ends, day):
    idx = bisect_right(starts, day) - 1
    if idx >= 0 and day < ends[idx]:
        return idx
    return None


def aggregate_by_time_bucket(records, bucket_size, window_start, window_end, positive_actions=()) -> List[TimeBucket]:
    bounds = bucket_bounds(bucket_size, window_start, window_end)
    starts = [b[0] for b in bounds]
    ends = [b[1] for b in bounds]
    totals = [0.0] * len(bounds)
    saved = [0.0] * len(bounds)

    for r in records:
        idx = _bucket_index(starts, ends, r.timestamp.date())
        if idx is not None:
            totals[idx] += r.co2_impact
    for a in positive_actions:
        idx = _bucket_index(starts, ends, a.timestamp.date())
        if idx is not None:
            saved[idx] += a.co2_saved

    out = []
    running = 0.0
    for (start, end), total, s in zip(bounds, totals, saved):
        running += total
        out.append(
            TimeBucket(
                label=_label(bucket_size, start),
                start=start,
                end=end,
                total=round_half_up(total),
                saved=round_half_up(s),
                net=round_half_up(total - s),
                running_total=round_half_up(running),
            )
        )
    return out


def in_window(timestamp, start=None, end=None):
    d = timestamp.date()
    if start is not None and d < as_date(start):
        return False
    if end is not None and d >= as_date(end):
        return False
    return True


def records_on(records, day):
    day = as_date(day)
    return [r for r in records if r.timestamp.date() == day]


def total_emissions(records, start=None, end=None):
    return sum((r.co2_impact for r in records if in_window(r.timestamp, start, end)), 0.0)


def total_savings(positive_actions, start=None, end=None):
    return sum((a.co2_saved for a in positive_actions if in_window(a.timestamp, start, end)), 0.0)


def net_footprint(records, positive_actions, start=None, end=None):
    return total_emissions(records, start, end) - total_savings(positive_actions, start, end)

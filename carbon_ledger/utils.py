# carbon_ledger/utils.py
import logging
import math
import uuid
from datetime import datetime, timezone
from decimal import ROUND_HALF_UP, Decimal
from numbers import Real

from .errors import InvalidInput, UnknownFactor
from .factors import CO2_UNIT, lookup_factor
from .schemas import ActivityInput, CarbonCalculation
from .settings import settings

logger = logging.getLogger(__name__)


def gen_id(prefix):
    return f"{prefix}_{uuid.uuid4().hex}"


def utcnow():
    # naive UTC, matching what the DateTime columns store
    return datetime.now(timezone.utc).replace(tzinfo=None)


def round_half_up(value, places=2):
    # repr() keeps the shortest decimal form, so 5.25 stays 5.25
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(repr(float(value))).quantize(quantum, rounding=ROUND_HALF_UP))


def round_int(value):
    """Nearest integer, halves rounded towards +inf (not banker's rounding)."""
    return int(math.floor(value + 0.5))


def validate_value(value, field="value"):
    if isinstance(value, bool) or not isinstance(value, Real):
        raise InvalidInput(f"{field} must be a number, got {value!r}")
    if not math.isfinite(value):
        raise InvalidInput(f"{field} must be finite, got {value!r}")
    if value < 0:
        raise InvalidInput(f"{field} must be >= 0, got {value!r}")
    return float(value)


def calculate(activity: ActivityInput, strict=None) -> CarbonCalculation:
    value = validate_value(activity.value)
    factor = lookup_factor(activity.category, activity.type)
    if factor is None:
        if settings.strict_factors if strict is None else strict:
            raise UnknownFactor(activity.category, activity.type)
        logger.warning("No emission factor for %s/%s, using 0", activity.category, activity.type)
        coefficient = 0.0
    else:
        coefficient = factor.coefficient

    return CarbonCalculation(
        co2_amount=round_half_up(value * coefficient),
        unit=CO2_UNIT,
        category=activity.category,
    )


def daily_footprint(activities, strict=None):
    total = 0.0
    for activity in activities:
        total += calculate(activity, strict=strict).co2_amount
    return total


def weekly_footprint(daily_activities, strict=None):
    # one list of activities per day
    total = 0.0
    for day in daily_activities:
        total += daily_footprint(day, strict=strict)
    return total


def monthly_footprint(weekly_footprints):
    # already-summed weekly figures; never re-derived from raw activities
    total = 0.0
    for weekly in weekly_footprints:
        total += weekly
    return total

# carbon_ledger/benchmarks.py
import logging
import math
from numbers import Real

from .errors import InvalidInput
from .factors import REGIONAL_AVERAGES, Category
from .schemas import Achievement, Comparison
from .utils import round_int

logger = logging.getLogger(__name__)

# |delta| within this many percent counts as average
AVERAGE_BAND = 5

SUSTAINABLE_TRANSPORT = ("bicycle", "walking")


def average_footprint(region="global"):
    avg = REGIONAL_AVERAGES.get((region or "global").lower())
    if avg is None:
        logger.info("No benchmark for region %r, using global average", region)
        return REGIONAL_AVERAGES["global"]
    return avg


def compare_to_average(footprint, region="global") -> Comparison:
    # negative values are valid net footprints
    if isinstance(footprint, bool) or not isinstance(footprint, Real) or not math.isfinite(footprint):
        raise InvalidInput(f"footprint must be a finite number, got {footprint!r}")
    region = region or "global"
    average = average_footprint(region)
    delta = round_int((footprint - average) / average * 100)

    if abs(delta) <= AVERAGE_BAND:
        status = "average"
        message = f"Your footprint is about average for {region}"
    elif delta > 0:
        status = "above"
        message = f"Your footprint is {delta}% above the {region} average"
    else:
        status = "below"
        message = f"Your footprint is {abs(delta)}% below the {region} average - great job!"

    return Comparison(percentage_delta=delta, status=status, message=message)


def footprint_status(value):
    if value == 0:
        return "No data yet"
    if value <= 5:
        return "Excellent!"
    if value <= 10:
        return "Good progress"
    if value <= 15:
        return "Room for improvement"
    return "Needs attention"


def _is(record, category):
    return record.category == category


def reduction_suggestions(records):
    suggestions = []
    for r in records:
        if _is(r, Category.TRANSPORTATION):
            if "car" in r.type and r.value > 20:
                suggestions.append("Consider carpooling or using public transport for long trips")
            if r.type == "plane_domestic" and r.value > 500:
                suggestions.append("Try video conferencing instead of short flights")
        elif _is(r, Category.ENERGY):
            if r.type == "electricity" and r.value > 30:
                suggestions.append("Switch to LED bulbs and unplug devices when not in use")
        elif _is(r, Category.FOOD):
            if r.type == "beef" and r.value > 0.5:
                suggestions.append("Try reducing meat consumption by having one plant-based meal per day")
        elif _is(r, Category.WASTE):
            if r.type == "general_waste" and r.value > 2:
                suggestions.append("Increase recycling and composting to reduce general waste")
    return suggestions


def achievements(records, streak):
    records = list(records)

    def any_of(pred):
        return any(pred(r) for r in records)

    return [
        Achievement(id="first_steps", title="First Steps",
                    description="Started your sustainability journey", earned=streak >= 1),
        Achievement(id="week_warrior", title="Week Warrior",
                    description="Maintained a 7-day streak", earned=streak >= 7),
        Achievement(id="green_commuter", title="Green Commuter",
                    description="Used sustainable transportation",
                    earned=any_of(lambda r: _is(r, Category.TRANSPORTATION) and r.type in SUSTAINABLE_TRANSPORT)),
        Achievement(id="energy_saver", title="Energy Saver",
                    description="Tracked energy consumption",
                    earned=any_of(lambda r: _is(r, Category.ENERGY))),
        Achievement(id="waste_warrior", title="Waste Warrior",
                    description="Managed waste sustainably",
                    earned=any_of(lambda r: _is(r, Category.WASTE))),
        Achievement(id="food_hero", title="Food Hero",
                    description="Chose plant-based options",
                    earned=any_of(lambda r: _is(r, Category.FOOD) and "plant" in r.type)),
    ]

# carbon_ledger/factors.py
# Emission factors (kg CO2e per unit) and the positive-action catalogue.
# Both tables are read-only at runtime; edit them here, never per record.
from enum import Enum
from typing import NamedTuple


class Category(str, Enum):
    TRANSPORTATION = "transportation"
    ENERGY = "energy"
    FOOD = "food"
    WASTE = "waste"
    CONSUMPTION = "consumption"


class InputKind(str, Enum):
    QUANTITY = "quantity"
    BOOLEAN = "boolean"


class EmissionFactor(NamedTuple):
    coefficient: float
    unit: str


class PositiveAction(NamedTuple):
    id: str
    name: str
    input_kind: InputKind
    coefficient: float
    unit: str = ""
    integral: bool = False
    description: str = ""


FALLBACK_UNIT = "units"
CO2_UNIT = "kg CO2"

FACTORS = {
    Category.TRANSPORTATION: {
        "car_gasoline": EmissionFactor(0.21, "km"),
        "car_diesel": EmissionFactor(0.17, "km"),
        "car_electric": EmissionFactor(0.05, "km"),
        "bus": EmissionFactor(0.08, "km"),
        "train": EmissionFactor(0.04, "km"),
        "plane_domestic": EmissionFactor(0.25, "km"),
        "plane_international": EmissionFactor(0.15, "km"),
        "motorcycle": EmissionFactor(0.12, "km"),
        "bicycle": EmissionFactor(0.0, "km"),
        "walking": EmissionFactor(0.0, "km"),
    },
    Category.ENERGY: {
        "electricity": EmissionFactor(0.5, "kWh"),
        "natural_gas": EmissionFactor(2.0, "m³"),
        "heating_oil": EmissionFactor(2.7, "L"),
        "propane": EmissionFactor(1.5, "L"),
    },
    Category.FOOD: {
        "beef": EmissionFactor(27.0, "kg"),
        "pork": EmissionFactor(12.1, "kg"),
        "chicken": EmissionFactor(6.9, "kg"),
        "fish": EmissionFactor(6.1, "kg"),
        "dairy": EmissionFactor(3.2, "kg"),
        "vegetables": EmissionFactor(2.0, "kg"),
        "fruits": EmissionFactor(1.1, "kg"),
        "grains": EmissionFactor(2.7, "kg"),
        "plant_based_meal": EmissionFactor(1.5, "meals"),
        "processed_food": EmissionFactor(4.5, "kg"),
    },
    Category.WASTE: {
        "general_waste": EmissionFactor(0.5, "kg"),
        # negative: avoided emissions relative to landfill
        "recycling": EmissionFactor(-0.1, "kg"),
        "composting": EmissionFactor(-0.2, "kg"),
        "electronic_waste": EmissionFactor(1.2, "kg"),
    },
    Category.CONSUMPTION: {
        "clothing_new": EmissionFactor(8.0, "items"),
        "clothing_secondhand": EmissionFactor(2.0, "items"),
        "electronics": EmissionFactor(300.0, "items"),
        "books": EmissionFactor(1.0, "items"),
        "furniture": EmissionFactor(50.0, "items"),
    },
}

CATALOGUE_VERSION = 1

POSITIVE_ACTIONS = {
    a.id: a
    for a in [
        PositiveAction(
            "plant_tree",
            "Plant a Tree",
            InputKind.QUANTITY,
            21.0,
            unit="trees",
            integral=True,
            description="Each tree absorbs approximately 21 kg of CO2 per year",
        ),
        PositiveAction(
            "renewable_energy",
            "Switched to Renewable Energy",
            InputKind.BOOLEAN,
            2250.0,
            description="Switching to renewable energy saves 1,500-3,000 kg CO2 annually",
        ),
        PositiveAction(
            "home_insulation",
            "Home Insulation Improvement",
            InputKind.BOOLEAN,
            500.0,
            description="Improved home insulation saves 500 kg CO2 annually",
        ),
    ]
}

# Average daily footprint per person, kg CO2
REGIONAL_AVERAGES = {
    "global": 12.0,
    "usa": 16.0,
    "europe": 8.5,
    "asia": 7.2,
    "africa": 3.1,
    "oceania": 15.8,
}


def parse_category(category):
    """Return the Category member for ``category`` or None when it is not one."""
    if isinstance(category, Category):
        return category
    try:
        return Category(category)
    except ValueError:
        return None


def lookup_factor(category, type_):
    cat = parse_category(category)
    if cat is None:
        return None
    return FACTORS[cat].get(type_)


def unit_for(category, type_):
    factor = lookup_factor(category, type_)
    return factor.unit if factor else FALLBACK_UNIT

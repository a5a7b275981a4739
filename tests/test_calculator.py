import logging
import math

import pytest

from carbon_ledger.errors import InvalidInput, UnknownFactor
from carbon_ledger.schemas import ActivityInput
from carbon_ledger.utils import (
    calculate,
    daily_footprint,
    monthly_footprint,
    round_half_up,
    round_int,
    weekly_footprint,
)


def act(category, type_, value):
    return ActivityInput(category=category, type=type_, value=value)


class TestCalculate:
    def test_gasoline_car(self):
        result = calculate(act("transportation", "car_gasoline", 25))
        assert result.co2_amount == 5.25
        assert result.unit == "kg CO2"
        assert result.category == "transportation"

    def test_beef(self):
        assert calculate(act("food", "beef", 0.5)).co2_amount == 13.5

    def test_half_up_rounding(self):
        # 0.5 * 0.21 = 0.105; banker's rounding would give 0.1
        assert calculate(act("transportation", "car_gasoline", 0.5)).co2_amount == 0.11

    def test_negative_coefficient_passes_through(self):
        assert calculate(act("waste", "composting", 3)).co2_amount == -0.6

    def test_zero_value(self):
        assert calculate(act("energy", "electricity", 0)).co2_amount == 0.0

    def test_unknown_type_defaults_to_zero(self, caplog):
        with caplog.at_level(logging.WARNING):
            result = calculate(act("transportation", "hoverboard", 10), strict=False)
        assert result.co2_amount == 0.0
        assert "hoverboard" in caplog.text

    def test_unknown_category_defaults_to_zero(self):
        assert calculate(act("space", "rocket", 10), strict=False).co2_amount == 0.0

    def test_strict_mode_raises(self):
        with pytest.raises(UnknownFactor) as err:
            calculate(act("food", "tofu_deluxe", 1), strict=True)
        assert err.value.type == "tofu_deluxe"

    @pytest.mark.parametrize("value", [-1, math.inf, math.nan])
    def test_rejects_invalid_values(self, value):
        with pytest.raises(InvalidInput):
            calculate(act("energy", "electricity", value))

    def test_deterministic(self):
        a = act("energy", "natural_gas", 3.3)
        assert calculate(a) == calculate(a)


class TestPeriodFootprints:
    def test_daily_sums_rounded_amounts(self):
        day = [act("transportation", "car_gasoline", 25), act("food", "beef", 0.5)]
        assert daily_footprint(day) == pytest.approx(18.75)

    def test_daily_empty(self):
        assert daily_footprint([]) == 0

    def test_weekly_sums_days(self):
        days = [[act("transportation", "car_gasoline", 25)], [], [act("food", "beef", 0.5)]]
        assert weekly_footprint(days) == pytest.approx(18.75)

    def test_monthly_sums_weekly_figures(self):
        assert monthly_footprint([18.75, 1.25, 0.0]) == pytest.approx(20.0)
        assert monthly_footprint([]) == 0


class TestRounding:
    def test_round_half_up(self):
        assert round_half_up(2.675) == 2.68
        assert round_half_up(1.005) == 1.01
        assert round_half_up(0.125, 1) == 0.1

    def test_round_int_matches_halves_up(self):
        assert round_int(2.5) == 3
        assert round_int(-2.5) == -2
        assert round_int(4.999999999999997) == 5

# carbon_ledger/engine.py
"""Carbon accounting over an injected activity store.

Every query reads one snapshot of the store and derives its figures from
the frozen ``co2_impact``/``co2_saved`` values on the records. The clock and
id factory are injectable so that tests stay deterministic.
"""
import logging

from . import aggregator, benchmarks, streaks
from .errors import InvalidInput
from .factors import FACTORS, POSITIVE_ACTIONS, parse_category, unit_for
from .positive_actions import build_positive_action
from .schemas import ActivityInput, ActivityRecord, DashboardSummary
from .settings import settings
from .storage import ActivityStore
from .utils import calculate, gen_id, round_half_up, utcnow, validate_value

logger = logging.getLogger(__name__)


class CarbonLedger:
    def __init__(
        self,
        store: ActivityStore,
        clock=utcnow,
        id_factory=None,
        strict_factors=None,
        default_region=None,
        monthly_target_kg=None,
    ):
        self.store = store
        self.clock = clock
        self.id_factory = id_factory
        self.strict_factors = settings.strict_factors if strict_factors is None else strict_factors
        self.default_region = default_region or settings.default_region
        self.monthly_target_kg = monthly_target_kg or settings.monthly_target_kg

    def _new_id(self, prefix):
        return self.id_factory() if self.id_factory else gen_id(prefix)

    def _today(self):
        return self.clock().date()

    # Inbound
    def calculate(self, category, type_, value):
        validate_value(value)
        return calculate(ActivityInput(category=category, type=type_, value=value), strict=self.strict_factors)

    def log_activity(self, category, type_, value) -> ActivityRecord:
        value = validate_value(value)
        cat = parse_category(category)
        if cat is None:
            raise InvalidInput(f"Unknown category {category!r}")

        result = self.calculate(cat.value, type_, value)
        record = ActivityRecord(
            id=self._new_id("activity"),
            category=cat,
            type=type_,
            value=value,
            unit=unit_for(cat, type_),
            co2_impact=result.co2_amount,
            timestamp=self.clock(),
        )
        self.store.add_activity(record)
        logger.info("Logged %s/%s %s -> %s kg CO2", cat.value, type_, value, record.co2_impact)
        return record

    def log_positive_action(self, action_id, value):
        record = build_positive_action(
            action_id, value, clock=self.clock, id_factory=lambda: self._new_id("action")
        )
        self.store.add_positive_action(record)
        logger.info("Logged positive action %s -> %s kg CO2 saved", action_id, record.co2_saved)
        return record

    def remove_activity(self, record_id):
        self.store.remove_activity(record_id)
        logger.info("Removed activity %s", record_id)

    def remove_positive_action(self, record_id):
        self.store.remove_positive_action(record_id)
        logger.info("Removed positive action %s", record_id)

    def activities(self):
        return self.store.list_activities()

    def positive_actions(self):
        return self.store.list_positive_actions()

    # Outbound
    def daily_footprint(self, day=None):
        day = aggregator.as_date(day) if day is not None else self._today()
        records = aggregator.records_on(self.store.list_activities(), day)
        return round_half_up(aggregator.total_emissions(records))

    def net_footprint(self, start=None, end=None):
        return round_half_up(
            aggregator.net_footprint(
                self.store.list_activities(), self.store.list_positive_actions(), start, end
            )
        )

    def category_breakdown(self, records=None):
        if records is None:
            records = self.store.list_activities()
        return aggregator.aggregate_by_category(records)

    def time_series(self, bucket_size, start, end):
        return aggregator.aggregate_by_time_bucket(
            self.store.list_activities(),
            bucket_size,
            start,
            end,
            positive_actions=self.store.list_positive_actions(),
        )

    def current_streak(self, as_of=None):
        as_of = as_of if as_of is not None else self._today()
        return streaks.current_streak(self.store.list_activities(), as_of)

    def compare_to_average(self, footprint, region=None):
        return benchmarks.compare_to_average(footprint, region or self.default_region)

    def reduction_suggestions(self, records=None):
        if records is None:
            records = self.store.list_activities()
        return benchmarks.reduction_suggestions(records)

    def summary(self, as_of=None) -> DashboardSummary:
        as_of = aggregator.as_date(as_of) if as_of is not None else self._today()
        records = self.store.list_activities()
        actions = self.store.list_positive_actions()

        today = round_half_up(aggregator.total_emissions(aggregator.records_on(records, as_of)))
        total = aggregator.total_emissions(records)
        saved = aggregator.total_savings(actions)
        days = len(streaks.logged_dates(records))
        streak = streaks.current_streak(records, as_of)

        return DashboardSummary(
            as_of=as_of,
            today_footprint=today,
            total_emissions=round_half_up(total),
            total_savings=round_half_up(saved),
            net_footprint=round_half_up(total - saved),
            logging_days=days,
            average_daily_emissions=round_half_up(total / days) if days else 0.0,
            monthly_progress=round_half_up(min(100.0, total / self.monthly_target_kg * 100), 1),
            current_streak=streak,
            streak_status=streaks.streak_status(streak),
            footprint_status=benchmarks.footprint_status(today),
            achievements=benchmarks.achievements(records, streak),
        )


def catalogue():
    """Activity types with their units, and the positive-action catalogue."""
    return {
        "categories": {
            cat.value: {type_: factor.unit for type_, factor in types.items()}
            for cat, types in FACTORS.items()
        },
        "positive_actions": [
            {
                "id": a.id,
                "name": a.name,
                "input_kind": a.input_kind.value,
                "coefficient": a.coefficient,
                "unit": a.unit,
                "description": a.description,
            }
            for a in POSITIVE_ACTIONS.values()
        ],
    }

# carbon_ledger/positive_actions.py
import logging

from .errors import InvalidActionValue, InvalidInput, UnknownPositiveAction
from .factors import POSITIVE_ACTIONS, InputKind, PositiveAction
from .schemas import PositiveActionRecord
from .utils import gen_id, utcnow, validate_value

logger = logging.getLogger(__name__)


def get_action(action) -> PositiveAction:
    if isinstance(action, PositiveAction):
        return action
    try:
        return POSITIVE_ACTIONS[action]
    except KeyError:
        raise UnknownPositiveAction(f"Unknown positive action {action!r}") from None


def _coerce_value(action: PositiveAction, value):
    if action.input_kind is InputKind.BOOLEAN:
        if not isinstance(value, bool):
            raise InvalidInput(f"{action.id} expects true/false, got {value!r}")
        return value

    value = validate_value(value)
    if action.integral and not value.is_integer():
        raise InvalidInput(f"{action.id} expects a whole number of {action.unit}, got {value!r}")
    return value


def estimate_savings(action, value) -> float:
    """kg CO2 saved by ``value`` of ``action``.

    Quantity actions scale linearly with the value; boolean actions credit
    their full coefficient once when true and nothing when false.
    """
    action = get_action(action)
    value = _coerce_value(action, value)
    if action.input_kind is InputKind.BOOLEAN:
        return action.coefficient if value else 0.0
    return value * action.coefficient


def build_positive_action(action, value, clock=utcnow, id_factory=None) -> PositiveActionRecord:
    action = get_action(action)
    value = _coerce_value(action, value)
    co2_saved = estimate_savings(action, value)
    if co2_saved <= 0:
        logger.info("Rejected %s with value %r: no savings", action.id, value)
        raise InvalidActionValue(f"{action.id} with value {value!r} saves no CO2")

    return PositiveActionRecord(
        id=id_factory() if id_factory else gen_id("action"),
        action_id=action.id,
        input_kind=action.input_kind,
        value=value,
        co2_saved=co2_saved,
        timestamp=clock(),
    )

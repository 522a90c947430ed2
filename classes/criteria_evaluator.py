"""Criteria evaluation for badge definitions.

Pure functions of (child state, badge definition, event payload). Nothing here
touches the database or the clock; the caller stamps ``occurred_at`` into the
payload before evaluating time-based criteria.
"""
import calendar
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal, InvalidOperation

from classes.badge_types import CriteriaType


@dataclass(frozen=True)
class EvaluationResult:
    satisfied: bool
    current_measure: Decimal
    target: Decimal


class CriteriaEvaluator:

    @staticmethod
    def evaluate(child_state, definition, payload=None):
        criteria = definition.criteria
        child_state = child_state or {}
        payload = payload or {}
        target = Decimal(str(criteria.target))

        if criteria.criteria_type == CriteriaType.SINGLE_ACTION:
            happened = bool(payload.get(criteria.action_type))
            return _boolean_result(happened)

        if criteria.criteria_type == CriteriaType.TIME_BASED_ACTION:
            happened = check_time_condition(criteria.time_condition, child_state, payload)
            return _boolean_result(happened)

        measure = _read_measure(criteria.measure_field, child_state, payload)
        if measure is None:
            return EvaluationResult(False, Decimal(0), target)
        return EvaluationResult(measure >= target, measure, target)


def _boolean_result(happened):
    return EvaluationResult(happened, Decimal(1 if happened else 0), Decimal(1))


def _read_measure(field_name, child_state, payload):
    """Payload facts win over the aggregate; anything missing or non-numeric is ``None``."""
    value = payload.get(field_name)
    if value is None:
        value = child_state.get(field_name)
    if value is None or isinstance(value, (str, bytes)):
        return None
    try:
        number = Decimal(str(value))
    except (InvalidOperation, ValueError):
        return None
    if not number.is_finite():
        return None
    return number


def check_time_condition(condition, child_state, payload):
    occurred_at = payload.get("occurred_at")
    if not isinstance(occurred_at, datetime):
        return False

    if condition == "same_day_as_allowance":
        allowance_day = _as_date(payload.get("allowance_date"))
        if allowance_day is None:
            allowance_day = _as_date(child_state.get("last_allowance_date"))
        return allowance_day is not None and allowance_day == occurred_at.date()
    if condition == "weekend":
        return occurred_at.weekday() >= 5
    if condition == "early_bird":
        return occurred_at.hour < 9
    if condition == "night_owl":
        return occurred_at.hour >= 21
    if condition == "start_of_month":
        return occurred_at.day <= 3
    if condition == "end_of_month":
        days_in_month = calendar.monthrange(occurred_at.year, occurred_at.month)[1]
        return occurred_at.day >= days_in_month - 2
    if condition == "consistent":
        # Consistency itself is measured by the streak badges.
        return True
    return False


def _as_date(value):
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value[:10])
        except ValueError:
            return None
    return None

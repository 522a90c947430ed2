"""Tests for criteria evaluation rules."""
from datetime import date, datetime
from decimal import Decimal

import pytest

from classes.badge_types import (
    AmountThresholdCriteria,
    BadgeCategory,
    BadgeDefinition,
    BadgeRarity,
    BadgeTrigger,
    CountThresholdCriteria,
    GoalCompletionCriteria,
    PercentageTargetCriteria,
    SingleActionCriteria,
    StreakCountCriteria,
    TimeBasedActionCriteria,
)
from classes.criteria_evaluator import CriteriaEvaluator


def make_definition(criteria, code="TEST_BADGE"):
    return BadgeDefinition(
        code=code,
        name="Test Badge",
        description="For tests",
        category=BadgeCategory.SAVING,
        rarity=BadgeRarity.COMMON,
        points=15,
        criteria=criteria,
        triggers=frozenset([BadgeTrigger.SAVINGS_DEPOSIT]),
    )


PENNY_PINCHER = make_definition(AmountThresholdCriteria(10, "total_saved"), "PENNY_PINCHER")


class TestThresholds:

    @pytest.mark.parametrize("total, satisfied", [
        (Decimal("10"), True),
        (Decimal("10.01"), True),
        (Decimal("9.99"), False),
        (Decimal("0"), False),
    ])
    def test_amount_threshold_boundary(self, total, satisfied):
        result = CriteriaEvaluator.evaluate({"total_saved": total}, PENNY_PINCHER)
        assert result.satisfied is satisfied
        assert result.current_measure == total
        assert result.target == Decimal("10")

    def test_float_and_int_measures_are_accepted(self):
        assert CriteriaEvaluator.evaluate({"total_saved": 10}, PENNY_PINCHER).satisfied
        assert not CriteriaEvaluator.evaluate({"total_saved": 9.5}, PENNY_PINCHER).satisfied

    def test_count_threshold(self):
        definition = make_definition(CountThresholdCriteria(10, "task_count"))
        result = CriteriaEvaluator.evaluate({"task_count": 7}, definition)
        assert not result.satisfied
        assert result.current_measure == 7
        assert CriteriaEvaluator.evaluate({"task_count": 10}, definition).satisfied

    def test_streak_count(self):
        definition = make_definition(StreakCountCriteria(4, "saving_streak"))
        assert not CriteriaEvaluator.evaluate({"saving_streak": 3}, definition).satisfied
        assert CriteriaEvaluator.evaluate({"saving_streak": 4}, definition).satisfied

    def test_percentage_target(self):
        definition = make_definition(PercentageTargetCriteria(50, "monthly_savings_rate"))
        assert CriteriaEvaluator.evaluate({"monthly_savings_rate": Decimal("50.00")}, definition).satisfied
        assert not CriteriaEvaluator.evaluate({"monthly_savings_rate": Decimal("49.99")}, definition).satisfied

    def test_goal_completion_uses_goals_completed_by_default(self):
        definition = make_definition(GoalCompletionCriteria(1))
        result = CriteriaEvaluator.evaluate({"goals_completed": 1}, definition)
        assert result.satisfied
        assert result.current_measure == 1

    def test_zero_target_is_trivially_satisfied(self):
        definition = make_definition(CountThresholdCriteria(0, "task_count"))
        assert CriteriaEvaluator.evaluate({"task_count": 0}, definition).satisfied


class TestMissingMeasures:

    def test_missing_field_is_not_satisfied(self):
        result = CriteriaEvaluator.evaluate({}, PENNY_PINCHER)
        assert not result.satisfied
        assert result.current_measure == 0

    def test_missing_field_with_zero_target_is_not_satisfied(self):
        definition = make_definition(CountThresholdCriteria(0, "task_count"))
        assert not CriteriaEvaluator.evaluate({"other": 5}, definition).satisfied

    @pytest.mark.parametrize("value", [None, "ten", float("nan")])
    def test_unusable_values_count_as_missing(self, value):
        result = CriteriaEvaluator.evaluate({"total_saved": value}, PENNY_PINCHER)
        assert not result.satisfied
        assert result.current_measure == 0

    def test_none_state_and_payload(self):
        result = CriteriaEvaluator.evaluate(None, PENNY_PINCHER, None)
        assert not result.satisfied

    def test_payload_fact_overrides_child_state(self):
        result = CriteriaEvaluator.evaluate(
            {"total_saved": Decimal("3")}, PENNY_PINCHER, {"total_saved": Decimal("12")}
        )
        assert result.satisfied
        assert result.current_measure == Decimal("12")


class TestSingleAction:

    def test_fact_true_in_payload(self):
        definition = make_definition(SingleActionCriteria("first_savings_deposit"))
        result = CriteriaEvaluator.evaluate({}, definition, {"first_savings_deposit": True})
        assert result.satisfied
        assert result.current_measure == 1

    def test_fact_absent_or_false(self):
        definition = make_definition(SingleActionCriteria("first_savings_deposit"))
        assert not CriteriaEvaluator.evaluate({}, definition, {}).satisfied
        result = CriteriaEvaluator.evaluate({}, definition, {"first_savings_deposit": False})
        assert not result.satisfied
        assert result.current_measure == 0


class TestTimeBasedAction:
    # 2026-10-17 is a Saturday
    SATURDAY_MORNING = datetime(2026, 10, 17, 8, 30)
    WEDNESDAY_NIGHT = datetime(2026, 10, 14, 22, 0)

    def evaluate(self, condition, payload, state=None):
        definition = make_definition(TimeBasedActionCriteria(condition))
        return CriteriaEvaluator.evaluate(state or {}, definition, payload).satisfied

    def test_same_day_as_allowance_from_payload(self):
        payload = {"occurred_at": self.SATURDAY_MORNING, "allowance_date": date(2026, 10, 17)}
        assert self.evaluate("same_day_as_allowance", payload)

    def test_same_day_as_allowance_from_child_state(self):
        payload = {"occurred_at": self.SATURDAY_MORNING}
        assert self.evaluate("same_day_as_allowance", payload, {"last_allowance_date": "2026-10-17"})
        assert not self.evaluate("same_day_as_allowance", payload, {"last_allowance_date": date(2026, 10, 16)})

    def test_same_day_as_allowance_without_allowance_date(self):
        assert not self.evaluate("same_day_as_allowance", {"occurred_at": self.SATURDAY_MORNING})

    def test_weekend_and_time_of_day(self):
        assert self.evaluate("weekend", {"occurred_at": self.SATURDAY_MORNING})
        assert not self.evaluate("weekend", {"occurred_at": self.WEDNESDAY_NIGHT})
        assert self.evaluate("early_bird", {"occurred_at": self.SATURDAY_MORNING})
        assert not self.evaluate("early_bird", {"occurred_at": self.WEDNESDAY_NIGHT})
        assert self.evaluate("night_owl", {"occurred_at": self.WEDNESDAY_NIGHT})
        assert not self.evaluate("night_owl", {"occurred_at": self.SATURDAY_MORNING})

    def test_month_edges(self):
        assert self.evaluate("start_of_month", {"occurred_at": datetime(2026, 10, 3, 12)})
        assert not self.evaluate("start_of_month", {"occurred_at": datetime(2026, 10, 4, 12)})
        assert self.evaluate("end_of_month", {"occurred_at": datetime(2026, 10, 29, 12)})
        assert not self.evaluate("end_of_month", {"occurred_at": datetime(2026, 10, 28, 12)})
        assert self.evaluate("end_of_month", {"occurred_at": datetime(2026, 2, 26, 12)})

    def test_consistent_holds_whenever_the_action_happened(self):
        assert self.evaluate("consistent", {"occurred_at": self.WEDNESDAY_NIGHT})
        assert not self.evaluate("consistent", {})

    def test_missing_timestamp_or_unknown_condition(self):
        assert not self.evaluate("weekend", {})
        assert not self.evaluate("full_moon", {"occurred_at": self.SATURDAY_MORNING})

"""Badge catalog types.

Categories, rarities, criteria types and trigger events, the per-criteria
configuration variants, and the immutable ``BadgeDefinition`` built from them.
"""
from __future__ import annotations

from dataclasses import dataclass, field, fields
from decimal import Decimal
from enum import Enum, IntEnum
from typing import ClassVar, FrozenSet, Optional, Union

from classes.validators import (
    validate_code,
    validate_length,
    validate_non_negative,
    validate_required,
)
from utils.exceptions import InvalidBadgeDefinition


class BadgeCategory(str, Enum):
    SAVING = "Saving"
    SPENDING = "Spending"
    GOALS = "Goals"
    CHORES = "Chores"
    STREAKS = "Streaks"
    MILESTONES = "Milestones"
    SPECIAL = "Special"


class BadgeRarity(IntEnum):
    COMMON = 1
    UNCOMMON = 2
    RARE = 3
    EPIC = 4
    LEGENDARY = 5

    @property
    def label(self):
        return self.name.capitalize()


class CriteriaType(str, Enum):
    SINGLE_ACTION = "SingleAction"
    AMOUNT_THRESHOLD = "AmountThreshold"
    COUNT_THRESHOLD = "CountThreshold"
    STREAK_COUNT = "StreakCount"
    PERCENTAGE_TARGET = "PercentageTarget"
    GOAL_COMPLETION = "GoalCompletion"
    TIME_BASED_ACTION = "TimeBasedAction"


class BadgeTrigger(str, Enum):
    SAVINGS_DEPOSIT = "savings_deposit"
    GOAL_CREATED = "goal_created"
    GOAL_COMPLETED = "goal_completed"
    TASK_COMPLETED = "task_completed"
    TASK_APPROVED = "task_approved"
    STREAK_UPDATED = "streak_updated"
    TRANSACTION_CREATED = "transaction_created"
    BALANCE_CHANGED = "balance_changed"
    BUDGET_CHECKED = "budget_checked"
    ACCOUNT_CREATED = "account_created"


# Payload and child facts that hold dates; only time-based criteria read them.
DATE_FACTS = frozenset({"occurred_at", "allowance_date", "last_allowance_date"})


# Criteria configuration variants. Each carries only the fields its rule needs.


@dataclass(frozen=True)
class SingleActionCriteria:
    criteria_type: ClassVar[CriteriaType] = CriteriaType.SINGLE_ACTION

    action_type: str

    def __post_init__(self):
        validate_required("action_type", self.action_type)

    @property
    def target(self):
        return 1


@dataclass(frozen=True)
class AmountThresholdCriteria:
    criteria_type: ClassVar[CriteriaType] = CriteriaType.AMOUNT_THRESHOLD

    amount_target: Decimal
    measure_field: str

    def __post_init__(self):
        object.__setattr__(
            self, "amount_target", validate_non_negative("amount_target", self.amount_target)
        )
        _check_measure_field(self.measure_field)

    @property
    def target(self):
        return self.amount_target


@dataclass(frozen=True)
class CountThresholdCriteria:
    criteria_type: ClassVar[CriteriaType] = CriteriaType.COUNT_THRESHOLD

    count_target: int
    measure_field: str

    def __post_init__(self):
        _check_whole_number("count_target", self.count_target)
        _check_measure_field(self.measure_field)

    @property
    def target(self):
        return self.count_target


@dataclass(frozen=True)
class StreakCountCriteria:
    criteria_type: ClassVar[CriteriaType] = CriteriaType.STREAK_COUNT

    streak_target: int
    measure_field: str

    def __post_init__(self):
        _check_whole_number("streak_target", self.streak_target)
        _check_measure_field(self.measure_field)

    @property
    def target(self):
        return self.streak_target


@dataclass(frozen=True)
class PercentageTargetCriteria:
    criteria_type: ClassVar[CriteriaType] = CriteriaType.PERCENTAGE_TARGET

    percentage_target: Decimal
    measure_field: str

    def __post_init__(self):
        object.__setattr__(
            self,
            "percentage_target",
            validate_non_negative("percentage_target", self.percentage_target),
        )
        _check_measure_field(self.measure_field)

    @property
    def target(self):
        return self.percentage_target


@dataclass(frozen=True)
class GoalCompletionCriteria:
    criteria_type: ClassVar[CriteriaType] = CriteriaType.GOAL_COMPLETION

    goal_target: int
    measure_field: str = "goals_completed"

    def __post_init__(self):
        _check_whole_number("goal_target", self.goal_target)
        _check_measure_field(self.measure_field)

    @property
    def target(self):
        return self.goal_target


@dataclass(frozen=True)
class TimeBasedActionCriteria:
    criteria_type: ClassVar[CriteriaType] = CriteriaType.TIME_BASED_ACTION

    time_condition: str

    def __post_init__(self):
        validate_required("time_condition", self.time_condition)

    @property
    def target(self):
        return 1


Criteria = Union[
    SingleActionCriteria,
    AmountThresholdCriteria,
    CountThresholdCriteria,
    StreakCountCriteria,
    PercentageTargetCriteria,
    GoalCompletionCriteria,
    TimeBasedActionCriteria,
]

CRITERIA_CLASSES = {
    cls.criteria_type: cls
    for cls in (
        SingleActionCriteria,
        AmountThresholdCriteria,
        CountThresholdCriteria,
        StreakCountCriteria,
        PercentageTargetCriteria,
        GoalCompletionCriteria,
        TimeBasedActionCriteria,
    )
}


def _check_measure_field(name):
    validate_required("measure_field", name)
    if name in DATE_FACTS:
        raise InvalidBadgeDefinition(f"{name} is a date, not a numeric measure.")


def _check_whole_number(field_name, value):
    number = validate_non_negative(field_name, value)
    if number != number.to_integral_value():
        raise InvalidBadgeDefinition(f"{field_name} must be a whole number.")


def criteria_to_dict(criteria):
    data = {}
    for f in fields(criteria):
        value = getattr(criteria, f.name)
        data[f.name] = str(value) if isinstance(value, Decimal) else value
    return data


def criteria_from_dict(criteria_type, data):
    """Build the criteria variant for ``criteria_type`` from a plain dict."""
    try:
        criteria_type = CriteriaType(criteria_type)
    except ValueError:
        raise InvalidBadgeDefinition(f"Unknown criteria type {criteria_type!r}.")

    cls = CRITERIA_CLASSES[criteria_type]
    allowed = {f.name for f in fields(cls)}
    unknown = set(data or {}) - allowed
    if unknown:
        raise InvalidBadgeDefinition(
            f"Unexpected keys for {criteria_type.value} criteria: {', '.join(sorted(unknown))}"
        )
    try:
        return cls(**(data or {}))
    except TypeError as e:
        raise InvalidBadgeDefinition(f"Invalid {criteria_type.value} criteria: {e}")


@dataclass(frozen=True)
class BadgeDefinition:
    code: str
    name: str
    description: str
    category: BadgeCategory
    rarity: BadgeRarity
    points: int
    criteria: Criteria
    triggers: FrozenSet[BadgeTrigger]
    sort_order: int = 0
    is_secret: bool = False
    is_active: bool = True
    icon_url: Optional[str] = field(default=None)

    def __post_init__(self):
        validate_code(self.code)
        validate_required("name", self.name)
        validate_length("name", self.name, 100)
        _check_whole_number("points", self.points)
        if type(self.criteria) not in CRITERIA_CLASSES.values():
            raise InvalidBadgeDefinition(f"{self.code}: unsupported criteria {self.criteria!r}")

        object.__setattr__(self, "category", BadgeCategory(self.category))
        object.__setattr__(self, "rarity", BadgeRarity(self.rarity))
        object.__setattr__(self, "triggers", frozenset(BadgeTrigger(t) for t in self.triggers))
        if not self.triggers:
            raise InvalidBadgeDefinition(f"{self.code}: at least one trigger is required.")
        if self.icon_url is None:
            object.__setattr__(
                self, "icon_url", f"/badges/{self.code.lower().replace('_', '-')}.png"
            )

    @property
    def criteria_type(self):
        return self.criteria.criteria_type

    def to_dict(self):
        return {
            "code": self.code,
            "name": self.name,
            "description": self.description,
            "icon_url": self.icon_url,
            "category": self.category.value,
            "rarity": self.rarity.label,
            "points": self.points,
            "criteria_type": self.criteria_type.value,
            "criteria": criteria_to_dict(self.criteria),
            "triggers": sorted(t.value for t in self.triggers),
            "is_secret": self.is_secret,
            "is_active": self.is_active,
            "sort_order": self.sort_order,
        }

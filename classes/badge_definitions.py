"""Checked-in badge catalog.

Codes are the stable identity of a badge across releases; never rename one.
Retire a badge by setting ``is_active=False`` instead of removing it.
"""
from classes.badge_types import (
    AmountThresholdCriteria,
    BadgeCategory as Category,
    BadgeDefinition,
    BadgeRarity as Rarity,
    BadgeTrigger as Trigger,
    CountThresholdCriteria,
    GoalCompletionCriteria,
    PercentageTargetCriteria,
    SingleActionCriteria,
    StreakCountCriteria,
    TimeBasedActionCriteria,
)

_BADGES = [
    # Saving
    ("FIRST_SAVER", "First Saver", "Made your first deposit to savings",
     Category.SAVING, Rarity.COMMON, 10,
     SingleActionCriteria("first_savings_deposit"), [Trigger.SAVINGS_DEPOSIT]),
    ("PENNY_PINCHER", "Penny Pincher", "Saved $10 total",
     Category.SAVING, Rarity.COMMON, 15,
     AmountThresholdCriteria(10, "total_saved"), [Trigger.SAVINGS_DEPOSIT]),
    ("MONEY_STACKER", "Money Stacker", "Saved $50 total",
     Category.SAVING, Rarity.UNCOMMON, 25,
     AmountThresholdCriteria(50, "total_saved"), [Trigger.SAVINGS_DEPOSIT]),
    ("SAVINGS_STAR", "Savings Star", "Saved $100 total",
     Category.SAVING, Rarity.RARE, 50,
     AmountThresholdCriteria(100, "total_saved"), [Trigger.SAVINGS_DEPOSIT]),
    ("SAVINGS_CHAMPION", "Savings Champion", "Saved $500 total",
     Category.SAVING, Rarity.EPIC, 100,
     AmountThresholdCriteria(500, "total_saved"), [Trigger.SAVINGS_DEPOSIT]),
    ("EARLY_BIRD", "Early Bird", "Saved on the same day as allowance",
     Category.SAVING, Rarity.UNCOMMON, 20,
     TimeBasedActionCriteria("same_day_as_allowance"), [Trigger.SAVINGS_DEPOSIT]),
    # Percentage badges piggyback on the periodic streak update.
    ("SUPER_SAVER", "Super Saver", "Saved 50% of allowance in a month",
     Category.SAVING, Rarity.RARE, 40,
     PercentageTargetCriteria(50, "monthly_savings_rate"), [Trigger.STREAK_UPDATED]),
    ("FRUGAL_MASTER", "Frugal Master", "Saved 75% of allowance in a month",
     Category.SAVING, Rarity.EPIC, 75,
     PercentageTargetCriteria(75, "monthly_savings_rate"), [Trigger.STREAK_UPDATED]),

    # Goals
    ("GOAL_SETTER", "Goal Setter", "Created your first savings goal",
     Category.GOALS, Rarity.COMMON, 10,
     SingleActionCriteria("first_goal_created"), [Trigger.GOAL_CREATED]),
    ("GOAL_CRUSHER", "Goal Crusher", "Completed your first savings goal",
     Category.GOALS, Rarity.COMMON, 20,
     GoalCompletionCriteria(1), [Trigger.GOAL_COMPLETED]),
    ("DREAM_ACHIEVER", "Dream Achiever", "Completed 5 savings goals",
     Category.GOALS, Rarity.RARE, 50,
     GoalCompletionCriteria(5), [Trigger.GOAL_COMPLETED]),
    ("GOAL_MACHINE", "Goal Machine", "Completed 10 savings goals",
     Category.GOALS, Rarity.EPIC, 100,
     GoalCompletionCriteria(10), [Trigger.GOAL_COMPLETED]),

    # Chores
    ("HELPER", "Helper", "Completed your first task",
     Category.CHORES, Rarity.COMMON, 10,
     SingleActionCriteria("first_task_completed"), [Trigger.TASK_COMPLETED]),
    ("HARD_WORKER", "Hard Worker", "Completed 10 tasks",
     Category.CHORES, Rarity.COMMON, 20,
     CountThresholdCriteria(10, "task_count"), [Trigger.TASK_APPROVED]),
    ("CHORE_CHAMPION", "Chore Champion", "Completed 50 tasks",
     Category.CHORES, Rarity.RARE, 50,
     CountThresholdCriteria(50, "task_count"), [Trigger.TASK_APPROVED]),
    ("TASK_MASTER", "Task Master", "Completed 100 tasks",
     Category.CHORES, Rarity.EPIC, 100,
     CountThresholdCriteria(100, "task_count"), [Trigger.TASK_APPROVED]),
    ("PERFECT_RECORD", "Perfect Record", "Had 10 tasks approved in a row",
     Category.CHORES, Rarity.RARE, 40,
     StreakCountCriteria(10, "approved_task_streak"), [Trigger.TASK_APPROVED]),

    # Streaks
    ("STREAK_STARTER", "Streak Starter", "Saved for 2 weeks in a row",
     Category.STREAKS, Rarity.COMMON, 15,
     StreakCountCriteria(2, "saving_streak"), [Trigger.STREAK_UPDATED]),
    ("CONSISTENCY_KING", "Consistency King", "Saved for 4 weeks in a row",
     Category.STREAKS, Rarity.UNCOMMON, 30,
     StreakCountCriteria(4, "saving_streak"), [Trigger.STREAK_UPDATED]),
    ("STREAK_MASTER", "Streak Master", "Saved for 10 weeks in a row",
     Category.STREAKS, Rarity.RARE, 60,
     StreakCountCriteria(10, "saving_streak"), [Trigger.STREAK_UPDATED]),
    ("UNSTOPPABLE", "Unstoppable", "Saved for 26 weeks in a row",
     Category.STREAKS, Rarity.EPIC, 100,
     StreakCountCriteria(26, "saving_streak"), [Trigger.STREAK_UPDATED]),
    ("LEGENDARY_STREAK", "Legendary Streak", "Saved for 52 weeks in a row",
     Category.STREAKS, Rarity.LEGENDARY, 200,
     StreakCountCriteria(52, "saving_streak"), [Trigger.STREAK_UPDATED]),

    # Milestones
    ("FIRST_PURCHASE", "First Purchase", "Made your first transaction",
     Category.MILESTONES, Rarity.COMMON, 5,
     SingleActionCriteria("first_transaction"), [Trigger.TRANSACTION_CREATED]),
    ("DOUBLE_DIGITS", "Double Digits", "Reached $10 balance",
     Category.MILESTONES, Rarity.COMMON, 10,
     AmountThresholdCriteria(10, "current_balance"), [Trigger.BALANCE_CHANGED]),
    ("FIFTY_CLUB", "Fifty Club", "Reached $50 balance",
     Category.MILESTONES, Rarity.UNCOMMON, 25,
     AmountThresholdCriteria(50, "current_balance"), [Trigger.BALANCE_CHANGED]),
    ("CENTURY_CLUB", "Century Club", "Reached $100 balance",
     Category.MILESTONES, Rarity.RARE, 50,
     AmountThresholdCriteria(100, "current_balance"), [Trigger.BALANCE_CHANGED]),
    ("HIGH_ROLLER", "High Roller", "Reached $500 balance",
     Category.MILESTONES, Rarity.EPIC, 100,
     AmountThresholdCriteria(500, "current_balance"), [Trigger.BALANCE_CHANGED]),

    # Spending
    ("BUDGET_AWARE", "Budget Aware", "Stayed under budget for a week",
     Category.SPENDING, Rarity.COMMON, 15,
     StreakCountCriteria(1, "budget_streak"), [Trigger.BUDGET_CHECKED]),
    ("BUDGET_BOSS", "Budget Boss", "Stayed under budget for 4 weeks",
     Category.SPENDING, Rarity.RARE, 50,
     StreakCountCriteria(4, "budget_streak"), [Trigger.BUDGET_CHECKED]),
    ("SMART_SPENDER", "Smart Spender", "Tracked 50 transactions",
     Category.SPENDING, Rarity.UNCOMMON, 25,
     CountThresholdCriteria(50, "transaction_count"), [Trigger.TRANSACTION_CREATED]),
    ("TRANSACTION_TRACKER", "Transaction Tracker", "Tracked 200 transactions",
     Category.SPENDING, Rarity.RARE, 50,
     CountThresholdCriteria(200, "transaction_count"), [Trigger.TRANSACTION_CREATED]),

    # Special
    ("WELCOME", "Welcome", "Joined the app",
     Category.SPECIAL, Rarity.COMMON, 5,
     SingleActionCriteria("account_created"), [Trigger.ACCOUNT_CREATED]),
    ("BIRTHDAY_BONUS", "Birthday Bonus", "Received a gift on your birthday",
     Category.SPECIAL, Rarity.UNCOMMON, 25,
     SingleActionCriteria("birthday_gift"), [Trigger.TRANSACTION_CREATED], True),
    ("GENEROUS_HEART", "Generous Heart", "Gave money to a sibling",
     Category.SPECIAL, Rarity.RARE, 40,
     SingleActionCriteria("sibling_transfer"), [Trigger.TRANSACTION_CREATED]),
    ("FAMILY_FIRST", "Family First", "Part of a family savings goal",
     Category.SPECIAL, Rarity.RARE, 40,
     SingleActionCriteria("family_goal_participant"), [Trigger.GOAL_CREATED]),
]


def build_default_definitions():
    definitions = []
    for sort_order, entry in enumerate(_BADGES):
        code, name, description, category, rarity, points, criteria, triggers = entry[:8]
        is_secret = entry[8] if len(entry) > 8 else False
        definitions.append(
            BadgeDefinition(
                code=code,
                name=name,
                description=description,
                category=category,
                rarity=rarity,
                points=points,
                criteria=criteria,
                triggers=frozenset(triggers),
                sort_order=sort_order,
                is_secret=is_secret,
            )
        )
    return definitions

class AchievementError(Exception):
    """Base class for achievement engine errors."""


class InvalidBadgeDefinition(AchievementError, ValueError):
    """A badge definition or its criteria configuration is malformed."""


class AlreadyAwardedError(AchievementError):
    def __init__(self, child_id, badge_code):
        super().__init__(f"Badge {badge_code} already awarded to child {child_id}")
        self.child_id = child_id
        self.badge_code = badge_code


class ChildNotFoundError(AchievementError):
    def __init__(self, child_id):
        super().__init__(f"Child {child_id} not found")
        self.child_id = child_id


class InsufficientPointsError(AchievementError):
    def __init__(self, child_id, available, requested):
        super().__init__(
            f"Child {child_id} has {available} points available, {requested} requested"
        )
        self.child_id = child_id
        self.available = available
        self.requested = requested

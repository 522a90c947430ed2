import logging
from datetime import datetime

from sqlalchemy.exc import IntegrityError

from classes.progress_manager import ProgressManager
from models import db
from models.child_badges import ChildBadgeAward
from models.children import Child
from utils.exceptions import AlreadyAwardedError, ChildNotFoundError, InsufficientPointsError

logger = logging.getLogger(__name__)


class AwardLedger:
    """Records earned badges and keeps the child's points ledger in step with them."""

    @staticmethod
    def award(child_id, definition, context=None):
        """Award ``definition`` to the child exactly once.

        The ``(child_id, badge_code)`` unique constraint decides races: the losing
        caller gets ``AlreadyAwardedError`` and nothing it did is kept. Points are
        incremented in SQL so concurrent awards of different badges don't lose
        updates.
        """
        if db.session.get(Child, child_id) is None:
            raise ChildNotFoundError(child_id)

        try:
            with db.session.begin_nested():
                award = ChildBadgeAward(
                    child_id=child_id,
                    badge_code=definition.code,
                    earned_at=datetime.utcnow(),
                    earned_context=context[:255] if context else None,
                    is_new=True,
                    is_displayed=False,
                )
                db.session.add(award)
                db.session.flush()

                db.session.query(Child).filter(Child.id == child_id).update(
                    {
                        Child.total_points: Child.total_points + definition.points,
                        Child.available_points: Child.available_points + definition.points,
                        Child.badges_earned: Child.badges_earned + 1,
                    },
                    synchronize_session="fetch",
                )
                ProgressManager.clear(child_id, definition.code)
        except IntegrityError as e:
            # Only the unique pair means "lost the race"; anything else is a real failure.
            if not AwardLedger.has_award(child_id, definition.code):
                raise
            raise AlreadyAwardedError(child_id, definition.code) from e

        logger.info(
            "Child %s earned badge %s (+%d points)", child_id, definition.code, definition.points
        )
        return award

    @staticmethod
    def has_award(child_id, badge_code):
        return ChildBadgeAward.query.filter_by(child_id=child_id, badge_code=badge_code).first() is not None

    @staticmethod
    def awarded_codes(child_id):
        return ChildBadgeAward.awarded_codes(child_id)

    @staticmethod
    def get_award(child_id, badge_code):
        return ChildBadgeAward.query.filter_by(child_id=child_id, badge_code=badge_code).first()

    @staticmethod
    def mark_seen(child_id, badge_codes):
        if not badge_codes:
            return 0
        return ChildBadgeAward.query.filter(
            ChildBadgeAward.child_id == child_id,
            ChildBadgeAward.badge_code.in_(list(badge_codes)),
            ChildBadgeAward.is_new.is_(True),
        ).update({ChildBadgeAward.is_new: False}, synchronize_session="fetch")

    @staticmethod
    def set_displayed(child_id, badge_code, is_displayed):
        award = AwardLedger.get_award(child_id, badge_code)
        if award is None:
            return None
        award.is_displayed = bool(is_displayed)
        db.session.flush()
        return award

    @staticmethod
    def spend_points(child_id, points):
        """Deduct spent points from the available balance (reward redemption)."""
        if points < 0:
            raise ValueError("Points to spend cannot be negative.")
        updated = db.session.query(Child).filter(
            Child.id == child_id,
            Child.available_points >= points,
        ).update(
            {Child.available_points: Child.available_points - points},
            synchronize_session="fetch",
        )
        if updated:
            return db.session.get(Child, child_id)

        child = db.session.get(Child, child_id)
        if child is None:
            raise ChildNotFoundError(child_id)
        raise InsufficientPointsError(child_id, child.available_points, points)

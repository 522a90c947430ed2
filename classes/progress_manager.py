from datetime import datetime
from decimal import Decimal

from sqlalchemy.exc import IntegrityError

from models import db
from models.badge_progress import ChildBadgeProgress

# Scale of the Numeric(12, 2) progress columns.
PROGRESS_SCALE = Decimal("0.01")


class ProgressManager:
    """Stores the latest measure toward badges a child has not earned yet."""

    @staticmethod
    def get(child_id, badge_code):
        return ChildBadgeProgress.query.filter_by(child_id=child_id, badge_code=badge_code).first()

    @staticmethod
    def upsert(child_id, badge_code, current_measure, target=None):
        """Create or overwrite the progress value. The value is absolute, so replays are harmless."""
        value = Decimal(str(current_measure)).quantize(PROGRESS_SCALE)
        target = Decimal(str(target)).quantize(PROGRESS_SCALE) if target is not None else None

        progress = ProgressManager.get(child_id, badge_code)
        if progress is None:
            try:
                with db.session.begin_nested():
                    progress = ChildBadgeProgress(
                        child_id=child_id,
                        badge_code=badge_code,
                        current_progress=value,
                        target_progress=target,
                        updated_at=datetime.utcnow(),
                    )
                    db.session.add(progress)
                return progress
            except IntegrityError:
                # Lost the insert race to another evaluation of the same pair.
                progress = ProgressManager.get(child_id, badge_code)
                if progress is None:
                    raise

        if progress.current_progress != value or (target is not None and progress.target_progress != target):
            progress.current_progress = value
            if target is not None:
                progress.target_progress = target
            progress.updated_at = datetime.utcnow()
            db.session.flush()
        return progress

    @staticmethod
    def clear(child_id, badge_code):
        deleted = ChildBadgeProgress.query.filter_by(
            child_id=child_id, badge_code=badge_code
        ).delete(synchronize_session="fetch")
        return deleted > 0

    @staticmethod
    def list_in_progress(child_id):
        """Unfinished progress records, closest to completion first."""
        records = ChildBadgeProgress.query.filter_by(child_id=child_id).all()
        return sorted(
            (p for p in records if p.target_progress is None or p.current_progress < p.target_progress),
            key=lambda p: p.percentage,
            reverse=True,
        )

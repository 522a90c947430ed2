import logging
from datetime import datetime

from flask import current_app

from classes.award_ledger import AwardLedger
from classes.badge_catalog import load_default_catalog
from classes.badge_types import BadgeTrigger
from classes.criteria_evaluator import CriteriaEvaluator
from classes.progress_manager import ProgressManager
from classes.trigger_dispatcher import TriggerDispatcher
from models import db, Badge, Child, ChildBadgeAward
from utils.exceptions import AlreadyAwardedError, ChildNotFoundError
from utils.helpers import create_achievement_notification, format_amount

logger = logging.getLogger(__name__)


def get_catalog():
    catalog = current_app.extensions.get("badge_catalog")
    return catalog if catalog is not None else load_default_catalog()


def sync_badge_catalog(catalog=None):
    """Mirror the catalog into the badges table. Unknown codes are deactivated, never deleted."""
    if catalog is None:
        catalog = get_catalog()
    created = updated = deactivated = 0

    for definition in catalog:
        badge = db.session.get(Badge, definition.code)
        if badge is None:
            badge = Badge(code=definition.code)
            db.session.add(badge)
            created += 1
        else:
            updated += 1
        badge.apply_definition(definition)

    stale = Badge.query.filter(Badge.code.notin_([d.code for d in catalog]), Badge.is_active.is_(True)).all()
    for badge in stale:
        badge.is_active = False
        deactivated += 1

    db.session.commit()
    logger.info("Badge catalog synced: %d created, %d updated, %d deactivated", created, updated, deactivated)
    return {"created": created, "updated": updated, "deactivated": deactivated}


def award_badge(child_id, definition, context=None):
    """Award a badge, treating an existing award as a no-op. Returns the new award or None."""
    try:
        award = AwardLedger.award(child_id, definition, context)
    except AlreadyAwardedError:
        logger.debug("Badge %s already awarded to child %s", definition.code, child_id)
        return None

    if current_app.config.get("ACHIEVEMENT_NOTIFICATIONS_ENABLED", True):
        create_achievement_notification(child_id, definition)
    return award


def describe_award(definition, result, event):
    field = getattr(definition.criteria, "measure_field", None)
    if field:
        return (
            f"{field} reached {format_amount(result.current_measure)} "
            f"(target {format_amount(result.target)}) on {event.value}"
        )
    return f"{definition.description} ({event.value})"


def evaluate_badges(child_id, event, payload=None, child_state=None, catalog=None):
    """Run one domain event through dispatch, evaluation, progress and awards.

    Errors propagate; use ``check_and_unlock_badges`` from domain actions that
    must not fail because of badges.
    """
    if catalog is None:
        catalog = get_catalog()
    payload = dict(payload or {})
    payload.setdefault("occurred_at", datetime.utcnow())

    candidates = TriggerDispatcher(catalog).dispatch(child_id, event, payload)
    if not candidates:
        return []
    event = BadgeTrigger(event)

    if child_state is None:
        child = db.session.get(Child, child_id)
        if child is None:
            raise ChildNotFoundError(child_id)
        child_state = child.evaluation_state()

    new_awards = []
    for definition, event_payload in candidates:
        result = CriteriaEvaluator.evaluate(child_state, definition, event_payload)
        if result.satisfied:
            award = award_badge(child_id, definition, describe_award(definition, result, event))
            if award is not None:
                new_awards.append(award)
            continue

        if result.current_measure > 0 or ProgressManager.get(child_id, definition.code) is not None:
            ProgressManager.upsert(child_id, definition.code, result.current_measure, result.target)

    return new_awards


def check_and_unlock_badges(child_id, event, payload=None, child_state=None):
    """Best-effort badge evaluation for a domain action that already happened.

    The caller's pending writes are flushed first, so their errors reach the
    caller. Badge failures are logged and rolled back to a savepoint. The
    caller owns the transaction and commits badge work with its own.
    """
    db.session.flush()
    try:
        with db.session.begin_nested():
            return evaluate_badges(child_id, event, payload, child_state)
    except Exception:
        logger.exception("Badge evaluation failed for child %s on %s", child_id, event)
        return []


def try_unlock_badge(child_id, badge_code, context=None):
    definition = get_catalog().get_by_code(badge_code)
    if definition is None or not definition.is_active:
        return None

    award = award_badge(child_id, definition, context)
    if award is not None:
        db.session.commit()
    return award


def get_child_badges(child_id, category=None, new_only=False):
    query = ChildBadgeAward.query.join(Badge).filter(ChildBadgeAward.child_id == child_id)
    if category is not None:
        query = query.filter(Badge.category == getattr(category, "value", category))
    if new_only:
        query = query.filter(ChildBadgeAward.is_new.is_(True))
    awards = query.order_by(ChildBadgeAward.earned_at.desc(), ChildBadgeAward.id.desc()).all()
    return [award.to_dict() for award in awards]


def get_badge_progress(child_id):
    return [progress.to_dict() for progress in ProgressManager.list_in_progress(child_id)]


def get_child_points(child_id):
    child = db.session.get(Child, child_id)
    if child is None:
        raise ChildNotFoundError(child_id)
    return {
        "total_points": child.total_points,
        "available_points": child.available_points,
        "spent_points": child.spent_points,
        "badges_earned": child.badges_earned,
    }


def get_achievement_summary(child_id):
    points = get_child_points(child_id)
    earned = get_child_badges(child_id)

    by_category = {}
    for award in earned:
        by_category[award["category"]] = by_category.get(award["category"], 0) + 1

    return {
        "total_badges": len(get_catalog().list_all(include_secret=True)),
        "earned_badges": len(earned),
        "total_points": points["total_points"],
        "available_points": points["available_points"],
        "recent_badges": earned[:5],
        "in_progress_badges": get_badge_progress(child_id)[:5],
        "badges_by_category": by_category,
    }


def toggle_badge_display(child_id, badge_code, is_displayed):
    award = AwardLedger.set_displayed(child_id, badge_code, is_displayed)
    if award is None:
        return None
    db.session.commit()
    return award.to_dict()


def mark_badges_seen(child_id, badge_codes):
    count = AwardLedger.mark_seen(child_id, badge_codes)
    db.session.commit()
    return count

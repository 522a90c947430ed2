import logging

from classes.badge_types import BadgeTrigger
from models.child_badges import ChildBadgeAward

logger = logging.getLogger(__name__)


class TriggerDispatcher:
    def __init__(self, catalog):
        self.catalog = catalog

    def dispatch(self, child_id, event, payload=None):
        """Badges to re-evaluate for ``event``, skipping those the child already holds."""
        try:
            event = BadgeTrigger(event)
        except ValueError:
            logger.debug("Ignoring unknown badge trigger %r for child %s", event, child_id)
            return []

        candidates = self.catalog.get_by_trigger(event)
        if not candidates:
            return []

        earned = ChildBadgeAward.awarded_codes(child_id)
        return [(definition, payload) for definition in candidates if definition.code not in earned]

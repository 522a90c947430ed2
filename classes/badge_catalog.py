import logging
from functools import lru_cache

from classes.badge_definitions import build_default_definitions
from classes.badge_types import BadgeCategory, BadgeTrigger
from utils.exceptions import InvalidBadgeDefinition

logger = logging.getLogger(__name__)


class BadgeCatalog:
    """Read-only set of badge definitions, indexed by code and by trigger."""

    def __init__(self, definitions):
        self._by_code = {}
        for definition in definitions:
            if definition.code in self._by_code:
                raise InvalidBadgeDefinition(f"Duplicate badge code {definition.code}")
            self._by_code[definition.code] = definition

        self._ordered = tuple(
            sorted(self._by_code.values(), key=lambda d: (d.sort_order, d.name))
        )
        self._by_trigger = {}
        for definition in self._ordered:
            if not definition.is_active:
                continue
            for trigger in definition.triggers:
                self._by_trigger.setdefault(trigger, []).append(definition)

    def __len__(self):
        return len(self._by_code)

    def __iter__(self):
        return iter(self._ordered)

    def __contains__(self, code):
        return code in self._by_code

    def get_by_code(self, code):
        """Return the definition for ``code`` or ``None`` if there is no such badge."""
        return self._by_code.get(code)

    def get_by_trigger(self, event):
        """Active definitions interested in ``event``, in sort order."""
        try:
            event = BadgeTrigger(event)
        except ValueError:
            return []
        return list(self._by_trigger.get(event, ()))

    def list_all(self, include_secret=False, category=None):
        if category is not None:
            category = BadgeCategory(category)
        return [
            d for d in self._ordered
            if d.is_active
            and (include_secret or not d.is_secret)
            and (category is None or d.category == category)
        ]

    def by_category(self, category, include_secret=False):
        return self.list_all(include_secret=include_secret, category=category)


@lru_cache(maxsize=None)
def load_default_catalog():
    catalog = BadgeCatalog(build_default_definitions())
    logger.debug("Loaded badge catalog with %d definitions", len(catalog))
    return catalog

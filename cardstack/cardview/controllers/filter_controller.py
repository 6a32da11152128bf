"""
FilterController - visibility evaluation for cardstack views.

Active filters are OR-of-values per property, AND across properties;
the text search is AND-ed on top.
"""
import re
from re import Pattern
from typing import Any, List, Optional, Sequence, Union, TYPE_CHECKING
from loguru import logger

from cardstack.cardview.models.card_item import ABSENT, ActiveFilters

if TYPE_CHECKING:
    from cardstack.cardview.models.card_item import Card
    from cardstack.cardview.models.descriptors import ValueDescriptor
    from cardstack.cardview.schema import CardstackSchema

SEQUENCE_TYPES = (list, tuple, set, frozenset)


def value_matches(card_value: Any, filter_value: Any) -> bool:
    """Membership for sequence values, equality otherwise."""
    if isinstance(card_value, SEQUENCE_TYPES):
        return filter_value in card_value
    return filter_value == card_value


def compile_search(pattern: Union[str, Pattern, None]) -> Optional[Pattern]:
    """
    Normalize a search pattern.

    Strings become case-insensitive substring patterns; compiled
    patterns are used as given; empty input clears the search.
    """
    if pattern is None:
        return None
    if isinstance(pattern, str):
        text = pattern.strip()
        if not text:
            return None
        return re.compile(re.escape(text), re.IGNORECASE)
    return pattern


class FilterController:
    """
    Controls card visibility for a cardstack view.

    Example:
        controller = FilterController(searchable_by=["caption", "tags"])
        controller.apply_filter_by(schema.get_value("status", "open"))
        controller.set_text_filter("disk")
        visible = controller.apply(cards)
    """

    def __init__(self, searchable_by: Optional[Sequence[str]] = None):
        self.searchable_by: List[str] = list(searchable_by or [])
        self.active_filters: ActiveFilters = {}
        self._text_filter: Optional[Pattern] = None

    # --- Text Search ---

    def set_text_filter(self, pattern: Union[str, Pattern, None]):
        """Set (or clear with None) the search pattern."""
        self._text_filter = compile_search(pattern)
        logger.debug(f"Text filter set: {self._text_filter.pattern if self._text_filter else None!r}")

    @property
    def text_filter(self) -> Optional[Pattern]:
        """Current compiled search pattern."""
        return self._text_filter

    # --- Discrete Value Filters ---

    def apply_filter_by(self, descriptor: 'ValueDescriptor') -> bool:
        """Activate one value of a property. Returns False (no reload needed)."""
        self.active_filters.setdefault(descriptor.property, {})[descriptor.value_key] = descriptor
        logger.debug(f"Filter added: {descriptor.value_key}")
        return False

    def remove_filter_by(self, descriptor: 'ValueDescriptor') -> bool:
        """Deactivate one value; drops the property once it has no values."""
        values = self.active_filters.get(descriptor.property)
        if values is None:
            return False
        values.pop(descriptor.value_key, None)
        if not values:
            del self.active_filters[descriptor.property]
        logger.debug(f"Filter removed: {descriptor.value_key}")
        return False

    def set_active_filters(self, filters: ActiveFilters):
        self.active_filters = {prop: dict(values) for prop, values in filters.items()}

    def clear(self):
        """Clear all filters and the search."""
        self.active_filters.clear()
        self._text_filter = None

    # --- Evaluation ---

    def matches_filters(self, card: 'Card') -> bool:
        """True if the card satisfies every active property filter."""
        for prop, values in self.active_filters.items():
            card_value = card.get_property(prop)
            if card_value is ABSENT:
                return False
            if not any(value_matches(card_value, d.value) for d in values.values()):
                return False
        return True

    def matches_search(self, card: 'Card') -> bool:
        """True if any searchable property matches the search pattern."""
        search = self._text_filter
        if search is None or not self.searchable_by:
            return True

        for field in self.searchable_by:
            value = card.get_property(field)
            if value is ABSENT:
                continue
            candidates = value if isinstance(value, SEQUENCE_TYPES) else [value]
            if any(search.search(str(item)) for item in candidates):
                return True
        return False

    def evaluate(self, card: 'Card') -> 'Card':
        """Write the card's `visible` flag and return the card."""
        card.visible = self.matches_search(card) and self.matches_filters(card)
        return card

    def apply(self, cards: List['Card']) -> List['Card']:
        """
        Evaluate every card.

        Returns:
            The visible cards, in input order
        """
        return [card for card in cards if self.evaluate(card).visible]

    # --- State ---

    @property
    def is_active(self) -> bool:
        """Check if any filter is active."""
        return bool(self._text_filter or self.active_filters)

    def describe(self, schema: Optional['CardstackSchema'] = None) -> str:
        """
        Human readable description of the active property filters.

        Example:
            'Status == "Open" OR "Closed" AND Severity == "High"'
        """
        if not self.active_filters:
            return "no filter applied"

        clauses = []
        for prop, values in self.active_filters.items():
            caption = prop
            if schema is not None and prop in schema.definitions:
                caption = schema.definitions[prop].caption or prop
            captions = " OR ".join(f'"{d.caption or d.value}"' for d in values.values())
            clauses.append(f"{caption} == {captions}")
        return " AND ".join(clauses)

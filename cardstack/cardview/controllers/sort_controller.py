"""
SortController - Manages sorting logic for cardstack views.

Sorts by one property; strings compare case-insensitively with the
active locale collation, numbers numerically.
"""
import locale
from functools import cmp_to_key
from numbers import Number
from typing import Any, List, Optional, TYPE_CHECKING
from loguru import logger

from cardstack.core.errors import ConsistencyError

if TYPE_CHECKING:
    from cardstack.cardview.models.card_item import Card

ASCENDING = "ASC"
DESCENDING = "DESC"


def _is_number(value: Any) -> bool:
    return isinstance(value, Number) and not isinstance(value, bool)


def _compare_strings(a: str, b: str) -> int:
    folded_a = locale.strxfrm(a.casefold())
    folded_b = locale.strxfrm(b.casefold())
    if folded_a != folded_b:
        return (folded_a > folded_b) - (folded_a < folded_b)
    # same letters, different case
    return locale.strcoll(a, b)


def compare_values(a: Any, b: Any) -> int:
    """
    Three-way compare two property values.

    Strings compare case-insensitively through the active locale collation;
    only strings equal up to case fall back to a case-sensitive compare.

    Raises:
        ConsistencyError: Values are missing, mixed, or neither str nor number
    """
    if isinstance(a, str) and isinstance(b, str):
        return _compare_strings(a, b)
    if _is_number(a) and _is_number(b):
        return (a > b) - (a < b)
    raise ConsistencyError(
        "Inconsistent property normalization: properties are not string or number, or are mixed."
    )


class SortController:
    """
    Controls sorting for a cardstack view.

    Example:
        controller = SortController()
        controller.sort_by_field("severity", "ASC")
        ordered = controller.apply(cards)
    """

    def __init__(self):
        self._sort_field: Optional[str] = None
        self._order: str = ASCENDING

    def sort_by_field(self, field: str, order: str = DESCENDING):
        """
        Set sorting by property.

        Args:
            field: Property key to sort by
            order: "ASC" for ascending, anything else for descending
        """
        self._sort_field = field
        self._order = ASCENDING if order == ASCENDING else DESCENDING
        logger.debug(f"Sort set: {field} {self._order}")

    @property
    def sort_field(self) -> Optional[str]:
        return self._sort_field

    @property
    def order(self) -> str:
        return self._order

    @property
    def ascending(self) -> bool:
        return self._order == ASCENDING

    def apply(self, cards: List['Card']) -> List['Card']:
        """
        Apply current sort to cards.

        Returns:
            Sorted list (new list, original unchanged); stable for ties

        Raises:
            ConsistencyError: Property values cannot be compared
        """
        if not self._sort_field:
            return list(cards)

        field = self._sort_field
        sign = 1 if self.ascending else -1

        def compare(a: 'Card', b: 'Card') -> int:
            return sign * compare_values(a.properties.get(field), b.properties.get(field))

        return sorted(cards, key=cmp_to_key(compare))

    def clear(self):
        """Clear sorting settings."""
        self._sort_field = None
        self._order = ASCENDING

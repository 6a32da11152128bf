"""
GroupController - Manages grouping for cardstack views.

Grouping is an extension point: the engine records the grouping
property and can bucket cards by it, but never reorders the view.
"""
from typing import Dict, List, Optional, TYPE_CHECKING
from loguru import logger

from cardstack.cardview.models.card_item import ABSENT

if TYPE_CHECKING:
    from cardstack.cardview.models.card_item import Card

OTHER_GROUP = "Other"
ALL_GROUP = "all"


class GroupController:
    """
    Controls grouping for a cardstack view.

    Example:
        controller = GroupController()
        controller.set_group_field("status")
        grouped = controller.apply(cards)  # {"closed": [...], "open": [...]}
    """

    def __init__(self):
        self._group_field: Optional[str] = None

    def set_group_field(self, field: Optional[str]):
        """Set grouping by property key, or clear with None."""
        self._group_field = field
        logger.debug(f"Grouping by field: {field}")

    @property
    def group_field(self) -> Optional[str]:
        return self._group_field

    @property
    def is_active(self) -> bool:
        return self._group_field is not None

    def apply(self, cards: List['Card']) -> Dict[str, List['Card']]:
        """
        Group cards by the current property.

        Sequence values put the card in every element's group; missing
        values go to "Other". Without a group field everything lands
        in a single "all" group.
        """
        if not cards:
            return {}
        if not self._group_field:
            return {ALL_GROUP: list(cards)}

        grouped: Dict[str, List['Card']] = {}
        for card in cards:
            value = card.get_property(self._group_field)
            if value is ABSENT:
                keys = [OTHER_GROUP]
            elif isinstance(value, (list, tuple, set, frozenset)):
                keys = [str(v) for v in value] or [OTHER_GROUP]
            else:
                keys = [str(value)]
            for key in keys:
                grouped.setdefault(key, []).append(card)

        return dict(sorted(grouped.items()))

    def clear(self):
        self._group_field = None

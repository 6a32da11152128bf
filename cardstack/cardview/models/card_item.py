"""
Card Data Model.

Pydantic model for one materialized row of a cardstack view, plus the
view-level containers (active filters, aggregations, error).
"""
from typing import Any, Dict, Optional
from pydantic import BaseModel, Field

from cardstack.cardview.models.descriptors import ValueDescriptor

class _Absent:
    """Marker for a property that is missing or undefined on a card."""
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self):
        return False

    def __repr__(self):
        return "ABSENT"


ABSENT = _Absent()


class Card(BaseModel):
    """
    Data model for a single card.

    Attributes:
        entity: Raw domain object (owned by the caller)
        properties: Derived projection used for all queries
        id: Unique identifier
        caption: Display text
        visible: Result of the last filter/search evaluation
        checked: User selection state

    Example:
        card = Card(
            entity=incident,
            properties={"id": "i-1", "caption": "Disk full", "severity": 3},
            id="i-1",
            caption="Disk full",
        )
    """
    entity: Any = Field(None, description="Raw domain object")
    properties: Dict[str, Any] = Field(default_factory=dict)
    id: Any = Field(..., description="Unique identifier")
    caption: str = Field("", description="Display text")
    visible: bool = False
    checked: bool = False

    class Config:
        """Pydantic config."""
        arbitrary_types_allowed = True

    def get_property(self, key: str) -> Any:
        """
        Get a derived property value.

        Returns:
            The value, or ABSENT if the key is missing or None
        """
        value = self.properties.get(key)
        if value is None:
            return ABSENT
        return value


ActiveFilters = Dict[str, Dict[str, ValueDescriptor]]


class Aggregations(BaseModel):
    """Per-property, per-value card counts."""
    properties: Dict[str, Dict[str, int]] = Field(default_factory=dict)


class ViewError(BaseModel):
    """Failure description a host may attach to a view."""
    description: Optional[str] = None
    details: Any = None

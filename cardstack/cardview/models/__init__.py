"""
Cardview Models Package.
"""
from cardstack.cardview.models.descriptors import (
    ValueDescriptor,
    PropertyDescriptor,
    Characteristics,
    DescriptorRef,
)
from cardstack.cardview.models.card_item import (
    ABSENT,
    ActiveFilters,
    Aggregations,
    Card,
    ViewError,
)

__all__ = [
    "ValueDescriptor",
    "PropertyDescriptor",
    "Characteristics",
    "DescriptorRef",
    "ABSENT",
    "ActiveFilters",
    "Aggregations",
    "Card",
    "ViewError",
]

"""
Cardview Module - view-state engine for filterable, sortable, paginated cards.

Provides:
- CardstackView: orchestrates load lifecycle, queries and change notification
- CardstackSchema: normalized characteristics and descriptor lookups
- Controllers for filtering/search, sorting, grouping and pagination

Usage:
    from cardstack.cardview import CardstackView, Characteristics

    view = CardstackView(source, Characteristics(filterable_by=[...]))
    await view.start()
    view.apply_text_filter("disk")
"""
from cardstack.cardview.models import (
    ABSENT,
    Aggregations,
    Card,
    Characteristics,
    PropertyDescriptor,
    ValueDescriptor,
    ViewError,
)
from cardstack.cardview.schema import CardstackSchema
from cardstack.cardview.ingestion import ingest
from cardstack.cardview.protocol import CardstackSource, CharacteristicsProvider
from cardstack.cardview.controllers import (
    FilterController,
    GroupController,
    PaginationController,
    SortController,
)
from cardstack.cardview.card_viewmodel import CardstackView

__all__ = [
    # Main view
    "CardstackView",
    # Schema
    "CardstackSchema",
    "Characteristics",
    "PropertyDescriptor",
    "ValueDescriptor",
    # Data types
    "ABSENT",
    "Aggregations",
    "Card",
    "ViewError",
    # Ingestion / collaborators
    "ingest",
    "CardstackSource",
    "CharacteristicsProvider",
    # Controllers
    "FilterController",
    "GroupController",
    "PaginationController",
    "SortController",
]

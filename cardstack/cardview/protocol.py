"""
Protocol definitions for cardstack data sources.

A host implements these methods on any object (no base class needed)
and injects it into a CardstackView.
"""
from typing import Any, Dict, List, Protocol, TYPE_CHECKING, runtime_checkable

if TYPE_CHECKING:
    from cardstack.cardview.card_viewmodel import CardstackView
    from cardstack.cardview.models.descriptors import Characteristics


@runtime_checkable
class CardstackSource(Protocol):
    """
    Collaborator contract required by CardstackView.

    Usage:
        class IncidentSource:
            async def fetch_data(self, view, initial_load):
                page = await client.list_incidents(cursor=self.cursor)
                self.cursor = page.next_cursor
                view.remaining_pages = 1 if page.next_cursor else 0
                return page.items

            def derive_entity_properties(self, entity):
                return {"id": entity.id, "caption": entity.title, "status": entity.status}

            def cards_change(self, view):
                render(view.cards)
    """

    async def fetch_data(self, view: 'CardstackView', initial_load: bool) -> List[Any]:
        """
        Retrieve the next page of raw entities.

        In remote pagination mode the implementation must update
        `view.remaining_pages` before returning.
        """
        ...

    def derive_entity_properties(self, entity: Any) -> Dict[str, Any]:
        """Project an entity to queryable properties (must include `id` and `caption`)."""
        ...

    def cards_change(self, view: 'CardstackView') -> None:
        """Called after every change to the materialized cards."""
        ...


@runtime_checkable
class CharacteristicsProvider(Protocol):
    """Optional capability: build characteristics lazily at `start()`."""

    async def generate_characteristics(self) -> 'Characteristics':
        ...

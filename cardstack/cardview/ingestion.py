"""
Ingestion - raw entities to Card records.

This is the only place Cards are constructed.
"""
from typing import Any, Callable, Dict, Iterable, List

from cardstack.core.errors import ConfigurationError
from cardstack.cardview.models.card_item import Card


def ingest(
    entities: Iterable[Any],
    derive: Callable[[Any], Dict[str, Any]],
) -> List[Card]:
    """
    Convert raw entities into cards, preserving input order.

    Args:
        entities: Raw domain objects from the data source
        derive: Projection from entity to normalized properties; the
            result must contain `id` and `caption`

    Returns:
        New cards with visible=False and checked=False
    """
    cards = []
    for entity in entities:
        properties = derive(entity)
        if "id" not in properties:
            raise ConfigurationError(
                "derive_entity_properties must return an 'id' property", "id"
            )
        caption = properties.get("caption")
        cards.append(Card(
            entity=entity,
            properties=properties,
            id=properties["id"],
            caption="" if caption is None else str(caption),
        ))
    return cards

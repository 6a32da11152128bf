import pytest

from cardstack.core.errors import ConfigurationError
from cardstack.cardview.ingestion import ingest
from cardstack.cardview.models.card_item import ABSENT


def test_ingest_preserves_order(incidents):
    cards = ingest(incidents, dict)

    assert [c.id for c in cards] == ["INC-1", "INC-2", "INC-3", "INC-4", "INC-5"]
    assert cards[0].caption == "Disk full on db01"
    assert cards[0].entity is incidents[0]


def test_ingest_initial_flags(incidents):
    cards = ingest(incidents, dict)

    assert not any(c.visible for c in cards)
    assert not any(c.checked for c in cards)


def test_ingest_uses_derived_properties():
    entities = [{"pk": 7, "title": "Seven"}]

    cards = ingest(entities, lambda e: {"id": e["pk"], "caption": e["title"], "size": 3})

    assert cards[0].id == 7
    assert cards[0].caption == "Seven"
    assert cards[0].get_property("size") == 3
    assert cards[0].get_property("missing") is ABSENT


def test_ingest_missing_caption_defaults_to_empty():
    cards = ingest([{"id": "a"}], dict)

    assert cards[0].caption == ""


def test_ingest_requires_id():
    with pytest.raises(ConfigurationError):
        ingest([{"caption": "no id"}], dict)


def test_ingest_empty():
    assert ingest([], dict) == []

import pytest
from cardstack.cardview.models.descriptors import (
    Characteristics,
    PropertyDescriptor,
    ValueDescriptor,
)


INCIDENTS = [
    {"id": "INC-1", "caption": "Disk full on db01", "status": "open", "severity": 3, "tags": ["disk", "prod"]},
    {"id": "INC-2", "caption": "Login latency", "status": "closed", "severity": 1, "tags": ["auth"]},
    {"id": "INC-3", "caption": "Backup failed", "status": "open", "severity": 5, "tags": ["backup", "prod"]},
    {"id": "INC-4", "caption": "Certificate expiring", "status": "pending", "severity": 2, "tags": []},
    {"id": "INC-5", "caption": "Disk latency on web02", "status": "closed", "severity": 4, "tags": ["disk"]},
]


class FakeSource:
    """In-memory remote data source serving fixed pages."""

    def __init__(self, pages):
        self.pages = [list(page) for page in pages]
        self.fetch_calls = []
        self.change_count = 0
        self._cursor = 0

    async def fetch_data(self, view, initial_load):
        self.fetch_calls.append(initial_load)
        if initial_load:
            self._cursor = 0
        page = self.pages[self._cursor] if self._cursor < len(self.pages) else []
        self._cursor += 1
        view.remaining_pages = max(len(self.pages) - self._cursor, 0)
        return page

    def derive_entity_properties(self, entity):
        return dict(entity)

    def cards_change(self, view):
        self.change_count += 1


class GeneratingSource(FakeSource):
    """Source that supplies its own characteristics."""

    def __init__(self, pages, characteristics):
        super().__init__(pages)
        self._characteristics = characteristics
        self.generated = 0

    async def generate_characteristics(self):
        self.generated += 1
        return self._characteristics


def build_characteristics(**overrides) -> Characteristics:
    status = PropertyDescriptor(
        property="status",
        caption="Status",
        values=[
            ValueDescriptor(value="open", caption="Open"),
            ValueDescriptor(value="closed", caption="Closed"),
            ValueDescriptor(value="pending", caption="Pending"),
        ],
    )
    severity = PropertyDescriptor(property="severity", caption="Severity")
    tags = PropertyDescriptor(
        property="tags",
        caption="Tags",
        values=[
            ValueDescriptor(value="disk", caption="Disk"),
            ValueDescriptor(value="prod", caption="Production"),
        ],
    )
    data = dict(
        definitions={"status": status},
        sortable_by=["status", severity],
        filterable_by=["status", tags],
        searchable_by=["caption", "tags"],
    )
    data.update(overrides)
    return Characteristics(**data)


@pytest.fixture
def incidents():
    return [dict(incident) for incident in INCIDENTS]


@pytest.fixture
def make_characteristics():
    """Factory for fresh (unnormalized) characteristics."""
    return build_characteristics


@pytest.fixture
def make_source():
    """Factory for FakeSource / GeneratingSource."""
    def factory(pages, characteristics=None):
        if characteristics is not None:
            return GeneratingSource(pages, characteristics)
        return FakeSource(pages)
    return factory

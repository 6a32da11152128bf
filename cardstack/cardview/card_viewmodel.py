"""
CardstackView - view-state engine for card lists.

Ties together the schema, ingestion and the filter/sort/group/pagination
controllers, and publishes `cards` / `visible_cards` to the host.
"""
from re import Pattern
from typing import Any, Dict, List, Mapping, Optional, Union
from loguru import logger

from cardstack.core.config import ConfigManager, FilterSettings, ViewSettings
from cardstack.core.errors import PropertyNotFoundError, UsageError
from cardstack.core.events import Signal
from cardstack.core.lifecycle import ViewLifecycle, ViewPhase
from cardstack.cardview.controllers.filter_controller import FilterController, value_matches
from cardstack.cardview.controllers.group_controller import GroupController
from cardstack.cardview.controllers.pagination_controller import PaginationController
from cardstack.cardview.controllers.sort_controller import SortController
from cardstack.cardview.ingestion import ingest
from cardstack.cardview.models.card_item import ABSENT, ActiveFilters, Aggregations, Card, ViewError
from cardstack.cardview.models.descriptors import (
    Characteristics,
    PropertyDescriptor,
    ValueDescriptor,
)
from cardstack.cardview.protocol import CardstackSource, CharacteristicsProvider
from cardstack.cardview.schema import CardstackSchema, lookup_value

PropertyRef = Union[str, PropertyDescriptor, Mapping[str, Any]]


class CardstackView:
    """
    Manages the state of one cardstack view.

    The data source is injected; the view never subclasses it.

    State:
        raw_cards: Every ingested card, in current sort order
        filtered_cards: Raw cards passing filters and search
        cards: Materialized window the host renders
        visible_cards: Number of visible cards in `cards`

    Example:
        view = CardstackView(source, characteristics, ViewSettings(local_pagination=True))
        await view.start()
        view.apply_filter_by(view.get_value("status", "open"))
        view.apply_filters_and_search()
        await view.continue_loading()
    """

    def __init__(
        self,
        source: CardstackSource,
        characteristics: Optional[Union[Characteristics, Dict[str, Any]]] = None,
        settings: Optional[ViewSettings] = None,
        filter_settings: Optional[FilterSettings] = None,
        config: Optional[ConfigManager] = None,
    ):
        """
        Args:
            source: Data source collaborator
            characteristics: Schema; may be generated at `start()` instead
            settings: View settings; taken from `config` when omitted
            filter_settings: Normalization defaults; taken from `config` when omitted
            config: Shared settings; later edits are applied to this view
        """
        self.source = source
        self._config = config
        if config is not None:
            settings = settings or config.view
            filter_settings = filter_settings or config.filters
            config.on_changed.connect(self._on_config_changed)
        self.settings = settings or ViewSettings()
        self._filter_settings = filter_settings or FilterSettings()
        self.verbose = self.settings.verbose

        self.schema: Optional[CardstackSchema] = None
        self._lifecycle = ViewLifecycle()

        # Controllers
        self.filter_controller = FilterController()
        self.sort_controller = SortController()
        self.group_controller = GroupController()
        self.pagination = PaginationController(
            items_per_page=self.settings.items_per_page,
            local=self.settings.local_pagination,
        )

        # View state
        self.raw_cards: List[Card] = []
        self.filtered_cards: List[Card] = []
        self.cards: List[Card] = []
        self.visible_cards: int = 0
        self.checked: bool = False
        self.sorting_by: Optional[PropertyDescriptor] = None
        self.grouping_by: Optional[PropertyDescriptor] = None
        self.error: Optional[ViewError] = None
        self.aggregations = Aggregations()

        self.cards_changed = Signal("CardsChanged")

        if characteristics is not None:
            self._apply_characteristics(characteristics)

    # --- Schema ---

    def _apply_characteristics(self, characteristics):
        self.schema = CardstackSchema.normalize(characteristics, self._filter_settings)
        self.filter_controller.searchable_by = list(self.schema.searchable_by)
        self.filter_controller.set_active_filters(self.schema.default_filters())

    @property
    def characteristics(self) -> Optional[Characteristics]:
        return self.schema.characteristics if self.schema else None

    def get_property(self, property_id: Union[str, PropertyDescriptor]) -> PropertyDescriptor:
        """Look up a property descriptor by key."""
        if isinstance(property_id, PropertyDescriptor):
            return property_id
        if self.schema is None:
            raise PropertyNotFoundError(
                property_id,
                f"Internal error: cannot access undefined property '{property_id}'",
            )
        return self.schema.get_property(property_id)

    def get_value(self, property_id: Union[str, PropertyDescriptor], value: Any) -> ValueDescriptor:
        """Look up a discrete value descriptor by raw value or value key."""
        return lookup_value(self.get_property(property_id), value)

    # --- Lifecycle ---

    @property
    def phase(self) -> ViewPhase:
        return self._lifecycle.phase

    @property
    def lifecycle(self) -> ViewLifecycle:
        return self._lifecycle

    @property
    def loading(self) -> bool:
        return self._lifecycle.is_loading

    async def start(self):
        """
        Load the first page and (re)build the whole view.

        Raises:
            UsageError: No characteristics and no `generate_characteristics`,
                or a load is already running
        """
        if self.schema is None and not isinstance(self.source, CharacteristicsProvider):
            raise UsageError(
                "Usage error: cardstack sources must either be given characteristics "
                "or provide a `generate_characteristics` method."
            )

        previous = self.phase
        self._lifecycle.transition_to(ViewPhase.LOADING)
        try:
            if self.schema is None:
                characteristics = await self.source.generate_characteristics()
                self._apply_characteristics(characteristics)

            entities = await self.source.fetch_data(self, True)

            self.raw_cards = []
            self.filtered_cards = []
            self.cards = []

            ingested = ingest(entities, self.source.derive_entity_properties)
            self.raw_cards = ingested
            self.filtered_cards = self.filter_controller.apply(ingested)
            self._aggregate()

            if self.local_pagination:
                self.start_pagination(self.filtered_cards)
            else:
                self._add_next_section(ingested)
        except Exception:
            self._lifecycle.transition_to(previous)
            raise

        self._lifecycle.transition_to(ViewPhase.READY)
        logger.debug(f"Started: {len(self.raw_cards)} cards ingested, {len(self.cards)} materialized")
        self._log_state("After start")
        self._notify()

    async def continue_loading(self):
        """
        Materialize the next page under the active pagination strategy.

        With `greedy_consumer` set, keeps loading until `remaining_pages`
        drops to zero or below.

        Raises:
            UsageError: Called before `start()` or while a load is running
        """
        if self.phase == ViewPhase.UNINITIALIZED:
            raise UsageError("Usage error: start() must complete before continue_loading().")

        self._lifecycle.transition_to(ViewPhase.LOADING)
        try:
            await self._load_next_section()
            while self.schema.greedy_consumer and self.remaining_pages > 0:
                await self._load_next_section()
        finally:
            self._lifecycle.transition_to(ViewPhase.READY)

        self._notify()

    async def _load_next_section(self):
        if self.local_pagination:
            section = self.pagination.next_section(self.filtered_cards, len(self.cards))
        else:
            entities = await self.source.fetch_data(self, False)
            section = ingest(entities, self.source.derive_entity_properties)
            self.raw_cards.extend(section)
            self.filtered_cards.extend(self.filter_controller.apply(section))
            self._aggregate()

        self._add_next_section(section)
        logger.debug(f"Section loaded: {len(section)} cards")
        self._log_state("After continue", f", with {self.remaining_pages} page(s) of data remaining.")

    # --- Pagination ---

    @property
    def local_pagination(self) -> bool:
        return self.pagination.local

    @local_pagination.setter
    def local_pagination(self, value: bool):
        self.pagination.local = value

    @property
    def items_per_page(self) -> int:
        return self.pagination.items_per_page

    @items_per_page.setter
    def items_per_page(self, value: int):
        self.pagination.items_per_page = value

    @property
    def loaded_pages(self) -> int:
        return self.pagination.loaded_pages

    @loaded_pages.setter
    def loaded_pages(self, value: int):
        self.pagination.loaded_pages = value

    @property
    def remaining_pages(self) -> float:
        return self.pagination.remaining_pages

    @remaining_pages.setter
    def remaining_pages(self, value: float):
        self.pagination.remaining_pages = value

    @property
    def filtered_count(self) -> int:
        """Number of cards passing filters and search, materialized or not."""
        return len(self.filtered_cards)

    def start_pagination(self, filtered_cards: List[Card]):
        """Materialize the first local page of `filtered_cards`."""
        self.cards = self.pagination.start_pagination(filtered_cards)
        self._refresh_window()

    def reset_pagination(self, total: int):
        self.pagination.reset_pagination(total)

    # --- Settings ---

    def _on_config_changed(self, section: str, key: str, value: Any):
        """Follow shared settings; takes effect from the next page or normalization."""
        if section == "view":
            self.settings = self._config.view
            self.pagination.items_per_page = self.settings.items_per_page
            self.pagination.local = self.settings.local_pagination
            self.verbose = self.settings.verbose
        elif section == "filters":
            self._filter_settings = self._config.filters
        logger.debug(f"View picked up setting {section}.{key} = {value!r}")

    def _add_next_section(self, section: List[Card]):
        self.cards.extend(section)
        self._refresh_window()

    def _refresh_window(self):
        for card in self.cards:
            self.filter_controller.evaluate(card)
        self.visible_cards = sum(1 for card in self.cards if card.visible)
        if self.local_pagination:
            self._mark_cards_as_checked()

    # --- Filter / Search ---

    @property
    def text_filter(self) -> Optional[Pattern]:
        return self.filter_controller.text_filter

    @property
    def active_filters(self) -> ActiveFilters:
        return self.filter_controller.active_filters

    def apply_filters_and_search(self):
        """Re-evaluate every raw card and rebuild the materialized window."""
        self.filtered_cards = self.filter_controller.apply(self.raw_cards)

        if self.local_pagination:
            self.start_pagination(self.filtered_cards)
        else:
            self.cards = list(self.filtered_cards)
            self.visible_cards = len(self.cards)

        self._log_state("After filter applied")
        self._notify()

    def apply_text_filter(self, pattern: Union[str, Pattern, None]) -> bool:
        """
        Set the search pattern (None clears it) and re-evaluate.

        Returns:
            Always True (view was re-evaluated)
        """
        self.filter_controller.set_text_filter(pattern)
        self.apply_filters_and_search()
        return True

    def apply_filter_by(self, descriptor: ValueDescriptor) -> bool:
        """
        Activate a discrete value filter.

        Call `apply_filters_and_search()` afterwards to refresh the view.
        """
        return self.filter_controller.apply_filter_by(descriptor)

    def remove_filter_by(self, descriptor: ValueDescriptor) -> bool:
        """
        Deactivate a discrete value filter.

        Call `apply_filters_and_search()` afterwards to refresh the view.
        """
        return self.filter_controller.remove_filter_by(descriptor)

    def describe_filters(self) -> str:
        return self.filter_controller.describe(self.schema)

    # --- Sort ---

    @property
    def sort_order(self) -> str:
        return self.sort_controller.order

    def apply_sort_by(self, descriptor: PropertyRef, order: str = "DESC") -> bool:
        """
        Sort raw cards by a property, then re-apply filters and search.

        Args:
            descriptor: Property key, descriptor, or mapping with a `property` key
            order: "ASC" for ascending, anything else for descending

        Returns:
            False (no full reload needed)

        Raises:
            ConsistencyError: Values are mixed or neither string nor number
        """
        key = _property_key(descriptor)
        previous = (self.sort_controller.sort_field, self.sort_controller.order)

        self.sort_controller.sort_by_field(key, order)
        try:
            self.raw_cards = self.sort_controller.apply(self.raw_cards)
        except Exception:
            field, old_order = previous
            if field is None:
                self.sort_controller.clear()
            else:
                self.sort_controller.sort_by_field(field, old_order)
            raise

        self.sorting_by = self._descriptor_for(key, descriptor)
        self.apply_filters_and_search()
        return False

    # --- Grouping ---

    def apply_grouping_by(self, descriptor: Optional[PropertyRef]) -> bool:
        """
        Record the grouping property (None clears it).

        Returns:
            True
        """
        if descriptor is None:
            self.grouping_by = None
            self.group_controller.clear()
            return True

        if isinstance(descriptor, str):
            self.grouping_by = self.get_property(descriptor)
        else:
            self.grouping_by = self._descriptor_for(_property_key(descriptor), descriptor)
        self.group_controller.set_group_field(self.grouping_by.property)
        return True

    def grouped_cards(self) -> Dict[str, List[Card]]:
        """Visible materialized cards bucketed by the grouping property."""
        return self.group_controller.apply([card for card in self.cards if card.visible])

    # --- Selection ---

    def apply_select(self, checked: bool):
        """Set `checked` on every materialized card."""
        self.checked = checked
        self._mark_cards_as_checked()
        self._notify()

    def selected_cards(self) -> List[Card]:
        return [card for card in self.cards if card.checked]

    def _mark_cards_as_checked(self):
        for card in self.cards:
            card.checked = self.checked

    # --- Aggregations ---

    def _aggregate(self):
        """Count raw cards per discrete value of every filterable property."""
        if self.schema is None:
            return
        result: Dict[str, Dict[str, int]] = {}
        for prop in self.schema.characteristics.filterable_by:
            descriptor = self.schema.definitions[prop]
            counts = {value.value_key: 0 for value in descriptor.values}
            for card in self.raw_cards:
                card_value = card.get_property(prop)
                if card_value is ABSENT:
                    continue
                for value in descriptor.values:
                    if value_matches(card_value, value.value):
                        counts[value.value_key] += 1
            result[prop] = counts
        self.aggregations = Aggregations(properties=result)

    # --- Helpers ---

    def _descriptor_for(self, key: str, descriptor: PropertyRef) -> PropertyDescriptor:
        if isinstance(descriptor, PropertyDescriptor):
            return descriptor
        if self.schema is not None and key in self.schema.definitions:
            return self.schema.definitions[key]
        return PropertyDescriptor(property=key)

    def _notify(self):
        self.source.cards_change(self)
        self.cards_changed.emit(self)

    def _log_state(self, prefix: str, suffix: str = ""):
        if self.verbose:
            logger.debug(
                f"{prefix}: {self.describe_filters()} ({self.visible_cards} visible){suffix}"
            )


def _property_key(descriptor: PropertyRef) -> str:
    if isinstance(descriptor, str):
        return descriptor
    if isinstance(descriptor, PropertyDescriptor):
        return descriptor.property
    return descriptor["property"]

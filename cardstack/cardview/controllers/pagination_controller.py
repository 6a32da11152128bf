"""
PaginationController - page counters and windowing for cardstack views.

Two strategies:
- remote: the data source delivers one page per continue and owns
  `remaining_pages`; the controller never slices.
- local: everything is fetched once and pages are slices of the
  filtered cards.
"""
from typing import List, TYPE_CHECKING
from loguru import logger

if TYPE_CHECKING:
    from cardstack.cardview.models.card_item import Card


class PaginationController:
    """
    Tracks loaded/remaining pages and cuts local page windows.

    Example:
        controller = PaginationController(items_per_page=2, local=True)
        window = controller.start_pagination(filtered)    # first 2 cards
        window += controller.next_section(filtered, len(window))
    """

    def __init__(self, items_per_page: int = 50, local: bool = False):
        self.items_per_page = items_per_page
        self.local = local
        self.loaded_pages: int = 0
        # 1 while unknown, <= 0 once the source is exhausted
        self.remaining_pages: float = 1

    @property
    def has_more(self) -> bool:
        return self.remaining_pages > 0

    def reset_pagination(self, total: int):
        """
        Reset counters for `total` filtered cards.

        `remaining_pages` is the fractional estimate total / items_per_page.
        """
        if self.items_per_page:
            self.loaded_pages = 0
            self.remaining_pages = total / self.items_per_page

    def start_pagination(self, filtered: List['Card']) -> List['Card']:
        """Return the first page window and reset counters."""
        window = filtered[:min(self.items_per_page, len(filtered))]
        self.reset_pagination(len(filtered))
        logger.debug(
            f"Pagination started: {len(window)}/{len(filtered)} cards, "
            f"{self.remaining_pages} page(s) remaining"
        )
        return window

    def next_section(self, filtered: List['Card'], offset: int) -> List['Card']:
        """Slice the next local page after `offset` and advance counters."""
        section = filtered[offset:offset + self.items_per_page]
        self.loaded_pages += 1
        self.remaining_pages -= 1
        return section

    def reset(self):
        """Back to the unknown-size state used before the first load."""
        self.loaded_pages = 0
        self.remaining_pages = 1

"""
Synchronous change notification.

Views expose a `cards_changed` Signal next to the source's
`cards_change()` hook so several observers can follow one view.
"""
from typing import Callable, List
from loguru import logger


class Signal:
    """
    Minimal observer: subscribers are plain callables invoked in
    connection order on `emit()`.

    Example:
        changed = Signal("CardsChanged")
        changed.connect(lambda view: render(view.cards))
        changed.emit(view)
    """
    def __init__(self, name: str = "Signal"):
        self.name = name
        self._subscribers: List[Callable] = []

    def connect(self, callback: Callable):
        """Subscribe; connecting the same callable twice is a no-op."""
        if callback not in self._subscribers:
            self._subscribers.append(callback)

    def disconnect(self, callback: Callable):
        if callback in self._subscribers:
            self._subscribers.remove(callback)

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    def emit(self, *args, **kwargs):
        """
        Call every subscriber with the given arguments.

        A failing subscriber is logged and skipped; the rest still run.
        """
        for sub in list(self._subscribers):
            try:
                sub(*args, **kwargs)
            except Exception as e:
                logger.error(f"Signal '{self.name}' error in subscriber '{sub}': {e}")

"""
View Lifecycle State Machine.

Tracks the load phase of a cardstack view and validates transitions.
"""
from enum import Enum
from typing import Callable, Dict, List
from loguru import logger

from .errors import UsageError


class ViewPhase(Enum):
    """Cardstack view load phases."""
    UNINITIALIZED = "uninitialized"
    LOADING = "loading"
    READY = "ready"


class ViewLifecycle:
    """
    Manages view phase transitions.

    Usage:
        lifecycle = ViewLifecycle()
        lifecycle.add_listener(on_phase)
        lifecycle.transition_to(ViewPhase.LOADING)
    """

    # LOADING -> UNINITIALIZED covers a failed first load
    VALID_TRANSITIONS = {
        ViewPhase.UNINITIALIZED: [ViewPhase.LOADING],
        ViewPhase.LOADING: [ViewPhase.READY, ViewPhase.UNINITIALIZED],
        ViewPhase.READY: [ViewPhase.LOADING],
    }

    def __init__(self):
        self._phase = ViewPhase.UNINITIALIZED
        self._listeners: List[Callable[[ViewPhase, ViewPhase], None]] = []

    @property
    def phase(self) -> ViewPhase:
        """Get current phase."""
        return self._phase

    def can_transition(self, target: ViewPhase) -> bool:
        return target in self.VALID_TRANSITIONS.get(self._phase, [])

    def transition_to(self, target: ViewPhase) -> bool:
        """
        Transition to target phase.

        Raises:
            UsageError: If transition is invalid (e.g. overlapping loads)
        """
        if not self.can_transition(target):
            raise UsageError(
                f"Invalid view transition: {self._phase.value} -> {target.value}"
            )

        old_phase = self._phase
        self._phase = target
        logger.info(f"View lifecycle: {old_phase.value} -> {target.value}")
        self._notify_listeners(old_phase, target)
        return True

    def add_listener(self, listener: Callable[[ViewPhase, ViewPhase], None]) -> None:
        """Add a listener called with (old_phase, new_phase)."""
        if listener not in self._listeners:
            self._listeners.append(listener)

    def remove_listener(self, listener: Callable) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _notify_listeners(self, old: ViewPhase, new: ViewPhase) -> None:
        for listener in self._listeners:
            try:
                listener(old, new)
            except Exception as e:
                logger.error(f"Lifecycle listener error: {e}")

    @property
    def is_loading(self) -> bool:
        return self._phase == ViewPhase.LOADING

    @property
    def is_ready(self) -> bool:
        return self._phase == ViewPhase.READY

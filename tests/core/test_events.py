from unittest.mock import MagicMock

from cardstack.core.events import Signal


class TestSignal:
    """Tests for the synchronous Signal."""

    def test_emit_reaches_subscribers(self):
        signal = Signal("Test")
        handler = MagicMock()

        signal.connect(handler)
        signal.emit(1, key="value")

        handler.assert_called_once_with(1, key="value")

    def test_connect_twice_does_not_duplicate(self):
        signal = Signal("Test")
        handler = MagicMock()

        signal.connect(handler)
        signal.connect(handler)

        assert signal.subscriber_count == 1

    def test_disconnect(self):
        signal = Signal("Test")
        handler = MagicMock()

        signal.connect(handler)
        signal.disconnect(handler)
        signal.emit()

        handler.assert_not_called()
        assert signal.subscriber_count == 0

    def test_subscriber_error_does_not_stop_others(self):
        signal = Signal("Test")
        failing = MagicMock(side_effect=RuntimeError("boom"))
        healthy = MagicMock()

        signal.connect(failing)
        signal.connect(healthy)
        signal.emit("payload")

        healthy.assert_called_once_with("payload")

# core/chrono.py
from typing import Callable

from PySide6.QtCore import QObject, QTimer, Signal


class LiveTicker(QObject):
    """One repeating QTimer bound to a callback; cancel() stops it for good."""

    ticked = Signal()
    cancelled = Signal()

    def __init__(self, interval_ms: int, callback: Callable[[], None], parent=None):
        super().__init__(parent)
        self._callback = callback
        self._active = True

        self._tick = QTimer(self)
        self._tick.setInterval(interval_ms)
        self._tick.timeout.connect(self._on_tick)
        self._tick.start()

    @property
    def active(self) -> bool:
        return self._active

    def cancel(self) -> None:
        if not self._active:
            return
        self._active = False
        self._tick.stop()
        self.cancelled.emit()
        self.deleteLater()

    def _on_tick(self):
        # a timeout already queued when cancel() ran must not reach the callback
        if not self._active:
            return
        self._callback()
        self.ticked.emit()


class QtScheduler:
    """Scheduler backed by the Qt event loop; tickers are parented to `parent`."""

    def __init__(self, parent: QObject = None):
        self.parent = parent

    def every(self, interval_ms: int, callback: Callable[[], None]) -> LiveTicker:
        return LiveTicker(interval_ms, callback, parent=self.parent)

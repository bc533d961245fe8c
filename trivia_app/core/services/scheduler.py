"""Deferred callbacks on the Qt event loop."""

from __future__ import annotations

import logging
from typing import Callable, Protocol

from PySide6.QtCore import QObject, QTimer

logger = logging.getLogger(__name__)


class ScheduledCall:
    """Handle for a callback scheduled to run later.

    Cancelling is synchronous: once ``cancel()`` returns, the callback will not
    run even if the underlying event-loop timer has already fired and its
    delivery is queued.
    """

    def __init__(self, callback: Callable[[], None]) -> None:
        self._callback = callback
        self.cancelled: bool = False
        self.done: bool = False

    def cancel(self) -> None:
        self.cancelled = True

    @property
    def pending(self) -> bool:
        return not (self.cancelled or self.done)

    def run(self) -> None:
        if not self.pending:
            logger.debug("Suppressed stale scheduled callback")
            return
        self.done = True
        self._callback()


class Scheduler(Protocol):
    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> ScheduledCall:
        ...


class QtScheduler(QObject):
    """Scheduler backed by single-shot QTimers owned by this object."""

    def __init__(self, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._timers: dict[int, tuple[QTimer, ScheduledCall]] = {}

    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> ScheduledCall:
        if delay_ms < 0:
            raise ValueError("Delay must not be negative.")
        call = ScheduledCall(callback)
        timer = QTimer(self)
        timer.setSingleShot(True)
        timer.setInterval(delay_ms)
        timer.timeout.connect(lambda: self._fire(timer))
        self._timers[id(timer)] = (timer, call)
        timer.start()
        return call

    def cancel_all(self) -> None:
        for timer, call in list(self._timers.values()):
            call.cancel()
            timer.stop()
            timer.deleteLater()
        self._timers.clear()

    def pending_count(self) -> int:
        return sum(1 for _, call in self._timers.values() if call.pending)

    def _fire(self, timer: QTimer) -> None:
        entry = self._timers.pop(id(timer), None)
        timer.deleteLater()
        if entry is not None:
            entry[1].run()

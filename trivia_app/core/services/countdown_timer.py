"""Cancellable countdown emitting periodic ticks and a single expiry."""

from __future__ import annotations

import logging

from PySide6.QtCore import QObject, Signal

from trivia_app.constants.game_constants import PROGRESS_SCALE
from trivia_app.core.models import TimerState
from trivia_app.core.services.scheduler import ScheduledCall, Scheduler

logger = logging.getLogger(__name__)


class _CancellationToken:
    __slots__ = ("cancelled",)

    def __init__(self) -> None:
        self.cancelled = False


class CountdownTimer(QObject):
    """Counts down from a duration in fixed tick intervals.

    ``ticked`` carries the remaining milliseconds: once immediately on start,
    then at every tick boundary while time remains. ``expired`` fires exactly
    once when the remaining time reaches zero, after which the timer is inert.
    Every scheduled tick holds the token of the run that created it, so a tick
    that was already queued when ``cancel()`` ran drops itself.
    """

    ticked = Signal(int)
    expired = Signal()

    def __init__(self, scheduler: Scheduler, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._scheduler = scheduler
        self._token: _CancellationToken | None = None
        self._pending: ScheduledCall | None = None
        self._total_ms: int = 0
        self._remaining_ms: int = 0
        self._tick_interval_ms: int = 0
        self._started: bool = False

    def start(self, duration_ms: int, tick_interval_ms: int) -> None:
        if duration_ms <= 0 or tick_interval_ms <= 0:
            raise ValueError("Duration and tick interval must be positive.")
        if self._started:
            raise RuntimeError("CountdownTimer instances cannot be restarted.")
        self._started = True
        self._total_ms = duration_ms
        self._remaining_ms = duration_ms
        self._tick_interval_ms = tick_interval_ms
        token = _CancellationToken()
        self._token = token
        logger.debug("Countdown started: %d ms, tick every %d ms", duration_ms, tick_interval_ms)
        self.ticked.emit(self._remaining_ms)
        if not token.cancelled:
            self._schedule_tick(token)

    def cancel(self) -> None:
        if self._token is None or self._token.cancelled:
            return
        self._token.cancelled = True
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None
        logger.debug("Countdown cancelled with %d ms remaining", self._remaining_ms)

    @property
    def is_running(self) -> bool:
        return self._token is not None and not self._token.cancelled

    @property
    def total_duration_ms(self) -> int:
        return self._total_ms

    @property
    def remaining_ms(self) -> int:
        return self._remaining_ms

    @property
    def state(self) -> TimerState:
        return TimerState(
            total_duration_ms=self._total_ms,
            remaining_ms=self._remaining_ms,
            running=self.is_running,
        )

    def progress_remaining(self) -> int:
        """Remaining time on the 0..PROGRESS_SCALE scale, rounded down."""
        if self._total_ms <= 0:
            return 0
        return self._remaining_ms * PROGRESS_SCALE // self._total_ms

    def _schedule_tick(self, token: _CancellationToken) -> None:
        delay = min(self._tick_interval_ms, self._remaining_ms)
        self._pending = self._scheduler.call_later(delay, lambda: self._handle_tick(token, delay))

    def _handle_tick(self, token: _CancellationToken, elapsed_ms: int) -> None:
        if token.cancelled or token is not self._token:
            logger.debug("Dropped tick from a cancelled countdown")
            return
        self._pending = None
        self._remaining_ms = max(0, self._remaining_ms - elapsed_ms)
        if self._remaining_ms == 0:
            # Inert from here on; cancel() becomes a no-op.
            token.cancelled = True
            self.expired.emit()
            return
        self.ticked.emit(self._remaining_ms)
        if not token.cancelled:
            self._schedule_tick(token)

"""
Rest timer between sets.

Remaining time is never counted down tick by tick. While running, the timer
stores the instant the rest period ends and every read derives
``remaining = target_end - now`` from the clock. Missed ticks or a process
that was suspended in the background for minutes therefore cannot make the
countdown drift. Any read past ``target_end`` (state, remaining, an
adjustment) expires the timer, so the periodic tick only refreshes a display.

While the app is backgrounded the process cannot be trusted to run at all,
so the timer hands completion over to a deferred notification scheduled for
``target_end`` and takes it back on return to the foreground.
"""
from __future__ import annotations

import logging
import math
from datetime import datetime, timedelta
from enum import Enum
from typing import Callable, Optional

from ironnotes.utils.clock import utcnow
from ironnotes.utils.formatting import format_clock
from ironnotes.services.notifications import Notifier
from ironnotes.services.ticker import Ticker

log = logging.getLogger(__name__)

MIN_ADJUSTED_SECONDS = 10
MAX_ADJUSTED_SECONDS = 600

NOTIFICATION_ID = "RestTimer"
NOTIFICATION_TITLE = "Rest Timer Complete"
NOTIFICATION_BODY = "Time to get back to your workout!"

class TimerState(str, Enum):
    idle = "idle"
    running = "running"
    paused = "paused"
    expired = "expired"

class RestTimer:
    def __init__(
        self,
        *,
        default_duration: int = 90,
        clock: Callable[[], datetime] = utcnow,
        notifier: Optional[Notifier] = None,
        ticker: Optional[Ticker] = None,
        on_complete: Optional[Callable[[], None]] = None,
    ):
        self.default_duration = default_duration
        self._clock = clock
        self._notifier = notifier
        self._ticker = ticker
        self._on_complete = on_complete

        self._state = TimerState.idle
        self._remaining = 0.0
        self._total = 0
        self._target_end: Optional[datetime] = None
        self._notification_scheduled = False
        self._completion_signalled = False

    # -- observable state ---------------------------------------------------

    @property
    def state(self) -> TimerState:
        if self._state is TimerState.running:
            self.refresh()
        return self._state

    @property
    def is_active(self) -> bool:
        return self.state is TimerState.running

    @property
    def total(self) -> int:
        return self._total

    @property
    def target_end(self) -> Optional[datetime]:
        return self._target_end

    @property
    def remaining(self) -> float:
        """Seconds left, read from the clock while running. Reading past the end expires the timer."""
        return self.refresh()

    @property
    def progress(self) -> float:
        if not self._total:
            return 0.0
        return min(1.0, self.remaining / self._total)

    @property
    def time_string(self) -> str:
        return format_clock(math.ceil(self.remaining))

    # -- operations ---------------------------------------------------------

    def start(self, duration: Optional[int] = None) -> None:
        duration = self.default_duration if duration is None else duration
        if duration <= 0:
            raise ValueError("rest duration must be positive")

        self._cancel_notification()
        now = self._clock()
        self._remaining = float(duration)
        self._total = duration
        self._target_end = now + timedelta(seconds=duration)
        self._completion_signalled = False
        self._state = TimerState.running
        self._start_ticking()
        log.debug("rest timer started for %ss, ends %s", duration, self._target_end.isoformat())

    def pause(self) -> None:
        if self._state is not TimerState.running or self.refresh() <= 0:
            return
        self._stop_ticking()
        self._cancel_notification()
        self._target_end = None
        self._state = TimerState.paused

    def resume(self) -> None:
        if self._state is not TimerState.paused or self._remaining <= 0:
            return
        self._target_end = self._clock() + timedelta(seconds=self._remaining)
        self._state = TimerState.running
        self._start_ticking()

    def toggle(self) -> None:
        if self.is_active:
            self.pause()
        else:
            self.resume()

    def stop(self) -> None:
        self._stop_ticking()
        self._cancel_notification()
        self._state = TimerState.idle
        self._remaining = 0.0
        self._total = 0
        self._target_end = None

    def add_time(self, seconds: int) -> None:
        self._adjust(seconds)

    def subtract_time(self, seconds: int) -> None:
        self._adjust(-seconds)

    def refresh(self) -> float:
        """Re-derive remaining time from the stored end instant, expiring if it has passed."""
        if self._state is TimerState.running and self._target_end is not None:
            self._remaining = max(0.0, (self._target_end - self._clock()).total_seconds())
            if self._remaining <= 0:
                self._expire()
        return self._remaining

    # -- app lifecycle ------------------------------------------------------

    def enter_background(self) -> None:
        if self._state is not TimerState.running:
            return
        self._stop_ticking()
        if self.refresh() <= 0:
            return
        self._schedule_notification()

    def enter_foreground(self) -> None:
        self._cancel_notification()
        if self._state is not TimerState.running:
            return
        if self.refresh() > 0:
            self._start_ticking()

    # -- internals ----------------------------------------------------------

    def _adjust(self, delta: int) -> None:
        running = self._state is TimerState.running
        # an overdue rest period completes instead of being extended
        if running and self.refresh() <= 0:
            return
        self._remaining = float(min(max(self._remaining + delta, MIN_ADJUSTED_SECONDS), MAX_ADJUSTED_SECONDS))
        self._total = max(self._total, math.ceil(self._remaining))

        if running:
            # from now, not from the old target, so repeated taps cannot drift
            self._target_end = self._clock() + timedelta(seconds=self._remaining)
            if self._notification_scheduled:
                self._schedule_notification()
        elif self._state in (TimerState.idle, TimerState.expired):
            self._completion_signalled = False
            self._state = TimerState.paused

    def _expire(self) -> None:
        self._stop_ticking()
        self._cancel_notification()
        self._state = TimerState.expired
        self._remaining = 0.0
        self._target_end = None
        if not self._completion_signalled:
            self._completion_signalled = True
            log.info("rest timer complete")
            if self._on_complete is not None:
                self._on_complete()

    def _start_ticking(self) -> None:
        if self._ticker is not None:
            self._ticker.start(self.refresh)

    def _stop_ticking(self) -> None:
        if self._ticker is not None:
            self._ticker.stop()

    def _schedule_notification(self) -> None:
        if self._notifier is None or self._target_end is None:
            return
        self._cancel_notification()
        try:
            self._notifier.schedule(
                self._target_end, NOTIFICATION_TITLE, NOTIFICATION_BODY, identifier=NOTIFICATION_ID,
            )
        except Exception as exc:
            log.warning("could not schedule rest notification: %s", exc)
            return
        self._notification_scheduled = True

    def _cancel_notification(self) -> None:
        if not self._notification_scheduled or self._notifier is None:
            return
        self._notification_scheduled = False
        try:
            self._notifier.cancel_all()
        except Exception as exc:
            log.warning("could not cancel rest notification: %s", exc)

import asyncio
import logging
from datetime import timedelta

import pytest

from ironnotes.exceptions import NotificationError
from ironnotes.services.notifications import InMemoryNotifier
from ironnotes.services.rest_timer import (
    NOTIFICATION_ID,
    NOTIFICATION_TITLE,
    RestTimer,
    TimerState,
)
from ironnotes.services.ticker import AsyncioTicker


class RecordingTicker:
    def __init__(self):
        self.callback = None
        self.starts = 0
        self.stops = 0

    def start(self, callback):
        self.callback = callback
        self.starts += 1

    def stop(self):
        self.callback = None
        self.stops += 1


class BrokenNotifier(InMemoryNotifier):
    def schedule(self, fire_at, title, body, *, identifier):
        raise NotificationError("notifications not permitted")


class UncancellableNotifier(InMemoryNotifier):
    def cancel_all(self):
        raise NotificationError("notification centre unavailable")


# --- wall clock, not ticks ---
def test_background_thirty_seconds_leaves_sixty(timer, clock, notifier):
    timer.start(90)
    timer.enter_background()
    clock.advance(30)
    timer.enter_foreground()
    assert timer.remaining == pytest.approx(60)
    assert timer.state is TimerState.running
    assert notifier.pending == {}

def test_remaining_tracks_clock_without_any_tick(timer, clock):
    timer.start(90)
    clock.advance(45)
    assert timer.refresh() == pytest.approx(45)
    assert timer.time_string == "00:45"

def test_start_uses_default_duration(timer):
    timer.start()
    assert timer.total == 90
    assert timer.remaining == pytest.approx(90)
    assert timer.time_string == "01:30"

def test_start_rejects_non_positive(timer):
    with pytest.raises(ValueError):
        timer.start(0)


# --- pause / resume ---
def test_pause_freezes_remaining(timer, clock):
    timer.start(90)
    clock.advance(20)
    timer.pause()
    assert timer.state is TimerState.paused
    clock.advance(100)
    assert timer.remaining == pytest.approx(70)

    timer.resume()
    clock.advance(10)
    assert timer.remaining == pytest.approx(60)
    assert timer.is_active

def test_toggle_flips_between_running_and_paused(timer, clock):
    timer.start(60)
    timer.toggle()
    assert timer.state is TimerState.paused
    timer.toggle()
    assert timer.state is TimerState.running

def test_resume_with_nothing_left_is_noop(timer, clock):
    timer.start(30)
    clock.advance(31)
    timer.refresh()
    assert timer.state is TimerState.expired
    timer.resume()
    assert timer.state is TimerState.expired
    assert timer.remaining == 0

def test_resume_when_idle_is_noop(timer):
    timer.resume()
    assert timer.state is TimerState.idle


# --- adjusting ---
def test_add_time_caps_at_600(timer):
    timer.start(90)
    timer.add_time(1000)
    assert timer.remaining == pytest.approx(600)
    assert timer.total == 600

def test_subtract_time_floors_at_10(timer):
    timer.start(90)
    timer.subtract_time(1000)
    assert timer.remaining == pytest.approx(10)
    # total never shrinks
    assert timer.total == 90

def test_subtract_from_idle_also_floors(timer):
    timer.subtract_time(1000)
    assert timer.remaining == pytest.approx(10)
    assert timer.state is TimerState.paused

def test_add_time_recomputes_end_from_now(timer, clock):
    timer.start(60)
    clock.advance(20)
    timer.add_time(30)
    assert timer.remaining == pytest.approx(70)
    assert timer.target_end == clock.now + timedelta(seconds=70)
    assert timer.total == 70

def test_adjust_while_paused_stays_paused(timer, clock):
    timer.start(60)
    clock.advance(10)
    timer.pause()
    timer.add_time(15)
    assert timer.state is TimerState.paused
    assert timer.remaining == pytest.approx(65)


# --- expiry ---
def test_completion_signal_fires_once(clock):
    done = []
    t = RestTimer(clock=clock, on_complete=lambda: done.append(True))
    t.start(10)
    clock.advance(12)
    t.refresh()
    t.refresh()
    t.enter_foreground()
    assert t.state is TimerState.expired
    assert done == [True]

def test_expiry_while_backgrounded_detected_on_foreground(timer, clock, notifier):
    timer.start(60)
    timer.enter_background()
    assert list(notifier.pending) == [NOTIFICATION_ID]
    clock.advance(90)
    timer.enter_foreground()
    assert timer.state is TimerState.expired
    assert timer.remaining == 0
    assert notifier.pending == {}

def test_reading_past_the_end_expires_and_signals_once(clock):
    done = []
    t = RestTimer(clock=clock, on_complete=lambda: done.append(True))
    t.start(10)
    clock.advance(20)
    assert t.remaining == 0
    assert t.state is TimerState.expired
    assert not t.is_active
    assert done == [True]

def test_state_query_alone_detects_expiry(clock):
    done = []
    t = RestTimer(clock=clock, on_complete=lambda: done.append(True))
    t.start(10)
    clock.advance(10)
    assert t.state is TimerState.expired
    assert done == [True]

def test_adjusting_an_overdue_timer_completes_it(clock, notifier):
    done = []
    t = RestTimer(clock=clock, notifier=notifier, on_complete=lambda: done.append(True))
    t.start(10)
    t.enter_background()
    clock.advance(20)
    t.add_time(30)
    assert done == [True]
    assert t.state is TimerState.expired
    assert t.target_end is None
    assert notifier.pending == {}

def test_progress(timer, clock):
    timer.start(100)
    clock.advance(25)
    assert timer.progress == pytest.approx(0.75)


# --- notifications ---
def test_background_schedules_one_notification_at_target(timer, clock, notifier):
    timer.start(90)
    clock.advance(5)
    timer.enter_background()
    timer.enter_background()
    assert len(notifier.pending) == 1
    pending = notifier.pending[NOTIFICATION_ID]
    assert pending.title == NOTIFICATION_TITLE
    assert pending.fire_at == timer.target_end

def test_background_when_paused_schedules_nothing(timer, notifier):
    timer.start(90)
    timer.pause()
    timer.enter_background()
    assert notifier.pending == {}

def test_stop_cancels_pending_notification(timer, notifier):
    timer.start(90)
    timer.enter_background()
    timer.stop()
    assert notifier.pending == {}
    assert timer.state is TimerState.idle
    assert timer.remaining == 0

def test_schedule_failure_is_logged_not_raised(clock, caplog):
    t = RestTimer(clock=clock, notifier=BrokenNotifier())
    t.start(90)
    with caplog.at_level(logging.WARNING, logger="ironnotes.services.rest_timer"):
        t.enter_background()
    assert "could not schedule" in caplog.text
    clock.advance(30)
    t.enter_foreground()
    assert t.remaining == pytest.approx(60)

def test_adjust_while_backgrounded_replaces_notification(timer, clock, notifier):
    timer.start(90)
    timer.enter_background()
    clock.advance(30)
    timer.add_time(30)
    assert list(notifier.pending) == [NOTIFICATION_ID]
    assert notifier.pending[NOTIFICATION_ID].fire_at == clock.now + timedelta(seconds=90)

    timer.subtract_time(60)
    assert len(notifier.pending) == 1
    assert notifier.pending[NOTIFICATION_ID].fire_at == timer.target_end == clock.now + timedelta(seconds=30)

def test_pending_notification_due_at_target(timer, clock, notifier):
    timer.start(60)
    timer.enter_background()
    clock.advance(59)
    assert notifier.due(clock.now) == []
    clock.advance(1)
    due = notifier.due(clock.now)
    assert [n.identifier for n in due] == [NOTIFICATION_ID]
    assert due[0].fire_at == clock.now

def test_cancel_failure_is_logged_not_raised(clock, caplog):
    t = RestTimer(clock=clock, notifier=UncancellableNotifier())
    t.start(90)
    t.enter_background()
    with caplog.at_level(logging.WARNING, logger="ironnotes.services.rest_timer"):
        t.stop()
    assert "could not cancel" in caplog.text
    assert t.state is TimerState.idle


# --- ticking ---
def test_ticker_started_and_stopped_with_state(clock):
    ticker = RecordingTicker()
    t = RestTimer(clock=clock, ticker=ticker)
    t.start(30)
    assert ticker.callback is not None
    t.pause()
    assert ticker.callback is None
    t.resume()
    t.enter_background()
    assert ticker.callback is None
    t.enter_foreground()
    assert ticker.callback is not None

def test_tick_callback_expires_timer(clock):
    ticker = RecordingTicker()
    t = RestTimer(clock=clock, ticker=ticker)
    t.start(10)
    clock.advance(10)
    ticker.callback()
    assert t.state is TimerState.expired
    assert ticker.callback is None

def test_asyncio_ticker_drives_refresh(clock):
    async def scenario():
        ticker = AsyncioTicker(interval=0.01)
        t = RestTimer(clock=clock, ticker=ticker)
        t.start(10)
        clock.advance(11)
        await asyncio.sleep(0.1)
        return t, ticker

    t, ticker = asyncio.run(scenario())
    assert t.state is TimerState.expired
    assert not ticker.running

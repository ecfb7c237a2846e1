"""
Shared fixtures: an in-memory SQLite database per test and a clock the
tests move by hand, so timer and session durations are exact.
"""
from datetime import datetime, timedelta, timezone

import pytest

from ironnotes import models  # noqa: F401  # registers tables on Base.metadata
from ironnotes.db import Base, make_engine, make_session_factory, session_scope
from ironnotes.services.notifications import InMemoryNotifier
from ironnotes.services.rest_timer import RestTimer
from ironnotes.services.workout_log import WorkoutLog
from ironnotes.settings import Settings


class FakeClock:
    def __init__(self, start=datetime(2026, 3, 2, 18, 0, tzinfo=timezone.utc)):
        self.now = start

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += timedelta(seconds=seconds)


@pytest.fixture
def settings():
    return Settings(DB_PATH=":memory:", _env_file=None)


@pytest.fixture
def engine(settings):
    eng = make_engine(settings)
    Base.metadata.create_all(eng)
    yield eng
    eng.dispose()


@pytest.fixture
def db(engine):
    with session_scope(make_session_factory(engine)) as session:
        yield session


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def notifier():
    return InMemoryNotifier()


@pytest.fixture
def timer(clock, notifier):
    return RestTimer(default_duration=90, clock=clock, notifier=notifier)


@pytest.fixture
def workout(db, timer, clock):
    return WorkoutLog(db, timer=timer, clock=clock)

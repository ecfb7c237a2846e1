# ironnotes/context.py
import asyncio
import logging
from datetime import datetime
from dataclasses import dataclass, field
from typing import Callable, Optional

from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from ironnotes.db import Base, make_engine, make_session_factory
from ironnotes.services.notifications import LoggingNotifier, Notifier
from ironnotes.services.rest_timer import RestTimer
from ironnotes.services.ticker import AsyncioTicker, Ticker
from ironnotes.services.workout_log import WorkoutLog
from ironnotes.settings import Settings, get_settings
from ironnotes.utils.clock import utcnow

log = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)

@dataclass
class AppContext:
    """Everything a front end needs, passed around explicitly instead of held in globals."""
    settings: Settings
    engine: Engine
    session_factory: sessionmaker[Session]
    timer: RestTimer
    notifier: Optional[Notifier] = None
    ticker: Optional[Ticker] = None
    clock: Callable[[], datetime] = utcnow
    _open: list = field(default_factory=list, repr=False)

    def workout_log(self, db: Optional[Session] = None) -> WorkoutLog:
        if db is None:
            db = self.session_factory()
            self._open.append(db)
        return WorkoutLog(db, timer=self.timer, preferred_unit=self.settings.PREFERRED_UNIT, clock=self.clock)

    def close(self) -> None:
        self.timer.stop()
        while self._open:
            self._open.pop().close()
        self.engine.dispose()

def _default_ticker(settings: Settings, loop: Optional[asyncio.AbstractEventLoop]) -> Optional[Ticker]:
    """Refresh the timer on the caller's event loop; without one, reads alone drive expiry."""
    if loop is None:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            log.debug("no running event loop, rest timer will not tick")
            return None
    return AsyncioTicker(settings.TIMER_TICK_INTERVAL, loop=loop)

def build_context(
    settings: Optional[Settings] = None,
    *,
    notifier: Optional[Notifier] = None,
    ticker: Optional[Ticker] = None,
    on_timer_complete: Optional[Callable[[], None]] = None,
    loop: Optional[asyncio.AbstractEventLoop] = None,
    clock: Callable[[], datetime] = utcnow,
    create_tables: bool = True,
) -> AppContext:
    settings = settings or get_settings()
    configure_logging(settings.LOG_LEVEL)

    engine = make_engine(settings)
    if create_tables:
        Base.metadata.create_all(engine)

    notifier = notifier if notifier is not None else LoggingNotifier()
    if ticker is None:
        ticker = _default_ticker(settings, loop)
    timer = RestTimer(
        default_duration=settings.REST_TIMER_DURATION,
        notifier=notifier,
        ticker=ticker,
        clock=clock,
        on_complete=on_timer_complete,
    )
    log.info("env=%s db=%s rest=%ss unit=%s",
             settings.ENV, settings.DATABASE_URL, settings.REST_TIMER_DURATION, settings.PREFERRED_UNIT)
    return AppContext(
        settings=settings,
        engine=engine,
        session_factory=make_session_factory(engine),
        timer=timer,
        notifier=notifier,
        ticker=ticker,
        clock=clock,
    )

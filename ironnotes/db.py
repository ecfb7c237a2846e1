from contextlib import contextmanager
from datetime import timezone

from sqlalchemy import create_engine, event, DateTime
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, DeclarativeBase, Session
from sqlalchemy.pool import StaticPool
from sqlalchemy.types import TypeDecorator

from .settings import Settings
from .utils.clock import ensure_aware

class UTCDateTime(TypeDecorator):
    """DateTime that always comes back tz-aware (SQLite stores naive values)."""
    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is not None and value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value

    def process_result_value(self, value, dialect):
        return ensure_aware(value) if value is not None else None

# Define the base class that all models should inherit from
class Base(DeclarativeBase):
    pass

def make_engine(settings: Settings) -> Engine:
    url = settings.DATABASE_URL
    kwargs = {"echo": settings.SQL_ECHO}
    if url.endswith(":memory:"):
        # one shared connection, otherwise every checkout sees an empty database
        kwargs.update(connect_args={"check_same_thread": False}, poolclass=StaticPool)
    engine = create_engine(url, **kwargs)

    @event.listens_for(engine, "connect")
    def _enable_foreign_keys(dbapi_conn, _record):
        # SQLite ignores ON DELETE CASCADE unless asked
        cur = dbapi_conn.cursor()
        cur.execute("PRAGMA foreign_keys=ON")
        cur.close()

    return engine

# Session factory
def make_session_factory(engine: Engine) -> sessionmaker[Session]:
    return sessionmaker(bind=engine, autocommit=False, autoflush=False, expire_on_commit=False)

@contextmanager
def session_scope(factory: sessionmaker[Session]):
    db = factory()
    try:
        yield db
    finally:
        db.close()

from logging.config import fileConfig
from alembic import context
from sqlalchemy import engine_from_config, pool
import os

from ironnotes.db import Base
from ironnotes import models  # noqa: F401  # registers the tables on Base.metadata
from ironnotes.settings import get_settings

config = context.config
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

def get_url():
    # explicit override wins, otherwise the same SQLite file the app uses
    return os.getenv("DATABASE_URL") or get_settings().DATABASE_URL

target_metadata = Base.metadata

def run_migrations_offline():
    context.configure(url=get_url(), target_metadata=target_metadata, literal_binds=True,
                      dialect_opts={"paramstyle": "named"}, render_as_batch=True)
    with context.begin_transaction():
        context.run_migrations()

def run_migrations_online():
    connectable = engine_from_config({"sqlalchemy.url": get_url()}, prefix="sqlalchemy.", poolclass=pool.NullPool)
    with connectable.connect() as connection:
        # SQLite cannot ALTER most things in place
        context.configure(connection=connection, target_metadata=target_metadata, render_as_batch=True)
        with context.begin_transaction():
            context.run_migrations()

if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()

import os
from logging.config import fileConfig

from sqlalchemy import create_engine
from sqlalchemy import pool

from alembic import context

# this is the Alembic Config object, which provides
# access to the values within the .ini file in use.
config = context.config

# Interpret the config file for Python logging. Skipped when the installer
# hands over its own connection so the application's logging stays intact.
if config.config_file_name is not None and "connection" not in config.attributes:
    fileConfig(config.config_file_name, disable_existing_loggers=False)

from exhibit.db.models import Base
target_metadata = Base.metadata


def _database_url() -> str:
    url = os.getenv("EXHIBIT_TEST_DB") or os.getenv("DATABASE_URL")
    if url:
        return url
    configured = config.get_main_option("sqlalchemy.url")
    if configured:
        return configured
    from exhibit.config import connection_settings, get_config
    return connection_settings(get_config()).to_url().render_as_string(hide_password=False)


def _configure(**kwargs) -> None:
    # SQLite cannot ALTER constraints in place; batch mode recreates tables.
    context.configure(
        target_metadata=target_metadata,
        render_as_batch=True,
        **kwargs,
    )


def run_migrations_offline() -> None:
    """Run migrations in 'offline' mode, emitting SQL to the script output."""
    _configure(
        url=_database_url(),
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    """Run migrations in 'online' mode.

    The installer passes an open connection through
    ``config.attributes["connection"]``; otherwise an engine is created
    from the configured URL.
    """
    connection = config.attributes.get("connection")
    if connection is not None:
        _configure(connection=connection)
        with context.begin_transaction():
            context.run_migrations()
        return

    connectable = create_engine(_database_url(), poolclass=pool.NullPool)
    with connectable.connect() as connection:
        _configure(connection=connection)

        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()

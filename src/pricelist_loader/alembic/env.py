import logging
from logging.config import fileConfig

from alembic import context
from sqlalchemy import engine_from_config, pool
from sqlmodel import SQLModel

from pricelist_loader.alembic_helpers import VERSION_TABLE
from pricelist_loader.tables import tables  # noqa: F401

config = context.config

# configure logging from alembic.ini unless the CLI already did
logging_forced = config.attributes.get("force_logging", False)
logging_inited = bool(logging.getLogger("pricelist_loader").handlers)
if (logging_forced or not logging_inited) and config.config_file_name is not None:
    fileConfig(config.config_file_name, disable_existing_loggers=False)

target_metadata = SQLModel.metadata


def run_migrations(**kwargs) -> None:
    context.configure(
        target_metadata=target_metadata,
        version_table=VERSION_TABLE,
        render_as_batch=True,
        **kwargs,
    )
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_offline() -> None:
    """Emit the SQL statements to the script output without a DBAPI connection."""
    connection = config.attributes.get("connection", None)
    if connection is not None:
        url = connection.engine.url
    else:
        url = config.get_main_option("sqlalchemy.url")
    run_migrations(
        url=url, literal_binds=True, dialect_opts={"paramstyle": "named"}
    )


def run_migrations_online() -> None:
    """Run the migrations on the connection passed by the CLI, or a new one."""
    connection = config.attributes.get("connection", None)
    if connection is not None:
        run_migrations(connection=connection)
        return
    engine = engine_from_config(
        config.get_section(config.config_ini_section, {}),
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )
    with engine.connect() as connection:
        run_migrations(connection=connection)


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()

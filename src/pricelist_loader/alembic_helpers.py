"""Run the bundled Alembic migrations on an existing database connection."""

from pathlib import Path
from typing import Optional

from alembic.config import Config
from alembic.runtime.migration import MigrationContext
from sqlalchemy.engine import Connection

PACKAGE_DIR = Path(__file__).parent

VERSION_TABLE = "zzz_alembic_version"
"""Table storing the current revision, listed after the data tables."""


def alembic_cfg(connection: Connection, force_logging: bool = True) -> Config:
    """Alembic config pointing to the migration scripts shipped with the package.

    Args:
        connection: Database connection to run the migrations on.
        force_logging: Configure logging from `alembic.ini` even if the
            `pricelist_loader` logger already has handlers.
    """
    cfg = Config(str(PACKAGE_DIR / "alembic.ini"))
    cfg.set_main_option("script_location", str(PACKAGE_DIR / "alembic"))
    cfg.attributes.update(connection=connection, force_logging=force_logging)
    return cfg


def get_revision(
    connection: Connection, version_table: str = VERSION_TABLE
) -> Optional[str]:
    """Current revision of the database, or `None` if not migrated yet."""
    context = MigrationContext.configure(
        connection, opts={"version_table": version_table}
    )
    return context.get_current_revision()

"""The AWS Price List Loader CLI functions.

Check `pricelist-loader --help` for more details."""

import logging
from contextlib import contextmanager
from datetime import datetime, timedelta
from enum import Enum
from pathlib import Path
from types import SimpleNamespace
from typing import Iterator, List, Optional

import typer
from alembic import command
from cachier import set_global_params
from rich.console import Console
from rich.live import Live
from rich.table import Table
from rich.text import Text
from sqlalchemy import create_mock_engine
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import create_engine
from typing_extensions import Annotated

from .alembic_helpers import alembic_cfg
from .config import DEFAULT_BASE_URL, DEFAULT_CONNECTION_STRING, Settings
from .exceptions import LoaderError
from .fetcher import Fetcher
from .logger import PlRichHandler, ProgressPanel, logger
from .pipeline import Pipeline
from .store import Store
from .table_fields import ON_DEMAND, DecodeErrorPolicy
from .tables import tables

cli = typer.Typer()

engine_to_dialect = {
    "postgresql": "postgresql+psycopg2://",
    "mysql": "mysql+pymysql://",
    "sqlite": "sqlite://",
    "oracle": "oracle+cx_oracle://",
    "sqlserver": "mssql+pyodbc://",
}
Engines = Enum("ENGINES", {k: k for k in engine_to_dialect.keys()})

# TODO use logging.getLevelNamesMapping() from Python 3.11
log_levels = list(logging._nameToLevel.keys())
LogLevels = Enum("LOGLEVELS", {k: k for k in log_levels})


alembic_app = typer.Typer()
cli.add_typer(
    alembic_app, name="schemas", help="Database migration utilities using Alembic."
)

options = SimpleNamespace(
    connection_string=Annotated[
        str,
        typer.Option(
            help="Database URL with SQLAlchemy dialect.",
            envvar="PRICELIST_LOADER_DB",
        ),
    ],
    base_url=Annotated[
        str,
        typer.Option(
            help="Base URL of the AWS Price List API.",
            envvar="PRICELIST_LOADER_BASE_URL",
        ),
    ],
    service=Annotated[
        str,
        typer.Option(help="Service code to load the price lists of."),
    ],
    timeout=Annotated[
        float,
        typer.Option(help="Timeout (seconds) of the HTTP requests."),
    ],
    revision=Annotated[
        str,
        typer.Option(
            help="Target revision passed to Alembic. Use 'heads' to get to the most recent version."
        ),
    ],
    sql=Annotated[
        bool,
        typer.Option(help="Dry-run, printing the SQL commands instead of running."),
    ],
)


def _run_alembic(connection_string: str, cmd, *args) -> None:
    engine = create_engine(connection_string)
    with engine.begin() as connection:
        cmd(alembic_cfg(connection), *args)


@contextmanager
def rich_logging(log_level: str) -> Iterator[PlRichHandler]:
    """Log to the console with rich while running the block."""
    channel = PlRichHandler()
    formatter = logging.Formatter("%(message)s")
    channel.setFormatter(formatter)
    logger.setLevel(log_level)
    logger.addHandler(channel)
    try:
        yield channel
    finally:
        logger.removeHandler(channel)


@alembic_app.command()
def create(
    connection_string: Annotated[
        Optional[str], typer.Option(help="Database URL with SQLAlchemy dialect.")
    ] = None,
    dialect: Annotated[
        Optional[Engines],
        typer.Option(
            help="SQLAlchemy dialect to use for generating CREATE TABLE statements."
        ),
    ] = None,
):
    """
    Print the database schema in a SQL dialect.

    Either `connection_string` or `dialect` is to be provided to decide
    what SQL dialect to use to generate the CREATE TABLE (and related)
    SQL statements.
    """
    if connection_string is None and dialect is None:
        print("Either connection_string or dialect parameters needs to be provided!")
        raise typer.Exit(code=1)
    if dialect:
        url = engine_to_dialect[dialect.value]
    else:
        url = connection_string

    def metadata_dump(sql, *_args, **_kwargs):
        typer.echo(str(sql.compile(dialect=engine.dialect)) + ";")

    engine = create_mock_engine(url, metadata_dump)
    for table in tables:
        table.__table__.create(engine)


@alembic_app.command()
def current(
    connection_string: options.connection_string = DEFAULT_CONNECTION_STRING,
):
    """
    Show current database revision.
    """
    _run_alembic(connection_string, command.current)


@alembic_app.command()
def upgrade(
    connection_string: options.connection_string = DEFAULT_CONNECTION_STRING,
    revision: options.revision = "heads",
    sql: options.sql = False,
):
    """
    Upgrade the database schema to a given (default: most recent) revision.
    """
    _run_alembic(connection_string, command.upgrade, revision, sql)


@alembic_app.command()
def downgrade(
    connection_string: options.connection_string = DEFAULT_CONNECTION_STRING,
    revision: options.revision = "-1",
    sql: options.sql = False,
):
    """
    Downgrade the database schema to a given (default: previous) revision.
    """
    _run_alembic(connection_string, command.downgrade, revision, sql)


@alembic_app.command()
def stamp(
    connection_string: options.connection_string = DEFAULT_CONNECTION_STRING,
    revision: options.revision = "heads",
    sql: options.sql = False,
):
    """
    Set the migration revision mark in the database to a specified revision. Set to "heads" if the database schema is up-to-date.
    """
    _run_alembic(connection_string, command.stamp, revision, sql)


@cli.command()
def regions(
    base_url: options.base_url = DEFAULT_BASE_URL,
    service: options.service = "AmazonEC2",
    timeout: options.timeout = 300,
):
    """List the regions and their price list documents found in the region index."""
    settings = Settings(base_url=base_url, service_name=service, timeout=timeout)
    pipeline = Pipeline(settings, store=None, fetcher=Fetcher(timeout=timeout))
    try:
        entries = pipeline.list_regions()
    except LoaderError as exc:
        print(exc)
        raise typer.Exit(code=1)
    table = Table(title=f"{service} regions")
    table.add_column("Region", no_wrap=True)
    table.add_column("Document URL")
    for entry in entries:
        table.add_row(entry.region_code, settings.document_url(entry.current_version_url))
    Console().print(table)


@cli.command()
def pull(
    connection_string: options.connection_string = DEFAULT_CONNECTION_STRING,
    base_url: options.base_url = DEFAULT_BASE_URL,
    provider: Annotated[
        str, typer.Option(help="Name of the provider record to link the service to.")
    ] = "AWS",
    service: options.service = "AmazonEC2",
    staging_dir: Annotated[
        Path,
        typer.Option(
            help="Directory to download the region documents into.",
            envvar="PRICELIST_LOADER_STAGING_DIR",
        ),
    ] = Path("price-list"),
    term_class: Annotated[
        List[str],
        typer.Option(help="Term-classes to load. Can be specified multiple times."),
    ] = [ON_DEMAND],
    include_region: Annotated[
        List[str],
        typer.Option(help="Regions to load. Can be specified multiple times."),
    ] = [],
    exclude_region: Annotated[
        List[str],
        typer.Option(help="Regions NOT to load. Can be specified multiple times."),
    ] = [],
    on_decode_error: Annotated[
        DecodeErrorPolicy,
        typer.Option(help="Stop the run or skip the region on unreadable documents."),
    ] = DecodeErrorPolicy.ABORT,
    timeout: options.timeout = 300,
    log_level: Annotated[
        LogLevels, typer.Option(help="Log level threshold.")
    ] = LogLevels.INFO.value,  # TODO drop .value after updating Enum to StrEnum in Python3.11
    cache: Annotated[
        bool,
        typer.Option(help="Enable or disable caching of the region index on disk."),
    ] = False,
    cache_ttl: Annotated[
        int,
        typer.Option(help="Cache Time-to-live in minutes. Defaults to one day."),
    ] = 60 * 24,  # 1 day
    migrate: Annotated[
        bool,
        typer.Option(
            help="Run the database migrations, or just create the missing tables."
        ),
    ] = True,
):
    """
    Pull the price lists of all regions of a service and store in a database.

    The region index is optionally cached as Pickle objects in `~/.cachier`.
    """
    # enable caching
    if cache:
        set_global_params(
            caching_enabled=True,
            stale_after=timedelta(minutes=cache_ttl),
        )

    settings = Settings(
        connection_string=connection_string,
        base_url=base_url,
        provider_name=provider,
        service_name=service,
        staging_dir=staging_dir,
        term_classes=term_class,
        include_regions=include_region,
        exclude_regions=exclude_region,
        on_decode_error=on_decode_error,
        timeout=timeout,
    )

    pbars = ProgressPanel()
    with rich_logging(log_level.value), Live(pbars.panels):
        # show CLI arguments in the Metadata panel
        pbars.metadata.append(Text("Data source: ", style="bold"))
        pbars.metadata.append(Text(settings.index_url + "\n"))
        pbars.metadata.append(Text("Term-classes: ", style="bold"))
        pbars.metadata.append(Text(", ".join(settings.term_classes) + " "))
        pbars.metadata.append(Text("Connection type: ", style="bold"))
        pbars.metadata.append(Text(connection_string.split(":")[0]))
        pbars.metadata.append(Text(" Cache: ", style="bold"))
        if cache:
            pbars.metadata.append(Text("Enabled (" + str(cache_ttl) + "m)"))
        else:
            pbars.metadata.append(Text("Disabled"))
        pbars.metadata.append(Text(" Time: ", style="bold"))
        pbars.metadata.append(Text(str(datetime.now())))

        try:
            with Store(connection_string) as store:
                store.init_schema(migrate=migrate)
                Pipeline(settings, store, progress_panel=pbars).run()
        except (LoaderError, SQLAlchemyError) as exc:
            logger.critical("Stopping the run: %s", exc)
            raise typer.Exit(code=1)

        pbars.metadata.append(Text(" - " + str(datetime.now())))


if __name__ == "__main__":
    cli()

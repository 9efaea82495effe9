"""Typed, idempotent database operations used by the pipeline.

Each write runs in its own transaction: committed on success, rolled
back and raised as [StoreError][pricelist_loader.exceptions.StoreError]
on failure, so that a single bad record does not affect the others."""

from typing import Callable, Optional

from alembic import command
from pydantic import ValidationError
from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, SQLModel, create_engine, select

from .alembic_helpers import alembic_cfg
from .exceptions import StoreError
from .insert import get_or_create, upsert_item
from .tables import Provider, Region, Service, Sku, Term


class Store:
    """Database connection with the operations needed to load the price lists.

    Args:
        connection_string: Database URL with SQLAlchemy dialect.

    Examples:
        >>> with Store("sqlite://") as store:  # doctest: +SKIP
        ...     store.init_schema(migrate=False)
        ...     store.get_or_create_provider("AWS")
        1
    """

    def __init__(self, connection_string: str):
        self.connection_string = connection_string
        self.engine = create_engine(connection_string)
        self.session = Session(self.engine)

    def __enter__(self) -> "Store":
        return self

    def __exit__(self, *args):
        self.close()

    def close(self) -> None:
        self.session.close()
        self.engine.dispose()

    def init_schema(self, migrate: bool = True) -> None:
        """Make sure all tables exist.

        Args:
            migrate: Run the Alembic migrations to the most recent revision.
                When disabled, the missing tables are created directly
                from the table definitions, without revision tracking.
        """
        if migrate:
            with self.engine.begin() as connection:
                command.upgrade(alembic_cfg(connection, force_logging=False), "heads")
        else:
            SQLModel.metadata.create_all(self.engine)

    def _write(self, description: str, fn: Callable[[], int]) -> int:
        try:
            result = fn()
            self.session.commit()
        except (SQLAlchemyError, ValidationError) as exc:
            self.session.rollback()
            raise StoreError(f"Failed to write {description}: {exc}") from exc
        return result

    def _get_or_create_id(self, model, keys: dict, defaults: Optional[dict] = None):
        return get_or_create(self.session, model, keys, defaults).id

    def get_or_create_provider(self, name: str) -> int:
        """Look up or create a Provider by name, returning its identifier."""
        return self._write(
            f"provider {name}",
            lambda: self._get_or_create_id(Provider, {"name": name}),
        )

    def get_or_create_service(self, name: str, provider_id: int) -> int:
        """Look up or create a Service by name, returning its identifier."""
        return self._write(
            f"service {name}",
            lambda: self._get_or_create_id(
                Service, {"name": name}, {"provider_id": provider_id}
            ),
        )

    def get_or_create_region(self, code: str, service_id: int) -> int:
        """Look up or create a Region by code, returning its identifier."""
        return self._write(
            f"region {code}",
            lambda: self._get_or_create_id(
                Region, {"code": code}, {"service_id": service_id}
            ),
        )

    def upsert_sku(self, sku: dict) -> int:
        """Insert or update a SKU by code, returning its identifier."""
        return self._write(
            f"SKU {sku.get('code')}",
            lambda: upsert_item(self.session, Sku, sku, index_elements=["code"]),
        )

    def lookup_sku_id(self, code: str) -> Optional[int]:
        """Identifier of a SKU by code, or `None` if not found."""
        try:
            return self.session.exec(select(Sku.id).where(Sku.code == code)).first()
        except SQLAlchemyError as exc:
            self.session.rollback()
            raise StoreError(f"Failed to look up SKU {code}: {exc}") from exc

    def upsert_term(self, term: dict) -> int:
        """Insert or update a Term by SKU and offer term code, returning its identifier.

        The `created_at` timestamp and the `disabled` flag of an existing term are kept.
        """
        return self._write(
            f"term {term.get('offer_term_code')} of SKU #{term.get('sku_id')}",
            lambda: upsert_item(
                self.session,
                Term,
                term,
                index_elements=["sku_id", "offer_term_code"],
                keep=["created_at", "disabled"],
            ),
        )

    def count(self, model: SQLModel) -> int:
        """Number of rows in a table."""
        return self.session.exec(select(func.count()).select_from(model)).one()

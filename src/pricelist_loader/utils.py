from typing import Union

from sqlmodel import Session, select

from .table_bases import PlModel


def is_sqlite(session: Session) -> bool:
    """Checks if a SQLModel session is binded to a SQLite database."""
    return session.bind.dialect.name == "sqlite"


def is_postgresql(session: Session) -> bool:
    """Checks if a SQLModel session is binded to a PostgreSQL-like database.

    Dialect name is checked for PostgreSQL or CockroachDB."""
    return session.bind.dialect.name in ["postgresql", "cockroachdb"]


def get_row_by_keys(session: Session, model: PlModel, keys: dict) -> Union[PlModel, None]:
    """Get a row from a table definition by (natural or primary) keys.

    Args:
        session: Connection for database connections.
        model: A PlModel schema definition with table reference.
        keys: Dictionary of column names and values identifying the row.

    Returns:
        PlModel object read from the database, or `None` if not found.
    """
    q = select(model)
    for k, v in keys.items():
        q = q.where(getattr(model, k) == v)
    return session.exec(statement=q).first()

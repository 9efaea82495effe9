from typing import List, Optional, Sequence

from pydantic import BaseModel
from sqlalchemy.dialects.postgresql import insert as insert_postgresql
from sqlalchemy.dialects.sqlite import insert as insert_sqlite
from sqlmodel import Session, SQLModel

from .utils import get_row_by_keys, is_postgresql, is_sqlite


def can_upsert(session: Session) -> bool:
    """Checks if `INSERT ... ON CONFLICT` is supported for the engine dialect of a SQLModel session."""
    return is_sqlite(session) or is_postgresql(session)


def validate_item(model: BaseModel, item: dict) -> dict:
    """Validates an item against the [pydantic.BaseModel][] parent of a table.

    Args:
        model: An SQLModel table definition to be used for validation.
        item: Dictionary to be checked against `model`.

    Returns:
        The validated dict. Note that missing fields has been filled in
            with default values (needed for the `INSERT` statements).
    """
    # use the Pydantic data model for validation instead of the table definition
    schema = model.__validator__
    return schema.model_validate(item).model_dump()


def get_or_create(
    session: Session, model: SQLModel, keys: dict, defaults: Optional[dict] = None
) -> SQLModel:
    """Look up a row by its natural key(s), and add it when not found.

    Args:
        session: Database connection.
        model: An SQLModel table definition.
        keys: Column names and values identifying the row.
        defaults: Further columns to be set only when creating the row.

    Returns:
        The existing or the newly created (and flushed) row.
    """
    row = get_row_by_keys(session, model, keys)
    if row is None:
        row = model(**{**(defaults or {}), **keys})
        session.add(row)
        session.flush()
    return row


def upsert_item(
    session: Session,
    model: SQLModel,
    item: dict,
    index_elements: Sequence[str],
    keep: List[str] = [],
) -> int:
    """Insert an item into a table with `ON CONFLICT` update on its natural key.

    Other database engines fall back to a lookup followed by an
    update or insert of the row.

    Args:
        session: Database connection.
        model: An SQLModel table definition with a single primary key.
        item: Dict with (some of) the columns of the model, validated
            and extended with the default values before writing.
        index_elements: Column names of the unique constraint identifying the row.
        keep: Column names NOT to be overwritten when the row already exists.

    Returns:
        The primary key of the inserted or updated row.
    """
    pk = model.get_columns()["primary_keys"][0]
    values = {k: v for k, v in validate_item(model, item).items() if k != pk}
    updated = [c for c in values if c not in index_elements and c not in keep]
    if can_upsert(session):
        if is_sqlite(session):
            query = insert_sqlite(model).values(values)
        else:
            query = insert_postgresql(model).values(values)
        query = query.on_conflict_do_update(
            index_elements=[getattr(model, c) for c in index_elements],
            set_={c: query.excluded[c] for c in updated},
        ).returning(getattr(model, pk))
        return session.execute(query).scalar_one()

    row = get_row_by_keys(session, model, {c: values[c] for c in index_elements})
    if row is None:
        row = model(**values)
        session.add(row)
    else:
        for c in updated:
            setattr(row, c, values[c])
    session.flush()
    return getattr(row, pk)

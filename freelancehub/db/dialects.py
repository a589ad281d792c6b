"""Dialect-specific INSERT constructs for ON CONFLICT upserts."""

from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.orm import Session


_INSERTS = {
    "postgresql": pg_insert,
    "sqlite": sqlite_insert,
}


class UnsupportedDialectError(ValueError):
    """Database backend has no ON CONFLICT insert."""

    pass


def upsert_insert(db: Session):
    """Return the ``insert()`` that supports ``on_conflict_do_update`` on this bind."""
    dialect = db.get_bind().dialect.name
    try:
        return _INSERTS[dialect]
    except KeyError:
        raise UnsupportedDialectError(f"Upserts are not supported on {dialect}")

"""Database engine setup for the SQLite-backed key-value store.

The DB is stored at ``{root}/{dir_name}/{db_name}`` (by default
``.localstore/localstore.db``).  SQLAlchemy Core (not ORM) is used:
the store only ever reads and writes whole text blobs by key.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from sqlalchemy import create_engine, event, insert, select
from sqlalchemy.engine import Engine

from localstore.infrastructure.database.schema import id_counters, metadata

SEQUENTIAL_PREFIXES: tuple[str, ...] = ("USR-", "BOOK-", "LOAN-")


def create_db_engine(db_path: Path) -> Engine:
    """Create a SQLite engine with WAL journaling."""
    engine = create_engine(f"sqlite:///{db_path}", echo=False)

    @event.listens_for(engine, "connect")
    def _set_sqlite_pragma(dbapi_conn: Any, _: Any) -> None:
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA journal_mode=WAL")
        cursor.close()

    return engine


def init_database(
    root: Path,
    *,
    dir_name: str = ".localstore",
    db_name: str = "localstore.db",
) -> Engine:
    """Initialize the store database under *root*.

    Creates the data directory, all tables from :data:`schema.metadata`,
    and seeds ``id_counters`` for every sequential prefix.

    Idempotent — safe to call on an existing store.
    """
    data_dir = root / dir_name
    data_dir.mkdir(parents=True, exist_ok=True)

    engine = create_db_engine(data_dir / db_name)
    metadata.create_all(engine)
    _seed_counters(engine)
    return engine


def _seed_counters(engine: Engine) -> None:
    """Insert initial counter rows for each prefix if they don't exist."""
    with engine.begin() as conn:
        for prefix in SEQUENTIAL_PREFIXES:
            row = conn.execute(
                select(id_counters.c.prefix).where(id_counters.c.prefix == prefix)
            ).first()
            if row is None:
                conn.execute(insert(id_counters).values(prefix=prefix, next_value=1))

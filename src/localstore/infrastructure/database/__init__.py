"""SQLite engine, schema, and ID counters via SQLAlchemy Core."""

from localstore.infrastructure.database.counters import next_sequential_id
from localstore.infrastructure.database.engine import (
    SEQUENTIAL_PREFIXES,
    create_db_engine,
    init_database,
)
from localstore.infrastructure.database.schema import id_counters, kv_entries, metadata

__all__ = [
    "SEQUENTIAL_PREFIXES",
    "create_db_engine",
    "id_counters",
    "init_database",
    "kv_entries",
    "metadata",
    "next_sequential_id",
]

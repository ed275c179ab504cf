"""Store — a local key-value store with a record-sequence adapter on top.

The Store is the single dependency injected into every service.  It plays
the part a browser's ``localStorage`` plays for a web page: named text
blobs, read and written whole.  Two layers are exposed:

- **Key-value**: :meth:`Store.get_item`, :meth:`Store.set_item`,
  :meth:`Store.remove_item`, :meth:`Store.keys`.
- **Records**: :meth:`Store.load` / :meth:`Store.save` / :meth:`Store.clear`
  encode a sequence of flat records as JSON text under one key, and
  :meth:`Store.load_models` / :meth:`Store.save_collections` do the same for
  pydantic models.

Every public write runs inside one SQL transaction, so a write either lands
whole or not at all.  Last write wins.
"""

from __future__ import annotations

import json
from collections.abc import Iterator, Mapping, Sequence
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import UTC, datetime
from pathlib import Path
from typing import TYPE_CHECKING, Any, TypeVar

from pydantic import BaseModel, TypeAdapter
from sqlalchemy import delete, select
from sqlalchemy.dialects.sqlite import insert as sqlite_insert

from localstore.config.logging import get_logger
from localstore.infrastructure.database.counters import next_sequential_id
from localstore.infrastructure.database.engine import init_database
from localstore.infrastructure.database.schema import kv_entries

if TYPE_CHECKING:
    from sqlalchemy import Connection
    from sqlalchemy.engine import Engine

    from localstore.config.settings import LocalStoreSettings

log = get_logger(__name__)

_M = TypeVar("_M", bound=BaseModel)


def encode_records(records: Sequence[Mapping[str, Any]]) -> str:
    """Serialize a record sequence to JSON text."""
    return json.dumps([dict(r) for r in records], ensure_ascii=False)


def decode_records(raw: str | None) -> list[dict[str, Any]]:
    """Parse JSON text back into records; missing or empty text gives ``[]``."""
    if raw is None or raw == "":
        return []
    data = json.loads(raw)
    return list(data)


def _dump_models(models: Sequence[BaseModel]) -> list[dict[str, Any]]:
    return [m.model_dump(mode="json", by_alias=True) for m in models]


# ---------------------------------------------------------------------------
# StoreTransaction — yielded to callers within transaction()
# ---------------------------------------------------------------------------


@dataclass
class StoreTransaction:
    """Key-value access bound to one open SQL transaction."""

    conn: Connection

    def get_item(self, key: str) -> str | None:
        row = self.conn.execute(select(kv_entries.c.value).where(kv_entries.c.key == key)).first()
        return None if row is None else str(row.value)

    def set_item(self, key: str, value: str) -> None:
        modified = datetime.now(UTC).isoformat()
        stmt = sqlite_insert(kv_entries).values(key=key, value=value, modified=modified)
        stmt = stmt.on_conflict_do_update(
            index_elements=[kv_entries.c.key],
            set_={"value": value, "modified": modified},
        )
        self.conn.execute(stmt)

    def remove_item(self, key: str) -> bool:
        """Delete *key*. Returns True if a value was present."""
        result = self.conn.execute(delete(kv_entries).where(kv_entries.c.key == key))
        return bool(result.rowcount)

    def next_id(self, prefix: str) -> str:
        return next_sequential_id(self.conn, prefix)


# ---------------------------------------------------------------------------
# Store
# ---------------------------------------------------------------------------


class Store:
    """Repository-facing facade over the SQLite key-value database.

    Constructed once per CLI process from :class:`LocalStoreSettings` and
    shared by every service through :class:`BaseService`.
    """

    def __init__(self, settings: LocalStoreSettings) -> None:
        self._settings = settings
        self._engine: Engine = init_database(
            settings.root,
            dir_name=settings.store.dir_name,
            db_name=settings.store.db_name,
        )

    @property
    def root(self) -> Path:
        return self._settings.root

    @property
    def engine(self) -> Engine:
        """The underlying SQLAlchemy engine (for direct access when needed)."""
        return self._engine

    @property
    def settings(self) -> LocalStoreSettings:
        return self._settings

    def close(self) -> None:
        """Release pooled connections."""
        self._engine.dispose()

    @contextmanager
    def transaction(self) -> Iterator[StoreTransaction]:
        """Group several key-value operations into one atomic write.

        Usage::

            with store.transaction() as txn:
                txn.set_item("a", "...")
                txn.set_item("b", "...")
                # Both commit on success, both roll back on failure.
        """
        with self._engine.begin() as conn:
            yield StoreTransaction(conn=conn)

    # ------------------------------------------------------------------
    # Key-value layer
    # ------------------------------------------------------------------

    def get_item(self, key: str) -> str | None:
        """Return the blob stored under *key*, or None."""
        with self.transaction() as txn:
            return txn.get_item(key)

    def set_item(self, key: str, value: str) -> None:
        with self.transaction() as txn:
            txn.set_item(key, value)
        log.debug("store.set", key=key, size=len(value))

    def set_items(self, items: Mapping[str, str]) -> None:
        """Write several keys in a single transaction."""
        with self.transaction() as txn:
            for key, value in items.items():
                txn.set_item(key, value)
        log.debug("store.set_many", keys=sorted(items))

    def remove_item(self, key: str) -> bool:
        with self.transaction() as txn:
            removed = txn.remove_item(key)
        log.debug("store.remove", key=key, removed=removed)
        return removed

    def keys(self) -> list[str]:
        """All keys currently holding a value, sorted."""
        with self._engine.connect() as conn:
            rows = conn.execute(select(kv_entries.c.key).order_by(kv_entries.c.key)).fetchall()
        return [str(r.key) for r in rows]

    def next_id(self, prefix: str) -> str:
        """Claim the next sequential id for *prefix* (e.g. ``USR-0001``)."""
        with self.transaction() as txn:
            return txn.next_id(prefix)

    # ------------------------------------------------------------------
    # Record layer
    # ------------------------------------------------------------------

    def load(self, key: str) -> list[dict[str, Any]]:
        """Load the record sequence under *key*; ``[]`` when absent or empty."""
        records = decode_records(self.get_item(key))
        log.debug("store.load", key=key, count=len(records))
        return records

    def save(self, key: str, records: Sequence[Mapping[str, Any]]) -> None:
        self.set_item(key, encode_records(records))

    def clear(self, key: str) -> None:
        self.remove_item(key)

    def load_models(self, key: str, model_cls: type[_M]) -> list[_M]:
        """Load *key* and validate each record as *model_cls*."""
        adapter = TypeAdapter(list[model_cls])  # type: ignore[valid-type]
        return adapter.validate_python(self.load(key))

    def save_models(self, key: str, models: Sequence[BaseModel]) -> None:
        self.save(key, _dump_models(models))

    def save_collections(self, collections: Mapping[str, Sequence[BaseModel]]) -> None:
        """Persist several model collections atomically, one key each."""
        self.set_items({key: encode_records(_dump_models(m)) for key, m in collections.items()})

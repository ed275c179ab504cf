"""SQLAlchemy Core table definitions for the localstore database.

The store is deliberately flat: every collection lives as one JSON text
blob under a fixed key in ``kv_entries``, mirroring a browser
``localStorage``.  ``id_counters`` hands out sequential entity ids.
"""

from __future__ import annotations

from sqlalchemy import Column, Integer, MetaData, Table, Text

metadata = MetaData()

kv_entries = Table(
    "kv_entries",
    metadata,
    Column("key", Text, primary_key=True),
    Column("value", Text, nullable=False),
    Column("modified", Text, nullable=False),
)

id_counters = Table(
    "id_counters",
    metadata,
    Column("prefix", Text, primary_key=True),
    Column("next_value", Integer, nullable=False, default=1, server_default="1"),
)

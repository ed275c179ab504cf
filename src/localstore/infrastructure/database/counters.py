"""Sequential ID generation for users, books and loans.

Minimum 4 digits, grows naturally past 9999.  The caller owns the
transaction — pass a ``Connection`` obtained from ``engine.begin()``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import select, update

from localstore.infrastructure.database.engine import SEQUENTIAL_PREFIXES
from localstore.infrastructure.database.schema import id_counters

if TYPE_CHECKING:
    from sqlalchemy import Connection


def next_sequential_id(conn: Connection, prefix: str) -> str:
    """Claim the next sequential ID for *prefix*.

    Args:
        conn: Active SQLAlchemy connection (caller owns the transaction).
        prefix: One of ``"USR-"``, ``"BOOK-"`` or ``"LOAN-"``.

    Returns:
        The new ID string (e.g. ``"USR-0001"``).

    Raises:
        ValueError: If *prefix* is not a recognized sequential prefix.
    """
    if prefix not in SEQUENTIAL_PREFIXES:
        msg = (
            f"Unknown sequential id prefix: {prefix!r}. "
            f"Expected one of {sorted(SEQUENTIAL_PREFIXES)}"
        )
        raise ValueError(msg)

    row = conn.execute(select(id_counters.c.next_value).where(id_counters.c.prefix == prefix)).one()
    current_value: int = row.next_value

    conn.execute(
        update(id_counters)
        .where(id_counters.c.prefix == prefix)
        .values(next_value=current_value + 1)
    )

    return f"{prefix}{current_value:04d}"

"""Shared pydantic base for persisted records.

Records are stored as flat JSON objects with camelCase keys
(``unitPrice``, ``userId``) while Python code uses snake_case attributes.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class Record(BaseModel):
    """Base model for every record that goes through the store."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_record(self) -> dict[str, Any]:
        """Dump to a JSON-compatible dict using the persisted field names."""
        return self.model_dump(mode="json", by_alias=True)

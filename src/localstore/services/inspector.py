"""StoreInspector — read and reset raw store keys from the command line."""

from __future__ import annotations

from localstore.config.logging import get_logger
from localstore.services.base import BaseService
from localstore.services.result import ServiceResult
from localstore.services.telemetry import traced

log = get_logger(__name__)


class StoreInspector(BaseService):
    """Thin view over the key-value layer of a :class:`Store`."""

    @traced
    def keys(self) -> ServiceResult:
        keys = self._store.keys()
        return ServiceResult(ok=True, op="store_keys", data={"keys": keys, "count": len(keys)})

    @traced
    def dump(self, key: str) -> ServiceResult:
        """Decode the records under *key*; an unset key dumps as empty."""
        warnings: list[str] = []
        if self._store.get_item(key) is None:
            warnings.append(f"Key is not set: {key}")
        records = self._store.load(key)
        return ServiceResult(
            ok=True,
            op="store_dump",
            data={"key": key, "count": len(records), "records": records},
            warnings=warnings,
        )

    @traced
    def clear(self, key: str) -> ServiceResult:
        removed = self._store.remove_item(key)
        log.info("store.cleared", key=key, removed=removed)
        return ServiceResult(
            ok=True,
            op="store_clear",
            data={"key": key, "removed": removed},
            warnings=[] if removed else [f"Key is not set: {key}"],
        )

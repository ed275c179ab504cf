"""BaseService — shared foundation for localstore services.

Every service receives a :class:`Store` at construction time and reads its
configuration through ``self._store.settings``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from localstore.config.settings import LocalStoreSettings
    from localstore.infrastructure.store import Store


class BaseService:
    """Base for all service-layer classes.

    Usage::

        class CartLedger(BaseService):
            def add_item(self, product_id: int, quantity: int) -> ServiceResult:
                ...
                self._store.save_models(CART_KEY, self._lines)
    """

    def __init__(self, store: Store) -> None:
        self._store = store

    @property
    def settings(self) -> LocalStoreSettings:
        return self._store.settings

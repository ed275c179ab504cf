"""CartLedger — shopping cart over a fixed product catalog.

Pipeline per mutation: VALIDATE → APPLY → PERSIST → RESPOND.
Validation runs to completion before anything is touched, so a rejected
request leaves the cart exactly as it was.
"""

from __future__ import annotations

from collections.abc import Sequence
from decimal import Decimal
from typing import TYPE_CHECKING, Any

from localstore.config.logging import get_logger
from localstore.domain.cart import CartLine, Product, apply_discount, compute_total, stock_value
from localstore.domain.errors import ErrorCode
from localstore.services._helpers import money
from localstore.services.base import BaseService
from localstore.services.result import ServiceResult, fail
from localstore.services.telemetry import traced

if TYPE_CHECKING:
    from localstore.infrastructure.store import Store

log = get_logger(__name__)

CART_KEY = "cart"


def products_from_settings(store: Store) -> list[Product]:
    """Build the product catalog from the ``[cart]`` config section."""
    return [Product(**p.model_dump()) for p in store.settings.cart.products]


class CartLedger(BaseService):
    """Owns the cart lines; loaded once from the store at construction."""

    def __init__(self, store: Store, products: Sequence[Product] | None = None) -> None:
        super().__init__(store)
        catalog = products_from_settings(store) if products is None else list(products)
        self._products: dict[int, Product] = {p.id: p for p in catalog}
        self._lines: list[CartLine] = store.load_models(CART_KEY, CartLine)

    @property
    def products(self) -> list[Product]:
        return list(self._products.values())

    @property
    def lines(self) -> list[CartLine]:
        """A copy of the current cart lines, in insertion order."""
        return [line.model_copy() for line in self._lines]

    def total(self) -> Decimal:
        return compute_total(self._lines)

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    @traced
    def add_item(self, product_id: int, quantity: int) -> ServiceResult:
        """Add *quantity* units of a product, creating or growing its line."""
        op = "add_item"

        # ── VALIDATE ─────────────────────────────────────────
        if quantity <= 0:
            return fail(op, ErrorCode.INVALID_QUANTITY, "Quantity must be greater than zero")

        product = self._products.get(product_id)
        if product is None:
            return fail(
                op,
                ErrorCode.PRODUCT_NOT_FOUND,
                f"Product not found: {product_id}",
                product_id=product_id,
            )

        if quantity > product.stock:
            return fail(
                op,
                ErrorCode.INSUFFICIENT_STOCK,
                f"Insufficient stock. Available: {product.stock}",
                product_id=product_id,
                requested=quantity,
                available=product.stock,
            )

        line = self._find_line(product_id)
        if line is not None and line.quantity + quantity > product.stock:
            return fail(
                op,
                ErrorCode.INSUFFICIENT_STOCK,
                (
                    f"Insufficient stock. You already have {line.quantity} in the cart. "
                    f"Available: {product.stock}"
                ),
                product_id=product_id,
                requested=quantity,
                in_cart=line.quantity,
                available=product.stock,
            )

        # ── APPLY ────────────────────────────────────────────
        if line is None:
            line = CartLine(
                product_id=product.id,
                name=product.name,
                unit_price=product.unit_price,
                quantity=quantity,
            )
            self._lines.append(line)
        else:
            line.quantity += quantity

        # ── PERSIST ──────────────────────────────────────────
        self._persist()
        log.debug("cart.add", product_id=product_id, quantity=line.quantity)

        return ServiceResult(
            ok=True,
            op=op,
            data={
                "product_id": product.id,
                "name": product.name,
                "added": quantity,
                "quantity": line.quantity,
                "total": money(self.total()),
            },
        )

    @traced
    def remove_item(self, product_id: int, quantity: int) -> ServiceResult:
        """Take *quantity* units out; the line goes away when nothing is left."""
        op = "remove_item"

        if quantity <= 0:
            return fail(op, ErrorCode.INVALID_QUANTITY, "Quantity must be greater than zero")

        line = self._find_line(product_id)
        if line is None:
            return fail(
                op,
                ErrorCode.ITEM_NOT_IN_CART,
                f"Product is not in the cart: {product_id}",
                product_id=product_id,
            )

        deleted = quantity >= line.quantity
        removed = line.quantity if deleted else quantity
        if deleted:
            self._lines = [item for item in self._lines if item.product_id != product_id]
            remaining = 0
        else:
            line.quantity -= quantity
            remaining = line.quantity

        self._persist()
        log.debug("cart.remove", product_id=product_id, removed=removed, deleted=deleted)

        return ServiceResult(
            ok=True,
            op=op,
            data={
                "product_id": product_id,
                "removed": removed,
                "quantity": remaining,
                "deleted": deleted,
                "total": money(self.total()),
            },
        )

    @traced
    def clear(self) -> ServiceResult:
        """Empty the cart and drop its stored blob."""
        removed_lines = len(self._lines)
        self._lines = []
        self._store.clear(CART_KEY)
        log.debug("cart.clear", removed_lines=removed_lines)
        return ServiceResult(ok=True, op="clear_cart", data={"removed_lines": removed_lines})

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    @traced
    def summary(self) -> ServiceResult:
        """The cart lines with subtotals and the grand total."""
        items = [_line_item(line) for line in self._lines]
        return ServiceResult(
            ok=True,
            op="view_cart",
            data={
                "items": items,
                "count": len(items),
                "total": money(self.total()),
                "currency": self.settings.cart.currency,
            },
        )

    @traced
    def list_products(
        self,
        *,
        min_price: Decimal | None = None,
        discount_percent: Decimal | None = None,
    ) -> ServiceResult:
        """List the catalog, optionally filtered by price and with a discount applied.

        ``min_price`` keeps products strictly more expensive than the bound.
        ``stock_value`` always covers the listed products.
        """
        op = "list_products"
        if discount_percent is not None and not Decimal(0) <= discount_percent <= Decimal(100):
            return fail(
                op,
                ErrorCode.VALIDATION_FAILED,
                "Discount percent must be between 0 and 100",
                discount_percent=str(discount_percent),
            )

        products = self.products
        if min_price is not None:
            products = [p for p in products if p.unit_price > min_price]

        items: list[dict[str, Any]] = []
        for p in products:
            item: dict[str, Any] = {
                "id": p.id,
                "name": p.name,
                "unit_price": money(p.unit_price),
                "stock": p.stock,
            }
            if discount_percent is not None:
                item["discounted_price"] = money(apply_discount(p.unit_price, discount_percent))
            items.append(item)

        data: dict[str, Any] = {
            "items": items,
            "count": len(items),
            "stock_value": money(stock_value(products)),
            "currency": self.settings.cart.currency,
        }
        if discount_percent is not None:
            data["discount_percent"] = str(discount_percent)
            data["discounted_stock_value"] = money(
                apply_discount(stock_value(products), discount_percent)
            )
        return ServiceResult(ok=True, op=op, data=data)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _find_line(self, product_id: int) -> CartLine | None:
        return next((line for line in self._lines if line.product_id == product_id), None)

    def _persist(self) -> None:
        self._store.save_models(CART_KEY, self._lines)


def _line_item(line: CartLine) -> dict[str, Any]:
    return {
        "id": line.product_id,
        "name": line.name,
        "unit_price": money(line.unit_price),
        "quantity": line.quantity,
        "subtotal": money(line.subtotal),
    }

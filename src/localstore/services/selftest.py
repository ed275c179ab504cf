"""Cart self-test — replays a known scenario against a throwaway store.

The scenario: a single product (stock 10) is added twice, the second add
overflowing the stock, then removed.  Each step is recorded as a named
check so the CLI can show what passed.
"""

from __future__ import annotations

import tempfile
from decimal import Decimal
from pathlib import Path
from typing import TYPE_CHECKING, Any

from localstore.domain.cart import CartLine, Product, compute_total
from localstore.infrastructure.store import Store
from localstore.services.cart import CartLedger
from localstore.services.result import ServiceResult
from localstore.services.telemetry import traced

if TYPE_CHECKING:
    from localstore.config.settings import LocalStoreSettings

SELF_TEST_PRODUCT = Product(id=1, name="Notebook", unit_price=Decimal("2500.00"), stock=10)


def _quantities(ledger: CartLedger) -> dict[int, int]:
    return {line.product_id: line.quantity for line in ledger.lines}


@traced
def run_self_test(settings: LocalStoreSettings) -> ServiceResult:
    """Run the cart scenario in a temporary directory and report each check."""
    checks: list[dict[str, Any]] = []

    def check(name: str, passed: bool) -> None:
        checks.append({"name": name, "passed": passed})

    with tempfile.TemporaryDirectory(prefix="localstore-selftest-") as tmp:
        store = Store(settings.model_copy(update={"root": Path(tmp)}))
        try:
            ledger = CartLedger(store, products=[SELF_TEST_PRODUCT])

            first = ledger.add_item(1, 2)
            check("add 2 units creates one line", first.ok and _quantities(ledger) == {1: 2})

            over = ledger.add_item(1, 9)
            check(
                "add beyond stock is rejected",
                not over.ok
                and over.error is not None
                and over.error.code == "INSUFFICIENT_STOCK"
                and _quantities(ledger) == {1: 2},
            )

            reloaded = CartLedger(store, products=[SELF_TEST_PRODUCT])
            check("cart survives a reload", reloaded.lines == ledger.lines)

            removed = ledger.remove_item(1, 2)
            check("removing the full quantity empties the cart", removed.ok and not ledger.lines)

            sample = [
                CartLine(product_id=2, name="Mouse", unit_price=Decimal(50), quantity=5),
                CartLine(product_id=3, name="Teclado", unit_price=Decimal(150), quantity=1),
            ]
            check("total of 5x50 + 1x150 is 400", compute_total(sample) == Decimal(400))
        finally:
            store.close()

    failed = [c["name"] for c in checks if not c["passed"]]
    return ServiceResult(
        ok=True,
        op="self_test",
        data={"passed": not failed, "checks": checks},
        warnings=[f"Self-test check failed: {name}" for name in failed],
    )

"""Tests for CartLedger — add, remove, totals, persistence and listings."""

from __future__ import annotations

from decimal import Decimal

import pytest

from localstore.domain.cart import Product
from localstore.infrastructure.store import Store
from localstore.services.cart import CART_KEY, CartLedger

NOTEBOOK = Product(id=1, name="Notebook", unit_price=Decimal("2500.00"), stock=10)
MOUSE = Product(id=2, name="Mouse", unit_price=Decimal("50.00"), stock=50)
KEYBOARD = Product(id=3, name="Teclado", unit_price=Decimal("150.00"), stock=30)


@pytest.fixture
def ledger(store: Store) -> CartLedger:
    return CartLedger(store, products=[NOTEBOOK, MOUSE, KEYBOARD])


def _quantities(ledger: CartLedger) -> dict[int, int]:
    return {line.product_id: line.quantity for line in ledger.lines}


class TestAddItem:
    def test_fresh_add_creates_one_line(self, ledger: CartLedger) -> None:
        result = ledger.add_item(2, 5)
        assert result.ok
        assert result.op == "add_item"
        assert result.data["quantity"] == 5
        assert result.data["total"] == "250.00"
        assert _quantities(ledger) == {2: 5}

    def test_second_add_increments(self, ledger: CartLedger) -> None:
        ledger.add_item(2, 5)
        result = ledger.add_item(2, 3)
        assert result.ok
        assert result.data["added"] == 3
        assert len(ledger.lines) == 1
        assert _quantities(ledger) == {2: 8}

    def test_unit_price_copied(self, ledger: CartLedger) -> None:
        ledger.add_item(1, 1)
        assert ledger.lines[0].unit_price == Decimal("2500.00")
        assert ledger.lines[0].name == "Notebook"

    @pytest.mark.parametrize("quantity", [0, -3])
    def test_non_positive_quantity(self, ledger: CartLedger, quantity: int) -> None:
        result = ledger.add_item(1, quantity)
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "INVALID_QUANTITY"
        assert ledger.lines == []

    def test_unknown_product(self, ledger: CartLedger) -> None:
        result = ledger.add_item(99, 1)
        assert result.error is not None
        assert result.error.code == "PRODUCT_NOT_FOUND"
        assert result.error.kind == "not_found"

    def test_quantity_over_stock(self, ledger: CartLedger) -> None:
        result = ledger.add_item(1, 11)
        assert result.error is not None
        assert result.error.code == "INSUFFICIENT_STOCK"
        assert result.error.detail["available"] == 10
        assert ledger.lines == []

    def test_existing_plus_new_over_stock_leaves_cart_unchanged(self, ledger: CartLedger) -> None:
        ledger.add_item(1, 2)
        result = ledger.add_item(1, 9)
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "INSUFFICIENT_STOCK"
        assert result.error.detail["in_cart"] == 2
        assert _quantities(ledger) == {1: 2}

    def test_exactly_stock_is_allowed(self, ledger: CartLedger) -> None:
        ledger.add_item(1, 4)
        assert ledger.add_item(1, 6).ok
        assert _quantities(ledger) == {1: 10}

    def test_stock_is_not_decremented(self, ledger: CartLedger) -> None:
        ledger.add_item(1, 5)
        assert next(p for p in ledger.products if p.id == 1).stock == 10


class TestRemoveItem:
    def test_partial_remove_decrements(self, ledger: CartLedger) -> None:
        ledger.add_item(2, 5)
        result = ledger.remove_item(2, 2)
        assert result.ok
        assert result.data == {
            "product_id": 2,
            "removed": 2,
            "quantity": 3,
            "deleted": False,
            "total": "150.00",
        }
        assert _quantities(ledger) == {2: 3}

    @pytest.mark.parametrize("quantity", [5, 7])
    def test_remove_all_or_more_deletes_line(self, ledger: CartLedger, quantity: int) -> None:
        ledger.add_item(2, 5)
        result = ledger.remove_item(2, quantity)
        assert result.data["deleted"] is True
        assert result.data["removed"] == 5
        assert ledger.lines == []

    def test_not_in_cart(self, ledger: CartLedger) -> None:
        result = ledger.remove_item(3, 1)
        assert result.error is not None
        assert result.error.code == "ITEM_NOT_IN_CART"

    def test_non_positive_quantity(self, ledger: CartLedger) -> None:
        ledger.add_item(2, 5)
        result = ledger.remove_item(2, 0)
        assert result.error is not None
        assert result.error.code == "INVALID_QUANTITY"
        assert _quantities(ledger) == {2: 5}


class TestScenario:
    def test_add_overflow_remove(self, store: Store) -> None:
        ledger = CartLedger(store, products=[NOTEBOOK])
        assert ledger.add_item(1, 2).ok
        assert _quantities(ledger) == {1: 2}

        over = ledger.add_item(1, 9)
        assert not over.ok
        assert _quantities(ledger) == {1: 2}

        assert ledger.remove_item(1, 2).ok
        assert ledger.lines == []

    def test_total_of_mixed_lines(self, ledger: CartLedger) -> None:
        ledger.add_item(2, 5)
        ledger.add_item(3, 1)
        assert ledger.total() == Decimal(400)
        assert ledger.summary().data["total"] == "400.00"


class TestPersistence:
    def test_lines_survive_reload(self, store: Store, ledger: CartLedger) -> None:
        ledger.add_item(1, 2)
        ledger.add_item(3, 4)
        reloaded = CartLedger(store, products=[NOTEBOOK, MOUSE, KEYBOARD])
        assert reloaded.lines == ledger.lines

    def test_blob_is_camel_case(self, store: Store, ledger: CartLedger) -> None:
        ledger.add_item(2, 1)
        assert store.load(CART_KEY) == [
            {"productId": 2, "name": "Mouse", "unitPrice": "50.00", "quantity": 1}
        ]

    def test_failed_add_does_not_write(self, store: Store, ledger: CartLedger) -> None:
        ledger.add_item(99, 1)
        assert CART_KEY not in store.keys()

    def test_clear_removes_key(self, store: Store, ledger: CartLedger) -> None:
        ledger.add_item(2, 1)
        ledger.add_item(3, 1)
        result = ledger.clear()
        assert result.op == "clear_cart"
        assert result.data["removed_lines"] == 2
        assert ledger.lines == []
        assert CART_KEY not in store.keys()

    def test_lines_property_is_a_copy(self, ledger: CartLedger) -> None:
        ledger.add_item(2, 1)
        ledger.lines[0].quantity = 40
        assert _quantities(ledger) == {2: 1}


class TestSummary:
    def test_empty_cart(self, ledger: CartLedger) -> None:
        result = ledger.summary()
        assert result.op == "view_cart"
        assert result.data["items"] == []
        assert result.data["total"] == "0.00"
        assert result.data["currency"] == "R$"

    def test_items_carry_subtotals(self, ledger: CartLedger) -> None:
        ledger.add_item(3, 2)
        item = ledger.summary().data["items"][0]
        assert item == {
            "id": 3,
            "name": "Teclado",
            "unit_price": "150.00",
            "quantity": 2,
            "subtotal": "300.00",
        }


class TestListProducts:
    def test_defaults_from_settings(self, store: Store) -> None:
        result = CartLedger(store).list_products()
        assert result.ok
        assert result.data["count"] == 6
        assert result.data["stock_value"] == "53800.00"
        assert "discount_percent" not in result.data

    def test_min_price_is_strict(self, ledger: CartLedger) -> None:
        result = ledger.list_products(min_price=Decimal(150))
        assert [item["id"] for item in result.data["items"]] == [1]
        assert result.data["stock_value"] == "25000.00"

    def test_discount(self, ledger: CartLedger) -> None:
        result = ledger.list_products(discount_percent=Decimal(10))
        notebook = result.data["items"][0]
        assert notebook["discounted_price"] == "2250.00"
        assert result.data["discount_percent"] == "10"
        assert result.data["discounted_stock_value"] == "28800.00"

    def test_discount_out_of_range(self, ledger: CartLedger) -> None:
        result = ledger.list_products(discount_percent=Decimal(120))
        assert result.error is not None
        assert result.error.code == "VALIDATION_FAILED"

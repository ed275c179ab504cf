"""Tests for operation-specific Rich renderers."""

from localstore.output.renderers import render_quiet, render_result
from localstore.services.result import ServiceError, ServiceResult

# ── Helpers ───────────────────────────────────────────────────────────


def _ok(op: str, **data: object) -> ServiceResult:
    return ServiceResult(ok=True, op=op, data=dict(data))


def _err(op: str, code: str, message: str, **detail: object) -> ServiceResult:
    return ServiceResult(
        ok=False,
        op=op,
        error=ServiceError(code=code, message=message, detail=dict(detail)),
    )


# ── Error rendering ──────────────────────────────────────────────────


class TestErrorRenderer:
    def test_basic_error(self) -> None:
        output = render_result(_err("add_item", "INVALID_QUANTITY", "Quantity must be positive"))
        assert "ERROR" in output
        assert "add_item" in output
        assert "Quantity must be positive" in output

    def test_verbose_shows_code_and_detail(self) -> None:
        result = _err("add_item", "INSUFFICIENT_STOCK", "Not enough", available=10)
        output = render_result(result, verbose=True)
        assert "INSUFFICIENT_STOCK" in output
        assert "available: 10" in output

    def test_no_error_object(self) -> None:
        assert "Unknown error" in render_result(ServiceResult(ok=False, op="test"))


# ── Mutation renderer ────────────────────────────────────────────────


class TestMutationRenderer:
    def test_add_item(self) -> None:
        output = render_result(
            _ok("add_item", product_id=2, name="Mouse", added=5, quantity=5, total="250.00")
        )
        assert "OK" in output
        assert "add_item" in output
        assert "Mouse" in output
        assert "250.00" in output

    def test_add_user(self) -> None:
        output = render_result(_ok("add_user", id="USR-0001", name="Ana", email="ana@example.com"))
        assert "USR-0001" in output
        assert "ana@example.com" in output

    def test_update_noop(self) -> None:
        output = render_result(_ok("update_user", id="USR-0404", changed=False))
        assert "changed: False" in output


# ── Table renderers ──────────────────────────────────────────────────


class TestCartRenderer:
    def test_lines_and_total(self) -> None:
        result = _ok(
            "view_cart",
            items=[
                {
                    "id": 2,
                    "name": "Mouse",
                    "unit_price": "50.00",
                    "quantity": 5,
                    "subtotal": "250.00",
                },
                {
                    "id": 3,
                    "name": "Teclado",
                    "unit_price": "150.00",
                    "quantity": 1,
                    "subtotal": "150.00",
                },
            ],
            count=2,
            total="400.00",
            currency="R$",
        )
        output = render_result(result)
        assert "Mouse" in output
        assert "Teclado" in output
        assert "TOTAL: R$ 400.00" in output

    def test_empty_cart(self) -> None:
        output = render_result(_ok("view_cart", items=[], count=0, total="0.00", currency="R$"))
        assert "Cart is empty" in output


class TestProductsRenderer:
    def test_discount_column(self) -> None:
        result = _ok(
            "list_products",
            items=[
                {
                    "id": 1,
                    "name": "Notebook",
                    "unit_price": "2500.00",
                    "stock": 10,
                    "discounted_price": "2250.00",
                }
            ],
            count=1,
            stock_value="25000.00",
            currency="R$",
            discount_percent="10",
            discounted_stock_value="22500.00",
        )
        output = render_result(result)
        assert "Notebook" in output
        assert "-10%" in output
        assert "2250.00" in output
        assert "22500.00" in output


class TestCatalogRenderers:
    def test_books_show_availability(self) -> None:
        result = _ok(
            "list_books",
            items=[
                {
                    "id": "BOOK-0001",
                    "title": "Dom Casmurro",
                    "author": "Machado",
                    "year": 1899,
                    "genre": "Romance",
                    "available": False,
                }
            ],
            count=1,
        )
        output = render_result(result)
        assert "Dom Casmurro" in output
        assert "Loaned" in output

    def test_loans_show_names(self) -> None:
        result = _ok(
            "list_loans",
            items=[
                {
                    "id": "LOAN-0001",
                    "user_id": "USR-0001",
                    "book_id": "BOOK-0001",
                    "date": "2026-03-01",
                    "status": "active",
                    "user_name": "Ana",
                    "book_title": "Unknown",
                }
            ],
            count=1,
        )
        output = render_result(result)
        assert "Ana" in output
        assert "Unknown" in output
        assert "active" in output

    def test_users(self) -> None:
        result = _ok(
            "list_users",
            items=[{"id": "USR-0001", "name": "Ana", "email": "ana@example.com"}],
            count=1,
        )
        assert "ana@example.com" in render_result(result)


class TestMiscRenderers:
    def test_password_rules(self) -> None:
        result = _ok("check_password", valid=True, passed=["at least 8 characters"])
        output = render_result(result)
        assert "Password is valid" in output
        assert "at least 8 characters" in output

    def test_self_test(self) -> None:
        result = _ok(
            "self_test",
            passed=False,
            checks=[{"name": "first", "passed": True}, {"name": "second", "passed": False}],
        )
        output = render_result(result)
        assert "first" in output
        assert "some checks failed" in output

    def test_store_keys(self) -> None:
        output = render_result(_ok("store_keys", keys=["cart", "library_users"], count=2))
        assert "library_users" in output

    def test_store_dump_with_brackets(self) -> None:
        result = _ok("store_dump", key="k", count=1, records=[{"note": "[bold]raw[/bold]"}])
        assert "[bold]raw[/bold]" in render_result(result)

    def test_unknown_op_uses_generic(self) -> None:
        output = render_result(_ok("mystery", answer=42))
        assert "answer: 42" in output


class TestVerboseMeta:
    def test_span_tree(self) -> None:
        result = ServiceResult(
            ok=True,
            op="add_user",
            data={"id": "USR-0001"},
            meta={
                "telemetry": {
                    "name": "CatalogRepository.add_user",
                    "duration_ms": 1.5,
                    "children": [{"name": "persist", "duration_ms": 0.7}],
                }
            },
        )
        output = render_result(result, verbose=True)
        assert "CatalogRepository.add_user" in output
        assert "persist" in output

    def test_meta_hidden_without_verbose(self) -> None:
        result = ServiceResult(ok=True, op="x", meta={"telemetry": {"name": "span"}})
        assert "span" not in render_result(result)


# ── Quiet mode ───────────────────────────────────────────────────────


class TestQuiet:
    def test_ids_of_items(self) -> None:
        result = _ok("list_users", items=[{"id": "USR-0001"}, {"id": "USR-0002"}])
        assert render_quiet(result) == "USR-0001\nUSR-0002"

    def test_total(self) -> None:
        assert render_quiet(_ok("add_item", product_id=1, total="2500.00")) == "2500.00"

    def test_status_line(self) -> None:
        assert render_quiet(_ok("login", email="ana@gmail.com")) == "OK: login"

    def test_error(self) -> None:
        output = render_quiet(_err("login", "WRONG_PASSWORD", "Incorrect password"))
        assert output.startswith("ERROR: login")
        assert "Incorrect password" in output

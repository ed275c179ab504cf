"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO).  The caller
extracts the rendered text via ``get_output(console)``.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

import json as _json
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from localstore.output.console import create_console, get_output, style_for_status

if TYPE_CHECKING:
    from rich.console import Console

    from localstore.services.result import ServiceResult

_Renderer = Callable[["ServiceResult", "Console"], None]


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich.

    Returns plain text (no ANSI) when Rich detects no terminal,
    which is the case inside Click's CliRunner and piped output.
    """
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console)
        if verbose:
            _render_meta(console, result)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"

    items = result.data.get("items")
    if items and isinstance(items, list):
        return "\n".join(str(item["id"]) for item in items if "id" in item)
    if "total" in result.data:
        return str(result.data["total"])
    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    console.print(Text("OK", style="ls.ok"), Text(f"  {result.op}", style="ls.op"))


def _field(console: Console, key: str, value: Any) -> None:
    """Print a single indented key-value field."""
    k = Text(f"  {key}:", style="ls.key")
    if key == "id" or key.endswith("_id"):
        v = Text(str(value), style="ls.id")
    elif key in ("name", "title"):
        v = Text(str(value), style="ls.name")
    elif key in ("total", "subtotal", "stock_value"):
        v = Text(str(value), style="ls.money")
    elif isinstance(value, (dict, list)):
        v = Text(_json.dumps(value, separators=(",", ":")))
    else:
        v = Text(str(value))
    console.print(k, v)


def _render_meta(console: Console, result: ServiceResult) -> None:
    """Print the telemetry span tree (verbose only)."""
    if not result.meta:
        return
    console.print(Text("  meta:", style="dim"))
    telemetry = result.meta.get("telemetry")
    if telemetry:
        _render_span(console, telemetry, indent=4)
    for k, v in result.meta.items():
        if k != "telemetry":
            console.print(Text(f"    {k}: {v}"))


def _render_span(console: Console, span: dict[str, Any], indent: int) -> None:
    prefix = " " * indent
    duration = span.get("duration_ms", 0.0)
    line = f"{prefix}{duration:>8.2f}ms  {span.get('name', '?')}"
    if span.get("annotations"):
        extras = ", ".join(f"{k}={v}" for k, v in span["annotations"].items())
        line += f"  ({extras})"
    console.print(Text(line, style="dim"))
    for child in span.get("children", []):
        _render_span(console, child, indent + 4)


def _money(result: ServiceResult, amount: Any) -> str:
    currency = result.data.get("currency", "")
    return f"{currency} {amount}".strip()


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    console.print(
        Text("ERROR", style="ls.error"),
        Text(f"  {result.op}", style="ls.op"),
        Text(" — "),
        Text(msg),
    )
    if verbose and err:
        console.print(Text(f"  code: {err.code} ({err.kind})", style="dim"))
        if err.detail:
            console.print(Text("  detail:", style="dim"))
            for k, v in err.detail.items():
                console.print(Text(f"    {k}: {v}"))


# ── Mutation renderer ─────────────────────────────────────────────────


_MUTATION_KEYS = (
    "id",
    "product_id",
    "name",
    "title",
    "email",
    "author",
    "year",
    "genre",
    "available",
    "user_id",
    "book_id",
    "user_name",
    "book_title",
    "date",
    "status",
    "added",
    "removed",
    "quantity",
    "deleted",
    "changed",
    "fields_changed",
    "removed_lines",
    "total",
    "message",
)


def _render_mutation(result: ServiceResult, console: Console) -> None:
    _status_line(console, result)
    for key in _MUTATION_KEYS:
        if key in result.data:
            _field(console, key, result.data[key])


# ── Cart renderers ────────────────────────────────────────────────────


def _render_cart(result: ServiceResult, console: Console) -> None:
    items = result.data.get("items", [])
    if not items:
        console.print(Text("Cart is empty", style="dim"))
        return

    table = Table(show_header=True, pad_edge=False, expand=False)
    table.add_column("ID", style="ls.id", no_wrap=True)
    table.add_column("Product", style="ls.name")
    table.add_column("Unit price", justify="right")
    table.add_column("Qty", justify="right")
    table.add_column("Subtotal", style="ls.money", justify="right")
    for item in items:
        table.add_row(
            str(item["id"]),
            str(item["name"]),
            _money(result, item["unit_price"]),
            str(item["quantity"]),
            _money(result, item["subtotal"]),
        )
    console.print(table)
    console.print(Text(f"TOTAL: {_money(result, result.data.get('total', '0.00'))}", style="bold"))


def _render_products(result: ServiceResult, console: Console) -> None:
    items = result.data.get("items", [])
    discounted = "discount_percent" in result.data

    table = Table(show_header=True, pad_edge=False, expand=False)
    table.add_column("ID", style="ls.id", no_wrap=True)
    table.add_column("Product", style="ls.name")
    table.add_column("Price", justify="right")
    if discounted:
        table.add_column(f"-{result.data['discount_percent']}%", style="ls.money", justify="right")
    table.add_column("Stock", justify="right")
    for item in items:
        row = [str(item["id"]), str(item["name"]), _money(result, item["unit_price"])]
        if discounted:
            row.append(_money(result, item["discounted_price"]))
        row.append(str(item["stock"]))
        table.add_row(*row)
    console.print(table)

    _field(console, "stock_value", _money(result, result.data.get("stock_value", "0.00")))
    if discounted:
        _field(
            console,
            "discounted_stock_value",
            _money(result, result.data.get("discounted_stock_value", "0.00")),
        )


# ── Catalog renderers ─────────────────────────────────────────────────


def _render_users(result: ServiceResult, console: Console) -> None:
    table = Table(show_header=True, pad_edge=False, expand=False)
    table.add_column("ID", style="ls.id", no_wrap=True)
    table.add_column("Name", style="ls.name")
    table.add_column("Email")
    for item in result.data.get("items", []):
        table.add_row(str(item["id"]), str(item["name"]), str(item["email"]))
    console.print(table)


def _render_books(result: ServiceResult, console: Console) -> None:
    table = Table(show_header=True, pad_edge=False, expand=False)
    table.add_column("ID", style="ls.id", no_wrap=True)
    table.add_column("Title", style="ls.name")
    table.add_column("Author")
    table.add_column("Year", justify="right")
    table.add_column("Genre")
    table.add_column("Status")
    for item in result.data.get("items", []):
        status = "available" if item["available"] else "loaned"
        table.add_row(
            str(item["id"]),
            str(item["title"]),
            str(item["author"]),
            str(item["year"]),
            str(item["genre"]),
            Text(status.capitalize(), style=style_for_status(status)),
        )
    console.print(table)


def _render_loans(result: ServiceResult, console: Console) -> None:
    table = Table(show_header=True, pad_edge=False, expand=False)
    table.add_column("ID", style="ls.id", no_wrap=True)
    table.add_column("User")
    table.add_column("Book", style="ls.name")
    table.add_column("Date")
    table.add_column("Status")
    for item in result.data.get("items", []):
        table.add_row(
            str(item["id"]),
            str(item["user_name"]),
            str(item["book_title"]),
            str(item["date"]),
            Text(str(item["status"]), style=style_for_status(str(item["status"]))),
        )
    console.print(table)


# ── Auth / self-test / store renderers ────────────────────────────────


def _render_password(result: ServiceResult, console: Console) -> None:
    _status_line(console, result)
    console.print(Text("  Password is valid", style="ls.ok"))
    for rule in result.data.get("passed", []):
        console.print(Text(f"    ✓ {rule}"))


def _render_self_test(result: ServiceResult, console: Console) -> None:
    _status_line(console, result)
    for check in result.data.get("checks", []):
        mark = Text("  ✓ ", style="ls.ok") if check["passed"] else Text("  ✗ ", style="ls.error")
        console.print(mark, Text(str(check["name"])))
    verdict = "all checks passed" if result.data.get("passed") else "some checks failed"
    _field(console, "result", verdict)


def _render_keys(result: ServiceResult, console: Console) -> None:
    _status_line(console, result)
    keys = result.data.get("keys", [])
    if not keys:
        console.print(Text("  (store is empty)", style="dim"))
    for key in keys:
        console.print(Text(f"  {key}"))


def _render_dump(result: ServiceResult, console: Console) -> None:
    _status_line(console, result)
    _field(console, "key", result.data.get("key"))
    _field(console, "count", result.data.get("count", 0))
    console.print(Text(_json.dumps(result.data.get("records", []), indent=2, ensure_ascii=False)))


# ── Generic fallback ──────────────────────────────────────────────────


def _render_generic(result: ServiceResult, console: Console) -> None:
    """Fallback renderer: status line + all data as key-value pairs."""
    _status_line(console, result)
    for key, value in result.data.items():
        _field(console, key, value)


# ── Dispatch table ────────────────────────────────────────────────────

_OP_RENDERERS: dict[str, _Renderer] = {
    # Cart
    "add_item": _render_mutation,
    "remove_item": _render_mutation,
    "clear_cart": _render_mutation,
    "view_cart": _render_cart,
    "list_products": _render_products,
    "self_test": _render_self_test,
    # Catalog
    "add_user": _render_mutation,
    "update_user": _render_mutation,
    "delete_user": _render_mutation,
    "get_user": _render_mutation,
    "list_users": _render_users,
    "add_book": _render_mutation,
    "update_book": _render_mutation,
    "delete_book": _render_mutation,
    "get_book": _render_mutation,
    "list_books": _render_books,
    "register_loan": _render_mutation,
    "return_loan": _render_mutation,
    "list_loans": _render_loans,
    # Auth
    "login": _render_mutation,
    "check_password": _render_password,
    # Store
    "store_keys": _render_keys,
    "store_dump": _render_dump,
    "store_clear": _render_generic,
}

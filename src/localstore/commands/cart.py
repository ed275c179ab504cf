"""Command group: shopping cart (products, show, add, remove, clear, self-test, menu)."""

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING

import click

from localstore.commands._base import DECIMAL, LsGroup

if TYPE_CHECKING:
    from localstore.commands._context import AppContext

_CART_EXAMPLES = """\
  localstore cart products --min-price 100 --discount 10
  localstore cart add 2 -n 5
  localstore cart remove 2 -n 2
  localstore cart show
  localstore cart menu"""

_MENU = """\

=== CART MENU ===
1. List products
2. View cart
3. Add product
4. Remove product
5. Clear cart
6. Run self-test
7. Exit"""

_EXIT = 7


@click.group(cls=LsGroup, examples=_CART_EXAMPLES)
@click.pass_obj
def cart(app: AppContext) -> None:
    """Shopping cart over a fixed product catalog."""


@cart.command(
    examples="""\
  localstore cart products
  localstore cart products --min-price 500
  localstore cart products --discount 15
  localstore --json cart products"""
)
@click.option(
    "--min-price",
    type=DECIMAL,
    default=None,
    help="Only products priced strictly above this.",
)
@click.option("--discount", type=DECIMAL, default=None, help="Discount percent to apply (0-100).")
@click.pass_obj
def products(app: AppContext, min_price: Decimal | None, discount: Decimal | None) -> None:
    """List the product catalog with the total stock value."""
    app.emit(app.ledger.list_products(min_price=min_price, discount_percent=discount))


@cart.command(examples="  localstore cart show\n  localstore -q cart show")
@click.pass_obj
def show(app: AppContext) -> None:
    """Show the cart lines and total."""
    app.emit(app.ledger.summary())


@cart.command(
    examples="""\
  localstore cart add 1
  localstore cart add 2 -n 5"""
)
@click.argument("product_id", type=int)
@click.option("-n", "--quantity", type=int, default=1, show_default=True, help="Units to add.")
@click.pass_obj
def add(app: AppContext, product_id: int, quantity: int) -> None:
    """Add units of a product to the cart."""
    app.emit(app.ledger.add_item(product_id, quantity))


@cart.command(
    examples="""\
  localstore cart remove 2
  localstore cart remove 2 -n 3
  localstore cart remove 2 --all"""
)
@click.argument("product_id", type=int)
@click.option("-n", "--quantity", type=int, default=1, show_default=True, help="Units to remove.")
@click.option("--all", "remove_all", is_flag=True, help="Remove the whole line.")
@click.pass_obj
def remove(app: AppContext, product_id: int, quantity: int, remove_all: bool) -> None:
    """Remove units of a product from the cart."""
    ledger = app.ledger
    if remove_all:
        line = next((ln for ln in ledger.lines if ln.product_id == product_id), None)
        quantity = line.quantity if line is not None else 1
    app.emit(ledger.remove_item(product_id, quantity))


@cart.command(examples="  localstore cart clear\n  localstore cart clear --yes")
@click.option("--yes", is_flag=True, help="Skip the confirmation prompt.")
@click.pass_obj
def clear(app: AppContext, yes: bool) -> None:
    """Empty the cart."""
    if not app.confirm("Clear every line from the cart?", yes=yes):
        click.echo("Cancelled.")
        return
    app.emit(app.ledger.clear())


@cart.command(
    "self-test",
    examples="  localstore cart self-test\n  localstore --json cart self-test",
)
@click.pass_obj
def self_test(app: AppContext) -> None:
    """Replay the cart scenario against a throwaway store."""
    from localstore.services.selftest import run_self_test

    result = run_self_test(app.settings)
    app.emit(result)
    if not result.data.get("passed"):
        raise SystemExit(1)


@cart.command(examples="  localstore cart menu")
@click.pass_obj
def menu(app: AppContext) -> None:
    """Numbered interactive menu over the cart operations."""
    if app.settings.no_interact:
        raise click.UsageError("'cart menu' needs prompts; drop --no-interact.")

    ledger = app.ledger
    while True:
        click.echo(_MENU)
        choice = click.prompt("Choose an option", type=click.IntRange(1, _EXIT))
        if choice == _EXIT:
            click.echo("Bye.")
            return
        if choice == 1:
            discount = app.settings.cart.default_discount_percent
            app.render(ledger.list_products(discount_percent=discount))
        elif choice == 2:
            app.render(ledger.summary())
        elif choice == 3:
            product_id = click.prompt("Product ID", type=int)
            quantity = click.prompt("Quantity", type=int, default=1)
            app.render(ledger.add_item(product_id, quantity))
        elif choice == 4:
            product_id = click.prompt("Product ID", type=int)
            quantity = click.prompt("Quantity", type=int, default=1)
            app.render(ledger.remove_item(product_id, quantity))
        elif choice == 5:
            if app.confirm("Clear every line from the cart?"):
                app.render(ledger.clear())
        elif choice == 6:
            from localstore.services.selftest import run_self_test

            app.render(run_self_test(app.settings))

"""Command group: inspect the raw key-value store."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from localstore.commands._base import LsGroup

if TYPE_CHECKING:
    from localstore.commands._context import AppContext

_STORE_EXAMPLES = """\
  localstore store keys
  localstore store dump cart
  localstore store clear library_loans --yes"""


@click.group(cls=LsGroup, examples=_STORE_EXAMPLES)
@click.pass_obj
def store(app: AppContext) -> None:
    """Inspect and reset stored keys."""


@store.command(examples="  localstore store keys")
@click.pass_obj
def keys(app: AppContext) -> None:
    """List every key holding a value."""
    from localstore.services.inspector import StoreInspector

    app.emit(StoreInspector(app.store).keys())


@store.command(
    examples="""\
  localstore store dump library_books
  localstore --json store dump cart"""
)
@click.argument("key")
@click.pass_obj
def dump(app: AppContext, key: str) -> None:
    """Print the records stored under KEY."""
    from localstore.services.inspector import StoreInspector

    app.emit(StoreInspector(app.store).dump(key))


@store.command(examples="  localstore store clear cart --yes")
@click.argument("key")
@click.option("--yes", is_flag=True, help="Skip the confirmation prompt.")
@click.pass_obj
def clear(app: AppContext, key: str, yes: bool) -> None:
    """Remove KEY from the store."""
    from localstore.services.inspector import StoreInspector

    if not app.confirm(f"Remove '{key}' from the store?", yes=yes):
        click.echo("Cancelled.")
        return
    app.emit(StoreInspector(app.store).clear(key))

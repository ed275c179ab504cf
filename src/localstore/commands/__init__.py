"""Subcommand modules for localstore.

Provides register_commands() which uses deferred imports to keep
``localstore --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all command groups and standalone commands on the root CLI group."""
    # --- Groups ---
    from localstore.commands.book import book
    from localstore.commands.cart import cart
    from localstore.commands.loan import loan
    from localstore.commands.store import store
    from localstore.commands.user import user

    cli.add_command(cart)
    cli.add_command(user)
    cli.add_command(book)
    cli.add_command(loan)
    cli.add_command(store)

    # --- Standalone commands ---
    from localstore.commands.login import login
    from localstore.commands.password import password

    cli.add_command(login)
    cli.add_command(password)

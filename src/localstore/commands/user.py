"""Command group: library users (add, update, delete, list, get)."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from localstore.commands._base import LsGroup

if TYPE_CHECKING:
    from localstore.commands._context import AppContext

_USER_EXAMPLES = """\
  localstore user add "Ana Souza" ana@example.com
  localstore user update USR-0001 --email ana.souza@example.com
  localstore user list --email-contains example
  localstore user delete USR-0001 --yes"""


@click.group(cls=LsGroup, examples=_USER_EXAMPLES)
@click.pass_obj
def user(app: AppContext) -> None:
    """Manage library users."""


@user.command(examples='  localstore user add "Ana Souza" ana@example.com')
@click.argument("name")
@click.argument("email")
@click.pass_obj
def add(app: AppContext, name: str, email: str) -> None:
    """Register a new user."""
    app.emit(app.catalog.add_user(name, email))


@user.command(
    examples="""\
  localstore user update USR-0001 --name "Ana S."
  localstore user update USR-0001 --email ana@new.example.com"""
)
@click.argument("user_id")
@click.option("--name", default=None, help="New name.")
@click.option("--email", default=None, help="New email.")
@click.pass_obj
def update(app: AppContext, user_id: str, name: str | None, email: str | None) -> None:
    """Update a user's name and/or email."""
    app.emit(app.catalog.update_user(user_id, name=name, email=email))


@user.command(examples="  localstore user delete USR-0001\n  localstore user delete USR-0001 --yes")
@click.argument("user_id")
@click.option("--yes", is_flag=True, help="Skip the confirmation prompt.")
@click.pass_obj
def delete(app: AppContext, user_id: str, yes: bool) -> None:
    """Delete a user without active loans."""
    if not app.confirm(f"Delete user {user_id}?", yes=yes):
        click.echo("Cancelled.")
        return
    app.emit(app.catalog.delete_user(user_id))


@user.command(
    "list",
    examples="  localstore user list\n  localstore user list --email-contains gmail",
)
@click.option("--email-contains", default=None, help="Case-insensitive email substring.")
@click.pass_obj
def list_cmd(app: AppContext, email_contains: str | None) -> None:
    """List users."""
    app.emit(app.catalog.list_users(email_contains=email_contains))


@user.command(examples="  localstore user get USR-0001")
@click.argument("user_id")
@click.pass_obj
def get(app: AppContext, user_id: str) -> None:
    """Show one user."""
    app.emit(app.catalog.get_user(user_id))

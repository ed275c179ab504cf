"""Command: password strength check."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from localstore.commands._base import LsCommand

if TYPE_CHECKING:
    from localstore.commands._context import AppContext


@click.command(
    cls=LsCommand,
    examples="""\
  localstore password
  localstore password 'Str0ng!Pass'
  localstore --json password weak""",
)
@click.argument("candidate", metavar="PASSWORD", required=False)
@click.pass_obj
def password(app: AppContext, candidate: str | None) -> None:
    """Check a password against the configured strength rules."""
    from localstore.services.auth import AuthService

    if candidate is None and app.interactive:
        candidate = click.prompt("Password", default="", hide_input=True, show_default=False)

    app.emit(AuthService(app.store).check_password(candidate))

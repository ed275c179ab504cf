"""Command: check an email/password pair against the configured accounts."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from localstore.commands._base import LsCommand

if TYPE_CHECKING:
    from localstore.commands._context import AppContext


@click.command(
    cls=LsCommand,
    examples="""\
  localstore login
  localstore login ana@gmail.com
  localstore --no-interact login ana@gmail.com --password Ana12345""",
)
@click.argument("email", required=False)
@click.option("--password", default=None, help="Password (prompted with hidden input if omitted).")
@click.pass_obj
def login(app: AppContext, email: str | None, password: str | None) -> None:
    """Validate a login attempt, reporting the first rule it breaks."""
    from localstore.services.auth import AuthService

    if app.interactive:
        if email is None:
            email = click.prompt("Email", default="", show_default=False)
        if password is None:
            password = click.prompt("Password", default="", hide_input=True, show_default=False)

    app.emit(AuthService(app.store).login(email, password))

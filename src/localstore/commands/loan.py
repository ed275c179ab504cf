"""Command group: loans (register, return, list)."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from localstore.commands._base import LsGroup
from localstore.domain.catalog import LoanStatus

if TYPE_CHECKING:
    from localstore.commands._context import AppContext

_LOAN_EXAMPLES = """\
  localstore loan register USR-0001 BOOK-0001
  localstore loan return LOAN-0001
  localstore loan list --status active"""


@click.group(cls=LsGroup, examples=_LOAN_EXAMPLES)
@click.pass_obj
def loan(app: AppContext) -> None:
    """Lend books to users and take them back."""


@loan.command(examples="  localstore loan register USR-0001 BOOK-0001")
@click.argument("user_id")
@click.argument("book_id")
@click.pass_obj
def register(app: AppContext, user_id: str, book_id: str) -> None:
    """Lend an available book to a user."""
    app.emit(app.catalog.register_loan(user_id, book_id))


@loan.command("return", examples="  localstore loan return LOAN-0001")
@click.argument("loan_id")
@click.pass_obj
def return_cmd(app: AppContext, loan_id: str) -> None:
    """Close an active loan."""
    app.emit(app.catalog.return_loan(loan_id))


@loan.command("list", examples="  localstore loan list\n  localstore loan list --status returned")
@click.option(
    "--status",
    type=click.Choice([s.value for s in LoanStatus]),
    default=None,
    help="Only loans in this status.",
)
@click.pass_obj
def list_cmd(app: AppContext, status: str | None) -> None:
    """List loans with user names and book titles."""
    app.emit(app.catalog.list_loans(status=status))

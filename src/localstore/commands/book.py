"""Command group: library books (add, update, delete, list, get)."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from localstore.commands._base import LsGroup

if TYPE_CHECKING:
    from localstore.commands._context import AppContext

_BOOK_EXAMPLES = """\
  localstore book add "Dom Casmurro" --author "Machado de Assis" --year 1899 --genre Romance
  localstore book update BOOK-0001 --genre Classic
  localstore book list --available
  localstore book delete BOOK-0001 --yes"""


@click.group(cls=LsGroup, examples=_BOOK_EXAMPLES)
@click.pass_obj
def book(app: AppContext) -> None:
    """Manage library books."""


@book.command(
    examples="""\
  localstore book add "Dom Casmurro" --author "Machado de Assis" --year 1899 --genre Romance"""
)
@click.argument("title")
@click.option("--author", required=True, help="Author name.")
@click.option("--year", required=True, help="Publication year.")
@click.option("--genre", required=True, help="Genre.")
@click.pass_obj
def add(app: AppContext, title: str, author: str, year: str, genre: str) -> None:
    """Add a book; it starts available."""
    app.emit(app.catalog.add_book(title, author, year, genre))


@book.command(
    examples="""\
  localstore book update BOOK-0001 --title "Dom Casmurro (2nd ed.)"
  localstore book update BOOK-0001 --year 1900 --genre Classic"""
)
@click.argument("book_id")
@click.option("--title", default=None, help="New title.")
@click.option("--author", default=None, help="New author.")
@click.option("--year", default=None, help="New publication year.")
@click.option("--genre", default=None, help="New genre.")
@click.pass_obj
def update(
    app: AppContext,
    book_id: str,
    title: str | None,
    author: str | None,
    year: str | None,
    genre: str | None,
) -> None:
    """Update a book's descriptive fields."""
    app.emit(app.catalog.update_book(book_id, title=title, author=author, year=year, genre=genre))


@book.command(examples="  localstore book delete BOOK-0001 --yes")
@click.argument("book_id")
@click.option("--yes", is_flag=True, help="Skip the confirmation prompt.")
@click.pass_obj
def delete(app: AppContext, book_id: str, yes: bool) -> None:
    """Delete a book that is not on loan."""
    if not app.confirm(f"Delete book {book_id}?", yes=yes):
        click.echo("Cancelled.")
        return
    app.emit(app.catalog.delete_book(book_id))


@book.command("list", examples="  localstore book list\n  localstore book list --available")
@click.option("--available", "available_only", is_flag=True, help="Only books not on loan.")
@click.pass_obj
def list_cmd(app: AppContext, available_only: bool) -> None:
    """List books with their availability."""
    app.emit(app.catalog.list_books(available_only=available_only))


@book.command(examples="  localstore book get BOOK-0001")
@click.argument("book_id")
@click.pass_obj
def get(app: AppContext, book_id: str) -> None:
    """Show one book."""
    app.emit(app.catalog.get_book(book_id))

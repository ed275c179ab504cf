"""CatalogRepository — users, books, and loans with id indexes.

The repository owns three ordered collections and an id → record mapping
for each.  The mapping is kept in lockstep with its list on every mutation:
its key set always equals the list's id set.

Cross-record rules:
- A user with an active loan cannot be deleted.
- A book with an active loan cannot be deleted, nor loaned again.
- A loan only ever moves ``active`` → ``returned``.

Every mutation validates fully, then applies, then persists all three
collections in one store transaction.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from localstore.config.logging import get_logger
from localstore.domain.catalog import Book, Loan, LoanStatus, User, is_valid_transition
from localstore.domain.errors import ErrorCode
from localstore.domain.validation import parse_year, validate_book, validate_user
from localstore.services._helpers import today_iso
from localstore.services.base import BaseService
from localstore.services.result import ServiceResult, fail
from localstore.services.telemetry import trace_span, traced

if TYPE_CHECKING:
    from localstore.infrastructure.store import Store

log = get_logger(__name__)

USERS_KEY = "library_users"
BOOKS_KEY = "library_books"
LOANS_KEY = "library_loans"

UNKNOWN = "Unknown"


class CatalogRepository(BaseService):
    """Library catalog loaded once from the store at construction."""

    def __init__(self, store: Store) -> None:
        super().__init__(store)
        self._users: list[User] = []
        self._books: list[Book] = []
        self._loans: list[Loan] = []
        self._users_by_id: dict[str, User] = {}
        self._books_by_id: dict[str, Book] = {}
        self._loans_by_id: dict[str, Loan] = {}
        self.reload()

    def reload(self) -> None:
        """Re-read all collections from the store and rebuild the indexes."""
        self._users = self._store.load_models(USERS_KEY, User)
        self._books = self._store.load_models(BOOKS_KEY, Book)
        self._loans = self._store.load_models(LOANS_KEY, Loan)

        self._users_by_id = {u.id: u for u in self._users}
        self._books_by_id = {b.id: b for b in self._books}
        self._loans_by_id = {ln.id: ln for ln in self._loans}

        loaned = {ln.book_id for ln in self._loans if ln.is_active}
        for book in self._books:
            expected = book.id not in loaned
            if book.available != expected:
                log.warning("catalog.availability_reconciled", book_id=book.id, available=expected)
                book.available = expected

        log.debug(
            "catalog.loaded",
            users=len(self._users),
            books=len(self._books),
            loans=len(self._loans),
        )

    @property
    def users(self) -> list[User]:
        return list(self._users)

    @property
    def books(self) -> list[Book]:
        return list(self._books)

    @property
    def loans(self) -> list[Loan]:
        return list(self._loans)

    # ------------------------------------------------------------------
    # Users
    # ------------------------------------------------------------------

    @traced
    def add_user(self, name: str, email: str) -> ServiceResult:
        op = "add_user"
        vr = validate_user(name, email)
        if not vr.valid:
            return _validation_failed(op, vr.errors)

        user = User(id=self._store.next_id("USR-"), name=name.strip(), email=email.strip())
        self._users.append(user)
        self._users_by_id[user.id] = user
        self._persist()
        log.info("catalog.user_added", user_id=user.id)
        return ServiceResult(ok=True, op=op, data=user.model_dump(mode="json"))

    @traced
    def update_user(
        self,
        user_id: str,
        *,
        name: str | None = None,
        email: str | None = None,
    ) -> ServiceResult:
        """Overwrite a user's name and/or email.

        An unknown *user_id* is a no-op: the result is ok with
        ``changed: False`` and a warning.
        """
        op = "update_user"
        user = self._users_by_id.get(user_id)
        if user is None:
            return _unchanged(op, user_id, f"No user with ID {user_id}; nothing updated")

        new_name = user.name if name is None else name
        new_email = user.email if email is None else email
        vr = validate_user(new_name, new_email)
        if not vr.valid:
            return _validation_failed(op, vr.errors)

        fields_changed = _assign(user, {"name": new_name.strip(), "email": new_email.strip()})
        self._persist()
        log.info("catalog.user_updated", user_id=user_id, fields=fields_changed)
        return ServiceResult(
            ok=True,
            op=op,
            data={
                **user.model_dump(mode="json"),
                "changed": True,
                "fields_changed": fields_changed,
            },
        )

    @traced
    def delete_user(self, user_id: str) -> ServiceResult:
        op = "delete_user"
        if user_id not in self._users_by_id:
            return fail(
                op, ErrorCode.USER_NOT_FOUND, f"No user found with ID: {user_id}", user_id=user_id
            )

        active = [ln.id for ln in self._loans if ln.user_id == user_id and ln.is_active]
        if active:
            return fail(
                op,
                ErrorCode.HAS_ACTIVE_LOANS,
                "Cannot delete user with active loans",
                user_id=user_id,
                active_loans=active,
            )

        self._users = [u for u in self._users if u.id != user_id]
        del self._users_by_id[user_id]
        self._persist()
        log.info("catalog.user_deleted", user_id=user_id)
        return ServiceResult(ok=True, op=op, data={"id": user_id, "deleted": True})

    @traced
    def get_user(self, user_id: str) -> ServiceResult:
        user = self._users_by_id.get(user_id)
        if user is None:
            return fail(
                "get_user",
                ErrorCode.USER_NOT_FOUND,
                f"No user found with ID: {user_id}",
                user_id=user_id,
            )
        return ServiceResult(ok=True, op="get_user", data=user.model_dump(mode="json"))

    @traced
    def list_users(self, *, email_contains: str | None = None) -> ServiceResult:
        users = self._users
        if email_contains:
            needle = email_contains.lower()
            users = [u for u in users if needle in u.email.lower()]
        items = [u.model_dump(mode="json") for u in users]
        return ServiceResult(ok=True, op="list_users", data={"items": items, "count": len(items)})

    # ------------------------------------------------------------------
    # Books
    # ------------------------------------------------------------------

    @traced
    def add_book(self, title: str, author: str, year: int | str, genre: str) -> ServiceResult:
        op = "add_book"
        vr = validate_book(title, author, year, genre)
        if not vr.valid:
            return _validation_failed(op, vr.errors)

        book = Book(
            id=self._store.next_id("BOOK-"),
            title=title.strip(),
            author=author.strip(),
            year=parse_year(year),
            genre=genre.strip(),
            available=True,
        )
        self._books.append(book)
        self._books_by_id[book.id] = book
        self._persist()
        log.info("catalog.book_added", book_id=book.id)
        return ServiceResult(ok=True, op=op, data=book.model_dump(mode="json"))

    @traced
    def update_book(
        self,
        book_id: str,
        *,
        title: str | None = None,
        author: str | None = None,
        year: int | str | None = None,
        genre: str | None = None,
    ) -> ServiceResult:
        """Overwrite a book's descriptive fields; ``available`` is never touched.

        An unknown *book_id* is a no-op, as with :meth:`update_user`.
        """
        op = "update_book"
        book = self._books_by_id.get(book_id)
        if book is None:
            return _unchanged(op, book_id, f"No book with ID {book_id}; nothing updated")

        new_title = book.title if title is None else title
        new_author = book.author if author is None else author
        new_year = book.year if year is None else year
        new_genre = book.genre if genre is None else genre
        vr = validate_book(new_title, new_author, new_year, new_genre)
        if not vr.valid:
            return _validation_failed(op, vr.errors)

        fields_changed = _assign(
            book,
            {
                "title": new_title.strip(),
                "author": new_author.strip(),
                "year": parse_year(new_year),
                "genre": new_genre.strip(),
            },
        )
        self._persist()
        log.info("catalog.book_updated", book_id=book_id, fields=fields_changed)
        return ServiceResult(
            ok=True,
            op=op,
            data={
                **book.model_dump(mode="json"),
                "changed": True,
                "fields_changed": fields_changed,
            },
        )

    @traced
    def delete_book(self, book_id: str) -> ServiceResult:
        op = "delete_book"
        if book_id not in self._books_by_id:
            return fail(
                op, ErrorCode.BOOK_NOT_FOUND, f"No book found with ID: {book_id}", book_id=book_id
            )

        active = [ln.id for ln in self._loans if ln.book_id == book_id and ln.is_active]
        if active:
            return fail(
                op,
                ErrorCode.CURRENTLY_LOANED,
                "Cannot delete book that is currently loaned",
                book_id=book_id,
                active_loans=active,
            )

        self._books = [b for b in self._books if b.id != book_id]
        del self._books_by_id[book_id]
        self._persist()
        log.info("catalog.book_deleted", book_id=book_id)
        return ServiceResult(ok=True, op=op, data={"id": book_id, "deleted": True})

    @traced
    def get_book(self, book_id: str) -> ServiceResult:
        book = self._books_by_id.get(book_id)
        if book is None:
            return fail(
                "get_book",
                ErrorCode.BOOK_NOT_FOUND,
                f"No book found with ID: {book_id}",
                book_id=book_id,
            )
        return ServiceResult(ok=True, op="get_book", data=book.model_dump(mode="json"))

    @traced
    def list_books(self, *, available_only: bool = False) -> ServiceResult:
        books = [b for b in self._books if b.available] if available_only else self._books
        items = [b.model_dump(mode="json") for b in books]
        return ServiceResult(ok=True, op="list_books", data={"items": items, "count": len(items)})

    # ------------------------------------------------------------------
    # Loans
    # ------------------------------------------------------------------

    @traced
    def register_loan(self, user_id: str, book_id: str) -> ServiceResult:
        """Lend a book to a user, marking the book unavailable."""
        op = "register_loan"
        user = self._users_by_id.get(user_id)
        book = self._books_by_id.get(book_id)
        if user is None or book is None:
            missing = [
                ref
                for ref, found in (("user_id", user), ("book_id", book))
                if found is None
            ]
            return fail(
                op,
                ErrorCode.INVALID_REFERENCE,
                "Invalid user or book selected",
                user_id=user_id,
                book_id=book_id,
                missing=missing,
            )

        if not book.available:
            return fail(
                op,
                ErrorCode.BOOK_UNAVAILABLE,
                f"Book is not available: {book.title}",
                book_id=book_id,
            )

        loan = Loan(
            id=self._store.next_id("LOAN-"),
            user_id=user_id,
            book_id=book_id,
            date=today_iso(),
            status=LoanStatus.ACTIVE,
        )
        self._loans.append(loan)
        self._loans_by_id[loan.id] = loan
        book.available = False
        self._persist()
        log.info("catalog.loan_registered", loan_id=loan.id, user_id=user_id, book_id=book_id)
        return ServiceResult(ok=True, op=op, data=self._loan_item(loan))

    @traced
    def return_loan(self, loan_id: str) -> ServiceResult:
        """Close an active loan and make its book available again.

        Unknown or already returned loans are a no-op.
        """
        op = "return_loan"
        loan = self._loans_by_id.get(loan_id)
        if loan is None:
            return _unchanged(op, loan_id, f"No loan with ID {loan_id}; nothing returned")
        if not is_valid_transition(loan.status, LoanStatus.RETURNED):
            return _unchanged(op, loan_id, f"Loan {loan_id} is already {loan.status}")

        loan.status = LoanStatus.RETURNED
        book = self._books_by_id.get(loan.book_id)
        if book is not None:
            book.available = True
        self._persist()
        log.info("catalog.loan_returned", loan_id=loan_id, book_id=loan.book_id)
        return ServiceResult(ok=True, op=op, data={**self._loan_item(loan), "changed": True})

    @traced
    def list_loans(self, *, status: LoanStatus | str | None = None) -> ServiceResult:
        loans = self._loans
        if status is not None:
            loans = [ln for ln in loans if ln.status == status]
        items = [self._loan_item(ln) for ln in loans]
        return ServiceResult(ok=True, op="list_loans", data={"items": items, "count": len(items)})

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _loan_item(self, loan: Loan) -> dict[str, Any]:
        user = self._users_by_id.get(loan.user_id)
        book = self._books_by_id.get(loan.book_id)
        return {
            **loan.model_dump(mode="json"),
            "user_name": user.name if user else UNKNOWN,
            "book_title": book.title if book else UNKNOWN,
        }

    def _persist(self) -> None:
        with trace_span("persist") as span:
            self._store.save_collections(
                {
                    USERS_KEY: self._users,
                    BOOKS_KEY: self._books,
                    LOANS_KEY: self._loans,
                }
            )
            if span is not None:
                span.annotate("loans", len(self._loans))


def _assign(record: User | Book, values: dict[str, Any]) -> list[str]:
    """Set each value on *record*; return the names of fields that changed."""
    changed: list[str] = []
    for key, value in values.items():
        if getattr(record, key) != value:
            setattr(record, key, value)
            changed.append(key)
    return changed


def _validation_failed(op: str, errors: list[str]) -> ServiceResult:
    return fail(op, ErrorCode.VALIDATION_FAILED, "; ".join(errors), errors=errors)


def _unchanged(op: str, record_id: str, warning: str) -> ServiceResult:
    return ServiceResult(
        ok=True,
        op=op,
        data={"id": record_id, "changed": False},
        warnings=[warning],
    )

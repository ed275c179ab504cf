"""Library catalog records: users, books, and loans.

A Loan moves one way, ``active`` → ``returned``, and is never deleted.
A Book's ``available`` flag mirrors whether an active Loan references it.
"""

from __future__ import annotations

from enum import StrEnum

from localstore.domain.records import Record


class LoanStatus(StrEnum):
    ACTIVE = "active"
    RETURNED = "returned"


LOAN_TRANSITIONS: dict[str, list[str]] = {
    "active": ["returned"],
    "returned": [],
}


def is_valid_transition(current: str, target: str) -> bool:
    """Check if a loan may move from *current* to *target*."""
    return target in LOAN_TRANSITIONS.get(current, [])


class User(Record):
    id: str
    name: str
    email: str


class Book(Record):
    id: str
    title: str
    author: str
    year: int
    genre: str
    available: bool = True


class Loan(Record):
    id: str
    user_id: str
    book_id: str
    date: str  # YYYY-MM-DD
    status: LoanStatus = LoanStatus.ACTIVE

    @property
    def is_active(self) -> bool:
        return self.status == LoanStatus.ACTIVE

"""Tests for catalog records and the loan lifecycle."""

from localstore.domain.catalog import (
    LOAN_TRANSITIONS,
    Book,
    Loan,
    LoanStatus,
    User,
    is_valid_transition,
)


class TestLoanTransitions:
    def test_active_to_returned(self) -> None:
        assert is_valid_transition("active", "returned") is True

    def test_returned_is_terminal(self) -> None:
        assert LOAN_TRANSITIONS["returned"] == []
        assert is_valid_transition("returned", "active") is False
        assert is_valid_transition("returned", "returned") is False

    def test_unknown_status(self) -> None:
        assert is_valid_transition("lost", "returned") is False


class TestRecords:
    def test_book_defaults_available(self) -> None:
        book = Book(id="BOOK-0001", title="T", author="A", year=2000, genre="G")
        assert book.available is True

    def test_loan_defaults_active(self) -> None:
        loan = Loan(id="LOAN-0001", user_id="USR-0001", book_id="BOOK-0001", date="2026-01-02")
        assert loan.status == LoanStatus.ACTIVE
        assert loan.is_active is True

    def test_loan_record_uses_camel_case(self) -> None:
        loan = Loan(id="LOAN-0001", user_id="USR-0001", book_id="BOOK-0001", date="2026-01-02")
        assert loan.to_record() == {
            "id": "LOAN-0001",
            "userId": "USR-0001",
            "bookId": "BOOK-0001",
            "date": "2026-01-02",
            "status": "active",
        }

    def test_user_round_trip(self) -> None:
        user = User(id="USR-0001", name="Ana", email="ana@example.com")
        assert User.model_validate(user.to_record()) == user

    def test_returned_loan_is_not_active(self) -> None:
        loan = Loan.model_validate(
            {
                "id": "LOAN-0002",
                "userId": "USR-0001",
                "bookId": "BOOK-0001",
                "date": "2026-01-02",
                "status": "returned",
            }
        )
        assert loan.is_active is False

"""Tests for user and book input validation."""

import pytest

from localstore.domain.validation import is_valid_email, parse_year, validate_book, validate_user


class TestEmail:
    @pytest.mark.parametrize("email", ["ana@example.com", "a.b@c.co", "x+y@d.org.br"])
    def test_valid(self, email: str) -> None:
        assert is_valid_email(email) is True

    @pytest.mark.parametrize(
        "email", ["ana", "ana@example", "@example.com", "ana @example.com", "ana@ex ample.com"]
    )
    def test_invalid(self, email: str) -> None:
        assert is_valid_email(email) is False


class TestParseYear:
    def test_int(self) -> None:
        assert parse_year(1899) == 1899

    def test_numeric_string(self) -> None:
        assert parse_year(" 2001 ") == 2001

    @pytest.mark.parametrize("value", [None, "", "abc", "19.5", True])
    def test_not_numeric(self, value: object) -> None:
        assert parse_year(value) is None  # type: ignore[arg-type]


class TestValidateUser:
    def test_valid(self) -> None:
        result = validate_user("Ana", "ana@example.com")
        assert result.valid is True
        assert result.errors == []

    def test_collects_all_errors(self) -> None:
        result = validate_user("  ", "")
        assert result.valid is False
        assert result.errors == ["Name is required", "Email is required"]

    def test_bad_email_shape(self) -> None:
        result = validate_user("Ana", "not-an-email")
        assert result.errors == ["Invalid email format"]


class TestValidateBook:
    def test_valid(self) -> None:
        assert validate_book("Dom Casmurro", "Machado", "1899", "Romance").valid is True

    def test_collects_all_errors(self) -> None:
        result = validate_book("", " ", "year", "")
        assert result.errors == [
            "Title is required",
            "Author is required",
            "Valid year is required",
            "Genre is required",
        ]

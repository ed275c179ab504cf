"""Input validation for catalog records.

Validators collect every problem instead of stopping at the first one, so a
form-style caller can report them all at once.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


@dataclass
class ValidationResult:
    """Result of a validation check."""

    valid: bool
    errors: list[str] = field(default_factory=list)


def is_valid_email(email: str) -> bool:
    """True when *email* looks like ``local@domain.tld`` with no whitespace."""
    return EMAIL_PATTERN.match(email) is not None


def parse_year(value: int | str | None) -> int | None:
    """Parse a year given as int or numeric string; None if not numeric."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    try:
        return int(str(value).strip())
    except ValueError:
        return None


def validate_user(name: str, email: str) -> ValidationResult:
    errors: list[str] = []
    if not name.strip():
        errors.append("Name is required")
    if not email.strip():
        errors.append("Email is required")
    elif not is_valid_email(email.strip()):
        errors.append("Invalid email format")
    return ValidationResult(valid=not errors, errors=errors)


def validate_book(
    title: str,
    author: str,
    year: int | str | None,
    genre: str,
) -> ValidationResult:
    errors: list[str] = []
    if not title.strip():
        errors.append("Title is required")
    if not author.strip():
        errors.append("Author is required")
    if parse_year(year) is None:
        errors.append("Valid year is required")
    if not genre.strip():
        errors.append("Genre is required")
    return ValidationResult(valid=not errors, errors=errors)

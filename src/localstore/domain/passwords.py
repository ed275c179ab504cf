"""Password strength rules.

A password passes when it meets the minimum length and contains each
required character class.  Checks report every unmet rule so the caller can
tell the user exactly what is missing.
"""

from __future__ import annotations

import string
from dataclasses import dataclass, field

DEFAULT_SPECIAL_CHARACTERS = "!@#$%&*()-_+={}[]|:;<>,.?/"


@dataclass
class PasswordCheck:
    """Outcome of :func:`check_strength`."""

    valid: bool
    passed: list[str] = field(default_factory=list)
    missing: list[str] = field(default_factory=list)


def check_strength(
    password: str,
    *,
    min_length: int = 8,
    require_digit: bool = True,
    require_special: bool = True,
    require_uppercase: bool = True,
    special_characters: str = DEFAULT_SPECIAL_CHARACTERS,
) -> PasswordCheck:
    """Evaluate *password* against each enabled rule.

    Uppercase means ASCII ``A``-``Z``; digits are ``0``-``9``.
    """
    rules: list[tuple[str, bool]] = [
        (f"at least {min_length} characters", len(password) >= min_length),
    ]
    if require_digit:
        rules.append(("at least 1 digit", any(c in string.digits for c in password)))
    if require_special:
        rules.append(
            (
                f"at least 1 special character ({special_characters})",
                any(c in special_characters for c in password),
            )
        )
    if require_uppercase:
        rules.append(
            ("at least 1 uppercase letter", any(c in string.ascii_uppercase for c in password))
        )

    passed = [label for label, ok in rules if ok]
    missing = [label for label, ok in rules if not ok]
    return PasswordCheck(valid=not missing, passed=passed, missing=missing)

"""AuthService — login validation and password strength checks.

Login rules run in a fixed order and the first failure wins:
fields filled → email has ``@`` → password long enough → account exists →
password matches.  Passwords never appear in results or log events.
"""

from __future__ import annotations

from localstore.config.logging import get_logger
from localstore.domain.errors import ErrorCode
from localstore.domain.passwords import check_strength
from localstore.services.base import BaseService
from localstore.services.result import ServiceResult, fail
from localstore.services.telemetry import traced

log = get_logger(__name__)


class AuthService(BaseService):
    """Checks credentials against the ``[login]`` accounts and ``[password]`` rules."""

    @traced
    def login(self, email: str | None, password: str | None) -> ServiceResult:
        op = "login"
        cfg = self.settings.login

        if not email:
            return fail(op, ErrorCode.EMPTY_FIELD, "Email field is empty", field="email")
        if not password:
            return fail(op, ErrorCode.EMPTY_FIELD, "Password field is empty", field="password")

        if "@" not in email:
            return fail(op, ErrorCode.INVALID_EMAIL, "Invalid email: it must contain @")

        if len(password) < cfg.min_password_length:
            return fail(
                op,
                ErrorCode.INVALID_PASSWORD,
                f"Invalid password: it must have at least {cfg.min_password_length} characters",
                min_length=cfg.min_password_length,
            )

        account = next((a for a in cfg.accounts if a.email == email), None)
        if account is None:
            log.info("auth.login_unknown", email=email)
            return fail(
                op,
                ErrorCode.LOGIN_NOT_FOUND,
                "Login does not exist: this email is not registered",
                email=email,
            )

        if account.password != password:
            log.info("auth.login_rejected", email=email)
            return fail(
                op,
                ErrorCode.WRONG_PASSWORD,
                "Incorrect password for this email",
                email=email,
            )

        log.info("auth.login_ok", email=email)
        return ServiceResult(ok=True, op=op, data={"email": account.email, "message": "Welcome"})

    @traced
    def check_password(self, password: str | None) -> ServiceResult:
        """Report which strength rules *password* meets and which it misses."""
        op = "check_password"
        if not password:
            return fail(op, ErrorCode.EMPTY_FIELD, "No password was entered", field="password")

        rules = self.settings.password
        check = check_strength(
            password,
            min_length=rules.min_length,
            require_digit=rules.require_digit,
            require_special=rules.require_special,
            require_uppercase=rules.require_uppercase,
            special_characters=rules.special_characters,
        )
        if not check.valid:
            return fail(
                op,
                ErrorCode.WEAK_PASSWORD,
                "Password does not meet the requirements: " + ", ".join(check.missing),
                data={"passed": check.passed},
                missing=check.missing,
            )
        return ServiceResult(ok=True, op=op, data={"valid": True, "passed": check.passed})

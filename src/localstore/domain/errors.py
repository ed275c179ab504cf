"""Error codes and their kinds.

Every failed ServiceResult carries one of these codes.  The kind groups
codes the way callers usually branch on them: bad input, a reference that
does not resolve, or a rule that blocks an otherwise valid request.
"""

from __future__ import annotations

from enum import StrEnum


class ErrorKind(StrEnum):
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    AUTH = "auth"


class ErrorCode(StrEnum):
    # validation
    INVALID_QUANTITY = "INVALID_QUANTITY"
    VALIDATION_FAILED = "VALIDATION_FAILED"
    EMPTY_FIELD = "EMPTY_FIELD"
    INVALID_EMAIL = "INVALID_EMAIL"
    INVALID_PASSWORD = "INVALID_PASSWORD"
    WEAK_PASSWORD = "WEAK_PASSWORD"
    # not found
    PRODUCT_NOT_FOUND = "PRODUCT_NOT_FOUND"
    ITEM_NOT_IN_CART = "ITEM_NOT_IN_CART"
    USER_NOT_FOUND = "USER_NOT_FOUND"
    BOOK_NOT_FOUND = "BOOK_NOT_FOUND"
    INVALID_REFERENCE = "INVALID_REFERENCE"
    LOGIN_NOT_FOUND = "LOGIN_NOT_FOUND"
    # conflict
    INSUFFICIENT_STOCK = "INSUFFICIENT_STOCK"
    BOOK_UNAVAILABLE = "BOOK_UNAVAILABLE"
    HAS_ACTIVE_LOANS = "HAS_ACTIVE_LOANS"
    CURRENTLY_LOANED = "CURRENTLY_LOANED"
    # auth
    WRONG_PASSWORD = "WRONG_PASSWORD"


ERROR_KINDS: dict[ErrorCode, ErrorKind] = {
    ErrorCode.INVALID_QUANTITY: ErrorKind.VALIDATION,
    ErrorCode.VALIDATION_FAILED: ErrorKind.VALIDATION,
    ErrorCode.EMPTY_FIELD: ErrorKind.VALIDATION,
    ErrorCode.INVALID_EMAIL: ErrorKind.VALIDATION,
    ErrorCode.INVALID_PASSWORD: ErrorKind.VALIDATION,
    ErrorCode.WEAK_PASSWORD: ErrorKind.VALIDATION,
    ErrorCode.PRODUCT_NOT_FOUND: ErrorKind.NOT_FOUND,
    ErrorCode.ITEM_NOT_IN_CART: ErrorKind.NOT_FOUND,
    ErrorCode.USER_NOT_FOUND: ErrorKind.NOT_FOUND,
    ErrorCode.BOOK_NOT_FOUND: ErrorKind.NOT_FOUND,
    ErrorCode.INVALID_REFERENCE: ErrorKind.NOT_FOUND,
    ErrorCode.LOGIN_NOT_FOUND: ErrorKind.NOT_FOUND,
    ErrorCode.INSUFFICIENT_STOCK: ErrorKind.CONFLICT,
    ErrorCode.BOOK_UNAVAILABLE: ErrorKind.CONFLICT,
    ErrorCode.HAS_ACTIVE_LOANS: ErrorKind.CONFLICT,
    ErrorCode.CURRENTLY_LOANED: ErrorKind.CONFLICT,
    ErrorCode.WRONG_PASSWORD: ErrorKind.AUTH,
}


def kind_of(code: ErrorCode) -> ErrorKind:
    """Return the kind a code belongs to."""
    return ERROR_KINDS[code]

"""Shared service-layer helper functions."""

from __future__ import annotations

from datetime import UTC, datetime
from decimal import Decimal


def today_iso() -> str:
    """Today's date as YYYY-MM-DD."""
    return datetime.now(UTC).strftime("%Y-%m-%d")


def money(value: Decimal) -> str:
    """Format a decimal amount with exactly two places (``2500.00``)."""
    return f"{value.quantize(Decimal('0.01'))}"

"""Presentation helpers for monetary amounts."""

from __future__ import annotations

from typing import Optional

from ..config import settings


def format_currency(amount: float | int | None, symbol: Optional[str] = None) -> str:
    """Format ``amount`` with the configured symbol and thousands separators.

    Whole amounts print without decimals; fractional ones keep up to two.
    """

    value = amount or 0
    prefix = symbol if symbol is not None else settings.currency_symbol
    sign = "-" if value < 0 else ""
    magnitude = abs(value)
    if float(magnitude).is_integer():
        body = f"{int(magnitude):,}"
    else:
        body = f"{magnitude:,.2f}".rstrip("0").rstrip(".")
    return f"{sign}{prefix}{body}"

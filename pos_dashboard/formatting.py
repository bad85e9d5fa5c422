"""Formatting utilities for currency and quantity display."""

from __future__ import annotations

import math
from typing import Union

Number = Union[float, int]


def round_currency(amount: Number) -> float:
    """Round to cents, halves going up (``0.125 -> 0.13``, ``-0.125 -> -0.12``).

    Example:
        >>> round_currency(1000 / 3)
        333.33
    """
    return math.floor(amount * 100 + 0.5) / 100


def format_currency(amount: Number, include_sign: bool = True) -> str:
    """Format a currency amount with thousands separators and two decimals.

    Args:
        amount: The amount to format
        include_sign: Whether to include the dollar sign

    Returns:
        Formatted currency string (e.g., "$1,234.56" or "1,234.56")

    Example:
        >>> format_currency(1234567.891)
        '$1,234,567.89'
        >>> format_currency(1234.5, include_sign=False)
        '1,234.50'
    """
    formatted = f"{amount:,.2f}"
    return f"${formatted}" if include_sign else formatted


def format_signed_currency(amount: Number) -> str:
    """Currency with the minus sign ahead of the dollar sign (``-$500.00``)."""
    prefix = '-' if amount < 0 else ''
    return f"{prefix}{format_currency(abs(amount))}"


def format_quantity(amount: Number, decimals: int = 0) -> str:
    """Format a count or weight with thousands separators.

    Example:
        >>> format_quantity(12345)
        '12,345'
        >>> format_quantity(2.5, decimals=2)
        '2.50'
    """
    return f"{amount:,.{decimals}f}"


def escape_dollar_for_markdown(text: str) -> str:
    """Escape dollar signs so Streamlit markdown does not read them as LaTeX."""
    return text.replace("$", "\\$")

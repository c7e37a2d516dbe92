"""Exact decimal-point placement for on-chain integer amounts."""

from __future__ import annotations

from typing import Any

from app.core.exceptions import InvalidAmountError


def parse_raw_amount(value: Any) -> int:
    """Parse a raw on-chain amount (int or digit string) into a non-negative int."""
    if isinstance(value, bool):
        raise InvalidAmountError(value, "booleans are not amounts")
    if isinstance(value, int):
        if value < 0:
            raise InvalidAmountError(value, "negative")
        return value
    if isinstance(value, str):
        text = value.strip()
        if text.isascii() and text.isdigit():
            return int(text)
        raise InvalidAmountError(value)
    raise InvalidAmountError(value, f"unsupported type {type(value).__name__}")


def format_units(raw_amount: Any, decimals: int) -> str:
    """Render ``raw_amount / 10**decimals`` as a decimal string.

    Works on the digit string so values beyond float precision stay exact.
    Trailing fractional zeros are dropped: ``format_units(1500, 3) == "1.5"``.
    """
    value = parse_raw_amount(raw_amount)
    if isinstance(decimals, bool) or not isinstance(decimals, int) or decimals < 0:
        raise InvalidAmountError(raw_amount, f"invalid decimals {decimals!r}")

    digits = str(value)
    if decimals == 0:
        return digits

    digits = digits.rjust(decimals + 1, "0")
    integer, fraction = digits[:-decimals], digits[-decimals:]
    fraction = fraction.rstrip("0")
    return f"{integer}.{fraction}" if fraction else integer

"""
errors.py — Typed exceptions for money operations

================================================================================
EXCEPTION HIERARCHY
================================================================================

    MoneyError (base)
    |
    +-- CurrencyMismatchError   CURRENCY_MISMATCH   two currencies compared/combined
    +-- NoCurrencyError         NO_CURRENCY         add/subtract with no currency at all
    +-- InvalidArgumentError    INVALID_ARGUMENT    bad split count, ratio, multiplier list
    +-- ConversionError         CONVERSION_FAILED   unsupported numeric input
    +-- DecodeError             DECODE_ERROR        malformed external representation

Each exception also subclasses a built-in: TypeError for mismatches and
unsupported inputs, ValueError for bad arguments and malformed data.

Catch by type, read the structured attributes, never parse the message:

    try:
        total = invoice.add(refund)
    except CurrencyMismatchError as e:
        log.warning(f"cannot net {e.left} with {e.right}")

================================================================================
"""

from __future__ import annotations
from typing import Any


class MoneyError(Exception):
    """Base exception for every error raised by fairmoney."""

    code: str = "MONEY_ERROR"


class CurrencyMismatchError(MoneyError, TypeError):
    """
    Two Money values with different currency codes were compared or combined.

    `result` holds the value the comparison would have produced without the
    currency check: False for the boolean comparisons, the raw three-way
    amount comparison for compare().
    """

    code: str = "CURRENCY_MISMATCH"

    def __init__(self, left: str, right: str, result: Any = None):
        self.left = left
        self.right = right
        self.result = result
        super().__init__(f"currencies don't match: {left!r} vs {right!r}")


class NoCurrencyError(MoneyError, ValueError):
    """Neither the receiver nor any operand of add/subtract carries a currency."""

    code: str = "NO_CURRENCY"

    def __init__(self, operation: str):
        self.operation = operation
        super().__init__(f"no currency found for {operation}")


class InvalidArgumentError(MoneyError, ValueError):
    """Programmer error: invalid split count, ratio, divisor or empty argument list."""

    code: str = "INVALID_ARGUMENT"


class ConversionError(MoneyError, TypeError):
    """A value could not be converted to an exact decimal amount."""

    code: str = "CONVERSION_FAILED"

    def __init__(self, value: Any, reason: str):
        self.value = value
        self.reason = reason
        super().__init__(f"cannot convert {value!r} ({type(value).__name__}): {reason}")


class DecodeError(MoneyError, ValueError):
    """Malformed external representation of a Money value."""

    code: str = "DECODE_ERROR"

    def __init__(self, message: str, field: str | None = None):
        self.field = field
        super().__init__(message)

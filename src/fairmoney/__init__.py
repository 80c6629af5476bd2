"""
fairmoney — Exact, currency-aware money for billing and ledgers

Decimal amounts bound to a currency, arithmetic that never mixes currencies,
and splitting/allocation that never loses or invents a minor unit.

================================================================================
QUICK START
================================================================================

Basic usage:

    from fairmoney import Money

    pound = Money.of(1, "GBP")
    two_pounds = pound.add(pound)

    # Split equally (sum ALWAYS equals original)
    parts = two_pounds.split(3)
    [p.display() for p in parts]            # ['£0.67', '£0.67', '£0.66']

    # Split by ratio
    Money.of(1, "GBP").allocate(33, 33, 33) # [0.34 GBP, 0.33 GBP, 0.33 GBP]

    # Currency safety
    Money.of(2, "GBP").equals(Money.of(2, "EUR"))   # CurrencyMismatchError

Aggregates and JSON:

    from fairmoney import aggregate, serialization

    aggregate.average(Money.of(1, "GBP"), Money.of(2, "GBP"), Money.of(4, "GBP"))
    # 2.33 GBP (truncated)

    serialization.dumps(Money.of("123.45", "IQD"))
    # '{"amount":123.450,"currency":"IQD"}'

Isolated currency tables:

    from fairmoney import CurrencyRegistry

    registry = CurrencyRegistry.with_defaults()
    registry.register("MOCK", "M$", "1 $", ".", ",", 5)
    Money.of(1, "MOCK", registry=registry)

================================================================================
"""

# Core Money type
from .core import Money

# Currencies
from .currency import (
    Currency,
    CurrencyRegistry,
    default_registry,
    register_currency,
)

# Errors
from .errors import (
    MoneyError,
    CurrencyMismatchError,
    NoCurrencyError,
    InvalidArgumentError,
    ConversionError,
    DecodeError,
)

from .formatter import Formatter
from .conversion import to_decimal
from . import aggregate, calculator, serialization

__version__ = "1.0.0"
__license__ = "MIT"

__all__ = [
    # Core
    "Money",
    # Currencies
    "Currency",
    "CurrencyRegistry",
    "default_registry",
    "register_currency",
    "Formatter",
    "to_decimal",
    # Errors
    "MoneyError",
    "CurrencyMismatchError",
    "NoCurrencyError",
    "InvalidArgumentError",
    "ConversionError",
    "DecodeError",
    # Modules
    "aggregate",
    "calculator",
    "serialization",
]

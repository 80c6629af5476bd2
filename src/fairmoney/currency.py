"""
currency.py — Currency descriptors and the currency registry

================================================================================
DESCRIPTOR
================================================================================

A Currency carries everything the engine and the formatter need:

    code       ISO 4217 alphabetic code ("EUR"), registry key
    fraction   minor-unit digits (EUR=2, JPY=0, KWD=3)
    grapheme   display symbol ("€")
    template   placement: "1" marks the number, "$" the grapheme ("$1", "1 $")
    decimal    decimal separator
    thousand   thousands separator

Descriptors are frozen: a Money holds a reference and never copies or mutates it.

================================================================================
REGISTRY
================================================================================

    registry = CurrencyRegistry.with_defaults()
    registry.register("MOCK", "M$", "1 $", ".", ",", 5)
    registry.get("mock")        # -> Currency(code="MOCK", fraction=5, ...)
    registry.get("FOO")         # -> synthetic descriptor, never fails

Readers always see an immutable snapshot. register() builds a new snapshot
under a lock and swaps it in, so lookups never block and never observe a
half-written table. Re-registering a code replaces it for later lookups only.

================================================================================
"""

from __future__ import annotations
from dataclasses import dataclass
from decimal import Decimal
from types import MappingProxyType
from typing import Iterable, Mapping, Optional
import logging
import threading

logger = logging.getLogger(__name__)

# Fraction digits assigned to codes missing from the registry
DEFAULT_FRACTION = 2


@dataclass(frozen=True, slots=True)
class Currency:
    """Immutable currency descriptor."""
    code: str
    fraction: int = DEFAULT_FRACTION
    grapheme: str = ""
    template: str = "1$"
    decimal: str = "."
    thousand: str = ","

    def __post_init__(self) -> None:
        if isinstance(self.fraction, bool) or not isinstance(self.fraction, int) or self.fraction < 0:
            raise ValueError(f"fraction must be a non-negative int, got {self.fraction!r}")

    @property
    def unit(self) -> Decimal:
        """One minor unit in major units (0.01 for EUR, 1 for JPY)."""
        return Decimal(1).scaleb(-self.fraction)

    def same_as(self, other: Currency) -> bool:
        """Currencies are the same when their codes are, whatever the descriptor."""
        return self.code == other.code

    def __str__(self) -> str:
        return self.code


def normalize_code(code: str) -> str:
    return code.strip().upper()


def unknown_currency(code: str) -> Currency:
    """
    Synthetic descriptor for an unregistered code.

    The code doubles as grapheme: Money.of(1, "FOO").display() == "1.00FOO".
    """
    return Currency(code=code, fraction=DEFAULT_FRACTION, grapheme=code, template="1$")


# Descriptor of the empty Money (no currency)
NO_CURRENCY = unknown_currency("")


# ==============================================================================
# ISO 4217 SEED TABLE
# ==============================================================================

# (code, grapheme, template, decimal, thousand, fraction)
ISO_CURRENCIES: tuple[tuple[str, str, str, str, str, int], ...] = (
    ("AED", ".د.إ", "1 $", ".", ",", 2),
    ("AFN", "؋", "1 $", ".", ",", 2),
    ("ALL", "L", "$1", ".", ",", 2),
    ("AMD", "դր.", "1 $", ".", ",", 2),
    ("ARS", "$", "$1", ",", ".", 2),
    ("AUD", "$", "$1", ".", ",", 2),
    ("AZN", "₼", "1 $", ".", ",", 2),
    ("BAM", "KM", "$1", ".", ",", 2),
    ("BDT", "৳", "$1", ".", ",", 2),
    ("BGN", "лв", "$1", ".", ",", 2),
    ("BHD", ".د.ب", "1 $", ".", ",", 3),
    ("BRL", "R$", "$1", ",", ".", 2),
    ("BTC", "₿", "$1", ".", ",", 8),
    ("BYN", "p.", "1 $", ",", " ", 2),
    ("CAD", "$", "$1", ".", ",", 2),
    ("CHF", "CHF", "1 $", ".", ",", 2),
    ("CLP", "$", "$1", "", ".", 0),
    ("CNY", "元", "1 $", ".", ",", 2),
    ("COP", "$", "$1", ",", ".", 2),
    ("CZK", "Kč", "1 $", ",", ".", 2),
    ("DKK", "kr", "1 $", ",", ".", 2),
    ("DZD", ".د.ج", "1 $", ".", ",", 2),
    ("EGP", "£", "$1", ".", ",", 2),
    ("EUR", "€", "$1", ".", ",", 2),
    ("GBP", "£", "$1", ".", ",", 2),
    ("GEL", "ლ", "1 $", ".", ",", 2),
    ("HKD", "$", "$1", ".", ",", 2),
    ("HUF", "Ft", "$1", ".", ",", 2),
    ("IDR", "Rp", "$1", ".", ",", 2),
    ("ILS", "₪", "$1", ".", ",", 2),
    ("INR", "₹", "$1", ".", ",", 2),
    ("IQD", ".ع.د", "1 $", ".", ",", 3),
    ("IRR", "﷼", "1 $", ".", ",", 2),
    ("ISK", "kr", "$1", ",", ".", 0),
    ("JOD", ".د.إ", "1 $", ".", ",", 3),
    ("JPY", "¥", "$1", ".", ",", 0),
    ("KES", "KSh", "$1", ".", ",", 2),
    ("KRW", "₩", "$1", ".", ",", 0),
    ("KWD", ".د.ك", "1 $", ".", ",", 3),
    ("KZT", "₸", "$1", ".", ",", 2),
    ("LBP", "£", "$1", ".", ",", 2),
    ("LKR", "₨", "$1", ".", ",", 2),
    ("LYD", ".د.ل", "1 $", ".", ",", 3),
    ("MAD", ".د.م", "1 $", ".", ",", 2),
    ("MXN", "$", "$1", ".", ",", 2),
    ("MYR", "RM", "$1", ".", ",", 2),
    ("NGN", "₦", "$1", ".", ",", 2),
    ("NOK", "kr", "1 $", ",", ".", 2),
    ("NZD", "$", "$1", ".", ",", 2),
    ("OMR", "﷼", "1 $", ".", ",", 3),
    ("PEN", "S/", "$1", ".", ",", 2),
    ("PHP", "₱", "$1", ".", ",", 2),
    ("PKR", "₨", "$1", ".", ",", 2),
    ("PLN", "zł", "1 $", ",", " ", 2),
    ("QAR", "﷼", "1 $", ".", ",", 2),
    ("RON", "lei", "$1", ",", ".", 2),
    ("RSD", "Дин.", "$1", ".", ",", 2),
    ("RUB", "₽", "1 $", ".", ",", 2),
    ("SAR", "﷼", "1 $", ".", ",", 2),
    ("SEK", "kr", "1 $", ",", " ", 2),
    ("SGD", "$", "$1", ".", ",", 2),
    ("THB", "฿", "$1", ".", ",", 2),
    ("TND", ".د.ت", "1 $", ".", ",", 3),
    ("TRY", "₺", "$1", ".", ",", 2),
    ("TWD", "NT$", "$1", ".", ",", 2),
    ("UAH", "₴", "1 $", ",", " ", 2),
    ("USD", "$", "$1", ".", ",", 2),
    ("UYU", "$", "$1", ",", ".", 2),
    ("VND", "₫", "1 $", ",", ".", 0),
    ("XAF", "Fr", "1 $", ",", ".", 0),
    ("XOF", "CFA", "1 $", ",", ".", 0),
    ("ZAR", "R", "$1", ".", " ", 2),
)


class CurrencyRegistry:
    """
    Append-only lookup table code -> Currency.

    Pass an instance to Money.of() / JSONCodec to isolate a test or a tenant
    from the process-wide default_registry().
    """

    def __init__(self, currencies: Optional[Iterable[Currency]] = None):
        self._lock = threading.Lock()
        table = {c.code: c for c in currencies or ()}
        self._snapshot: Mapping[str, Currency] = MappingProxyType(table)

    @classmethod
    def with_defaults(cls) -> CurrencyRegistry:
        """Registry seeded with the ISO 4217 table."""
        return cls(
            Currency(code=code, grapheme=grapheme, template=template,
                     decimal=decimal, thousand=thousand, fraction=fraction)
            for code, grapheme, template, decimal, thousand, fraction in ISO_CURRENCIES
        )

    def register(
        self,
        code: str,
        grapheme: str,
        template: str,
        decimal: str,
        thousand: str,
        fraction: int,
    ) -> Currency:
        """Add or replace a currency. Returns the stored descriptor."""
        normalized = normalize_code(code)
        if not normalized:
            raise ValueError("currency code must not be empty")

        currency = Currency(
            code=normalized, fraction=fraction, grapheme=grapheme,
            template=template, decimal=decimal, thousand=thousand,
        )
        with self._lock:
            replaced = normalized in self._snapshot
            table = dict(self._snapshot)
            table[normalized] = currency
            self._snapshot = MappingProxyType(table)

        logger.debug(f"CurrencyRegistry {'replaced' if replaced else 'added'} {normalized} (fraction={fraction})")
        return currency

    def lookup(self, code: str) -> Optional[Currency]:
        """Registered descriptor for `code` (case-insensitive), or None."""
        return self._snapshot.get(normalize_code(code))

    def get(self, code: str) -> Currency:
        """Registered descriptor, or the synthetic one for unknown/empty codes."""
        normalized = normalize_code(code)
        if not normalized:
            return NO_CURRENCY

        currency = self._snapshot.get(normalized)
        if currency is None:
            logger.debug(f"CurrencyRegistry has no {normalized!r}, using fraction={DEFAULT_FRACTION} fallback")
            return unknown_currency(normalized)
        return currency

    def codes(self) -> list[str]:
        return sorted(self._snapshot)

    def __contains__(self, code: object) -> bool:
        return isinstance(code, str) and normalize_code(code) in self._snapshot

    def __len__(self) -> int:
        return len(self._snapshot)

    def __repr__(self) -> str:
        return f"CurrencyRegistry(currencies={len(self._snapshot)})"


_default_registry: Optional[CurrencyRegistry] = None
_default_lock = threading.Lock()


def default_registry() -> CurrencyRegistry:
    """Process-wide registry used when no registry is passed explicitly."""
    global _default_registry
    if _default_registry is None:
        with _default_lock:
            if _default_registry is None:
                _default_registry = CurrencyRegistry.with_defaults()
    return _default_registry


def register_currency(
    code: str,
    grapheme: str,
    template: str,
    decimal: str,
    thousand: str,
    fraction: int,
) -> Currency:
    """Register a currency on the default registry."""
    return default_registry().register(code, grapheme, template, decimal, thousand, fraction)

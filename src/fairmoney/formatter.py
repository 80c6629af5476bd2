"""
formatter.py — Textual rendering of amounts

    Formatter.for_currency(eur).format(Decimal("-1234567.891"))   # "-€1,234,567.89"

Rules:
- the template is filled with the ABSOLUTE value, "-" is prepended afterwards
- integer part grouped by `thousand` every 3 digits from the right
- fractional digits truncated (never rounded) or zero-padded to `fraction`
- the first "1" of the template becomes the number, the first "$" the grapheme
"""

from __future__ import annotations
from dataclasses import dataclass, replace
from decimal import Decimal

from .currency import Currency


@dataclass(frozen=True)
class Formatter:
    """Formatting rules of a single currency."""
    fraction: int
    decimal: str
    thousand: str
    grapheme: str
    template: str

    @classmethod
    def for_currency(cls, currency: Currency) -> Formatter:
        return cls(
            fraction=currency.fraction,
            decimal=currency.decimal,
            thousand=currency.thousand,
            grapheme=currency.grapheme,
            template=currency.template,
        )

    def without_grapheme(self) -> Formatter:
        return replace(self, grapheme="")

    def _group(self, digits: str) -> str:
        if not self.thousand:
            return digits
        groups = []
        while len(digits) > 3:
            groups.insert(0, digits[-3:])
            digits = digits[:-3]
        groups.insert(0, digits)
        return self.thousand.join(groups)

    def format(self, amount: Decimal) -> str:
        # Fixed-point, never scientific: "1E+3" -> "1000"
        plain = f"{amount.copy_abs():f}"
        integer, _, fractional = plain.partition(".")

        text = self._group(integer)
        if self.fraction > 0:
            fractional = fractional[: self.fraction].ljust(self.fraction, "0")
            text = text + self.decimal + fractional

        text = self.template.replace("1", text, 1)
        text = text.replace("$", self.grapheme, 1)

        if amount < 0:
            text = "-" + text
        return text

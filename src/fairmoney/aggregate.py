"""
aggregate.py — Aggregates over collections of Money

All functions fail fast with the first CurrencyMismatchError: mixed currencies
are never partially aggregated.

    total(a, b, c)          # left fold over Money.add; total() == Money.empty()
    average(a, b, c)        # total / count, truncated to the currency fraction
    minimum(a, b, c)        # first smallest
    maximum(a, b, c)        # first largest
    sort([c, a, b])         # new list, stable
    median(a, b, c, d)      # middle value, or truncated mean of the two middle ones
"""

from __future__ import annotations
from functools import cmp_to_key
from typing import Iterable

from .core import Money
from .errors import InvalidArgumentError


def total(*moneys: Money) -> Money:
    """Sum of all values. No values -> Money.empty()."""
    if not moneys:
        return Money.empty()

    result = moneys[0]
    for money in moneys[1:]:
        result = result.add(money)
    return result


def average(*moneys: Money) -> Money:
    if not moneys:
        raise InvalidArgumentError("average of no values")
    return total(*moneys).divide(len(moneys))


def minimum(*moneys: Money) -> Money:
    if not moneys:
        raise InvalidArgumentError("minimum of no values")

    result = moneys[0]
    for money in moneys[1:]:
        if money.less_than(result):
            result = money
    return result


def maximum(*moneys: Money) -> Money:
    if not moneys:
        raise InvalidArgumentError("maximum of no values")

    result = moneys[0]
    for money in moneys[1:]:
        if money.greater_than(result):
            result = money
    return result


def _order(a: Money, b: Money) -> int:
    if a.less_than(b):
        return -1
    if b.less_than(a):
        return 1
    return 0


def sort(moneys: Iterable[Money]) -> list[Money]:
    """
    Ascending copy of `moneys`; equal values keep their input order.

    Any comparison sort has to compare across currency groups to order them,
    so a mixed input always hits a CurrencyMismatchError.
    """
    return sorted(moneys, key=cmp_to_key(_order))


def median(*moneys: Money) -> Money:
    if not moneys:
        raise InvalidArgumentError("median of no values")

    ordered = sort(moneys)
    middle = len(ordered) // 2
    if len(ordered) % 2 == 1:
        return ordered[middle]
    return ordered[middle - 1].add(ordered[middle]).divide(2)

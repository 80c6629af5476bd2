"""
serialization.py — JSON boundary for Money

================================================================================
FORMAT
================================================================================

    {"amount":123.450,"currency":"IQD"}

- amount is a JSON number with exactly `fraction` digits (truncated, never
  rounded, never passed through float)
- the empty Money encodes as {"amount":0.00,"currency":""}
- decoding accepts optional "amount" (number) and "currency" (string);
  {} decodes to Money.empty(); numbers are parsed straight into Decimal

================================================================================
CODECS
================================================================================

There are no process-wide hooks. A codec is a strategy object handed to the
call that needs it:

    dumps(money)                              # default JSONCodec
    dumps(money, codec=LegacyCodec())         # any object with encode/decode
    loads('{"amount": 1, "currency": "USD"}', codec=JSONCodec(registry))

================================================================================
"""

from __future__ import annotations
from decimal import Decimal
from typing import Optional, Protocol, Union, runtime_checkable
import json

from .core import Money
from .currency import CurrencyRegistry
from .errors import DecodeError


@runtime_checkable
class MoneyCodec(Protocol):
    """Encoding strategy for Money values."""

    def encode(self, money: Money) -> str:
        ...

    def decode(self, data: Union[str, bytes]) -> Money:
        ...


def _render_amount(amount: Decimal) -> str:
    if amount.is_zero():
        amount = amount.copy_abs()
    return f"{amount:f}"


class JSONCodec:
    """Default JSON codec, registry-aware on decode."""

    def __init__(self, registry: Optional[CurrencyRegistry] = None):
        self.registry = registry

    def encode(self, money: Money) -> str:
        data = money.to_dict()
        # json.dumps would go through float and lose trailing zeros
        return '{"amount":%s,"currency":%s}' % (
            _render_amount(data["amount"]),
            json.dumps(data["currency"], ensure_ascii=False),
        )

    def decode(self, data: Union[str, bytes]) -> Money:
        # JSONDecodeError, UnicodeDecodeError and the int digit limit are all ValueError
        try:
            parsed = json.loads(data, parse_float=Decimal)
        except ValueError as e:
            raise DecodeError(f"invalid json: {e}") from e

        if not isinstance(parsed, dict):
            raise DecodeError(f"expected a JSON object, got {type(parsed).__name__}")
        return Money.from_dict(parsed, registry=self.registry)


DEFAULT_CODEC = JSONCodec()


def dumps(money: Money, codec: Optional[MoneyCodec] = None) -> str:
    return (codec or DEFAULT_CODEC).encode(money)


def loads(data: Union[str, bytes], codec: Optional[MoneyCodec] = None) -> Money:
    return (codec or DEFAULT_CODEC).decode(data)

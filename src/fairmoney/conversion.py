"""
conversion.py — Conversione esplicita verso Decimal

Unico punto di ingresso per i valori numerici "esterni" (importi, moltiplicatori,
divisori). I tipi accettati sono un insieme chiuso:

    int      (bool escluso: True * 100 non è un importo)
    float    (solo finiti, convertiti tramite repr: 0.1 -> Decimal("0.1"))
    str      (parsing Decimal, spazi ai bordi ammessi)
    Decimal  (solo finiti)

Qualsiasi altro input solleva ConversionError. Mai NaN, mai infinito, mai
un ordine di grandezza oltre ±MAX_EXPONENT (es. 1e999999999, 0E-999999999).
"""

from __future__ import annotations
from decimal import Decimal, InvalidOperation
from typing import Union

from .errors import ConversionError

Numeric = Union[int, float, str, Decimal]

# Limite sull'esponente "adjusted" (cifra più significativa) degli input.
# Copre tutto il range dei float (~1e308 .. 5e-324).
MAX_EXPONENT = 1000


def _finite(value: Decimal, original: object) -> Decimal:
    if not value.is_finite():
        raise ConversionError(original, "non-finite values are not amounts")
    if not -MAX_EXPONENT <= value.adjusted() <= MAX_EXPONENT:
        raise ConversionError(original, f"exponent outside ±{MAX_EXPONENT}")
    return value


def to_decimal(value: Numeric) -> Decimal:
    """Converte un valore numerico nella rappresentazione decimale esatta."""
    if isinstance(value, bool):
        raise ConversionError(value, "bool is not a numeric amount")

    if isinstance(value, Decimal):
        return _finite(value, value)

    if isinstance(value, int):
        return _finite(Decimal(value), value)

    if isinstance(value, float):
        # repr() è la stringa più corta che ricostruisce lo stesso float:
        # evita di trascinarsi dietro l'errore binario (0.1 -> 0.1000000000000000055...)
        return _finite(Decimal(repr(value)), value)

    if isinstance(value, str):
        try:
            parsed = Decimal(value.strip())
        except InvalidOperation:
            raise ConversionError(value, "not a decimal number") from None
        return _finite(parsed, value)

    raise ConversionError(value, "unsupported type")

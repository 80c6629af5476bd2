"""
calculator.py — Primitive aritmetiche su Decimal

Funzioni pure, senza stato e senza valuta: la precisione (cifre decimali)
la sceglie sempre il chiamante.

POLICY
    divide     -> TRONCAMENTO verso zero alla precisione richiesta
    modulus    -> resto coerente con divide: b * divide(a, b, p) + modulus(a, b, p) == a
    allocate   -> a * ratio / total, arrotondato HALF_UP (via da zero)
    round      -> HALF_UP (via da zero)

Ogni operazione gira in un contesto locale con precisione allargata quanto
basta per gli operandi: add, subtract e multiply sono esatti, senza il limite
delle 28 cifre del contesto di default.
"""

from __future__ import annotations
from decimal import Context, Decimal, ROUND_DOWN, ROUND_HALF_UP, localcontext

from .errors import InvalidArgumentError

# Precisione minima dei contesti di lavoro (default di decimal)
MIN_PRECISION = 28

ZERO = Decimal(0)


def _digits(value: Decimal) -> int:
    sign, digits, exponent = value.as_tuple()
    return len(digits) + abs(exponent)


def _context(*values: Decimal, extra: int = 0) -> Context:
    """Contesto con abbastanza cifre per rappresentare esattamente il risultato."""
    needed = sum(_digits(v) for v in values) + extra + 2
    return Context(prec=max(MIN_PRECISION, needed), rounding=ROUND_DOWN)


def _quantum(precision: int) -> Decimal:
    return Decimal(1).scaleb(-precision)


def add(a: Decimal, b: Decimal) -> Decimal:
    with localcontext(_context(a, b)):
        return a + b


def subtract(a: Decimal, b: Decimal) -> Decimal:
    with localcontext(_context(a, b)):
        return a - b


def multiply(a: Decimal, b: Decimal) -> Decimal:
    with localcontext(_context(a, b)):
        return a * b


def divide(a: Decimal, b: Decimal, precision: int) -> Decimal:
    """
    Divisione esatta troncata (verso zero) a `precision` cifre decimali.

    Nessun arrotondamento: chi vuole arrotondare chiama round() esplicitamente.
    """
    if b.is_zero():
        raise InvalidArgumentError("division by zero")
    with localcontext(_context(a, b, extra=precision)):
        # // su Decimal tronca verso zero (a differenza di int, che va verso -inf)
        quotient = a.scaleb(precision) // b
        if quotient.is_zero():
            quotient = ZERO
        return quotient.scaleb(-precision)


def modulus(a: Decimal, b: Decimal, precision: int) -> Decimal:
    """Resto di a / b quando il quoziente è troncato a `precision` cifre."""
    quotient = divide(a, b, precision)
    return subtract(a, multiply(b, quotient))


def allocate(a: Decimal, ratio: Decimal, total: Decimal, precision: int) -> Decimal:
    """
    Quota proporzionale: a * ratio / total, arrotondata HALF_UP a `precision` cifre.

    Se a o total sono zero restituisce zero esatto: niente divisione per zero.
    """
    if a.is_zero() or total.is_zero():
        return ZERO

    with localcontext(_context(a, ratio, total, extra=precision)):
        scaled = (a * ratio).scaleb(precision)
        quotient, remainder = divmod(scaled, total)
        # quotient e remainder sono esatti: l'arrotondamento si decide sul resto
        if 2 * abs(remainder) >= abs(total):
            quotient += 1 if (scaled < 0) == (total < 0) else -1
        return quotient.scaleb(-precision)


def absolute(a: Decimal) -> Decimal:
    return a.copy_abs()


def negative(a: Decimal) -> Decimal:
    if a.is_zero():
        return a.copy_abs()
    return a.copy_negate()


def round(a: Decimal, digits: int) -> Decimal:
    """Arrotonda HALF_UP (0.5 -> 1, -0.5 -> -1) a `digits` cifre decimali."""
    with localcontext(_context(a, extra=digits)):
        return a.quantize(_quantum(digits), rounding=ROUND_HALF_UP)

"""
distribution.py — Distribuzione senza perdite (split e allocate)

================================================================================
INVARIANTE
================================================================================

Per qualsiasi importo a e qualsiasi numero di parti:

    sum(parti) == a        (esatto, nessun centesimo perso o inventato)

================================================================================
ALGORITMO (round-robin)
================================================================================

1. Ogni parte riceve la sua quota "base" alla precisione della valuta
   (split: divisione troncata; allocate: quota proporzionale arrotondata).
2. Il residuo (importo - somma delle quote) viene distribuito una minor unit
   alla volta, con il segno del residuo, alle parti 0, 1, 2, ..., n-1, 0, ...
   Le prime parti ricevono il centesimo in più per prime.
3. Se l'importo ha più cifre della valuta (es. 1.005 EUR), la frazione
   sotto la minor unit finisce nella parte 0: la somma resta esatta.

Esempio: 2.00 GBP / 3

    base      = 0.66, 0.66, 0.66
    residuo   = 0.02 -> due unità da 0.01
    risultato = 0.67, 0.67, 0.66

================================================================================
"""

from __future__ import annotations
from decimal import Decimal
from typing import Sequence
import logging

from . import calculator
from .errors import InvalidArgumentError

logger = logging.getLogger(__name__)

# Somma massima dei ratio (int64, come i sistemi contabili a valle)
MAX_RATIO_SUM = 2**63 - 1


def _spread(shares: list[Decimal], leftover: Decimal, fraction: int) -> list[Decimal]:
    """Distribuisce `leftover` sulle quote, una minor unit alla volta, round-robin."""
    unit = Decimal(1).scaleb(-fraction)
    whole = calculator.divide(leftover, unit, 0)
    residue = calculator.subtract(leftover, calculator.multiply(whole, unit))

    step = unit if leftover > 0 else calculator.negative(unit)
    n = len(shares)
    for i in range(int(abs(whole))):
        p = i % n
        shares[p] = calculator.add(shares[p], step)

    if not residue.is_zero():
        shares[0] = calculator.add(shares[0], residue)
    return shares


def split_amount(amount: Decimal, n: int, fraction: int) -> list[Decimal]:
    """
    Divide `amount` in n parti che differiscono al più di una minor unit.

    Raises:
        InvalidArgumentError: se n non è un int > 0
    """
    if isinstance(n, bool) or not isinstance(n, int):
        raise InvalidArgumentError(f"split deve ricevere un int, ricevuto: {type(n).__name__}")
    if n <= 0:
        raise InvalidArgumentError(f"n deve essere > 0, ricevuto: {n}")

    divisor = Decimal(n)
    base = calculator.divide(amount, divisor, fraction)
    remainder = calculator.modulus(amount, divisor, fraction)

    logger.debug("split %s in %d parti: base=%s, resto=%s", amount, n, base, remainder)
    return _spread([base] * n, remainder, fraction)


def allocate_amount(amount: Decimal, ratios: Sequence[int], fraction: int) -> list[Decimal]:
    """
    Divide `amount` proporzionalmente ai ratio (interi non negativi).

    Se tutti i ratio sono 0 ogni quota è zero esatto e nessun residuo viene
    distribuito.

    Raises:
        InvalidArgumentError: ratio assenti, negativi, non interi o con somma > MAX_RATIO_SUM
    """
    if not ratios:
        raise InvalidArgumentError("nessun ratio specificato")

    total = 0
    for r in ratios:
        if isinstance(r, bool) or not isinstance(r, int):
            raise InvalidArgumentError(f"ratio deve essere int, ricevuto: {type(r).__name__}")
        if r < 0:
            raise InvalidArgumentError("ratio negativi non ammessi")
        if r > MAX_RATIO_SUM - total:
            raise InvalidArgumentError(f"la somma dei ratio supera {MAX_RATIO_SUM}")
        total += r

    total_dec = Decimal(total)
    shares = [
        calculator.allocate(amount, Decimal(r), total_dec, fraction)
        for r in ratios
    ]
    if total == 0:
        return shares

    allocated = Decimal(0)
    for s in shares:
        allocated = calculator.add(allocated, s)
    leftover = calculator.subtract(amount, allocated)

    logger.debug("allocate %s su %d ratio (totale %d): residuo=%s", amount, len(ratios), total, leftover)
    return _spread(shares, leftover, fraction)

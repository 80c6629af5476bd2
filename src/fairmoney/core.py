"""
core.py — Domain Primitive per rappresentazione monetaria

================================================================================
DESIGN PRINCIPLES
================================================================================

1. RAPPRESENTAZIONE INTERNA
   Decimal esatto in major unit (1.00 = un euro, non un centesimo).
   Mai floating point per valori memorizzati o confrontati.

2. TYPE SAFETY
   Operazioni e confronti tra valute diverse sollevano CurrencyMismatchError
   (sottoclasse di TypeError). Le valute si confrontano per codice.

3. IMMUTABILITA
   Frozen dataclass. Ogni operazione restituisce nuova istanza.
   Nessun side effect, safe per concorrenza.

4. PRECISION VARIABILE
   Ogni valuta ha la sua precisione (EUR=2, JPY=0, KWD=3), letta dal
   CurrencyRegistry. Valute sconosciute: precisione 2, codice come simbolo.

5. TRONCAMENTO ESPLICITO
   divide() tronca alla precisione della valuta. Chi vuole arrotondare
   chiama round() esplicitamente.

6. INVARIANTI VERIFICABILI
   split(n) e allocate(*ratios) garantiscono sum(parts) == original.

================================================================================
MONEY VUOTO
================================================================================

Money.empty() è l'accumulatore "senza valuta": importo zero e codice "".

    is_empty()  <=>  amount == 0 and currency.code == ""

add()/subtract() ignorano gli operandi vuoti, e un ricevente vuoto adotta la
valuta del primo operando che ne ha una:

    Money.empty().add(Money.of(5, "EUR"))     # 5.00 EUR
    Money.of(5, "").add(Money.of(1, "EUR"))   # CurrencyMismatchError: non è vuoto

================================================================================
"""

from __future__ import annotations
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, ClassVar, Mapping, Optional, Union

from . import calculator
from .conversion import Numeric, to_decimal
from .currency import NO_CURRENCY, Currency, CurrencyRegistry, default_registry
from .distribution import allocate_amount, split_amount
from .errors import (
    ConversionError,
    CurrencyMismatchError,
    DecodeError,
    InvalidArgumentError,
    NoCurrencyError,
)
from .formatter import Formatter

ZERO = Decimal(0)


def _resolve(code: Union[str, Currency], registry: Optional[CurrencyRegistry]) -> Currency:
    if isinstance(code, Currency):
        return code
    if not isinstance(code, str):
        raise TypeError(f"Codice valuta non valido: {type(code).__name__}")
    return (registry or default_registry()).get(code)


# ==============================================================================
# MONEY CLASS
# ==============================================================================

@dataclass(frozen=True, slots=True, order=False)
class Money:
    """
    Domain Primitive per importi monetari.

    INVARIANTI:
    1. _amount è sempre Decimal finito (nessun floating point)
    2. _currency è sempre un Currency condiviso, mai copiato né modificato
    3. Operazioni tra valute diverse sollevano CurrencyMismatchError
    4. split(n) / allocate(*ratios) garantiscono sum(parts) == self

    USAGE:
        pound = Money.of(1, "GBP")
        parts = pound.add(pound).split(3)
        # [£0.67, £0.67, £0.66]

    SERIALIZATION:
        to_dict() / from_dict(), oppure fairmoney.serialization per il JSON.
        Il formato è: {"amount": <numero a `fraction` cifre>, "currency": str}
    """
    _amount: Decimal
    _currency: Currency

    # Limite parti per split (DoS protection)
    MAX_DISTRIBUTION_PARTS: ClassVar[int] = 1_000_000

    # -------------------------------------------------------------------------
    # Costruttori
    # -------------------------------------------------------------------------

    @classmethod
    def of(
        cls,
        amount: Numeric,
        code: Union[str, Currency],
        registry: Optional[CurrencyRegistry] = None,
    ) -> Money:
        """
        Costruttore generico da major units.

        `amount` può essere int, float, str o Decimal (vedi conversion.to_decimal).
        `code` è case-insensitive; codici non registrati non falliscono.

        Raises:
            ConversionError: se amount non è un numero supportato
        """
        return cls(_amount=to_decimal(amount), _currency=_resolve(code, registry))

    @classmethod
    def of_minor(
        cls,
        minor_units: int,
        code: Union[str, Currency],
        registry: Optional[CurrencyRegistry] = None,
    ) -> Money:
        """
        Costruttore da minor units (centesimi, cents, ecc.).
        Nessuna conversione, massima precisione.
        """
        if isinstance(minor_units, bool) or not isinstance(minor_units, int):
            raise ConversionError(minor_units, "minor units must be an int")
        currency = _resolve(code, registry)
        return cls(_amount=Decimal(minor_units).scaleb(-currency.fraction), _currency=currency)

    @classmethod
    def zero(cls, code: Union[str, Currency], registry: Optional[CurrencyRegistry] = None) -> Money:
        """Zero per una data valuta."""
        return cls(_amount=ZERO, _currency=_resolve(code, registry))

    @classmethod
    def empty(cls) -> Money:
        """Money vuoto: zero senza valuta. Accumulatore neutro per add()."""
        return cls(_amount=ZERO, _currency=NO_CURRENCY)

    # -------------------------------------------------------------------------
    # Proprietà
    # -------------------------------------------------------------------------

    @property
    def amount(self) -> Decimal:
        """Importo esatto in major units."""
        return self._amount

    @property
    def currency(self) -> Currency:
        return self._currency

    @property
    def minor_units(self) -> int:
        """Importo in minor units, troncato alla precisione della valuta."""
        unit = self._currency.unit
        return int(calculator.divide(self._amount, unit, 0))

    def to_decimal(self) -> Decimal:
        return self._amount

    def as_major_units(self) -> float:
        """
        Valore in major units come float, troncato alla precisione della valuta.

        ATTENZIONE: float, usare SOLO per display/interop. Non usare per calcoli.
        """
        truncated = calculator.divide(self._amount, Decimal(1), self._currency.fraction)
        return float(truncated)

    def is_zero(self) -> bool:
        return self._amount.is_zero()

    def is_positive(self) -> bool:
        return self._amount > 0

    def is_negative(self) -> bool:
        return self._amount < 0

    def is_empty(self) -> bool:
        """Zero e senza valuta (vedi Money.empty())."""
        return self._amount.is_zero() and self._currency.code == ""

    # -------------------------------------------------------------------------
    # Comparazione
    # -------------------------------------------------------------------------

    def same_currency(self, other: Money) -> bool:
        return self._currency.same_as(other._currency)

    def _raw_compare(self, other: Money) -> int:
        return (self._amount > other._amount) - (self._amount < other._amount)

    def _check_same_currency(self, other: Money, sentinel: Any = False) -> None:
        if not isinstance(other, Money):
            raise TypeError(f"Impossibile comparare Money con {type(other).__name__}")
        if not self.same_currency(other):
            raise CurrencyMismatchError(self._currency.code, other._currency.code, result=sentinel)

    def equals(self, other: Money) -> bool:
        self._check_same_currency(other)
        return self._raw_compare(other) == 0

    def greater_than(self, other: Money) -> bool:
        self._check_same_currency(other)
        return self._raw_compare(other) == 1

    def greater_than_or_equal(self, other: Money) -> bool:
        self._check_same_currency(other)
        return self._raw_compare(other) >= 0

    def less_than(self, other: Money) -> bool:
        self._check_same_currency(other)
        return self._raw_compare(other) == -1

    def less_than_or_equal(self, other: Money) -> bool:
        self._check_same_currency(other)
        return self._raw_compare(other) <= 0

    def compare(self, other: Money) -> int:
        """
        Confronto a tre vie: 1 se self > other, 0 se uguali, -1 se minore.

        Con valute diverse solleva CurrencyMismatchError; `error.result`
        contiene comunque il confronto grezzo degli importi.
        """
        if isinstance(other, Money) and not self.same_currency(other):
            raise CurrencyMismatchError(
                self._currency.code, other._currency.code, result=self._raw_compare(other)
            )
        self._check_same_currency(other)
        return self._raw_compare(other)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Money):
            return self._amount == other._amount and self.same_currency(other)
        return NotImplemented

    def __hash__(self) -> int:
        return hash((self._amount, self._currency.code))

    def __lt__(self, other: Money) -> bool:
        return self.less_than(other)

    def __le__(self, other: Money) -> bool:
        return self.less_than_or_equal(other)

    def __gt__(self, other: Money) -> bool:
        return self.greater_than(other)

    def __ge__(self, other: Money) -> bool:
        return self.greater_than_or_equal(other)

    # -------------------------------------------------------------------------
    # Operazioni aritmetiche (type-safe)
    # -------------------------------------------------------------------------

    def _target_currency(self, others: tuple[Money, ...], operation: str) -> Currency:
        """
        Valuta del ricevente. Solo un ricevente vuoto (zero senza valuta)
        adotta quella del primo operando che ne ha una.
        """
        if not self.is_empty():
            return self._currency
        for other in others:
            if other._currency.code:
                return other._currency
        raise NoCurrencyError(operation)

    def _accumulate(self, others: tuple[Money, ...], operation: str) -> tuple[Decimal, Currency]:
        for other in others:
            if not isinstance(other, Money):
                raise TypeError(
                    f"Operazione non permessa: Money.{operation}({type(other).__name__}). "
                    f"Usa Money.of() per convertire."
                )

        currency = self._target_currency(others, operation)
        total = ZERO
        for other in others:
            if other.is_empty():
                continue
            if not other._currency.same_as(currency):
                raise CurrencyMismatchError(currency.code, other._currency.code)
            total = calculator.add(total, other._amount)
        return total, currency

    def add(self, *others: Money) -> Money:
        """
        Somma variadica. Senza operandi restituisce self.

        Raises:
            CurrencyMismatchError: un operando ha valuta diversa
            NoCurrencyError: né il ricevente né gli operandi hanno una valuta
        """
        if not others:
            return self
        total, currency = self._accumulate(others, "add")
        return Money(_amount=calculator.add(self._amount, total), _currency=currency)

    def subtract(self, *others: Money) -> Money:
        """Sottrazione variadica: self - (somma degli operandi). Stesse regole di add()."""
        if not others:
            return self
        total, currency = self._accumulate(others, "subtract")
        return Money(_amount=calculator.subtract(self._amount, total), _currency=currency)

    def multiply(self, *multipliers: Numeric) -> Money:
        """
        Moltiplica per il prodotto dei moltiplicatori.

        Esempio: prezzo_unitario.multiply(quantita, "1.22")

        Raises:
            InvalidArgumentError: nessun moltiplicatore
        """
        if not multipliers:
            raise InvalidArgumentError("serve almeno un moltiplicatore")

        factor = Decimal(1)
        for m in multipliers:
            factor = calculator.multiply(factor, to_decimal(m))
        return Money(_amount=calculator.multiply(self._amount, factor), _currency=self._currency)

    def divide(self, divisor: Numeric) -> Money:
        """Divisione troncata alla precisione della valuta (mai arrotondata)."""
        result = calculator.divide(self._amount, to_decimal(divisor), self._currency.fraction)
        return Money(_amount=result, _currency=self._currency)

    def round(self) -> Money:
        """Arrotonda alla major unit più vicina (HALF_UP: 0.5 -> 1)."""
        return Money(_amount=calculator.round(self._amount, 0), _currency=self._currency)

    def absolute(self) -> Money:
        return Money(_amount=calculator.absolute(self._amount), _currency=self._currency)

    def negative(self) -> Money:
        return Money(_amount=calculator.negative(self._amount), _currency=self._currency)

    def __add__(self, other: Money) -> Money:
        if not isinstance(other, Money):
            raise TypeError(
                f"Operazione non permessa: Money + {type(other).__name__}. "
                f"Usa Money.of() per convertire."
            )
        return self.add(other)

    def __sub__(self, other: Money) -> Money:
        if not isinstance(other, Money):
            raise TypeError(f"Operazione non permessa: Money - {type(other).__name__}.")
        return self.subtract(other)

    def __mul__(self, factor: Numeric) -> Money:
        if isinstance(factor, Money):
            raise TypeError("Money non può essere moltiplicato per Money")
        return self.multiply(factor)

    def __rmul__(self, factor: Numeric) -> Money:
        return self.__mul__(factor)

    def __truediv__(self, divisor: Numeric) -> Money:
        if isinstance(divisor, Money):
            raise TypeError("Money non può essere diviso per Money")
        return self.divide(divisor)

    def __neg__(self) -> Money:
        return self.negative()

    def __abs__(self) -> Money:
        return self.absolute()

    # -------------------------------------------------------------------------
    # Distribuzione
    # -------------------------------------------------------------------------

    def split(self, n: int) -> list[Money]:
        """
        Distribuisce l'importo in n parti con somma ESATTA.

        I centesimi avanzati vanno alle prime parti, uno alla volta (round-robin):
        le parti si differenziano al più di una minor unit.

        Args:
            n: Numero di parti (1 <= n <= MAX_DISTRIBUTION_PARTS)

        Raises:
            InvalidArgumentError: se n <= 0 o n > MAX_DISTRIBUTION_PARTS
        """
        if isinstance(n, int) and n > self.MAX_DISTRIBUTION_PARTS:
            raise InvalidArgumentError(f"n supera il limite di {self.MAX_DISTRIBUTION_PARTS}")

        amounts = split_amount(self._amount, n, self._currency.fraction)
        return [Money(_amount=a, _currency=self._currency) for a in amounts]

    def allocate(self, *ratios: int) -> list[Money]:
        """
        Distribuisce l'importo proporzionalmente ai ratio, senza perdere centesimi.

            Money.of(1, "GBP").allocate(33, 33, 33)   # [£0.34, £0.33, £0.33]

        Raises:
            InvalidArgumentError: ratio assenti, negativi o con somma oltre int64
        """
        if len(ratios) > self.MAX_DISTRIBUTION_PARTS:
            raise InvalidArgumentError(f"ratios supera il limite di {self.MAX_DISTRIBUTION_PARTS}")

        amounts = allocate_amount(self._amount, ratios, self._currency.fraction)
        return [Money(_amount=a, _currency=self._currency) for a in amounts]

    # -------------------------------------------------------------------------
    # Output
    # -------------------------------------------------------------------------

    def display(self) -> str:
        """Rappresentazione localizzata: Money.of("1234567.89", "EUR") -> "€1,234,567.89"."""
        return Formatter.for_currency(self._currency).format(self._amount)

    def simple(self) -> str:
        """Come display(), senza simbolo della valuta."""
        return Formatter.for_currency(self._currency).without_grapheme().format(self._amount)

    def __repr__(self) -> str:
        plain = Formatter(self._currency.fraction, ".", "", "", "1").format(self._amount)
        if not self._currency.code:
            return plain
        return f"{plain} {self._currency.code}"

    def __str__(self) -> str:
        return self.__repr__()

    # -------------------------------------------------------------------------
    # Serializzazione
    # -------------------------------------------------------------------------

    def to_dict(self) -> dict:
        """
        Serializza per persistenza/API.

        Formato: {"amount": Decimal, "currency": str}
        L'importo è troncato alla precisione della valuta. MAI float.
        """
        amount = calculator.divide(self._amount, Decimal(1), self._currency.fraction)
        return {
            "amount": amount,
            "currency": self._currency.code,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], registry: Optional[CurrencyRegistry] = None) -> Money:
        """
        Deserializza da dict.

        Campi opzionali: "amount" (numero) e "currency" (str). Un dict vuoto, o
        amount 0 con currency "", restituisce Money.empty().

        Raises:
            DecodeError: campo presente ma del tipo sbagliato
        """
        if not isinstance(data, Mapping):
            raise DecodeError(f"atteso un oggetto, ricevuto {type(data).__name__}")

        amount = data.get("amount", 0)
        if isinstance(amount, bool) or not isinstance(amount, (int, float, Decimal)):
            raise DecodeError(f"amount deve essere un numero, ricevuto {type(amount).__name__}", field="amount")

        code = data.get("currency", "")
        if not isinstance(code, str):
            raise DecodeError(f"currency deve essere una stringa, ricevuto {type(code).__name__}", field="currency")

        try:
            value = to_decimal(amount)
        except ConversionError as e:
            raise DecodeError(str(e), field="amount") from e

        if value.is_zero() and not code.strip():
            return cls.empty()
        return cls(_amount=value, _currency=_resolve(code, registry))

"""
test_currency.py — Currency descriptors, registry and formatting rules
"""

from decimal import Decimal
import threading

import pytest

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from fairmoney import Currency, CurrencyRegistry, Formatter, Money, default_registry


@pytest.fixture
def registry():
    return CurrencyRegistry.with_defaults()


# ==============================================================================
# CURRENCY
# ==============================================================================

class TestCurrency:

    def test_defaults(self):
        c = Currency(code="XYZ")
        assert c.fraction == 2
        assert c.template == "1$"
        assert c.unit == Decimal("0.01")

    def test_negative_fraction_rejected(self):
        with pytest.raises(ValueError):
            Currency(code="XYZ", fraction=-1)

    def test_same_as_compares_codes(self):
        assert Currency(code="EUR", fraction=2).same_as(Currency(code="EUR", fraction=3))
        assert not Currency(code="EUR").same_as(Currency(code="USD"))

    def test_str_is_code(self):
        assert str(Currency(code="EUR")) == "EUR"


# ==============================================================================
# REGISTRY
# ==============================================================================

class TestRegistry:

    @pytest.mark.parametrize("code, fraction", [
        ("EUR", 2), ("USD", 2), ("JPY", 0), ("KWD", 3), ("IQD", 3), ("BTC", 8),
    ])
    def test_seed_fractions(self, registry, code, fraction):
        assert registry.get(code).fraction == fraction

    def test_lookup_is_case_insensitive(self, registry):
        assert registry.lookup("eur") is registry.lookup("EUR")
        assert "eur" in registry

    def test_lookup_unknown_is_none(self, registry):
        assert registry.lookup("FOO") is None
        assert "FOO" not in registry

    def test_get_unknown_falls_back(self, registry):
        c = registry.get("foo")
        assert c.code == "FOO"
        assert c.fraction == 2
        assert c.grapheme == "FOO"

    def test_get_empty_code(self, registry):
        assert registry.get("").code == ""
        assert registry.get("   ").code == ""

    def test_register(self, registry):
        stored = registry.register("mock", "M$", "1 $", ".", ",", 5)
        assert stored.code == "MOCK"
        assert registry.get("MOCK") is stored
        assert Money.of(1, "MOCK", registry=registry).currency.fraction == 5

    def test_register_empty_code(self, registry):
        with pytest.raises(ValueError):
            registry.register(" ", "?", "1$", ".", ",", 2)

    def test_reregister_does_not_touch_existing_money(self, registry):
        registry.register("MOCK", "M$", "1 $", ".", ",", 5)
        before = Money.of(1, "MOCK", registry=registry)

        registry.register("MOCK", "M$", "1 $", ".", ",", 1)
        after = Money.of(1, "MOCK", registry=registry)

        assert before.currency.fraction == 5
        assert after.currency.fraction == 1
        assert before.equals(after)

    def test_registries_are_isolated(self, registry):
        registry.register("ISOL", "I", "$1", ".", ",", 4)
        assert "ISOL" not in default_registry()
        assert "ISOL" not in CurrencyRegistry.with_defaults()

    def test_empty_registry(self):
        registry = CurrencyRegistry()
        assert len(registry) == 0
        assert registry.get("EUR").fraction == 2
        assert registry.get("EUR").grapheme == "EUR"

    def test_codes_sorted(self, registry):
        codes = registry.codes()
        assert codes == sorted(codes)
        assert "EUR" in codes

    def test_default_registry_is_singleton(self):
        assert default_registry() is default_registry()

    def test_concurrent_register(self, registry):
        def worker(prefix):
            for i in range(50):
                registry.register(f"{prefix}{i:02d}", "?", "1$", ".", ",", 2)

        threads = [threading.Thread(target=worker, args=(f"T{t}",)) for t in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        for t in range(8):
            for i in range(50):
                assert f"T{t}{i:02d}" in registry


# ==============================================================================
# FORMATTER
# ==============================================================================

class TestFormatter:

    def test_grouping_and_symbol(self, registry):
        f = Formatter.for_currency(registry.get("EUR"))
        assert f.format(Decimal("1234567.89")) == "€1,234,567.89"

    def test_negative_suffix_template(self):
        f = Formatter(fraction=2, decimal=",", thousand=".", grapheme="€", template="1 $")
        assert f.format(Decimal("-1234.5")) == "-1.234,50 €"

    def test_fraction_is_truncated(self):
        f = Formatter(fraction=0, decimal=".", thousand=",", grapheme="¥", template="$1")
        assert f.format(Decimal("1234.99")) == "¥1,234"

    def test_exponent_form_is_expanded(self):
        f = Formatter(fraction=2, decimal=".", thousand=",", grapheme="$", template="$1")
        assert f.format(Decimal("1E+3")) == "$1,000.00"

    def test_no_thousand_separator(self):
        f = Formatter(fraction=2, decimal=".", thousand="", grapheme="", template="1")
        assert f.format(Decimal("1234567")) == "1234567.00"

    def test_without_grapheme(self, registry):
        f = Formatter.for_currency(registry.get("AED")).without_grapheme()
        assert f.format(Decimal(1)) == "1.00 "

    def test_small_values(self):
        f = Formatter(fraction=2, decimal=".", thousand=",", grapheme="$", template="$1")
        assert f.format(Decimal("0.01")) == "$0.01"
        assert f.format(Decimal("-0.5")) == "-$0.50"

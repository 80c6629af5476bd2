"""
test_aggregate.py — total, average, minimum, maximum, sort, median
"""

from decimal import Decimal

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from fairmoney import Money, CurrencyMismatchError, InvalidArgumentError
from fairmoney import aggregate


def gbp(amount):
    return Money.of(amount, "GBP")


@st.composite
def gbp_list(draw, min_size=1):
    values = draw(st.lists(st.integers(min_value=-10**8, max_value=10**8), min_size=min_size, max_size=30))
    return [Money.of_minor(v, "GBP") for v in values]


class TestTotal:

    def test_total(self):
        assert aggregate.total(gbp(1), gbp(2), gbp(3)).display() == "£6.00"

    def test_total_single(self):
        m = gbp(5)
        assert aggregate.total(m) is m

    def test_total_empty(self):
        assert aggregate.total().is_empty()

    def test_total_mismatch(self):
        with pytest.raises(CurrencyMismatchError):
            aggregate.total(gbp(1), Money.of(1, "EUR"))


class TestAverage:

    def test_average_truncates(self):
        assert aggregate.average(gbp(1), gbp(2), gbp(4)).display() == "£2.33"

    def test_average_empty(self):
        with pytest.raises(InvalidArgumentError):
            aggregate.average()

    def test_average_mismatch(self):
        with pytest.raises(CurrencyMismatchError):
            aggregate.average(gbp(1), Money.of(1, "EUR"))


class TestMinMax:

    def test_minimum(self):
        assert aggregate.minimum(gbp(3), gbp(1), gbp(2)) == gbp(1)

    def test_maximum(self):
        assert aggregate.maximum(gbp(3), gbp(1), gbp(2)) == gbp(3)

    def test_first_of_ties_wins(self):
        a = gbp(1)
        b = Money.of("1.00", "GBP")
        assert aggregate.minimum(a, b) is a
        assert aggregate.maximum(a, b) is a

    @pytest.mark.parametrize("fn", [aggregate.minimum, aggregate.maximum])
    def test_empty(self, fn):
        with pytest.raises(InvalidArgumentError):
            fn()

    @pytest.mark.parametrize("fn", [aggregate.minimum, aggregate.maximum])
    def test_mismatch(self, fn):
        with pytest.raises(CurrencyMismatchError):
            fn(gbp(1), gbp(2), Money.of(1, "EUR"))


class TestSort:

    def test_sort(self):
        assert aggregate.sort([gbp(4), gbp(1), gbp(2)]) == [gbp(1), gbp(2), gbp(4)]

    def test_sort_returns_new_list(self):
        values = [gbp(2), gbp(1)]
        result = aggregate.sort(values)
        assert values == [gbp(2), gbp(1)]
        assert result is not values

    def test_sort_is_stable(self):
        a1 = gbp(1)
        a2 = Money.of("1.00", "GBP")
        b = gbp(2)
        result = aggregate.sort([b, a1, a2])
        assert result[0] is a1
        assert result[1] is a2

    def test_sort_empty(self):
        assert aggregate.sort([]) == []

    def test_sort_mismatch(self):
        with pytest.raises(CurrencyMismatchError):
            aggregate.sort([gbp(1), Money.of(1, "EUR")])

    @given(values=gbp_list(min_size=0))
    @settings(max_examples=200)
    def test_sort_is_ordered(self, values):
        result = aggregate.sort(values)
        assert len(result) == len(values)
        for left, right in zip(result, result[1:]):
            assert left.less_than_or_equal(right)


class TestMedian:

    def test_median_even(self):
        assert aggregate.median(gbp(3), gbp(1), gbp(2), gbp(4)).display() == "£2.50"

    def test_median_odd(self):
        assert aggregate.median(gbp(3), gbp(1), gbp(2)) == gbp(2)

    def test_median_even_truncates(self):
        m = aggregate.median(Money.of("0.01", "GBP"), Money.of("0.02", "GBP"))
        assert m.amount == Decimal("0.01")

    def test_median_empty(self):
        with pytest.raises(InvalidArgumentError):
            aggregate.median()

    def test_median_mismatch(self):
        with pytest.raises(CurrencyMismatchError):
            aggregate.median(gbp(1), Money.of(1, "EUR"))

    @given(values=gbp_list())
    @settings(max_examples=200)
    def test_median_within_bounds(self, values):
        m = aggregate.median(*values)
        assert aggregate.minimum(*values).less_than_or_equal(m)
        assert m.less_than_or_equal(aggregate.maximum(*values))

"""Golden tests for Decimal chart statistics."""

from __future__ import annotations

from decimal import Decimal

import pytest

from luminous.dto import DataPoint
from luminous.errors import InvalidValueError
from luminous.statistics import statistics

pytestmark = pytest.mark.unit


def test_calculates_basic_statistics() -> None:
    """Compute count, extremes, sum and mean."""

    stats = statistics([{"y": Decimal(1)}, {"y": Decimal(3)}, {"y": Decimal(-2)}], "foo")
    assert stats.label == "foo"
    assert stats.n == 3
    assert stats.min == Decimal(-2)
    assert stats.max == Decimal(3)
    assert stats.sum == Decimal(2)
    assert stats.avg == Decimal(1)


def test_rounds_average_to_input_precision() -> None:
    """The mean uses the largest fractional precision of the inputs; the sum is exact."""

    stats = statistics([{"y": Decimal("1.234")}, {"y": Decimal("1.11")}], "foo")
    assert stats.sum == Decimal("2.344")
    assert stats.avg == Decimal("1.172")
    assert str(stats.avg) == "1.172"


def test_average_rounds_half_away_from_zero() -> None:
    """Ties round away from zero, for positive and negative means."""

    assert statistics([{"y": Decimal(1)}, {"y": Decimal(2)}], "up").avg == Decimal(2)
    assert statistics([{"y": Decimal(-1)}, {"y": Decimal(-2)}], "down").avg == Decimal(-2)
    assert statistics([{"y": Decimal("0.1")}, {"y": Decimal("0.2")}], "tenths").avg == Decimal("0.2")
    assert statistics([{"y": Decimal(1)}, {"y": Decimal(1)}, {"y": Decimal(2)}], "third").avg == Decimal(1)


def test_sum_is_exact_beyond_default_context_precision() -> None:
    """Large and small magnitudes add without rounding."""

    big = Decimal("12345678901234567890123456789")
    tiny = Decimal("0.000000001")
    stats = statistics([{"y": big}, {"y": tiny}], "wide")
    assert stats.sum == Decimal("12345678901234567890123456789.000000001")
    assert stats.avg == Decimal("6172839450617283945061728394.500000001")


def test_handles_empty_dataset() -> None:
    """No points means no aggregates."""

    stats = statistics([], "foo")
    assert (stats.n, stats.min, stats.max, stats.sum, stats.avg) == (0, None, None, None, None)


def test_skips_absent_values() -> None:
    """None values are excluded from every aggregate."""

    points = [{"y": Decimal(4)}, {"y": None}, {"y": Decimal(3)}, {"y": Decimal(5)}, {"y": None}]
    stats = statistics(points, "foo")
    assert stats.n == 3
    assert stats.min == Decimal(3)
    assert stats.max == Decimal(5)
    assert stats.sum == Decimal(12)
    assert stats.avg == Decimal(4)


def test_handles_datasets_with_absent_values_only() -> None:
    """All-None datasets behave like empty ones."""

    stats = statistics([{"y": None}, {"y": None}], "foo")
    assert (stats.n, stats.min, stats.max, stats.sum, stats.avg) == (0, None, None, None, None)


def test_accepts_data_points() -> None:
    """DataPoint objects are read through their `y` attribute."""

    stats = statistics([DataPoint(x=0, y=Decimal("2.5")), DataPoint(x=1, y=Decimal("3.50"))], "pts")
    assert stats.sum == Decimal("6.00")
    assert stats.avg == Decimal("3.00")


def test_coerces_plain_numeric_values() -> None:
    """Bare ints and floats are read as Decimals."""

    points = [{"y": 4}, {"y": None}, {"y": 3}, {"y": 5}, {"y": None}]
    stats = statistics(points, "foo")
    assert (stats.n, stats.min, stats.max, stats.sum, stats.avg) == (
        3,
        Decimal(3),
        Decimal(5),
        Decimal(12),
        Decimal(4),
    )
    assert statistics([{"y": 1.234}, {"y": 1.11}], "foo").avg == Decimal("1.172")


@pytest.mark.parametrize("value", [True, "4", float("nan"), Decimal("Infinity")])
def test_rejects_non_numeric_values(value: object) -> None:
    """Values that are neither numeric nor None raise InvalidValueError."""

    with pytest.raises(InvalidValueError) as excinfo:
        statistics([{"y": Decimal(1)}, {"y": value}], "foo")
    assert excinfo.value.label == "foo"

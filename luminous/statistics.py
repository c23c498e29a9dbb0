"""Decimal summary statistics for chart series.

All arithmetic is exact Decimal arithmetic. The sum keeps full precision; the
average is rounded half-up to the largest number of fractional digits found
among the input values (inputs `1.234` and `1.11` average to `1.172`).
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from decimal import MAX_EMAX, MAX_PREC, MIN_EMIN, Context, Decimal
from functools import reduce

from .dto import Statistics
from .query import coerce_value

# Wide enough that additions of finite Decimals never round.
_EXACT = Context(prec=MAX_PREC, Emax=MAX_EMAX, Emin=MIN_EMIN)


def statistics(points: Iterable[object], label: str) -> Statistics:
    """Compute count/min/max/sum/avg over the non-absent `y` values.

    Args:
        points: DataPoint-like objects with a `y` attribute, or mappings with
            a `"y"` key. A `y` of None is skipped. Numeric values are
            coerced to Decimal.
        label: Series label copied onto the result.

    Returns:
        Statistics; every aggregate is None when no value is present.

    Raises:
        InvalidValueError: When a `y` value is neither numeric nor None.
    """

    values = [y for y in (coerce_value(label, _y(point)) for point in points) if y is not None]
    if not values:
        return Statistics(label=label, n=0)

    total = reduce(_EXACT.add, values, Decimal(0))
    return Statistics(
        label=label,
        n=len(values),
        min=min(values),
        max=max(values),
        sum=total,
        avg=_mean(total, len(values), places=max(_fraction_digits(v) for v in values)),
    )


def _y(point: object) -> object:
    if isinstance(point, Mapping):
        return point.get("y")
    return getattr(point, "y")


def _fraction_digits(value: Decimal) -> int:
    return max(0, -value.as_tuple().exponent)


def _mean(total: Decimal, n: int, *, places: int) -> Decimal:
    """Divide `total` by `n`, rounding half away from zero to `places` digits."""

    # `total` has at most `places` fractional digits, so the scaled value is integral.
    scaled = int(total.scaleb(places, context=_EXACT))
    quotient, remainder = divmod(abs(scaled), n)
    if 2 * remainder >= n:
        quotient += 1
    if scaled < 0:
        quotient = -quotient
    return Decimal(quotient).scaleb(-places, context=_EXACT)

"""DTO types consumed by dashboard renderers.

Panel transforms emit only these shapes. They are plain frozen containers with
no rendering or framework dependencies.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from .query import SeriesAttributes


@dataclass(frozen=True, slots=True)
class DataPoint:
    """A single chart point.

    Attributes:
        x: Row timestamp as milliseconds since the Unix epoch.
        y: Series value, or None when absent.
    """

    x: int
    y: Decimal | None


@dataclass(frozen=True, slots=True)
class Statistics:
    """Summary statistics over the non-absent values of a series.

    Attributes:
        label: Series label.
        n: Number of non-absent values.
        min: Smallest value, or None when `n == 0`.
        max: Largest value, or None when `n == 0`.
        sum: Exact sum, or None when `n == 0`.
        avg: Mean rounded to the largest number of fractional digits among
            the values, or None when `n == 0`.
    """

    label: str
    n: int
    min: Decimal | None = None
    max: Decimal | None = None
    sum: Decimal | None = None
    avg: Decimal | None = None


@dataclass(frozen=True, slots=True)
class Series:
    """One chart dataset with its display attributes and statistics."""

    label: str
    rows: tuple[DataPoint, ...]
    attrs: SeriesAttributes
    stats: Statistics


@dataclass(frozen=True, slots=True)
class StatTile:
    """One single-value stat tile.

    Attributes:
        label: Series label the tile was built from.
        title: Display title, if declared.
        unit: Display unit, if declared.
        value: The normalized scalar value (None when absent).
    """

    label: str
    title: str | None
    unit: str | None
    value: Decimal | None

"""Stat panel transform."""

from __future__ import annotations

from .dto import StatTile
from .errors import QueryResultError
from .query import QueryResult


def transform(result: QueryResult) -> list[StatTile]:
    """Build one tile per label in resolved series order.

    Raises:
        QueryResultError: When `result` is a chart-mode result.
    """

    if result.mode != "stat":
        raise QueryResultError("Stat panels require a single-row query result.")

    return [
        StatTile(
            label=entry.label,
            title=entry.attrs.title,
            unit=entry.attrs.unit,
            value=entry.samples[0][1],
        )
        for entry in result.series
    ]

"""Chart panel transform.

Turns a chart-mode QueryResult into one time-series dataset per label. Absent
values are dropped rather than zero-filled, so sparse series keep their own
length; a label with no surviving values is still emitted with empty rows.
"""

from __future__ import annotations

from .dto import DataPoint, Series
from .errors import QueryResultError
from .query import QueryResult
from .statistics import statistics
from .time_range import to_epoch_millis


def transform(result: QueryResult) -> list[Series]:
    """Build chart datasets in resolved series order.

    Args:
        result: Normalized chart-mode query result.

    Returns:
        One Series per label with points, attributes and statistics.

    Raises:
        QueryResultError: When `result` is a stat-mode result.
    """

    if result.mode != "chart":
        raise QueryResultError("Chart panels require a time-series query result.")

    datasets: list[Series] = []
    for entry in result.series:
        rows = tuple(
            DataPoint(x=to_epoch_millis(timestamp), y=value)
            for timestamp, value in entry.samples
            if timestamp is not None and value is not None
        )
        datasets.append(
            Series(
                label=entry.label,
                rows=rows,
                attrs=entry.attrs,
                stats=statistics(rows, entry.label),
            )
        )
    return datasets

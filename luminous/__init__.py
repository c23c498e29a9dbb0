"""Pure dashboard computations.

This package turns query results into chart datasets and stat tiles, and
computes the calendar time ranges dashboards query over. It must not import
Django or perform any I/O.
"""

from .errors import InvalidValueError, MalformedRowError, ParseError, QueryResultError
from .query import AttributeOverrides, Query, QueryResult, SeriesAttributes, normalize
from .time_range import TimeRange
from .time_range_selector import TimeRangeSelector

__all__ = [
    "AttributeOverrides",
    "InvalidValueError",
    "MalformedRowError",
    "ParseError",
    "Query",
    "QueryResult",
    "QueryResultError",
    "SeriesAttributes",
    "TimeRange",
    "TimeRangeSelector",
    "normalize",
]

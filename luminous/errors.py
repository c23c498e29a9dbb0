"""Error types raised by the pure dashboard computations."""

from __future__ import annotations


class ParseError(ValueError):
    """Raised when a time range endpoint cannot be parsed."""

    def __init__(self, *, raw_value: object, reason: str) -> None:
        """Initialize the error.

        Args:
            raw_value: Original ISO string or epoch value.
            reason: Short description of the failure.
        """

        super().__init__(f"Could not parse time range endpoint {raw_value!r}: {reason}.")
        self.raw_value = raw_value
        self.reason = reason


class QueryResultError(ValueError):
    """Raised when a raw query result cannot be normalized or transformed."""


class MalformedRowError(QueryResultError):
    """Raised when a chart-mode row is missing its timestamp."""

    def __init__(self, *, row_index: int, time_key: str) -> None:
        """Initialize the error.

        Args:
            row_index: Zero-based index of the offending row.
            time_key: Reserved timestamp key that was expected.
        """

        super().__init__(f"Row {row_index} is missing the {time_key!r} timestamp key.")
        self.row_index = row_index
        self.time_key = time_key


class InvalidValueError(QueryResultError):
    """Raised when a row value is neither numeric nor absent."""

    def __init__(self, *, label: str, value: object) -> None:
        """Initialize the error.

        Args:
            label: Series label the value belongs to.
            value: The offending raw value.
        """

        super().__init__(f"Value {value!r} for series {label!r} is not numeric.")
        self.label = label
        self.value = value

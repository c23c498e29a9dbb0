"""Query definitions and normalization of raw query results.

Queries return one of two raw shapes:

- a sequence of rows (mappings or ordered pair lists), each carrying a
  timestamp under the reserved time key plus one value per series label
  (chart mode);
- a single flat mapping from label to scalar (stat mode).

`normalize` turns either shape into a `QueryResult`: an ordered tuple of
per-label sample sequences with resolved display attributes. Numeric values
become Decimals; missing values stay None and are never coerced to zero.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field, fields
from datetime import UTC, datetime
from decimal import Decimal
from typing import Any, Literal, Protocol

from .errors import InvalidValueError, MalformedRowError, QueryResultError
from .time_range import TimeRange

logger = logging.getLogger(__name__)


ChartType = Literal["line", "bar"]
ResultMode = Literal["chart", "stat"]

CHART_TYPES: tuple[str, ...] = ("line", "bar")
DEFAULT_CHART_TYPE: ChartType = "line"
DEFAULT_TIME_KEY = "time"


@dataclass(frozen=True, slots=True)
class AttributeOverrides:
    """Caller-declared display attributes for one series.

    Fields left as None keep their computed defaults.

    Attributes:
        type: Chart kind used to draw the series.
        order: Sort position among the series of a panel.
        title: Display title (stat tiles).
        unit: Display unit (stat tiles).
    """

    type: ChartType | None = None
    order: int | None = None
    title: str | None = None
    unit: str | None = None

    def __post_init__(self) -> None:
        errors: list[str] = []
        if self.type is not None and self.type not in CHART_TYPES:
            errors.append(f"type must be one of {list(CHART_TYPES)}, got {self.type!r}.")
        if self.order is not None and (isinstance(self.order, bool) or not isinstance(self.order, int)):
            errors.append(f"order must be an integer, got {self.order!r}.")
        for name in ("title", "unit"):
            value = getattr(self, name)
            if value is not None and not isinstance(value, str):
                errors.append(f"{name} must be a string, got {value!r}.")
        if errors:
            raise ValueError(f"Invalid series attributes: {' '.join(errors)}")

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> AttributeOverrides:
        """Build overrides from a declarative mapping, rejecting unknown keys."""

        known = {f.name for f in fields(cls)}
        unknown = sorted(set(values) - known)
        if unknown:
            raise ValueError(f"Unknown series attributes: {unknown}.")
        return cls(**values)

    def apply(self, defaults: SeriesAttributes) -> SeriesAttributes:
        """Overlay the fields set here onto resolved defaults."""

        return SeriesAttributes(
            type=self.type if self.type is not None else defaults.type,
            order=self.order if self.order is not None else defaults.order,
            title=self.title if self.title is not None else defaults.title,
            unit=self.unit if self.unit is not None else defaults.unit,
        )


@dataclass(frozen=True, slots=True)
class SeriesAttributes:
    """Resolved display attributes of a series."""

    type: ChartType
    order: int
    title: str | None = None
    unit: str | None = None


@dataclass(frozen=True, slots=True)
class ResultSeries:
    """Samples of one label in row order.

    Attributes:
        label: Series label, kept verbatim from the raw result.
        samples: `(timestamp, value)` pairs. Timestamps are None in stat mode;
            values are None when the row supplied the label without a value.
        attrs: Resolved display attributes.
    """

    label: str
    samples: tuple[tuple[datetime | None, Decimal | None], ...]
    attrs: SeriesAttributes


@dataclass(frozen=True, slots=True)
class QueryResult:
    """Normalized query output, ordered by resolved series order.

    Attributes:
        mode: `chart` for time-series rows, `stat` for a flat mapping.
        series: One entry per label, sorted by `attrs.order` then first appearance.
    """

    mode: ResultMode
    series: tuple[ResultSeries, ...] = ()

    @property
    def labels(self) -> tuple[str, ...]:
        """Labels in resolved order."""

        return tuple(s.label for s in self.series)

    @property
    def attributes(self) -> dict[str, SeriesAttributes]:
        """Attribute table keyed by label."""

        return {s.label: s.attrs for s in self.series}


OverridesLike = Mapping[str, AttributeOverrides | Mapping[str, Any]]


def normalize(
    raw: object,
    attrs: OverridesLike | None = None,
    *,
    time_key: str = DEFAULT_TIME_KEY,
    default_type: ChartType = DEFAULT_CHART_TYPE,
) -> QueryResult:
    """Normalize a raw query result.

    Args:
        raw: A flat label -> scalar mapping (stat mode) or a sequence of rows
            (chart mode). Rows may be mappings or ordered `(key, value)` pairs.
        attrs: Optional per-label attribute overrides.
        time_key: Reserved row key holding the row timestamp.
        default_type: Chart kind for labels without an explicit type.

    Returns:
        QueryResult with series sorted by resolved order.

    Raises:
        MalformedRowError: When a chart row lacks `time_key`.
        InvalidValueError: When a value is neither numeric nor None.
        QueryResultError: When `raw` has neither supported shape.
    """

    if isinstance(raw, QueryResult):
        return raw

    overrides = _coerce_overrides(attrs)
    if isinstance(raw, Mapping):
        mode: ResultMode = "stat"
        samples = {_label(key): [(None, coerce_value(_label(key), value))] for key, value in raw.items()}
    elif isinstance(raw, Sequence) and not isinstance(raw, (str, bytes)):
        mode = "chart"
        samples = _collect_rows(raw, time_key=time_key)
    else:
        raise QueryResultError(f"Unsupported query result of type {type(raw).__name__}.")

    series = []
    for rank, (label, values) in enumerate(samples.items()):
        defaults = SeriesAttributes(type=default_type, order=rank)
        override = overrides.get(label)
        resolved = override.apply(defaults) if override is not None else defaults
        series.append((rank, ResultSeries(label=label, samples=tuple(values), attrs=resolved)))

    series.sort(key=lambda item: (item[1].attrs.order, item[0]))
    logger.debug("Normalized %s query result with %d series.", mode, len(series))
    return QueryResult(mode=mode, series=tuple(s for _, s in series))


class QueryExecutor(Protocol):
    """External collaborator that runs a query against a backend."""

    def __call__(
        self, query_id: str, time_range: TimeRange | None, variables: Mapping[str, Any]
    ) -> object:
        """Return a raw result, or an already-normalized QueryResult."""


@dataclass(frozen=True, slots=True)
class Query:
    """A named query bound to its executor and display attributes.

    Attributes:
        id: Query identifier passed to the executor.
        executor: Callable returning the raw result.
        attrs: Per-label attribute overrides applied during normalization.
    """

    id: str
    executor: QueryExecutor
    attrs: OverridesLike = field(default_factory=dict)

    def execute(
        self,
        time_range: TimeRange | None,
        variables: Mapping[str, Any] | None = None,
        *,
        time_key: str = DEFAULT_TIME_KEY,
        default_type: ChartType = DEFAULT_CHART_TYPE,
    ) -> QueryResult:
        """Run the executor and normalize its output.

        Executor failures propagate unchanged.
        """

        raw = self.executor(self.id, time_range, variables or {})
        return normalize(raw, self.attrs, time_key=time_key, default_type=default_type)


def _collect_rows(
    rows: Sequence[object], *, time_key: str
) -> dict[str, list[tuple[datetime | None, Decimal | None]]]:
    """Group chart rows into per-label samples, in first-appearance order."""

    samples: dict[str, list[tuple[datetime | None, Decimal | None]]] = {}
    for index, raw_row in enumerate(rows):
        row = _coerce_row(raw_row, index=index)
        if time_key not in row:
            raise MalformedRowError(row_index=index, time_key=time_key)
        timestamp = _coerce_timestamp(row[time_key], time_key=time_key)
        for key, value in row.items():
            if key == time_key:
                continue
            label = _label(key)
            samples.setdefault(label, []).append((timestamp, coerce_value(label, value)))
    return samples


def _coerce_row(row: object, *, index: int) -> dict[object, object]:
    """Accept a mapping or an ordered list of `(key, value)` pairs."""

    if isinstance(row, Mapping):
        return {_label(key): value for key, value in row.items()}
    if isinstance(row, Iterable) and not isinstance(row, (str, bytes)):
        try:
            return {_label(key): value for key, value in row}
        except (TypeError, ValueError) as exc:
            raise QueryResultError(f"Row {index} is not a list of (key, value) pairs.") from exc
    raise QueryResultError(f"Row {index} has unsupported type {type(row).__name__}.")


def _coerce_overrides(attrs: OverridesLike | None) -> dict[str, AttributeOverrides]:
    if not attrs:
        return {}
    coerced: dict[str, AttributeOverrides] = {}
    for key, value in attrs.items():
        if not isinstance(value, AttributeOverrides):
            value = AttributeOverrides.from_mapping(value)
        coerced[_label(key)] = value
    return coerced


def _coerce_timestamp(value: object, *, time_key: str) -> datetime:
    """Return a timezone-aware timestamp; naive datetimes are read as UTC."""

    if not isinstance(value, datetime):
        raise InvalidValueError(label=time_key, value=value)
    if value.tzinfo is None or value.utcoffset() is None:
        return value.replace(tzinfo=UTC)
    return value


def coerce_value(label: str, value: object) -> Decimal | None:
    """Coerce a raw numeric value into a Decimal, keeping None as None."""

    if value is None:
        return None
    if isinstance(value, bool):
        raise InvalidValueError(label=label, value=value)
    if isinstance(value, Decimal):
        number = value
    elif isinstance(value, int):
        number = Decimal(value)
    elif isinstance(value, float):
        number = Decimal(repr(value))
    else:
        raise InvalidValueError(label=label, value=value)
    if not number.is_finite():
        raise InvalidValueError(label=label, value=value)
    return number


def _label(key: object) -> str:
    return key if isinstance(key, str) else str(key)

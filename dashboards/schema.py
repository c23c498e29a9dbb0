"""Schema types for declarative dashboards.

Dashboards are described by configuration objects rather than view code: a
selector for the time range plus an ordered list of panels, each bound to a
query. Refreshing a dashboard produces `DashboardData`, the only shape handed
to renderers.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from luminous.dto import Series, StatTile
from luminous.query import Query
from luminous.time_range import TimeRange
from luminous.time_range_selector import TimeRangeSelector

PanelKind = Literal["chart", "stat"]


@dataclass(frozen=True, slots=True)
class PanelDefinition:
    """A single dashboard panel.

    Args:
        id: Stable panel identifier.
        kind: Either `chart` (time series) or `stat` (single values).
        query: Query whose result feeds the panel.
        title: Optional panel heading.
    """

    id: str
    kind: PanelKind
    query: Query
    title: str | None = None


@dataclass(frozen=True, slots=True)
class DashboardDefinition:
    """A dashboard: one time range selector and its panels."""

    id: str
    title: str
    time_range_selector: TimeRangeSelector
    panels: tuple[PanelDefinition, ...] = ()


@dataclass(frozen=True, slots=True)
class PanelData:
    """Refreshed panel output.

    Args:
        panel_id: Identifier of the source PanelDefinition.
        kind: Panel kind.
        title: Panel heading.
        series: Chart datasets (chart panels only).
        tiles: Stat tiles (stat panels only).
        error: Error message when the panel could not be transformed; the
            panel then carries no data.
    """

    panel_id: str
    kind: PanelKind
    title: str | None
    series: tuple[Series, ...] = ()
    tiles: tuple[StatTile, ...] = ()
    error: str | None = None


@dataclass(frozen=True, slots=True)
class DashboardData:
    """All refreshed panels for one time range."""

    time_range: TimeRange
    panels: tuple[PanelData, ...] = ()

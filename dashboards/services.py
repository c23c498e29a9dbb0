"""Service-layer functions for the dashboards app.

Services combine Django configuration with the pure `luminous` transforms.
Each panel is refreshed independently: a result that cannot be normalized or
transformed marks only that panel as failed, while query executor errors
propagate unchanged to the caller.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import replace
from typing import Any

from luminous import chart, stat
from luminous.query import normalize
from luminous.time_range import TimeRange, from_iso, shift_zone
from luminous.time_range_selector import TimeRangeSelector

from .conf import DashboardSettings, get_dashboard_settings
from .schema import DashboardData, DashboardDefinition, PanelData, PanelDefinition

logger = logging.getLogger(__name__)


def resolve_time_range(dashboard: DashboardDefinition, *, time_zone: str | None = None) -> TimeRange:
    """Return the selector's current range, or its default for the time zone.

    Args:
        dashboard: Dashboard whose selector is consulted.
        time_zone: IANA zone; defaults to `LUMINOUS['DEFAULT_TIME_ZONE']`.

    Returns:
        The TimeRange panels should be queried with.
    """

    selector = dashboard.time_range_selector
    if selector.current_time_range is not None:
        return selector.current_time_range
    return selector.default_time_range(time_zone or get_dashboard_settings().default_time_zone)


def populate_dashboard(dashboard: DashboardDefinition, *, time_zone: str | None = None) -> DashboardDefinition:
    """Return a dashboard whose selector holds the provider's default range."""

    zone = time_zone or get_dashboard_settings().default_time_zone
    return replace(dashboard, time_range_selector=dashboard.time_range_selector.populate(zone))


def select_time_range(
    selector: TimeRangeSelector,
    *,
    from_value: str,
    to_value: str,
    time_zone: str | None = None,
) -> TimeRangeSelector:
    """Apply a user selection sent as two ISO-8601 strings.

    Args:
        selector: Selector currently held by the dashboard.
        from_value: ISO-8601 start instant (with offset).
        to_value: ISO-8601 end instant (with offset).
        time_zone: Zone to express the range in; defaults to the configured zone.

    Returns:
        A new selector holding the parsed range.

    Raises:
        ParseError: When either value is not a valid ISO-8601 instant.
    """

    zone = time_zone or get_dashboard_settings().default_time_zone
    time_range = shift_zone(from_iso(from_value, to_value), zone)
    logger.debug("Selector %s switched to %s", selector.id, time_range.to_dict())
    return selector.update_current(time_range)


def refresh_dashboard(
    dashboard: DashboardDefinition,
    *,
    time_range: TimeRange | None = None,
    time_zone: str | None = None,
    variables: Mapping[str, Any] | None = None,
) -> DashboardData:
    """Run every panel query and transform the results.

    Args:
        dashboard: Dashboard definition to refresh.
        time_range: Explicit range; defaults to `resolve_time_range`.
        time_zone: IANA zone used when resolving the default range.
        variables: Dashboard variables forwarded to each query executor.

    Returns:
        DashboardData with one PanelData per panel, in definition order.
    """

    conf = get_dashboard_settings()
    window = time_range or resolve_time_range(dashboard, time_zone=time_zone or conf.default_time_zone)
    panels = tuple(
        refresh_panel(panel, time_range=window, variables=variables, conf=conf) for panel in dashboard.panels
    )
    return DashboardData(time_range=window, panels=panels)


def refresh_panel(
    panel: PanelDefinition,
    *,
    time_range: TimeRange | None,
    variables: Mapping[str, Any] | None = None,
    conf: DashboardSettings | None = None,
) -> PanelData:
    """Execute one panel's query and build its renderer input.

    Returns:
        PanelData with either `series` or `tiles`. When the raw result cannot
        be normalized or transformed, `error` is set and no data is attached.
    """

    conf = conf or get_dashboard_settings()
    query = panel.query
    raw = query.executor(query.id, time_range, variables or {})

    try:
        result = normalize(raw, query.attrs, time_key=conf.time_key, default_type=conf.default_chart_type)
        if panel.kind == "chart":
            data = PanelData(panel_id=panel.id, kind=panel.kind, title=panel.title, series=tuple(chart.transform(result)))
        else:
            data = PanelData(panel_id=panel.id, kind=panel.kind, title=panel.title, tiles=tuple(stat.transform(result)))
    except ValueError as exc:
        logger.warning("Panel %s could not be transformed: %s", panel.id, exc)
        return PanelData(panel_id=panel.id, kind=panel.kind, title=panel.title, error=str(exc))

    logger.debug("Refreshed %s panel %s", panel.kind, panel.id)
    return data

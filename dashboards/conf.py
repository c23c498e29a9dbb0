"""Typed access to the `LUMINOUS` Django setting."""

from __future__ import annotations

from dataclasses import dataclass
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from django.conf import settings
from django.core.exceptions import ImproperlyConfigured

from luminous.query import CHART_TYPES, DEFAULT_CHART_TYPE, DEFAULT_TIME_KEY, ChartType


@dataclass(frozen=True, slots=True)
class DashboardSettings:
    """Resolved dashboard configuration.

    Args:
        default_time_zone: IANA zone used when a request does not name one.
        default_chart_type: Chart kind for series without an explicit type.
        time_key: Reserved row key holding chart row timestamps.
    """

    default_time_zone: str
    default_chart_type: ChartType
    time_key: str


def get_dashboard_settings() -> DashboardSettings:
    """Read and validate `settings.LUMINOUS`.

    Missing keys fall back to `settings.TIME_ZONE`, `"line"` and `"time"`.

    Raises:
        ImproperlyConfigured: When a configured value is invalid.
    """

    raw = getattr(settings, "LUMINOUS", None) or {}
    time_zone = raw.get("DEFAULT_TIME_ZONE") or settings.TIME_ZONE
    chart_type = raw.get("DEFAULT_CHART_TYPE", DEFAULT_CHART_TYPE)
    time_key = raw.get("TIME_KEY", DEFAULT_TIME_KEY)

    try:
        ZoneInfo(time_zone)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise ImproperlyConfigured(f"LUMINOUS['DEFAULT_TIME_ZONE'] is not a known time zone: {time_zone!r}.") from exc
    if chart_type not in CHART_TYPES:
        raise ImproperlyConfigured(
            f"LUMINOUS['DEFAULT_CHART_TYPE'] must be one of {list(CHART_TYPES)}, got {chart_type!r}."
        )
    if not isinstance(time_key, str) or not time_key:
        raise ImproperlyConfigured("LUMINOUS['TIME_KEY'] must be a non-empty string.")

    return DashboardSettings(default_time_zone=time_zone, default_chart_type=chart_type, time_key=time_key)

"""Time range selector state for a dashboard.

A selector binds a default-range provider to the widget that lets users pick
a period. The selector itself is immutable: populating or updating it returns
a new instance, so holders swap a single reference instead of mutating fields.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, replace
from typing import Protocol, runtime_checkable

from .time_range import TimeRange, TimeZoneLike


DEFAULT_HOOK = "TimeRangeHook"
DEFAULT_ID = "time-range-selector"


@runtime_checkable
class DefaultTimeRangeProvider(Protocol):
    """Capability for computing a dashboard's default time range."""

    def default_time_range(self, tz: TimeZoneLike) -> TimeRange:
        """Return the default range for a time zone (pure, no side effects)."""


ProviderLike = DefaultTimeRangeProvider | Callable[[TimeZoneLike], TimeRange]


@dataclass(frozen=True, slots=True)
class TimeRangeSelector:
    """Selector widget state.

    Attributes:
        provider: Object exposing `default_time_range(tz)`, or a plain callable.
        hook: Client-side hook name used by the rendering layer.
        id: DOM id of the selector widget.
        current_time_range: Selected range, or None until populated.
    """

    provider: ProviderLike
    hook: str = DEFAULT_HOOK
    id: str = DEFAULT_ID
    current_time_range: TimeRange | None = None

    def default_time_range(self, tz: TimeZoneLike) -> TimeRange:
        """Compute the provider's default range for `tz`."""

        if isinstance(self.provider, DefaultTimeRangeProvider):
            return self.provider.default_time_range(tz)
        return self.provider(tz)

    def populate(self, tz: TimeZoneLike) -> TimeRangeSelector:
        """Return a copy whose current range is the provider's default."""

        return replace(self, current_time_range=self.default_time_range(tz))

    def update_current(self, time_range: TimeRange) -> TimeRangeSelector:
        """Return a copy holding `time_range` as the current selection."""

        return replace(self, current_time_range=time_range)


def define(provider: ProviderLike, *, hook: str = DEFAULT_HOOK, id: str = DEFAULT_ID) -> TimeRangeSelector:
    """Declare an unpopulated selector for a dashboard."""

    return TimeRangeSelector(provider=provider, hook=hook, id=id)

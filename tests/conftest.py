"""Pytest fixtures shared across the test suite."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import UTC, datetime

import pytest

from luminous.query import Query


@pytest.fixture
def t1() -> datetime:
    """Return the first row timestamp used by panel fixtures."""

    return datetime(2022, 8, 3, tzinfo=UTC)


@pytest.fixture
def t2() -> datetime:
    """Return the second row timestamp used by panel fixtures."""

    return datetime(2022, 8, 4, tzinfo=UTC)


@pytest.fixture
def static_query():
    """Return a factory building a Query whose executor returns a fixed result."""

    def build(query_id: str, raw: object, attrs=None) -> Query:
        def executor(_query_id, _time_range, _variables):
            return raw

        return Query(id=query_id, executor=executor, attrs=attrs or {})

    return build


def pytest_collection_modifyitems(items: Sequence[pytest.Item]) -> None:
    """Enforce that every test has exactly one speed marker.

    The suite is runnable by intent:
    - `unit`: pure, fast tests against the `luminous` package.
    - `integration`: tests touching Django settings, apps or services.

    Each test must have exactly one of these markers.
    """

    invalid: list[str] = []
    for item in items:
        has_unit = item.get_closest_marker("unit") is not None
        has_integration = item.get_closest_marker("integration") is not None
        if has_unit == has_integration:
            markers = []
            if has_unit:
                markers.append("unit")
            if has_integration:
                markers.append("integration")
            invalid.append(f"{item.nodeid} (markers={markers or 'none'})")

    if invalid:
        joined = "\n".join(f"- {nodeid}" for nodeid in invalid)
        raise pytest.UsageError(
            "Each test must have exactly one speed marker: `@pytest.mark.unit` or "
            "`@pytest.mark.integration`.\n"
            f"Offending tests:\n{joined}"
        )

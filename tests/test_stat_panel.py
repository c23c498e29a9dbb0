"""Unit tests for the stat panel transform."""

from __future__ import annotations

from datetime import datetime

import pytest

from luminous import stat
from luminous.dto import StatTile
from luminous.errors import QueryResultError
from luminous.query import AttributeOverrides, normalize

pytestmark = pytest.mark.unit


def test_single_stat() -> None:
    """A one-key mapping yields one untitled tile."""

    (tile,) = stat.transform(normalize({"foo": 666}))
    assert tile.title is None
    assert tile.unit is None
    assert tile.value == 666


def test_multiple_stats_apply_overrides_per_label() -> None:
    """Overrides only touch the tile they name; order follows resolved order.

    With equal orders, tiles keep the insertion order of the result mapping
    (`foo` before `bar`), not sorted label order.
    """

    tiles = stat.transform(
        normalize(
            {"foo": 11, "bar": 13},
            {"foo": AttributeOverrides(title="Foo", unit="mckk")},
        )
    )
    assert tiles == [
        StatTile(label="foo", title="Foo", unit="mckk", value=11),
        StatTile(label="bar", title=None, unit=None, value=13),
    ]


def test_explicit_order_reorders_tiles() -> None:
    """An explicit order moves a tile ahead of first-appearance ranks."""

    tiles = stat.transform(normalize({"foo": 11, "bar": 13}, {"foo": {"order": 2}}))
    assert [t.label for t in tiles] == ["bar", "foo"]


def test_absent_stat_value_is_kept() -> None:
    """None values produce a tile with no value."""

    (tile,) = stat.transform(normalize({"foo": None}))
    assert tile.value is None


def test_rejects_chart_results(t1: datetime) -> None:
    """Stat panels need a flat mapping."""

    with pytest.raises(QueryResultError, match="single-row"):
        stat.transform(normalize([{"time": t1, "foo": 1}]))

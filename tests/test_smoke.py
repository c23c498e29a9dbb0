"""Minimal smoke tests for project scaffolding."""

from __future__ import annotations

import pytest


@pytest.mark.unit
def test_luminous_public_api_imports() -> None:
    """Import the pure package and verify the public entry points exist."""

    import luminous
    from luminous import chart, stat

    assert callable(luminous.normalize)
    assert callable(chart.transform)
    assert callable(stat.transform)


@pytest.mark.integration
def test_django_project_loads() -> None:
    """Import and initialize Django to verify settings are valid."""

    import os

    import django
    from django.conf import settings

    os.environ.setdefault("DJANGO_SETTINGS_MODULE", "luminousSite.settings")
    django.setup()
    assert "dashboards.apps.DashboardsConfig" in settings.INSTALLED_APPS
    assert settings.LUMINOUS["TIME_KEY"] == "time"

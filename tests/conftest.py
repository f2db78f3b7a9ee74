"""
Shared pytest fixtures for the tech-health recommender test suite.

Provides:
  - ``fixed_now``: the reference time every engine test injects, so ids and
    staleness checks are deterministic.
  - ``healthy_analysis``: a fully populated analysis result on which no rule
    fires. Tests copy it and degrade one field at a time.
  - ``make_analysis``: factory returning a fresh deep copy of the healthy
    result with nested overrides applied.
"""

from __future__ import annotations

import copy
from datetime import datetime, timedelta, timezone
from typing import Any, Callable

import pytest

FIXED_NOW = datetime(2026, 10, 18, 12, 0, 0, tzinfo=timezone.utc)


def _iso(moment: datetime) -> str:
    return moment.isoformat().replace("+00:00", "Z")


_HEALTHY: dict[str, Any] = {
    "analysis": {
        "codeQuality": {
            "security": {"vulnerabilities": []},
            "complexity": {"averageComplexity": 8.0, "highComplexityFiles": []},
            "testing": {"coverage": 85},
            "documentation": {"score": 80},
            "dependencies": {"outdated": ["left-pad"]},
        },
        "dora": {
            "deploymentFrequency": {"classification": "Elite"},
            "leadTimeForChanges": {"classification": "High"},
            "changeFailureRate": {"rate": 5},
        },
        "repository": {
            "license": {"spdx_id": "MIT"},
            "description": "Service that audits repositories and reports their technical health.",
            "updated_at": _iso(FIXED_NOW - timedelta(days=3)),
            "pushed_at": _iso(FIXED_NOW - timedelta(days=1)),
        },
    },
    "techHealthScore": {"overall": 88},
}


def _deep_update(target: dict[str, Any], overrides: dict[str, Any]) -> None:
    for key, val in overrides.items():
        if isinstance(val, dict) and isinstance(target.get(key), dict):
            _deep_update(target[key], val)
        else:
            target[key] = val


@pytest.fixture
def fixed_now() -> datetime:
    """2026-10-18T12:00:00Z."""
    return FIXED_NOW


@pytest.fixture
def healthy_analysis() -> dict[str, Any]:
    """A fresh copy of the all-healthy analysis result."""
    return copy.deepcopy(_HEALTHY)


@pytest.fixture
def make_analysis() -> Callable[..., dict[str, Any]]:
    """Return ``make(overrides=None)`` building a healthy result with overrides.

    Nested dicts in ``overrides`` are merged; any other value replaces the
    existing one (use ``None`` to make a section absent).
    """

    def make(overrides: dict[str, Any] | None = None) -> dict[str, Any]:
        result = copy.deepcopy(_HEALTHY)
        if overrides:
            _deep_update(result, overrides)
        return result

    return make

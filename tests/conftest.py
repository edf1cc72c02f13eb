"""Shared fixtures for inetgen tests."""

from __future__ import annotations

from typing import Any, Callable

import pytest

from inetgen.model.parameters import GenerationParameters, ParentMode

# Small instance used across I/O and CLI tests
SMALL_PARAMS: dict[str, Any] = {
    "seed": 123,
    "nodes": 10,
    "sources": 2,
    "sinks": 2,
    "density": 20,
    "min_cost": 1,
    "max_cost": 100,
    "supply": 1000,
    "tsources": 0,
    "tsinks": 0,
    "hicost": 100,
    "capacitated": 100,
    "min_cap": 100,
    "max_cap": 500,
    "parent": ParentMode.ARC,
    "inter": 2,
}

# Mid-sized instance with transshipment sources and sinks
MEDIUM_PARAMS: dict[str, Any] = {
    "seed": 13502460,
    "nodes": 60,
    "sources": 6,
    "sinks": 8,
    "density": 400,
    "min_cost": 1,
    "max_cost": 100,
    "supply": 10000,
    "tsources": 2,
    "tsinks": 2,
    "hicost": 30,
    "capacitated": 60,
    "min_cap": 50,
    "max_cap": 800,
    "parent": ParentMode.ARC,
    "inter": 20,
}


@pytest.fixture
def make_params() -> Callable[..., GenerationParameters]:
    """Return a factory building parameters from a base set plus overrides.

    Usage: ``make_params(seed=7)`` or ``make_params(base="medium", inter=4)``.
    """

    def _make(base: str = "small", **overrides: Any) -> GenerationParameters:
        values = dict(SMALL_PARAMS if base == "small" else MEDIUM_PARAMS)
        values.update(overrides)
        return GenerationParameters(**values)

    return _make


@pytest.fixture
def small_params(make_params) -> GenerationParameters:
    return make_params()


@pytest.fixture
def medium_params(make_params) -> GenerationParameters:
    return make_params(base="medium")


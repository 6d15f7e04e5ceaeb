"""Shared fixtures for jens benchmarks.

Run with:
    pytest benchmarks/ --benchmark-only
"""

from __future__ import annotations

import pytest

from jens import TemplateFile

from .fixtures.generator import GENERATOR_SOURCE, make_types


@pytest.fixture(scope="session")
def generator_file() -> TemplateFile:
    return TemplateFile.parse(GENERATOR_SOURCE, name="generator.jens")


@pytest.fixture(
    scope="session",
    params=[(1, 5), (10, 10), (100, 20)],
    ids=["small", "medium", "large"],
)
def schema(request: pytest.FixtureRequest) -> list[tuple[str, list[tuple[str, str]]]]:
    return make_types(*request.param)

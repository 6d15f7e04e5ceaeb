"""Pytest configuration and fixtures for Jens tests."""

import pytest

from jens import DictLoader, Environment, TemplateFile
from jens.environment import terminal

from .sources import EMOJI_SOURCE, VALIDATOR_SOURCE


@pytest.fixture(autouse=True)
def no_colors(monkeypatch):
    """Keep error messages free of ANSI codes regardless of the terminal."""
    monkeypatch.setattr(terminal, "_USE_COLORS", False)


@pytest.fixture
def emoji_file():
    """Parsed emoji example file."""
    return TemplateFile.parse(EMOJI_SOURCE, filename="emoji.jens")


@pytest.fixture
def validator_file():
    """Parsed TypeScript validator template file."""
    return TemplateFile.parse(VALIDATOR_SOURCE, filename="validator.jens")


@pytest.fixture
def env():
    """Environment with a DictLoader holding the test template files."""
    loader = DictLoader(
        {
            "emoji.jens": EMOJI_SOURCE,
            "validator.jens": VALIDATOR_SOURCE,
            "broken.jens": "main =\n    never closed\n",
        }
    )
    return Environment(loader=loader)

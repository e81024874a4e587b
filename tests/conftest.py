"""Pytest configuration and fixtures for test suite."""

import sys
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

# Add src directory to path for imports
SRC_PATH = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(SRC_PATH))

from sradedupe.models import Reference  # noqa: E402


@pytest.fixture
def make_ref() -> Callable[..., Reference]:
    """Factory for test references with minimal boilerplate.

    Lists are accepted for ``authors`` and ``urls`` and converted the same
    way ``Reference.from_dict`` converts decoded JSON.
    """

    def _factory(title: str | None = "A Study of X", **fields: Any) -> Reference:
        return Reference.from_dict({"title": title, **fields})

    return _factory

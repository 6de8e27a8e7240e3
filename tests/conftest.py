from __future__ import annotations

import pytest

import calltracer


@pytest.fixture(autouse=True)
def _reset_config() -> None:
    """Reset the default analyzer between tests."""
    calltracer._reset_default_analyzer()

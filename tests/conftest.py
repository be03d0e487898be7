# tests/conftest.py
from __future__ import annotations

import pytest

from primeset import runtime


@pytest.fixture(autouse=True)
def fresh_runtime():
    """Every test starts from default runtime flags."""
    runtime.reset()
    yield runtime.current()
    runtime.reset()

from __future__ import annotations

from datetime import datetime

import pytest


@pytest.fixture
def fixed_now() -> datetime:
    # Wednesday, five minutes into 1st hour
    return datetime(2025, 1, 15, 8, 25, 0)

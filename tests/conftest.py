from datetime import datetime

import pytest


@pytest.fixture
def fixed_now():
    # Wednesday morning, inside the Present window
    return datetime(2025, 1, 15, 10, 30, 0)

"""Everything under tests/unit is marked ``unit``."""

from pathlib import Path

import pytest


_UNIT_DIR = Path(__file__).parent


def pytest_collection_modifyitems(config, items):
    for item in items:
        if _UNIT_DIR in item.path.parents:
            item.add_marker(pytest.mark.unit)

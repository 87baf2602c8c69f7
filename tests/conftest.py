from __future__ import annotations

import pytest

from wedgemark.core.runtime_config import set_config_path


@pytest.fixture(autouse=True)
def _reset_runtime_config():
    set_config_path(None)
    yield
    set_config_path(None)

from pathlib import Path

import pytest

from deskcheck.config import Settings
from tests.fixtures.settings import make_settings


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    """Complete settings writing screenshots under the test's tmp_path."""
    return make_settings(tmp_path / "screenshots")

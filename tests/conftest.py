# tests/conftest.py

"""Shared pytest fixtures for all catalog tests."""

from collections.abc import Generator
from pathlib import Path
from unittest.mock import patch

import pytest


@pytest.fixture(autouse=True)
def isolated_paths(tmp_path: Path) -> Generator[None, None, None]:
    """Point the data file and log directory at a per-test temp dir."""
    with (
        patch(
            "src.config.settings.Settings.DATA_FILE",
            tmp_path / "data" / "products.json",
        ),
        patch("src.config.settings.Settings.LOGS_DIR", tmp_path / "logs"),
    ):
        yield

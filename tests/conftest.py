"""Shared pytest fixtures and configuration."""

from pathlib import Path
from typing import Generator

import pytest

from igor import core


@pytest.fixture
def temp_home(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> Generator[Path, None, None]:
    """Create a temporary home directory and igor config folder for testing."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("IGOR_CONFIG_DIR", str(home / ".config" / "igor"))
    core.update_paths()
    yield home


@pytest.fixture
def config_dir(temp_home: Path) -> Path:
    """The igor config folder inside the temporary home."""
    return temp_home / ".config" / "igor"


@pytest.fixture
def sample_config() -> dict:
    """Sample configuration for testing."""
    return {
        "tracked_files": [
            {"path": "/home/user/.bashrc", "name": ".bashrc", "folder": False},
            {"path": "/home/user/.config/nvim", "name": "nvim", "folder": True},
        ]
    }

"""Shared fixtures."""

from pathlib import Path

import pytest
from PIL import Image

from iconkit.core.settings_manager import SettingsManager


@pytest.fixture(autouse=True)
def isolated_storage(tmp_path, monkeypatch):
    """Keep settings out of the real user profile and reset the singleton."""
    monkeypatch.setenv("ICONKIT_HOME", str(tmp_path / "iconkit-home"))
    SettingsManager._instance = None
    yield
    SettingsManager._instance = None


@pytest.fixture
def make_source(tmp_path):
    """Write a source PNG and return its path."""

    def _make(size=(512, 512), color=(30, 120, 220, 255), name="logo.png") -> Path:
        path = tmp_path / name
        Image.new("RGBA", size, color).save(path)
        return path

    return _make


@pytest.fixture
def opaque_image():
    def _make(size=200, color=(200, 50, 50, 255)) -> Image.Image:
        return Image.new("RGBA", (size, size), color)

    return _make

"""Shared fixtures."""

import os

import pytest


@pytest.fixture(autouse=True)
def clean_distpack_env(monkeypatch):
    """Keep DISTPACK_* variables of the developer's shell out of the tests."""
    for key in list(os.environ):
        if key.startswith("DISTPACK_"):
            monkeypatch.delenv(key, raising=False)


@pytest.fixture
def app_dir(tmp_path):
    """Create a small application directory to archive."""
    app = tmp_path / "build" / "app"
    (app / "resources").mkdir(parents=True)
    (app / "main.js").write_text("console.log('hello')\n")
    (app / "resources" / "data.bin").write_bytes(bytes(range(256)) * 16)
    (app / "resources" / "notes.log").write_text("debug output\n")
    return app

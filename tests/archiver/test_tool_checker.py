"""Tests for compression tool lookup."""

from unittest.mock import patch

import pytest
from distpack.archiver import ArchiveEnvironment
from distpack.archiver.tool_checker import (
    _get_installation_instructions,
    check_tool_availability,
    get_path_7za,
    get_path_lzip,
    get_path_zip,
)
from distpack.common import ToolNotFoundError


def which_from(available):
    """Fake shutil.which: known names resolve to their paths, paths to themselves."""
    paths = set(available.values())
    return lambda name: available.get(name) or (name if name in paths else None)


class TestGetPath7za:
    """Tests for 7-Zip lookup."""

    def test_prefers_7za(self):
        tools = {"7za": "/usr/bin/7za", "7z": "/usr/bin/7z"}
        with patch("distpack.archiver.tool_checker.shutil.which", side_effect=which_from(tools)):
            assert get_path_7za(ArchiveEnvironment()) == "/usr/bin/7za"

    def test_falls_back_to_7zz(self):
        tools = {"7zz": "/opt/homebrew/bin/7zz"}
        with patch("distpack.archiver.tool_checker.shutil.which", side_effect=which_from(tools)):
            assert get_path_7za(ArchiveEnvironment()) == "/opt/homebrew/bin/7zz"

    def test_explicit_path_wins(self):
        tools = {"7za": "/usr/bin/7za"}
        env = ArchiveEnvironment(seven_zip_path="/opt/7zip/7za")
        with patch("distpack.archiver.tool_checker.shutil.which", side_effect=which_from(tools)):
            assert get_path_7za(env) == "/opt/7zip/7za"

    def test_explicit_path_from_environment(self, monkeypatch):
        monkeypatch.setenv("DISTPACK_SEVEN_ZIP_PATH", "/custom/7za")
        with patch("distpack.archiver.tool_checker.shutil.which", return_value=None):
            assert get_path_7za() == "/custom/7za"

    def test_missing_raises_with_instructions(self):
        with patch("distpack.archiver.tool_checker.shutil.which", return_value=None):
            with pytest.raises(ToolNotFoundError) as exc_info:
                get_path_7za(ArchiveEnvironment())

        assert exc_info.value.context["tool"] == "7za"
        assert "DISTPACK_SEVEN_ZIP_PATH" in str(exc_info.value)


class TestOtherTools:
    """Tests for zip and lzip lookup."""

    def test_zip_found(self):
        with patch("distpack.archiver.tool_checker.shutil.which", side_effect=which_from({"zip": "/usr/bin/zip"})):
            assert get_path_zip(ArchiveEnvironment()) == "/usr/bin/zip"

    def test_unresolved_names_are_returned(self):
        with patch("distpack.archiver.tool_checker.shutil.which", return_value=None):
            assert get_path_zip(ArchiveEnvironment()) == "zip"
            assert get_path_lzip(ArchiveEnvironment()) == "lzip"

    def test_lzip_explicit_path(self):
        with patch("distpack.archiver.tool_checker.shutil.which", return_value=None):
            assert get_path_lzip(ArchiveEnvironment(lzip_path="/opt/lzip")) == "/opt/lzip"


class TestCheckToolAvailability:
    """Tests for the availability summary."""

    def test_reports_each_tool(self):
        tools = {"7z": "/usr/bin/7z", "zip": "/usr/bin/zip"}
        with patch("distpack.archiver.tool_checker.shutil.which", side_effect=which_from(tools)):
            result = check_tool_availability(ArchiveEnvironment())

        assert result == {"7za": True, "zip": True, "lzip": False}

    def test_nonexistent_explicit_path_is_unavailable(self, tmp_path):
        env = ArchiveEnvironment(lzip_path=str(tmp_path / "missing-lzip"))

        assert check_tool_availability(env)["lzip"] is False

    def test_instructions_for_unknown_tool(self):
        assert _get_installation_instructions("rar") == "Please install rar"

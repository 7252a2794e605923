"""Tests for the up-to-date check."""

import os

from distpack.archiver import is_up_to_date
from distpack.archiver.staleness import stat_or_none


def set_mtime(path, seconds):
    os.utime(path, (seconds, seconds))


class TestIsUpToDate:
    """Tests for is_up_to_date."""

    def test_newer_archive_is_up_to_date(self, app_dir, tmp_path):
        out = tmp_path / "app.zip"
        out.write_bytes(b"zip")
        set_mtime(app_dir, 1_000_000)
        set_mtime(out, 1_000_100)

        assert is_up_to_date(out, app_dir) is True

    def test_older_archive_is_stale(self, app_dir, tmp_path):
        out = tmp_path / "app.zip"
        out.write_bytes(b"zip")
        set_mtime(app_dir, 1_000_100)
        set_mtime(out, 1_000_000)

        assert is_up_to_date(out, app_dir) is False

    def test_equal_times_are_stale(self, app_dir, tmp_path):
        """Only a strictly newer archive counts."""
        out = tmp_path / "app.zip"
        out.write_bytes(b"zip")
        set_mtime(app_dir, 1_000_000)
        set_mtime(out, 1_000_000)

        assert is_up_to_date(out, app_dir) is False

    def test_missing_archive(self, app_dir, tmp_path):
        assert is_up_to_date(tmp_path / "app.zip", app_dir) is False

    def test_missing_source(self, tmp_path):
        out = tmp_path / "app.zip"
        out.write_bytes(b"zip")

        assert is_up_to_date(out, tmp_path / "missing") is False


class TestStatOrNone:
    """Tests for stat_or_none."""

    def test_existing(self, tmp_path):
        assert stat_or_none(tmp_path) is not None

    def test_missing(self, tmp_path):
        assert stat_or_none(tmp_path / "missing") is None

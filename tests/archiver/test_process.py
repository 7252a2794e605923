"""Tests for external tool execution."""

import sys

import pytest
from distpack.archiver import BackendExecutionError
from distpack.archiver.process import exec_tool
from distpack.common import ToolNotFoundError


class TestExecTool:
    """Tests for exec_tool."""

    def test_success_captures_output(self, tmp_path):
        result = exec_tool(sys.executable, ["-c", "print('done')"], tmp_path)

        assert result.returncode == 0
        assert result.stdout.strip() == "done"

    def test_runs_in_working_directory(self, tmp_path):
        result = exec_tool(sys.executable, ["-c", "import os; print(os.getcwd())"], tmp_path)

        assert result.stdout.strip() == str(tmp_path.resolve())

    def test_non_zero_exit(self, tmp_path):
        script = "import sys; sys.stderr.write('bad input'); sys.exit(2)"

        with pytest.raises(BackendExecutionError) as exc_info:
            exec_tool(sys.executable, ["-c", script], tmp_path)

        error = exc_info.value
        assert error.exit_code == 2
        assert "bad input" in error.stderr
        assert "bad input" in str(error)
        assert error.context["cwd"] == str(tmp_path)

    def test_missing_executable(self, tmp_path):
        with pytest.raises(ToolNotFoundError) as exc_info:
            exec_tool(str(tmp_path / "no-such-tool"), [], tmp_path)

        assert exc_info.value.context["tool"] == str(tmp_path / "no-such-tool")

    def test_missing_working_directory(self, tmp_path):
        with pytest.raises(ToolNotFoundError):
            exec_tool(sys.executable, ["-c", "pass"], tmp_path / "missing")

    def test_working_directory_is_a_file(self, tmp_path):
        not_a_dir = tmp_path / "app.bin"
        not_a_dir.write_bytes(b"x")

        with pytest.raises(ToolNotFoundError) as exc_info:
            exec_tool(sys.executable, ["-c", "pass"], not_a_dir)

        assert exc_info.value.context["cwd"] == str(not_a_dir)

    def test_executable_without_permission(self, tmp_path):
        tool = tmp_path / "7za"
        tool.write_text("#!/bin/sh\nexit 0\n")
        tool.chmod(0o644)

        with pytest.raises(ToolNotFoundError):
            exec_tool(str(tool), ["a"], tmp_path)

    def test_timeout(self, tmp_path):
        with pytest.raises(BackendExecutionError) as exc_info:
            exec_tool(sys.executable, ["-c", "import time; time.sleep(30)"], tmp_path, timeout=0.5)

        assert exc_info.value.exit_code is None
        assert exc_info.value.context["timeout"] == 0.5

    def test_verbose_logs_output(self, tmp_path, caplog):
        with caplog.at_level("DEBUG", logger="distpack.archiver.process"):
            exec_tool(sys.executable, ["-c", "print('compressing')"], tmp_path, verbose=True)

        assert "compressing" in caplog.text

"""Tests for lightning_mcp.generator.build."""

from __future__ import annotations

import subprocess
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from lightning_mcp.exceptions import BuildError
from lightning_mcp.generator.build import DEFAULT_TIMEOUT, install_and_build


def _completed(returncode: int = 0, stdout: str = "", stderr: str = "") -> MagicMock:
    result = MagicMock()
    result.returncode = returncode
    result.stdout = stdout
    result.stderr = stderr
    return result


class TestInstallAndBuild:
    """Test the npm install -> npm run build sequence."""

    def test_runs_install_then_build(self, tmp_path: Path) -> None:
        with patch(
            "lightning_mcp.generator.build.subprocess.run", return_value=_completed()
        ) as mock_run:
            install_and_build(tmp_path)

        commands = [call.args[0] for call in mock_run.call_args_list]
        assert commands == [["npm", "install"], ["npm", "run", "build"]]
        for call in mock_run.call_args_list:
            assert call.kwargs["cwd"] == tmp_path
            assert call.kwargs["capture_output"] is True
            assert call.kwargs["timeout"] == DEFAULT_TIMEOUT

    def test_install_failure_skips_build(self, tmp_path: Path) -> None:
        with patch(
            "lightning_mcp.generator.build.subprocess.run",
            return_value=_completed(returncode=1, stderr="npm ERR! 404 Not Found"),
        ) as mock_run:
            with pytest.raises(BuildError, match="Dependency installation failed with exit code 1"):
                install_and_build(tmp_path)
        assert mock_run.call_count == 1

    def test_build_failure_includes_output_tail(self, tmp_path: Path) -> None:
        stderr = "\n".join(f"line {i}" for i in range(30))
        with patch(
            "lightning_mcp.generator.build.subprocess.run",
            side_effect=[_completed(), _completed(returncode=2, stderr=stderr)],
        ):
            with pytest.raises(BuildError) as exc_info:
                install_and_build(tmp_path)

        message = str(exc_info.value)
        assert message.startswith("Build failed with exit code 2")
        assert "line 29" in message
        assert "line 9\n" not in message
        assert exc_info.value.exit_code == 9

    def test_failure_without_output(self, tmp_path: Path) -> None:
        with patch(
            "lightning_mcp.generator.build.subprocess.run",
            return_value=_completed(returncode=1),
        ):
            with pytest.raises(BuildError) as exc_info:
                install_and_build(tmp_path)
        assert str(exc_info.value) == "Dependency installation failed with exit code 1"

    def test_npm_missing(self, tmp_path: Path) -> None:
        with patch(
            "lightning_mcp.generator.build.subprocess.run",
            side_effect=FileNotFoundError("npm"),
        ):
            with pytest.raises(BuildError, match="npm not found"):
                install_and_build(tmp_path)

    def test_timeout(self, tmp_path: Path) -> None:
        with patch(
            "lightning_mcp.generator.build.subprocess.run",
            side_effect=subprocess.TimeoutExpired(cmd="npm install", timeout=5),
        ):
            with pytest.raises(BuildError, match="timed out after 5 seconds"):
                install_and_build(tmp_path, timeout=5)

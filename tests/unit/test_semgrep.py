"""Tests for the Semgrep runner."""

from __future__ import annotations

import subprocess
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from zerohour.scanner.semgrep import SemgrepError, run_semgrep, semgrep_version


def _completed(returncode: int = 0, stdout: str = "", stderr: str = "") -> MagicMock:
    proc = MagicMock()
    proc.returncode = returncode
    proc.stdout = stdout
    proc.stderr = stderr
    return proc


@patch("zerohour.scanner.semgrep.subprocess.run")
def test_version(mock_run: MagicMock):
    mock_run.return_value = _completed(stdout="1.60.0\n")
    assert semgrep_version() == "1.60.0"


@patch("zerohour.scanner.semgrep.subprocess.run", side_effect=FileNotFoundError("semgrep"))
def test_version_missing(mock_run: MagicMock):
    with pytest.raises(SemgrepError, match="not installed"):
        semgrep_version()


@patch("zerohour.scanner.semgrep.subprocess.run")
def test_version_broken(mock_run: MagicMock):
    mock_run.side_effect = subprocess.CalledProcessError(2, ["semgrep", "--version"])
    with pytest.raises(SemgrepError, match="not usable"):
        semgrep_version()


@pytest.mark.parametrize("code", [0, 1])
@patch("zerohour.scanner.semgrep.subprocess.run")
def test_scan_writes_output(mock_run: MagicMock, code: int, tmp_path: Path):
    mock_run.return_value = _completed(returncode=code, stdout='{"results": []}')
    out = run_semgrep(tmp_path, tmp_path / "findings.json", rules="p/ci")
    assert out.read_text() == '{"results": []}'
    cmd = mock_run.call_args.args[0]
    assert cmd == ["semgrep", "scan", "--config", "p/ci", "--json", str(tmp_path)]


@patch("zerohour.scanner.semgrep.subprocess.run")
def test_scan_failure(mock_run: MagicMock, tmp_path: Path):
    mock_run.return_value = _completed(returncode=2, stderr="warming up\nInvalid config")
    with pytest.raises(SemgrepError, match="exit 2.*Invalid config"):
        run_semgrep(tmp_path, tmp_path / "findings.json")
    assert not (tmp_path / "findings.json").exists()

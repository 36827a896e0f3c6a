"""Shared test fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest

from zerohour.config import ZeroHourConfig


class RecordingSink:
    """Diagnostic sink that keeps messages in memory."""

    def __init__(self) -> None:
        self.debugs: list[str] = []
        self.warnings: list[str] = []

    def debug(self, message: str) -> None:
        self.debugs.append(message)

    def warning(self, message: str) -> None:
        self.warnings.append(message)


@pytest.fixture
def fixtures_dir() -> Path:
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def findings_path(fixtures_dir: Path) -> Path:
    return fixtures_dir / "semgrep_findings.json"


@pytest.fixture
def missing_results_path(fixtures_dir: Path) -> Path:
    return fixtures_dir / "missing_results.json"


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def offline_config(tmp_path: Path) -> ZeroHourConfig:
    return ZeroHourConfig(api_key="", config_dir=tmp_path)


@pytest.fixture
def online_config(tmp_path: Path) -> ZeroHourConfig:
    return ZeroHourConfig(api_key="gsk_test", config_dir=tmp_path, batch_timeout=5.0)


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    for var in ("GROQ_API_KEY", "GROQ_MODEL", "GROQ_BASE_URL", "ZEROHOUR_BATCH_TIMEOUT", "DEBUG"):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))

"""Run Semgrep and capture its JSON output."""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path

logger = logging.getLogger(__name__)

# Semgrep exits 1 when it reports findings
_OK_EXIT_CODES = (0, 1)


class SemgrepError(Exception):
    """Semgrep is missing or the scan did not complete."""


def semgrep_version() -> str:
    """Return the installed Semgrep version, or raise SemgrepError."""
    try:
        proc = subprocess.run(
            ["semgrep", "--version"],
            check=True,
            capture_output=True,
            text=True,
            timeout=60,
        )
    except FileNotFoundError as e:
        raise SemgrepError("Semgrep is not installed or not in PATH.") from e
    except (subprocess.CalledProcessError, subprocess.TimeoutExpired) as e:
        raise SemgrepError(f"Semgrep is not usable: {e}") from e
    return proc.stdout.strip()


def run_semgrep(
    directory: str | Path,
    output: str | Path,
    rules: str = "auto",
) -> Path:
    """Scan ``directory`` with ``rules`` and write the JSON report to ``output``."""
    output = Path(output)
    cmd = ["semgrep", "scan", "--config", rules, "--json", str(directory)]
    logger.debug("Running %s", " ".join(cmd))

    try:
        proc = subprocess.run(cmd, capture_output=True, text=True)
    except FileNotFoundError as e:
        raise SemgrepError("Semgrep is not installed or not in PATH.") from e

    if proc.returncode not in _OK_EXIT_CODES:
        detail = proc.stderr.strip().splitlines()[-1] if proc.stderr.strip() else ""
        raise SemgrepError(f"Semgrep scan failed (exit {proc.returncode}) {detail}".strip())

    output.write_text(proc.stdout, encoding="utf-8")
    logger.info("Semgrep results written to %s", output)
    return output

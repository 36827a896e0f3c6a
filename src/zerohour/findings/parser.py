"""Load and validate Semgrep JSON output into Finding records."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from zerohour.findings.models import Finding, Severity

logger = logging.getLogger(__name__)


class ParseError(Exception):
    """Raised when a findings file cannot be read or has the wrong shape."""


def parse_findings(path: str | Path) -> list[Finding]:
    """Read a Semgrep ``--json`` output file and return its findings."""
    try:
        text = Path(path).read_text(encoding="utf-8")
    except OSError as e:
        raise ParseError(f"Failed to read findings file {path}: {e}") from e
    except UnicodeDecodeError as e:
        raise ParseError(f"Failed to read findings file {path}: not valid UTF-8 ({e})") from e
    return parse_findings_from_string(text)


def parse_findings_from_string(text: str) -> list[Finding]:
    """Parse Semgrep JSON text, preserving result order."""
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ParseError(f"Failed to parse findings file: invalid JSON ({e})") from e

    if not isinstance(data, dict):
        raise ParseError("Invalid Semgrep JSON format: top level must be an object")

    results = data.get("results")
    if not isinstance(results, list):
        raise ParseError('Invalid Semgrep JSON format: "results" array missing.')

    scanner_errors = data.get("errors")
    if isinstance(scanner_errors, list) and scanner_errors:
        logger.warning("Scanner reported %d error(s); results may be incomplete", len(scanner_errors))

    return [_parse_result(r, i) for i, r in enumerate(results)]


def _parse_result(raw: object, index: int) -> Finding:
    if not isinstance(raw, dict):
        raise ParseError(f"results[{index}] must be an object")

    check_id = _require_str(raw, "check_id", index)
    path = _require_str(raw, "path", index)

    start = raw.get("start")
    line = start.get("line") if isinstance(start, dict) else None
    # bool is an int subclass
    if not isinstance(line, int) or isinstance(line, bool):
        raise ParseError(f"results[{index}].start.line must be an integer")

    extra = raw.get("extra")
    if not isinstance(extra, dict):
        raise ParseError(f"results[{index}].extra must be an object")

    message = _require_str(extra, "message", index, prefix="extra.")
    severity_raw = _require_str(extra, "severity", index, prefix="extra.")
    try:
        severity = Severity.parse(severity_raw)
    except ValueError as e:
        raise ParseError(f"results[{index}].extra.severity: unknown severity {severity_raw!r}") from e

    snippet = extra.get("lines")
    if snippet is None:
        snippet = ""
    elif not isinstance(snippet, str):
        raise ParseError(f"results[{index}].extra.lines must be a string")

    try:
        return Finding(
            rule_id=check_id,
            file=path,
            line=line,
            message=message,
            severity=severity,
            code_snippet=snippet,
        )
    except ValueError as e:
        raise ParseError(f"results[{index}]: {e}") from e


def _require_str(data: dict, key: str, index: int, prefix: str = "") -> str:
    value = data.get(key)
    if not isinstance(value, str):
        raise ParseError(f"results[{index}].{prefix}{key} must be a string")
    return value

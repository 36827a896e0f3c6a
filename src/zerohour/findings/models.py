"""Finding data models — immutable records produced from scanner output."""

from __future__ import annotations

import enum
from dataclasses import dataclass

# Newer Semgrep releases report LOW/MEDIUM/HIGH/CRITICAL instead of the
# classic INFO/WARNING/ERROR levels.
_SEVERITY_ALIASES = {
    "LOW": "INFO",
    "MEDIUM": "WARNING",
    "HIGH": "ERROR",
    "CRITICAL": "ERROR",
}


class Severity(enum.Enum):
    """Declared scanner severity."""

    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"

    @classmethod
    def parse(cls, raw: str) -> Severity:
        """Parse a scanner severity string, case-insensitively."""
        value = raw.strip().upper()
        value = _SEVERITY_ALIASES.get(value, value)
        return cls(value)


@dataclass(frozen=True)
class Finding:
    """A single static analysis result."""

    rule_id: str
    file: str
    line: int
    message: str
    severity: Severity
    code_snippet: str = ""

    def __post_init__(self) -> None:
        if not self.file:
            raise ValueError("Finding file path must not be empty")
        if self.line < 1:
            raise ValueError(f"Finding line must be >= 1, got {self.line}")


@dataclass(frozen=True)
class EnrichedFinding(Finding):
    """A finding annotated with its exposure score (higher = more critical)."""

    exposure_score: float = 0.0

    @classmethod
    def from_finding(cls, finding: Finding, score: float) -> EnrichedFinding:
        return cls(
            rule_id=finding.rule_id,
            file=finding.file,
            line=finding.line,
            message=finding.message,
            severity=finding.severity,
            code_snippet=finding.code_snippet,
            exposure_score=score,
        )

    def to_dict(self) -> dict:
        return {
            "ruleId": self.rule_id,
            "file": self.file,
            "line": self.line,
            "message": self.message,
            "severity": self.severity.value,
            "codeSnippet": self.code_snippet,
            "exposureScore": self.exposure_score,
        }

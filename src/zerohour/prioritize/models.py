"""Prioritization data models — ranked risks and the pipeline result."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field

from zerohour.findings.models import EnrichedFinding


class Confidence(enum.Enum):
    """How sure the ranking path is about a risk."""

    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"

    @classmethod
    def parse(cls, raw: object) -> Confidence:
        """Parse a remote confidence value; anything unrecognised is Medium."""
        if isinstance(raw, str):
            for member in cls:
                if member.value.lower() == raw.strip().lower():
                    return member
        return cls.MEDIUM


@dataclass(frozen=True)
class RiskAnalysis:
    """One prioritized risk, tied to the finding it was derived from."""

    title: str
    reason: str
    impact: str
    fix: str
    confidence: Confidence
    finding: EnrichedFinding

    def to_dict(self) -> dict:
        return {
            "title": self.title,
            "reason": self.reason,
            "impact": self.impact,
            "fix": self.fix,
            "confidence": self.confidence.value,
            "originalFinding": self.finding.to_dict(),
        }


@dataclass
class AnalysisResult:
    """Ranked risks (best first), every enriched finding, and the fallback flag."""

    top_risks: list[RiskAnalysis] = field(default_factory=list)
    findings: list[EnrichedFinding] = field(default_factory=list)
    is_fallback: bool = False

    def to_dict(self) -> dict:
        return {
            "topRisks": [r.to_dict() for r in self.top_risks],
            "findings": [f.to_dict() for f in self.findings],
            "isFallback": self.is_fallback,
        }

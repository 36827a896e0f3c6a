"""Deterministic local ranking used when the remote path is unavailable."""

from __future__ import annotations

from collections.abc import Sequence

from zerohour.findings.models import EnrichedFinding
from zerohour.prioritize.models import Confidence, RiskAnalysis


def sort_by_exposure(findings: Sequence[EnrichedFinding]) -> list[EnrichedFinding]:
    """Highest exposure first; ties keep their original order."""
    return sorted(findings, key=lambda f: f.exposure_score, reverse=True)


def fallback_ranking(findings: Sequence[EnrichedFinding], limit: int = 5) -> list[RiskAnalysis]:
    """Top ``limit`` findings by exposure, described with fixed templates."""
    return [
        RiskAnalysis(
            title=f"Potential {f.message}",
            reason="Detected by static analysis with high exposure score.",
            impact="Unknown business impact (run with AI API for details).",
            fix="Review code snippet and apply best practices.",
            confidence=Confidence.MEDIUM,
            finding=f,
        )
        for f in sort_by_exposure(findings)[:limit]
    ]

"""Scanner findings — parsing and context enrichment."""

from zerohour.findings.context import enrich_context, exposure_score
from zerohour.findings.models import EnrichedFinding, Finding, Severity
from zerohour.findings.parser import ParseError, parse_findings

__all__ = [
    "EnrichedFinding",
    "Finding",
    "ParseError",
    "Severity",
    "enrich_context",
    "exposure_score",
    "parse_findings",
]

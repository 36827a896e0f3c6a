"""End-to-end analysis: parse, enrich, prioritize."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

from zerohour.config import ZeroHourConfig
from zerohour.diagnostics import DiagnosticSink
from zerohour.findings.context import enrich_context
from zerohour.findings.parser import parse_findings
from zerohour.prioritize.client import RankingClient
from zerohour.prioritize.models import AnalysisResult
from zerohour.prioritize.prioritizer import RiskPrioritizer

logger = logging.getLogger(__name__)


async def analyze_findings_file(
    path: str | Path,
    config: ZeroHourConfig,
    sink: DiagnosticSink | None = None,
    client: RankingClient | None = None,
) -> AnalysisResult:
    """Run the full pipeline over one Semgrep findings file.

    Raises ParseError for unreadable or malformed input; remote ranking
    problems only show up as ``is_fallback`` on the result.
    """
    findings = parse_findings(path)
    logger.info("Loaded %d findings from %s", len(findings), path)

    enriched = enrich_context(findings)
    prioritizer = RiskPrioritizer(config, client=client, sink=sink)
    return await prioritizer.prioritize(enriched)


def analyze_file(
    path: str | Path,
    config: ZeroHourConfig,
    sink: DiagnosticSink | None = None,
) -> AnalysisResult:
    return asyncio.run(analyze_findings_file(path, config, sink=sink))

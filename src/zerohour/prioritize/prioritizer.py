"""Risk prioritizer — remote batched ranking with a deterministic fallback."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence

import openai

from zerohour.config import ZeroHourConfig
from zerohour.diagnostics import DiagnosticSink, LoggingSink
from zerohour.findings.models import EnrichedFinding
from zerohour.prioritize.client import OpenAIRankingClient, RankingClient
from zerohour.prioritize.errors import classify_remote_error, describe_remote_error
from zerohour.prioritize.fallback import fallback_ranking, sort_by_exposure
from zerohour.prioritize.models import AnalysisResult, RiskAnalysis
from zerohour.prioritize.prompt import (
    SYSTEM_PROMPT,
    build_user_prompt,
    parse_ranking_response,
)

logger = logging.getLogger(__name__)


class RiskPrioritizer:
    """Produces an AnalysisResult from enriched findings.

    The remote path is only attempted when a client is injected or the
    config carries a credential. Any remote failure ends in the local
    fallback; nothing raised by the remote service reaches the caller.
    """

    def __init__(
        self,
        config: ZeroHourConfig,
        client: RankingClient | None = None,
        sink: DiagnosticSink | None = None,
    ) -> None:
        self._config = config
        self._client = client
        self._sink = sink or LoggingSink()

    async def prioritize(self, findings: Sequence[EnrichedFinding]) -> AnalysisResult:
        findings = list(findings)

        if self._client is None and not self._config.has_credential:
            self._sink.debug("No API credential configured; using local ranking")
            return self._fallback(findings)
        if not findings:
            return self._fallback(findings)

        client = self._client
        owns_client = client is None
        if client is None:
            try:
                client = OpenAIRankingClient(self._config)
            except openai.OpenAIError as e:
                self._report(0, e)
                return self._fallback(findings)

        try:
            risks = await self._rank_remote(client, findings)
        finally:
            if owns_client:
                await client.close()

        if not risks:
            self._sink.warning("No risks identified by AI; falling back to local analysis.")
            return self._fallback(findings)

        return AnalysisResult(
            top_risks=risks[: self._config.max_risks],
            findings=findings,
            is_fallback=False,
        )

    async def _rank_remote(
        self,
        client: RankingClient,
        findings: list[EnrichedFinding],
    ) -> list[RiskAnalysis]:
        batches = self._make_batches(sort_by_exposure(findings))
        logger.debug("Ranking %d batch(es) remotely", len(batches))

        partials = await asyncio.gather(
            *(self._run_batch(client, i + 1, batch) for i, batch in enumerate(batches))
        )
        return _dedupe([risk for partial in partials for risk in partial])

    def _make_batches(self, ordered: list[EnrichedFinding]) -> list[list[EnrichedFinding]]:
        size = max(1, self._config.batch_size)
        selected = ordered[: size * max(1, self._config.max_batches)]
        return [selected[i : i + size] for i in range(0, len(selected), size)]

    async def _run_batch(
        self,
        client: RankingClient,
        number: int,
        batch: list[EnrichedFinding],
    ) -> list[RiskAnalysis]:
        try:
            content = await asyncio.wait_for(
                client.complete(SYSTEM_PROMPT, build_user_prompt(batch)),
                timeout=self._config.batch_timeout,
            )
            return parse_ranking_response(content, batch)
        except Exception as e:
            self._report(number, e)
            return []

    def _report(self, batch_number: int, error: Exception) -> None:
        kind = classify_remote_error(error)
        message = describe_remote_error(kind, error, self._config)
        prefix = f"Batch {batch_number} failed" if batch_number else "AI client setup failed"
        self._sink.warning(f"{prefix} ({kind.value}): {message}")
        if self._config.debug:
            self._sink.debug(f"{prefix}: {error!r}")

    def _fallback(self, findings: list[EnrichedFinding]) -> AnalysisResult:
        return AnalysisResult(
            top_risks=fallback_ranking(findings, self._config.fallback_count),
            findings=findings,
            is_fallback=True,
        )


def _dedupe(risks: list[RiskAnalysis]) -> list[RiskAnalysis]:
    """Keep the first risk for each (title, file) pair, in order."""
    seen: set[tuple[str, str]] = set()
    unique: list[RiskAnalysis] = []
    for risk in risks:
        key = (risk.title, risk.finding.file)
        if key in seen:
            continue
        seen.add(key)
        unique.append(risk)
    return unique


def prioritize_risks(
    findings: Sequence[EnrichedFinding],
    config: ZeroHourConfig,
    sink: DiagnosticSink | None = None,
    client: RankingClient | None = None,
) -> AnalysisResult:
    """Synchronous entry point around :meth:`RiskPrioritizer.prioritize`."""
    prioritizer = RiskPrioritizer(config, client=client, sink=sink)
    return asyncio.run(prioritizer.prioritize(findings))

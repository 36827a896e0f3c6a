"""Remote ranking prompt construction and response parsing."""

from __future__ import annotations

import json
import logging
from collections.abc import Sequence

from zerohour.findings.models import EnrichedFinding
from zerohour.prioritize.errors import MalformedResponseError
from zerohour.prioritize.models import Confidence, RiskAnalysis

logger = logging.getLogger(__name__)

MAX_SNIPPET_CHARS = 300

SYSTEM_PROMPT = """\
You are a Senior Security Engineer. Analyze the SAST findings you are given.
Identify the most critical business risks (High/Critical only).

INSTRUCTIONS:
1. Verify if the vulnerability is real based on 'code'.
2. Prioritize based on BUSINESS IMPACT.
3. Return valid JSON only.

OUTPUT FORMAT:
{
  "risks": [
    {
      "title": "Concise Title",
      "reason": "Why vulnerable",
      "impact": "Business Impact",
      "fix": "Fix",
      "confidence": "High" | "Medium",
      "originalId": 0
    }
  ]
}"""


def serialize_batch(batch: Sequence[EnrichedFinding]) -> str:
    """Compact JSON for a batch; ``id`` is the batch-local index."""
    payload = [
        {
            "id": i,
            "rule": f.rule_id,
            "file": f.file,
            "line": f.line,
            "code": f.code_snippet[:MAX_SNIPPET_CHARS],
            "msg": f.message,
        }
        for i, f in enumerate(batch)
    ]
    return json.dumps(payload, separators=(",", ":"))


def build_user_prompt(batch: Sequence[EnrichedFinding]) -> str:
    return f"FINDINGS:\n{serialize_batch(batch)}"


def parse_ranking_response(
    content: str | None,
    batch: Sequence[EnrichedFinding],
) -> list[RiskAnalysis]:
    """Turn a remote JSON answer into risks bound to findings of ``batch``.

    Raises MalformedResponseError when the answer is empty or not shaped
    like ``{"risks": [...]}`` (``topRisks`` is accepted as a legacy key).
    """
    if not content:
        raise MalformedResponseError("empty response content")
    if not batch:
        return []

    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        raise MalformedResponseError(f"invalid JSON: {e}") from e

    if not isinstance(data, dict):
        raise MalformedResponseError("response is not a JSON object")

    raw_risks = data.get("risks")
    if raw_risks is None:
        raw_risks = data.get("topRisks")
    if raw_risks is None:
        raw_risks = []
    if not isinstance(raw_risks, list):
        raise MalformedResponseError('"risks" is not an array')

    risks: list[RiskAnalysis] = []
    for item in raw_risks:
        if not isinstance(item, dict):
            logger.debug("Skipping non-object risk entry: %r", item)
            continue
        title = item.get("title")
        if not isinstance(title, str) or not title.strip():
            logger.debug("Skipping risk entry without a title: %r", item)
            continue
        risks.append(
            RiskAnalysis(
                title=title.strip(),
                reason=_text(item.get("reason")),
                impact=_text(item.get("impact")),
                fix=_text(item.get("fix")),
                confidence=Confidence.parse(item.get("confidence")),
                finding=_resolve_finding(item.get("originalId"), batch),
            )
        )
    return risks


def _resolve_finding(original_id: object, batch: Sequence[EnrichedFinding]) -> EnrichedFinding:
    # Out-of-range or non-integral ids fall back to the batch's first finding
    index = _as_index(original_id)
    if index is not None and 0 <= index < len(batch):
        return batch[index]
    return batch[0]


def _as_index(value: object) -> int | None:
    """Accept ints, integral floats and canonical digit strings (1, 1.0, "1")."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str) and value.isdigit() and str(int(value)) == value:
        return int(value)
    return None


def _text(value: object) -> str:
    return value.strip() if isinstance(value, str) else ""

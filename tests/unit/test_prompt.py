"""Tests for ranking prompt serialization and response parsing."""

from __future__ import annotations

import json

import pytest

from zerohour.findings.models import EnrichedFinding, Severity
from zerohour.prioritize.errors import MalformedResponseError
from zerohour.prioritize.models import Confidence
from zerohour.prioritize.prompt import (
    MAX_SNIPPET_CHARS,
    build_user_prompt,
    parse_ranking_response,
    serialize_batch,
)


def _make_enriched(i: int, snippet: str = "code()") -> EnrichedFinding:
    return EnrichedFinding(
        rule_id=f"rule.{i}",
        file=f"src/file{i}.py",
        line=i + 1,
        message=f"message {i}",
        severity=Severity.ERROR,
        code_snippet=snippet,
        exposure_score=10.0,
    )


def _risk(title: str = "SQL Injection", original_id: object = 0, **extra) -> dict:
    risk = {
        "title": title,
        "reason": "Unparameterized query",
        "impact": "Data breach",
        "fix": "Use bound parameters",
        "confidence": "High",
        "originalId": original_id,
    }
    risk.update(extra)
    return risk


class TestSerializeBatch:
    def test_compact_fields(self):
        payload = serialize_batch([_make_enriched(0), _make_enriched(1)])
        assert ", " not in payload and ": " not in payload
        data = json.loads(payload)
        assert data[1] == {
            "id": 1,
            "rule": "rule.1",
            "file": "src/file1.py",
            "line": 2,
            "code": "code()",
            "msg": "message 1",
        }

    def test_snippet_truncated(self):
        data = json.loads(serialize_batch([_make_enriched(0, snippet="x" * 1000)]))
        assert len(data[0]["code"]) == MAX_SNIPPET_CHARS

    def test_user_prompt_contains_findings(self):
        prompt = build_user_prompt([_make_enriched(3)])
        assert prompt.startswith("FINDINGS:")
        assert "rule.3" in prompt


class TestParseRankingResponse:
    def test_maps_original_id(self):
        batch = [_make_enriched(i) for i in range(3)]
        content = json.dumps({"risks": [_risk(original_id=2)]})
        risks = parse_ranking_response(content, batch)
        assert len(risks) == 1
        assert risks[0].finding is batch[2]
        assert risks[0].confidence == Confidence.HIGH
        assert risks[0].impact == "Data breach"

    def test_legacy_top_risks_key(self):
        batch = [_make_enriched(0)]
        content = json.dumps({"topRisks": [_risk()]})
        assert len(parse_ranking_response(content, batch)) == 1

    def test_null_risks_falls_back_to_top_risks(self):
        batch = [_make_enriched(0)]
        content = json.dumps({"risks": None, "topRisks": [_risk(title="Legacy")]})
        risks = parse_ranking_response(content, batch)
        assert [r.title for r in risks] == ["Legacy"]

    @pytest.mark.parametrize("loose_id", ["1", 1.0])
    def test_integral_id_forms_are_mapped(self, loose_id: object):
        batch = [_make_enriched(i) for i in range(2)]
        content = json.dumps({"risks": [_risk(original_id=loose_id)]})
        risks = parse_ranking_response(content, batch)
        assert risks[0].finding is batch[1]

    @pytest.mark.parametrize("bad_id", [-1, 5, "01", "x", None, 1.5, True])
    def test_invalid_id_uses_first_finding(self, bad_id: object):
        batch = [_make_enriched(i) for i in range(2)]
        content = json.dumps({"risks": [_risk(original_id=bad_id)]})
        risks = parse_ranking_response(content, batch)
        assert risks[0].finding is batch[0]

    def test_unknown_confidence_is_medium(self):
        content = json.dumps({"risks": [_risk(confidence="Critical")]})
        risks = parse_ranking_response(content, [_make_enriched(0)])
        assert risks[0].confidence == Confidence.MEDIUM

    def test_entries_without_title_skipped(self):
        content = json.dumps({"risks": [_risk(title=""), "junk", _risk(title="Real")]})
        risks = parse_ranking_response(content, [_make_enriched(0)])
        assert [r.title for r in risks] == ["Real"]

    def test_empty_risks_list(self):
        assert parse_ranking_response('{"risks": []}', [_make_enriched(0)]) == []

    @pytest.mark.parametrize("content", [None, "", "not json", "[1, 2]", '{"risks": "none"}'])
    def test_malformed_raises(self, content: str | None):
        with pytest.raises(MalformedResponseError):
            parse_ranking_response(content, [_make_enriched(0)])

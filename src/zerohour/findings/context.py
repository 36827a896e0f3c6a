"""Context enrichment — deterministic exposure scoring from static heuristics."""

from __future__ import annotations

import re
from collections.abc import Iterable

from zerohour.findings.models import EnrichedFinding, Finding, Severity

_SEVERITY_WEIGHTS = {
    Severity.ERROR: 10.0,
    Severity.WARNING: 5.0,
    Severity.INFO: 1.0,
}

# (pattern over rule id, bonus). Only the largest matching bonus applies.
_RULE_BONUSES: tuple[tuple[re.Pattern[str], float], ...] = (
    (re.compile(r"sql|sqli|injection|nosql"), 4.0),
    (re.compile(r"command|exec|subprocess|rce|shell|eval"), 4.0),
    (re.compile(r"deserial|pickle|yaml-load|unsafe-load"), 4.0),
    (re.compile(r"secret|hardcoded|credential|password|api-key|jwt"), 3.0),
    (re.compile(r"xss|ssrf|traversal|open-redirect|xxe"), 3.0),
    (re.compile(r"crypto|md5|sha1|weak-hash|insecure-hash|tls|ssl"), 2.0),
)

_CRITICAL_PATH = re.compile(
    r"auth|login|payment|billing|checkout|admin|api|session|token|password|secret|crypto"
)
_TEST_PATH = re.compile(r"(^|/)(tests?|spec|specs|__tests__|fixtures?|mocks?|examples?|docs?)(/|$)|_test\.|\.test\.|\.spec\.|(^|/)test_")
_VENDOR_PATH = re.compile(r"(^|/)(node_modules|vendor|third_party|dist|build)(/|$)|\.min\.js$")

_CRITICAL_PATH_BONUS = 3.0


def exposure_score(finding: Finding) -> float:
    """Compute a finding's exposure score. Pure and deterministic."""
    rule = finding.rule_id.lower()
    path = finding.file.replace("\\", "/").lower()

    score = _SEVERITY_WEIGHTS[finding.severity]
    score += max((bonus for pattern, bonus in _RULE_BONUSES if pattern.search(rule)), default=0.0)
    if _CRITICAL_PATH.search(path):
        score += _CRITICAL_PATH_BONUS

    return round(score * _path_factor(path), 2)


def _path_factor(path: str) -> float:
    if _TEST_PATH.search(path):
        return 0.3
    if _VENDOR_PATH.search(path):
        return 0.5
    return 1.0


def enrich_context(findings: Iterable[Finding]) -> list[EnrichedFinding]:
    """Attach exposure scores, preserving input order."""
    return [EnrichedFinding.from_finding(f, exposure_score(f)) for f in findings]

"""Report display — builds Rich renderables from an AnalysisResult."""

from __future__ import annotations

from pathlib import Path

from rich.console import Console, Group
from rich.markup import escape
from rich.panel import Panel
from rich.rule import Rule
from rich.syntax import Syntax
from rich.table import Table
from rich.text import Text

from zerohour.findings.models import EnrichedFinding, Severity
from zerohour.prioritize.models import AnalysisResult, Confidence, RiskAnalysis

_TITLE_WIDTH = 40

_SEVERITY_LABELS = {
    Severity.ERROR: "[red]HIGH[/red]",
    Severity.WARNING: "[yellow]MED[/yellow]",
    Severity.INFO: "[blue]LOW[/blue]",
}

_CONFIDENCE_LABELS = {
    Confidence.HIGH: "[green]● High[/green]",
    Confidence.MEDIUM: "[yellow]● Medium[/yellow]",
    Confidence.LOW: "[dim]● Low[/dim]",
}

# Card border colours by rank; everything past #2 is cyan
_RANK_COLORS = ("red", "yellow")

_LEXERS = {
    ".py": "python",
    ".js": "javascript",
    ".jsx": "jsx",
    ".ts": "typescript",
    ".tsx": "tsx",
    ".go": "go",
    ".java": "java",
    ".rb": "ruby",
    ".php": "php",
    ".cs": "csharp",
    ".yml": "yaml",
    ".yaml": "yaml",
}


def render_summary(result: AnalysisResult) -> Table:
    """Rank / risk / severity / location table."""
    table = Table(title="Summary", show_lines=False, title_justify="left")
    table.add_column("Rank", justify="right", style="cyan")
    table.add_column("Risk")
    table.add_column("Severity", width=8)
    table.add_column("File", style="cyan")

    for rank, risk in enumerate(result.top_risks, start=1):
        table.add_row(
            f"#{rank}",
            Text(_truncate(risk.title, _TITLE_WIDTH)),
            _SEVERITY_LABELS[risk.finding.severity],
            Text(f"{risk.finding.file}:{risk.finding.line}"),
        )
    return table


def render_risk(risk: RiskAnalysis, rank: int) -> Panel:
    """Detail card for one ranked risk."""
    color = _RANK_COLORS[rank - 1] if rank <= len(_RANK_COLORS) else "cyan"
    finding = risk.finding

    parts: list = [
        Text(risk.title.upper(), style="bold"),
        Text(""),
        *_section("REASON", risk.reason),
        *_section("BUSINESS IMPACT", risk.impact),
        *_section("REMEDIATION", risk.fix),
    ]

    if finding.code_snippet:
        parts.append(Text("VULNERABLE CODE", style="bold"))
        parts.append(Rule(style="dim"))
        parts.append(
            Syntax(
                finding.code_snippet,
                _lexer_for(finding.file),
                line_numbers=True,
                start_line=finding.line,
                word_wrap=True,
            )
        )
        parts.append(Text(""))

    parts.append(Rule(style="dim"))
    parts.append(
        Text.from_markup(
            f"[dim]LOCATION[/dim]   [cyan]{escape(finding.file)}[/cyan]:[yellow]{finding.line}[/yellow]\n"
            f"[dim]RULE[/dim]       {escape(finding.rule_id)}\n"
            f"[dim]CONFIDENCE[/dim] {_CONFIDENCE_LABELS[risk.confidence]}"
        )
    )

    return Panel(
        Group(*parts),
        title=f"[bold {color}] RISK #{rank} [/bold {color}]",
        border_style=color,
        padding=(1, 2),
    )


def render_findings(findings: list[EnrichedFinding]) -> Table:
    """Every enriched finding, highest exposure first."""
    table = Table(title=f"All findings ({len(findings)})", title_justify="left")
    table.add_column("Score", justify="right")
    table.add_column("Severity", width=8)
    table.add_column("Location", style="cyan")
    table.add_column("Rule")
    table.add_column("Message", max_width=60)

    for f in sorted(findings, key=lambda f: f.exposure_score, reverse=True):
        table.add_row(
            f"{f.exposure_score:.2f}",
            _SEVERITY_LABELS[f.severity],
            Text(f"{f.file}:{f.line}"),
            Text(f.rule_id),
            Text(f.message),
        )
    return table


def print_results(console: Console, result: AnalysisResult, show_all: bool = False) -> None:
    """Print the full report for one analysis run."""
    if result.is_fallback:
        console.print(
            "[yellow]⚠  AI API unavailable or failed. "
            "Showing deterministic results.[/yellow]\n"
        )

    if not result.top_risks:
        console.print("[green]No prioritized risks.[/green]")
    else:
        console.print(render_summary(result))
        console.print()
        for rank, risk in enumerate(result.top_risks, start=1):
            console.print(render_risk(risk, rank))

    if show_all:
        console.print(render_findings(result.findings))


def _section(heading: str, body: str) -> list:
    return [Text(heading, style="bold"), Rule(style="dim"), Text(body or "-"), Text("")]


def _lexer_for(file_path: str) -> str:
    return _LEXERS.get(Path(file_path).suffix.lower(), "text")


def _truncate(s: str, max_len: int) -> str:
    if len(s) <= max_len:
        return s
    return s[: max_len - 3] + "..."

"""CLI command: zerohour scan [DIRECTORY] — run Semgrep, then analyze."""

from __future__ import annotations

import sys
from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape

from zerohour.cli.analyze import load_config, run_analysis
from zerohour.scanner.semgrep import SemgrepError, run_semgrep, semgrep_version

console = Console(stderr=True)


@click.command()
@click.argument("directory", default=".", type=click.Path(exists=True, file_okay=False))
@click.option("--rules", default="auto", show_default=True, help="Semgrep --config value.")
@click.option(
    "--output",
    "-o",
    default="findings.json",
    show_default=True,
    type=click.Path(dir_okay=False),
    help="Where to write Semgrep's JSON report.",
)
@click.option("--offline", is_flag=True, help="Skip AI ranking; use local prioritization.")
@click.option("--all", "show_all", is_flag=True, help="Also list every finding.")
@click.pass_context
def scan(
    ctx: click.Context,
    directory: str,
    rules: str,
    output: str,
    offline: bool,
    show_all: bool,
) -> None:
    """Run a Semgrep scan and analyze the results immediately."""
    config = load_config(ctx, offline=offline)

    try:
        version = semgrep_version()
    except SemgrepError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        console.print("  Please install Semgrep: brew install semgrep (macOS) or pip install semgrep")
        sys.exit(1)

    if not config.has_credential:
        console.print("[yellow]⚠  GROQ_API_KEY not configured.[/yellow]")
        console.print("[yellow]   Running in OFFLINE mode (deterministic prioritization only).[/yellow]")

    findings_file = Path(output).resolve()
    console.print(
        f"[bold]ZeroHour[/bold] scanning [cyan]{escape(directory)}[/cyan] "
        f"with Semgrep {escape(version)} ([cyan]{escape(rules)}[/cyan])"
    )

    try:
        with console.status("Running Semgrep scan (this may take a moment)..."):
            run_semgrep(directory, findings_file, rules=rules)
    except SemgrepError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        sys.exit(1)

    console.print(f"Scan complete. Results saved to [cyan]{escape(str(findings_file))}[/cyan]\n")
    run_analysis(findings_file, config, show_all=show_all)

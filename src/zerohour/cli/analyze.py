"""CLI command: zerohour analyze [FILE] — prioritize an existing findings file."""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape

from zerohour.config import ZeroHourConfig
from zerohour.findings.parser import ParseError
from zerohour.pipeline import analyze_file
from zerohour.report.display import print_results

console = Console(stderr=True)


@click.command()
@click.argument("file", default="findings.json", type=click.Path(dir_okay=False))
@click.option(
    "--cwd",
    "workdir",
    type=click.Path(exists=True, file_okay=False),
    default=None,
    help="Resolve FILE relative to this directory.",
)
@click.option("--offline", is_flag=True, help="Skip AI ranking; use local prioritization.")
@click.option("--model", default=None, help="Override the ranking model.")
@click.option("--json", "as_json", is_flag=True, help="Print the result as JSON on stdout.")
@click.option("--all", "show_all", is_flag=True, help="Also list every finding.")
@click.pass_context
def analyze(
    ctx: click.Context,
    file: str,
    workdir: str | None,
    offline: bool,
    model: str | None,
    as_json: bool,
    show_all: bool,
) -> None:
    """Prioritize risks from an existing Semgrep findings.json file."""
    config = load_config(ctx, offline=offline, model=model)
    base = Path(workdir) if workdir else Path.cwd()
    run_analysis((base / file).resolve(), config, as_json=as_json, show_all=show_all)


def load_config(
    ctx: click.Context,
    offline: bool = False,
    model: str | None = None,
) -> ZeroHourConfig:
    """Resolve configuration once, applying command-line overrides."""
    try:
        config = ZeroHourConfig.load(ctx.obj.get("config_path"))
    except ValueError as e:
        console.print(f"[red]Invalid configuration:[/red] {escape(str(e))}")
        sys.exit(1)

    if config.debug:
        logging.getLogger("zerohour").setLevel(logging.DEBUG)
    if offline:
        config.api_key = ""
    if model:
        config.model = model
    return config


def run_analysis(
    path: Path,
    config: ZeroHourConfig,
    as_json: bool = False,
    show_all: bool = False,
) -> None:
    """Parse, enrich, prioritize and print; exits 1 on unusable input."""
    if not path.exists():
        console.print(f"[red]Analysis failed:[/red] File not found: {escape(str(path))}")
        sys.exit(1)

    try:
        if as_json:
            result = analyze_file(path, config)
        else:
            mode = "calling Groq AI" if config.has_credential else "offline"
            with console.status(f"Prioritizing risks ({mode})..."):
                result = analyze_file(path, config)
    except ParseError as e:
        console.print(f"[red]Analysis failed:[/red] {escape(str(e))}")
        sys.exit(1)

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        return

    if not result.findings:
        console.print("[green]No findings to analyze! Good job.[/green]")
        return

    console.print(f"Loaded [bold]{len(result.findings)}[/bold] findings from [cyan]{escape(str(path))}[/cyan]\n")
    print_results(console, result, show_all=show_all)

"""CLI entry point for texrules."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Annotated

import typer
from rich import print as rprint
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from texrules.config import TexRulesConfig, load_config
from texrules.config.loader import DEFAULT_CONFIG_TEMPLATE
from texrules.output import RuleEmitter
from texrules.runner import RuleDestinationError, remove_rules, run_executor, write_rules
from texrules.synth import SynthesisReport, SynthesisSession, synthesize

# Exit status when the rule document cannot be created.
EXIT_RULES_UNWRITABLE = 3

_LOG_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "error": logging.ERROR,
}

app = typer.Typer(
    name="texrules",
    help="Synthesize make rules for a LaTeX document tree and run them.",
    add_completion=False,
)

_stderr = Console(stderr=True)


class _JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        return json.dumps({
            "level": record.levelname.lower(),
            "logger": record.name,
            "message": record.getMessage(),
        })


def _configure_logging(cfg: TexRulesConfig) -> None:
    if cfg.log_format == "json":
        handler: logging.Handler = logging.StreamHandler()
        handler.setFormatter(_JsonFormatter())
    else:
        handler = RichHandler(console=_stderr, show_path=False, show_time=False)
    logging.basicConfig(
        level=_LOG_LEVELS[cfg.log_level],
        format="%(message)s",
        handlers=[handler],
        force=True,
    )


def _display_diagnostics(report: SynthesisReport) -> None:
    if not report.diagnostics:
        return
    table = Table(title=f"Diagnostics ({len(report.diagnostics)})")
    table.add_column("Kind", style="yellow")
    table.add_column("Target", style="cyan")
    table.add_column("Message")
    for d in report.diagnostics:
        table.add_row(d.kind, d.target, d.message)
    _stderr.print(table)


@app.command()
def main(
    targets: Annotated[
        list[str] | None,
        typer.Argument(help="Targets passed to make (default: all deliverables)"),
    ] = None,
    show_rules: Annotated[
        bool, typer.Option("--show-rules", help="Print the synthesized rules instead of running make")
    ] = False,
    config: Annotated[
        str | None, typer.Option("--config", "-c", help="Path to texrules.yaml")
    ] = None,
    directory: Annotated[
        Path, typer.Option("--directory", "-C", help="Directory holding the documents")
    ] = Path("."),
    init_config: Annotated[
        bool, typer.Option("--init-config", help="Write a default texrules.yaml and exit")
    ] = False,
) -> None:
    """Synthesize build rules for every document in DIRECTORY and run make on them."""
    root = directory.resolve()

    if init_config:
        dest = root / "texrules.yaml"
        if dest.exists():
            rprint(f"[yellow]{dest.name} already exists.[/yellow]")
            raise typer.Exit(1)
        dest.write_text(DEFAULT_CONFIG_TEMPLATE)
        rprint(f"[green]Created[/green] {dest}")
        raise typer.Exit(0)

    try:
        cfg = load_config(config, project_dir=root)
    except ValueError as e:
        rprint(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
    _configure_logging(cfg)

    targets = list(targets or [])
    session = SynthesisSession(root, cfg)
    report = synthesize(session, targets)
    text = RuleEmitter(session).render()

    rules_path = root / cfg.output.rules_file
    try:
        write_rules(text, rules_path)
    except RuleDestinationError as e:
        rprint(f"[red]Error:[/red] {e}")
        raise typer.Exit(EXIT_RULES_UNWRITABLE)

    _display_diagnostics(report)

    if show_rules:
        typer.echo(text, nl=False)
        raise typer.Exit(0)

    try:
        status = run_executor(rules_path, targets or ["all"], cfg.output.executor, cwd=root)
    finally:
        remove_rules(rules_path)
    raise typer.Exit(status)


if __name__ == "__main__":
    app()

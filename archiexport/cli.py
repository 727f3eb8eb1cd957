"""CLI entry point for archiexport."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Annotated

import typer
import yaml
from rich import print as rprint
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table

from archiexport.config import ArchiExportConfig, load_config
from archiexport.config.loader import CONFIG_FILENAME, DEFAULT_CONFIG_TEMPLATE
from archiexport.output import ExportKind, ExportValidator, ExportWriter, ValidationResult
from archiexport.parsing import Document
from archiexport.pipeline import export_archimate, export_drawio
from archiexport.summary import ExportSummary, format_summary_markdown
from archiexport.vault import load_vault

app = typer.Typer(
    name="archiexport",
    help="Export a TOGAF Markdown vault to ArchiMate exchange XML and draw.io diagrams.",
)

config_app = typer.Typer(help="Manage archiexport configuration.")
app.add_typer(config_app, name="config")

# Global state
_config: ArchiExportConfig | None = None

_LOG_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "error": logging.ERROR,
}


class _JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "time": self.formatTime(record),
            "level": record.levelname.lower(),
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload)


def _configure_logging(cfg: ArchiExportConfig) -> None:
    """Route the package's log records to stderr at the configured level."""
    logger = logging.getLogger("archiexport")
    for handler in [h for h in logger.handlers if getattr(h, "_archiexport", False)]:
        logger.removeHandler(handler)
    handler = logging.StreamHandler()
    handler._archiexport = True  # type: ignore[attr-defined]
    if cfg.log_format == "json":
        handler.setFormatter(_JsonFormatter())
    else:
        handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
    logger.addHandler(handler)
    logger.setLevel(_LOG_LEVELS[cfg.log_level])


def _get_config() -> ArchiExportConfig:
    if _config is None:
        return load_config()
    return _config


@app.callback()
def main(
    config: Annotated[
        str | None, typer.Option("--config", "-c", help="Path to archiexport.yaml")
    ] = None,
) -> None:
    """Global options."""
    global _config
    try:
        _config = load_config(config)
    except ValueError as e:
        rprint(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
    _configure_logging(_config)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _load_documents(vault: str) -> list[Document]:
    try:
        documents = load_vault(vault)
    except (OSError, UnicodeDecodeError) as e:
        rprint(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
    if not documents:
        rprint(f"[yellow]No Markdown files found in {vault}.[/yellow]")
        raise typer.Exit(1)
    return documents


def _report_validation(results: list[ValidationResult], mode: str) -> None:
    """Print issues; strict mode aborts before anything is written."""
    for r in results:
        if r.errors or r.warnings:
            rprint(f"\n[bold]{r.path}[/bold]")
            for err in r.errors:
                rprint(f"  [red]error:[/red] {err}")
            for warn in r.warnings:
                rprint(f"  [yellow]warn:[/yellow] {warn}")
    if mode == "strict" and any(not r.valid for r in results):
        rprint("[red]Validation failed.[/red] Nothing was written.")
        raise typer.Exit(1)


def _summary_table(summary: ExportSummary, title: str) -> Table:
    table = Table(title=title)
    table.add_column("Metric", style="cyan")
    table.add_column("Count", justify="right")
    table.add_row("Elements", str(summary.total_elements))
    table.add_row("Relationships", str(summary.total_relationships))
    table.add_row("Views", str(summary.total_views))
    for layer, count in summary.by_layer.items():
        table.add_row(f"  {layer}", str(count))
    return table


def _writer(cfg: ArchiExportConfig, output: str | None) -> ExportWriter:
    if output:
        return ExportWriter(cfg.output.model_copy(update={"base_dir": output}))
    return ExportWriter(cfg.output)


# ---------------------------------------------------------------------------
# Export commands
# ---------------------------------------------------------------------------


@app.command()
def archimate(
    vault: str = typer.Argument(..., help="Vault directory (or a single Markdown file)"),
    name: Annotated[str | None, typer.Option("--name", "-n", help="Model name")] = None,
    dry_run: bool = typer.Option(False, "--dry-run", help="Preview without writing"),
    output: Annotated[
        str | None, typer.Option("--output", "-o", help="Override output directory")
    ] = None,
) -> None:
    """Export the vault as an ArchiMate Open Exchange XML file."""
    cfg = _get_config()
    documents = _load_documents(vault)
    rprint(f"[bold]Exporting[/bold] {len(documents)} document(s) from {vault}...")

    result = export_archimate(documents, name, cfg)

    validator = ExportValidator(mode=cfg.output.validation)
    _report_validation(
        [
            validator.validate_model(result.model, source=result.model.name),
            validator.validate_xml(result.xml, source="exchange XML", expected_root="model"),
        ],
        cfg.output.validation,
    )

    path = _writer(cfg, output).write(ExportKind.ARCHIMATE, result.model.name, result.xml, dry_run=dry_run)
    rprint(_summary_table(result.summary, f"ArchiMate Export: {result.model.name}"))
    if dry_run:
        rprint(f"[yellow]Dry run:[/yellow] would write {path}")
    else:
        rprint(f"[green]Wrote[/green] {path}")


@app.command()
def drawio(
    vault: str = typer.Argument(..., help="Vault directory (or a single Markdown file)"),
    name: Annotated[str | None, typer.Option("--name", "-n", help="Model name")] = None,
    dry_run: bool = typer.Option(False, "--dry-run", help="Preview without writing"),
    output: Annotated[
        str | None, typer.Option("--output", "-o", help="Override output directory")
    ] = None,
) -> None:
    """Export As-Is, Target and Migration draw.io diagrams."""
    cfg = _get_config()
    documents = _load_documents(vault)
    rprint(f"[bold]Rendering[/bold] draw.io diagrams for {len(documents)} document(s) from {vault}...")

    result = export_drawio(documents, name, cfg)

    validator = ExportValidator(mode=cfg.output.validation)
    docs = result.documents
    _report_validation(
        [validator.validate_model(result.model, source=result.model.name)]
        + [
            validator.validate_xml(content, source=f"{label} diagram", expected_root="mxfile")
            for label, content in (
                ("as-is", docs.as_is),
                ("target", docs.target),
                ("migration", docs.migration),
                ("combined", docs.combined),
            )
        ],
        cfg.output.validation,
    )

    paths = _writer(cfg, output).write_drawio(docs, result.model.name, dry_run=dry_run)

    counts = result.summary.by_migration_status
    table = Table(title=f"Migration Classification: {result.model.name}")
    table.add_column("Status", style="cyan")
    table.add_column("Elements", justify="right")
    table.add_row("[blue]keep[/blue]", str(counts["keep"]))
    table.add_row("[green]add[/green]", str(counts["add"]))
    table.add_row("[red]remove[/red]", str(counts["remove"]))
    rprint(table)

    verb = "Would write" if dry_run else "Wrote"
    rprint(Panel("\n".join(str(p) for p in paths) or "(nothing enabled in output config)", title=verb))


@app.command()
def summary(
    vault: str = typer.Argument(..., help="Vault directory (or a single Markdown file)"),
    name: Annotated[str | None, typer.Option("--name", "-n", help="Model name")] = None,
    format: Annotated[
        str, typer.Option("--format", "-f", help="Output format: markdown or json")
    ] = "markdown",
) -> None:
    """Print element, relationship and migration counts without writing files."""
    if format not in ("markdown", "json"):
        rprint(f"[red]Error:[/red] Invalid format '{format}'. Choose markdown or json.")
        raise typer.Exit(1)

    cfg = _get_config()
    documents = _load_documents(vault)
    result = export_drawio(documents, name, cfg)

    if format == "json":
        typer.echo(result.summary.model_dump_json(indent=2))
    else:
        typer.echo(format_summary_markdown(result.summary))


# ---------------------------------------------------------------------------
# Config commands
# ---------------------------------------------------------------------------


@config_app.command("show")
def config_show() -> None:
    """Show current resolved configuration."""
    cfg = _get_config()
    rprint(Syntax(yaml.dump(cfg.model_dump(), default_flow_style=False), "yaml"))


@config_app.command("init")
def config_init(
    path: Annotated[str, typer.Option("--path", help="Where to write the config")] = CONFIG_FILENAME,
    force: bool = typer.Option(False, "--force", help="Overwrite existing config"),
) -> None:
    """Create a default archiexport.yaml."""
    target = Path(path)
    if target.exists() and not force:
        rprint(f"[yellow]{target} already exists.[/yellow] Use --force to overwrite.")
        raise typer.Exit(1)
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(DEFAULT_CONFIG_TEMPLATE)
    rprint(f"[green]Created[/green] {target}")

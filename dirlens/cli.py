"""dirlens CLI - infer what every directory in a project is for."""

import json
from pathlib import Path
from typing import Dict, Optional
import click
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.tree import Tree
import structlog

from dirlens import __version__
from dirlens.analysis import FileTypeIdentifier, StructureAnalyzer
from dirlens.analysis.results import Dependency, DirectoryRecord, StructureAnalysis
from dirlens.analysis.vocabulary import category_label
from dirlens.config import DirlensConfig, validate_config
from dirlens.errors import ConfigError, classify_error
from dirlens.logging import setup_logging
from dirlens.project import collect_files, read_dependencies

log = structlog.get_logger()

console = Console()


@click.group()
@click.version_option(version=__version__)
def cli():
    """dirlens - directory purpose inference"""
    pass


def _load_config(config_path: Optional[str], locale: Optional[str], log_level: Optional[str]) -> DirlensConfig:
    try:
        config = DirlensConfig.load(config_path, strict=config_path is not None)
    except ConfigError as e:
        console.print(f"[red]✗ {escape(str(classify_error(e)))}[/red]")
        raise SystemExit(1)

    if locale:
        config.locale = locale
    if log_level:
        config.log_level = log_level

    setup_logging(
        level=config.log_level,
        log_file=str(config.log_file) if config.log_file else None,
        json_format=config.json_logs,
    )
    for warning in validate_config(config):
        log.warning("config_warning", message=warning)
    return config


@cli.command()
@click.argument("path", type=click.Path(exists=True, file_okay=False), default=".")
@click.option("--dep", "-d", "extra_deps", multiple=True, help="Extra dependency name (repeatable)")
@click.option("--no-manifest", is_flag=True, help="Do not read package.json/pyproject.toml/requirements")
@click.option("--locale", type=click.Choice(["en", "zh"]), help="Language of the purposes")
@click.option("--json", "as_json", is_flag=True, help="Print the analysis as JSON")
@click.option("--config", "config_path", type=click.Path(), help="Path to a dirlens.toml")
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"]),
    help="Override the configured log level",
)
def analyze(
    path: str,
    extra_deps,
    no_manifest: bool,
    locale: Optional[str],
    as_json: bool,
    config_path: Optional[str],
    log_level: Optional[str],
):
    """Analyze the directory structure of PATH."""
    config = _load_config(config_path, locale, log_level)
    root = Path(path).resolve()

    try:
        files = collect_files(str(root), config.exclude_dirs)
        dependencies = [] if no_manifest else read_dependencies(str(root))
        dependencies.extend(Dependency(name=name) for name in extra_deps)

        analyzer = StructureAnalyzer(config)
        if as_json:
            analysis = analyzer.analyze(str(root), files, dependencies)
        else:
            with console.status("[bold green]Analyzing directories..."):
                analysis = analyzer.analyze(str(root), files, dependencies)
    except Exception as e:
        classified = classify_error(e, context=str(root))
        log.error("analysis_failed", category=classified.category.value, error=classified.message)
        console.print(f"[red]✗ {escape(str(classified))}[/red]")
        raise SystemExit(1)

    if as_json:
        click.echo(analysis.to_json())
        return

    _print_analysis(analysis, root.name or str(root), config.locale)


def _print_analysis(analysis: StructureAnalysis, root_name: str, locale: str):
    if not analysis.records:
        console.print("[yellow]No directories with files found.[/yellow]")
        return

    tree = Tree(f"[bold blue]{escape(root_name)}/[/bold blue]")
    nodes: Dict[str, Tree] = {}
    for record in analysis.records:
        parent = nodes.get(record.parent_directory) if record.parent_directory else None
        nodes[record.path] = (parent or tree).add(_node_label(record, locale))
    console.print(tree)

    arch = analysis.architecture
    lines = [f"[bold]{escape(arch.type)}[/bold] ({arch.confidence} confidence)"]
    for indicator in arch.indicators:
        lines.append(f"  • {escape(indicator)}")
    for layer, dirs in arch.layer_structure.items():
        lines.append(f"  [dim]{layer}: {len(dirs)} directories[/dim]")
    if arch.version_isolation.has_versioning:
        lines.append(
            f"  [dim]versions: {', '.join(arch.version_isolation.versions)} "
            f"({arch.version_isolation.pattern})[/dim]"
        )
    console.print(Panel("\n".join(lines), title="Architecture"))

    if analysis.skipped:
        console.print(f"[yellow]⚠ Skipped {len(analysis.skipped)} directories: "
                      f"{escape(', '.join(analysis.skipped))}[/yellow]")


def _node_label(record: DirectoryRecord, locale: str) -> str:
    label = f"[bold]{escape(record.name)}/[/bold]"
    if record.purpose and record.purpose != category_label("other", locale):
        label += f"  [cyan]{escape(record.purpose)}[/cyan]"
    label += f" [dim]({record.file_count} files, {record.category})[/dim]"
    return label


@cli.command()
@click.argument("files", nargs=-1, required=True)
@click.option("--json", "as_json", is_flag=True, help="Print classifications as JSON")
def classify(files, as_json: bool):
    """Classify FILES by name and location."""
    results = FileTypeIdentifier().classify_many(files)

    if as_json:
        click.echo(json.dumps(
            {
                path: {
                    "category": c.category,
                    "confidence": c.confidence,
                    "indicators": c.indicators,
                }
                for path, c in results.items()
            },
            indent=2,
        ))
        return

    table = Table(title="File Types")
    table.add_column("File", style="cyan")
    table.add_column("Category", style="bold")
    table.add_column("Confidence")
    table.add_column("Indicators", style="dim")

    colors = {"high": "green", "medium": "yellow", "low": "red"}
    for path, result in results.items():
        color = colors.get(result.confidence, "white")
        table.add_row(
            escape(path),
            result.category,
            f"[{color}]{result.confidence}[/{color}]",
            escape("; ".join(result.indicators)),
        )
    console.print(table)


if __name__ == "__main__":
    cli()

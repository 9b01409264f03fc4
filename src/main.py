"""Asset Sweeper CLI - find unreferenced image assets and type declarations."""
from pathlib import Path
import sys
from contextlib import nullcontext
from typing import List, Optional, Tuple

import typer
from rich.markup import escape
from rich.progress import Progress, SpinnerColumn, TextColumn, TimeElapsedColumn
from rich.table import Table

from src.config import Config, __version__, get_config
from src.analyzer.classifier import FileClassifier
from src.analyzer.corpus_builder import CorpusBuilder
from src.analyzer.path_filter import PathFilter
from src.analyzer.patterns import SymbolExclusions
from src.analyzer.reference_resolver import ReferenceResolver, ReferenceVerdict
from src.analyzer.registry import ScanState
from src.report.candidates import write_candidate_list
from src.report.report_builder import ReportBuilder, build_records
from src.utils.logger import log_warning
from src.utils.safe_console import SafeConsole

app = typer.Typer(
    name="sweeper",
    help="Find unreferenced image assets and classes/structs/enums in a source tree",
    add_completion=False
)
console = SafeConsole()

TARGETS = ("assets", "symbols", "both")
FORMATS = ("text", "jsonl")


def analyze_project(project_path: Path, config: Config, target: str = "both",
                    extra_excludes: Optional[List[str]] = None,
                    show_progress: bool = True
                    ) -> Tuple[ScanState, Optional[List[ReferenceVerdict]], Optional[List[ReferenceVerdict]]]:
    """Build the scan state and resolve references.

    Phases run strictly in order; resolution starts only after every
    registry and the corpus are complete:
    1. Asset walk
    2. Text walk + symbol walk
    3. Reference resolution

    Returns:
        (state, asset_verdicts or None, symbol_verdicts or None)
    """
    excluded = config.excluded_paths + list(extra_excludes or [])
    path_filter = PathFilter(excluded, project_root=project_path, skip_hidden=config.skip_hidden)
    classifier = FileClassifier(config.image_extensions, config.source_extensions,
                                config.markup_extensions)
    builder = CorpusBuilder(project_path, path_filter, classifier, config.asset_bundle_suffix)
    state = ScanState(project_root=builder.project_root)

    want_assets = target in ("assets", "both")
    want_symbols = target in ("symbols", "both")

    if show_progress:
        progress_ctx = Progress(
            SpinnerColumn(),
            TextColumn("[bold blue]{task.description}"),
            TimeElapsedColumn(),
            console=console,
            transient=True
        )
    else:
        progress_ctx = nullcontext()

    with progress_ctx as progress:
        if show_progress:
            task = progress.add_task("[cyan]Phase 1/3: Collecting image assets...", total=None)

        if want_assets:
            state.assets = builder.build_asset_registry()

        if show_progress:
            progress.update(task, description="[yellow]Phase 2/3: Reading source and interface files...")

        state.corpus = builder.build_search_corpus()
        if want_symbols:
            state.symbols = builder.build_symbol_registry(state.corpus)
        state.warnings.extend(builder.warnings)

        if show_progress:
            progress.update(task, description="[magenta]Phase 3/3: Resolving references...")

        resolver = ReferenceResolver(state, SymbolExclusions(rules_file=config.rules_file))
        asset_verdicts = resolver.resolve_assets() if want_assets else None
        symbol_verdicts = resolver.resolve_symbols() if want_symbols else None
        state.warnings.extend(resolver.warnings)

    return state, asset_verdicts, symbol_verdicts


@app.command()
def audit(
    project_path: str = typer.Argument(".", help="Project root path to scan"),
    target: str = typer.Option("both", "--target", "-t", help="What to audit: 'assets', 'symbols', or 'both'"),
    output_format: str = typer.Option("text", "--format", "-f", help="Output format: 'text' or 'jsonl'"),
    exclude: List[str] = typer.Option([], "--exclude", "-e", help="Extra path substring to exclude (repeatable)"),
    show_protected: bool = typer.Option(False, "--show-protected", help="List platform/built-in symbols skipped by exclusion rules"),
    candidates_file: Optional[Path] = typer.Option(None, "--candidates-file", help="Write unreferenced symbol names to this file, one per line"),
    no_progress: bool = typer.Option(False, "--no-progress", help="Disable the progress spinner"),
):
    """Scan a project and list unreferenced images and type declarations."""

    if target not in TARGETS:
        console.print(f"[bold red]Error:[/bold red] Invalid target '{escape(target)}'. Use 'assets', 'symbols', or 'both'.")
        raise typer.Exit(1)

    if output_format not in FORMATS:
        console.print(f"[bold red]Error:[/bold red] Invalid format '{escape(output_format)}'. Use 'text' or 'jsonl'.")
        raise typer.Exit(1)

    root = Path(project_path).expanduser().resolve()

    if not root.exists():
        console.print(f"[bold red]Error:[/bold red] Project path does not exist: {escape(str(root))}")
        raise typer.Exit(1)

    if not root.is_dir():
        console.print(f"[bold red]Error:[/bold red] Project path is not a directory: {escape(str(root))}")
        raise typer.Exit(1)

    text_output = output_format == "text"
    if text_output:
        console.print(f"[bold blue]Scanning project:[/bold blue] {escape(str(root))}\n")

    state, asset_verdicts, symbol_verdicts = analyze_project(
        root, get_config(), target=target, extra_excludes=exclude,
        show_progress=text_output and not no_progress
    )

    if text_output:
        ReportBuilder(console, root).render(state, asset_verdicts, symbol_verdicts,
                                            show_protected=show_protected)
    else:
        records = build_records(state, asset_verdicts or [], symbol_verdicts or [])
        ReportBuilder.write_records(records, sys.stdout)

    if candidates_file is not None:
        if symbol_verdicts is None:
            log_warning("--candidates-file needs a symbol audit; nothing written")
        else:
            count = write_candidate_list(candidates_file, symbol_verdicts)
            if text_output:
                console.print(f"[dim]Wrote {count} candidate names to {escape(str(candidates_file))}[/dim]")


@app.command("config")
def show_config():
    """Show the effective scan configuration."""
    config = get_config()

    table = Table(title="Asset Sweeper Configuration")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="magenta", no_wrap=False)
    table.add_row("Excluded paths", escape(", ".join(config.excluded_paths)))
    table.add_row("Image extensions", ", ".join(config.image_extensions))
    table.add_row("Source extensions", ", ".join(config.source_extensions))
    table.add_row("Markup extensions", ", ".join(config.markup_extensions))
    table.add_row("Asset bundle suffix", config.asset_bundle_suffix)
    table.add_row("Skip hidden", "yes" if config.skip_hidden else "no")
    table.add_row("Rules file", escape(str(config.rules_file)) if config.rules_file else "-")
    console.print(table)


def _version_callback(value: bool):
    if value:
        console.print(f"sweeper {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Optional[bool] = typer.Option(None, "--version", callback=_version_callback,
                                           is_eager=True, help="Show version and exit"),
):
    """Asset Sweeper - unreferenced image and type declaration detector."""
    pass


if __name__ == "__main__":
    app()

"""Report rendering - rich tables for humans, JSON lines for tooling."""
import json
from pathlib import Path
from typing import Dict, List, Optional, TextIO

from rich.markup import escape
from rich.table import Table

from src.analyzer.reference_resolver import ReferenceVerdict, protected, unreferenced
from src.analyzer.registry import ScanState
from src.utils.safe_console import SafeConsole

TRANSITIVE_NOTE = (
    "If A references B but nothing outside A references A, only A is reported. "
    "Remove A, then run the audit again to catch B."
)


def relative_display(path: Optional[str], project_root: Path) -> str:
    """Render a path relative to the scanned root when possible."""
    if not path:
        return "-"
    try:
        return Path(path).relative_to(project_root).as_posix()
    except ValueError:
        return str(path)


def build_records(state: ScanState, asset_verdicts: List[ReferenceVerdict],
                  symbol_verdicts: List[ReferenceVerdict]) -> List[Dict]:
    """Flatten results into (kind, name, location) records.

    Returns:
        List of dicts in report order: collisions, unreferenced assets,
        duplicate symbols, unreferenced symbols
    """
    root = state.project_root
    records = []

    if asset_verdicts:
        for name, count in sorted(state.assets.collisions.items()):
            entry = state.assets.get(name)
            records.append({
                "kind": "asset_collision",
                "name": name,
                "location": relative_display(entry.display_location if entry else None, root),
                "count": count,
            })
        for verdict in unreferenced(asset_verdicts):
            records.append({
                "kind": "unreferenced_asset",
                "name": verdict.name,
                "location": relative_display(verdict.location, root),
            })

    if symbol_verdicts:
        for name, paths in sorted(state.symbols.duplicates().items()):
            for path in paths:
                records.append({
                    "kind": "duplicate_symbol",
                    "name": name,
                    "location": relative_display(path, root),
                })
        for verdict in unreferenced(symbol_verdicts):
            records.append({
                "kind": "unreferenced_symbol",
                "name": verdict.name,
                "location": relative_display(verdict.location, root),
            })

    return records


class ReportBuilder:
    """Render scan results to a rich console."""

    def __init__(self, console: SafeConsole, project_root: Path):
        self.console = console
        self.project_root = Path(project_root)

    def _rel(self, path: Optional[str]) -> str:
        return escape(relative_display(path, self.project_root))

    def render_collisions(self, state: ScanState) -> None:
        """Section 1: asset names produced by more than one file."""
        collisions = state.assets.collisions
        if not collisions:
            return

        table = Table(title="Asset Name Collisions")
        table.add_column("Asset", style="cyan")
        table.add_column("Count", justify="right", style="yellow")
        table.add_column("Location", style="magenta", no_wrap=False)
        for name, count in sorted(collisions.items()):
            entry = state.assets.get(name)
            table.add_row(escape(name), str(count), self._rel(entry.display_location if entry else None))
        self.console.print(table)
        self.console.print()

    def render_unreferenced_assets(self, verdicts: List[ReferenceVerdict]) -> None:
        """Section 2: unreferenced asset names with their best-known location."""
        dead = unreferenced(verdicts)
        if not dead:
            self.console.print("[bold green]No unreferenced assets found![/bold green]\n")
            return

        table = Table(title="Unreferenced Assets (review manually)")
        table.add_column("Asset", style="cyan")
        table.add_column("Location", style="magenta", no_wrap=False)
        for verdict in dead:
            table.add_row(escape(verdict.name), self._rel(verdict.location))
        self.console.print(table)
        self.console.print()

    def render_duplicate_symbols(self, state: ScanState) -> None:
        """Names declared in several files; only the last one is resolved."""
        duplicates = state.symbols.duplicates()
        if not duplicates:
            return

        table = Table(title="Duplicate Declarations (last one wins)")
        table.add_column("Symbol", style="cyan")
        table.add_column("Declared In", style="magenta", no_wrap=False)
        for name, paths in sorted(duplicates.items()):
            table.add_row(escape(name), "\n".join(self._rel(p) for p in paths))
        self.console.print(table)
        self.console.print()

    def render_unreferenced_symbols(self, verdicts: List[ReferenceVerdict]) -> None:
        """Section 3: unreferenced symbols with their declaring file."""
        dead = unreferenced(verdicts)
        if not dead:
            self.console.print("[bold green]No unreferenced classes/structs/enums found![/bold green]\n")
            return

        table = Table(title="Unreferenced Classes/Structs/Enums")
        table.add_column("Symbol", style="cyan")
        table.add_column("Declared In", style="magenta", no_wrap=False)
        for verdict in dead:
            table.add_row(escape(verdict.name), self._rel(verdict.location))
        self.console.print(table)
        self.console.print()

    def render_protected_symbols(self, verdicts: List[ReferenceVerdict]) -> None:
        saved = protected(verdicts)
        if not saved:
            return

        table = Table(title="Protected Symbols (platform / built-in)")
        table.add_column("Symbol", style="cyan")
        table.add_column("Protection", style="bold green")
        table.add_column("Declared In", style="magenta", no_wrap=False)
        for verdict in saved:
            table.add_row(escape(verdict.name), escape(verdict.protected_by), self._rel(verdict.location))
        self.console.print(table)
        self.console.print()

    def render(self, state: ScanState, asset_verdicts: Optional[List[ReferenceVerdict]] = None,
               symbol_verdicts: Optional[List[ReferenceVerdict]] = None,
               show_protected: bool = False) -> None:
        """Render the full text report.

        Args:
            state: Scan state the verdicts were computed from
            asset_verdicts: Asset verdicts, or None if assets were not audited
            symbol_verdicts: Symbol verdicts, or None if symbols were not audited
            show_protected: Also list symbols skipped by exclusion rules
        """
        if asset_verdicts is not None:
            self.console.section("[bold]1. Unreferenced Images[/bold]")
            self.render_collisions(state)
            self.render_unreferenced_assets(asset_verdicts)

        if symbol_verdicts is not None:
            self.console.section("[bold]2. Unreferenced Classes/Structs/Enums[/bold]")
            self.render_duplicate_symbols(state)
            self.render_unreferenced_symbols(symbol_verdicts)
            if show_protected:
                self.render_protected_symbols(symbol_verdicts)
            if unreferenced(symbol_verdicts):
                self.console.print(f"[yellow]NOTE:[/yellow] {TRANSITIVE_NOTE}\n")

        self.render_summary(state, asset_verdicts, symbol_verdicts)

    def render_summary(self, state: ScanState, asset_verdicts: Optional[List[ReferenceVerdict]],
                       symbol_verdicts: Optional[List[ReferenceVerdict]]) -> None:
        self.console.print("[bold yellow]Summary:[/bold yellow]")
        if asset_verdicts is not None:
            self.console.print(f"  Assets: {len(state.assets)} "
                               f"(unreferenced: {len(unreferenced(asset_verdicts))}, "
                               f"name collisions: {len(state.assets.collisions)})")
        if symbol_verdicts is not None:
            self.console.print(f"  Symbols: {len(state.symbols)} "
                               f"(unreferenced: {len(unreferenced(symbol_verdicts))}, "
                               f"protected: {len(protected(symbol_verdicts))})")
        if state.warnings:
            self.console.print(f"  Warnings: {len(state.warnings)} (see stderr)")
        self.console.print()
        self.console.print("[dim]Results are candidates only. Verify each one and back up "
                           "the project before deleting anything.[/dim]")

    @staticmethod
    def write_records(records: List[Dict], stream: TextIO) -> None:
        """Write records as newline-delimited JSON."""
        for record in records:
            stream.write(json.dumps(record, ensure_ascii=False) + "\n")

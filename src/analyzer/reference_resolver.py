"""Reference resolution - decides which names are never referenced.

Both resolvers are read-only queries against a fully built ScanState.
Matching is literal substring search, so results over-approximate usage:
a name inside an unrelated string or comment still counts as referenced.
"""
from dataclasses import dataclass
from typing import List, Optional

from .patterns import (
    DegeneratePatternError,
    SymbolExclusions,
    asset_search_patterns,
    symbol_search_patterns,
)
from .registry import AssetEntry, ScanState, SymbolDeclaration
from src.utils.logger import log_warning


@dataclass(frozen=True)
class ReferenceVerdict:
    """Outcome of resolving one asset or symbol name."""
    name: str
    kind: str  # 'asset' or 'symbol'
    referenced: bool
    matched_pattern: Optional[str] = None  # pattern kind that matched, None if unreferenced
    location: Optional[str] = None  # bundle/file path for assets, declaring file for symbols
    protected_by: str = ""  # exclusion rule reason for skipped platform symbols
    referenced_in: Optional[str] = None  # first file containing the match (symbols only)


class ReferenceResolver:
    """Resolve asset and symbol references against a scan state."""

    def __init__(self, state: ScanState, exclusions: Optional[SymbolExclusions] = None):
        """Initialize resolver.

        Args:
            state: Built scan state (never mutated here)
            exclusions: Symbol exclusion table (defaults to built-in rules)
        """
        self.state = state
        self.exclusions = exclusions if exclusions is not None else SymbolExclusions()
        self.warnings: List[str] = []
        # Corpus is frozen once built; fix the search order once per run
        self._search_order = sorted(state.corpus.files)
        self._markup_order = sorted(state.corpus.markup_files)

    def _warn(self, message: str) -> None:
        self.warnings.append(message)
        log_warning(message)

    # --- Assets ---

    def resolve_asset(self, entry: AssetEntry) -> ReferenceVerdict:
        """Referenced iff '"name"' or 'name="name"' occurs anywhere in the corpus.

        Raises:
            DegeneratePatternError: If the name cannot form a search pattern
        """
        for pattern_kind, pattern in asset_search_patterns(entry.name):
            if self.state.corpus.contains(pattern):
                return ReferenceVerdict(entry.name, "asset", True, pattern_kind,
                                        location=entry.display_location)
        return ReferenceVerdict(entry.name, "asset", False, location=entry.display_location)

    def resolve_assets(self) -> List[ReferenceVerdict]:
        """Resolve every registered asset; degenerate names are skipped with a warning."""
        verdicts = []
        for entry in self.state.assets.entries():
            try:
                verdicts.append(self.resolve_asset(entry))
            except DegeneratePatternError as e:
                self._warn(f"Skipping asset {entry.name!r}: {e}")
        return verdicts

    # --- Symbols ---

    def resolve_symbol(self, declaration: SymbolDeclaration) -> ReferenceVerdict:
        """Resolve one declared symbol.

        Referenced iff a file other than the declaring one contains 'Name('
        or 'Name.self', or a markup file contains 'customClass="Name"'.
        Uses inside the declaring file never count.

        Raises:
            DegeneratePatternError: If the name cannot form a search pattern
        """
        name = declaration.name
        rule = self.exclusions.match(name)
        if rule is not None:
            return ReferenceVerdict(name, "symbol", True, location=declaration.file_path,
                                    protected_by=rule.reason or rule.pattern)

        code_patterns, markup_patterns = symbol_search_patterns(name)
        corpus = self.state.corpus

        for file_path in self._search_order:
            if file_path == declaration.file_path:
                continue
            content = corpus.files[file_path]
            for pattern_kind, pattern in code_patterns:
                if pattern in content:
                    return ReferenceVerdict(name, "symbol", True, pattern_kind,
                                            location=declaration.file_path,
                                            referenced_in=file_path)

        for file_path in self._markup_order:
            content = corpus.files.get(file_path, "")
            for pattern_kind, pattern in markup_patterns:
                if pattern in content:
                    return ReferenceVerdict(name, "symbol", True, pattern_kind,
                                            location=declaration.file_path,
                                            referenced_in=file_path)

        return ReferenceVerdict(name, "symbol", False, location=declaration.file_path)

    def resolve_symbols(self) -> List[ReferenceVerdict]:
        """Resolve every declared symbol; degenerate names are skipped with a warning."""
        verdicts = []
        for declaration in self.state.symbols.declarations():
            try:
                verdicts.append(self.resolve_symbol(declaration))
            except DegeneratePatternError as e:
                self._warn(f"Skipping symbol {declaration.name!r}: {e}")
        return verdicts


def unreferenced(verdicts: List[ReferenceVerdict]) -> List[ReferenceVerdict]:
    """Unreferenced verdicts sorted by name."""
    return sorted((v for v in verdicts if not v.referenced), key=lambda v: v.name)


def protected(verdicts: List[ReferenceVerdict]) -> List[ReferenceVerdict]:
    """Verdicts skipped by an exclusion rule, sorted by name."""
    return sorted((v for v in verdicts if v.protected_by), key=lambda v: v.name)

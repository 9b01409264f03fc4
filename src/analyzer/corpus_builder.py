"""Corpus building - walks the tree once per pass and fills the scan state.

Three passes share one filtered walker:
1. Asset walk: image files -> AssetRegistry (names, collisions, locations)
2. Text walk: source + markup files -> SearchCorpus (joined text, per-file map)
3. Symbol walk: declarations in source files -> SymbolRegistry
"""
import os
from pathlib import Path
from typing import Iterator, List, Optional, Tuple

from .classifier import FileClassifier, FileKind
from .path_filter import PathFilter
from .patterns import extract_declarations
from .registry import AssetRegistry, ScanState, SearchCorpus, SymbolRegistry
from src.utils.logger import log_warning


class CorpusBuilder:
    """Build registries and search corpus for a project root."""

    def __init__(self, project_root: str | Path, path_filter: PathFilter,
                 classifier: FileClassifier, asset_bundle_suffix: str = ".imageset"):
        """Initialize corpus builder.

        Args:
            project_root: Root directory to scan
            path_filter: Exclusion predicate (should be rooted at project_root)
            classifier: Extension classifier
            asset_bundle_suffix: Directory suffix marking an asset bundle
        """
        self.project_root = Path(project_root).resolve()
        self.path_filter = path_filter
        self.classifier = classifier
        self.asset_bundle_suffix = asset_bundle_suffix.lower()
        self.warnings: List[str] = []

    def iter_files(self) -> Iterator[Tuple[Path, FileKind]]:
        """Yield (path, kind) for every non-excluded, non-ignored file.

        Excluded directories are pruned so the walk never descends into
        them. Order is deterministic (sorted names at every level).
        """
        for current_root, dirs, files in os.walk(self.project_root):
            current = Path(current_root)
            dirs[:] = sorted(d for d in dirs if not self.path_filter.should_prune(current / d))

            for filename in sorted(files):
                file_path = current / filename
                if self.path_filter.is_excluded(file_path):
                    continue
                kind = self.classifier.classify(file_path)
                if kind is FileKind.IGNORED:
                    continue
                yield file_path, kind

    def _warn(self, message: str) -> None:
        self.warnings.append(message)
        log_warning(message)

    def read_text(self, file_path: Path) -> str:
        """Read a file as UTF-8; unreadable files warn and count as empty."""
        try:
            return file_path.read_text(encoding='utf-8')
        except (OSError, UnicodeDecodeError) as e:
            self._warn(f"Cannot read {self._display(file_path)} - {e}")
            return ""

    def _display(self, file_path: Path) -> str:
        try:
            return file_path.relative_to(self.project_root).as_posix()
        except ValueError:
            return str(file_path)

    def asset_name_for(self, file_path: Path) -> Tuple[str, Optional[Path]]:
        """Derive the logical asset name of an image file.

        The innermost path component ending in the bundle suffix wins
        ('Assets.xcassets/a.imageset/a@2x.png' -> 'a'); otherwise the file
        name without extension is used.

        Returns:
            Tuple of (name, bundle directory or None)
        """
        try:
            dir_parts = file_path.parent.relative_to(self.project_root).parts
        except ValueError:
            dir_parts = ()

        name = file_path.stem
        bundle = None
        current = self.project_root
        # Directory components only; the file itself is not a bundle
        for part in dir_parts:
            current = current / part
            if part.lower().endswith(self.asset_bundle_suffix):
                name = part[:-len(self.asset_bundle_suffix)]
                bundle = current
        return name, bundle

    def build_asset_registry(self) -> AssetRegistry:
        """Asset walk: register every image file under its logical name."""
        registry = AssetRegistry()
        for file_path, kind in self.iter_files():
            if kind is not FileKind.IMAGE:
                continue
            name, bundle = self.asset_name_for(file_path)
            registry.add(name, str(file_path), str(bundle) if bundle else None)
        return registry

    def build_search_corpus(self) -> SearchCorpus:
        """Text walk: read every source and markup file once."""
        corpus = SearchCorpus()
        chunks = []
        for file_path, kind in self.iter_files():
            if not self.classifier.is_searchable(kind):
                continue
            content = self.read_text(file_path)
            key = str(file_path)
            corpus.files[key] = content
            if kind is FileKind.MARKUP:
                corpus.markup_files.add(key)
            else:
                corpus.source_files.add(key)
            chunks.append(content)
        # Newline separators keep a pattern from spanning two files
        corpus.text = "\n".join(chunks)
        return corpus

    def build_symbol_registry(self, corpus: SearchCorpus) -> SymbolRegistry:
        """Symbol walk: collect declarations from source files.

        Reuses the corpus content map so every file is read only once.
        Files are visited in sorted path order, so last-write-wins on a
        duplicated name is deterministic.
        """
        registry = SymbolRegistry()
        for key in sorted(corpus.source_files):
            for name in extract_declarations(corpus.files[key]):
                registry.add(name, key)
        return registry

    def build(self) -> ScanState:
        """Run all passes and return the frozen scan state."""
        state = ScanState(project_root=self.project_root)
        state.assets = self.build_asset_registry()
        state.corpus = self.build_search_corpus()
        state.symbols = self.build_symbol_registry(state.corpus)
        state.warnings = list(self.warnings)
        return state

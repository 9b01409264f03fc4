"""Name registries and per-run scan state."""
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Set


@dataclass
class AssetEntry:
    """An image asset identified by its logical name."""
    name: str
    locations: Set[str] = field(default_factory=set)  # every file path producing this name
    bundle_path: Optional[str] = None  # asset bundle directory (e.g. a.imageset) if any

    @property
    def display_location(self) -> Optional[str]:
        """Bundle path when known, else the first file path in sorted order."""
        if self.bundle_path:
            return self.bundle_path
        if self.locations:
            return sorted(self.locations)[0]
        return None


class AssetRegistry:
    """Deduplicated, insertion-ordered asset names with collision counts.

    The first occurrence of a name registers it; every further occurrence
    bumps its collision count (first duplicate -> 2).
    """

    def __init__(self):
        self._entries: Dict[str, AssetEntry] = {}
        self.collisions: Dict[str, int] = {}

    def add(self, name: str, file_path: str, bundle_path: Optional[str] = None) -> AssetEntry:
        """Register one asset file under its logical name.

        Args:
            name: Logical asset name
            file_path: Path of the image file
            bundle_path: Asset bundle directory the file lives in, if any

        Returns:
            The (possibly pre-existing) entry
        """
        entry = self._entries.get(name)
        if entry is None:
            entry = AssetEntry(name=name)
            self._entries[name] = entry
        else:
            self.collisions[name] = self.collisions.get(name, 1) + 1

        entry.locations.add(file_path)
        if bundle_path and entry.bundle_path is None:
            entry.bundle_path = bundle_path
        return entry

    @property
    def names(self) -> List[str]:
        """Names in first-seen order."""
        return list(self._entries)

    def entries(self) -> List[AssetEntry]:
        return list(self._entries.values())

    def get(self, name: str) -> Optional[AssetEntry]:
        return self._entries.get(name)

    def __contains__(self, name: str) -> bool:
        return name in self._entries

    def __len__(self) -> int:
        return len(self._entries)


@dataclass
class SymbolDeclaration:
    """A declared class/struct/enum and the file declaring it."""
    name: str
    file_path: str


class SymbolRegistry:
    """Symbol name -> declaring file, last write wins.

    Every declaring path is also kept per name so duplicate declarations
    can be reported.
    """

    def __init__(self):
        self._declarations: Dict[str, str] = {}
        self._all_paths: Dict[str, List[str]] = {}

    def add(self, name: str, file_path: str) -> None:
        self._declarations[name] = file_path
        paths = self._all_paths.setdefault(name, [])
        if file_path not in paths:
            paths.append(file_path)

    def get(self, name: str) -> Optional[SymbolDeclaration]:
        file_path = self._declarations.get(name)
        if file_path is None:
            return None
        return SymbolDeclaration(name, file_path)

    def declarations(self) -> List[SymbolDeclaration]:
        return [SymbolDeclaration(name, path) for name, path in self._declarations.items()]

    def duplicates(self) -> Dict[str, List[str]]:
        """Names declared in more than one file, with every declaring path."""
        return {name: list(paths) for name, paths in self._all_paths.items() if len(paths) > 1}

    def __contains__(self, name: str) -> bool:
        return name in self._declarations

    def __len__(self) -> int:
        return len(self._declarations)


@dataclass
class SearchCorpus:
    """Searchable text for one run.

    `text` is every searchable file concatenated (asset resolution);
    `files` keeps each file's content by path (symbol resolution, which
    must skip the declaring file); `markup_files` names the markup paths.
    """
    text: str = ""
    files: Dict[str, str] = field(default_factory=dict)
    markup_files: Set[str] = field(default_factory=set)
    source_files: Set[str] = field(default_factory=set)

    def contains(self, pattern: str) -> bool:
        return pattern in self.text


@dataclass
class ScanState:
    """Everything built for one detection run; read-only once built."""
    project_root: Path
    assets: AssetRegistry = field(default_factory=AssetRegistry)
    symbols: SymbolRegistry = field(default_factory=SymbolRegistry)
    corpus: SearchCorpus = field(default_factory=SearchCorpus)
    warnings: List[str] = field(default_factory=list)

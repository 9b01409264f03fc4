"""Path exclusion - decides whether a filesystem path takes part in a scan."""
import os
from pathlib import Path
from typing import Iterable, List, Optional


class PathFilter:
    """Exclude paths containing any configured substring (case-insensitive).

    Entries are dependency-manager caches, VCS metadata and build output
    (e.g. 'Pods', '.git', 'build'). Matching is a plain substring test on the
    lower-cased path, so 'build' also excludes 'BuildSettings.swift'.
    """

    def __init__(self, excluded_paths: Iterable[str], project_root: Optional[str | Path] = None,
                 skip_hidden: bool = False):
        """Initialize path filter.

        Args:
            excluded_paths: Substrings that exclude a path when present
            project_root: If given, paths are matched relative to this root
            skip_hidden: Also exclude dot-prefixed files and directories
        """
        self.excluded: List[str] = [entry.lower() for entry in excluded_paths if entry]
        self.project_root = Path(project_root).resolve() if project_root is not None else None
        # The walker starts from the resolved root; callers may pass the root as spelled
        self._roots: List[Path] = []
        if project_root is not None:
            self._roots = [self.project_root]
            spelled = Path(os.path.abspath(project_root))
            if spelled != self.project_root:
                self._roots.append(spelled)
        self.skip_hidden = skip_hidden

    def _relative_text(self, path: str | Path) -> str:
        """Return the path string used for matching (relative to root when possible).

        Symlinks are not followed: a link is judged by where it sits in the
        tree, not by its target.
        """
        path = Path(path)
        absolute = Path(os.path.abspath(path))
        for root in self._roots:
            try:
                return absolute.relative_to(root).as_posix()
            except ValueError:
                continue
        return path.as_posix()

    def is_excluded(self, path: str | Path) -> bool:
        """Check whether path contains an excluded entry.

        Args:
            path: File or directory path

        Returns:
            True if the lower-cased path contains any lower-cased entry
        """
        text = self._relative_text(path)
        lowered = text.lower()
        if any(entry in lowered for entry in self.excluded):
            return True

        if self.skip_hidden:
            return any(part.startswith('.') and part not in ('.', '..') for part in Path(text).parts)

        return False

    def should_prune(self, dir_path: str | Path) -> bool:
        """Check whether a directory walk should stop descending into dir_path."""
        return self.is_excluded(dir_path)

"""File classification by extension."""
from enum import Enum
from pathlib import Path
from typing import Iterable


class FileKind(Enum):
    """Role of a file in a scan."""
    IMAGE = "image"
    SOURCE = "source"
    MARKUP = "markup"
    IGNORED = "ignored"


class FileClassifier:
    """Categorize paths by lower-cased extension.

    Total over all inputs: anything not matching a known extension
    (including files without an extension) is IGNORED.
    """

    def __init__(self, image_extensions: Iterable[str], source_extensions: Iterable[str],
                 markup_extensions: Iterable[str]):
        self.image_extensions = {ext.lstrip('.').lower() for ext in image_extensions}
        self.source_extensions = {ext.lstrip('.').lower() for ext in source_extensions}
        self.markup_extensions = {ext.lstrip('.').lower() for ext in markup_extensions}

    def classify(self, path: str | Path) -> FileKind:
        """Classify a path.

        Args:
            path: File path

        Returns:
            FileKind for the path's extension
        """
        ext = Path(path).suffix.lstrip('.').lower()
        if not ext:
            return FileKind.IGNORED
        # Source wins over markup when an extension is configured as both
        if ext in self.image_extensions:
            return FileKind.IMAGE
        if ext in self.source_extensions:
            return FileKind.SOURCE
        if ext in self.markup_extensions:
            return FileKind.MARKUP
        return FileKind.IGNORED

    @staticmethod
    def is_searchable(kind: FileKind) -> bool:
        """Source and markup files make up the search corpus."""
        return kind in (FileKind.SOURCE, FileKind.MARKUP)

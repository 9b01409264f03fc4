"""Shared fixtures: build small Xcode-style project trees under tmp_path."""
from pathlib import Path
from typing import Dict, Union

import pytest

from src.analyzer.classifier import FileClassifier
from src.analyzer.corpus_builder import CorpusBuilder
from src.analyzer.path_filter import PathFilter
from src.config import (
    DEFAULT_EXCLUDED_PATHS,
    DEFAULT_IMAGE_EXTENSIONS,
    DEFAULT_MARKUP_EXTENSIONS,
    DEFAULT_SOURCE_EXTENSIONS,
)


@pytest.fixture
def make_tree(tmp_path):
    """Return a function writing {relative_path: content} under a fresh root."""
    root = tmp_path / "project"
    root.mkdir()

    def _make(files: Dict[str, Union[str, bytes]]) -> Path:
        for rel_path, content in files.items():
            path = root / rel_path
            path.parent.mkdir(parents=True, exist_ok=True)
            if isinstance(content, bytes):
                path.write_bytes(content)
            else:
                path.write_text(content, encoding="utf-8")
        return root.resolve()

    return _make


def make_builder(root: Path, excluded=None, skip_hidden: bool = True) -> CorpusBuilder:
    """CorpusBuilder with default extension sets."""
    path_filter = PathFilter(
        DEFAULT_EXCLUDED_PATHS if excluded is None else excluded,
        project_root=root,
        skip_hidden=skip_hidden,
    )
    classifier = FileClassifier(DEFAULT_IMAGE_EXTENSIONS, DEFAULT_SOURCE_EXTENSIONS,
                                DEFAULT_MARKUP_EXTENSIONS)
    return CorpusBuilder(root, path_filter, classifier)


@pytest.fixture
def builder_for():
    return make_builder

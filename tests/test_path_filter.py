"""Tests for path exclusion and file classification."""
from pathlib import Path

import pytest

from src.analyzer.classifier import FileClassifier, FileKind
from src.analyzer.path_filter import PathFilter


class TestPathFilter:
    """Exclusion list membership (case-insensitive substring)."""

    def test_excluded_substring_any_case(self):
        path_filter = PathFilter(["Pods", ".git"])
        assert path_filter.is_excluded("MyApp/pods/Alamofire/Source.swift")
        assert path_filter.is_excluded("MyApp/.GIT/config")
        assert path_filter.is_excluded(Path("PODS"))

    def test_regular_path_not_excluded(self):
        path_filter = PathFilter(["Pods", "Carthage"])
        assert not path_filter.is_excluded("MyApp/Views/HomeView.swift")

    def test_substring_match_is_not_component_match(self):
        """'build' also excludes file names that merely contain it."""
        path_filter = PathFilter(["build"])
        assert path_filter.is_excluded("MyApp/BuildSettings.swift")

    def test_matches_relative_to_root(self, tmp_path):
        root = tmp_path / "build-server-checkout"
        root.mkdir()
        path_filter = PathFilter(["build"], project_root=root)

        assert not path_filter.is_excluded(root / "App" / "Main.swift"), \
            "The root's own absolute path must not trigger exclusion"
        assert path_filter.is_excluded(root / "Build" / "Products" / "a.png")

    def test_symlink_judged_by_its_own_path(self, tmp_path):
        root = tmp_path / "project"
        (root / "Pods").mkdir(parents=True)
        (root / "App").mkdir()
        target = root / "Pods" / "Shared.swift"
        target.write_text("let x = Bar()", encoding="utf-8")
        link = root / "App" / "Shared.swift"
        try:
            link.symlink_to(target)
        except (OSError, NotImplementedError) as e:
            pytest.skip(f"symlinks unavailable: {e}")

        path_filter = PathFilter(["Pods"], project_root=root)
        assert not path_filter.is_excluded(link)
        assert path_filter.is_excluded(target)

    def test_hidden_entries(self, tmp_path):
        hidden = PathFilter([], project_root=tmp_path, skip_hidden=True)
        visible = PathFilter([], project_root=tmp_path, skip_hidden=False)
        path = tmp_path / ".cache" / "icon.png"

        assert hidden.is_excluded(path)
        assert not visible.is_excluded(path)

    def test_empty_entries_ignored(self):
        assert not PathFilter(["", "Pods"]).is_excluded("App/Main.swift")


class TestFileClassifier:
    """Extension-based categorization."""

    def setup_method(self):
        self.classifier = FileClassifier(
            ["png", "jpg", "svg"], ["swift"], [".xib", "Storyboard"]
        )

    def test_categories(self):
        assert self.classifier.classify("a/icon.png") is FileKind.IMAGE
        assert self.classifier.classify("a/Icon.JPG") is FileKind.IMAGE
        assert self.classifier.classify("App.swift") is FileKind.SOURCE
        assert self.classifier.classify("Main.storyboard") is FileKind.MARKUP
        assert self.classifier.classify("Cell.XIB") is FileKind.MARKUP

    def test_total_over_unknown_inputs(self):
        assert self.classifier.classify("README.md") is FileKind.IGNORED
        assert self.classifier.classify("Makefile") is FileKind.IGNORED
        assert self.classifier.classify("") is FileKind.IGNORED

    def test_searchable(self):
        assert FileClassifier.is_searchable(FileKind.SOURCE)
        assert FileClassifier.is_searchable(FileKind.MARKUP)
        assert not FileClassifier.is_searchable(FileKind.IMAGE)
        assert not FileClassifier.is_searchable(FileKind.IGNORED)

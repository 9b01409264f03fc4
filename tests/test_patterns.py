"""Tests for the declaration regex, search pattern builders and exclusion rules."""
import json

import pytest

from src.analyzer.patterns import (
    DegeneratePatternError,
    ExclusionRule,
    SymbolExclusions,
    asset_search_patterns,
    extract_declarations,
    symbol_search_patterns,
)


class TestDeclarations:

    def test_class_struct_enum(self):
        source = """
        final class HomeViewController: UIViewController {}
        struct _Token {}
        enum Route: String { case home }
        """
        assert extract_declarations(source) == ["HomeViewController", "_Token", "Route"]

    def test_lowercase_and_embedded_keywords_ignored(self):
        source = "class func make() {}\nlet subclass Thing = 1\nenum lowercase {}"
        assert extract_declarations(source) == []

    def test_duplicates_preserved(self):
        assert extract_declarations("class A {}\nclass A {}") == ["A", "A"]


class TestSearchPatterns:

    def test_asset_patterns(self):
        assert asset_search_patterns("icon_home") == [
            ("string_literal", '"icon_home"'),
            ("markup_attribute", 'name="icon_home"'),
        ]

    def test_symbol_patterns_deduplicated(self):
        """'Name(' appears once even though two pattern kinds produce it."""
        code, markup = symbol_search_patterns("Bar")
        assert code == [("call_or_annotation", "Bar("), ("metatype", "Bar.self")]
        assert markup == [("custom_class", 'customClass="Bar"')]

    @pytest.mark.parametrize("name", ["", "   ", 'bad"name', "two\nlines"])
    def test_degenerate_names(self, name):
        with pytest.raises(DegeneratePatternError):
            asset_search_patterns(name)
        with pytest.raises(DegeneratePatternError):
            symbol_search_patterns(name)


class TestSymbolExclusions:

    def test_framework_prefixes(self):
        exclusions = SymbolExclusions()
        for name in ("NSObjectSubclass", "UIViewWrapper", "CGPointHelper", "CALayerProxy", "KFImageCache"):
            assert exclusions.is_excluded(name), f"{name} should be excluded"

    def test_builtin_names_exact(self):
        exclusions = SymbolExclusions()
        assert exclusions.is_excluded("String")
        assert exclusions.is_excluded("Result")
        assert not exclusions.is_excluded("StringFormatter")

    def test_regular_names_not_excluded(self):
        exclusions = SymbolExclusions()
        assert exclusions.match("ProfileView") is None
        assert exclusions.match("Cart") is None

    def test_reason_recorded(self):
        rule = SymbolExclusions().match("NSThing")
        assert rule.match_type == "prefix"
        assert "NS" in rule.reason

    def test_rules_file(self, tmp_path):
        rules_file = tmp_path / "rules.json"
        rules_file.write_text(json.dumps({"rules": [
            {"pattern": "Rx", "match_type": "prefix", "reason": "RxSwift"},
            {"pattern": "AppDelegate", "match_type": "exact"},
        ]}), encoding="utf-8")

        exclusions = SymbolExclusions(rules_file=rules_file)
        assert exclusions.match("RxObservableBox").reason == "RxSwift"
        assert exclusions.is_excluded("AppDelegate")
        assert exclusions.is_excluded("NSThing"), "Defaults must stay in force"

    def test_malformed_rule_skipped(self, tmp_path, capsys):
        rules_file = tmp_path / "rules.json"
        rules_file.write_text(json.dumps({"rules": [
            {"pattern": "Foo", "match_type": "regex"},
            {"match_type": "exact"},
            {"pattern": "Keep", "match_type": "exact"},
        ]}), encoding="utf-8")

        exclusions = SymbolExclusions(rules_file=rules_file, include_defaults=False)
        assert [rule.pattern for rule in exclusions.rules] == ["Keep"]
        assert "Skipping malformed exclusion rule" in capsys.readouterr().err

    def test_unreadable_rules_file_is_warning(self, tmp_path, capsys):
        exclusions = SymbolExclusions(rules_file=tmp_path / "missing.json")
        assert exclusions.is_excluded("UIThing")
        assert "Cannot load exclusion rules" in capsys.readouterr().err

    def test_add_rule_validation(self):
        exclusions = SymbolExclusions(include_defaults=False)
        with pytest.raises(ValueError):
            exclusions.add_rule(ExclusionRule("X", "suffix"))
        with pytest.raises(ValueError):
            exclusions.add_rule(ExclusionRule("", "exact"))

"""Pattern table for declarations, reference searches and symbol exclusions.

All keyword sets, search templates and exclusion rules live here as data so
they can be adjusted without touching the walk or resolution logic.
"""
import json
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Set, Tuple

from src.utils.logger import log_warning


DECLARATION_KEYWORDS = ("class", "struct", "enum")

# 'class Foo', 'struct Foo: Bar', 'enum _Foo {'
DECLARATION_PATTERN = re.compile(
    r"\b(?:" + "|".join(DECLARATION_KEYWORDS) + r")\s+([A-Z_][a-zA-Z0-9_]*)"
)

# (kind, template) pairs; '{name}' is replaced literally, never as a regex
ASSET_PATTERNS: Tuple[Tuple[str, str], ...] = (
    ("string_literal", '"{name}"'),
    ("markup_attribute", 'name="{name}"'),
)

# Code patterns are searched in every file except the declaring one
SYMBOL_CODE_PATTERNS: Tuple[Tuple[str, str], ...] = (
    ("call_or_annotation", "{name}("),
    ("metatype", "{name}.self"),
    ("constructor_call", "{name}("),
)

# Markup patterns are searched in markup files only
SYMBOL_MARKUP_PATTERNS: Tuple[Tuple[str, str], ...] = (
    ("custom_class", 'customClass="{name}"'),
)

DEFAULT_EXCLUDED_PREFIXES = ("NS", "UI", "CG", "CA", "KF")
DEFAULT_EXCLUDED_NAMES = (
    "String", "Int", "Double", "Bool", "Array", "Dictionary", "Set",
    "Optional", "Result", "Date", "URL", "Error", "Codable", "Decodable", "Encodable",
)


class DegeneratePatternError(ValueError):
    """Raised when a name cannot produce a meaningful literal search pattern."""


def extract_declarations(text: str) -> List[str]:
    """Return declared class/struct/enum names in source order.

    Args:
        text: Source file contents

    Returns:
        List of names (duplicates preserved)
    """
    return [match.group(1) for match in DECLARATION_PATTERN.finditer(text)]


def _check_name(name: str) -> None:
    if not name or not name.strip():
        raise DegeneratePatternError("empty name")
    if '"' in name or '\n' in name or '\r' in name:
        raise DegeneratePatternError(f"name {name!r} contains a quote or line break")


def _expand(templates: Tuple[Tuple[str, str], ...], name: str) -> List[Tuple[str, str]]:
    """Expand templates for name, dropping textually identical patterns."""
    seen: Set[str] = set()
    expanded = []
    for kind, template in templates:
        pattern = template.replace("{name}", name)
        if pattern in seen:
            continue
        seen.add(pattern)
        expanded.append((kind, pattern))
    return expanded


def asset_search_patterns(name: str) -> List[Tuple[str, str]]:
    """Build (kind, literal) search patterns for an asset name.

    Raises:
        DegeneratePatternError: If name is empty or would break the quoting
    """
    _check_name(name)
    return _expand(ASSET_PATTERNS, name)


def symbol_search_patterns(name: str) -> Tuple[List[Tuple[str, str]], List[Tuple[str, str]]]:
    """Build (code_patterns, markup_patterns) for a symbol name.

    Returns:
        Tuple of deduplicated (kind, literal) lists

    Raises:
        DegeneratePatternError: If name is empty or would break the quoting
    """
    _check_name(name)
    return _expand(SYMBOL_CODE_PATTERNS, name), _expand(SYMBOL_MARKUP_PATTERNS, name)


@dataclass
class ExclusionRule:
    """A symbol exclusion rule."""
    pattern: str
    match_type: str  # 'prefix' or 'exact'
    reason: str = ""


class SymbolExclusions:
    """Platform / standard-library names that are never reported.

    Rules come from built-in defaults plus an optional JSON rules file:
    {"rules": [{"pattern": "RX", "match_type": "prefix", "reason": "RxSwift"}]}
    """

    VALID_MATCH_TYPES = ("prefix", "exact")

    def __init__(self, rules_file: Optional[Path] = None, include_defaults: bool = True):
        """Initialize the exclusion table.

        Args:
            rules_file: Optional JSON file with extra rules
            include_defaults: Load the built-in framework prefixes and type names
        """
        self.rules: List[ExclusionRule] = []
        self._exact: Dict[str, ExclusionRule] = {}
        self._prefix: List[ExclusionRule] = []

        if include_defaults:
            for prefix in DEFAULT_EXCLUDED_PREFIXES:
                self.add_rule(ExclusionRule(prefix, "prefix", f"Framework prefix '{prefix}'"))
            for name in DEFAULT_EXCLUDED_NAMES:
                self.add_rule(ExclusionRule(name, "exact", "Built-in type"))

        if rules_file is not None:
            self.load_rules_file(rules_file)

    def add_rule(self, rule: ExclusionRule) -> None:
        """Add a rule to the lookup tables.

        Raises:
            ValueError: If match_type is unknown or pattern is empty
        """
        if rule.match_type not in self.VALID_MATCH_TYPES:
            raise ValueError(f"Unknown match_type {rule.match_type!r}")
        if not rule.pattern:
            raise ValueError("Empty exclusion pattern")

        self.rules.append(rule)
        if rule.match_type == "exact":
            self._exact[rule.pattern] = rule
        else:
            self._prefix.append(rule)

    def load_rules_file(self, rules_file: Path) -> int:
        """Load extra rules from JSON. Problems are warnings, never fatal.

        Returns:
            Number of rules added
        """
        try:
            with open(rules_file, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            log_warning(f"Cannot load exclusion rules from {rules_file}: {e}")
            return 0

        entries = data.get("rules", []) if isinstance(data, dict) else data
        if not isinstance(entries, list):
            log_warning(f"Exclusion rules file {rules_file} has no 'rules' list")
            return 0

        added = 0
        for entry in entries:
            try:
                rule = ExclusionRule(
                    pattern=entry["pattern"],
                    match_type=entry.get("match_type", "exact"),
                    reason=entry.get("reason", f"Rule from {Path(rules_file).name}"),
                )
                self.add_rule(rule)
                added += 1
            except (KeyError, TypeError, AttributeError, ValueError) as e:
                log_warning(f"Skipping malformed exclusion rule {entry!r}: {e}")
        return added

    def match(self, name: str) -> Optional[ExclusionRule]:
        """Return the rule excluding name, or None if the name is not excluded."""
        rule = self._exact.get(name)
        if rule is not None:
            return rule
        for rule in self._prefix:
            if name.startswith(rule.pattern):
                return rule
        return None

    def is_excluded(self, name: str) -> bool:
        return self.match(name) is not None

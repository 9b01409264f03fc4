"""Terminal-safe Console wrapper for Rich library.

Wraps Rich's Console so report tables and headings degrade to ASCII icons
on terminals that don't support UTF-8.
"""
from rich.console import Console
from rich.rule import Rule
from typing import Any
from .logger import sanitize_for_terminal, is_utf8_capable


class SafeConsole(Console):
    """Console that sanitizes Unicode output for non-UTF-8 terminals."""

    def __init__(self, *args, **kwargs):
        """Initialize SafeConsole with UTF-8 capability detection.

        All arguments are passed through to Rich's Console.
        """
        self._needs_sanitization = not is_utf8_capable()
        if self._needs_sanitization:
            kwargs['legacy_windows'] = True
        super().__init__(*args, **kwargs)

    def print(self, *objects: Any, **kwargs) -> None:
        """Print with automatic Unicode sanitization of string objects."""
        if self._needs_sanitization:
            objects = tuple(
                sanitize_for_terminal(obj) if isinstance(obj, str) else obj
                for obj in objects
            )
        super().print(*objects, **kwargs)

    def section(self, title: str) -> None:
        """Print a report section heading as a horizontal rule.

        Args:
            title: Section title (Rich markup allowed)
        """
        if self._needs_sanitization:
            title = sanitize_for_terminal(title)
        super().print(Rule(title, align="left", characters="-" if self._needs_sanitization else "─"))

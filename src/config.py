"""Configuration management for Asset Sweeper.

Loads environment variables (optionally from a .env file) and provides
centralized access to the exclusion list, extension sets and rule files.
"""
import os
from pathlib import Path
from typing import List, Optional
from dotenv import load_dotenv

__version__ = "1.2.0"

DEFAULT_EXCLUDED_PATHS = ["Pods", "Carthage", ".git", "build", "DerivedData"]
DEFAULT_IMAGE_EXTENSIONS = ["png", "jpg", "jpeg", "heic", "gif", "webp", "tiff", "bmp", "svg"]
DEFAULT_SOURCE_EXTENSIONS = ["swift"]
DEFAULT_MARKUP_EXTENSIONS = ["xib", "storyboard"]
DEFAULT_ASSET_BUNDLE_SUFFIX = ".imageset"


def _split_list(raw: Optional[str], default: List[str]) -> List[str]:
    """Split a comma-separated environment value, falling back to default."""
    if raw is None or not raw.strip():
        return list(default)
    return [item.strip() for item in raw.split(",") if item.strip()]


def normalize_extensions(extensions: List[str]) -> List[str]:
    """Lower-case extensions and strip any leading dot ('.PNG' -> 'png')."""
    return [ext.strip().lstrip(".").lower() for ext in extensions if ext.strip().lstrip(".")]


class Config:
    """Configuration loader with environment variable support."""

    def __init__(self, env_file: Optional[Path] = None):
        """Initialize config by loading .env file.

        Args:
            env_file: Optional explicit .env path (defaults to project root)
        """
        if env_file is None:
            project_root = Path(__file__).parent.parent
            env_file = project_root / ".env"
        load_dotenv(env_file)

    @property
    def excluded_paths(self) -> List[str]:
        """Get path exclusion substrings (matched case-insensitively).

        Returns:
            List of exclusion entries
        """
        return _split_list(os.getenv("SWEEPER_EXCLUDED_PATHS"), DEFAULT_EXCLUDED_PATHS)

    @property
    def image_extensions(self) -> List[str]:
        """Get image asset extensions without leading dots."""
        return normalize_extensions(
            _split_list(os.getenv("SWEEPER_IMAGE_EXTENSIONS"), DEFAULT_IMAGE_EXTENSIONS)
        )

    @property
    def source_extensions(self) -> List[str]:
        """Get source-code extensions searched for declarations and references."""
        return normalize_extensions(
            _split_list(os.getenv("SWEEPER_SOURCE_EXTENSIONS"), DEFAULT_SOURCE_EXTENSIONS)
        )

    @property
    def markup_extensions(self) -> List[str]:
        """Get interface-definition markup extensions (xib, storyboard)."""
        return normalize_extensions(
            _split_list(os.getenv("SWEEPER_MARKUP_EXTENSIONS"), DEFAULT_MARKUP_EXTENSIONS)
        )

    @property
    def asset_bundle_suffix(self) -> str:
        """Get the asset bundle directory suffix.

        Returns:
            Lower-cased suffix including the leading dot
        """
        suffix = os.getenv("SWEEPER_ASSET_BUNDLE_SUFFIX", DEFAULT_ASSET_BUNDLE_SUFFIX).strip().lower()
        if not suffix:
            suffix = DEFAULT_ASSET_BUNDLE_SUFFIX
        if not suffix.startswith("."):
            suffix = "." + suffix
        return suffix

    @property
    def skip_hidden(self) -> bool:
        """Whether dot-prefixed files and directories are skipped while walking."""
        return os.getenv("SWEEPER_SKIP_HIDDEN", "true").strip().lower() not in ("0", "false", "no", "off")

    @property
    def rules_file(self) -> Optional[Path]:
        """Get optional JSON file with extra symbol exclusion rules.

        Returns:
            Path to rules file or None if not configured
        """
        raw = os.getenv("SWEEPER_RULES_FILE")
        if raw and raw.strip():
            return Path(raw.strip()).expanduser()
        return None


# Singleton instance
_config = None


def get_config() -> Config:
    """Get or create singleton Config instance.

    Returns:
        Config instance
    """
    global _config
    if _config is None:
        _config = Config()
    return _config

"""Public package exports for ``mkdocs_typographer``."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from .cli import main
from .detector import detect_locale
from .engine import TypographyResult, apply_typography, process_typography
from .markdown import process_markdown
from .protected import find_protected_ranges
from .rules import get_all_rules, get_rules_for_locale
from .rules.base import Locale
from .settings import SettingsError, TypographySettings, load_settings


if TYPE_CHECKING:  # pragma: no cover - imported only for typing
    from .plugin import TypographerPlugin

__all__ = [
    "Locale",
    "SettingsError",
    "TypographerPlugin",
    "TypographyResult",
    "TypographySettings",
    "apply_typography",
    "detect_locale",
    "find_protected_ranges",
    "get_all_rules",
    "get_rules_for_locale",
    "load_settings",
    "main",
    "process_markdown",
    "process_typography",
]


def __getattr__(name: str) -> Any:
    """
    Lazily import the MkDocs plugin.

    ``mkdocs_typographer.plugin`` pulls in MkDocs and BeautifulSoup during
    import, which library and CLI callers do not need.
    """
    if name == "TypographerPlugin":
        from .plugin import TypographerPlugin

        return TypographerPlugin
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")

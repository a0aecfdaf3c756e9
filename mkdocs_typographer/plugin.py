"""MkDocs plugin applying multilingual typography to rendered pages."""

# pylint: disable=invalid-name
from __future__ import annotations

from collections import Counter
from collections.abc import Iterable
import logging
from typing import Any, cast
from types import SimpleNamespace

from bs4 import BeautifulSoup, Comment
from bs4.element import NavigableString, PageElement
from mkdocs.config import config_options as c
from mkdocs.config.base import Config
from mkdocs.config.defaults import MkDocsConfig
from mkdocs.exceptions import PluginError
from mkdocs.plugins import BasePlugin
from mkdocs.structure.files import Files
from mkdocs.structure.pages import Page
from rich import box
from rich.console import Console
from rich.table import Table

from .constants import BLOCK_TAGS, IGNORE_DIRECTIVE, SKIP_TAGS
from .engine import process_fragments, resolve_locale
from .rules import get_rule
from .settings import AUTO, LOCALE_CHOICES, SettingsError, TypographySettings, settings_from_mapping


log = logging.getLogger("mkdocs.plugins.typographer")

IGNORE_SELECTOR = f".{IGNORE_DIRECTIVE}, [data-typo='ignore']"

# ---------- Class-based config ----------


class TypographerPluginConfig(Config):
    """Configuration schema for the typographer plugin."""

    locale = c.Choice(LOCALE_CHOICES, default=AUTO)
    rules = c.Type(dict, default={})
    summary = c.Type(bool, default=False)


class TypographerPlugin(BasePlugin[TypographerPluginConfig]):
    """Correct the typography of every page's text nodes."""

    def __init__(self):
        """Initialize runtime state."""
        super().__init__()
        self._settings: TypographySettings | None = None
        self._rule_counts: Counter[str] = Counter()
        self._page_counts: Counter[str] = Counter()

    def on_config(self, config: MkDocsConfig) -> MkDocsConfig | None:
        """Build the engine settings from the plugin configuration.

        Raises:
            PluginError: If the ``rules`` overrides cannot be understood.
        """
        self._settings = self._build_settings()
        self._rule_counts.clear()
        self._page_counts.clear()
        return config

    def _build_settings(self) -> TypographySettings:
        try:
            return settings_from_mapping(
                {"locale": self.config.locale, "enabledRules": self.config.rules}
            )
        except SettingsError as exc:
            raise PluginError(f"Invalid typographer configuration: {exc}") from exc

    @property
    def settings(self) -> TypographySettings:
        if self._settings is None:
            self._settings = self._build_settings()
        return self._settings

    def _source_path_for_page(self, page: Page) -> str:
        """Return the best-effort source path for the given MkDocs page."""
        file_obj = getattr(page, "file", None)
        if file_obj is None:
            return "<page>"
        return cast(str, getattr(file_obj, "src_path", None) or "<page>")

    def _collect_text_nodes(self, soup: BeautifulSoup) -> list[NavigableString]:
        """Return the text nodes eligible for typography, in document order.

        Whitespace-only nodes are kept: they separate words across inline
        elements.
        """
        comments = list(soup.find_all(string=lambda t: isinstance(t, Comment)))

        nodes_to_skip_ids: set[int] = set()  # object ids sidestep Tag.__hash__ hot path

        def _mark_ignore(node: PageElement | None) -> None:
            if node is None:
                return
            nodes_to_skip_ids.add(id(cast(object, node)))
            descendants = cast(Iterable[PageElement], getattr(node, "descendants", ()))
            for descendant in descendants:
                nodes_to_skip_ids.add(id(cast(object, descendant)))

        def _element_name(element: PageElement) -> str | None:
            return cast(str | None, getattr(element, "name", None))

        pos_map = {id(comment): i for i, comment in enumerate(comments)}

        for comment in comments:
            txt = str(comment).strip().lower()
            if txt == f"{IGNORE_DIRECTIVE}-start":
                for c2 in comments[pos_map[id(comment)] + 1 :]:
                    if str(c2).strip().lower() == f"{IGNORE_DIRECTIVE}-end":
                        node = comment.next_sibling
                        while node is not None and node is not c2:
                            _mark_ignore(node)
                            node = node.next_sibling
                        break
            elif txt == IGNORE_DIRECTIVE:
                # Protect the following meaningful sibling only.
                nxt = comment.next_sibling
                while isinstance(nxt, NavigableString) and not nxt.strip():
                    nxt = nxt.next_sibling
                if nxt is not None:
                    _mark_ignore(nxt)

        for el in soup.select(IGNORE_SELECTOR):
            _mark_ignore(el)

        nodes: list[NavigableString] = []
        for node in soup.descendants:
            if isinstance(node, Comment) or not isinstance(node, NavigableString):
                continue
            if id(node) in nodes_to_skip_ids:
                continue
            parent = node.parent
            if not parent or id(parent) in nodes_to_skip_ids or parent.name in SKIP_TAGS:
                continue
            ancestor_iter = cast(Iterable[PageElement], getattr(parent, "parents", ()))
            if any(_element_name(p) in SKIP_TAGS for p in ancestor_iter):
                continue
            nodes.append(node)
        return nodes

    @staticmethod
    def _group_by_block(nodes: list[NavigableString]) -> list[list[NavigableString]]:
        """Split ``nodes`` into runs sharing the same nearest block element.

        A quote opened before ``<em>`` or ``<a>`` and closed after it must
        see the whole paragraph, so each run is corrected as one text.
        """
        groups: list[list[NavigableString]] = []
        current_block: int | None = None
        for node in nodes:
            block = next((p for p in node.parents if p.name in BLOCK_TAGS), None)
            if not groups or id(block) != current_block:
                groups.append([])
                current_block = id(block)
            groups[-1].append(node)
        return groups

    def on_page_content(
        self,
        html: str,
        page: Page,
        config: MkDocsConfig,
        files: Files,
    ) -> str:
        """Process the generated HTML of a page.

        The locale is resolved once per page from all processable text. The
        text nodes of each block element are then corrected together with it.

        Args:
            html: Rendered HTML string produced by MkDocs.
            page: MkDocs page instance currently being processed.
            config: MkDocs configuration object.
            files: MkDocs files collection (unused).

        Returns:
            Updated HTML string with typography fixes applied.
        """
        del config, files
        src_path = self._source_path_for_page(page)
        soup = BeautifulSoup(html, "html.parser")
        nodes = self._collect_text_nodes(soup)
        if not any(str(node).strip() for node in nodes):
            return html

        settings = self.settings
        locale = resolve_locale(settings.locale, "\n".join(str(node) for node in nodes))

        changed_nodes = 0
        for group in self._group_by_block(nodes):
            originals = [str(node) for node in group]
            if not any(text.strip() for text in originals):
                continue
            texts, result = process_fragments(originals, settings, locale=locale)
            self._rule_counts.update(result.applied)
            for node, original, text in zip(group, originals, texts):
                if text != original:
                    node.replace_with(NavigableString(text))
                    changed_nodes += 1

        if changed_nodes:
            self._page_counts[src_path] += changed_nodes
        log.debug("%s: %d text node(s) updated (%s)", src_path, changed_nodes, locale.value)
        return str(soup)

    def on_post_build(self, config: MkDocsConfig) -> None:
        """Optionally print a summary of the corrections after build."""
        del config
        if self.config.summary and self._rule_counts:
            self._print_summary()

    def _print_summary(self):
        """Display the number of blocks each rule changed."""
        table = Table(
            title="Typography corrections",
            title_style="bold bright_white",
            header_style="bold magenta",
            show_lines=True,
            box=box.ROUNDED,
            border_style="grey50",
            row_styles=["grey35", ""],
            pad_edge=False,
            padding=(0, 1),
        )
        table.add_column("Rule", style="cyan", no_wrap=True)
        table.add_column("Name", style="white")
        table.add_column("Changes", justify="right", style="green")

        for rule_id, count in self._rule_counts.most_common():
            rule = get_rule(rule_id)
            name = rule.display_name() if rule is not None else rule_id
            table.add_row(rule_id, name, str(count))

        console = Console()
        console.print(table)
        console.print(
            f"{sum(self._page_counts.values())} text node(s) updated "
            f"across {len(self._page_counts)} page(s)."
        )


def make_plugin_config(**overrides: Any) -> SimpleNamespace:
    """Create a lightweight configuration namespace for standalone usage."""

    defaults = {
        "locale": AUTO,
        "rules": {},
        "summary": False,
    }
    defaults.update(overrides)
    return SimpleNamespace(**defaults)

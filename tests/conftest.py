from __future__ import annotations

from pathlib import Path
import sys
from types import SimpleNamespace

import markdown
import pytest


ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from mkdocs_typographer.plugin import TypographerPlugin, make_plugin_config


@pytest.fixture
def plugin_factory():
    def factory(**config_overrides):
        plugin = TypographerPlugin()
        plugin.config = make_plugin_config(**config_overrides)
        plugin.on_config({})
        return plugin

    return factory


@pytest.fixture
def page(tmp_path):
    src_file = tmp_path / "docs" / "index.md"
    src_file.parent.mkdir(parents=True, exist_ok=True)
    src_file.write_text("# Dummy page\n", encoding="utf-8")
    return SimpleNamespace(
        file=SimpleNamespace(src_path="index.md", abs_src_path=str(src_file))
    )


@pytest.fixture
def render_with_plugin():
    def renderer(plugin: TypographerPlugin, markdown_text: str, page, *, extensions=None):
        html = markdown.markdown(markdown_text, extensions=extensions or [])
        return plugin.on_page_content(html, page, {}, None)

    return renderer

from __future__ import annotations

import logging
from types import SimpleNamespace

from bs4 import BeautifulSoup
from mkdocs.exceptions import PluginError
import pytest

from mkdocs_typographer.plugin import TypographerPlugin, make_plugin_config
from mkdocs_typographer.settings import AUTO


def paragraphs(html: str) -> list[str]:
    soup = BeautifulSoup(html, "html.parser")
    return [p.get_text() for p in soup.find_all("p")]


def test_make_plugin_config_defaults():
    config = make_plugin_config()
    assert config.locale == AUTO
    assert config.rules == {}
    assert config.summary is False


def test_on_page_content_fixes_quotes_and_ellipsis(plugin_factory, page):
    plugin = plugin_factory(locale="en")
    html = '<p>She said "hello"...</p>'

    result = plugin.on_page_content(html, page, {}, None)

    assert paragraphs(result) == ["She said “hello”…"]


def test_on_page_content_leaves_code_untouched(plugin_factory, page, render_with_plugin):
    plugin = plugin_factory(locale="en")
    source = 'Use `a -- b` and "quotes"...\n\n    x = "raw"...\n'

    result = render_with_plugin(plugin, source, page)
    soup = BeautifulSoup(result, "html.parser")

    assert soup.p.get_text() == "Use a -- b and “quotes”…"
    assert soup.pre.get_text() == 'x = "raw"...\n'


def test_on_page_content_without_text_returns_input(plugin_factory, page):
    plugin = plugin_factory(locale="en")
    html = '<pre><code>print("a")...</code></pre>'
    assert plugin.on_page_content(html, page, {}, None) == html


def test_on_page_content_respects_ignore_markers(plugin_factory, page):
    plugin = plugin_factory(locale="en")
    html = (
        '<p>First "one"...</p>'
        "<!--typo-ignore-start-->"
        '<p>Keep "two"...</p>'
        "<!--typo-ignore-end-->"
        '<p>Last "three"...</p>'
    )

    result = plugin.on_page_content(html, page, {}, None)

    assert paragraphs(result) == ["First “one”…", 'Keep "two"...', "Last “three”…"]


def test_on_page_content_single_ignore_comment(plugin_factory, page):
    plugin = plugin_factory(locale="en")
    html = '<!-- typo-ignore -->\n<p>Keep "two"...</p><p>Fix "three"...</p>'

    result = plugin.on_page_content(html, page, {}, None)

    assert paragraphs(result) == ['Keep "two"...', "Fix “three”…"]


def test_on_page_content_respects_ignore_classes(plugin_factory, page):
    plugin = plugin_factory(locale="en")
    html = (
        '<p class="typo-ignore">Keep "one"...</p>'
        '<div data-typo="ignore"><p>Keep "two"...</p></div>'
        '<p>Fix "three"...</p>'
    )

    result = plugin.on_page_content(html, page, {}, None)

    assert paragraphs(result) == ['Keep "one"...', 'Keep "two"...', "Fix “three”…"]


def test_locale_is_resolved_once_per_page(plugin_factory, page):
    plugin = plugin_factory()
    html = '<p>Он сказал "привет" вчера вечером</p><p>Say "hi"</p>'

    result = plugin.on_page_content(html, page, {}, None)

    assert "«hi»" in paragraphs(result)[1]


def test_rules_override_disables_rule(plugin_factory, page):
    plugin = plugin_factory(locale="en", rules={"en/quotes/curly": False})
    html = '<p>She said "hello"...</p>'

    result = plugin.on_page_content(html, page, {}, None)

    assert paragraphs(result) == ['She said "hello"…']


def test_non_boolean_rule_override_is_dropped(plugin_factory, page, caplog):
    with caplog.at_level(logging.WARNING, logger="mkdocs.plugins.typographer"):
        plugin = plugin_factory(locale="en", rules={"en/quotes/curly": "no"})
    result = plugin.on_page_content('<p>"hello"</p>', page, {}, None)

    assert paragraphs(result) == ["“hello”"]
    assert "non-boolean" in caplog.text


def test_invalid_rules_raise_plugin_error():
    plugin = TypographerPlugin()
    plugin.config = make_plugin_config(rules=["en/quotes/curly"])
    with pytest.raises(PluginError):
        plugin.on_config({})


def test_summary_is_printed_after_build(plugin_factory, page, monkeypatch, capsys):
    monkeypatch.setenv("COLUMNS", "200")
    plugin = plugin_factory(locale="en", summary=True)
    plugin.on_page_content('<p>"hello"</p><p>Wait...</p>', page, {}, None)

    plugin.on_post_build({})
    out = capsys.readouterr().out

    assert plugin._rule_counts["en/quotes/curly"] == 1
    assert plugin._rule_counts["common/punctuation/ellipsis"] == 1
    assert "Typography corrections" in out
    assert "en/quotes/curly" in out
    assert "2 text node(s) updated across 1 page(s)." in out


def test_summary_disabled_prints_nothing(plugin_factory, page, capsys):
    plugin = plugin_factory(locale="en")
    plugin.on_page_content('<p>"hello"</p>', page, {}, None)

    plugin.on_post_build({})

    assert capsys.readouterr().out == ""


def test_on_config_resets_counters(plugin_factory, page):
    plugin = plugin_factory(locale="en")
    plugin.on_page_content('<p>"hello"</p>', page, {}, None)
    assert plugin._rule_counts

    plugin.on_config({})

    assert not plugin._rule_counts
    assert not plugin._page_counts


def test_source_path_fallback(plugin_factory):
    plugin = plugin_factory()
    assert plugin._source_path_for_page(SimpleNamespace()) == "<page>"


@pytest.mark.parametrize(
    ("locale", "source", "expected"),
    [
        ("en", 'He said "*hello*" today.', "He said “hello” today."),
        ("en", 'See "[the guide](guide.md)" first.', "See “the guide” first."),
        ("ru", 'Он сказал "**да**" сразу', "«да»"),
    ],
)
def test_quotes_across_inline_elements_are_paired(
    plugin_factory, page, render_with_plugin, locale, source, expected
):
    plugin = plugin_factory(locale=locale)

    result = render_with_plugin(plugin, source, page)

    assert expected in BeautifulSoup(result, "html.parser").p.get_text()


def test_quotes_around_inline_code_are_paired(plugin_factory, page, render_with_plugin):
    plugin = plugin_factory(locale="en")

    result = render_with_plugin(plugin, 'Run "`ls -la`" twice.', page)
    soup = BeautifulSoup(result, "html.parser")

    assert soup.p.get_text() == "Run “ls -la” twice."
    assert soup.code.get_text() == "ls -la"


def test_inline_markup_is_kept_when_quotes_change(plugin_factory, page, render_with_plugin):
    plugin = plugin_factory(locale="en")

    result = render_with_plugin(plugin, 'He said "*hello*" today.', page)
    soup = BeautifulSoup(result, "html.parser")

    assert soup.p.em.get_text() == "hello"
    assert plugin._rule_counts["en/quotes/curly"] == 1

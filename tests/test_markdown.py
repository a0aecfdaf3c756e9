from mkdocs_typographer.constants import ELLIPSIS, NBSP
from mkdocs_typographer.markdown import (
    build_segments,
    ignored_ranges,
    merge_ranges,
    process_markdown,
    segments_to_text,
)
from mkdocs_typographer.rules.base import Locale
from mkdocs_typographer.settings import TypographySettings


EN = TypographySettings(locale="en")
RU = TypographySettings(locale="ru")


def _ignored(text):
    return [segment.text for segment in build_segments(text) if segment.ignored]


def test_merge_ranges():
    assert merge_ranges([]) == []
    assert merge_ranges([(4, 6), (0, 2), (1, 3)]) == [(0, 3), (4, 6)]


def test_segments_round_trip_the_source():
    text = "---\ntitle: x\n---\n\nSome `code` and [a link](../a.md).\n"
    assert segments_to_text(build_segments(text)) == text


def test_front_matter_fences_and_inline_code_are_ignored():
    text = "---\ntitle: A...B\n---\nText `a -- b` here\n\n```python\nx = \"y\"...\n```\n"
    ignored = _ignored(text)
    assert ignored[0] == "---\ntitle: A...B\n---\n"
    assert "`a -- b`" in ignored
    assert '```python\nx = "y"...\n```\n' in ignored


def test_unterminated_fence_runs_to_the_end():
    text = "Intro\n~~~\ncode...\n"
    assert ignored_ranges(text) == [(6, len(text))]


def test_comment_directives_ignore_a_region():
    text = 'Before "a"\n<!-- typo-ignore-start -->\nKeep "b"...\n<!-- typo-ignore-end -->\nAfter "c"'
    result = process_markdown(text, EN)
    assert 'Keep "b"...' in result.text
    assert "Before “a”" in result.text
    assert "After “c”" in result.text
    assert "<!-- typo-ignore-start -->" in result.text


def test_links_html_and_admonitions_are_kept():
    text = (
        '!!! note "Title"\n'
        "    See the [docs](../guide/index.md) and <https://example.com/a...b>.\n"
        '<span class="x--y">Wait...</span>\n'
    )
    result = process_markdown(text, EN)
    assert result.text.startswith('!!! note "Title"')
    assert "(../guide/index.md)" in result.text
    assert "<https://example.com/a...b>" in result.text
    assert '<span class="x--y">' in result.text
    assert f"Wait{ELLIPSIS}" in result.text
    assert f"the{NBSP}[docs]" in result.text


def test_locale_is_detected_once_from_active_text():
    text = 'Он сказал "привет"\n\n```\nprint("hello world, this is english")\n```\n'
    result = process_markdown(text)
    assert result.locale is Locale.ru
    assert result.text.startswith("Он сказал «привет»")
    assert 'print("hello world, this is english")' in result.text


def test_changes_report_lines():
    text = "First line here\n\nWait...\n"
    result = process_markdown(text, EN)
    assert result.changes == ((3, "common/punctuation/ellipsis"),)
    assert result.applied == ("common/punctuation/ellipsis",)
    assert result.changed


def test_changes_point_at_the_changed_line_after_code():
    text = "Intro `x`\nthen wait...\n"
    result = process_markdown(text, EN)
    assert result.changes == ((2, "common/punctuation/ellipsis"),)


def test_unchanged_document():
    text = "# Title\n\nNothing changes here.\n"
    result = process_markdown(text, EN)
    assert result.text == text
    assert not result.changed


def test_russian_markdown_document():
    text = "# Заголовок\n\nЦена 100 руб. Версия `1.2.3`...\n"
    result = process_markdown(text, RU)
    assert f"100{NBSP}₽" in result.text
    assert "`1.2.3`" in result.text


def test_quote_closing_after_inline_code_closes():
    result = process_markdown('He said "run `ls`" now', EN)
    assert result.text.startswith("He said “run `ls`”")


def test_quote_closing_after_link_target_closes():
    text = 'Read "[the guide](guide.md)" first.'
    assert process_markdown(text, EN).text == "Read “[the guide](guide.md)” first."


def test_quotes_around_code_keep_their_nesting():
    result = process_markdown('Он открыл "`config.yml`" сам', RU)
    assert "«`config.yml`»" in result.text

    result = process_markdown('"Он сказал "да `x`" вчера"', RU)
    assert result.text.startswith("«Он сказал „да")
    assert "`x`“" in result.text
    assert result.text.endswith("вчера»")

import logging

import pytest

from mkdocs_typographer import apply_typography, process_typography
from mkdocs_typographer.constants import NBSP
from mkdocs_typographer.engine import PLACEHOLDER, process_fragments, resolve_locale
from mkdocs_typographer.rules.base import Locale
from mkdocs_typographer.settings import TypographySettings


RU = TypographySettings(locale="ru")
EN = TypographySettings(locale="en")


def test_empty_and_whitespace_input_is_returned_unchanged():
    assert apply_typography("") == ""
    assert apply_typography("   \n\t") == "   \n\t"


def test_explicit_locale_is_used():
    assert apply_typography('Он сказал "привет"', RU) == "Он сказал «привет»"


def test_auto_detects_the_locale():
    result = process_typography('Он сказал "привет"')
    assert result.locale is Locale.ru
    assert result.text == "Он сказал «привет»"
    assert result.applied == ("ru/quotes/guillemets",)
    assert result.changed


def test_unknown_locale_falls_back_to_detection_with_warning(caplog):
    with caplog.at_level(logging.WARNING, logger="mkdocs.plugins.typographer"):
        locale = resolve_locale("de", "Hello there")
    assert locale is Locale.en
    assert "Unknown locale" in caplog.text


def test_common_is_not_a_target_locale():
    assert resolve_locale("common", "Привет, мир") is Locale.ru


def test_caps_then_yo_then_quotes():
    text = 'ОН СКАЗАЛ "ЕЩЕ РАЗ ПОПРОБУЕМ ЗАВТРА"'
    result = apply_typography(text, RU)
    assert result.startswith("Он сказал")
    assert "ещё" in result
    assert "«" in result and "»" in result


def test_disabled_rule_is_skipped():
    settings = RU.with_overrides(disable=["ru/quotes/guillemets"])
    assert apply_typography('Он сказал "привет"', settings) == 'Он сказал "привет"'


def test_override_enables_a_default_off_rule():
    text = "Мы видели длинную строку"
    assert apply_typography(text, RU) == text
    settings = RU.with_overrides(enable=["common/layout/orphan"])
    assert apply_typography(text, settings) == f"Мы видели длинную{NBSP}строку"


def test_unknown_override_ids_are_ignored(caplog):
    settings = TypographySettings(locale="en", enabled_rules={"xx/unknown/rule": True})
    with caplog.at_level(logging.DEBUG, logger="mkdocs.plugins.typographer"):
        assert apply_typography("Wait...", settings) == "Wait…"
    assert "xx/unknown/rule" in caplog.text


def test_output_is_idempotent():
    samples = [
        ('Он сказал "привет" - и ушёл... В 2020-2021 гг. было 10 %', RU),
        ('She said "don\'t" -- twice... pages 1-5', EN),
        ('Il a dit "bonjour" ! C\'est 25 %', TypographySettings(locale="fr")),
        ("我有3个apple,很好.", TypographySettings(locale="zh")),
    ]
    for text, settings in samples:
        once = apply_typography(text, settings)
        assert apply_typography(once, settings) == once


def test_applied_lists_only_rules_that_changed_text():
    result = process_typography("Wait...", EN)
    assert result.applied == ("common/punctuation/ellipsis",)
    untouched = process_typography("Nothing changes here", EN)
    assert untouched.applied == ()
    assert not untouched.changed


def test_fragments_share_quote_context():
    texts, result = process_fragments(['He said "run ', '" twice'], EN)
    assert texts == ["He said “run ", "” twice"]
    assert result.applied == ("en/quotes/curly",)


def test_fragments_keep_gap_line_breaks_out_of_the_output():
    texts, result = process_fragments(["Wait...", "Done..."], EN, gaps=["```\ncode\n```\n"])
    assert texts == ["Wait…", "Done…"]
    assert result.text.count("\n") == 3


def test_fragments_containing_the_placeholder_still_split():
    texts, _ = process_fragments([f'Go {PLACEHOLDER} "b', '" c...'], EN)
    assert texts == [f"Go {PLACEHOLDER} “b", "” c…"]


def test_fragments_reject_mismatched_gaps():
    with pytest.raises(ValueError):
        process_fragments(["a", "b"], EN, gaps=[])


def test_no_fragments():
    texts, result = process_fragments([], EN)
    assert texts == []
    assert result.text == ""

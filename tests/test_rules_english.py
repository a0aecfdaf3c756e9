from mkdocs_typographer import apply_typography
from mkdocs_typographer.constants import EM_DASH, EN_DASH, NBSP
from mkdocs_typographer.rules.base import Locale, RuleContext
from mkdocs_typographer.rules.english import (
    fix_dashes,
    fix_hanging,
    fix_percent,
    fix_short_words,
    fix_units,
)
from mkdocs_typographer.settings import TypographySettings


ctx = RuleContext(Locale.en)
EN = TypographySettings(locale="en")


def test_dashes():
    assert fix_dashes("pages 1-5 -- or more", ctx) == f"pages 1{EN_DASH}5 {EM_DASH} or more"
    assert fix_dashes("wait---what", ctx) == f"wait{EM_DASH}what"


def test_markdown_rules_and_table_delimiters_are_kept():
    assert fix_dashes("---", ctx) == "---"
    assert fix_dashes("|---|:--|", ctx) == "|---|:--|"


def test_short_words():
    text = "I read a book in the garden"
    assert fix_short_words(text, ctx) == f"I read a{NBSP}book in{NBSP}the{NBSP}garden"


def test_units():
    assert fix_units("5 kg and 10 GB", ctx) == f"5{NBSP}kg and 10{NBSP}GB"


def test_percent():
    assert fix_percent("10 %", ctx) == "10%"


def test_hanging():
    assert fix_hanging("Where is it?", ctx) == f"Where is{NBSP}it?"


def test_full_pipeline():
    text = 'She said "don\'t" -- twice... on pages 1-5'
    expected = f"She said “don’t” {EM_DASH} twice… on{NBSP}pages 1{EN_DASH}5"
    assert apply_typography(text, EN) == expected


def test_article_binding_through_pipeline():
    assert apply_typography("the book is here", EN) == f"the{NBSP}book is{NBSP}here"

"""Quote reclassification: straight or mixed quotes to locale conventions.

Russian, English and French quotes go through :func:`reclassify_quotes`, a
single left-to-right scan that first folds every known quote glyph to a
neutral marker, then decides for each marker whether it opens or closes from
its left neighbour, tracking a nesting depth to pick outer or inner glyphs.

Chinese and Japanese corner brackets rarely nest beyond one level, so they
use a pairing pass followed by a nested-span pass instead of a counter.
"""

from __future__ import annotations

from dataclasses import dataclass
import re
from typing import FrozenSet

from ..constants import NNBSP
from .base import Group, Locale, Rule, RuleContext, fixed_point, substitute, substitute_all


MARKER = '"'
OPENING_BRACKETS = "([{"


@dataclass(frozen=True)
class QuoteStyle:
    """Glyph table used to emit quotes for one locale.

    Attributes:
        outer_open: Opening glyph at depth 0.
        outer_close: Closing glyph at depth 0.
        inner_open: Opening glyph at depth 1 and deeper.
        inner_close: Closing glyph at depth 1 and deeper.
        variants: Glyphs folded to the neutral marker before scanning.
        normalizer: Optional pattern whose matches are folded to the marker
            too, used to swallow spacing glued to existing guillemets.
    """

    outer_open: str
    outer_close: str
    inner_open: str
    inner_close: str
    variants: FrozenSet[str]
    normalizer: re.Pattern | None = None

    def normalize(self, text: str) -> str:
        """Replace every recognised quote glyph with the neutral marker."""
        if self.normalizer is not None:
            text = self.normalizer.sub(MARKER, text)
        return "".join(MARKER if ch in self.variants else ch for ch in text)


RUSSIAN_QUOTES = QuoteStyle(
    outer_open="«",
    outer_close="»",
    inner_open="„",
    inner_close="“",
    variants=frozenset('"«»„“”'),
)

ENGLISH_QUOTES = QuoteStyle(
    outer_open="“",
    outer_close="”",
    inner_open="“",
    inner_close="”",
    variants=frozenset('"“”„'),
)

FRENCH_QUOTES = QuoteStyle(
    outer_open="«" + NNBSP,
    outer_close=NNBSP + "»",
    inner_open="“",
    inner_close="”",
    variants=frozenset('"«»“”'),
    normalizer=re.compile("«[ \u00a0\u202f]*|[ \u00a0\u202f]*»"),
)


def _opens(normalized: str, index: int, after_opening: bool) -> bool:
    """Return whether the marker at ``index`` opens a quotation."""
    if index == 0 or after_opening:
        return True
    before = normalized[index - 1]
    return before.isspace() or before in OPENING_BRACKETS


def reclassify_quotes(text: str, style: QuoteStyle) -> str:
    """Rewrite every quote of ``text`` with the glyphs of ``style``.

    The depth counter never drops below zero: an unmatched closing quote is
    emitted with the outer glyph and does not disturb later quotes. Openers
    without a closer are left as they are; nothing is auto-closed.

    Args:
        text: Text containing straight, curly, low-high or angle quotes.
        style: Locale glyph table.

    Returns:
        The text with directional quotes.

    Examples:
        >>> reclassify_quotes('Он сказал "привет"', RUSSIAN_QUOTES)
        'Он сказал «привет»'
        >>> reclassify_quotes('"Он сказал "да""', RUSSIAN_QUOTES)
        '«Он сказал „да“»'
        >>> reclassify_quotes('конец" и "начало"', RUSSIAN_QUOTES)
        'конец» и «начало»'
    """
    normalized = style.normalize(text)
    output: list[str] = []
    depth = 0
    after_opening = False

    for index, char in enumerate(normalized):
        if char != MARKER:
            output.append(char)
            after_opening = False
            continue

        if _opens(normalized, index, after_opening):
            output.append(style.outer_open if depth == 0 else style.inner_open)
            depth += 1
            after_opening = True
            continue

        depth -= 1
        if depth <= 0:
            depth = 0
            output.append(style.outer_close)
        else:
            output.append(style.inner_close)
        after_opening = False

    return "".join(output)


def fix_ru_quotes(text: str, ctx: RuleContext) -> str:
    del ctx
    return reclassify_quotes(text, RUSSIAN_QUOTES)


RE_APOSTROPHE = re.compile(r"(?<=\w)'(?=\w)")
RE_SINGLE_OPEN = re.compile(r"(^|[\s(\[{])'(?=\S)", re.MULTILINE)
RE_SINGLE_CLOSE = re.compile(r"'(?=[\s)\]},;:!?.]|$)", re.MULTILINE)


def fix_en_quotes(text: str, ctx: RuleContext) -> str:
    """Curl apostrophes, double quotes and single quotes.

    Contraction apostrophes (``don't``) are handled before anything else so
    they are never mistaken for single-quote delimiters.
    """
    result = substitute(RE_APOSTROPHE, "’", text, ctx)
    result = reclassify_quotes(result, ENGLISH_QUOTES)
    return substitute_all(
        result,
        ctx.rebind(result),
        (
            (RE_SINGLE_OPEN, "\\1‘"),
            (RE_SINGLE_CLOSE, "’"),
        ),
    )


def fix_fr_quotes(text: str, ctx: RuleContext) -> str:
    del ctx
    return reclassify_quotes(text, FRENCH_QUOTES)


RE_CJK_PAIR = re.compile(r'[“"]([^"“”]*?)[”"]')
RE_CJK_NESTED = re.compile(r"「([^「」]*?)「([^「」]*?)」([^「」]*?)」")


def fix_corner_quotes(text: str, ctx: RuleContext) -> str:
    """Convert paired quotes to 「」 and nested pairs to 『』.

    Pairs are resolved innermost first, so the pairing pass repeats until the
    text is stable; the nested pass then swaps the inner brackets.

    Examples:
        >>> fix_corner_quotes("他说“她说“不”了”", RuleContext(Locale.zh))
        '他说「她说『不』了」'
    """
    paired = fixed_point(
        lambda current: substitute(RE_CJK_PAIR, r"「\1」", current, ctx.rebind(current)),
        text,
    )
    return fixed_point(
        lambda current: substitute(
            RE_CJK_NESTED, r"「\1『\2』\3」", current, ctx.rebind(current)
        ),
        paired,
    )


RULES: tuple[Rule, ...] = (
    Rule(
        id="ru/quotes/guillemets",
        names={"ru": "Кавычки «ёлочки» и „лапки“", "en": "Russian quotes «» „“"},
        locale=Locale.ru,
        group=Group.quotes,
        enabled=True,
        priority=30,
        fixer=fix_ru_quotes,
    ),
    Rule(
        id="en/quotes/curly",
        names={"en": "Curly quotes “” ‘’", "ru": "Английские кавычки “” ‘’"},
        locale=Locale.en,
        group=Group.quotes,
        enabled=True,
        priority=30,
        fixer=fix_en_quotes,
    ),
    Rule(
        id="fr/quotes/guillemets",
        names={
            "fr": "Guillemets « »",
            "en": "French quotes « »",
            "ru": "Французские кавычки « »",
        },
        locale=Locale.fr,
        group=Group.quotes,
        enabled=True,
        priority=30,
        fixer=fix_fr_quotes,
    ),
    Rule(
        id="zh/quotes/corner",
        names={"zh": "引号「」『』", "en": "Chinese corner quotes", "ru": "Китайские кавычки"},
        locale=Locale.zh,
        group=Group.quotes,
        enabled=True,
        priority=31,
        fixer=fix_corner_quotes,
    ),
    Rule(
        id="ja/quotes/corner",
        names={"ja": "鉤括弧「」『』", "en": "Japanese corner quotes", "ru": "Японские кавычки"},
        locale=Locale.ja,
        group=Group.quotes,
        enabled=True,
        priority=31,
        fixer=fix_corner_quotes,
    ),
)

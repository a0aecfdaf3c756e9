"""English typography: dashes, short-word binding, units and percent.

English keeps percent signs and unit symbols glued to their number and binds
articles and short prepositions to the following word, so a line never ends
on "a" or "the".
"""

from __future__ import annotations

import re

from ..constants import EM_DASH, EN_DASH, NBSP
from .base import (
    RE_NUMBER_RANGE,
    Group,
    Locale,
    Rule,
    RuleContext,
    alternation,
    fixed_point,
    substitute,
    substitute_all,
)


SHORT_WORDS = ("a", "an", "the", "at", "by", "for", "in", "of", "on", "to", "or", "if", "is")

UNITS = ("kg", "km", "cm", "mm", "ml", "lb", "oz", "ft", "in", "mi", "mph", "GB", "MB", "KB", "TB")

# Double or triple hyphens inside a line; Markdown rules (``---``) and table
# delimiters (``|---|``, ``:--``) are kept.
RE_DOUBLE_HYPHEN = re.compile(r"(?<=[^\n|:-])---?(?![-|:])")
RE_SHORT_WORD = re.compile(rf"(?<!\S)({alternation(SHORT_WORDS)})[^\S\n]", re.IGNORECASE)
RE_UNIT = re.compile(rf"(\d)[^\S\n]+({alternation(UNITS)})\b")
RE_PERCENT = re.compile(r"(\d)[^\S\n]+%")
RE_HANGING = re.compile(r"(\S+)[^\S\n]([a-zA-Z-]{1,3}[.,!?]?)$", re.MULTILINE)


def fix_dashes(text: str, ctx: RuleContext) -> str:
    """Replace ``--``/``---`` with an em dash and hyphenated ranges with an en dash.

    Examples:
        >>> fix_dashes("pages 1-5 -- or more", RuleContext(Locale.en))
        'pages 1–5 — or more'
    """
    return substitute_all(
        text,
        ctx,
        (
            (RE_DOUBLE_HYPHEN, EM_DASH),
            (RE_NUMBER_RANGE, rf"\1{EN_DASH}\2"),
        ),
    )


def fix_short_words(text: str, ctx: RuleContext) -> str:
    return fixed_point(
        lambda current: substitute(RE_SHORT_WORD, r"\1" + NBSP, current, ctx.rebind(current)),
        text,
    )


def fix_units(text: str, ctx: RuleContext) -> str:
    return substitute(RE_UNIT, rf"\1{NBSP}\2", text, ctx)


def fix_percent(text: str, ctx: RuleContext) -> str:
    return substitute(RE_PERCENT, r"\1%", text, ctx)


def fix_hanging(text: str, ctx: RuleContext) -> str:
    return substitute(RE_HANGING, rf"\1{NBSP}\2", text, ctx)


def _rule(rule_id, names, group, priority, fixer) -> Rule:
    return Rule(
        id=rule_id,
        names=names,
        locale=Locale.en,
        group=group,
        enabled=True,
        priority=priority,
        fixer=fixer,
    )


RULES: tuple[Rule, ...] = (
    _rule(
        "en/dashes/smart",
        {"en": "Smart dashes — –", "ru": "Умные тире"},
        Group.dashes,
        35,
        fix_dashes,
    ),
    _rule(
        "en/spaces/shortwords",
        {"en": "Non-breaking space after articles", "ru": "Неразрывный пробел после артиклей"},
        Group.spaces,
        50,
        fix_short_words,
    ),
    _rule(
        "en/spaces/units",
        {"en": "Non-breaking space before units", "ru": "Неразрывный пробел перед единицами"},
        Group.spaces,
        54,
        fix_units,
    ),
    _rule(
        "en/numbers/percent",
        {"en": "Percentage formatting", "ru": "Процент"},
        Group.numbers,
        64,
        fix_percent,
    ),
    _rule(
        "en/spaces/hanging",
        {"en": "Prevent hanging lines", "ru": "Предотвращение висячих строк"},
        Group.spaces,
        90,
        fix_hanging,
    ),
)

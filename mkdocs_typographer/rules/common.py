"""Locale-agnostic rules applied before and after every locale catalog."""

from __future__ import annotations

import re

from ..constants import ELLIPSIS, NBSP
from .base import Group, Locale, Rule, RuleContext, substitute, substitute_all


RE_DOUBLE_SPACE = re.compile(r"(?<=\S) {2,}(?=\S)")

RE_EXCLAIM_QUESTION = re.compile(r"[^\S\n]*!+[^\S\n]*\?+")
RE_QUESTION_EXCLAIM = re.compile(r"[^\S\n]*\?+[^\S\n]*!+")
RE_REPEATED_PUNCT = re.compile(r"([?!,;:])\1+")

RE_DOTS = re.compile(r"\.{2,}")

RE_COPYRIGHT = re.compile(r"\(c\)", re.IGNORECASE)
RE_REGISTERED = re.compile(r"\(r\)", re.IGNORECASE)
RE_TRADEMARK = re.compile(r"\(tm\)", re.IGNORECASE)

RE_PLUS_MINUS = re.compile(r"\+-")


def fix_double_spaces(text: str, ctx: RuleContext) -> str:
    return substitute(RE_DOUBLE_SPACE, " ", text, ctx)


def fix_duplicates(text: str, ctx: RuleContext) -> str:
    """Fold interrobang runs to ``?!`` and collapse repeated marks.

    Examples:
        >>> fix_duplicates("Что !!??", RuleContext(Locale.ru))
        'Что?!'
        >>> fix_duplicates("Wait,, what;;", RuleContext(Locale.en))
        'Wait, what;'
    """
    return substitute_all(
        text,
        ctx,
        (
            (RE_EXCLAIM_QUESTION, "?!"),
            (RE_QUESTION_EXCLAIM, "?!"),
            (RE_REPEATED_PUNCT, r"\1"),
        ),
    )


def fix_ellipsis(text: str, ctx: RuleContext) -> str:
    return substitute(RE_DOTS, ELLIPSIS, text, ctx)


def fix_symbols(text: str, ctx: RuleContext) -> str:
    return substitute_all(
        text,
        ctx,
        (
            (RE_COPYRIGHT, "©"),
            (RE_REGISTERED, "®"),
            (RE_TRADEMARK, "™"),
        ),
    )


def fix_plus_minus(text: str, ctx: RuleContext) -> str:
    return substitute(RE_PLUS_MINUS, "±", text, ctx)


def _glue_last_words(line: str) -> str:
    trimmed = line.rstrip()
    trailing = line[len(trimmed):]
    # Only ASCII spaces split tokens; existing NBSP stay inside a token.
    tokens = trimmed.split(" ")
    if len(tokens) < 3:
        return line
    return " ".join(tokens[:-2]) + " " + NBSP.join(tokens[-2:]) + trailing


def fix_orphans(text: str, ctx: RuleContext) -> str:
    """Join the last two words of every line with a non-breaking space.

    Lines with fewer than three tokens are left alone, so a two-word line
    never becomes a single unbreakable block.

    Examples:
        >>> fix_orphans("Три коротких слова", RuleContext(Locale.ru))
        'Три коротких\\xa0слова'
        >>> fix_orphans("Два слова", RuleContext(Locale.ru))
        'Два слова'
    """
    del ctx
    return "\n".join(_glue_last_words(line) for line in text.split("\n"))


RULES: tuple[Rule, ...] = (
    Rule(
        id="common/spaces/double",
        names={
            "ru": "Удаление двойных пробелов",
            "en": "Remove double spaces",
            "fr": "Supprimer les doubles espaces",
            "zh": "删除多余空格",
            "ja": "二重スペースの削除",
        },
        locale=Locale.common,
        group=Group.spaces,
        enabled=True,
        priority=10,
        fixer=fix_double_spaces,
    ),
    Rule(
        id="common/special/symbols",
        names={
            "ru": "Спецсимволы ©®™",
            "en": "Special symbols ©®™",
            "fr": "Symboles spéciaux ©®™",
            "zh": "特殊符号 ©®™",
            "ja": "特殊記号 ©®™",
        },
        locale=Locale.common,
        group=Group.special,
        enabled=True,
        priority=20,
        fixer=fix_symbols,
    ),
    Rule(
        id="common/special/plusminus",
        names={
            "ru": "Плюс-минус ±",
            "en": "Plus-minus ±",
            "fr": "Plus-moins ±",
            "zh": "正负号 ±",
            "ja": "プラスマイナス ±",
        },
        locale=Locale.common,
        group=Group.special,
        enabled=True,
        priority=21,
        fixer=fix_plus_minus,
    ),
    Rule(
        id="common/punctuation/ellipsis",
        names={
            "ru": "Многоточие …",
            "en": "Ellipsis …",
            "fr": "Points de suspension …",
            "zh": "省略号 …",
            "ja": "省略記号 …",
        },
        locale=Locale.common,
        group=Group.punctuation,
        enabled=True,
        priority=15,
        fixer=fix_ellipsis,
    ),
    Rule(
        id="common/punctuation/duplicates",
        names={
            "ru": "Дублирующаяся пунктуация",
            "en": "Duplicate punctuation",
            "fr": "Ponctuation en double",
            "zh": "重复标点",
            "ja": "重複句読点",
        },
        locale=Locale.common,
        group=Group.punctuation,
        enabled=True,
        priority=12,
        fixer=fix_duplicates,
    ),
    Rule(
        id="common/layout/orphan",
        names={
            "ru": "Висячие строки (NBSP)",
            "en": "Orphan lines (NBSP)",
            "fr": "Lignes orphelines (NBSP)",
            "zh": "孤行防护 (NBSP)",
            "ja": "孤立行防止 (NBSP)",
        },
        locale=Locale.common,
        group=Group.layout,
        enabled=False,
        priority=900,
        fixer=fix_orphans,
    ),
)

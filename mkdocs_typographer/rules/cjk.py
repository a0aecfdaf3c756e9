"""Chinese and Japanese rules: character width, punctuation, spacing, kinsoku.

Corner-bracket quotes live in :mod:`mkdocs_typographer.rules.quotes` with the
other quote rules.
"""

from __future__ import annotations

import re

from ..constants import NBSP
from .base import Group, Locale, Rule, RuleContext, substitute, substitute_all


CJK_RANGE = "\u4e00-\u9fff\u3400-\u4dbf\uf900-\ufaff"
KANA_RANGE = "\u3040-\u309f\u30a0-\u30ff"
CJK_CHAR = f"[{CJK_RANGE}]"
JA_CHAR = f"[{CJK_RANGE}{KANA_RANGE}]"

# Offset between a fullwidth ASCII variant and its halfwidth form.
FULLWIDTH_OFFSET = 0xFEE0

ZH_FULLWIDTH = {
    ",": "，",
    ".": "。",
    "!": "！",
    "?": "？",
    ";": "；",
    ":": "：",
    "(": "（",
    ")": "）",
}

JA_FULLWIDTH = {
    ",": "、",
    ".": "。",
    "!": "！",
    "?": "？",
}

# Characters that must not start a line (gyōtō kinsoku).
KINSOKU_NO_START = "、。，．・：；！？）」』】〉》〕｝〙〛»’”"

RE_FULLWIDTH_ALNUM = re.compile("[\uff10-\uff19\uff21-\uff3a\uff41-\uff5a]")
RE_ZH_PUNCT = re.compile(rf"(?<={CJK_CHAR})([,!?;:()]|\.(?!\d))")
RE_ZH_OPEN_PAREN = re.compile(rf"\((?={CJK_CHAR})")
RE_JA_PUNCT = re.compile(rf"(?<={JA_CHAR})([,!?]|\.(?!\d))")
RE_KINSOKU = re.compile(f" ([{re.escape(KINSOKU_NO_START)}])")


def _spacing_patterns(char_class: str) -> tuple:
    return (
        (re.compile(rf"(?<={char_class})(?=[A-Za-z0-9])"), " "),
        (re.compile(rf"(?<=[A-Za-z0-9])(?={char_class})"), " "),
    )


ZH_SPACING = _spacing_patterns(CJK_CHAR)
JA_SPACING = _spacing_patterns(JA_CHAR)


def to_halfwidth(char: str) -> str:
    """Map a fullwidth digit or Latin letter to its ASCII form.

    Examples:
        >>> to_halfwidth("Ａ")
        'A'
        >>> to_halfwidth("５")
        '5'
    """
    return chr(ord(char) - FULLWIDTH_OFFSET)


def fix_width(text: str, ctx: RuleContext) -> str:
    return substitute(RE_FULLWIDTH_ALNUM, lambda match: to_halfwidth(match.group(0)), text, ctx)


def fix_zh_punctuation(text: str, ctx: RuleContext) -> str:
    """Use fullwidth punctuation after Chinese characters.

    Examples:
        >>> fix_zh_punctuation("你好,世界.", RuleContext(Locale.zh))
        '你好，世界。'
        >>> fix_zh_punctuation("共.5", RuleContext(Locale.zh))
        '共.5'
    """
    return substitute_all(
        text,
        ctx,
        (
            (RE_ZH_PUNCT, lambda match: ZH_FULLWIDTH[match.group(1)]),
            (RE_ZH_OPEN_PAREN, ZH_FULLWIDTH["("]),
        ),
    )


def fix_ja_punctuation(text: str, ctx: RuleContext) -> str:
    return substitute(RE_JA_PUNCT, lambda match: JA_FULLWIDTH[match.group(1)], text, ctx)


def fix_zh_spacing(text: str, ctx: RuleContext) -> str:
    """Separate Han characters from Latin letters and digits with a space.

    Examples:
        >>> fix_zh_spacing("共5个apple", RuleContext(Locale.zh))
        '共 5 个 apple'
    """
    return substitute_all(text, ctx, ZH_SPACING)


def fix_ja_spacing(text: str, ctx: RuleContext) -> str:
    return substitute_all(text, ctx, JA_SPACING)


def fix_kinsoku(text: str, ctx: RuleContext) -> str:
    return substitute(RE_KINSOKU, NBSP + r"\1", text, ctx)


ZH_RULES: tuple[Rule, ...] = (
    Rule(
        id="zh/width/normalize",
        names={"zh": "全角半角规范化", "en": "Width normalization", "ru": "Нормализация ширины"},
        locale=Locale.zh,
        group=Group.width,
        enabled=True,
        priority=25,
        fixer=fix_width,
    ),
    Rule(
        id="zh/punctuation/fullwidth",
        names={"zh": "全角标点符号", "en": "Fullwidth punctuation", "ru": "Полноширинная пунктуация"},
        locale=Locale.zh,
        group=Group.punctuation,
        enabled=True,
        priority=30,
        fixer=fix_zh_punctuation,
    ),
    Rule(
        id="zh/spaces/cjk-latin",
        names={"zh": "中西文间距", "en": "CJK-Latin spacing", "ru": "Пробелы между CJK и латиницей"},
        locale=Locale.zh,
        group=Group.spaces,
        enabled=True,
        priority=50,
        fixer=fix_zh_spacing,
    ),
)

JA_RULES: tuple[Rule, ...] = (
    Rule(
        id="ja/punctuation/fullwidth",
        names={"ja": "全角句読点", "en": "Fullwidth punctuation", "ru": "Полноширинная пунктуация"},
        locale=Locale.ja,
        group=Group.punctuation,
        enabled=True,
        priority=30,
        fixer=fix_ja_punctuation,
    ),
    Rule(
        id="ja/spaces/cjk-latin",
        names={"ja": "和欧間スペース", "en": "Japanese-Latin spacing", "ru": "Пробелы между японским и латиницей"},
        locale=Locale.ja,
        group=Group.spaces,
        enabled=True,
        priority=50,
        fixer=fix_ja_spacing,
    ),
    Rule(
        id="ja/punctuation/kinsoku",
        names={"ja": "禁則処理", "en": "Kinsoku line break rules", "ru": "Кинсоку (правила переноса)"},
        locale=Locale.ja,
        group=Group.punctuation,
        enabled=True,
        priority=90,
        fixer=fix_kinsoku,
    ),
    Rule(
        id="ja/width/normalize",
        names={"ja": "全角半角正規化", "en": "Width normalization", "ru": "Нормализация ширины"},
        locale=Locale.ja,
        group=Group.width,
        enabled=True,
        priority=25,
        fixer=fix_width,
    ),
)

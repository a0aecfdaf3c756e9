"""Dictionary-based restoration of the letter «ё».

Only words where «ё» is certain are listed. Homographs such as
``все``/``всё``, ``чем``/``чём`` or ``берет``/``берёт`` need context that a
lookup table cannot provide, so they are deliberately absent.
"""

from __future__ import annotations

import re
from types import MappingProxyType

from .base import Group, Locale, Rule, RuleContext, alternation, substitute


YO_DICTIONARY = MappingProxyType(
    {
        "еще": "ещё",
        "моем": "моём",
        "твоем": "твоём",
        "своем": "своём",
        "елка": "ёлка",
        "елки": "ёлки",
        "елку": "ёлку",
        "елкой": "ёлкой",
        "елке": "ёлке",
        "елок": "ёлок",
        "елочка": "ёлочка",
        "елочки": "ёлочки",
        "елочку": "ёлочку",
        "мед": "мёд",
        "меда": "мёда",
        "медом": "мёдом",
        "лед": "лёд",
        "лен": "лён",
        "шел": "шёл",
        "зеленый": "зелёный",
        "зеленая": "зелёная",
        "зеленое": "зелёное",
        "зеленые": "зелёные",
        "черный": "чёрный",
        "черная": "чёрная",
        "черное": "чёрное",
        "черные": "чёрные",
        "желтый": "жёлтый",
        "желтая": "жёлтая",
        "желтое": "жёлтое",
        "желтые": "жёлтые",
        "темный": "тёмный",
        "темная": "тёмная",
        "темное": "тёмное",
        "темные": "тёмные",
        "ребенок": "ребёнок",
        "ребенка": "ребёнка",
        "ребенку": "ребёнку",
        "ребенком": "ребёнком",
        "прием": "приём",
        "приема": "приёма",
        "приему": "приёму",
        "приемом": "приёмом",
        "подъем": "подъём",
        "подъема": "подъёма",
        "учет": "учёт",
        "учета": "учёта",
        "учетом": "учётом",
        "ученый": "учёный",
        "ученого": "учёного",
        "расчет": "расчёт",
        "расчета": "расчёта",
        "расчетом": "расчётом",
        "счет": "счёт",
        "полет": "полёт",
        "полета": "полёта",
        "самолет": "самолёт",
        "самолета": "самолёта",
        "трех": "трёх",
        "трехкомнатный": "трёхкомнатный",
        "четырех": "четырёх",
        "идет": "идёт",
        "пойдет": "пойдёт",
        "найдет": "найдёт",
        "дает": "даёт",
        "задает": "задаёт",
        "передает": "передаёт",
        "несет": "несёт",
        "ведет": "ведёт",
        "везет": "везёт",
        "течет": "течёт",
        "печет": "печёт",
        "жжет": "жжёт",
        "жует": "жуёт",
        "клюет": "клюёт",
        "поет": "поёт",
        "пришел": "пришёл",
        "ушел": "ушёл",
        "нашел": "нашёл",
        "зашел": "зашёл",
        "подошел": "подошёл",
        "перешел": "перешёл",
        "обошел": "обошёл",
    }
)

RE_YO_CANDIDATE = re.compile(
    rf"(?<![а-яА-ЯёЁ])({alternation(list(YO_DICTIONARY))})(?![а-яА-ЯёЁ])",
    re.IGNORECASE,
)


def yofy_word(word: str) -> str:
    """Return ``word`` with «ё» restored, keeping its capitalisation.

    Lowercase and Capitalised forms are converted. Any other casing (for
    example ``ЕЩЕ``) is returned unchanged.

    Examples:
        >>> yofy_word("еще")
        'ещё'
        >>> yofy_word("Еще")
        'Ещё'
        >>> yofy_word("ЕЩЕ")
        'ЕЩЕ'
    """
    lowered = word.lower()
    target = YO_DICTIONARY.get(lowered)
    if target is None:
        return word
    if word == lowered:
        return target
    if word == lowered[:1].upper() + lowered[1:]:
        return target[:1].upper() + target[1:]
    return word


def fix_yo(text: str, ctx: RuleContext) -> str:
    return substitute(RE_YO_CANDIDATE, lambda match: yofy_word(match.group(0)), text, ctx)


RULES: tuple[Rule, ...] = (
    Rule(
        id="ru/yo/basic",
        names={"ru": "Ёфикатор", "en": "Yo-fication (ё)"},
        locale=Locale.ru,
        group=Group.yo,
        enabled=True,
        priority=25,
        fixer=fix_yo,
    ),
)

"""French typography: guillemets aside, spacing, abbreviations, case and ligatures.

French separates high punctuation (``; : ! ?``) from the preceding word by a
narrow no-break space, writes number ranges and incidental dashes with an en
dash, and keeps months, days and languages in lowercase.
"""

from __future__ import annotations

import re
from types import MappingProxyType

from ..constants import EN_DASH, NBSP, NNBSP
from .base import (
    RE_LONG_INTEGER,
    RE_NUMBER_RANGE,
    Group,
    Locale,
    Rule,
    RuleContext,
    group_thousands,
    substitute,
    substitute_all,
)


MOIS = [
    "janvier",
    "février",
    "mars",
    "avril",
    "mai",
    "juin",
    "juillet",
    "août",
    "septembre",
    "octobre",
    "novembre",
    "décembre",
]

JOURS = ["lundi", "mardi", "mercredi", "jeudi", "vendredi", "samedi", "dimanche"]

LANGUES = [
    "français",
    "anglais",
    "espagnol",
    "allemand",
    "italien",
    "portugais",
    "néerlandais",
    "chinois",
    "japonais",
    "arabe",
    "russe",
]

PAYS = [
    "France",
    "Suisse",
    "Allemagne",
    "Italie",
    "Espagne",
    "Portugal",
    "Belgique",
    "Luxembourg",
    "États-Unis",
    "Royaume-Uni",
]

LOWERCASE_WORDS = MOIS + JOURS + LANGUES
RE_CAPITALIZED_WORD = re.compile(
    "(?<!\\w)(" + "|".join(re.escape(word.capitalize()) for word in LOWERCASE_WORDS) + ")(?!\\w)"
)
COUNTRY_PATTERNS = [
    (target, re.compile(rf"(?<!\w){re.escape(target)}(?!\w)", re.IGNORECASE))
    for target in PAYS
]

LIGATURES = MappingProxyType(
    {
        "coeur": "cœur",
        "coeurs": "cœurs",
        "oeuvre": "œuvre",
        "oeuvres": "œuvres",
        "oeil": "œil",
        "oeuf": "œuf",
        "oeufs": "œufs",
        "voeu": "vœu",
        "voeux": "vœux",
        "noeud": "nœud",
        "noeuds": "nœuds",
        "soeur": "sœur",
        "soeurs": "sœurs",
        "boeuf": "bœuf",
        "manoeuvre": "manœuvre",
        "manoeuvres": "manœuvres",
    }
)

WORD_PATTERN = re.compile(r"\b[^\W\d_]+\b", re.UNICODE)

_ABBR_CAD = re.compile(r"\bc\s*[-.]{1,2}\s*[aà]\s*[-.]{1,2}\s*d\b\.?", re.I)
_ABBR_PEX = re.compile(r"\bp\s*\.\s*ex\b\.?", re.I)
_ABBR_NB = re.compile(r"\bn\s*\.\s*b\b\.?", re.I)
_ETC_BAD = re.compile(r"\b(?P<word>etc)(?:\s*\.(?:\s*\.)+|\s*…+)(?=\W|$)", re.I)

RE_HIGH_PUNCT = re.compile(r"[ \t\u00a0\u202f]*([;:!?]+)")
RE_PHRASE_DASH = re.compile(r"(?<=\S) - (?=\S)")
RE_PERCENT = re.compile(r"(\d)[^\S\n]*%")
RE_EURO_CODE = re.compile(r"(\d)[^\S\n]*EUR\b", re.IGNORECASE)
RE_EURO_SIGN = re.compile(r"(\d)[^\S\n]*(€)")


def _is_sentence_start(text: str, index: int) -> bool:
    """Return whether the match index is at the beginning of a sentence.

    Args:
        text: Full string being processed.
        index: Zero-based index where the match starts.

    Returns:
        ``True`` if the index appears to begin a sentence, ``False`` otherwise.

    Examples:
        >>> _is_sentence_start("Hello. World", 7)
        True
        >>> _is_sentence_start("hello World", 6)
        False
    """
    pos = index - 1
    while pos >= 0 and text[pos].isspace():
        pos -= 1
    if pos < 0:
        return True
    return text[pos] in ".!?:(«"


def fix_case(text: str, ctx: RuleContext) -> str:
    """Lowercase months, days and languages; capitalise country names.

    Capitalised words that open a sentence are kept as written.

    Examples:
        >>> fix_case("Rendez-vous Lundi 3 Mars en france.", RuleContext(Locale.fr))
        'Rendez-vous lundi 3 mars en France.'
    """

    def lower_unless_sentence_start(match: re.Match) -> str:
        if _is_sentence_start(match.string, match.start()):
            return match.group(0)
        return match.group(0).lower()

    steps = [(RE_CAPITALIZED_WORD, lower_unless_sentence_start)]
    steps.extend(
        (pattern, lambda _m, t=target: t) for target, pattern in COUNTRY_PATTERNS
    )
    return substitute_all(text, ctx, tuple(steps))


def _etc_replacement(word: str) -> str:
    """Return the corrected casing and punctuation for ``etc``.

    Examples:
        >>> _etc_replacement("etc")
        'etc.'
        >>> _etc_replacement("Etc")
        'Etc.'
        >>> _etc_replacement("ETC")
        'ETC.'
    """
    if word.isupper():
        return "ETC."
    if word[0].isupper():
        return "Etc."
    return "etc."


def fix_abbreviations(text: str, ctx: RuleContext) -> str:
    """Rewrite ``c.-à-d.``, ``p. ex.``, ``N. B.`` and ``etc.`` canonically.

    Examples:
        >>> fix_abbreviations("Des fruits, p.ex. pommes, poires, etc...", RuleContext(Locale.fr))
        'Des fruits, p. ex. pommes, poires, etc.'
    """
    return substitute_all(
        text,
        ctx,
        (
            (_ABBR_CAD, "c.-à-d."),
            (_ABBR_PEX, "p. ex."),
            (_ABBR_NB, "N. B."),
            (_ETC_BAD, lambda m: _etc_replacement(m.group("word"))),
        ),
    )


def _space_high_punctuation(match: re.Match) -> str:
    text = match.string
    start, end = match.span()
    if start == 0 or text[start - 1] == "\n":
        return match.group(0)
    punct = match.group(1)
    if (
        punct == ":"
        and text[start - 1].isdigit()
        and end < len(text)
        and text[end].isdigit()
    ):
        return match.group(0)
    return NNBSP + punct


def fix_punctuation_spaces(text: str, ctx: RuleContext) -> str:
    """Put a narrow no-break space before ``; : ! ?``.

    Punctuation opening a line and clock times such as ``12:30`` are kept.

    Examples:
        >>> fix_punctuation_spaces("Bonjour ; ça va? Rendez-vous à 12:30", RuleContext(Locale.fr))
        'Bonjour\\u202f; ça va\\u202f? Rendez-vous à 12:30'
    """
    return substitute(RE_HIGH_PUNCT, _space_high_punctuation, text, ctx)


def fix_dashes(text: str, ctx: RuleContext) -> str:
    return substitute_all(
        text,
        ctx,
        (
            (RE_NUMBER_RANGE, rf"\1{EN_DASH}\2"),
            (RE_PHRASE_DASH, f"{NBSP}{EN_DASH} "),
        ),
    )


def fix_numbers(text: str, ctx: RuleContext) -> str:
    return substitute_all(
        text,
        ctx,
        (
            (RE_LONG_INTEGER, lambda match: group_thousands(match.group(0))),
            (RE_PERCENT, rf"\1{NNBSP}%"),
        ),
    )


def fix_euro(text: str, ctx: RuleContext) -> str:
    return substitute_all(
        text,
        ctx,
        (
            (RE_EURO_CODE, rf"\1{NBSP}€"),
            (RE_EURO_SIGN, rf"\1{NBSP}\2"),
        ),
    )


def _needs_ligature(word: str) -> bool:
    """Return whether a word contains the ``oe`` digraph.

    Examples:
        >>> _needs_ligature("coeur")
        True
        >>> _needs_ligature("chat")
        False
    """
    return "oe" in word.lower()


def ligaturize(word: str) -> str:
    """Return ``word`` with its ``oe`` digraph joined, keeping the casing.

    Examples:
        >>> ligaturize("Oeuvre")
        'Œuvre'
        >>> ligaturize("poete")
        'poete'
    """
    if not _needs_ligature(word):
        return word
    lowered = word.lower()
    target = LIGATURES.get(lowered)
    if target is None:
        return word
    if word == lowered:
        return target
    if word.isupper():
        return target.upper()
    if word == lowered.capitalize():
        return target.capitalize()
    return word


def fix_ligatures(text: str, ctx: RuleContext) -> str:
    return substitute(WORD_PATTERN, lambda match: ligaturize(match.group(0)), text, ctx)


def _rule(rule_id, names, group, priority, fixer, enabled=True) -> Rule:
    return Rule(
        id=rule_id,
        names=names,
        locale=Locale.fr,
        group=group,
        enabled=enabled,
        priority=priority,
        fixer=fixer,
    )


RULES: tuple[Rule, ...] = (
    _rule(
        "fr/case/lowercase",
        {
            "fr": "Casse des mois, jours et langues",
            "en": "Lowercase months, days and languages",
            "ru": "Строчные буквы в месяцах, днях и языках",
        },
        Group.case,
        6,
        fix_case,
        enabled=False,
    ),
    _rule(
        "fr/punctuation/abbreviations",
        {
            "fr": "Abréviations (c.-à-d., p. ex., etc.)",
            "en": "French abbreviations",
            "ru": "Французские сокращения",
        },
        Group.punctuation,
        18,
        fix_abbreviations,
    ),
    _rule(
        "fr/punctuation/spaces",
        {
            "fr": "Espace insécable avant ; : ! ?",
            "en": "Non-breaking space before ; : ! ?",
            "ru": "Неразрывный пробел перед ; : ! ?",
        },
        Group.punctuation,
        40,
        fix_punctuation_spaces,
    ),
    _rule(
        "fr/dashes/endash",
        {"fr": "Tiret demi-cadratin", "en": "French dashes", "ru": "Французские тире"},
        Group.dashes,
        35,
        fix_dashes,
    ),
    _rule(
        "fr/numbers/format",
        {
            "fr": "Formatage des nombres",
            "en": "French number formatting",
            "ru": "Французский формат чисел",
        },
        Group.numbers,
        62,
        fix_numbers,
    ),
    _rule(
        "fr/currency/euro",
        {"fr": "Euro (€)", "en": "Euro formatting", "ru": "Евро"},
        Group.currency,
        60,
        fix_euro,
    ),
    _rule(
        "fr/special/ligatures",
        {"fr": "Ligatures œ", "en": "OE ligatures", "ru": "Лигатуры œ"},
        Group.special,
        70,
        fix_ligatures,
    ),
)

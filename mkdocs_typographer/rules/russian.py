"""Russian typography: case, dashes, non-breaking spaces, numbers and money.

Most rules follow the conventions of Russian book typography: guillemets,
em dashes bound to the preceding word, non-breaking spaces after short
function words and inside numbers with their units, a decimal comma and
thin-space thousands grouping.
"""

from __future__ import annotations

import re

from ..constants import EM_DASH, EN_DASH, NBSP, THIN
from .base import (
    RE_LONG_INTEGER,
    RE_NUMBER_RANGE,
    Group,
    Locale,
    Rule,
    RuleContext,
    alternation,
    fixed_point,
    group_thousands,
    substitute,
    substitute_all,
)


CAPS_MIN_LETTERS = 20
CAPS_MIN_RATIO = 0.7

# Abbreviations restored after lowercasing ALL CAPS text.
CAPS_ABBREVIATIONS = {
    "ссср": "СССР",
    "гост": "ГОСТ",
    "сша": "США",
    "рф": "РФ",
    "снг": "СНГ",
    "ооо": "ООО",
    "пао": "ПАО",
    "зао": "ЗАО",
    "оао": "ОАО",
    "смс": "СМС",
    "cvv": "CVV",
    "cvc": "CVC",
    "qr-код": "QR-код",
    "пин-код": "ПИН-код",
    "wi-fi": "Wi-Fi",
    "фгос": "ФГОС",
    "мвд": "МВД",
    "фсб": "ФСБ",
    "гибдд": "ГИБДД",
    "мчс": "МЧС",
    "фнс": "ФНС",
    "ндс": "НДС",
    "нко": "НКО",
    "ип": "ИП",
    "инн": "ИНН",
    "огрн": "ОГРН",
    "кпп": "КПП",
    "url": "URL",
    "api": "API",
    "html": "HTML",
    "css": "CSS",
    "pdf": "PDF",
    "usb": "USB",
    "hdmi": "HDMI",
    "ram": "RAM",
    "ssd": "SSD",
    "hdd": "HDD",
    "dpi": "DPI",
    "fps": "FPS",
}

SHORT_WORDS = (
    "а", "б", "без", "безо", "будто", "бы", "в", "во", "ведь", "вне", "вот",
    "где", "да", "даже", "для", "до", "если", "есть", "ж", "же", "за",
    "и", "из", "изо", "из-за", "из-под", "или", "иль", "к", "ко", "как",
    "ли", "ль", "либо", "между", "на", "над", "надо", "не", "ни", "но",
    "о", "об", "обо", "около", "от", "ото", "перед", "по", "по-за", "по-над",
    "под", "подо", "после", "при", "про", "ради", "с", "со", "сквозь",
    "так", "также", "там", "тем", "то", "тогда", "того", "тоже",
    "у", "хоть", "хотя", "чего", "через", "что", "чтобы", "это",
)

# Address and reference abbreviations written with a trailing dot.
DOT_ABBREVIATIONS = (
    "г", "обл", "кр", "ст", "пос", "с", "д", "ул", "пер", "пр", "пр-т",
    "просп", "пл", "бул", "б-р", "наб", "ш", "туп", "оф", "кв", "комн",
    "под", "мкр", "уч", "вл", "влад", "стр", "корп", "литер", "эт", "пгт",
    "гл", "рис", "илл", "п", "c",
)

SYMBOLS = ("№", "§", "АО", "ОАО", "ЗАО", "ООО", "ПАО")


RE_LETTER = re.compile(r"[а-яА-ЯёЁa-zA-Z]")
RE_UPPER_LETTER = re.compile(r"[А-ЯЁA-Z]")
RE_LOWER_LETTER = re.compile(r"[а-яёa-z]")
RE_SENTENCE_START = re.compile(r"([.!?…]\s+)([а-яёa-z])")
RE_CAPS_ABBREVIATION = re.compile(
    rf"(?<!\w)({alternation(list(CAPS_ABBREVIATIONS))})(?!\w)", re.IGNORECASE
)

RE_ROMAN_RANGE = re.compile(r"\b([IVXLCDM]+)[^\S\n]*-[^\S\n]*([IVXLCDM]+)\b")
RE_PHRASE_DASH = re.compile(r"(?<=\S) - (?=\S)")

RE_SPACE_AFTER_OPENING = re.compile(r"([«„(\[])[^\S\n]+")
RE_SPACE_BEFORE_CLOSING = re.compile(r"[^\S\n]+([.…:,;?!»“)\]])")
RE_SHORT_WORD = re.compile(rf"(?<!\S)({alternation(SHORT_WORDS)}) ", re.IGNORECASE)
RE_SPACE_BEFORE_EMDASH = re.compile(" " + EM_DASH)
RE_INITIALS_BEFORE = re.compile(
    r"([А-ЯЁ]\.)[^\S\n]*([А-ЯЁ]\.)[^\S\n]+([А-ЯЁ][а-яё-]+)"
)
RE_INITIALS_AFTER = re.compile(
    r"([А-ЯЁ][а-яё-]+)[^\S\n]+([А-ЯЁ]\.)[^\S\n]*([А-ЯЁ]\.)"
)
RE_ABBR_PATTERN = re.compile(r"[^\S\n](и\sт\.д\.|и\sт\.п\.|и\sдр\.)", re.IGNORECASE)
RE_DIGIT_UNIT = re.compile(r"(\d)[^\S\n]+([а-яА-ЯёЁ§№]+)")
RE_DOT_ABBREVIATION = re.compile(
    rf"(?<!\S)({alternation(DOT_ABBREVIATIONS)})\.[^\S\n]", re.IGNORECASE
)
RE_SYMBOL_SPACE = re.compile(rf"(?<!\S)({alternation(SYMBOLS)})[^\S\n]")

RE_RUBLES_KOPECKS = re.compile(
    r"(\d+)[^\S\n]*(?:р\.|руб\.?)[^\S\n]*(\d{1,2})[^\S\n]*коп\.?", re.IGNORECASE
)
RE_RUBLES = re.compile(r"(\d+)[^\S\n]*руб(?:\.|(?!\w))", re.IGNORECASE)
RE_RUBLE_CODE = re.compile(r"(\d+)[^\S\n]*(?:RUR|RUB)\b", re.IGNORECASE)
RE_RUBLE_SHORT = re.compile(r"(\d+)[^\S\n]*р\.")
RE_DOLLAR_CODE = re.compile(r"(\d)[^\S\n]*USD\b", re.IGNORECASE)
RE_EURO_CODE = re.compile(r"(\d)[^\S\n]*EUR\b", re.IGNORECASE)
RE_CURRENCY_SIGN = re.compile(r"(\d)[^\S\n]*([$€₽])")

RE_MULTIPLICATION = re.compile(r"\b(\d{2,})[^\S\n]*[xх][^\S\n]*(\d+)\b", re.IGNORECASE)
RE_DECIMAL = re.compile(r"(?<![\w.])(\d+)\.(\d+)(?!\.?\d)")
RE_PERCENT = re.compile(r"(\d+)[^\S\n]*%")
RE_THOUSAND_ABBR = re.compile(r"(?<!\w)(тыс)(?![.\w])", re.IGNORECASE)
RE_MILLION_ABBR = re.compile(
    r"(?<!\w)(млн|млрд|трлн)\.(?![^\S\n]*$)", re.IGNORECASE | re.MULTILINE
)
RE_CELSIUS = re.compile(r"([+-]?\d+)[^\S\n]*°?[^\S\n]*C(?![a-zA-Zа-яА-ЯёЁ])")
RE_DEGREES_WORD = re.compile(r"(\d+)[^\S\n]*(?:градусов|градуса|градус)(?!\w)", re.IGNORECASE)

RE_HANGING = re.compile(r"(\S+)[^\S\n]([а-яА-ЯёЁ-]{1,3}[.,!?…]?)$", re.MULTILINE)


def _is_caps_locked(text: str) -> bool:
    letters = RE_LETTER.findall(text)
    if len(letters) < CAPS_MIN_LETTERS:
        return False
    upper = RE_UPPER_LETTER.findall(text)
    return len(upper) / len(letters) >= CAPS_MIN_RATIO


def _lower_unprotected(text: str, ctx: RuleContext) -> str:
    pieces = []
    cursor = 0
    for start, end in ctx.protected_ranges:
        if start < cursor:
            start = cursor
        if end <= start:
            continue
        pieces.append(text[cursor:start].lower())
        pieces.append(text[start:end])
        cursor = end
    pieces.append(text[cursor:].lower())
    return "".join(pieces)


def _capitalize_second(match: re.Match) -> str:
    return match.group(1) + match.group(2).upper()


def _capitalize_first_letter(text: str, ctx: RuleContext) -> str:
    for match in RE_LOWER_LETTER.finditer(text):
        if ctx.is_protected(match.start()):
            continue
        return text[: match.start()] + match.group(0).upper() + text[match.end() :]
    return text


def fix_caps_lock(text: str, ctx: RuleContext) -> str:
    """Turn shouted text into sentence case.

    Only text with at least twenty letters, seventy percent of them
    uppercase, is touched. Known abbreviations keep their capitals.

    Examples:
        >>> fix_caps_lock("ВНИМАНИЕ! ЗАВТРА СОБРАНИЕ В ОФИСЕ ООО РОМАШКА", RuleContext(Locale.ru))
        'Внимание! Завтра собрание в офисе ООО ромашка'
    """
    if not _is_caps_locked(text):
        return text

    result = _lower_unprotected(text, ctx)
    result = _capitalize_first_letter(result, ctx.rebind(result))
    return substitute_all(
        result,
        ctx.rebind(result),
        (
            (RE_SENTENCE_START, _capitalize_second),
            (
                RE_CAPS_ABBREVIATION,
                lambda match: CAPS_ABBREVIATIONS.get(match.group(1).lower(), match.group(1)),
            ),
        ),
    )


def fix_en_dash(text: str, ctx: RuleContext) -> str:
    return substitute_all(
        text,
        ctx,
        (
            (RE_NUMBER_RANGE, rf"\1{EN_DASH}\2"),
            (RE_ROMAN_RANGE, rf"\1{EN_DASH}\2"),
        ),
    )


def fix_em_dash(text: str, ctx: RuleContext) -> str:
    return substitute(RE_PHRASE_DASH, f" {EM_DASH} ", text, ctx)


def fix_bracket_spaces(text: str, ctx: RuleContext) -> str:
    return substitute_all(
        text,
        ctx,
        (
            (RE_SPACE_AFTER_OPENING, r"\1"),
            (RE_SPACE_BEFORE_CLOSING, r"\1"),
        ),
    )


def fix_short_words(text: str, ctx: RuleContext) -> str:
    """Bind prepositions, conjunctions and particles to the next word.

    Chains such as ``и в`` need another pass once the first word is bound,
    so the substitution runs to a fixed point.

    Examples:
        >>> fix_short_words("Он пришёл в дом", RuleContext(Locale.ru))
        'Он пришёл в\\xa0дом'
    """
    return fixed_point(
        lambda current: substitute(RE_SHORT_WORD, r"\1" + NBSP, current, ctx.rebind(current)),
        text,
    )


def fix_em_dash_space(text: str, ctx: RuleContext) -> str:
    return substitute(RE_SPACE_BEFORE_EMDASH, NBSP + EM_DASH, text, ctx)


def fix_initials(text: str, ctx: RuleContext) -> str:
    return substitute_all(
        text,
        ctx,
        (
            (RE_INITIALS_BEFORE, rf"\1\2{NBSP}\3"),
            (RE_INITIALS_AFTER, rf"\1{NBSP}\2\3"),
        ),
    )


def fix_abbreviation_patterns(text: str, ctx: RuleContext) -> str:
    return substitute(RE_ABBR_PATTERN, NBSP + r"\1", text, ctx)


def fix_digit_units(text: str, ctx: RuleContext) -> str:
    return substitute(RE_DIGIT_UNIT, rf"\1{NBSP}\2", text, ctx)


def fix_dot_abbreviations(text: str, ctx: RuleContext) -> str:
    return substitute(RE_DOT_ABBREVIATION, r"\1." + NBSP, text, ctx)


def fix_symbol_spaces(text: str, ctx: RuleContext) -> str:
    return substitute(RE_SYMBOL_SPACE, r"\1" + NBSP, text, ctx)


def _rubles_and_kopecks(match: re.Match) -> str:
    rubles, kopecks = match.group(1), match.group(2)
    return f"{rubles},{kopecks.zfill(2)}{NBSP}₽"


def fix_currency(text: str, ctx: RuleContext) -> str:
    """Normalise currency names to signs bound to their amount.

    A digit must precede every abbreviation, so ``р. Волга`` (the river) is
    left alone.

    Examples:
        >>> fix_currency("15 р. 5 коп.", RuleContext(Locale.ru))
        '15,05\\xa0₽'
        >>> fix_currency("100 USD", RuleContext(Locale.ru))
        '100\\xa0$'
    """
    return substitute_all(
        text,
        ctx,
        (
            (RE_RUBLES_KOPECKS, _rubles_and_kopecks),
            (RE_RUBLES, rf"\1{NBSP}₽"),
            (RE_RUBLE_CODE, rf"\1{NBSP}₽"),
            (RE_RUBLE_SHORT, rf"\1{NBSP}₽"),
            (RE_DOLLAR_CODE, rf"\1{NBSP}$"),
            (RE_EURO_CODE, rf"\1{NBSP}€"),
            (RE_CURRENCY_SIGN, rf"\1{NBSP}\2"),
        ),
    )


def fix_multiplication(text: str, ctx: RuleContext) -> str:
    return substitute(RE_MULTIPLICATION, r"\1×\2", text, ctx)


def fix_decimals(text: str, ctx: RuleContext) -> str:
    """Use a decimal comma in numbers with exactly one dot.

    Dotted runs such as ``3.14.2`` or ``192.168.1.1`` are identifiers, not
    decimals, and stay as they are.

    Examples:
        >>> fix_decimals("Пи равно 3.14, версия 3.14.2", RuleContext(Locale.ru))
        'Пи равно 3,14, версия 3.14.2'
    """
    return substitute(RE_DECIMAL, r"\1,\2", text, ctx)


def fix_thousands(text: str, ctx: RuleContext) -> str:
    return substitute(RE_LONG_INTEGER, lambda match: group_thousands(match.group(0)), text, ctx)


def fix_percent(text: str, ctx: RuleContext) -> str:
    return substitute(RE_PERCENT, rf"\1{THIN}%", text, ctx)


def fix_number_abbreviations(text: str, ctx: RuleContext) -> str:
    return substitute_all(
        text,
        ctx,
        (
            (RE_THOUSAND_ABBR, r"\1."),
            (RE_MILLION_ABBR, r"\1"),
        ),
    )


def fix_temperature(text: str, ctx: RuleContext) -> str:
    return substitute_all(
        text,
        ctx,
        (
            (RE_CELSIUS, rf"\1{NBSP}°C"),
            (RE_DEGREES_WORD, r"\1°"),
        ),
    )


def fix_hanging(text: str, ctx: RuleContext) -> str:
    return substitute(RE_HANGING, rf"\1{NBSP}\2", text, ctx)


def _rule(rule_id, names, group, priority, fixer, enabled=True) -> Rule:
    return Rule(
        id=rule_id,
        names=names,
        locale=Locale.ru,
        group=group,
        enabled=enabled,
        priority=priority,
        fixer=fixer,
    )


RULES: tuple[Rule, ...] = (
    _rule(
        "ru/case/capslock",
        {"ru": "Исправление регистра (CAPS LOCK)", "en": "Fix ALL CAPS"},
        Group.case,
        5,
        fix_caps_lock,
    ),
    _rule(
        "ru/dashes/endash",
        {"ru": "Короткое тире в диапазонах", "en": "En-dash in ranges"},
        Group.dashes,
        35,
        fix_en_dash,
    ),
    _rule(
        "ru/dashes/emdash",
        {"ru": "Длинное тире", "en": "Em-dash"},
        Group.dashes,
        36,
        fix_em_dash,
    ),
    _rule(
        "ru/spaces/shortwords",
        {"ru": "Неразрывный пробел после предлогов", "en": "Non-breaking space after prepositions"},
        Group.spaces,
        50,
        fix_short_words,
    ),
    _rule(
        "ru/spaces/emdash",
        {"ru": "Неразрывный пробел перед тире", "en": "Non-breaking space before em-dash"},
        Group.spaces,
        51,
        fix_em_dash_space,
    ),
    _rule(
        "ru/spaces/initials",
        {"ru": "Инициалы", "en": "Initials formatting"},
        Group.spaces,
        52,
        fix_initials,
    ),
    _rule(
        "ru/spaces/abbr-patterns",
        {"ru": "Сокращения (и т.д., и т.п.)", "en": "Abbreviation patterns"},
        Group.spaces,
        53,
        fix_abbreviation_patterns,
    ),
    _rule(
        "ru/spaces/digits-units",
        {"ru": "Число + единица (5\u00a0кг)", "en": "Number + unit"},
        Group.spaces,
        54,
        fix_digit_units,
    ),
    _rule(
        "ru/spaces/dot-abbr",
        {"ru": "Сокращения с точкой (г.\u00a0Москва)", "en": "Dot abbreviations"},
        Group.spaces,
        55,
        fix_dot_abbreviations,
    ),
    _rule(
        "ru/spaces/symbols",
        {"ru": "Символы (№, §, ООО)", "en": "Symbol spaces"},
        Group.spaces,
        56,
        fix_symbol_spaces,
    ),
    _rule(
        "ru/spaces/brackets",
        {"ru": "Пробелы у скобок и пунктуации", "en": "Bracket/punctuation spaces"},
        Group.spaces,
        48,
        fix_bracket_spaces,
    ),
    _rule(
        "ru/currency/format",
        {"ru": "Валюта (₽, $, €)", "en": "Currency formatting"},
        Group.currency,
        60,
        fix_currency,
    ),
    _rule(
        "ru/numbers/decimals",
        {"ru": "Десятичная запятая (3,14)", "en": "Decimal comma"},
        Group.numbers,
        62,
        fix_decimals,
    ),
    _rule(
        "ru/numbers/thousands",
        {"ru": "Разделитель тысяч (1\u2009000)", "en": "Thousands separator"},
        Group.numbers,
        63,
        fix_thousands,
    ),
    _rule(
        "ru/numbers/percent",
        {"ru": "Процент (10\u2009%)", "en": "Percentage"},
        Group.numbers,
        64,
        fix_percent,
    ),
    _rule(
        "ru/numbers/abbreviations",
        {"ru": "Сокращения (тыс., млн)", "en": "Number abbreviations"},
        Group.numbers,
        65,
        fix_number_abbreviations,
    ),
    _rule(
        "ru/numbers/multiplication",
        {"ru": "Знак умножения (×)", "en": "Multiplication sign"},
        Group.numbers,
        61,
        fix_multiplication,
    ),
    _rule(
        "ru/numbers/temperature",
        {"ru": "Температура (°C)", "en": "Temperature formatting"},
        Group.numbers,
        66,
        fix_temperature,
    ),
    _rule(
        "ru/spaces/hanging",
        {"ru": "Предотвращение висячих строк", "en": "Prevent hanging lines"},
        Group.spaces,
        90,
        fix_hanging,
    ),
)

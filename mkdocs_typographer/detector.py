"""Character-histogram locale detection.

The detector is a fast heuristic, not a classifier: it buckets code points
into a handful of script ranges and applies fixed ratio thresholds in a
deliberate priority order (kana before ideographs, ideographs before
Cyrillic, Cyrillic before French markers).

Typical usage:
    >>> from mkdocs_typographer.detector import detect_locale
    >>> detect_locale("Привет, как дела?").value
    'ru'
    >>> detect_locale("12345").value
    'en'
"""

from __future__ import annotations

from dataclasses import dataclass
import re

from .rules.base import Locale


FRENCH_LETTERS = frozenset("àâçéèêëïîôùûüÿœæÀÂÇÉÈÊËÏÎÔÙÛÜŸŒÆ")

KANA_THRESHOLD = 0.05
CJK_THRESHOLD = 0.2
CYRILLIC_THRESHOLD = 0.2
FRENCH_THRESHOLD = 0.03

RE_FRENCH_PUNCT_SPACING = re.compile(r"\s[;:!?]")


@dataclass
class ScriptCounts:
    """Per-script character counters accumulated over one text."""

    cyrillic: int = 0
    cjk: int = 0
    kana: int = 0
    french: int = 0
    latin: int = 0
    total: int = 0


def count_scripts(text: str) -> ScriptCounts:
    """Bucket every classifiable character of ``text`` by script.

    Digits, punctuation and whitespace are not classifiable and do not
    contribute to ``total``.
    """
    counts = ScriptCounts()
    for ch in text:
        code = ord(ch)
        if 0x0400 <= code <= 0x04FF:
            counts.cyrillic += 1
        elif (
            0x4E00 <= code <= 0x9FFF
            or 0x3400 <= code <= 0x4DBF
            or 0xF900 <= code <= 0xFAFF
        ):
            counts.cjk += 1
        elif 0x3040 <= code <= 0x30FF:
            counts.kana += 1
        elif ch in FRENCH_LETTERS:
            counts.french += 1
        elif ("A" <= ch <= "Z") or ("a" <= ch <= "z"):
            counts.latin += 1
        else:
            continue
        counts.total += 1
    return counts


def detect_locale(text: str) -> Locale:
    """Return the most likely locale for ``text``.

    Args:
        text: Any string, including an empty one.

    Returns:
        One of ``ru``, ``en``, ``fr``, ``zh`` or ``ja``. Text without any
        classifiable letter falls back to ``en``.

    Examples:
        >>> detect_locale("こんにちは世界、テストです").value
        'ja'
        >>> detect_locale("Привет world, как дела today?").value
        'ru'
    """
    counts = count_scripts(text)
    total = counts.total

    if total == 0:
        return Locale.en
    if counts.kana / total > KANA_THRESHOLD:
        return Locale.ja
    if counts.cjk / total > CJK_THRESHOLD:
        return Locale.zh
    if counts.cyrillic / total > CYRILLIC_THRESHOLD:
        return Locale.ru
    if (
        counts.french > 0
        and counts.latin > 0
        and counts.french / (counts.french + counts.latin) > FRENCH_THRESHOLD
    ):
        return Locale.fr
    if counts.latin > 0 and RE_FRENCH_PUNCT_SPACING.search(text):
        return Locale.fr
    return Locale.en

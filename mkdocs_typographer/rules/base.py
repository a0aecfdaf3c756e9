r"""Shared abstractions and helpers for typographic rules.

This module defines the :class:`Rule` record used by every concrete rule, the
per-application :class:`RuleContext`, and small regex helpers that keep rules
away from protected ranges.

Typical usage:
    >>> import re
    >>> from mkdocs_typographer.rules.base import Locale, RuleContext, substitute
    >>> ctx = RuleContext.for_text(Locale.en, "See 1.2.3 or 4.5")
    >>> substitute(re.compile(r"(\d)\.(\d)"), r"\1,\2", "See 1.2.3 or 4.5", ctx)
    'See 1.2.3 or 4,5'
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
import re
from typing import Callable, Mapping, Tuple, Union

from ..constants import THIN
from ..protected import ProtectedRange, find_protected_ranges, overlaps_protected


class Locale(str, Enum):  # pylint: disable=invalid-name
    """Typography conventions a rule belongs to."""

    ru = "ru"
    en = "en"
    fr = "fr"
    zh = "zh"
    ja = "ja"
    common = "common"


class Group(str, Enum):  # pylint: disable=invalid-name
    """Presentation groups used to organise rules in listings."""

    quotes = "quotes"
    dashes = "dashes"
    spaces = "spaces"
    numbers = "numbers"
    currency = "currency"
    punctuation = "punctuation"
    case = "case"
    special = "special"
    yo = "yo"
    width = "width"
    layout = "layout"


@dataclass(frozen=True)
class RuleContext:
    """Ephemeral data handed to a rule for one text snapshot.

    Attributes:
        locale: Locale resolved for the current run.
        protected_ranges: Sorted half-open ranges that must stay untouched.
            They are only valid for the exact string the context was built
            from.
    """

    locale: Locale
    protected_ranges: Tuple[ProtectedRange, ...] = ()

    @classmethod
    def for_text(cls, locale: Locale, text: str) -> "RuleContext":
        """Build a context whose ranges describe ``text``."""
        return cls(locale=locale, protected_ranges=tuple(find_protected_ranges(text)))

    def rebind(self, text: str) -> "RuleContext":
        """Return a context for a new snapshot of the text."""
        return RuleContext.for_text(self.locale, text)

    def is_protected(self, offset: int) -> bool:
        """Return whether ``offset`` lies inside a protected range."""
        return any(start <= offset < end for start, end in self.protected_ranges)

    def overlaps(self, start: int, end: int) -> bool:
        """Return whether ``[start, end)`` overlaps a protected range."""
        return overlaps_protected(start, end, self.protected_ranges)


Fixer = Callable[[str, RuleContext], str]


@dataclass(frozen=True)
class Rule:
    """A single, stateless typography transformation.

    Attributes:
        id: Stable namespaced identifier, e.g. ``"ru/quotes/guillemets"``.
        names: Display names keyed by locale code.
        locale: Locale the rule applies to (``common`` for every locale).
        group: Presentation group.
        enabled: Whether the rule runs when settings do not mention it.
        priority: Execution order; lower runs earlier.
        fixer: Pure function returning the transformed text.
    """

    id: str
    names: Mapping[str, str]
    locale: Locale
    group: Group
    enabled: bool
    priority: int
    fixer: Fixer = field(repr=False, compare=False)

    def apply(self, text: str, ctx: RuleContext) -> str:
        """Return ``text`` transformed by the rule."""
        return self.fixer(text, ctx)

    def display_name(self, locale: Union[Locale, str] = Locale.en) -> str:
        """Return the name for ``locale``, falling back to English then the id."""
        key = getattr(locale, "value", locale)
        return self.names.get(key) or self.names.get("en") or self.id


Replacement = Union[str, Callable[[re.Match], str]]

# ``12 - 15`` style ranges; ISO dates and phone numbers (digit runs chained
# by several hyphens) are left alone.
RE_NUMBER_RANGE = re.compile(r"(?<![\d-])(\d+)[^\S\n]*-[^\S\n]*(\d+)(?![\d-])")

# Integer parts long enough to need grouping; fractional digits are skipped.
RE_LONG_INTEGER = re.compile(r"(?<![\w.,])\d{5,}(?!\d)")


def group_thousands(digits: str, separator: str = THIN) -> str:
    """Split a run of digits into groups of three from the right.

    Examples:
        >>> group_thousands("1234567", " ")
        '1 234 567'
    """
    head = len(digits) % 3 or 3
    groups = [digits[:head]]
    groups.extend(digits[index:index + 3] for index in range(head, len(digits), 3))
    return separator.join(groups)


def substitute(
    pattern: re.Pattern,
    repl: Replacement,
    text: str,
    ctx: RuleContext,
) -> str:
    """Apply ``pattern.sub`` while leaving protected ranges untouched.

    Args:
        pattern: Compiled regular expression to replace.
        repl: Replacement template or callable, as accepted by ``re.sub``.
        text: Snapshot the context was computed for.
        ctx: Context carrying the protected ranges of ``text``.

    Returns:
        The text with every unprotected match replaced.
    """
    if not ctx.protected_ranges:
        return pattern.sub(repl, text)

    def guarded(match: re.Match) -> str:
        if ctx.overlaps(match.start(), match.end()):
            return match.group(0)
        if callable(repl):
            return repl(match)
        return match.expand(repl)

    return pattern.sub(guarded, text)


def substitute_all(
    text: str,
    ctx: RuleContext,
    steps: Tuple[Tuple[re.Pattern, Replacement], ...],
) -> str:
    """Run several substitutions in order, rebinding the context as needed.

    Each step sees protected ranges computed for the text it receives, so
    offsets stay valid even when an earlier step changed the string length.
    """
    current = text
    for pattern, repl in steps:
        updated = substitute(pattern, repl, current, ctx)
        if updated != current:
            ctx = ctx.rebind(updated)
            current = updated
    return current


def fixed_point(fn: Callable[[str], str], text: str, limit: int = 3) -> str:
    """Apply ``fn`` until the text stops changing or ``limit`` passes ran.

    Examples:
        >>> fixed_point(lambda s: s.replace("aa", "a"), "aaaaaaaa", limit=2)
        'aa'
        >>> fixed_point(lambda s: s.replace("aa", "a"), "aaaaaaaa")
        'a'
    """
    current = text
    for _ in range(limit):
        updated = fn(current)
        if updated == current:
            break
        current = updated
    return current


def alternation(words: Tuple[str, ...] | list[str]) -> str:
    r"""Return an escaped regex alternation, longest words first.

    Examples:
        >>> alternation(["из", "из-за"])
        'из\\-за|из'
    """
    ordered = sorted(words, key=len, reverse=True)
    return "|".join(re.escape(word) for word in ordered)

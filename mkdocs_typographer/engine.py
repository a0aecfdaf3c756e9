"""Public entry points that run the rule pipeline over a string.

Typical usage:
    >>> from mkdocs_typographer.engine import apply_typography
    >>> from mkdocs_typographer.settings import TypographySettings
    >>> apply_typography('Он сказал "привет"', TypographySettings(locale="ru"))
    'Он сказал «привет»'
"""

from __future__ import annotations

from dataclasses import dataclass, field
import logging
from typing import List, Optional, Sequence, Tuple, Union

from .detector import detect_locale
from .rules import RuleOrchestrator, get_rules_for_locale, is_known_rule
from .rules.orchestrator import RuleApplication
from .rules.base import Locale
from .settings import AUTO, DEFAULT_SETTINGS, TypographySettings


log = logging.getLogger("mkdocs.plugins.typographer")


@dataclass(frozen=True)
class TypographyResult:
    """Outcome of one pipeline run.

    Attributes:
        text: Transformed text.
        locale: Locale the rules were selected for.
        applied: Ids of the rules that changed the text, in execution order.
        trace: Before and after snapshots of every rule that changed the text.
    """

    text: str
    locale: Locale
    applied: Tuple[str, ...] = ()
    trace: Tuple[RuleApplication, ...] = field(default=(), repr=False, compare=False)

    @property
    def changed(self) -> bool:
        return bool(self.applied)


def resolve_locale(requested: Union[Locale, str, None], text: str) -> Locale:
    """Return the locale to use for ``text``.

    An explicit locale code wins. ``"auto"``, ``None`` and unrecognised
    values fall back to detection; unrecognised values are logged.

    Examples:
        >>> resolve_locale("fr", "Hello world").value
        'fr'
        >>> resolve_locale("auto", "Привет, мир").value
        'ru'
    """
    value = getattr(requested, "value", requested)
    if value and value != AUTO:
        try:
            locale = Locale(value)
        except ValueError:
            locale = None
        if locale is not None and locale is not Locale.common:
            return locale
        log.warning("Unknown locale %r; detecting it from the text instead", value)

    detected = detect_locale(text)
    log.debug("Detected locale %s", detected.value)
    return detected


def process_typography(
    text: str,
    settings: Optional[TypographySettings] = None,
    locale: Optional[Locale] = None,
) -> TypographyResult:
    """Run the pipeline and report which rules changed the text.

    Args:
        text: Text to correct.
        settings: Locale and rule overrides; defaults to automatic detection
            with every rule at its shipped default.
        locale: Already resolved locale, used by callers that detect once
            for a whole document and then process it piece by piece.

    Returns:
        A :class:`TypographyResult`.
    """
    settings = settings or DEFAULT_SETTINGS
    if locale is None:
        locale = resolve_locale(settings.locale, text)

    if not text or text.isspace():
        return TypographyResult(text=text, locale=locale)

    for rule_id in settings.enabled_rules:
        if not is_known_rule(rule_id):
            log.debug("Ignoring override for unknown rule %s", rule_id)

    orchestrator = RuleOrchestrator(get_rules_for_locale(locale))
    result, applied = orchestrator.process(text, locale, settings.is_enabled)
    return TypographyResult(
        text=result,
        locale=locale,
        applied=tuple(application.rule_id for application in applied),
        trace=tuple(applied),
    )


PLACEHOLDER = "\ufffc"


def _free_placeholder(fragments: Sequence[str]) -> str:
    """Return a character absent from every fragment."""
    candidates = [PLACEHOLDER] + [chr(code) for code in range(0xE000, 0xF900)]
    for candidate in candidates:
        if not any(candidate in fragment for fragment in fragments):
            return candidate
    raise ValueError("fragments use every placeholder candidate")


def process_fragments(
    fragments: Sequence[str],
    settings: Optional[TypographySettings] = None,
    locale: Optional[Locale] = None,
    gaps: Optional[Sequence[str]] = None,
) -> Tuple[List[str], TypographyResult]:
    """Correct the pieces of one document as a single text.

    Quotes and spacing depend on the characters around them, so the pieces
    that sit side by side in a document (text nodes of one paragraph, prose
    around a code span) are joined with a placeholder character, processed
    together and split back. ``gaps`` holds the skipped content between two
    consecutive fragments; only its line breaks are carried into the joined
    text, so line numbers in ``result.trace`` match the document's.

    Args:
        fragments: Processable pieces, in document order.
        settings: Locale and rule overrides.
        locale: Already resolved locale; detected from the fragments when
            omitted.
        gaps: Skipped content between fragments, one item fewer than
            ``fragments``. Defaults to empty gaps.

    Returns:
        The corrected fragments and the result for the joined text.

    Raises:
        ValueError: If ``gaps`` does not fit ``fragments``.

    Examples:
        >>> texts, _ = process_fragments(['He said "run ', '" twice'], TypographySettings(locale="en"))
        >>> texts
        ['He said “run ', '” twice']
    """
    settings = settings or DEFAULT_SETTINGS
    if gaps is None:
        gaps = [""] * max(len(fragments) - 1, 0)
    if fragments and len(gaps) != len(fragments) - 1:
        raise ValueError(f"expected {len(fragments) - 1} gaps, got {len(gaps)}")
    if locale is None:
        locale = resolve_locale(settings.locale, "\n".join(fragments))
    if not fragments:
        return [], TypographyResult(text="", locale=locale)

    placeholder = _free_placeholder(fragments)
    breaks = ["\n" * gap.count("\n") for gap in gaps]
    joined = fragments[0] + "".join(
        placeholder + gap_breaks + fragment
        for gap_breaks, fragment in zip(breaks, fragments[1:])
    )

    result = process_typography(joined, settings, locale=locale)
    parts = result.text.split(placeholder)
    if len(parts) != len(fragments):
        raise RuntimeError("typography rules altered fragment boundaries")

    texts = [parts[0]]
    for gap_breaks, part in zip(breaks, parts[1:]):
        if not part.startswith(gap_breaks):
            raise RuntimeError("typography rules altered fragment boundaries")
        texts.append(part[len(gap_breaks):])
    return texts, result


def apply_typography(text: str, settings: Optional[TypographySettings] = None) -> str:
    """Return ``text`` with typography corrected for its locale.

    Empty or whitespace-only input is returned unchanged. The function is
    deterministic and never raises for a string input.
    """
    return process_typography(text, settings).text

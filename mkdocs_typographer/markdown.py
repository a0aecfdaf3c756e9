"""Markdown-aware processing: split sources into active and ignored segments.

Only prose is handed to the rules. Code, front matter, link targets, raw HTML
and regions wrapped in ``<!-- typo-ignore-start -->`` /
``<!-- typo-ignore-end -->`` are kept byte for byte.
"""

from __future__ import annotations

from dataclasses import dataclass
import re
from typing import List, Optional, Sequence, Tuple

from .constants import IGNORE_DIRECTIVE
from .engine import process_fragments, resolve_locale
from .rules.base import Locale
from .settings import DEFAULT_SETTINGS, TypographySettings


_COMMENT_DIRECTIVE_RE = re.compile(
    rf"<!--\s*(?P<closing>/)?{IGNORE_DIRECTIVE}(?:-(?P<variant>start|end))?\s*-->",
    re.IGNORECASE,
)

RE_FRONT_MATTER = re.compile(r"\A---[ \t]*\n.*?\n(?:---|\.\.\.)[ \t]*(?:\n|\Z)", re.DOTALL)
RE_FENCE = re.compile(r"^[ \t]{0,3}(`{3,}|~{3,})")
RE_INLINE_CODE = re.compile(r"(?<!`)(`+)(?!`).+?(?<!`)\1(?!`)")
RE_HTML_COMMENT = re.compile(r"<!--.*?-->", re.DOTALL)
RE_HTML_TAG = re.compile(r"</?[A-Za-z][\w:-]*(?:\s[^<>]*)?/?>")
RE_AUTOLINK = re.compile(r"<(?:[A-Za-z][\w+.-]*:|mailto:)[^\s<>]+>")
RE_LINK_TARGET = re.compile(r"\]\([^()\s]*(?:\([^()\s]*\)[^()\s]*)*(?:\s+\"[^\"\n]*\")?\)")
RE_REFERENCE_DEFINITION = re.compile(r"^[ ]{0,3}\[[^\]\n]+\]:[^\n]*$", re.MULTILINE)
RE_ADMONITION = re.compile(
    r"""^[ \t]*(?:!!!|\?\?\?\+?)[ \t]+[\w-]+(?:[ \t]+(?!")[^\s]+)*(?:[ \t]+"[^"\n]*")?""",
    re.MULTILINE,
)
RE_ATTRIBUTE_LIST = re.compile(r"\{:?[ \t]*[#.][^{}\n]*\}")


@dataclass
class Segment:
    """Slice of a Markdown source.

    Attributes:
        text: Raw characters of the slice.
        ignored: Whether typography must leave the slice untouched.
    """

    text: str
    ignored: bool


@dataclass(frozen=True)
class MarkdownResult:
    """Outcome of :func:`process_markdown`.

    Attributes:
        text: Corrected source.
        locale: Locale the document was processed with.
        changes: ``(line, rule_id)`` pairs sorted by line, where ``line`` is
            a 1-based line of the original source the rule altered.
    """

    text: str
    locale: Locale
    changes: Tuple[Tuple[int, str], ...] = ()

    @property
    def applied(self) -> Tuple[str, ...]:
        return tuple(dict.fromkeys(rule_id for _line, rule_id in self.changes))

    @property
    def changed(self) -> bool:
        return bool(self.changes)


def merge_ranges(ranges: Sequence[Tuple[int, int]]) -> List[Tuple[int, int]]:
    """Merge overlapping or adjacent ranges.

    Examples:
        >>> merge_ranges([(5, 8), (0, 2), (2, 3), (7, 10)])
        [(0, 3), (5, 10)]
    """
    if not ranges:
        return []
    sorted_ranges = sorted(ranges)
    merged: List[Tuple[int, int]] = [sorted_ranges[0]]
    for start, end in sorted_ranges[1:]:
        last_start, last_end = merged[-1]
        if start <= last_end:
            merged[-1] = (last_start, max(last_end, end))
        else:
            merged.append((start, end))
    return merged


def _comment_ignore_ranges(text: str) -> List[Tuple[int, int]]:
    """Return ranges delimited by HTML comment ignore directives."""
    ranges: List[Tuple[int, int]] = []
    stack: List[Tuple[int, int]] = []

    for match in _COMMENT_DIRECTIVE_RE.finditer(text):
        closing = match.group("closing")
        variant = (match.group("variant") or "").lower()

        is_start = not closing and variant == "start"
        is_end = bool(closing) or variant == "end"

        if is_start:
            stack.append((match.start(), match.end()))
            continue

        if is_end and stack:
            _start_comment_start, start_comment_end = stack.pop()
            ranges.append((start_comment_end, match.start()))

    return [rng for rng in ranges if rng[0] < rng[1]]


def _fence_ranges(text: str) -> List[Tuple[int, int]]:
    """Return the spans of fenced code blocks, fences included.

    An unterminated fence runs to the end of the document.
    """
    ranges: List[Tuple[int, int]] = []
    offset = 0
    open_start: Optional[int] = None
    fence = ""

    for line in text.splitlines(keepends=True):
        stripped = line.strip()
        if open_start is None:
            match = RE_FENCE.match(line)
            if match:
                open_start = offset
                fence = match.group(1)
        elif stripped.startswith(fence) and not stripped.strip(fence[0]):
            ranges.append((open_start, offset + len(line)))
            open_start = None
        offset += len(line)

    if open_start is not None:
        ranges.append((open_start, len(text)))
    return ranges


def _pattern_ranges(pattern: re.Pattern, text: str) -> List[Tuple[int, int]]:
    return [match.span() for match in pattern.finditer(text)]


def ignored_ranges(text: str) -> List[Tuple[int, int]]:
    """Return the merged spans of ``text`` that typography must not touch.

    Examples:
        >>> ignored_ranges("Run `ls` now")
        [(4, 8)]
    """
    ranges: List[Tuple[int, int]] = []
    front_matter = RE_FRONT_MATTER.match(text)
    if front_matter:
        ranges.append(front_matter.span())

    fences = _fence_ranges(text)
    ranges.extend(fences)
    ranges.extend(_comment_ignore_ranges(text))

    for pattern in (
        RE_INLINE_CODE,
        RE_HTML_COMMENT,
        RE_HTML_TAG,
        RE_AUTOLINK,
        RE_LINK_TARGET,
        RE_REFERENCE_DEFINITION,
        RE_ADMONITION,
        RE_ATTRIBUTE_LIST,
    ):
        for start, end in _pattern_ranges(pattern, text):
            # Backticks inside a fenced block do not delimit inline code.
            if any(start >= f_start and start < f_end for f_start, f_end in fences):
                continue
            ranges.append((start, end))

    return merge_ranges(ranges)


def build_segments(text: str) -> List[Segment]:
    """Split text into ignored and active segments.

    Examples:
        >>> [(s.text, s.ignored) for s in build_segments("Run `ls` now")]
        [('Run ', False), ('`ls`', True), (' now', False)]
    """
    ranges = ignored_ranges(text)
    if not ranges:
        return [Segment(text=text, ignored=False)]

    segments: List[Segment] = []
    cursor = 0
    for start, end in ranges:
        if cursor < start:
            segments.append(Segment(text=text[cursor:start], ignored=False))
        segments.append(Segment(text=text[start:end], ignored=True))
        cursor = end
    if cursor < len(text):
        segments.append(Segment(text=text[cursor:], ignored=False))
    return segments


def segments_to_text(segments: Sequence[Segment]) -> str:
    """Concatenate segment texts preserving ignored regions."""
    return "".join(segment.text for segment in segments)


def active_text(segments: Sequence[Segment]) -> str:
    """Return the prose of ``segments``, used for locale detection."""
    return "\n".join(segment.text for segment in segments if not segment.ignored)


def split_fragments(segments: Sequence[Segment]) -> Tuple[List[str], List[str]]:
    """Return the active fragments and the ignored gaps between them.

    There is always one fragment more than gaps; a document starting or
    ending with an ignored segment gets an empty fragment on that side.

    Examples:
        >>> split_fragments(build_segments("`a` and `b`"))
        (['', ' and ', ''], ['`a`', '`b`'])
    """
    fragments = [""]
    gaps: List[str] = []
    for segment in segments:
        if segment.ignored:
            gaps.append(segment.text)
            fragments.append("")
        else:
            fragments[-1] += segment.text
    return fragments, gaps


def changed_lines(before: str, after: str) -> List[int]:
    """Return the 1-based lines on which ``after`` differs from ``before``.

    Examples:
        >>> changed_lines("a\\nb...\\nc", "a\\nb…\\nc")
        [2]
    """
    before_lines = before.split("\n")
    after_lines = after.split("\n")
    if len(before_lines) == len(after_lines):
        return [
            number
            for number, (old, new) in enumerate(zip(before_lines, after_lines), start=1)
            if old != new
        ]
    offset = 0
    for old_char, new_char in zip(before, after):
        if old_char != new_char:
            break
        offset += 1
    return [line_number_for_offset(before, offset)]


def process_markdown(
    text: str, settings: Optional[TypographySettings] = None
) -> MarkdownResult:
    """Correct the prose of a Markdown document.

    The locale is resolved once for the whole document, from its active
    segments. The active segments are then corrected together, so a quote
    closing right after a code span or a link still closes.

    Args:
        text: Markdown source.
        settings: Locale and rule overrides.

    Returns:
        A :class:`MarkdownResult` with the corrected source, the locale used
        and one change entry per rule and source line it altered.

    Examples:
        >>> from mkdocs_typographer.settings import TypographySettings
        >>> process_markdown('Say "hello" `a -- b`', TypographySettings(locale="en")).text
        'Say “hello” `a -- b`'
    """
    settings = settings or DEFAULT_SETTINGS
    segments = build_segments(text)
    locale = resolve_locale(settings.locale, active_text(segments))

    fragments, gaps = split_fragments(segments)
    texts, result = process_fragments(fragments, settings, locale=locale, gaps=gaps)

    corrected = texts[0] + "".join(gap + fragment for gap, fragment in zip(gaps, texts[1:]))
    changes = [
        (line, application.rule_id)
        for application in result.trace
        for line in changed_lines(application.before, application.after)
    ]
    changes.sort(key=lambda change: change[0])
    return MarkdownResult(text=corrected, locale=locale, changes=tuple(changes))


def line_number_for_offset(text: str, index: int) -> int:
    """Return the 1-based line number of a string offset."""
    return text.count("\n", 0, index) + 1

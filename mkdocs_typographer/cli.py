"""Command-line entry point for mkdocs-typographer."""

from __future__ import annotations

import argparse
from dataclasses import replace
from pathlib import Path
import sys
from typing import Iterable, Sequence

from rich import box
from rich.console import Console
from rich.table import Table

from .detector import detect_locale
from .engine import apply_typography, process_typography
from .markdown import process_markdown
from .rules import get_all_rules, get_rules_for_locale, is_known_rule
from .settings import (
    AUTO,
    DEFAULT_SETTINGS,
    LOCALE_CHOICES,
    SettingsError,
    TypographySettings,
    load_settings,
)


MARKDOWN_SUFFIXES = (".md", ".markdown")
TEXT_SUFFIXES = (".txt",)


def main(argv: Iterable[str] | None = None) -> int:
    """Execute the command-line interface.

    Args:
        argv: Optional iterable overriding ``sys.argv``.

    Returns:
        Exit code (zero on success, non-zero on error or misuse).
    """
    parser = argparse.ArgumentParser(
        prog="mkdocs-typographer",
        description="Multilingual typography for plain text and Markdown sources.",
    )
    subparsers = parser.add_subparsers(dest="command")

    _configure_apply_parser(subparsers)
    _configure_check_parser(subparsers)
    _configure_fix_parser(subparsers)
    _configure_rules_parser(subparsers)
    _configure_detect_parser(subparsers)

    args = parser.parse_args(list(argv) if argv is not None else None)

    if not getattr(args, "handler", None):
        parser.print_help(sys.stderr)
        return 1

    try:
        return args.handler(args)
    except (SettingsError, OSError, UnicodeDecodeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1


def _add_settings_arguments(parser: argparse.ArgumentParser) -> None:
    """Register the options shared by every command that runs the rules."""
    parser.add_argument(
        "--locale",
        choices=LOCALE_CHOICES,
        default=None,
        help="Target locale (default: auto, or the one from --settings).",
    )
    parser.add_argument(
        "--enable",
        action="append",
        default=[],
        metavar="RULE_ID",
        help="Enable a rule by id. May be repeated.",
    )
    parser.add_argument(
        "--disable",
        action="append",
        default=[],
        metavar="RULE_ID",
        help="Disable a rule by id. May be repeated.",
    )
    parser.add_argument(
        "--settings",
        type=Path,
        default=None,
        metavar="JSON",
        help="JSON settings file with 'locale' and 'enabledRules'.",
    )


def _add_docs_dir_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--docs-dir",
        type=Path,
        default=Path("docs"),
        help="Directory containing Markdown and text sources (default: docs).",
    )


def _configure_apply_parser(
    subparsers: argparse._SubParsersAction[argparse.ArgumentParser],
) -> None:
    """Register the ``apply`` sub-command filtering one text."""

    apply_parser = subparsers.add_parser(
        "apply", help="Correct a file or standard input and print the result."
    )
    apply_parser.add_argument(
        "file",
        nargs="?",
        type=Path,
        default=None,
        help="File to read; standard input when omitted or '-'.",
    )
    apply_parser.add_argument(
        "--markdown",
        action="store_true",
        help="Leave code, links and raw HTML untouched.",
    )
    _add_settings_arguments(apply_parser)
    apply_parser.set_defaults(handler=_run_apply)


def _configure_check_parser(
    subparsers: argparse._SubParsersAction[argparse.ArgumentParser],
) -> None:
    """Register the ``check`` sub-command displaying pending corrections."""

    check_parser = subparsers.add_parser(
        "check",
        help="List the files and rules that mkdocs-typographer would change.",
    )
    _add_docs_dir_argument(check_parser)
    _add_settings_arguments(check_parser)
    check_parser.set_defaults(handler=_run_check)


def _configure_fix_parser(
    subparsers: argparse._SubParsersAction[argparse.ArgumentParser],
) -> None:
    """Register the ``fix`` sub-command mutating sources in-place."""

    fix_parser = subparsers.add_parser(
        "fix", help="Rewrite files with mkdocs-typographer corrections applied."
    )
    _add_docs_dir_argument(fix_parser)
    _add_settings_arguments(fix_parser)
    fix_parser.set_defaults(handler=_run_fix)


def _configure_rules_parser(
    subparsers: argparse._SubParsersAction[argparse.ArgumentParser],
) -> None:
    rules_parser = subparsers.add_parser("rules", help="List the available rules.")
    rules_parser.add_argument(
        "--locale",
        choices=[choice for choice in LOCALE_CHOICES if choice != AUTO],
        default=None,
        help="Only list the rules that run for this locale.",
    )
    rules_parser.set_defaults(handler=_run_rules)


def _configure_detect_parser(
    subparsers: argparse._SubParsersAction[argparse.ArgumentParser],
) -> None:
    detect_parser = subparsers.add_parser(
        "detect", help="Print the locale detected for a file or standard input."
    )
    detect_parser.add_argument(
        "file",
        nargs="?",
        type=Path,
        default=None,
        help="File to read; standard input when omitted or '-'.",
    )
    detect_parser.set_defaults(handler=_run_detect)


def _settings_from_args(args: argparse.Namespace) -> TypographySettings:
    """Overlay command-line flags on the optional settings file."""
    settings = load_settings(args.settings) if args.settings else DEFAULT_SETTINGS
    if args.locale:
        settings = replace(settings, locale=args.locale)

    for rule_id in [*args.enable, *args.disable]:
        if not is_known_rule(rule_id):
            print(f"Warning: unknown rule id {rule_id}", file=sys.stderr)

    return settings.with_overrides(enable=args.enable, disable=args.disable)


def _read_input(path: Path | None) -> str:
    if path is None or str(path) == "-":
        return sys.stdin.read()
    return path.read_text(encoding="utf-8")


def _run_apply(args: argparse.Namespace) -> int:
    """Print the corrected text on standard output."""

    settings = _settings_from_args(args)
    text = _read_input(args.file)
    if args.markdown:
        result = process_markdown(text, settings).text
    else:
        result = apply_typography(text, settings)
    sys.stdout.write(result)
    return 0


def _run_check(args: argparse.Namespace) -> int:
    """Display the corrections that would be applied without modifying files."""

    docs_dir: Path = args.docs_dir
    if not docs_dir.exists():
        print(f"Directory not found: {docs_dir}", file=sys.stderr)
        return 1

    settings = _settings_from_args(args)
    issues_found = False
    for path in _iter_source_files(docs_dir):
        _fixed, locale, changes = _analyze_source(path, settings)
        if not changes:
            continue

        issues_found = True
        print(f"{_format_relative(path)} ({locale}):")
        for line, rule_id in changes:
            location = f" line {line}" if line is not None else ""
            print(f"  - [{rule_id}]{location}")

    if issues_found:
        return 1

    print("No corrections needed.")
    return 0


def _run_fix(args: argparse.Namespace) -> int:
    """Apply corrections in-place."""

    docs_dir: Path = args.docs_dir
    if not docs_dir.exists():
        print(f"Directory not found: {docs_dir}", file=sys.stderr)
        return 1

    settings = _settings_from_args(args)
    updated_files: list[Path] = []
    for path in _iter_source_files(docs_dir):
        fixed, _locale, changes = _analyze_source(path, settings)
        if not changes:
            continue
        path.write_text(fixed, encoding="utf-8")
        updated_files.append(path)
        print(f"Fixed: {_format_relative(path)} ({len(changes)} change(s))")

    if not updated_files:
        print("No corrections applied: files already conform.")
    else:
        print(f"{len(updated_files)} file(s) updated.")
    return 0


def _run_rules(args: argparse.Namespace) -> int:
    """Print the rule catalog as a table."""

    rules = get_rules_for_locale(args.locale) if args.locale else get_all_rules()
    language = args.locale or "en"

    table = Table(
        title="Typography rules",
        title_style="bold bright_white",
        header_style="bold magenta",
        show_lines=True,
        box=box.ROUNDED,
        border_style="grey50",
        row_styles=["grey35", ""],
        pad_edge=False,
        padding=(0, 1),
    )
    table.add_column("Id", style="cyan", no_wrap=True)
    table.add_column("Group", style="green")
    table.add_column("Priority", justify="right")
    table.add_column("Default")
    table.add_column("Name", style="white")

    for rule in rules:
        table.add_row(
            rule.id,
            rule.group.value,
            str(rule.priority),
            "on" if rule.enabled else "off",
            rule.display_name(language),
        )

    Console().print(table)
    return 0


def _run_detect(args: argparse.Namespace) -> int:
    print(detect_locale(_read_input(args.file)).value)
    return 0


def _analyze_source(
    path: Path, settings: TypographySettings
) -> tuple[str, str, list[tuple[int | None, str]]]:
    """Return the corrected text, the locale used and the pending changes.

    Markdown files are processed segment by segment and report line numbers;
    plain text files are processed as a whole.
    """
    original = path.read_text(encoding="utf-8")
    if _is_markdown(path):
        result = process_markdown(original, settings)
        return result.text, result.locale.value, list(result.changes)

    plain = process_typography(original, settings)
    return plain.text, plain.locale.value, [(None, rule_id) for rule_id in plain.applied]


def _is_markdown(path: Path) -> bool:
    return path.suffix.lower() in MARKDOWN_SUFFIXES


def _iter_source_files(docs_dir: Path) -> Sequence[Path]:
    """Return Markdown and text files contained within ``docs_dir`` sorted by path."""
    suffixes = MARKDOWN_SUFFIXES + TEXT_SUFFIXES
    return sorted(
        path
        for path in docs_dir.rglob("*")
        if path.is_file() and path.suffix.lower() in suffixes
    )


def _format_relative(path: Path) -> str:
    """Return a path relative to the current working directory when possible."""
    root = Path.cwd().resolve()
    abs_path = path.resolve()
    try:
        return str(abs_path.relative_to(root))
    except ValueError:
        return str(abs_path)

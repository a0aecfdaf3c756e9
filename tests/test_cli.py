from __future__ import annotations

import importlib
import io
import json

from mkdocs_typographer.cli import main
from mkdocs_typographer.constants import NBSP


def test_cli_without_command_shows_help(capsys):
    exit_code = main([])
    captured = capsys.readouterr()
    assert exit_code == 1
    assert "mkdocs-typographer" in captured.err


def test_module_main_imports_cli_main():
    module = importlib.import_module("mkdocs_typographer.__main__")
    assert module.main is main


def test_apply_reads_file(tmp_path, capsys):
    source = tmp_path / "note.txt"
    source.write_text('Он сказал "привет"', encoding="utf-8")

    exit_code = main(["apply", str(source), "--locale", "ru"])
    captured = capsys.readouterr()

    assert exit_code == 0
    assert captured.out == "Он сказал «привет»"


def test_apply_reads_stdin(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO("Wait..."))

    exit_code = main(["apply", "--locale", "en"])

    assert exit_code == 0
    assert capsys.readouterr().out == "Wait…"


def test_apply_markdown_keeps_code(tmp_path, capsys):
    source = tmp_path / "page.md"
    source.write_text('Say "hello" `a -- b`', encoding="utf-8")

    exit_code = main(["apply", str(source), "--locale", "en", "--markdown"])

    assert exit_code == 0
    assert capsys.readouterr().out == "Say “hello” `a -- b`"


def test_apply_enable_and_disable_flags(tmp_path, capsys):
    source = tmp_path / "note.txt"
    source.write_text('Мы видели "длинную" строку', encoding="utf-8")

    exit_code = main(
        [
            "apply",
            str(source),
            "--locale",
            "ru",
            "--disable",
            "ru/quotes/guillemets",
            "--enable",
            "common/layout/orphan",
        ]
    )

    assert exit_code == 0
    assert capsys.readouterr().out == f'Мы видели "длинную"{NBSP}строку'


def test_apply_warns_about_unknown_rule_ids(tmp_path, capsys):
    source = tmp_path / "note.txt"
    source.write_text("Hello", encoding="utf-8")

    exit_code = main(["apply", str(source), "--enable", "xx/nope"])
    captured = capsys.readouterr()

    assert exit_code == 0
    assert "unknown rule id xx/nope" in captured.err


def test_apply_uses_settings_file(tmp_path, capsys):
    settings = tmp_path / "settings.json"
    settings.write_text(
        json.dumps({"locale": "ru", "enabledRules": {"ru/quotes/guillemets": False}}),
        encoding="utf-8",
    )
    source = tmp_path / "note.txt"
    source.write_text('Он сказал "привет"...', encoding="utf-8")

    exit_code = main(["apply", str(source), "--settings", str(settings)])

    assert exit_code == 0
    assert capsys.readouterr().out == 'Он сказал "привет"…'


def test_invalid_settings_file_reports_error(tmp_path, capsys):
    settings = tmp_path / "settings.json"
    settings.write_text("{oops", encoding="utf-8")

    exit_code = main(["apply", "--settings", str(settings)])
    captured = capsys.readouterr()

    assert exit_code == 1
    assert captured.err.startswith("Error: ")


def test_missing_input_file_reports_error(tmp_path, capsys):
    exit_code = main(["apply", str(tmp_path / "missing.txt")])
    assert exit_code == 1
    assert "Error: " in capsys.readouterr().err


def test_cli_check_reports_issues(tmp_path, capsys):
    docs_dir = tmp_path / "sources"
    docs_dir.mkdir()
    (docs_dir / "page.md").write_text('Он сказал "привет"\n\n`"код"`\n', encoding="utf-8")
    (docs_dir / "clean.md").write_text("Nothing changes here.\n", encoding="utf-8")

    exit_code = main(["check", "--docs-dir", str(docs_dir)])
    captured = capsys.readouterr()

    assert exit_code == 1
    assert "page.md (ru):" in captured.out
    assert "[ru/quotes/guillemets] line 1" in captured.out
    assert "clean.md" not in captured.out


def test_cli_check_clean_tree(tmp_path, capsys):
    docs_dir = tmp_path / "docs"
    docs_dir.mkdir()
    (docs_dir / "page.md").write_text("Nothing changes here.\n", encoding="utf-8")

    exit_code = main(["check", "--docs-dir", str(docs_dir)])

    assert exit_code == 0
    assert "No corrections needed." in capsys.readouterr().out


def test_cli_check_missing_directory(tmp_path, capsys):
    exit_code = main(["check", "--docs-dir", str(tmp_path / "nope")])
    assert exit_code == 1
    assert "Directory not found" in capsys.readouterr().err


def test_cli_fix_updates_files(tmp_path, capsys):
    docs_dir = tmp_path / "docs"
    (docs_dir / "nested").mkdir(parents=True)
    md_path = docs_dir / "nested" / "page.md"
    md_path.write_text('She said "hello"...\n\n```\n"raw"...\n```\n', encoding="utf-8")
    txt_path = docs_dir / "notes.txt"
    txt_path.write_text("Wait...", encoding="utf-8")
    other = docs_dir / "data.json"
    other.write_text('{"a": "b..."}', encoding="utf-8")

    exit_code = main(["fix", "--docs-dir", str(docs_dir), "--locale", "en"])
    captured_fix = capsys.readouterr()

    assert exit_code == 0
    assert "Fixed:" in captured_fix.out
    assert "2 file(s) updated." in captured_fix.out
    assert md_path.read_text(encoding="utf-8") == 'She said “hello”…\n\n```\n"raw"...\n```\n'
    assert txt_path.read_text(encoding="utf-8") == "Wait…"
    assert other.read_text(encoding="utf-8") == '{"a": "b..."}'

    exit_code_check = main(["check", "--docs-dir", str(docs_dir), "--locale", "en"])
    captured_check = capsys.readouterr()
    assert exit_code_check == 0
    assert "No corrections needed." in captured_check.out


def test_cli_fix_without_changes(tmp_path, capsys):
    docs_dir = tmp_path / "docs"
    docs_dir.mkdir()
    (docs_dir / "page.md").write_text("Nothing changes here.\n", encoding="utf-8")

    assert main(["fix", "--docs-dir", str(docs_dir)]) == 0
    assert "No corrections applied" in capsys.readouterr().out


def test_rules_lists_catalog(monkeypatch, capsys):
    monkeypatch.setenv("COLUMNS", "200")

    exit_code = main(["rules", "--locale", "fr"])
    out = capsys.readouterr().out

    assert exit_code == 0
    assert "fr/quotes/guillemets" in out
    assert "common/spaces/double" in out
    assert "ru/yo/basic" not in out


def test_rules_without_locale_lists_everything(monkeypatch, capsys):
    monkeypatch.setenv("COLUMNS", "200")

    assert main(["rules"]) == 0
    out = capsys.readouterr().out
    assert "ru/yo/basic" in out
    assert "ja/punctuation/kinsoku" in out


def test_detect(tmp_path, monkeypatch, capsys):
    source = tmp_path / "page.md"
    source.write_text("你好世界", encoding="utf-8")
    assert main(["detect", str(source)]) == 0
    assert capsys.readouterr().out.strip() == "zh"

    monkeypatch.setattr("sys.stdin", io.StringIO("Привет, мир"))
    assert main(["detect", "-"]) == 0
    assert capsys.readouterr().out.strip() == "ru"

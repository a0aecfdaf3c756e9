from mkdocs_typographer import apply_typography
from mkdocs_typographer.constants import NBSP
from mkdocs_typographer.rules.base import Locale, RuleContext
from mkdocs_typographer.rules.cjk import (
    fix_ja_punctuation,
    fix_ja_spacing,
    fix_kinsoku,
    fix_width,
    fix_zh_punctuation,
    fix_zh_spacing,
)
from mkdocs_typographer.settings import TypographySettings


zh = RuleContext(Locale.zh)
ja = RuleContext(Locale.ja)


def test_width_normalisation():
    assert fix_width("ＡＢＣ１２３ｘｙｚ", zh) == "ABC123xyz"


def test_zh_punctuation():
    assert fix_zh_punctuation("你好,世界.", zh) == "你好，世界。"
    assert fix_zh_punctuation("(中文)", zh) == "（中文）"
    assert fix_zh_punctuation("共.5", zh) == "共.5"


def test_zh_punctuation_leaves_latin_text_alone():
    assert fix_zh_punctuation("Hello, world.", zh) == "Hello, world."


def test_zh_spacing():
    assert fix_zh_spacing("共5个apple", zh) == "共 5 个 apple"
    assert fix_zh_spacing("共 5 个", zh) == "共 5 个"


def test_ja_punctuation_and_spacing():
    assert fix_ja_punctuation("こんにちは,世界.", ja) == "こんにちは、世界。"
    assert fix_ja_spacing("日本語とEnglish", ja) == "日本語と English"


def test_kinsoku():
    assert fix_kinsoku("テスト 。", ja) == f"テスト{NBSP}。"


def test_zh_pipeline():
    result = apply_typography("我有3个apple,很好.", TypographySettings(locale="zh"))
    assert result == "我有 3 个 apple,很好。"


def test_ja_corner_quotes_pipeline():
    result = apply_typography('彼は"はい"と言った', TypographySettings(locale="ja"))
    assert result == "彼は「はい」と言った"


def test_auto_detects_chinese():
    assert apply_typography("你好,世界.") == "你好，世界。"

import json
import logging

import pytest

from mkdocs_typographer.rules import get_rule
from mkdocs_typographer.settings import (
    DEFAULT_SETTINGS,
    SettingsError,
    TypographySettings,
    load_settings,
    settings_from_mapping,
)


def test_defaults():
    assert DEFAULT_SETTINGS.locale == "auto"
    assert dict(DEFAULT_SETTINGS.enabled_rules) == {}


def test_override_takes_precedence_over_default():
    orphan = get_rule("common/layout/orphan")
    quotes = get_rule("ru/quotes/guillemets")
    settings = TypographySettings(
        enabled_rules={"common/layout/orphan": True, "ru/quotes/guillemets": False}
    )
    assert settings.is_enabled(orphan)
    assert not settings.is_enabled(quotes)
    assert DEFAULT_SETTINGS.is_enabled(quotes)
    assert not DEFAULT_SETTINGS.is_enabled(orphan)


def test_with_overrides_returns_a_copy():
    base = TypographySettings(locale="ru")
    updated = base.with_overrides(enable=["a"], disable=["b", "a"])
    assert dict(updated.enabled_rules) == {"a": False, "b": False}
    assert dict(base.enabled_rules) == {}
    assert updated.locale == "ru"


def test_settings_from_mapping_accepts_both_spellings():
    camel = settings_from_mapping({"locale": "fr", "enabledRules": {"x": True}})
    snake = settings_from_mapping({"enabled_rules": {"x": False}})
    assert camel.locale == "fr"
    assert dict(camel.enabled_rules) == {"x": True}
    assert snake.locale == "auto"
    assert dict(snake.enabled_rules) == {"x": False}


def test_non_boolean_override_is_dropped(caplog):
    with caplog.at_level(logging.WARNING, logger="mkdocs.plugins.typographer"):
        settings = settings_from_mapping({"enabledRules": {"x": "yes", "y": True}})
    assert dict(settings.enabled_rules) == {"y": True}
    assert "non-boolean" in caplog.text


@pytest.mark.parametrize(
    "data",
    [{"locale": 3}, {"enabledRules": ["x"]}],
)
def test_invalid_mapping_raises(data):
    with pytest.raises(SettingsError):
        settings_from_mapping(data)


def test_load_settings(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({"locale": "ru", "enabledRules": {"ru/yo/basic": False}}), encoding="utf-8")
    settings = load_settings(path)
    assert settings.locale == "ru"
    assert not settings.is_enabled(get_rule("ru/yo/basic"))


def test_load_settings_errors(tmp_path):
    with pytest.raises(SettingsError, match="Cannot read"):
        load_settings(tmp_path / "missing.json")

    broken = tmp_path / "broken.json"
    broken.write_text("{not json", encoding="utf-8")
    with pytest.raises(SettingsError, match="Invalid JSON"):
        load_settings(broken)

    listing = tmp_path / "list.json"
    listing.write_text("[1, 2]", encoding="utf-8")
    with pytest.raises(SettingsError, match="JSON object"):
        load_settings(listing)

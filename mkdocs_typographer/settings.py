"""User settings: target locale and per-rule enable overrides.

Settings can be built in code, or loaded from a JSON document shaped like::

    {
        "locale": "ru",
        "enabledRules": {"common/layout/orphan": true, "ru/yo/basic": false}
    }

``enabled_rules`` is accepted as an alias of ``enabledRules``.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
import json
import logging
from pathlib import Path
from typing import Any, Iterable, Mapping, Union

from .rules.base import Rule


log = logging.getLogger("mkdocs.plugins.typographer")

AUTO = "auto"
LOCALE_CHOICES = (AUTO, "ru", "en", "fr", "zh", "ja")


class SettingsError(ValueError):
    """Raised when a settings document cannot be read or understood."""


@dataclass(frozen=True)
class TypographySettings:
    """Configuration consumed by the engine.

    Attributes:
        locale: ``"auto"`` to detect the locale from the text, or a locale
            code such as ``"ru"``.
        enabled_rules: Sparse mapping of rule id to an explicit on/off
            switch. Rules absent from the mapping keep their default.
    """

    locale: str = AUTO
    enabled_rules: Mapping[str, bool] = field(default_factory=dict)

    def is_enabled(self, rule: Rule) -> bool:
        """Return whether ``rule`` runs under these settings."""
        return self.enabled_rules.get(rule.id, rule.enabled)

    def with_overrides(
        self,
        enable: Iterable[str] = (),
        disable: Iterable[str] = (),
    ) -> "TypographySettings":
        """Return a copy with some rules switched on or off.

        Examples:
            >>> settings = TypographySettings().with_overrides(enable=["common/layout/orphan"])
            >>> dict(settings.enabled_rules)
            {'common/layout/orphan': True}
        """
        rules = dict(self.enabled_rules)
        for rule_id in enable:
            rules[rule_id] = True
        for rule_id in disable:
            rules[rule_id] = False
        return replace(self, enabled_rules=rules)


DEFAULT_SETTINGS = TypographySettings()


def settings_from_mapping(data: Mapping[str, Any]) -> TypographySettings:
    """Build settings from a decoded JSON object.

    Non-boolean override values are dropped with a warning.

    Raises:
        SettingsError: If ``locale`` is not a string or the overrides are not
            an object.
    """
    locale = data.get("locale", AUTO)
    if not isinstance(locale, str):
        raise SettingsError(f"'locale' must be a string, got {locale!r}")

    raw_rules = data.get("enabledRules", data.get("enabled_rules", {}))
    if raw_rules is None:
        raw_rules = {}
    if not isinstance(raw_rules, Mapping):
        raise SettingsError("'enabledRules' must be an object mapping rule ids to booleans")

    rules: dict[str, bool] = {}
    for rule_id, value in raw_rules.items():
        if not isinstance(value, bool):
            log.warning("Ignoring non-boolean override for rule %s: %r", rule_id, value)
            continue
        rules[str(rule_id)] = value

    return TypographySettings(locale=locale, enabled_rules=rules)


def load_settings(path: Union[str, Path]) -> TypographySettings:
    """Read settings from a JSON file.

    Args:
        path: Location of the JSON document.

    Returns:
        The parsed settings.

    Raises:
        SettingsError: If the file is unreadable, is not valid JSON, or does
            not contain a JSON object.
    """
    path = Path(path)
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise SettingsError(f"Cannot read settings file {path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise SettingsError(f"Invalid JSON in settings file {path}: {exc}") from exc

    if not isinstance(raw, dict):
        raise SettingsError(f"Settings file {path} must contain a JSON object")
    return settings_from_mapping(raw)

"""Built-in typography rules and the registry that selects them per locale."""

from __future__ import annotations

from types import MappingProxyType
from typing import List, Optional, Sequence, Tuple, Union

from . import cjk, common, english, french, quotes, russian, yo
from .base import Group, Locale, Rule, RuleContext
from .orchestrator import RuleApplication, RuleOrchestrator


def _quotes_for(locale: Locale) -> Tuple[Rule, ...]:
    return tuple(rule for rule in quotes.RULES if rule.locale is locale)


def build_rules() -> Tuple[Rule, ...]:
    """Return the full catalog: common, ru, en, fr, zh then ja rules."""

    return (
        common.RULES
        + russian.RULES
        + yo.RULES
        + _quotes_for(Locale.ru)
        + _quotes_for(Locale.en)
        + english.RULES
        + _quotes_for(Locale.fr)
        + french.RULES
        + cjk.ZH_RULES
        + _quotes_for(Locale.zh)
        + cjk.JA_RULES
        + _quotes_for(Locale.ja)
    )


def _ensure_unique(rules: Sequence[Rule]) -> Tuple[Rule, ...]:
    seen: set[str] = set()
    for rule in rules:
        if rule.id in seen:
            raise ValueError(f"Duplicate rule id: {rule.id}")
        seen.add(rule.id)
    return tuple(rules)


ALL_RULES = _ensure_unique(build_rules())
_RULES_BY_ID = MappingProxyType({rule.id: rule for rule in ALL_RULES})


def get_all_rules() -> List[Rule]:
    """Return every registered rule in catalog order."""
    return list(ALL_RULES)


def get_rules_for_locale(locale: Union[Locale, str]) -> List[Rule]:
    """Return the rules that apply to ``locale``, sorted by priority.

    Common rules are always included. The sort is stable, so rules sharing a
    priority keep their catalog order.

    Raises:
        ValueError: If ``locale`` is not a known locale code.

    Examples:
        >>> [rule.id for rule in get_rules_for_locale("en")][:3]
        ['common/spaces/double', 'common/punctuation/duplicates', 'common/punctuation/ellipsis']
    """
    locale = Locale(locale)
    selected = [
        rule for rule in ALL_RULES if rule.locale in (locale, Locale.common)
    ]
    return sorted(selected, key=lambda rule: rule.priority)


def get_rule_groups_for_locale(locale: Union[Locale, str]) -> List[Group]:
    """Return the distinct groups of a locale's rules in execution order."""
    groups: List[Group] = []
    for rule in get_rules_for_locale(locale):
        if rule.group not in groups:
            groups.append(rule.group)
    return groups


def get_rule(rule_id: str) -> Optional[Rule]:
    """Return the rule registered under ``rule_id``, or ``None``."""
    return _RULES_BY_ID.get(rule_id)


def is_known_rule(rule_id: str) -> bool:
    return rule_id in _RULES_BY_ID


__all__ = [
    "ALL_RULES",
    "Group",
    "Locale",
    "Rule",
    "RuleApplication",
    "RuleContext",
    "RuleOrchestrator",
    "build_rules",
    "get_all_rules",
    "get_rule",
    "get_rule_groups_for_locale",
    "get_rules_for_locale",
    "is_known_rule",
]

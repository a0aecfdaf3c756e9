"""Coordinate execution of typographic rules and record which ones fired."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, List, Sequence, Tuple

from .base import Locale, Rule, RuleContext


@dataclass(frozen=True)
class RuleApplication:
    """Trace entry recorded each time a rule changed the text.

    Attributes:
        rule: Rule that produced the change.
        before: Text handed to the rule.
        after: Text returned by the rule.
    """

    rule: Rule
    before: str
    after: str

    @property
    def rule_id(self) -> str:
        return self.rule.id


class RuleOrchestrator:
    """Coordinate the sequential application of typographic rules."""

    def __init__(self, rules: Sequence[Rule]) -> None:
        """Store the rule list for later processing.

        Args:
            rules: Rules to apply, already in execution order.
        """
        self._rules: Tuple[Rule, ...] = tuple(rules)

    @property
    def rules(self) -> Tuple[Rule, ...]:
        """Tuple of rules managed by the orchestrator."""
        return self._rules

    def process(
        self,
        text: str,
        locale: Locale,
        is_enabled: Callable[[Rule], bool],
    ) -> tuple[str, List[RuleApplication]]:
        """Fold ``text`` through every enabled rule.

        Protected ranges are recomputed from the current text before each
        rule, because earlier rules may have shifted offsets.

        Args:
            text: Input string to process.
            locale: Locale handed to every rule context.
            is_enabled: Callable deciding whether a rule runs.

        Returns:
            A tuple containing the transformed text and the applications that
            actually changed it, in execution order.

        Examples:
            >>> from mkdocs_typographer.rules import get_rule
            >>> orchestrator = RuleOrchestrator((get_rule("common/punctuation/ellipsis"),))
            >>> cleaned, applied = orchestrator.process("Wait...", Locale.en, lambda rule: True)
            >>> cleaned
            'Wait…'
            >>> [application.rule_id for application in applied]
            ['common/punctuation/ellipsis']
        """
        current = text
        applied: List[RuleApplication] = []

        for rule in self._rules:
            if not is_enabled(rule):
                continue
            ctx = RuleContext.for_text(locale, current)
            updated = rule.apply(current, ctx)
            if updated != current:
                applied.append(RuleApplication(rule=rule, before=current, after=updated))
                current = updated

        return current, applied

"""Ordered collection of rewrite rules."""

from typing import Iterable, Iterator, Optional

from .models import InvalidRuleType, Rule
from .parser import parse_rules


def _require_rule(rule: object) -> Rule:
    """Reject anything that isn't a Rule."""
    if not isinstance(rule, Rule):
        raise InvalidRuleType(f"Statement must be a Rule, got {type(rule).__name__}")
    return rule


class Ruleset:
    """An ordered, mutable collection of rules.

    Order is significant: a runner fires the first rule whose pattern occurs
    in the context. A ruleset may be shared by several runners; changing it
    while one of them is running is allowed but makes the outcome depend on
    when the change happened.
    """

    def __init__(self, rules: Optional[Iterable[Rule]] = None) -> None:
        self._rules: list[Rule] = []
        for rule in rules or ():
            self.add_statement(rule)

    @classmethod
    def from_rules(cls, rules: Iterable[Rule]) -> "Ruleset":
        """Build a ruleset from rules, keeping their order."""
        return cls(rules)

    @classmethod
    def from_text(cls, text: str) -> "Ruleset":
        """Build a ruleset from statement text, one statement per line."""
        return cls(parse_rules(text))

    def has_statements(self) -> bool:
        """True if the ruleset holds at least one rule."""
        return len(self._rules) > 0

    def get_statements(self) -> list[Rule]:
        """Return a copy of the rules in order."""
        return list(self._rules)

    def get_statement(self, position: int) -> Optional[Rule]:
        """Return the rule at a position, or None if there is none there."""
        if 0 <= position < len(self._rules):
            return self._rules[position]
        return None

    def set_statement(self, rule: Rule, position: int) -> Rule:
        """Replace the rule at a position and return the one it replaced.

        Raises:
            InvalidRuleType: If rule is not a Rule
            IndexError: If there is no rule at the position
        """
        _require_rule(rule)
        if not 0 <= position < len(self._rules):
            raise IndexError(f"No statement at position {position} (size {len(self._rules)})")

        previous = self._rules[position]
        self._rules[position] = rule
        return previous

    def add_statement(self, rule: Rule, position: Optional[int] = None) -> "Ruleset":
        """Add a rule at the front, the back, or anywhere in between.

        Args:
            rule: The rule to add
            position: Where to add the rule. Below 0 puts it first; omitted or
                past the last rule puts it last.

        Returns:
            self (chainable)
        """
        _require_rule(rule)
        if position is None or position >= len(self._rules):
            self._rules.append(rule)
        elif position < 0:
            self._rules.insert(0, rule)
        else:
            self._rules.insert(position, rule)
        return self

    def remove_statement(self, position: Optional[int] = None) -> Optional[Rule]:
        """Remove and return a rule, using the same conventions as add_statement.

        Omitted or at/after the last index removes the last rule; below 0
        removes the first. Returns None if the ruleset is empty.
        """
        if not self._rules:
            return None
        if position is None or position >= len(self._rules) - 1:
            return self._rules.pop()
        if position < 0:
            return self._rules.pop(0)
        return self._rules.pop(position)

    def __len__(self) -> int:
        return len(self._rules)

    def __iter__(self) -> Iterator[Rule]:
        return iter(self.get_statements())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Ruleset):
            return NotImplemented
        return self._rules == other._rules

    def __str__(self) -> str:
        return "\n".join(str(rule) for rule in self._rules)

    def __repr__(self) -> str:
        return f"Ruleset({self._rules!r})"

"""Data models for Markov rewrite rules."""

from dataclasses import dataclass

# Textual stand-in for the empty word, since plain rule text cannot express it
EMPTY_WORD = "!"

# Characters that cannot appear inside a stored pattern or replacement
_RESERVED = frozenset({EMPTY_WORD, "."})


class MarkovError(Exception):
    """Base class for all Markov interpreter errors."""

    pass


class MalformedStatement(MarkovError, ValueError):
    """Raised when a rewrite statement does not match the rule grammar."""

    pass


class InvalidRuleType(MarkovError, TypeError):
    """Raised when something other than a Rule is given where a Rule is required."""

    pass


class InvalidArgument(MarkovError, TypeError):
    """Raised when a runner is built from an invalid ruleset or context."""

    pass


def _validate_component(value: object, side: str) -> None:
    """Check that a rule component can be stored and rendered back to text."""
    if not isinstance(value, str):
        raise InvalidRuleType(f"Rule {side} must be a string, got {type(value).__name__}")
    if value == EMPTY_WORD * 2:
        raise MalformedStatement(f"Rule {side} contains two empty word markers")
    for char in value:
        if char.isspace():
            raise MalformedStatement(f"Rule {side} must not contain whitespace: {value!r}")
        if char in _RESERVED:
            raise MalformedStatement(f"Rule {side} must not contain {char!r}: {value!r}")


@dataclass(frozen=True)
class Rule:
    """A compiled rewrite rule: the first occurrence of ``pattern`` becomes ``replacement``.

    Components are stored in their functional form, so the empty word is the
    empty string. Use :func:`markov.rules.parser.compile_rule` to build a rule
    from text such as ``"a ->. b"``.
    """

    pattern: str
    replacement: str
    terminating: bool = False

    def __post_init__(self) -> None:
        _validate_component(self.pattern, "pattern")
        _validate_component(self.replacement, "replacement")
        object.__setattr__(self, "terminating", bool(self.terminating))

    @classmethod
    def compile(cls, statement: str) -> "Rule":
        """Compile a textual statement into a Rule."""
        from .parser import compile_rule

        return compile_rule(statement)

    def matches(self, context: str) -> bool:
        """Check whether the pattern occurs anywhere in the context."""
        return self.pattern in context

    def apply(self, context: str) -> str:
        """Rewrite the leftmost occurrence of the pattern in the context."""
        return context.replace(self.pattern, self.replacement, 1)

    def __str__(self) -> str:
        """Render the rule back into statement syntax."""
        lhs = self.pattern or EMPTY_WORD
        rhs = self.replacement or EMPTY_WORD
        arrow = "->." if self.terminating else "->"
        return f"{lhs} {arrow} {rhs}"

"""Rewrite rules for Markov algorithms."""

from .models import (
    EMPTY_WORD,
    InvalidArgument,
    InvalidRuleType,
    MalformedStatement,
    MarkovError,
    Rule,
)
from .parser import (
    compile_rule,
    list_yaml_algorithms,
    parse_rules,
    parse_rules_file,
    parse_yaml_algorithms_file,
)
from .ruleset import Ruleset

__all__ = [
    "EMPTY_WORD",
    "InvalidArgument",
    "InvalidRuleType",
    "MalformedStatement",
    "MarkovError",
    "Rule",
    "Ruleset",
    "compile_rule",
    "list_yaml_algorithms",
    "parse_rules",
    "parse_rules_file",
    "parse_yaml_algorithms_file",
]

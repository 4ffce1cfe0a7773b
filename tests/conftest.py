from pathlib import Path

import pytest

from markov.config import MarkovSettings, get_settings, set_settings
from markov.rules import Ruleset, compile_rule

fixtures_path = Path(__file__).parent / "fixtures"
algorithms_file = fixtures_path / "algorithms.yaml"
binary_rules_file = fixtures_path / "binary_to_unary.txt"


def build_ruleset(*statements: str) -> Ruleset:
    """Build a ruleset from statements, in order."""
    return Ruleset.from_rules(compile_rule(s) for s in statements)


@pytest.fixture(autouse=True)
def reset_settings():
    """Give every test fresh default settings and restore the previous ones afterwards."""
    original_settings = get_settings()
    set_settings(MarkovSettings())

    yield

    set_settings(original_settings)


@pytest.fixture
def binary_to_unary() -> Ruleset:
    """Classic binary-to-unary conversion algorithm."""
    return build_ruleset("|0 -> 0||", "1 -> 0|", "0 -> !")

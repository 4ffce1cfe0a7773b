"""Tests for Ruleset."""

import pytest

from markov.rules import InvalidRuleType, Rule, Ruleset

A = Rule("a", "1")
B = Rule("b", "2")
C = Rule("c", "3")
D = Rule("d", "4")


def make_ruleset(*rules: Rule) -> Ruleset:
    ruleset = Ruleset()
    for rule in rules:
        ruleset.add_statement(rule)
    return ruleset


class TestRulesetAdd:
    """Tests for add_statement."""

    def test_new_ruleset_is_empty(self):
        """Test that an empty ruleset is legal."""
        ruleset = Ruleset()
        assert not ruleset.has_statements()
        assert ruleset.get_statements() == []
        assert len(ruleset) == 0

    def test_add_appends_by_default(self):
        """Test that omitting the position appends."""
        ruleset = make_ruleset(A, B)
        assert ruleset.get_statements() == [A, B]
        assert ruleset.has_statements()

    def test_add_is_chainable(self):
        """Test that add_statement returns the ruleset."""
        ruleset = Ruleset()
        assert ruleset.add_statement(A).add_statement(B) is ruleset
        assert ruleset.get_statements() == [A, B]

    def test_add_negative_position_prepends(self):
        """Test that a negative position puts the rule first."""
        ruleset = make_ruleset(A, B).add_statement(C, -1)
        assert ruleset.get_statements() == [C, A, B]

    def test_add_position_past_end_appends(self):
        """Test that a position at or past the length appends."""
        ruleset = make_ruleset(A, B).add_statement(C, 2).add_statement(D, 100)
        assert ruleset.get_statements() == [A, B, C, D]

    def test_add_splices_at_position(self):
        """Test inserting between existing rules."""
        ruleset = make_ruleset(A, B, C).add_statement(D, 1)
        assert ruleset.get_statements() == [A, D, B, C]

    def test_add_at_zero(self):
        """Test inserting at the front with position 0."""
        ruleset = make_ruleset(A, B).add_statement(C, 0)
        assert ruleset.get_statements() == [C, A, B]

    def test_add_rejects_non_rule(self):
        """Test that only rules can be added."""
        with pytest.raises(InvalidRuleType):
            Ruleset().add_statement("a -> b")  # type: ignore[arg-type]

    def test_constructor_rejects_non_rule(self):
        """Test that the constructor validates rules too."""
        with pytest.raises(InvalidRuleType):
            Ruleset([A, "b -> c"])  # type: ignore[list-item]


class TestRulesetRemove:
    """Tests for remove_statement."""

    def test_remove_from_empty(self):
        """Test that removing from an empty ruleset returns None."""
        assert Ruleset().remove_statement() is None
        assert Ruleset().remove_statement(0) is None
        assert Ruleset().remove_statement(-1) is None

    def test_remove_last_by_default(self):
        """Test that omitting the position removes the last rule."""
        ruleset = make_ruleset(A, B, C)
        assert ruleset.remove_statement() == C
        assert ruleset.get_statements() == [A, B]

    def test_remove_past_end_removes_last(self):
        """Test that positions at or past the last index remove the last rule."""
        ruleset = make_ruleset(A, B, C)
        assert ruleset.remove_statement(2) == C
        assert ruleset.remove_statement(50) == B
        assert ruleset.get_statements() == [A]

    def test_remove_negative_removes_first(self):
        """Test that a negative position removes the first rule."""
        ruleset = make_ruleset(A, B, C)
        assert ruleset.remove_statement(-5) == A
        assert ruleset.get_statements() == [B, C]

    def test_remove_at_position(self):
        """Test removing from the middle keeps the rest in order."""
        ruleset = make_ruleset(A, B, C, D)
        assert ruleset.remove_statement(1) == B
        assert ruleset.get_statements() == [A, C, D]


class TestRulesetAccess:
    """Tests for get_statement, set_statement and get_statements."""

    def test_get_statement(self):
        """Test indexed reads."""
        ruleset = make_ruleset(A, B)
        assert ruleset.get_statement(0) == A
        assert ruleset.get_statement(1) == B

    def test_get_statement_out_of_range(self):
        """Test that reads outside the ruleset return None."""
        ruleset = make_ruleset(A, B)
        assert ruleset.get_statement(2) is None
        assert ruleset.get_statement(-1) is None

    def test_set_statement_returns_previous(self):
        """Test replacing a rule."""
        ruleset = make_ruleset(A, B)
        assert ruleset.set_statement(C, 1) == B
        assert ruleset.get_statements() == [A, C]

    def test_set_statement_rejects_non_rule(self):
        """Test that set_statement requires a Rule."""
        ruleset = make_ruleset(A)
        with pytest.raises(InvalidRuleType):
            ruleset.set_statement(object(), 0)  # type: ignore[arg-type]

    def test_set_statement_out_of_range(self):
        """Test that set_statement refuses positions without a rule."""
        ruleset = make_ruleset(A)
        with pytest.raises(IndexError):
            ruleset.set_statement(B, 1)
        with pytest.raises(IndexError):
            ruleset.set_statement(B, -1)

    def test_get_statements_is_a_copy(self):
        """Test that mutating the returned list leaves the ruleset alone."""
        ruleset = make_ruleset(A, B)
        statements = ruleset.get_statements()
        statements.reverse()
        statements.append(C)
        assert ruleset.get_statements() == [A, B]

    def test_from_text(self):
        """Test building a ruleset from statement text."""
        ruleset = Ruleset.from_text("a -> 1\n# comment\nb -> 2\n")
        assert ruleset == make_ruleset(A, B)

    def test_iteration_and_str(self):
        """Test iterating and rendering a ruleset."""
        ruleset = Ruleset.from_rules([A, Rule("", "x", True)])
        assert list(ruleset) == [A, Rule("", "x", True)]
        assert str(ruleset) == "a -> 1\n! ->. x"

"""Execution engine for Markov algorithms."""

import logging
from dataclasses import dataclass
from typing import Optional

from markov.config import get_settings
from markov.models.run import RunResult, StepRecord, Termination
from markov.rules.models import InvalidArgument, Rule
from markov.rules.ruleset import Ruleset

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Step:
    """A history entry: the context after a step and the rule applied, if any."""

    context: str
    rule: Optional[Rule] = None

    def to_record(self) -> StepRecord:
        """Convert to a serializable record."""
        if self.rule is None:
            return StepRecord(context=self.context)
        return StepRecord(
            context=self.context,
            rule=str(self.rule),
            terminating=self.rule.terminating,
        )


class Runner:
    """Runs a ruleset over a string context.

    A runner is single use: it is bound to one ruleset and one context
    lineage. Build a new runner for every run.

    Properties:
        context: the current context
        ruleset: the ruleset being executed (never modified by the runner)
        history: every step so far, as a tuple; the first entry is the initial context
        halted: whether execution has finished
    """

    def __init__(self, ruleset: Ruleset, context: str):
        """Initialize the runner with a ruleset and an initial context."""
        if ruleset is None or not isinstance(ruleset, Ruleset):
            raise InvalidArgument("Runner requires a Ruleset to run")
        if not isinstance(context, str):
            raise InvalidArgument("Runner requires a string context")

        self.context = context
        self.ruleset = ruleset
        self._history: list[Step] = []
        self.halted = False
        self._initial = context
        self._termination: Optional[Termination] = None
        self._stalled = False

    @property
    def done(self) -> bool:
        """Alias for ``halted``."""
        return self.halted

    @property
    def history(self) -> tuple[Step, ...]:
        """Every step so far. The first entry is the initial context with no rule."""
        return tuple(self._history)

    @property
    def steps(self) -> tuple[Step, ...]:
        """Alias for ``history``."""
        return self.history

    @property
    def stalled(self) -> bool:
        """True if the last step applied a non-terminating rule without changing the context.

        Matching is deterministic, so a stalled runner would apply the same
        rule forever.
        """
        return self._stalled

    @property
    def termination(self) -> Optional[Termination]:
        """How the runner halted, or None while it is still running."""
        return self._termination

    @property
    def step_count(self) -> int:
        """Number of rules applied so far."""
        return max(len(self._history) - 1, 0)

    def _halt(self, termination: Termination) -> None:
        if self.halted:
            return
        self.halted = True
        self._termination = termination
        logger.info(
            "Halted (%s) after %d step(s): %r", termination.value, self.step_count, self.context
        )

    def _find_rule(self) -> Optional[Rule]:
        """Return the first rule, in order, whose pattern occurs in the context."""
        for rule in self.ruleset.get_statements():
            if rule.matches(self.context):
                return rule
        return None

    def has_applicable_rule(self) -> bool:
        """True if the next step would apply a rule."""
        return not self.halted and self._find_rule() is not None

    def step(self) -> Optional[Rule]:
        """Apply a single rule.

        Returns:
            The rule that was applied, or None if no rule was applicable
            (natural termination) or the runner had already halted.
        """
        if self.halted:
            return None

        if not self._history:
            self._history.append(Step(context=self.context))

        rule = self._find_rule()
        if rule is None:
            self._stalled = False
            self._halt(Termination.NATURAL)
            return None

        previous = self.context
        self.context = rule.apply(previous)
        self._history.append(Step(context=self.context, rule=rule))
        logger.debug("Step %d: %s => %r", self.step_count, rule, self.context)

        if rule.terminating:
            self._stalled = False
            self._halt(Termination.EXPLICIT)
        else:
            self._stalled = self.context == previous
            if self._stalled:
                logger.warning("No progress: '%s' leaves %r unchanged", rule, self.context)

        return rule

    def run(self) -> bool:
        """Step until halted.

        There is no step limit: an algorithm that rewrites forever never
        returns. Use :func:`drive` for bounded execution.

        Returns:
            False if the runner had already halted, True otherwise.
        """
        if self.halted:
            return False

        while not self.halted:
            self.step()

        return True

    def stop(self) -> None:
        """Halt the runner. Calling it again has no effect."""
        self._halt(Termination.STOPPED)

    def result(self) -> RunResult:
        """Snapshot the run as a serializable result."""
        return RunResult(
            initial=self._initial,
            context=self.context,
            steps=[step.to_record() for step in self._history],
            termination=self._termination,
            stalled=self._stalled,
        )


def drive(
    runner: Runner,
    max_steps: Optional[int] = None,
    stop_on_stall: Optional[bool] = None,
) -> RunResult:
    """Step a runner under a step budget.

    Args:
        runner: The runner to drive
        max_steps: Maximum number of rules to apply (default from settings)
        stop_on_stall: Stop as soon as a step makes no progress (default from settings)

    Returns:
        The run result; a runner stopped by the budget or a stall reports
        ``Termination.STOPPED``.
    """
    settings = get_settings().runner
    limit = settings.max_steps if max_steps is None else max_steps
    halt_on_stall = settings.stop_on_stall if stop_on_stall is None else stop_on_stall

    if limit < 1:
        raise InvalidArgument(f"max_steps must be at least 1, got {limit}")

    while not runner.halted:
        # A step that applies no rule is free: it lets the run halt naturally
        if runner.step_count >= limit and runner.has_applicable_rule():
            logger.warning("Step budget of %d exhausted, stopping", limit)
            runner.stop()
            break

        runner.step()

        if halt_on_stall and runner.stalled:
            runner.stop()

    return runner.result()

"""Models describing a Markov algorithm run."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class Termination(Enum):
    """How a runner came to halt."""

    NATURAL = "natural"  # No rule applied
    EXPLICIT = "explicit"  # A terminating rule applied
    STOPPED = "stopped"  # Halted from outside (stop() or a step budget)


class StepRecord(BaseModel):
    """One history entry: the context after a step and the rule that produced it."""

    context: str = Field(description="Context after the step")
    rule: Optional[str] = Field(default=None, description="Applied rule in statement form, if any")
    terminating: bool = Field(default=False, description="True if the applied rule is terminating")


class RunResult(BaseModel):
    """Result of driving a runner."""

    initial: str = Field(description="Context the run started from")
    context: str = Field(description="Context when the run halted")
    steps: list[StepRecord] = Field(default_factory=list, description="Full step history")
    termination: Optional[Termination] = Field(
        default=None, description="How the run halted, None if it is still running"
    )
    stalled: bool = Field(default=False, description="True if the last step made no progress")

    @property
    def step_count(self) -> int:
        """Number of rules applied (the initial entry is not a step)."""
        return max(len(self.steps) - 1, 0)

    @property
    def halted(self) -> bool:
        """True if the run reached a halted state."""
        return self.termination is not None

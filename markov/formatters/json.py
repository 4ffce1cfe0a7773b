"""JSON formatter for Markov run results."""

import json
from typing import Any

from markov.models.run import RunResult, StepRecord


def _step_to_dict(index: int, step: StepRecord) -> dict[str, Any]:
    """Convert a StepRecord to a dictionary."""
    return {
        "step": index,
        "context": step.context,
        "rule": step.rule,
        "terminating": step.terminating,
    }


def format_as_json(result: RunResult, *, pretty: bool = True) -> str:
    """Format a run result as JSON.

    Args:
        result: The run result to format
        pretty: If True, format with indentation for readability

    Returns:
        JSON-formatted string
    """
    data = {
        "initial": result.initial,
        "context": result.context,
        "halted": result.halted,
        "termination": result.termination.value if result.termination else None,
        "stalled": result.stalled,
        "step_count": result.step_count,
        "steps": [_step_to_dict(i, step) for i, step in enumerate(result.steps)],
    }

    if pretty:
        return json.dumps(data, indent=2, ensure_ascii=False)
    return json.dumps(data, ensure_ascii=False)

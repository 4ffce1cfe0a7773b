"""Output formatters for Markov run results."""

from markov.formatters.json import format_as_json

__all__ = ["format_as_json"]

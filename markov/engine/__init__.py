"""Execution engine for Markov algorithms."""

from .runner import Runner, Step, drive

__all__ = ["Runner", "Step", "drive"]

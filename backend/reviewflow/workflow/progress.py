"""
Progress normalisation shared by every workflow.

Transports report raw ``(loaded, total)`` byte counts through the
``ProgressEmitter`` interface; ``ProgressTracker`` turns them into a
clamped integer percentage.
"""

from __future__ import annotations

import math
from typing import Protocol, runtime_checkable


@runtime_checkable
class ProgressEmitter(Protocol):
    """Narrow interface the network layer calls while a phase transfers data."""

    def emit(self, phase: str, loaded: int, total: int) -> None:
        ...


class ProgressTracker:
    """Convert raw transfer signals into a 0–100 percentage."""

    def report(self, phase: str, loaded: int, total: int) -> int:
        if total <= 0 or loaded <= 0:
            return 0
        # Half-up rounding, not Python's banker's rounding.
        percent = math.floor(loaded * 100 / total + 0.5)
        return max(0, min(100, percent))

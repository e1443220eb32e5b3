"""Match decision policy."""

from .engine import DecisionPolicy, decide_match

__all__ = ["DecisionPolicy", "decide_match"]

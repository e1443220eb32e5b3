"""Match decision policy applied to successful evaluations."""

from __future__ import annotations

from typing import Optional

from ..config import ClientConfig


def decide_match(matched: bool, confidence: float, fidelity: float, config: ClientConfig) -> bool:
    """Resolve the final match flag; passive validation wins over thresholds."""
    if config.passive_validation:
        return True
    if config.custom_threshold:
        return confidence >= config.threshold_confidence and fidelity >= config.threshold_fidelity
    return matched


class DecisionPolicy:
    """Evaluate match decisions against one configuration snapshot."""

    def __init__(self, config: Optional[ClientConfig] = None) -> None:
        self.config = config or ClientConfig()

    def evaluate(self, *, matched: bool, confidence: float, fidelity: float) -> bool:
        return decide_match(matched, confidence, fidelity, self.config)

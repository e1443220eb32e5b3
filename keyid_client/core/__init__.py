"""Workflow orchestration and tracing for the KeyID client."""

from .context import WorkflowContext
from .tracer import Tracer
from .types import EvaluationResult
from .orchestrator import ENROLLABLE_KINDS, ProfileOrchestrator

__all__ = ["WorkflowContext", "Tracer", "EvaluationResult", "ENROLLABLE_KINDS", "ProfileOrchestrator"]

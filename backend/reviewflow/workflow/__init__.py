"""
Workflow engine: phase-based job orchestration.

This package provides the single-flight engine that drives a job through
an ordered sequence of phases, with progress normalisation, per-phase
logging, error mapping and an explicit state record.
"""

from reviewflow.workflow.engine import ErrorReporter, StructlogErrorReporter, WorkflowEngine
from reviewflow.workflow.error_channel import ErrorChannel
from reviewflow.workflow.phase import WorkflowPhase
from reviewflow.workflow.progress import ProgressEmitter, ProgressTracker
from reviewflow.workflow.state import Outcome, PhaseResult, ProgressState, WorkflowState

__all__ = [
    "WorkflowEngine",
    "WorkflowPhase",
    "WorkflowState",
    "ProgressState",
    "PhaseResult",
    "Outcome",
    "ProgressTracker",
    "ProgressEmitter",
    "ErrorChannel",
    "ErrorReporter",
    "StructlogErrorReporter",
]

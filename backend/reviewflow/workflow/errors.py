"""
Domain-specific exception hierarchy for the workflow engines.

All workflow exceptions inherit from WorkflowError so callers can
catch broadly or narrowly as needed.  Each exception carries structured
context (job ID, phase, etc.) for logging/debugging.

Only ExternalServiceError messages are ever shown to users; everything
else is replaced by a fixed fallback message at the phase boundary.
"""

from __future__ import annotations


class WorkflowError(Exception):
    """Base exception for all workflow errors."""

    def __init__(
        self,
        message: str,
        *,
        job_id: str | None = None,
        phase: str | None = None,
        details: dict | None = None,
    ) -> None:
        self.job_id = job_id
        self.phase = phase
        self.details = details or {}
        super().__init__(message)


class ValidationError(WorkflowError):
    """Input rejected by a collaborator before the state machine runs."""
    pass


class ExternalServiceError(WorkflowError):
    """Gateway, backend or AI service reported a failure."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        code: str | None = None,
        **kwargs,
    ) -> None:
        self.status_code = status_code
        self.code = code
        super().__init__(message, **kwargs)

    @property
    def user_message(self) -> str:
        """Message suitable for direct display (may be empty)."""
        return str(self)


class UnexpectedError(WorkflowError):
    """A collaborator answered with something we cannot interpret."""
    pass


class BusyError(WorkflowError):
    """start/submit called while a job is already in flight."""
    pass


class InvalidTransitionError(WorkflowError):
    """Illegal state-machine transition or identity re-assignment."""
    pass

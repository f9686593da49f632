"""
WorkflowPhase: abstract base class for every phase of a job.

The engine calls execute() in order and records timing, logging and
errors automatically.  Phases only implement the external call and
write what they learn onto the job record.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Any, Generic, TypeVar

from reviewflow.core.constants import PhaseStatus
from reviewflow.workflow.progress import ProgressEmitter
from reviewflow.workflow.state import PhaseResult

JobT = TypeVar("JobT")


class WorkflowPhase(ABC, Generic[JobT]):
    """
    Base class for every workflow phase.

    Subclasses MUST implement:
        - name (str): phase identifier, e.g. PaymentPhase.TOKENIZE
        - description (str): human-readable label for logs
        - execute(job, emitter)

    Subclasses MAY set:
        - failure_message: fixed user-facing text for ANY failure of
          this phase (overrides service messages)
    """

    name: str = "unnamed_phase"
    description: str = "No description"
    failure_message: str | None = None

    @abstractmethod
    async def execute(self, job: JobT, emitter: ProgressEmitter) -> PhaseResult:
        """
        Run the phase.  Must return a PhaseResult.

        Raise ExternalServiceError when the remote side reports a failure;
        any other exception is treated as unexpected.
        """
        ...

    # ─── Helpers available to all phases ───────────────

    def _success(
        self,
        started_at: datetime,
        metadata: dict[str, Any] | None = None,
    ) -> PhaseResult:
        """Build a successful PhaseResult with timing."""
        now = self._now()
        return PhaseResult(
            phase=self.name,
            status=PhaseStatus.COMPLETED,
            started_at=started_at,
            completed_at=now,
            duration_ms=int((now - started_at).total_seconds() * 1000),
            metadata=metadata or {},
        )

    def _now(self) -> datetime:
        """UTC-aware now."""
        return datetime.now(timezone.utc)

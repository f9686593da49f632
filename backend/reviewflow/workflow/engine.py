"""
WorkflowEngine: the orchestrator shared by every job type.

Responsibilities:
    - Single-flight guard: one job per engine instance
    - Execute phases strictly in order, no automatic retries
    - Normalise progress emitted by the transport layer
    - Map phase failures to user-facing messages in the ErrorChannel
    - Report unexpected exceptions to the ErrorReporter only
    - Return a tagged Outcome
"""

from __future__ import annotations

import asyncio
from abc import ABC
from datetime import datetime, timezone
from typing import Any, Generic, Protocol

import structlog

from reviewflow.core.constants import PhaseStatus, WorkflowStatus
from reviewflow.core.logging import get_logger
from reviewflow.workflow.error_channel import ErrorChannel
from reviewflow.workflow.errors import ExternalServiceError
from reviewflow.workflow.phase import JobT, WorkflowPhase
from reviewflow.workflow.progress import ProgressTracker
from reviewflow.workflow.state import Outcome, PhaseResult, WorkflowState


class ErrorReporter(Protocol):
    """External sink for errors that must not be shown to the user."""

    def report(self, exc: BaseException, **context: Any) -> None:
        ...


class StructlogErrorReporter:
    """Default reporter: log the exception with its traceback."""

    def __init__(self, logger: structlog.BoundLogger | None = None) -> None:
        self._logger = logger or get_logger("workflow.errors")

    def report(self, exc: BaseException, **context: Any) -> None:
        self._logger.error(
            "Unexpected workflow error",
            error_type=type(exc).__name__,
            exc_info=exc,
            **context,
        )


class WorkflowEngine(ABC, Generic[JobT]):
    """
    Runs an ordered list of WorkflowPhase objects against a job record.

    Subclasses set ``workflow_name``, the two fallback messages and
    ``self.phases``, and expose their own ``start``/``submit`` entry point
    which must reject a busy engine (``_reject_if_busy()`` or a stricter
    check) and then ``await self._run(job, job_id)`` with no ``await`` in
    between.  That check-then-enter sequence is the
    only concurrency guard: the event loop cannot interleave another
    caller between them.
    """

    workflow_name: str = "workflow"
    # ExternalServiceError that carries no text of its own
    failure_message: str = "An error occurred"
    # Anything that is not an ExternalServiceError
    fallback_message: str = "An unexpected error occurred"

    def __init__(
        self,
        *,
        tracker: ProgressTracker | None = None,
        errors: ErrorChannel | None = None,
        error_reporter: ErrorReporter | None = None,
    ) -> None:
        self.state = WorkflowState()
        self.tracker = tracker or ProgressTracker()
        self.errors = errors or ErrorChannel()
        self.error_reporter = error_reporter or StructlogErrorReporter()
        self.logger = get_logger(f"workflow.{self.workflow_name}")
        self.phases: list[WorkflowPhase[JobT]] = []
        self.job: JobT | None = None

    @property
    def status(self) -> WorkflowStatus:
        return self.state.status

    # ─── Lifecycle ─────────────────────────────────────

    def reset(self) -> None:
        """Back to IDLE after a terminal state.  Raises while RUNNING."""
        self.state.reset()
        self.errors.clear()
        self.job = None
        self.logger.info("Workflow reset")

    def close(self) -> None:
        """Component teardown."""
        self.errors.close()

    # ─── Progress (ProgressEmitter) ────────────────────

    def emit(self, phase: str, loaded: int, total: int) -> None:
        if not self.state.is_running or self.state.phase != phase:
            self.logger.debug(
                "Ignoring progress for inactive phase",
                phase=phase,
                current_phase=self.state.phase,
            )
            return
        percent = self._adjust_progress(phase, self.tracker.report(phase, loaded, total))
        self.state.progress.advance(percent)
        self._on_progress(phase, self.state.progress.percent)

    # ─── Execution ─────────────────────────────────────

    def _reject_if_busy(self) -> Outcome | None:
        if self.state.is_running:
            self.logger.warning(
                "Rejected: job already in flight",
                job_id=self.state.job_id,
                phase=self.state.phase,
            )
            return Outcome.busy()
        return None

    async def _run(self, job: JobT, job_id: str) -> Outcome:
        self.job = job
        total = len(self.phases)
        log = self.logger.bind(workflow=self.workflow_name, job_id=job_id, total_phases=total)
        started_at = datetime.now(timezone.utc)

        for index, phase in enumerate(self.phases, start=1):
            self.state.enter_phase(phase.name, job_id=job_id)
            self._on_transition(job)
            phase_log = log.bind(phase=phase.name, phase_index=index)
            phase_log.info(f"Phase {index}/{total}: {phase.description}")
            phase_started = datetime.now(timezone.utc)

            try:
                result = await phase.execute(job, self)

            except ExternalServiceError as exc:
                message = phase.failure_message or exc.user_message or self.failure_message
                phase_log.warning(
                    "Phase failed, workflow stopping",
                    error=str(exc),
                    status_code=exc.status_code,
                    code=exc.code,
                )
                return self._fail(job, phase, phase_started, message, type(exc).__name__)

            except asyncio.CancelledError:
                phase_log.warning("Phase cancelled, workflow stopping")
                self._fail(job, phase, phase_started, self.fallback_message, "CancelledError")
                raise

            except Exception as exc:
                self.error_reporter.report(
                    exc,
                    workflow=self.workflow_name,
                    job_id=job_id,
                    phase=phase.name,
                )
                message = phase.failure_message or self.fallback_message
                return self._fail(job, phase, phase_started, message, type(exc).__name__)

            self.state.add_phase_result(result)
            self._on_phase_completed(job, phase.name)
            phase_log.info(
                "Phase completed",
                duration_ms=result.duration_ms,
                metadata=result.metadata,
            )

        self.state.succeed()
        self._on_transition(job)
        self.errors.clear()
        log.info(
            "Workflow succeeded",
            duration_ms=int((datetime.now(timezone.utc) - started_at).total_seconds() * 1000),
        )
        return Outcome.succeeded(self._result_data(job))

    def _fail(
        self,
        job: JobT,
        phase: WorkflowPhase[JobT],
        started_at: datetime,
        message: str,
        error_type: str,
    ) -> Outcome:
        now = datetime.now(timezone.utc)
        self.state.add_phase_result(PhaseResult(
            phase=phase.name,
            status=PhaseStatus.FAILED,
            started_at=started_at,
            completed_at=now,
            duration_ms=int((now - started_at).total_seconds() * 1000),
            error=message,
            metadata={"error_type": error_type},
        ))
        self.state.fail(message)
        self._on_transition(job)
        self._publish_error(message)
        return Outcome.failed(message)

    # ─── Hooks ─────────────────────────────────────────

    def _adjust_progress(self, phase: str, percent: int) -> int:
        return percent

    def _on_progress(self, phase: str, percent: int) -> None:
        pass

    def _on_transition(self, job: JobT) -> None:
        pass

    def _on_phase_completed(self, job: JobT, phase: str) -> None:
        pass

    def _publish_error(self, message: str) -> None:
        self.errors.set(message)

    def _result_data(self, job: JobT) -> Any:
        return None

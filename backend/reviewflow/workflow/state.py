"""
WorkflowState: explicit state object owned by one engine instance.

This is the single source of truth for a workflow's lifecycle.  It is
mutated only through the transition methods below; every transition is
appended to ``transitions`` so the full status sequence of a job can be
inspected afterwards.

    IDLE ──enter_phase──▶ RUNNING(phase) ──enter_phase──▶ RUNNING(next)
                              │
                              ├──succeed──▶ SUCCEEDED ──reset──▶ IDLE
                              └──fail─────▶ FAILED ─────reset──▶ IDLE
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from reviewflow.core.constants import OutcomeKind, WorkflowStatus
from reviewflow.workflow.errors import InvalidTransitionError

TERMINAL_STATUSES = frozenset({WorkflowStatus.SUCCEEDED, WorkflowStatus.FAILED})


# ═══════════════════════════════════════════════════════════
#  ProgressState
# ═══════════════════════════════════════════════════════════

@dataclass
class ProgressState:
    """Percentage of one phase.  Never decreases until ``begin()``."""

    phase: str | None = None
    percent: int = 0

    def begin(self, phase: str) -> None:
        self.phase = phase
        self.percent = 0

    def advance(self, percent: int) -> int:
        percent = max(0, min(100, percent))
        if percent > self.percent:
            self.percent = percent
        return self.percent

    def to_dict(self) -> dict[str, Any]:
        return {"phase": self.phase, "percent": self.percent}


# ═══════════════════════════════════════════════════════════
#  PhaseResult
# ═══════════════════════════════════════════════════════════

@dataclass
class PhaseResult:
    """Outcome of a single phase execution."""

    phase: str
    status: str                     # PhaseStatus value
    started_at: datetime | None = None
    completed_at: datetime | None = None
    duration_ms: int = 0
    error: str | None = None
    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "phase": self.phase,
            "status": self.status,
            "started_at": self.started_at.isoformat() if self.started_at else None,
            "completed_at": self.completed_at.isoformat() if self.completed_at else None,
            "duration_ms": self.duration_ms,
            "error": self.error,
            "metadata": self.metadata,
        }


# ═══════════════════════════════════════════════════════════
#  Outcome
# ═══════════════════════════════════════════════════════════

@dataclass(frozen=True)
class Outcome:
    """Tagged result of ``start``/``submit``."""

    kind: OutcomeKind
    data: Any = None
    error: str | None = None

    @classmethod
    def succeeded(cls, data: Any = None) -> Outcome:
        return cls(kind=OutcomeKind.SUCCEEDED, data=data)

    @classmethod
    def failed(cls, error: str) -> Outcome:
        return cls(kind=OutcomeKind.FAILED, error=error)

    @classmethod
    def busy(cls) -> Outcome:
        return cls(kind=OutcomeKind.BUSY, error="A job is already in progress")

    @classmethod
    def invalid(cls, error: str) -> Outcome:
        return cls(kind=OutcomeKind.INVALID, error=error)

    @property
    def ok(self) -> bool:
        return self.kind == OutcomeKind.SUCCEEDED

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind, "data": self.data, "error": self.error}


# ═══════════════════════════════════════════════════════════
#  WorkflowState
# ═══════════════════════════════════════════════════════════

@dataclass
class WorkflowState:
    status: WorkflowStatus = WorkflowStatus.IDLE
    phase: str | None = None
    progress: ProgressState = field(default_factory=ProgressState)
    error: str | None = None
    job_id: str | None = None
    transitions: list[tuple[WorkflowStatus, str | None]] = field(
        default_factory=lambda: [(WorkflowStatus.IDLE, None)]
    )
    phase_results: list[PhaseResult] = field(default_factory=list)

    @property
    def is_running(self) -> bool:
        return self.status == WorkflowStatus.RUNNING

    @property
    def is_terminal(self) -> bool:
        return self.status in TERMINAL_STATUSES

    # ─── Transitions ───────────────────────────────────

    def enter_phase(self, phase: str, *, job_id: str | None = None) -> None:
        """IDLE → RUNNING(phase), or RUNNING(a) → RUNNING(b)."""
        if self.status == WorkflowStatus.IDLE:
            self.job_id = job_id
            self.error = None
            self.phase_results = []
        elif self.status != WorkflowStatus.RUNNING:
            raise InvalidTransitionError(
                f"Cannot enter phase {phase} from {self.status}",
                job_id=self.job_id,
                phase=phase,
            )
        self.status = WorkflowStatus.RUNNING
        self.phase = phase
        self.progress.begin(phase)
        self._record()

    def succeed(self) -> None:
        self._require_running("succeed")
        self.status = WorkflowStatus.SUCCEEDED
        self.error = None
        self._record()

    def fail(self, message: str) -> None:
        self._require_running("fail")
        self.status = WorkflowStatus.FAILED
        self.error = message
        self._record()

    def reset(self) -> None:
        """Terminal → IDLE.  No-op when already idle."""
        if self.status == WorkflowStatus.RUNNING:
            raise InvalidTransitionError(
                "Cannot reset while a job is running",
                job_id=self.job_id,
                phase=self.phase,
            )
        if self.status == WorkflowStatus.IDLE:
            return
        self.status = WorkflowStatus.IDLE
        self.phase = None
        self.progress = ProgressState()
        self.error = None
        self.job_id = None
        self.phase_results = []
        self.transitions = [(WorkflowStatus.IDLE, None)]

    # ─── Helpers ───────────────────────────────────────

    def add_phase_result(self, result: PhaseResult) -> None:
        self.phase_results.append(result)

    def snapshot(self) -> dict[str, Any]:
        """JSON-ready view for status endpoints and logs."""
        return {
            "status": self.status,
            "phase": self.phase,
            "progress": self.progress.to_dict(),
            "error": self.error,
            "job_id": self.job_id,
            "phases": [r.to_dict() for r in self.phase_results],
        }

    def _record(self) -> None:
        self.transitions.append((self.status, self.phase if self.is_running else None))

    def _require_running(self, action: str) -> None:
        if self.status != WorkflowStatus.RUNNING:
            raise InvalidTransitionError(
                f"Cannot {action} from {self.status}",
                job_id=self.job_id,
                phase=self.phase,
            )

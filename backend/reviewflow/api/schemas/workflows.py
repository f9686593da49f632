"""Workflow request/response schemas."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from reviewflow.core.constants import OutcomeKind, WorkflowStatus
from reviewflow.payments.engine import PaymentWorkflowEngine
from reviewflow.uploads.pipeline import UploadPipeline
from reviewflow.workflow.engine import WorkflowEngine
from reviewflow.workflow.state import Outcome


class PaymentStartRequest(BaseModel):
    """Request payload for starting a payment."""

    email: str = Field(..., min_length=3, max_length=320)
    name: str = Field(..., min_length=1, max_length=200)
    card_token: str | None = Field(None, min_length=1, max_length=255)


class ProgressResponse(BaseModel):
    phase: str | None
    percent: int = Field(..., ge=0, le=100)


class OutcomeResponse(BaseModel):
    """Result of a finished job (succeeded or failed)."""

    kind: OutcomeKind
    data: Any = None
    error: str | None = None

    @classmethod
    def from_outcome(cls, outcome: Outcome) -> OutcomeResponse:
        return cls(**outcome.to_dict())


class WorkflowStatusResponse(BaseModel):
    """Current state of one engine, for polling clients."""

    status: WorkflowStatus
    phase: str | None
    progress: ProgressResponse
    job_id: str | None
    message: str | None = Field(None, description="Current user-facing error message")

    @classmethod
    def from_engine(cls, engine: WorkflowEngine) -> WorkflowStatusResponse:
        snapshot = engine.state.snapshot()
        return cls(
            status=snapshot["status"],
            phase=snapshot["phase"],
            progress=ProgressResponse(**snapshot["progress"]),
            job_id=snapshot["job_id"],
            message=engine.errors.current(),
        )


class PaymentStatusResponse(WorkflowStatusResponse):
    payment_method_id: str | None = None

    @classmethod
    def from_payment_engine(cls, engine: PaymentWorkflowEngine) -> PaymentStatusResponse:
        base = WorkflowStatusResponse.from_engine(engine)
        job = engine.job
        return cls(
            **base.model_dump(),
            payment_method_id=job.payment_method_id if job else None,
        )


class UploadStatusResponse(WorkflowStatusResponse):
    upload_progress: int = Field(0, ge=0, le=100)
    processing_progress: int = Field(0, ge=0, le=100)
    feedback: str | None = None

    @classmethod
    def from_pipeline(cls, pipeline: UploadPipeline) -> UploadStatusResponse:
        base = WorkflowStatusResponse.from_engine(pipeline)
        job = pipeline.job
        return cls(
            **base.model_dump(),
            upload_progress=job.upload_progress.percent if job else 0,
            processing_progress=job.processing_progress.percent if job else 0,
            feedback=job.feedback if job else None,
        )

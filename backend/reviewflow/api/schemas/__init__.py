"""API schema package."""

from reviewflow.api.schemas.workflows import (
    OutcomeResponse,
    PaymentStartRequest,
    PaymentStatusResponse,
    ProgressResponse,
    UploadStatusResponse,
    WorkflowStatusResponse,
)

__all__ = [
    "PaymentStartRequest",
    "ProgressResponse",
    "OutcomeResponse",
    "WorkflowStatusResponse",
    "PaymentStatusResponse",
    "UploadStatusResponse",
]

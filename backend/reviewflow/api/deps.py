"""Shared dependencies for API routes."""

from __future__ import annotations

from fastapi import Request

from reviewflow.core.constants import OutcomeKind
from reviewflow.payments.engine import PaymentWorkflowEngine
from reviewflow.uploads.pipeline import UploadPipeline
from reviewflow.workflow.errors import BusyError, ValidationError
from reviewflow.workflow.state import Outcome


def get_payment_engine(request: Request) -> PaymentWorkflowEngine:
    """The application's single payment engine (built in the lifespan hook)."""
    return request.app.state.payment_engine


def get_upload_pipeline(request: Request) -> UploadPipeline:
    """The application's single upload pipeline (built in the lifespan hook)."""
    return request.app.state.upload_pipeline


def raise_for_rejection(outcome: Outcome) -> None:
    """Turn Busy / Invalid outcomes into exceptions the app maps to 409 / 422."""
    if outcome.kind == OutcomeKind.BUSY:
        raise BusyError(outcome.error or "A job is already in progress")
    if outcome.kind == OutcomeKind.INVALID:
        raise ValidationError(outcome.error or "Invalid input")

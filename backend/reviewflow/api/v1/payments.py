"""
Payment endpoints: start, poll, reset.
"""

from fastapi import APIRouter, Depends

from reviewflow.api.deps import get_payment_engine, raise_for_rejection
from reviewflow.api.schemas import OutcomeResponse, PaymentStartRequest, PaymentStatusResponse
from reviewflow.payments.engine import PaymentWorkflowEngine
from reviewflow.payments.models import CardRef, PaymentDetails
from reviewflow.utils.formatters import sanitize_input
from reviewflow.utils.validators import validate_email, validate_name
from reviewflow.workflow.errors import ValidationError

router = APIRouter(prefix="/payments", tags=["Payments"])


@router.post("", response_model=OutcomeResponse)
async def start_payment(
    payload: PaymentStartRequest,
    engine: PaymentWorkflowEngine = Depends(get_payment_engine),
) -> OutcomeResponse:
    """
    Run a payment to completion.

    Returns the outcome (SUCCEEDED or FAILED).  409 while another payment
    is in progress or before the previous one was reset; 422 on invalid
    contact details or a missing card token.
    """
    email = sanitize_input(payload.email, "email")
    name = sanitize_input(payload.name)
    if not validate_email(email):
        raise ValidationError("Please enter a valid email address")
    if not validate_name(name):
        raise ValidationError("Please enter a valid name")

    card_ref = CardRef(token=payload.card_token) if payload.card_token else None
    outcome = await engine.start(PaymentDetails(email=email, name=name, card_ref=card_ref))
    raise_for_rejection(outcome)
    return OutcomeResponse.from_outcome(outcome)


@router.get("/status", response_model=PaymentStatusResponse)
async def payment_status(
    engine: PaymentWorkflowEngine = Depends(get_payment_engine),
) -> PaymentStatusResponse:
    return PaymentStatusResponse.from_payment_engine(engine)


@router.post("/reset", response_model=PaymentStatusResponse)
async def reset_payment(
    engine: PaymentWorkflowEngine = Depends(get_payment_engine),
) -> PaymentStatusResponse:
    """Return a finished engine to IDLE.  409 while a payment is running."""
    engine.reset()
    return PaymentStatusResponse.from_payment_engine(engine)

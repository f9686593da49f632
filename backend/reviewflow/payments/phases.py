"""
Payment phases, in execution order:

    1. TokenizePhase      card reference → payment_method_id   (gateway)
    2. CreateIntentPhase  payment_method_id → client_secret    (backend)
    3. ConfirmPhase       client_secret + payment_method_id    (gateway)
"""

from __future__ import annotations

from reviewflow.clients.backend import PaymentBackendClient
from reviewflow.clients.gateway import GatewayError, PaymentGateway
from reviewflow.core.constants import PaymentPhase
from reviewflow.payments.models import PaymentJob
from reviewflow.workflow.errors import ExternalServiceError, UnexpectedError
from reviewflow.workflow.phase import WorkflowPhase
from reviewflow.workflow.progress import ProgressEmitter
from reviewflow.workflow.state import PhaseResult


def _declined(error: GatewayError, job: PaymentJob, phase: str) -> ExternalServiceError:
    return ExternalServiceError(
        error.message,
        code=error.code,
        job_id=job.job_id,
        phase=phase,
        details={"decline_code": error.decline_code} if error.decline_code else None,
    )


class TokenizePhase(WorkflowPhase[PaymentJob]):
    """Exchange the opaque card reference for a gateway payment method."""

    name = PaymentPhase.TOKENIZE
    description = "Tokenize card details with the gateway"

    def __init__(self, gateway: PaymentGateway) -> None:
        self._gateway = gateway

    async def execute(self, job: PaymentJob, emitter: ProgressEmitter) -> PhaseResult:
        started_at = self._now()

        result = await self._gateway.create_payment_method(job.card_ref, job.contact)
        if result.error is not None:
            raise _declined(result.error, job, self.name)
        if not result.payment_method_id:
            raise UnexpectedError(
                "Gateway returned neither a payment method nor an error",
                job_id=job.job_id,
                phase=self.name,
            )

        job.assign_payment_method(result.payment_method_id)
        return self._success(started_at, metadata={
            "payment_method_id": job.payment_method_id,
        })


class CreateIntentPhase(WorkflowPhase[PaymentJob]):
    """Ask our backend for a payment intent bound to the payment method."""

    name = PaymentPhase.CREATE_INTENT
    description = "Create payment intent on the backend"

    def __init__(self, backend: PaymentBackendClient) -> None:
        self._backend = backend

    async def execute(self, job: PaymentJob, emitter: ProgressEmitter) -> PhaseResult:
        started_at = self._now()

        client_secret = await self._backend.create_payment_intent(job.payment_method_id)
        job.assign_client_secret(client_secret)

        return self._success(started_at)


class ConfirmPhase(WorkflowPhase[PaymentJob]):
    """Finalize the authorization with the gateway."""

    name = PaymentPhase.CONFIRM
    description = "Confirm card payment with the gateway"

    def __init__(self, gateway: PaymentGateway) -> None:
        self._gateway = gateway

    async def execute(self, job: PaymentJob, emitter: ProgressEmitter) -> PhaseResult:
        started_at = self._now()

        result = await self._gateway.confirm_card_payment(
            job.client_secret,
            payment_method=job.payment_method_id,
        )
        if result.error is not None:
            raise _declined(result.error, job, self.name)

        return self._success(started_at, metadata={"gateway_status": result.status})

"""
PaymentWorkflowEngine: tokenize, create intent, confirm.

Usage::

    engine = PaymentWorkflowEngine(gateway=gateway, backend=backend)
    outcome = await engine.start(PaymentDetails(
        email="a@b.com", name="Jo", card_ref=CardRef(token="tok_visa"),
    ))
    if outcome.kind == OutcomeKind.FAILED:
        show(engine.errors.current())

A finished engine must be ``reset()`` before the next ``start()``.
"""

from __future__ import annotations

from typing import Any

from reviewflow.clients.backend import PaymentBackendClient
from reviewflow.clients.gateway import PaymentGateway
from reviewflow.core.constants import (
    CARD_MISSING_MESSAGE,
    PAYMENT_FAILED_MESSAGE,
    PAYMENT_UNEXPECTED_MESSAGE,
    WorkflowStatus,
)
from reviewflow.payments.models import ContactInfo, PaymentDetails, PaymentJob
from reviewflow.payments.phases import ConfirmPhase, CreateIntentPhase, TokenizePhase
from reviewflow.workflow.engine import WorkflowEngine
from reviewflow.workflow.state import Outcome


class PaymentWorkflowEngine(WorkflowEngine[PaymentJob]):
    workflow_name = "payment"
    failure_message = PAYMENT_FAILED_MESSAGE
    fallback_message = PAYMENT_UNEXPECTED_MESSAGE

    def __init__(
        self,
        *,
        gateway: PaymentGateway,
        backend: PaymentBackendClient,
        **kwargs: Any,
    ) -> None:
        super().__init__(**kwargs)
        self.phases = [
            TokenizePhase(gateway),
            CreateIntentPhase(backend),
            ConfirmPhase(gateway),
        ]

    async def start(self, details: PaymentDetails) -> Outcome:
        """Run one payment.  Busy unless the engine is IDLE."""
        if self.state.status != WorkflowStatus.IDLE:
            self.logger.warning(
                "Rejected: payment engine not idle",
                status=self.state.status,
                job_id=self.state.job_id,
            )
            return Outcome.busy()

        if details.card_ref is None:
            self.errors.set(CARD_MISSING_MESSAGE)
            self.logger.info("Rejected: card reference missing")
            return Outcome.invalid(CARD_MISSING_MESSAGE)

        job = PaymentJob(
            contact=ContactInfo(email=details.email, name=details.name),
            card_ref=details.card_ref,
        )
        self.errors.clear()
        return await self._run(job, job.job_id)

    def _on_transition(self, job: PaymentJob) -> None:
        job.status = self.state.status

    def _result_data(self, job: PaymentJob) -> dict[str, Any]:
        return job.to_summary_dict()

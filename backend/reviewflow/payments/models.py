"""Payment job records."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from typing import Any

from reviewflow.core.constants import WorkflowStatus
from reviewflow.workflow.errors import InvalidTransitionError


@dataclass(frozen=True)
class ContactInfo:
    """Billing contact, already validated and sanitized by the caller."""

    email: str
    name: str

    def billing_details(self) -> dict[str, str]:
        return {"email": self.email, "name": self.name}


@dataclass(frozen=True)
class CardRef:
    """
    Opaque handle to card data collected by the gateway's own input
    element.  Only the token is ever forwarded; raw card numbers never
    reach this service.
    """

    token: str = field(repr=False)


@dataclass(frozen=True)
class PaymentDetails:
    """Input to ``PaymentWorkflowEngine.start``."""

    email: str
    name: str
    card_ref: CardRef | None


@dataclass
class PaymentJob:
    """
    One payment attempt, owned by a single engine instance.

    ``payment_method_id`` and ``client_secret`` are write-once: once a
    phase has produced them, later phases rely on them unchanged.
    """

    contact: ContactInfo
    card_ref: CardRef = field(repr=False)
    job_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    payment_method_id: str | None = None
    client_secret: str | None = field(default=None, repr=False)
    status: WorkflowStatus = WorkflowStatus.IDLE

    def assign_payment_method(self, payment_method_id: str) -> None:
        if self.payment_method_id is not None:
            raise InvalidTransitionError(
                "Payment method already assigned",
                job_id=self.job_id,
            )
        self.payment_method_id = payment_method_id

    def assign_client_secret(self, client_secret: str) -> None:
        if self.client_secret is not None:
            raise InvalidTransitionError(
                "Client secret already assigned",
                job_id=self.job_id,
            )
        self.client_secret = client_secret

    def to_summary_dict(self) -> dict[str, Any]:
        """Compact summary for logging / API responses.  No secrets."""
        return {
            "job_id": self.job_id,
            "email": self.contact.email,
            "payment_method_id": self.payment_method_id,
            "status": self.status,
        }

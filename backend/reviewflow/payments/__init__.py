"""Card payment workflow."""

from reviewflow.payments.engine import PaymentWorkflowEngine
from reviewflow.payments.models import CardRef, ContactInfo, PaymentDetails, PaymentJob

__all__ = ["PaymentWorkflowEngine", "PaymentJob", "PaymentDetails", "ContactInfo", "CardRef"]

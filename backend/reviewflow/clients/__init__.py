"""Outbound clients for the card gateway, payment backend and AI review service."""

from reviewflow.clients.backend import PaymentBackendClient
from reviewflow.clients.documents import DocumentServiceClient
from reviewflow.clients.gateway import (
    ConfirmationResult,
    GatewayError,
    HttpPaymentGateway,
    PaymentGateway,
    PaymentMethodResult,
)

__all__ = [
    "PaymentGateway",
    "HttpPaymentGateway",
    "GatewayError",
    "PaymentMethodResult",
    "ConfirmationResult",
    "PaymentBackendClient",
    "DocumentServiceClient",
]

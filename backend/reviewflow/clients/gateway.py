"""
Card gateway client.

Two calls are used by the payment workflow:

    create_payment_method(card_ref, billing_details)
        → PaymentMethodResult(payment_method_id=...) | PaymentMethodResult(error=...)

    confirm_card_payment(client_secret, payment_method=...)
        → ConfirmationResult(status=...) | ConfirmationResult(error=...)

Gateway-reported failures (declined card, authentication failure, ...)
come back as ``GatewayError`` values rather than exceptions so the
calling phase decides how to surface them.  Responses we cannot
interpret raise UnexpectedError.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

import httpx

from reviewflow.clients._http import DEFAULT_TIMEOUT, error_message, json_body
from reviewflow.core.logging import get_logger
from reviewflow.workflow.errors import UnexpectedError

if TYPE_CHECKING:
    from reviewflow.payments.models import CardRef, ContactInfo

logger = get_logger(__name__)


@dataclass(frozen=True)
class GatewayError:
    message: str
    code: str | None = None
    decline_code: str | None = None


@dataclass(frozen=True)
class PaymentMethodResult:
    payment_method_id: str | None = None
    error: GatewayError | None = None


@dataclass(frozen=True)
class ConfirmationResult:
    status: str | None = None
    error: GatewayError | None = None


@runtime_checkable
class PaymentGateway(Protocol):
    """Client-side gateway SDK calls used by the payment workflow."""

    async def create_payment_method(
        self,
        card_ref: CardRef,
        billing_details: ContactInfo,
    ) -> PaymentMethodResult:
        ...

    async def confirm_card_payment(
        self,
        client_secret: str,
        *,
        payment_method: str,
    ) -> ConfirmationResult:
        ...


class HttpPaymentGateway:
    """Gateway REST API over httpx, authenticated with the public key."""

    def __init__(
        self,
        http: httpx.AsyncClient,
        *,
        base_url: str,
        public_key: str,
        timeout: float | None = DEFAULT_TIMEOUT,
    ) -> None:
        self._http = http
        self._base_url = base_url.rstrip("/")
        self._public_key = public_key
        self._timeout = timeout

    async def create_payment_method(
        self,
        card_ref: CardRef,
        billing_details: ContactInfo,
    ) -> PaymentMethodResult:
        body = await self._post("/v1/payment_methods", {
            "type": "card",
            "card[token]": card_ref.token,
            "billing_details[email]": billing_details.email,
            "billing_details[name]": billing_details.name,
        })
        if "error" in body:
            return PaymentMethodResult(error=_gateway_error(body["error"]))

        payment_method_id = body.get("id")
        if not isinstance(payment_method_id, str) or not payment_method_id:
            raise UnexpectedError("Gateway response has no payment method id")
        return PaymentMethodResult(payment_method_id=payment_method_id)

    async def confirm_card_payment(
        self,
        client_secret: str,
        *,
        payment_method: str,
    ) -> ConfirmationResult:
        intent_id = client_secret.split("_secret_", 1)[0]
        body = await self._post(f"/v1/payment_intents/{intent_id}/confirm", {
            "client_secret": client_secret,
            "payment_method": payment_method,
        })
        if "error" in body:
            return ConfirmationResult(error=_gateway_error(body["error"]))
        return ConfirmationResult(status=body.get("status"))

    async def _post(self, path: str, data: dict[str, str]) -> dict[str, Any]:
        url = f"{self._base_url}{path}"
        logger.info("Gateway request", path=path)
        response = await self._http.post(
            url,
            data=data,
            headers={"Authorization": f"Bearer {self._public_key}"},
            timeout=self._timeout,
        )
        body = json_body(response)
        if body is None or (response.is_error and "error" not in body):
            raise UnexpectedError(
                f"Gateway returned an unreadable response ({response.status_code})",
                details={"status_code": response.status_code, "path": path},
            )
        return body


def _gateway_error(payload: Any) -> GatewayError:
    code = payload.get("code") if isinstance(payload, dict) else None
    decline_code = payload.get("decline_code") if isinstance(payload, dict) else None
    return GatewayError(
        message=error_message(payload),
        code=code,
        decline_code=decline_code,
    )

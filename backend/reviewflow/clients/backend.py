"""
Payment backend client: creates a payment intent for a tokenized card.

    POST /api/payment-intent  {"payment_method_id": "..."}
      → 200 {"client_secret": "..."}
      → 4xx/5xx {"error": {"message": "..."}}
"""

from __future__ import annotations

import httpx

from reviewflow.clients._http import DEFAULT_TIMEOUT, error_message, json_body
from reviewflow.core.logging import get_logger
from reviewflow.workflow.errors import ExternalServiceError, UnexpectedError

logger = get_logger(__name__)


class PaymentBackendClient:
    def __init__(
        self,
        http: httpx.AsyncClient,
        *,
        base_url: str,
        timeout: float | None = DEFAULT_TIMEOUT,
    ) -> None:
        self._http = http
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout

    async def create_payment_intent(self, payment_method_id: str) -> str:
        """Return the intent's client secret.  Raises ExternalServiceError on refusal."""
        response = await self._http.post(
            f"{self._base_url}/api/payment-intent",
            json={"payment_method_id": payment_method_id},
            timeout=self._timeout,
        )
        body = json_body(response)

        if body is not None and body.get("error"):
            raise ExternalServiceError(
                error_message(body["error"]),
                status_code=response.status_code,
            )
        if response.is_error:
            raise ExternalServiceError(
                "",
                status_code=response.status_code,
                details={"body": response.text[:500]},
            )
        if body is None:
            raise UnexpectedError(
                "Payment backend returned a non-JSON response",
                details={"status_code": response.status_code},
            )

        client_secret = body.get("client_secret")
        if not isinstance(client_secret, str) or not client_secret:
            raise UnexpectedError("Payment intent response has no client_secret")

        logger.info("Payment intent created", status_code=response.status_code)
        return client_secret

from __future__ import annotations

import asyncio
from typing import Any

from reviewflow.clients.gateway import ConfirmationResult, GatewayError, PaymentMethodResult
from reviewflow.payments.models import CardRef, ContactInfo
from reviewflow.uploads.models import DocumentFile


class FakeGateway:
    """Scripted gateway.  ``tokenize_gate`` holds tokenize until set."""

    def __init__(
        self,
        *,
        payment_method: PaymentMethodResult | None = None,
        confirmation: ConfirmationResult | None = None,
        tokenize_exc: Exception | None = None,
        tokenize_gate: asyncio.Event | None = None,
    ) -> None:
        self.payment_method = payment_method or PaymentMethodResult(payment_method_id="pm_123")
        self.confirmation = confirmation or ConfirmationResult(status="succeeded")
        self.tokenize_exc = tokenize_exc
        self.tokenize_gate = tokenize_gate
        self.create_calls: list[tuple[CardRef, ContactInfo]] = []
        self.confirm_calls: list[tuple[str, str]] = []

    @classmethod
    def declining(cls, message: str, code: str = "card_declined") -> FakeGateway:
        return cls(payment_method=PaymentMethodResult(error=GatewayError(message=message, code=code)))

    async def create_payment_method(
        self,
        card_ref: CardRef,
        billing_details: ContactInfo,
    ) -> PaymentMethodResult:
        self.create_calls.append((card_ref, billing_details))
        if self.tokenize_gate is not None:
            await self.tokenize_gate.wait()
        if self.tokenize_exc is not None:
            raise self.tokenize_exc
        return self.payment_method

    async def confirm_card_payment(
        self,
        client_secret: str,
        *,
        payment_method: str,
    ) -> ConfirmationResult:
        self.confirm_calls.append((client_secret, payment_method))
        return self.confirmation


class FakeBackend:
    def __init__(
        self,
        *,
        client_secret: str = "pi_1_secret_abc",
        exc: Exception | None = None,
    ) -> None:
        self.client_secret = client_secret
        self.exc = exc
        self.calls: list[str] = []

    async def create_payment_intent(self, payment_method_id: str) -> str:
        self.calls.append(payment_method_id)
        if self.exc is not None:
            raise self.exc
        return self.client_secret


class FakeDocuments:
    """
    Scripted document service.

    ``*_steps`` are (loaded, total) pairs reported before the call
    finishes; ``*_gate`` holds the call open until set.
    """

    def __init__(
        self,
        *,
        feedback: str = "Strong resume. Quantify your impact.",
        upload_steps: list[tuple[int, int]] | None = None,
        process_steps: list[tuple[int, int]] | None = None,
        upload_exc: Exception | None = None,
        process_exc: Exception | None = None,
        upload_gate: asyncio.Event | None = None,
        process_gate: asyncio.Event | None = None,
    ) -> None:
        self.feedback = feedback
        self.upload_steps = upload_steps if upload_steps is not None else [(50, 100), (100, 100)]
        self.process_steps = process_steps if process_steps is not None else [(100, 100)]
        self.upload_exc = upload_exc
        self.process_exc = process_exc
        self.upload_gate = upload_gate
        self.process_gate = process_gate
        self.upload_calls: list[DocumentFile] = []
        self.process_calls: list[DocumentFile] = []

    async def upload(self, document: DocumentFile, on_progress: Any = None) -> None:
        self.upload_calls.append(document)
        for loaded, total in self.upload_steps:
            on_progress(loaded, total)
            await asyncio.sleep(0)
        if self.upload_gate is not None:
            await self.upload_gate.wait()
        if self.upload_exc is not None:
            raise self.upload_exc

    async def process(self, document: DocumentFile, on_progress: Any = None) -> str:
        self.process_calls.append(document)
        for loaded, total in self.process_steps:
            on_progress(loaded, total)
            await asyncio.sleep(0)
        if self.process_gate is not None:
            await self.process_gate.wait()
        if self.process_exc is not None:
            raise self.process_exc
        return self.feedback


class RecordingReporter:
    def __init__(self) -> None:
        self.reports: list[tuple[BaseException, dict[str, Any]]] = []

    def report(self, exc: BaseException, **context: Any) -> None:
        self.reports.append((exc, context))


class RecordingLogger:
    def __init__(self) -> None:
        self.events: list[tuple[str, str, dict[str, Any]]] = []

    def error(self, message: str, **fields: Any) -> None:
        self.events.append(("error", message, fields))


def pdf(name: str = "resume.pdf", size: int = 2048) -> DocumentFile:
    return DocumentFile(filename=name, content=b"%" * size, content_type="application/pdf")

#!/usr/bin/env python3
"""
Demo script: run both workflows locally against canned HTTP responses.

No gateway, backend or AI service is needed; every outbound call is
answered by an httpx.MockTransport.

Usage:
    cd backend
    python -m scripts.demo_workflows
"""

import asyncio
import os
import sys

import httpx

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from reviewflow.core.config import Settings  # noqa: E402
from reviewflow.core.logging import setup_logging  # noqa: E402
from reviewflow.factory import build_payment_engine, build_upload_pipeline  # noqa: E402
from reviewflow.payments import CardRef, PaymentDetails  # noqa: E402
from reviewflow.uploads import DocumentFile  # noqa: E402

DEMO_SETTINGS = Settings(
    GATEWAY_BASE_URL="https://gateway.demo",
    GATEWAY_PUBLIC_KEY="pk_demo",
    BACKEND_BASE_URL="http://backend.demo",
    AI_SERVICE_BASE_URL="http://ai.demo",
    ERROR_AUTO_CLEAR_SECONDS=0.5,
)


def fake_services(request: httpx.Request) -> httpx.Response:
    path = request.url.path
    if path == "/v1/payment_methods":
        if b"tok_chargeDeclined" in request.content:
            return httpx.Response(402, json={"error": {
                "message": "Your card was declined.",
                "code": "card_declined",
            }})
        return httpx.Response(200, json={"id": "pm_demo"})
    if path == "/api/payment-intent":
        return httpx.Response(200, json={"client_secret": "pi_demo_secret_123"})
    if path.endswith("/confirm"):
        return httpx.Response(200, json={"id": "pi_demo", "status": "succeeded"})
    if path == "/api/upload":
        return httpx.Response(200, json={"ok": True})
    if path == "/api/process":
        return httpx.Response(200, json={"feedback": "Lead each bullet with a measurable result."})
    return httpx.Response(404)


async def run_payments(http: httpx.AsyncClient):
    """DEMO 1: a successful payment, then a declined card after reset."""
    print("\n" + "=" * 70)
    print("  DEMO 1: Payment workflow")
    print("=" * 70)

    engine = build_payment_engine(http, DEMO_SETTINGS)
    for token in ("tok_visa", "tok_chargeDeclined"):
        outcome = await engine.start(PaymentDetails(
            email="jo@example.com",
            name="Jo Smith",
            card_ref=CardRef(token=token),
        ))
        _print_run(engine, outcome)
        engine.reset()
    engine.close()


async def run_uploads(http: httpx.AsyncClient):
    """DEMO 2: a rejected file, then a reviewed resume."""
    print("\n" + "=" * 70)
    print("  DEMO 2: Resume upload + review")
    print("=" * 70)

    pipeline = build_upload_pipeline(http, DEMO_SETTINGS)
    for document in (
        DocumentFile(filename="notes.txt", content=b"plain text"),
        DocumentFile(filename="resume.pdf", content=b"%PDF-1.4" + b"0" * 200_000,
                     content_type="application/pdf"),
    ):
        outcome = await pipeline.submit(document)
        _print_run(pipeline, outcome)
        if pipeline.job is not None:
            print(f"    Upload progress    : {pipeline.job.upload_progress.percent}%")
            print(f"    Processing progress: {pipeline.job.processing_progress.percent}%")
    pipeline.close()


def _print_run(engine, outcome):
    print(f"\n  Outcome : {outcome.kind}")
    print(f"  Status  : {engine.status}")
    print(f"  Message : {engine.errors.current()}")
    if outcome.data:
        print(f"  Data    : {outcome.data}")
    print(f"  Transitions:")
    for status, phase in engine.state.transitions:
        print(f"    - {status}" + (f" ({phase})" if phase else ""))
    print(f"{'─' * 50}")


async def main():
    setup_logging("WARNING")     # quiet logs, show formatted output only

    async with httpx.AsyncClient(transport=httpx.MockTransport(fake_services)) as http:
        await run_payments(http)
        await run_uploads(http)

    print("\n✅ All demos completed.\n")


if __name__ == "__main__":
    asyncio.run(main())

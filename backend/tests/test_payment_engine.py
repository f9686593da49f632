import asyncio

import pytest

from reviewflow.clients.gateway import ConfirmationResult, GatewayError
from reviewflow.core.constants import (
    CARD_MISSING_MESSAGE,
    PAYMENT_FAILED_MESSAGE,
    PAYMENT_UNEXPECTED_MESSAGE,
    OutcomeKind,
    PaymentPhase,
    PhaseStatus,
    WorkflowStatus,
)
from reviewflow.payments import CardRef, ContactInfo, PaymentDetails, PaymentJob, PaymentWorkflowEngine
from reviewflow.workflow.errors import ExternalServiceError, InvalidTransitionError
from reviewflow.workflow.state import Outcome
from tests.fakes import FakeBackend, FakeGateway, RecordingReporter


def _details(card_ref: CardRef | None = CardRef(token="tok_visa")) -> PaymentDetails:
    return PaymentDetails(email="a@b.com", name="Jo", card_ref=card_ref)


def _engine(
    gateway: FakeGateway | None = None,
    backend: FakeBackend | None = None,
    reporter: RecordingReporter | None = None,
) -> PaymentWorkflowEngine:
    return PaymentWorkflowEngine(
        gateway=gateway or FakeGateway(),
        backend=backend or FakeBackend(),
        error_reporter=reporter or RecordingReporter(),
    )


def test_successful_payment_runs_all_phases_in_order() -> None:
    gateway = FakeGateway()
    backend = FakeBackend()
    engine = _engine(gateway, backend)

    outcome = asyncio.run(engine.start(_details()))

    assert outcome.kind == OutcomeKind.SUCCEEDED
    assert outcome.data["payment_method_id"] == "pm_123"
    assert engine.state.transitions == [
        (WorkflowStatus.IDLE, None),
        (WorkflowStatus.RUNNING, PaymentPhase.TOKENIZE),
        (WorkflowStatus.RUNNING, PaymentPhase.CREATE_INTENT),
        (WorkflowStatus.RUNNING, PaymentPhase.CONFIRM),
        (WorkflowStatus.SUCCEEDED, None),
    ]
    assert backend.calls == ["pm_123"]
    assert gateway.confirm_calls == [("pi_1_secret_abc", "pm_123")]
    assert engine.errors.current() is None
    assert engine.job.status == WorkflowStatus.SUCCEEDED
    assert [r.status for r in engine.state.phase_results] == [PhaseStatus.COMPLETED] * 3


def test_tokenize_forwards_card_reference_and_billing_details() -> None:
    gateway = FakeGateway()
    card = CardRef(token="tok_mastercard")

    asyncio.run(_engine(gateway).start(_details(card)))

    assert gateway.create_calls == [(card, ContactInfo(email="a@b.com", name="Jo"))]


def test_declined_card_stops_before_intent_and_confirm() -> None:
    gateway = FakeGateway.declining("Your card was declined.")
    backend = FakeBackend()
    engine = _engine(gateway, backend)

    outcome = asyncio.run(engine.start(_details()))

    assert outcome == Outcome.failed("Your card was declined.")
    assert engine.status == WorkflowStatus.FAILED
    assert engine.errors.current() == "Your card was declined."
    assert backend.calls == []
    assert gateway.confirm_calls == []
    assert engine.state.phase_results[-1].phase == PaymentPhase.TOKENIZE


def test_intent_failure_shows_backend_message_and_skips_confirm() -> None:
    gateway = FakeGateway()
    backend = FakeBackend(exc=ExternalServiceError("Amount must be at least $0.50", status_code=400))
    engine = _engine(gateway, backend)

    outcome = asyncio.run(engine.start(_details()))

    assert outcome.error == "Amount must be at least $0.50"
    assert engine.status == WorkflowStatus.FAILED
    assert gateway.confirm_calls == []


def test_service_error_without_message_uses_generic_text() -> None:
    engine = _engine(backend=FakeBackend(exc=ExternalServiceError("", status_code=502)))

    outcome = asyncio.run(engine.start(_details()))

    assert outcome.error == PAYMENT_FAILED_MESSAGE
    assert engine.errors.current() == PAYMENT_FAILED_MESSAGE


def test_confirm_failure_marks_payment_failed() -> None:
    gateway = FakeGateway(
        confirmation=ConfirmationResult(
            error=GatewayError(message="Your card has insufficient funds.", code="card_declined"),
        ),
    )
    engine = _engine(gateway)

    outcome = asyncio.run(engine.start(_details()))

    assert outcome.kind == OutcomeKind.FAILED
    assert engine.errors.current() == "Your card has insufficient funds."
    assert engine.state.transitions[-1] == (WorkflowStatus.FAILED, None)
    assert engine.state.phase == PaymentPhase.CONFIRM


def test_unexpected_error_is_reported_but_not_shown() -> None:
    reporter = RecordingReporter()
    boom = RuntimeError("connection string postgres://user:secret@db")
    engine = _engine(backend=FakeBackend(exc=boom), reporter=reporter)

    outcome = asyncio.run(engine.start(_details()))

    assert outcome.error == PAYMENT_UNEXPECTED_MESSAGE
    assert engine.errors.current() == PAYMENT_UNEXPECTED_MESSAGE
    assert "secret" not in (engine.errors.current() or "")
    assert len(reporter.reports) == 1
    exc, context = reporter.reports[0]
    assert exc is boom
    assert context["phase"] == PaymentPhase.CREATE_INTENT


def test_start_while_running_is_busy_and_makes_no_calls() -> None:
    gate = asyncio.Event()
    gateway = FakeGateway(tokenize_gate=gate)
    backend = FakeBackend()
    engine = _engine(gateway, backend)

    async def main() -> tuple[Outcome, Outcome]:
        first = asyncio.create_task(engine.start(_details()))
        await asyncio.sleep(0)
        assert engine.status == WorkflowStatus.RUNNING

        second = await engine.start(_details(CardRef(token="tok_other")))
        assert len(gateway.create_calls) == 1
        assert backend.calls == []

        gate.set()
        return await first, second

    first, second = asyncio.run(main())

    assert second.kind == OutcomeKind.BUSY
    assert first.kind == OutcomeKind.SUCCEEDED
    assert len(gateway.create_calls) == 1


def test_finished_engine_is_busy_until_reset() -> None:
    gateway = FakeGateway()
    engine = _engine(gateway)

    async def main() -> list[Outcome]:
        outcomes = [await engine.start(_details())]
        outcomes.append(await engine.start(_details()))
        engine.reset()
        outcomes.append(await engine.start(_details()))
        return outcomes

    first, rejected, retried = asyncio.run(main())

    assert first.ok
    assert rejected.kind == OutcomeKind.BUSY
    assert retried.ok
    assert len(gateway.create_calls) == 2


def test_reset_while_running_raises() -> None:
    gate = asyncio.Event()
    engine = _engine(FakeGateway(tokenize_gate=gate))

    async def main() -> None:
        task = asyncio.create_task(engine.start(_details()))
        await asyncio.sleep(0)
        with pytest.raises(InvalidTransitionError):
            engine.reset()
        gate.set()
        await task

    asyncio.run(main())

    assert engine.status == WorkflowStatus.SUCCEEDED


def test_reset_after_failure_clears_error_and_job() -> None:
    engine = _engine(FakeGateway.declining("Your card was declined."))
    asyncio.run(engine.start(_details()))

    engine.reset()

    assert engine.status == WorkflowStatus.IDLE
    assert engine.errors.current() is None
    assert engine.job is None


def test_missing_card_reference_is_rejected_without_network_calls() -> None:
    gateway = FakeGateway()
    engine = _engine(gateway)

    outcome = asyncio.run(engine.start(_details(card_ref=None)))

    assert outcome.kind == OutcomeKind.INVALID
    assert engine.errors.current() == CARD_MISSING_MESSAGE
    assert engine.status == WorkflowStatus.IDLE
    assert gateway.create_calls == []


def test_payment_identity_is_write_once() -> None:
    job = PaymentJob(contact=ContactInfo(email="a@b.com", name="Jo"), card_ref=CardRef(token="tok"))
    job.assign_payment_method("pm_1")
    job.assign_client_secret("pi_1_secret_x")

    with pytest.raises(InvalidTransitionError):
        job.assign_payment_method("pm_2")
    with pytest.raises(InvalidTransitionError):
        job.assign_client_secret("pi_2_secret_y")
    assert job.payment_method_id == "pm_1"


def test_card_token_and_secret_are_not_in_repr() -> None:
    job = PaymentJob(contact=ContactInfo(email="a@b.com", name="Jo"), card_ref=CardRef(token="tok_visa"))
    job.assign_client_secret("pi_1_secret_x")

    assert "tok_visa" not in repr(job)
    assert "secret" not in repr(job)
    assert "secret" not in str(job.to_summary_dict())


def test_valid_start_clears_earlier_missing_card_message() -> None:
    gate = asyncio.Event()
    engine = _engine(FakeGateway(tokenize_gate=gate))

    async def main() -> Outcome:
        rejected = await engine.start(_details(card_ref=None))
        assert rejected.kind == OutcomeKind.INVALID
        assert engine.errors.current() == CARD_MISSING_MESSAGE

        task = asyncio.create_task(engine.start(_details(CardRef(token="t"))))
        await asyncio.sleep(0)
        assert engine.status == WorkflowStatus.RUNNING
        assert engine.errors.current() is None
        gate.set()
        return await task

    assert asyncio.run(main()).ok

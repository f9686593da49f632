"""
UploadPipeline: upload a document, then have the AI service review it.

Differences from the payment workflow:
    - file type and size are checked before anything else; a rejected
      file never reaches the network
    - a finished pipeline accepts the next ``submit()`` directly
    - failure messages clear themselves after ``auto_clear_seconds``
    - processing progress stays below 100 until feedback has arrived
"""

from __future__ import annotations

from typing import Any, Callable, Sequence

from reviewflow.clients.documents import DocumentServiceClient
from reviewflow.core.constants import (
    ALLOWED_DOCUMENT_EXTENSIONS,
    ERROR_AUTO_CLEAR_SECONDS,
    FILE_TOO_LARGE_MESSAGE,
    INVALID_FILE_TYPE_MESSAGE,
    MAX_DOCUMENT_BYTES,
    UPLOAD_FAILED_MESSAGE,
    UploadPhase,
)
from reviewflow.uploads.models import DocumentFile, UploadJob
from reviewflow.uploads.phases import ProcessDocumentPhase, UploadDocumentPhase
from reviewflow.utils.validators import validate_file_size, validate_file_type
from reviewflow.workflow.engine import WorkflowEngine
from reviewflow.workflow.state import Outcome


class UploadPipeline(WorkflowEngine[UploadJob]):
    workflow_name = "upload"
    failure_message = UPLOAD_FAILED_MESSAGE
    fallback_message = UPLOAD_FAILED_MESSAGE

    def __init__(
        self,
        *,
        documents: DocumentServiceClient,
        on_feedback: Callable[[str], None] | None = None,
        allowed_extensions: Sequence[str] = ALLOWED_DOCUMENT_EXTENSIONS,
        max_bytes: int = MAX_DOCUMENT_BYTES,
        auto_clear_seconds: float = ERROR_AUTO_CLEAR_SECONDS,
        **kwargs: Any,
    ) -> None:
        super().__init__(**kwargs)
        self.phases = [
            UploadDocumentPhase(documents),
            ProcessDocumentPhase(documents),
        ]
        self._on_feedback = on_feedback
        self.allowed_extensions = tuple(allowed_extensions)
        self.max_bytes = max_bytes
        self.auto_clear_seconds = auto_clear_seconds

    async def submit(self, document: DocumentFile) -> Outcome:
        """Upload and review one document.  Busy while a job is running."""
        busy = self._reject_if_busy()
        if busy is not None:
            return busy

        message = self._validate(document)
        if message is not None:
            self.errors.set_with_auto_clear(message, self.auto_clear_seconds)
            self.logger.info(
                "Rejected: invalid document",
                filename=document.filename,
                size_bytes=document.size_bytes,
                reason=message,
            )
            return Outcome.invalid(message)

        if self.state.is_terminal:
            self.state.reset()
        self.errors.clear()

        job = UploadJob(file_ref=document)
        outcome = await self._run(job, job.job_id)

        if outcome.ok and self._on_feedback is not None:
            self._deliver_feedback(job)
        return outcome

    def _deliver_feedback(self, job: UploadJob) -> None:
        """A failing callback is reported; the job stays SUCCEEDED."""
        try:
            self._on_feedback(job.feedback)
        except Exception as exc:
            self.error_reporter.report(
                exc,
                workflow=self.workflow_name,
                job_id=job.job_id,
                callback="on_feedback",
            )

    def _validate(self, document: DocumentFile) -> str | None:
        if not validate_file_type(document.filename, self.allowed_extensions):
            return INVALID_FILE_TYPE_MESSAGE
        if not validate_file_size(document.size_bytes, self.max_bytes):
            return FILE_TOO_LARGE_MESSAGE
        return None

    # ─── Hooks ─────────────────────────────────────────

    def _adjust_progress(self, phase: str, percent: int) -> int:
        if phase == UploadPhase.PROCESS:
            return min(percent, 99)
        return percent

    def _on_progress(self, phase: str, percent: int) -> None:
        progress = self.job.progress_for(phase) if self.job else None
        if progress is not None:
            progress.advance(percent)

    def _on_phase_completed(self, job: UploadJob, phase: str) -> None:
        progress = job.progress_for(phase)
        if progress is not None:
            progress.advance(100)
        self.state.progress.advance(100)

    def _publish_error(self, message: str) -> None:
        self.errors.set_with_auto_clear(message, self.auto_clear_seconds)

    def _result_data(self, job: UploadJob) -> str | None:
        return job.feedback

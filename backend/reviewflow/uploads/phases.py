"""
Document review phases, in execution order:

    1. UploadDocumentPhase   file → storage endpoint
    2. ProcessDocumentPhase  file → AI service → feedback

Each phase has one fixed user-facing failure message regardless of
what went wrong underneath.
"""

from __future__ import annotations

from functools import partial

from reviewflow.clients.documents import DocumentServiceClient
from reviewflow.core.constants import (
    PROCESS_FAILED_MESSAGE,
    UPLOAD_FAILED_MESSAGE,
    UploadPhase,
)
from reviewflow.uploads.models import UploadJob
from reviewflow.workflow.phase import WorkflowPhase
from reviewflow.workflow.progress import ProgressEmitter
from reviewflow.workflow.state import PhaseResult


class UploadDocumentPhase(WorkflowPhase[UploadJob]):
    name = UploadPhase.UPLOAD
    description = "Upload document to storage"
    failure_message = UPLOAD_FAILED_MESSAGE

    def __init__(self, documents: DocumentServiceClient) -> None:
        self._documents = documents

    async def execute(self, job: UploadJob, emitter: ProgressEmitter) -> PhaseResult:
        started_at = self._now()
        await self._documents.upload(job.file_ref, partial(emitter.emit, self.name))
        return self._success(started_at, metadata={"size_bytes": job.size_bytes})


class ProcessDocumentPhase(WorkflowPhase[UploadJob]):
    name = UploadPhase.PROCESS
    description = "Request analysis from the AI service"
    failure_message = PROCESS_FAILED_MESSAGE

    def __init__(self, documents: DocumentServiceClient) -> None:
        self._documents = documents

    async def execute(self, job: UploadJob, emitter: ProgressEmitter) -> PhaseResult:
        started_at = self._now()
        job.feedback = await self._documents.process(
            job.file_ref,
            partial(emitter.emit, self.name),
        )
        return self._success(started_at, metadata={"feedback_chars": len(job.feedback)})

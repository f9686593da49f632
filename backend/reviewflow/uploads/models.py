"""Document review job records."""

from __future__ import annotations

import os
import uuid
from dataclasses import dataclass, field
from typing import Any

from reviewflow.core.constants import UploadPhase
from reviewflow.workflow.state import ProgressState


@dataclass(frozen=True)
class DocumentFile:
    """An in-memory document selected by the user."""

    filename: str
    content: bytes = field(repr=False)
    content_type: str | None = None

    @property
    def size_bytes(self) -> int:
        return len(self.content)

    @property
    def extension(self) -> str:
        return os.path.splitext(self.filename)[1].lstrip(".").lower()


@dataclass
class UploadJob:
    """
    One upload + analysis run.

    Owned exclusively by one UploadPipeline; replaced when the next job
    starts.  ``file_ref`` is frozen so both phases send the same document.
    """

    file_ref: DocumentFile
    job_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    size_bytes: int = field(init=False)
    upload_progress: ProgressState = field(
        default_factory=lambda: ProgressState(phase=UploadPhase.UPLOAD)
    )
    processing_progress: ProgressState = field(
        default_factory=lambda: ProgressState(phase=UploadPhase.PROCESS)
    )
    feedback: str | None = None

    def __post_init__(self) -> None:
        self.size_bytes = self.file_ref.size_bytes

    def progress_for(self, phase: str) -> ProgressState | None:
        if phase == UploadPhase.UPLOAD:
            return self.upload_progress
        if phase == UploadPhase.PROCESS:
            return self.processing_progress
        return None

    def to_summary_dict(self) -> dict[str, Any]:
        return {
            "job_id": self.job_id,
            "filename": self.file_ref.filename,
            "size_bytes": self.size_bytes,
            "upload_progress": self.upload_progress.percent,
            "processing_progress": self.processing_progress.percent,
            "has_feedback": self.feedback is not None,
        }

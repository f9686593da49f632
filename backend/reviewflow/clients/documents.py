"""
Document transfer client.

    upload   POST {storage}/api/upload   multipart {resume: file}  → 200
    process  POST {ai}/api/process       multipart {resume: file}  → {"feedback": "..."}

Both calls report ``(loaded, total)`` byte counts while the request body
streams, through the ``on_progress`` callback.
"""

from __future__ import annotations

import io
from typing import TYPE_CHECKING, Callable

import httpx

from reviewflow.clients._http import DEFAULT_TIMEOUT, require_json_body
from reviewflow.core.logging import get_logger
from reviewflow.workflow.errors import ExternalServiceError, UnexpectedError

if TYPE_CHECKING:
    from reviewflow.uploads.models import DocumentFile

logger = get_logger(__name__)

ProgressCallback = Callable[[int, int], None]

FORM_FIELD = "resume"


def _ignore_progress(loaded: int, total: int) -> None:
    pass


class _ProgressBuffer(io.BytesIO):
    """BytesIO that reports every read httpx makes while encoding multipart."""

    def __init__(self, content: bytes, on_progress: ProgressCallback) -> None:
        super().__init__(content)
        self._total = len(content)
        self._on_progress = on_progress

    def read(self, size: int | None = -1) -> bytes:
        chunk = super().read(size)
        self._on_progress(self.tell(), self._total)
        return chunk


class DocumentServiceClient:
    def __init__(
        self,
        http: httpx.AsyncClient,
        *,
        storage_base_url: str,
        ai_base_url: str,
        ai_api_key: str = "",
        timeout: float | None = DEFAULT_TIMEOUT,
    ) -> None:
        self._http = http
        self._storage_base_url = storage_base_url.rstrip("/")
        self._ai_base_url = ai_base_url.rstrip("/")
        self._ai_api_key = ai_api_key
        self._timeout = timeout

    async def upload(
        self,
        document: DocumentFile,
        on_progress: ProgressCallback | None = None,
    ) -> None:
        await self._post_document(
            f"{self._storage_base_url}/api/upload",
            document,
            on_progress,
        )
        logger.info("Document uploaded", filename=document.filename, size_bytes=document.size_bytes)

    async def process(
        self,
        document: DocumentFile,
        on_progress: ProgressCallback | None = None,
    ) -> str:
        headers = {}
        if self._ai_api_key:
            headers["Authorization"] = f"Bearer {self._ai_api_key}"

        response = await self._post_document(
            f"{self._ai_base_url}/api/process",
            document,
            on_progress,
            headers=headers,
        )
        body = require_json_body(response, service="AI service")
        feedback = body.get("feedback")
        if not isinstance(feedback, str):
            raise UnexpectedError("AI service response has no feedback")
        return feedback

    async def _post_document(
        self,
        url: str,
        document: DocumentFile,
        on_progress: ProgressCallback | None,
        *,
        headers: dict[str, str] | None = None,
    ) -> httpx.Response:
        stream = _ProgressBuffer(document.content, on_progress or _ignore_progress)
        files = {
            FORM_FIELD: (
                document.filename,
                stream,
                document.content_type or "application/octet-stream",
            ),
        }
        response = await self._http.post(
            url,
            files=files,
            headers=headers,
            timeout=self._timeout,
        )
        if response.is_error:
            raise ExternalServiceError(
                f"{url} returned HTTP {response.status_code}",
                status_code=response.status_code,
            )
        return response

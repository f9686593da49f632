"""
Document review endpoints: submit, poll, reset.
"""

from fastapi import APIRouter, Depends, File, UploadFile

from reviewflow.api.deps import get_upload_pipeline, raise_for_rejection
from reviewflow.api.schemas import OutcomeResponse, UploadStatusResponse
from reviewflow.uploads.models import DocumentFile
from reviewflow.uploads.pipeline import UploadPipeline

router = APIRouter(prefix="/uploads", tags=["Uploads"])


@router.post("", response_model=OutcomeResponse)
async def submit_document(
    resume: UploadFile = File(...),
    pipeline: UploadPipeline = Depends(get_upload_pipeline),
) -> OutcomeResponse:
    """Upload a resume and wait for the AI feedback."""
    document = DocumentFile(
        filename=resume.filename or "",
        content=await resume.read(),
        content_type=resume.content_type,
    )
    outcome = await pipeline.submit(document)
    raise_for_rejection(outcome)
    return OutcomeResponse.from_outcome(outcome)


@router.get("/status", response_model=UploadStatusResponse)
async def upload_status(
    pipeline: UploadPipeline = Depends(get_upload_pipeline),
) -> UploadStatusResponse:
    return UploadStatusResponse.from_pipeline(pipeline)


@router.post("/reset", response_model=UploadStatusResponse)
async def reset_upload(
    pipeline: UploadPipeline = Depends(get_upload_pipeline),
) -> UploadStatusResponse:
    pipeline.reset()
    return UploadStatusResponse.from_pipeline(pipeline)

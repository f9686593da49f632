"""Document upload and AI review workflow."""

from reviewflow.uploads.models import DocumentFile, UploadJob
from reviewflow.uploads.pipeline import UploadPipeline

__all__ = ["UploadPipeline", "UploadJob", "DocumentFile"]

"""Shared constants and enums used across the application."""

from enum import StrEnum


class WorkflowStatus(StrEnum):
    """Lifecycle of a single workflow engine instance."""

    IDLE = "IDLE"
    RUNNING = "RUNNING"
    SUCCEEDED = "SUCCEEDED"
    FAILED = "FAILED"


class PhaseStatus(StrEnum):
    """Status of an individual workflow phase."""

    COMPLETED = "COMPLETED"
    FAILED = "FAILED"


class PaymentPhase(StrEnum):
    """Ordered phases of a card payment."""

    TOKENIZE = "TOKENIZE"
    CREATE_INTENT = "CREATE_INTENT"
    CONFIRM = "CONFIRM"


class UploadPhase(StrEnum):
    """Ordered phases of a document review job."""

    UPLOAD = "UPLOAD"
    PROCESS = "PROCESS"


class OutcomeKind(StrEnum):
    """Tag of the value returned by start/submit."""

    SUCCEEDED = "SUCCEEDED"
    FAILED = "FAILED"
    BUSY = "BUSY"
    INVALID = "INVALID"


# ── Documents ─────────────────────────────────────────────
ALLOWED_DOCUMENT_EXTENSIONS: tuple[str, ...] = ("pdf", "doc", "docx")
MAX_DOCUMENT_BYTES = 5 * 1024 * 1024
ERROR_AUTO_CLEAR_SECONDS = 5.0

# ── User-facing messages ──────────────────────────────────
INVALID_FILE_TYPE_MESSAGE = "Please select a valid resume file (PDF, DOC, DOCX)"
FILE_TOO_LARGE_MESSAGE = "Resume file size should be less than 5MB"
UPLOAD_FAILED_MESSAGE = "Error uploading resume. Please try again."
PROCESS_FAILED_MESSAGE = "Error processing resume. Please try again."

CARD_MISSING_MESSAGE = "Card element is missing"
PAYMENT_FAILED_MESSAGE = "An error occurred during payment processing"
PAYMENT_UNEXPECTED_MESSAGE = "An unexpected error occurred during payment processing"

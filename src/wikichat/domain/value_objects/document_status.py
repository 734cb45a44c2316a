"""Document processing status."""

from enum import StrEnum


class DocumentStatus(StrEnum):
    """Lifecycle of an uploaded document."""

    PROCESSING = "PROCESSING"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"

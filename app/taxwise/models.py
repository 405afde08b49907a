"""
Pydantic models for the tax document pipeline.

Defines the request-scoped domain objects (uploaded files, merged documents,
model output extraction results) and the HTTP response payloads.
"""

import base64
from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class UploadedFile(BaseModel):
    """
    A multipart upload persisted to temporary storage.

    Attributes:
        path: Server-controlled temporary location of the file.
        original_name: Filename supplied by the client (may be empty).
    """

    path: Path
    original_name: str = ""


class MergedDocument(BaseModel):
    """
    Result of concatenating uploaded PDFs into one document.

    Attributes:
        unique_id: Random UUID4 generated for this merge.
        filename: Output filename, always ``merged-<unique_id>.pdf``.
        path: Location of the merged file on disk.
        content: Bytes of the merged PDF as read back from disk.
        page_count: Number of pages in the merged PDF.
    """

    unique_id: str
    filename: str
    path: Path
    content: bytes = Field(repr=False)
    page_count: int = Field(..., ge=0)

    def as_base64(self) -> str:
        """Return the merged PDF as a base64 text payload."""
        return base64.b64encode(self.content).decode("utf-8")


class InlineAttachment(BaseModel):
    """Binary payload sent inline to a multimodal model."""

    data: str = Field(..., repr=False, description="Base64-encoded content")
    mime_type: str = "application/pdf"
    filename: str = "document.pdf"


class ExtractionStatus(str, Enum):
    """Outcome of pulling a fenced JSON block out of model text."""

    PARSED = "parsed"
    NO_BLOCK = "no_block"
    INVALID_JSON = "invalid_json"


class ExtractionOutcome(BaseModel):
    """
    Typed result of JSON block extraction.

    ``data`` is always usable: the parsed value when ``status`` is PARSED,
    otherwise an empty mapping. ``reason`` explains why nothing was parsed.
    """

    status: ExtractionStatus
    data: Any = Field(default_factory=dict)
    reason: str | None = None

    @property
    def is_empty(self) -> bool:
        """True when the model produced nothing usable."""
        return self.status != ExtractionStatus.PARSED


# =============================================================================
# HTTP Response Models
# =============================================================================


class MergeSummaryResponse(BaseModel):
    """Response model for the merge-and-summarize endpoint."""

    model_config = ConfigDict(populate_by_name=True)

    message: str = Field(..., description="Status message")
    unique_id: str = Field(
        ...,
        alias="uniqueId",
        description="Identifier generated for the merged document",
    )
    merged_pdf: str = Field(
        ...,
        alias="mergedPdf",
        description="Filename of the merged PDF",
    )
    data: Any = Field(
        default_factory=dict,
        description="Tax regime comparison returned by the model",
    )


class TaxCalculationResponse(BaseModel):
    """Response model for the calculateTax endpoint."""

    message: str = Field(..., description="Status message")
    data: Any = Field(
        default_factory=dict,
        description="Tax liability and effective rate returned by the model",
    )


class ErrorResponse(BaseModel):
    """Error payload returned on any failed request."""

    error: str


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(default="healthy")
    version: str = Field(default="1.0.0")

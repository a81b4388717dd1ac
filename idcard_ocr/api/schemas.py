"""Pydantic response schemas for the FastAPI endpoints."""

from pydantic import BaseModel

from idcard_ocr.extraction.grammar import DocumentKind
from idcard_ocr.ocr.document_processor import OutcomeStatus


class DocumentResultResponse(BaseModel):
    """Response schema for one submitted document."""

    document_type: DocumentKind
    status: OutcomeStatus
    name: str | None = None
    identifier_number: str | None = None
    confidence: float = 0.0
    mode: str | None = None
    message: str | None = None


class IdentityExtractionResponse(BaseModel):
    """Response schema for an extraction request.

    A document that was not submitted is ``null``.
    """

    success: bool
    request_id: str
    aadhaar: DocumentResultResponse | None = None
    pan: DocumentResultResponse | None = None
    processing_time_ms: float


class DocumentTypeInfo(BaseModel):
    """Information about a supported identity document."""

    name: DocumentKind
    identifier_format: str
    name_fallback: str


class DocumentTypesResponse(BaseModel):
    """Response schema listing supported document types."""

    document_types: list[DocumentTypeInfo]


class HealthResponse(BaseModel):
    """Response schema for the health check endpoint."""

    status: str
    version: str
    tesseract_available: bool

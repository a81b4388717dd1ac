"""FastAPI application for the identity document OCR API.

Accepts an Aadhaar photo, a PAN photo, or both in one multipart request and
returns the holder's name and document number for each.
"""

import shutil
import time
import uuid
from typing import Annotated

from fastapi import FastAPI, File, HTTPException, UploadFile
from fastapi.middleware.cors import CORSMiddleware

from idcard_ocr.extraction.grammar import GRAMMARS, DocumentKind
from idcard_ocr.ocr.document_processor import (
    DocumentOutcome,
    IdentityDocumentProcessor,
)
from idcard_ocr.utils.config import load_config
from idcard_ocr.utils.logger import get_logger

from .schemas import (
    DocumentResultResponse,
    DocumentTypeInfo,
    DocumentTypesResponse,
    HealthResponse,
    IdentityExtractionResponse,
)

logger = get_logger(__name__)

API_VERSION = "1.0.0"

app = FastAPI(
    title="Identity Document OCR API",
    description="Extract names and document numbers from Aadhaar and PAN photos",
    version=API_VERSION,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _get_processor() -> IdentityDocumentProcessor:
    """Build the document processor from the current configuration."""
    return IdentityDocumentProcessor(load_config())


_ALLOWED_CONTENT_TYPES = {
    "image/png",
    "image/jpeg",
    "image/tiff",
    "image/bmp",
    "image/webp",
    "application/octet-stream",
}


def _to_response(outcome: DocumentOutcome | None) -> DocumentResultResponse | None:
    if outcome is None:
        return None
    fields = outcome.fields
    return DocumentResultResponse(
        document_type=outcome.kind,
        status=outcome.status,
        name=fields.name if fields else None,
        identifier_number=fields.identifier_number if fields else None,
        confidence=outcome.confidence,
        mode=outcome.mode.value if outcome.mode else None,
        message=outcome.message,
    )


async def _read_upload(file: UploadFile | None) -> bytes | None:
    if file is None:
        return None
    if file.content_type and file.content_type not in _ALLOWED_CONTENT_TYPES:
        raise HTTPException(
            status_code=400,
            detail=f"Unsupported file type: {file.content_type}",
        )
    return await file.read()


@app.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Return system health status."""
    return HealthResponse(
        status="healthy",
        version=API_VERSION,
        tesseract_available=shutil.which("tesseract") is not None,
    )


@app.get("/document-types", response_model=DocumentTypesResponse)
async def list_document_types() -> DocumentTypesResponse:
    """List the supported identity documents and their number formats."""
    return DocumentTypesResponse(
        document_types=[
            DocumentTypeInfo(
                name=grammar.kind,
                identifier_format=grammar.identifier_format,
                name_fallback=grammar.name_marker_description,
            )
            for grammar in GRAMMARS.values()
        ]
    )


@app.post("/extract", response_model=IdentityExtractionResponse)
async def extract_documents(
    aadhaar: Annotated[UploadFile | None, File()] = None,
    pan: Annotated[UploadFile | None, File()] = None,
) -> IdentityExtractionResponse:
    """Extract name and number from the submitted Aadhaar and/or PAN photos.

    Args:
        aadhaar: Optional Aadhaar card photo.
        pan: Optional PAN card photo.

    Returns:
        Per-document results; a document not submitted is ``null``.
    """
    start_time = time.time()

    aadhaar_bytes = await _read_upload(aadhaar)
    pan_bytes = await _read_upload(pan)

    try:
        processor = _get_processor()
        outcomes = processor.process_documents(
            {DocumentKind.AADHAAR: aadhaar_bytes, DocumentKind.PAN: pan_bytes}
        )
    except Exception as exc:
        logger.error("Extraction failed: %s", exc)
        raise HTTPException(status_code=500, detail=str(exc)) from exc

    return IdentityExtractionResponse(
        success=any(outcome is not None for outcome in outcomes.values()),
        request_id=str(uuid.uuid4()),
        aadhaar=_to_response(outcomes[DocumentKind.AADHAAR]),
        pan=_to_response(outcomes[DocumentKind.PAN]),
        processing_time_ms=(time.time() - start_time) * 1000,
    )

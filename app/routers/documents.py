"""
Documents Router
Upload, analysis, generation and lifecycle of DocumentRecords.

Uploads always store the document. AI analysis is best-effort: when the
classifier is unavailable the response carries `analysis: null` and a
`warning`, and the document stays in status `uploaded`.
"""

import logging
from typing import Any, Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile
from pydantic import Field
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import Settings, get_settings
from app.core.database import get_db
from app.core.errors import (
    AIProviderError,
    BadRequestError,
    LegalEaseError,
    NotFoundError,
    UploadRejectedError,
)
from app.dependencies import get_aggregator, get_catalog_dependency, get_generator
from app.routers.schemas import CamelModel
from app.services import document_store
from app.services.catalog import Catalog
from app.services.document_analysis import ComplianceAggregator
from app.services.document_generator import (
    GENERATED_MIME_TYPE,
    DocumentGenerator,
    draft_from_template,
    generated_filename,
)
from app.services.document_store import DocumentStatus
from app.services.text_extraction import SUPPORTED_MIME_TYPES, UnsupportedFormatError, extract_text

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/documents", tags=["Documents"])

ANALYSIS_UNAVAILABLE_WARNING = "Document uploaded, but AI analysis is unavailable. Manual review required."
EXTRACTION_UNAVAILABLE_WARNING = "Text could not be extracted from this file; analysis used a placeholder."

EXTENSION_MIME_TYPES = {
    "pdf": "application/pdf",
    "doc": "application/msword",
    "docx": "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    "txt": "text/plain",
}


# =============================================================================
# Schemas
# =============================================================================

class GenerateDocumentRequest(CamelModel):
    template_id: str
    owner_id: str = Field(min_length=1)
    user_inputs: dict[str, Any] = Field(default_factory=dict)


class StatusUpdateRequest(CamelModel):
    status: DocumentStatus


# =============================================================================
# Helper Functions
# =============================================================================

def resolve_mime_type(filename: str, content_type: Optional[str]) -> str:
    """Declared content type without parameters, or a guess from the extension."""
    declared = (content_type or "").split(";", 1)[0].strip().lower()
    if declared in SUPPORTED_MIME_TYPES:
        return declared
    ext = filename.rsplit(".", 1)[-1].lower() if "." in filename else ""
    return EXTENSION_MIME_TYPES.get(ext, declared or "application/octet-stream")


async def _get_document_or_404(db: AsyncSession, document_id: str):
    document = await document_store.get_document(db, document_id)
    if document is None:
        raise NotFoundError("Document", document_id)
    return document


# =============================================================================
# Endpoints
# =============================================================================

@router.post("/upload")
async def upload_document(
    file: UploadFile = File(...),
    owner_id: str = Form(..., alias="ownerId"),
    court_id: Optional[str] = Form(None, alias="courtId"),
    db: AsyncSession = Depends(get_db),
    aggregator: ComplianceAggregator = Depends(get_aggregator),
    settings: Settings = Depends(get_settings),
):
    """
    Upload a document, extract its text and run the compliance analysis.

    Input problems are rejected before anything is stored. Analysis
    problems are not errors: the document is stored and returned with a
    warning. The insert and the analysis write happen together after
    classification, in one short transaction.
    """
    if not owner_id.strip():
        raise BadRequestError("ownerId is required")
    if not file.filename:
        raise BadRequestError("Filename required")

    mime_type = resolve_mime_type(file.filename, file.content_type)
    if mime_type not in settings.allowed_mime_types_set:
        raise UploadRejectedError(
            f"File type not allowed: {mime_type}",
            filename=file.filename,
            allowed=sorted(settings.allowed_mime_types_set),
        )

    content = await file.read()
    if not content:
        raise UploadRejectedError("Uploaded file is empty", filename=file.filename)
    if len(content) > settings.max_upload_bytes:
        raise UploadRejectedError(
            f"File too large. Maximum: {settings.max_upload_size_mb}MB",
            filename=file.filename,
            size=len(content),
        )

    try:
        extracted = extract_text(content, mime_type)
    except UnsupportedFormatError as e:
        raise UploadRejectedError(str(e), filename=file.filename, mime_type=mime_type) from e

    # No database work before this await: the write transaction must not
    # stay open across the classifier call.
    result = await aggregator.analyze_document(extracted.text, file.filename, owner_court_id=court_id)

    document = await document_store.create_document(
        db,
        owner_id=owner_id.strip(),
        filename=file.filename,
        mime_type=mime_type,
        raw_content=content,
        extracted_text=extracted.text,
        extraction_degraded=extracted.degraded,
    )

    warnings = []
    if extracted.degraded:
        warnings.append(EXTRACTION_UNAVAILABLE_WARNING)

    analysis = None
    if result.classification_degraded:
        logger.warning(
            "Stored document %s without analysis: %s",
            document.id,
            result.failure_reason,
            extra={"document_id": document.id},
        )
        warnings.append(ANALYSIS_UNAVAILABLE_WARNING)
    else:
        analysis = result.to_dict()
        document = await document_store.record_analysis(
            db,
            document.id,
            analysis,
            document_type=result.doc_type,
            is_emergency=result.is_emergency,
        )

    response = {
        "document": document_store.serialize_document(document),
        "analysis": analysis,
        "success": True,
    }
    if warnings:
        response["warning"] = " ".join(warnings)
    return response


@router.post("/generate")
async def generate_document(
    request: GenerateDocumentRequest,
    db: AsyncSession = Depends(get_db),
    catalog: Catalog = Depends(get_catalog_dependency),
    generator: DocumentGenerator = Depends(get_generator),
):
    """Draft a document from a template and store it as a new record."""
    template = catalog.get_template(request.template_id)
    if template is None:
        raise NotFoundError("Template", request.template_id)

    try:
        content = await draft_from_template(generator, template, request.user_inputs)
    except LegalEaseError:
        raise
    except Exception as e:
        logger.error("Document generation failed: %s", e, exc_info=True)
        raise AIProviderError("Document generator", str(e) or "generation failed") from e

    document = await document_store.create_document(
        db,
        owner_id=request.owner_id,
        filename=generated_filename(template),
        mime_type=GENERATED_MIME_TYPE,
        raw_content=content.encode("utf-8"),
        extracted_text=content,
        document_type=template.name,
        is_emergency=template.is_emergency,
    )

    return {"document": document_store.serialize_document(document), "content": content}


@router.get("/user/{owner_id}")
async def list_user_documents(owner_id: str, db: AsyncSession = Depends(get_db)):
    documents = await document_store.list_documents_for_owner(db, owner_id)
    return {
        "documents": [document_store.serialize_document(d) for d in documents],
        "total": len(documents),
    }


@router.get("/{document_id}")
async def get_document(document_id: str, db: AsyncSession = Depends(get_db)):
    document = await _get_document_or_404(db, document_id)
    return document_store.serialize_document(document, include_text=True)


@router.delete("/{document_id}")
async def delete_document(document_id: str, db: AsyncSession = Depends(get_db)):
    if not await document_store.delete_document(db, document_id):
        raise NotFoundError("Document", document_id)
    return {"success": True, "id": document_id}


@router.post("/{document_id}/status")
async def update_document_status(
    document_id: str,
    request: StatusUpdateRequest,
    db: AsyncSession = Depends(get_db),
):
    """Advance a document's status. Moving backwards is a 409."""
    document = await _get_document_or_404(db, document_id)
    document = await document_store.advance_status(db, document, request.status)
    return document_store.serialize_document(document)

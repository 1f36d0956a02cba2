"""
Document Store

CRUD over DocumentRecord rows plus filing history.

Status is strictly forward-moving (uploaded -> analyzed -> validated ->
filed). Analysis results are written with a single UPDATE so that no
reader can observe `status=analyzed` without the analysis it depends on.
"""

import logging
import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional

from sqlalchemy import case, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.errors import ConflictError
from app.models.models import Document, FilingHistory

logger = logging.getLogger(__name__)


class DocumentStatus(str, Enum):
    UPLOADED = "uploaded"
    ANALYZED = "analyzed"
    VALIDATED = "validated"
    FILED = "filed"

    @property
    def rank(self) -> int:
        return _STATUS_ORDER.index(self)


_STATUS_ORDER = [
    DocumentStatus.UPLOADED,
    DocumentStatus.ANALYZED,
    DocumentStatus.VALIDATED,
    DocumentStatus.FILED,
]


class FilingStatus(str, Enum):
    DRAFT = "draft"
    SUBMITTED = "submitted"
    FILED = "filed"
    REJECTED = "rejected"


class StatusTransitionError(ConflictError):
    """Attempt to move a document's status backwards."""

    def __init__(self, document_id: str, current: str, requested: str):
        super().__init__(
            f"Cannot move document '{document_id}' from status '{current}' to '{requested}'"
        )
        self.current = current
        self.requested = requested


# =============================================================================
# Documents
# =============================================================================

async def create_document(
    session: AsyncSession,
    owner_id: str,
    filename: str,
    mime_type: str,
    raw_content: bytes,
    extracted_text: str,
    document_type: Optional[str] = None,
    is_emergency: bool = False,
    extraction_degraded: bool = False,
) -> Document:
    document = Document(
        id=str(uuid.uuid4()),
        owner_id=owner_id,
        filename=filename,
        mime_type=mime_type,
        byte_size=len(raw_content),
        raw_content=raw_content,
        extracted_text=extracted_text,
        extraction_degraded=extraction_degraded,
        document_type=document_type,
        status=DocumentStatus.UPLOADED.value,
        is_emergency=is_emergency,
    )
    session.add(document)
    await session.flush()
    logger.info(
        "Stored document %s for owner %s",
        document.id,
        owner_id,
        extra={"document_id": document.id, "byte_size": document.byte_size},
    )
    return document


async def get_document(session: AsyncSession, document_id: str) -> Optional[Document]:
    return await session.get(Document, document_id)


async def list_documents_for_owner(session: AsyncSession, owner_id: str) -> list[Document]:
    result = await session.execute(
        select(Document)
        .where(Document.owner_id == owner_id)
        .order_by(Document.created_at.desc())
    )
    return list(result.scalars().all())


async def delete_document(session: AsyncSession, document_id: str) -> bool:
    """
    Delete a document. Returns False when it does not exist.

    Filing history outlives the document; its entries are detached
    (document_id set to NULL) rather than deleted.
    """
    document = await session.get(Document, document_id)
    if document is None:
        return False
    await session.execute(
        update(FilingHistory)
        .where(FilingHistory.document_id == document_id)
        .values(document_id=None)
        .execution_options(synchronize_session=False)
    )
    await session.delete(document)
    await session.flush()
    logger.info("Deleted document %s", document_id, extra={"document_id": document_id})
    return True


async def record_analysis(
    session: AsyncSession,
    document_id: str,
    analysis: dict[str, Any],
    document_type: str,
    is_emergency: bool,
) -> Optional[Document]:
    """
    Attach an analysis and advance to `analyzed` in one statement.

    A document already past `analyzed` keeps its status.
    Returns None when the document does not exist.
    """
    result = await session.execute(
        update(Document)
        .where(Document.id == document_id)
        .values(
            analysis=analysis,
            document_type=document_type,
            is_emergency=is_emergency,
            status=case(
                (Document.status == DocumentStatus.UPLOADED.value, DocumentStatus.ANALYZED.value),
                else_=Document.status,
            ),
        )
        .execution_options(synchronize_session=False)
    )
    if result.rowcount == 0:
        return None
    return await session.get(Document, document_id, populate_existing=True)


async def advance_status(
    session: AsyncSession,
    document: Document,
    new_status: DocumentStatus,
) -> Document:
    """
    Move a document forward to `new_status`.

    Same status is a no-op; moving backwards raises StatusTransitionError.
    """
    current = DocumentStatus(document.status)
    if new_status == current:
        return document
    if new_status.rank < current.rank:
        raise StatusTransitionError(document.id, current.value, new_status.value)
    if new_status == DocumentStatus.ANALYZED and document.analysis is None:
        raise ConflictError(f"Document '{document.id}' has no analysis yet")

    document.status = new_status.value
    await session.flush()
    logger.info(
        "Document %s status %s -> %s",
        document.id,
        current.value,
        new_status.value,
        extra={"document_id": document.id},
    )
    return document


def serialize_document(document: Document, include_text: bool = False) -> dict:
    data = {
        "id": document.id,
        "ownerId": document.owner_id,
        "filename": document.filename,
        "mimeType": document.mime_type,
        "byteSize": document.byte_size,
        "documentType": document.document_type,
        "analysis": document.analysis,
        "status": document.status,
        "isEmergency": document.is_emergency,
        "extractionDegraded": document.extraction_degraded,
        "createdAt": document.created_at.isoformat() if document.created_at else None,
        "updatedAt": document.updated_at.isoformat() if document.updated_at else None,
    }
    if include_text:
        data["extractedText"] = document.extracted_text
    return data


# =============================================================================
# Filing History
# =============================================================================

async def create_filing(
    session: AsyncSession,
    owner_id: str,
    filing_type: str,
    status: FilingStatus,
    document: Optional[Document] = None,
    court_response: Optional[str] = None,
) -> FilingHistory:
    """Record a filing attempt; a `filed` entry advances its document to filed."""
    filing = FilingHistory(
        id=str(uuid.uuid4()),
        owner_id=owner_id,
        document_id=document.id if document is not None else None,
        filing_type=filing_type,
        status=status.value,
        court_response=court_response,
        filed_at=datetime.now(timezone.utc) if status == FilingStatus.FILED else None,
    )
    session.add(filing)

    if document is not None and status == FilingStatus.FILED:
        await advance_status(session, document, DocumentStatus.FILED)

    await session.flush()
    return filing


async def list_filings_for_owner(session: AsyncSession, owner_id: str) -> list[FilingHistory]:
    result = await session.execute(
        select(FilingHistory)
        .where(FilingHistory.owner_id == owner_id)
        .order_by(FilingHistory.created_at.desc())
    )
    return list(result.scalars().all())


def serialize_filing(filing: FilingHistory) -> dict:
    return {
        "id": filing.id,
        "ownerId": filing.owner_id,
        "documentId": filing.document_id,
        "filingType": filing.filing_type,
        "status": filing.status,
        "courtResponse": filing.court_response,
        "filedAt": filing.filed_at.isoformat() if filing.filed_at else None,
        "createdAt": filing.created_at.isoformat() if filing.created_at else None,
    }

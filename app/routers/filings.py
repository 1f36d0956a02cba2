"""
Filing History Router
"""

from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import Field
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.core.errors import NotFoundError
from app.routers.schemas import CamelModel
from app.services import document_store
from app.services.document_store import FilingStatus

router = APIRouter(prefix="/filing-history", tags=["Filing History"])


class FilingCreateRequest(CamelModel):
    owner_id: str = Field(min_length=1)
    filing_type: str = Field(min_length=1)
    status: FilingStatus = FilingStatus.DRAFT
    document_id: Optional[str] = None
    court_response: Optional[str] = None


@router.post("")
async def create_filing(request: FilingCreateRequest, db: AsyncSession = Depends(get_db)):
    """Record a filing attempt. A `filed` entry moves its document to status filed."""
    document = None
    if request.document_id:
        document = await document_store.get_document(db, request.document_id)
        if document is None:
            raise NotFoundError("Document", request.document_id)

    filing = await document_store.create_filing(
        db,
        owner_id=request.owner_id,
        filing_type=request.filing_type,
        status=request.status,
        document=document,
        court_response=request.court_response,
    )
    return document_store.serialize_filing(filing)


@router.get("/user/{owner_id}")
async def list_filings(owner_id: str, db: AsyncSession = Depends(get_db)):
    filings = await document_store.list_filings_for_owner(db, owner_id)
    return [document_store.serialize_filing(f) for f in filings]

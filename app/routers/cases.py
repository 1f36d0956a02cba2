"""
Case Management Router
CRUD over the encrypted case store.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from pydantic import Field

from app.core.errors import NotFoundError
from app.dependencies import get_case_store
from app.routers.schemas import CamelModel
from app.services.case_store import CaseStore

router = APIRouter(prefix="/cases", tags=["Cases"])


class CaseCreateRequest(CamelModel):
    case_number: str = Field(min_length=1)
    client_name: str = Field(min_length=1)
    document_type: str = Field(min_length=1)
    filing_status: str = "draft"
    emergency_type: Optional[str] = None
    attorney_assigned: Optional[str] = None
    court_id: Optional[str] = None
    notes: Optional[str] = None


class CaseStatusRequest(CamelModel):
    status: str = Field(min_length=1)
    notes: Optional[str] = None


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_case(request: CaseCreateRequest, store: CaseStore = Depends(get_case_store)):
    record = await store.create_case(**request.model_dump())
    return record.to_dict()


@router.get("")
async def list_cases(
    case_number: Optional[str] = Query(None, alias="caseNumber"),
    document_type: Optional[str] = Query(None, alias="documentType"),
    filing_status: Optional[str] = Query(None, alias="filingStatus"),
    emergency_type: Optional[str] = Query(None, alias="emergencyType"),
    store: CaseStore = Depends(get_case_store),
):
    records = await store.list_cases(
        case_number=case_number,
        document_type=document_type,
        filing_status=filing_status,
        emergency_type=emergency_type,
    )
    return [r.to_dict() for r in records]


@router.get("/{case_id}")
async def get_case(case_id: str, store: CaseStore = Depends(get_case_store)):
    record = await store.get_case(case_id)
    if record is None:
        raise NotFoundError("Case", case_id)
    return record.to_dict()


@router.patch("/{case_id}/status")
async def update_case_status(
    case_id: str,
    request: CaseStatusRequest,
    store: CaseStore = Depends(get_case_store),
):
    record = await store.update_case_status(case_id, request.status, request.notes)
    if record is None:
        raise NotFoundError("Case", case_id)
    return record.to_dict()

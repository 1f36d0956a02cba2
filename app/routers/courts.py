"""
Courts Router
Read-only access to the Massachusetts court registry plus CM/ECF checks.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from pydantic import Field

from app.core.errors import NotFoundError
from app.dependencies import get_registry
from app.routers.schemas import CamelModel
from app.services.courts.compliance import check_basic_compliance
from app.services.courts.registry import CourtClass, CourtRegistry

router = APIRouter(tags=["Courts"])


class CourtValidationRequest(CamelModel):
    document_type: str = Field(min_length=1)


class ComplianceCheckRequest(CamelModel):
    text: str


def _get_court_or_404(registry: CourtRegistry, court_id: str):
    court = registry.get_court(court_id)
    if court is None:
        raise NotFoundError("Court", court_id)
    return court


@router.get("/courts")
async def list_courts(
    court_class: Optional[CourtClass] = Query(None, alias="courtClass"),
    jurisdiction: Optional[str] = Query(None),
    registry: CourtRegistry = Depends(get_registry),
):
    """All courts, optionally narrowed by class and/or jurisdiction text."""
    courts = registry.list_courts()
    if court_class is not None:
        courts = [c for c in courts if c.court_class == court_class]
    if jurisdiction:
        matching = {c.id for c in registry.get_courts_by_jurisdiction(jurisdiction)}
        courts = [c for c in courts if c.id in matching]
    return {"courts": [c.to_dict() for c in courts], "total": len(courts)}


@router.get("/courts/{court_id}")
async def get_court(court_id: str, registry: CourtRegistry = Depends(get_registry)):
    return _get_court_or_404(registry, court_id).to_dict()


@router.get("/courts/{court_id}/requirements")
async def get_filing_requirements(
    court_id: str,
    document_type: str = Query("", alias="documentType"),
    registry: CourtRegistry = Depends(get_registry),
):
    _get_court_or_404(registry, court_id)
    requirements = registry.get_filing_requirements(court_id, document_type)
    return {
        "courtId": court_id,
        "documentType": document_type,
        "general": requirements.general,
        "specific": requirements.specific,
        "deadlines": requirements.deadlines,
    }


@router.post("/courts/{court_id}/validate")
async def validate_document_for_court(
    court_id: str,
    request: CourtValidationRequest,
    registry: CourtRegistry = Depends(get_registry),
):
    """Does this court accept this document type? Rejection is a result, not an error."""
    _get_court_or_404(registry, court_id)
    validation = registry.validate_document_for_court(request.document_type, court_id)
    return {
        "isValid": validation.is_valid,
        "issues": validation.issues,
        "requirements": validation.requirements,
    }


@router.post("/compliance/check")
async def check_compliance(request: ComplianceCheckRequest):
    """Run the fixed CM/ECF checks (signature, case identification, length)."""
    return check_basic_compliance(request.text).to_dict()

"""
Emergency Filing Router
Fed. R. Civ. P. 65 checklist validation for TROs and preliminary injunctions.
"""

import logging

from fastapi import APIRouter, Depends
from pydantic import Field
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.core.errors import NotFoundError
from app.dependencies import get_emergency_validator
from app.routers.schemas import CamelModel
from app.services import document_store
from app.services.courts.emergency import (
    CHECKLISTS,
    GENERAL_GUIDANCE,
    EmergencyFilingType,
    EmergencyFilingValidation,
    EmergencyFilingValidator,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/emergency", tags=["Emergency Filings"])


class EmergencyValidationRequest(CamelModel):
    document_id: str = Field(min_length=1)
    filing_type: EmergencyFilingType


@router.post("/validate")
async def validate_emergency_filing(
    request: EmergencyValidationRequest,
    db: AsyncSession = Depends(get_db),
    validator: EmergencyFilingValidator = Depends(get_emergency_validator),
):
    """
    Validate a stored document against the checklist for its filing type.

    Always answers with a structured result for an existing document;
    an unmet checklist is `isValid: false`, not an error. A document whose
    text could not be extracted gets the manual-review result.
    """
    document = await document_store.get_document(db, request.document_id)
    if document is None:
        raise NotFoundError("Document", request.document_id)

    if document.extraction_degraded:
        # nothing to judge: the stored text is an extraction placeholder
        validation = EmergencyFilingValidation.manual_review(request.filing_type)
    else:
        validation = await validator.validate(document.extracted_text or "", request.filing_type)
    logger.info(
        "Emergency validation %s for document %s: valid=%s",
        request.filing_type.value,
        document.id,
        validation.is_valid,
        extra={"document_id": document.id, "issue_count": len(validation.issues)},
    )
    return validation.to_dict()


@router.get("/checklists")
async def list_checklists():
    """The legal-standard checklist for each emergency filing type."""
    return {
        filing_type.value: {
            "elements": [
                {"key": item.key, "description": item.description}
                for item in checklist
            ],
            "notes": list(GENERAL_GUIDANCE[filing_type]),
        }
        for filing_type, checklist in CHECKLISTS.items()
    }

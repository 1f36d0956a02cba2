"""
Catalog Router
Document templates and the legal aid directory.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from app.core.errors import NotFoundError
from app.dependencies import get_catalog_dependency
from app.services.catalog import Catalog

router = APIRouter(tags=["Catalog"])


# =============================================================================
# Templates
# =============================================================================

@router.get("/templates")
async def list_templates(
    category: Optional[str] = Query(None),
    catalog: Catalog = Depends(get_catalog_dependency),
):
    return [t.to_dict() for t in catalog.list_templates(category)]


@router.get("/templates/emergency")
async def list_emergency_templates(catalog: Catalog = Depends(get_catalog_dependency)):
    return [t.to_dict() for t in catalog.emergency_templates()]


@router.get("/templates/{template_id}")
async def get_template(template_id: str, catalog: Catalog = Depends(get_catalog_dependency)):
    template = catalog.get_template(template_id)
    if template is None:
        raise NotFoundError("Template", template_id)
    return template.to_dict()


# =============================================================================
# Legal Aid
# =============================================================================

@router.get("/legal-aid")
async def search_legal_aid(
    practice_area: Optional[str] = Query(None, alias="practiceArea"),
    location: Optional[str] = Query(None),
    availability: Optional[str] = Query(None),
    is_emergency: Optional[bool] = Query(None, alias="isEmergency"),
    catalog: Catalog = Depends(get_catalog_dependency),
):
    """Filter organisations; `isEmergency` only applies when supplied."""
    organizations = catalog.search_organizations(
        practice_area=practice_area,
        location=location,
        availability=availability,
        is_emergency=is_emergency,
    )
    return [o.to_dict() for o in organizations]


@router.get("/legal-aid/all")
async def list_legal_aid(catalog: Catalog = Depends(get_catalog_dependency)):
    return [o.to_dict() for o in catalog.list_organizations()]

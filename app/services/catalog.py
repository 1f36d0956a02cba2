"""
Template & Legal Aid Catalog

Read-only seed data: drafting templates and Massachusetts legal aid
organisations. Built once and injected into the routers.
"""

from dataclasses import dataclass, field
from functools import lru_cache
from typing import Iterable, Optional


@dataclass(frozen=True)
class DocumentTemplate:
    id: str
    name: str
    description: str
    category: str
    is_emergency: bool
    sections: tuple[str, ...]
    required_fields: tuple[str, ...]
    estimated_time: str

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "category": self.category,
            "isEmergency": self.is_emergency,
            "template": {
                "sections": list(self.sections),
                "required_fields": list(self.required_fields),
            },
            "estimatedTime": self.estimated_time,
        }


@dataclass(frozen=True)
class LegalAidOrganization:
    id: str
    name: str
    description: str
    website: str
    phone: str
    email: str
    address: str
    location: str
    practice_areas: tuple[str, ...]
    availability: str  # immediate, within-week, emergency
    is_emergency: bool
    services_offered: tuple[str, ...] = field(default_factory=tuple)
    eligibility_requirements: str = ""

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "website": self.website,
            "phone": self.phone,
            "email": self.email,
            "address": self.address,
            "location": self.location,
            "practiceAreas": list(self.practice_areas),
            "availability": self.availability,
            "isEmergency": self.is_emergency,
            "servicesOffered": list(self.services_offered),
            "eligibilityRequirements": self.eligibility_requirements,
        }


# =============================================================================
# Seed data
# =============================================================================

DOCUMENT_TEMPLATES: tuple[DocumentTemplate, ...] = (
    DocumentTemplate(
        id="motion-summary-judgment",
        name="Motion for Summary Judgment",
        description="Standard motion template with AI-guided completion",
        category="motion",
        is_emergency=False,
        sections=("introduction", "statement_of_facts", "legal_argument", "conclusion"),
        required_fields=("case_number", "parties", "legal_basis"),
        estimated_time="15-20 minutes",
    ),
    DocumentTemplate(
        id="temporary-restraining-order",
        name="Temporary Restraining Order",
        description="Emergency TRO template with expedited filing guidance",
        category="emergency",
        is_emergency=True,
        sections=("emergency_nature", "irreparable_harm", "likelihood_success", "balance_hardships"),
        required_fields=("case_number", "parties", "emergency_facts", "relief_sought"),
        estimated_time="30-45 minutes",
    ),
    DocumentTemplate(
        id="preliminary-injunction",
        name="Preliminary Injunction",
        description="Motion template with Winter standard compliance",
        category="emergency",
        is_emergency=True,
        sections=("likelihood_success", "irreparable_harm", "balance_equities", "public_interest"),
        required_fields=("case_number", "parties", "legal_standard", "factual_basis"),
        estimated_time="45-60 minutes",
    ),
)

LEGAL_AID_ORGANIZATIONS: tuple[LegalAidOrganization, ...] = (
    LegalAidOrganization(
        id="greater-boston-legal-services",
        name="Greater Boston Legal Services",
        description="Free civil legal assistance for low-income individuals and families",
        website="https://gbls.org",
        phone="(617) 371-1234",
        email="intake@gbls.org",
        address="197 Friend Street, Boston, MA 02114",
        location="Boston + 31 surrounding cities/towns",
        practice_areas=("Housing", "Family Law", "Immigration", "Benefits", "Consumer Law"),
        availability="immediate",
        is_emergency=False,
        services_offered=("Legal representation", "Self-help resources", "Community education"),
        eligibility_requirements="Low-income individuals and families",
    ),
    LegalAidOrganization(
        id="massachusetts-law-reform-institute",
        name="Massachusetts Law Reform Institute",
        description="Statewide advocacy for civil rights and legal reform",
        website="https://www.mlri.org",
        phone="(617) 357-0700",
        email="mlri@mlri.org",
        address="99 Chauncy Street, Suite 500, Boston, MA 02111",
        location="Statewide",
        practice_areas=("Civil Rights", "Family Law", "Real Estate", "Benefits"),
        availability="within-week",
        is_emergency=False,
        services_offered=("Policy advocacy", "Legal representation", "Technical assistance"),
        eligibility_requirements="Varies by program",
    ),
    LegalAidOrganization(
        id="community-legal-aid",
        name="Community Legal Aid",
        description="Legal services for Central and Western Massachusetts",
        website="https://communitylegal.org",
        phone="(413) 781-7814",
        email="info@communitylegal.org",
        address="405 Main Street, Worcester, MA 01608",
        location="Central & Western MA",
        practice_areas=("Family Law", "Housing", "Immigration", "Benefits", "Employment"),
        availability="immediate",
        is_emergency=True,
        services_offered=("Legal representation", "Emergency assistance", "Self-help clinics"),
        eligibility_requirements="Low to moderate income",
    ),
    LegalAidOrganization(
        id="northeast-legal-aid",
        name="Northeast Legal Aid",
        description="Comprehensive legal services for Northeastern Massachusetts",
        website="https://northeastlegalaid.org",
        phone="(978) 458-1465",
        email="intake@northeastlegalaid.org",
        address="Lawrence, Lowell, Haverhill offices",
        location="Northeastern MA",
        practice_areas=("Housing", "Consumer Debt", "Benefits", "Veterans", "Immigration"),
        availability="immediate",
        is_emergency=False,
        services_offered=("Legal representation", "Benefits advocacy", "Housing assistance"),
        eligibility_requirements="125% of Federal Poverty Guidelines",
    ),
    LegalAidOrganization(
        id="reach-domestic-violence",
        name="REACH (Domestic Violence)",
        description="Emergency domestic violence legal assistance",
        website="https://reachma.org",
        phone="(800) 899-4000",
        email="legal@reachma.org",
        address="24-hour hotline service",
        location="Statewide",
        practice_areas=("Domestic Violence", "Family Law", "Safety Planning"),
        availability="emergency",
        is_emergency=True,
        services_offered=("24/7 hotline", "Emergency legal assistance", "Safety planning"),
        eligibility_requirements="Domestic violence survivors",
    ),
)


# =============================================================================
# Catalog
# =============================================================================

class Catalog:
    """Immutable lookup over templates and legal aid organisations."""

    def __init__(
        self,
        templates: Iterable[DocumentTemplate] = DOCUMENT_TEMPLATES,
        organizations: Iterable[LegalAidOrganization] = LEGAL_AID_ORGANIZATIONS,
    ):
        self._templates = {t.id: t for t in templates}
        self._organizations = tuple(organizations)

    # Templates

    def list_templates(self, category: Optional[str] = None) -> list[DocumentTemplate]:
        templates = list(self._templates.values())
        if category:
            templates = [t for t in templates if t.category == category]
        return templates

    def emergency_templates(self) -> list[DocumentTemplate]:
        return [t for t in self._templates.values() if t.is_emergency]

    def get_template(self, template_id: str) -> Optional[DocumentTemplate]:
        return self._templates.get(template_id)

    # Legal aid

    def list_organizations(self) -> list[LegalAidOrganization]:
        return list(self._organizations)

    def search_organizations(
        self,
        practice_area: Optional[str] = None,
        location: Optional[str] = None,
        availability: Optional[str] = None,
        is_emergency: Optional[bool] = None,
    ) -> list[LegalAidOrganization]:
        """
        Filter organisations. Practice area and location are case-insensitive
        substring matches, availability is exact, and `is_emergency` only
        filters when it is not None.
        """
        results = list(self._organizations)

        if practice_area:
            needle = practice_area.lower()
            results = [o for o in results if any(needle in area.lower() for area in o.practice_areas)]

        if location:
            needle = location.lower()
            results = [o for o in results if needle in o.location.lower()]

        if availability:
            results = [o for o in results if o.availability == availability]

        if is_emergency is not None:
            results = [o for o in results if o.is_emergency == is_emergency]

        return results


@lru_cache
def get_catalog() -> Catalog:
    return Catalog()

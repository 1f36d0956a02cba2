"""
Massachusetts Court Registry.

Static catalog of the courts a document can be filed with, the document
types each court accepts, and its procedural filing requirements.
The registry is built once at startup and never mutated; it is passed to
the analysis and emergency services rather than read from module state.
"""

from dataclasses import dataclass, field
from enum import Enum
from functools import lru_cache
from typing import Iterable, Optional


class CourtClass(str, Enum):
    """Kinds of court in the Massachusetts system."""
    FEDERAL = "federal"
    SUPERIOR = "superior"
    PROBATE_FAMILY = "probate_family"
    DISTRICT = "district"
    HOUSING = "housing"
    JUVENILE = "juvenile"
    LAND = "land"


@dataclass(frozen=True)
class CourtEntity:
    """A court and what it will accept."""
    id: str
    name: str
    court_class: CourtClass
    jurisdiction_label: str
    accepted_document_types: frozenset[str]
    filing_requirements: tuple[str, ...]
    address: str = ""
    phone: str = ""
    website: str = ""
    emergency_procedures: bool = False

    def accepts(self, document_type: str) -> bool:
        return document_type in self.accepted_document_types

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "courtClass": self.court_class.value,
            "jurisdictionLabel": self.jurisdiction_label,
            "acceptedDocumentTypes": sorted(self.accepted_document_types),
            "filingRequirements": list(self.filing_requirements),
            "address": self.address,
            "phone": self.phone,
            "website": self.website,
            "emergencyProcedures": self.emergency_procedures,
        }


@dataclass
class CourtValidation:
    """Outcome of checking a document type against a court; lists are fresh copies."""
    is_valid: bool
    issues: list[str] = field(default_factory=list)
    requirements: list[str] = field(default_factory=list)
    court_found: bool = True


@dataclass
class FilingRequirements:
    """General court requirements plus document-type-specific extras."""
    general: list[str]
    specific: list[str]
    deadlines: list[str]


INVALID_COURT_ISSUE = "Invalid court specified"


# =============================================================================
# Document-type specific requirements (exact document-type keys)
# =============================================================================

DOCUMENT_TYPE_REQUIREMENTS: dict[str, dict[str, tuple[str, ...]]] = {
    "Petition for Divorce": {
        "specific": (
            "Financial Statement (Long Form) required",
            "Certified copy of marriage certificate",
            "Parenting plan if children involved",
        ),
        "deadlines": ("120-day waiting period after service",),
    },
    "Probate Petition": {
        "specific": (
            "Death certificate required",
            "Original will if available",
            "Bond may be required",
        ),
        "deadlines": ("File within 30 days of death",),
    },
    "TRO": {
        "specific": (
            "Affidavit showing immediate and irreparable injury",
            "Efforts to notify opposing party",
            "Security bond may be required",
        ),
        "deadlines": ("Hearing within 10 days",),
    },
    "Motion for Summary Judgment": {
        "specific": (
            "Statement of material facts",
            "Supporting affidavits",
            "Memorandum of law",
        ),
        "deadlines": ("File at least 30 days before trial",),
    },
}


def get_document_type_specific_requirements(document_type: str) -> tuple[list[str], list[str]]:
    """Return (specific, deadlines) for an exact document type; empty if unknown."""
    entry = DOCUMENT_TYPE_REQUIREMENTS.get(document_type)
    if entry is None:
        return [], []
    return list(entry["specific"]), list(entry["deadlines"])


# =============================================================================
# Seed data
# =============================================================================

def _court(
    id: str,
    name: str,
    court_class: CourtClass,
    jurisdiction_label: str,
    document_types: Iterable[str],
    filing_requirements: Iterable[str],
    **extra,
) -> CourtEntity:
    return CourtEntity(
        id=id,
        name=name,
        court_class=court_class,
        jurisdiction_label=jurisdiction_label,
        accepted_document_types=frozenset(document_types),
        filing_requirements=tuple(filing_requirements),
        **extra,
    )


MASSACHUSETTS_COURTS: tuple[CourtEntity, ...] = (
    _court(
        "ma-fed-district",
        "U.S. District Court for the District of Massachusetts",
        CourtClass.FEDERAL,
        "Federal",
        [
            "Civil Complaint", "Motion", "Answer", "Discovery", "Summary Judgment",
            "TRO", "Preliminary Injunction", "Appeal", "Bankruptcy",
        ],
        [
            "CM/ECF electronic filing required",
            "PACER account needed",
            "Attorney admission to federal bar",
            "Electronic signature required",
        ],
        address="1 Courthouse Way, Boston, MA 02210",
        phone="(617) 748-9152",
        website="https://www.mad.uscourts.gov",
        emergency_procedures=True,
    ),
    _court(
        "barnstable-superior",
        "Barnstable Superior Court",
        CourtClass.SUPERIOR,
        "Barnstable County",
        [
            "Civil Action", "Motion", "Answer", "Discovery", "Summary Judgment",
            "Injunctive Relief", "Appeal from District Court",
        ],
        [
            "MassCourts e-filing system",
            "Attorney BBO number required",
            "Service requirements per Mass. R. Civ. P.",
            "Filing fees required",
        ],
        address="3195 Main St, Barnstable, MA 02630",
        phone="(508) 375-6684",
        website="https://www.mass.gov/locations/barnstable-superior-court",
        emergency_procedures=True,
    ),
    _court(
        "barnstable-probate",
        "Barnstable Probate and Family Court",
        CourtClass.PROBATE_FAMILY,
        "Barnstable County",
        [
            "Petition for Divorce", "Custody Motion", "Probate Petition",
            "Guardianship Petition", "Adoption Petition", "Name Change",
            "Will Contest", "Estate Administration", "Trust Matters",
            "Domestic Relations", "Child Support", "Restraining Order",
        ],
        [
            "MassCourts e-filing for most cases",
            "Certified copies for vital records",
            "Guardian ad litem appointments when required",
            "Mandatory disclosure requirements",
            "Financial statements in divorce cases",
        ],
        address="3195 Main St, Barnstable, MA 02630",
        phone="(508) 375-6710",
        website="https://www.mass.gov/locations/barnstable-probate-and-family-court",
        emergency_procedures=True,
    ),
    _court(
        "barnstable-district",
        "Barnstable District Court",
        CourtClass.DISTRICT,
        "Barnstable County",
        [
            "Small Claims", "Civil Complaint", "Criminal Complaint",
            "Restraining Order", "Motor Vehicle Citation",
            "Housing Matters", "Summary Process",
        ],
        [
            "Small claims under $7,000",
            "Civil cases under $25,000",
            "Criminal complaints",
            "Motor vehicle violations",
        ],
        address="3195 Main St, Barnstable, MA 02630",
        phone="(508) 375-6650",
        website="https://www.mass.gov/locations/barnstable-district-court",
        emergency_procedures=True,
    ),
    _court(
        "suffolk-superior",
        "Suffolk Superior Court",
        CourtClass.SUPERIOR,
        "Suffolk County",
        ["Civil Action", "Motion", "Answer", "Discovery", "Summary Judgment"],
        [
            "MassCourts e-filing system",
            "Attorney BBO number required",
            "Service requirements per Mass. R. Civ. P.",
        ],
        address="3 Pemberton Square, Boston, MA 02108",
        phone="(617) 788-8130",
        website="https://www.mass.gov/locations/suffolk-superior-court",
        emergency_procedures=True,
    ),
    _court(
        "middlesex-probate",
        "Middlesex Probate and Family Court",
        CourtClass.PROBATE_FAMILY,
        "Middlesex County",
        [
            "Petition for Divorce", "Custody Motion", "Probate Petition",
            "Guardianship Petition", "Adoption Petition",
        ],
        [
            "MassCourts e-filing for most cases",
            "Certified copies for vital records",
            "Financial statements in divorce cases",
        ],
        address="208 Cambridge St, Cambridge, MA 02141",
        phone="(617) 768-5800",
        website="https://www.mass.gov/locations/middlesex-probate-and-family-court",
        emergency_procedures=True,
    ),
    _court(
        "worcester-superior",
        "Worcester Superior Court",
        CourtClass.SUPERIOR,
        "Worcester County",
        ["Civil Action", "Motion", "Answer", "Discovery"],
        [
            "MassCourts e-filing system",
            "Attorney BBO number required",
        ],
        address="225 Main St, Worcester, MA 01608",
        phone="(508) 831-2200",
        website="https://www.mass.gov/locations/worcester-superior-court",
        emergency_procedures=True,
    ),
    _court(
        "hampden-probate",
        "Hampden Probate and Family Court",
        CourtClass.PROBATE_FAMILY,
        "Hampden County",
        ["Petition for Divorce", "Custody Motion", "Probate Petition"],
        [
            "MassCourts e-filing for most cases",
            "Certified copies for vital records",
        ],
        address="50 State St, Springfield, MA 01103",
        phone="(413) 748-7758",
        website="https://www.mass.gov/locations/hampden-probate-and-family-court",
        emergency_procedures=True,
    ),
)


# =============================================================================
# REGISTRY
# =============================================================================

class CourtRegistry:
    """
    Read-only lookup over a fixed set of courts.

    Safe to share between concurrent requests: nothing here mutates
    after construction.
    """

    def __init__(self, courts: Iterable[CourtEntity] = MASSACHUSETTS_COURTS):
        self._courts: dict[str, CourtEntity] = {}
        for court in courts:
            if court.id in self._courts:
                raise ValueError(f"Duplicate court id: {court.id}")
            self._courts[court.id] = court

    def __contains__(self, court_id: str) -> bool:
        return court_id in self._courts

    def __len__(self) -> int:
        return len(self._courts)

    def get_court(self, court_id: str) -> Optional[CourtEntity]:
        """Court by id, or None when unknown."""
        return self._courts.get(court_id)

    def list_courts(self) -> list[CourtEntity]:
        return list(self._courts.values())

    def list_by_class(self, court_class: CourtClass) -> list[CourtEntity]:
        return [c for c in self._courts.values() if c.court_class == court_class]

    def get_courts_by_jurisdiction(self, jurisdiction: str) -> list[CourtEntity]:
        """Courts whose jurisdiction label contains the text (case-insensitive)."""
        needle = jurisdiction.lower()
        return [c for c in self._courts.values() if needle in c.jurisdiction_label.lower()]

    def validate_document_for_court(self, document_type: str, court_id: str) -> CourtValidation:
        """
        Check whether a court accepts a document type.

        Unknown courts are reported as invalid with no requirements.
        Known courts always return their filing requirements, even when
        the document type is rejected.
        """
        court = self._courts.get(court_id)
        if court is None:
            return CourtValidation(
                is_valid=False,
                issues=[INVALID_COURT_ISSUE],
                requirements=[],
                court_found=False,
            )

        issues = []
        if not court.accepts(document_type):
            issues.append(f'Document type "{document_type}" not accepted by {court.name}')

        return CourtValidation(
            is_valid=not issues,
            issues=issues,
            requirements=list(court.filing_requirements),
        )

    def get_filing_requirements(self, court_id: str, document_type: str) -> FilingRequirements:
        """General requirements for the court plus the document-type extras."""
        court = self._courts.get(court_id)
        if court is None:
            return FilingRequirements(general=[], specific=[], deadlines=[])

        specific, deadlines = get_document_type_specific_requirements(document_type)
        return FilingRequirements(
            general=list(court.filing_requirements),
            specific=specific,
            deadlines=deadlines,
        )


@lru_cache
def get_court_registry() -> CourtRegistry:
    """Process-wide registry over the Massachusetts seed data."""
    return CourtRegistry()

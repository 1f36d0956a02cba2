"""
Compliance Aggregator.

Combines the classifier's guess, the court registry and the fixed CM/ECF
rule checks into one DocumentAnalysisResult. Pure apart from the
classifier call; persisting the result is the caller's job.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Optional

from app.core.config import Settings
from app.services.courts.compliance import check_basic_compliance
from app.services.courts.emergency import EmergencyFilingType, emergency_type_for_document
from app.services.courts.registry import CourtRegistry, get_document_type_specific_requirements
from app.services.document_classifier import Classification, DocumentClassifier, classify_document

logger = logging.getLogger(__name__)


@dataclass
class CourtValidationBlock:
    suggested_court_id: str
    is_valid_for_court: bool
    filing_requirements: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "suggestedCourtId": self.suggested_court_id,
            "isValidForCourt": self.is_valid_for_court,
            "filingRequirements": list(self.filing_requirements),
        }


@dataclass
class ComplianceDetails:
    hipaa_compliant: bool
    format_compliant: bool
    content_complete: bool
    issues: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "hipaaCompliant": self.hipaa_compliant,
            "formatCompliant": self.format_compliant,
            "contentComplete": self.content_complete,
            "issues": list(self.issues),
        }


@dataclass
class DocumentAnalysisResult:
    """Aggregate analysis attached to a stored document."""
    doc_type: str
    jurisdiction: str
    compliance_summary: str
    recommendations: list[str]
    extracted_data: dict[str, Any]
    court_validation: CourtValidationBlock
    compliance_details: ComplianceDetails
    classification_degraded: bool = False
    failure_reason: Optional[str] = None

    @property
    def emergency_type(self) -> Optional[EmergencyFilingType]:
        return emergency_type_for_document(self.doc_type)

    @property
    def is_emergency(self) -> bool:
        return self.emergency_type is not None

    def to_dict(self) -> dict:
        return {
            "docType": self.doc_type,
            "jurisdiction": self.jurisdiction,
            "complianceSummary": self.compliance_summary,
            "recommendations": list(self.recommendations),
            "extractedData": dict(self.extracted_data),
            "courtValidation": self.court_validation.to_dict(),
            "complianceDetails": self.compliance_details.to_dict(),
        }


def _dedupe(items: list[str]) -> list[str]:
    seen: set[str] = set()
    result = []
    for item in items:
        if item not in seen:
            seen.add(item)
            result.append(item)
    return result


class ComplianceAggregator:
    """
    Orchestrates one document analysis.

    The registry is injected, never looked up from module state, so tests
    can supply a small fixed registry and a stub classifier.
    """

    def __init__(
        self,
        registry: CourtRegistry,
        classifier: DocumentClassifier,
        settings: Settings,
    ):
        self.registry = registry
        self.classifier = classifier
        self.settings = settings

    async def analyze_document(
        self,
        text: str,
        filename: str,
        owner_court_id: Optional[str] = None,
    ) -> DocumentAnalysisResult:
        classification = await classify_document(
            self.classifier,
            text,
            filename,
            self.settings,
            hinted_court_id=owner_court_id,
        )
        return self.assemble(classification, text, owner_court_id)

    def assemble(
        self,
        classification: Classification,
        text: str,
        owner_court_id: Optional[str] = None,
    ) -> DocumentAnalysisResult:
        """Merge a resolved classification with the registry and rule checks."""
        suggested_court_id = classification.suggested_court_id or self.settings.default_court_id
        target_court_id = owner_court_id or suggested_court_id

        court_check = self.registry.validate_document_for_court(
            classification.doc_type, target_court_id
        )
        if not court_check.court_found:
            logger.info(
                "Analysis targeted unknown court %s",
                target_court_id,
                extra={"court_id": target_court_id},
            )

        basic = check_basic_compliance(text)
        specific, _deadlines = get_document_type_specific_requirements(classification.doc_type)

        return DocumentAnalysisResult(
            doc_type=classification.doc_type,
            jurisdiction=classification.jurisdiction,
            compliance_summary=classification.compliance,
            recommendations=_dedupe(classification.recommendations + specific),
            extracted_data=classification.extracted_data,
            court_validation=CourtValidationBlock(
                suggested_court_id=suggested_court_id,
                is_valid_for_court=court_check.is_valid,
                filing_requirements=court_check.requirements,
            ),
            compliance_details=ComplianceDetails(
                hipaa_compliant=classification.hipaa_compliant,
                format_compliant=classification.format_compliant,
                content_complete=classification.content_complete,
                issues=_dedupe(classification.issues + court_check.issues + basic.issues),
            ),
            classification_degraded=classification.degraded,
            failure_reason=classification.failure_reason,
        )

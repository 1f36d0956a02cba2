# Massachusetts court rules: registry, CM/ECF checks, emergency filings

from app.services.courts.compliance import (
    BasicComplianceResult,
    check_basic_compliance,
    format_for_cmecf,
)
from app.services.courts.emergency import (
    EmergencyFilingType,
    EmergencyFilingValidation,
    EmergencyFilingValidator,
    FactorJudge,
    KeywordFactorJudge,
    LLMFactorJudge,
    emergency_type_for_document,
)
from app.services.courts.registry import (
    CourtClass,
    CourtEntity,
    CourtRegistry,
    CourtValidation,
    FilingRequirements,
    get_court_registry,
    get_document_type_specific_requirements,
)

__all__ = [
    "BasicComplianceResult",
    "check_basic_compliance",
    "format_for_cmecf",
    "EmergencyFilingType",
    "EmergencyFilingValidation",
    "EmergencyFilingValidator",
    "FactorJudge",
    "KeywordFactorJudge",
    "LLMFactorJudge",
    "emergency_type_for_document",
    "CourtClass",
    "CourtEntity",
    "CourtRegistry",
    "CourtValidation",
    "FilingRequirements",
    "get_court_registry",
    "get_document_type_specific_requirements",
]

"""
Emergency Filing Validator (Fed. R. Civ. P. 65).

Checks a TRO or preliminary injunction against its legal-standard
checklist. Whether the text "addresses" a factor is decided by a
pluggable FactorJudge: a deterministic keyword judge, or one that asks
the LLM. If the judge cannot give an answer for every factor, the result
is the fail-safe "manual review" outcome, never a pass.
"""

import asyncio
import logging
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from app.services.openai_ai import OpenAIService

logger = logging.getLogger(__name__)

MANUAL_REVIEW_ISSUE = "Manual review required"
CONSULT_ATTORNEY = "Consult with attorney"


class EmergencyFilingType(str, Enum):
    TRO = "TRO"
    PRELIMINARY_INJUNCTION = "PRELIMINARY_INJUNCTION"


@dataclass(frozen=True)
class ChecklistItem:
    """One element of a legal standard the filing must address."""
    key: str
    description: str
    issue: str
    remediation: str
    pattern: re.Pattern


def _rx(pattern: str) -> re.Pattern:
    return re.compile(pattern, re.IGNORECASE)


_IRREPARABLE = _rx(r"\birreparabl[ey]\b")

TRO_CHECKLIST: tuple[ChecklistItem, ...] = (
    ChecklistItem(
        key="irreparable_injury",
        description="Immediate and irreparable injury, loss, or damage will result before the adverse party can be heard",
        issue="Missing showing of immediate and irreparable injury",
        remediation=(
            "Add an affidavit or verified complaint describing the immediate and irreparable "
            "injury that will occur before the opposing party can be heard"
        ),
        pattern=_IRREPARABLE,
    ),
    ChecklistItem(
        key="notice_efforts",
        description="Efforts made to give notice to the opposing party, or reasons notice should not be required",
        issue="Missing description of efforts to notify the opposing party",
        remediation=(
            "Certify in writing the efforts made to give notice to the opposing party "
            "and the reasons why notice should not be required"
        ),
        pattern=_rx(
            r"\b(?:notif(?:y|ied|ying|ication)|notice\s+(?:to|of|was|has\s+been)|served"
            r"|attempt(?:ed|s)?\s+to\s+(?:contact|reach|notify)|contacted)\b"
        ),
    ),
    ChecklistItem(
        key="specific_facts",
        description="Specific factual assertions in an affidavit or verified statement",
        issue="Missing specific factual assertions supporting the request",
        remediation=(
            "Include a sworn statement of specific facts (dates, events, parties) "
            "supporting the emergency relief"
        ),
        pattern=_rx(
            r"\b(?:statement\s+of\s+(?:material\s+)?facts|factual\s+(?:background|allegations|basis)"
            r"|affidavit|declaration|sworn|on\s+or\s+about)\b"
        ),
    ),
)

TRO_GENERAL_GUIDANCE = (
    "A security bond may be required under Fed. R. Civ. P. 65(c); be prepared to address the amount",
)

# Winter v. NRDC four-factor test
PRELIMINARY_INJUNCTION_CHECKLIST: tuple[ChecklistItem, ...] = (
    ChecklistItem(
        key="likelihood_of_success",
        description="Likelihood of success on the merits",
        issue="Missing showing of likelihood of success on the merits",
        remediation="Argue the likelihood of success on the merits with citations to controlling authority",
        pattern=_rx(
            r"likel(?:y|ihood)\s+(?:of|to)\s+succe(?:ss|ed)|succe(?:ss|ed)\w*\s+on\s+the\s+merits"
        ),
    ),
    ChecklistItem(
        key="irreparable_harm",
        description="Irreparable harm in the absence of preliminary relief",
        issue="Missing showing of irreparable harm absent relief",
        remediation="Explain the irreparable harm the movant will suffer without preliminary relief",
        pattern=_IRREPARABLE,
    ),
    ChecklistItem(
        key="balance_of_equities",
        description="The balance of equities tips in the movant's favor",
        issue="Missing showing that the balance of equities favors the movant",
        remediation="Address the balance of equities and show that the hardships favor the movant",
        pattern=_rx(r"balance\s+of\s+(?:the\s+)?(?:equities|hardships?|harms?)"),
    ),
    ChecklistItem(
        key="public_interest",
        description="An injunction is in the public interest",
        issue="Missing showing that an injunction serves the public interest",
        remediation="Explain how the injunction serves the public interest",
        pattern=_rx(r"public\s+interest"),
    ),
)

CHECKLISTS: dict[EmergencyFilingType, tuple[ChecklistItem, ...]] = {
    EmergencyFilingType.TRO: TRO_CHECKLIST,
    EmergencyFilingType.PRELIMINARY_INJUNCTION: PRELIMINARY_INJUNCTION_CHECKLIST,
}

GENERAL_GUIDANCE: dict[EmergencyFilingType, tuple[str, ...]] = {
    EmergencyFilingType.TRO: TRO_GENERAL_GUIDANCE,
    EmergencyFilingType.PRELIMINARY_INJUNCTION: (),
}

_EMERGENCY_DOCUMENT_TYPES = {
    "tro": EmergencyFilingType.TRO,
    "temporary restraining order": EmergencyFilingType.TRO,
    "motion for temporary restraining order": EmergencyFilingType.TRO,
    "preliminary injunction": EmergencyFilingType.PRELIMINARY_INJUNCTION,
    "motion for preliminary injunction": EmergencyFilingType.PRELIMINARY_INJUNCTION,
}


def emergency_type_for_document(document_type: Optional[str]) -> Optional[EmergencyFilingType]:
    """Map a classified document type onto an emergency filing type, if any."""
    if not document_type:
        return None
    return _EMERGENCY_DOCUMENT_TYPES.get(document_type.strip().lower())


# =============================================================================
# RESULT
# =============================================================================

@dataclass
class EmergencyFilingValidation:
    filing_type: EmergencyFilingType
    issues: list[str] = field(default_factory=list)
    recommendations: list[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.issues

    @classmethod
    def manual_review(cls, filing_type: EmergencyFilingType) -> "EmergencyFilingValidation":
        return cls(
            filing_type=filing_type,
            issues=[MANUAL_REVIEW_ISSUE],
            recommendations=[CONSULT_ATTORNEY],
        )

    def to_dict(self) -> dict:
        return {
            "filingType": self.filing_type.value,
            "isValid": self.is_valid,
            "issues": list(self.issues),
            "recommendations": list(self.recommendations),
        }


# =============================================================================
# JUDGES
# =============================================================================

class FactorJudge(ABC):
    """Decides which checklist items a document addresses."""

    @abstractmethod
    async def assess(
        self,
        text: str,
        filing_type: EmergencyFilingType,
        checklist: tuple[ChecklistItem, ...],
    ) -> dict[str, bool]:
        """Map each checklist key to whether the text addresses it."""


class KeywordFactorJudge(FactorJudge):
    """Deterministic judge: a factor is addressed if its pattern occurs."""

    async def assess(self, text, filing_type, checklist):
        return {item.key: bool(item.pattern.search(text)) for item in checklist}


FACTOR_SYSTEM_PROMPT = """You are a legal compliance expert for Massachusetts Federal District Court emergency filings.
Judge whether the document addresses each listed element of the Fed. R. Civ. P. 65 standard with \
supporting text (not merely by naming it).
Respond with JSON: {"factors": {"<key>": true or false, ...}} using exactly the keys given."""


class LLMFactorJudge(FactorJudge):
    """Asks the LLM to judge each factor."""

    def __init__(self, service: OpenAIService, max_chars: int = 3000):
        self.service = service
        self.max_chars = max_chars

    async def assess(self, text, filing_type, checklist):
        elements = "\n".join(f"- {item.key}: {item.description}" for item in checklist)
        payload = await self.service.complete_json(
            FACTOR_SYSTEM_PROMPT,
            f"Filing type: {filing_type.value}\nElements:\n{elements}\n\n"
            f"Document content: {text[: self.max_chars]}",
        )
        factors = payload.get("factors")
        if not isinstance(factors, dict):
            return {}
        return {key: value for key, value in factors.items() if isinstance(value, bool)}


# =============================================================================
# VALIDATOR
# =============================================================================

class EmergencyFilingValidator:
    """Single-shot validation of an emergency filing; holds no state between calls."""

    def __init__(self, judge: FactorJudge, timeout_seconds: float = 30.0):
        self.judge = judge
        self.timeout_seconds = timeout_seconds

    async def validate(self, text: str, filing_type: EmergencyFilingType) -> EmergencyFilingValidation:
        checklist = CHECKLISTS[filing_type]

        try:
            verdicts = await asyncio.wait_for(
                self.judge.assess(text, filing_type, checklist),
                timeout=self.timeout_seconds,
            )
        except Exception as e:
            logger.warning(
                "Emergency factor judgment unavailable for %s: %s",
                filing_type.value,
                e,
                exc_info=True,
            )
            return EmergencyFilingValidation.manual_review(filing_type)

        if any(item.key not in verdicts for item in checklist):
            logger.warning(
                "Emergency factor judgment inconclusive for %s",
                filing_type.value,
                extra={"missing": [i.key for i in checklist if i.key not in verdicts]},
            )
            return EmergencyFilingValidation.manual_review(filing_type)

        unmet = [item for item in checklist if not verdicts[item.key]]
        return EmergencyFilingValidation(
            filing_type=filing_type,
            issues=[item.issue for item in unmet],
            recommendations=[item.remediation for item in unmet] + list(GENERAL_GUIDANCE[filing_type]),
        )

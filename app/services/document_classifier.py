"""
Document Classifier Adapter.

Wraps the external AI classification call. The classifier's answer is
advisory: it may time out, fail, or come back with fields missing, and
none of that may break an upload. Every field of `ClassifierOutput` is
optional and resolved independently to a documented default by
`ClassifierOutput.resolve()`; a total failure resolves to the same
defaults with `degraded=True`.
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Iterable, Optional

from pydantic import BaseModel

from app.core.config import Settings
from app.services.openai_ai import OpenAIService

logger = logging.getLogger(__name__)

UNKNOWN_DOCUMENT_TYPE = "Unknown Document Type"
NEEDS_REVIEW = "Needs Review"
MANUAL_REVIEW_REQUIRED = "Manual review required"


# =============================================================================
# CLASSIFIER OUTPUT
# =============================================================================

def _as_str(value: Any) -> Optional[str]:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def _as_str_list(value: Any) -> Optional[list[str]]:
    if not isinstance(value, list):
        return None
    return [item.strip() for item in value if isinstance(item, str) and item.strip()]


def _as_bool(value: Any) -> Optional[bool]:
    return value if isinstance(value, bool) else None


def _as_dict(value: Any) -> Optional[dict[str, Any]]:
    return dict(value) if isinstance(value, dict) else None


# payload key(s) accepted for each field, first match wins
_PAYLOAD_KEYS: dict[str, tuple[tuple[str, ...], Any]] = {
    "doc_type": (("docType", "doc_type", "documentType"), _as_str),
    "jurisdiction": (("jurisdiction",), _as_str),
    "compliance": (("compliance", "complianceSummary"), _as_str),
    "recommendations": (("recommendations",), _as_str_list),
    "extracted_data": (("extractedData", "extracted_data"), _as_dict),
    "suggested_court_id": (("suggestedCourtId", "suggested_court_id", "courtId"), _as_str),
    "hipaa_compliant": (("hipaaCompliant", "hipaa_compliant"), _as_bool),
    "format_compliant": (("formatCompliant", "format_compliant"), _as_bool),
    "content_complete": (("contentComplete", "content_complete"), _as_bool),
    "issues": (("issues",), _as_str_list),
}


class ClassifierOutput(BaseModel):
    """Best-effort structured guess; None means the classifier did not say."""
    doc_type: Optional[str] = None
    jurisdiction: Optional[str] = None
    compliance: Optional[str] = None
    recommendations: Optional[list[str]] = None
    extracted_data: Optional[dict[str, Any]] = None
    suggested_court_id: Optional[str] = None
    hipaa_compliant: Optional[bool] = None
    format_compliant: Optional[bool] = None
    content_complete: Optional[bool] = None
    issues: Optional[list[str]] = None

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "ClassifierOutput":
        """
        Build from a raw JSON object, keeping each field that has the right
        shape and dropping the rest (a bad field never poisons good ones).
        """
        values: dict[str, Any] = {}
        for name, (keys, coerce) in _PAYLOAD_KEYS.items():
            for key in keys:
                if key in payload:
                    coerced = coerce(payload[key])
                    if coerced is not None:
                        values[name] = coerced
                        break
        return cls(**values)

    def resolve(self, default_jurisdiction: str) -> "Classification":
        return Classification(
            doc_type=self.doc_type or UNKNOWN_DOCUMENT_TYPE,
            jurisdiction=self.jurisdiction or default_jurisdiction,
            compliance=self.compliance or NEEDS_REVIEW,
            recommendations=(
                list(self.recommendations)
                if self.recommendations is not None
                else [MANUAL_REVIEW_REQUIRED]
            ),
            extracted_data=dict(self.extracted_data or {}),
            suggested_court_id=self.suggested_court_id,
            hipaa_compliant=bool(self.hipaa_compliant),
            format_compliant=bool(self.format_compliant),
            content_complete=bool(self.content_complete),
            issues=list(self.issues or []),
        )


@dataclass
class Classification:
    """Classifier output with every field resolved to a concrete value."""
    doc_type: str
    jurisdiction: str
    compliance: str
    recommendations: list[str]
    extracted_data: dict[str, Any]
    suggested_court_id: Optional[str]
    hipaa_compliant: bool
    format_compliant: bool
    content_complete: bool
    issues: list[str] = field(default_factory=list)
    degraded: bool = False
    failure_reason: Optional[str] = None

    @classmethod
    def fallback(cls, default_jurisdiction: str, reason: str) -> "Classification":
        resolved = ClassifierOutput().resolve(default_jurisdiction)
        resolved.degraded = True
        resolved.failure_reason = reason
        return resolved


# =============================================================================
# CLASSIFIERS
# =============================================================================

class DocumentClassifier(ABC):
    """
    Something that can guess a document's type and compliance signals.

    Implementations may raise; `classify_document` turns any failure into
    the fallback classification.
    """

    @abstractmethod
    async def classify(
        self,
        text: str,
        filename: str,
        hinted_court_id: Optional[str] = None,
    ) -> ClassifierOutput:
        ...


CLASSIFIER_SYSTEM_PROMPT = """You are a legal document analysis expert specializing in Massachusetts court filings, \
in particular the U.S. District Court for the District of Massachusetts.
Analyze the provided document and determine its type, the court it belongs in, and its compliance with \
CM/ECF requirements, and provide recommendations.
Respond with JSON in this exact format: {
  "docType": "string - specific document type, e.g. Motion, Civil Complaint, TRO, Petition for Divorce",
  "jurisdiction": "string - applicable jurisdiction",
  "compliance": "string - Compliant or Needs Review, with specific issues",
  "recommendations": ["array of specific recommendations"],
  "extractedData": {"key": "value pairs: parties, case number, dates, amounts"},
  "suggestedCourtId": "string - one of the known court ids",
  "hipaaCompliant": true,
  "formatCompliant": true,
  "contentComplete": true,
  "issues": ["array of compliance issues"]
}"""


class LLMDocumentClassifier(DocumentClassifier):
    """Classifier backed by the OpenAI chat-completions API."""

    def __init__(self, service: OpenAIService, court_ids: Iterable[str] = ()):
        self.service = service
        self.court_ids = list(court_ids)

    async def classify(
        self,
        text: str,
        filename: str,
        hinted_court_id: Optional[str] = None,
    ) -> ClassifierOutput:
        lines = [f"Filename: {filename}"]
        if self.court_ids:
            lines.append(f"Known court ids: {', '.join(self.court_ids)}")
        if hinted_court_id:
            lines.append(f"The filer intends to file with court id: {hinted_court_id}")
        lines.append(f"Content: {text}")

        payload = await self.service.complete_json(
            CLASSIFIER_SYSTEM_PROMPT,
            "Analyze this legal document:\n" + "\n".join(lines),
        )
        return ClassifierOutput.from_payload(payload)


# =============================================================================
# SAFE CLASSIFICATION
# =============================================================================

async def classify_document(
    classifier: DocumentClassifier,
    text: str,
    filename: str,
    settings: Settings,
    hinted_court_id: Optional[str] = None,
    default_jurisdiction: Optional[str] = None,
) -> Classification:
    """
    Classify with a bounded prefix of the text and a bounded wait.

    Never raises for classifier trouble: timeouts and errors resolve to the
    fallback classification (flagged `degraded`), partial answers resolve
    field by field.
    """
    jurisdiction = default_jurisdiction or settings.default_jurisdiction
    prefix = text[: max(settings.classifier_max_chars, 0)]

    try:
        output = await asyncio.wait_for(
            classifier.classify(prefix, filename, hinted_court_id),
            timeout=settings.classifier_timeout_seconds,
        )
    except asyncio.TimeoutError:
        logger.warning(
            "Classifier timed out after %.1fs for %s",
            settings.classifier_timeout_seconds,
            filename,
            extra={"upload_filename": filename},
        )
        return Classification.fallback(jurisdiction, "timeout")
    except Exception as e:
        logger.warning(
            "Classifier failed for %s: %s",
            filename,
            e,
            exc_info=True,
            extra={"upload_filename": filename},
        )
        return Classification.fallback(jurisdiction, str(e) or type(e).__name__)

    if output is None:
        return Classification.fallback(jurisdiction, "empty response")
    return output.resolve(jurisdiction)

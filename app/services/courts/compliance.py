"""
CM/ECF basic compliance checks and caption formatting.
"""

from dataclasses import dataclass, field
from typing import Optional

SIGNATURE_MARKER = "/s/"
MIN_FILING_LENGTH = 100

MISSING_SIGNATURE = "Missing electronic signature (/s/)"
MISSING_CASE_ID = "Missing case identification"
TOO_SHORT = "Document appears too short for filing"


@dataclass
class BasicComplianceResult:
    is_compliant: bool
    issues: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {"isCompliant": self.is_compliant, "issues": list(self.issues)}


def check_basic_compliance(text: str) -> BasicComplianceResult:
    """
    Run the fixed CM/ECF checks against document text.

    Every check runs regardless of the others, so one pass reports all
    problems, always in the order signature, case identification, length.
    """
    issues: list[str] = []
    lowered = text.lower()

    if SIGNATURE_MARKER not in text:
        issues.append(MISSING_SIGNATURE)

    if "case" not in lowered and "civil action" not in lowered:
        issues.append(MISSING_CASE_ID)

    if len(text) < MIN_FILING_LENGTH:
        issues.append(TOO_SHORT)

    return BasicComplianceResult(is_compliant=not issues, issues=issues)


def format_for_cmecf(
    content: str,
    case_number: Optional[str] = None,
    parties: Optional[str] = None,
    document_type: Optional[str] = None,
) -> str:
    """Wrap content in the District of Massachusetts caption and signature block."""
    header = (
        "\n"
        "UNITED STATES DISTRICT COURT\n"
        "FOR THE DISTRICT OF MASSACHUSETTS\n"
        "\n"
        f"{parties or '[PARTIES TO BE INSERTED]'}\n"
        "\n"
        f"Civil Action No. {case_number or '[CASE NUMBER TO BE INSERTED]'}\n"
        "\n"
        f"{document_type or 'DOCUMENT'}\n"
        "\n"
    )

    footer = (
        "\n\n"
        "Respectfully submitted,\n"
        "\n"
        "/s/ [ATTORNEY NAME]\n"
        "[Attorney Name]\n"
        "[Bar Number]\n"
        "[Address]\n"
        "[Phone]\n"
        "[Email]\n"
    )

    return header + content + footer

"""
LegalEase File - Compliance Aggregator Tests
"""

import pytest

from app.core.config import Settings
from app.services.courts.compliance import MISSING_SIGNATURE
from app.services.courts.registry import INVALID_COURT_ISSUE, CourtRegistry
from app.services.document_analysis import ComplianceAggregator
from app.services.document_classifier import (
    MANUAL_REVIEW_REQUIRED,
    UNKNOWN_DOCUMENT_TYPE,
    ClassifierOutput,
)
from tests.stubs import StubClassifier

pytestmark = pytest.mark.anyio

MOTION_TEXT = (
    "Civil Action No. 1:24-cv-00001. Defendant moves to dismiss the complaint for the "
    "reasons stated in the memorandum filed herewith. /s/ Jane Doe"
)


@pytest.fixture
def agg_settings():
    return Settings(
        classifier_timeout_seconds=0.05,
        default_court_id="ma-fed-district",
        default_jurisdiction="Massachusetts",
    )


def make_aggregator(settings, **stub_kwargs) -> ComplianceAggregator:
    return ComplianceAggregator(CourtRegistry(), StubClassifier(**stub_kwargs), settings)


async def test_motion_for_federal_court_is_clean(agg_settings):
    """Accepted type with a complete filing yields no issues."""
    assert 100 <= len(MOTION_TEXT) <= 160
    aggregator = make_aggregator(agg_settings, output=ClassifierOutput(doc_type="Motion"))

    result = await aggregator.analyze_document(MOTION_TEXT, "motion.txt", owner_court_id="ma-fed-district")

    assert result.doc_type == "Motion"
    assert result.court_validation.is_valid_for_court is True
    assert result.court_validation.suggested_court_id == "ma-fed-district"
    assert "CM/ECF electronic filing required" in result.court_validation.filing_requirements
    assert result.compliance_details.issues == []
    assert result.classification_degraded is False


async def test_divorce_petition_rejected_by_federal_court(agg_settings):
    aggregator = make_aggregator(agg_settings, output=ClassifierOutput(doc_type="Petition for Divorce"))

    result = await aggregator.analyze_document(MOTION_TEXT, "divorce.txt", owner_court_id="ma-fed-district")

    assert result.court_validation.is_valid_for_court is False
    rejection = [i for i in result.compliance_details.issues if "Petition for Divorce" in i]
    assert len(rejection) == 1
    assert "U.S. District Court for the District of Massachusetts" in rejection[0]
    # document-type-specific requirements appended after classifier recommendations
    assert result.recommendations[0] == MANUAL_REVIEW_REQUIRED
    assert "Financial Statement (Long Form) required" in result.recommendations


async def test_classifier_suggestion_used_when_no_owner_court(agg_settings):
    output = ClassifierOutput(doc_type="Petition for Divorce", suggested_court_id="middlesex-probate")
    aggregator = make_aggregator(agg_settings, output=output)

    result = await aggregator.analyze_document(MOTION_TEXT, "divorce.txt")

    assert result.court_validation.suggested_court_id == "middlesex-probate"
    assert result.court_validation.is_valid_for_court is True


async def test_owner_court_takes_precedence_over_suggestion(agg_settings):
    output = ClassifierOutput(doc_type="Petition for Divorce", suggested_court_id="middlesex-probate")
    aggregator = make_aggregator(agg_settings, output=output)

    result = await aggregator.analyze_document(MOTION_TEXT, "divorce.txt", owner_court_id="ma-fed-district")

    assert result.court_validation.suggested_court_id == "middlesex-probate"
    assert result.court_validation.is_valid_for_court is False


async def test_default_court_used_when_no_suggestion(agg_settings):
    aggregator = make_aggregator(agg_settings, output=ClassifierOutput(doc_type="TRO"))
    result = await aggregator.analyze_document(MOTION_TEXT, "tro.txt")
    assert result.court_validation.suggested_court_id == "ma-fed-district"
    assert result.court_validation.is_valid_for_court is True
    assert result.is_emergency is True


async def test_unknown_court_degrades_without_raising(agg_settings):
    aggregator = make_aggregator(agg_settings, output=ClassifierOutput(doc_type="Motion"))
    result = await aggregator.analyze_document(MOTION_TEXT, "m.txt", owner_court_id="atlantis")
    assert result.court_validation.is_valid_for_court is False
    assert result.court_validation.filing_requirements == []
    assert INVALID_COURT_ISSUE in result.compliance_details.issues


async def test_rule_check_issues_are_merged(agg_settings):
    output = ClassifierOutput(doc_type="Motion", issues=["Exhibit A missing"])
    aggregator = make_aggregator(agg_settings, output=output)
    result = await aggregator.analyze_document(MOTION_TEXT.replace("/s/", ""), "m.txt")
    assert result.compliance_details.issues == ["Exhibit A missing", MISSING_SIGNATURE]


@pytest.mark.parametrize(
    "stub_kwargs",
    [
        {"error": RuntimeError("boom")},
        {"error": ValueError("malformed")},
        {"delay": 1.0},
        {"output": ClassifierOutput()},
        {"output": ClassifierOutput(jurisdiction="Federal")},
    ],
    ids=["exception", "malformed", "timeout", "empty", "partial"],
)
async def test_every_failure_mode_yields_a_complete_result(agg_settings, stub_kwargs):
    aggregator = make_aggregator(agg_settings, **stub_kwargs)
    result = await aggregator.analyze_document("short", "x.txt")

    data = result.to_dict()
    for key in ("docType", "jurisdiction", "complianceSummary", "recommendations", "extractedData"):
        assert data[key] is not None
    for key in ("suggestedCourtId", "isValidForCourt", "filingRequirements"):
        assert data["courtValidation"][key] is not None
    for key in ("hipaaCompliant", "formatCompliant", "contentComplete", "issues"):
        assert data["complianceDetails"][key] is not None
    assert result.doc_type == UNKNOWN_DOCUMENT_TYPE
    assert result.court_validation.is_valid_for_court is False


async def test_empty_output_is_not_degraded_but_failure_is(agg_settings):
    ok = await make_aggregator(agg_settings, output=ClassifierOutput()).analyze_document("t", "a.txt")
    failed = await make_aggregator(agg_settings, error=RuntimeError("x")).analyze_document("t", "a.txt")
    assert ok.classification_degraded is False
    assert failed.classification_degraded is True


async def test_to_dict_wire_shape(agg_settings):
    aggregator = make_aggregator(agg_settings, output=ClassifierOutput(doc_type="Motion", hipaa_compliant=True))
    data = (await aggregator.analyze_document(MOTION_TEXT, "m.txt")).to_dict()
    assert set(data) == {
        "docType",
        "jurisdiction",
        "complianceSummary",
        "recommendations",
        "extractedData",
        "courtValidation",
        "complianceDetails",
    }
    assert data["complianceDetails"]["hipaaCompliant"] is True

"""
LegalEase File - Court Registry Tests
"""

import pytest

from app.services.courts.registry import (
    INVALID_COURT_ISSUE,
    MASSACHUSETTS_COURTS,
    CourtClass,
    CourtRegistry,
    get_court_registry,
    get_document_type_specific_requirements,
)


@pytest.fixture
def registry():
    return CourtRegistry()


# =============================================================================
# Lookup
# =============================================================================

def test_get_court_known_and_unknown(registry):
    court = registry.get_court("ma-fed-district")
    assert court is not None
    assert court.court_class == CourtClass.FEDERAL
    assert registry.get_court("atlantis-supreme") is None


def test_list_by_class(registry):
    probate = registry.list_by_class(CourtClass.PROBATE_FAMILY)
    assert {c.id for c in probate} == {"barnstable-probate", "middlesex-probate", "hampden-probate"}
    assert registry.list_by_class(CourtClass.LAND) == []


def test_get_courts_by_jurisdiction_is_case_insensitive_substring(registry):
    barnstable = registry.get_courts_by_jurisdiction("barnstable")
    assert {c.id for c in barnstable} == {
        "barnstable-superior",
        "barnstable-probate",
        "barnstable-district",
    }


def test_duplicate_court_ids_rejected():
    with pytest.raises(ValueError):
        CourtRegistry([MASSACHUSETTS_COURTS[0], MASSACHUSETTS_COURTS[0]])


def test_shared_registry_is_cached():
    assert get_court_registry() is get_court_registry()
    assert len(get_court_registry()) == len(MASSACHUSETTS_COURTS)


# =============================================================================
# Document / court validation
# =============================================================================

def test_accepted_document_type_is_valid(registry):
    result = registry.validate_document_for_court("Motion", "ma-fed-district")
    assert result.is_valid is True
    assert result.issues == []
    assert "CM/ECF electronic filing required" in result.requirements


def test_rejected_document_type_names_type_and_court(registry):
    result = registry.validate_document_for_court("Petition for Divorce", "ma-fed-district")
    assert result.is_valid is False
    assert len(result.issues) == 1
    assert "Petition for Divorce" in result.issues[0]
    assert "U.S. District Court for the District of Massachusetts" in result.issues[0]
    # requirements still returned so the caller can show what would be needed
    assert result.requirements == list(registry.get_court("ma-fed-district").filing_requirements)


def test_unknown_court_is_invalid_with_no_requirements(registry):
    result = registry.validate_document_for_court("Motion", "nowhere")
    assert result.is_valid is False
    assert result.issues == [INVALID_COURT_ISSUE]
    assert result.requirements == []
    assert result.court_found is False


def test_document_type_match_is_exact(registry):
    assert registry.validate_document_for_court("motion", "ma-fed-district").is_valid is False


@pytest.mark.parametrize("court", MASSACHUSETTS_COURTS, ids=lambda c: c.id)
def test_validation_is_deterministic_and_follows_accepted_types(registry, court):
    for doc_type in ["Motion", "Petition for Divorce", "TRO", "Civil Action", "Small Claims"]:
        first = registry.validate_document_for_court(doc_type, court.id)
        second = registry.validate_document_for_court(doc_type, court.id)
        assert first == second
        assert first.is_valid == (doc_type in court.accepted_document_types)


def test_editing_a_result_does_not_leak_into_the_registry(registry):
    first = registry.validate_document_for_court("Motion", "ma-fed-district")
    first.requirements.append("scribbled by a caller")
    first.issues.append("scribbled by a caller")

    second = registry.validate_document_for_court("Motion", "ma-fed-district")
    assert "scribbled by a caller" not in second.requirements
    assert second.issues == []
    assert "scribbled by a caller" not in registry.get_court("ma-fed-district").filing_requirements

    reqs = registry.get_filing_requirements("ma-fed-district", "TRO")
    reqs.specific.clear()
    assert registry.get_filing_requirements("ma-fed-district", "TRO").specific


# =============================================================================
# Filing requirements
# =============================================================================

def test_document_type_specific_requirements():
    specific, deadlines = get_document_type_specific_requirements("TRO")
    assert "Security bond may be required" in specific
    assert deadlines == ["Hearing within 10 days"]


def test_unknown_document_type_has_no_specific_requirements():
    assert get_document_type_specific_requirements("Haiku") == ([], [])


def test_filing_requirements_combine_general_and_specific(registry):
    reqs = registry.get_filing_requirements("middlesex-probate", "Petition for Divorce")
    assert "Financial statements in divorce cases" in reqs.general
    assert "Certified copy of marriage certificate" in reqs.specific
    assert reqs.deadlines == ["120-day waiting period after service"]


def test_filing_requirements_unknown_type_keeps_general(registry):
    reqs = registry.get_filing_requirements("ma-fed-district", "Haiku")
    assert reqs.general
    assert reqs.specific == []
    assert reqs.deadlines == []


def test_filing_requirements_unknown_court_is_empty(registry):
    reqs = registry.get_filing_requirements("nowhere", "TRO")
    assert (reqs.general, reqs.specific, reqs.deadlines) == ([], [], [])


def test_court_to_dict_uses_wire_names(registry):
    data = registry.get_court("suffolk-superior").to_dict()
    assert data["courtClass"] == "superior"
    assert data["acceptedDocumentTypes"] == sorted(data["acceptedDocumentTypes"])
    assert data["emergencyProcedures"] is True

"""
LegalEase File - Document Store Tests
Status lifecycle, atomic analysis writes and filing history.
"""

import pytest

from app.core.errors import ConflictError
from app.services.document_store import (
    DocumentStatus,
    FilingStatus,
    StatusTransitionError,
    advance_status,
    create_document,
    create_filing,
    delete_document,
    get_document,
    list_documents_for_owner,
    list_filings_for_owner,
    record_analysis,
    serialize_document,
    serialize_filing,
)

pytestmark = pytest.mark.anyio

ANALYSIS = {"docType": "Motion", "courtValidation": {"isValidForCourt": True}}


async def _new_document(session, owner_id="owner-1", filename="motion.txt"):
    return await create_document(
        session,
        owner_id=owner_id,
        filename=filename,
        mime_type="text/plain",
        raw_content=b"Civil Action No. 1 /s/ Jane Doe",
        extracted_text="Civil Action No. 1 /s/ Jane Doe",
    )


async def test_new_document_starts_uploaded(db_session):
    document = await _new_document(db_session)
    assert document.status == DocumentStatus.UPLOADED.value
    assert document.analysis is None
    assert document.byte_size == len(b"Civil Action No. 1 /s/ Jane Doe")
    assert document.is_emergency is False


async def test_record_analysis_sets_status_and_analysis_together(db_session):
    document = await _new_document(db_session)

    updated = await record_analysis(db_session, document.id, ANALYSIS, "Motion", is_emergency=False)

    assert updated.status == DocumentStatus.ANALYZED.value
    assert updated.analysis == ANALYSIS
    assert updated.document_type == "Motion"


async def test_record_analysis_does_not_regress_status(db_session):
    document = await _new_document(db_session)
    await record_analysis(db_session, document.id, ANALYSIS, "Motion", is_emergency=False)
    await advance_status(db_session, document, DocumentStatus.FILED)

    reanalysis = {"docType": "TRO"}
    updated = await record_analysis(db_session, document.id, reanalysis, "TRO", is_emergency=True)

    assert updated.status == DocumentStatus.FILED.value
    assert updated.analysis == reanalysis
    assert updated.is_emergency is True


async def test_record_analysis_unknown_document(db_session):
    assert await record_analysis(db_session, "missing", ANALYSIS, "Motion", False) is None


async def test_status_only_moves_forward(db_session):
    document = await _new_document(db_session)
    await record_analysis(db_session, document.id, ANALYSIS, "Motion", is_emergency=False)

    await advance_status(db_session, document, DocumentStatus.VALIDATED)
    assert document.status == "validated"

    with pytest.raises(StatusTransitionError) as exc_info:
        await advance_status(db_session, document, DocumentStatus.ANALYZED)
    assert exc_info.value.status_code == 409
    assert document.status == "validated"

    # same status is accepted and changes nothing
    await advance_status(db_session, document, DocumentStatus.VALIDATED)
    assert document.status == "validated"


async def test_analyzed_requires_an_analysis(db_session):
    document = await _new_document(db_session)
    with pytest.raises(ConflictError):
        await advance_status(db_session, document, DocumentStatus.ANALYZED)
    assert document.status == "uploaded"


def test_status_ranks_follow_lifecycle():
    ranks = [status.rank for status in DocumentStatus]
    assert ranks == sorted(ranks)
    assert DocumentStatus.UPLOADED.rank < DocumentStatus.FILED.rank


async def test_list_and_delete(db_session):
    first = await _new_document(db_session, filename="a.txt")
    second = await _new_document(db_session, filename="b.txt")
    await _new_document(db_session, owner_id="someone-else")

    owned = await list_documents_for_owner(db_session, "owner-1")
    assert {d.id for d in owned} == {first.id, second.id}

    assert await delete_document(db_session, first.id) is True
    assert await get_document(db_session, first.id) is None
    assert await delete_document(db_session, first.id) is False


async def test_serialize_document_hides_text_unless_asked(db_session):
    document = await _new_document(db_session)
    data = serialize_document(document)
    assert data["ownerId"] == "owner-1"
    assert data["mimeType"] == "text/plain"
    assert data["status"] == "uploaded"
    assert "extractedText" not in data
    assert "rawContent" not in data
    assert serialize_document(document, include_text=True)["extractedText"].startswith("Civil Action")


# =============================================================================
# Filing history
# =============================================================================

async def test_filed_entry_advances_document(db_session):
    document = await _new_document(db_session)

    filing = await create_filing(
        db_session,
        owner_id="owner-1",
        filing_type="Motion",
        status=FilingStatus.FILED,
        document=document,
        court_response="Accepted",
    )

    assert document.status == DocumentStatus.FILED.value
    assert filing.filed_at is not None
    data = serialize_filing(filing)
    assert data["documentId"] == document.id
    assert data["status"] == "filed"
    assert data["courtResponse"] == "Accepted"


async def test_draft_entry_leaves_document_alone(db_session):
    document = await _new_document(db_session)
    filing = await create_filing(db_session, "owner-1", "Motion", FilingStatus.DRAFT, document=document)
    assert document.status == "uploaded"
    assert filing.filed_at is None


async def test_deleting_document_keeps_its_filing_history(db_session):
    document = await _new_document(db_session)
    await create_filing(db_session, "owner-1", "Motion", FilingStatus.SUBMITTED, document=document)

    assert await delete_document(db_session, document.id) is True

    filings = await list_filings_for_owner(db_session, "owner-1")
    await db_session.refresh(filings[0])
    assert len(filings) == 1
    assert filings[0].document_id is None


async def test_list_filings_for_owner(db_session):
    await create_filing(db_session, "owner-1", "Motion", FilingStatus.SUBMITTED)
    await create_filing(db_session, "owner-2", "TRO", FilingStatus.DRAFT)
    filings = await list_filings_for_owner(db_session, "owner-1")
    assert [f.filing_type for f in filings] == ["Motion"]
    assert filings[0].document_id is None

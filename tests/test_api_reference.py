"""
LegalEase File - Courts, Catalog, Cases and Filing History API Tests
"""

import pytest
from httpx import AsyncClient

from app.services.document_classifier import ClassifierOutput
from tests.stubs import StubClassifier


# =============================================================================
# Courts
# =============================================================================

class TestCourts:
    """Court registry endpoints."""

    @pytest.mark.anyio
    async def test_list_courts(self, client: AsyncClient):
        body = (await client.get("/api/courts")).json()
        assert body["total"] == 8
        assert len(body["courts"]) == 8

    @pytest.mark.anyio
    async def test_filter_by_class_and_jurisdiction(self, client: AsyncClient):
        body = (await client.get("/api/courts", params={"courtClass": "probate_family"})).json()
        assert body["total"] == 3

        body = (
            await client.get("/api/courts", params={"courtClass": "superior", "jurisdiction": "suffolk"})
        ).json()
        assert [c["id"] for c in body["courts"]] == ["suffolk-superior"]

    @pytest.mark.anyio
    async def test_bad_court_class(self, client: AsyncClient):
        response = await client.get("/api/courts", params={"courtClass": "martian"})
        assert response.status_code == 400

    @pytest.mark.anyio
    async def test_get_court(self, client: AsyncClient):
        response = await client.get("/api/courts/ma-fed-district")
        assert response.status_code == 200
        assert response.json()["courtClass"] == "federal"
        assert (await client.get("/api/courts/atlantis")).status_code == 404

    @pytest.mark.anyio
    async def test_requirements(self, client: AsyncClient):
        response = await client.get(
            "/api/courts/ma-fed-district/requirements",
            params={"documentType": "TRO"},
        )
        body = response.json()
        assert body["courtId"] == "ma-fed-district"
        assert "PACER account needed" in body["general"]
        assert "Security bond may be required" in body["specific"]
        assert body["deadlines"] == ["Hearing within 10 days"]

    @pytest.mark.anyio
    async def test_validate_document_type(self, client: AsyncClient):
        accepted = await client.post("/api/courts/ma-fed-district/validate", json={"documentType": "Motion"})
        assert accepted.json()["isValid"] is True

        rejected = await client.post(
            "/api/courts/ma-fed-district/validate",
            json={"documentType": "Petition for Divorce"},
        )
        assert rejected.status_code == 200
        assert rejected.json()["isValid"] is False
        assert rejected.json()["requirements"]

        unknown = await client.post("/api/courts/atlantis/validate", json={"documentType": "Motion"})
        assert unknown.status_code == 404

    @pytest.mark.anyio
    async def test_compliance_check(self, client: AsyncClient):
        response = await client.post("/api/compliance/check", json={"text": "x" * 40})
        assert response.json() == {
            "isCompliant": False,
            "issues": [
                "Missing electronic signature (/s/)",
                "Missing case identification",
                "Document appears too short for filing",
            ],
        }


# =============================================================================
# Templates & Legal Aid
# =============================================================================

class TestCatalog:
    """Template and legal aid endpoints."""

    @pytest.mark.anyio
    async def test_templates(self, client: AsyncClient):
        assert len((await client.get("/api/templates")).json()) == 3
        emergency = (await client.get("/api/templates/emergency")).json()
        assert all(t["isEmergency"] for t in emergency)
        motion = (await client.get("/api/templates", params={"category": "motion"})).json()
        assert [t["id"] for t in motion] == ["motion-summary-judgment"]

    @pytest.mark.anyio
    async def test_template_by_id(self, client: AsyncClient):
        response = await client.get("/api/templates/preliminary-injunction")
        assert response.json()["template"]["required_fields"][0] == "case_number"
        assert (await client.get("/api/templates/nope")).status_code == 404

    @pytest.mark.anyio
    async def test_legal_aid_emergency_filter_only_when_supplied(self, client: AsyncClient):
        everyone = (await client.get("/api/legal-aid")).json()
        assert len(everyone) == 5

        non_emergency = (await client.get("/api/legal-aid", params={"isEmergency": "false"})).json()
        assert {o["id"] for o in non_emergency} == {
            "greater-boston-legal-services",
            "massachusetts-law-reform-institute",
            "northeast-legal-aid",
        }

    @pytest.mark.anyio
    async def test_legal_aid_search(self, client: AsyncClient):
        results = (
            await client.get("/api/legal-aid", params={"practiceArea": "domestic", "location": "statewide"})
        ).json()
        assert [o["id"] for o in results] == ["reach-domestic-violence"]
        assert results[0]["practiceAreas"][0] == "Domestic Violence"

    @pytest.mark.anyio
    async def test_legal_aid_all(self, client: AsyncClient):
        assert len((await client.get("/api/legal-aid/all")).json()) == 5


# =============================================================================
# Cases
# =============================================================================

class TestCases:
    """Encrypted case store endpoints."""

    @pytest.mark.anyio
    async def test_create_get_update(self, client: AsyncClient):
        created = await client.post(
            "/api/cases",
            json={
                "caseNumber": "1:24-cv-00001",
                "clientName": "Jane Doe",
                "documentType": "TRO",
                "emergencyType": "TRO",
                "courtId": "ma-fed-district",
            },
        )
        assert created.status_code == 201
        case = created.json()
        assert case["clientName"] == "Jane Doe"
        assert case["filingStatus"] == "draft"

        fetched = await client.get(f"/api/cases/{case['id']}")
        assert fetched.json()["courtId"] == "ma-fed-district"

        updated = await client.patch(
            f"/api/cases/{case['id']}/status",
            json={"status": "filed", "notes": "Docketed as ECF No. 1"},
        )
        assert updated.json()["filingStatus"] == "filed"
        assert updated.json()["notes"] == "Docketed as ECF No. 1"

    @pytest.mark.anyio
    async def test_filters_and_missing(self, client: AsyncClient):
        await client.post("/api/cases", json={"caseNumber": "A-1", "clientName": "Ann", "documentType": "Motion"})
        await client.post("/api/cases", json={"caseNumber": "A-2", "clientName": "Bob", "documentType": "TRO"})

        motions = (await client.get("/api/cases", params={"documentType": "Motion"})).json()
        assert [c["caseNumber"] for c in motions] == ["A-1"]

        assert (await client.get("/api/cases/missing")).status_code == 404
        assert (await client.patch("/api/cases/missing/status", json={"status": "filed"})).status_code == 404

    @pytest.mark.anyio
    async def test_missing_required_field(self, client: AsyncClient):
        response = await client.post("/api/cases", json={"caseNumber": "A-1"})
        assert response.status_code == 400


# =============================================================================
# Filing History
# =============================================================================

class TestFilingHistory:
    """Filing history endpoints."""

    @pytest.mark.anyio
    async def test_filed_entry_advances_document(self, client: AsyncClient, use_classifier):
        use_classifier(StubClassifier(output=ClassifierOutput(doc_type="Motion")))
        upload = await client.post(
            "/api/documents/upload",
            files={"file": ("motion.txt", b"Civil Action No. 1 /s/ Jane Doe", "text/plain")},
            data={"ownerId": "owner-1"},
        )
        document_id = upload.json()["document"]["id"]

        response = await client.post(
            "/api/filing-history",
            json={
                "ownerId": "owner-1",
                "filingType": "Motion",
                "status": "filed",
                "documentId": document_id,
                "courtResponse": "Accepted",
            },
        )

        assert response.status_code == 200
        assert response.json()["filedAt"] is not None
        document = (await client.get(f"/api/documents/{document_id}")).json()
        assert document["status"] == "filed"

        history = (await client.get("/api/filing-history/user/owner-1")).json()
        assert [h["documentId"] for h in history] == [document_id]

    @pytest.mark.anyio
    async def test_draft_without_document(self, client: AsyncClient):
        response = await client.post("/api/filing-history", json={"ownerId": "owner-1", "filingType": "TRO"})
        assert response.json()["status"] == "draft"
        assert response.json()["documentId"] is None

    @pytest.mark.anyio
    async def test_unknown_document(self, client: AsyncClient):
        response = await client.post(
            "/api/filing-history",
            json={"ownerId": "owner-1", "filingType": "TRO", "documentId": "missing"},
        )
        assert response.status_code == 404

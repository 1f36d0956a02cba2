"""
Case Store

Case-tracking records with client-identifying fields encrypted at rest.
Each encrypted value is AES-256-GCM with a fresh 12-byte nonce, stored as
nonce + ciphertext. The key is derived from the configured secret.
"""

import hashlib
import logging
import secrets
import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from cryptography.hazmat.primitives.ciphers.aead import AESGCM
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import Settings
from app.models.models import Case

logger = logging.getLogger(__name__)

NONCE_SIZE = 12


# =============================================================================
# Encryption Helpers
# =============================================================================

class FieldCipher:
    """Authenticated encryption for individual column values."""

    def __init__(self, secret: str):
        key = hashlib.sha256(f"{secret}:case-store".encode()).digest()
        self._aesgcm = AESGCM(key)

    def encrypt(self, value: str) -> bytes:
        nonce = secrets.token_bytes(NONCE_SIZE)
        return nonce + self._aesgcm.encrypt(nonce, value.encode("utf-8"), None)

    def decrypt(self, blob: bytes) -> str:
        """Raises cryptography.exceptions.InvalidTag if the value was tampered with."""
        nonce, ciphertext = blob[:NONCE_SIZE], blob[NONCE_SIZE:]
        return self._aesgcm.decrypt(nonce, ciphertext, None).decode("utf-8")


# =============================================================================
# Records
# =============================================================================

@dataclass
class CaseRecord:
    id: str
    case_number: str
    client_name: str
    document_type: str
    filing_status: str
    emergency_type: Optional[str]
    attorney_assigned: Optional[str]
    court_id: Optional[str]
    notes: Optional[str]
    created_at: Optional[datetime]
    updated_at: Optional[datetime]

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "caseNumber": self.case_number,
            "clientName": self.client_name,
            "documentType": self.document_type,
            "filingStatus": self.filing_status,
            "emergencyType": self.emergency_type,
            "attorneyAssigned": self.attorney_assigned,
            "courtId": self.court_id,
            "notes": self.notes,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
            "updatedAt": self.updated_at.isoformat() if self.updated_at else None,
        }


class CaseStore:
    """Encrypting repository over the `cases` table."""

    def __init__(self, session: AsyncSession, settings: Settings):
        self.session = session
        self.cipher = FieldCipher(settings.case_store_secret)

    def _to_record(self, row: Case) -> CaseRecord:
        return CaseRecord(
            id=row.id,
            case_number=row.case_number,
            client_name=self.cipher.decrypt(row.client_name_encrypted),
            document_type=row.document_type,
            filing_status=row.filing_status,
            emergency_type=row.emergency_type,
            attorney_assigned=row.attorney_assigned,
            court_id=row.court_id,
            notes=self.cipher.decrypt(row.notes_encrypted) if row.notes_encrypted else None,
            created_at=row.created_at,
            updated_at=row.updated_at,
        )

    async def create_case(
        self,
        case_number: str,
        client_name: str,
        document_type: str,
        filing_status: str,
        emergency_type: Optional[str] = None,
        attorney_assigned: Optional[str] = None,
        court_id: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> CaseRecord:
        row = Case(
            id=str(uuid.uuid4()),
            case_number=case_number,
            client_name_encrypted=self.cipher.encrypt(client_name),
            document_type=document_type,
            filing_status=filing_status,
            emergency_type=emergency_type,
            attorney_assigned=attorney_assigned,
            court_id=court_id,
            notes_encrypted=self.cipher.encrypt(notes) if notes else None,
        )
        self.session.add(row)
        await self.session.flush()
        logger.info("Created case %s", row.id, extra={"case_id": row.id})
        return self._to_record(row)

    async def get_case(self, case_id: str) -> Optional[CaseRecord]:
        row = await self.session.get(Case, case_id)
        return self._to_record(row) if row is not None else None

    async def list_cases(
        self,
        case_number: Optional[str] = None,
        document_type: Optional[str] = None,
        filing_status: Optional[str] = None,
        emergency_type: Optional[str] = None,
    ) -> list[CaseRecord]:
        """Exact-match filters on the plaintext columns, newest first."""
        query = select(Case)
        if case_number:
            query = query.where(Case.case_number == case_number)
        if document_type:
            query = query.where(Case.document_type == document_type)
        if filing_status:
            query = query.where(Case.filing_status == filing_status)
        if emergency_type:
            query = query.where(Case.emergency_type == emergency_type)

        result = await self.session.execute(query.order_by(Case.created_at.desc()))
        return [self._to_record(row) for row in result.scalars().all()]

    async def update_case_status(
        self,
        case_id: str,
        status: str,
        notes: Optional[str] = None,
    ) -> Optional[CaseRecord]:
        row = await self.session.get(Case, case_id)
        if row is None:
            return None
        row.filing_status = status
        if notes is not None:
            row.notes_encrypted = self.cipher.encrypt(notes) if notes else None
        await self.session.flush()
        return self._to_record(row)

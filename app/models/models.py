"""
LegalEase File Database Models
SQLAlchemy ORM models for documents, filing history and cases.
"""

from datetime import datetime, timezone
from typing import Any, Optional

from sqlalchemy import JSON, Boolean, DateTime, ForeignKey, Integer, LargeBinary, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.core.database import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


# =============================================================================
# Documents
# =============================================================================

class Document(Base):
    """
    One uploaded or generated document.

    `status` only moves forward: uploaded -> analyzed -> validated -> filed.
    `analysis` holds the serialized DocumentAnalysisResult once analysis
    has completed; it is written in the same transaction that sets
    status to analyzed.
    """
    __tablename__ = "documents"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    owner_id: Mapped[str] = mapped_column(String(64), index=True)

    # File info
    filename: Mapped[str] = mapped_column(String(255))
    mime_type: Mapped[str] = mapped_column(String(100))
    byte_size: Mapped[int] = mapped_column(Integer)
    raw_content: Mapped[bytes] = mapped_column(LargeBinary)
    extracted_text: Mapped[str] = mapped_column(Text, default="")
    # extracted_text is a placeholder, not the document's words
    extraction_degraded: Mapped[bool] = mapped_column(Boolean, default=False)

    # Analysis
    document_type: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    analysis: Mapped[Optional[dict[str, Any]]] = mapped_column(JSON, nullable=True)
    status: Mapped[str] = mapped_column(String(20), default="uploaded", index=True)
    is_emergency: Mapped[bool] = mapped_column(Boolean, default=False)

    # Timestamps
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow)


# =============================================================================
# Filing History
# =============================================================================

class FilingHistory(Base):
    """A filing attempt for a document (draft, submitted, filed, rejected)."""
    __tablename__ = "filing_history"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    owner_id: Mapped[str] = mapped_column(String(64), index=True)
    document_id: Mapped[Optional[str]] = mapped_column(
        String(36), ForeignKey("documents.id", ondelete="SET NULL"), nullable=True
    )
    filing_type: Mapped[str] = mapped_column(String(100))
    status: Mapped[str] = mapped_column(String(20))  # draft, submitted, filed, rejected
    court_response: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    filed_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)


# =============================================================================
# Case Store
# =============================================================================

class Case(Base):
    """
    Case-tracking row. Client name and notes are stored as AES-GCM
    ciphertext (nonce prefixed); see app.services.case_store.
    """
    __tablename__ = "cases"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    case_number: Mapped[str] = mapped_column(String(100), index=True)
    client_name_encrypted: Mapped[bytes] = mapped_column(LargeBinary)
    document_type: Mapped[str] = mapped_column(String(100), index=True)
    filing_status: Mapped[str] = mapped_column(String(30), index=True)
    emergency_type: Mapped[Optional[str]] = mapped_column(String(30), nullable=True)
    attorney_assigned: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    court_id: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    notes_encrypted: Mapped[Optional[bytes]] = mapped_column(LargeBinary, nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow)

# API Routers - LegalEase File

from app.routers import cases, catalog, courts, documents, emergency, filings, health

__all__ = ["cases", "catalog", "courts", "documents", "emergency", "filings", "health"]

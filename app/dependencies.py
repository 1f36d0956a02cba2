"""
FastAPI dependency providers.

Routers never construct services themselves; everything comes through
here so tests can swap in stubs with `app.dependency_overrides`.
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import Settings, get_settings
from app.core.database import get_db
from app.services.case_store import CaseStore
from app.services.catalog import Catalog, get_catalog
from app.services.courts.emergency import (
    EmergencyFilingValidator,
    FactorJudge,
    KeywordFactorJudge,
    LLMFactorJudge,
)
from app.services.courts.registry import CourtRegistry, get_court_registry
from app.services.document_analysis import ComplianceAggregator
from app.services.document_classifier import DocumentClassifier, LLMDocumentClassifier
from app.services.document_generator import DocumentGenerator, LLMDocumentGenerator
from app.services.openai_ai import get_openai_service


def get_registry() -> CourtRegistry:
    return get_court_registry()


def get_catalog_dependency() -> Catalog:
    return get_catalog()


def get_classifier(registry: CourtRegistry = Depends(get_registry)) -> DocumentClassifier:
    return LLMDocumentClassifier(
        get_openai_service(),
        court_ids=[court.id for court in registry.list_courts()],
    )


def get_aggregator(
    registry: CourtRegistry = Depends(get_registry),
    classifier: DocumentClassifier = Depends(get_classifier),
    settings: Settings = Depends(get_settings),
) -> ComplianceAggregator:
    return ComplianceAggregator(registry, classifier, settings)


def get_factor_judge(settings: Settings = Depends(get_settings)) -> FactorJudge:
    if settings.emergency_judge == "llm":
        return LLMFactorJudge(get_openai_service(), max_chars=settings.emergency_max_chars)
    return KeywordFactorJudge()


def get_emergency_validator(
    judge: FactorJudge = Depends(get_factor_judge),
    settings: Settings = Depends(get_settings),
) -> EmergencyFilingValidator:
    return EmergencyFilingValidator(judge, timeout_seconds=settings.emergency_judge_timeout_seconds)


def get_generator() -> DocumentGenerator:
    return LLMDocumentGenerator(get_openai_service())


def get_case_store(
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> CaseStore:
    return CaseStore(db, settings)

# Business logic services - court rules, analysis, storage

from app.services.case_store import CaseRecord, CaseStore
from app.services.catalog import Catalog, get_catalog
from app.services.document_analysis import ComplianceAggregator, DocumentAnalysisResult
from app.services.document_classifier import (
    Classification,
    ClassifierOutput,
    DocumentClassifier,
    LLMDocumentClassifier,
    classify_document,
)
from app.services.text_extraction import ExtractedText, extract_text

__all__ = [
    "CaseRecord",
    "CaseStore",
    "Catalog",
    "get_catalog",
    "ComplianceAggregator",
    "DocumentAnalysisResult",
    "Classification",
    "ClassifierOutput",
    "DocumentClassifier",
    "LLMDocumentClassifier",
    "classify_document",
    "ExtractedText",
    "extract_text",
]

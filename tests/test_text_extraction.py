"""
LegalEase File - Text Extraction Tests
"""

from io import BytesIO

import docx
import pytest

from app.services.text_extraction import (
    DOC_MIME,
    DOCX_MIME,
    PDF_MIME,
    TEXT_MIME,
    UnsupportedFormatError,
    extract_text,
    placeholder_text,
)


def _docx_bytes(*paragraphs: str) -> bytes:
    document = docx.Document()
    for paragraph in paragraphs:
        document.add_paragraph(paragraph)
    buffer = BytesIO()
    document.save(buffer)
    return buffer.getvalue()


def test_plain_text_utf8():
    result = extract_text("Case No. 1 § 12 /s/".encode("utf-8"), TEXT_MIME)
    assert result.text == "Case No. 1 § 12 /s/"
    assert result.method == "decode"
    assert result.degraded is False


def test_plain_text_latin1_fallback():
    result = extract_text("Café v. Doe".encode("latin-1"), TEXT_MIME)
    assert result.text == "Café v. Doe"
    assert result.degraded is False


def test_empty_plain_text_is_not_a_placeholder():
    result = extract_text(b"", TEXT_MIME)
    assert result.text == ""
    assert result.degraded is False


def test_docx_paragraphs():
    data = _docx_bytes("MOTION TO DISMISS", "", "Civil Action No. 1:24-cv-1")
    result = extract_text(data, DOCX_MIME)
    assert result.method == "python-docx"
    assert result.text == "MOTION TO DISMISS\n\nCivil Action No. 1:24-cv-1"


def test_empty_docx_degrades():
    data = _docx_bytes()
    result = extract_text(data, DOCX_MIME)
    assert result.degraded is True
    assert result.text == placeholder_text(DOCX_MIME, len(data))


def test_legacy_doc_gets_placeholder():
    result = extract_text(b"\xd0\xcf\x11\xe0binary", DOC_MIME)
    assert result.degraded is True
    assert result.text == "[Word Document - 10 bytes] - text extraction unavailable"


def test_corrupt_pdf_degrades():
    result = extract_text(b"%PDF-1.4 not really a pdf", PDF_MIME)
    assert result.degraded is True
    assert result.text == "[PDF Document - 25 bytes] - text extraction unavailable"


def test_unsupported_type_raises():
    with pytest.raises(UnsupportedFormatError):
        extract_text(b"GIF89a", "image/gif")

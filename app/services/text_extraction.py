"""
Best-effort text extraction for uploaded documents.

Extraction never fails an upload: unreadable or legacy formats produce a
diagnostic placeholder and are flagged `degraded`.
"""

import logging
from dataclasses import dataclass
from io import BytesIO

import docx
import pypdf

logger = logging.getLogger(__name__)

PDF_MIME = "application/pdf"
DOC_MIME = "application/msword"
DOCX_MIME = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
TEXT_MIME = "text/plain"

SUPPORTED_MIME_TYPES = frozenset({PDF_MIME, DOC_MIME, DOCX_MIME, TEXT_MIME})

_KIND_LABELS = {
    PDF_MIME: "PDF",
    DOC_MIME: "Word",
    DOCX_MIME: "Word",
    TEXT_MIME: "Text",
}


class UnsupportedFormatError(ValueError):
    """MIME type outside the accepted upload formats."""


@dataclass(frozen=True)
class ExtractedText:
    text: str
    method: str
    degraded: bool = False


def placeholder_text(mime_type: str, size: int) -> str:
    kind = _KIND_LABELS.get(mime_type, "Unknown")
    return f"[{kind} Document - {size} bytes] - text extraction unavailable"


def _extract_pdf(data: bytes) -> str:
    reader = pypdf.PdfReader(BytesIO(data))
    pages = [page.extract_text() or "" for page in reader.pages]
    return "\n\n".join(pages)


def _extract_docx(data: bytes) -> str:
    document = docx.Document(BytesIO(data))
    return "\n\n".join(p.text for p in document.paragraphs if p.text.strip())


def _extract_txt(data: bytes) -> str:
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError:
        return data.decode("latin-1", errors="replace")


_EXTRACTORS = {
    PDF_MIME: ("pypdf", _extract_pdf),
    DOCX_MIME: ("python-docx", _extract_docx),
    TEXT_MIME: ("decode", _extract_txt),
}


def extract_text(content: bytes, mime_type: str) -> ExtractedText:
    """
    Extract plain text from raw upload bytes.

    Raises UnsupportedFormatError only for MIME types that are not accepted
    at all; every other problem degrades to the placeholder.
    """
    if mime_type not in SUPPORTED_MIME_TYPES:
        raise UnsupportedFormatError(f"Unsupported file type: {mime_type}")

    entry = _EXTRACTORS.get(mime_type)
    if entry is None:
        # legacy binary .doc
        return ExtractedText(placeholder_text(mime_type, len(content)), "placeholder", degraded=True)

    method, extractor = entry
    try:
        text = extractor(content)
    except Exception as e:
        logger.warning(
            "Text extraction failed for %s (%d bytes): %s",
            mime_type,
            len(content),
            e,
            extra={"mime_type": mime_type},
        )
        return ExtractedText(placeholder_text(mime_type, len(content)), "placeholder", degraded=True)

    if mime_type != TEXT_MIME and not text.strip():
        # scanned PDF or empty DOCX
        return ExtractedText(placeholder_text(mime_type, len(content)), "placeholder", degraded=True)

    return ExtractedText(text, method)

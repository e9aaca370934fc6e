from __future__ import annotations

import logging
from io import BytesIO

from resume_scan.assessment.errors import DocumentUnreadable
from resume_scan.schemas import ResumeContext

logger = logging.getLogger(__name__)

PDF_MIME = "application/pdf"
DOCX_MIME = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"


def _pdf_text(content: bytes) -> str:
    from pypdf import PdfReader

    reader = PdfReader(BytesIO(content))
    if not len(reader.pages):
        raise ValueError("PDF has no pages")
    page_chunks: list[str] = []
    for page in reader.pages:
        page_text = page.extract_text() or ""
        if page_text.strip():
            page_chunks.append(page_text)
    return "\n\n".join(page_chunks)


def _docx_text(content: bytes) -> str:
    from docx import Document

    doc = Document(BytesIO(content))
    return "\n".join(paragraph.text for paragraph in doc.paragraphs if paragraph.text.strip())


def extract_resume_text(content: bytes, mime_type: str) -> str:
    """Extract plain text from a PDF or DOCX resume; other types yield ''."""
    if mime_type == PDF_MIME:
        extractor = _pdf_text
    elif mime_type == DOCX_MIME:
        extractor = _docx_text
    else:
        return ""
    try:
        return extractor(content).strip()
    except Exception as exc:
        raise DocumentUnreadable(f"Unable to extract text from this {mime_type} document.") from exc


def with_extracted_text(resume: ResumeContext) -> ResumeContext:
    """Fill in resume text from the attached document when no text was supplied.

    An unreadable document is logged and left attached; the provider then
    reads it directly.
    """
    if resume.text.strip() or not resume.has_document:
        return resume
    try:
        text = extract_resume_text(resume.document, resume.mime_type)
    except DocumentUnreadable as exc:
        logger.warning("resume_text_extraction_failed mime_type=%s: %s", resume.mime_type, exc)
        return resume
    logger.info("resume_text_extracted mime_type=%s chars=%s", resume.mime_type, len(text))
    return resume.model_copy(update={"text": text}) if text else resume

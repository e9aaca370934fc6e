from __future__ import annotations

import base64
import binascii

from pydantic import BaseModel, Field, field_validator

from .context import JobContext, ResumeContext
from .fields import FieldDefinition

MAX_DOCUMENT_BYTES = 10 * 1024 * 1024  # 10 MB


class ResumeInput(BaseModel):
    text: str = Field(default="", max_length=120000)
    filename: str | None = Field(default=None, max_length=255)
    file_url: str | None = Field(default=None, max_length=2000)
    document_base64: str | None = None
    mime_type: str = Field(default="application/pdf", max_length=100)

    @field_validator("document_base64")
    @classmethod
    def _validate_document(cls, value: str | None) -> str | None:
        if value is None or not value.strip():
            return None
        try:
            decoded = base64.b64decode(value, validate=True)
        except (binascii.Error, ValueError) as exc:
            raise ValueError("document_base64 must be valid base64") from exc
        if len(decoded) > MAX_DOCUMENT_BYTES:
            raise ValueError("document is larger than 10 MB")
        return value

    def to_context(self) -> ResumeContext:
        document = base64.b64decode(self.document_base64) if self.document_base64 else None
        return ResumeContext(
            text=self.text,
            filename=self.filename,
            file_url=self.file_url,
            document=document,
            mime_type=self.mime_type,
        )


class ScanRequest(BaseModel):
    job: JobContext
    resume: ResumeInput

    @field_validator("resume")
    @classmethod
    def _require_resume_content(cls, value: ResumeInput) -> ResumeInput:
        if not value.text.strip() and not value.document_base64:
            raise ValueError("resume needs text or document_base64")
        return value


class FieldListResponse(BaseModel):
    fields: list[FieldDefinition] = Field(default_factory=list)

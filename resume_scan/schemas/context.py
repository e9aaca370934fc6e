from __future__ import annotations

from pydantic import BaseModel, Field


class JobContext(BaseModel):
    title: str = Field(default="", max_length=300)
    company: str = Field(default="", max_length=300)
    description: str = Field(min_length=1)
    hard_skills: list[str] | None = None
    soft_skills: list[str] | None = None

    def skills_for(self, field_id: str) -> list[str]:
        """Return the pre-extracted skill list matching a one-to-many field id."""
        if field_id == "hardSkills":
            return list(self.hard_skills or [])
        if field_id == "softSkills":
            return list(self.soft_skills or [])
        return []


class ResumeContext(BaseModel):
    text: str = ""
    filename: str | None = Field(default=None, max_length=255)
    file_url: str | None = None
    file_path: str | None = None
    document: bytes | None = Field(default=None, exclude=True, repr=False)
    mime_type: str = "application/pdf"

    @property
    def has_document(self) -> bool:
        return bool(self.document)

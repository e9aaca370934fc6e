from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

Category = Literal["searchability", "bestPractices", "hardSkills", "softSkills"]
FieldKind = Literal["one-to-one", "one-to-many"]

CATEGORIES: tuple[Category, ...] = ("searchability", "bestPractices", "hardSkills", "softSkills")


class FieldDefinition(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    id: str = Field(min_length=1, max_length=120)
    category: Category
    section: str = Field(min_length=1, max_length=120)
    kind: FieldKind
    label: str = Field(min_length=1)
    instruction: str = Field(min_length=1)
    weight_in_category: float = Field(default=1.0, ge=0.0)
    remediation_hint: str | None = None

    @field_validator("id", "section")
    @classmethod
    def _validate_key(cls, value: str) -> str:
        cleaned = value.strip()
        if not cleaned or any(ch.isspace() for ch in cleaned):
            raise ValueError("must be a non-empty key without whitespace")
        return cleaned

    @field_validator("weight_in_category", mode="before")
    @classmethod
    def _default_weight(cls, value: object) -> object:
        return 1.0 if value is None else value

    @property
    def is_one_to_many(self) -> bool:
        return self.kind == "one-to-many"

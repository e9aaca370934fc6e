from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictStr, field_validator


class _JudgmentBase(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: StrictStr = Field(min_length=1)
    confidence: float = Field(strict=True)
    explanation: StrictStr

    @field_validator("id")
    @classmethod
    def _strip_id(cls, value: str) -> str:
        cleaned = value.strip()
        if not cleaned:
            raise ValueError("id must not be blank")
        return cleaned

    @field_validator("confidence")
    @classmethod
    def _clamp_confidence(cls, value: float) -> float:
        return max(0.0, min(1.0, float(value)))


class BooleanJudgment(_JudgmentBase):
    kind: Literal["one-to-one"] = "one-to-one"
    value: StrictBool

    @property
    def field_id(self) -> str:
        return self.id


class SkillJudgment(_JudgmentBase):
    kind: Literal["one-to-many"] = "one-to-many"
    parent_field_id: StrictStr = Field(min_length=1)
    label: StrictStr = Field(min_length=1)
    synonyms: list[StrictStr]
    related_terms: list[StrictStr]
    exact_match: StrictBool
    synonym_match: StrictBool
    related_term_match: StrictBool
    exact_match_count: int = Field(ge=0)

    @property
    def field_id(self) -> str:
        return self.parent_field_id

    @property
    def matched(self) -> bool:
        return self.exact_match or self.synonym_match or self.related_term_match


FieldJudgment = Annotated[Union[BooleanJudgment, SkillJudgment], Field(discriminator="kind")]

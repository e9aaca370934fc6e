from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

from .fields import Category
from .judgments import FieldJudgment

ImprovementKind = Literal["field", "gap"]


class CategoryScore(BaseModel):
    score: int = Field(ge=0, le=100)
    total_points_earned: float = Field(ge=0.0)
    total_points_possible: float = Field(ge=0.0)
    judgment_count: int = Field(default=0, ge=0)


class Improvement(BaseModel):
    kind: ImprovementKind
    category: Category
    section_id: str
    field_id: str
    field_label: str
    explanation: str
    weight: float = Field(ge=0.0)
    confidence: float = Field(default=0.0, ge=0.0, le=1.0)
    remediation_hint: str | None = None
    synonyms: list[str] = Field(default_factory=list)
    related_terms: list[str] = Field(default_factory=list)


class ScanReport(BaseModel):
    categories: dict[Category, CategoryScore]
    overall: int = Field(ge=0, le=100)
    improvements: dict[Category, list[Improvement]] = Field(default_factory=dict)
    judgments: list[FieldJudgment] = Field(default_factory=list)
    partial: bool = False
    failed_categories: dict[Category, str] = Field(default_factory=dict)

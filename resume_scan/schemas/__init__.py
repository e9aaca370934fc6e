from .context import JobContext, ResumeContext
from .fields import CATEGORIES, Category, FieldDefinition, FieldKind
from .judgments import BooleanJudgment, FieldJudgment, SkillJudgment
from .report import CategoryScore, Improvement, ScanReport
from .scan import FieldListResponse, ResumeInput, ScanRequest

__all__ = [
    "CATEGORIES",
    "Category",
    "FieldKind",
    "FieldDefinition",
    "BooleanJudgment",
    "SkillJudgment",
    "FieldJudgment",
    "JobContext",
    "ResumeContext",
    "CategoryScore",
    "Improvement",
    "ScanReport",
    "ResumeInput",
    "ScanRequest",
    "FieldListResponse",
]

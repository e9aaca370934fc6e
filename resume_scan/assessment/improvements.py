from __future__ import annotations

from typing import Iterable

from resume_scan.schemas import CATEGORIES, BooleanJudgment, Category, FieldDefinition, FieldJudgment, Improvement, SkillJudgment

from .catalog import FieldCatalog


def _field_improvement(judgment: BooleanJudgment, definition: FieldDefinition) -> Improvement:
    return Improvement(
        kind="field",
        category=definition.category,
        section_id=definition.section,
        field_id=definition.id,
        field_label=definition.label,
        explanation=judgment.explanation,
        weight=definition.weight_in_category,
        confidence=judgment.confidence,
        remediation_hint=definition.remediation_hint,
    )


def _gap_improvement(judgment: SkillJudgment, definition: FieldDefinition) -> Improvement:
    return Improvement(
        kind="gap",
        category=definition.category,
        section_id=definition.section,
        field_id=judgment.id,
        field_label=judgment.label,
        explanation=judgment.explanation,
        weight=1.0,
        confidence=judgment.confidence,
        remediation_hint=definition.remediation_hint,
        synonyms=list(judgment.synonyms),
        related_terms=list(judgment.related_terms),
    )


def extract_improvements(
    judgments: Iterable[FieldJudgment],
    catalog: FieldCatalog,
) -> dict[Category, list[Improvement]]:
    """Collect failed fields and unmatched skills, highest weight first per category."""
    grouped: dict[Category, list[Improvement]] = {category: [] for category in CATEGORIES}

    for judgment in judgments:
        definition = catalog.resolve(judgment)
        if definition is None:
            continue
        if isinstance(judgment, BooleanJudgment) and not judgment.value:
            grouped[definition.category].append(_field_improvement(judgment, definition))
        elif isinstance(judgment, SkillJudgment) and not judgment.matched:
            grouped[definition.category].append(_gap_improvement(judgment, definition))

    for items in grouped.values():
        items.sort(key=lambda item: (-item.weight, item.field_id))
    return grouped

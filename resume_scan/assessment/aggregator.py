from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterable, Mapping

from resume_scan.schemas import CATEGORIES, BooleanJudgment, Category, CategoryScore, FieldJudgment, SkillJudgment

from .catalog import FieldCatalog

logger = logging.getLogger(__name__)

CATEGORY_WEIGHTS: Mapping[Category, float] = MappingProxyType(
    {
        "hardSkills": 0.40,
        "softSkills": 0.30,
        "searchability": 0.15,
        "bestPractices": 0.15,
    }
)


def round_half_up(value: float) -> int:
    # Drop float noise before rounding half up.
    return int(math.floor(round(value, 9) + 0.5))


def percentage(earned: float, possible: float) -> int:
    if possible <= 0:
        return 0
    return max(0, min(100, round_half_up(100 * earned / possible)))


def compute_overall(category_scores: Mapping[str, int]) -> int:
    """Weighted match score; a category missing from the mapping contributes 0."""
    total = sum((category_scores.get(category, 0) / 100) * weight for category, weight in CATEGORY_WEIGHTS.items())
    return max(0, min(100, round_half_up(100 * total)))


@dataclass(slots=True)
class _Tally:
    earned: float = 0.0
    possible: float = 0.0
    count: int = 0

    def add(self, points: float, matched: bool) -> None:
        self.possible += points
        if matched:
            self.earned += points
        self.count += 1

    def to_score(self) -> CategoryScore:
        return CategoryScore(
            score=percentage(self.earned, self.possible),
            total_points_earned=self.earned,
            total_points_possible=self.possible,
            judgment_count=self.count,
        )


@dataclass(slots=True)
class AggregateResult:
    categories: dict[Category, CategoryScore] = field(default_factory=dict)
    overall: int = 0


def aggregate(judgments: Iterable[FieldJudgment], catalog: FieldCatalog) -> AggregateResult:
    """Reduce judgments into per-category scores and the overall match score.

    Boolean judgments add their field weight to the category's possible
    points and, when true, to its earned points. Every skill instance counts
    for exactly one point and is earned on an exact, synonym or related-term
    match. Judgments without a matching catalog field are skipped.
    """
    tallies: dict[Category, _Tally] = {category: _Tally() for category in CATEGORIES}

    for judgment in judgments:
        definition = catalog.resolve(judgment)
        if definition is None:
            logger.debug("aggregate_skip_unknown id=%s field=%s", judgment.id, judgment.field_id)
            continue
        tally = tallies[definition.category]
        if isinstance(judgment, SkillJudgment):
            tally.add(1.0, judgment.matched)
        elif isinstance(judgment, BooleanJudgment):
            tally.add(definition.weight_in_category, judgment.value)

    categories = {category: tally.to_score() for category, tally in tallies.items()}
    overall = compute_overall({category: score.score for category, score in categories.items()})
    return AggregateResult(categories=categories, overall=overall)

from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass, field
from typing import Sequence

from resume_scan.ai.types import JudgmentProvider
from resume_scan.assessment import (
    AssessmentError,
    FieldCatalog,
    aggregate,
    build_request,
    extract_improvements,
    get_default_catalog,
    normalize,
)
from resume_scan.core.config import settings
from resume_scan.schemas import CATEGORIES, Category, FieldJudgment, JobContext, ResumeContext, ScanReport

from .resume_text import with_extracted_text

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class CategoryOutcome:
    category: Category
    judgments: list[FieldJudgment] = field(default_factory=list)
    error_code: str | None = None

    @property
    def failed(self) -> bool:
        return self.error_code is not None


async def assess_category(
    category: Category,
    job: JobContext,
    resume: ResumeContext,
    *,
    provider: JudgmentProvider,
    catalog: FieldCatalog,
    timeout_s: float,
) -> CategoryOutcome:
    """Run one category request through the provider and normalize the answer.

    Any assessment failure is reported on the outcome instead of raised, so
    the other categories of the scan can still be aggregated.
    """
    started = time.perf_counter()
    try:
        request = build_request(category, job, resume, catalog)
        raw_text = await asyncio.wait_for(
            provider.generate(request.prompt, document=request.document, mime_type=request.mime_type),
            timeout=timeout_s,
        )
        judgments = normalize(raw_text, catalog)
    except asyncio.TimeoutError:
        logger.warning("scan_category_failed category=%s code=provider_timeout timeout_s=%s", category, timeout_s)
        return CategoryOutcome(category=category, error_code="provider_timeout")
    except AssessmentError as exc:
        logger.warning("scan_category_failed category=%s code=%s: %s", category, exc.code, exc)
        return CategoryOutcome(category=category, error_code=exc.code)

    in_category = [judgment for judgment in judgments if catalog.category_of(judgment) == category]
    if len(in_category) != len(judgments):
        logger.info(
            "scan_category_foreign_judgments category=%s dropped=%s",
            category,
            len(judgments) - len(in_category),
        )
    logger.info(
        "scan_category_done category=%s judgments=%s latency_ms=%s",
        category,
        len(in_category),
        int((time.perf_counter() - started) * 1000),
    )
    return CategoryOutcome(category=category, judgments=in_category)


async def run_assessment(
    job: JobContext,
    resume: ResumeContext,
    *,
    provider: JudgmentProvider,
    catalog: FieldCatalog | None = None,
    timeout_s: float | None = None,
    categories: Sequence[Category] = CATEGORIES,
) -> ScanReport:
    """Assess a resume against a job and return the full score report.

    One provider call is issued per category, concurrently. Categories whose
    call fails are scored as empty and listed in ``failed_categories``.
    """
    active_catalog = catalog if catalog is not None else get_default_catalog()
    resume = await asyncio.to_thread(with_extracted_text, resume)
    limit = timeout_s if timeout_s is not None else settings.scan_provider_timeout_s
    started = time.perf_counter()

    results = await asyncio.gather(
        *(
            assess_category(
                category,
                job,
                resume,
                provider=provider,
                catalog=active_catalog,
                timeout_s=limit,
            )
            for category in categories
        ),
        return_exceptions=True,
    )

    judgments: list[FieldJudgment] = []
    failed: dict[Category, str] = {}
    for category, result in zip(categories, results):
        if isinstance(result, CategoryOutcome):
            if result.failed:
                failed[category] = result.error_code or "assessment_error"
            judgments.extend(result.judgments)
        elif isinstance(result, Exception):
            logger.error(
                "scan_category_crashed category=%s",
                category,
                exc_info=(type(result), result, result.__traceback__),
            )
            failed[category] = "provider_error"
        else:
            raise result

    scores = aggregate(judgments, active_catalog)
    report = ScanReport(
        categories=scores.categories,
        overall=scores.overall,
        improvements=extract_improvements(judgments, active_catalog),
        judgments=judgments,
        partial=bool(failed),
        failed_categories=failed,
    )
    logger.info(
        "scan_completed overall=%s partial=%s failed=%s judgments=%s latency_ms=%s",
        report.overall,
        report.partial,
        sorted(failed),
        len(judgments),
        int((time.perf_counter() - started) * 1000),
    )
    return report


def run_assessment_sync(
    job: JobContext,
    resume: ResumeContext,
    *,
    provider: JudgmentProvider,
    catalog: FieldCatalog | None = None,
    timeout_s: float | None = None,
) -> ScanReport:
    """Blocking wrapper around run_assessment for batch jobs and scripts."""
    return asyncio.run(
        run_assessment(job, resume, provider=provider, catalog=catalog, timeout_s=timeout_s)
    )

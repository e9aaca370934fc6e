from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Request, status

from resume_scan.ai import JudgmentProvider, get_judgment_provider
from resume_scan.assessment import FieldCatalog, ProviderUnavailable, get_default_catalog
from resume_scan.core.config import settings
from resume_scan.core.rate_limit import rate_limit
from resume_scan.schemas import CATEGORIES, FieldListResponse, ScanReport, ScanRequest
from resume_scan.services.scan_service import run_assessment

router = APIRouter()


def get_catalog(request: Request) -> FieldCatalog:
    catalog = getattr(request.app.state, "field_catalog", None)
    return catalog if catalog is not None else get_default_catalog()


def get_provider() -> JudgmentProvider:
    try:
        return get_judgment_provider()
    except (ProviderUnavailable, ValueError) as exc:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=f"Judgment provider is not configured: {exc}",
        ) from exc


@router.get("/fields", response_model=FieldListResponse)
async def list_fields(category: str | None = None, catalog: FieldCatalog = Depends(get_catalog)):
    if category is None:
        return FieldListResponse(fields=list(catalog.list_fields()))
    if category not in CATEGORIES or not catalog.fields_by_category(category):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Unknown category '{category}'.")
    return FieldListResponse(fields=list(catalog.fields_by_category(category)))


@router.post("/scans", response_model=ScanReport)
@rate_limit(settings.scan_rate_limit)
async def create_scan(
    request: Request,
    payload: ScanRequest,
    provider: JudgmentProvider = Depends(get_provider),
    catalog: FieldCatalog = Depends(get_catalog),
):
    _ = request
    return await run_assessment(
        payload.job,
        payload.resume.to_context(),
        provider=provider,
        catalog=catalog,
    )

from fastapi import APIRouter, Request

router = APIRouter()


@router.get("/health", summary="Health Check", description="Report service status and field catalog readiness.")
async def health_check(request: Request):
    catalog = getattr(request.app.state, "field_catalog", None)
    return {"status": "healthy", "field_catalog_loaded": catalog is not None}

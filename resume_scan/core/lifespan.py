from contextlib import asynccontextmanager
import logging

from resume_scan.assessment import get_default_catalog

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app):
    catalog = get_default_catalog()
    app.state.field_catalog = catalog
    logger.info("field_catalog_loaded fields=%s", len(catalog))
    yield

from .aggregator import CATEGORY_WEIGHTS, AggregateResult, aggregate, compute_overall
from .catalog import FieldCatalog, get_default_catalog, load_field_catalog
from .errors import (
    AssessmentError,
    CatalogError,
    DocumentUnreadable,
    InvalidRecord,
    MalformedJudgment,
    ProviderUnavailable,
    UnknownCategory,
)
from .improvements import extract_improvements
from .normalizer import extract_payload, normalize
from .request_builder import JudgmentRequest, build_request

__all__ = [
    "CATEGORY_WEIGHTS",
    "AggregateResult",
    "aggregate",
    "compute_overall",
    "FieldCatalog",
    "get_default_catalog",
    "load_field_catalog",
    "AssessmentError",
    "CatalogError",
    "DocumentUnreadable",
    "InvalidRecord",
    "MalformedJudgment",
    "ProviderUnavailable",
    "UnknownCategory",
    "extract_improvements",
    "extract_payload",
    "normalize",
    "JudgmentRequest",
    "build_request",
]

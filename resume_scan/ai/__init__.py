from .factory import get_judgment_provider
from .types import JudgmentProvider

__all__ = ["JudgmentProvider", "get_judgment_provider"]

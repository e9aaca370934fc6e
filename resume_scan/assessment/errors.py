from __future__ import annotations


class AssessmentError(RuntimeError):
    code = "assessment_error"

    def __init__(self, message: str, *, code: str | None = None):
        super().__init__(message)
        if code is not None:
            self.code = code


class CatalogError(AssessmentError):
    code = "catalog_invalid"


class UnknownCategory(AssessmentError):
    code = "unknown_category"

    def __init__(self, category: str):
        super().__init__(f"No catalog fields for category '{category}'.")
        self.category = category


class MalformedJudgment(AssessmentError):
    code = "malformed_judgment"


class InvalidRecord(AssessmentError):
    code = "invalid_record"

    def __init__(self, message: str, *, index: int, record_id: str | None = None):
        super().__init__(message)
        self.index = index
        self.record_id = record_id


class ProviderUnavailable(AssessmentError):
    code = "provider_unavailable"


class DocumentUnreadable(AssessmentError):
    code = "document_unreadable"

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Any, Iterable, Iterator, Mapping

import yaml
from pydantic import ValidationError

from resume_scan.core.config import settings
from resume_scan.schemas import CATEGORIES, BooleanJudgment, Category, FieldDefinition, SkillJudgment

from .errors import CatalogError

_DEFAULT_CATALOG_PATH = Path(__file__).with_name("fields.yaml")


class FieldCatalog:
    """Immutable set of field definitions indexed by id and category."""

    def __init__(self, fields: Iterable[FieldDefinition]) -> None:
        ordered = tuple(fields)
        index: dict[str, FieldDefinition] = {}
        for field in ordered:
            if field.id in index:
                raise CatalogError(f"Duplicate field id '{field.id}' in catalog.")
            index[field.id] = field

        self._fields = ordered
        self._index: Mapping[str, FieldDefinition] = MappingProxyType(index)
        self._by_category: Mapping[str, tuple[FieldDefinition, ...]] = MappingProxyType(
            {category: tuple(f for f in ordered if f.category == category) for category in CATEGORIES}
        )

    def __len__(self) -> int:
        return len(self._fields)

    def __iter__(self) -> Iterator[FieldDefinition]:
        return iter(self._fields)

    def __contains__(self, field_id: object) -> bool:
        return field_id in self._index

    def list_fields(self) -> tuple[FieldDefinition, ...]:
        return self._fields

    def fields_by_category(self, category: str) -> tuple[FieldDefinition, ...]:
        return self._by_category.get(category, ())

    def get(self, field_id: str) -> FieldDefinition | None:
        return self._index.get(field_id)

    def resolve(self, judgment: BooleanJudgment | SkillJudgment) -> FieldDefinition | None:
        """Return the definition a judgment refers to, or None if it has no valid referent.

        Boolean judgments reference a one-to-one field by id; skill judgments
        reference a one-to-many field through parent_field_id.
        """
        field = self._index.get(judgment.field_id)
        if field is None:
            return None
        if isinstance(judgment, SkillJudgment) != field.is_one_to_many:
            return None
        return field

    def category_of(self, judgment: BooleanJudgment | SkillJudgment) -> Category | None:
        field = self.resolve(judgment)
        return field.category if field is not None else None


def _parse_catalog_document(parsed: Any, source: str) -> list[FieldDefinition]:
    if isinstance(parsed, dict):
        raw_fields = parsed.get("fields")
    else:
        raw_fields = parsed
    if not isinstance(raw_fields, list):
        raise CatalogError(f"Invalid field catalog '{source}': expected a 'fields' list.")

    definitions: list[FieldDefinition] = []
    for position, entry in enumerate(raw_fields):
        if not isinstance(entry, dict):
            raise CatalogError(f"Invalid field catalog '{source}': entry {position} is not a mapping.")
        try:
            definitions.append(FieldDefinition.model_validate(entry))
        except ValidationError as exc:
            field_id = entry.get("id", f"#{position}")
            raise CatalogError(f"Invalid field '{field_id}' in catalog '{source}': {exc}") from exc
    return definitions


def load_field_catalog(path: str | Path | None = None) -> FieldCatalog:
    """Load a field catalog from a YAML file (defaults to the bundled fields.yaml)."""
    catalog_path = Path(path) if path else _DEFAULT_CATALOG_PATH
    if not catalog_path.exists():
        raise CatalogError(f"Field catalog not found at '{catalog_path}'.")

    try:
        raw = catalog_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise CatalogError(f"Failed to read field catalog '{catalog_path}': {exc}") from exc

    try:
        parsed = yaml.safe_load(raw)
    except yaml.YAMLError as exc:
        raise CatalogError(f"Invalid YAML in field catalog '{catalog_path}': {exc}") from exc

    return FieldCatalog(_parse_catalog_document(parsed, str(catalog_path)))


@lru_cache(maxsize=1)
def get_default_catalog() -> FieldCatalog:
    return load_field_catalog(settings.field_catalog_path)

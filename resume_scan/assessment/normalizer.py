from __future__ import annotations

import json
import logging
import re
from typing import Any

from pydantic import ValidationError

from resume_scan.schemas import BooleanJudgment, FieldJudgment, SkillJudgment

from .catalog import FieldCatalog
from .errors import InvalidRecord, MalformedJudgment
from .keys import decode_record

logger = logging.getLogger(__name__)

_JSON_FENCE_RE = re.compile(r"```json(?![A-Za-z0-9_+-])[ \t]*(?:\r?\n)?(.*?)(?:\r?\n)?[ \t]*```", re.DOTALL | re.IGNORECASE)
_ANY_FENCE_RE = re.compile(r"```(?:[A-Za-z0-9_+-]*[ \t]*\r?\n)?(.*?)```", re.DOTALL)
_WRAPPER_KEYS = ("judgments", "results", "fields", "items", "data")


def extract_payload(raw_text: str) -> str:
    """Return the JSON candidate inside provider output.

    Looks for a ```json fenced block, then any fenced block, then falls back
    to the whole text.
    """
    text = raw_text or ""
    for pattern in (_JSON_FENCE_RE, _ANY_FENCE_RE):
        match = pattern.search(text)
        if match and match.group(1).strip():
            return match.group(1).strip()
    return text.strip()


def _parse_records(payload: str) -> list[Any]:
    if not payload:
        raise MalformedJudgment("Provider output is empty.")
    try:
        parsed = json.loads(payload)
    except json.JSONDecodeError as exc:
        raise MalformedJudgment(f"Provider output is not valid JSON: {exc.msg} at position {exc.pos}.") from exc

    if isinstance(parsed, list):
        return parsed
    if isinstance(parsed, dict):
        for key in _WRAPPER_KEYS:
            wrapped = parsed.get(key)
            if isinstance(wrapped, list):
                return wrapped
    raise MalformedJudgment(f"Provider output is a JSON {type(parsed).__name__}, expected an array of records.")


def parse_record(record: Any, index: int) -> FieldJudgment:
    """Validate one raw record into a boolean or skill judgment."""
    if not isinstance(record, dict):
        raise InvalidRecord(f"record is a {type(record).__name__}, expected an object", index=index)

    decoded = decode_record(record)
    record_id = decoded.get("id") if isinstance(decoded.get("id"), str) else None
    model = BooleanJudgment if "value" in decoded else SkillJudgment
    try:
        return model.model_validate(decoded)
    except ValidationError as exc:
        problems = "; ".join(
            f"{'.'.join(str(part) for part in error['loc']) or 'record'}: {error['msg']}" for error in exc.errors()
        )
        raise InvalidRecord(problems, index=index, record_id=record_id) from exc


def normalize(raw_text: str, catalog: FieldCatalog | None = None) -> list[FieldJudgment]:
    """Turn raw provider text into validated judgments, preserving input order.

    Raises MalformedJudgment when no record sequence can be parsed at all.
    Individual records that fail validation, or that reference a field the
    catalog does not know, are dropped and logged.
    """
    records = _parse_records(extract_payload(raw_text))

    judgments: list[FieldJudgment] = []
    for index, record in enumerate(records):
        try:
            judgment = parse_record(record, index)
        except InvalidRecord as exc:
            logger.warning("judgment_record_dropped index=%s id=%s reason=%s", exc.index, exc.record_id, exc)
            continue
        if catalog is not None and catalog.resolve(judgment) is None:
            logger.warning(
                "judgment_unknown_field index=%s id=%s field=%s",
                index,
                judgment.id,
                judgment.field_id,
            )
            continue
        judgments.append(judgment)
    return judgments

from __future__ import annotations

from types import MappingProxyType
from typing import Any, Mapping

# Wire name -> abbreviation used by providers to save output tokens.
LONG_TO_SHORT: Mapping[str, str] = MappingProxyType(
    {
        "id": "id",
        "parentFieldId": "p",
        "label": "l",
        "value": "v",
        "synonyms": "syn",
        "relatedTerms": "rt",
        "exactMatch": "em",
        "synonymMatch": "sm",
        "relatedTermMatch": "rm",
        "exactMatchCount": "emc",
        "confidence": "c",
        "explanation": "e",
    }
)
SHORT_TO_LONG: Mapping[str, str] = MappingProxyType({short: long for long, short in LONG_TO_SHORT.items()})

# Other spellings providers emit for the same keys.
_ALIASES: Mapping[str, str] = MappingProxyType(
    {
        "exactMatchInResume": "exactMatch",
        "synonymMatchInResume": "synonymMatch",
        "relatedTermMatchInResume": "relatedTermMatch",
        "parent_field_id": "parentFieldId",
        "related_terms": "relatedTerms",
        "exact_match": "exactMatch",
        "synonym_match": "synonymMatch",
        "related_term_match": "relatedTermMatch",
        "exact_match_count": "exactMatchCount",
    }
)

# Wire name -> judgment model attribute.
LONG_TO_ATTR: Mapping[str, str] = MappingProxyType(
    {
        "id": "id",
        "parentFieldId": "parent_field_id",
        "label": "label",
        "value": "value",
        "synonyms": "synonyms",
        "relatedTerms": "related_terms",
        "exactMatch": "exact_match",
        "synonymMatch": "synonym_match",
        "relatedTermMatch": "related_term_match",
        "exactMatchCount": "exact_match_count",
        "confidence": "confidence",
        "explanation": "explanation",
    }
)


def canonical_key(key: str) -> str | None:
    """Map a long, abbreviated or aliased key to its wire name; None if unknown."""
    if key in LONG_TO_SHORT:
        return key
    if key in SHORT_TO_LONG:
        return SHORT_TO_LONG[key]
    return _ALIASES.get(key)


def decode_record(record: Mapping[str, Any]) -> dict[str, Any]:
    """Return a record keyed by judgment attribute names.

    Unknown keys are dropped. When a record carries both the long and the
    abbreviated spelling of a key, the long spelling wins.
    """
    decoded: dict[str, Any] = {}
    explicit: set[str] = set()
    for key, value in record.items():
        if not isinstance(key, str):
            continue
        long_key = canonical_key(key)
        if long_key is None:
            continue
        attr = LONG_TO_ATTR[long_key]
        is_long = key == long_key
        if attr in explicit and not is_long:
            continue
        decoded[attr] = value
        if is_long:
            explicit.add(attr)
    return decoded


def encode_record(record: Mapping[str, Any]) -> dict[str, Any]:
    """Abbreviate a record keyed by wire names or attribute names."""
    attr_to_long = {attr: long for long, attr in LONG_TO_ATTR.items()}
    encoded: dict[str, Any] = {}
    for key, value in record.items():
        long_key = canonical_key(key) or attr_to_long.get(key)
        encoded[LONG_TO_SHORT[long_key] if long_key else key] = value
    return encoded


def abbreviation_legend() -> str:
    return "\n".join(f"- {short}: {long}" for long, short in LONG_TO_SHORT.items())

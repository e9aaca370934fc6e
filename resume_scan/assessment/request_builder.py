from __future__ import annotations

import json
import re
from dataclasses import dataclass, field
from typing import Any

from resume_scan.core.config import settings
from resume_scan.schemas import Category, FieldDefinition, JobContext, ResumeContext

from .catalog import FieldCatalog, get_default_catalog
from .errors import UnknownCategory
from .keys import encode_record
from .prompts import build_system_prompt

_PLACEHOLDER_RE = re.compile(r"\{([a-z_]+)\}")

# Document types the judgment providers accept as an attachment.
_ATTACHABLE_MIME_PREFIXES = ("application/pdf", "image/")

_PURPOSE: dict[str, str] = {
    "searchability": "for searchability",
    "bestPractices": "for best practices adherence",
    "hardSkills": "for hard skills",
    "softSkills": "for soft skills",
}


@dataclass(frozen=True, slots=True)
class JudgmentRequest:
    category: Category
    system_prompt: str
    user_prompt: str
    field_ids: tuple[str, ...]
    document: bytes | None = field(default=None, repr=False)
    mime_type: str | None = None

    @property
    def prompt(self) -> str:
        return f"{self.system_prompt}\n\n{self.user_prompt}"


def _truncate(text: str, limit: int) -> str:
    clean = (text or "").strip()
    if limit > 0 and len(clean) > limit:
        return clean[:limit] + "..."
    return clean


def render_instruction(template: str, job: JobContext) -> str:
    values = {
        "job_title": job.title.strip() or "the target role",
        "company": job.company.strip() or "the hiring company",
    }

    def _replace(match: re.Match[str]) -> str:
        return values.get(match.group(1), match.group(0))

    return _PLACEHOLDER_RE.sub(_replace, template)


def _response_template(definition: FieldDefinition) -> dict[str, Any]:
    if definition.is_one_to_many:
        record: dict[str, Any] = {
            "id": "${skillNameSlug}",
            "parentFieldId": definition.id,
            "label": "${skillName}",
            "synonyms": [],
            "relatedTerms": [],
            "exactMatch": False,
            "synonymMatch": False,
            "relatedTermMatch": False,
            "exactMatchCount": 0,
            "confidence": 0,
            "explanation": "",
        }
    else:
        record = {"id": definition.id, "value": False, "confidence": 0, "explanation": ""}
    return encode_record(record)


def _field_payload(definition: FieldDefinition, job: JobContext) -> dict[str, Any]:
    return {
        "id": definition.id,
        "fieldContext": {
            "category": definition.category,
            "section": definition.section,
            "type": definition.kind,
            "label": definition.label,
            "prompt": render_instruction(definition.instruction, job),
            "weightInCategory": definition.weight_in_category,
        },
        "fieldResponse": _response_template(definition),
    }


def _skill_section(definition: FieldDefinition, job: JobContext) -> str:
    skills = [skill.strip() for skill in job.skills_for(definition.id) if skill and skill.strip()]
    if skills:
        listed = "\n".join(f"- {skill}" for skill in skills)
        return (
            f"Evaluate the resume for each of the following skills required for this job "
            f"(field '{definition.id}'), one response object per skill:\n{listed}"
        )
    return (
        f"For field '{definition.id}', first identify every distinct skill the job description asks for, "
        "then evaluate how well the resume demonstrates each of them, one response object per skill."
    )


def _resume_metadata(resume: ResumeContext) -> str:
    return (
        "RESUME_METADATA:\n"
        f"filename : {resume.filename or 'unknown'}\n"
        f"file_url : {resume.file_url or 'unknown'}\n"
        f"file_path : {resume.file_path or 'unknown'}"
    )


def build_request(
    category: Category,
    job: JobContext,
    resume: ResumeContext,
    catalog: FieldCatalog | None = None,
) -> JudgmentRequest:
    """Build the provider instructions for one category of the catalog."""
    active_catalog = catalog if catalog is not None else get_default_catalog()
    definitions = active_catalog.fields_by_category(category)
    if not definitions:
        raise UnknownCategory(category)

    has_skill_fields = any(definition.is_one_to_many for definition in definitions)
    attach_document = (
        resume.has_document
        and resume.mime_type.startswith(_ATTACHABLE_MIME_PREFIXES)
        and (category == "bestPractices" or not resume.text.strip())
    )

    sections = [
        f"Analyze this resume {_PURPOSE.get(category, 'for ' + category)} against the following job posting:",
        f"Title: {job.title or 'unknown'}\nCompany: {job.company or 'unknown'}\n"
        f"Description: {_truncate(job.description, settings.scan_max_job_chars)}",
    ]
    if category == "searchability":
        sections.append(_resume_metadata(resume))

    resume_text = _truncate(resume.text, settings.scan_max_resume_chars)
    if resume_text:
        sections.append(f"RESUME TEXT:\n{resume_text}")
    if attach_document:
        sections.append("The resume document is attached. Use it for layout, formatting and length checks.")

    for definition in definitions:
        if definition.is_one_to_many:
            sections.append(_skill_section(definition, job))

    payload = [_field_payload(definition, job) for definition in definitions]
    sections.append(f"Use these field definitions for your analysis:\n{json.dumps(payload, indent=2)}")

    return JudgmentRequest(
        category=category,
        system_prompt=build_system_prompt(category, has_skill_fields=has_skill_fields),
        user_prompt="\n\n".join(sections),
        field_ids=tuple(definition.id for definition in definitions),
        document=resume.document if attach_document else None,
        mime_type=resume.mime_type if attach_document else None,
    )

from __future__ import annotations

from resume_scan.schemas import Category

from .keys import abbreviation_legend

_CATEGORY_FOCUS: dict[str, str] = {
    "searchability": "how easily an applicant tracking system (ATS) and a recruiter search can find and parse the resume",
    "bestPractices": "how well the resume follows resume writing best practices and standards",
    "hardSkills": "technical skills assessment",
    "softSkills": "soft skills assessment",
}

# Skill-specific rule for when a related term counts as a match.
_RELATED_TERM_RULE: dict[str, str] = {
    "hardSkills": "there are technologies or tools in the resume that strongly imply knowledge of this skill",
    "softSkills": "there are behavioral examples or accomplishments that strongly demonstrate this skill",
}

_CONFIDENCE_BANDS: dict[str, str] = {
    "hardSkills": (
        "   - 0.9-1.0: Extensive experience clearly demonstrated with multiple mentions and examples\n"
        "   - 0.7-0.8: Solid experience with clear examples or multiple mentions\n"
        "   - 0.4-0.6: Some experience, mentioned but limited detail\n"
        "   - 0.1-0.3: Minimal evidence or only implied through related skills\n"
        "   - 0: No evidence found"
    ),
    "softSkills": (
        "   - 0.9-1.0: Skill is explicitly named and multiple achievements clearly demonstrate mastery\n"
        "   - 0.7-0.8: Strong evidence through achievements and examples, even if not explicitly named\n"
        "   - 0.4-0.6: Moderate evidence through some examples or mentions\n"
        "   - 0.1-0.3: Limited or implicit evidence\n"
        "   - 0: No evidence found"
    ),
}


def _abbreviation_block() -> str:
    return (
        "## Key Abbreviation Dictionary:\n"
        "For token efficiency, use these abbreviated keys in your response:\n\n"
        "```\n"
        f"{abbreviation_legend()}\n"
        "```\n"
    )


def _skill_rules(category: str) -> str:
    related = _RELATED_TERM_RULE.get(category, _RELATED_TERM_RULE["hardSkills"])
    bands = _CONFIDENCE_BANDS.get(category, _CONFIDENCE_BANDS["hardSkills"])
    return (
        "## Skill Matching Rules:\n\n"
        "For each skill:\n"
        "   - Set 'em' to true only if the exact skill name appears in the resume\n"
        "   - Set 'sm' to true only if any synonym appears\n"
        f"   - Set 'rm' to true if {related}\n"
        "   - Include only synonyms that actually appear in the resume\n"
        "   - Include related terms that appear in or are implied by the resume content\n"
        "   - Set 'emc' to the number of times the exact skill name appears\n\n"
        "Set confidence 'c' (0-1) based on how strongly the resume demonstrates the skill:\n"
        f"{bands}\n\n"
        "In the explanation 'e', cite specific examples from the resume.\n"
    )


def build_system_prompt(category: Category, *, has_skill_fields: bool) -> str:
    focus = _CATEGORY_FOCUS.get(category, category)
    parts = [
        f"# System Instructions for Resume Analysis - {category.upper()} Category\n",
        f"You are an expert resume analyzer specialized in {focus}. "
        "Process each field according to its prompt and context.\n",
        "## Processing Instructions:\n",
        f"1. Analyze each field in the provided definitions array, focusing only on the {category} category.\n",
        "2. For each field, analyze the resume according to the field's `prompt`.\n",
        "3. Generate responses based on the field's `type`:\n"
        "   - For `one-to-one` fields: create a SINGLE response object matching `fieldResponse`.\n"
        "   - For `one-to-many` fields: create one response object per distinct item (such as a skill) "
        "you identify. Generate as many objects as the job description and resume justify; "
        "do not limit yourself to a fixed number.\n",
        "4. Replace template values in `fieldResponse` (e.g. `${skillNameSlug}`, `${skillName}`) "
        "with concrete values.\n",
    ]
    if has_skill_fields:
        parts.append(_skill_rules(category))
    parts.extend(
        [
            _abbreviation_block(),
            "## Response Format:\n",
            "Return ONLY a JSON array of response objects.\n",
            "## Important:\n"
            "- Keep the structure of each `fieldResponse` with the abbreviated keys\n"
            "- `v`, `em`, `sm` and `rm` must be JSON booleans; `c` must be a number between 0 and 1\n"
            "- For one-to-many fields, set `p` to the originating field id and give each object a unique "
            "id derived from its content (like \"skill-python\")\n"
            "- Provide specific explanations\n",
        ]
    )
    return "\n".join(parts)

from __future__ import annotations

import asyncio
import json
import re
from typing import Any

SEARCHABILITY_RECORDS: list[dict[str, Any]] = [
    {"id": "emailPresent", "v": True, "c": 0.95, "e": "jane@example.com in the header"},
    {"id": "phonePresent", "v": True, "c": 0.9, "e": "+1 555 010 2020 in the header"},
    {"id": "physicalAddressPresent", "v": False, "c": 0.8, "e": "Only the city is listed"},
    {"id": "summaryPresent", "v": True, "c": 0.85, "e": "Profile section at the top"},
    {"id": "jobTitleIncluded", "v": False, "c": 0.7, "e": "Data Engineer title not found"},
]

BEST_PRACTICES_RECORDS: list[dict[str, Any]] = [
    {"id": "achievementFocused", "v": True, "c": 0.8, "e": "Cut pipeline cost by 30%"},
    {"id": "actionVerbs", "v": True, "c": 0.9, "e": "Bullets start with Led, Built"},
    {"id": "spellingGrammar", "v": False, "c": 0.6, "e": "Two typos in experience"},
    {"id": "keywordsAligned", "v": True, "c": 0.75, "e": "Spark and Airflow mentioned"},
]

HARD_SKILL_RECORDS: list[dict[str, Any]] = [
    {
        "id": "python",
        "p": "hardSkills",
        "l": "Python",
        "syn": [],
        "rt": ["pandas"],
        "em": True,
        "sm": False,
        "rm": True,
        "emc": 3,
        "c": 0.9,
        "e": "Python listed in skills and two roles",
    },
    {
        "id": "sql",
        "p": "hardSkills",
        "l": "SQL",
        "syn": ["PostgreSQL"],
        "rt": [],
        "em": False,
        "sm": True,
        "rm": False,
        "emc": 0,
        "c": 0.7,
        "e": "PostgreSQL experience",
    },
    {
        "id": "kubernetes",
        "p": "hardSkills",
        "l": "Kubernetes",
        "syn": ["k8s"],
        "rt": ["Helm"],
        "em": False,
        "sm": False,
        "rm": False,
        "emc": 0,
        "c": 0.0,
        "e": "No container orchestration experience",
    },
    {
        "id": "aws",
        "p": "hardSkills",
        "l": "AWS",
        "syn": [],
        "rt": ["S3", "Redshift"],
        "em": False,
        "sm": False,
        "rm": True,
        "emc": 0,
        "c": 0.5,
        "e": "Used S3 and Redshift",
    },
]

SOFT_SKILL_RECORDS: list[dict[str, Any]] = [
    {
        "id": "communication",
        "p": "softSkills",
        "l": "Communication",
        "syn": [],
        "rt": [],
        "em": True,
        "sm": False,
        "rm": False,
        "emc": 1,
        "c": 0.8,
        "e": "Presented results to leadership",
    },
    {
        "id": "leadership",
        "p": "softSkills",
        "l": "Leadership",
        "syn": ["team lead"],
        "rt": [],
        "em": False,
        "sm": False,
        "rm": False,
        "emc": 0,
        "c": 0.1,
        "e": "No evidence of leading people",
    },
]


def fenced(records: list[dict[str, Any]], prose: str = "Here is the analysis:") -> str:
    return f"{prose}\n```json\n{json.dumps(records)}\n```"


DEFAULT_RESPONSES: dict[str, Any] = {
    "searchability": fenced(SEARCHABILITY_RECORDS),
    "bestPractices": "```\n" + json.dumps(BEST_PRACTICES_RECORDS) + "\n```",
    "hardSkills": json.dumps(HARD_SKILL_RECORDS),
    "softSkills": fenced(SOFT_SKILL_RECORDS, prose="Sure."),
}

_CATEGORY_RE = re.compile(r"Resume Analysis - (\w+) Category")
_UPPER_TO_CATEGORY = {name.upper(): name for name in DEFAULT_RESPONSES}


class FakeProvider:
    """In-memory judgment provider keyed by the category named in the prompt.

    A response value may be raw text, an exception instance to raise, or a
    (delay_seconds, text) tuple.
    """

    def __init__(self, responses: dict[str, Any] | None = None):
        self.responses = dict(DEFAULT_RESPONSES)
        if responses:
            self.responses.update(responses)
        self.calls: list[dict[str, Any]] = []

    async def generate(
        self,
        prompt: str,
        *,
        document: bytes | None = None,
        mime_type: str | None = None,
    ) -> str:
        match = _CATEGORY_RE.search(prompt)
        category = _UPPER_TO_CATEGORY[match.group(1)] if match else "unknown"
        self.calls.append({"category": category, "prompt": prompt, "document": document, "mime_type": mime_type})

        response = self.responses[category]
        if isinstance(response, BaseException):
            raise response
        if isinstance(response, tuple):
            delay, text = response
            await asyncio.sleep(delay)
            return text
        return response

"""Compose the gap analysis request: instruction text + output schema."""

from __future__ import annotations

import copy
import json
from typing import Any

from skillbridge.models.analysis import AnalysisRequest
from skillbridge.models.document import EncodedPayload

SYSTEM_PROMPT = """\
You are a highly experienced career coach and resume analyst. Your task is to \
evaluate a candidate's resume against a specified target role. Identify any \
career gaps, missing skills, and suggest valuable certifications and learning \
resources to bridge these gaps. Your response must be in a structured JSON format."""

RESULT_FIELDS: tuple[str, ...] = (
    "gap_summary",
    "missing_skills",
    "certifications",
    "learning_resources",
)

OUTPUT_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "gap_summary": {
            "type": "string",
            "description": "A summary of missing experience or skills relevant to the target role.",
        },
        "missing_skills": {
            "type": "array",
            "items": {"type": "string"},
            "description": "A list of technical or soft skills missing for the target role.",
        },
        "certifications": {
            "type": "array",
            "items": {"type": "string"},
            "description": "A list of certifications that would help for the target role.",
        },
        "learning_resources": {
            "type": "array",
            "items": {"type": "string"},
            "description": "A list of learning links or courses to address gaps.",
        },
    },
    "required": list(RESULT_FIELDS),
}

# The role is substituted exactly once; everything else refers to it
# as "the target role".
INSTRUCTION_TEMPLATE = """\
Analyze the attached resume document thoroughly. The candidate is applying for \
the position of "{role}".

Based on the resume content and the typical requirements of the target role, \
provide the following:
- A concise "gap_summary": Summarize any significant career gaps, lack of \
relevant experience, or under-demonstrated skills relative to the target role.
- A list of "missing_skills": Enumerate specific technical and soft skills that \
are typically required for the target role but are either absent or not \
strongly highlighted in the resume.
- A list of "certifications": Suggest specific industry-recognized \
certifications that would significantly boost the candidate's qualification \
for the target role.
- A list of "learning_resources": Provide actionable learning resources (e.g., \
URLs to online courses like Coursera, edX, Udemy; specific book titles; or \
reputable learning platforms) that can help the candidate acquire the \
identified missing skills or certifications. Prioritize direct links where \
appropriate.

Respond ONLY with JSON matching this schema. All four fields are required; use \
an empty list when there is nothing to suggest:
{schema}"""


def build_instruction(role: str) -> str:
    return INSTRUCTION_TEMPLATE.format(
        role=role,
        schema=json.dumps(OUTPUT_SCHEMA, indent=2),
    )


def build_request(payload: EncodedPayload, role: str) -> AnalysisRequest:
    """Build the analysis request for an encoded document and a target role.

    Deterministic: the same inputs always give an equal request. The role
    is trimmed but otherwise embedded verbatim.
    """
    role = role.strip()
    return AnalysisRequest(
        document_payload=payload.base64_data,
        media_type=payload.media_type,
        role=role,
        instruction_text=build_instruction(role),
        output_schema=copy.deepcopy(OUTPUT_SCHEMA),
    )

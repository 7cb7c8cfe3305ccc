"""
Record normalizer for the Intake context.

Turns a model's reply into a record that is safe to merge: the JSON object is
pulled out of the reply, coerced into a ResumeRecord, then every field is
truncated to the template's layout limits and required fields are filled with
placeholder labels.

Truncation and default-filling happen here, before the merge. The merge engine
itself accepts records of any length.
"""

import json
import re
from typing import Optional

from restyle.contexts.intake.logger import _log_debug, _log_info, _log_warning
from restyle.contexts.templating.defaults import DEFAULT_SKILLS, NORMALIZED_DEFAULTS
from restyle.contexts.templating.exceptions import RecordParseError
from restyle.contexts.templating.layout_limits import LayoutLimits
from restyle.contexts.templating.resume_record import (
    ContactInfo,
    EducationEntry,
    ExperienceEntry,
    ResumeRecord,
)

ELLIPSIS = "…"

# Fixed limits for fields the layout analysis does not cover
CONTACT_LIMITS = {"email": 50, "phone": 20, "location": 20, "linkedin": 50, "website": 50}
DURATION_LIMIT = 20
YEAR_LIMIT = 15
MAX_DESCRIPTION_LINES = 4

CODE_FENCE = re.compile(r"```(?:json)?", re.IGNORECASE)


def truncate(text: Optional[str], max_len: int) -> str:
    """
    Trim whitespace and cut text to max_len characters, ending in an ellipsis.

    Args:
        text: Text to truncate (None yields "")
        max_len: Maximum length including the ellipsis

    Returns:
        Truncated text

    Example:
        >>> truncate("  Senior Software Engineer  ", 10)
        'Senior So…'
        >>> truncate("Engineer", 10)
        'Engineer'
    """
    if not text:
        return ""
    text = text.strip()
    if len(text) <= max_len:
        return text
    return text[: max_len - 1] + ELLIPSIS


def normalize_record(
    record: ResumeRecord,
    limits: LayoutLimits = None,
    has_skills: bool = True,
) -> ResumeRecord:
    """
    Truncate a record to layout limits and fill required fields.

    Args:
        record: Record to normalize
        limits: Field limits (defaults to LayoutLimits())
        has_skills: False when the source carried no skill list at all, in which
                    case generic placeholder skills are used

    Returns:
        New normalized ResumeRecord
    """
    limits = limits or LayoutLimits()
    defaults = NORMALIZED_DEFAULTS
    contact = record.contact

    skills = record.skills if has_skills else DEFAULT_SKILLS

    normalized = ResumeRecord(
        full_name=truncate(record.full_name, limits.full_name) or defaults["full_name"],
        title=truncate(record.title, limits.title) or defaults["title"],
        contact=ContactInfo(
            email=truncate(contact.email, CONTACT_LIMITS["email"]) or defaults["email"],
            phone=truncate(contact.phone, CONTACT_LIMITS["phone"]) or defaults["phone"],
            location=truncate(contact.location, CONTACT_LIMITS["location"]) or defaults["location"],
            linkedin=truncate(contact.linkedin, CONTACT_LIMITS["linkedin"]),
            website=truncate(contact.website, CONTACT_LIMITS["website"]),
        ),
        photo_url=record.photo_url,
        summary=truncate(record.summary, limits.summary) or defaults["summary"],
        experience=[
            ExperienceEntry(
                company=truncate(entry.company, limits.exp_company) or defaults["company"],
                role=truncate(entry.role, limits.exp_role) or defaults["role"],
                duration=truncate(entry.duration, DURATION_LIMIT) or defaults["duration"],
                description=[
                    truncate(line, limits.exp_description)
                    for line in entry.description[:MAX_DESCRIPTION_LINES]
                ],
            )
            for entry in record.experience[: limits.exp_count]
        ],
        skills=[truncate(skill, limits.skill_name) for skill in skills[: limits.skill_count]],
        education=[
            EducationEntry(
                school=truncate(entry.school, limits.edu_school) or defaults["school"],
                degree=truncate(entry.degree, limits.edu_degree) or defaults["degree"],
                year=truncate(entry.year, YEAR_LIMIT) or defaults["year"],
            )
            for entry in record.education[: limits.edu_count]
        ],
    )

    dropped = (
        max(0, len(record.experience) - limits.exp_count),
        max(0, len(record.education) - limits.edu_count),
        max(0, len(skills) - limits.skill_count),
    )
    if any(dropped):
        _log_debug(
            f"Dropped entries over limits (experience: {dropped[0]}, "
            f"education: {dropped[1]}, skills: {dropped[2]})"
        )

    return normalized


def extract_json_object(text: str) -> dict:
    """
    Extract and parse the JSON object embedded in a model reply.

    Strips Markdown code fences, then parses the span from the first '{'
    to the last '}'.

    Args:
        text: Raw reply text

    Returns:
        Parsed dict

    Raises:
        RecordParseError: If no JSON object can be found or parsed

    Example:
        >>> extract_json_object('Here you go:\\n```json\\n{"fullName": "Ada"}\\n```')
        {'fullName': 'Ada'}
    """
    if not text:
        raise RecordParseError("Model reply is empty")

    cleaned = CODE_FENCE.sub("", text).strip()
    first_brace = cleaned.find("{")
    last_brace = cleaned.rfind("}")

    if first_brace == -1 or last_brace <= first_brace:
        raise RecordParseError("No JSON object found in model reply", reply_snippet=text)

    try:
        parsed = json.loads(cleaned[first_brace : last_brace + 1])
    except json.JSONDecodeError as e:
        raise RecordParseError(
            "Model reply contains malformed JSON", reply_snippet=text, original_error=e
        ) from e

    if not isinstance(parsed, dict):
        raise RecordParseError("Model reply JSON is not an object", reply_snippet=text)

    return parsed


def parse_model_reply(text: str, limits: LayoutLimits = None) -> ResumeRecord:
    """
    Parse a model reply into a normalized record.

    Args:
        text: Raw reply text containing a JSON object in the wire shape
        limits: Field limits of the target template

    Returns:
        Normalized ResumeRecord

    Raises:
        RecordParseError: If the reply has no parseable JSON object
        InvalidRecordStructureError: If the JSON has the wrong container types
    """
    data = extract_json_object(text)
    record = ResumeRecord.from_dict(data)

    has_skills = data.get("skills") is not None
    if not has_skills:
        _log_warning("Model reply has no skill list, using placeholder skills")

    _log_info(
        f"Parsed model reply: {len(record.experience)} experience, "
        f"{len(record.education)} education, {len(record.skills)} skill entries"
    )
    return normalize_record(record, limits, has_skills=has_skills)

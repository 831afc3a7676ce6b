"""Pure helpers turning a parsed resume into intake-form values."""

import re
from typing import Any, Dict, List

from agents.resume.agent import ParsedResume

REQUIRED_RESUME_FIELDS = (
    "personal_info.name",
    "personal_info.email",
    "personal_info.phone",
    "experience",
    "skills",
)

# Resumes missing more than this many required fields are flagged invalid
MAX_MISSING_FIELDS = 2


def to_form_data(parsed: ParsedResume) -> Dict[str, Any]:
    """
    Map a parsed resume onto application intake fields.

    The first experience entry is treated as the current position. Only
    fields that were actually found are included.
    """
    info = parsed.personal_info
    form_data: Dict[str, Any] = {
        "candidate_name": info.name,
        "candidate_email": info.email,
        "candidate_phone": info.phone,
        "location": info.location,
        "linkedin_profile": info.linkedin_url,
        "git_profile": info.github_url,
        "years_of_experience": parsed.total_experience,
        "cover_letter": parsed.summary,
    }

    if parsed.experience:
        current = parsed.experience[0]
        form_data["current_company"] = current.company
        form_data["current_role"] = current.role
        form_data["time_with_current_company"] = current.duration

    return {key: value for key, value in form_data.items() if value}


def experience_years(parsed: ParsedResume) -> int:
    """Years from the stated total, else the number of listed positions."""
    if parsed.total_experience:
        match = re.search(r"(\d+)", parsed.total_experience)
        if match:
            return int(match.group(1))
    return len(parsed.experience)


def validate_parsed(parsed: ParsedResume) -> Dict[str, Any]:
    """
    Completeness report over the required resume fields.

    Returns:
        ``{"is_valid", "missing_fields", "completeness"}`` with completeness
        as a 0-100 percentage.
    """
    missing: List[str] = []
    for path in REQUIRED_RESUME_FIELDS:
        value: Any = parsed
        for part in path.split("."):
            value = getattr(value, part, None)
        if not value:
            missing.append(path)

    found = len(REQUIRED_RESUME_FIELDS) - len(missing)
    return {
        "is_valid": len(missing) <= MAX_MISSING_FIELDS,
        "missing_fields": missing,
        "completeness": round(found / len(REQUIRED_RESUME_FIELDS) * 100),
    }

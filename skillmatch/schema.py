from typing import Any, Dict, List

from .levels import parse_proficiency

MAX_NAME_LENGTH = 255

JOB_REQUIRED_STR_FIELDS = ["title", "company"]
JOB_OPTIONAL_STR_FIELDS = [
    "level",
    "location",
    "description",
    "type",
    "track",
]


def _is_non_empty_str(v: Any) -> bool:
    return isinstance(v, str) and v.strip() != ""


def _is_salary(v: Any) -> bool:
    return isinstance(v, int) and not isinstance(v, bool) and v >= 0


def validate_job_record(data: Dict[str, Any]) -> List[str]:
    """
    Returns a list of validation error messages. Empty list means valid.

    Only the write path checks records; the matcher accepts anything and
    falls back to defaults.
    """
    errors: List[str] = []

    for f in JOB_REQUIRED_STR_FIELDS:
        if f not in data:
            errors.append(f"Missing required field: {f}")
        elif not _is_non_empty_str(data[f]):
            errors.append(f"Field '{f}' must be a non-empty string")
        elif len(data[f]) > MAX_NAME_LENGTH:
            errors.append(f"Field '{f}' exceeds max length of {MAX_NAME_LENGTH}")

    for f in JOB_OPTIONAL_STR_FIELDS:
        if data.get(f) is not None and not isinstance(data[f], str):
            errors.append(f"Field '{f}' must be a string if provided")

    skills = data.get("skills")
    if skills is not None:
        if not isinstance(skills, list) or not all(isinstance(s, str) for s in skills):
            errors.append("Field 'skills' must be a list of strings")

    for f in ("salary_min", "salary_max"):
        if data.get(f) is not None and not _is_salary(data[f]):
            errors.append(f"Field '{f}' must be a non-negative integer")

    low, high = data.get("salary_min"), data.get("salary_max")
    if _is_salary(low) and _is_salary(high) and low > high:
        errors.append("Field 'salary_min' must not exceed 'salary_max'")

    return errors


def validate_skill_record(data: Dict[str, Any]) -> List[str]:
    errors: List[str] = []

    if "user_id" not in data or data["user_id"] in (None, ""):
        errors.append("Missing required field: user_id")

    name = data.get("skill_name")
    if not _is_non_empty_str(name):
        errors.append("Field 'skill_name' must be a non-empty string")
    elif len(name) > MAX_NAME_LENGTH:
        errors.append(f"Field 'skill_name' exceeds max length of {MAX_NAME_LENGTH}")

    proficiency = data.get("proficiency")
    if proficiency is not None and parse_proficiency(proficiency) is None:
        errors.append(f"Unknown proficiency: {proficiency}")

    return errors

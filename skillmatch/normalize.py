import re


def normalize_text(s: str) -> str:
    return " ".join(s.strip().lower().split())


def normalize_skill_name(name) -> str:
    """Canonical form used for skill-name membership tests."""
    if name is None:
        return ""
    return normalize_text(str(name))


def normalize_label(label) -> str:
    # "Mid Level", "mid-level", "MidLevel" and "MID_LEVEL" share one key
    if label is None:
        return ""
    return re.sub(r"[^a-z0-9]", "", str(label).lower())

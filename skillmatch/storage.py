import json
from pathlib import Path
from typing import Any, Dict, List


def unwrap_records(payload: Any) -> List[Dict[str, Any]]:
    """Accept a bare list or a ``{"data": [...]}`` envelope; keep dict items only."""
    if isinstance(payload, dict):
        payload = payload.get("data")
    if not isinstance(payload, list):
        raise ValueError("Expected a list of records")
    return [item for item in payload if isinstance(item, dict)]


def load_records(path: Path) -> List[Dict[str, Any]]:
    """Read a JSON file of records. A missing or empty file holds no records."""
    if not path.exists():
        return []
    with path.open("r", encoding="utf-8") as f:
        content = f.read().strip()
    if not content:
        return []
    try:
        return unwrap_records(json.loads(content))
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in {path}: {e}") from e


def save_records(path: Path, records: List[Dict[str, Any]]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        json.dump(records, f, indent=2, ensure_ascii=False)

"""
Parse-or-default readers for component properties.

Property bags arrive from the editor, from JSON imports and from older saved
pages, so the same field can be a number, a numeric string, a comma list or a
real list. None of these helpers raise; bad input yields the default.
"""
import math
from typing import Any, Dict, List, Optional, Sequence


def to_text(value: Any, default: str) -> str:
    if value is None or isinstance(value, (dict, list, tuple)):
        return default
    text = str(value).strip()
    return text or default


def to_int(value: Any, default: int, minimum: Optional[int] = None, maximum: Optional[int] = None) -> int:
    """Coerce ints, floats and numeric strings; below minimum falls back to default, above maximum is clamped."""
    if isinstance(value, bool) or value is None:
        return default
    if isinstance(value, int):
        result = value
    elif isinstance(value, float):
        if not math.isfinite(value):
            return default
        result = int(value)
    elif isinstance(value, str):
        try:
            parsed = float(value.strip())
        except ValueError:
            return default
        if not math.isfinite(parsed):
            return default
        result = int(parsed)
    else:
        return default
    if minimum is not None and result < minimum:
        return default
    if maximum is not None and result > maximum:
        return maximum
    return result


def to_bool(value: Any, default: bool = False) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in ("true", "1", "yes", "on"):
            return True
        if lowered in ("false", "0", "no", "off"):
            return False
    if isinstance(value, int):
        return value != 0
    return default


def to_list(value: Any, default: Sequence[str]) -> List[str]:
    """Comma-delimited string or list of scalars -> list of non-empty strings."""
    if isinstance(value, str):
        items = [part.strip() for part in value.split(",")]
    elif isinstance(value, (list, tuple)):
        items = [
            str(part).strip()
            for part in value
            if part is not None and not isinstance(part, (dict, list, tuple))
        ]
    else:
        return list(default)
    items = [item for item in items if item]
    return items or list(default)


def _field(value: Any) -> str:
    # nested lists (e.g. a pricing plan's features) flatten to a comma list
    if isinstance(value, (list, tuple)):
        return ", ".join(str(part).strip() for part in value if part is not None)
    return to_text(value, "")


def to_records(value: Any, keys: Sequence[str], default: Sequence[Dict[str, Any]]) -> List[Dict[str, str]]:
    """
    Normalize a list of sub-records (FAQ items, pricing plans, team members...).

    Accepts a list of dicts, a list of "a|b" strings, or one string with one
    record per line. Missing keys become empty strings; records with every key
    empty are dropped.
    """
    if isinstance(value, str):
        raw: List[Any] = value.splitlines()
    elif isinstance(value, (list, tuple)):
        raw = list(value)
    else:
        raw = []

    records = []
    for item in raw:
        if isinstance(item, dict):
            record = {key: _field(item.get(key)) for key in keys}
        elif isinstance(item, str):
            parts = [part.strip() for part in item.split("|")]
            record = {key: (parts[i] if i < len(parts) else "") for i, key in enumerate(keys)}
        else:
            continue
        if any(record.values()):
            records.append(record)

    if records:
        return records
    return [{key: _field(item.get(key)) for key in keys} for item in default]

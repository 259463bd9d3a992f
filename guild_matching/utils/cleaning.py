"""
Cleaning helpers for loosely-typed store records.

Rows arrive from a document-style store where optional columns may be null,
arrays may be missing and joined one-to-one relations may come back wrapped
in a list. These helpers turn such values into something the scoring core
can use without raising.
"""

import math
from typing import Any, List, Optional


def clean_number(value: Any, default: float = 0) -> float:
    """
    Convert a numeric-ish value to a number.

    Handles:
    - None (returns default)
    - int / float (NaN and infinities return default)
    - numeric strings like "600" or " 12.5 "

    Anything else returns default.
    """
    if value is None or isinstance(value, bool):
        return default

    if isinstance(value, (int, float)):
        number = value
    else:
        try:
            number = float(str(value).strip())
        except ValueError:
            return default

    if isinstance(number, float) and (math.isnan(number) or math.isinf(number)):
        return default
    return number


def clean_optional_number(value: Any) -> Optional[float]:
    """Like clean_number, but keeps "absent" distinguishable from zero."""
    if value is None:
        return None
    number = clean_number(value, default=math.nan)
    return None if isinstance(number, float) and math.isnan(number) else number


def clean_int(value: Any, default: int = 0) -> int:
    """Convert a numeric-ish value to an int, truncating fractions."""
    return int(clean_number(value, default))


def clean_skill_list(value: Any) -> List[str]:
    """
    Normalize a skills array.

    Non-list values (None, a bare string, a dict) yield an empty list.
    Non-string and blank entries are dropped; surrounding whitespace is
    stripped. Case is preserved.
    """
    if not isinstance(value, (list, tuple)):
        return []

    skills = []
    for item in value:
        if isinstance(item, str) and item.strip():
            skills.append(item.strip())
    return skills


def unwrap_single(value: Any) -> Any:
    """
    Unwrap a joined one-to-one relation.

    The store may return a related record as a dict or as a list holding
    that dict. An empty list means "no related record".
    """
    if isinstance(value, (list, tuple)):
        return value[0] if value else None
    return value

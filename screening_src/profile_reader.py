"""Build PatientProfile objects from raw form values.

The screening form submits everything as text. This module turns those
values into a typed PatientProfile before it reaches the rules engine:

- age: leading integer ("42", "42.9" → 42); blank or non-numeric → None
- smoking numbers: leading decimal ("12.5", "12abc" → 12.5, 12);
  blank, non-numeric or negative → 0
- pregnant: yes/no style flags
- conditions: list of tags or comma-separated string; unknown tags are kept
  and ignored by the engine

Malformed values (missing or unknown sex, unknown smoking status, negative
age, conditions that are neither a list nor a string) raise ValueError.
"""

import logging
import math
import re
from typing import Any, Mapping

from .models import PatientProfile, RiskFactor, Sex, SmokingStatus

logger = logging.getLogger(__name__)

# Field names used by the web form, mapped to profile field names
FIELD_ALIASES = {
    "smoking-status": "smoking_status",
    "cigs-per-day": "cigarettes_per_day",
    "years-smoked": "years_smoked",
    "quit-years": "years_since_quit",
}

TRUE_VALUES = {"yes", "y", "true", "1", "on"}
FALSE_VALUES = {"no", "n", "false", "0", "off", ""}

KNOWN_CONDITIONS = {tag.value for tag in RiskFactor}

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")
_LEADING_FLOAT = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


def visible_smoking_fields(smoking_status: SmokingStatus | str | None) -> tuple[str, ...]:
    """Smoking detail fields the form shows for a given smoking status.

    Current smokers see cigarettes per day and years smoked; former smokers
    also see years since quitting; never-smokers see none.
    """
    status = _parse_smoking_status(smoking_status)
    if status == SmokingStatus.CURRENT:
        return ("cigarettes_per_day", "years_smoked")
    if status == SmokingStatus.FORMER:
        return ("cigarettes_per_day", "years_smoked", "years_since_quit")
    return ()


def read_profile(fields: Mapping[str, Any]) -> PatientProfile:
    """Build a PatientProfile from raw form values.

    Args:
        fields: Mapping of field name to raw value. Accepts profile field
            names (e.g. "smoking_status") or form names (e.g. "smoking-status").

    Returns:
        PatientProfile ready for evaluation

    Raises:
        ValueError: If sex is missing or unknown, smoking status is unknown,
            or age is negative
    """
    values = _canonical_fields(fields)

    return PatientProfile(
        age=_parse_age(values.get("age")),
        sex=_parse_sex(values.get("sex")),
        pregnant=_parse_flag(values.get("pregnant"), "pregnant"),
        smoking_status=_parse_smoking_status(values.get("smoking_status")),
        cigarettes_per_day=_parse_amount(values.get("cigarettes_per_day")),
        years_smoked=_parse_amount(values.get("years_smoked")),
        years_since_quit=_parse_amount(values.get("years_since_quit")),
        conditions=_parse_conditions(values.get("conditions")),
    )


def _canonical_fields(fields: Mapping[str, Any]) -> dict[str, Any]:
    values = {}
    for key, value in fields.items():
        values[FIELD_ALIASES.get(key, key)] = value
    return values


def _parse_age(value) -> int | None:
    if value is None or isinstance(value, bool):
        age = None
    elif isinstance(value, int):
        age = value
    elif isinstance(value, float):
        age = int(value) if math.isfinite(value) else None
    else:
        match = _LEADING_INT.match(str(value))
        age = int(match.group(1)) if match else None

    if age is None:
        if value not in (None, ""):
            logger.debug(f"Age {value!r} is not a number; treating age as unknown")
        return None
    if age < 0:
        raise ValueError(f"Age cannot be negative: {value!r}")
    return age


def _parse_sex(value) -> Sex:
    if isinstance(value, Sex):
        return value
    if value is None or not str(value).strip():
        raise ValueError("Sex is required (male or female)")
    try:
        return Sex(str(value).strip().lower())
    except ValueError:
        raise ValueError(f"Unknown sex {value!r}; expected male or female")


def _parse_smoking_status(value) -> SmokingStatus:
    if isinstance(value, SmokingStatus):
        return value
    if value is None or not str(value).strip():
        return SmokingStatus.NEVER
    try:
        return SmokingStatus(str(value).strip().lower())
    except ValueError:
        raise ValueError(
            f"Unknown smoking status {value!r}; expected never, current or former"
        )


def _parse_flag(value, name: str) -> bool:
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in TRUE_VALUES:
        return True
    if text in FALSE_VALUES:
        return False
    raise ValueError(f"Unrecognized value for {name}: {value!r}")


def _parse_amount(value) -> float:
    """Parse a smoking quantity, defaulting to 0 when unusable."""
    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        number = float(value)
    else:
        match = _LEADING_FLOAT.match(str(value))
        if not match:
            return 0.0
        number = float(match.group(1))
    if not math.isfinite(number) or number < 0:
        return 0.0
    return number


def _parse_conditions(value) -> frozenset[str]:
    if value is None:
        return frozenset()
    if isinstance(value, str):
        items = value.split(",")
    elif isinstance(value, (list, tuple, set, frozenset)):
        items = list(value)
    else:
        raise ValueError(
            f"conditions must be a list or comma-separated string: {value!r}"
        )

    tags = set()
    for item in items:
        tag = (item.value if isinstance(item, RiskFactor) else str(item)).strip().lower()
        if not tag:
            continue
        if tag not in KNOWN_CONDITIONS:
            logger.debug(f"Condition tag {tag!r} is not used by any screening rule")
        tags.add(tag)
    return frozenset(tags)

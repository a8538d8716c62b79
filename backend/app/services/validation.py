"""
Field checks shared by the user, project and task services.

Each helper raises BadRequestError with a message naming the field, so callers
never reach the database with an invalid value.
"""

from enum import Enum
from typing import TypeVar

from app.exceptions import BadRequestError

E = TypeVar("E", bound=Enum)

MIN_PRIORITY = 1
MAX_PRIORITY = 3


def parse_enum(enum_type: type[E], raw: str | None, field: str = "status") -> E:
    """
    Parse a wire string into a member of `enum_type`.

    Matching is exact and case-sensitive against member names.
    """
    if raw is None or not raw.strip():
        raise BadRequestError(f"{field.capitalize()} is required", field=field)
    try:
        return enum_type[raw]
    except KeyError:
        allowed = ", ".join(member.name for member in enum_type)
        raise BadRequestError(
            f"Invalid {field}: {raw}. Allowed: {allowed}", field=field
        ) from None


def require_text(value: str | None, field: str, label: str | None = None) -> str:
    """Return `value` unchanged, or raise if it is missing or blank."""
    if value is None or not value.strip():
        raise BadRequestError(f"{label or field.capitalize()} is required", field=field)
    return value


def validate_priority(priority: int | None, default: int) -> int:
    if priority is None:
        return default
    if not MIN_PRIORITY <= priority <= MAX_PRIORITY:
        raise BadRequestError(
            f"Priority must be between {MIN_PRIORITY} and {MAX_PRIORITY}",
            field="priority",
        )
    return priority

# 📄 File: app/shared/utils/helpers.py

# 🧭 Purpose (Layman Explanation):
# Small helpful tools used all over the menu service, like turning a category name into
# a web-friendly "slug", checking that an ID looks right, and adding months to a date.

# 🧪 Purpose (Technical Summary):
# General purpose utility functions: slug derivation, identifier parsing, safe numeric
# coercion, calendar month arithmetic and federated-login name derivation.

# 🔗 Dependencies:
# - uuid: Identifier parsing
# - secrets: Secure random generation
# - calendar: Month lengths
# - re: Pattern substitution

# 🔄 Connected Modules / Calls From:
# Used by: domain services (slugs, ids, end dates), app.shared.utils.query (safe_int),
# app.modules.user_management auth service (username derivation)

import calendar
import re
import secrets
from datetime import date, datetime
from typing import Any, Optional, TypeVar, Union
from uuid import UUID

from app.shared.core.exceptions import ValidationError

DateLike = TypeVar("DateLike", date, datetime)

_WHITESPACE = re.compile(r"\s+")
_DIGITS_AND_NON_WORD = re.compile(r"[\d\W]+")


def slugify(text: str) -> str:
    """
    Derive a slug from a display name.

    Lower-cases the text and replaces each whitespace run with ``-``.
    Punctuation is kept, so ``"Home & Garden"`` becomes ``"home-&-garden"``.
    """
    return _WHITESPACE.sub("-", text.lower())


def parse_uuid(value: Union[str, UUID, None], label: str = "resource") -> UUID:
    """
    Parse an identifier received from a client.

    Args:
        value: Raw identifier (path segment, query value or body field)
        label: Human name of the referenced entity, used in the error message

    Returns:
        UUID: Parsed identifier

    Raises:
        ValidationError: If the value is not a well-formed identifier
    """
    if isinstance(value, UUID):
        return value
    try:
        return UUID(str(value))
    except (TypeError, ValueError, AttributeError):
        raise ValidationError(
            message=f"Invalid {label} ID format",
            field=f"{label}Id",
            value=value,
        )


def parse_optional_uuid(value: Optional[str], label: str = "resource") -> Optional[UUID]:
    if value is None or value == "":
        return None
    return parse_uuid(value, label)


def safe_int(value: Any, default: int = 0) -> int:
    """
    Safely convert value to integer.

    Args:
        value: Value to convert
        default: Default value if conversion fails

    Returns:
        Integer value or default
    """
    if value is None or isinstance(value, bool):
        return default
    try:
        return int(value)
    except (ValueError, TypeError):
        return default


def add_months(start: DateLike, months: int) -> DateLike:
    """
    Add calendar months to a date, clamping the day to the target month's length.

    ``add_months(date(2025, 2, 1), 3) == date(2025, 5, 1)`` and
    ``add_months(date(2025, 1, 31), 1) == date(2025, 2, 28)``.
    """
    month_index = start.month - 1 + months
    year = start.year + month_index // 12
    month = month_index % 12 + 1
    day = min(start.day, calendar.monthrange(year, month)[1])
    return start.replace(year=year, month=month, day=day)


def display_name_from(raw: str) -> str:
    """Replace digit and non-word runs in a federated display name with spaces."""
    return _DIGITS_AND_NON_WORD.sub(" ", raw).strip()


def username_base_from(raw: str) -> str:
    """Lower-case a display name and strip every digit and non-word character."""
    return _DIGITS_AND_NON_WORD.sub("", raw.lower())


def random_suffix() -> str:
    """Four random digits, never starting with zero."""
    return str(1000 + secrets.randbelow(9000))

"""
Input validation for query parameters.

All validators are pure functions. They return the accepted (and, for free
text, percent-encoded) value or raise ValidationError, so a bad argument never
turns into a silently malformed request.

Usage:
    search = validate_search_query("The Witcher 3")   # "The%20Witcher%203"
    page = validate_page_number(1)
    ids = validate_id_array([4, 187])
"""

import re
import sys
from collections.abc import Sequence
from datetime import date
from urllib.parse import quote

from rawg.constants import (
    MAX_METACRITIC_SCORE,
    MAX_PAGE,
    MAX_PAGE_SIZE,
    MIN_METACRITIC_SCORE,
    MIN_PAGE,
)
from rawg.services.errors import ValidationError

MAX_SEARCH_LENGTH = 100
MAX_SLUG_LENGTH = 200
MAX_LIST_ITEMS = 50
MIN_YEAR = 1970
MAX_YEARS_AHEAD = 5

_SEARCH_PUNCTUATION = frozenset("-_'\":.!?&")
_LIST_PUNCTUATION = frozenset("-_,")
_SLUG_RE = re.compile(r"^[a-z0-9-]+$")
_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$", re.ASCII)


def _require_int(value: object, name: str) -> int:
    # bool is an int subclass; True must not pass as page 1
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f"{name} must be an integer")
    return value


def validate_search_query(query: str) -> str:
    """
    Validate a search string and percent-encode it for a query component.

    The trimmed query must be 1-100 characters made of letters, digits,
    whitespace and the punctuation -_'":.!?&
    """
    trimmed = query.strip()

    if not trimmed:
        raise ValidationError("Search query cannot be empty")

    if len(trimmed) > MAX_SEARCH_LENGTH:
        raise ValidationError(
            f"Search query exceeds maximum length of {MAX_SEARCH_LENGTH} characters"
        )

    if not all(
        ch.isalnum() or ch.isspace() or ch in _SEARCH_PUNCTUATION for ch in trimmed
    ):
        raise ValidationError(
            "Search query contains invalid characters. "
            "Only letters, numbers, spaces, and common punctuation are allowed"
        )

    return quote(trimmed, safe="")


def validate_page_number(page: int) -> int:
    page = _require_int(page, "Page number")
    if not MIN_PAGE <= page <= MAX_PAGE:
        raise ValidationError(f"Page number must be between {MIN_PAGE} and {MAX_PAGE:,}")
    return page


def validate_page_size(page_size: int) -> int:
    page_size = _require_int(page_size, "Page size")
    if not 1 <= page_size <= MAX_PAGE_SIZE:
        raise ValidationError(f"Page size must be between 1 and {MAX_PAGE_SIZE}")
    return page_size


def validate_resource_id(resource_id: int) -> int:
    resource_id = _require_int(resource_id, "Resource ID")
    if not 0 < resource_id < sys.maxsize:
        raise ValidationError("Resource ID must be a positive integer")
    return resource_id


def validate_slug(slug: str) -> str:
    """Validate a lowercase slug and percent-encode it for a URL path segment."""
    trimmed = slug.strip()

    if not trimmed:
        raise ValidationError("Slug cannot be empty")

    if len(trimmed) > MAX_SLUG_LENGTH:
        raise ValidationError(
            f"Slug exceeds maximum length of {MAX_SLUG_LENGTH} characters"
        )

    if not _SLUG_RE.match(trimmed):
        raise ValidationError(
            "Slug must contain only lowercase letters, numbers, and hyphens"
        )

    return quote(trimmed, safe="")


def validate_metacritic_score(score: int) -> int:
    score = _require_int(score, "Metacritic score")
    if not MIN_METACRITIC_SCORE <= score <= MAX_METACRITIC_SCORE:
        raise ValidationError(
            f"Metacritic score must be between {MIN_METACRITIC_SCORE} "
            f"and {MAX_METACRITIC_SCORE}"
        )
    return score


def validate_year(year: int, *, current_year: int | None = None) -> int:
    year = _require_int(year, "Year")
    max_year = (current_year or date.today().year) + MAX_YEARS_AHEAD
    if not MIN_YEAR <= year <= max_year:
        raise ValidationError(f"Year must be between {MIN_YEAR} and {max_year}")
    return year


def validate_date_string(date_string: str) -> str:
    """Validate an ISO calendar date (YYYY-MM-DD)."""
    trimmed = date_string.strip()

    if not _DATE_RE.match(trimmed):
        raise ValidationError("Date must be in YYYY-MM-DD format")

    try:
        date.fromisoformat(trimmed)
    except ValueError as e:
        raise ValidationError(f"Invalid date: {trimmed}") from e

    return trimmed


def validate_id_array(ids: Sequence[int]) -> list[int]:
    if not ids:
        raise ValidationError("ID array cannot be empty")

    if len(ids) > MAX_LIST_ITEMS:
        raise ValidationError(f"ID array cannot exceed {MAX_LIST_ITEMS} items")

    for value in ids:
        if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
            raise ValidationError("All IDs must be positive integers")

    return list(ids)


def validate_comma_separated_values(values: str) -> str:
    """
    Validate a comma-separated list of IDs or slugs (developers, publishers,
    creators) and percent-encode it. Commas are kept literal.
    """
    trimmed = values.strip()

    if not trimmed:
        raise ValidationError("Comma-separated values cannot be empty")

    components = [part for part in trimmed.split(",") if part.strip()]
    if len(components) > MAX_LIST_ITEMS:
        raise ValidationError(
            f"Comma-separated values cannot exceed {MAX_LIST_ITEMS} items"
        )

    if not all(ch.isalnum() or ch in _LIST_PUNCTUATION for ch in trimmed):
        raise ValidationError("Comma-separated values contain invalid characters")

    return quote(trimmed, safe=",")


def validate_date_range(value: str) -> str:
    """Validate a "start,end" date filter such as "2020-01-01,2020-12-31"."""
    parts = value.strip().split(",")
    if len(parts) != 2:
        raise ValidationError("Date range must be in YYYY-MM-DD,YYYY-MM-DD format")

    start, end = (validate_date_string(part) for part in parts)
    if start > end:
        raise ValidationError(f"Date range start {start} is after end {end}")

    return f"{start},{end}"


def validate_metacritic_range(value: str) -> str:
    """Validate a "min,max" Metacritic filter such as "80,100"."""
    parts = value.strip().split(",")
    if len(parts) != 2:
        raise ValidationError("Metacritic range must be in min,max format")

    try:
        low, high = (int(part.strip()) for part in parts)
    except ValueError as e:
        raise ValidationError("Metacritic range bounds must be integers") from e

    validate_metacritic_score(low)
    validate_metacritic_score(high)
    if low > high:
        raise ValidationError("Metacritic range minimum exceeds maximum")

    return f"{low},{high}"

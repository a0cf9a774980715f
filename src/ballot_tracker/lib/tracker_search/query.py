"""Tracker code query normalization and eligibility.

Tracker codes are printed as hyphenated words and typed back in any case
with arbitrary spacing, so every query is reduced to a canonical key before
it is searched or compared.
"""

import re

DEFAULT_MINIMUM_QUERY_LENGTH = 3

_SEPARATORS = re.compile(r"-|\s+")


def normalize_query(raw: str | None) -> str:
    """Strip hyphens and whitespace from a raw query and lower-case it.

    Args:
        raw: Raw user input. ``None`` is treated as empty.

    Returns:
        The normalized search key (possibly empty).
    """
    if not raw:
        return ""
    return _SEPARATORS.sub("", raw).lower()


def is_eligible_query(normalized: str | None, minimum_length: int = DEFAULT_MINIMUM_QUERY_LENGTH) -> bool:
    """Return True if a normalized query is long enough to be searched."""
    return bool(normalized) and len(normalized) >= minimum_length

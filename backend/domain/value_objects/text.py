"""
Text normalization helpers shared by value objects and entities.
"""

from typing import Optional

from domain.exceptions import InvalidArgumentError


def clean_optional_text(value: Optional[str]) -> Optional[str]:
    """Trim text; blank or whitespace-only becomes None."""
    if value is None:
        return None
    value = value.strip()
    return value or None


def require_text(value: Optional[str], field: str) -> str:
    """
    Return trimmed text, rejecting None and blank input.

    Raises:
        InvalidArgumentError: If the text is missing or whitespace-only
    """
    if not isinstance(value, str) or not value.strip():
        raise InvalidArgumentError(f"{field} is required", {field: value})
    return value.strip()

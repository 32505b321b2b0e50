"""Canonical slug rules for artifact names."""

import re

from slashkit.errors import InvalidName

SLUG_PATTERN = re.compile(r"^[a-z0-9]+(-[a-z0-9]+)*$")
MAX_SLUG_LENGTH = 64

_NON_ALNUM_RUN = re.compile(r"[^a-z0-9]+")


def is_valid_slug(value: str, max_length: int = MAX_SLUG_LENGTH) -> bool:
    return len(value) <= max_length and SLUG_PATTERN.match(value) is not None


def validate_slug(value: str, max_length: int = MAX_SLUG_LENGTH) -> str:
    """Return *value* unchanged if it is a canonical slug.

    Raises InvalidName naming the violated rule otherwise.
    """
    if not value:
        raise InvalidName("Name must not be empty")
    if len(value) > max_length:
        raise InvalidName(
            f"Name '{value}' is {len(value)} characters long (maximum {max_length})"
        )
    if not SLUG_PATTERN.match(value):
        raise InvalidName(
            f"Name '{value}' must use lowercase letters, digits and single hyphens"
        )
    return value


def slugify(title: str) -> str:
    """Convert a free-form title to slug form: ``"My Tool"`` -> ``"my-tool"``."""
    return _NON_ALNUM_RUN.sub("-", title.strip().lower()).strip("-")


def slug_from_title(title: str, max_length: int = MAX_SLUG_LENGTH) -> str:
    """Slugify *title* and validate the result.

    Titles with no usable characters, or that slugify past the length
    bound, raise InvalidName.
    """
    slug = slugify(title)
    if not slug:
        raise InvalidName(f"Name '{title}' contains no letters or digits")
    return validate_slug(slug, max_length)

"""URL slug helpers."""
import re
from typing import Optional

# Anything that is not a word character, whitespace or hyphen
_DISALLOWED = re.compile(r"[^\w\s-]")
# Runs of whitespace, underscores and hyphens
_SEPARATORS = re.compile(r"[\s_-]+")


def slugify(text: str) -> str:
    """
    Convert free text to a URL-friendly slug.

    "Senior Software Engineer" -> "senior-software-engineer"
    "Full-Stack Developer (Remote)" -> "full-stack-developer-remote"

    Returns an empty string when nothing usable is left; callers decide
    what that means.
    """
    slug = text.lower().strip()
    slug = _DISALLOWED.sub("", slug)
    slug = _SEPARATORS.sub("-", slug)
    return slug.strip("-")


def generate_slug(primary: str, qualifier: Optional[str] = None) -> str:
    """
    Slug for `primary`, suffixed with the slug of `qualifier` when given.

    "Marketing Manager" + "New York" -> "marketing-manager-new-york"
    """
    base_slug = slugify(primary)

    if qualifier:
        return f"{base_slug}-{slugify(qualifier)}"

    return base_slug

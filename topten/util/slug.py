"""Slug and username generation."""

import re
import secrets
import string

USERNAME_MIN_LENGTH = 3
USERNAME_MAX_LENGTH = 30

SUFFIX_LENGTH = 6
SUFFIX_ALPHABET = string.digits + string.ascii_lowercase  # base 36

_WHITESPACE_RE = re.compile(r"\s+")
_NON_SLUG_RE = re.compile(r"[^a-z0-9-]+")
_HYPHENS_RE = re.compile(r"-{2,}")


def slugify(text: str) -> str:
    """Convert free text into a URL-safe slug.

    Lowercases, trims, turns whitespace runs into single hyphens, drops
    everything outside ``[a-z0-9-]``, collapses repeated hyphens and strips
    leading/trailing hyphens.

    Examples:
        >>> slugify("Best Movies!! Of 2024")
        'best-movies-of-2024'
    """
    slug = text.lower().strip()
    slug = _WHITESPACE_RE.sub("-", slug)
    slug = _NON_SLUG_RE.sub("", slug)
    slug = _HYPHENS_RE.sub("-", slug)
    return slug.strip("-")


def random_suffix(length: int = SUFFIX_LENGTH) -> str:
    """Random lowercase base-36 string."""
    return "".join(secrets.choice(SUFFIX_ALPHABET) for _ in range(length))


def generate_unique_slug(title: str) -> str:
    """Slug for a title with a random 6 character suffix.

    Uniqueness is left to the storage unique constraint.
    """
    return f"{slugify(title)}-{random_suffix()}"


def generate_username_from_google(display_name: str | None, email: str) -> str:
    """Derive a base username from a federated identity.

    Uses the slugified display name if there is one, otherwise the local part
    of the email. Pads with "0" to the minimum length and truncates to the
    maximum. Callers must still validate the result.
    """
    if display_name:
        base = slugify(display_name)
    else:
        local_part = email.split("@", 1)[0].lower()
        base = _NON_SLUG_RE.sub("", local_part)

    base = base.ljust(USERNAME_MIN_LENGTH, "0")
    return base[:USERNAME_MAX_LENGTH]


def generate_unique_username(base: str) -> str:
    """Append a random 6 character suffix to a base username."""
    return f"{base}-{random_suffix()}"


def is_canonical_username(candidate: str) -> bool:
    """Whether a username is within length bounds and already in slug form."""
    if not USERNAME_MIN_LENGTH <= len(candidate) <= USERNAME_MAX_LENGTH:
        return False
    return slugify(candidate) == candidate

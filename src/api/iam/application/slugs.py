"""Unique slug generation for route keys."""

from __future__ import annotations

from collections.abc import Awaitable, Callable

from slugify import slugify

SLUG_MAX_LENGTH = 50
MAX_SLUG_ATTEMPTS = 10


async def unique_slug(
    value: str,
    exists: Callable[[str], Awaitable[bool]],
    fallback: str,
    max_length: int = SLUG_MAX_LENGTH,
) -> str:
    """Generate a slug for `value` that `exists` reports as free.

    Collisions are resolved by appending -1, -2, ... to the base slug,
    trimmed so the result never exceeds `max_length`.

    Args:
        value: Text to derive the slug from (a name)
        exists: Async predicate telling whether a slug is taken
        fallback: Base slug used when `value` slugifies to nothing
        max_length: Maximum slug length

    Raises:
        ValueError: If no free slug is found after MAX_SLUG_ATTEMPTS tries
    """
    base_slug = slugify(value.strip(), max_length=max_length) or fallback

    slug = base_slug
    for attempt in range(1, MAX_SLUG_ATTEMPTS + 1):
        if not await exists(slug):
            return slug
        suffix = f"-{attempt}"
        slug = f"{base_slug[: max_length - len(suffix)].rstrip('-')}{suffix}"

    raise ValueError(f"Could not generate a unique slug for '{value}'")

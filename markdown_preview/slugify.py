"""Anchor ids for rendered headings."""

from __future__ import annotations

import re
import string
import unicodedata

_PUNCTUATION = str.maketrans("", "", string.punctuation.replace("-", "").replace("_", ""))


def generate_slug(title: str) -> str:
    """Generate a URL-style slug from heading text.

    Transliterates to lowercase ASCII, drops punctuation other than hyphens
    and underscores, and collapses whitespace to single hyphens.

    Args:
        title: Plain text of the heading.

    Returns:
        str: Hyphen-separated slug, or ``"untitled"`` when nothing remains.

    Examples:
        generate_slug("Hello World")  # "hello-world"
        generate_slug("What's New?")  # "whats-new"
        generate_slug("   ")  # "untitled"
    """
    normalized = unicodedata.normalize("NFKD", title)
    slug = normalized.encode("ascii", "ignore").decode("utf-8", "ignore")

    slug = slug.casefold().translate(_PUNCTUATION)
    slug = re.sub(r"\s+", "-", slug)
    slug = re.sub(r"-{2,}", "-", slug)
    slug = slug.strip("-")

    return slug if slug else "untitled"


def unique_slug(title: str, counters: dict[str, int], used: set[str]) -> str:
    """Return a slug for `title` that is not yet in `used`, and record it.

    Follows GitHub numbering: the first ``Setup`` is ``setup``, later ones are
    ``setup-1``, ``setup-2``. A counter per base slug gives the next suffix to
    try; `used` catches cascading collisions such as ``Setup``, ``Setup``,
    ``Setup 1`` where the third heading's base slug is already taken.

    Args:
        title: Plain text of the heading.
        counters: Next suffix per base slug, updated in place.
        used: Slugs assigned so far, updated in place.

    Returns:
        str: The assigned slug.

    Examples:
        counters, used = {}, set()
        unique_slug("Intro", counters, used)  # "intro"
        unique_slug("Intro", counters, used)  # "intro-1"
    """
    base_slug = generate_slug(title)
    count = counters.get(base_slug, 0)
    slug = base_slug if count == 0 else f"{base_slug}-{count}"

    while slug in used:
        count += 1
        slug = f"{base_slug}-{count}"

    counters[base_slug] = count + 1
    used.add(slug)
    return slug

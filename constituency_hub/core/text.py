"""Small text helpers shared by content management endpoints."""

from __future__ import annotations

import math
import re

WORDS_PER_MINUTE = 200

_SLUG_STRIP = re.compile(r"[^\w\s-]", re.ASCII)
_SLUG_JOIN = re.compile(r"[\s_-]+")
_SLUG_PATTERN = re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)*$")


def slugify(text: str) -> str:
    """URL slug: lowercase ASCII words joined by single hyphens."""
    slug = _SLUG_STRIP.sub("", text.lower().strip())
    slug = _SLUG_JOIN.sub("-", slug)
    return slug.strip("-")


def is_valid_slug(slug: str) -> bool:
    return bool(_SLUG_PATTERN.match(slug))


def calculate_read_time(content: str) -> int:
    """Minutes to read ``content`` at 200 words per minute, never less than one."""
    words = len(content.split())
    return max(1, math.ceil(words / WORDS_PER_MINUTE))


def truncate(text: str, max_length: int, suffix: str = "...") -> str:
    if len(text) <= max_length:
        return text
    return text[:max_length] + suffix

"""URL slug generation for posts and articles."""

from __future__ import annotations

import re
from collections.abc import Callable

_TRANSLIT: dict[str, str] = {
    "а": "a", "б": "b", "в": "v", "г": "g", "д": "d", "е": "e", "ё": "e",
    "ж": "zh", "з": "z", "и": "i", "й": "y", "к": "k", "л": "l", "м": "m",
    "н": "n", "о": "o", "п": "p", "р": "r", "с": "s", "т": "t", "у": "u",
    "ф": "f", "х": "h", "ц": "ts", "ч": "ch", "ш": "sh", "щ": "sch",
    "ъ": "", "ы": "y", "ь": "", "э": "e", "ю": "yu", "я": "ya",
}
_NON_SLUG = re.compile(r"[^a-z0-9]+")

POST_SLUG_WORDS = 5
POST_SLUG_MAX_LENGTH = 60


def slugify(text: str, *, max_words: int | None = None, max_length: int | None = None) -> str:
    """Return a lowercase ASCII slug for ``text``.

    Cyrillic letters are transliterated; every other run of characters
    outside ``[a-z0-9]`` becomes a single hyphen.
    """
    words = text.split()
    if max_words is not None:
        words = words[:max_words]
    lowered = " ".join(words).lower()
    transliterated = "".join(_TRANSLIT.get(char, char) for char in lowered)
    slug = _NON_SLUG.sub("-", transliterated).strip("-")
    if max_length is not None:
        slug = slug[:max_length]
    return slug


def unique_slug(base: str, exists: Callable[[str], bool], *, fallback: str = "post") -> str:
    """Append ``-1``, ``-2``, ... to ``base`` until ``exists`` reports it free."""
    base = base or fallback
    slug = base
    counter = 1
    while exists(slug):
        slug = f"{base}-{counter}"
        counter += 1
    return slug


def post_slug(content: str, exists: Callable[[str], bool]) -> str:
    """Slug from the first five words of a post."""
    base = slugify(content, max_words=POST_SLUG_WORDS, max_length=POST_SLUG_MAX_LENGTH)
    return unique_slug(base, exists, fallback="post")


def article_slug(title: str, exists: Callable[[str], bool], custom: str | None = None) -> str:
    """Slug from a custom value when given, otherwise from the article title."""
    base = slugify(custom) if custom and custom.strip() else slugify(title)
    return unique_slug(base, exists, fallback="article")

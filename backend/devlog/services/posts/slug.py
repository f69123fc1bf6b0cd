"""Title → URL slug conversion."""

from __future__ import annotations

import re
import unicodedata
from collections.abc import Callable

FALLBACK_SLUG = "post"
MAX_BASE_LENGTH = 100

_HANGUL_SYLLABLES = ("가", "힣")
_WHITESPACE_RUN = re.compile(r"\s+")
_HYPHEN_RUN = re.compile(r"-{2,}")


def _keep(ch: str) -> bool:
    if ch.isalpha() or ch.isspace() or ch == "-":
        return True
    if "0" <= ch <= "9":
        return True
    return _HANGUL_SYLLABLES[0] <= ch <= _HANGUL_SYLLABLES[1]


def slugify(title: str | None) -> str:
    """
    Turn a post title into a lowercase, hyphenated slug.

    Accents are stripped after compatibility decomposition; letters (Hangul
    included), ASCII digits and hyphens survive, whitespace runs become a
    single hyphen. Blank results fall back to ``"post"``.

    >>> slugify("Héllo,  World!")
    'hello-world'
    """
    if title is None:
        return FALLBACK_SLUG
    decomposed = unicodedata.normalize("NFKD", title)
    stripped = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    # recompose so Hangul jamo fold back into syllables
    cleaned = "".join(ch for ch in unicodedata.normalize("NFC", stripped) if _keep(ch))
    hyphened = _HYPHEN_RUN.sub("-", _WHITESPACE_RUN.sub("-", cleaned.strip()))
    slug = hyphened.lower()
    if not slug or not slug.strip():
        return FALLBACK_SLUG
    return slug[:MAX_BASE_LENGTH]


def unique_slug(title: str | None, exists: Callable[[str], bool]) -> str:
    """
    Return ``slugify(title)``, suffixed ``-1``, ``-2``... until unused.

    :param title: Post title.
    :param exists: Predicate telling whether a slug is already taken.
    """
    base = slugify(title)
    candidate, n = base, 0
    while exists(candidate):
        n += 1
        candidate = f"{base}-{n}"
    return candidate

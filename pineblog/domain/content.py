"""
Content transformations applied to posts before they are stored.

- slugify: deterministic URL-safe slug from a title.
- rewrite_urls: replace the configured file base URL with a portable
  placeholder, so stored content survives a change of storage host.
- restore_urls: the read-side inverse of rewrite_urls.

All functions are pure.
"""

from __future__ import annotations

import hashlib
import re
import unicodedata

SLUG_PATTERN = re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)*$")

_NON_SLUG_CHARS = re.compile(r"[^a-z0-9]+")

# Letters NFKD leaves without an ASCII base
_TRANSLITERATIONS = str.maketrans(
    {
        "ß": "ss",
        "ẞ": "SS",
        "æ": "ae",
        "Æ": "AE",
        "œ": "oe",
        "Œ": "OE",
        "ø": "o",
        "Ø": "O",
        "đ": "d",
        "Đ": "D",
        "ł": "l",
        "Ł": "L",
        "þ": "th",
        "Þ": "TH",
    }
)

# The base must open a URL token: start of text, whitespace, a quote, an
# opening bracket or the ">" closing a tag. Query and userinfo characters
# ("=", "?", "&", ":") do not qualify, so a nested URL is left alone.
_URL_START_BOUNDARY = r"(?<![^\s\"'(<\[>])"
# After the base, the path segment must end: "/", "?", "#", end of text, or a
# character that cannot continue a segment. A single trailing "." is allowed
# when it ends a sentence.
_URL_END_BOUNDARY = r"(?![\w\-~%+:@]|\.[\w\-~%])"


# --- Slugs ---


def slugify(title: str) -> str:
    """
    Derive a slug from a title.

    Lowercase ASCII letters and digits separated by single hyphens, with no
    leading or trailing hyphen. Titles with no usable characters get a
    "post-" slug built from a hash of the title.
    """
    transliterated = title.translate(_TRANSLITERATIONS)
    folded = unicodedata.normalize("NFKD", transliterated).encode("ascii", "ignore").decode("ascii")
    slug = _NON_SLUG_CHARS.sub("-", folded.lower()).strip("-")
    if slug:
        return slug
    digest = hashlib.sha256(title.strip().encode("utf-8")).hexdigest()[:8]
    return f"post-{digest}"


def is_valid_slug(slug: str) -> bool:
    return bool(SLUG_PATTERN.match(slug))


# --- Base URL rewriting ---


def _normalize_base(base_url: str) -> str:
    return base_url.strip().rstrip("/")


def _base_url_pattern(base_url: str) -> re.Pattern[str]:
    return re.compile(_URL_START_BOUNDARY + re.escape(base_url) + _URL_END_BOUNDARY)


def rewrite_urls(text: str | None, base_url: str, placeholder: str) -> str | None:
    """
    Replace the base URL of every absolute URL that starts with base_url.

    The path after the base is kept, so
    "http://cdn/blog/cover.png" becomes "%URL%/cover.png" for base
    "http://cdn/blog". URLs on other hosts, or whose path merely shares a
    prefix with the base ("http://cdn/blog-old/x"), are left alone.
    Running it again on its own output changes nothing.

    Raises ValueError if the placeholder contains base_url.
    """
    if text is None:
        return None
    base = _normalize_base(base_url)
    if not base:
        return text
    if base in placeholder:
        raise ValueError(f"placeholder {placeholder!r} must not contain the base URL {base!r}")
    if not text:
        return text
    return _base_url_pattern(base).sub(lambda _: placeholder, text)


def restore_urls(text: str | None, base_url: str, placeholder: str) -> str | None:
    """Replace every placeholder with base_url."""
    if text is None or not placeholder:
        return text
    return text.replace(placeholder, _normalize_base(base_url))

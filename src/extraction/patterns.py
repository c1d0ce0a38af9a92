"""String predicates behind the image and context heuristics.

The exact patterns are load-bearing: changing one changes which images
are returned and how they rank.
"""

from __future__ import annotations

import re

PLACEHOLDER_URL_RE = re.compile(
    r"placeholder|dummyimage|fakeimg|lorempixel|picsum|noimage|no-image|no_image|nophoto"
    r"|blank\.|empty\.|default\.|dummy\.|spacer\.|pixel\.|transparent\.|1x1\.|loading\."
    r"|spinner\.|lazy[-_]?load|woocommerce-placeholder|coming[-_]?soon"
    r"|image[-_]?not[-_]?found",
    re.IGNORECASE,
)

PLACEHOLDER_ALT_RE = re.compile(
    r"placeholder|no.?image|no.?photo|coming.?soon|image.?not|default|dummy|loading"
    r"|読み込み|画像なし"
)

PLACEHOLDER_CLASS_RE = re.compile(r"placeholder|skeleton|shimmer|blur-up|lazyload-placeholder")

LOGO_PATTERNS = tuple(
    re.compile(p, re.IGNORECASE) for p in (r"logo", r"brand", r"symbol", r"emblem", r"mark", r"icon")
)

HERO_CLASS_RE = re.compile(r"hero|banner|main|feature", re.IGNORECASE)

IMAGE_EXTENSION_RE = re.compile(r"\.(jpg|jpeg|png|webp|gif|svg)", re.IGNORECASE)

PRICE_RE = re.compile(r"[¥$€][\d,]+")

KEYWORD_RE = re.compile(r"[\u3040-\u309F\u30A0-\u30FF\u4E00-\u9FFF\w]{2,}")

WHITESPACE_RE = re.compile(r"\s+")


def is_placeholder_url(url: str) -> bool:
    return bool(PLACEHOLDER_URL_RE.search(url))


def is_placeholder_alt(alt: str | None) -> bool:
    if not alt:
        return False
    return bool(PLACEHOLDER_ALT_RE.search(alt.lower()))


def is_placeholder_class(class_name: str | None) -> bool:
    if not class_name:
        return False
    return bool(PLACEHOLDER_CLASS_RE.search(class_name.lower()))


def matches_logo_pattern(*values: str | None) -> bool:
    """True if any of *values* (src, alt, class, id...) looks like a brand mark."""
    for value in values:
        if not value:
            continue
        if any(p.search(value) for p in LOGO_PATTERNS):
            return True
    return False


def is_hero_class(class_name: str | None) -> bool:
    return bool(class_name) and bool(HERO_CLASS_RE.search(class_name))


def is_valid_image_url(url: str) -> bool:
    """Accept URLs that look like images and are not known placeholders."""
    lower = url.lower()
    if not (IMAGE_EXTENSION_RE.search(lower) or "image" in lower):
        return False
    return not is_placeholder_url(lower)


def find_prices(text: str) -> list[str]:
    """Currency-prefixed amounts like ``¥1,980`` or ``$25``, in page order."""
    return PRICE_RE.findall(text)


def collapse_whitespace(text: str) -> str:
    return WHITESPACE_RE.sub(" ", text).strip()

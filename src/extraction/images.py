"""Image discovery, logo classification and hero-likelihood scoring."""

from __future__ import annotations

import logging
import re
from urllib.parse import urljoin, urlparse

from .document import Document, Node
from .limits import DEFAULT_LIMITS, ExtractionLimits
from .models import ScrapedImage
from .patterns import (
    is_hero_class,
    is_placeholder_alt,
    is_placeholder_class,
    is_placeholder_url,
    is_valid_image_url,
    matches_logo_pattern,
)

logger = logging.getLogger(__name__)

LOGO_SELECTORS = (
    "header img",
    ".logo img",
    "#logo img",
    '[class*="logo"] img',
    '[id*="logo"] img',
    'a[href="/"] img',
    ".navbar-brand img",
    ".site-logo img",
    'img[class*="logo"]',
    'img[alt*="logo" i]',
    'img[alt*="ロゴ"]',
)
HEADER_SELECTOR = "header, nav, .header, .navbar"

OG_IMAGE_WIDTH = 1200
OG_IMAGE_HEIGHT = 630

_LEADING_INT_RE = re.compile(r"^\s*(\d+)")


def parse_dimension(value: str | None) -> int:
    """Leading integer of a ``width``/``height`` attribute, ``0`` if absent."""
    match = _LEADING_INT_RE.match(value or "")
    return int(match.group(1)) if match else 0


def make_absolute_url(url: str, base_url: str) -> str | None:
    """Resolve *url* against *base_url*; ``data:`` URIs and non-http results give ``None``."""
    url = url.strip()
    if not url or url.startswith("data:"):
        return None
    try:
        absolute = urljoin(base_url, url)
        scheme = urlparse(absolute).scheme
    except ValueError:
        return None
    if scheme not in ("http", "https"):
        return None
    return absolute


def is_logo_element(element: Node, src: str, alt: str) -> bool:
    """Brand mark by name (src/alt/class/id) or by being small inside a header."""
    if matches_logo_pattern(src.lower(), alt.lower()):
        return True
    if matches_logo_pattern(element.attr("class"), element.attr("id")):
        return True

    if element.closest(HEADER_SELECTOR) is None:
        return False
    width = parse_dimension(element.attr("width"))
    height = parse_dimension(element.attr("height"))
    return 0 < width <= 300 or 0 < height <= 150


def score_image(element: Node, alt: str) -> float:
    """Cheap proxy for "this is the page's hero visual"."""
    score = 0.5

    parent = element.parent()
    if parent is not None and is_hero_class(parent.attr("class")):
        score += 0.3

    width = parse_dimension(element.attr("width"))
    height = parse_dimension(element.attr("height"))
    if width > 400 or height > 400:
        score += 0.2

    if alt and len(alt) > 5:
        score += 0.1

    return round(min(score, 1.0), 2)


def extract_logos(
    document: Document,
    base_url: str,
    limits: ExtractionLimits = DEFAULT_LIMITS,
) -> list[ScrapedImage]:
    logos: list[ScrapedImage] = []
    seen: set[str] = set()

    for element in document.select(", ".join(LOGO_SELECTORS))[: limits.max_logo_candidates]:
        if len(logos) >= limits.max_logos:
            break
        src = element.attr("src") or element.attr("data-src") or element.attr("href")
        if not src:
            continue
        absolute = make_absolute_url(src, base_url)
        if absolute is None or absolute in seen or not is_valid_image_url(absolute):
            continue
        seen.add(absolute)
        logos.append(
            ScrapedImage(
                id=f"logo_{len(logos)}",
                url=absolute,
                score=1.0,
                width=parse_dimension(element.attr("width")),
                height=parse_dimension(element.attr("height")),
                alt=element.attr("alt") or "Logo",
                source="auto",
                is_logo=True,
            )
        )
    return logos


def extract_images(
    document: Document,
    base_url: str,
    limits: ExtractionLimits = DEFAULT_LIMITS,
) -> list[ScrapedImage]:
    """Ranked candidate images: logos first, then by descending score.

    URLs are unique (first occurrence wins) and the list is capped at
    ``limits.max_images``.
    """
    images: list[ScrapedImage] = []
    seen: set[str] = set()
    auto_ids = 0

    logos = extract_logos(document, base_url, limits)
    logo_urls = {logo.url for logo in logos}

    og_image = document.first_attr('meta[property="og:image"]', "content")
    if og_image:
        absolute = make_absolute_url(og_image, base_url)
        if absolute and not is_placeholder_url(absolute):
            seen.add(absolute)
            images.append(
                ScrapedImage(
                    id=f"auto_{auto_ids}",
                    url=absolute,
                    score=1.0,
                    width=OG_IMAGE_WIDTH,
                    height=OG_IMAGE_HEIGHT,
                    alt="OG Image",
                    source="auto",
                    is_logo=False,
                )
            )
            auto_ids += 1

    for element in document.select("img")[: limits.max_img_candidates]:
        if len(images) >= limits.max_images:
            break

        src = element.attr("src")
        lazy_src = element.attr("data-src") or element.attr("data-lazy-src")
        image_src = src if src and not is_placeholder_url(src) else lazy_src
        if not image_src:
            continue

        absolute = make_absolute_url(image_src, base_url)
        if absolute is None or absolute in seen or not is_valid_image_url(absolute):
            continue

        alt = element.attr("alt") or ""
        if is_placeholder_alt(alt) or is_placeholder_class(element.attr("class")):
            continue

        seen.add(absolute)
        pre_classified = absolute in logo_urls
        images.append(
            ScrapedImage(
                id=f"auto_{auto_ids}",
                url=absolute,
                score=1.0 if pre_classified else score_image(element, alt),
                width=parse_dimension(element.attr("width")),
                height=parse_dimension(element.attr("height")),
                alt=alt,
                source="auto",
                is_logo=pre_classified or is_logo_element(element, image_src, alt),
            )
        )
        auto_ids += 1

    for logo in logos:
        if logo.url not in seen and len(images) < limits.max_images:
            seen.add(logo.url)
            images.append(logo)

    ranked = sorted(images, key=lambda image: (not image.is_logo, -image.score))
    result = ranked[: limits.max_images]
    logger.debug(
        "images extracted",
        extra={
            "count": len(result),
            "logos": sum(1 for image in result if image.is_logo),
        },
    )
    return result

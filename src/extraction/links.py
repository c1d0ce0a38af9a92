"""Internal link discovery, categorized by where the link sits on the page."""

from __future__ import annotations

import logging
from urllib.parse import urldefrag, urljoin, urlparse

from .document import Document, Node
from .limits import DEFAULT_LIMITS
from .models import ExtractedLink, LinkCategory
from .patterns import collapse_whitespace

logger = logging.getLogger(__name__)

SKIPPED_HREF_PREFIXES = ("#", "javascript:", "mailto:", "tel:")

NAVIGATION_SELECTOR = "nav, header, .nav, .navigation, .header, .menu"
FOOTER_SELECTOR = "footer, .footer"
CONTENT_SELECTOR = "main, article, .content, .main"

CONTENT_PATH_HINTS = (
    "/about", "/company", "/service", "/product", "/feature", "/price",
    "/contact", "/faq", "/case", "/voice", "/news", "/blog",
)

CATEGORY_PRIORITY: dict[str, int] = {"navigation": 1, "content": 2, "footer": 3, "other": 4}


def _is_internal(hostname: str, base_hostname: str) -> bool:
    return hostname == base_hostname or hostname.endswith("." + base_hostname)


def _inside(element: Node, selector: str) -> bool:
    """True if an ancestor of *element*, not the element itself, matches *selector*."""
    parent = element.parent()
    return parent is not None and parent.closest(selector) is not None


def _categorize(element: Node, path: str) -> LinkCategory:
    if _inside(element, NAVIGATION_SELECTOR):
        return "navigation"
    if _inside(element, FOOTER_SELECTOR):
        return "footer"
    if _inside(element, CONTENT_SELECTOR):
        return "content"
    if any(hint in path for hint in CONTENT_PATH_HINTS):
        return "content"
    return "other"


def extract_links(
    document: Document,
    base_url: str,
    limit: int = DEFAULT_LIMITS.max_links,
) -> list[ExtractedLink]:
    """Same-site links, navigation first, shorter URLs first within a category."""
    base_hostname = urlparse(base_url).hostname or ""
    links: list[ExtractedLink] = []
    seen: set[str] = set()

    for element in document.select("a[href]"):
        href = (element.attr("href") or "").strip()
        if not href or href.startswith(SKIPPED_HREF_PREFIXES):
            continue
        try:
            url, _ = urldefrag(urljoin(base_url, href))
            parsed = urlparse(url)
        except ValueError:
            continue
        if parsed.scheme not in ("http", "https") or url in seen:
            continue
        seen.add(url)

        if not _is_internal(parsed.hostname or "", base_hostname):
            continue

        path = parsed.path.lower()
        text = collapse_whitespace(element.text())[:100]
        links.append(
            ExtractedLink(
                url=url,
                text=text or path,
                category=_categorize(element, path),
                is_internal=True,
            )
        )

    links.sort(key=lambda link: (CATEGORY_PRIORITY[link.category], len(link.url)))
    logger.debug("links extracted", extra={"found": len(links), "returned": min(len(links), limit)})
    return links[:limit]

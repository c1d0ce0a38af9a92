"""Textual context: title, headings, keywords, entities, benefits and audience."""

from __future__ import annotations

import logging
from collections import Counter

from .document import Document
from .limits import DEFAULT_LIMITS, ExtractionLimits
from .models import HeadlineSet, StructuredContext
from .patterns import KEYWORD_RE, collapse_whitespace, find_prices

logger = logging.getLogger(__name__)

MAIN_CONTENT_SELECTORS = ("main", "article", '[role="main"]', ".main-content")
BODY_EXCLUDED_SELECTORS = ("script", "style", "nav", "footer", "aside", "noscript")

# Checked in order; the first cue found in the content sample wins.
TARGET_CUES: tuple[tuple[str, str], ...] = (
    ("学生", "students"),
    ("ビジネス", "business professionals"),
    ("主婦", "homemakers"),
    ("経営者", "business owners"),
    ("若者", "young people"),
    ("シニア", "seniors"),
    ("student", "students"),
    ("business professional", "business professionals"),
    ("homemaker", "homemakers"),
    ("business owner", "business owners"),
    ("young people", "young people"),
    ("senior", "seniors"),
)
DEFAULT_TARGET = "general audience"


def page_title(document: Document) -> str:
    return (
        document.first_text("title").strip()
        or (document.first_attr('meta[property="og:title"]', "content") or "").strip()
    )


def page_description(document: Document) -> str:
    return (
        document.first_attr('meta[name="description"]', "content")
        or document.first_attr('meta[property="og:description"]', "content")
        or ""
    ).strip()


def extract_headlines(document: Document, limits: ExtractionLimits = DEFAULT_LIMITS) -> HeadlineSet:
    """Collect h1-h4 texts in one pass, capped per level and filtered by length."""
    caps = dict(limits.headline_caps)
    found: dict[str, list[str]] = {level: [] for level in caps}
    for element in document.select(", ".join(caps)):
        level = element.tag
        if level not in found or len(found[level]) >= caps[level]:
            continue
        text = element.text().strip()
        if limits.headline_min_length <= len(text) <= limits.headline_max_length:
            found[level].append(text)
    return HeadlineSet(**found)


def extract_main_content(document: Document, limits: ExtractionLimits = DEFAULT_LIMITS) -> str:
    """Collapsed text of the first substantial main container, else of ``<body>``."""
    for selector in MAIN_CONTENT_SELECTORS:
        element = document.select_one(selector)
        if element is None:
            continue
        content = collapse_whitespace(element.text())
        if len(content) > limits.main_content_min_length:
            return content[: limits.main_content_chars]

    content = collapse_whitespace(document.text_without("body", BODY_EXCLUDED_SELECTORS))
    return content[: limits.main_content_chars]


def extract_keywords(content: str, limits: ExtractionLimits = DEFAULT_LIMITS) -> list[str]:
    """Most frequent tokens; equal counts keep first-seen order."""
    text = content.lower()[: limits.keyword_source_chars]
    counts = Counter(word for word in KEYWORD_RE.findall(text) if 2 <= len(word) <= 20)
    ranked = sorted(counts.items(), key=lambda item: item[1], reverse=True)
    return [word for word, _ in ranked[: limits.max_keywords]]


def extract_entities(document: Document, limits: ExtractionLimits = DEFAULT_LIMITS) -> list[str]:
    entities: list[str] = []
    product_name = document.first_attr('meta[property="og:title"]', "content")
    if product_name:
        entities.append(product_name)

    body_text = document.first_text("body")[: limits.entity_scan_chars]
    entities.extend(find_prices(body_text)[: limits.max_prices])

    return list(dict.fromkeys(entities))[: limits.max_entities]


def extract_benefits(document: Document, limits: ExtractionLimits = DEFAULT_LIMITS) -> list[str]:
    benefits: list[str] = []
    for element in document.select("ul li, ol li")[: limits.benefit_candidates]:
        if len(benefits) >= limits.max_benefits:
            break
        text = element.text().strip()
        if limits.benefit_min_length <= len(text) <= limits.benefit_max_length:
            benefits.append(text)
    return benefits


def infer_target(content: str, limits: ExtractionLimits = DEFAULT_LIMITS) -> str:
    sample = content[: limits.target_scan_chars].lower()
    for cue, audience in TARGET_CUES:
        if cue in sample:
            return audience
    return DEFAULT_TARGET


def generate_summary(
    title: str,
    description: str,
    content: str,
    limits: ExtractionLimits = DEFAULT_LIMITS,
) -> str:
    if description and len(description) > 20:
        return description[: limits.summary_chars]
    if title:
        return title
    return content[: limits.summary_chars]


def extract_context(document: Document, limits: ExtractionLimits = DEFAULT_LIMITS) -> StructuredContext:
    """Derive the structured textual summary of a page. Missing data yields empty values."""
    title = page_title(document)
    description = page_description(document)
    content = extract_main_content(document, limits)
    keywords = extract_keywords(content, limits)

    context = StructuredContext(
        summary=generate_summary(title, description, content, limits),
        benefits=extract_benefits(document, limits),
        target=infer_target(content, limits),
        headlines_raw=extract_headlines(document, limits),
        keywords_top=keywords,
        entities=extract_entities(document, limits),
    )
    logger.debug(
        "context extracted",
        extra={
            "content_length": len(content),
            "keywords": len(keywords),
            "benefits": len(context.benefits),
            "entities": len(context.entities),
        },
    )
    return context

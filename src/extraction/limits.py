"""Scan and output caps that bound the cost of one extraction call."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ExtractionLimits:
    """Element scan caps and result size caps for the extractors."""

    # images
    max_images: int = 30
    max_img_candidates: int = 50
    max_logo_candidates: int = 10
    max_logos: int = 3

    # context
    headline_caps: tuple[tuple[str, int], ...] = (("h1", 5), ("h2", 8), ("h3", 8), ("h4", 5))
    headline_min_length: int = 2
    headline_max_length: int = 80
    main_content_min_length: int = 100
    main_content_chars: int = 3000
    keyword_source_chars: int = 2000
    max_keywords: int = 15
    entity_scan_chars: int = 5000
    max_prices: int = 5
    max_entities: int = 8
    benefit_candidates: int = 20
    max_benefits: int = 5
    benefit_min_length: int = 10
    benefit_max_length: int = 100
    target_scan_chars: int = 1000
    summary_chars: int = 200
    analysis_content_chars: int = 5000

    # links
    max_links: int = 30


DEFAULT_LIMITS = ExtractionLimits()

"""Content and palette extraction from a single public web page."""

from __future__ import annotations

from .engine import ExtractionEngine, extract
from .errors import (
    ExtractionError,
    FetchFailed,
    FetchTimeout,
    HtmlTooLarge,
    InputError,
    InvalidProtocol,
    InvalidUrl,
    NetworkError,
    SSRFBlocked,
)
from .harvester import complement_palette, harvest_colors
from .models import (
    AnalysisInput,
    ColorPaletteEntry,
    ExtractedLink,
    ExtractionResult,
    HeadlineSet,
    ScrapedImage,
    StructuredContext,
)
from .palette import build_color_palette

__all__ = [
    "AnalysisInput",
    "ColorPaletteEntry",
    "ExtractedLink",
    "ExtractionEngine",
    "ExtractionError",
    "ExtractionResult",
    "FetchFailed",
    "FetchTimeout",
    "HeadlineSet",
    "HtmlTooLarge",
    "InputError",
    "InvalidProtocol",
    "InvalidUrl",
    "NetworkError",
    "SSRFBlocked",
    "ScrapedImage",
    "StructuredContext",
    "build_color_palette",
    "complement_palette",
    "extract",
    "harvest_colors",
]

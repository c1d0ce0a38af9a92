"""Extraction engine: fetch, parse, run the extractors, complete the palette."""

from __future__ import annotations

import logging
import time
from dataclasses import replace
from typing import Any, Callable, Iterable

from src.config import Settings, get_settings

from .context import extract_context, page_description, page_title
from .document import Document, HtmlDocument
from .events import EventCallback, emit_event, emit_status
from .fetcher import PageFetcher
from .harvester import complement_palette, harvest_colors
from .images import extract_images
from .limits import DEFAULT_LIMITS, ExtractionLimits
from .links import extract_links
from .models import (
    AnalysisInput,
    ColorPaletteEntry,
    ExtractedLink,
    ExtractionResult,
    StructuredContext,
)
from .palette import SuggestedColor, build_color_palette
from .patterns import collapse_whitespace

logger = logging.getLogger(__name__)

# (step name, extractor, fallback when the extractor blows up)
_Step = tuple[str, Callable[[], Any], Callable[[], Any]]


def _elapsed_ms(start: float) -> int:
    return int((time.perf_counter() - start) * 1000)


def _run_step(name: str, func: Callable[[], Any], fallback: Callable[[], Any], timing: dict[str, int]) -> Any:
    """Run one extractor; a failure degrades to *fallback* instead of aborting the call."""
    start = time.perf_counter()
    try:
        value = func()
    except Exception:
        logger.warning("extraction step failed, using fallback", extra={"step": name}, exc_info=True)
        value = fallback()
    timing[name] = _elapsed_ms(start)
    return value


class ExtractionEngine:
    """Turns a public URL into context, ranked images and a brand palette.

    Holds configuration only; every call builds its own state, so one
    engine can serve concurrent calls.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        *,
        fetcher: PageFetcher | None = None,
        limits: ExtractionLimits | None = None,
    ) -> None:
        self._settings = settings or get_settings()
        self._fetcher = fetcher or PageFetcher.from_settings(self._settings)
        self._limits = limits or replace(DEFAULT_LIMITS, max_images=self._settings.max_images)

    async def run(self, url: str, on_event: EventCallback | None = None) -> ExtractionResult:
        """Fetch *url* and extract everything from it.

        Only fetch failures raise (see :mod:`.errors`); a page with sparse
        content produces a smaller, still well-formed result.
        """
        start = time.perf_counter()
        logger.info("extraction started", extra={"url": url})
        await emit_event(on_event, "started", {"url": url})

        await emit_status(on_event, "fetching")
        fetch_start = time.perf_counter()
        html = await self._fetcher.fetch(url)
        timing = {"fetch": _elapsed_ms(fetch_start)}

        document = HtmlDocument.parse(html)
        results: dict[str, Any] = {}
        for name, func, fallback in self._plan(document, url, results):
            await emit_status(on_event, name)
            results[name] = _run_step(name, func, fallback, timing)

        timing["total"] = _elapsed_ms(start)
        result = self._assemble(url, results, timing)

        logger.info(
            "extraction completed",
            extra={
                "url": url,
                "images": len(result.images),
                "colors": len(result.colors),
                "elapsed_ms": timing["total"],
            },
        )
        await emit_event(on_event, "result", {
            "url": url,
            "images": len(result.images),
            "logos": sum(1 for image in result.images if image.is_logo),
            "colors": len(result.colors),
            "timing": timing,
        })
        await emit_event(on_event, "done", {})
        return result

    def extract_html(self, html: str, url: str) -> ExtractionResult:
        """Run the extractors over already-fetched *html*; *url* resolves relative links."""
        start = time.perf_counter()
        document = HtmlDocument.parse(html)
        results: dict[str, Any] = {}
        timing: dict[str, int] = {}
        for name, func, fallback in self._plan(document, url, results):
            results[name] = _run_step(name, func, fallback, timing)
        timing["total"] = _elapsed_ms(start)
        return self._assemble(url, results, timing)

    async def links(self, url: str, limit: int | None = None) -> list[ExtractedLink]:
        """Fetch *url* and return its internal links, most relevant first."""
        html = await self._fetcher.fetch(url)
        document = HtmlDocument.parse(html)
        links = extract_links(document, url, limit or self._limits.max_links)
        logger.info("links extracted", extra={"url": url, "count": len(links)})
        return links

    def build_palette(
        self,
        css_colors: Iterable[str],
        suggested_colors: Iterable[SuggestedColor] = (),
    ) -> list[ColorPaletteEntry]:
        """Twenty-color palette from site colors plus externally suggested ones."""
        return build_color_palette(
            css_colors,
            suggested_colors,
            target=self._settings.palette_target_colors,
            min_css=self._settings.palette_min_css_colors,
        )

    def _plan(self, document: Document, url: str, results: dict[str, Any]) -> list[_Step]:
        limits = self._limits
        target = self._settings.harvest_target_colors
        return [
            ("context", lambda: extract_context(document, limits), StructuredContext),
            ("images", lambda: extract_images(document, url, limits), list),
            ("colors", lambda: harvest_colors(document, target), list),
            (
                "palette",
                lambda: complement_palette(results["colors"], target),
                lambda: complement_palette([], target),
            ),
            (
                "analysis",
                lambda: self._analysis_input(document, url, results),
                lambda: AnalysisInput(url=url),
            ),
        ]

    def _analysis_input(self, document: Document, url: str, results: dict[str, Any]) -> AnalysisInput:
        context: StructuredContext = results["context"]
        colors: list[ColorPaletteEntry] = results["colors"]
        body = collapse_whitespace(document.first_text("body"))
        return AnalysisInput(
            url=url,
            title=page_title(document),
            description=page_description(document),
            main_content=body[: self._limits.analysis_content_chars],
            headlines=context.headlines_raw,
            extracted_colors=[color.hex for color in colors],
        )

    @staticmethod
    def _assemble(url: str, results: dict[str, Any], timing: dict[str, int]) -> ExtractionResult:
        return ExtractionResult(
            url=url,
            context=results["context"],
            images=results["images"],
            colors=results["colors"],
            palette=results["palette"],
            analysis_input=results["analysis"],
            timing=timing,
        )


async def extract(url: str, settings: Settings | None = None) -> ExtractionResult:
    """One-shot convenience wrapper around :meth:`ExtractionEngine.run`."""
    return await ExtractionEngine(settings).run(url)

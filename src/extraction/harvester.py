"""Color harvesting from the page's CSS-adjacent surface, plus 16-color completion."""

from __future__ import annotations

import logging
import math
import re
from typing import Iterable

from .colors import generate_variations, is_valid_color, normalize_color
from .document import Document, Node
from .models import ColorPaletteEntry, ColorSource

logger = logging.getLogger(__name__)

HARVEST_TARGET = 16
MAX_VARIATION_BASES = 4

INLINE_COLOR_RE = re.compile(r"#[0-9A-Fa-f]{6}|#[0-9A-Fa-f]{3}|rgb\([^)]+\)|rgba\([^)]+\)")
HEX_LITERAL_RE = re.compile(r"#[0-9A-Fa-f]{6}|#[0-9A-Fa-f]{3}")

STRUCTURAL_SELECTORS = (
    "header", "nav", "footer", ".hero", ".banner",
    ".btn", ".button", "button", "a.btn",
    ".cta", ".primary", ".secondary", ".accent",
    ".card", ".container", "main", "section",
)

SVG_IGNORED_PAINT = ("none", "currentColor")

DEFAULT_PALETTE: tuple[tuple[str, str], ...] = (
    ("#3B82F6", "primary"),
    ("#1E40AF", "accent"),
    ("#DBEAFE", "light"),
    ("#10B981", "success"),
    ("#F59E0B", "warning"),
    ("#EF4444", "danger"),
    ("#8B5CF6", "secondary"),
    ("#6B7280", "neutral"),
    ("#EC4899", "pink"),
    ("#14B8A6", "teal"),
    ("#F97316", "orange"),
    ("#84CC16", "lime"),
    ("#06B6D4", "cyan"),
    ("#A855F7", "purple"),
    ("#F43F5E", "rose"),
    ("#0EA5E9", "sky"),
)


def _style_declarations(style: str) -> dict[str, str]:
    """Parse ``prop: value; ...`` into a dict keyed by lowercase property."""
    declarations: dict[str, str] = {}
    for chunk in style.split(";"):
        prop, sep, value = chunk.partition(":")
        if sep:
            declarations[prop.strip().lower()] = value.strip()
    return declarations


class _Collector:
    """Ordered, deduplicated accumulator; the first source to report a hex wins."""

    def __init__(self) -> None:
        self.colors: list[ColorPaletteEntry] = []
        self._seen: set[str] = set()

    def add(self, raw: str | None, role_hint: str, source: ColorSource = "css") -> None:
        hex_value = normalize_color(raw)
        if hex_value is None or hex_value in self._seen or not is_valid_color(hex_value):
            return
        self._seen.add(hex_value)
        self.colors.append(ColorPaletteEntry(hex=hex_value, source=source, role_hint=role_hint))


def _from_inline_styles(document: Document, collector: _Collector) -> None:
    for element in document.select("[style]"):
        for literal in INLINE_COLOR_RE.findall(element.attr("style") or ""):
            collector.add(literal, "inline")


def _from_structural_elements(document: Document, collector: _Collector) -> None:
    for selector in STRUCTURAL_SELECTORS:
        for element in document.select(selector):
            declarations = _style_declarations(element.attr("style") or "")
            background = declarations.get("background-color") or element.attr("bgcolor")
            collector.add(background, "background")
            collector.add(declarations.get("color"), "text")
            collector.add(declarations.get("border-color"), "border")


def _from_style_blocks(document: Document, collector: _Collector) -> None:
    for element in document.select("style"):
        for literal in HEX_LITERAL_RE.findall(element.text()):
            collector.add(literal, "stylesheet")


def _from_stylesheet_links(document: Document, collector: _Collector) -> None:
    for element in document.select('link[rel="stylesheet"]'):
        for literal in HEX_LITERAL_RE.findall(element.attr("href") or ""):
            collector.add(literal, "external")


def _from_theme_color(document: Document, collector: _Collector) -> None:
    collector.add(document.first_attr('meta[name="theme-color"]', "content"), "theme")


def _svg_paints(element: Node) -> Iterable[str]:
    for name in ("fill", "stroke"):
        value = element.attr(name)
        if value and value not in SVG_IGNORED_PAINT:
            yield value


def _from_svg(document: Document, collector: _Collector) -> None:
    for element in document.select("svg [fill], svg [stroke]"):
        for paint in _svg_paints(element):
            collector.add(paint, "svg")


_SOURCES = (
    _from_inline_styles,
    _from_structural_elements,
    _from_style_blocks,
    _from_stylesheet_links,
    _from_theme_color,
    _from_svg,
)


def harvest_colors(document: Document, limit: int = HARVEST_TARGET) -> list[ColorPaletteEntry]:
    """Collect valid, distinct site colors in source priority order.

    Sources, highest priority first: inline ``style`` attributes,
    structural elements (header, nav, buttons...), ``<style>`` blocks,
    stylesheet ``href`` values, ``theme-color`` meta and SVG paint
    attributes. A source that fails is skipped, never fatal.
    """
    collector = _Collector()
    for source in _SOURCES:
        try:
            source(document, collector)
        except Exception:
            logger.warning("color source failed", extra={"source": source.__name__}, exc_info=True)

    logger.debug("colors harvested", extra={"count": len(collector.colors)})
    return collector.colors[:limit]


def complement_palette(
    colors: Iterable[ColorPaletteEntry],
    target: int = HARVEST_TARGET,
) -> list[ColorPaletteEntry]:
    """Pad harvested colors to *target* entries.

    Variations of up to the first four colors are tried first, then the
    fixed default palette in order. Duplicate hex values are skipped
    throughout.
    """
    palette: list[ColorPaletteEntry] = []
    seen: set[str] = set()
    for color in colors:
        if color.hex not in seen:
            seen.add(color.hex)
            palette.append(color)

    if len(palette) >= target:
        return palette[:target]

    def add(hex_value: str, role_hint: str) -> None:
        seen.add(hex_value)
        palette.append(ColorPaletteEntry(hex=hex_value, source="fill", role_hint=role_hint))

    bases = palette[:MAX_VARIATION_BASES]
    if bases:
        per_base = math.ceil((target - len(palette)) / len(bases))
        for base in bases:
            for hex_value in generate_variations(base.hex, per_base):
                if len(palette) >= target:
                    break
                if hex_value not in seen:
                    add(hex_value, "variation")

    for hex_value, role_hint in DEFAULT_PALETTE:
        if len(palette) >= target:
            break
        if hex_value not in seen:
            add(hex_value, role_hint)

    return palette[:target]

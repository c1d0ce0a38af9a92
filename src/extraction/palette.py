"""Twenty-color palette assembly: site colors first, then suggested, then defaults."""

from __future__ import annotations

import logging
from typing import Iterable, Mapping

from .colors import adjust_brightness, extract_hex, normalize_color
from .models import ColorPaletteEntry, ColorSource

logger = logging.getLogger(__name__)

PALETTE_TARGET = 20
MIN_CSS_COLORS = 3
CSS_VARIATION_STEP = 25
FALLBACK_VARIATION_STEP = 8

DEFAULT_COLORS: tuple[str, ...] = (
    "#FFFFFF",  # background
    "#1A1A1A",  # primary text
    "#4A4A4A",  # secondary text
    "#3B82F6",  # accent
    "#2563EB",  # cta
    "#DBEAFE",  # highlight
    "#6B7280",  # neutral
    "#F3F4F6",  # contrast
    "#10B981",  # success
    "#F59E0B",  # warning
    "#EF4444",  # error
    "#8B5CF6",  # purple
    "#EC4899",  # pink
    "#14B8A6",  # teal
    "#F97316",  # orange
    "#06B6D4",  # cyan
)

SuggestedColor = Mapping[str, str] | ColorPaletteEntry


class _Palette:
    def __init__(self) -> None:
        self.entries: list[ColorPaletteEntry] = []
        self._seen: set[str] = set()

    def __len__(self) -> int:
        return len(self.entries)

    def __contains__(self, hex_value: str) -> bool:
        return hex_value in self._seen

    def add(self, hex_value: str, source: ColorSource, role_hint: str) -> None:
        self._seen.add(hex_value)
        self.entries.append(ColorPaletteEntry(hex=hex_value, source=source, role_hint=role_hint))

    def count(self, source: ColorSource) -> int:
        return sum(1 for e in self.entries if e.source == source)


def _suggested_hex_and_role(color: SuggestedColor) -> tuple[str | None, str]:
    if isinstance(color, ColorPaletteEntry):
        return color.hex, color.role_hint or "ai_suggested"
    raw = color.get("hex")
    return extract_hex(raw) or normalize_color(raw), color.get("role") or "ai_suggested"


def _ensure_min_css(palette: _Palette, min_css: int) -> None:
    """Pad one or two site colors with brightness variants of the first one.

    The shift grows with the palette size: 25 per entry already present.

    Gives up as soon as both the lighter and darker variant collide, so a
    base color pinned at a channel limit cannot loop forever.
    """
    base = palette.entries[0].hex
    while palette.count("css") < min_css:
        amount = len(palette) * CSS_VARIATION_STEP
        candidate = adjust_brightness(base, amount)
        if candidate in palette:
            candidate = adjust_brightness(base, -amount)
        if candidate in palette:
            logger.debug("css variation collided, stopping", extra={"base": base, "amount": amount})
            break
        palette.add(candidate, "css", "css_variation")


def _fallback_variant(palette: _Palette) -> str | None:
    """A brightness variant of a default color not yet in *palette*."""
    position = len(palette)
    amount = position * FALLBACK_VARIATION_STEP
    for offset in range(len(DEFAULT_COLORS)):
        base = DEFAULT_COLORS[(position + offset) % len(DEFAULT_COLORS)]
        deltas = [amount, -amount]
        for step in range(1, 32):
            deltas.extend((step * FALLBACK_VARIATION_STEP, -step * FALLBACK_VARIATION_STEP))
        for delta in deltas:
            candidate = adjust_brightness(base, delta)
            if candidate not in palette:
                return candidate
    return None


def build_color_palette(
    css_colors: Iterable[str],
    suggested_colors: Iterable[SuggestedColor] = (),
    *,
    target: int = PALETTE_TARGET,
    min_css: int = MIN_CSS_COLORS,
) -> list[ColorPaletteEntry]:
    """Assemble exactly *target* distinct colors.

    Order of precedence:

    1. harvested site colors (``css``; the first is tagged ``primary``),
       padded with brightness variants until at least *min_css* are present
       when the site offered one or two;
    2. externally suggested colors (``ai``), e.g. from a language model;
    3. the fixed default list (``fill`` / ``default``);
    4. brightness variants of the defaults (``fill`` / ``complement``).
    """
    palette = _Palette()

    for raw in css_colors:
        if len(palette) >= target:
            break
        hex_value = normalize_color(raw)
        if hex_value is None or hex_value in palette:
            continue
        palette.add(hex_value, "css", "primary" if len(palette) == 0 else "extracted")

    if 0 < len(palette) < min_css:
        _ensure_min_css(palette, min_css)

    for color in suggested_colors:
        if len(palette) >= target:
            break
        hex_value, role_hint = _suggested_hex_and_role(color)
        if hex_value and hex_value not in palette:
            palette.add(hex_value, "ai", role_hint)

    for hex_value in DEFAULT_COLORS:
        if len(palette) >= target:
            break
        if hex_value not in palette:
            palette.add(hex_value, "fill", "default")

    while len(palette) < target:
        candidate = _fallback_variant(palette)
        if candidate is None:
            logger.warning("palette fallback exhausted", extra={"size": len(palette), "target": target})
            break
        palette.add(candidate, "fill", "complement")

    logger.debug(
        "color palette built",
        extra={
            "total": len(palette),
            "css_colors": palette.count("css"),
            "ai_colors": palette.count("ai"),
        },
    )
    return palette.entries[:target]

"""Color literal parsing, validity filtering and variation helpers."""

from __future__ import annotations

import colorsys
import math
import re

HEX_RE = re.compile(r"^#?([0-9a-f]{2})([0-9a-f]{2})([0-9a-f]{2})$", re.IGNORECASE)
SHORT_HEX_RE = re.compile(r"^#([0-9a-f])([0-9a-f])([0-9a-f])$", re.IGNORECASE)
EMBEDDED_HEX_RE = re.compile(r"#[0-9A-Fa-f]{6}")
DIGITS_RE = re.compile(r"\d+")

RGB = tuple[int, int, int]


def _clamp(value: float, low: float, high: float) -> float:
    return min(high, max(low, value))


def _round(value: float) -> int:
    # Half-up, matching how browsers round channel values.
    return math.floor(value + 0.5)


def rgb_to_hex(r: int, g: int, b: int) -> str:
    r, g, b = (int(_clamp(c, 0, 255)) for c in (r, g, b))
    return f"#{r:02X}{g:02X}{b:02X}"


def hex_to_rgb(hex_value: str) -> RGB | None:
    match = HEX_RE.match(hex_value.strip())
    if not match:
        return None
    return tuple(int(part, 16) for part in match.groups())  # type: ignore[return-value]


def normalize_color(value: str | None) -> str | None:
    """Return ``#RRGGBB`` (uppercase) for a hex or ``rgb()``/``rgba()`` literal.

    ``#abc`` expands to ``#AABBCC``; the first three integers of an
    ``rgb``/``rgba`` expression become the channels. Anything else, named
    colors included, yields ``None``.
    """
    if not value:
        return None
    value = value.strip()
    if value.startswith("#"):
        short = SHORT_HEX_RE.match(value)
        if short:
            return "#" + "".join(c * 2 for c in short.groups()).upper()
        if HEX_RE.match(value):
            return value.upper()
        return None
    if value.lower().startswith("rgb"):
        numbers = DIGITS_RE.findall(value)
        if len(numbers) >= 3:
            r, g, b = (int(n) for n in numbers[:3])
            return rgb_to_hex(r, g, b)
    return None


def extract_hex(text: str | None) -> str | None:
    """First ``#RRGGBB`` inside free text such as ``"#1E3A8A (navy)"``."""
    if not text:
        return None
    match = EMBEDDED_HEX_RE.search(text)
    return match.group(0).upper() if match else None


def is_valid_color(hex_value: str) -> bool:
    """Reject near-white, near-black and flat mid grays."""
    rgb = hex_to_rgb(hex_value)
    if rgb is None:
        return False
    r, g, b = rgb
    if r > 250 and g > 250 and b > 250:
        return False
    if r < 5 and g < 5 and b < 5:
        return False
    high, low = max(rgb), min(rgb)
    saturation = 0 if high == 0 else (high - low) / high
    if saturation < 0.05 and 50 < high < 200:
        return False
    return True


def rgb_to_hsl(r: int, g: int, b: int) -> tuple[float, float, float]:
    """Return ``(hue in degrees, saturation, lightness)``."""
    h, l, s = colorsys.rgb_to_hls(r / 255, g / 255, b / 255)
    return h * 360, s, l


def hsl_to_rgb(h: float, s: float, l: float) -> RGB:
    r, g, b = colorsys.hls_to_rgb((h % 360) / 360, l, s)
    return _round(r * 255), _round(g * 255), _round(b * 255)


def adjust_brightness(hex_value: str, amount: int) -> str:
    """Shift every channel by *amount*, clamped to 0..255."""
    rgb = hex_to_rgb(hex_value)
    if rgb is None:
        return hex_value
    return rgb_to_hex(*(c + amount for c in rgb))


def generate_variations(base_hex: str, count: int) -> list[str]:
    """HSL variations of *base_hex*.

    Variant ``i`` combines lightness shift ``(i % 3 - 1) * 0.15``,
    saturation shift ``+0.1`` / ``-0.1`` on even / odd ``i`` and hue shift
    ``(i % 4) * 15`` degrees. Results may repeat; callers deduplicate.
    """
    rgb = hex_to_rgb(base_hex)
    if rgb is None:
        return []
    h, s, l = rgb_to_hsl(*rgb)

    variations: list[str] = []
    for i in range(count):
        lightness_shift = ((i % 3) - 1) * 0.15
        saturation_shift = 0.1 if i % 2 == 0 else -0.1
        hue_shift = (i % 4) * 15

        new_h = (h + hue_shift) % 360
        new_s = _clamp(s + saturation_shift, 0.0, 1.0)
        new_l = _clamp(l + lightness_shift, 0.1, 0.9)
        variations.append(rgb_to_hex(*hsl_to_rgb(new_h, new_s, new_l)))
    return variations

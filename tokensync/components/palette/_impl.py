"""
Palette engine - harmonic color palette generation from a single seed.

Pure functions only: no I/O, no module state. Every function is
deterministic for a given input.

Key behaviors:
- Seeds must be 6-digit hex (#RRGGBB); anything else raises InvalidColorFormat
- Each shade scale has the 11 steps 50..950 on a fixed lightness ramp
- Hue is held constant within a scale; saturation is damped at the extremes
- Harmony modes rotate the seed hue modulo 360
- Semantic colors are fixed and independent of the seed
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass, field
from enum import Enum

# --- Errors ---


class InvalidColorFormat(ValueError):
    """Raised when a color is not a 6-digit hex string with a leading '#'."""

    def __init__(self, value: object) -> None:
        self.value = value
        super().__init__(f"Invalid hex color format: {value!r}. Expected #RRGGBB")


# --- Types ---


class HarmonyMode(str, Enum):
    """Rule for deriving companion hues from the seed hue."""

    COMPLEMENTARY = "complementary"
    ANALOGOUS = "analogous"
    TRIADIC = "triadic"
    SPLIT_COMPLEMENTARY = "split-complementary"


@dataclass(frozen=True)
class HSL:
    """Hue in degrees [0, 360), saturation and lightness in percent [0, 100]."""

    h: float
    s: float
    l: float  # noqa: E741


@dataclass(frozen=True)
class Palette:
    """Four shade scales plus four semantic single colors."""

    primary: dict[str, str]
    secondary: dict[str, str]
    accent: dict[str, str]
    neutral: dict[str, str]
    success: str
    warning: str
    error: str
    info: str

    def scales(self) -> dict[str, dict[str, str]]:
        """Shade scales keyed by role name, in display order."""
        return {
            "primary": self.primary,
            "secondary": self.secondary,
            "accent": self.accent,
            "neutral": self.neutral,
        }

    def semantic(self) -> dict[str, str]:
        """Semantic colors keyed by role name."""
        return {
            "success": self.success,
            "warning": self.warning,
            "error": self.error,
            "info": self.info,
        }

    def to_dict(self) -> dict[str, object]:
        return {**self.scales(), **self.semantic()}


@dataclass(frozen=True)
class SemanticColors:
    """Fixed accessible base colors for status roles."""

    success: str = "#16a34a"
    warning: str = "#d97706"
    error: str = "#dc2626"
    info: str = "#2563eb"


@dataclass(frozen=True)
class PaletteConfig:
    """Palette configuration from rules."""

    default_harmony: HarmonyMode = HarmonyMode.COMPLEMENTARY
    semantic: SemanticColors = field(default_factory=SemanticColors)


DEFAULT_CONFIG = PaletteConfig()


# --- Constants ---

HEX_COLOR_PATTERN = re.compile(r"^#[0-9A-Fa-f]{6}$")

SHADE_STEPS = ("50", "100", "200", "300", "400", "500", "600", "700", "800", "900", "950")

# (step, lightness %, saturation factor). Saturation is damped toward
# both ends of the ramp and slightly boosted through the 600-800 band.
SHADE_RAMP: tuple[tuple[str, int, float], ...] = (
    ("50", 97, 0.30),
    ("100", 94, 0.50),
    ("200", 88, 0.65),
    ("300", 77, 0.75),
    ("400", 66, 0.85),
    ("500", 55, 1.00),
    ("600", 44, 1.05),
    ("700", 37, 1.10),
    ("800", 28, 1.05),
    ("900", 20, 1.00),
    ("950", 12, 0.95),
)

# (step, lightness %, saturation %)
NEUTRAL_RAMP: tuple[tuple[str, int, int], ...] = (
    ("50", 98, 5),
    ("100", 96, 5),
    ("200", 91, 5),
    ("300", 83, 4),
    ("400", 64, 4),
    ("500", 46, 4),
    ("600", 37, 5),
    ("700", 27, 6),
    ("800", 18, 7),
    ("900", 11, 8),
    ("950", 6, 10),
)

# secondary, accent rotations in degrees
HARMONY_ROTATIONS: dict[HarmonyMode, tuple[int, int]] = {
    HarmonyMode.COMPLEMENTARY: (180, 90),
    HarmonyMode.ANALOGOUS: (30, -30),
    HarmonyMode.TRIADIC: (120, -120),
    HarmonyMode.SPLIT_COMPLEMENTARY: (150, -150),
}


# --- Color Space Conversion ---


def _clamp(value: float, low: float = 0.0, high: float = 100.0) -> float:
    return max(low, min(high, value))


def _round_half_up(value: float) -> int:
    """Nearest integer, with halves rounded up."""
    return math.floor(value + 0.5)


def parse_hex(color: object) -> tuple[int, int, int]:
    """
    Parse a #RRGGBB color into an RGB tuple.

    Raises:
        InvalidColorFormat: If the value is not a 6-digit hex string.
    """
    if not isinstance(color, str) or not HEX_COLOR_PATTERN.match(color):
        raise InvalidColorFormat(color)

    digits = color[1:]
    return (
        int(digits[0:2], 16),
        int(digits[2:4], 16),
        int(digits[4:6], 16),
    )


def rgb_to_hex(r: int, g: int, b: int) -> str:
    return f"#{r:02x}{g:02x}{b:02x}"


def hex_to_hsl(color: str) -> HSL:
    """
    Convert a #RRGGBB color to HSL, rounded to whole degrees and percent.

    Args:
        color: Color in #RRGGBB format

    Returns:
        HSL with h in [0, 360), s and l in [0, 100]
    """
    r, g, b = (c / 255 for c in parse_hex(color))

    high = max(r, g, b)
    low = min(r, g, b)
    lightness = (high + low) / 2
    hue = 0.0
    saturation = 0.0

    if high != low:
        d = high - low
        saturation = d / (2 - high - low) if lightness > 0.5 else d / (high + low)
        if high == r:
            hue = ((g - b) / d + (6 if g < b else 0)) / 6
        elif high == g:
            hue = ((b - r) / d + 2) / 6
        else:
            hue = ((r - g) / d + 4) / 6

    return HSL(
        h=_round_half_up(hue * 360) % 360,
        s=_round_half_up(saturation * 100),
        l=_round_half_up(lightness * 100),
    )


def _hue_to_channel(p: float, q: float, t: float) -> float:
    if t < 0:
        t += 1
    if t > 1:
        t -= 1
    if t < 1 / 6:
        return p + (q - p) * 6 * t
    if t < 1 / 2:
        return q
    if t < 2 / 3:
        return p + (q - p) * (2 / 3 - t) * 6
    return p


def hsl_to_hex(hsl: HSL) -> str:
    """
    Convert HSL to a lowercase #rrggbb color.

    Hue wraps modulo 360; saturation and lightness are clamped to [0, 100].
    """
    h = (hsl.h % 360) / 360
    s = _clamp(hsl.s) / 100
    lightness = _clamp(hsl.l) / 100

    if s == 0:
        v = _round_half_up(lightness * 255)
        return rgb_to_hex(v, v, v)

    q = lightness * (1 + s) if lightness < 0.5 else lightness + s - lightness * s
    p = 2 * lightness - q

    return rgb_to_hex(
        _round_half_up(_hue_to_channel(p, q, h + 1 / 3) * 255),
        _round_half_up(_hue_to_channel(p, q, h) * 255),
        _round_half_up(_hue_to_channel(p, q, h - 1 / 3) * 255),
    )


# --- Shade Generation ---


def generate_shades_from_hsl(hue: float, saturation: float) -> dict[str, str]:
    """
    Build an 11-step scale for a hue on the fixed lightness ramp.

    Args:
        hue: Scale hue in degrees (wrapped modulo 360)
        saturation: Base saturation in percent, damped per step

    Returns:
        Mapping of step label ("50".."950") to hex color
    """
    hue = hue % 360
    return {
        step: hsl_to_hex(
            HSL(h=hue, s=_clamp(_round_half_up(saturation * s_factor)), l=lightness)
        )
        for step, lightness, s_factor in SHADE_RAMP
    }


def generate_shades(seed: str) -> dict[str, str]:
    """
    Generate an 11-step shade scale from a seed color.

    The seed's hue and saturation are kept; lightness is remapped onto the
    ramp from near-white (50) to near-black (950).

    Raises:
        InvalidColorFormat: If the seed is not #RRGGBB.
    """
    base = hex_to_hsl(seed)
    return generate_shades_from_hsl(base.h, base.s)


def generate_neutral_shades(hue: float) -> dict[str, str]:
    """Low-saturation scale tinted with the given hue."""
    hue = hue % 360
    return {
        step: hsl_to_hex(HSL(h=hue, s=saturation, l=lightness))
        for step, lightness, saturation in NEUTRAL_RAMP
    }


# --- Color Harmony ---


def rotate_hue(hue: float, degrees: float) -> float:
    """Rotate a hue, wrapping into [0, 360)."""
    return (hue + degrees) % 360


def harmony_hues(hue: float, mode: HarmonyMode | str) -> tuple[float, float]:
    """
    Derive (secondary, accent) hues for a harmony mode.

    Raises:
        ValueError: If mode is not a known harmony mode.
    """
    secondary, accent = HARMONY_ROTATIONS[HarmonyMode(mode)]
    return rotate_hue(hue, secondary), rotate_hue(hue, accent)


# --- Full Palette ---


def generate_full_palette(
    seed: str,
    mode: HarmonyMode | str,
    config: PaletteConfig = DEFAULT_CONFIG,
) -> Palette:
    """
    Generate the complete palette for a seed color and harmony mode.

    Args:
        seed: Seed color in #RRGGBB format
        mode: Harmony mode used to derive secondary and accent hues
        config: Palette configuration (semantic colors)

    Returns:
        Palette with primary/secondary/accent/neutral scales and semantic colors

    Raises:
        InvalidColorFormat: If the seed is not #RRGGBB.
        ValueError: If mode is not a known harmony mode.
    """
    base = hex_to_hsl(seed)
    secondary_hue, accent_hue = harmony_hues(base.h, mode)
    semantic = config.semantic

    return Palette(
        primary=generate_shades_from_hsl(base.h, base.s),
        secondary=generate_shades_from_hsl(secondary_hue, base.s),
        accent=generate_shades_from_hsl(accent_hue, base.s),
        neutral=generate_neutral_shades(base.h),
        success=semantic.success,
        warning=semantic.warning,
        error=semantic.error,
        info=semantic.info,
    )


# --- Contrast ---

WHITE = "#ffffff"
BLACK = "#000000"

# (minimum ratio, WCAG level) for normal-size text, strictest first
CONTRAST_LEVELS: tuple[tuple[float, str], ...] = (
    (7.0, "AAA"),
    (4.5, "AA"),
    (3.0, "AA-large"),
)


@dataclass(frozen=True)
class ShadeContrast:
    """Best text color on a shade and the WCAG level it reaches."""

    text: str
    ratio: float
    level: str | None


def _linear_channel(value: int) -> float:
    srgb = value / 255
    return srgb / 12.92 if srgb <= 0.04045 else ((srgb + 0.055) / 1.055) ** 2.4


def relative_luminance(color: str) -> float:
    """WCAG 2.1 relative luminance of a #RRGGBB color, 0 (black) to 1 (white)."""
    r, g, b = (_linear_channel(c) for c in parse_hex(color))
    return 0.2126 * r + 0.7152 * g + 0.0722 * b


def contrast_ratio(fg: str, bg: str) -> float:
    """
    WCAG contrast ratio between two #RRGGBB colors, from 1.0 to 21.0.

    The order of the arguments does not matter.

    Raises:
        InvalidColorFormat: If either color is not #RRGGBB.
    """
    darker, lighter = sorted((relative_luminance(fg), relative_luminance(bg)))
    return (lighter + 0.05) / (darker + 0.05)


def contrast_level(ratio: float) -> str | None:
    """Highest WCAG level a ratio satisfies, or None below 3:1."""
    for minimum, level in CONTRAST_LEVELS:
        if ratio >= minimum:
            return level
    return None


def shade_contrast(background: str) -> ShadeContrast:
    """Pick white or black text for a background, whichever reads better."""
    on_white = contrast_ratio(WHITE, background)
    on_black = contrast_ratio(BLACK, background)
    text, ratio = (WHITE, on_white) if on_white >= on_black else (BLACK, on_black)
    return ShadeContrast(text=text, ratio=round(ratio, 2), level=contrast_level(ratio))


def palette_contrast(palette: Palette) -> dict[str, dict[str, ShadeContrast]]:
    """Text contrast for every shade of every scale, keyed by role then step."""
    return {
        role: {step: shade_contrast(color) for step, color in shades.items()}
        for role, shades in palette.scales().items()
    }

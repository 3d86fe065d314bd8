"""
Palette component - color palette generation from a seed color.
"""

from ._impl import (
    BLACK,
    CONTRAST_LEVELS,
    HARMONY_ROTATIONS,
    HSL,
    SHADE_STEPS,
    WHITE,
    HarmonyMode,
    InvalidColorFormat,
    Palette,
    PaletteConfig,
    SemanticColors,
    ShadeContrast,
    contrast_level,
    contrast_ratio,
    generate_full_palette,
    generate_neutral_shades,
    generate_shades,
    generate_shades_from_hsl,
    harmony_hues,
    hex_to_hsl,
    hsl_to_hex,
    palette_contrast,
    parse_hex,
    relative_luminance,
    rotate_hue,
    shade_contrast,
)
from .component import run, run_generate, run_shades
from .models import (
    GeneratePaletteInput,
    GenerateShadesInput,
    PaletteOutput,
    PaletteValidationError,
    ShadesOutput,
)
from .ports import RulesPort

__all__ = [
    # Entry points
    "run",
    "run_generate",
    "run_shades",
    # Input models
    "GeneratePaletteInput",
    "GenerateShadesInput",
    # Output models
    "PaletteOutput",
    "PaletteValidationError",
    "ShadesOutput",
    # Ports
    "RulesPort",
    # _impl re-exports
    "HARMONY_ROTATIONS",
    "HSL",
    "BLACK",
    "CONTRAST_LEVELS",
    "SHADE_STEPS",
    "WHITE",
    "HarmonyMode",
    "InvalidColorFormat",
    "Palette",
    "PaletteConfig",
    "SemanticColors",
    "ShadeContrast",
    "contrast_level",
    "contrast_ratio",
    "generate_full_palette",
    "generate_neutral_shades",
    "generate_shades",
    "generate_shades_from_hsl",
    "harmony_hues",
    "hex_to_hsl",
    "hsl_to_hex",
    "palette_contrast",
    "parse_hex",
    "relative_luminance",
    "rotate_hue",
    "shade_contrast",
]

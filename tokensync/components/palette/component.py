"""
Palette component - harmonic color palette generation.

Derives primary/secondary/accent/neutral shade scales and semantic status
colors from one seed color and a harmony mode.

Invariants:
- I1: Every scale has exactly the steps 50..950
- I2: Lightness strictly decreases from 50 to 950
- I3: All steps of a scale share the scale's hue
- I4: Malformed seeds are reported, never turned into a palette
"""

from __future__ import annotations

import logging

from ._impl import (
    DEFAULT_CONFIG,
    HarmonyMode,
    InvalidColorFormat,
    PaletteConfig,
    SemanticColors,
    generate_full_palette,
    generate_shades,
    palette_contrast,
)
from .models import (
    GeneratePaletteInput,
    GenerateShadesInput,
    PaletteOutput,
    PaletteValidationError,
    ShadesOutput,
)
from .ports import RulesPort

logger = logging.getLogger(__name__)


def _build_config(rules: RulesPort | None) -> PaletteConfig:
    """Build palette config from rules port."""
    if rules is None:
        return DEFAULT_CONFIG

    return PaletteConfig(
        default_harmony=HarmonyMode(rules.get_default_harmony()),
        semantic=SemanticColors(**rules.get_semantic_colors()),
    )


def _invalid_color(exc: InvalidColorFormat) -> PaletteValidationError:
    return PaletteValidationError(code="invalid_color", message=str(exc), field="seed")


# --- Component Entry Points ---


def run_generate(
    inp: GeneratePaletteInput,
    *,
    rules: RulesPort | None = None,
) -> PaletteOutput:
    """
    Generate a full palette.

    Args:
        inp: Input containing seed color and optional harmony mode.
        rules: Optional rules port for configuration.

    Returns:
        PaletteOutput with palette or errors.
    """
    config = _build_config(rules)

    try:
        mode = HarmonyMode(inp.mode) if inp.mode is not None else config.default_harmony
    except ValueError:
        return PaletteOutput(
            palette=None,
            errors=[
                PaletteValidationError(
                    code="invalid_mode",
                    message=(
                        f"Unknown harmony mode {inp.mode!r}. "
                        f"Expected one of: {', '.join(m.value for m in HarmonyMode)}"
                    ),
                    field="mode",
                )
            ],
            success=False,
        )

    try:
        palette = generate_full_palette(inp.seed, mode, config)
    except InvalidColorFormat as e:
        logger.info("Rejected palette seed %r", inp.seed)
        return PaletteOutput(palette=None, mode=mode, errors=[_invalid_color(e)], success=False)

    logger.debug("Generated %s palette for %s", mode.value, inp.seed)
    return PaletteOutput(
        palette=palette,
        mode=mode,
        contrast=palette_contrast(palette),
        errors=[],
        success=True,
    )


def run_shades(inp: GenerateShadesInput) -> ShadesOutput:
    """Generate a single 11-step shade scale."""
    try:
        shades = generate_shades(inp.seed)
    except InvalidColorFormat as e:
        return ShadesOutput(shades=None, errors=[_invalid_color(e)], success=False)

    return ShadesOutput(shades=shades, errors=[], success=True)


def run(
    inp: GeneratePaletteInput | GenerateShadesInput,
    *,
    rules: RulesPort | None = None,
) -> PaletteOutput | ShadesOutput:
    """
    Main entry point for the palette component.

    Dispatches to appropriate handler based on input type.
    """
    if isinstance(inp, GeneratePaletteInput):
        return run_generate(inp, rules=rules)
    elif isinstance(inp, GenerateShadesInput):
        return run_shades(inp)
    else:
        raise ValueError(f"Unknown input type: {type(inp)}")

"""
Palette component input/output models.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from ._impl import HarmonyMode, Palette, ShadeContrast

# --- Validation Error ---


@dataclass(frozen=True)
class PaletteValidationError:
    """Palette validation error."""

    code: str
    message: str
    field: str | None = None


# --- Input Models ---


@dataclass(frozen=True)
class GeneratePaletteInput:
    """Input for generating a full palette."""

    seed: str
    mode: HarmonyMode | str | None = None


@dataclass(frozen=True)
class GenerateShadesInput:
    """Input for generating a single shade scale."""

    seed: str


# --- Output Models ---


@dataclass(frozen=True)
class PaletteOutput:
    """Output containing a generated palette."""

    palette: Palette | None
    mode: HarmonyMode | None = None
    contrast: dict[str, dict[str, ShadeContrast]] | None = None
    errors: list[PaletteValidationError] = field(default_factory=list)
    success: bool = True


@dataclass(frozen=True)
class ShadesOutput:
    """Output containing a single shade scale."""

    shades: dict[str, str] | None
    errors: list[PaletteValidationError] = field(default_factory=list)
    success: bool = True

"""
Palette component port definitions.
"""

from __future__ import annotations

from typing import Protocol


class RulesPort(Protocol):
    """Port for palette rules configuration."""

    def get_default_harmony(self) -> str:
        """Get harmony mode used when none is requested."""
        ...

    def get_semantic_colors(self) -> dict[str, str]:
        """Get semantic colors keyed by role (success, warning, error, info)."""
        ...

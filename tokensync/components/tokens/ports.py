"""
Tokens component port definitions.
"""

from __future__ import annotations

from typing import Any, Protocol


class TokenDocumentSourcePort(Protocol):
    """Source of the persisted token document (repository file, API, ...)."""

    def load_document(self) -> dict[str, Any] | None:
        """Load the token document, or None when there is none."""
        ...


class RulesPort(Protocol):
    """Port for token document rules configuration."""

    def get_reserved_prefix(self) -> str:
        """Get the prefix marking reserved (non-group) keys."""
        ...

    def get_skip_keys(self) -> list[str]:
        """Get keys that are never walked."""
        ...

    def get_root_group(self) -> str:
        """Get the group name given to root-level tokens."""
        ...

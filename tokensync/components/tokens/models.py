"""
Tokens component input/output models.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from ._impl import DocumentIssue, FlatToken, TokenSummary

# --- Validation Error ---


@dataclass(frozen=True)
class TokenValidationError:
    """Token document error."""

    code: str
    message: str
    field: str | None = None


# --- Input Models ---


@dataclass(frozen=True)
class FlattenInput:
    """Input for flattening a token document."""

    document: dict[str, Any] | None


@dataclass(frozen=True)
class ValidateInput:
    """Input for validating a token document."""

    document: dict[str, Any] | None


# --- Output Models ---


@dataclass(frozen=True)
class FlattenOutput:
    """Output containing flat tokens and their summary."""

    tokens: tuple[FlatToken, ...]
    summary: TokenSummary
    errors: list[TokenValidationError] = field(default_factory=list)
    success: bool = True


@dataclass(frozen=True)
class ValidateOutput:
    """Output for document validation."""

    valid: bool
    total_checked: int
    warnings: tuple[DocumentIssue, ...] = ()
    errors: list[TokenValidationError] = field(default_factory=list)
    success: bool = True

"""
Reconcile component input/output models.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from tokensync.components.tokens import FlatToken

from ._impl import ComparisonResult, DocumentDiff, VariableSnapshot

# --- Validation Error ---


@dataclass(frozen=True)
class ReconcileValidationError:
    """Reconciliation error."""

    code: str
    message: str
    field: str | None = None


# --- Input Models ---


@dataclass(frozen=True)
class CompareInput:
    """Input for comparing a variable snapshot with flat tokens."""

    snapshot: VariableSnapshot | None
    tokens: tuple[FlatToken, ...] = ()
    selected_mode: str | None = None


@dataclass(frozen=True)
class DiffInput:
    """Input for diffing a local token document against a remote one."""

    local: dict[str, Any] | None
    remote: dict[str, Any] | None


# --- Output Models ---


@dataclass(frozen=True)
class CompareOutput:
    """Output containing the comparison result."""

    result: ComparisonResult | None
    errors: list[ReconcileValidationError] = field(default_factory=list)
    success: bool = True


@dataclass(frozen=True)
class DiffOutput:
    """Output containing the document diff."""

    diff: DocumentDiff | None
    errors: list[ReconcileValidationError] = field(default_factory=list)
    success: bool = True

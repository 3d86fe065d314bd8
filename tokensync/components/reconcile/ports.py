"""
Reconcile component port definitions.
"""

from __future__ import annotations

from typing import Protocol

from ._impl import VariableSnapshot


class SnapshotSourcePort(Protocol):
    """Source of the live variable snapshot (design tool export, plugin, ...)."""

    def load_snapshot(self) -> VariableSnapshot | None:
        """Load the latest snapshot, or None when there is none."""
        ...


class RulesPort(Protocol):
    """Port for reconciliation rules configuration."""

    def get_duplicate_policy(self) -> str:
        """Get the duplicate match key policy ("error" or "last_wins")."""
        ...

"""
JSON file sources for token documents and variable snapshots.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from tokensync.components.reconcile import VariableSnapshot, snapshot_from_dict

logger = logging.getLogger(__name__)


def read_json(path: Path) -> Any:
    """
    Read a JSON file.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the file is not valid JSON.
    """
    if not path.exists():
        raise FileNotFoundError(f"File not found at: {path}")

    try:
        with open(path, encoding="utf-8") as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in {path}: {e}") from e


class JsonTokenDocumentSource:
    """TokenDocumentSourcePort backed by a JSON file. Empty files load as None."""

    def __init__(self, path: Path) -> None:
        self.path = path

    def load_document(self) -> dict[str, Any] | None:
        if self.path.exists() and self.path.stat().st_size == 0:
            return None
        data = read_json(self.path)
        if data is not None and not isinstance(data, dict):
            raise ValueError(f"Token document in {self.path} must be a JSON object")
        logger.debug("Loaded token document from %s", self.path)
        return data


class JsonSnapshotSource:
    """SnapshotSourcePort backed by a design tool JSON export."""

    def __init__(self, path: Path) -> None:
        self.path = path

    def load_snapshot(self) -> VariableSnapshot | None:
        if self.path.exists() and self.path.stat().st_size == 0:
            return None
        snapshot = snapshot_from_dict(read_json(self.path))
        if snapshot is not None:
            logger.debug("Loaded %d variables from %s", len(snapshot.variables), self.path)
        return snapshot

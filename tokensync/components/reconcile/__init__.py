"""
Reconcile component - classify live variables against persisted tokens,
and diff two token documents.
"""

from ._impl import (
    ComparisonItem,
    ComparisonResult,
    ComparisonStatus,
    ComparisonSummary,
    DiffChange,
    DiffEntry,
    DiffSummary,
    DisplayValues,
    DocumentDiff,
    DuplicateMatchKey,
    DuplicatePolicy,
    Effect,
    EffectStyle,
    TextStyle,
    Variable,
    VariableKind,
    VariableSnapshot,
    build_match_key,
    compare,
    diff_documents,
    format_variable_value,
    normalize_for_comparison,
    resolve_default_mode,
    summarize_items,
    token_match_key,
    tokens_equal,
    variable_value,
)
from .component import run, run_compare, run_diff
from .models import (
    CompareInput,
    CompareOutput,
    DiffInput,
    DiffOutput,
    ReconcileValidationError,
)
from .ports import RulesPort, SnapshotSourcePort
from .schemas import SnapshotModel, VariableModel, snapshot_from_dict

__all__ = [
    # Entry points
    "run",
    "run_compare",
    "run_diff",
    # Input models
    "CompareInput",
    "DiffInput",
    # Output models
    "CompareOutput",
    "DiffOutput",
    "ReconcileValidationError",
    # Ports
    "RulesPort",
    "SnapshotSourcePort",
    # Wire schemas
    "SnapshotModel",
    "VariableModel",
    "snapshot_from_dict",
    # _impl re-exports
    "ComparisonItem",
    "ComparisonResult",
    "ComparisonStatus",
    "ComparisonSummary",
    "DiffChange",
    "DiffEntry",
    "DiffSummary",
    "DisplayValues",
    "DocumentDiff",
    "DuplicateMatchKey",
    "DuplicatePolicy",
    "Effect",
    "EffectStyle",
    "TextStyle",
    "Variable",
    "VariableKind",
    "VariableSnapshot",
    "build_match_key",
    "compare",
    "diff_documents",
    "format_variable_value",
    "normalize_for_comparison",
    "resolve_default_mode",
    "summarize_items",
    "token_match_key",
    "tokens_equal",
    "variable_value",
]

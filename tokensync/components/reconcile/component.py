"""
Reconcile component - live variables versus persisted tokens.

Classifies every variable and token as synced, needs-sync, variable-only
or token-only. Recomputed from scratch on every call.

Invariants:
- I1: Every variable and every token appears in exactly one item
- I2: Summary counts sum to the number of items
- I3: Identical inputs give identical results, including item order
- I4: An item never lacks both a variable and a token
- I5: A document diff lists every token path of either document exactly once
"""

from __future__ import annotations

from typing import Any

from tokensync.components.tokens import RulesPort as DocumentRulesPort
from tokensync.components.tokens import build_config

from ._impl import (
    DuplicateMatchKey,
    DuplicatePolicy,
    compare,
    diff_documents,
)
from .models import (
    CompareInput,
    CompareOutput,
    DiffInput,
    DiffOutput,
    ReconcileValidationError,
)
from .ports import RulesPort


def _duplicate_policy(rules: RulesPort | None) -> DuplicatePolicy:
    if rules is None:
        return DuplicatePolicy.ERROR
    return DuplicatePolicy(rules.get_duplicate_policy())


# --- Component Entry Points ---


def run_compare(
    inp: CompareInput,
    *,
    rules: RulesPort | None = None,
) -> CompareOutput:
    """
    Compare a variable snapshot with flat tokens.

    Args:
        inp: Input containing snapshot, tokens and optional mode.
        rules: Optional rules port for configuration.

    Returns:
        CompareOutput with the comparison result or a duplicate_key error.
    """
    try:
        result = compare(
            inp.snapshot,
            inp.tokens,
            inp.selected_mode,
            duplicates=_duplicate_policy(rules),
        )
    except DuplicateMatchKey as e:
        return CompareOutput(
            result=None,
            errors=[
                ReconcileValidationError(
                    code="duplicate_key",
                    message=str(e),
                    field=e.key,
                )
            ],
            success=False,
        )

    return CompareOutput(result=result, errors=[], success=True)


def run_diff(
    inp: DiffInput,
    *,
    rules: DocumentRulesPort | None = None,
) -> DiffOutput:
    """
    Diff a local token document against a remote one.

    Both documents are walked with the same rules-driven configuration.
    """
    diff = diff_documents(inp.local, inp.remote, build_config(rules))
    return DiffOutput(diff=diff, errors=[], success=True)


def run(
    inp: CompareInput | DiffInput,
    *,
    rules: Any = None,
) -> CompareOutput | DiffOutput:
    """
    Main entry point for the reconcile component.

    Dispatches to appropriate handler based on input type.
    """
    if isinstance(inp, CompareInput):
        return run_compare(inp, rules=rules)
    elif isinstance(inp, DiffInput):
        return run_diff(inp, rules=rules)
    else:
        raise ValueError(f"Unknown input type: {type(inp)}")

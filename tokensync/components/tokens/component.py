"""
Tokens component - DTCG token document model.

Flattens nested token documents into addressable tokens, summarises them
and validates document shape.

Invariants:
- I1: path == group + "." + name, except root tokens (group "(root)")
- I2: Reserved-prefix keys and "metadata" are never treated as groups or tokens
- I3: Absent documents are empty documents
"""

from __future__ import annotations

from ._impl import (
    DEFAULT_CONFIG,
    DocumentConfig,
    flatten,
    summarize,
    validate_document,
)
from .models import (
    FlattenInput,
    FlattenOutput,
    TokenValidationError,
    ValidateInput,
    ValidateOutput,
)
from .ports import RulesPort


def build_config(rules: RulesPort | None) -> DocumentConfig:
    """Build document config from rules port."""
    if rules is None:
        return DEFAULT_CONFIG

    return DocumentConfig(
        reserved_prefix=rules.get_reserved_prefix(),
        skip_keys=frozenset(rules.get_skip_keys()),
        root_group=rules.get_root_group(),
    )


# --- Component Entry Points ---


def run_flatten(
    inp: FlattenInput,
    *,
    rules: RulesPort | None = None,
) -> FlattenOutput:
    """
    Flatten a token document.

    Args:
        inp: Input containing the nested document.
        rules: Optional rules port for configuration.

    Returns:
        FlattenOutput with tokens in traversal order and their summary.
    """
    tokens = tuple(flatten(inp.document, build_config(rules)))
    return FlattenOutput(tokens=tokens, summary=summarize(tokens), errors=[], success=True)


def run_validate(
    inp: ValidateInput,
    *,
    rules: RulesPort | None = None,
) -> ValidateOutput:
    """
    Validate a token document.

    Each structural problem becomes an error whose field is the token path.
    """
    result = validate_document(inp.document, build_config(rules))

    errors = [
        TokenValidationError(code="invalid_token", message=issue.message, field=issue.path)
        for issue in result.errors
    ]

    return ValidateOutput(
        valid=result.valid,
        total_checked=result.total_checked,
        warnings=result.warnings,
        errors=errors,
        success=result.valid,
    )


def run(
    inp: FlattenInput | ValidateInput,
    *,
    rules: RulesPort | None = None,
) -> FlattenOutput | ValidateOutput:
    """
    Main entry point for the tokens component.

    Dispatches to appropriate handler based on input type.
    """
    if isinstance(inp, FlattenInput):
        return run_flatten(inp, rules=rules)
    elif isinstance(inp, ValidateInput):
        return run_validate(inp, rules=rules)
    else:
        raise ValueError(f"Unknown input type: {type(inp)}")

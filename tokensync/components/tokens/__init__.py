"""
Tokens component - DTCG token document flattening, summary, display
and document building.
"""

from ._impl import (
    DEFAULT_BUILD_CONFIG,
    TYPE_SCALE_RATIOS,
    TYPE_STEPS,
    DocumentBuildConfig,
    DocumentConfig,
    DocumentIssue,
    DocumentValidation,
    FlatToken,
    RadiusConfig,
    ShadowSpec,
    SpacingConfig,
    TokenKind,
    TokenSummary,
    TypographyConfig,
    build_color_document,
    build_token_document,
    flatten,
    format_value,
    is_token,
    summarize,
    token_node,
    type_scale,
    validate_document,
)
from .component import build_config, run, run_flatten, run_validate
from .models import (
    FlattenInput,
    FlattenOutput,
    TokenValidationError,
    ValidateInput,
    ValidateOutput,
)
from .ports import RulesPort, TokenDocumentSourcePort

__all__ = [
    # Entry points
    "run",
    "run_flatten",
    "run_validate",
    "build_config",
    # Input models
    "FlattenInput",
    "ValidateInput",
    # Output models
    "FlattenOutput",
    "TokenValidationError",
    "ValidateOutput",
    # Ports
    "RulesPort",
    "TokenDocumentSourcePort",
    # _impl re-exports
    "DEFAULT_BUILD_CONFIG",
    "TYPE_SCALE_RATIOS",
    "TYPE_STEPS",
    "DocumentBuildConfig",
    "DocumentConfig",
    "DocumentIssue",
    "DocumentValidation",
    "FlatToken",
    "RadiusConfig",
    "ShadowSpec",
    "SpacingConfig",
    "TokenKind",
    "TokenSummary",
    "TypographyConfig",
    "build_color_document",
    "build_token_document",
    "flatten",
    "format_value",
    "is_token",
    "summarize",
    "token_node",
    "type_scale",
    "validate_document",
]

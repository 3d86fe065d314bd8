"""
Token document model - flattening, summary and display of DTCG documents.

A token document is a nested mapping. A node carrying both "$type" and
"$value" is a token; any other mapping is a group. Keys starting with the
reserved prefix and the "metadata" key are never walked.

Key behaviors:
- flatten() is a depth-first, pre-order walk; output order is traversal order
- Root-level tokens get the "(root)" group
- Absent documents flatten to an empty list
- Unknown token kinds are carried through and rendered with a JSON fallback
- build_token_document() assembles color, typography, spacing, radius and shadow
  sections that pass validate_document
"""

from __future__ import annotations

import json
import logging
import math
import re
from collections.abc import Callable, Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

logger = logging.getLogger(__name__)

# --- Types ---


class TokenKind(str, Enum):
    """Token kinds understood by the document model."""

    COLOR = "color"
    DIMENSION = "dimension"
    STRING = "string"
    BOOLEAN = "boolean"
    TYPOGRAPHY = "typography"
    SHADOW = "shadow"


@dataclass(frozen=True)
class FlatToken:
    """A single token addressed by its dot-delimited path."""

    path: str
    group: str
    name: str
    kind: TokenKind | str
    value: Any
    description: str | None = None
    extensions: dict[str, Any] | None = None


@dataclass(frozen=True)
class TokenSummary:
    """Summary statistics for a flat token list."""

    total: int
    by_kind: dict[str, int]
    groups: tuple[str, ...]


@dataclass(frozen=True)
class DocumentIssue:
    """A validation error or warning at a token path."""

    path: str
    message: str


@dataclass(frozen=True)
class DocumentValidation:
    """Result of validating a token document."""

    valid: bool
    errors: tuple[DocumentIssue, ...] = ()
    warnings: tuple[DocumentIssue, ...] = ()
    total_checked: int = 0


@dataclass(frozen=True)
class DocumentConfig:
    """Document walking configuration from rules."""

    reserved_prefix: str = "$"
    skip_keys: frozenset[str] = field(default_factory=lambda: frozenset({"metadata"}))
    root_group: str = "(root)"


DEFAULT_CONFIG = DocumentConfig()

TYPE_KEY = "$type"
VALUE_KEY = "$value"
DESCRIPTION_KEY = "$description"
EXTENSIONS_KEY = "$extensions"

EMPTY_VALUE = "—"

DIMENSION_PATTERN = re.compile(r"^\d+(\.\d+)?(px|rem|em|%)?$")


# --- Helpers ---


def is_token(node: object) -> bool:
    """A node is a token when it carries both a kind and a value marker."""
    return isinstance(node, Mapping) and TYPE_KEY in node and VALUE_KEY in node


def _coerce_kind(raw: object) -> TokenKind | str:
    try:
        return TokenKind(raw)
    except ValueError:
        return str(raw)


def _skip(key: str, config: DocumentConfig) -> bool:
    return key in config.skip_keys or key.startswith(config.reserved_prefix)


def _walk_leaves(
    document: Mapping[str, Any],
    config: DocumentConfig,
    is_leaf: Callable[[Mapping[str, Any]], bool],
) -> Iterator[tuple[list[str], str, Mapping[str, Any]]]:
    """
    Yield (ancestor segments, key, node) for every leaf in pre-order.

    Mappings that are not leaves are descended into. Uses an explicit stack
    of item iterators, so nesting depth is bounded by memory only. The
    yielded segment list is shared and only valid until the next step.
    """
    segments: list[str] = []
    frames: list[Iterator[tuple[Any, Any]]] = [iter(document.items())]

    while frames:
        entry = next(frames[-1], None)
        if entry is None:
            frames.pop()
            if segments:
                segments.pop()
            continue

        key, value = str(entry[0]), entry[1]
        if _skip(key, config) or not isinstance(value, Mapping):
            continue

        if is_leaf(value):
            yield segments, key, value
        else:
            segments.append(key)
            frames.append(iter(value.items()))


# --- Flatten ---


def flatten(
    document: Mapping[str, Any] | None,
    config: DocumentConfig = DEFAULT_CONFIG,
) -> list[FlatToken]:
    """
    Flatten a nested token document into a list of tokens.

    Args:
        document: Nested DTCG token document, or None
        config: Walk configuration (reserved prefix, skipped keys, root group)

    Returns:
        Tokens in depth-first, pre-order traversal order
    """
    tokens: list[FlatToken] = []
    if not document:
        return tokens

    for segments, key, node in _walk_leaves(document, config, is_token):
        group = ".".join(segments) if segments else config.root_group
        tokens.append(
            FlatToken(
                path=f"{group}.{key}" if segments else key,
                group=group,
                name=key,
                kind=_coerce_kind(node[TYPE_KEY]),
                value=node[VALUE_KEY],
                description=node.get(DESCRIPTION_KEY),
                extensions=node.get(EXTENSIONS_KEY),
            )
        )

    logger.debug("Flattened document into %d tokens", len(tokens))
    return tokens


def summarize(tokens: Iterable[FlatToken]) -> TokenSummary:
    """Count tokens in total and per kind, and collect the sorted groups."""
    by_kind: dict[str, int] = {}
    groups: set[str] = set()
    total = 0

    for token in tokens:
        kind = token.kind.value if isinstance(token.kind, TokenKind) else token.kind
        by_kind[kind] = by_kind.get(kind, 0) + 1
        groups.add(token.group)
        total += 1

    return TokenSummary(total=total, by_kind=by_kind, groups=tuple(sorted(groups)))


# --- Display ---


def _json_fallback(value: Any) -> str:
    return json.dumps(value, sort_keys=True, default=str)


def format_value(kind: TokenKind | str, value: Any) -> str:
    """
    Render a token value as a display string.

    Args:
        kind: Token kind; unrecognised kinds use a JSON rendering
        value: Raw token value

    Returns:
        Display string ("—" for a missing value)
    """
    if value is None:
        return EMPTY_VALUE

    match _coerce_kind(kind):
        case TokenKind.COLOR | TokenKind.DIMENSION | TokenKind.STRING:
            return str(value)
        case TokenKind.BOOLEAN:
            return "true" if value else "false"
        case TokenKind.TYPOGRAPHY if isinstance(value, Mapping):
            return f"{value.get('fontFamily')} {value.get('fontWeight')} {value.get('fontSize')}"
        case TokenKind.SHADOW if isinstance(value, Mapping):
            return (
                f"{value.get('offsetX')} {value.get('offsetY')} "
                f"{value.get('blur')} {value.get('color')}"
            )
        case _:
            return _json_fallback(value)


# --- Validation ---


def _value_shape_errors(kind: TokenKind, value: Any) -> list[str]:
    errors: list[str] = []

    match kind:
        case TokenKind.COLOR:
            if not isinstance(value, str):
                errors.append(f"Color value must be a string, got {type(value).__name__}")
            elif not value.startswith(("#", "rgb")):
                errors.append(f'Color value should start with "#" or "rgb", got "{value}"')
        case TokenKind.DIMENSION:
            if isinstance(value, str):
                if not DIMENSION_PATTERN.match(value):
                    errors.append(
                        "Dimension value should be a number with unit "
                        f'(px/rem/em/%), got "{value}"'
                    )
            elif isinstance(value, bool) or not isinstance(value, int | float):
                errors.append(
                    f"Dimension value must be a string or number, got {type(value).__name__}"
                )
        case TokenKind.STRING:
            if not isinstance(value, str):
                errors.append(f"String value must be a string, got {type(value).__name__}")
        case TokenKind.BOOLEAN:
            if not isinstance(value, bool):
                errors.append(f"Boolean value must be a boolean, got {type(value).__name__}")
        case TokenKind.TYPOGRAPHY:
            if not isinstance(value, Mapping):
                errors.append("Typography value must be an object")
            else:
                if not value.get("fontFamily"):
                    errors.append("Typography missing fontFamily")
                if not value.get("fontSize"):
                    errors.append("Typography missing fontSize")
        case TokenKind.SHADOW:
            if not isinstance(value, Mapping):
                errors.append("Shadow value must be an object")
            else:
                if not value.get("color"):
                    errors.append("Shadow missing color")
                if value.get("offsetX") is None:
                    errors.append("Shadow missing offsetX")
                if value.get("offsetY") is None:
                    errors.append("Shadow missing offsetY")

    return errors


def validate_document(
    document: Mapping[str, Any] | None,
    config: DocumentConfig = DEFAULT_CONFIG,
) -> DocumentValidation:
    """
    Check a token document against the DTCG token rules.

    Errors: a node with only one of $type/$value, an unknown $type, or a
    value whose shape does not match its kind. Warnings: missing $description.
    """
    errors: list[DocumentIssue] = []
    warnings: list[DocumentIssue] = []
    checked = 0

    if not document:
        return DocumentValidation(valid=True)

    def token_like(node: Mapping[str, Any]) -> bool:
        return TYPE_KEY in node or VALUE_KEY in node

    for segments, key, node in _walk_leaves(document, config, token_like):
        path = ".".join([*segments, key])
        checked += 1

        if TYPE_KEY not in node:
            errors.append(DocumentIssue(path, "Missing required $type field"))
            continue
        if VALUE_KEY not in node:
            errors.append(DocumentIssue(path, "Missing required $value field"))
            continue

        kind = _coerce_kind(node[TYPE_KEY])
        if isinstance(kind, TokenKind):
            errors.extend(
                DocumentIssue(path, msg) for msg in _value_shape_errors(kind, node[VALUE_KEY])
            )
        else:
            expected = ", ".join(k.value for k in TokenKind)
            errors.append(DocumentIssue(path, f'Invalid $type: "{kind}". Expected: {expected}'))
        if not node.get(DESCRIPTION_KEY):
            warnings.append(DocumentIssue(path, "Missing $description"))

    return DocumentValidation(
        valid=not errors,
        errors=tuple(errors),
        warnings=tuple(warnings),
        total_checked=checked,
    )


# --- Building ---


def token_node(kind: TokenKind, value: Any, description: str | None = None) -> dict[str, Any]:
    """Build a single DTCG token node."""
    node: dict[str, Any] = {TYPE_KEY: kind.value, VALUE_KEY: value}
    if description:
        node[DESCRIPTION_KEY] = description
    return node


SEMANTIC_DESCRIPTIONS = {
    "success": "Success / positive",
    "warning": "Warning / caution",
    "error": "Error / destructive",
    "info": "Informational",
}


def build_color_document(
    scales: Mapping[str, Mapping[str, str]],
    semantic: Mapping[str, str],
    *,
    group: str = "color",
) -> dict[str, Any]:
    """
    Build a DTCG document holding a palette's colors.

    Args:
        scales: Shade scales keyed by role, each keyed by step
        semantic: Semantic colors keyed by role
        group: Top-level group name

    Returns:
        Nested document, e.g. {"color": {"primary": {"50": {...}}, "success": {...}}}
    """
    section: dict[str, Any] = {}
    for role, shades in scales.items():
        section[role] = {step: token_node(TokenKind.COLOR, hex_) for step, hex_ in shades.items()}
    for role, hex_ in semantic.items():
        section[role] = token_node(TokenKind.COLOR, hex_, SEMANTIC_DESCRIPTIONS.get(role))
    return {group: section}


# --- Full Document ---

TYPE_STEPS = ("xs", "sm", "base", "md", "lg", "xl", "2xl", "3xl", "4xl")
BASE_STEP = TYPE_STEPS.index("base")

TYPE_SCALE_RATIOS = {
    "minor-third": 1.2,
    "major-third": 1.25,
    "perfect-fourth": 1.333,
    "augmented-fourth": 1.414,
}

FONT_WEIGHT_NAMES = {
    100: "thin",
    200: "extralight",
    300: "light",
    400: "regular",
    500: "medium",
    600: "semibold",
    700: "bold",
    800: "extrabold",
    900: "black",
}

LINE_HEIGHTS = {
    "none": "1",
    "tight": "1.25",
    "snug": "1.375",
    "normal": "1.5",
    "relaxed": "1.625",
    "loose": "2",
}


@dataclass(frozen=True)
class TypographyConfig:
    """Font families, base size, scale ratio name and weights."""

    body_font: str = "Inter"
    heading_font: str = "Inter"
    base_size: float = 16
    scale: str = "major-third"
    weights: tuple[int, ...] = (400, 500, 600, 700)


@dataclass(frozen=True)
class SpacingConfig:
    """Spacing steps as multiples of a base unit in px."""

    base_unit: float = 4
    scale: tuple[float, ...] = (0.5, 1, 1.5, 2, 3, 4, 6, 8, 12, 16)


@dataclass(frozen=True)
class RadiusConfig:
    """Corner radii in px; full is a literal dimension."""

    none: float = 0
    sm: float = 4
    md: float = 8
    lg: float = 12
    xl: float = 16
    full: str = "9999px"


@dataclass(frozen=True)
class ShadowSpec:
    offset_x: float
    offset_y: float
    blur: float
    color: str
    description: str

    def value(self) -> dict[str, str]:
        return {
            "offsetX": _px(self.offset_x),
            "offsetY": _px(self.offset_y),
            "blur": _px(self.blur),
            "spread": "0px",
            "color": self.color,
        }


DEFAULT_SHADOWS = {
    "sm": ShadowSpec(0, 1, 2, "rgba(0,0,0,0.05)", "Subtle shadow"),
    "md": ShadowSpec(0, 4, 12, "rgba(0,0,0,0.08)", "Medium shadow"),
    "lg": ShadowSpec(0, 12, 32, "rgba(0,0,0,0.1)", "Large shadow"),
    "xl": ShadowSpec(0, 24, 48, "rgba(0,0,0,0.12)", "Extra-large shadow"),
}


@dataclass(frozen=True)
class DocumentBuildConfig:
    """Settings for every non-color section of a built document."""

    typography: TypographyConfig = field(default_factory=TypographyConfig)
    spacing: SpacingConfig = field(default_factory=SpacingConfig)
    radius: RadiusConfig = field(default_factory=RadiusConfig)
    shadows: Mapping[str, ShadowSpec] = field(default_factory=lambda: dict(DEFAULT_SHADOWS))


DEFAULT_BUILD_CONFIG = DocumentBuildConfig()


def _px(value: float) -> str:
    return f"{value:g}px"


def type_scale(base_size: float, scale: str) -> dict[str, str]:
    """
    Font sizes for every type step, rounded to two decimals.

    Raises:
        ValueError: If the scale name is not a known ratio
    """
    try:
        ratio = TYPE_SCALE_RATIOS[scale]
    except KeyError:
        known = ", ".join(TYPE_SCALE_RATIOS)
        raise ValueError(f'Unknown type scale "{scale}". Expected: {known}') from None

    sizes: dict[str, str] = {}
    for i, step in enumerate(TYPE_STEPS):
        size = base_size * ratio ** (i - BASE_STEP)
        sizes[step] = _px(math.floor(size * 100 + 0.5) / 100)
    return sizes


def _typography_section(config: TypographyConfig) -> dict[str, Any]:
    return {
        "family": {
            "body": token_node(TokenKind.STRING, config.body_font, "Body text font"),
            "heading": token_node(TokenKind.STRING, config.heading_font, "Heading font"),
        },
        "size": {
            step: token_node(TokenKind.DIMENSION, size, f"Type scale step {step}")
            for step, size in type_scale(config.base_size, config.scale).items()
        },
        "weight": {
            FONT_WEIGHT_NAMES.get(w, f"w{w}"): token_node(TokenKind.STRING, str(w))
            for w in config.weights
        },
        "line-height": {
            name: token_node(TokenKind.DIMENSION, value) for name, value in LINE_HEIGHTS.items()
        },
    }


def _spacing_section(config: SpacingConfig) -> dict[str, Any]:
    return {
        str(i): token_node(TokenKind.DIMENSION, _px(config.base_unit * multiple))
        for i, multiple in enumerate(config.scale, start=1)
    }


def _radius_section(config: RadiusConfig) -> dict[str, Any]:
    section = {
        name: token_node(TokenKind.DIMENSION, _px(getattr(config, name)))
        for name in ("none", "sm", "md", "lg", "xl")
    }
    section["full"] = token_node(TokenKind.DIMENSION, config.full)
    return section


def build_token_document(
    scales: Mapping[str, Mapping[str, str]],
    semantic: Mapping[str, str],
    config: DocumentBuildConfig = DEFAULT_BUILD_CONFIG,
) -> dict[str, Any]:
    """
    Build a complete DTCG document for a palette.

    Sections are "color", "typography" (family, size, weight, line-height),
    "spacing" (keys "1".."n"), "radius" and "shadow". Shadow values are
    composite objects so the document validates cleanly.

    Raises:
        ValueError: If the typography scale name is unknown
    """
    document = build_color_document(scales, semantic)
    document["typography"] = _typography_section(config.typography)
    document["spacing"] = _spacing_section(config.spacing)
    document["radius"] = _radius_section(config.radius)
    document["shadow"] = {
        name: token_node(TokenKind.SHADOW, shadow.value(), shadow.description)
        for name, shadow in config.shadows.items()
    }
    logger.debug("Built token document with sections %s", ", ".join(document))
    return document

"""
Reconciliation engine - classify a live variable snapshot against flat tokens.

Variables (slash-nested names inside named collections) and tokens
(dot-nested paths) are brought into one canonical key space and every
input is classified into exactly one comparison item.

Key behaviors:
- Match keys are lowercased, trimmed, whitespace-hyphenated and dot-joined
- Values are compared in normalised string form, never as raw typed values
- Without an explicit mode the first mode seen in scan order is used
- Duplicate keys raise DuplicateMatchKey unless the last-wins policy is set
- Items are sorted by (collection, match key)
- No state is held between calls; nothing is merged or written back
- diff_documents() compares two token documents path by path on kind and value
"""

from __future__ import annotations

import json
import logging
import re
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from tokensync.components.tokens import (
    DocumentConfig,
    FlatToken,
    TokenKind,
    flatten,
    format_value,
)

logger = logging.getLogger(__name__)

# --- Errors ---


class DuplicateMatchKey(ValueError):
    """Raised when two inputs of the same side normalise to one match key."""

    def __init__(self, key: str, source: str, first: str, second: str) -> None:
        self.key = key
        self.source = source
        self.first = first
        self.second = second
        super().__init__(
            f"Duplicate {source} match key {key!r}: {first!r} and {second!r}"
        )


# --- Types ---


class VariableKind(str, Enum):
    """Resolved type of a design-tool variable."""

    COLOR = "COLOR"
    FLOAT = "FLOAT"
    STRING = "STRING"
    BOOLEAN = "BOOLEAN"


class ComparisonStatus(str, Enum):
    """Classification of one comparison item."""

    SYNCED = "synced"
    NEEDS_SYNC = "needs-sync"
    VARIABLE_ONLY = "variable-only"
    TOKEN_ONLY = "token-only"


class DuplicatePolicy(str, Enum):
    """What to do when two variables (or tokens) share a match key."""

    ERROR = "error"
    LAST_WINS = "last_wins"


VARIABLE_KIND_TO_TOKEN_KIND: dict[VariableKind, TokenKind] = {
    VariableKind.COLOR: TokenKind.COLOR,
    VariableKind.FLOAT: TokenKind.DIMENSION,
    VariableKind.STRING: TokenKind.STRING,
    VariableKind.BOOLEAN: TokenKind.BOOLEAN,
}

EMPTY_VALUE = "—"


@dataclass(frozen=True)
class Variable:
    """A live design-tool variable."""

    id: str
    name: str  # e.g., "primary/500"
    kind: VariableKind
    collection_name: str
    collection_id: str = ""
    description: str = ""
    scopes: tuple[str, ...] = ()
    values_by_mode: dict[str, Any] = field(default_factory=dict)
    default_value: Any = None
    alias_name: str | None = None


@dataclass(frozen=True)
class TextStyle:
    """A text style carried in the snapshot (not compared)."""

    id: str
    name: str
    description: str = ""
    font_family: str = ""
    font_style: str = ""
    font_size: float = 0
    font_weight: int = 400
    letter_spacing: dict[str, Any] = field(default_factory=dict)
    line_height: dict[str, Any] = field(default_factory=dict)
    paragraph_spacing: float = 0
    text_decoration: str = ""
    text_case: str = ""


@dataclass(frozen=True)
class Effect:
    """One shadow-like effect of an effect style."""

    type: str
    color: str
    offset_x: float = 0
    offset_y: float = 0
    radius: float = 0
    spread: float = 0


@dataclass(frozen=True)
class EffectStyle:
    """An effect style carried in the snapshot (not compared)."""

    id: str
    name: str
    description: str = ""
    effects: tuple[Effect, ...] = ()


@dataclass(frozen=True)
class VariableSnapshot:
    """Point-in-time export of the design tool's variables and styles."""

    variables: tuple[Variable, ...] = ()
    text_styles: tuple[TextStyle, ...] = ()
    effect_styles: tuple[EffectStyle, ...] = ()


@dataclass(frozen=True)
class DisplayValues:
    """Display strings for each side of a comparison item."""

    variable: str | None = None
    token: str | None = None


@dataclass(frozen=True)
class ComparisonItem:
    """One classified entry of the diff."""

    id: str
    variable: Variable | None
    token: FlatToken | None
    match_key: str
    collection: str
    status: ComparisonStatus
    display_values: DisplayValues
    kind: str
    values_by_mode: dict[str, Any] | None = None

    def __post_init__(self) -> None:
        if self.variable is None and self.token is None:
            raise ValueError(f"Comparison item {self.id!r} has neither variable nor token")


@dataclass(frozen=True)
class ComparisonSummary:
    """Item counts per status."""

    total: int = 0
    synced: int = 0
    needs_sync: int = 0
    variable_only: int = 0
    token_only: int = 0

    def counts(self) -> dict[ComparisonStatus, int]:
        return {
            ComparisonStatus.SYNCED: self.synced,
            ComparisonStatus.NEEDS_SYNC: self.needs_sync,
            ComparisonStatus.VARIABLE_ONLY: self.variable_only,
            ComparisonStatus.TOKEN_ONLY: self.token_only,
        }


@dataclass(frozen=True)
class ComparisonResult:
    """Full, sorted comparison of a snapshot against flat tokens."""

    items: tuple[ComparisonItem, ...]
    summary: ComparisonSummary
    collections: tuple[str, ...]
    modes: tuple[str, ...]
    selected_mode: str | None = None


# --- Keys and Values ---

_WHITESPACE = re.compile(r"\s+")


def _normalize_segment(segment: str) -> str:
    return _WHITESPACE.sub("-", segment.strip().lower())


def build_match_key(collection: str, name: str) -> str:
    """
    Build the canonical match key for a collection (or group) and a name.

    "Colors" + "primary/500" and the token path "colors.primary.500" both
    map to "colors.primary.500". Empty segments are dropped.
    """
    segments = (_normalize_segment(s) for s in [collection, *name.split("/")])
    return ".".join(s for s in segments if s)


def token_match_key(token: FlatToken) -> str:
    return token.path.lower()


def normalize_for_comparison(value: Any) -> str:
    """
    Normalise a raw value so that case and representation differences
    do not count as drift.
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return str(int(value)) if value.is_integer() else repr(value)
    return str(value).lower().strip()


def resolve_default_mode(variables: Iterable[Variable]) -> str | None:
    """First mode name seen scanning variables in order, if any."""
    for variable in variables:
        for mode in variable.values_by_mode:
            return mode
    return None


def variable_value(variable: Variable, mode: str | None) -> Any:
    """Value of a variable in a mode, falling back to its default value."""
    if mode is not None and mode in variable.values_by_mode:
        return variable.values_by_mode[mode]
    return variable.default_value


def format_variable_value(variable: Variable, mode: str | None) -> str:
    """Display string for a variable's value in a mode."""
    if variable.alias_name:
        return f"→ {variable.alias_name}"

    value = variable_value(variable, mode)
    if value is None:
        return EMPTY_VALUE
    if variable.kind is VariableKind.BOOLEAN:
        return "true" if value else "false"
    return str(value)


def variable_token_kind(variable: Variable) -> str:
    return VARIABLE_KIND_TO_TOKEN_KIND[variable.kind].value


def _token_kind(token: FlatToken) -> str:
    return token.kind.value if isinstance(token.kind, TokenKind) else str(token.kind)


# --- Lookup Maps ---


def _index_variables(
    variables: Sequence[Variable],
    policy: DuplicatePolicy,
) -> dict[str, Variable]:
    index: dict[str, Variable] = {}
    for variable in variables:
        key = build_match_key(variable.collection_name, variable.name)
        previous = index.get(key)
        if previous is not None:
            if policy is DuplicatePolicy.ERROR:
                raise DuplicateMatchKey(key, "variable", previous.name, variable.name)
            logger.warning(
                "Variable %r replaces %r under match key %r", variable.name, previous.name, key
            )
        index[key] = variable
    return index


def _index_tokens(
    tokens: Sequence[FlatToken],
    policy: DuplicatePolicy,
) -> dict[str, FlatToken]:
    index: dict[str, FlatToken] = {}
    for token in tokens:
        key = token_match_key(token)
        previous = index.get(key)
        if previous is not None:
            if policy is DuplicatePolicy.ERROR:
                raise DuplicateMatchKey(key, "token", previous.path, token.path)
            logger.warning(
                "Token %r replaces %r under match key %r", token.path, previous.path, key
            )
        index[key] = token
    return index


# --- Compare ---


def summarize_items(items: Iterable[ComparisonItem]) -> ComparisonSummary:
    counts = {status: 0 for status in ComparisonStatus}
    total = 0
    for item in items:
        counts[item.status] += 1
        total += 1

    return ComparisonSummary(
        total=total,
        synced=counts[ComparisonStatus.SYNCED],
        needs_sync=counts[ComparisonStatus.NEEDS_SYNC],
        variable_only=counts[ComparisonStatus.VARIABLE_ONLY],
        token_only=counts[ComparisonStatus.TOKEN_ONLY],
    )


def compare(
    snapshot: VariableSnapshot | None,
    tokens: Sequence[FlatToken] | None,
    selected_mode: str | None = None,
    *,
    duplicates: DuplicatePolicy = DuplicatePolicy.ERROR,
) -> ComparisonResult:
    """
    Classify every variable and token into one comparison item.

    Args:
        snapshot: Live variable snapshot, or None for no variables
        tokens: Flat tokens of the persisted document
        selected_mode: Mode to compare; defaults to the first mode in scan order
        duplicates: Policy for inputs that share a match key

    Returns:
        ComparisonResult with items sorted by (collection, match key)

    Raises:
        DuplicateMatchKey: Two variables or two tokens share a key and the
            policy is DuplicatePolicy.ERROR.
    """
    variables = snapshot.variables if snapshot is not None else ()
    tokens = tokens or ()

    mode = selected_mode if selected_mode is not None else resolve_default_mode(variables)

    variable_index = _index_variables(variables, duplicates)
    token_index = _index_tokens(tokens, duplicates)

    collections: set[str] = set()
    modes: set[str] = set()
    for variable in variables:
        collections.add(variable.collection_name)
        modes.update(variable.values_by_mode)
    for token in tokens:
        collections.add(token.group)

    items: list[ComparisonItem] = []
    matched: set[str] = set()

    for key, variable in variable_index.items():
        token = token_index.get(key)

        if token is None:
            status = ComparisonStatus.VARIABLE_ONLY
            item_id = f"variable-{key}"
            token_display = None
        else:
            matched.add(key)
            same = normalize_for_comparison(variable_value(variable, mode)) == (
                normalize_for_comparison(token.value)
            )
            status = ComparisonStatus.SYNCED if same else ComparisonStatus.NEEDS_SYNC
            item_id = f"match-{key}"
            token_display = format_value(token.kind, token.value)

        items.append(
            ComparisonItem(
                id=item_id,
                variable=variable,
                token=token,
                match_key=key,
                collection=variable.collection_name,
                status=status,
                display_values=DisplayValues(
                    variable=format_variable_value(variable, mode),
                    token=token_display,
                ),
                kind=variable_token_kind(variable),
                values_by_mode=variable.values_by_mode,
            )
        )

    for key, token in token_index.items():
        if key in matched:
            continue
        items.append(
            ComparisonItem(
                id=f"token-{key}",
                variable=None,
                token=token,
                match_key=key,
                collection=token.group,
                status=ComparisonStatus.TOKEN_ONLY,
                display_values=DisplayValues(token=format_value(token.kind, token.value)),
                kind=_token_kind(token),
            )
        )

    items.sort(key=lambda i: (i.collection, i.match_key))
    summary = summarize_items(items)

    logger.debug(
        "Compared %d variables with %d tokens in mode %r: %d synced, %d needs-sync",
        len(variables),
        len(tokens),
        mode,
        summary.synced,
        summary.needs_sync,
    )

    return ComparisonResult(
        items=tuple(items),
        summary=summary,
        collections=tuple(sorted(collections)),
        modes=tuple(sorted(modes)),
        selected_mode=mode,
    )


# --- Document Diff ---


class DiffChange(str, Enum):
    """How a token path differs between a local and a remote document."""

    ADDED = "added"
    REMOVED = "removed"
    MODIFIED = "modified"
    UNCHANGED = "unchanged"


@dataclass(frozen=True)
class DiffEntry:
    """One token path of a document diff."""

    path: str
    change: DiffChange
    local: FlatToken | None
    remote: FlatToken | None


@dataclass(frozen=True)
class DiffSummary:
    """Entry counts per change type."""

    total: int = 0
    added: int = 0
    removed: int = 0
    modified: int = 0
    unchanged: int = 0


@dataclass(frozen=True)
class DocumentDiff:
    """Sorted path-by-path diff of two token documents."""

    entries: tuple[DiffEntry, ...]
    summary: DiffSummary


def _canonical_value(value: Any) -> str:
    return json.dumps(value, sort_keys=True, default=str)


def tokens_equal(a: FlatToken, b: FlatToken) -> bool:
    """Same kind and same value; descriptions and extensions are ignored."""
    return _token_kind(a) == _token_kind(b) and (
        _canonical_value(a.value) == _canonical_value(b.value)
    )


def diff_documents(
    local: Mapping[str, Any] | None,
    remote: Mapping[str, Any] | None,
    config: DocumentConfig | None = None,
) -> DocumentDiff:
    """
    Diff a local token document against a remote one.

    A path only in local is "added", only in remote is "removed". Paths in
    both are "unchanged" when kind and value match, otherwise "modified".
    Paths are compared exactly, without case folding.

    Args:
        local: Document being proposed, or None
        remote: Document it is compared against, or None
        config: Walk configuration shared by both documents

    Returns:
        DocumentDiff with entries sorted by path
    """
    config = config or DocumentConfig()
    local_tokens = {t.path: t for t in flatten(local, config)}
    remote_tokens = {t.path: t for t in flatten(remote, config)}

    entries: list[DiffEntry] = []
    counts = {change: 0 for change in DiffChange}

    for path in sorted(local_tokens.keys() | remote_tokens.keys()):
        mine = local_tokens.get(path)
        theirs = remote_tokens.get(path)

        if theirs is None:
            change = DiffChange.ADDED
        elif mine is None:
            change = DiffChange.REMOVED
        elif tokens_equal(mine, theirs):
            change = DiffChange.UNCHANGED
        else:
            change = DiffChange.MODIFIED

        counts[change] += 1
        entries.append(DiffEntry(path=path, change=change, local=mine, remote=theirs))

    summary = DiffSummary(
        total=len(entries),
        added=counts[DiffChange.ADDED],
        removed=counts[DiffChange.REMOVED],
        modified=counts[DiffChange.MODIFIED],
        unchanged=counts[DiffChange.UNCHANGED],
    )
    logger.debug("Diffed documents: %s", summary)
    return DocumentDiff(entries=tuple(entries), summary=summary)

"""
Tests for the reconciliation engine.

Covers:
- Match key construction across slash and dot namespaces
- Value normalisation
- Status classification and the total-partition property
- Mode selection (explicit, default, fallback to default value)
- Duplicate key policies
- Ordering, summary and idempotence
- Document diffs between a local and a remote token document
"""

from __future__ import annotations

from dataclasses import replace

import pytest

from tokensync.components.reconcile import (
    ComparisonItem,
    ComparisonStatus,
    DiffChange,
    DiffSummary,
    DisplayValues,
    DuplicateMatchKey,
    DuplicatePolicy,
    VariableKind,
    VariableSnapshot,
    build_match_key,
    compare,
    diff_documents,
    normalize_for_comparison,
    resolve_default_mode,
    tokens_equal,
)
from tokensync.components.tokens import DocumentConfig, FlatToken, TokenKind, flatten


def _token(path: str, value: object = "#6366f1", kind: TokenKind = TokenKind.COLOR) -> FlatToken:
    group, _, name = path.rpartition(".")
    return FlatToken(path=path, group=group or "(root)", name=name, kind=kind, value=value)


# --- Match Keys ---


class TestBuildMatchKey:
    """Canonical match keys."""

    def test_collection_becomes_first_segment(self) -> None:
        assert build_match_key("Colors", "primary/500") == "colors.primary.500"

    def test_trims_and_hyphenates_whitespace(self) -> None:
        assert build_match_key(" Brand Colors ", "Primary  Blue / 500") == (
            "brand-colors.primary-blue.500"
        )

    def test_drops_empty_segments(self) -> None:
        assert build_match_key("Colors", "/primary//500/") == "colors.primary.500"

    def test_matches_token_path(self) -> None:
        assert build_match_key("Colors", "primary/500") == "colors.primary.500".lower()

    def test_empty_collection(self) -> None:
        assert build_match_key("", "spacing/sm") == "spacing.sm"


# --- Normalisation ---


class TestNormalizeForComparison:
    """Value normalisation."""

    @pytest.mark.parametrize(
        "value, expected",
        [
            (None, ""),
            (True, "true"),
            (False, "false"),
            (16, "16"),
            (16.0, "16"),
            (0.5, "0.5"),
            ("#6366F1", "#6366f1"),
            ("  Inter  ", "inter"),
            ("16px", "16px"),
        ],
    )
    def test_normalises(self, value: object, expected: str) -> None:
        assert normalize_for_comparison(value) == expected

    def test_boolean_matches_string(self) -> None:
        assert normalize_for_comparison(True) == normalize_for_comparison("TRUE")

    def test_number_matches_string(self) -> None:
        assert normalize_for_comparison(8) == normalize_for_comparison("8")


# --- Classification ---


class TestCompareScenarios:
    """Status classification."""

    def test_synced_case_insensitive(self, make_variable, make_snapshot) -> None:
        snapshot = make_snapshot(make_variable("primary/500", value="#6366F1"))
        result = compare(snapshot, [_token("colors.primary.500", "#6366f1")])

        (item,) = result.items
        assert item.match_key == "colors.primary.500"
        assert item.status is ComparisonStatus.SYNCED
        assert item.id == "match-colors.primary.500"

    def test_needs_sync(self, make_variable, make_snapshot) -> None:
        snapshot = make_snapshot(make_variable("primary/500", value="#6366F1"))
        result = compare(snapshot, [_token("colors.primary.500", "#111111")])

        (item,) = result.items
        assert item.status is ComparisonStatus.NEEDS_SYNC
        assert item.display_values == DisplayValues(variable="#6366F1", token="#111111")

    def test_variable_only_and_token_only(self, make_variable, make_snapshot) -> None:
        snapshot = make_snapshot(make_variable("primary/700", value="#4338ca"))
        result = compare(snapshot, [_token("colors.primary.500")])

        statuses = {item.match_key: item.status for item in result.items}
        assert statuses == {
            "colors.primary.700": ComparisonStatus.VARIABLE_ONLY,
            "colors.primary.500": ComparisonStatus.TOKEN_ONLY,
        }
        by_status = {item.status: item for item in result.items}
        assert by_status[ComparisonStatus.VARIABLE_ONLY].token is None
        assert by_status[ComparisonStatus.VARIABLE_ONLY].id == "variable-colors.primary.700"
        assert by_status[ComparisonStatus.TOKEN_ONLY].variable is None
        assert by_status[ComparisonStatus.TOKEN_ONLY].id == "token-colors.primary.500"

    def test_token_path_matched_case_insensitively(self, make_variable, make_snapshot) -> None:
        snapshot = make_snapshot(make_variable("Primary/500"))
        result = compare(snapshot, [_token("Colors.Primary.500")])
        assert result.items[0].status is ComparisonStatus.SYNCED

    def test_float_variable_against_dimension(self, make_variable, make_snapshot) -> None:
        variable = make_variable("sm", collection="Spacing", value=8, kind=VariableKind.FLOAT)
        result = compare(
            make_snapshot(variable),
            [_token("spacing.sm", "8", TokenKind.DIMENSION)],
        )
        (item,) = result.items
        assert item.status is ComparisonStatus.SYNCED
        assert item.kind == "dimension"

    def test_boolean_variable(self, make_variable, make_snapshot) -> None:
        variable = make_variable(
            "enabled", collection="Flags", value=False, kind=VariableKind.BOOLEAN
        )
        result = compare(
            make_snapshot(variable),
            [_token("flags.enabled", False, TokenKind.BOOLEAN)],
        )
        (item,) = result.items
        assert item.status is ComparisonStatus.SYNCED
        assert item.display_values == DisplayValues(variable="false", token="false")

    def test_alias_display(self, make_variable, make_snapshot) -> None:
        variable = make_variable("brand", alias_name="primary/500")
        result = compare(make_snapshot(variable), [])
        assert result.items[0].display_values.variable == "→ primary/500"

    def test_token_only_kind_from_token(self) -> None:
        result = compare(None, [_token("spacing.sm", "8px", TokenKind.DIMENSION)])
        (item,) = result.items
        assert item.kind == "dimension"
        assert item.collection == "spacing"
        assert item.values_by_mode is None


# --- Modes ---


class TestModes:
    """Mode selection."""

    def test_selected_mode_used(self, make_variable, make_snapshot) -> None:
        variable = make_variable(
            "bg", value="#ffffff", modes={"Light": "#ffffff", "Dark": "#000000"}
        )
        tokens = [_token("colors.bg", "#000000")]

        assert compare(make_snapshot(variable), tokens, "Dark").items[0].status is (
            ComparisonStatus.SYNCED
        )
        assert compare(make_snapshot(variable), tokens, "Light").items[0].status is (
            ComparisonStatus.NEEDS_SYNC
        )

    def test_default_mode_is_first_seen(self, make_variable, make_snapshot) -> None:
        first = make_variable("bg", value="#ffffff", modes={"Dark": "#000000", "Light": "#fff"})
        second = make_variable("fg", value="#000000", modes={"Light": "#000", "Dark": "#fff"})
        snapshot = make_snapshot(first, second)

        assert resolve_default_mode(snapshot.variables) == "Dark"

        result = compare(snapshot, [_token("colors.bg", "#000000")])
        assert result.selected_mode == "Dark"
        assert result.items[0].status is ComparisonStatus.SYNCED

    def test_unknown_mode_falls_back_to_default_value(
        self, make_variable, make_snapshot
    ) -> None:
        variable = make_variable("bg", value="#ffffff", modes={"Light": "#eeeeee"})
        result = compare(make_snapshot(variable), [_token("colors.bg", "#ffffff")], "Brand")
        assert result.items[0].status is ComparisonStatus.SYNCED
        assert result.selected_mode == "Brand"

    def test_no_modes(self, make_variable, make_snapshot) -> None:
        variable = make_variable("bg", value="#ffffff", modes={})
        result = compare(make_snapshot(variable), [_token("colors.bg", "#FFFFFF")])
        assert result.selected_mode is None
        assert result.items[0].status is ComparisonStatus.SYNCED

    def test_modes_sorted_distinct(self, make_variable, make_snapshot) -> None:
        snapshot = make_snapshot(
            make_variable("a", modes={"Light": 1, "Dark": 2}),
            make_variable("b", modes={"Dark": 1, "Brand": 2}),
        )
        assert compare(snapshot, []).modes == ("Brand", "Dark", "Light")


# --- Partition, Ordering, Idempotence ---


class TestResultShape:
    """Whole-result properties."""

    @pytest.fixture
    def mixed(self, make_variable, make_snapshot, token_document):
        snapshot = make_snapshot(
            make_variable("primary/500", value="#6366F1"),
            make_variable("primary/600", value="#000000"),
            make_variable("danger", value="#dc2626"),
            make_variable("md", collection="Spacing", value=16, kind=VariableKind.FLOAT),
            make_variable("lg", collection="Spacing", value=24, kind=VariableKind.FLOAT),
        )
        return snapshot, flatten(token_document)

    def test_total_partition(self, mixed) -> None:
        snapshot, tokens = mixed
        result = compare(snapshot, tokens)

        variable_ids = [i.variable.id for i in result.items if i.variable is not None]
        token_paths = [i.token.path for i in result.items if i.token is not None]

        assert sorted(variable_ids) == sorted(v.id for v in snapshot.variables)
        assert sorted(token_paths) == sorted(t.path for t in tokens)

    def test_summary_sums_to_items(self, mixed) -> None:
        result = compare(*mixed)
        summary = result.summary
        assert summary.total == len(result.items)
        assert sum(summary.counts().values()) == len(result.items)
        assert summary.synced == 1
        assert summary.needs_sync == 2
        assert summary.variable_only == 2
        assert summary.token_only == 4

    def test_sorted_by_collection_then_key(self, mixed) -> None:
        items = compare(*mixed).items
        keys = [(i.collection, i.match_key) for i in items]
        assert keys == sorted(keys)

    def test_idempotent(self, mixed) -> None:
        assert compare(*mixed) == compare(*mixed)

    def test_collections(self, mixed) -> None:
        assert compare(*mixed).collections == (
            "(root)",
            "Colors",
            "Spacing",
            "colors",
            "colors.primary",
            "spacing",
            "typography",
        )

    def test_none_snapshot_and_tokens(self) -> None:
        result = compare(None, [])
        assert result.items == ()
        assert result.summary.total == 0
        assert result.collections == ()
        assert result.modes == ()

    def test_empty_snapshot(self, token_document) -> None:
        result = compare(VariableSnapshot(), flatten(token_document))
        assert all(i.status is ComparisonStatus.TOKEN_ONLY for i in result.items)

    def test_item_requires_a_side(self) -> None:
        with pytest.raises(ValueError):
            ComparisonItem(
                id="x",
                variable=None,
                token=None,
                match_key="x",
                collection="x",
                status=ComparisonStatus.SYNCED,
                display_values=DisplayValues(),
                kind="color",
            )


# --- Duplicates ---


class TestDuplicates:
    """Duplicate match key policies."""

    def test_duplicate_variables_raise(self, make_variable, make_snapshot) -> None:
        a = make_variable("Primary Blue/500")
        b = replace(make_variable("primary-blue/500"), id="other")

        with pytest.raises(DuplicateMatchKey) as exc_info:
            compare(make_snapshot(a, b), [])
        assert exc_info.value.key == "colors.primary-blue.500"
        assert exc_info.value.source == "variable"

    def test_duplicate_tokens_raise(self) -> None:
        with pytest.raises(DuplicateMatchKey) as exc_info:
            compare(None, [_token("colors.a"), _token("Colors.A")])
        assert exc_info.value.source == "token"

    def test_last_wins(self, make_variable, make_snapshot, caplog) -> None:
        a = make_variable("primary/500", value="#111111")
        b = replace(make_variable("Primary/500", value="#6366f1"), id="later")

        result = compare(
            make_snapshot(a, b),
            [_token("colors.primary.500", "#6366f1")],
            duplicates=DuplicatePolicy.LAST_WINS,
        )

        (item,) = result.items
        assert item.variable is not None
        assert item.variable.id == "later"
        assert item.status is ComparisonStatus.SYNCED
        assert "replaces" in caplog.text


# --- Document Diff ---


def _node(value: object, kind: str = "color", description: str | None = None) -> dict:
    node = {"$type": kind, "$value": value}
    if description:
        node["$description"] = description
    return node


class TestDiffDocuments:
    """Path-by-path diff of two token documents."""

    def test_classifies_every_path(self) -> None:
        local = {
            "color": {
                "brand": _node("#6366f1"),
                "surface": _node("#ffffff"),
                "new": _node("#14b8a6"),
            }
        }
        remote = {
            "color": {
                "brand": _node("#4338ca"),
                "surface": _node("#ffffff"),
                "old": _node("#000000"),
            }
        }

        diff = diff_documents(local, remote)

        changes = {e.path: e.change for e in diff.entries}
        assert changes == {
            "color.brand": DiffChange.MODIFIED,
            "color.new": DiffChange.ADDED,
            "color.old": DiffChange.REMOVED,
            "color.surface": DiffChange.UNCHANGED,
        }
        assert diff.summary == DiffSummary(
            total=4, added=1, removed=1, modified=1, unchanged=1
        )

    def test_entries_sorted_by_path(self) -> None:
        local = {"z": _node("#000000"), "a": {"m": _node("#111111"), "b": _node("#222222")}}
        diff = diff_documents(local, None)
        assert [e.path for e in diff.entries] == ["a.b", "a.m", "z"]

    def test_added_and_removed_carry_one_side(self) -> None:
        diff = diff_documents({"a": _node("#000000")}, {"b": _node("#ffffff")})
        added, removed = diff.entries

        assert added.change is DiffChange.ADDED
        assert added.local is not None and added.remote is None
        assert removed.change is DiffChange.REMOVED
        assert removed.local is None and removed.remote is not None
        assert removed.remote.value == "#ffffff"

    def test_description_changes_ignored(self) -> None:
        local = {"a": _node("#000000", description="Ink")}
        remote = {"a": _node("#000000", description="Text color")}
        (entry,) = diff_documents(local, remote).entries
        assert entry.change is DiffChange.UNCHANGED

    def test_kind_change_is_modified(self) -> None:
        local = {"gap": _node("8px", kind="dimension")}
        remote = {"gap": _node("8px", kind="string")}
        (entry,) = diff_documents(local, remote).entries
        assert entry.change is DiffChange.MODIFIED

    def test_composite_values_ignore_key_order(self) -> None:
        local = {"body": _node({"fontFamily": "Inter", "fontSize": "16px"}, "typography")}
        remote = {"body": _node({"fontSize": "16px", "fontFamily": "Inter"}, "typography")}
        (entry,) = diff_documents(local, remote).entries
        assert entry.change is DiffChange.UNCHANGED

    def test_composite_value_change_is_modified(self) -> None:
        local = {"body": _node({"fontFamily": "Inter", "fontSize": "16px"}, "typography")}
        remote = {"body": _node({"fontFamily": "Inter", "fontSize": "18px"}, "typography")}
        (entry,) = diff_documents(local, remote).entries
        assert entry.change is DiffChange.MODIFIED

    def test_number_and_string_differ(self) -> None:
        (entry,) = diff_documents(
            {"gap": _node(8, "dimension")}, {"gap": _node("8", "dimension")}
        ).entries
        assert entry.change is DiffChange.MODIFIED

    def test_paths_are_case_sensitive(self) -> None:
        diff = diff_documents({"Brand": _node("#000000")}, {"brand": _node("#000000")})
        assert diff.summary.added == 1
        assert diff.summary.removed == 1

    def test_absent_documents(self) -> None:
        diff = diff_documents(None, None)
        assert diff.entries == ()
        assert diff.summary == DiffSummary()

        only_remote = diff_documents(None, {"a": _node("#000000")})
        assert only_remote.summary.removed == 1

    def test_skipped_keys_follow_config(self) -> None:
        local = {"meta": {"a": _node("#000000")}, "b": _node("#ffffff")}
        config = DocumentConfig(skip_keys=frozenset({"meta"}))

        diff = diff_documents(local, {}, config)
        assert [e.path for e in diff.entries] == ["b"]

    def test_summary_partitions_entries(self, token_document: dict) -> None:
        remote = {"colors": token_document["colors"], "extra": _node("#123456")}
        summary = diff_documents(token_document, remote).summary
        assert summary.total == (
            summary.added + summary.removed + summary.modified + summary.unchanged
        )
        assert summary.total == 8

    def test_tokens_equal(self) -> None:
        a = _token("colors.a", "#6366f1")
        assert tokens_equal(a, replace(a, description="Brand"))
        assert not tokens_equal(a, replace(a, value="#6366F1"))
        assert not tokens_equal(a, replace(a, kind="custom"))

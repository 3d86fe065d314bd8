"""
Rules adapter - exposes validated Rules through the component rules ports.
"""

from __future__ import annotations

from tokensync.rules.models import Rules


class RulesAdapter:
    """Implements the tokens, palette and reconcile RulesPort protocols."""

    def __init__(self, rules: Rules) -> None:
        self._rules = rules

    @property
    def rules(self) -> Rules:
        return self._rules

    # tokens

    def get_reserved_prefix(self) -> str:
        return self._rules.tokens.reserved_prefix

    def get_skip_keys(self) -> list[str]:
        return list(self._rules.tokens.skip_keys)

    def get_root_group(self) -> str:
        return self._rules.tokens.root_group

    # palette

    def get_default_harmony(self) -> str:
        return self._rules.palette.default_harmony

    def get_semantic_colors(self) -> dict[str, str]:
        return self._rules.palette.semantic.model_dump()

    # reconcile

    def get_duplicate_policy(self) -> str:
        return self._rules.reconcile.duplicate_keys

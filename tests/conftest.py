from pathlib import Path

import pytest

from tokensync.adapters.rules import RulesAdapter
from tokensync.components.reconcile import Variable, VariableKind, VariableSnapshot
from tokensync.rules.loader import load_rules
from tokensync.rules.models import Rules

PROJECT_ROOT = Path(__file__).parent.parent


@pytest.fixture
def project_root() -> Path:
    return PROJECT_ROOT


@pytest.fixture
def rules() -> Rules:
    """Load the REAL rules file from the project root."""
    rules_path = PROJECT_ROOT / "rules.yaml"
    if not rules_path.exists():
        raise FileNotFoundError(f"Rules not found at {rules_path}")
    return load_rules(rules_path)


@pytest.fixture
def rules_adapter(rules: Rules) -> RulesAdapter:
    return RulesAdapter(rules)


def _make_variable(
    name: str,
    collection: str = "Colors",
    value: object = "#6366F1",
    kind: VariableKind = VariableKind.COLOR,
    modes: dict[str, object] | None = None,
    alias_name: str | None = None,
) -> Variable:
    """Build a variable; values_by_mode defaults to a single Light mode."""
    return Variable(
        id=f"VariableID:{collection}/{name}",
        name=name,
        kind=kind,
        collection_name=collection,
        collection_id=f"VariableCollectionId:{collection}",
        values_by_mode=modes if modes is not None else {"Light": value},
        default_value=value,
        alias_name=alias_name,
    )


def _make_snapshot(*variables: Variable) -> VariableSnapshot:
    return VariableSnapshot(variables=tuple(variables))


@pytest.fixture
def make_variable():
    """Factory for variables."""
    return _make_variable


@pytest.fixture
def make_snapshot():
    """Factory for snapshots."""
    return _make_snapshot


@pytest.fixture
def token_document() -> dict:
    """Small DTCG document with colors, spacing and typography."""
    return {
        "metadata": {"name": "Acme", "version": "1.0.0"},
        "$schema": "https://design-tokens.example/schema.json",
        "colors": {
            "$description": "Brand colors",
            "primary": {
                "500": {"$type": "color", "$value": "#6366f1"},
                "600": {"$type": "color", "$value": "#4f46e5"},
            },
            "accent": {"$type": "color", "$value": "#f59e0b", "$description": "Accent"},
        },
        "spacing": {
            "sm": {"$type": "dimension", "$value": "8px"},
            "md": {"$type": "dimension", "$value": "16px"},
        },
        "typography": {
            "body": {
                "$type": "typography",
                "$value": {"fontFamily": "Inter", "fontWeight": 400, "fontSize": "16px"},
            }
        },
        "enabled": {"$type": "boolean", "$value": True},
    }

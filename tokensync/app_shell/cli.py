import argparse
import json
import logging
import sys
from dataclasses import asdict
from pathlib import Path
from typing import Any

from tokensync.adapters.json_files import JsonSnapshotSource, JsonTokenDocumentSource
from tokensync.adapters.rules import RulesAdapter
from tokensync.components import palette, reconcile, tokens
from tokensync.rules.loader import default_rules, load_rules

logger = logging.getLogger("cli")

RULES_PATH = "rules.yaml"


def get_rules(path: Path) -> RulesAdapter:
    if not path.exists():
        logger.info(f"Rules file {path} not found, using defaults.")
        return RulesAdapter(default_rules())

    return RulesAdapter(load_rules(path))


def emit(payload: Any) -> None:
    print(json.dumps(payload, indent=2, ensure_ascii=False, default=str))


def report_errors(errors: list[Any]) -> None:
    for error in errors:
        where = f" ({error.field})" if error.field else ""
        logger.error(f"{error.code}{where}: {error.message}")
    sys.exit(1)


def handle_palette(rules: RulesAdapter, args: argparse.Namespace) -> None:
    inp = palette.GeneratePaletteInput(seed=args.seed, mode=args.mode)
    out = palette.run_generate(inp, rules=rules)
    if not out.success or out.palette is None:
        report_errors(out.errors)
        return

    if args.format == "tokens":
        config = tokens.DocumentBuildConfig(
            typography=tokens.TypographyConfig(
                body_font=args.font,
                heading_font=args.heading_font or args.font,
                base_size=args.base_size,
                scale=args.type_scale,
            )
        )
        emit(tokens.build_token_document(out.palette.scales(), out.palette.semantic(), config))
    else:
        contrast = {
            role: {step: asdict(c) for step, c in steps.items()}
            for role, steps in (out.contrast or {}).items()
        }
        emit({"mode": out.mode, **out.palette.to_dict(), "contrast": contrast})


def load_flat_tokens(rules: RulesAdapter, path: Path) -> tokens.FlattenOutput:
    document = JsonTokenDocumentSource(path).load_document()
    return tokens.run_flatten(tokens.FlattenInput(document=document), rules=rules)


def handle_flatten(rules: RulesAdapter, args: argparse.Namespace) -> None:
    out = load_flat_tokens(rules, Path(args.document))
    emit(
        {
            "summary": asdict(out.summary),
            "tokens": [
                {**asdict(t), "display": tokens.format_value(t.kind, t.value)} for t in out.tokens
            ],
        }
    )


def handle_validate(rules: RulesAdapter, args: argparse.Namespace) -> None:
    document = JsonTokenDocumentSource(Path(args.document)).load_document()
    out = tokens.run_validate(tokens.ValidateInput(document=document), rules=rules)

    for warning in out.warnings:
        logger.warning(f"{warning.path}: {warning.message}")
    if not out.success:
        report_errors(out.errors)
        return

    print(f"Document valid: {out.total_checked} tokens checked.")


def handle_compare(rules: RulesAdapter, args: argparse.Namespace) -> None:
    snapshot = JsonSnapshotSource(Path(args.snapshot)).load_snapshot()
    flat = load_flat_tokens(rules, Path(args.document))

    out = reconcile.run_compare(
        reconcile.CompareInput(snapshot=snapshot, tokens=flat.tokens, selected_mode=args.mode),
        rules=rules,
    )
    if not out.success or out.result is None:
        report_errors(out.errors)
        return

    result = out.result
    emit(
        {
            "selected_mode": result.selected_mode,
            "summary": asdict(result.summary),
            "collections": list(result.collections),
            "modes": list(result.modes),
            "items": [
                {
                    "id": item.id,
                    "match_key": item.match_key,
                    "collection": item.collection,
                    "status": item.status,
                    "kind": item.kind,
                    "variable": item.display_values.variable,
                    "token": item.display_values.token,
                }
                for item in result.items
            ],
        }
    )


def handle_diff(rules: RulesAdapter, args: argparse.Namespace) -> None:
    local = JsonTokenDocumentSource(Path(args.local)).load_document()
    remote = JsonTokenDocumentSource(Path(args.remote)).load_document()

    out = reconcile.run_diff(reconcile.DiffInput(local=local, remote=remote), rules=rules)
    if not out.success or out.diff is None:
        report_errors(out.errors)
        return

    def display(token: tokens.FlatToken | None) -> str | None:
        return None if token is None else tokens.format_value(token.kind, token.value)

    emit(
        {
            "summary": asdict(out.diff.summary),
            "entries": [
                {
                    "path": entry.path,
                    "change": entry.change,
                    "local": display(entry.local),
                    "remote": display(entry.remote),
                }
                for entry in out.diff.entries
            ],
        }
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Design token palette and sync tool")
    parser.add_argument("--rules", default=RULES_PATH, help="Path to rules.yaml")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # palette
    palette_parser = subparsers.add_parser("palette", help="Generate a palette from a seed color")
    palette_parser.add_argument("seed", help="Seed color, e.g. #6366f1")
    palette_parser.add_argument(
        "--mode",
        choices=[m.value for m in palette.HarmonyMode],
        help="Harmony mode (defaults to the rules file setting)",
    )
    palette_parser.add_argument(
        "--format", choices=["json", "tokens"], default="json", help="Output format"
    )
    palette_parser.add_argument("--font", default="Inter", help="Body font family (tokens format)")
    palette_parser.add_argument("--heading-font", help="Heading font family (defaults to --font)")
    palette_parser.add_argument(
        "--base-size", type=float, default=16, help="Base font size in px (tokens format)"
    )
    palette_parser.add_argument(
        "--type-scale",
        choices=list(tokens.TYPE_SCALE_RATIOS),
        default="major-third",
        help="Type scale ratio (tokens format)",
    )

    # flatten
    flatten_parser = subparsers.add_parser("flatten", help="Flatten a token document")
    flatten_parser.add_argument("document", help="Path to token document JSON")

    # validate
    validate_parser = subparsers.add_parser("validate", help="Validate a token document")
    validate_parser.add_argument("document", help="Path to token document JSON")

    # compare
    compare_parser = subparsers.add_parser(
        "compare", help="Compare a variable snapshot with a token document"
    )
    compare_parser.add_argument("snapshot", help="Path to variable snapshot JSON")
    compare_parser.add_argument("document", help="Path to token document JSON")
    compare_parser.add_argument("--mode", help="Mode to compare (defaults to first mode seen)")

    # diff
    diff_parser = subparsers.add_parser(
        "diff", help="Diff a local token document against a remote one"
    )
    diff_parser.add_argument("local", help="Path to the local token document JSON")
    diff_parser.add_argument("remote", help="Path to the remote token document JSON")

    return parser


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)

    try:
        rules = get_rules(Path(args.rules))

        if args.command == "palette":
            handle_palette(rules, args)
        elif args.command == "flatten":
            handle_flatten(rules, args)
        elif args.command == "validate":
            handle_validate(rules, args)
        elif args.command == "compare":
            handle_compare(rules, args)
        elif args.command == "diff":
            handle_diff(rules, args)
    except (FileNotFoundError, ValueError) as e:
        logger.error(str(e))
        sys.exit(1)


if __name__ == "__main__":
    main()

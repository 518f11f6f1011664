"""Command-line entry point for the schema scaffolder.

Collects the feature, schema name and schema type (from flags, or by
prompting for whatever is missing), runs the generator once, and prints what
happened to each file.

Usage::

    python -m src.cli --feature blog --name author --type document
    python -m src.cli --root apps/web --dry-run
"""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from pathlib import Path

from pydantic import ValidationError
from rich.prompt import Prompt

from src.config import Config
from src.scaffolder import GenerationReport, GenerationRequest, SchemaGenerator, SchemaType
from src.utils import (
    console,
    print_error,
    print_results_table,
    print_success,
    print_warning,
    save_json,
)

FEATURE_PROMPT = "What is the feature name? (e.g. blog, product, etc.)"
NAME_PROMPT = "What is the name of the schema?"
TYPE_PROMPT = "What type of schema is it?"

SCHEMA_TYPES = [t.value for t in SchemaType]


class InputError(Exception):
    """Raised when a required value is missing and prompting is disabled."""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="schema-gen",
        description="Add a new schema, context, and providers to a feature",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  schema-gen --feature blog --name author --type document\n"
            "  schema-gen --feature blog --name tag --type object --dry-run\n"
            "  schema-gen --root apps/web\n"
        ),
    )
    parser.add_argument("--feature", "-f", default=None, help="Feature name (e.g. blog)")
    parser.add_argument("--name", "-n", default=None, help="Schema name (e.g. author)")
    parser.add_argument(
        "--type", "-t",
        dest="schema_type",
        choices=SCHEMA_TYPES,
        default=None,
        help="Schema type",
    )
    parser.add_argument(
        "--root", "-r",
        default=None,
        help="Project root the features directory lives in (default: .)",
    )
    parser.add_argument("--templates", default=None, help="Custom template directory")
    parser.add_argument("--config", "-c", default=None, help="JSON config file")
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Report what would happen without writing any file",
    )
    parser.add_argument("--json", action="store_true", help="Print the report as JSON")
    parser.add_argument("--report", default=None, help="Also write the JSON report to this file")
    parser.add_argument(
        "--no-input",
        action="store_true",
        help="Fail instead of prompting for missing values",
    )
    return parser


def resolve_config(args: argparse.Namespace) -> Config:
    """Config file (or environment), then command-line overrides."""
    config = Config.load(Path(args.config)) if args.config else Config.from_env()
    updates: dict = {}
    if args.root:
        updates["project_root"] = Path(args.root)
    if args.templates:
        updates["template_dir"] = Path(args.templates)
    return config.model_copy(update=updates) if updates else config


def collect_request(args: argparse.Namespace) -> GenerationRequest:
    """Fill in missing values by prompting, unless ``--no-input`` is set."""
    feature = args.feature
    name = args.name
    schema_type = args.schema_type

    missing = [
        flag
        for flag, value in (("--feature", feature), ("--name", name), ("--type", schema_type))
        if not value
    ]
    if missing and args.no_input:
        raise InputError(f"Missing required option(s): {', '.join(missing)}")

    if not feature:
        feature = Prompt.ask(FEATURE_PROMPT, console=console)
    if not name:
        name = Prompt.ask(NAME_PROMPT, console=console)
    if not schema_type:
        schema_type = Prompt.ask(
            TYPE_PROMPT, choices=SCHEMA_TYPES, default="document", console=console
        )

    return GenerationRequest(feature=feature.strip(), name=name.strip(), type=schema_type)


def report_rows(report: GenerationReport) -> list[dict[str, str]]:
    return [
        {
            "status": r.status.value,
            "kind": r.kind.value,
            "path": r.path,
            "message": r.message,
        }
        for r in report.results
    ]


def print_report(report: GenerationReport) -> None:
    title = "Planned files (dry run)" if report.dry_run else "Generated files"
    print_results_table(report_rows(report), title=title)

    summary = (
        f"{len(report.created)} created, {len(report.applied)} patched, "
        f"{len(report.skipped)} skipped, {len(report.failed)} failed"
    )
    if report.success:
        print_success(f"Done: {summary}")
    else:
        print_warning(f"Finished with failures: {summary}")


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for ``schema-gen`` / ``python -m src.cli``."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = resolve_config(args)
        request = collect_request(args)
    except (InputError, ValidationError, OSError) as exc:
        print_error(f"Error: {exc}")
        return 2

    generator = SchemaGenerator(config)
    report = asyncio.run(generator.run(request, dry_run=args.dry_run))

    if args.report:
        save_json(report.model_dump(mode="json"), args.report)

    if args.json:
        console.print_json(json.dumps(report.model_dump(mode="json")))
    else:
        print_report(report)

    return 0 if report.success else 1


if __name__ == "__main__":
    sys.exit(main())

"""
Command line interface.

    dynform validate SCHEMA DATA [--mode client|server]
    dynform lint SCHEMA
    dynform serve [--host HOST] [--port PORT]
    dynform fill SCHEMA [--url URL]

SCHEMA is a .json/.yaml file holding a field list or a {name, fields}
document, or one of the built-in example names ("personal", "business").
"""
import argparse
import json
import sys
from pathlib import Path
from typing import Any, Callable, List, Optional

import httpx

from dynform.analyzer import FormReport, analyze_form
from dynform.config import get_settings
from dynform.examples import EXAMPLE_FORMS
from dynform.logging_config import setup_logging
from dynform.model import CheckboxField, Form, UnknownField
from dynform.serialization import SchemaError, load_form
from dynform.session import FormSession, field_prompt
from dynform.validation import ValidationMode, validate_form


EXIT_OK = 0
EXIT_INVALID = 1
EXIT_SCHEMA_ERROR = 2


def _resolve_form(source: str) -> Form:
    if source in EXAMPLE_FORMS:
        return EXAMPLE_FORMS[source]()
    return load_form(source)


def cmd_validate(args: argparse.Namespace) -> int:
    form = _resolve_form(args.schema)
    data = json.loads(Path(args.data).read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise SchemaError("Data file must hold a JSON object")

    result = validate_form(form, data, ValidationMode(args.mode))
    print(json.dumps(result, indent=2))
    return EXIT_INVALID if result else EXIT_OK


def print_report(report: FormReport) -> None:
    print(f"Form: {report.form_name}")
    print(f"  Fields:   {report.total_fields} ({report.required_fields} required)")
    for kind, count in sorted(report.fields_by_type.items()):
        print(f"    {kind}: {count}")
    if report.warnings:
        print("  Warnings:")
        for i, warning in enumerate(report.warnings, 1):
            print(f"    {i}. {warning}")
    else:
        print("  No warnings")


def cmd_lint(args: argparse.Namespace) -> int:
    report = analyze_form(_resolve_form(args.schema))
    print_report(report)
    return EXIT_OK if report.is_clean else EXIT_INVALID


def cmd_serve(args: argparse.Namespace) -> int:
    from dynform.server import run

    run(host=args.host, port=args.port)
    return EXIT_OK


def _read_checkbox(answer: str) -> Any:
    if answer == "":
        return None
    return answer.strip().lower() in {"y", "yes", "true", "1"}


def fill_form(session: FormSession, ask: Callable[[str], str] = input) -> None:
    """Prompt for every field until it passes client-side validation."""
    for f in session.fields:
        if isinstance(f, UnknownField):
            print(field_prompt(f))
            continue
        while True:
            answer = ask(f"{field_prompt(f)}: ").strip()
            value = _read_checkbox(answer) if isinstance(f, CheckboxField) else answer
            errors = session.set_value(f.name, value)
            if not errors:
                break
            for error in errors:
                print(f"  ! {error}")


def cmd_fill(args: argparse.Namespace) -> int:
    form = _resolve_form(args.schema)
    session = FormSession(form.fields)
    fill_form(session)

    url = args.url or get_settings().submit_url
    with httpx.Client(timeout=10.0) as client:
        outcome = session.submit(client, url)

    print(outcome.message)
    if outcome.success:
        print(f"Submission id: {outcome.submission_id}")
        return EXIT_OK
    if outcome.errors:
        print(json.dumps(outcome.errors, indent=2))
    return EXIT_INVALID


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="dynform", description="Dynamic form schema validation")
    parser.add_argument("--log-level", default=None, help="Override DYNFORM_LOG_LEVEL")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("validate", help="Validate a JSON data file against a schema")
    p.add_argument("schema", help="Schema file or example name")
    p.add_argument("data", help="JSON file with the form values")
    p.add_argument("--mode", choices=[m.value for m in ValidationMode], default="server")
    p.set_defaults(func=cmd_validate)

    p = sub.add_parser("lint", help="Report schema misconfigurations")
    p.add_argument("schema", help="Schema file or example name")
    p.set_defaults(func=cmd_lint)

    p = sub.add_parser("serve", help="Run the submission gateway")
    p.add_argument("--host", default=None)
    p.add_argument("--port", type=int, default=None)
    p.set_defaults(func=cmd_serve)

    p = sub.add_parser("fill", help="Fill in a form interactively and submit it")
    p.add_argument("schema", help="Schema file or example name")
    p.add_argument("--url", default=None, help="Gateway submit URL")
    p.set_defaults(func=cmd_fill)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level or get_settings().log_level)

    try:
        return args.func(args)
    except (SchemaError, FileNotFoundError, json.JSONDecodeError) as e:
        print(f"error: {e}", file=sys.stderr)
        return EXIT_SCHEMA_ERROR


if __name__ == "__main__":
    sys.exit(main())

"""
Tests for the dynform command line.
"""

import json

from dynform.cli import EXIT_INVALID, EXIT_OK, EXIT_SCHEMA_ERROR, fill_form, main
from dynform.examples import build_personal_info_form
from dynform.serialization import form_to_yaml
from dynform.session import FormSession


def write_json(path, obj):
    path.write_text(json.dumps(obj))
    return str(path)


def test_validate_valid_data(tmp_path, capsys):
    data = write_json(
        tmp_path / "data.json",
        {"name": "Ada", "email": "ada@example.com", "gender": "Other"},
    )
    assert main(["validate", "personal", data]) == EXIT_OK
    assert json.loads(capsys.readouterr().out) == {}


def test_validate_reports_errors(tmp_path, capsys):
    schema = tmp_path / "personal.yaml"
    schema.write_text(form_to_yaml(build_personal_info_form()))
    data = write_json(
        tmp_path / "data.json",
        {"name": "Ada", "email": "ada@example.com", "gender": "Other", "subscribe": "yes"},
    )

    assert main(["validate", str(schema), data]) == EXIT_INVALID
    assert json.loads(capsys.readouterr().out) == {
        "subscribe": ["Subscribe to newsletter must be a boolean value"]
    }


def test_validate_client_mode(tmp_path, capsys):
    data = write_json(
        tmp_path / "data.json",
        {"name": "Ada", "email": "ada@example.com", "gender": "Other", "subscribe": "yes"},
    )
    assert main(["validate", "personal", data, "--mode", "client"]) == EXIT_OK


def test_validate_bad_schema_file(tmp_path, capsys):
    schema = write_json(tmp_path / "bad.json", [{"type": "text"}])
    data = write_json(tmp_path / "data.json", {})
    assert main(["validate", schema, data]) == EXIT_SCHEMA_ERROR
    assert "non-empty string 'name'" in capsys.readouterr().err


def test_validate_missing_file(tmp_path):
    data = write_json(tmp_path / "data.json", {})
    assert main(["validate", str(tmp_path / "nope.yaml"), data]) == EXIT_SCHEMA_ERROR


def test_lint_clean_example(capsys):
    assert main(["lint", "business"]) == EXIT_OK
    out = capsys.readouterr().out
    assert "Form: Business Info" in out
    assert "No warnings" in out


def test_lint_reports_warnings(tmp_path, capsys):
    schema = write_json(
        tmp_path / "bad.json",
        [{"name": "n", "label": "N", "type": "number", "min": 5, "max": 1}],
    )
    assert main(["lint", schema]) == EXIT_INVALID
    assert "min 5 exceeds max 1" in capsys.readouterr().out


def test_fill_form_reprompts_until_valid(capsys):
    answers = iter(["Al", "Alice", "alice@example.com", "abc", "30", "Robot", "Female", "y"])
    session = FormSession(build_personal_info_form().fields)

    fill_form(session, ask=lambda prompt: next(answers))

    assert session.values == {
        "name": "Alice",
        "email": "alice@example.com",
        "age": 30,
        "gender": "Female",
        "subscribe": True,
    }
    out = capsys.readouterr().out
    assert "Name must be at least 3 characters long" in out
    assert "Age must be a valid number" in out
    assert "Gender must be one of the available options" in out

"""
Tests for the Form Analyzer.

Tests verify that the analyzer correctly:
    - Inventories fields by type
    - Flags contradictory bounds and empty selects
    - Reports unknown types and duplicate names
    - Leaves well-formed forms without warnings
"""

from dynform.model import (
    CheckboxField,
    EmailField,
    Form,
    NumberField,
    SelectField,
    TextField,
    UnknownField,
)
from dynform.analyzer import analyze_form
from dynform.examples import build_business_info_form, build_personal_info_form


def test_example_forms_are_clean():
    """The shipped example forms have no warnings."""
    for form in (build_personal_info_form(), build_business_info_form()):
        report = analyze_form(form)
        assert report.is_clean, report.warnings


def test_inventory():
    report = analyze_form(build_personal_info_form())
    assert report.total_fields == 5
    assert report.required_fields == 3
    assert report.fields_by_type == {
        "text": 1,
        "email": 1,
        "number": 1,
        "select": 1,
        "checkbox": 1,
    }


def test_min_greater_than_max():
    form = Form(name="Bad", fields=[NumberField(name="n", label="N", min=10, max=5)])
    report = analyze_form(form)
    assert not report.is_clean
    assert any("min 10 exceeds max 5" in w for w in report.warnings)


def test_length_bounds():
    form = Form(
        name="Bad",
        fields=[
            TextField(name="t", label="T", min_length=8, max_length=4),
            EmailField(name="e", label="E", min_length=-1),
        ],
    )
    report = analyze_form(form)
    assert any("minLength 8 exceeds maxLength 4" in w for w in report.warnings)
    assert any("e: minLength is negative" in w for w in report.warnings)


def test_select_options():
    form = Form(
        name="Bad",
        fields=[
            SelectField(name="empty", label="Empty"),
            SelectField(name="twice", label="Twice", options=("a", "b", "a")),
        ],
    )
    report = analyze_form(form)
    assert "empty: select field has no options" in report.warnings
    assert "twice: duplicate options: a" in report.warnings


def test_unknown_type_and_duplicate_names():
    form = Form(
        name="Bad",
        fields=[
            UnknownField(name="dob", label="Birthday", raw_type="date"),
            CheckboxField(name="dob", label="Again"),
        ],
    )
    report = analyze_form(form)
    assert report.unknown_types == {"dob": "date"}
    assert report.duplicate_names == ["dob"]
    assert report.fields_by_type == {"date": 1, "checkbox": 1}


def test_empty_label():
    form = Form(name="Bad", fields=[TextField(name="t", label="  ")])
    assert analyze_form(form).warnings == ["t: empty label"]


def test_warnings_not_duplicated():
    report = analyze_form(Form(name="F"))
    report.add_warning("x")
    report.add_warning("x")
    assert report.warnings == ["x"]

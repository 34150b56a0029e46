"""
Form Analyzer — early diagnostics for form schemas.

The engine validates values, not schemas: a number field with min > max
or a select with no options is accepted and simply makes every value
fail. This module finds such misconfigurations up front:
    - Field inventory per type
    - Duplicate names and options
    - Contradictory or negative bounds
    - Unknown field types, missing labels

IMPORTANT: It does NOT modify the form. It only produces read-only reports.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, List

from dynform.model import (
    EmailField,
    Form,
    NumberField,
    SelectField,
    TextField,
    UnknownField,
)
from dynform.coercion import format_number


@dataclass
class FormReport:
    """Analysis report for a form."""

    form_name: str
    total_fields: int = 0
    required_fields: int = 0
    fields_by_type: Dict[str, int] = field(default_factory=dict)

    duplicate_names: List[str] = field(default_factory=list)
    unknown_types: Dict[str, str] = field(default_factory=dict)

    warnings: List[str] = field(default_factory=list)

    def add_warning(self, msg: str) -> None:
        """Add a warning to the report."""
        if msg not in self.warnings:
            self.warnings.append(msg)

    @property
    def is_clean(self) -> bool:
        return not self.warnings


def _check_lengths(report: FormReport, f: TextField | EmailField) -> None:
    for key, value in (("minLength", f.min_length), ("maxLength", f.max_length)):
        if value is not None and value < 0:
            report.add_warning(f"{f.name}: {key} is negative ({value})")
    if (
        f.min_length is not None
        and f.max_length is not None
        and f.min_length > f.max_length
    ):
        report.add_warning(
            f"{f.name}: minLength {f.min_length} exceeds maxLength {f.max_length}, "
            f"no value can pass"
        )


def analyze_form(form: Form) -> FormReport:
    """
    Inspect a form schema and return a FormReport with counts and warnings.
    """
    report = FormReport(form_name=form.name)
    report.total_fields = len(form.fields)
    report.required_fields = sum(1 for f in form.fields if f.required)
    report.fields_by_type = dict(Counter(f.kind for f in form.fields))

    name_counts = Counter(f.name for f in form.fields)
    report.duplicate_names = sorted(n for n, c in name_counts.items() if c > 1)
    if report.duplicate_names:
        report.add_warning(f"Duplicate field names: {', '.join(report.duplicate_names)}")

    for f in form.fields:
        if not f.label.strip():
            report.add_warning(f"{f.name}: empty label")

        if isinstance(f, (TextField, EmailField)):
            _check_lengths(report, f)

        elif isinstance(f, NumberField):
            if f.min is not None and f.max is not None and f.min > f.max:
                report.add_warning(
                    f"{f.name}: min {format_number(f.min)} exceeds max "
                    f"{format_number(f.max)}, no value can pass"
                )

        elif isinstance(f, SelectField):
            if not f.options:
                report.add_warning(f"{f.name}: select field has no options")
            repeated = sorted(o for o, c in Counter(f.options).items() if c > 1)
            if repeated:
                report.add_warning(f"{f.name}: duplicate options: {', '.join(repeated)}")

        elif isinstance(f, UnknownField):
            report.unknown_types[f.name] = f.raw_type
            report.add_warning(f"{f.name}: unknown field type '{f.raw_type}'")

    return report

"""
Validation Engine — checks raw form values against field schemas.

Two entry points:
    - validate_field: one field, one value -> list of error strings
    - validate_form:  all fields, value mapping -> {name: [errors]}

Errors are returned, never raised. The same rules run in two modes:

    CLIENT  interactive checking while the user edits (lenient about
            value types, generic select message, silent on unknown
            field types)
    SERVER  authoritative checking at submission time (requires strings
            for text/email and a real bool for checkboxes)

IMPORTANT: This module is pure. No I/O, no shared state; safe to call
concurrently.
"""

import re
from enum import Enum
from typing import Any, Dict, List, Mapping, Sequence, Union

from dynform.coercion import format_number, is_empty, to_number
from dynform.model import (
    CheckboxField,
    EmailField,
    FieldSchema,
    Form,
    NumberField,
    SelectField,
    TextField,
    UnknownField,
)


# Matched with fullmatch: "$" would also accept a trailing newline
EMAIL_RE = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")

ValidationResult = Dict[str, List[str]]


class ValidationMode(Enum):
    """Which collaborator is asking: the form session or the gateway."""
    CLIENT = "client"
    SERVER = "server"


def _check_length(f: Union[TextField, EmailField], value: str) -> List[str]:
    errors = []
    if f.min_length is not None and len(value) < f.min_length:
        errors.append(f"{f.label} must be at least {f.min_length} characters long")
    if f.max_length is not None and len(value) > f.max_length:
        errors.append(f"{f.label} must be no more than {f.max_length} characters long")
    return errors


def _validate_text(f: TextField, value: Any, mode: ValidationMode) -> List[str]:
    if not isinstance(value, str):
        if mode is ValidationMode.SERVER:
            return [f"{f.label} must be a string"]
        return []
    return _check_length(f, value)


def _validate_email(f: EmailField, value: Any, mode: ValidationMode) -> List[str]:
    if not isinstance(value, str):
        if mode is ValidationMode.SERVER:
            return [f"{f.label} must be a string"]
        # The client only has the pattern to go on
        if not EMAIL_RE.fullmatch(str(value)):
            return [f"{f.label} must be a valid email address"]
        return []

    errors = []
    if not EMAIL_RE.fullmatch(value):
        errors.append(f"{f.label} must be a valid email address")
    errors.extend(_check_length(f, value))
    return errors


def _validate_number(f: NumberField, value: Any) -> List[str]:
    number = to_number(value)
    if number is None:
        return [f"{f.label} must be a valid number"]

    errors = []
    if f.min is not None and number < f.min:
        errors.append(f"{f.label} must be at least {format_number(f.min)}")
    if f.max is not None and number > f.max:
        errors.append(f"{f.label} must be no more than {format_number(f.max)}")
    return errors


def _validate_select(f: SelectField, value: Any, mode: ValidationMode) -> List[str]:
    if isinstance(value, str) and value in f.options:
        return []
    if mode is ValidationMode.CLIENT:
        return [f"{f.label} must be one of the available options"]
    choices = ", ".join(f.options) if f.options else "valid options"
    return [f"{f.label} must be one of: {choices}"]


def _validate_checkbox(f: CheckboxField, value: Any, mode: ValidationMode) -> List[str]:
    if mode is ValidationMode.SERVER and not isinstance(value, bool):
        return [f"{f.label} must be a boolean value"]
    return []


def validate_field(
    f: FieldSchema, value: Any, mode: ValidationMode = ValidationMode.SERVER
) -> List[str]:
    """
    Validate one raw value against one field schema.

    Algorithm:
        1. Required and empty -> exactly ["{label} is required"]
        2. Not required and empty -> [] (type constraints are skipped)
        3. Otherwise apply the checks of the field's kind; checks within
           a kind accumulate (e.g. bad email AND too long)

    Args:
        f: Field schema
        value: Raw value (str, number, bool or None)
        mode: CLIENT or SERVER rule set

    Returns:
        Error messages in check order; empty if the value is valid

    Raises:
        TypeError: If f is not a FieldSchema variant
    """
    if is_empty(value):
        if f.required:
            return [f"{f.label} is required"]
        return []

    if isinstance(f, TextField):
        return _validate_text(f, value, mode)
    if isinstance(f, EmailField):
        return _validate_email(f, value, mode)
    if isinstance(f, NumberField):
        return _validate_number(f, value)
    if isinstance(f, SelectField):
        return _validate_select(f, value, mode)
    if isinstance(f, CheckboxField):
        return _validate_checkbox(f, value, mode)
    if isinstance(f, UnknownField):
        # The client flags these when rendering (session.field_prompt)
        if mode is ValidationMode.CLIENT:
            return []
        return [f"Unknown field type: {f.raw_type}"]
    raise TypeError(f"Unsupported field schema: {type(f)}")


def validate_form(
    fields: Union[Form, Sequence[FieldSchema]],
    values: Mapping[str, Any],
    mode: ValidationMode = ValidationMode.SERVER,
) -> ValidationResult:
    """
    Validate every field of a form.

    Every field is checked, in schema order, even after failures, so the
    caller gets the complete error map in one pass. Keys of `values` that
    are not in the schema are ignored.

    Returns:
        {field name: [errors]} for invalid fields only; {} means valid
    """
    if isinstance(fields, Form):
        fields = fields.fields

    result: ValidationResult = {}
    for f in fields:
        errors = validate_field(f, values.get(f.name), mode)
        if errors:
            result[f.name] = errors
    return result


def is_valid(result: ValidationResult) -> bool:
    return not result

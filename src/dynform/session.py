"""
Form session — headless presentation adapter.

Tracks the values a user has entered for a form, re-validates a field each
time it changes (CLIENT mode), gates submission on a clean form and posts
the data to the gateway.

Each call's result replaces the previous errors for the fields it covers;
nothing is queued or cancelled.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

import httpx

from dynform.coercion import to_number
from dynform.model import (
    CheckboxField,
    FieldSchema,
    NumberField,
    SelectField,
    UnknownField,
)
from dynform.serialization import fields_to_list
from dynform.validation import ValidationMode, ValidationResult, validate_field, validate_form


logger = logging.getLogger(__name__)

UNREACHABLE_MESSAGE = "Failed to submit form. Please make sure the backend server is running."


@dataclass
class SubmissionOutcome:
    """
    Result of a submit attempt, as shown to the user.

    Properties:
        success: True if the gateway accepted the data
        message: Gateway message, or a local explanation
        errors: Field errors (local or from the gateway)
        submission_id: Identifier assigned by the gateway on success
        unreachable: True if the gateway could not be reached at all
    """

    success: bool
    message: str
    errors: ValidationResult = field(default_factory=dict)
    submission_id: Optional[int] = None
    unreachable: bool = False


def field_prompt(f: FieldSchema) -> str:
    """One-line text rendering of a field, used when prompting for input."""
    if isinstance(f, UnknownField):
        return f"Unsupported field type: {f.raw_type}"
    marker = " *" if f.required else ""
    if isinstance(f, SelectField):
        return f"{f.label}{marker} [{' / '.join(f.options)}]"
    if isinstance(f, CheckboxField):
        return f"{f.label}{marker} [y/n]"
    return f"{f.label}{marker}"


def _number_input(raw: Any) -> Any:
    if raw == "" or not isinstance(raw, str):
        return raw
    number = to_number(raw)
    if number is None:
        return raw
    if math.isfinite(number) and number.is_integer():
        return int(number)
    return number


class FormSession:
    """Values and errors of one form being filled in."""

    def __init__(self, fields: Sequence[FieldSchema]):
        self.fields: List[FieldSchema] = list(fields)
        self.values: Dict[str, Any] = {}
        self.errors: ValidationResult = {}

    def _field(self, name: str) -> FieldSchema:
        for f in self.fields:
            if f.name == name:
                return f
        raise KeyError(f"No field named '{name}'")

    def set_value(self, name: str, raw: Any) -> List[str]:
        """
        Store user input for a field and re-validate that field.

        Number input is converted when it parses; anything else is kept
        as entered so the engine can report it.

        Returns:
            The field's current errors
        """
        f = self._field(name)
        value = _number_input(raw) if isinstance(f, NumberField) else raw
        self.values[name] = value

        errors = validate_field(f, value, ValidationMode.CLIENT)
        if errors:
            self.errors[name] = errors
        else:
            self.errors.pop(name, None)
        return errors

    def validate(self) -> ValidationResult:
        self.errors = validate_form(self.fields, self.values, ValidationMode.CLIENT)
        return self.errors

    def submit(self, client: httpx.Client, url: str) -> SubmissionOutcome:
        """
        Validate locally, then post {schema, data} to the gateway.

        Nothing is sent while local validation fails.
        """
        if self.validate():
            return SubmissionOutcome(
                success=False,
                message="Please correct the highlighted fields",
                errors=self.errors,
            )

        payload = {"schema": fields_to_list(self.fields), "data": self.values}
        try:
            response = client.post(url, json=payload)
        except httpx.RequestError as e:
            logger.warning("Could not reach %s: %s", url, e)
            return SubmissionOutcome(success=False, message=UNREACHABLE_MESSAGE, unreachable=True)

        try:
            result = response.json()
        except ValueError:
            result = {}
        if not isinstance(result, dict):
            result = {}

        if response.is_success:
            return SubmissionOutcome(
                success=True,
                message=result.get("message", ""),
                submission_id=result.get("submissionId"),
            )

        self.errors = result.get("errors") or {}
        return SubmissionOutcome(
            success=False,
            message=result.get("message", f"Server responded with {response.status_code}"),
            errors=self.errors,
        )

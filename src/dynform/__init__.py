"""
Dynamic Form (dynform) Package

Declarative form schemas and the validation engine that checks submitted
values against them.

ARCHITECTURAL GUARANTEE:
------------------------
The engine (model, coercion, validation) contains ZERO knowledge of:
    - HTTP or any transport
    - Storage of submissions
    - Rendering of widgets

The same engine is consumed by the interactive form session (client mode)
and by the submission gateway (server mode).
"""

from .model import (
    FieldType,
    FieldSchema,
    TextField,
    EmailField,
    NumberField,
    SelectField,
    CheckboxField,
    UnknownField,
    Form,
)
from .validation import ValidationMode, validate_field, validate_form, is_valid

__version__ = "0.1.0"

__all__ = [
    "FieldType",
    "FieldSchema",
    "TextField",
    "EmailField",
    "NumberField",
    "SelectField",
    "CheckboxField",
    "UnknownField",
    "Form",
    "ValidationMode",
    "validate_field",
    "validate_form",
    "is_valid",
]

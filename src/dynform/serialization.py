"""
Serialization helpers for form schemas (fields and Form).

Field descriptors travel as plain dicts using the wire keys understood by
form front-ends:

    {"name": "age", "label": "Age", "type": "number",
     "required": false, "min": 18, "max": 100}

Constraint keys: minLength, maxLength (text, email), min, max (number),
options (select). Provides JSON/YAML round-trip for Form via the dict form.
"""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Sequence

import yaml

from dynform.model import (
    CheckboxField,
    EmailField,
    FieldSchema,
    FieldType,
    Form,
    NumberField,
    SelectField,
    TextField,
    UnknownField,
)


class SchemaError(ValueError):
    """Raised when a field descriptor is malformed."""
    pass


def _int_constraint(d: Dict[str, Any], key: str) -> int | None:
    value = d.get(key)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int):
        raise SchemaError(f"Field '{d['name']}': {key} must be an integer")
    return value


def _number_constraint(d: Dict[str, Any], key: str) -> int | float | None:
    value = d.get(key)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise SchemaError(f"Field '{d['name']}': {key} must be a number")
    return value


def _options(d: Dict[str, Any]) -> tuple:
    options = d.get("options")
    if options is None:
        return ()
    if not isinstance(options, list) or not all(isinstance(o, str) for o in options):
        raise SchemaError(f"Field '{d['name']}': options must be a list of strings")
    return tuple(options)


def field_from_dict(d: Any) -> FieldSchema:
    if not isinstance(d, dict):
        raise SchemaError(f"Field descriptor must be an object, got {type(d).__name__}")
    name = d.get("name")
    if not isinstance(name, str) or not name:
        raise SchemaError("Field descriptor requires a non-empty string 'name'")
    type_name = d.get("type")
    if type_name is None:
        raise SchemaError(f"Field '{name}' has no type")

    label = d.get("label")
    common = {
        "name": name,
        "label": label if isinstance(label, str) else name,
        "required": bool(d.get("required", False)),
    }

    if type_name not in [t.value for t in FieldType]:
        return UnknownField(raw_type=str(type_name), **common)
    kind = FieldType(type_name)

    if kind is FieldType.TEXT:
        return TextField(
            min_length=_int_constraint(d, "minLength"),
            max_length=_int_constraint(d, "maxLength"),
            **common,
        )
    if kind is FieldType.EMAIL:
        return EmailField(
            min_length=_int_constraint(d, "minLength"),
            max_length=_int_constraint(d, "maxLength"),
            **common,
        )
    if kind is FieldType.NUMBER:
        return NumberField(
            min=_number_constraint(d, "min"),
            max=_number_constraint(d, "max"),
            **common,
        )
    if kind is FieldType.SELECT:
        return SelectField(options=_options(d), **common)
    return CheckboxField(**common)


def field_to_dict(f: FieldSchema) -> Dict[str, Any]:
    d: Dict[str, Any] = {
        "name": f.name,
        "label": f.label,
        "type": f.kind,
        "required": f.required,
    }
    if isinstance(f, (TextField, EmailField)):
        if f.min_length is not None:
            d["minLength"] = f.min_length
        if f.max_length is not None:
            d["maxLength"] = f.max_length
    elif isinstance(f, NumberField):
        if f.min is not None:
            d["min"] = f.min
        if f.max is not None:
            d["max"] = f.max
    elif isinstance(f, SelectField):
        d["options"] = list(f.options)
    elif not isinstance(f, (CheckboxField, UnknownField)):
        raise TypeError(f"Unsupported field schema: {type(f)}")
    return d


def fields_from_list(items: Sequence[Any]) -> List[FieldSchema]:
    """
    Parse a list of field descriptors.

    Raises:
        SchemaError: If a descriptor is malformed or two fields share a name
    """
    fields = [field_from_dict(item) for item in items]

    names = [f.name for f in fields]
    if len(names) != len(set(names)):
        duplicates = sorted({n for n in names if names.count(n) > 1})
        raise SchemaError(f"Duplicate field names: {', '.join(duplicates)}")

    return fields


def fields_to_list(fields: Sequence[FieldSchema]) -> List[Dict[str, Any]]:
    return [field_to_dict(f) for f in fields]


def form_to_dict(form: Form) -> Dict[str, Any]:
    return {
        "name": form.name,
        "fields": fields_to_list(form.fields),
        "metadata": form.metadata,
    }


def form_from_dict(d: Any, name: str = "") -> Form:
    """
    Build a Form from either a bare field list or {name, fields, metadata}.
    """
    if isinstance(d, list):
        return Form(name=name, fields=fields_from_list(d))
    if not isinstance(d, dict):
        raise SchemaError("Form document must be a list of fields or an object")
    fields = d.get("fields", [])
    if not isinstance(fields, list):
        raise SchemaError("Form 'fields' must be a list")
    return Form(
        name=d.get("name", name),
        fields=fields_from_list(fields),
        metadata=d.get("metadata", {}) or {},
    )


def form_to_json(form: Form) -> str:
    return json.dumps(form_to_dict(form), sort_keys=True)


def form_from_json(s: str) -> Form:
    return form_from_dict(json.loads(s))


def form_to_yaml(form: Form) -> str:
    return yaml.safe_dump(form_to_dict(form), sort_keys=False)


def form_from_yaml(s: str) -> Form:
    return form_from_dict(yaml.safe_load(s))


def load_form(path: str | Path) -> Form:
    """
    Read a form from a .json, .yaml or .yml file.

    The file stem names the form when the document does not.
    """
    path = Path(path)
    text = path.read_text(encoding="utf-8")
    if path.suffix.lower() == ".json":
        d = json.loads(text)
    elif path.suffix.lower() in (".yaml", ".yml"):
        d = yaml.safe_load(text)
    else:
        raise SchemaError(f"Unsupported schema file type: {path.suffix}")
    return form_from_dict(d, name=path.stem)

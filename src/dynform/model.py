"""
Core Form Model Objects

Defines the fundamental data structures of a declarative form:
    - FieldType (closed enumeration of supported kinds)
    - Field schemas (one frozen variant per kind, each with its own constraints)
    - Form (root container)

ARCHITECTURAL RULE:
    These objects:
        - Know nothing about HTTP, storage or rendering
        - Are immutable
        - Are fully serializable (see dynform.serialization)
        - Represent structure, not behavior

    Validation rules live in dynform.validation.
"""

from abc import ABC
from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar, Dict, List, Optional, Tuple, Union


Number = Union[int, float]


class FieldType(Enum):
    """
    Field kinds supported by the engine.

    This enumeration is closed. A descriptor whose type is not listed here
    is represented as an UnknownField and reported as a validation error,
    never silently ignored.
    """

    TEXT = "text"
    EMAIL = "email"
    NUMBER = "number"
    SELECT = "select"
    CHECKBOX = "checkbox"


@dataclass(frozen=True)
class FieldSchema(ABC):
    """
    Base class for all field descriptors.

    Properties:
        name:
            Key of the field in the submitted data mapping.
            Must be unique within a form.

        label:
            Human-readable label, used verbatim in error messages.

        required:
            Whether an empty value is rejected.

    DO NOT:
        - Add validation logic here (belongs in dynform.validation)
        - Add wire formatting here (belongs in dynform.serialization)
    """

    field_type: ClassVar[Optional[FieldType]] = None

    name: str
    label: str
    required: bool = False

    @property
    def kind(self) -> str:
        """Type string as it appears on the wire."""
        return self.field_type.value


@dataclass(frozen=True)
class TextField(FieldSchema):
    """
    Free text input.

    Properties:
        min_length: Minimum number of characters (optional)
        max_length: Maximum number of characters (optional)
    """

    field_type: ClassVar[FieldType] = FieldType.TEXT

    min_length: Optional[int] = None
    max_length: Optional[int] = None


@dataclass(frozen=True)
class EmailField(FieldSchema):
    """
    Email address input.

    Shares the length constraints of TextField; the address pattern
    check is applied in addition to them.
    """

    field_type: ClassVar[FieldType] = FieldType.EMAIL

    min_length: Optional[int] = None
    max_length: Optional[int] = None


@dataclass(frozen=True)
class NumberField(FieldSchema):
    """
    Numeric input.

    Properties:
        min: Inclusive lower bound (optional)
        max: Inclusive upper bound (optional)

    IMPORTANT:
        min > max is a schema misconfiguration. It is not rejected here;
        dynform.analyzer reports it.
    """

    field_type: ClassVar[FieldType] = FieldType.NUMBER

    min: Optional[Number] = None
    max: Optional[Number] = None


@dataclass(frozen=True)
class SelectField(FieldSchema):
    """
    Choice among a fixed, ordered list of options.

    Membership is an exact, case-sensitive string match.
    """

    field_type: ClassVar[FieldType] = FieldType.SELECT

    options: Tuple[str, ...] = ()


@dataclass(frozen=True)
class CheckboxField(FieldSchema):
    """Boolean toggle. No constraints beyond presence."""

    field_type: ClassVar[FieldType] = FieldType.CHECKBOX


@dataclass(frozen=True)
class UnknownField(FieldSchema):
    """
    Descriptor whose type is outside FieldType.

    Kept so the engine can report it against the field's name instead of
    dropping the field.

    Properties:
        raw_type: The type string as received
    """

    raw_type: str = ""

    @property
    def kind(self) -> str:
        return self.raw_type


@dataclass
class Form:
    """
    Root container for a form definition.

    Properties:
        name:
            Form identifier (e.g. "Personal Info")

        fields:
            Ordered field descriptors. Validation and rendering follow
            this order.

        metadata:
            Arbitrary key-value pairs (use sparingly)

    INVARIANTS:
        - No two fields share a name (enforced when parsing, see
          dynform.serialization.fields_from_list)
    """

    name: str
    fields: List[FieldSchema] = field(default_factory=list)
    metadata: Dict[str, str] = field(default_factory=dict)

    def get_field(self, name: str) -> Optional[FieldSchema]:
        """
        Retrieve a field by name.

        Args:
            name: Field name

        Returns:
            FieldSchema or None if not found
        """
        for f in self.fields:
            if f.name == name:
                return f
        return None

    def names(self) -> List[str]:
        return [f.name for f in self.fields]

"""
reflection.py — Schema Reflection over google.protobuf Messages

Projects a message onto the closed set of kinds and cardinalities the hasher
understands. Only present fields are reported, in ascending field-number
order, exactly as ``Message.ListFields()`` returns them:

  - proto3 scalars at their default value are absent,
  - empty repeated and map fields are absent,
  - a oneof reports only its selected member, under that member's own
    field number, even when the member holds the type default.
"""

from __future__ import annotations
import enum
from dataclasses import dataclass
from typing import Any, Dict, Iterator, Optional

from google.protobuf.descriptor import FieldDescriptor
from google.protobuf.message import Message

from .errors import InvalidArgumentError, InvalidStateError, UnsupportedKindError


class Kind(enum.Enum):
    """Canonical value families. Integer widths collapse into SIGNED/UNSIGNED."""
    BOOL = "bool"
    SIGNED = "signed"
    UNSIGNED = "unsigned"
    FLOAT = "float"
    DOUBLE = "double"
    STRING = "string"
    BYTES = "bytes"
    ENUM = "enum"
    MESSAGE = "message"


class Cardinality(enum.Enum):
    SINGULAR = "singular"
    LIST = "list"
    MAP = "map"


_KIND_BY_TYPE: Dict[int, Kind] = {
    FieldDescriptor.TYPE_BOOL: Kind.BOOL,
    FieldDescriptor.TYPE_INT32: Kind.SIGNED,
    FieldDescriptor.TYPE_INT64: Kind.SIGNED,
    FieldDescriptor.TYPE_SINT32: Kind.SIGNED,
    FieldDescriptor.TYPE_SINT64: Kind.SIGNED,
    FieldDescriptor.TYPE_SFIXED32: Kind.SIGNED,
    FieldDescriptor.TYPE_SFIXED64: Kind.SIGNED,
    FieldDescriptor.TYPE_UINT32: Kind.UNSIGNED,
    FieldDescriptor.TYPE_UINT64: Kind.UNSIGNED,
    FieldDescriptor.TYPE_FIXED32: Kind.UNSIGNED,
    FieldDescriptor.TYPE_FIXED64: Kind.UNSIGNED,
    FieldDescriptor.TYPE_FLOAT: Kind.FLOAT,
    FieldDescriptor.TYPE_DOUBLE: Kind.DOUBLE,
    FieldDescriptor.TYPE_STRING: Kind.STRING,
    FieldDescriptor.TYPE_BYTES: Kind.BYTES,
    FieldDescriptor.TYPE_ENUM: Kind.ENUM,
    FieldDescriptor.TYPE_MESSAGE: Kind.MESSAGE,
    FieldDescriptor.TYPE_GROUP: Kind.MESSAGE,
}


@dataclass(frozen=True)
class FieldView:
    """One present field of a message, valid for a single traversal."""
    number: int
    name: str
    kind: Kind
    cardinality: Cardinality
    value: Any
    key_kind: Optional[Kind] = None
    value_kind: Optional[Kind] = None
    oneof: Optional[str] = None


def kind_of(field: FieldDescriptor) -> Kind:
    """Map a field descriptor's wire type onto its canonical ``Kind``.

    Raises:
        UnsupportedKindError: If the descriptor type is outside the known set.
    """
    try:
        return _KIND_BY_TYPE[field.type]
    except KeyError:
        raise UnsupportedKindError(
            f"field {field.full_name} has descriptor type {field.type}"
        ) from None


def is_repeated(field: FieldDescriptor) -> bool:
    """True for list and map fields.

    Newer protobuf runtimes expose ``is_repeated`` and have removed ``label``.
    """
    repeated = getattr(field, "is_repeated", None)
    if repeated is None:
        return field.label == FieldDescriptor.LABEL_REPEATED
    if callable(repeated):
        return bool(repeated())
    return bool(repeated)


def _is_map(field: FieldDescriptor) -> bool:
    entry = field.message_type
    return entry is not None and entry.GetOptions().map_entry


def field_view(field: FieldDescriptor, value: Any) -> FieldView:
    """Build the ``FieldView`` for one ``(descriptor, value)`` pair."""
    oneof = field.containing_oneof.name if field.containing_oneof is not None else None

    if is_repeated(field):
        if _is_map(field):
            entry = field.message_type
            return FieldView(
                number=field.number,
                name=field.name,
                kind=Kind.MESSAGE,
                cardinality=Cardinality.MAP,
                value=value,
                key_kind=kind_of(entry.fields_by_name["key"]),
                value_kind=kind_of(entry.fields_by_name["value"]),
                oneof=oneof,
            )
        return FieldView(field.number, field.name, kind_of(field), Cardinality.LIST, value, oneof=oneof)

    return FieldView(field.number, field.name, kind_of(field), Cardinality.SINGULAR, value, oneof=oneof)


def ensure_message(msg: Any) -> Message:
    """Validate that ``msg`` is a fully constructed protobuf message.

    Raises:
        InvalidArgumentError: ``msg`` is None or not a protobuf message.
        InvalidStateError: required fields are missing.
    """
    if msg is None:
        raise InvalidArgumentError("msg is None")
    if not isinstance(msg, Message):
        raise InvalidArgumentError(f"expected a protobuf Message, got {type(msg).__name__}")

    try:
        initialized = msg.IsInitialized()
    except Exception as exc:
        raise InvalidStateError(f"{type(msg).__name__}: {exc}") from exc
    if not initialized:
        missing = ", ".join(msg.FindInitializationErrors())
        raise InvalidStateError(f"{msg.DESCRIPTOR.full_name} is missing required fields: {missing}")
    return msg


def present_fields(msg: Message) -> Iterator[FieldView]:
    """Yield the present fields of ``msg`` in ascending field-number order.

    Raises:
        InvalidStateError: If the message cannot be enumerated.
    """
    try:
        listed = msg.ListFields()
    except Exception as exc:
        raise InvalidStateError(f"{type(msg).__name__}: {exc}") from exc

    for field, value in listed:
        yield field_view(field, value)

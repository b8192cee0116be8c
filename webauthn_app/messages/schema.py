"""Declarative field tables for messages.

Every message type declares its wire contract as an ordered tuple of
``Field`` entries. One set of generic routines walks those tables to
validate a record and to convert its binary fields between base64url text
and bytes, so message classes carry data rather than per-type logic.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, replace
from typing import Any, Callable, Dict, Tuple

from webauthn_app.encoding import coerce_to_base64url, coerce_to_bytes
from webauthn_app.exceptions import CoercionError
from webauthn_app.messages.validation import (
    FORMATS,
    TYPES,
    check_choice,
    check_format,
    check_type,
    has_field,
    label,
)


@dataclass(frozen=True)
class Field:
    """A single member of a message or nested object.

    Attributes:
        name: Wire name of the member.
        rule: A format from ``FORMATS`` or a JSON type from ``TYPES``.
        required: Whether the member must be present.
        binary: Whether the member carries bytes (base64url on the wire).
        choices: Allowed string values. For ``string`` this restricts the
            member itself, for ``array`` each element.
        fields: Nested shape. For ``object`` this describes the member,
            for ``array`` each element.
    """

    name: str
    rule: str
    required: bool = True
    binary: bool = False
    choices: Tuple[str, ...] = ()
    fields: Tuple["Field", ...] = ()

    def __post_init__(self) -> None:
        if self.rule not in FORMATS and self.rule not in TYPES:
            raise ValueError(f"unknown rule '{self.rule}' for field '{self.name}'")


def optional(field: Field) -> Field:
    """Return a copy of ``field`` that may be absent."""
    return replace(field, required=False)


def validate_fields(record: Any, fields: Tuple[Field, ...], prefix: str = "") -> None:
    """Validate ``record`` against a field table, failing on the first violation.

    Args:
        record: The mapping to check.
        fields: The field table describing it.
        prefix: Dotted path of ``record``, used in error messages.

    Raises:
        ValidationError: On the first field that is missing or malformed.
    """
    for field in fields:
        if not field.required and not has_field(record, field.name):
            continue

        _validate_field(record, field, prefix)


def _validate_field(record: Any, field: Field, prefix: str) -> None:
    name = field.name

    if field.rule in FORMATS:
        check_format(record, name, field.rule, prefix)
        return

    if field.rule == "string" and field.choices:
        check_choice(record, name, field.choices, prefix)
        return

    check_type(record, name, field.rule, prefix)
    value = record[name]
    path = label(prefix, name)

    if field.rule == "object" and field.fields:
        validate_fields(value, field.fields, path)

    if field.rule == "array":
        for idx in range(len(value)):
            if field.fields:
                check_type(value, idx, "object", path)
                validate_fields(value[idx], field.fields, label(path, idx))
            elif field.choices:
                check_choice(value, idx, field.choices, path)


def decode_fields(record: Dict[str, Any], fields: Tuple[Field, ...], prefix: str = "") -> None:
    """Replace base64url text with bytes for every binary field, in place.

    A ``nullable-base64`` field holding ``None`` decodes to ``b""``; absent
    fields stay absent.

    Raises:
        CoercionError: If a binary field cannot be decoded.
    """
    _convert_fields(record, fields, prefix, _decode_value)


def encode_fields(record: Dict[str, Any], fields: Tuple[Field, ...], prefix: str = "") -> None:
    """Replace bytes with base64url text for every binary field, in place.

    An empty ``nullable-base64`` value encodes to ``None``.

    Raises:
        CoercionError: If a binary field cannot be encoded.
    """
    _convert_fields(record, fields, prefix, _encode_value)


Converter = Callable[[Field, Any, str], Any]


def _decode_value(field: Field, value: Any, path: str) -> Any:
    if field.rule == "nullable-base64" and value is None:
        return b""

    return coerce_to_bytes(value, path)


def _encode_value(field: Field, value: Any, path: str) -> Any:
    if field.rule == "nullable-base64":
        if value is None:
            return None
        if not isinstance(value, str) and len(value) == 0:
            return None

    return coerce_to_base64url(value, path)


def _convert_fields(
    record: Any, fields: Tuple[Field, ...], prefix: str, convert: Converter
) -> None:
    if not isinstance(record, Mapping):
        raise CoercionError(prefix, f"expected '{prefix}' to be an object")

    for field in fields:
        if not has_field(record, field.name):
            continue

        value = record[field.name]
        path = label(prefix, field.name)

        if field.binary:
            record[field.name] = convert(field, value, path)

        elif field.rule == "object" and field.fields:
            _convert_fields(value, field.fields, path, convert)

        elif field.rule == "array" and field.fields:
            if not isinstance(value, list):
                raise CoercionError(path, f"expected '{path}' to be an array")
            for idx, item in enumerate(value):
                _convert_fields(item, field.fields, label(path, idx), convert)

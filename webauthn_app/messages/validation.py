"""Format validators for message fields.

Each rule inspects one named member of a record (a mapping, or a list when
the name is an index) and raises ``ValidationError`` naming the field and the
expected format when the member does not conform. Rules never repair or drop
data. The ``check_optional_*`` variants pass when the member is absent.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any, Iterable, Tuple, Union

from webauthn_app.exceptions import ValidationError

Key = Union[str, int]

FORMATS = ("non-empty-string", "base64url", "positive-integer", "nullable-base64")

TYPES = {
    "string": (str,),
    "number": (int, float),
    "boolean": (bool,),
    "object": (Mapping,),
    "array": (list,),
}

_BASE64URL = re.compile(r"[A-Za-z0-9\-_]+={0,2}")

# largest value representable as an unsigned 32 bit integer
_UINT32_MAX = 2**32 - 1


class _Missing:
    def __repr__(self) -> str:
        return "missing"


MISSING = _Missing()


def label(prefix: str, name: Key) -> str:
    """Build the dotted path used to identify a field in error messages."""
    if isinstance(name, int):
        return f"{prefix}[{name}]"
    if not prefix:
        return name
    return f"{prefix}.{name}"


def lookup(record: Any, name: Key) -> Any:
    """Return the member ``name`` of ``record``, or ``MISSING`` if absent."""
    if isinstance(name, int):
        if isinstance(record, list) and 0 <= name < len(record):
            return record[name]
        return MISSING

    if isinstance(record, Mapping) and name in record:
        return record[name]

    return MISSING


def has_field(record: Any, name: Key) -> bool:
    return lookup(record, name) is not MISSING


def describe(value: Any) -> str:
    if value is MISSING:
        return "missing"
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, str):
        return "string"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, Mapping):
        return "object"
    if isinstance(value, list):
        return "array"
    return type(value).__name__


def is_base64url(value: str) -> bool:
    """Check whether a string is base64url text (trailing padding tolerated)."""
    return _BASE64URL.fullmatch(value) is not None


def is_type(value: Any, type_name: str) -> bool:
    if type_name not in TYPES:
        raise ValueError(f"internal error: unknown type '{type_name}'")

    # bool is an int subclass; it never satisfies a numeric rule
    if type_name == "number" and isinstance(value, bool):
        return False

    return isinstance(value, TYPES[type_name])


def is_positive_integer(value: Any) -> bool:
    if not is_type(value, "number"):
        return False

    if isinstance(value, float) and not value.is_integer():
        return False

    return 0 <= value <= _UINT32_MAX


def check_type(record: Any, name: Key, type_name: str, prefix: str = "") -> None:
    """Require ``record[name]`` to be of the named JSON type.

    Args:
        record: The mapping or list holding the member.
        name: Member name or list index.
        type_name: One of ``string``, ``number``, ``boolean``, ``object``, ``array``.
        prefix: Dotted path of ``record`` itself, for error messages.

    Raises:
        ValidationError: If the member is absent or of another type.
    """
    value = lookup(record, name)
    if not is_type(value, type_name):
        raise ValidationError(label(prefix, name), f"'{type_name}'", describe(value))


def check_optional_type(record: Any, name: Key, type_name: str, prefix: str = "") -> None:
    if not has_field(record, name):
        return

    check_type(record, name, type_name, prefix)


def check_format(record: Any, name: Key, fmt: str, prefix: str = "") -> None:
    """Require ``record[name]`` to satisfy a format rule.

    Args:
        record: The mapping or list holding the member.
        name: Member name or list index.
        fmt: One of ``non-empty-string``, ``base64url``, ``positive-integer``
            or ``nullable-base64``.
        prefix: Dotted path of ``record`` itself, for error messages.

    Raises:
        ValidationError: If the member does not satisfy the format.
        ValueError: If ``fmt`` is not a known format.
    """
    field = label(prefix, name)
    value = lookup(record, name)

    if fmt == "non-empty-string":
        check_type(record, name, "string", prefix)
        if len(value) == 0:
            raise ValidationError(field, "non-empty string")

    elif fmt == "base64url":
        check_type(record, name, "string", prefix)
        if not is_base64url(value):
            raise ValidationError(field, "base64url format", value)

    elif fmt == "positive-integer":
        check_type(record, name, "number", prefix)
        if not is_positive_integer(value):
            raise ValidationError(field, "positive integer", repr(value))

    elif fmt == "nullable-base64":
        if value is MISSING or value is None:
            return
        if not isinstance(value, str):
            raise ValidationError(field, "null or string", describe(value))
        if value and not is_base64url(value):
            raise ValidationError(field, "base64url format", value)

    else:
        raise ValueError(f"internal error: unknown format '{fmt}'")


def check_optional_format(record: Any, name: Key, fmt: str, prefix: str = "") -> None:
    if not has_field(record, name):
        return

    check_format(record, name, fmt, prefix)


def check_choice(record: Any, name: Key, choices: Iterable[str], prefix: str = "") -> None:
    """Require ``record[name]`` to be one of an explicit set of strings.

    Raises:
        ValidationError: If the member is absent, not a string, or not allowed.
    """
    allowed: Tuple[str, ...] = tuple(choices)
    value = lookup(record, name)

    if not isinstance(value, str) or value not in allowed:
        expected = " or ".join(f"'{choice}'" for choice in allowed)
        raise ValidationError(label(prefix, name), expected, repr(value))


def check_optional_choice(
    record: Any, name: Key, choices: Iterable[str], prefix: str = ""
) -> None:
    if not has_field(record, name):
        return

    check_choice(record, name, choices, prefix)

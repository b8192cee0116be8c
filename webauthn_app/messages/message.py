"""Base message class for webauthn-app.

This module defines the foundational ``Message`` class. A message owns a
``payload`` dictionary holding only the members its field table declares;
serialization, validation and binary coercion are all driven by that table.
"""

from __future__ import annotations

import copy
import json
from collections.abc import Mapping
from typing import (
    TYPE_CHECKING,
    Any,
    ClassVar,
    Dict,
    List,
    Optional,
    Tuple,
    Type,
    TypeVar,
    Union,
)

from webauthn_app.exceptions import CoercionError, StructuralError
from webauthn_app.messages.schema import Field, decode_fields, encode_fields, validate_fields

if TYPE_CHECKING:
    from webauthn_app.messages.options import WebAuthnOptions


M = TypeVar("M", bound="Message")


def _unserializable(value: Any) -> Any:
    if isinstance(value, (bytes, bytearray, memoryview)):
        raise CoercionError("", "binary value must be encoded before serialization")
    raise CoercionError("", f"cannot serialize value of type {type(value).__name__}")


class Message:
    """Base class for every message sent or received.

    Subclasses declare their wire contract in ``fields``. Members that are
    not declared are ignored on the way in and never emitted on the way out.
    A declared member that was never set is omitted from the wire form.

    Attributes:
        fields: The field table for this message type.
        payload: The declared members currently set on this instance.
        preferences: Optional preference overlay carried alongside the
            message. It is not part of the wire contract.
    """

    fields: ClassVar[Tuple[Field, ...]] = ()

    def __init__(self, payload: Optional[Mapping[str, Any]] = None) -> None:
        """Initialize a message.

        Args:
            payload: Initial members. Undeclared keys are ignored.
        """
        self.payload: Dict[str, Any] = {}
        self.preferences: Optional[WebAuthnOptions] = None

        if payload is not None:
            for name in self.field_names():
                if name in payload:
                    self.payload[name] = payload[name]

    @classmethod
    def field_names(cls) -> List[str]:
        return [field.name for field in cls.fields]

    @classmethod
    def parse(cls: Type[M], source: Union[str, Mapping[str, Any]]) -> M:
        """Create a message from wire text or an already-parsed record.

        The result is neither validated nor binary-decoded; call
        ``validate`` and ``decode_binary_properties`` explicitly.

        Args:
            source: A JSON string, or a mapping.

        Returns:
            A new message holding copies of the declared members of ``source``.

        Raises:
            StructuralError: If ``source`` is not JSON or not an object.
        """
        record: Any = source
        if isinstance(source, str):
            try:
                record = json.loads(source)
            except (ValueError, RecursionError) as e:
                raise StructuralError("error parsing JSON string") from e

        if not isinstance(record, Mapping):
            raise StructuralError("could not coerce source to an object")

        try:
            message = cls(copy.deepcopy(dict(record)))
        except RecursionError as e:
            raise StructuralError("source is nested too deeply") from e

        if record.get("preferences"):
            from webauthn_app.messages.options import WebAuthnOptions

            message.preferences = WebAuthnOptions.parse(record["preferences"])

        return message

    def to_object(self) -> Dict[str, Any]:
        """Return the wire record: every declared member that is set."""
        return {
            name: copy.deepcopy(self.payload[name])
            for name in self.field_names()
            if name in self.payload
        }

    def serialize(self) -> str:
        """Serialize the message to compact JSON.

        Raises:
            CoercionError: If a binary member has not been encoded.
        """
        return json.dumps(self.to_object(), separators=(",", ":"), default=_unserializable)

    def to_human_string(self) -> str:
        """Render the message as indented JSON, for logs and debugging."""
        return json.dumps(self.to_object(), indent=4, default=repr)

    def validate(self) -> None:
        """Check every declared member against its rule.

        Raises:
            ValidationError: On the first member that is missing or malformed.
        """
        validate_fields(self.payload, self.fields)

    def decode_binary_properties(self) -> None:
        """Replace the base64url text of every binary member with bytes.

        Raises:
            CoercionError: If a binary member cannot be decoded.
        """
        decode_fields(self.payload, self.fields)

    def encode_binary_properties(self) -> None:
        """Replace the bytes of every binary member with base64url text.

        Raises:
            CoercionError: If a binary member cannot be encoded.
        """
        encode_fields(self.payload, self.fields)

    def get(self, name: str, default: Any = None) -> Any:
        return self.payload.get(name, default)

    def __getitem__(self, name: str) -> Any:
        return self.payload[name]

    def __setitem__(self, name: str, value: Any) -> None:
        if name not in self.field_names():
            raise KeyError(f"'{name}' is not a field of {type(self).__name__}")
        self.payload[name] = value

    def __delitem__(self, name: str) -> None:
        del self.payload[name]

    def __contains__(self, name: object) -> bool:
        return name in self.payload

    def __str__(self) -> str:
        return self.serialize()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.payload!r})"

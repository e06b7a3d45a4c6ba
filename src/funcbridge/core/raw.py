"""Raw payload container.

The host sends payloads either as JSON strings (form posts, plain text,
queue messages) or as inline JSON values (``application/json`` bodies).
``RawPayload`` keeps both as bytes so they can be decoded later into
whatever shape the caller asks for.
"""

from __future__ import annotations

import json
from typing import Any, Type, TypeVar

from pydantic import GetCoreSchemaHandler, TypeAdapter
from pydantic_core import core_schema

T = TypeVar("T")


class RawPayload(bytes):
    """Immutable payload bytes captured from an invocation envelope.

    Values are captured as follows:

    - JSON string -> its UTF-8 bytes
    - ``null`` -> empty bytes
    - any other JSON value inside an envelope -> its exact source text,
      sliced out by ``decode_envelope``
    - any other value built in code -> compact JSON, key order preserved

    In JSON dumps the payload is written as UTF-8 text; payloads that are
    not UTF-8 fail to serialize instead of being altered.
    """

    @classmethod
    def from_wire(cls, value: Any) -> "RawPayload":
        if isinstance(value, RawPayload):
            return value
        if value is None:
            return cls(b"")
        if isinstance(value, (bytes, bytearray)):
            return cls(bytes(value))
        if isinstance(value, str):
            return cls(value.encode("utf-8"))
        return cls(json.dumps(value, separators=(",", ":"), ensure_ascii=False).encode("utf-8"))

    @property
    def text(self) -> str:
        return self.decode("utf-8")

    def parse(self, target: Type[T] = Any) -> T:  # type: ignore[assignment]
        """Decode the payload as JSON into ``target``.

        ``target`` is anything pydantic can validate: a model class, a
        dataclass, a TypedDict, ``dict[str, int]`` and so on. Errors are the
        ``pydantic.ValidationError`` raised by the decode.
        """
        return TypeAdapter(target).validate_json(bytes(self))

    @staticmethod
    def _dump_text(value: "RawPayload") -> str:
        return value.decode("utf-8")

    def __repr__(self) -> str:
        if len(self) <= 50:
            return f"RawPayload({bytes(self)!r})"
        return f"RawPayload({bytes(self[:50])!r}... ({len(self)} bytes))"

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        return core_schema.no_info_plain_validator_function(
            cls.from_wire,
            serialization=core_schema.plain_serializer_function_ser_schema(
                cls._dump_text,
                when_used="json",
            ),
        )

"""Envelope decoding.

The host posts one JSON document per invocation::

    {"Data": {"<binding name>": <payload>}, "Metadata": {...}}

``decode_envelope`` reads that document from a stream and validates the
payload and metadata into the models a trigger kind asks for.
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from typing import IO, Any, Dict, Generic, Optional, Sequence, Tuple, Type, TypeVar

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError

from funcbridge.core.exceptions import TriggerPayloadMalformedError
from funcbridge.core.logger import get_logger
from funcbridge.core.raw import RawPayload

P = TypeVar("P")
M = TypeVar("M")

_WS = re.compile(r"[ \t\n\r]*")
_DECODER = json.JSONDecoder()


class Envelope(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    data: Dict[str, Any] = Field(alias="Data")
    metadata: Dict[str, Any] = Field(default_factory=dict, alias="Metadata")


@dataclass(frozen=True)
class DecodedEnvelope(Generic[P, M]):
    payload: P
    metadata: M


def read_stream(stream: IO[bytes]) -> bytes:
    """Read ``stream`` to completion and close it, whatever happens."""
    try:
        return stream.read()
    finally:
        stream.close()


def decode_envelope(
    stream: IO[bytes],
    name: str,
    payload_model: Type[P],
    metadata_model: Type[M],
    *,
    raw_path: Optional[Sequence[str]] = None,
) -> DecodedEnvelope[P, M]:
    """Decode the envelope in ``stream`` for the binding ``name``.

    Args:
        stream: Readable binary stream; read once and closed on every path.
        name: Key under ``Data`` holding the trigger payload.
        payload_model: Type the payload is validated into.
        metadata_model: Type the metadata is validated into.
        raw_path: Keys inside the payload leading to a value that is kept
            as its exact source bytes (``()`` for the payload itself). The
            model must declare that value as ``RawPayload``.

    Raises:
        TriggerPayloadMalformedError: The document is not JSON, lacks the
            expected shape, or the payload/metadata do not validate.
    """
    raw = read_stream(stream)

    try:
        envelope = Envelope.model_validate_json(raw)
        if name not in envelope.data:
            raise KeyError(name)
        value = envelope.data[name]
        if raw_path is not None:
            value = _with_source(raw, value, name, tuple(raw_path))
        payload = TypeAdapter(payload_model).validate_python(value)
        metadata = TypeAdapter(metadata_model).validate_python(envelope.metadata)
    except (ValidationError, KeyError, ValueError) as exc:
        raise TriggerPayloadMalformedError(kind=name, details={"error": _summary(exc)}) from exc

    get_logger(__name__).debug("Decoded %r payload from %d-byte envelope", name, len(raw))
    return DecodedEnvelope(payload=payload, metadata=metadata)


def source_text(document: str, path: Sequence[str]) -> Optional[str]:
    """Return the exact source text of the value at ``path`` in ``document``.

    ``document`` must be valid JSON. Object keys are followed in order;
    for duplicate keys the last one wins, as with ``json.loads``. Returns
    ``None`` when a key is missing or a step is not an object.
    """
    start: Optional[int] = _WS.match(document, 0).end()
    for key in path:
        start = _member_start(document, start, key)
        if start is None:
            return None
    _, end = _DECODER.raw_decode(document, start)
    return document[start:end]


def _member_start(document: str, idx: int, key: str) -> Optional[int]:
    if document[idx:idx + 1] != "{":
        return None

    found = None
    idx = _WS.match(document, idx + 1).end()
    if document[idx] == "}":
        return None

    while True:
        member, idx = _DECODER.raw_decode(document, idx)
        # skip the ':' separator
        idx = _WS.match(document, _WS.match(document, idx).end() + 1).end()
        if member == key:
            found = idx
        _, idx = _DECODER.raw_decode(document, idx)
        idx = _WS.match(document, idx).end()
        if document[idx] == "}":
            return found
        # skip the ',' separator
        idx = _WS.match(document, idx + 1).end()


def _with_source(raw: bytes, value: Any, name: str, raw_path: Tuple[str, ...]) -> Any:
    target = value
    for key in raw_path:
        if not isinstance(target, dict) or key not in target:
            return value
        target = target[key]

    # Strings are captured unquoted, null as empty bytes.
    if target is None or isinstance(target, str):
        return value

    text = source_text(raw.decode("utf-8"), ("Data", name) + raw_path)
    if text is None:
        return value
    return _replace(value, raw_path, RawPayload(text.encode("utf-8")))


def _replace(value: Any, path: Tuple[str, ...], new: Any) -> Any:
    if not path:
        return new
    return {**value, path[0]: _replace(value[path[0]], path[1:], new)}


def _summary(exc: Exception) -> str:
    if isinstance(exc, KeyError):
        return f"missing Data[{exc.args[0]!r}]"
    if isinstance(exc, ValidationError):
        return f"{exc.error_count()} validation error(s): {exc.errors()[0]['msg']}"
    return str(exc)

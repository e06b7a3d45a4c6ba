from __future__ import annotations

from typing import IO, Any, Dict

from pydantic import Field

from funcbridge.core.contracts import FrozenDict, WireModel
from funcbridge.core.envelope import decode_envelope
from funcbridge.core.options import TriggerOption, new_trigger_options
from funcbridge.core.raw import RawPayload
from funcbridge.triggers.registry import register_trigger


@register_trigger(kind="base")
class BaseTrigger(WireModel):
    """A trigger for any binding without a dedicated model.

    The payload under the binding name is kept raw and the metadata as
    the mapping the host sent.
    """

    payload: RawPayload = Field(default_factory=lambda: RawPayload(b""))
    metadata: FrozenDict = Field(default_factory=dict)

    @classmethod
    def from_stream(cls, stream: IO[bytes], *options: TriggerOption) -> "BaseTrigger":
        return new_base(stream, *options)

    def parse(self, target: Any = Any) -> Any:
        return self.payload.parse(target)

    def data(self) -> RawPayload:
        return self.payload


def new_base(stream: IO[bytes], *options: TriggerOption) -> BaseTrigger:
    """Create a base trigger from the envelope in ``stream``.

    Requires the binding name through ``with_name``.
    """
    opts = new_trigger_options(*options)
    if not opts.name:
        stream.close()
        raise ValueError("base trigger requires a binding name, use with_name()")

    decoded = decode_envelope(stream, opts.name, RawPayload, Dict[str, Any], raw_path=())

    return BaseTrigger(payload=decoded.payload, metadata=decoded.metadata)

from __future__ import annotations

from typing import IO, Any, Optional

from pydantic import Field

from funcbridge.core.contracts import HostDateTime, Metadata, WireModel
from funcbridge.core.envelope import decode_envelope
from funcbridge.core.options import TriggerOption, new_trigger_options
from funcbridge.core.raw import RawPayload
from funcbridge.triggers.registry import register_trigger


class QueueMetadata(Metadata):
    dequeue_count: float = Field(default=0, alias="DequeueCount")
    expiration_time: Optional[HostDateTime] = Field(default=None, alias="ExpirationTime")
    id: str = Field(default="", alias="Id")
    insertion_time: Optional[HostDateTime] = Field(default=None, alias="InsertionTime")
    next_visible_time: Optional[HostDateTime] = Field(default=None, alias="NextVisibleTime")
    pop_receipt: str = Field(default="", alias="PopReceipt")


@register_trigger(kind="queue")
class QueueTrigger(WireModel):
    """A storage queue trigger. ``payload`` is the queue message."""

    payload: RawPayload = Field(default_factory=lambda: RawPayload(b""))
    metadata: QueueMetadata = Field(default_factory=QueueMetadata)

    @classmethod
    def from_stream(cls, stream: IO[bytes], *options: TriggerOption) -> "QueueTrigger":
        return new_queue(stream, *options)

    def parse(self, target: Any = Any) -> Any:
        return self.payload.parse(target)

    def data(self) -> RawPayload:
        return self.payload


def new_queue(stream: IO[bytes], *options: TriggerOption) -> QueueTrigger:
    """Create a queue trigger from the envelope in ``stream``.

    The binding name defaults to ``queue``; use ``with_name`` for the name
    given in function.json.
    """
    opts = new_trigger_options(*options)
    decoded = decode_envelope(stream, opts.name or "queue", RawPayload, QueueMetadata, raw_path=())

    return QueueTrigger(payload=decoded.payload, metadata=decoded.metadata)

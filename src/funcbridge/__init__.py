"""funcbridge.

Typed trigger decoding for function-host custom handlers.

The host posts one JSON envelope per invocation. funcbridge validates the
envelope and turns it into an immutable trigger object (HTTP, timer,
queue, or a generic base trigger) that handler code reads from.
"""

from funcbridge.bindings.options import BindingOptions, new_binding_options
from funcbridge.core.contracts import Metadata, Trigger
from funcbridge.core.exceptions import (
    FuncbridgeException,
    HTTPInvalidBodyError,
    HTTPInvalidContentTypeError,
    TriggerPayloadMalformedError,
    TriggerRegistryError,
)
from funcbridge.core.options import TriggerOptions, with_name
from funcbridge.core.raw import RawPayload
from funcbridge.triggers import (
    BaseTrigger,
    HTTPTrigger,
    QueueTrigger,
    TimerTrigger,
    new_base,
    new_http,
    new_queue,
    new_timer,
    new_trigger,
)

__version__ = "0.1.0"

__all__ = [
    "BaseTrigger",
    "BindingOptions",
    "FuncbridgeException",
    "HTTPInvalidBodyError",
    "HTTPInvalidContentTypeError",
    "HTTPTrigger",
    "Metadata",
    "QueueTrigger",
    "RawPayload",
    "TimerTrigger",
    "Trigger",
    "TriggerOptions",
    "TriggerPayloadMalformedError",
    "TriggerRegistryError",
    "new_base",
    "new_binding_options",
    "new_http",
    "new_queue",
    "new_timer",
    "new_trigger",
    "with_name",
]

"""Options for outbound bindings.

Not all options are viable for all bindings: ``status_code``, ``header``
and ``body`` apply to HTTP output bindings, ``data`` to generic ones.
Serializing the bag into the host's response shape happens outside
funcbridge.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Mapping, Optional, Sequence, Union

import httpx

from funcbridge.core.options import apply_options
from funcbridge.core.raw import RawPayload

HeaderValues = Union[str, Sequence[str]]


@dataclass
class BindingOptions:
    name: Optional[str] = None
    status_code: int = 200
    header: httpx.Headers = field(default_factory=httpx.Headers)
    body: RawPayload = field(default_factory=lambda: RawPayload(b""))
    data: RawPayload = field(default_factory=lambda: RawPayload(b""))


BindingOption = Callable[[BindingOptions], None]


def with_name(name: str) -> BindingOption:
    """Set the name of the binding."""

    def option(o: BindingOptions) -> None:
        o.name = name

    return option


def with_status_code(status_code: int) -> BindingOption:
    """Set the status code of an HTTP binding."""

    def option(o: BindingOptions) -> None:
        o.status_code = status_code

    return option


def with_body(body: Any) -> BindingOption:
    """Set the body of an HTTP binding. Strings and bytes are kept as-is,
    other values are stored as JSON."""

    def option(o: BindingOptions) -> None:
        o.body = RawPayload.from_wire(body)

    return option


def with_data(data: Any) -> BindingOption:
    """Set the data of a generic binding."""

    def option(o: BindingOptions) -> None:
        o.data = RawPayload.from_wire(data)

    return option


def with_header(header: Union[httpx.Headers, Mapping[str, HeaderValues]]) -> BindingOption:
    """Add the provided header to an HTTP binding.

    Values for one key are joined with ``", "`` and appended to the
    entries already present, never replacing them.
    """

    def option(o: BindingOptions) -> None:
        items = list(o.header.raw)
        for key, values in _grouped(header):
            items.append((key.encode("utf-8"), ", ".join(values).encode("utf-8")))
        o.header = httpx.Headers(items)

    return option


def _grouped(header: Union[httpx.Headers, Mapping[str, HeaderValues]]) -> list[tuple[str, list[str]]]:
    if isinstance(header, httpx.Headers):
        grouped: dict[str, list[str]] = {}
        for raw_key, raw_value in header.raw:
            key = raw_key.decode(header.encoding)
            grouped.setdefault(key, []).append(raw_value.decode(header.encoding))
        return list(grouped.items())
    return [(key, [values] if isinstance(values, str) else list(values)) for key, values in header.items()]


def new_binding_options(*options: BindingOption) -> BindingOptions:
    """Build binding options from defaults, applying ``options`` in order."""
    return apply_options(BindingOptions(), options)

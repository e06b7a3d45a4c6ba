from __future__ import annotations

import re
from typing import IO, Any, Dict, List, Optional, Tuple
from urllib.parse import parse_qs

import httpx
from pydantic import ConfigDict, Field, field_serializer, field_validator

from funcbridge.core.contracts import FrozenStrDict, Metadata, WireModel
from funcbridge.core.envelope import decode_envelope
from funcbridge.core.exceptions import HTTPInvalidBodyError, HTTPInvalidContentTypeError
from funcbridge.core.options import TriggerOption, new_trigger_options
from funcbridge.core.raw import RawPayload
from funcbridge.triggers.registry import register_trigger

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"

# A '%' not followed by two hex digits
_BAD_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")


class HTTPIdentityClaims(WireModel):
    issuer: str = Field(default="", alias="Issuer")
    original_issuer: str = Field(default="", alias="OriginalIssuer")
    type: str = Field(default="", alias="Type")
    value: str = Field(default="", alias="Value")
    value_type: str = Field(default="", alias="ValueType")
    properties: FrozenStrDict = Field(default_factory=dict, alias="Properties")


class HTTPIdentity(WireModel):
    """An identity from the Identities field of the incoming request."""

    is_authenticated: bool = Field(default=False, alias="IsAuthenticated")
    authentication_type: Optional[str] = Field(default=None, alias="AuthenticationType")
    name_claim_type: Optional[str] = Field(default=None, alias="NameClaimType")
    role_claim_type: Optional[str] = Field(default=None, alias="RoleClaimType")
    actor: Any = Field(default=None, alias="Actor")
    bootstrap_context: Any = Field(default=None, alias="BootstrapContext")
    label: Any = Field(default=None, alias="Label")
    name: Any = Field(default=None, alias="Name")
    claims: Tuple[HTTPIdentityClaims, ...] = Field(default_factory=tuple, alias="Claims")


class HTTPMetadata(Metadata):
    headers: FrozenStrDict = Field(default_factory=dict, alias="Headers")
    params: FrozenStrDict = Field(default_factory=dict, alias="Params")
    query: FrozenStrDict = Field(default_factory=dict, alias="Query")


class HTTPRequest(WireModel):
    """The ``req`` payload as sent by the host.

    Wire name -> attribute:

    ========== ==========
    Url        url
    Method     method
    Body       body
    Headers    headers
    Params     params
    Query      query
    Identities identities
    ========== ==========
    """

    url: str = Field(default="", alias="Url")
    method: str = Field(default="", alias="Method")
    body: RawPayload = Field(default_factory=lambda: RawPayload(b""), alias="Body")
    headers: Dict[str, List[str]] = Field(default_factory=dict, alias="Headers")
    params: Dict[str, str] = Field(default_factory=dict, alias="Params")
    query: Dict[str, str] = Field(default_factory=dict, alias="Query")
    identities: List[HTTPIdentity] = Field(default_factory=list, alias="Identities")

    @field_validator("headers", "params", "query", "identities", mode="before")
    @classmethod
    def _null_as_empty(cls, v: Any, info) -> Any:
        if v is None:
            return [] if info.field_name == "identities" else {}
        return v


class ReadOnlyHeaders(httpx.Headers):
    """``httpx.Headers`` that refuse in-place changes.

    ``copy()`` returns a plain, mutable ``httpx.Headers``.
    """

    def __setitem__(self, key: str, value: str) -> None:
        raise TypeError("trigger headers are read-only")

    def __delitem__(self, key: str) -> None:
        raise TypeError("trigger headers are read-only")

    def update(self, headers: Any = None) -> None:  # type: ignore[override]
        raise TypeError("trigger headers are read-only")


@register_trigger(kind="http")
class HTTPTrigger(WireModel):
    """An HTTP trigger."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, arbitrary_types_allowed=True)

    url: str = ""
    method: str = ""
    body: RawPayload = Field(default_factory=lambda: RawPayload(b""))
    headers: ReadOnlyHeaders = Field(default_factory=ReadOnlyHeaders)
    params: FrozenStrDict = Field(default_factory=dict)
    query: FrozenStrDict = Field(default_factory=dict)
    identities: Tuple[HTTPIdentity, ...] = Field(default_factory=tuple)
    metadata: HTTPMetadata = Field(default_factory=HTTPMetadata)

    @field_validator("headers", mode="before")
    @classmethod
    def _to_headers(cls, v: Any) -> ReadOnlyHeaders:
        if isinstance(v, ReadOnlyHeaders):
            return v
        if isinstance(v, httpx.Headers):
            return ReadOnlyHeaders(v)
        items = []
        for key, values in (v or {}).items():
            # A single string is one value, not a sequence of characters
            for value in [values] if isinstance(values, str) else values:
                items.append((key, value))
        return ReadOnlyHeaders(items)

    @field_serializer("headers")
    def _dump_headers(self, headers: httpx.Headers) -> Dict[str, List[str]]:
        out: Dict[str, List[str]] = {}
        for key, value in headers.raw:
            out.setdefault(key.decode(headers.encoding), []).append(value.decode(headers.encoding))
        return out

    @classmethod
    def from_stream(cls, stream: IO[bytes], *options: TriggerOption) -> "HTTPTrigger":
        return new_http(stream, *options)

    def parse(self, target: Any = Any) -> Any:
        """Parse the body into ``target``. Decode errors propagate unchanged."""
        return self.body.parse(target)

    def data(self) -> RawPayload:
        return self.body

    def form_data(self) -> Dict[str, List[str]]:
        """Parse a body sent with Content-Type application/x-www-form-urlencoded.

        Raises:
            HTTPInvalidContentTypeError: Content-Type is anything else.
            HTTPInvalidBodyError: The body is not valid form data, or is a
                single key with an empty value.
        """
        content_types = self.headers.get_list("Content-Type")
        content_type = content_types[0] if content_types else ""
        if content_type.lower() != FORM_CONTENT_TYPE:
            raise HTTPInvalidContentTypeError(content_type)

        try:
            text = self.body.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise HTTPInvalidBodyError(bytes(self.body)) from exc
        if ";" in text or _BAD_ESCAPE.search(text):
            raise HTTPInvalidBodyError(bytes(self.body))

        values = parse_qs(text, keep_blank_values=True)
        if len(values) == 1:
            (only,) = values.values()
            if len(only[0]) == 0:
                raise HTTPInvalidBodyError(bytes(self.body))

        return values


def new_http(stream: IO[bytes], *options: TriggerOption) -> HTTPTrigger:
    """Create an HTTP trigger from the envelope in ``stream``.

    The binding name defaults to ``req``.
    """
    opts = new_trigger_options(*options)
    decoded = decode_envelope(stream, opts.name or "req", HTTPRequest, HTTPMetadata, raw_path=("Body",))
    req = decoded.payload

    return HTTPTrigger(
        url=req.url,
        method=req.method,
        body=req.body,
        headers=req.headers,
        params=req.params,
        query=req.query,
        identities=req.identities,
        metadata=decoded.metadata,
    )

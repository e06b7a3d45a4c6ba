from __future__ import annotations

import re
from datetime import datetime
from types import MappingProxyType
from typing import Annotated, Any, Dict, Mapping, Optional, Protocol, runtime_checkable

from pydantic import AfterValidator, BaseModel, BeforeValidator, ConfigDict, Field, PlainSerializer

from funcbridge.core.raw import RawPayload

# .NET writes seven fractional digits; datetime holds six.
_FRACTION = re.compile(r"(\.\d{6})\d+")


def _trim_fraction(value: Any) -> Any:
    if isinstance(value, str):
        return _FRACTION.sub(r"\1", value, count=1)
    return value


HostDateTime = Annotated[datetime, BeforeValidator(_trim_fraction)]


@runtime_checkable
class Trigger(Protocol):
    """Capability shared by every decoded trigger kind."""

    def parse(self, target: Any = Any) -> Any:
        ...

    def data(self) -> Optional[RawPayload]:
        ...


class WireModel(BaseModel):
    """Base for models decoded from host documents.

    Wire names are mapped to attributes through ``Field(alias=...)``;
    attributes can also be populated by name when built in code.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, validate_default=True)


class MetadataSys(WireModel):
    # MethodName -> method_name, UtcNow -> utc_now, RandGuid -> rand_guid
    method_name: Optional[str] = Field(default=None, alias="MethodName")
    utc_now: Optional[HostDateTime] = Field(default=None, alias="UtcNow")
    rand_guid: Optional[str] = Field(default=None, alias="RandGuid")


class Metadata(WireModel):
    """Metadata common to all trigger kinds.

    Keys the model does not know are kept as extra attributes.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="allow")

    sys: MetadataSys = Field(default_factory=MetadataSys, alias="sys")


def _dump_mapping(value: Mapping[str, Any]) -> Dict[str, Any]:
    return dict(value)


# Validated as a dict, then exposed through a read-only view.
FrozenDict = Annotated[
    Dict[str, Any],
    AfterValidator(MappingProxyType),
    PlainSerializer(_dump_mapping, return_type=Dict[str, Any]),
]
FrozenStrDict = Annotated[
    Dict[str, str],
    AfterValidator(MappingProxyType),
    PlainSerializer(_dump_mapping, return_type=Dict[str, str]),
]

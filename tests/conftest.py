from __future__ import annotations

import io
import json
from typing import Any, Dict, Optional

import pytest


class TrackingStream(io.BytesIO):
    """BytesIO that counts reads and closes."""

    def __init__(self, data: bytes):
        super().__init__(data)
        self.read_calls = 0
        self.close_calls = 0

    def read(self, *args: Any) -> bytes:
        self.read_calls += 1
        return super().read(*args)

    def close(self) -> None:
        self.close_calls += 1
        super().close()


def http_envelope(
    *,
    body: Any = "",
    headers: Optional[Dict[str, Any]] = None,
    metadata: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    return {
        "Data": {
            "req": {
                "Url": "http://localhost:7071/api/orders",
                "Method": "POST",
                "Body": body,
                "Headers": headers if headers is not None else {"Content-Type": ["application/json"]},
                "Params": {"id": "42"},
                "Query": {"verbose": "true"},
                "Identities": [
                    {
                        "IsAuthenticated": False,
                        "AuthenticationType": None,
                        "NameClaimType": "http://schemas.xmlsoap.org/ws/2005/05/identity/claims/name",
                        "RoleClaimType": "http://schemas.microsoft.com/ws/2008/06/identity/claims/role",
                        "Actor": None,
                        "BootstrapContext": None,
                        "Label": None,
                        "Name": None,
                        "Claims": [
                            {
                                "Issuer": "LOCAL AUTHORITY",
                                "OriginalIssuer": "LOCAL AUTHORITY",
                                "Type": "http://schemas.microsoft.com/2017/07/functions/claims/authlevel",
                                "Value": "Admin",
                                "ValueType": "http://www.w3.org/2001/XMLSchema#string",
                                "Properties": {},
                            }
                        ],
                    }
                ],
            }
        },
        "Metadata": metadata
        if metadata is not None
        else {
            "Headers": {"Content-Type": "application/json"},
            "Params": {"id": "42"},
            "Query": {"verbose": "true"},
            "sys": {
                "MethodName": "orders",
                "UtcNow": "2024-03-01T12:30:00.1234567Z",
                "RandGuid": "9f1c0a53-6b5e-4d7e-a8b4-0d6f1e2c3b4a",
            },
        },
    }


def timer_envelope(*, is_past_due: bool = False) -> Dict[str, Any]:
    return {
        "Data": {
            "timer": {
                "ScheduleStatus": {
                    "Last": "2024-03-01T12:25:00.0017083+00:00",
                    "Next": "2024-03-01T12:30:00+00:00",
                    "LastUpdated": "2024-03-01T12:25:00.0017083+00:00",
                },
                "Schedule": {"AdjustForDST": True},
                "IsPastDue": is_past_due,
            }
        },
        "Metadata": {
            "sys": {
                "MethodName": "cleanup",
                "UtcNow": "2024-03-01T12:30:00.0042Z",
                "RandGuid": "0b7e9c1d-2f3a-4b5c-8d9e-0f1a2b3c4d5e",
            }
        },
    }


def to_stream(document: Any) -> TrackingStream:
    if isinstance(document, (bytes, bytearray)):
        return TrackingStream(bytes(document))
    if isinstance(document, str):
        return TrackingStream(document.encode("utf-8"))
    return TrackingStream(json.dumps(document).encode("utf-8"))


@pytest.fixture
def make_stream():
    return to_stream

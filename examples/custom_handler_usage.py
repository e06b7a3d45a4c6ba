"""
Example: Decoding triggers inside a custom handler.

The function host forwards each invocation to the handler as an HTTP POST
whose body is the invocation envelope. Whatever serves that request hands
funcbridge the body stream; funcbridge reads it once and closes it.
"""

import io
import json

from pydantic import BaseModel

from funcbridge import HTTPInvalidBodyError, HTTPInvalidContentTypeError, new_http, new_timer
from funcbridge.bindings import new_binding_options, with_body, with_header, with_status_code


class OrderRequest(BaseModel):
    sku: str
    quantity: int


# =============================================================================
# Example 1: HTTP trigger with a JSON body
# =============================================================================
envelope = {
    "Data": {
        "req": {
            "Url": "http://localhost:7071/api/orders",
            "Method": "POST",
            "Body": '{"sku": "A-100", "quantity": 2}',
            "Headers": {"Content-Type": ["application/json"]},
        }
    },
    "Metadata": {"sys": {"MethodName": "orders", "RandGuid": "3c5f0e9a"}},
}

trigger = new_http(io.BytesIO(json.dumps(envelope).encode("utf-8")))
order = trigger.parse(OrderRequest)
print(f"{trigger.method} {trigger.url}: {order.quantity} x {order.sku}")

# Form data is only available for form-encoded requests
try:
    trigger.form_data()
except (HTTPInvalidContentTypeError, HTTPInvalidBodyError) as e:
    print(f"No form data: {e}")

# Prepare the output binding; serializing it back to the host is up to the handler
response = new_binding_options(
    with_status_code(201),
    with_header({"Content-Type": "application/json"}),
    with_header({"Cache-Control": ["no-cache", "no-store"]}),
    with_body({"accepted": True}),
)
print(response.status_code, dict(response.header), response.body.text)


# =============================================================================
# Example 2: Timer trigger
# =============================================================================
timer_envelope = {
    "Data": {
        "timer": {
            "ScheduleStatus": {"Last": "2024-03-01T12:25:00+00:00", "Next": "2024-03-01T12:30:00+00:00"},
            "Schedule": {"AdjustForDST": True},
            "IsPastDue": False,
        }
    },
    "Metadata": {},
}

timer = new_timer(io.BytesIO(json.dumps(timer_envelope).encode("utf-8")))
print(f"Next run at {timer.schedule_status.next.isoformat()}, past due: {timer.is_past_due}")

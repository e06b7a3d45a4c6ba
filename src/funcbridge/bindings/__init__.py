from funcbridge.bindings.options import (
    BindingOption,
    BindingOptions,
    new_binding_options,
    with_body,
    with_data,
    with_header,
    with_name,
    with_status_code,
)

__all__ = [
    "BindingOption",
    "BindingOptions",
    "new_binding_options",
    "with_body",
    "with_data",
    "with_header",
    "with_name",
    "with_status_code",
]

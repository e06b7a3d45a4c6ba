import pytest
from pydantic import BaseModel, ValidationError

from funcbridge.core.raw import RawPayload


class Order(BaseModel):
    a: int


def test_from_wire_keeps_string_bytes_unchanged():
    raw = RawPayload.from_wire("x=1&y=%20")
    assert raw == b"x=1&y=%20"


def test_from_wire_reencodes_json_values_compactly():
    raw = RawPayload.from_wire({"b": 2, "a": [1, "é"]})
    assert raw == '{"b":2,"a":[1,"é"]}'.encode("utf-8")


def test_from_wire_null_is_empty():
    assert RawPayload.from_wire(None) == b""


def test_equality_is_byte_equality():
    assert RawPayload(b"abc") == b"abc"
    assert RawPayload(b"abc") == RawPayload.from_wire("abc")
    assert RawPayload(b"abc") != RawPayload(b"abd")


def test_parse_into_model():
    order = RawPayload(b'{"a": 1}').parse(Order)
    assert order.a == 1


def test_parse_defaults_to_plain_json():
    assert RawPayload(b'{"a": [1, 2]}').parse() == {"a": [1, 2]}


def test_parse_can_run_again_with_another_shape():
    raw = RawPayload(b'{"a": 1}')
    assert raw.parse(Order).a == 1
    assert raw.parse(dict) == {"a": 1}


def test_parse_invalid_json_raises_validation_error():
    with pytest.raises(ValidationError):
        RawPayload(b"not-json").parse(Order)


def test_text_and_repr():
    raw = RawPayload(b"hello")
    assert raw.text == "hello"
    assert repr(raw) == "RawPayload(b'hello')"
    assert "... (60 bytes)" in repr(RawPayload(b"x" * 60))

"""
Unit tests for sns_output.core.message_attributes.

These tests validate attribute typing:
- string / number / string-array values map to the right kind
- key order is preserved
- non-string arrays are dropped with a warning, siblings kept
- other unsupported shapes are dropped quietly
- empty or malformed input yields None (no attributes), never an exception
"""

from __future__ import annotations

import logging

import pytest

from sns_output.core.message_attributes import (
    classify_attribute,
    load_attribute_object,
    parse_message_attributes,
)
from sns_output.domain.errors import AttributeParseError, UnsupportedAttributeShapeWarning
from sns_output.domain.models import AttributeKind, AttributeValue


def test_parse_string_and_number_attributes() -> None:
    """
    The documented two-key example should map to String and Number.
    """
    attrs = parse_message_attributes('{"channel": "x", "severity": 5}')
    assert attrs == {
        "channel": AttributeValue(AttributeKind.STRING, "x"),
        "severity": AttributeValue(AttributeKind.NUMBER, 5),
    }


def test_parse_string_array_attribute_keeps_order() -> None:
    """
    A list of strings should become a String.Array with order preserved.
    """
    attrs = parse_message_attributes('{"channel": ["b", "a", "c"]}')
    assert attrs is not None
    assert attrs["channel"].kind is AttributeKind.STRING_ARRAY
    assert list(attrs["channel"].value) == ["b", "a", "c"]


def test_parse_number_keeps_original_numeric_type() -> None:
    """
    Integers stay int and floats stay float; neither becomes text.
    """
    attrs = parse_message_attributes('{"count": 123, "ratio": 0.25}')
    assert attrs is not None
    assert attrs["count"].value == 123 and isinstance(attrs["count"].value, int)
    assert attrs["ratio"].value == 0.25 and isinstance(attrs["ratio"].value, float)


def test_parse_preserves_key_order() -> None:
    """
    Keys should appear in the same order as in the source JSON object.
    """
    attrs = parse_message_attributes('{"z": "1", "a": 2, "m": ["x"]}')
    assert attrs is not None
    assert list(attrs) == ["z", "a", "m"]


def test_parse_drops_non_string_array_and_keeps_siblings(caplog) -> None:
    """
    An array with a non-string element is dropped and logged; other keys remain.
    """
    with caplog.at_level(logging.WARNING, logger="sns_output.attributes"):
        attrs = parse_message_attributes('{"bad": ["a", 1], "good": "ok"}')

    assert attrs == {"good": AttributeValue.string("ok")}
    assert any("bad" in r.getMessage() for r in caplog.records)


@pytest.mark.parametrize("value", ['{"a": 1}', "true", "false", "null"])
def test_parse_drops_other_unsupported_shapes(value: str) -> None:
    """
    Nested objects, booleans and null are dropped from the map.
    """
    attrs = parse_message_attributes(f'{{"x": {value}, "keep": "y"}}')
    assert attrs == {"keep": AttributeValue.string("y")}


def test_parse_valid_object_without_recognised_keys_is_empty_map() -> None:
    """
    A valid object with nothing usable gives {} (distinct from None).
    """
    assert parse_message_attributes('{"flag": true}') == {}
    assert parse_message_attributes("{}") == {}


@pytest.mark.parametrize("text", [None, ""])
def test_parse_empty_input_yields_none(text) -> None:
    """
    Missing attribute text means no attributes at all.
    """
    assert parse_message_attributes(text) is None


@pytest.mark.parametrize("text", ["{not json", '["a", "b"]', '"scalar"', "42"])
def test_parse_malformed_or_non_object_yields_none(text: str, caplog) -> None:
    """
    Malformed JSON or a non-object root is reported, not raised.
    """
    with caplog.at_level(logging.ERROR, logger="sns_output.attributes"):
        assert parse_message_attributes(text) is None
    assert caplog.records


def test_load_attribute_object_raises_parse_error() -> None:
    """
    The strict loader raises AttributeParseError for bad input.
    """
    with pytest.raises(AttributeParseError):
        load_attribute_object("{oops")
    with pytest.raises(AttributeParseError):
        load_attribute_object("[]")


def test_classify_attribute_rejects_bool_as_number() -> None:
    """
    bool is an int subclass in Python but must not map to Number.
    """
    with pytest.raises(UnsupportedAttributeShapeWarning) as exc:
        classify_attribute("flag", True)
    assert exc.value.key == "flag"


def test_classify_attribute_empty_list_is_string_array() -> None:
    """
    An empty list trivially holds only strings.
    """
    assert classify_attribute("k", []) == AttributeValue.string_array([])


@pytest.mark.parametrize(
    "text",
    ['{"a": "x", "n": NaN}', '{"i": Infinity}', '{"a": "x", "i": -Infinity}'],
)
def test_parse_non_standard_number_constants_yield_none(text: str) -> None:
    """
    NaN / Infinity are not JSON; the whole attribute text is treated as malformed.
    """
    assert parse_message_attributes(text) is None
    with pytest.raises(AttributeParseError):
        load_attribute_object(text)

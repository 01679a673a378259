"""
Message attribute parsing.

Attributes arrive as JSON text on the event (``sns_message_attribute``) and
are decoded once here into :class:`~sns_output.domain.models.AttributeValue`
variants. Downstream code never inspects raw JSON values again.

Accepted shapes
---------------
- string            -> ``String``
- int / float       -> ``Number`` (original numeric type kept)
- list of strings   -> ``String.Array`` (order kept)

Anything else is dropped per key. A list holding a non-string element is
logged; other unsupported shapes (objects, booleans, null) are dropped quietly.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, Optional

from sns_output.domain.errors import AttributeParseError, UnsupportedAttributeShapeWarning
from sns_output.domain.models import AttributeMap, AttributeValue

log = logging.getLogger("sns_output.attributes")


def _reject_constant(name: str) -> Any:
    raise ValueError(f"{name} is not valid JSON")


def load_attribute_object(text: str) -> Dict[str, Any]:
    """
    Strictly decode attribute JSON text into a dictionary.

    Parameters
    ----------
    text
        JSON text expected to hold an object at the root.

    Returns
    -------
    dict
        Decoded object with key order preserved.

    Raises
    ------
    AttributeParseError
        If the text is not valid JSON or the root is not an object.
    """
    try:
        data = json.loads(text, parse_constant=_reject_constant)
    except (TypeError, ValueError) as e:
        raise AttributeParseError(f"Invalid message attribute JSON: {e}") from e
    if not isinstance(data, dict):
        raise AttributeParseError(
            f"Message attributes must be a JSON object, got {type(data).__name__}"
        )
    return data


def classify_attribute(key: str, value: Any) -> AttributeValue:
    """
    Map one decoded JSON value onto the attribute wire schema.

    Raises
    ------
    UnsupportedAttributeShapeWarning
        If the value cannot be represented.
    """
    if isinstance(value, str):
        return AttributeValue.string(value)
    # bool is an int subclass; JSON true/false is not a number here.
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return AttributeValue.number(value)
    if isinstance(value, list):
        if all(isinstance(item, str) for item in value):
            return AttributeValue.string_array(value)
        raise UnsupportedAttributeShapeWarning(key, "array contains non-string elements")
    raise UnsupportedAttributeShapeWarning(key, f"unsupported type {type(value).__name__}")


def parse_message_attributes(text: Optional[str]) -> Optional[AttributeMap]:
    """
    Parse attribute JSON text into a typed attribute map.

    Parameters
    ----------
    text
        Raw attribute JSON, or None / empty when the event carries none.

    Returns
    -------
    dict or None
        ``None`` when there is nothing usable to send (no text, or text that
        does not parse). Otherwise a possibly-empty map of recognised keys.
    """
    if not text:
        return None

    try:
        raw = load_attribute_object(text)
    except AttributeParseError as e:
        log.error("Error while parsing message attributes, sending without them: %s", e)
        return None

    attributes: AttributeMap = {}
    for key, value in raw.items():
        try:
            attributes[key] = classify_attribute(key, value)
        except UnsupportedAttributeShapeWarning as w:
            if isinstance(value, list):
                log.warning("%s. Message attributes: %s", w, text)
            else:
                log.debug("%s", w)
    return attributes

"""
Notification domain models.

This module defines the data shapes that flow through the message-shaping
core: the typed attribute variant decoded once at the parse boundary, the
two-variant message body produced by the field resolver, and the final
immutable publish request handed to a publisher.

None of these objects outlive a single publish call.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Sequence, Tuple, Union

Event = Mapping[str, Any]


class AttributeKind(str, Enum):
    """
    Wire data type of a message attribute.

    Members
    -------
    STRING : str
        Plain text value.
    NUMBER : str
        Integer or floating-point value.
    STRING_ARRAY : str
        Ordered sequence of text values.
    """

    STRING = "String"
    NUMBER = "Number"
    STRING_ARRAY = "String.Array"


@dataclass(frozen=True)
class AttributeValue:
    """
    Tagged attribute value.

    Use the ``string`` / ``number`` / ``string_array`` constructors rather than
    building instances directly; they keep ``kind`` and ``value`` consistent.

    Parameters
    ----------
    kind
        Attribute data type.
    value
        Payload matching ``kind``: ``str``, ``int``/``float`` or a tuple of ``str``.
    """

    kind: AttributeKind
    value: Union[str, int, float, Tuple[str, ...]]

    @classmethod
    def string(cls, value: str) -> "AttributeValue":
        return cls(kind=AttributeKind.STRING, value=value)

    @classmethod
    def number(cls, value: Union[int, float]) -> "AttributeValue":
        return cls(kind=AttributeKind.NUMBER, value=value)

    @classmethod
    def string_array(cls, values: Sequence[str]) -> "AttributeValue":
        return cls(kind=AttributeKind.STRING_ARRAY, value=tuple(values))


AttributeMap = Dict[str, AttributeValue]


@dataclass(frozen=True)
class RawText:
    """Message text taken verbatim from the event; bypasses the codec."""

    text: str


@dataclass(frozen=True)
class NeedsEncoding:
    """A value (a field or the whole event) that must go through the codec."""

    value: Any


MessageBody = Union[RawText, NeedsEncoding]


@dataclass(frozen=True)
class ResolvedFields:
    """
    Notification fields extracted from one event.

    Parameters
    ----------
    destination
        Topic identifier, or None when neither the event nor configuration has one.
    subject
        Final subject text (before truncation).
    body
        Raw text or a value still to be encoded.
    attribute_json
        Raw attribute JSON text; empty string when the event carries none.
    """

    destination: Optional[str]
    subject: str
    body: MessageBody
    attribute_json: str = ""


@dataclass(frozen=True)
class NotificationRequest:
    """
    Fully-formed publish request.

    Parameters
    ----------
    destination
        Non-empty topic identifier.
    subject
        Subject trimmed to the backend limit.
    message
        Body trimmed to the backend limit.
    attributes
        Typed attributes, or None when the request must be sent without an
        attributes block at all. An empty dict is a valid, distinct value.
    """

    destination: str
    subject: str
    message: str
    attributes: Optional[AttributeMap] = None

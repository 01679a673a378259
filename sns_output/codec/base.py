from __future__ import annotations

from typing import Any, Protocol


class Codec(Protocol):
    """
    Protocol interface for message body encoding.

    Any object with a synchronous ``encode(value) -> str`` method can be used.
    The returned text is the final message body (before truncation).

    Methods
    -------
    encode(value)
        Encode an event, or a single non-text field value, into text.
    """

    def encode(self, value: Any) -> str:
        ...

from __future__ import annotations

from typing import Optional

from sns_output.codec.base import Codec
from sns_output.codec.json_codec import JsonCodec
from sns_output.codec.plain_codec import PlainCodec


def build_codec(name: str = "json", format: Optional[str] = None) -> Codec:
    """
    Build a codec by name.

    Raises
    ------
    ValueError
        If ``name`` is not a known codec.
    """
    key = (name or "json").strip().lower()
    if key == "json":
        return JsonCodec()
    if key == "plain":
        return PlainCodec(format=format)
    raise ValueError(f"Unknown codec: {name!r} (expected 'json' or 'plain')")

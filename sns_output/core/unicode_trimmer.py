from __future__ import annotations

from typing import Optional


def trim_bytes(
    text: str,
    max_bytes: int,
    max_chars: Optional[int] = None,
    encoding: str = "utf-8",
) -> str:
    """
    Trim text to at most ``max_bytes`` encoded bytes without splitting a character.

    Parameters
    ----------
    text
        Input text.
    max_bytes
        Byte budget for the encoded result. Values <= 0 yield ``""``.
    max_chars
        Optional ceiling on the number of characters kept.
    encoding
        Encoding used to measure byte length.

    Returns
    -------
    str
        The longest character prefix of ``text`` that fits both limits. The
        input object itself is returned when it already fits.
    """
    if max_bytes <= 0 or (max_chars is not None and max_chars <= 0):
        return ""

    fits_chars = max_chars is None or len(text) <= max_chars
    if fits_chars and len(text.encode(encoding)) <= max_bytes:
        return text

    limit = len(text) if max_chars is None else min(len(text), max_chars)
    used = 0
    end = 0
    while end < limit:
        size = len(text[end].encode(encoding))
        if used + size > max_bytes:
            break
        used += size
        end += 1
    return text[:end]

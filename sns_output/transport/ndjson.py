from __future__ import annotations

import json
import logging
from typing import Any, Dict, Iterable, Iterator

log = logging.getLogger("sns_output.transport.ndjson")


def iter_json_objects(text: str) -> Iterator[Dict[str, Any]]:
    """
    Yield one or more JSON objects found in a string.

    This function is robust against inputs where multiple JSON objects are
    accidentally concatenated without delimiters, e.g.::

        '{"a": 1}{"b": 2}'

    Only dictionary objects are yielded (non-dict JSON like lists/strings are ignored).

    Parameters
    ----------
    text
        Input string potentially containing one or more JSON objects.

    Yields
    ------
    dict
        Parsed JSON objects (dictionaries) found in the input.

    Raises
    ------
    json.JSONDecodeError
        If a malformed JSON value is encountered.
    """
    s = text.strip()
    if not s:
        return

    dec = json.JSONDecoder()
    i = 0
    n = len(s)

    while i < n:
        while i < n and s[i].isspace():
            i += 1
        if i >= n:
            break

        obj, end = dec.raw_decode(s, i)
        if isinstance(obj, dict):
            yield obj
        i = end


def iter_events(lines: Iterable[str]) -> Iterator[Dict[str, Any]]:
    """
    Decode an NDJSON stream into event dictionaries.

    Blank lines are skipped. Malformed lines are logged and skipped
    (best-effort streaming); objects decoded before the bad spot on the same
    line are still yielded.

    Yields
    ------
    dict
        One event per JSON object.
    """
    for lineno, line in enumerate(lines, start=1):
        try:
            yield from iter_json_objects(line)
        except json.JSONDecodeError as e:
            log.warning("Skipping malformed event on line %d: %s", lineno, e)

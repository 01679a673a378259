from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any, Optional

from sns_output.core.field_resolver import to_json_text

_FIELD_REF = re.compile(r"%\{([^}]+)\}")


def _lookup(event: Mapping, ref: str) -> Any:
    """
    Read a field reference from an event.

    ``[a][b]`` style references walk nested mappings; anything else is a
    top-level field name.
    """
    if ref.startswith("["):
        current: Any = event
        for part in re.findall(r"\[([^\]]+)\]", ref):
            if not isinstance(current, Mapping):
                return None
            current = current.get(part)
        return current
    return event.get(ref)


def sprintf(template: str, event: Mapping) -> str:
    """
    Substitute ``%{field}`` references in ``template`` with event values.

    Unknown fields are left as the literal reference. Structured values are
    rendered as JSON.
    """

    def _sub(m: "re.Match[str]") -> str:
        value = _lookup(event, m.group(1))
        if value is None:
            return m.group(0)
        if isinstance(value, str):
            return value
        if isinstance(value, (Mapping, list)):
            return to_json_text(value)
        return str(value)

    return _FIELD_REF.sub(_sub, template)


class PlainCodec:
    """
    Encode values as plain text.

    Parameters
    ----------
    format
        Optional ``%{field}`` template applied to mapping values. Without a
        template a mapping renders as ``"<@timestamp> <host> <message>"``.
    """

    DEFAULT_FORMAT = "%{@timestamp} %{host} %{message}"

    def __init__(self, format: Optional[str] = None):
        self._format = format

    def encode(self, value: Any) -> str:
        if isinstance(value, Mapping):
            if self._format:
                return sprintf(self._format, value)
            parts = [value.get(k) for k in ("@timestamp", "host", "message")]
            return " ".join("" if p is None else str(p) for p in parts)
        return str(value)

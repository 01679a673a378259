from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any


class JsonCodec:
    """
    Encode values as compact JSON.

    Mappings (events included) become JSON objects. Values JSON cannot
    represent natively (datetimes, decimals, ...) are stringified.
    """

    def encode(self, value: Any) -> str:
        if isinstance(value, Mapping) and not isinstance(value, dict):
            value = dict(value)
        return json.dumps(value, separators=(",", ":"), ensure_ascii=False, default=str)

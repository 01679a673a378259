from __future__ import annotations

import json
from typing import Any, Dict, Protocol

from sns_output.domain.models import AttributeKind, AttributeMap, NotificationRequest


class Publisher(Protocol):
    """
    Protocol interface for notification delivery.

    Any publisher implementation can be used if it provides a
    ``publish(request)`` method. Implementations raise on failure and do not
    retry; the assembler turns the failure into a
    :class:`~sns_output.domain.errors.DispatchError`.

    Methods
    -------
    publish(request)
        Deliver one notification request.
    """

    def publish(self, request: NotificationRequest) -> None:
        """
        Deliver one notification request.

        Parameters
        ----------
        request
            Fully-formed request. ``request.attributes`` is None when no
            attributes block may be sent.
        """
        ...


def attributes_to_wire(attributes: AttributeMap) -> Dict[str, Dict[str, Any]]:
    """
    Convert typed attributes to the SNS ``MessageAttributes`` wire form.

    Numbers and string arrays travel as ``StringValue`` text, as the SNS API
    requires.
    """
    wire: Dict[str, Dict[str, Any]] = {}
    for key, attr in attributes.items():
        if attr.kind is AttributeKind.STRING:
            text = attr.value
        elif attr.kind is AttributeKind.NUMBER:
            text = str(attr.value)
        else:
            text = json.dumps(list(attr.value), ensure_ascii=False)
        wire[key] = {"DataType": attr.kind.value, "StringValue": text}
    return wire

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Optional

from sns_output.domain.models import Event, MessageBody, NeedsEncoding, RawText, ResolvedFields

NO_SUBJECT = "NO SUBJECT"


@dataclass(frozen=True)
class EventFieldNames:
    """
    Event field names the resolver reads.

    Parameters
    ----------
    destination
        Per-event destination override.
    subject
        Subject line.
    message
        Message body.
    message_attribute
        Attribute JSON text.
    host
        Subject fallback.
    """

    destination: str = "sns"
    subject: str = "sns_subject"
    message: str = "sns_message"
    message_attribute: str = "sns_message_attribute"
    host: str = "host"


def to_json_text(value: Any) -> str:
    """Canonical compact JSON text for a non-text event value."""
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False, default=str)


class NotificationFieldResolver:
    """
    Extracts notification fields from a loosely-structured event.

    The resolver holds only read-only configuration, so one instance can be
    shared by any number of worker threads.

    Parameters
    ----------
    default_destination
        Destination used when the event does not carry one.
    fields
        Event field names to read.
    """

    def __init__(self, default_destination: Optional[str] = None, fields: EventFieldNames | None = None):
        self._default_destination = default_destination or None
        self._fields = fields or EventFieldNames()

    @property
    def default_destination(self) -> Optional[str]:
        return self._default_destination

    def resolve(self, event: Event) -> ResolvedFields:
        """
        Resolve destination, subject, body and attribute text for one event.

        A missing destination is not an error here; assembly rejects it.
        """
        return ResolvedFields(
            destination=self.destination(event),
            subject=self.subject(event),
            body=self.body(event),
            attribute_json=self.attribute_json(event),
        )

    def destination(self, event: Event) -> Optional[str]:
        value = event.get(self._fields.destination)
        if value:
            return str(value)
        return self._default_destination

    def subject(self, event: Event) -> str:
        value = event.get(self._fields.subject)
        if isinstance(value, str):
            return value
        if value is not None:
            return to_json_text(value)

        host = event.get(self._fields.host)
        if isinstance(host, str):
            return host
        if host is not None:
            return to_json_text(host)
        return NO_SUBJECT

    def body(self, event: Event) -> MessageBody:
        """
        Decide whether the message is ready text or must be encoded.

        Returns
        -------
        RawText
            When the message field holds text.
        NeedsEncoding
            Wrapping the message field when it holds another value, or the
            whole event when the field is absent.
        """
        value = event.get(self._fields.message)
        if isinstance(value, str):
            return RawText(value)
        if value is not None:
            return NeedsEncoding(value)
        return NeedsEncoding(event)

    def attribute_json(self, event: Event) -> str:
        value = event.get(self._fields.message_attribute)
        if value is None:
            return ""
        if isinstance(value, str):
            return value
        # Structured attribute objects are accepted and re-serialised.
        return to_json_text(value)

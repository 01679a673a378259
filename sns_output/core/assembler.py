"""
Notification assembly and dispatch.

The assembler is the one place where backend limits and the destination
precondition are enforced. It turns resolved fields into a
:class:`~sns_output.domain.models.NotificationRequest` and hands it to the
configured :class:`~sns_output.transport.base.Publisher`.
"""

from __future__ import annotations

import logging
from typing import Optional

from sns_output.codec.base import Codec
from sns_output.codec.json_codec import JsonCodec
from sns_output.core.message_attributes import parse_message_attributes
from sns_output.core.unicode_trimmer import trim_bytes
from sns_output.domain.errors import ConfigurationError, DispatchError, EncodingError
from sns_output.domain.models import MessageBody, NeedsEncoding, NotificationRequest, ResolvedFields
from sns_output.transport.base import Publisher

log = logging.getLogger("sns_output.assembler")

MAX_SUBJECT_SIZE_IN_CHARACTERS = 100
MAX_MESSAGE_SIZE_IN_BYTES = 32768


def _require_destination(destination: Optional[str]) -> str:
    if not destination:
        raise ConfigurationError(
            "A destination is required: set a default topic or the event's destination field"
        )
    return destination


class NotificationAssembler:
    """
    Builds publish requests and dispatches them.

    Parameters
    ----------
    publisher
        Long-lived publisher handle. Must be safe for concurrent use if the
        assembler is shared across worker threads.
    codec
        Encoder for message bodies that are not already text.
    """

    def __init__(self, publisher: Publisher, codec: Codec | None = None):
        self._publisher = publisher
        self._codec = codec or JsonCodec()

    @property
    def codec(self) -> Codec:
        return self._codec

    def render_body(self, body: MessageBody) -> str:
        """
        Return final body text, running the codec when needed.

        Raises
        ------
        EncodingError
            If the codec fails.
        """
        if isinstance(body, NeedsEncoding):
            try:
                return self._codec.encode(body.value)
            except Exception as e:
                raise EncodingError(f"Codec failed to encode message: {type(e).__name__}: {e}") from e
        return body.text

    def assemble(
        self,
        destination: Optional[str],
        subject: str,
        message: str,
        attribute_json: Optional[str] = None,
    ) -> NotificationRequest:
        """
        Build a request, enforcing size limits and the destination precondition.

        Parameters
        ----------
        destination
            Topic identifier; must be non-empty.
        subject
            Subject text, trimmed to 100 bytes.
        message
            Body text, trimmed to 32768 bytes.
        attribute_json
            Raw attribute JSON. Empty, None or unparseable text produces a
            request without an attributes block.

        Raises
        ------
        ConfigurationError
            If ``destination`` is empty or None.
        """
        return NotificationRequest(
            destination=_require_destination(destination),
            subject=trim_bytes(subject, MAX_SUBJECT_SIZE_IN_CHARACTERS),
            message=trim_bytes(message, MAX_MESSAGE_SIZE_IN_BYTES),
            attributes=parse_message_attributes(attribute_json),
        )

    def assemble_fields(self, fields: ResolvedFields) -> NotificationRequest:
        """Assemble a request from the resolver's output."""
        # Destination is checked before the codec runs.
        destination = _require_destination(fields.destination)
        return self.assemble(
            destination,
            fields.subject,
            self.render_body(fields.body),
            fields.attribute_json,
        )

    def publish(self, request: NotificationRequest) -> None:
        """
        Hand a request to the publisher.

        Raises
        ------
        DispatchError
            If the publisher fails. No retry is attempted.
        """
        log.debug(
            "Sending event to SNS topic [%s] with subject [%s] and message: %s",
            request.destination,
            request.subject,
            request.message,
        )
        try:
            self._publisher.publish(request)
        except Exception as e:
            raise DispatchError(request.destination, f"{type(e).__name__}: {e}") from e

    def send(
        self,
        destination: Optional[str],
        subject: str,
        message: str,
        attribute_json: Optional[str] = None,
    ) -> NotificationRequest:
        """Assemble and publish in one step; returns the request that was sent."""
        request = self.assemble(destination, subject, message, attribute_json)
        self.publish(request)
        return request

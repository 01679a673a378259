"""
Error taxonomy for the notification output.

Only ``ConfigurationError`` and ``DispatchError`` reach callers of
:meth:`~sns_output.core.assembler.NotificationAssembler.publish`. The attribute
errors are raised and absorbed inside the attribute mapper.
"""

from __future__ import annotations


class SnsOutputError(Exception):
    """Base class for errors surfaced by the output."""


class ConfigurationError(SnsOutputError, ValueError):
    """A notification cannot be built because required configuration is missing."""


class DispatchError(SnsOutputError):
    """
    The publisher failed to deliver a request.

    Parameters
    ----------
    destination
        Topic the request was addressed to.
    reason
        Human-readable failure description.
    """

    def __init__(self, destination: str, reason: str):
        super().__init__(f"Failed to publish to [{destination}]: {reason}")
        self.destination = destination
        self.reason = reason


class EncodingError(SnsOutputError):
    """The codec could not turn a value into message text."""


class AttributeParseError(SnsOutputError, ValueError):
    """Message attribute text is not a JSON object."""


class UnsupportedAttributeShapeWarning(UserWarning):
    """
    A single attribute value has a shape the wire schema cannot carry.

    Parameters
    ----------
    key
        Attribute name.
    reason
        Description of the rejected shape.
    """

    def __init__(self, key: str, reason: str):
        super().__init__(f"Attribute [{key}] dropped: {reason}")
        self.key = key
        self.reason = reason

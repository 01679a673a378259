from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

import requests

from sns_output.domain.models import NotificationRequest
from sns_output.transport.base import attributes_to_wire


@dataclass(frozen=True)
class WebhookConfig:
    """
    Configuration for webhook-based publishing.

    Parameters
    ----------
    url
        Target webhook URL (a topic bridge accepting JSON documents).
    timeout_s
        HTTP request timeout in seconds.
    verify_tls
        Whether to verify TLS certificates.
    auth_header
        Optional Authorization header value (e.g., Bearer token).
    """

    url: str
    timeout_s: float = 2.0
    verify_tls: bool = True
    auth_header: Optional[str] = None


def normalize_auth_header(value: Optional[str]) -> Optional[str]:
    """Prefix a bare token with ``Bearer``; leave full header values alone."""
    if not value:
        return None
    if " " in value.strip():
        return value
    return f"Bearer {value}"


class WebhookPublisher:
    """
    Publisher that delivers requests via HTTP webhook.

    The request is POSTed as JSON::

        {"destination": ..., "subject": ..., "message": ..., "attributes": {...}}

    ``attributes`` is omitted when the request carries none.

    Notes
    -----
    - This class performs side effects (network I/O).
    - HTTP errors are surfaced via ``raise_for_status()``.
    """

    def __init__(self, cfg: WebhookConfig):
        self._cfg = cfg

    def payload(self, request: NotificationRequest) -> Dict[str, Any]:
        doc: Dict[str, Any] = {
            "destination": request.destination,
            "subject": request.subject,
            "message": request.message,
        }
        if request.attributes is not None:
            doc["attributes"] = attributes_to_wire(request.attributes)
        return doc

    def publish(self, request: NotificationRequest) -> None:
        """
        POST the request to the configured webhook endpoint.

        Raises
        ------
        requests.HTTPError
            If the HTTP response status indicates an error.
        requests.RequestException
            For network-related errors.
        """
        headers = {"Content-Type": "application/json"}
        if self._cfg.auth_header:
            headers["Authorization"] = self._cfg.auth_header

        r = requests.post(
            self._cfg.url,
            json=self.payload(request),
            headers=headers,
            timeout=self._cfg.timeout_s,
            verify=self._cfg.verify_tls,
        )
        r.raise_for_status()

"""
Unit tests for sns_output.transport.webhook_publisher.

These tests validate webhook publishing using mocked HTTP calls:
- correct request parameters passed to requests.post
- Authorization header handling
- attributes block omitted when the request has none
- HTTP error propagation via raise_for_status()

No real network requests are made.
"""

from __future__ import annotations

from typing import Any, Dict
from unittest.mock import MagicMock

import pytest

from sns_output.domain.models import AttributeValue, NotificationRequest
from sns_output.transport.webhook_publisher import WebhookConfig, WebhookPublisher, normalize_auth_header

ARN = "arn:aws:sns:us-east-1:999999999:test-topic"


def _mk_request(attributes=None) -> NotificationRequest:
    return NotificationRequest(destination=ARN, subject="subj", message="msg", attributes=attributes)


def test_webhook_publisher_posts_request_without_auth(monkeypatch) -> None:
    """
    publish() should POST the request document with correct headers and options
    when no auth header is configured.
    """
    mock_response = MagicMock()
    mock_response.raise_for_status.return_value = None

    def fake_post(
        url: str,
        json: Dict[str, Any],
        headers: Dict[str, str],
        timeout: float,
        verify: bool,
    ):
        assert url == "https://example.com/publish"
        assert json == {"destination": ARN, "subject": "subj", "message": "msg"}
        assert headers == {"Content-Type": "application/json"}
        assert timeout == 3.0
        assert verify is False
        return mock_response

    monkeypatch.setattr("requests.post", fake_post)

    cfg = WebhookConfig(url="https://example.com/publish", timeout_s=3.0, verify_tls=False)
    WebhookPublisher(cfg).publish(_mk_request())

    mock_response.raise_for_status.assert_called_once()


def test_webhook_publisher_sends_attributes_and_auth_header(monkeypatch) -> None:
    mock_response = MagicMock()
    seen: Dict[str, Any] = {}

    def fake_post(url, json, headers, timeout, verify):
        seen.update(json=json, headers=headers)
        return mock_response

    monkeypatch.setattr("requests.post", fake_post)

    cfg = WebhookConfig(url="https://example.com/publish", auth_header="Bearer TOKEN")
    WebhookPublisher(cfg).publish(_mk_request({"channel": AttributeValue.string("x")}))

    assert seen["headers"]["Authorization"] == "Bearer TOKEN"
    assert seen["json"]["attributes"] == {"channel": {"DataType": "String", "StringValue": "x"}}


def test_webhook_publisher_propagates_http_error(monkeypatch) -> None:
    """
    publish() should propagate HTTP errors raised by raise_for_status().
    """
    mock_response = MagicMock()
    mock_response.raise_for_status.side_effect = Exception("HTTP 500")

    def fake_post(*args, **kwargs):
        return mock_response

    monkeypatch.setattr("requests.post", fake_post)

    with pytest.raises(Exception):
        WebhookPublisher(WebhookConfig(url="https://example.com/publish")).publish(_mk_request())


@pytest.mark.parametrize(
    "value,expected",
    [
        (None, None),
        ("", None),
        ("TOKEN", "Bearer TOKEN"),
        ("Bearer TOKEN", "Bearer TOKEN"),
        ("Basic abc=", "Basic abc="),
    ],
)
def test_normalize_auth_header(value, expected) -> None:
    assert normalize_auth_header(value) == expected

"""
Unit tests for sns_output.transport.sns_publisher.

These tests validate the SNS request mapping using a mocked boto3 client:
- TopicArn / Subject / Message are passed through
- MessageAttributes omitted when the request has none
- empty attribute maps are still sent
- typed attributes use the SNS DataType / StringValue wire form

No real AWS calls are made.
"""

from __future__ import annotations

import json
from unittest.mock import MagicMock

import pytest

from sns_output.domain.models import AttributeValue, NotificationRequest
from sns_output.transport import sns_publisher
from sns_output.transport.base import attributes_to_wire
from sns_output.transport.sns_publisher import AwsConfig, SnsPublisher

ARN = "arn:aws:sns:us-east-1:999999999:test-topic"


def test_publish_without_attributes_omits_block() -> None:
    client = MagicMock()
    SnsPublisher(client).publish(NotificationRequest(ARN, "subj", "msg", None))

    client.publish.assert_called_once_with(TopicArn=ARN, Subject="subj", Message="msg")


def test_publish_with_empty_attributes_sends_empty_block() -> None:
    client = MagicMock()
    SnsPublisher(client).publish(NotificationRequest(ARN, "subj", "msg", {}))

    client.publish.assert_called_once_with(
        TopicArn=ARN, Subject="subj", Message="msg", MessageAttributes={}
    )


def test_publish_maps_typed_attributes() -> None:
    client = MagicMock()
    attrs = {
        "channel": AttributeValue.string("product channel"),
        "severity": AttributeValue.number(5),
        "tags": AttributeValue.string_array(["a", "b"]),
    }
    SnsPublisher(client).publish(NotificationRequest(ARN, "subj", "msg", attrs))

    sent = client.publish.call_args.kwargs["MessageAttributes"]
    assert sent["channel"] == {"DataType": "String", "StringValue": "product channel"}
    assert sent["severity"] == {"DataType": "Number", "StringValue": "5"}
    assert sent["tags"]["DataType"] == "String.Array"
    assert json.loads(sent["tags"]["StringValue"]) == ["a", "b"]


def test_attributes_to_wire_keeps_order() -> None:
    attrs = {"b": AttributeValue.number(1.5), "a": AttributeValue.string("x")}
    wire = attributes_to_wire(attrs)
    assert list(wire) == ["b", "a"]
    assert wire["b"]["StringValue"] == "1.5"


def test_publish_propagates_client_errors() -> None:
    client = MagicMock()
    client.publish.side_effect = RuntimeError("AccessDenied")
    with pytest.raises(RuntimeError):
        SnsPublisher(client).publish(NotificationRequest(ARN, "s", "m"))


def test_from_config_builds_client_with_settings(monkeypatch) -> None:
    """
    from_config should create a boto3 session with the configured credentials.
    """
    session = MagicMock()
    session_cls = MagicMock(return_value=session)
    monkeypatch.setattr(sns_publisher.boto3, "Session", session_cls)

    cfg = AwsConfig(
        region="eu-west-1",
        access_key_id="AKIA",
        secret_access_key="SECRET",
        endpoint="http://localhost:4566",
    )
    pub = SnsPublisher.from_config(cfg)

    session_cls.assert_called_once_with(
        aws_access_key_id="AKIA",
        aws_secret_access_key="SECRET",
        aws_session_token=None,
        profile_name=None,
        region_name="eu-west-1",
    )
    session.client.assert_called_once_with("sns", endpoint_url="http://localhost:4566")
    assert isinstance(pub, SnsPublisher)

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

import boto3

from sns_output.domain.models import NotificationRequest
from sns_output.transport.base import attributes_to_wire

log = logging.getLogger("sns_output.transport.sns")


@dataclass(frozen=True)
class AwsConfig:
    """
    AWS client settings.

    Parameters
    ----------
    region
        AWS region of the topics.
    access_key_id, secret_access_key, session_token
        Optional static credentials. When unset, boto3's default credential
        chain (environment, shared files, instance role) is used.
    profile
        Optional named profile from the shared credentials file.
    endpoint
        Optional endpoint URL override (e.g. a local SNS emulator).
    """

    region: str = "us-east-1"
    access_key_id: Optional[str] = None
    secret_access_key: Optional[str] = None
    session_token: Optional[str] = None
    profile: Optional[str] = None
    endpoint: Optional[str] = None


def build_sns_client(cfg: AwsConfig) -> Any:
    """Create a boto3 SNS client from :class:`AwsConfig`."""
    session = boto3.Session(
        aws_access_key_id=cfg.access_key_id,
        aws_secret_access_key=cfg.secret_access_key,
        aws_session_token=cfg.session_token,
        profile_name=cfg.profile,
        region_name=cfg.region,
    )
    kwargs: Dict[str, Any] = {}
    if cfg.endpoint:
        kwargs["endpoint_url"] = cfg.endpoint
    return session.client("sns", **kwargs)


class SnsPublisher:
    """
    Publisher that delivers requests to Amazon SNS topics.

    The boto3 client is created once and shared; boto3 clients are safe to
    use from several threads.

    Parameters
    ----------
    client
        A boto3 SNS client (or any object with a compatible ``publish``).
    """

    def __init__(self, client: Any):
        self._client = client

    @classmethod
    def from_config(cls, cfg: AwsConfig) -> "SnsPublisher":
        return cls(build_sns_client(cfg))

    def publish(self, request: NotificationRequest) -> None:
        """
        Call ``sns.publish`` for one request.

        Raises
        ------
        botocore.exceptions.BotoCoreError, botocore.exceptions.ClientError
            On transport or API failure.
        """
        body: Dict[str, Any] = {
            "TopicArn": request.destination,
            "Subject": request.subject,
            "Message": request.message,
        }
        if request.attributes is not None:
            body["MessageAttributes"] = attributes_to_wire(request.attributes)

        response = self._client.publish(**body) or {}
        log.debug("Published to [%s], message id %s", request.destination, response.get("MessageId"))

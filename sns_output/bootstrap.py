from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from sns_output.codec.factory import build_codec
from sns_output.config.yaml_config import OutputConfig, load_output_config
from sns_output.core.assembler import NotificationAssembler
from sns_output.core.boot_probe import BootProbe
from sns_output.core.field_resolver import NotificationFieldResolver
from sns_output.output import SnsOutput
from sns_output.runtime.output_worker_thread import OutputWorkerThread
from sns_output.transport.base import Publisher
from sns_output.transport.sns_publisher import SnsPublisher
from sns_output.transport.webhook_publisher import WebhookPublisher


@dataclass(frozen=True)
class OutputWiring:
    """Everything a host needs to run the output."""
    config: OutputConfig
    output: SnsOutput
    workers: OutputWorkerThread


def build_publisher(cfg: OutputConfig) -> Publisher:
    if cfg.webhook is not None:
        return WebhookPublisher(cfg.webhook)
    return SnsPublisher.from_config(cfg.aws)


def build_output(cfg: OutputConfig, publisher: Optional[Publisher] = None) -> SnsOutput:
    assembler = NotificationAssembler(
        publisher=publisher or build_publisher(cfg),
        codec=build_codec(cfg.codec.name, cfg.codec.format),
    )
    boot_probe = BootProbe(
        assembler,
        destination=cfg.sns.publish_boot_message_arn,
        abort_on_failure=cfg.sns.abort_on_boot_failure,
    )
    return SnsOutput(
        assembler=assembler,
        resolver=NotificationFieldResolver(default_destination=cfg.sns.arn),
        boot_probe=boot_probe,
    )


def wire_output(cfg: OutputConfig, publisher: Optional[Publisher] = None) -> OutputWiring:
    """Build the output, run its boot probe, and create the worker pool."""
    output = build_output(cfg, publisher=publisher)
    output.register()

    workers = OutputWorkerThread(output, cfg.worker)

    return OutputWiring(config=cfg, output=output, workers=workers)


def build_output_system(
    config_path: Optional[str] = None,
    publisher: Optional[Publisher] = None,
) -> OutputWiring:
    return wire_output(load_output_config(config_path), publisher=publisher)

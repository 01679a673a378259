from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Tuple

from sns_output.core.assembler import NotificationAssembler
from sns_output.core.boot_probe import BootProbe
from sns_output.core.field_resolver import NotificationFieldResolver
from sns_output.domain.errors import SnsOutputError
from sns_output.domain.models import Event, NotificationRequest

log = logging.getLogger("sns_output.output")


class SnsOutput:
    """
    Event output: resolve -> assemble -> publish, one event at a time.

    Holds no per-event state, so a single instance may be shared by many
    worker threads as long as the publisher is thread-safe.

    Parameters
    ----------
    assembler
        Builds and dispatches requests.
    resolver
        Extracts notification fields from events.
    boot_probe
        Optional startup probe run by :meth:`register`.
    """

    def __init__(
        self,
        assembler: NotificationAssembler,
        resolver: NotificationFieldResolver,
        boot_probe: Optional[BootProbe] = None,
    ):
        self._assembler = assembler
        self._resolver = resolver
        self._boot_probe = boot_probe

    def register(self) -> None:
        """Run the boot probe, if one is configured."""
        if self._boot_probe is not None:
            self._boot_probe.run()

    def receive(self, event: Event) -> NotificationRequest:
        """
        Publish one event.

        Returns
        -------
        NotificationRequest
            The request handed to the publisher.

        Raises
        ------
        ConfigurationError
            If no destination could be determined.
        EncodingError
            If the codec could not encode the message.
        DispatchError
            If the publisher failed.
        """
        fields = self._resolver.resolve(event)
        request = self._assembler.assemble_fields(fields)
        self._assembler.publish(request)
        return request

    def multi_receive(self, events: Iterable[Event]) -> List[Tuple[Event, SnsOutputError]]:
        """
        Publish a batch of events in order.

        A failing event does not stop the batch.

        Returns
        -------
        list of (event, error)
            Events that failed, with the error each raised.
        """
        failures: List[Tuple[Event, SnsOutputError]] = []
        for event in events:
            try:
                self.receive(event)
            except SnsOutputError as e:
                log.error("Dropping event: %s", e)
                failures.append((event, e))
        return failures

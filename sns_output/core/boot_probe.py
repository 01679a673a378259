from __future__ import annotations

import logging
from typing import Optional

from sns_output.core.assembler import NotificationAssembler
from sns_output.domain.errors import SnsOutputError

log = logging.getLogger("sns_output.boot")

BOOT_SUBJECT = "Service booted"
BOOT_MESSAGE = "Service successfully booted"


class BootProbe:
    """
    One-shot startup publish used to surface bad credentials or topics early.

    Parameters
    ----------
    assembler
        Assembler used to send the probe.
    destination
        Boot notification topic. When unset the probe does nothing.
    abort_on_failure
        Re-raise probe failures instead of logging them and continuing.
    """

    def __init__(
        self,
        assembler: NotificationAssembler,
        destination: Optional[str] = None,
        abort_on_failure: bool = False,
    ):
        self._assembler = assembler
        self._destination = destination or None
        self._abort_on_failure = abort_on_failure

    @property
    def enabled(self) -> bool:
        return self._destination is not None

    def run(self) -> bool:
        """
        Send the boot notification.

        Returns
        -------
        bool
            True when the probe was sent, False when disabled or when it
            failed and ``abort_on_failure`` is off.

        Raises
        ------
        ConfigurationError, DispatchError
            Only when ``abort_on_failure`` is on.
        """
        if not self.enabled:
            return False
        try:
            self._assembler.send(self._destination, BOOT_SUBJECT, BOOT_MESSAGE)
        except SnsOutputError:
            if self._abort_on_failure:
                raise
            log.exception("Boot notification to [%s] failed; continuing", self._destination)
            return False
        log.info("Boot notification sent to [%s]", self._destination)
        return True

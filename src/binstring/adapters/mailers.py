"""Mailer adapters."""

import logging
import threading
from dataclasses import dataclass

from binstring.interfaces.mailer import Mailer

# pylint: disable=too-few-public-methods,too-many-arguments,too-many-positional-arguments

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SentMessage:
    """A message accepted by `MemoryMailer`."""

    to: str
    subject: str
    message: str
    headers: str | None = None
    parameters: str | None = None


class MemoryMailer(Mailer):
    """Thread-safe mailer that keeps every message in memory.

    Note:
        Not a transport; useful for tests and as the default when no real
        transport is injected.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._sent: list[SentMessage] = []

    @property
    def sent(self) -> list[SentMessage]:
        """Messages accepted so far, oldest first."""
        with self._lock:
            return list(self._sent)

    def send(
        self,
        to: str,
        subject: str,
        message: str,
        headers: str | None = None,
        parameters: str | None = None,
    ) -> bool:
        with self._lock:
            self._sent.append(SentMessage(to, subject, message, headers, parameters))
        logger.debug("Accepted message for %s", to)
        return True

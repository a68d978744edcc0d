"""Plain primitives as they behave once overloaded.

When a family is overloaded, a plain call such as ``length(data)`` is served
by the multibyte subsystem with whatever encoding is ambient at the time. The
adapters here reproduce that: they satisfy the byte family interfaces but
count characters, not bytes. Nothing in the library routes a caller here on
purpose; the process runtime hands these out as its plain primitives so the
dispatcher has something real to protect callers from.
"""

from binstring.interfaces.mailer import Mailer
from binstring.interfaces.multibyte import MultiByteSubsystem
from binstring.interfaces.primitives import Registers, RegexPrimitives, StringPrimitives

# pylint: disable=too-many-arguments,too-many-positional-arguments


class OverloadedStrings(StringPrimitives):
    """String family served by the multibyte subsystem's internal encoding."""

    def __init__(self, subsystem: MultiByteSubsystem) -> None:
        self._mb = subsystem

    def length(self, data: bytes) -> int:
        return self._mb.length(data)

    def find(self, haystack: bytes, needle: bytes, offset: int = 0) -> int:
        return self._mb.find(haystack, needle, offset)

    def rfind(self, haystack: bytes, needle: bytes, offset: int = 0) -> int:
        return self._mb.rfind(haystack, needle, offset)

    def substr(self, data: bytes, start: int, length: int | None = None) -> bytes:
        return self._mb.substr(data, start, length)

    def lower(self, data: bytes) -> bytes:
        return self._mb.lower(data)

    def upper(self, data: bytes) -> bytes:
        return self._mb.upper(data)

    def substr_count(
        self,
        haystack: bytes,
        needle: bytes,
        offset: int = 0,
        length: int | None = None,
    ) -> int:
        # The encoding-aware count has no window.
        return self._mb.substr_count(haystack, needle)


class OverloadedRegex(RegexPrimitives):
    """Regex family served by the multibyte subsystem's regex encoding."""

    def __init__(self, subsystem: MultiByteSubsystem) -> None:
        self._mb = subsystem

    def match(self, pattern: bytes, data: bytes) -> Registers | None:
        return self._mb.match(pattern, data)

    def imatch(self, pattern: bytes, data: bytes) -> Registers | None:
        return self._mb.imatch(pattern, data)

    def replace(self, pattern: bytes, replacement: bytes, data: bytes) -> bytes:
        return self._mb.replace(pattern, replacement, data)

    def ireplace(self, pattern: bytes, replacement: bytes, data: bytes) -> bytes:
        return self._mb.ireplace(pattern, replacement, data)

    def split(self, pattern: bytes, data: bytes, limit: int = -1) -> list[bytes]:
        return self._mb.split(pattern, data, limit)


class OverloadedMailer(Mailer):
    """Mail served by the multibyte subsystem in its current language."""

    def __init__(self, subsystem: MultiByteSubsystem) -> None:
        self._mb = subsystem

    def send(
        self,
        to: str,
        subject: str,
        message: str,
        headers: str | None = None,
        parameters: str | None = None,
    ) -> bool:
        return self._mb.send_mail(to, subject, message, headers, parameters)

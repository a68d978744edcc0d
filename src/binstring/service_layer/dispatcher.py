"""Operation dispatcher: byte-exact string primitives over any host runtime.

`BinString` exposes one method per primitive. Every call picks one of three
routes from the capability record detected at construction:

* ``NATIVE``: the family is not overloaded; call the plain primitive, which
  is byte oriented.
* ``FORCED``: the family is overloaded; call the multibyte primitive with
  the single-byte codec forced, so each byte is one character.
* ``ORIGINAL``: the family is overloaded, the caller enabled
  `BinString.use_preserved_original`, and the runtime still exposes the
  original byte primitives; call those.

The dispatcher adds no error handling: whatever the chosen primitive returns
or raises reaches the caller unchanged.

Example:
    >>> from binstring.bootstrap import bootstrap
    >>> strings = bootstrap()
    >>> strings.length("café".encode())
    5
    >>> strings.substr(b"hello world", 6)
    b'world'
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import TYPE_CHECKING, cast

from binstring.config import SINGLE_BYTE_CODEC, SINGLE_BYTE_LANGUAGE
from binstring.domain.arguments import OMITTED, Omittable, is_omitted, supplied
from binstring.domain.capabilities import CapabilityRecord, Family

from .ambient import forced_language, forced_regex_encoding
from .detector import detect

if TYPE_CHECKING:
    from binstring.interfaces.multibyte import MultiByteSubsystem
    from binstring.interfaces.primitives import (
        PrimitiveSet,
        Registers,
        StringPrimitives,
    )
    from binstring.interfaces.runtime import HostRuntime

# pylint: disable=too-many-arguments,too-many-positional-arguments,too-many-public-methods

logger = logging.getLogger(__name__)


class Route(Enum):
    """Where a call is sent."""

    NATIVE = "native"
    FORCED = "forced"
    ORIGINAL = "original"


def _substr(
    strings: StringPrimitives, data: bytes, start: int, length: Omittable[int | None]
) -> bytes:
    if is_omitted(length):
        return strings.substr(data, start)
    return strings.substr(data, start, cast("int | None", length))


def _substr_count(
    strings: StringPrimitives,
    haystack: bytes,
    needle: bytes,
    offset: Omittable[int],
    length: Omittable[int | None],
) -> int:
    # A length is only accepted together with an offset.
    start = supplied(offset, 0)
    if is_omitted(length):
        return strings.substr_count(haystack, needle, start)
    return strings.substr_count(haystack, needle, start, cast("int | None", length))


class BinString:
    """Byte-exact facade over the host runtime's string primitives.

    Attributes:
        use_preserved_original: Escape hatch. When True and a family is
            overloaded, calls go to the runtime's preserved original byte
            primitives if it still exposes them. Read on every call; has no
            effect on families that are not overloaded.
    """

    def __init__(
        self, runtime: HostRuntime, *, use_preserved_original: bool = False
    ) -> None:
        self._runtime = runtime
        self.use_preserved_original = use_preserved_original
        self._reported_unreachable = False
        self._capabilities = detect(runtime)
        self._multibyte = runtime.load_multibyte()

    @property
    def capabilities(self) -> CapabilityRecord:
        """The capability record detected for the runtime."""
        return self._capabilities

    def refresh(self) -> CapabilityRecord:
        """Run capability detection again and return the new record."""
        self._capabilities = detect(self._runtime)
        self._multibyte = self._runtime.load_multibyte()
        return self._capabilities

    # --- Routing ---

    def route(self, family: Family) -> Route:
        """Return the route calls of ``family`` currently take."""
        if not self._capabilities.redirects(family):
            return Route.NATIVE
        if self.use_preserved_original:
            if self._runtime.original is not None:
                return Route.ORIGINAL
            if not self._reported_unreachable:
                logger.debug(
                    "Preserved originals requested but not exposed by the runtime; "
                    "forcing %s instead",
                    SINGLE_BYTE_CODEC,
                )
                self._reported_unreachable = True
        return Route.FORCED

    @property
    def _mb(self) -> MultiByteSubsystem:
        # The FORCED route is only taken when detection found the subsystem.
        return cast("MultiByteSubsystem", self._multibyte)

    @property
    def _original(self) -> PrimitiveSet:
        # The ORIGINAL route is only taken when the runtime exposes the originals.
        return cast("PrimitiveSet", self._runtime.original)

    # --- Mail ---

    def mail(
        self,
        to: str,
        subject: str,
        message: str,
        headers: str | None = None,
        parameters: str | None = None,
    ) -> bool:
        """Send a message, forcing latin-1 headers when mail is overloaded."""
        match self.route(Family.MAIL):
            case Route.ORIGINAL:
                return self._original.mail.send(to, subject, message, headers, parameters)
            case Route.FORCED:
                with forced_language(self._mb, SINGLE_BYTE_LANGUAGE):
                    return self._mb.send_mail(to, subject, message, headers, parameters)
            case _:
                return self._runtime.plain.mail.send(
                    to, subject, message, headers, parameters
                )

    # --- String family ---

    def length(self, data: bytes) -> int:
        """Return the number of bytes in ``data``."""
        match self.route(Family.STRINGS):
            case Route.ORIGINAL:
                return self._original.strings.length(data)
            case Route.FORCED:
                return self._mb.length(data, SINGLE_BYTE_CODEC)
            case _:
                return self._runtime.plain.strings.length(data)

    def find(self, haystack: bytes, needle: bytes, offset: int = 0) -> int:
        """Return the byte position of the first ``needle`` at or after ``offset``, or -1."""
        match self.route(Family.STRINGS):
            case Route.ORIGINAL:
                return self._original.strings.find(haystack, needle, offset)
            case Route.FORCED:
                return self._mb.find(haystack, needle, offset, SINGLE_BYTE_CODEC)
            case _:
                return self._runtime.plain.strings.find(haystack, needle, offset)

    def rfind(self, haystack: bytes, needle: bytes, offset: int = 0) -> int:
        """Return the byte position of the last ``needle`` at or after ``offset``, or -1."""
        match self.route(Family.STRINGS):
            case Route.ORIGINAL:
                return self._original.strings.rfind(haystack, needle, offset)
            case Route.FORCED:
                return self._mb.rfind(haystack, needle, offset, SINGLE_BYTE_CODEC)
            case _:
                return self._runtime.plain.strings.rfind(haystack, needle, offset)

    def substr(
        self, data: bytes, start: int, length: Omittable[int | None] = OMITTED
    ) -> bytes:
        """Return the bytes of ``data`` from ``start``.

        Args:
            data: Input bytes.
            start: Start offset; negative counts from the end.
            length: Byte count; negative drops that many bytes from the end.
                Leaving it out reads to the end on every route. An explicit
                ``None`` is handed to the primitive as is: byte primitives read
                it as "to the end", the multibyte primitive reads it as zero.

        Returns:
            bytes: The selected bytes.
        """
        match self.route(Family.STRINGS):
            case Route.ORIGINAL:
                return _substr(self._original.strings, data, start, length)
            case Route.FORCED:
                if is_omitted(length):
                    # The multibyte default is not "to the end"; pass the tail length.
                    total = self._mb.length(data, SINGLE_BYTE_CODEC)
                    begin = max(total + start, 0) if start < 0 else min(start, total)
                    length = total - begin
                return self._mb.substr(
                    data, start, cast("int | None", length), SINGLE_BYTE_CODEC
                )
            case _:
                return _substr(self._runtime.plain.strings, data, start, length)

    def lower(self, data: bytes) -> bytes:
        """Return ``data`` with letters lowercased, byte for byte.

        Byte routes change ASCII letters only; the forced route also lowercases
        latin-1 letters such as ``0xC9``.
        """
        match self.route(Family.STRINGS):
            case Route.ORIGINAL:
                return self._original.strings.lower(data)
            case Route.FORCED:
                return self._mb.lower(data, SINGLE_BYTE_CODEC)
            case _:
                return self._runtime.plain.strings.lower(data)

    def upper(self, data: bytes) -> bytes:
        """Return ``data`` with letters uppercased, byte for byte.

        Byte routes change ASCII letters only; the forced route also uppercases
        latin-1 letters such as ``0xE9``.
        """
        match self.route(Family.STRINGS):
            case Route.ORIGINAL:
                return self._original.strings.upper(data)
            case Route.FORCED:
                return self._mb.upper(data, SINGLE_BYTE_CODEC)
            case _:
                return self._runtime.plain.strings.upper(data)

    def substr_count(
        self,
        haystack: bytes,
        needle: bytes,
        offset: Omittable[int] = OMITTED,
        length: Omittable[int | None] = OMITTED,
    ) -> int:
        """Count non-overlapping occurrences of ``needle`` in ``haystack``.

        ``offset`` and ``length`` restrict the count to a window on the byte
        routes. A ``length`` given without an ``offset`` starts at offset 0.

        Note:
            When strings are overloaded and the call is forced through the
            multibyte primitive, the window is ignored and the whole haystack
            is counted. A warning is logged when that happens.
        """
        match self.route(Family.STRINGS):
            case Route.ORIGINAL:
                return _substr_count(
                    self._original.strings, haystack, needle, offset, length
                )
            case Route.FORCED:
                if not (is_omitted(offset) and is_omitted(length)):
                    logger.warning(
                        "substr_count window (offset=%r, length=%r) ignored: "
                        "counting over the whole haystack",
                        offset,
                        length,
                    )
                return self._mb.substr_count(haystack, needle, SINGLE_BYTE_CODEC)
            case _:
                return _substr_count(
                    self._runtime.plain.strings, haystack, needle, offset, length
                )

    # --- Regex family ---

    def match(self, pattern: bytes, data: bytes) -> Registers | None:
        """Search ``data`` for ``pattern``; return its capture groups or None."""
        match self.route(Family.REGEX):
            case Route.ORIGINAL:
                return self._original.regex.match(pattern, data)
            case Route.FORCED:
                with forced_regex_encoding(self._mb, SINGLE_BYTE_CODEC):
                    return self._mb.match(pattern, data)
            case _:
                return self._runtime.plain.regex.match(pattern, data)

    def imatch(self, pattern: bytes, data: bytes) -> Registers | None:
        """Case-insensitive variant of `match`.

        Byte routes fold ASCII letters only; the forced route also folds
        latin-1 letters, so ``0xE9`` matches ``0xC9`` there.
        """
        match self.route(Family.REGEX):
            case Route.ORIGINAL:
                return self._original.regex.imatch(pattern, data)
            case Route.FORCED:
                with forced_regex_encoding(self._mb, SINGLE_BYTE_CODEC):
                    return self._mb.imatch(pattern, data)
            case _:
                return self._runtime.plain.regex.imatch(pattern, data)

    def replace(
        self, pattern: bytes, replacement: bytes, data: bytes, options: str = "msr"
    ) -> bytes:
        """Replace every match of ``pattern`` in ``data``.

        ``options`` only reaches the multibyte primitive; byte primitives do
        not take it.
        """
        match self.route(Family.REGEX):
            case Route.ORIGINAL:
                return self._original.regex.replace(pattern, replacement, data)
            case Route.FORCED:
                with forced_regex_encoding(self._mb, SINGLE_BYTE_CODEC):
                    return self._mb.replace(pattern, replacement, data, options)
            case _:
                return self._runtime.plain.regex.replace(pattern, replacement, data)

    def ireplace(
        self, pattern: bytes, replacement: bytes, data: bytes, options: str = "msri"
    ) -> bytes:
        """Case-insensitive variant of `replace`.

        Case folding differs between routes as described for `imatch`.
        """
        match self.route(Family.REGEX):
            case Route.ORIGINAL:
                return self._original.regex.ireplace(pattern, replacement, data)
            case Route.FORCED:
                with forced_regex_encoding(self._mb, SINGLE_BYTE_CODEC):
                    return self._mb.ireplace(pattern, replacement, data, options)
            case _:
                return self._runtime.plain.regex.ireplace(pattern, replacement, data)

    def split(self, pattern: bytes, data: bytes, limit: int = -1) -> list[bytes]:
        """Split ``data`` around matches of ``pattern``, at most ``limit`` pieces."""
        match self.route(Family.REGEX):
            case Route.ORIGINAL:
                return self._original.regex.split(pattern, data, limit)
            case Route.FORCED:
                with forced_regex_encoding(self._mb, SINGLE_BYTE_CODEC):
                    return self._mb.split(pattern, data, limit)
            case _:
                return self._runtime.plain.regex.split(pattern, data, limit)

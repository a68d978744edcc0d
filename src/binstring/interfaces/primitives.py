"""Byte-oriented primitive family interfaces.

Two families are routed independently: string primitives (length, search,
slicing, case conversion, substring counting) and regex primitives (match,
replace, split). Implementations take and return `bytes`; positions and
lengths are counted in whatever unit the implementation works in, which for
a byte family is the byte.
"""

import abc
from dataclasses import dataclass

from .mailer import Mailer

# pylint: disable=too-many-arguments,too-many-positional-arguments

# Capture groups of a match, group 0 first; None for a group that did not participate.
type Registers = tuple[bytes | None, ...]


class StringPrimitives(abc.ABC):
    """Contract for the length/search/slice/case/count family."""

    @abc.abstractmethod
    def length(self, data: bytes) -> int:
        """Return the length of ``data``."""

    @abc.abstractmethod
    def find(self, haystack: bytes, needle: bytes, offset: int = 0) -> int:
        """Return the first position of ``needle`` at or after ``offset``, or -1.

        A negative ``offset`` counts from the end of ``haystack``.
        """

    @abc.abstractmethod
    def rfind(self, haystack: bytes, needle: bytes, offset: int = 0) -> int:
        """Return the last position of ``needle`` at or after ``offset``, or -1.

        The search window is ``haystack[offset:]``, as for `bytes.rfind`: a
        negative ``offset`` starts the window that many units before the end.
        It does not stop the search short of the end.
        """

    @abc.abstractmethod
    def substr(self, data: bytes, start: int, length: int | None = None) -> bytes:
        """Return the part of ``data`` starting at ``start``.

        Args:
            data: Input.
            start: Start position; negative counts from the end.
            length: Number of units to keep; negative drops that many from the
                end. Leaving it out reads to the end of ``data``. How an explicit
                ``None`` is read is implementation specific.
        """

    @abc.abstractmethod
    def lower(self, data: bytes) -> bytes:
        """Return ``data`` converted to lowercase."""

    @abc.abstractmethod
    def upper(self, data: bytes) -> bytes:
        """Return ``data`` converted to uppercase."""

    @abc.abstractmethod
    def substr_count(
        self,
        haystack: bytes,
        needle: bytes,
        offset: int = 0,
        length: int | None = None,
    ) -> int:
        """Count non-overlapping occurrences of ``needle`` in a window of ``haystack``.

        Raises:
            ValueError: If ``needle`` is empty or the window lies outside ``haystack``.
        """


class RegexPrimitives(abc.ABC):
    """Contract for the pattern matching family."""

    @abc.abstractmethod
    def match(self, pattern: bytes, data: bytes) -> Registers | None:
        """Search ``data`` for ``pattern``.

        Returns:
            The capture groups of the first match, or None if nothing matched.
        """

    @abc.abstractmethod
    def imatch(self, pattern: bytes, data: bytes) -> Registers | None:
        """Case-insensitive variant of `match`."""

    @abc.abstractmethod
    def replace(self, pattern: bytes, replacement: bytes, data: bytes) -> bytes:
        """Replace every match of ``pattern`` in ``data``."""

    @abc.abstractmethod
    def ireplace(self, pattern: bytes, replacement: bytes, data: bytes) -> bytes:
        """Case-insensitive variant of `replace`."""

    @abc.abstractmethod
    def split(self, pattern: bytes, data: bytes, limit: int = -1) -> list[bytes]:
        """Split ``data`` around matches of ``pattern``.

        A positive ``limit`` caps the number of pieces; the last piece holds
        the unsplit remainder.
        """


@dataclass(frozen=True, slots=True)
class PrimitiveSet:
    """One primitive of each family, as a host runtime exposes them."""

    strings: StringPrimitives
    regex: RegexPrimitives
    mail: Mailer

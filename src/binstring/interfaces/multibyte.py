"""Interface for the optional encoding-aware ("multibyte") subsystem.

Every primitive interprets its input as characters in a codec. String
primitives take the codec as an explicit ``encoding`` argument and fall back
to `internal_encoding`; regex primitives always use the ambient
`regex_encoding`, which callers change for the duration of a call.
"""

import abc

from .primitives import Registers

# pylint: disable=too-many-arguments,too-many-positional-arguments,too-many-public-methods


class MultiByteSubsystem(abc.ABC):
    """Contract for the encoding-aware primitive family and its ambient state."""

    # --- Ambient state ---

    @property
    @abc.abstractmethod
    def internal_encoding(self) -> str:
        """Codec used by string primitives called without an encoding."""

    @internal_encoding.setter
    @abc.abstractmethod
    def internal_encoding(self, value: str) -> None: ...

    @property
    @abc.abstractmethod
    def regex_encoding(self) -> str:
        """Codec used by every regex primitive."""

    @regex_encoding.setter
    @abc.abstractmethod
    def regex_encoding(self, value: str) -> None: ...

    @property
    @abc.abstractmethod
    def language(self) -> str:
        """Mail language; selects the header charset used by `send_mail`."""

    @language.setter
    @abc.abstractmethod
    def language(self, value: str) -> None: ...

    # --- String primitives ---

    @abc.abstractmethod
    def length(self, data: bytes, encoding: str | None = None) -> int:
        """Return the number of characters in ``data``."""

    @abc.abstractmethod
    def find(
        self, haystack: bytes, needle: bytes, offset: int = 0, encoding: str | None = None
    ) -> int:
        """Return the character position of the first ``needle``, or -1."""

    @abc.abstractmethod
    def rfind(
        self, haystack: bytes, needle: bytes, offset: int = 0, encoding: str | None = None
    ) -> int:
        """Return the character position of the last ``needle``, or -1."""

    @abc.abstractmethod
    def substr(
        self,
        data: bytes,
        start: int,
        length: int | None = None,
        encoding: str | None = None,
    ) -> bytes:
        """Return characters of ``data`` from ``start``.

        Note:
            ``length=None`` is read as zero, so the result is empty. Callers
            that want "to the end" must pass the remaining length explicitly.
        """

    @abc.abstractmethod
    def lower(self, data: bytes, encoding: str | None = None) -> bytes:
        """Return ``data`` converted to lowercase."""

    @abc.abstractmethod
    def upper(self, data: bytes, encoding: str | None = None) -> bytes:
        """Return ``data`` converted to uppercase."""

    @abc.abstractmethod
    def substr_count(
        self, haystack: bytes, needle: bytes, encoding: str | None = None
    ) -> int:
        """Count non-overlapping occurrences of ``needle`` in the whole ``haystack``."""

    # --- Regex primitives ---

    @abc.abstractmethod
    def match(self, pattern: bytes, data: bytes) -> Registers | None:
        """Search ``data`` for ``pattern`` under the regex encoding."""

    @abc.abstractmethod
    def imatch(self, pattern: bytes, data: bytes) -> Registers | None:
        """Case-insensitive variant of `match`."""

    @abc.abstractmethod
    def replace(
        self, pattern: bytes, replacement: bytes, data: bytes, options: str = "msr"
    ) -> bytes:
        """Replace every match of ``pattern``; ``options`` controls matching."""

    @abc.abstractmethod
    def ireplace(
        self, pattern: bytes, replacement: bytes, data: bytes, options: str = "msri"
    ) -> bytes:
        """Case-insensitive variant of `replace`."""

    @abc.abstractmethod
    def split(self, pattern: bytes, data: bytes, limit: int = -1) -> list[bytes]:
        """Split ``data`` around matches of ``pattern``."""

    # --- Mail ---

    @abc.abstractmethod
    def send_mail(
        self,
        to: str,
        subject: str,
        message: str,
        headers: str | None = None,
        parameters: str | None = None,
    ) -> bool:
        """Send a message with headers encoded for the current language."""

"""Encoding-aware ("multibyte") primitives.

This module is the optional subsystem the process runtime probes for. Its
primitives decode bytes with a codec and work on characters, so their
results depend on the ambient encodings the subsystem holds:

- ``internal_encoding`` for string primitives called without an encoding,
- ``regex_encoding`` for every regex primitive,
- ``language`` for the header charset of outgoing mail.

Bytes that are invalid in the active codec are decoded with
``surrogateescape``; each such byte counts as one character and survives the
round trip unchanged. Forcing the ``latin-1`` codec makes every byte exactly
one character, which recovers byte-exact results.
"""

from __future__ import annotations

import codecs
import logging
import re
from collections.abc import Callable
from email.header import Header
from typing import TYPE_CHECKING

from binstring.adapters.native import maxsplit_for, slice_bounds
from binstring.interfaces.multibyte import MultiByteSubsystem

if TYPE_CHECKING:
    from binstring.config import Settings
    from binstring.interfaces.mailer import Mailer
    from binstring.interfaces.primitives import Registers

# pylint: disable=too-many-arguments,too-many-positional-arguments,too-many-public-methods

logger = logging.getLogger(__name__)

ERRORS = "surrogateescape"

# Mail language -> header/body charset.
LANGUAGE_CHARSETS = {
    "en": "iso-8859-1",
    "uni": "utf-8",
    "neutral": "utf-8",
}

# Replace option characters. Options without a Python `re` counterpart are
# accepted and have no effect.
OPTION_FLAGS: dict[str, re.RegexFlag] = {
    "i": re.IGNORECASE,
    "x": re.VERBOSE,
    "m": re.DOTALL,
    "p": re.DOTALL,
    "s": re.NOFLAG,
    "r": re.NOFLAG,
    "z": re.NOFLAG,
    "b": re.NOFLAG,
    "d": re.NOFLAG,
    "l": re.NOFLAG,
    "n": re.NOFLAG,
}


def canonical_codec(encoding: str) -> str:
    """Return the canonical Python codec name for ``encoding``.

    Raises:
        LookupError: If the encoding is unknown.
    """
    return codecs.lookup(encoding).name


def parse_options(options: str) -> re.RegexFlag:
    """Translate a replace option string into `re` flags.

    Raises:
        ValueError: If ``options`` contains an unknown option character.
    """
    flags = re.NOFLAG
    for option in options:
        if option not in OPTION_FLAGS:
            raise ValueError(f"unknown regex option {option!r}")
        flags |= OPTION_FLAGS[option]
    return flags


class MultiByteStrings(MultiByteSubsystem):
    """Codec-aware implementation of the multibyte subsystem."""

    def __init__(
        self,
        mailer: Mailer,
        *,
        internal_encoding: str = "UTF-8",
        regex_encoding: str = "UTF-8",
        language: str = "uni",
    ) -> None:
        self._mailer = mailer
        self._internal_encoding = ""
        self._regex_encoding = ""
        self._language = ""
        self.internal_encoding = internal_encoding
        self.regex_encoding = regex_encoding
        self.language = language

    # --- Ambient state ---

    @property
    def internal_encoding(self) -> str:
        return self._internal_encoding

    @internal_encoding.setter
    def internal_encoding(self, value: str) -> None:
        canonical_codec(value)
        self._internal_encoding = value

    @property
    def regex_encoding(self) -> str:
        return self._regex_encoding

    @regex_encoding.setter
    def regex_encoding(self, value: str) -> None:
        canonical_codec(value)
        self._regex_encoding = value

    @property
    def language(self) -> str:
        return self._language

    @language.setter
    def language(self, value: str) -> None:
        if value not in LANGUAGE_CHARSETS:
            raise ValueError(f"unknown language {value!r}")
        self._language = value

    # --- Helpers ---

    def _codec(self, encoding: str | None) -> str:
        return canonical_codec(encoding or self._internal_encoding)

    @staticmethod
    def _decode(data: bytes, codec: str) -> str:
        return data.decode(codec, ERRORS)

    @staticmethod
    def _encode(text: str, codec: str) -> bytes:
        return text.encode(codec, ERRORS)

    def _convert_case(
        self, data: bytes, encoding: str | None, convert: Callable[[str], str]
    ) -> bytes:
        # Simple case mapping: keep a character unless it maps to exactly one
        # character the codec can represent.
        codec = self._codec(encoding)
        out: list[str] = []
        for char in self._decode(data, codec):
            mapped = convert(char)
            if len(mapped) == 1:
                try:
                    mapped.encode(codec)
                except UnicodeEncodeError:
                    mapped = char
            else:
                mapped = char
            out.append(mapped)
        return self._encode("".join(out), codec)

    def _compile(self, pattern: bytes, flags: re.RegexFlag) -> tuple[re.Pattern, str]:
        codec = canonical_codec(self._regex_encoding)
        return re.compile(self._decode(pattern, codec), flags), codec

    def _search(
        self, pattern: bytes, data: bytes, flags: re.RegexFlag
    ) -> Registers | None:
        compiled, codec = self._compile(pattern, flags)
        if (found := compiled.search(self._decode(data, codec))) is None:
            return None
        groups = (found.group(0), *found.groups())
        return tuple(None if g is None else self._encode(g, codec) for g in groups)

    def _sub(
        self, pattern: bytes, replacement: bytes, data: bytes, flags: re.RegexFlag
    ) -> bytes:
        compiled, codec = self._compile(pattern, flags)
        text = compiled.sub(self._decode(replacement, codec), self._decode(data, codec))
        return self._encode(text, codec)

    # --- String primitives ---

    def length(self, data: bytes, encoding: str | None = None) -> int:
        return len(self._decode(data, self._codec(encoding)))

    def find(
        self, haystack: bytes, needle: bytes, offset: int = 0, encoding: str | None = None
    ) -> int:
        codec = self._codec(encoding)
        return self._decode(haystack, codec).find(self._decode(needle, codec), offset)

    def rfind(
        self, haystack: bytes, needle: bytes, offset: int = 0, encoding: str | None = None
    ) -> int:
        codec = self._codec(encoding)
        return self._decode(haystack, codec).rfind(self._decode(needle, codec), offset)

    def substr(
        self,
        data: bytes,
        start: int,
        length: int | None = None,
        encoding: str | None = None,
    ) -> bytes:
        codec = self._codec(encoding)
        text = self._decode(data, codec)
        # Legacy behaviour: a missing length reads as zero.
        begin, end = slice_bounds(len(text), start, 0 if length is None else length)
        return self._encode(text[begin:end], codec)

    def lower(self, data: bytes, encoding: str | None = None) -> bytes:
        return self._convert_case(data, encoding, str.lower)

    def upper(self, data: bytes, encoding: str | None = None) -> bytes:
        return self._convert_case(data, encoding, str.upper)

    def substr_count(
        self, haystack: bytes, needle: bytes, encoding: str | None = None
    ) -> int:
        if not needle:
            raise ValueError("needle must not be empty")
        codec = self._codec(encoding)
        return self._decode(haystack, codec).count(self._decode(needle, codec))

    # --- Regex primitives ---

    def match(self, pattern: bytes, data: bytes) -> Registers | None:
        return self._search(pattern, data, re.NOFLAG)

    def imatch(self, pattern: bytes, data: bytes) -> Registers | None:
        return self._search(pattern, data, re.IGNORECASE)

    def replace(
        self, pattern: bytes, replacement: bytes, data: bytes, options: str = "msr"
    ) -> bytes:
        return self._sub(pattern, replacement, data, parse_options(options))

    def ireplace(
        self, pattern: bytes, replacement: bytes, data: bytes, options: str = "msri"
    ) -> bytes:
        flags = parse_options(options) | re.IGNORECASE
        return self._sub(pattern, replacement, data, flags)

    def split(self, pattern: bytes, data: bytes, limit: int = -1) -> list[bytes]:
        if limit == 1:
            return [data]
        compiled, codec = self._compile(pattern, re.NOFLAG)
        pieces = compiled.split(self._decode(data, codec), maxsplit=maxsplit_for(limit))
        return [self._encode(piece, codec) for piece in pieces]

    # --- Mail ---

    def send_mail(
        self,
        to: str,
        subject: str,
        message: str,
        headers: str | None = None,
        parameters: str | None = None,
    ) -> bool:
        charset = LANGUAGE_CHARSETS[self._language]
        if not subject.isascii():
            subject = Header(subject, charset).encode()
        mime = "\r\n".join(
            [
                "MIME-Version: 1.0",
                f"Content-Type: text/plain; charset={charset}",
                "Content-Transfer-Encoding: 8bit",
            ]
        )
        extra = f"{headers}\r\n{mime}" if headers else mime
        logger.debug("Sending mail to %s with charset %s", to, charset)
        return self._mailer.send(to, subject, message, extra, parameters)


def load(settings: Settings, mailer: Mailer) -> MultiByteStrings:
    """Build the subsystem from host settings.

    This is the entry point the process runtime looks up after importing the
    module.
    """
    subsystem = MultiByteStrings(
        mailer,
        internal_encoding=settings.internal_encoding,
        regex_encoding=settings.regex_encoding,
        language=settings.language,
    )
    logger.debug(
        "Multibyte subsystem loaded (internal=%s, regex=%s, language=%s)",
        subsystem.internal_encoding,
        subsystem.regex_encoding,
        subsystem.language,
    )
    return subsystem

"""Native byte primitives.

The byte family every other family is measured against: positions and
lengths are byte offsets, case conversion touches ASCII letters only, and
patterns are Python `re` bytes patterns.
"""

import re

from binstring.interfaces.primitives import Registers, RegexPrimitives, StringPrimitives

# pylint: disable=too-many-arguments,too-many-positional-arguments


def slice_bounds(size: int, start: int, length: int | None) -> tuple[int, int]:
    """Resolve ``start``/``length`` into clamped ``[begin, end)`` bounds.

    A negative ``start`` counts from the end, a negative ``length`` drops that
    many units from the end, and ``None`` reads to the end. Bounds that cross
    yield an empty range.
    """
    begin = max(size + start, 0) if start < 0 else min(start, size)
    if length is None:
        end = size
    elif length < 0:
        end = size + length
    else:
        end = min(begin + length, size)
    return begin, max(begin, end)


def count_window(size: int, offset: int, length: int | None) -> tuple[int, int]:
    """Resolve a substring-count window, rejecting windows outside the haystack.

    Raises:
        ValueError: If ``offset`` or ``length`` reaches outside ``[0, size]``.
    """
    begin = size + offset if offset < 0 else offset
    if not 0 <= begin <= size:
        raise ValueError("offset not contained in haystack")
    if length is None:
        return begin, size
    end = size + length if length < 0 else begin + length
    if not begin <= end <= size:
        raise ValueError("length must not reach outside haystack")
    return begin, end


def maxsplit_for(limit: int) -> int:
    """Translate a piece ``limit`` into `re.split`'s ``maxsplit``.

    ``limit <= 0`` means no limit. Callers handle ``limit == 1`` themselves,
    since ``maxsplit=0`` would mean "unlimited".
    """
    return limit - 1 if limit > 1 else 0


def registers(match: re.Match[bytes]) -> Registers:
    """Return the capture groups of ``match``, group 0 first."""
    return (match.group(0), *match.groups())


class NativeStrings(StringPrimitives):
    """Byte-exact string primitives."""

    def length(self, data: bytes) -> int:
        return len(data)

    def find(self, haystack: bytes, needle: bytes, offset: int = 0) -> int:
        return haystack.find(needle, offset)

    def rfind(self, haystack: bytes, needle: bytes, offset: int = 0) -> int:
        return haystack.rfind(needle, offset)

    def substr(self, data: bytes, start: int, length: int | None = None) -> bytes:
        begin, end = slice_bounds(len(data), start, length)
        return data[begin:end]

    def lower(self, data: bytes) -> bytes:
        return data.lower()

    def upper(self, data: bytes) -> bytes:
        return data.upper()

    def substr_count(
        self,
        haystack: bytes,
        needle: bytes,
        offset: int = 0,
        length: int | None = None,
    ) -> int:
        if not needle:
            raise ValueError("needle must not be empty")
        begin, end = count_window(len(haystack), offset, length)
        return haystack.count(needle, begin, end)


class NativeRegex(RegexPrimitives):
    """Regex primitives over bytes patterns.

    Note:
        `split` follows `re.split`: capturing groups in the pattern are
        returned between the pieces.
    """

    def match(self, pattern: bytes, data: bytes) -> Registers | None:
        if (found := re.search(pattern, data)) is None:
            return None
        return registers(found)

    def imatch(self, pattern: bytes, data: bytes) -> Registers | None:
        if (found := re.search(pattern, data, re.IGNORECASE)) is None:
            return None
        return registers(found)

    def replace(self, pattern: bytes, replacement: bytes, data: bytes) -> bytes:
        return re.sub(pattern, replacement, data)

    def ireplace(self, pattern: bytes, replacement: bytes, data: bytes) -> bytes:
        return re.sub(pattern, replacement, data, flags=re.IGNORECASE)

    def split(self, pattern: bytes, data: bytes, limit: int = -1) -> list[bytes]:
        if limit == 1:
            return [data]
        return re.split(pattern, data, maxsplit=maxsplit_for(limit))

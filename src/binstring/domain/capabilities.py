"""Capability flags and the capability record.

The overload setting is a single integer where each bit redirects one family
of plain string primitives to its encoding-aware counterpart:

====  ==========  ==========================================================
bit   family      primitives
====  ==========  ==========================================================
1     MAIL        mail
2     STRINGS     length, find, rfind, substr, lower, upper, substr_count
4     REGEX       match, imatch, replace, ireplace, split
====  ==========  ==========================================================

The bitmask is decoded once into a `Family` flag set and frozen into a
`CapabilityRecord` that the dispatcher consults on every call.
"""

import re
from dataclasses import dataclass
from enum import Flag

_INI_INTEGER = re.compile(r"\s*([+-]?\d+)")


class Family(Flag):
    """Independently overloadable families of plain primitives."""

    MAIL = 1
    STRINGS = 2
    REGEX = 4

    @classmethod
    def none(cls) -> "Family":
        """Return the empty flag set."""
        return cls(0)


ALL_FAMILIES = Family.MAIL | Family.STRINGS | Family.REGEX


def coerce_setting(raw: str | int | None) -> int:
    """Read a configuration value the way an ini integer is read.

    Leading whitespace, an optional sign and digits are honoured; anything
    else (including ``None`` and the empty string) reads as 0.

    Examples:
        >>> coerce_setting("6")
        6
        >>> coerce_setting("2 ; strings only")
        2
        >>> coerce_setting("off")
        0
    """
    if raw is None:
        return 0
    if isinstance(raw, int):
        return raw
    if (match := _INI_INTEGER.match(raw)) is None:
        return 0
    return int(match.group(1))


def decode_func_overload(mask: int) -> Family:
    """Decode an overload bitmask into the set of families it redirects.

    Bits outside the known families are ignored.
    """
    return Family(mask & ALL_FAMILIES.value)


@dataclass(frozen=True)
class CapabilityRecord:
    """What detection found about the host runtime.

    Attributes:
        multibyte_available: Whether the encoding-aware subsystem could be loaded.
        overload_setting: The overload bitmask as read from configuration.
        redirected: Families whose plain primitives are actually overloaded.
            Always empty when the subsystem is unavailable.
    """

    multibyte_available: bool
    overload_setting: int = 0
    redirected: Family = Family(0)

    @classmethod
    def from_setting(
        cls, overload_setting: int, multibyte_available: bool
    ) -> "CapabilityRecord":
        """Build a record from a raw bitmask and the subsystem probe result."""
        redirected = (
            decode_func_overload(overload_setting)
            if multibyte_available
            else Family.none()
        )
        return cls(
            multibyte_available=multibyte_available,
            overload_setting=overload_setting,
            redirected=redirected,
        )

    def redirects(self, family: Family) -> bool:
        """Return True if ``family`` is overloaded in this runtime."""
        return family in self.redirected and bool(family)

    def describe(self) -> dict[str, bool]:
        """Return a flat, display-friendly view of the record."""
        return {
            "multibyte": self.multibyte_available,
            "mail": self.redirects(Family.MAIL),
            "strings": self.redirects(Family.STRINGS),
            "regex": self.redirects(Family.REGEX),
        }

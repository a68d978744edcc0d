"""Omission-sensitive argument handling.

Some byte primitives behave differently when a trailing argument is left out
than when it is passed with its documented default (``substr`` without a
length reads to the end of the data, ``substr_count`` without a length does
not accept a window at all). This module defines the ``OMITTED`` sentinel and
the `Omittable` alias so callers can express "not supplied" separately from
``None``.

An argument of type ``Omittable[T]`` has three states:

* ``OMITTED``: the caller did not supply the argument.
* ``None``: the caller explicitly passed the default.
* concrete ``T``: the caller passed a value.
"""

from dataclasses import dataclass
from typing import TypeVar


def _get_omitted() -> "_OmittedType":
    # Factory used by pickle to retrieve the one true instance.
    return OMITTED


@dataclass(frozen=True)
class _OmittedType:
    """Sentinel marking an argument the caller did not supply.

    This is distinct from `None`, which is an explicit value.
    """

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "OMITTED"

    def __reduce__(self):  # keep singleton on pickle
        return (_get_omitted, ())


# Singleton instance
OMITTED = _OmittedType()

T = TypeVar("T")
type Omittable[T] = T | _OmittedType


def is_omitted(value: object) -> bool:
    """Return True if ``value`` is the ``OMITTED`` sentinel."""
    return isinstance(value, _OmittedType)


def supplied(value: "Omittable[T]", default: T) -> T:
    """Return ``value`` unless it was omitted, in which case return ``default``."""
    if isinstance(value, _OmittedType):
        return default
    return value

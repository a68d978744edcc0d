"""Scoped overrides of the multibyte subsystem's ambient settings.

The regex encoding and mail language are shared, mutable state. Forcing them
for a call is done as a scoped acquisition: read the current value, install
the forced one, and restore the previous value on every exit path, including
exceptions raised by the wrapped call.

Note:
    Restoration is only correct for sequential callers. Threads sharing one
    subsystem may interleave their overrides.
"""

from collections.abc import Iterator
from contextlib import contextmanager

from binstring.interfaces.multibyte import MultiByteSubsystem


@contextmanager
def forced_regex_encoding(
    subsystem: MultiByteSubsystem, encoding: str
) -> Iterator[str]:
    """Set ``subsystem.regex_encoding`` to ``encoding`` for the block.

    Yields:
        str: The encoding that was active before the block.
    """
    previous = subsystem.regex_encoding
    subsystem.regex_encoding = encoding
    try:
        yield previous
    finally:
        subsystem.regex_encoding = previous


@contextmanager
def forced_language(subsystem: MultiByteSubsystem, language: str) -> Iterator[str]:
    """Set ``subsystem.language`` to ``language`` for the block.

    Yields:
        str: The language that was active before the block.
    """
    previous = subsystem.language
    subsystem.language = language
    try:
        yield previous
    finally:
        subsystem.language = previous

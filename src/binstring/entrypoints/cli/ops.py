"""Operation subcommands of the ``binstring`` CLI.

Each command reads its input bytes from a file argument (``-`` for stdin),
runs one facade operation and writes the result to stdout. Transformed
inputs (lower, upper, replace) are written raw with nothing appended;
extracted values (substr, match groups, split pieces) and numbers end with
a newline.

Needles, patterns and replacements come from the command line and are turned
into bytes with the filesystem encoding (``os.fsencode``), so undecodable
arguments keep their original bytes.

Failure modes
- Errors raised by the primitive (empty needle, window outside the input,
  invalid pattern, unknown codec) are printed as a red error line and exit
  with status 1.
- ``match`` exits with status 1 when nothing matched, like ``grep``.
"""

from __future__ import annotations

import os
import re
from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from typing import TYPE_CHECKING, BinaryIO

import click

from binstring.domain.arguments import OMITTED
from binstring.domain.capabilities import Family
from binstring.service_layer.dispatcher import Route

from .helpers.messages import error, warn

if TYPE_CHECKING:
    from binstring.service_layer.dispatcher import BinString

INPUT = click.argument("source", type=click.File("rb"), default="-")


@contextmanager
def _reporting_errors() -> Iterator[None]:
    """Turn primitive errors into an error line and exit status 1."""
    try:
        yield
    except (ValueError, LookupError, re.error) as exc:
        error(str(exc))
        raise click.exceptions.Exit(1) from exc


def _echo_pieces(pieces: Iterable[bytes | None]) -> None:
    for piece in pieces:
        click.echo(b"" if piece is None else piece)


@click.command()
@click.pass_obj
def caps(strings: BinString) -> None:
    """Show detected capabilities and the route of each family."""
    record = strings.capabilities
    click.echo(f"{'func_overload':<14}{record.overload_setting}")
    click.echo(f"{'multibyte':<14}{'yes' if record.multibyte_available else 'no'}")
    click.echo(f"{'use-orig':<14}{'yes' if strings.use_preserved_original else 'no'}")
    for family in (Family.MAIL, Family.STRINGS, Family.REGEX):
        route = strings.route(family)
        click.echo(f"{family.name.lower():<14}{route.value}")
        if strings.use_preserved_original and route is Route.FORCED:
            warn(f"Preserved originals unavailable; {family.name.lower()} is forced.")


@click.command()
@INPUT
@click.pass_obj
def length(strings: BinString, source: BinaryIO) -> None:
    """Print the number of bytes in SOURCE."""
    click.echo(str(strings.length(source.read())))


@click.command()
@click.argument("needle")
@INPUT
@click.option("--offset", type=int, default=0, show_default=True)
@click.pass_obj
def find(strings: BinString, needle: str, source: BinaryIO, offset: int) -> None:
    """Print the byte position of the first NEEDLE in SOURCE, or -1."""
    with _reporting_errors():
        click.echo(str(strings.find(source.read(), os.fsencode(needle), offset)))


@click.command()
@click.argument("needle")
@INPUT
@click.option("--offset", type=int, default=0, show_default=True)
@click.pass_obj
def rfind(strings: BinString, needle: str, source: BinaryIO, offset: int) -> None:
    """Print the byte position of the last NEEDLE in SOURCE, or -1."""
    with _reporting_errors():
        click.echo(str(strings.rfind(source.read(), os.fsencode(needle), offset)))


@click.command()
@click.argument("start", type=int)
@INPUT
@click.option("--length", "length", type=int, default=None, help="Bytes to keep.")
@click.pass_obj
def substr(
    strings: BinString, start: int, source: BinaryIO, length: int | None
) -> None:
    """Print SOURCE from byte START, to the end unless --length is given."""
    data = source.read()
    click.echo(strings.substr(data, start, OMITTED if length is None else length))


@click.command()
@INPUT
@click.pass_obj
def lower(strings: BinString, source: BinaryIO) -> None:
    """Print SOURCE lowercased."""
    click.echo(strings.lower(source.read()), nl=False)


@click.command()
@INPUT
@click.pass_obj
def upper(strings: BinString, source: BinaryIO) -> None:
    """Print SOURCE uppercased."""
    click.echo(strings.upper(source.read()), nl=False)


@click.command()
@click.argument("needle")
@INPUT
@click.option("--offset", type=int, default=None, help="Window start.")
@click.option("--length", "length", type=int, default=None, help="Window size.")
@click.pass_obj
def count(
    strings: BinString,
    needle: str,
    source: BinaryIO,
    offset: int | None,
    length: int | None,
) -> None:
    """Print the number of non-overlapping NEEDLEs in SOURCE."""
    with _reporting_errors():
        result = strings.substr_count(
            source.read(),
            os.fsencode(needle),
            OMITTED if offset is None else offset,
            OMITTED if length is None else length,
        )
    click.echo(str(result))


@click.command()
@click.argument("pattern")
@INPUT
@click.option("--ignore-case", "-i", is_flag=True, help="Match case-insensitively.")
@click.pass_obj
def match(strings: BinString, pattern: str, source: BinaryIO, ignore_case: bool) -> None:
    """Print the capture groups of the first PATTERN match, one per line."""
    search = strings.imatch if ignore_case else strings.match
    with _reporting_errors():
        registers = search(os.fsencode(pattern), source.read())
    if registers is None:
        raise click.exceptions.Exit(1)
    _echo_pieces(registers)


@click.command()
@click.argument("pattern")
@click.argument("replacement")
@INPUT
@click.option("--ignore-case", "-i", is_flag=True, help="Match case-insensitively.")
@click.option(
    "--options",
    default=None,
    help="Match options for the multibyte route (default msr, or msri with -i).",
)
@click.pass_obj
def replace(  # pylint: disable=too-many-arguments,too-many-positional-arguments
    strings: BinString,
    pattern: str,
    replacement: str,
    source: BinaryIO,
    ignore_case: bool,
    options: str | None,
) -> None:
    """Print SOURCE with every PATTERN match replaced by REPLACEMENT."""
    data = source.read()
    args = (os.fsencode(pattern), os.fsencode(replacement), data)
    with _reporting_errors():
        if ignore_case:
            result = strings.ireplace(*args, options=options or "msri")
        else:
            result = strings.replace(*args, options=options or "msr")
    click.echo(result, nl=False)


@click.command()
@click.argument("pattern")
@INPUT
@click.option("--limit", type=int, default=-1, show_default=True, help="Maximum pieces.")
@click.pass_obj
def split(strings: BinString, pattern: str, source: BinaryIO, limit: int) -> None:
    """Print the pieces of SOURCE around PATTERN, one per line."""
    with _reporting_errors():
        pieces = strings.split(os.fsencode(pattern), source.read(), limit)
    _echo_pieces(pieces)


OPERATIONS = (caps, length, find, rfind, substr, lower, upper, count, match, replace, split)

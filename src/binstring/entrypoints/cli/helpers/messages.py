"""Terminal message helpers for the BINSTRING CLI.

Small helpers for rendering user-visible lines with emoji->ASCII fallbacks.
Messages write to stderr so stdout carries only byte results.
"""

import click


def _supports_character(character: str) -> bool:
    """Return True if *character* can be encoded on stderr."""
    stream = click.get_text_stream("stderr")
    encoding = getattr(stream, "encoding", None) or "ascii"
    try:
        character.encode(encoding)
    except UnicodeEncodeError:
        return False
    return True


def caution_glyph() -> str:
    """Warning marker: "⚠️" when stderr can encode it, else "[!]"."""
    emoji, fallback = ("⚠️", "[!]")
    return emoji if _supports_character(emoji) else fallback


def error_glyph() -> str:
    """Error marker: "❌" when stderr can encode it, else "[X]"."""
    emoji, fallback = ("❌", "[X]")
    return emoji if _supports_character(emoji) else fallback


def warn(msg: str) -> None:
    """Emit a yellow, bold warning line to **stderr** with a caution glyph.

    Example:
        ``⚠️  Preserved originals are not exposed by this runtime.``
    """
    click.secho(f"{caution_glyph()}  {msg}", fg="yellow", bold=True, err=True)


def error(msg: str) -> None:
    """Emit a red, bold error line to **stderr** with an error glyph.

    Example:
        ``❌  needle must not be empty``
    """
    click.secho(f"{error_glyph()}  {msg}", fg="red", bold=True, err=True)

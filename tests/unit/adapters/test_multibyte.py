"""Unit tests for the encoding-aware multibyte subsystem."""

import re

import pytest

from binstring.adapters.mailers import MemoryMailer
from binstring.adapters.multibyte import MultiByteStrings, load, parse_options
from binstring.config import Settings

# pylint: disable=redefined-outer-name

CAFE = "café".encode()


@pytest.fixture
def mailer() -> MemoryMailer:
    """In-memory mailer."""
    return MemoryMailer()


@pytest.fixture
def mb(mailer) -> MultiByteStrings:
    """Subsystem with UTF-8 ambient encodings."""
    return MultiByteStrings(mailer)


# ---------------------------------------------------------------------------
# Ambient settings
# ---------------------------------------------------------------------------


def test_unknown_encoding_rejected(mb):
    """Setting an unknown codec raises LookupError and keeps the old one."""
    with pytest.raises(LookupError):
        mb.regex_encoding = "no-such-codec"
    assert mb.regex_encoding == "UTF-8"


def test_unknown_language_rejected(mb):
    """Only known mail languages are accepted."""
    with pytest.raises(ValueError, match="language"):
        mb.language = "klingon"


def test_load_uses_settings(mailer):
    """load() builds the subsystem from host settings."""
    subsystem = load(
        Settings(internal_encoding="cp1252", regex_encoding="latin-1", language="en"),
        mailer,
    )
    assert subsystem.internal_encoding == "cp1252"
    assert subsystem.regex_encoding == "latin-1"
    assert subsystem.language == "en"


# ---------------------------------------------------------------------------
# String primitives
# ---------------------------------------------------------------------------


def test_length_counts_characters(mb):
    """Characters, not bytes, under the internal encoding."""
    assert mb.length(CAFE) == 4
    assert mb.length(CAFE, "latin-1") == 5


def test_invalid_bytes_count_one_each(mb):
    """Undecodable bytes count as one character and survive slicing."""
    data = b"a\xffb"
    assert mb.length(data) == 3
    assert mb.substr(data, 1, 1) == b"\xff"


def test_find_positions_are_characters(mb):
    """Positions are character offsets under UTF-8, byte offsets under latin-1."""
    haystack = CAFE + b"!"
    assert mb.find(haystack, b"!") == 4
    assert mb.find(haystack, b"!", 0, "latin-1") == 5
    assert mb.rfind(b"a!a!", b"!") == 3


def test_substr_missing_length_reads_as_zero(mb):
    """The legacy default length is zero, not "to the end"."""
    assert mb.substr(b"hello", 1) == b""
    assert mb.substr(b"hello", 1, None) == b""
    assert mb.substr(b"hello", 1, 3) == b"ell"


def test_substr_multibyte_character(mb):
    """A UTF-8 character is sliced whole."""
    assert mb.substr(CAFE, 3, 1) == "é".encode()
    assert mb.substr(CAFE, 3, 1, "latin-1") == b"\xc3"


def test_case_mapping_is_codec_aware(mb):
    """Non-ASCII letters convert when the codec can hold the result."""
    assert mb.upper(CAFE) == "CAFÉ".encode()
    assert mb.upper(b"caf\xe9", "latin-1") == b"CAF\xc9"


def test_case_mapping_keeps_unrepresentable(mb):
    """Characters that map to several characters, or outside the codec, stay."""
    assert mb.upper("ß".encode()) == "ß".encode()
    assert mb.upper(b"\xff", "latin-1") == b"\xff"


def test_substr_count_characters(mb):
    """Counting decodes both sides with the codec."""
    assert mb.substr_count(CAFE * 3, "é".encode()) == 3
    assert mb.substr_count(b"aaa", b"aa") == 1


def test_substr_count_empty_needle(mb):
    """An empty needle raises ValueError."""
    with pytest.raises(ValueError):
        mb.substr_count(b"abc", b"")


# ---------------------------------------------------------------------------
# Regex primitives
# ---------------------------------------------------------------------------


def test_regex_uses_regex_encoding(mb):
    """'.' is one character of the regex encoding."""
    assert mb.match(rb"^f(.)$", b"f\xc3\xa9") == (b"f\xc3\xa9", "é".encode())
    mb.regex_encoding = "latin-1"
    assert mb.match(rb"^f(.)$", b"f\xc3\xa9") is None
    assert mb.match(rb"^f(..)$", b"f\xc3\xa9") == (b"f\xc3\xa9", b"\xc3\xa9")


def test_imatch_ignores_case(mb):
    """imatch() is case-insensitive."""
    assert mb.imatch("É".encode(), CAFE) == ("é".encode(),)


def test_replace_options(mb):
    """An "i" option makes replace case-insensitive."""
    assert mb.replace(rb"A", b"o", b"cat") == b"cat"
    assert mb.replace(rb"A", b"o", b"cat", "msri") == b"cot"
    assert mb.ireplace(rb"A", b"o", b"cat", "") == b"cot"


@pytest.mark.parametrize(
    ("options", "flags"),
    [
        ("", re.NOFLAG),
        ("msr", re.DOTALL),
        ("msri", re.DOTALL | re.IGNORECASE),
        ("x", re.VERBOSE),
    ],
)
def test_parse_options(options, flags):
    """Option strings translate into re flags."""
    assert parse_options(options) == flags


def test_parse_options_rejects_unknown():
    """Unknown option characters raise ValueError."""
    with pytest.raises(ValueError, match="option"):
        parse_options("msq")


def test_split_limit(mb):
    """split() honours the piece limit."""
    assert mb.split(rb",", b"a,b,c") == [b"a", b"b", b"c"]
    assert mb.split(rb",", b"a,b,c", 2) == [b"a", b"b,c"]
    assert mb.split(rb",", b"a,b,c", 1) == [b"a,b,c"]


# ---------------------------------------------------------------------------
# Mail
# ---------------------------------------------------------------------------


def test_send_mail_uses_language_charset(mb, mailer):
    """Headers carry the charset of the mail language."""
    mb.language = "en"
    assert mb.send_mail("joe@example.org", "Grüße", "Body", "From: me@example.org")
    (sent,) = mailer.sent
    assert sent.subject.startswith("=?iso-8859-1?")
    assert sent.headers.startswith("From: me@example.org\r\n")
    assert "charset=iso-8859-1" in sent.headers


def test_send_mail_ascii_subject_untouched(mb, mailer):
    """ASCII subjects are passed through as is."""
    mb.send_mail("joe@example.org", "Hello", "Body")
    (sent,) = mailer.sent
    assert sent.subject == "Hello"
    assert "charset=utf-8" in sent.headers

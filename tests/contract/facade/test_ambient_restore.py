"""Contract tests: regex and mail calls leave ambient settings untouched.

The multibyte subsystem's regex encoding and mail language are read before
and after every call, including calls that raise.
"""

from __future__ import annotations

import re

import pytest

from binstring.adapters.mailers import MemoryMailer
from binstring.adapters.runtime import ProcessRuntime
from binstring.service_layer.dispatcher import BinString
from tests.fixtures.runtimes import settings_for

# pylint: disable=redefined-outer-name

# States where overloaded calls go through the multibyte subsystem.
FORCED_STATES = ["forced", "forced_no_aliases"]

REGEX_CALLS = {
    "match": lambda s: s.match(rb"(a)", b"cat"),
    "imatch": lambda s: s.imatch(rb"(A)", b"cat"),
    "replace": lambda s: s.replace(rb"a", b"o", b"cat"),
    "ireplace": lambda s: s.ireplace(rb"A", b"o", b"cat"),
    "split": lambda s: s.split(rb"a", b"cat"),
}

FAILING_REGEX_CALLS = {
    "match": lambda s: s.match(rb"(", b"cat"),
    "imatch": lambda s: s.imatch(rb"[", b"cat"),
    "replace": lambda s: s.replace(rb"(", b"o", b"cat"),
    "ireplace": lambda s: s.ireplace(rb"a", b"o", b"cat", options="q"),
    "split": lambda s: s.split(rb"*", b"cat"),
}


@pytest.fixture(params=FORCED_STATES)
def runtime(request: pytest.FixtureRequest) -> ProcessRuntime:
    """A runtime with every family overloaded and a non-latin ambient encoding."""
    settings = settings_for(request.param, regex_encoding="UTF-8", language="uni")
    return ProcessRuntime(settings, MemoryMailer())


@pytest.fixture
def strings(runtime: ProcessRuntime) -> BinString:
    """A facade on ``runtime``."""
    return BinString(runtime, use_preserved_original=runtime.settings.use_orig)


@pytest.mark.parametrize("call", REGEX_CALLS.values(), ids=REGEX_CALLS.keys())
def test_regex_encoding_restored_after_success(runtime, strings, call) -> None:
    """A successful regex call leaves the regex encoding as it found it."""
    subsystem = runtime.load_multibyte()
    before = subsystem.regex_encoding
    call(strings)
    assert subsystem.regex_encoding == before == "UTF-8"


@pytest.mark.parametrize(
    "call", FAILING_REGEX_CALLS.values(), ids=FAILING_REGEX_CALLS.keys()
)
def test_regex_encoding_restored_after_failure(runtime, strings, call) -> None:
    """A regex call that raises still restores the regex encoding."""
    subsystem = runtime.load_multibyte()
    before = subsystem.regex_encoding
    with pytest.raises((re.error, ValueError)):
        call(strings)
    assert subsystem.regex_encoding == before


def test_custom_ambient_encoding_is_restored(runtime, strings) -> None:
    """Whatever encoding was active comes back, not a default."""
    subsystem = runtime.load_multibyte()
    subsystem.regex_encoding = "cp1252"
    strings.split(rb",", b"a,b")
    assert subsystem.regex_encoding == "cp1252"


def test_language_restored_after_mail(runtime, strings) -> None:
    """mail() leaves the mail language as it found it."""
    subsystem = runtime.load_multibyte()
    strings.mail("joe@example.org", "Hi", "Body")
    assert subsystem.language == "uni"

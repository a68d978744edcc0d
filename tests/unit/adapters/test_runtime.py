"""Unit tests for the process runtime."""

import logging
import sys
import types

import pytest

from binstring.adapters import runtime as runtime_module
from binstring.adapters.mailers import MemoryMailer
from binstring.adapters.multibyte import MultiByteStrings
from binstring.adapters.native import NativeRegex, NativeStrings
from binstring.adapters.overloaded import OverloadedMailer, OverloadedStrings
from binstring.adapters.runtime import ProcessRuntime
from binstring.config import Settings
from binstring.interfaces import FUNC_OVERLOAD_SETTING


def test_setting_reports_text():
    """Settings are reported as text; unknown keys as None."""
    runtime = ProcessRuntime(Settings(func_overload="6"))
    assert runtime.setting(FUNC_OVERLOAD_SETTING) == "6"
    assert runtime.setting("use_orig") == "False"
    assert runtime.setting("no_such_setting") is None


def test_load_multibyte_is_cached():
    """The subsystem is probed once and reused."""
    runtime = ProcessRuntime(Settings())
    subsystem = runtime.load_multibyte()
    assert isinstance(subsystem, MultiByteStrings)
    assert runtime.load_multibyte() is subsystem


@pytest.mark.parametrize(
    "module",
    [
        None,
        "binstring_tests_no_such_module",
        "binstring.config",  # importable, but offers no load() factory
    ],
)
def test_unavailable_subsystem_is_none(module, caplog):
    """A disabled, missing or unusable module yields no subsystem."""
    caplog.set_level(logging.DEBUG, logger="binstring.adapters.runtime")
    runtime = ProcessRuntime(Settings(multibyte_module=module))
    assert runtime.load_multibyte() is None
    assert caplog.records


def test_plain_is_original_when_nothing_overloaded():
    """Without overload bits plain calls reach the byte primitives."""
    runtime = ProcessRuntime(Settings(func_overload="0"))
    assert runtime.plain is runtime.original


def test_plain_is_original_without_subsystem():
    """Overload bits have no effect when the subsystem cannot load."""
    runtime = ProcessRuntime(Settings(func_overload="7", multibyte_module=None))
    assert runtime.plain is runtime.original


def test_plain_overloads_selected_families():
    """Only families whose bit is set are overloaded."""
    runtime = ProcessRuntime(Settings(func_overload="3"))
    plain = runtime.plain
    assert isinstance(plain.strings, OverloadedStrings)
    assert isinstance(plain.mail, OverloadedMailer)
    assert isinstance(plain.regex, NativeRegex)


def test_original_hidden_when_not_exposed():
    """expose_original=False hides the byte primitives."""
    runtime = ProcessRuntime(Settings(func_overload="7", expose_original=False))
    assert runtime.original is None
    assert isinstance(runtime.plain.strings, OverloadedStrings)


def test_original_uses_injected_mailer():
    """Original mail delivers through the injected mailer."""
    mailer = MemoryMailer()
    runtime = ProcessRuntime(Settings(), mailer)
    original = runtime.original
    assert original is not None
    assert original.mail is mailer
    assert isinstance(original.strings, NativeStrings)


@pytest.mark.parametrize(
    "overrides",
    [
        {"language": "fr"},
        {"internal_encoding": "no-such-codec"},
        {"regex_encoding": "no-such-codec"},
    ],
    ids=["language", "internal-encoding", "regex-encoding"],
)
def test_subsystem_rejecting_settings_is_unavailable(overrides, caplog):
    """A subsystem that refuses its settings is reported as missing, not raised."""
    runtime = ProcessRuntime(Settings(func_overload="7", **overrides))
    with caplog.at_level(logging.WARNING, logger="binstring.adapters.runtime"):
        assert runtime.load_multibyte() is None
    assert "failed to load" in caplog.text
    assert runtime.plain is runtime.original


def test_failing_factory_is_unavailable(monkeypatch):
    """Any error raised by the load() factory resolves to no subsystem."""

    def load(settings, mailer):  # pylint: disable=unused-argument
        raise RuntimeError("no backend")

    module = types.ModuleType("binstring_tests_broken_factory")
    module.load = load
    monkeypatch.setitem(sys.modules, module.__name__, module)
    runtime = ProcessRuntime(Settings(multibyte_module=module.__name__))
    assert runtime.load_multibyte() is None


def test_failing_import_is_unavailable(monkeypatch, caplog):
    """Errors other than ImportError while importing resolve to no subsystem."""

    def import_module(name):
        raise SyntaxError(f"broken module {name}")

    monkeypatch.setattr(
        runtime_module, "importlib", types.SimpleNamespace(import_module=import_module)
    )
    runtime = ProcessRuntime(Settings(func_overload="7"))
    with caplog.at_level(logging.WARNING, logger="binstring.adapters.runtime"):
        assert runtime.load_multibyte() is None
    assert "failed to import" in caplog.text


def test_failed_load_is_not_retried():
    """The failed probe result is cached like a successful one."""
    runtime = ProcessRuntime(Settings(language="fr"))
    assert runtime.load_multibyte() is None
    runtime._settings = Settings()  # pylint: disable=protected-access
    assert runtime.load_multibyte() is None

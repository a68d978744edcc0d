"""Fixtures for end-to-end CLI tests.

Every test runs in an isolated filesystem with the BINSTRING_* environment
cleared, so results depend only on what the test sets.
"""

import logging

import pytest
from click.testing import CliRunner

from binstring import config

# pylint: disable=redefined-outer-name

CONFIG_KEYS = (
    config.FUNC_OVERLOAD_KEY,
    config.MULTIBYTE_MODULE_KEY,
    config.INTERNAL_ENCODING_KEY,
    config.REGEX_ENCODING_KEY,
    config.LANGUAGE_KEY,
    config.USE_ORIG_KEY,
    config.ORIG_ALIASES_KEY,
    "BINSTRING_LOGGER_LEVELS",
)


@pytest.fixture
def runner():
    """Return a Click CliRunner for invoking CLI commands in tests."""
    return CliRunner()


@pytest.fixture
def fs(runner):
    """Provide an isolated filesystem context for tests using CliRunner."""
    with runner.isolated_filesystem():
        yield


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, fs):  # pylint: disable=unused-argument
    """Clear configuration variables and keep the flight recorder local.

    Per-logger levels set by ``-L``/``BINSTRING_LOGGER_LEVELS`` are process
    wide, so they are restored after each test.
    """
    for key in CONFIG_KEYS:
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("BINSTRING_LOG_PATH", "binstring.log")
    levels = {
        name: lgr.level
        for name, lgr in logging.Logger.manager.loggerDict.items()
        if isinstance(lgr, logging.Logger)
    }
    yield
    for name, lgr in logging.Logger.manager.loggerDict.items():
        if isinstance(lgr, logging.Logger):
            lgr.setLevel(levels.get(name, logging.NOTSET))

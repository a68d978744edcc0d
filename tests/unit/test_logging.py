"""Unit tests for binstring.logging."""

import logging

from rich.logging import RichHandler

from binstring.domain.capabilities import CapabilityRecord
from binstring.logging import (
    ThirdPartyPrefixFilter,
    config_console_handler,
    config_flight_recorder,
    log_startup,
)


def _record(name: str) -> logging.LogRecord:
    return logging.LogRecord(name, logging.INFO, __file__, 1, "msg", None, None)


def test_prefix_filter_marks_third_party():
    """Third-party records get a bracketed prefix; project records none."""
    flt = ThirdPartyPrefixFilter()
    third = _record("urllib3.connectionpool")
    own = _record("binstring.service_layer.dispatcher")
    assert flt.filter(third) and flt.filter(own)
    assert third.prefix == "[urllib3]"
    assert own.prefix == ""


def test_console_handler_levels():
    """Debug mode forces DEBUG and drops the prefix filter."""
    normal = config_console_handler(logging.WARNING, color=False)
    debug = config_console_handler(logging.WARNING, debug_mode=True, color=False)
    assert isinstance(normal, RichHandler)
    assert normal.level == logging.WARNING
    assert any(isinstance(f, ThirdPartyPrefixFilter) for f in normal.filters)
    assert debug.level == logging.DEBUG
    assert not debug.filters


def test_flight_recorder_flushes_to_file(tmp_path):
    """Buffered records reach the file once a WARNING arrives."""
    path = tmp_path / "binstring.log"
    handler = config_flight_recorder(path, capacity=10)
    logger = logging.getLogger("binstring.tests.flight")
    logger.setLevel(logging.DEBUG)
    logger.addHandler(handler)
    try:
        logger.debug("buffered detail")
        assert not path.exists()
        logger.warning("trouble")
        text = path.read_text(encoding="utf-8")
    finally:
        logger.removeHandler(handler)
        handler.close()
    assert "buffered detail" in text
    assert "trouble" in text


def test_log_startup_reports_capabilities(caplog):
    """Startup diagnostics include the capability record at DEBUG."""
    logger = logging.getLogger("binstring.tests.startup")
    caplog.set_level(logging.DEBUG, logger="binstring.tests.startup")
    log_startup(
        logger,
        app_version="9.9",
        level=logging.INFO,
        handlers=[],
        log_path=None,
        flight_recorder=False,
        flight_capacity=None,
        logger_levels={},
        capabilities=CapabilityRecord.from_setting(2, True),
    )
    assert "BINSTRING 9.9" in caplog.text
    assert "'strings': True" in caplog.text

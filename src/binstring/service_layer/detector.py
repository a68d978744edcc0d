"""Capability detection."""

import logging

from binstring.domain.capabilities import CapabilityRecord, coerce_setting
from binstring.interfaces.runtime import FUNC_OVERLOAD_SETTING, HostRuntime

logger = logging.getLogger(__name__)


def detect(runtime: HostRuntime) -> CapabilityRecord:
    """Inspect ``runtime`` and report which primitive families are overloaded.

    Reads the overload bitmask and probes for the multibyte subsystem. A
    family counts as redirected only when its bit is set *and* the subsystem
    is available. Never raises: a missing subsystem is a valid outcome.

    Args:
        runtime: Host runtime to inspect.

    Returns:
        CapabilityRecord: The immutable detection result.
    """
    overload = coerce_setting(runtime.setting(FUNC_OVERLOAD_SETTING))
    available = runtime.load_multibyte() is not None
    record = CapabilityRecord.from_setting(overload, available)
    logger.debug(
        "Capabilities: func_overload=%s, multibyte=%s, redirected=%s",
        overload,
        available,
        record.redirected,
    )
    return record

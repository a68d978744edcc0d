"""Process runtime: the host environment as configured by `Settings`.

The runtime reports the overload bitmask, probes for the multibyte subsystem
by importing the configured module, and builds the primitive set that plain
calls reach. A family is overloaded in that set only when its bit is set and
the subsystem actually loaded, which mirrors what capability detection will
conclude.
"""

from __future__ import annotations

import importlib
import logging
from dataclasses import asdict
from typing import TYPE_CHECKING

from binstring.adapters.mailers import MemoryMailer
from binstring.adapters.native import NativeRegex, NativeStrings
from binstring.adapters.overloaded import (
    OverloadedMailer,
    OverloadedRegex,
    OverloadedStrings,
)
from binstring.domain.capabilities import Family, coerce_setting, decode_func_overload
from binstring.interfaces.primitives import PrimitiveSet
from binstring.interfaces.runtime import HostRuntime

if TYPE_CHECKING:
    from binstring.config import Settings
    from binstring.interfaces.mailer import Mailer
    from binstring.interfaces.multibyte import MultiByteSubsystem

logger = logging.getLogger(__name__)

LOAD_FACTORY = "load"

_UNPROBED = object()


class ProcessRuntime(HostRuntime):
    """Host runtime backed by `Settings` and an injected mailer."""

    def __init__(self, settings: Settings, mailer: Mailer | None = None) -> None:
        self._settings = settings
        self._mailer = mailer if mailer is not None else MemoryMailer()
        self._multibyte: MultiByteSubsystem | None | object = _UNPROBED
        self._plain: PrimitiveSet | None = None
        self._original = PrimitiveSet(
            strings=NativeStrings(), regex=NativeRegex(), mail=self._mailer
        )

    @property
    def settings(self) -> Settings:
        """The settings this runtime was built from."""
        return self._settings

    def setting(self, key: str) -> str | None:
        value = asdict(self._settings).get(key)
        return None if value is None else str(value)

    def load_multibyte(self) -> MultiByteSubsystem | None:
        if self._multibyte is _UNPROBED:
            self._multibyte = self._probe()
        return self._multibyte  # type: ignore[return-value]

    def _probe(self) -> MultiByteSubsystem | None:
        module_name = self._settings.multibyte_module
        if not module_name:
            logger.debug("Multibyte subsystem disabled by configuration")
            return None
        try:
            module = importlib.import_module(module_name)
        except ImportError as exc:
            logger.debug("Multibyte subsystem %r unavailable: %s", module_name, exc)
            return None
        except Exception as exc:  # pylint: disable=broad-except
            logger.warning("Multibyte subsystem %r failed to import: %s", module_name, exc)
            return None
        if (factory := getattr(module, LOAD_FACTORY, None)) is None:
            logger.debug("Module %r has no %s() factory", module_name, LOAD_FACTORY)
            return None
        try:
            return factory(self._settings, self._mailer)
        except Exception as exc:  # pylint: disable=broad-except
            # Bad ambient settings (unknown codec or language) land here.
            logger.warning("Multibyte subsystem %r failed to load: %s", module_name, exc)
            return None

    @property
    def plain(self) -> PrimitiveSet:
        if self._plain is None:
            self._plain = self._build_plain()
        return self._plain

    def _build_plain(self) -> PrimitiveSet:
        overloaded = decode_func_overload(coerce_setting(self._settings.func_overload))
        subsystem = self.load_multibyte()
        if subsystem is None or not overloaded:
            return self._original
        return PrimitiveSet(
            strings=(
                OverloadedStrings(subsystem)
                if Family.STRINGS in overloaded
                else self._original.strings
            ),
            regex=(
                OverloadedRegex(subsystem)
                if Family.REGEX in overloaded
                else self._original.regex
            ),
            mail=(
                OverloadedMailer(subsystem)
                if Family.MAIL in overloaded
                else self._original.mail
            ),
        )

    @property
    def original(self) -> PrimitiveSet | None:
        return self._original if self._settings.expose_original else None

"""Configuration utilities for BINSTRING.

This module centralizes the environment variables that describe the host
runtime (the overload bitmask, the optional multibyte subsystem and its
ambient encodings) and the helpers that read them.
"""

import os
from collections.abc import Mapping
from dataclasses import dataclass

FUNC_OVERLOAD_KEY = "BINSTRING_FUNC_OVERLOAD"
MULTIBYTE_MODULE_KEY = "BINSTRING_MULTIBYTE_MODULE"
INTERNAL_ENCODING_KEY = "BINSTRING_INTERNAL_ENCODING"
REGEX_ENCODING_KEY = "BINSTRING_REGEX_ENCODING"
LANGUAGE_KEY = "BINSTRING_LANGUAGE"
USE_ORIG_KEY = "BINSTRING_USE_ORIG"
ORIG_ALIASES_KEY = "BINSTRING_ORIG_ALIASES"

DEFAULT_MULTIBYTE_MODULE = "binstring.adapters.multibyte"
DEFAULT_ENCODING = "UTF-8"
DEFAULT_LANGUAGE = "uni"

# Codec that maps every byte to exactly one character.
SINGLE_BYTE_CODEC = "latin-1"
# Mail language whose header charset is the single-byte codec.
SINGLE_BYTE_LANGUAGE = "en"

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES = frozenset({"0", "false", "no", "off", ""})


class InvalidSettingError(ValueError):
    """Raised when an environment variable holds a malformed value."""

    def __init__(self, key: str, value: str) -> None:
        super().__init__(f"Invalid value for {key}: {value!r}")
        self.key = key
        self.value = value


@dataclass(frozen=True)
class Settings:
    """Host runtime settings.

    Attributes:
        func_overload: Raw overload bitmask, kept as text the way the host
            reports it. Interpretation is left to capability detection.
        multibyte_module: Import path of the optional multibyte subsystem.
            ``None`` disables the subsystem.
        internal_encoding: Ambient encoding used by overloaded string primitives.
        regex_encoding: Ambient encoding used by overloaded regex primitives.
        language: Ambient mail language.
        use_orig: Initial value of the facade's escape hatch.
        expose_original: Whether the runtime keeps the original byte primitives
            reachable once a family is overloaded.
    """

    func_overload: str = "0"
    multibyte_module: str | None = DEFAULT_MULTIBYTE_MODULE
    internal_encoding: str = DEFAULT_ENCODING
    regex_encoding: str = DEFAULT_ENCODING
    language: str = DEFAULT_LANGUAGE
    use_orig: bool = False
    expose_original: bool = True


def parse_bool(key: str, value: str) -> bool:
    """Parse a boolean environment value.

    Args:
        key: Variable name (for error messages).
        value: Raw value.

    Returns:
        The parsed boolean.

    Raises:
        InvalidSettingError: If the value is not a recognised boolean.
    """
    normalized = value.strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    raise InvalidSettingError(key, value)


def load_settings(environ: Mapping[str, str] | None = None) -> Settings:
    """Read `Settings` from the environment.

    Args:
        environ: Mapping to read from. Defaults to ``os.environ``.

    Returns:
        The settings, with defaults for every unset variable.

    Raises:
        InvalidSettingError: If a boolean variable is malformed.
    """
    env = os.environ if environ is None else environ
    module = env.get(MULTIBYTE_MODULE_KEY, DEFAULT_MULTIBYTE_MODULE).strip()
    return Settings(
        func_overload=env.get(FUNC_OVERLOAD_KEY, "0"),
        multibyte_module=module or None,
        internal_encoding=env.get(INTERNAL_ENCODING_KEY, DEFAULT_ENCODING),
        regex_encoding=env.get(REGEX_ENCODING_KEY, DEFAULT_ENCODING),
        language=env.get(LANGUAGE_KEY, DEFAULT_LANGUAGE),
        use_orig=parse_bool(USE_ORIG_KEY, env.get(USE_ORIG_KEY, "0")),
        expose_original=parse_bool(ORIG_ALIASES_KEY, env.get(ORIG_ALIASES_KEY, "1")),
    )

"""Interfaces (application boundary) for BINSTRING.

Defines the contracts the dispatcher routes between: the byte-oriented string
and regex primitive families, the optional multibyte subsystem, the injected
mailer, and the host runtime that exposes them.

Dependency rule: this package is independent; do not import from any
`binstring.*` modules. It may be imported by `binstring.service_layer`,
`binstring.adapters`, and `binstring.bootstrap`.
"""

from .mailer import Mailer
from .multibyte import MultiByteSubsystem
from .primitives import PrimitiveSet, Registers, RegexPrimitives, StringPrimitives
from .runtime import FUNC_OVERLOAD_SETTING, HostRuntime

__all__ = [
    "FUNC_OVERLOAD_SETTING",
    "HostRuntime",
    "Mailer",
    "MultiByteSubsystem",
    "PrimitiveSet",
    "Registers",
    "RegexPrimitives",
    "StringPrimitives",
]

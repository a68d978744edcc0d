"""Bootstrap (composition root) for BINSTRING.

Assembles the library at runtime: reads configuration, builds the process
runtime with its mailer, and hands back a ready `BinString` facade.

Import rules:
- Entry points import *this* package rather than adapters directly.
- This package may import `binstring.adapters`, `binstring.service_layer`,
  `binstring.interfaces`, `binstring.domain`, and `binstring.config`.
- Inner layers must not import `binstring.bootstrap`.
"""

from .bootstrap import bootstrap, build_runtime, default_runtime

__all__ = ["bootstrap", "build_runtime", "default_runtime"]

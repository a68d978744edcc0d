"""Build runtimes and facades from configuration."""

from __future__ import annotations

import functools
from typing import TYPE_CHECKING

from binstring import config
from binstring.adapters.runtime import ProcessRuntime
from binstring.service_layer.dispatcher import BinString

if TYPE_CHECKING:
    from binstring.config import Settings
    from binstring.interfaces.mailer import Mailer


def build_runtime(
    settings: Settings | None = None, mailer: Mailer | None = None
) -> ProcessRuntime:
    """Build a new process runtime.

    Args:
        settings: Host settings; read from the environment when omitted.
        mailer: Message transport; an in-memory mailer when omitted.
    """
    return ProcessRuntime(settings or config.load_settings(), mailer)


@functools.cache
def default_runtime() -> ProcessRuntime:
    """Return the process-wide runtime, built from the environment on first use.

    Facades built on it share one multibyte subsystem, and so one set of
    ambient encodings.
    """
    return build_runtime()


def bootstrap(
    settings: Settings | None = None,
    mailer: Mailer | None = None,
    *,
    use_preserved_original: bool | None = None,
) -> BinString:
    """Build a `BinString` facade.

    With no arguments the facade runs on the process-wide runtime. Passing
    ``settings`` or ``mailer`` builds a dedicated runtime instead.

    Args:
        settings: Host settings for a dedicated runtime.
        mailer: Message transport for a dedicated runtime.
        use_preserved_original: Initial escape-hatch value; defaults to
            ``settings.use_orig``.
    """
    if settings is None and mailer is None:
        runtime = default_runtime()
    else:
        runtime = build_runtime(settings, mailer)
    if use_preserved_original is None:
        use_preserved_original = runtime.settings.use_orig
    return BinString(runtime, use_preserved_original=use_preserved_original)

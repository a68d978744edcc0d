"""BINSTRING CLI entry point.

Defines the top-level ``binstring`` command (via Click-Extra), configures
logging, builds the byte-exact facade for the current environment, and
registers the operation subcommands.

Notes
- The CLI version is sourced from `binstring.__version__` and displayed
  automatically by Click-Extra (``--version``).
- Byte results go to stdout unchanged; logs and messages go to stderr.

Examples
    $ binstring caps
    $ printf 'caf\\xc3\\xa9' | BINSTRING_FUNC_OVERLOAD=7 binstring length -
    $ binstring --func-overload 2 substr 6 greeting.txt
"""

import dataclasses
import logging
from pathlib import Path
from typing import TYPE_CHECKING

import click
import click_extra as clickx
from platformdirs import user_log_dir

from binstring import __version__
from binstring.bootstrap import bootstrap
from binstring.config import (
    DEFAULT_MULTIBYTE_MODULE,
    InvalidSettingError,
    load_settings,
)
from binstring.logging import config_console_handler, config_flight_recorder, log_startup

from .helpers.log_level_parser import parse_log_level
from .ops import OPERATIONS

if TYPE_CHECKING:
    from logging import Handler

logger = logging.getLogger(__name__)


HELP = """BINSTRING command-line interface.

    Run byte-exact string operations (length, search, slicing, case conversion,
    counting, pattern matching) on files or stdin, whatever the function
    overload setting of the environment says. Use `caps` to see which
    primitive families are overloaded and how each call is routed.
    """


@clickx.extra_group(
    version=__version__,
    help=HELP,
    params=[
        clickx.ColorOption(show_envvar=True),
        clickx.TimerOption(show_envvar=True),
        clickx.ExtraVersionOption(),
    ],
)
@click.option(
    "--verbose",
    "-v",
    "verbose_count",
    count=True,
    help=(
        "Increase the default WARNING verbosity by one level "
        "for each additional repetition of the option."
    ),
    default=0,
)
@click.option(
    "--quiet",
    "-q",
    "quiet_count",
    count=True,
    help=(
        "Decrease the default WARNING verbosity by one level "
        "for each additional repetition of the option."
    ),
    default=0,
)
@click.option(
    "--debug/--no-debug",
    is_flag=True,
    help="Enable debug mode (enables extra developer diagnostics beyond -vvv).",
    default=False,
)
@click.option(
    "--log-path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Path to log file (overrides default flight recorder path).",
    default=Path(user_log_dir("binstring", appauthor=False, ensure_exists=True))
    / "latest.log",
    envvar="BINSTRING_LOG_PATH",
    show_default=True,
    show_envvar=True,
)
@click.option(
    "--flight-recorder-capacity",
    type=int,
    default=2000,
    hidden=True,
    envvar="BINSTRING_FLIGHT_RECORDER_CAPACITY",
    show_envvar=True,
    help="Capacity of the flight recorder (in number of log records).",
)
@click.option(
    "--flight-recorder/--no-flight-recorder",
    "flight_recorder",
    is_flag=True,
    help=(
        "Enable the in-memory flight recorder. Keeps the last N log records "
        "at DEBUG granularity (unaffected by -v/-q) and writes them to "
        "--log-path when a WARNING/ERROR occurs, or on exit if --force-flush is set."
    ),
    default=True,
)
@click.option(
    "--force-flush/--no-force-flush",
    "force_flush_flight_recorder",
    is_flag=True,
    help="Flush the flight recorder buffer to --log-path on program exit.",
    default=False,
    show_default=True,
)
@click.option(
    "-L",
    "--logger-level",
    "logger_levels",
    multiple=True,
    callback=parse_log_level,
    help=(
        "Set MINIMUM LEVEL for specific LOGGERS (NAME=LEVEL). Applies to both "
        "console and flight-recorder. Repeatable (e.g. -L binstring=DEBUG) or via "
        "BINSTRING_LOGGER_LEVELS (comma/space list)."
    ),
    envvar="BINSTRING_LOGGER_LEVELS",
    default=(),
    show_envvar=True,
)
@click.option(
    "--func-overload",
    "func_overload",
    type=click.IntRange(min=0),
    default=None,
    help=(
        "Override the overload bitmask (1=mail, 2=strings, 4=regex). "
        "Defaults to BINSTRING_FUNC_OVERLOAD."
    ),
)
@click.option(
    "--multibyte/--no-multibyte",
    "multibyte",
    default=None,
    help="Allow or prevent loading the multibyte subsystem.",
)
@click.option(
    "--use-orig/--no-use-orig",
    "use_orig",
    default=None,
    help=(
        "Prefer the preserved original byte primitives for overloaded "
        "families. Defaults to BINSTRING_USE_ORIG."
    ),
)
@clickx.pass_context
def binstring(  # pylint: disable=too-many-arguments, too-many-locals, too-many-positional-arguments
    ctx: click.Context,
    verbose_count: int,
    quiet_count: int,
    debug: bool,
    log_path: Path,
    flight_recorder_capacity: int,
    flight_recorder: bool,
    force_flush_flight_recorder: bool,
    logger_levels: dict[str, int],
    func_overload: int | None,
    multibyte: bool | None,
    use_orig: bool | None,
) -> None:
    """BINSTRING command-line interface."""

    # 0) compute effective verbosity
    base_level = logging.WARNING
    level = base_level - (10 * verbose_count) + (10 * quiet_count)
    level = max(logging.DEBUG, min(logging.CRITICAL, level))

    handlers: list[Handler] = []

    # 1) console handler
    use_color = ctx.color is not False
    handlers.append(
        config_console_handler(level=level, debug_mode=debug, color=use_color)
    )

    # 2) flight recorder
    if flight_recorder:
        handlers.append(
            config_flight_recorder(
                path=log_path,
                capacity=flight_recorder_capacity,
                flush_on_close=force_flush_flight_recorder,
            )
        )

    # 3) root logger
    logging.basicConfig(level=logging.DEBUG, handlers=handlers, force=True)

    # 4) per-logger levels
    for name, lvl in logger_levels.items():
        logging.getLogger(name).setLevel(lvl)

    # 5) facade for this environment
    try:
        settings = load_settings()
    except InvalidSettingError as e:
        raise click.ClickException(str(e)) from e
    overrides: dict[str, object] = {}
    if func_overload is not None:
        overrides["func_overload"] = str(func_overload)
    if multibyte is False:
        overrides["multibyte_module"] = None
    elif multibyte and settings.multibyte_module is None:
        overrides["multibyte_module"] = DEFAULT_MULTIBYTE_MODULE
    settings = dataclasses.replace(settings, **overrides)
    ctx.obj = bootstrap(settings, use_preserved_original=use_orig)

    # 6) startup info
    log_startup(
        logger,
        app_version=__version__,
        level=level,
        handlers=handlers,
        log_path=log_path,
        flight_recorder=flight_recorder,
        flight_capacity=flight_recorder_capacity if flight_recorder else None,
        logger_levels=logger_levels,
        capabilities=ctx.obj.capabilities,
    )

    ctx.call_on_close(logging.shutdown)


for _operation in OPERATIONS:
    binstring.add_command(_operation)

"""recordgate CLI entry point.

Defines the top-level ``recordgate`` command (via Click-Extra) and registers
its subcommands.

Currently available commands
- ``recordgate check``: validate a JSON list of records against a declaration.
- ``recordgate load``: save the valid ones into a relational store.

Examples
    $ recordgate --version
    $ recordgate -v check tasks.json records.json
    $ recordgate load --db-url sqlite:///records.db tasks.json records.json
"""

import logging
from typing import TYPE_CHECKING

import click
import click_extra as clickx

from recordgate import __version__
from recordgate.logging import console_handler, log_startup

from .helpers import parse_log_level
from .records import check, load

if TYPE_CHECKING:
    from logging import Handler

logger = logging.getLogger(__name__)


HELP = """recordgate command-line interface.

    Validate records against declarative field rules, and persist only the
    ones that pass.
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
    help="Enable debug mode (enables extra developer diagnostics beyond -vv).",
    default=False,
)
@click.option(
    "-L",
    "--logger-level",
    "logger_levels",
    multiple=True,
    callback=parse_log_level,
    help=(
        "Set MINIMUM LEVEL for specific LOGGERS (NAME=LEVEL). "
        "Repeatable (e.g. -L sqlalchemy=INFO) or via RECORDGATE_LOGGER_LEVELS "
        "(comma/space list)."
    ),
    default=("sqlalchemy=WARNING",),
    show_default=True,
    show_envvar=True,
)
@clickx.pass_context
def recordgate(  # pylint: disable=too-many-arguments, too-many-positional-arguments
    ctx: click.Context,
    verbose_count: int,
    quiet_count: int,
    debug: bool,
    logger_levels: dict[str, int],
) -> None:
    """recordgate command-line interface."""

    # 0) compute effective verbosity
    level = logging.WARNING - (10 * verbose_count) + (10 * quiet_count)
    level = max(logging.DEBUG, min(logging.CRITICAL, level))

    # 1) configure console handler
    use_color = ctx.color is not False  # None or True => allow color
    handlers: list[Handler] = [
        console_handler(level=level, debug=debug, color=use_color)
    ]

    # 2) configure root logger; handlers filter
    logging.basicConfig(level=logging.DEBUG, handlers=handlers, force=True)

    # 3) third-party logger levels
    for name, lvl in logger_levels.items():
        logging.getLogger(name).setLevel(lvl)

    log_startup(
        logger,
        app_version=__version__,
        level=level,
        handlers=handlers,
        logger_levels=logger_levels,
    )

    ctx.call_on_close(logging.shutdown)


recordgate.add_command(check)
recordgate.add_command(load)

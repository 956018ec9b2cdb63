"""Logging for openvex scripts and library code.

Library modules get their logger with :func:`getLogger`; nothing is printed
until a script calls :func:`activate` (or :func:`activate_with_args` after
parsing the options added by :func:`add_logging_argument_group`).
"""  # noqa RST304

from __future__ import annotations
from dataclasses import dataclass

import json
import logging
import os
import re
import sys
import time
from typing import TYPE_CHECKING, ClassVar

from colorama import Fore, Style

from openvex.config import ConfigSection

if TYPE_CHECKING:
    from typing import Any, Optional, Tuple
    from argparse import ArgumentParser, _ArgumentGroup, Namespace


@dataclass
class LogConfig(ConfigSection):
    title: ClassVar[str] = "log"

    pretty: bool = True
    stream_fmt: str = "%(levelname)-8s %(message)s"
    file_fmt: str = "%(asctime)s: %(name)-24s: %(levelname)-8s %(message)s"


log_config = LogConfig.load()

# Colors are only used when writing to a terminal
pretty_cli = log_config.pretty and sys.stderr.isatty()

LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


class JSONFormatter(logging.Formatter):
    """Format each record as a JSON object on a single line.

    Empty attributes are left out.
    """

    ATTRIBUTES = (
        "asctime",
        "levelname",
        "name",
        "message",
        "module",
        "exc_text",
        "vex_id",
    )

    def __init__(self) -> None:
        # asctime is only computed when the format string uses it
        super().__init__(fmt="%(asctime)s")

    def format(self, record: logging.LogRecord) -> str:
        super().format(record)
        values = {attr: getattr(record, attr, None) for attr in self.ATTRIBUTES}
        return json.dumps({attr: val for attr, val in values.items() if val})


class VexLoggerAdapter(logging.LoggerAdapter):
    """Logger accepting the ID of the VEX document a record is about.

    The ID is stored in the ``vex_id`` attribute of the records::

        logger.debug("saved %s", path, vex_id=document._id)
    """

    def process(self, msg: Any, kwargs: Any) -> Tuple[Any, Any]:
        # The default implementation replaces the record extra attributes
        return msg, kwargs

    def log(
        self, level: int, msg: Any, *args: Any, vex_id: str | None = None, **kwargs: Any
    ) -> None:
        kwargs.setdefault("extra", {})["vex_id"] = vex_id
        super().log(level, msg, *args, **kwargs)


class ColorHandler(logging.StreamHandler):
    """Stream handler coloring the level name of each record."""

    LEVEL_COLORS = (
        (re.compile(r"^(DEBUG)"), Fore.CYAN),
        (re.compile(r"^(INFO)"), Style.DIM),
        (re.compile(r"^(WARNING)"), Fore.YELLOW),
        (re.compile(r"^(ERROR)"), Fore.RED),
        (re.compile(r"^(CRITICAL)"), Fore.RED + Style.BRIGHT),
    )

    def format(self, record: logging.LogRecord) -> str:
        msg = super().format(record)
        for regexp, color in self.LEVEL_COLORS:
            msg = regexp.sub(color + r"\1" + Fore.RESET + Style.RESET_ALL, msg)
        return msg


__prefixes_with_null_handler: set[str] = set()


def getLogger(
    name: Optional[str] = None, prefix: str = "openvex"
) -> VexLoggerAdapter:
    """Return the logger *prefix*.*name*.

    A :class:`logging.NullHandler` is attached to the *prefix* logger, so that
    applications which do not configure logging get no warning.

    :param name: logger name
    :param prefix: application prefix, prepended to *name*
    """  # noqa RST304
    if prefix not in __prefixes_with_null_handler:
        logging.getLogger(prefix).addHandler(logging.NullHandler())
        __prefixes_with_null_handler.add(prefix)
    return VexLoggerAdapter(logging.getLogger(f"{prefix}.{name}"), {})


def add_log_handler(
    level: int,
    log_format: str,
    filename: Optional[str] = None,
    json_format: bool = False,
) -> None:
    """Attach a handler to the root logger. Times are written in UTC.

    :param level: minimum level of the records handled
    :param log_format: format of the records, unless *json_format*
    :param filename: write to this file instead of stderr
    :param json_format: emit one JSON object per record
    """
    handler: logging.Handler
    if filename is not None:
        handler = logging.FileHandler(filename, encoding="utf-8")
    elif pretty_cli and not json_format:
        handler = ColorHandler()
    else:
        handler = logging.StreamHandler()

    fmt = JSONFormatter() if json_format else logging.Formatter(log_format)
    fmt.converter = time.gmtime  # type: ignore
    handler.setFormatter(fmt)
    handler.setLevel(level)
    logging.getLogger("").addHandler(handler)


def add_logging_argument_group(
    argument_parser: ArgumentParser,
    default_level: int = logging.WARNING,
) -> _ArgumentGroup:
    """Add the logging options to a parser.

    Parsed options are applied by :func:`activate_with_args`.

    :param argument_parser: the parser in which the group will be created
    :param default_level: the console log level when no option is given
    """  # noqa RST304
    log_group = argument_parser.add_argument_group(title="logging arguments")
    log_group.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="make the console output more verbose, may be repeated",
    )
    log_group.add_argument(
        "--log-file",
        metavar="FILE",
        default=None,
        help="also write all the logs to FILE",
    )
    log_group.add_argument(
        "--loglevel",
        default=default_level,
        choices=LEVELS,
        help="set the console log level",
    )
    log_group.add_argument(
        "--nocolor",
        default=False,
        action="store_true",
        help="disable colors",
    )
    log_group.add_argument(
        "--json-logs",
        default="json-logs" in os.environ.get("OPENVEX_ENABLE_FEATURE", "").split(","),
        action="store_true",
        help="write logs as JSON objects, also enabled by"
        " OPENVEX_ENABLE_FEATURE=json-logs",
    )
    return log_group


def activate_with_args(args: Namespace, default_level: int = logging.WARNING) -> None:
    """Activate logging according to the options of the command line.

    :param args: options parsed with a parser set up by
        :func:`add_logging_argument_group`
    :param default_level: the console log level when no option is given
    """  # noqa RST304
    global pretty_cli

    if args.verbose > 0:
        level = default_level - 10 * args.verbose
    else:
        level = LEVELS.get(args.loglevel, args.loglevel)

    if args.nocolor:
        pretty_cli = False

    activate(level=level, filename=args.log_file, json_format=args.json_logs)


def activate(
    level: int = logging.INFO,
    filename: Optional[str] = None,
    json_format: bool = False,
) -> None:
    """Print logs on stderr, and optionally write them to a file.

    :param level: the console log level. The file gets all the records.
    :param filename: the log file
    :param json_format: emit one JSON object per record
    """
    # Filtering is done by the handlers
    logging.getLogger("").setLevel(logging.DEBUG)

    add_log_handler(level, log_config.stream_fmt, json_format=json_format)
    if filename is not None:
        add_log_handler(
            logging.DEBUG,
            log_config.file_fmt,
            filename=filename,
            json_format=json_format,
        )

"""Main program initialization.

This package provides a class called Main used to initialize a python script
invoked from command line. The main goal is to ensure consistency in terms of
interface, documentation and logging activities for all scripts using openvex.

The script will support by default the following switches::

    -v|--verbose to enable verbose mode (a console logger is added)
    -h|--help    display command line help
    --log-file FILE
                 to redirect logs to a given file (this is independent of
                 verbose option)
    --loglevel LEVEL
                 set the console log level
    --nocolor    disable colors
    --json-logs  emit logs as JSON objects
"""

from __future__ import annotations

from argparse import ArgumentParser
import logging
import os
import signal
import sys
import threading

from typing import TYPE_CHECKING

import openvex.log

if TYPE_CHECKING:
    from types import FrameType
    from typing import NoReturn
    from argparse import Namespace


class Main:
    """Class that implement argument parsing.

    :ivar args: the parsed command line arguments
    """

    def __init__(
        self,
        name: str | None = None,
        argument_parser: ArgumentParser | None = None,
        default_level: int = logging.INFO,
    ):
        """Initialize Main object.

        :param name: name of the program (if not specified the filename without
            extension is taken)
        :param argument_parser: the ArgumentParser to use for parsing
            command-line arguments (if not specified, an ArgumentParser will be
            created by Main)
        :param default_level: the console log level when neither --verbose
            nor --loglevel is given
        """
        main = sys.modules["__main__"]

        if name is not None:
            self.name = name
        elif hasattr(main, "__file__") and main.__file__ is not None:
            self.name = os.path.splitext(os.path.basename(main.__file__))[0]
        else:
            self.name = "unknown"

        if argument_parser is None:
            argument_parser = ArgumentParser(prog=self.name)

        openvex.log.add_logging_argument_group(
            argument_parser, default_level=default_level
        )

        self.args: Namespace | None = None
        self.argument_parser = argument_parser
        self.default_level = default_level
        self.__log_handlers_set = False

        def sigterm_handler(sig: int, frame: FrameType | None) -> NoReturn:  # unix-only
            """Automatically convert SIGTERM to SystemExit exception.

            :param sig: signal action
            :param frame: the interrupted stack frame
            """
            del sig, frame
            logging.critical("SIGTERM received")
            raise SystemExit("SIGTERM received")

        if sys.platform != "win32":  # unix-only
            if threading.current_thread() is threading.main_thread():
                # Signal can only be used in the main thread
                signal.signal(signal.SIGTERM, sigterm_handler)

    def parse_args(
        self, args: list[str] | None = None, known_args_only: bool = False
    ) -> None:
        """Parse options and set console logger.

        :param args: the list of positional parameters. If None then
            ``sys.argv[1:]`` is used
        :param known_args_only: does not produce an error when extra
            arguments are present
        """
        if known_args_only:
            self.args, _ = self.argument_parser.parse_known_args(args)
        else:
            self.args = self.argument_parser.parse_args(args)

        if not self.__log_handlers_set:
            openvex.log.activate_with_args(self.args, self.default_level)
            self.__log_handlers_set = True

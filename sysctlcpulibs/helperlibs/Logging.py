# -*- coding: utf-8 -*-
# vim: ts=4 sw=4 tw=100 et ai si
#
# Copyright (C) 2020-2025 Intel Corporation
# SPDX-License-Identifier: BSD-3-Clause
#
# Author: Artem Bityutskiy <artem.bityutskiy@linux.intel.com>

"""
Logging helpers: a custom logger class with message coloring, per-level prefixes, and the 'NOTICE'
and 'ERRINFO' log levels.
"""

from __future__ import annotations # Remove when switching to Python 3.10+.

import sys
import logging
import traceback
from typing import NoReturn, Any, IO, cast
try:
    # It is OK if 'colorama' is not available, we only lose message coloring.
    import colorama
    colorama_imported = True
except ImportError:
    colorama_imported = False

# Log levels.
#   * INFO: No prefixes, just the message.
#   * NOTICE: An INFO message, but with a prefix.
#   * DEBUG, WARNING, ERROR, CRITICAL: Also have the prefix.
#   * ERRINFO: An ERROR message, but without a prefix.
INFO = logging.INFO
NOTICE = logging.INFO + 1
DEBUG = logging.DEBUG
WARNING = logging.WARNING
ERROR = logging.ERROR
ERRINFO = logging.ERROR + 1
CRITICAL = logging.CRITICAL

# Name of the main logger instance. Other project loggers are supposed to be children of this one.
MAIN_LOGGER_NAME = "main"

# Names of the modules to print debug messages for. All modules if 'None'.
DEBUG_MODULE_NAMES: set[str] | None = None

_DEFAULT_DBG_PREFIX = "[%(created)f] [%(asctime)s] [%(module)s,%(lineno)d]"

class _MyFormatter(logging.Formatter):
    """A logging formatter with different message formats for different log levels."""

    def __init__(self, prefix: str = "", colors: dict[int, str] | None = None):
        """
        Initialize the formatter.

        Args:
            prefix: Prefix for non-info and non-debug messages, usually the tool name.
            colors: Log level to 'colorama' color code mapping. No coloring if empty.
        """

        logging.Formatter.__init__(self, "%(levelname)s: %(message)s", "%H:%M:%S")

        self._colors = colors if colors else {}
        self._myfmt: dict[int, str] = {}

        self.set_prefix(prefix)

    def _start(self, level: int) -> str:
        """Return the "start color output" code for log level 'level'."""
        return str(self._colors.get(level, ""))

    def _end(self, level: int) -> str:
        """Return the "end color output" code for log level 'level'."""

        if level in self._colors:
            return str(colorama.Style.RESET_ALL)
        return ""

    def set_prefix(self, prefix: str):
        """
        Build per-level message formats for prefix 'prefix'.

        Args:
            prefix: Prefix for non-info and non-debug messages.
        """

        if prefix:
            prefix += ": "

        for lvl, pfx in ((WARNING, "warning"), (ERROR, "error"), (CRITICAL, "critical error"),
                         (NOTICE, "notice")):
            if not prefix:
                pfx = pfx.title()
            self._myfmt[lvl] = self._start(lvl) + prefix + pfx + self._end(lvl) + ": %(message)s"

        fmt = _DEFAULT_DBG_PREFIX + ": %(message)s"
        fmt = fmt.replace("[", "[" + self._start(DEBUG)).replace("]", self._end(DEBUG) + "]")
        self._myfmt[DEBUG] = fmt

        self._myfmt[ERRINFO] = self._myfmt[INFO] = "%(message)s"

    def format(self, record: logging.LogRecord) -> str:
        """
        Format log record 'record' using the format of its log level.

        Args:
            record: The log record to format.

        Returns:
            The formatted log message.
        """

        # pylint: disable=protected-access
        self._style._fmt = self._myfmt.get(record.levelno, "%(message)s")
        return logging.Formatter.format(self, record)

class _MyFilter(logging.Filter):
    """Let through only the specified log levels, and debug messages only of selected modules."""

    def __init__(self, let_go: list[int]):
        """
        Initialize the filter.

        Args:
            let_go: Log levels to let through.
        """

        logging.Filter.__init__(self)
        self._let_go = let_go

    def filter(self, record: logging.LogRecord) -> bool:
        """Return 'True' if log record 'record' should be printed."""

        if record.levelno not in self._let_go:
            return False
        if record.levelno == DEBUG and DEBUG_MODULE_NAMES is not None:
            return record.module in DEBUG_MODULE_NAMES
        return True

class Logger(logging.Logger):
    """
    A logger with the following additions to the standard logger:
      * Message coloring.
      * Different prefixes for different log levels.
      * The NOTICE and ERRINFO log levels.
      * The 'error_out()' method.
    """

    def __init__(self, name: str | None = None):
        """
        Initialize the logger.

        Args:
            name: The name of the logger (same as in 'logging.Logger()').
        """

        self.prefix = ""
        self.colored = False
        self._colors: dict[int, str] = {}

        super().__init__(name if name else "default")

    def configure(self,
                  prefix: str = "",
                  level: int | None = None,
                  colored: bool | None = None,
                  info_stream: IO[str] = sys.stdout,
                  error_stream: IO[str] = sys.stderr) -> Logger:
        """
        Configure the logger.

        Args:
            prefix: The prefix for log messages, used for all levels except 'INFO' and 'ERRINFO'.
            level: The log level. Detected from the '-d' and '-q' command line options by default.
            colored: Whether to color the output. By default, color only if both streams are TTYs,
                     or if the '--force-color' command line option was specified.
            info_stream: The stream for 'INFO' level messages.
            error_stream: The stream for messages of all the other levels.

        Returns:
            The configured logger.
        """

        self.prefix = prefix

        if not level:
            if "-q" in sys.argv:
                level = WARNING
            elif "-d" in sys.argv:
                level = DEBUG
            else:
                level = INFO

        self.setLevel(level)

        if not colorama_imported:
            colored = False
        elif colored is None:
            if "--force-color" in sys.argv:
                colored = True
            else:
                colored = info_stream.isatty() and error_stream.isatty()

        self.colored = colored
        if colored:
            self._colors[DEBUG] = colorama.Fore.GREEN
            self._colors[WARNING] = colorama.Fore.YELLOW + colorama.Style.BRIGHT
            self._colors[NOTICE] = colorama.Fore.CYAN + colorama.Style.BRIGHT
            self._colors[ERROR] = colorama.Fore.RED + colorama.Style.BRIGHT
            self._colors[CRITICAL] = self._colors[ERROR]
        else:
            self._colors = {}

        self.handlers = []
        formatter = _MyFormatter(prefix=self.prefix, colors=self._colors)

        handler = logging.StreamHandler(info_stream)
        handler.setFormatter(formatter)
        handler.addFilter(_MyFilter([INFO]))
        self.addHandler(handler)

        handler = logging.StreamHandler(error_stream)
        handler.setFormatter(formatter)
        handler.addFilter(_MyFilter([DEBUG, WARNING, NOTICE, ERROR, ERRINFO, CRITICAL]))
        self.addHandler(handler)

        return self

    def _print_traceback(self, level: int = ERROR):
        """Print the traceback of the exception being handled, or the stack trace."""

        if sys.exc_info()[0]:
            tback = traceback.format_exc()
        else:
            tback = "".join(traceback.format_stack())

        if colorama_imported and self.colored:
            dim, undim = colorama.Style.DIM, colorama.Style.RESET_ALL
        else:
            dim = undim = ""

        self.log(level, "--- Debug trace starts here ---")
        self.log(level, "%sAn error occurred, here is the traceback:\n%s%s", dim, tback.rstrip(),
                 undim)
        self.log(level, "--- Debug trace ends here ---\n")

    def error_out(self, fmt: str | Exception, *args: Any, print_tb: bool = False) -> NoReturn:
        """
        Print an error message and terminate program execution with exit code 1.

        Args:
            fmt: The error message format string.
            *args: The arguments to format the error message.
            print_tb: If True, print the stack trace. The stack trace is always printed in debug
                      mode.
        """

        if args:
            errmsg = str(fmt) % args
        else:
            errmsg = str(fmt)

        if print_tb or self.getEffectiveLevel() == DEBUG:
            self._print_traceback(level=ERRINFO)

        self.error(errmsg)

        raise SystemExit(1)

    def notice(self, fmt: str, *args: Any):
        """Log a message with level 'NOTICE'."""

        self.log(NOTICE, fmt, *args)

logging.setLoggerClass(Logger)

def getLogger(name: str | None = None) -> Logger:
    """
    Get a logger by name (similar to 'logging.getLogger()').

    Args:
        name: The name of the logger.

    Returns:
        The logger instance.
    """

    # Because of 'setLoggerClass()', this returns a 'Logger' instance (except for the root logger).
    return cast(Logger, logging.getLogger(name=name))

# -*- coding: utf-8 -*-
# vim: ts=4 sw=4 tw=100 et ai si
#
# Copyright (C) 2020-2025 Intel Corporation
# SPDX-License-Identifier: BSD-3-Clause
#
# Author: Artem Bityutskiy <artem.bityutskiy@linux.intel.com>

"""
Helpful classes extending 'argparse.ArgumentParser' class functionality.
"""

from __future__ import annotations # Remove when switching to Python 3.10+.

import typing
import argparse
from pathlib import Path

try:
    import argcomplete
    _ARGCOMPLETE_AVAILABLE = True
except ImportError:
    # We can live without argcomplete, we only lose tab completions.
    _ARGCOMPLETE_AVAILABLE = False

from sysctlcpulibs.helperlibs import Trivial, Logging
from sysctlcpulibs.helperlibs.Exceptions import Error

if typing.TYPE_CHECKING:
    from typing import TypedDict, Iterable, Any

    class ArgKwargsTypedDict(TypedDict, total=False):
        """
        The keyword arguments passed to 'argparse.add_argument()' for an option.

        Attributes:
            dest: The 'argparse' attribute name where the command line argument will be stored.
            default: The default value for the argument.
            metavar: The name of the argument in the help text.
            action: The 'argparse' action to use for the argument.
            help: A brief description of the argument.
        """

        dest: str
        default: str | int
        metavar: str
        action: str
        help: str

    class ArgTypedDict(TypedDict, total=False):
        """
        An option definition dictionary.

        Attributes:
            short: The short option name.
            long: The long option name.
            argcomplete: The 'argcomplete' completer class name to use for the option.
            kwargs: Additional keyword arguments for 'argparse.add_argument()'.
        """

        short: str | None
        long: str
        argcomplete: str | None
        kwargs: ArgKwargsTypedDict

    class CommonArgsTypedDict(TypedDict, total=False):
        """
        The common command-line arguments.

        Attributes:
            quiet: Suppress non-essential output (-q option).
            force_color: Force colorized output even if the output stream is not a terminal.
            debug: Enable debugging output (-d option).
            debug_modules: Modules to enable debugging output for (all modules if 'None').
        """

        quiet: bool
        force_color: bool
        debug: bool
        debug_modules: list[str] | None

    class SSHArgsTypedDict(TypedDict, total=False):
        """
        The SSH-related command-line arguments after they have been validated.

        Attributes:
            hostname: The remote host name or IP address (-H option), "localhost" by default.
            username: The user name for logging into the remote host (-U option).
            privkey: The path to the private SSH key (-K option).
            timeout: The SSH connection timeout in seconds (-T option).
        """

        hostname: str
        username: str
        privkey: str | Path
        timeout: int | float | None

SSH_OPTIONS: list[ArgTypedDict] = [
    {
        "short" : "-H",
        "long" : "--host",
        "argcomplete" : None,
        "kwargs" : {
            "dest" : "hostname",
            "default" : "localhost",
            "help" : "Host name or IP address of the remote host to query over SSH. Query the "
                     "local host if not specified."
        },
    },
    {
        "short" : "-U",
        "long" : "--username",
        "argcomplete" : None,
        "kwargs" : {
            "dest" : "username",
            "default" : "",
            "help" : "Name of the user to use for logging into the remote host over SSH. The "
                     "default user name is 'root'."
        },
    },
    {
        "short" : "-K",
        "long" : "--priv-key",
        "argcomplete" : "FilesCompleter",
        "kwargs" : {
            "dest" : "privkey",
            "default" : "",
            "help" : "Path to the private SSH key for logging into the remote host. Defaults to "
                     "keys in standard paths like '$HOME/.ssh'."
        },
    },
    {
        "short" : "-T",
        "long" : "--timeout",
        "argcomplete" : None,
        "kwargs" : {
            "dest" : "timeout",
            "default" : "",
            "help" : "Timeout for establishing an SSH connection in seconds. Defaults to 8."
        },
    },
]

def add_options(parser: argparse.ArgumentParser, options: Iterable[ArgTypedDict]):
    """
    Add command line options to the given parser.

    Args:
        parser: The argument parser object to which options will be added.
        options: Option definition dictionaries.
    """

    for opt in options:
        args: tuple[str, ...]

        if opt["short"] is None:
            args = (opt["long"], )
        else:
            args = (opt["short"], opt["long"])

        arg = parser.add_argument(*args, **opt["kwargs"])
        if opt["argcomplete"] and _ARGCOMPLETE_AVAILABLE:
            setattr(arg, "completer", getattr(argcomplete.completers, opt["argcomplete"]))

def add_ssh_options(parser: argparse.ArgumentParser):
    """
    Add SSH-related command-line options to the given argument parser.

    Args:
        parser: The argument parser object to which SSH options will be added.
    """

    add_options(parser, SSH_OPTIONS)

def format_common_args(args: argparse.Namespace) -> CommonArgsTypedDict:
    """
    Verify common command-line arguments and return them as a dictionary.

    Args:
        args: Parsed command-line arguments.

    Returns:
        A dictionary containing the common options.
    """

    cmdl: CommonArgsTypedDict = {}

    cmdl["quiet"] = getattr(args, "quiet", False)
    cmdl["debug"] = getattr(args, "debug", False)
    if cmdl["quiet"] and cmdl["debug"]:
        raise Error("The '-q' and '-d' options cannot be used together")

    debug_modules: str | None = getattr(args, "debug_modules", None)
    if debug_modules:
        if not cmdl["debug"]:
            raise Error("The '--debug-modules' option requires the '-d' option to be used")
        cmdl["debug_modules"] = Trivial.split_csv_line(debug_modules)
    else:
        cmdl["debug_modules"] = None

    cmdl["force_color"] = getattr(args, "force_color", False)
    if cmdl["force_color"] and not Logging.colorama_imported:
        raise Error("The '--force-color' option requires the 'colorama' python package to be "
                    "installed")

    return cmdl

def format_ssh_args(args: argparse.Namespace) -> SSHArgsTypedDict:
    """
    Verify SSH-related command-line arguments and return them as a dictionary.

    Args:
        args: Parsed command-line arguments.

    Returns:
        A dictionary containing the SSH-related options.
    """

    hostname: str = getattr(args, "hostname", "localhost")
    username: str = getattr(args, "username", "")
    privkey: str | Path = getattr(args, "privkey", "")
    timeout: int | float | None = getattr(args, "timeout", None)

    if hostname == "localhost":
        if username:
            raise Error("The '--username' option requires the '--host' option")
        if privkey:
            raise Error("The '--priv-key' option requires the '--host' option")
        if timeout:
            raise Error("The '--timeout' option requires the '--host' option")
        timeout = None
    else:
        if not username:
            username = "root"
        if timeout:
            timeout = Trivial.str_to_num(timeout, what="--timeout option value")
        else:
            timeout = 8

    return {"hostname": hostname, "username": username, "privkey": privkey, "timeout": timeout}

class ArgsParser(argparse.ArgumentParser):
    """
    Enhance 'argparse.ArgumentParser' with standard options and improved usability.
      - Add the standard options, such as '-h', '-q' and '-d'.
      - Validate the standard options and configure debugging output.
      - Raise 'Error' instead of exiting the program on bad arguments.
    """

    def __init__(self, *args: Any, **kwargs: Any):
        """
        Initialize the parser. The 'ver' keyword argument is the tool version, add the '--version'
        option if it is provided.
        """

        version = kwargs.pop("ver", None)

        kwargs["add_help"] = False
        super().__init__(*args, **kwargs)

        text = "Show this help message and exit."
        self.add_argument("-h", "--help", dest="help", action="help", help=text)

        text = "Be quiet (print only important messages like warnings)."
        self.add_argument("-q", "--quiet", dest="quiet", action="store_true", help=text)

        text = """Force colorized output even if the output stream is not a terminal (adds ANSI
                  escape codes)."""
        self.add_argument("--force-color", action="store_true", help=text)

        text = "Print debugging information."
        self.add_argument("-d", "--debug", dest="debug", action="store_true", help=text)

        text = "Print debugging information only from the specified modules."
        self.add_argument("--debug-modules", action="store", metavar="MODNAME[,MODNAME1,...]",
                          help=text)

        if version:
            text = "Print the version number and exit."
            self.add_argument("--version", action="version", help=text, version=version)

    def parse_args(self, *args: Any, **kwargs: Any) -> argparse.Namespace: # type: ignore[override]
        """
        Parse command line arguments and configure debug logging.

        Args:
            *args: Positional arguments for 'ArgumentParser.parse_args()'.
            **kwargs: Keyword arguments for 'ArgumentParser.parse_args()'.

        Returns:
            The parsed arguments.
        """

        _args = super().parse_args(*args, **kwargs)

        cmdl = format_common_args(_args)
        if cmdl["debug_modules"] is not None:
            Logging.DEBUG_MODULE_NAMES = set(cmdl["debug_modules"])

        return _args

    def error(self, message: str): # type: ignore[override]
        """
        Raise 'Error' with the 'argparse' error message.

        Args:
            message: The original error message.
        """

        # The superclass method exits the program, raise an exception instead.
        raise Error(f"{message}\nUse -h for help.")

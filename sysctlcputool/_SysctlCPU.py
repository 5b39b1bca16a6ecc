# -*- coding: utf-8 -*-
# vim: ts=4 sw=4 tw=100 et ai si
#
# Copyright (C) 2020-2025 Intel Corporation
# SPDX-License-Identifier: BSD-3-Clause
#
# Authors: Artem Bityutskiy <artem.bityutskiy@linux.intel.com>
#          Niklas Neronin <niklas.neronin@intel.com>

"""
sysctl-cpu - print CPU information from the sysctl registry.
"""

from __future__ import annotations # Remove when switching to Python 3.10+.

import sys
import typing

try:
    import argcomplete
except ImportError:
    # We can live without argcomplete, we only lose tab completions.
    argcomplete = None

from sysctlcpulibs import CPUInfo, CPUInfoChecks, Sysctl, EmulSysctl
from sysctlcpulibs.helperlibs import ArgParse, Logging, YAML
from sysctlcpulibs.helperlibs.Exceptions import Error

if typing.TYPE_CHECKING:
    import argparse
    from typing import IO, Sequence
    from sysctlcpulibs.Sysctl import SysctlType
    from sysctlcpulibs.CPUInfoTypes import SnapshotType
    from sysctlcpulibs.helperlibs.ArgParse import ArgTypedDict

if sys.version_info < (3, 8):
    raise SystemExit("this tool requires python version 3.8 or higher")

_VERSION = "1.0.0"
TOOLNAME = "sysctl-cpu"

_LOG = Logging.getLogger(f"{Logging.MAIN_LOGGER_NAME}.{TOOLNAME}").configure(prefix=TOOLNAME)

_OPTIONS: list[ArgTypedDict] = [
    {
        "short": "-D",
        "long": "--dataset",
        "argcomplete": "FilesCompleter",
        "kwargs": {
            "dest": "dataset",
            "default": "",
            "help": """This option is for debugging and testing. It specifies the dataset to emulate
                       a host for running the command. The argument can be a dataset path or
                       name."""
        },
    },
    {
        "short": None,
        "long": "--yaml",
        "argcomplete": None,
        "kwargs": {
            "dest": "yaml",
            "action": "store_true",
            "help": "Print the CPU information in YAML format instead of JSON."
        },
    },
    {
        "short": None,
        "long": "--check",
        "argcomplete": None,
        "kwargs": {
            "dest": "check",
            "action": "store_true",
            "help": """Check the CPU information for suspicious values (e.g., more physical cores
                       than logical cores) and print warnings about them. The CPU information
                       itself is printed unchanged."""
        },
    },
    {
        "short": None,
        "long": "--dump-dataset",
        "argcomplete": "FilesCompleter",
        "kwargs": {
            "dest": "dump_dataset",
            "default": "",
            "metavar": "PATH",
            "help": """Instead of printing CPU information, save the sysctl values it is built from
                       to a dataset file at PATH. The dataset can later be used with the
                       '--dataset' option."""
        },
    },
]

def build_arguments_parser() -> ArgParse.ArgsParser:
    """
    Build and return the command-line arguments parser object.

    Returns:
        The arguments parser object.
    """

    text = f"""{TOOLNAME} - print CPU identification, core counts, frequency, and cache information
               from the sysctl registry in JSON format."""
    parser = ArgParse.ArgsParser(description=text, prog=TOOLNAME, ver=_VERSION)

    ArgParse.add_ssh_options(parser)
    ArgParse.add_options(parser, _OPTIONS)

    if argcomplete:
        argcomplete.autocomplete(parser)

    return parser

def parse_arguments(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """
    Parse command-line arguments.

    Args:
        argv: The command-line arguments to parse. Use 'sys.argv' by default.

    Returns:
        The parsed arguments.
    """

    parser = build_arguments_parser()
    return parser.parse_args(argv)

def _get_sysctl(args: argparse.Namespace) -> SysctlType:
    """
    Create and return the sysctl object for the host specified by the command-line arguments.

    Args:
        args: The parsed command-line arguments.

    Returns:
        The sysctl object.
    """

    ssh_args = ArgParse.format_ssh_args(args)

    if args.dataset:
        if ssh_args["hostname"] != "localhost":
            raise Error("The '--dataset' and '--host' options cannot be used together")
        return EmulSysctl.EmulSysctl(dataset=args.dataset)

    privkey = ssh_args["privkey"] if ssh_args["privkey"] else None
    return Sysctl.get_sysctl(ssh_args["hostname"], username=ssh_args["username"],
                             privkeypath=privkey, timeout=ssh_args["timeout"])

def _print_snapshot(snapshot: SnapshotType, yaml: bool = False, fobj: IO[str] | None = None):
    """
    Print a CPU information snapshot.

    Args:
        snapshot: The snapshot to print.
        yaml: Print in YAML format if True, in JSON format otherwise.
        fobj: The file object to print to. Use the standard output by default.

    Raises:
        Error: If the snapshot cannot be serialized or written.
    """

    if fobj is None:
        fobj = sys.stdout

    if yaml:
        YAML.dump(CPUInfo.snapshot_to_dict(snapshot), fobj)
        return

    text = CPUInfo.snapshot_to_json(snapshot)

    try:
        fobj.write(text + "\n")
        fobj.flush()
    except OSError as err:
        msg = Error(str(err)).indent(2)
        raise Error(f"Failed to write CPU information to '{getattr(fobj, 'name', fobj)}':\n"
                    f"{msg}") from err

def _check_snapshot(snapshot: SnapshotType, hostmsg: str):
    """
    Check a CPU information snapshot and print a warning for every problem found.

    Args:
        snapshot: The snapshot to check.
        hostmsg: The host description for the messages.
    """

    problems = CPUInfoChecks.check_snapshot(snapshot)
    for problem in problems:
        _LOG.warning("Suspicious CPU information%s: %s", hostmsg, problem)

    if not problems:
        _LOG.debug("No suspicious CPU information%s", hostmsg)

def main(argv: Sequence[str] | None = None) -> int:
    """
    The tool entry point.

    Args:
        argv: The command-line arguments. Use 'sys.argv' by default.

    Returns:
        The program exit code.
    """

    try:
        args = parse_arguments(argv)

        with _get_sysctl(args) as sysctl:
            if args.dump_dataset:
                # pylint: disable-next=import-outside-toplevel
                from sysctlcputool import _SysctlCPUDataGen

                _SysctlCPUDataGen.dump_dataset(sysctl, args.dump_dataset)
                return 0

            snapshot = CPUInfo.get_snapshot(sysctl=sysctl)
            hostmsg = sysctl.hostmsg

        if args.check:
            _check_snapshot(snapshot, hostmsg)

        _print_snapshot(snapshot, yaml=args.yaml)
    except KeyboardInterrupt:
        _LOG.info("\nInterrupted, exiting")
        return 1
    except Error as err:
        _LOG.error_out(err)

    return 0

if __name__ == "__main__":
    sys.exit(main())

# -*- coding: utf-8 -*-
# vim: ts=4 sw=4 tw=100 et ai si
#
# Copyright (C) 2020-2025 Intel Corporation
# SPDX-License-Identifier: BSD-3-Clause
#
# Author: Artem Bityutskiy <artem.bityutskiy@linux.intel.com>

"""
Provide a unified way of creating a sysctl registry access object ("sysctl object") for local,
remote, or emulated hosts.
"""

from __future__ import annotations # Remove when switching to Python 3.10+.

import typing
import contextlib
from pathlib import Path

if typing.TYPE_CHECKING:
    from typing import Union, cast
    from sysctlcpulibs import LocalSysctl, SSHSysctl, EmulSysctl

    SysctlType = Union[LocalSysctl.LocalSysctl, SSHSysctl.SSHSysctl, EmulSysctl.EmulSysctl]

# pylint: disable=import-outside-toplevel

def get_sysctl(hostname: str = "localhost",
               username: str = "",
               privkeypath: str | Path | None = None,
               timeout: int | float | None = None) -> SysctlType:
    """
    Create and return a sysctl object for the specified host.

    The following cases are handled:
        1. 'hostname' is "localhost": return a 'LocalSysctl' object.
        2. 'hostname' starts with "emulation:": return an 'EmulSysctl' object for the dataset
           following the colon (a dataset name or path).
        3. All other cases: return an 'SSHSysctl' object connected to the host.

    Args:
        hostname: The host name to create a sysctl object for.
        username: The user name for logging into the host over SSH.
        privkeypath: Path to the SSH private key for authentication.
        timeout: The SSH connection timeout in seconds.

    Returns:
        An instance of the appropriate sysctl class.

    Usage examples:
        1.  with get_sysctl(hostname) as sysctl:
                sysctl.read_text("hw.physicalcpu")

        2.  sysctl = get_sysctl(hostname)
            try:
                sysctl.read_text("hw.physicalcpu")
            finally:
                sysctl.close()
    """

    if hostname == "localhost":
        from sysctlcpulibs import LocalSysctl

        return LocalSysctl.LocalSysctl()

    if hostname.startswith("emulation:"):
        from sysctlcpulibs import EmulSysctl

        dataset = hostname.split(":", maxsplit=1)[1]
        return EmulSysctl.EmulSysctl(dataset=dataset, hostname=hostname)

    from sysctlcpulibs import SSHSysctl

    return SSHSysctl.SSHSysctl(hostname, username=username, privkeypath=privkeypath,
                               timeout=timeout)

def sysctl_or_local(sysctl: SysctlType | None) -> SysctlType:
    """
    Return the provided sysctl object or a new 'LocalSysctl' object.

    The result is supposed to be used in a 'with' statement. A new 'LocalSysctl' object is closed
    when the 'with' block ends, but the provided sysctl object is not closed, because it belongs to
    the caller.

    Args:
        sysctl: The sysctl object to use. If 'None', a new 'LocalSysctl' object is created.

    Returns:
        The provided sysctl object wrapped into a "nullcontext" context manager, or a new
        'LocalSysctl' object.
    """

    if sysctl is not None:
        if typing.TYPE_CHECKING:
            return cast(SysctlType, contextlib.nullcontext(enter_result=sysctl))
        return contextlib.nullcontext(enter_result=sysctl)

    from sysctlcpulibs import LocalSysctl

    return LocalSysctl.LocalSysctl()

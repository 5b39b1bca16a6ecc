#!/usr/bin/env python3
#
# -*- coding: utf-8 -*-
# vim: ts=4 sw=4 tw=100 et ai si
#
# Copyright (C) 2020-2025 Intel Corporation
# SPDX-License-Identifier: BSD-3-Clause
#
# Author: Antti Laakso <antti.laakso@linux.intel.com>
#         Artem Bityutskiy <artem.bityutskiy@linux.intel.com>

"""Common functions for sysctl-cpu tests."""

from __future__ import annotations # Remove when switching to Python 3.10+.

from pathlib import Path
import typing
from sysctlcpulibs import Sysctl, EmulSysctl

if typing.TYPE_CHECKING:
    from sysctlcpulibs.Sysctl import SysctlType

def get_dataset_path(dataset: str) -> Path:
    """
    Get the path to a dataset in the tests data directory.

    Args:
        dataset: Name of the dataset.

    Returns:
        Path to the dataset file.
    """

    return Path(__file__).parent.resolve() / "data" / f"{dataset}.yaml"

def is_emulated(sysctl: SysctlType) -> bool:
    """
    Determine if the provided sysctl object corresponds to an emulated host.

    Args:
        sysctl: The sysctl object to check.

    Returns:
        True if the sysctl object corresponds to an emulated host, False otherwise.
    """

    return sysctl.hostname.startswith("emulation")

def get_sysctl(hostspec: str, username: str = "") -> SysctlType:
    """
    Create and return a sysctl object for the specified host.

    Args:
        hostspec: The host specification/name to create a sysctl object for. If the hostspec starts
                  with "emulation:", the rest of it is the name of a dataset in the tests data
                  directory.
        username: Name of the user to use for logging into the remote host over SSH.

    Returns:
        A sysctl object for the specified host. 'EmulSysctl' in case of emulation, 'LocalSysctl'
        for the localhost, and 'SSHSysctl' for remote hosts.
    """

    if hostspec.startswith("emulation:"):
        dataset = hostspec.split(":", maxsplit=1)[1]
        return EmulSysctl.EmulSysctl(dataset=get_dataset_path(dataset), hostname=hostspec)

    return Sysctl.get_sysctl(hostspec, username=username)

def get_cmdline_args(hostspec: str) -> list[str]:
    """
    Return the 'sysctl-cpu' command-line arguments for querying the specified host.

    Args:
        hostspec: The host specification/name, same as in 'get_sysctl()'.

    Returns:
        The command-line arguments list.
    """

    if hostspec.startswith("emulation:"):
        dataset = hostspec.split(":", maxsplit=1)[1]
        return ["-D", str(get_dataset_path(dataset))]

    if hostspec == "localhost":
        return []

    return ["-H", hostspec]

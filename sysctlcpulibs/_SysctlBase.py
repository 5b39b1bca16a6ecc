# -*- coding: utf-8 -*-
# vim: ts=4 sw=4 tw=100 et ai si
#
# Copyright (C) 2020-2025 Intel Corporation
# SPDX-License-Identifier: BSD-3-Clause
#
# Author: Artem Bityutskiy <artem.bityutskiy@linux.intel.com>

"""
The base class for sysctl registry access classes.

A sysctl registry access object ("sysctl object") provides two operations on a host's sysctl
registry: probing whether a key exists, and reading a key's value as text. The registry is
read-only, there are no write operations.
"""

from __future__ import annotations # Remove when switching to Python 3.10+.

from sysctlcpulibs.helperlibs import ClassHelpers

class SysctlBase(ClassHelpers.SimpleCloseContext):
    """
    The base class for sysctl registry access classes. Subclasses implement 'exists()' and
    'read_text()' for a specific kind of host, e.g., the local host or a remote host.
    """

    def __init__(self, hostname: str = "localhost"):
        """
        Initialize a class instance.

        Args:
            hostname: Name of the host the sysctl registry belongs to.
        """

        self.hostname = hostname
        self.is_remote = hostname != "localhost"

        if self.is_remote:
            self.hostmsg = f" on host '{hostname}'"
        else:
            self.hostmsg = ""

    def exists(self, key: str) -> bool:
        """
        Check if a sysctl key exists, without reading its value.

        Args:
            key: The fully-qualified sysctl key name, e.g., "hw.physicalcpu".

        Returns:
            True if the key exists, False otherwise.
        """

        raise NotImplementedError(f"BUG: '{type(self).__name__}' does not implement 'exists()'")

    def read_text(self, key: str) -> str | None:
        """
        Read the value of a sysctl key as text.

        Args:
            key: The fully-qualified sysctl key name, e.g., "hw.physicalcpu".

        Returns:
            The value of the key as text, or 'None' if the key does not exist or its value cannot be
            read.
        """

        raise NotImplementedError(f"BUG: '{type(self).__name__}' does not implement 'read_text()'")

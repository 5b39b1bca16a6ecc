#!/usr/bin/env python3
#
# -*- coding: utf-8 -*-
# vim: ts=4 sw=4 tw=100 et ai si
#
# Copyright (C) 2020-2025 Intel Corporation
# SPDX-License-Identifier: BSD-3-Clause
#
# Author: Artem Bityutskiy <artem.bityutskiy@linux.intel.com>

"""Test command-line arguments handling of the 'sysctl-cpu' tool."""

from __future__ import annotations # Remove when switching to Python 3.10+.

import sys
import pytest
from sysctlcpulibs import Sysctl
from sysctlcpulibs.helperlibs import ArgParse
from sysctlcpulibs.helperlibs.Exceptions import Error, ErrorNotSupported
from sysctlcputool import _SysctlCPU

def test_defaults():
    """Verify the default values of the command-line arguments."""

    args = _SysctlCPU.parse_arguments([])

    assert args.hostname == "localhost"
    assert not args.dataset
    assert not args.yaml
    assert not args.check
    assert not args.dump_dataset

    assert ArgParse.format_ssh_args(args) == {"hostname": "localhost", "username": "",
                                              "privkey": "", "timeout": None}

def test_ssh_args():
    """Verify the SSH options formatting."""

    args = _SysctlCPU.parse_arguments(["-H", "mac1"])
    assert ArgParse.format_ssh_args(args) == {"hostname": "mac1", "username": "root",
                                              "privkey": "", "timeout": 8}

    args = _SysctlCPU.parse_arguments(["-H", "mac1", "-U", "admin", "-T", "2.5"])
    ssh_args = ArgParse.format_ssh_args(args)
    assert ssh_args["username"] == "admin"
    assert ssh_args["timeout"] == 2.5

    args = _SysctlCPU.parse_arguments(["-H", "mac1", "-T", "soon"])
    with pytest.raises(Error):
        ArgParse.format_ssh_args(args)

    for opts in (["-U", "admin"], ["-K", "/tmp/key"], ["-T", "5"]):
        args = _SysctlCPU.parse_arguments(opts)
        with pytest.raises(Error):
            ArgParse.format_ssh_args(args)

def test_bad_options():
    """Verify that bad options raise 'Error' instead of exiting."""

    with pytest.raises(Error):
        _SysctlCPU.parse_arguments(["--no-such-option"])

    with pytest.raises(Error):
        _SysctlCPU.parse_arguments(["--debug-modules", "CPUInfo"])

@pytest.mark.skipif(sys.platform == "darwin", reason="the local host has the sysctl registry")
def test_local_not_supported():
    """Verify that the local sysctl registry is reported as not supported on non-BSD hosts."""

    if sys.platform.startswith("freebsd"):
        pytest.skip("the local host has the sysctl registry")

    with pytest.raises(ErrorNotSupported):
        Sysctl.get_sysctl("localhost")

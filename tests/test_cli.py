#!/usr/bin/env python3
#
# -*- coding: utf-8 -*-
# vim: ts=4 sw=4 tw=100 et ai si
#
# Copyright (C) 2020-2025 Intel Corporation
# SPDX-License-Identifier: BSD-3-Clause
#
# Author: Artem Bityutskiy <artem.bityutskiy@linux.intel.com>

"""Test the 'sysctl-cpu' command-line tool."""

from __future__ import annotations # Remove when switching to Python 3.10+.

import json
import sys
from pathlib import Path
import pytest
import yaml
import common
from sysctlcpulibs import CPUInfo, EmulSysctl
from sysctlcpulibs.helperlibs.Exceptions import Error
from sysctlcputool import _SysctlCPU

class _BrokenStream:
    """A text stream which fails on every write."""

    name = "<broken>"

    def write(self, _: str):
        """Fail."""

        raise OSError("No space left on device")

    def flush(self):
        """Do nothing."""

    def isatty(self) -> bool:
        """Not a terminal."""

        return False

def _get_snapshot(hostspec: str):
    """Build and return the snapshot of a host."""

    with common.get_sysctl(hostspec) as sysctl:
        return CPUInfo.get_snapshot(sysctl=sysctl)

def test_json_output(hostspec: str, capsys: pytest.CaptureFixture[str]):
    """Verify that the tool prints the JSON snapshot and exits with 0."""

    assert _SysctlCPU.main(common.get_cmdline_args(hostspec)) == 0

    doc = json.loads(capsys.readouterr().out)
    assert doc == CPUInfo.snapshot_to_dict(_get_snapshot(hostspec))

def test_yaml_output(hostspec: str, capsys: pytest.CaptureFixture[str]):
    """Verify the '--yaml' option."""

    assert _SysctlCPU.main(common.get_cmdline_args(hostspec) + ["--yaml"]) == 0

    doc = yaml.safe_load(capsys.readouterr().out)
    assert doc == CPUInfo.snapshot_to_dict(_get_snapshot(hostspec))

def test_check_option(hostspec: str, capsys: pytest.CaptureFixture[str]):
    """Verify that the '--check' option does not change the output."""

    assert _SysctlCPU.main(common.get_cmdline_args(hostspec) + ["--check"]) == 0

    doc = json.loads(capsys.readouterr().out)
    assert doc == CPUInfo.snapshot_to_dict(_get_snapshot(hostspec))

def test_dump_dataset_option(hostspec: str, tmp_path: Path):
    """Verify the '--dump-dataset' option."""

    path = tmp_path / "dataset.yaml"
    assert _SysctlCPU.main(common.get_cmdline_args(hostspec) + ["--dump-dataset", str(path)]) == 0

    with EmulSysctl.EmulSysctl(dataset=path) as sysctl:
        assert CPUInfo.get_snapshot(sysctl=sysctl) == _get_snapshot(hostspec)

def test_write_failure(hostspec: str, monkeypatch: pytest.MonkeyPatch):
    """Verify that a failure to write the output is reported with exit code 1."""

    snapshot = _get_snapshot(hostspec)
    with pytest.raises(Error):
        _SysctlCPU._print_snapshot(snapshot, fobj=_BrokenStream())

    monkeypatch.setattr(sys, "stdout", _BrokenStream())
    with pytest.raises(SystemExit) as excinfo:
        _SysctlCPU.main(common.get_cmdline_args(hostspec))
    assert excinfo.value.code == 1

@pytest.mark.parametrize("args", [["--no-such-option"],
                                  ["-D", "/no/such/dataset.yaml"],
                                  ["-U", "user"],
                                  ["-q", "-d"],
                                  ["-H", "host", "-D", "apple-m1"]])
def test_bad_arguments(args: list[str]):
    """Verify that bad arguments are reported with exit code 1."""

    with pytest.raises(SystemExit) as excinfo:
        _SysctlCPU.main(args)
    assert excinfo.value.code == 1

def test_version(capsys: pytest.CaptureFixture[str]):
    """Verify the '--version' option."""

    with pytest.raises(SystemExit) as excinfo:
        _SysctlCPU.main(["--version"])
    assert excinfo.value.code == 0
    assert capsys.readouterr().out.strip() == _SysctlCPU._VERSION

def test_interrupt(monkeypatch: pytest.MonkeyPatch):
    """Verify that an interrupted run exits with code 1."""

    def _interrupt(*_, **__):
        """Simulate pressing Ctrl-C."""

        raise KeyboardInterrupt()

    monkeypatch.setattr(CPUInfo, "get_snapshot", _interrupt)

    args = ["-D", str(common.get_dataset_path("apple-m1"))]
    assert _SysctlCPU.main(args) == 1

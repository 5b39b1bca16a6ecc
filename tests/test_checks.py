#!/usr/bin/env python3
#
# -*- coding: utf-8 -*-
# vim: ts=4 sw=4 tw=100 et ai si
#
# Copyright (C) 2020-2025 Intel Corporation
# SPDX-License-Identifier: BSD-3-Clause
#
# Author: Artem Bityutskiy <artem.bityutskiy@linux.intel.com>

"""Test the 'CPUInfoChecks' module."""

from __future__ import annotations # Remove when switching to Python 3.10+.

from sysctlcpulibs import CPUInfoChecks
from sysctlcpulibs.CPUInfoTypes import IdentificationType, CoreCountsType, FrequencyType
from sysctlcpulibs.CPUInfoTypes import CacheType, CacheSharingType, PerfLevelType, SnapshotType

_IDENT = IdentificationType("Apple M1", "", "")
_CORE_COUNTS = CoreCountsType(8, 8, 8, 8)
_PERFLEVEL = PerfLevelType(id=0, cache=CacheType(196608, 131072, 12582912, 0),
                           cache_sharing=CacheSharingType(4, 0))

def _snapshot(core_counts: CoreCountsType = _CORE_COUNTS,
              perflevels: tuple[PerfLevelType, ...] = (_PERFLEVEL,)) -> SnapshotType:
    """Build and return a snapshot object."""

    return SnapshotType(identification=_IDENT, core_counts=core_counts,
                        frequency=FrequencyType(0), performance_levels=perflevels)

def test_good_snapshot():
    """Verify that a healthy snapshot has no problems."""

    assert CPUInfoChecks.check_snapshot(_snapshot()) == []
    assert CPUInfoChecks.check_snapshot(_snapshot(perflevels=())) == []

def test_bad_core_counts():
    """Verify core counts checks."""

    problems = CPUInfoChecks.check_snapshot(_snapshot(core_counts=CoreCountsType(0, 8, 8, 8)))
    assert len(problems) == 1
    assert "physical" in problems[0]

    problems = CPUInfoChecks.check_snapshot(_snapshot(core_counts=CoreCountsType(16, 8, 16, 8)))
    assert problems == ["more physical cores (16) than logical cores (8)"]

    problems = CPUInfoChecks.check_snapshot(_snapshot(core_counts=CoreCountsType(8, 16, 4, 8)))
    assert len(problems) == 2

def test_bad_perflevel():
    """Verify performance level checks."""

    perflevel = _PERFLEVEL._replace(cache=CacheType(196608, 131072, 65536, 0))
    problems = CPUInfoChecks.check_snapshot(_snapshot(perflevels=(perflevel,)))
    assert len(problems) == 2
    assert all(problem.startswith("performance level 0: ") for problem in problems)

    perflevel = _PERFLEVEL._replace(cache=CacheType(196608, 131072, 12582912, 4194304))
    problems = CPUInfoChecks.check_snapshot(_snapshot(perflevels=(perflevel,)))
    assert len(problems) == 1
    assert "'l3_bytes'" in problems[0]

    perflevel = _PERFLEVEL._replace(id=1, cache_sharing=CacheSharingType(0, 0))
    problems = CPUInfoChecks.check_snapshot(_snapshot(perflevels=(_PERFLEVEL, perflevel)))
    assert len(problems) == 1
    assert problems[0].startswith("performance level 1: ")

def test_snapshot_not_changed():
    """Verify that checking does not change the snapshot."""

    snapshot = _snapshot(core_counts=CoreCountsType(0, 0, 0, 0))
    copy = SnapshotType(*snapshot)

    assert CPUInfoChecks.check_snapshot(snapshot)
    assert snapshot == copy

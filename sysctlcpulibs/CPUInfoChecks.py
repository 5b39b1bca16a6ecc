# -*- coding: utf-8 -*-
# vim: ts=4 sw=4 tw=100 et ai si
#
# Copyright (C) 2020-2025 Intel Corporation
# SPDX-License-Identifier: BSD-3-Clause
#
# Author: Artem Bityutskiy <artem.bityutskiy@linux.intel.com>

"""
Sanity checks for CPU information snapshots.

The checks only report suspicious values, they never change the snapshot. A snapshot of a host which
does not expose some of the sysctl keys is expected to fail some of the checks.
"""

from __future__ import annotations # Remove when switching to Python 3.10+.

import typing

if typing.TYPE_CHECKING:
    from sysctlcpulibs.CPUInfoTypes import SnapshotType, CoreCountsType, PerfLevelType

def _check_core_counts(core_counts: CoreCountsType) -> list[str]:
    """Check core counts, return the list of problems found."""

    problems = []

    for field, val in core_counts._asdict().items():
        if val <= 0:
            problems.append(f"core count '{field}' is {val}, expected a positive number")

    if core_counts.physical > core_counts.logical:
        problems.append(f"more physical cores ({core_counts.physical}) than logical cores "
                        f"({core_counts.logical})")
    if core_counts.physical > core_counts.max_physical:
        problems.append(f"more physical cores ({core_counts.physical}) than the maximum "
                        f"({core_counts.max_physical})")
    if core_counts.logical > core_counts.max_logical:
        problems.append(f"more logical cores ({core_counts.logical}) than the maximum "
                        f"({core_counts.max_logical})")

    return problems

def _check_perflevel(perflevel: PerfLevelType) -> list[str]:
    """Check a performance level, return the list of problems found."""

    problems = []
    pfx = f"performance level {perflevel.id}"
    cache = perflevel.cache

    for field in ("l1_instruction_bytes", "l1_data_bytes", "l2_bytes"):
        val = getattr(cache, field)
        if val <= 0:
            problems.append(f"{pfx}: cache size '{field}' is {val}, expected a positive number")

    if cache.l2_bytes > 0:
        for field in ("l1_instruction_bytes", "l1_data_bytes"):
            val = getattr(cache, field)
            if val > cache.l2_bytes:
                problems.append(f"{pfx}: '{field}' ({val}) is larger than 'l2_bytes' "
                                f"({cache.l2_bytes})")

    if cache.l3_bytes and cache.l2_bytes > cache.l3_bytes:
        problems.append(f"{pfx}: 'l2_bytes' ({cache.l2_bytes}) is larger than 'l3_bytes' "
                        f"({cache.l3_bytes})")

    if perflevel.cache_sharing.cores_per_l2 <= 0:
        problems.append(f"{pfx}: 'cores_per_l2' is {perflevel.cache_sharing.cores_per_l2}, "
                        f"expected a positive number")

    return problems

def check_snapshot(snapshot: SnapshotType) -> list[str]:
    """
    Check a CPU information snapshot for suspicious values.

    Args:
        snapshot: The snapshot to check.

    Returns:
        Descriptions of the problems found, an empty list if there are none.
    """

    problems = _check_core_counts(snapshot.core_counts)
    for perflevel in snapshot.performance_levels:
        problems += _check_perflevel(perflevel)

    return problems

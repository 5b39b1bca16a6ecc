# -*- coding: utf-8 -*-
# vim: ts=4 sw=4 tw=100 et ai si
#
# Copyright (C) 2020-2025 Intel Corporation
# SPDX-License-Identifier: BSD-3-Clause
#
# Author: Artem Bityutskiy <artem.bityutskiy@linux.intel.com>

"""
Provide types for the 'CPUInfo' module. All types are immutable named tuples.
"""

from __future__ import annotations # Remove when switching to Python 3.10+.

from typing import NamedTuple

class IdentificationType(NamedTuple):
    """
    CPU identification and branding.

    Attributes:
        brand_string: The CPU brand string (sysctl 'machdep.cpu.brand_string').
        vendor: The CPU vendor (sysctl 'machdep.cpu.vendor').
        feature_bits: The CPU feature bits (sysctl 'machdep.cpu.feature_bits').
    """

    brand_string: str
    vendor: str
    feature_bits: str

class CoreCountsType(NamedTuple):
    """
    Number of physical and logical cores.

    Attributes:
        physical: Number of available physical cores (sysctl 'hw.physicalcpu').
        logical: Number of available logical cores (sysctl 'hw.logicalcpu').
        max_physical: Maximum number of physical cores (sysctl 'hw.physicalcpu_max').
        max_logical: Maximum number of logical cores (sysctl 'hw.logicalcpu_max').
    """

    physical: int
    logical: int
    max_physical: int
    max_logical: int

class FrequencyType(NamedTuple):
    """
    CPU frequency.

    Attributes:
        hz: The nominal CPU frequency in Hz (sysctl 'hw.cpufrequency'). Zero on hosts that do not
            expose it, e.g., Apple silicon Macs.
    """

    hz: int

class CacheType(NamedTuple):
    """
    Cache sizes of a performance level.

    Attributes:
        l1_instruction_bytes: L1 instruction cache size (sysctl 'hw.perflevel<N>.l1icachesize').
        l1_data_bytes: L1 data cache size (sysctl 'hw.perflevel<N>.l1dcachesize').
        l2_bytes: L2 cache size (sysctl 'hw.perflevel<N>.l2cachesize').
        l3_bytes: L3 cache size (sysctl 'hw.perflevel<N>.l3cachesize'), zero if there is no L3.
    """

    l1_instruction_bytes: int
    l1_data_bytes: int
    l2_bytes: int
    l3_bytes: int

class CacheSharingType(NamedTuple):
    """
    How cores of a performance level share caches.

    Attributes:
        cores_per_l2: Number of cores sharing an L2 cache (sysctl 'hw.perflevel<N>.cpusperl2').
        cores_per_l3: Number of cores sharing an L3 cache (sysctl 'hw.perflevel<N>.cpusperl3'),
                      zero if there is no L3.
    """

    cores_per_l2: int
    cores_per_l3: int

class PerfLevelType(NamedTuple):
    """
    A performance level: a cluster of cores sharing cache characteristics, e.g., performance cores
    or efficiency cores.

    Attributes:
        id: The performance level number (the 'N' in 'hw.perflevel<N>').
        cache: Cache sizes.
        cache_sharing: Cache sharing information.
    """

    id: int
    cache: CacheType
    cache_sharing: CacheSharingType

class SnapshotType(NamedTuple):
    """
    CPU information snapshot.

    Attributes:
        identification: CPU identification.
        core_counts: Core counts.
        frequency: CPU frequency.
        performance_levels: Performance levels, ordered by level number. Empty on hosts with a
                            single performance level.
    """

    identification: IdentificationType
    core_counts: CoreCountsType
    frequency: FrequencyType
    performance_levels: tuple[PerfLevelType, ...]

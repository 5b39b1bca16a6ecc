# -*- coding: utf-8 -*-
# vim: ts=4 sw=4 tw=100 et ai si
#
# Copyright (C) 2020-2025 Intel Corporation
# SPDX-License-Identifier: BSD-3-Clause
#
# Author: Artem Bityutskiy <artem.bityutskiy@linux.intel.com>

"""
Provide CPU information from the sysctl registry: identification, core counts, frequency, and the
cache hierarchy of every performance level.

The sysctl keys vary between hardware generations and OS versions, so every value is resolved on a
best-effort basis: a missing, unreadable, or malformed value turns into the zero value of its type
(0 or an empty string) and never causes an error.

Performance levels are discovered by probing: level N exists if the 'hw.perflevel<N>.l1icachesize'
key exists. Discovery starts at level 0 and stops at the first missing level.
"""

from __future__ import annotations # Remove when switching to Python 3.10+.

import json
import typing
from typing import Any, TypeVar
from sysctlcpulibs import Sysctl
from sysctlcpulibs.CPUInfoTypes import IdentificationType, CoreCountsType, FrequencyType
from sysctlcpulibs.CPUInfoTypes import CacheType, CacheSharingType, PerfLevelType, SnapshotType
from sysctlcpulibs.helperlibs import Logging, Trivial, ClassHelpers
from sysctlcpulibs.helperlibs.Exceptions import Error, ErrorBadFormat

if typing.TYPE_CHECKING:
    from typing import Final
    from sysctlcpulibs.Sysctl import SysctlType

_LOG = Logging.getLogger(f"{Logging.MAIN_LOGGER_NAME}.sysctl-cpu.{__name__}")

_T = TypeVar("_T", int, str)

# Record field name to sysctl key name maps.
IDENTIFICATION_KEYS: Final[dict[str, str]] = {
    "brand_string": "machdep.cpu.brand_string",
    "vendor": "machdep.cpu.vendor",
    "feature_bits": "machdep.cpu.feature_bits",
}

CORE_COUNTS_KEYS: Final[dict[str, str]] = {
    "physical": "hw.physicalcpu",
    "logical": "hw.logicalcpu",
    "max_physical": "hw.physicalcpu_max",
    "max_logical": "hw.logicalcpu_max",
}

FREQUENCY_KEYS: Final[dict[str, str]] = {
    "hz": "hw.cpufrequency",
}

# Performance level record field name to key name (without the 'hw.perflevel<N>.' prefix) maps.
CACHE_KEYS: Final[dict[str, str]] = {
    "l1_instruction_bytes": "l1icachesize",
    "l1_data_bytes": "l1dcachesize",
    "l2_bytes": "l2cachesize",
    "l3_bytes": "l3cachesize",
}

CACHE_SHARING_KEYS: Final[dict[str, str]] = {
    "cores_per_l2": "cpusperl2",
    "cores_per_l3": "cpusperl3",
}

# The key probed for discovering performance levels.
PERFLEVEL_PROBE_NAME: Final[str] = "l1icachesize"

# Widths of the integer record fields, in bits.
_COUNT_BITS = 32
_SIZE_BITS = 64

def get_perflevel_key(lvl: int, name: str) -> str:
    """
    Return the full sysctl key name of a performance level key.

    Args:
        lvl: The performance level number.
        name: The key name without the performance level prefix (e.g., "l2cachesize").

    Returns:
        The full key name (e.g., "hw.perflevel0.l2cachesize").
    """

    return f"hw.perflevel{lvl}.{name}"

def resolve(sysctl: SysctlType, key: str, default: _T, bits: int = _SIZE_BITS) -> _T:
    """
    Read a sysctl value and convert it to the type of 'default'.

    Never fail: if the key does not exist, its value cannot be read, or cannot be converted, return
    'default'.

    Args:
        sysctl: The sysctl object to read the value with.
        key: The sysctl key name.
        default: The value to return on failure. Its type defines the type of the result: an 'int'
                 or a 'str'.
        bits: Width of the signed integer the value has to fit, for integer values.

    Returns:
        The converted value or 'default'.
    """

    if isinstance(default, bool) or not isinstance(default, (int, str)):
        raise Error(f"BUG: unsupported type '{type(default).__name__}' of sysctl '{key}' default "
                    f"value")

    try:
        text = sysctl.read_text(key)
    except Error as err:
        _LOG.warning("Failed to read sysctl '%s'%s, using '%s':\n%s",
                     key, sysctl.hostmsg, default, err.indent(2))
        return default

    if text is None:
        _LOG.debug("Sysctl '%s'%s is not available, using '%s'", key, sysctl.hostmsg, default)
        return default

    if isinstance(default, str):
        return text

    try:
        return Trivial.str_to_int(text, bits=bits, what=f"sysctl '{key}' value")
    except ErrorBadFormat as err:
        _LOG.debug("%s, using '%s'", err, default)
        return default

class CPUInfo(ClassHelpers.SimpleCloseContext):
    """
    Provide CPU information from the sysctl registry.

    Public methods overview.
        * get_identification() - CPU identification.
        * get_core_counts() - core counts.
        * get_frequency() - CPU frequency.
        * get_perflevel() - a single performance level, no existence check.
        * get_perflevels() - discover and return all performance levels.
        * get_snapshot() - all of the above in a single snapshot object.
    """

    def __init__(self, sysctl: SysctlType | None = None):
        """
        Initialize a class instance.

        Args:
            sysctl: The sysctl object for the host to get CPU information for. Use the local host
                    by default.
        """

        self._close_sysctl = sysctl is None

        if sysctl is None:
            sysctl = Sysctl.get_sysctl()
        self._sysctl: SysctlType = sysctl

    def close(self):
        """Uninitialize the class object."""

        ClassHelpers.close(self, close_attrs=("_sysctl",))

    def _resolve_keys(self, keys: dict[str, str], default: _T, bits: int = _SIZE_BITS) -> \
                                                                                dict[str, _T]:
        """
        Resolve sysctl values for all keys in a record field name to sysctl key name map.

        Args:
            keys: The record field name to sysctl key name map.
            default: The default value for all the keys.
            bits: Width of the signed integer the values have to fit, for integer values.

        Returns:
            The record field name to value map.
        """

        return {field: resolve(self._sysctl, key, default, bits=bits)
                for field, key in keys.items()}

    def _get_perflevel_keys(self, lvl: int, names: dict[str, str]) -> dict[str, str]:
        """Turn a field name to key name map for performance levels into full key names."""

        return {field: get_perflevel_key(lvl, name) for field, name in names.items()}

    def get_identification(self) -> IdentificationType:
        """
        Return CPU identification information.

        Returns:
            The CPU identification record.
        """

        return IdentificationType(**self._resolve_keys(IDENTIFICATION_KEYS, ""))

    def get_core_counts(self) -> CoreCountsType:
        """
        Return physical and logical core counts.

        Returns:
            The core counts record.
        """

        return CoreCountsType(**self._resolve_keys(CORE_COUNTS_KEYS, 0, bits=_COUNT_BITS))

    def get_frequency(self) -> FrequencyType:
        """
        Return the nominal CPU frequency.

        Returns:
            The CPU frequency record.
        """

        return FrequencyType(**self._resolve_keys(FREQUENCY_KEYS, 0, bits=_SIZE_BITS))

    def get_cache(self, lvl: int) -> CacheType:
        """
        Return cache sizes of a performance level.

        Args:
            lvl: The performance level number.

        Returns:
            The cache sizes record.
        """

        keys = self._get_perflevel_keys(lvl, CACHE_KEYS)
        return CacheType(**self._resolve_keys(keys, 0, bits=_SIZE_BITS))

    def get_cache_sharing(self, lvl: int) -> CacheSharingType:
        """
        Return cache sharing information of a performance level.

        Args:
            lvl: The performance level number.

        Returns:
            The cache sharing record.
        """

        keys = self._get_perflevel_keys(lvl, CACHE_SHARING_KEYS)
        return CacheSharingType(**self._resolve_keys(keys, 0, bits=_COUNT_BITS))

    def get_perflevel(self, lvl: int) -> PerfLevelType:
        """
        Return information about a performance level. Do not check if the performance level exists,
        values of a non-existing level are all zeroes.

        Args:
            lvl: The performance level number.

        Returns:
            The performance level record.
        """

        return PerfLevelType(id=lvl, cache=self.get_cache(lvl),
                             cache_sharing=self.get_cache_sharing(lvl))

    def _perflevel_exists(self, lvl: int) -> bool:
        """
        Probe the existence of a performance level.

        Args:
            lvl: The performance level number.

        Returns:
            True if the performance level exists, False otherwise.
        """

        key = get_perflevel_key(lvl, PERFLEVEL_PROBE_NAME)
        try:
            return self._sysctl.exists(key)
        except Error as err:
            _LOG.warning("Failed to probe sysctl '%s'%s, assuming it does not exist:\n%s",
                         key, self._sysctl.hostmsg, err.indent(2))
            return False

    def get_perflevels(self) -> tuple[PerfLevelType, ...]:
        """
        Discover and return all performance levels.

        Probe performance levels 0, 1, 2, etc, and stop at the first level that does not exist.
        Levels above the first missing one are never probed.

        Returns:
            Performance level records ordered by level number. An empty tuple if the host does not
            have performance levels (e.g., all CPU cores are the same).
        """

        perflevels: list[PerfLevelType] = []

        lvl = 0
        while self._perflevel_exists(lvl):
            perflevels.append(self.get_perflevel(lvl))
            lvl += 1

        _LOG.debug("Found %d performance level(s)%s", len(perflevels), self._sysctl.hostmsg)
        return tuple(perflevels)

    def get_snapshot(self) -> SnapshotType:
        """
        Build and return a CPU information snapshot.

        Returns:
            The snapshot object.
        """

        return SnapshotType(identification=self.get_identification(),
                            core_counts=self.get_core_counts(),
                            frequency=self.get_frequency(),
                            performance_levels=self.get_perflevels())

def get_snapshot(sysctl: SysctlType | None = None) -> SnapshotType:
    """
    Build and return a CPU information snapshot.

    Args:
        sysctl: The sysctl object for the host to get CPU information for. Use the local host by
                default.

    Returns:
        The snapshot object.
    """

    with CPUInfo(sysctl=sysctl) as cpuinfo:
        return cpuinfo.get_snapshot()

def _to_plain(obj: Any) -> Any:
    """Turn named tuples into dictionaries and tuples into lists, recursively."""

    if hasattr(obj, "_asdict"):
        return {field: _to_plain(val) for field, val in obj._asdict().items()}
    if isinstance(obj, (tuple, list)):
        return [_to_plain(val) for val in obj]
    return obj

def snapshot_to_dict(snapshot: SnapshotType) -> dict[str, Any]:
    """
    Turn a snapshot into a dictionary. The dictionary keys and nesting mirror the snapshot
    records, performance levels are a list.

    Args:
        snapshot: The snapshot to turn into a dictionary.

    Returns:
        The snapshot dictionary.
    """

    return _to_plain(snapshot)

def snapshot_to_json(snapshot: SnapshotType, indent: int | None = 2) -> str:
    """
    Serialize a snapshot into a JSON document.

    Args:
        snapshot: The snapshot to serialize.
        indent: Indentation level of the document, a compact single-line document if 'None'.

    Returns:
        The JSON document.

    Raises:
        Error: If the snapshot cannot be serialized.
    """

    try:
        return json.dumps(snapshot_to_dict(snapshot), indent=indent)
    except (TypeError, ValueError) as err:
        msg = Error(str(err)).indent(2)
        raise Error(f"Failed to serialize CPU information to JSON:\n{msg}") from err

# -*- coding: utf-8 -*-
# vim: ts=4 sw=4 tw=100 et ai si
#
# Copyright (C) 2022-2025 Intel Corporation
# SPDX-License-Identifier: BSD-3-Clause
#
# Authors: Antti Laakso <antti.laakso@linux.intel.com>
#          Artem Bityutskiy <artem.bityutskiy@linux.intel.com>

"""
Collect sysctl values of a host and save them as a dataset for emulating the host.
"""

from __future__ import annotations # Remove when switching to Python 3.10+.

import typing
from sysctlcpulibs import CPUInfo, Sysctl
from sysctlcpulibs.helperlibs import Logging, YAML

if typing.TYPE_CHECKING:
    from pathlib import Path
    from typing import Any, IO
    from sysctlcpulibs.Sysctl import SysctlType

_LOG = Logging.getLogger(f"{Logging.MAIN_LOGGER_NAME}.sysctl-cpu.{__name__}")

def _collect_key(sysctl: SysctlType, key: str, values: dict[str, str | None]):
    """
    Read a sysctl key and add it to the collected values. Skip the key if it does not exist.

    Args:
        sysctl: The sysctl object to read the key with.
        key: The sysctl key name.
        values: The collected values dictionary to add the key to.
    """

    text = sysctl.read_text(key)
    if text is None and not sysctl.exists(key):
        _LOG.debug("Sysctl '%s'%s does not exist, skipping it", key, sysctl.hostmsg)
        return

    values[key] = text

def collect(sysctl: SysctlType | None = None) -> dict[str, Any]:
    """
    Collect the values of all sysctl keys used by 'CPUInfo'.

    Args:
        sysctl: The sysctl object of the host to collect the values from. Use the local host by
                default.

    Returns:
        The dataset dictionary. Keys that exist but cannot be read have 'None' values, keys that do
        not exist are not included.
    """

    values: dict[str, str | None] = {}

    with Sysctl.sysctl_or_local(sysctl) as _sysctl:
        for keys in (CPUInfo.IDENTIFICATION_KEYS, CPUInfo.CORE_COUNTS_KEYS,
                     CPUInfo.FREQUENCY_KEYS):
            for key in keys.values():
                _collect_key(_sysctl, key, values)

        lvl = 0
        while _sysctl.exists(CPUInfo.get_perflevel_key(lvl, CPUInfo.PERFLEVEL_PROBE_NAME)):
            for names in (CPUInfo.CACHE_KEYS, CPUInfo.CACHE_SHARING_KEYS):
                for name in names.values():
                    _collect_key(_sysctl, CPUInfo.get_perflevel_key(lvl, name), values)
            lvl += 1

        _LOG.debug("Collected %d sysctl values%s", len(values), _sysctl.hostmsg)

    return {"sysctl": values}

def dump_dataset(sysctl: SysctlType | None, path: Path | str | IO[str]):
    """
    Collect the values of all sysctl keys used by 'CPUInfo' and save them as a dataset.

    Args:
        sysctl: The sysctl object of the host to collect the values from, 'None' for the local host.
        path: The dataset file path or file object to write the dataset to.
    """

    YAML.dump(collect(sysctl), path)
    _LOG.notice("Saved the dataset to '%s'", getattr(path, "name", path))

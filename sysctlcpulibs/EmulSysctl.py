# -*- coding: utf-8 -*-
# vim: ts=4 sw=4 tw=100 et ai si
#
# Copyright (C) 2022-2025 Intel Corporation
# SPDX-License-Identifier: BSD-3-Clause
#
# Authors: Antti Laakso <antti.laakso@linux.intel.com>
#          Artem Bityutskiy <artem.bityutskiy@linux.intel.com>

"""
Emulate the sysctl registry of a host for testing purposes.

The emulated registry is defined by a dataset - a YAML file with sysctl values previously collected
from a real host (see 'sysctl-cpu --dump-dataset'). The dataset format is as follows.

    sysctl:
      machdep.cpu.brand_string: Apple M1
      hw.physicalcpu: 8
      hw.perflevel0.cpusperl3:

A key with an empty value exists, but its value cannot be read. Keys that are not in the dataset do
not exist.
"""

from __future__ import annotations # Remove when switching to Python 3.10+.

from pathlib import Path
from typing import Any
from sysctlcpulibs import _SysctlBase
from sysctlcpulibs.helperlibs import Logging, YAML, ProjectFiles
from sysctlcpulibs.helperlibs.Exceptions import Error, ErrorBadFormat

_LOG = Logging.getLogger(f"{Logging.MAIN_LOGGER_NAME}.sysctl-cpu.{__name__}")

# Name of the project, used for finding datasets.
PRJNAME = "sysctl-cpu"
# Sub-path to the datasets directory in the project data directory.
DATASETS_SUBPATH = "tests/data"

def find_dataset(dataset: str | Path) -> Path:
    """
    Find a dataset by path or by name.

    Args:
        dataset: Path to the dataset file or dataset name. The dataset name is the file name without
                 the '.yaml' suffix in the datasets directory of the project.

    Returns:
        Path to the dataset file.
    """

    path = Path(dataset)
    if path.is_file():
        return path

    return ProjectFiles.find_project_data(PRJNAME, f"{DATASETS_SUBPATH}/{dataset}.yaml",
                                          what=f"{PRJNAME} dataset '{dataset}'")

def format_dataset(data: dict[str, Any], source: str = "dataset") -> dict[str, str | None]:
    """
    Validate dataset contents and turn the values into text.

    Args:
        data: The dataset contents, a dictionary with the "sysctl" key.
        source: Dataset description for error messages.

    Returns:
        The sysctl key to text value dictionary. Values of unreadable keys are 'None'.

    Raises:
        ErrorBadFormat: If the dataset has bad format.
    """

    if "sysctl" not in data:
        raise ErrorBadFormat(f"Bad {source}: no 'sysctl' section")

    values = data["sysctl"]
    if values is None:
        return {}
    if not isinstance(values, dict):
        raise ErrorBadFormat(f"Bad {source}: the 'sysctl' section must be a dictionary")

    result: dict[str, str | None] = {}
    for key, val in values.items():
        if not isinstance(key, str):
            raise ErrorBadFormat(f"Bad {source}: sysctl key '{key}' is not a string")
        if val is None:
            result[key] = None
        elif isinstance(val, (str, int)) and not isinstance(val, bool):
            result[key] = str(val)
        else:
            raise ErrorBadFormat(f"Bad {source}: sysctl '{key}' value '{val}' must be a string "
                                 f"or an integer")

    return result

class EmulSysctl(_SysctlBase.SysctlBase):
    """Emulate the sysctl registry of a host."""

    def __init__(self,
                 dataset: str | Path | None = None,
                 data: dict[str, Any] | None = None,
                 hostname: str | None = None):
        """
        Initialize a class instance.

        Args:
            dataset: Path or name of the dataset to emulate.
            data: The dataset contents, used instead of 'dataset'.
            hostname: Name of the emulated host. Defaults to "emulation:<dataset name>".

        Raises:
            ErrorNotFound: If the dataset does not exist.
            ErrorBadFormat: If the dataset has bad format.
        """

        if (dataset is None) == (data is None):
            raise Error("BUG: exactly one of 'dataset' and 'data' arguments must be provided")

        if dataset is not None:
            path = find_dataset(dataset)
            if not hostname:
                hostname = f"emulation:{path.stem}"
            self._values = format_dataset(YAML.load(path), source=f"dataset '{path}'")
            _LOG.debug("Emulating host '%s' with dataset '%s'", hostname, path)
        else:
            if not hostname:
                hostname = "emulation"
            self._values = format_dataset(data if data else {"sysctl": {}})

        super().__init__(hostname=hostname)

    def exists(self, key: str) -> bool:
        """Refer to 'SysctlBase.exists()'."""

        return key in self._values

    def read_text(self, key: str) -> str | None:
        """Refer to 'SysctlBase.read_text()'."""

        return self._values.get(key)

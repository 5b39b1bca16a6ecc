# -*- coding: utf-8 -*-
# vim: ts=4 sw=4 tw=100 et ai si
#
# Copyright (C) 2020-2025 Intel Corporation
# SPDX-License-Identifier: BSD-3-Clause
#
# Author: Artem Bityutskiy <artem.bityutskiy@linux.intel.com>

"""
Provide YAML file reading and writing capabilities.
"""

from __future__ import annotations # Remove when switching to Python 3.10+.

from pathlib import Path
from typing import Any, IO
import yaml
from sysctlcpulibs.helperlibs import Logging
from sysctlcpulibs.helperlibs.Exceptions import Error, ErrorNotFound, ErrorBadFormat

_LOG = Logging.getLogger(f"{Logging.MAIN_LOGGER_NAME}.sysctl-cpu.{__name__}")

class _Dumper(yaml.SafeDumper):
    """A YAML dumper representing 'None' values as empty values instead of 'null'."""

def _represent_none(dumper: yaml.SafeDumper, _: None) -> yaml.ScalarNode:
    """
    Represent 'None' values as empty values in YAML output.

    Args:
        dumper: The YAML dumper instance used for serialization.
        _: The value to be represented (ignored).

    Returns:
        A YAML scalar node representing an empty value.
    """

    return dumper.represent_scalar("tag:yaml.org,2002:null", "")

_Dumper.add_representer(type(None), _represent_none)

def dump(data: dict[str, Any], path: Path | str | IO[str]):
    """
    Dump a dictionary to a YAML file. Keep the dictionary keys order.

    Args:
        data: The dictionary to dump.
        path: The file path or file object to write the YAML data to.
    """

    try:
        if hasattr(path, "write"):
            yaml.dump(data, path, Dumper=_Dumper, default_flow_style=False, sort_keys=False)
            _LOG.debug("Wrote YAML to '%s'", getattr(path, "name", path))
        else:
            with open(path, "w", encoding="utf-8") as fobj:
                yaml.dump(data, fobj, Dumper=_Dumper, default_flow_style=False, sort_keys=False)
            _LOG.debug("Wrote YAML file at '%s'", path)
    except (OSError, yaml.YAMLError) as err:
        msg = Error(str(err)).indent(2)
        raise Error(f"Failed to write YAML file '{path}':\n{msg}") from err

def load(path: Path | str | IO[str]) -> dict[str, Any]:
    """
    Load a YAML file.

    Args:
        path: Path to the YAML file to load or a file-like object to read the YAML contents from.

    Returns:
        A dictionary representing the contents of the loaded YAML file. An empty dictionary if the
        file is empty.

    Raises:
        ErrorNotFound: If the file does not exist.
        ErrorBadFormat: If the file is not a valid YAML file or it does not contain a dictionary.
    """

    try:
        if hasattr(path, "read"):
            loaded = yaml.safe_load(path)
        else:
            with open(path, "r", encoding="utf-8") as fobj:
                loaded = yaml.safe_load(fobj)
    except FileNotFoundError as err:
        msg = Error(str(err)).indent(2)
        raise ErrorNotFound(f"YAML file '{path}' does not exist:\n{msg}") from None
    except OSError as err:
        msg = Error(str(err)).indent(2)
        raise Error(f"Failed to read YAML file '{path}':\n{msg}") from None
    except yaml.YAMLError as err:
        msg = Error(str(err)).indent(2)
        raise ErrorBadFormat(f"Failed to parse YAML file '{path}':\n{msg}") from None

    if not loaded:
        return {}

    if not isinstance(loaded, dict):
        raise ErrorBadFormat(f"Bad YAML file '{path}': expected a dictionary at the top level, "
                             f"got '{type(loaded).__name__}'")

    _LOG.debug("Loaded YAML file at '%s'", getattr(path, "name", path))
    return loaded

# -*- coding: utf-8 -*-
# vim: ts=4 sw=4 tw=100 et ai si
#
# Copyright (C) 2020-2025 Intel Corporation
# SPDX-License-Identifier: BSD-3-Clause
#
# Author: Artem Bityutskiy <artem.bityutskiy@linux.intel.com>

"""
Helpers for finding project data files, such as emulation datasets.
"""

from __future__ import annotations # Remove when switching to Python 3.10+.

import os
import sys
from pathlib import Path
from typing import Generator
from sysctlcpulibs.helperlibs import Logging
from sysctlcpulibs.helperlibs.Exceptions import ErrorNotFound

_LOG = Logging.getLogger(f"{Logging.MAIN_LOGGER_NAME}.sysctl-cpu.{__name__}")

def get_project_data_envar(prjname: str) -> str:
    """
    Return the environment variable name for the data directory of a project.

    Args:
        prjname: Project name.

    Returns:
        Environment variable name for the project data directory.
    """

    name = prjname.replace("-", "_").upper()
    return f"{name}_DATA_PATH"

def _get_candidates(prjname: str, tpath: str | Path) -> Generator[Path, None, None]:
    """
    Yield the candidate paths of project data, in search order.

    Args:
        prjname: Project name.
        tpath: The sub-path to the project data to search for.
    """

    yield Path(sys.argv[0]).parent.resolve() / tpath

    path = os.environ.get(get_project_data_envar(prjname))
    if path:
        yield Path(path) / tpath

    venvdir = os.environ.get("VIRTUAL_ENV")
    if venvdir:
        yield Path(venvdir) / "share" / prjname / tpath

    homedir = os.environ.get("HOME")
    if homedir:
        yield Path(homedir) / ".local/share" / prjname / tpath
        yield Path(homedir) / "share" / prjname / tpath

    yield Path("/usr/local/share") / prjname / tpath
    yield Path("/usr/share") / prjname / tpath

def find_project_data(prjname: str, tpath: str | Path, what: str | None = None) -> Path:
    """
    Search for project data in a predefined set of locations and return the first found path.

    The search order is as follows:
        1. The directory of the running program.
        2. The directory specified by the '<PRJNAME>_DATA_PATH' environment variable.
        3. '$VIRTUAL_ENV/share/<prjname>/', if 'VIRTUAL_ENV' is set.
        4. '$HOME/.local/share/<prjname>/' and '$HOME/share/<prjname>/'.
        5. '/usr/local/share/<prjname>/' and '/usr/share/<prjname>/'.

    Args:
        prjname: Name of the project whose data is being searched.
        tpath: The sub-path (last part of the full path) to the project data to search for.
        what: Human-readable description of what is being searched for, used in error messages.

    Returns:
        The found project data path.

    Raises:
        ErrorNotFound: If project data cannot be found in any of the searched locations.
    """

    searched = []
    for candidate in _get_candidates(prjname, tpath):
        if candidate.exists():
            _LOG.debug("Found '%s' at '%s'", tpath, candidate)
            return candidate
        searched.append(str(candidate))

    if not what:
        what = f"'{tpath}'"
    dirs = " * " + "\n * ".join(searched)
    envar = get_project_data_envar(prjname)
    raise ErrorNotFound(f"Cannot find {what}, searched in the following locations:\n{dirs}.\n"
                        f"It is possible to specify a custom location for {what} using the "
                        f"'{envar}' environment variable")

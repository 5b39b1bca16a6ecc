#!/usr/bin/python
#
# Copyright (C) 2020-2025 Intel Corporation
# SPDX-License-Identifier: BSD-3-Clause
#
# -*- coding: utf-8 -*-
# vim: ts=4 sw=4 tw=100 et ai si
#
# Author: Antti Laakso <antti.laakso@intel.com>

"""
The main entry point for the 'sysctl-cpu' tool.
"""

import os
import sys
import zipfile
import tempfile
from pathlib import Path
from sysctlcpulibs.helperlibs import ProjectFiles
from sysctlcputool._SysctlCPU import main

if __name__ == "__main__":
    basepath = Path(__file__).parent

    # If the parent is not a regular file, not a zipapp archive.
    if not basepath.is_file():
        sys.exit(main())

    # This is a zipapp archive. It includes the datasets, and they should be extracted somewhere and
    # made accessible to the tool via the data path environment variable for the '--dataset' option
    # to find them by name.

    envar = ProjectFiles.get_project_data_envar("sysctl-cpu")
    if envar in os.environ:
        sys.exit(main())

    with zipfile.ZipFile(basepath) as zf, tempfile.TemporaryDirectory() as tmpdir:
        for path in zf.namelist():
            if path.startswith("tests/data/"):
                zf.extract(path, tmpdir)

        os.environ[envar] = tmpdir
        sys.exit(main())

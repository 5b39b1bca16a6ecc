# -*- coding: utf-8 -*-
# vim: ts=4 sw=4 tw=100 et ai si
#
# Copyright (C) 2020-2025 Intel Corporation
# SPDX-License-Identifier: BSD-3-Clause
#
# Author: Artem Bityutskiy <artem.bityutskiy@linux.intel.com>

"""
Miscellaneous common helpers for class objects.
"""

from __future__ import annotations # Remove when switching to Python 3.10+.

from typing import Any
from sysctlcpulibs.helperlibs import Logging

_LOG = Logging.getLogger(f"{Logging.MAIN_LOGGER_NAME}.sysctl-cpu.{__name__}")

class SimpleCloseContext:
    """
    A simple context manager implementation for classes with a 'close()' method. Subclass it to
    avoid duplicating the '__enter__()' and '__exit__()' methods.
    """

    def close(self):
        """Uninitialize the class object. Supposed to be implemented by the subclass."""

    def __enter__(self):
        """Enter the run-time context."""
        return self

    def __exit__(self, *_: Any):
        """Exit from the runtime context."""

        self.close()

def close(cls_obj: Any,
          close_attrs: tuple[str, ...] = tuple(),
          unref_attrs: tuple[str, ...] = tuple()):
    """
    Uninitialize a class object by freeing objects referred to by its attributes.

    Args:
        cls_obj: The class object to uninitialize.
        close_attrs: Attribute names referring to objects created by the class object. These
                     objects are closed by calling their 'close()' method, unless the class object
                     has a '_close_{attr}' (or '_close{attr}' for private attributes) attribute set
                     to 'False'. The attributes are then set to 'None'.
        unref_attrs: Attribute names referring to objects created outside the class object. These
                     attributes are set to 'None'.
    """

    for attr in close_attrs:
        obj = getattr(cls_obj, attr, None)
        if obj is None:
            continue

        if attr.startswith("_"):
            name = f"_close{attr}"
        else:
            name = f"_close_{attr}"

        if getattr(cls_obj, name, True):
            if hasattr(obj, "close"):
                obj.close()
            else:
                _LOG.debug("No 'close()' method in '%s'", obj)

        setattr(cls_obj, attr, None)

    for attr in unref_attrs:
        if getattr(cls_obj, attr, None) is not None:
            setattr(cls_obj, attr, None)

# -*- coding: utf-8 -*-
# vim: ts=4 sw=4 tw=100 et ai si
#
# Copyright (C) 2020-2025 Intel Corporation
# SPDX-License-Identifier: BSD-3-Clause
#
# Author: Artem Bityutskiy <artem.bityutskiy@linux.intel.com>

"""
Provide access to the sysctl registry of the local host via the C library 'sysctlnametomib()' and
'sysctl()' functions.

The registry stores values in binary form. The value type is discovered with the '{0, 4}' meta-OID
("OID format"), which returns the OID kind (a 32-bit integer, the lower 4 bits are the value type)
followed by a format string (e.g., "I" for 'int', "IU" for 'unsigned int', "Q" for 'int64_t').
Integers are rendered as decimal text, strings are returned as is.
"""

from __future__ import annotations # Remove when switching to Python 3.10+.

import os
import ctypes
import ctypes.util
import struct
from sysctlcpulibs import _SysctlBase
from sysctlcpulibs.helperlibs import Logging
from sysctlcpulibs.helperlibs.Exceptions import ErrorNotSupported

_LOG = Logging.getLogger(f"{Logging.MAIN_LOGGER_NAME}.sysctl-cpu.{__name__}")

# Maximum number of components in a sysctl MIB.
CTL_MAXNAME = 12

# The value type part of the OID kind and the value types.
CTLTYPE = 0xf
CTLTYPE_NODE = 1
CTLTYPE_INT = 2
CTLTYPE_STRING = 3
CTLTYPE_QUAD = 4
CTLTYPE_OPAQUE = 5

# The OID format string to 'struct' module format character map.
_INT_FORMATS = {"I": "i", "IU": "I", "L": "l", "LU": "L", "Q": "q", "QU": "Q"}

class LocalSysctl(_SysctlBase.SysctlBase):
    """Provide access to the sysctl registry of the local host."""

    def __init__(self):
        """
        Initialize a class instance.

        Raises:
            ErrorNotSupported: If the C library does not provide the sysctl functions, which is the
                               case on Linux.
        """

        super().__init__(hostname="localhost")

        libname = ctypes.util.find_library("c")
        if not libname:
            raise ErrorNotSupported("Cannot find the C library, the sysctl registry is not "
                                    "accessible")

        try:
            self._libc = ctypes.CDLL(libname, use_errno=True)
        except OSError as err:
            raise ErrorNotSupported(f"Failed to load the C library '{libname}':\n"
                                    f"{str(err)}") from err

        for func in ("sysctl", "sysctlnametomib"):
            if not hasattr(self._libc, func):
                raise ErrorNotSupported(f"The C library '{libname}' does not provide '{func}()', "
                                        f"the local host does not support the sysctl registry")

        self._sysctl = self._libc.sysctl
        self._sysctl.argtypes = [ctypes.POINTER(ctypes.c_int), ctypes.c_uint, ctypes.c_void_p,
                                 ctypes.POINTER(ctypes.c_size_t), ctypes.c_void_p, ctypes.c_size_t]
        self._sysctl.restype = ctypes.c_int

        self._nametomib = self._libc.sysctlnametomib
        self._nametomib.argtypes = [ctypes.c_char_p, ctypes.POINTER(ctypes.c_int),
                                    ctypes.POINTER(ctypes.c_size_t)]
        self._nametomib.restype = ctypes.c_int

    def close(self):
        """Uninitialize the class object."""

        self._sysctl = self._nametomib = None
        self._libc = None

    def _get_mib(self, key: str) -> list[int] | None:
        """
        Translate a sysctl key name into a MIB (the numeric OID).

        Args:
            key: The sysctl key name.

        Returns:
            The MIB as a list of integers, or 'None' if the key does not exist.
        """

        try:
            name = key.encode("ascii")
        except UnicodeEncodeError:
            _LOG.debug("Bad sysctl key name '%s': not an ASCII string", key)
            return None

        mib = (ctypes.c_int * CTL_MAXNAME)()
        size = ctypes.c_size_t(CTL_MAXNAME)

        if self._nametomib(name, mib, ctypes.byref(size)) != 0:
            errno = ctypes.get_errno()
            _LOG.debug("sysctlnametomib('%s') failed: %s", key, os.strerror(errno))
            return None

        return list(mib[:size.value])

    def _read_raw(self, mib: list[int]) -> bytes | None:
        """
        Read the raw value of a sysctl OID.

        Args:
            mib: The MIB of the OID to read.

        Returns:
            The raw value bytes, or 'None' in case of an error.
        """

        oid = (ctypes.c_int * len(mib))(*mib)
        size = ctypes.c_size_t(0)

        # Query the value size first.
        if self._sysctl(oid, len(mib), None, ctypes.byref(size), None, 0) != 0:
            errno = ctypes.get_errno()
            _LOG.debug("sysctl(%s) size query failed: %s", mib, os.strerror(errno))
            return None

        buf = ctypes.create_string_buffer(size.value)
        if self._sysctl(oid, len(mib), buf, ctypes.byref(size), None, 0) != 0:
            errno = ctypes.get_errno()
            _LOG.debug("sysctl(%s) failed: %s", mib, os.strerror(errno))
            return None

        return buf.raw[:size.value]

    def _get_format(self, mib: list[int]) -> tuple[int, str] | None:
        """
        Get the value type and format string of a sysctl OID.

        Args:
            mib: The MIB of the OID.

        Returns:
            A '(value type, format string)' tuple, or 'None' in case of an error.
        """

        raw = self._read_raw([0, 4] + mib)
        if not raw or len(raw) < 4:
            return None

        kind = struct.unpack("=I", raw[:4])[0]
        fmt = raw[4:].split(b"\0", 1)[0].decode("ascii", errors="replace")
        return kind & CTLTYPE, fmt

    @staticmethod
    def _to_text(key: str, raw: bytes, ctltype: int, fmt: str) -> str | None:
        """
        Render a raw sysctl value as text.

        Args:
            key: The sysctl key name (for debug messages).
            raw: The raw value.
            ctltype: The value type.
            fmt: The value format string.

        Returns:
            The value as text, or 'None' if the value type cannot be rendered as text.
        """

        if ctltype == CTLTYPE_STRING:
            try:
                return raw.split(b"\0", 1)[0].decode("utf-8")
            except UnicodeDecodeError as err:
                _LOG.debug("Bad sysctl '%s' string value: %s", key, err)
                return None

        if ctltype in (CTLTYPE_INT, CTLTYPE_QUAD):
            code = _INT_FORMATS.get(fmt)
            if not code:
                code = "i" if ctltype == CTLTYPE_INT else "q"

            size = struct.calcsize(code)
            if not raw or len(raw) % size:
                _LOG.debug("Bad sysctl '%s' value size %d, format '%s'", key, len(raw), fmt)
                return None

            nums = struct.unpack(f"{len(raw) // size}{code}", raw)
            return " ".join(str(num) for num in nums)

        _LOG.debug("Sysctl '%s' has type %d (format '%s'), cannot render it as text",
                   key, ctltype, fmt)
        return None

    def exists(self, key: str) -> bool:
        """Refer to 'SysctlBase.exists()'."""

        return self._get_mib(key) is not None

    def read_text(self, key: str) -> str | None:
        """Refer to 'SysctlBase.read_text()'."""

        mib = self._get_mib(key)
        if mib is None:
            return None

        fmtinfo = self._get_format(mib)
        if fmtinfo is None:
            return None

        raw = self._read_raw(mib)
        if raw is None:
            return None

        ctltype, fmt = fmtinfo
        return self._to_text(key, raw, ctltype, fmt)

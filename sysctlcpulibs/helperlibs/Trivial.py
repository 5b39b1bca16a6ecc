# -*- coding: utf-8 -*-
# vim: ts=4 sw=4 tw=100 et ai si
#
# Copyright (C) 2020-2025 Intel Corporation
# SPDX-License-Identifier: BSD-3-Clause
#
# Author: Artem Bityutskiy <artem.bityutskiy@linux.intel.com>

"""
Common trivial helpers.
"""

from __future__ import annotations # Remove when switching to Python 3.10+.

import re
from sysctlcpulibs.helperlibs.Exceptions import Error, ErrorBadFormat

# A decimal integer: an optional sign followed by digits, nothing else.
_DECIMAL_INT_REGEX = re.compile(r"[+-]?[0-9]+")

def str_to_int(snum: str, bits: int = 64, what: str = "") -> int:
    """
    Convert a decimal integer string to an integer and make sure it fits a signed integer of the
    given width.

    Unlike 'int()', white-spaces, underscores, and base prefixes are not accepted.

    Args:
        snum: The string to convert.
        bits: Width of the signed integer the value has to fit, in bits.
        what: A string describing the value to convert, for the possible error message.

    Returns:
        The converted integer value.

    Raises:
        ErrorBadFormat: If 'snum' is not a decimal integer or it is out of range.
    """

    if bits < 2:
        raise Error(f"BUG: bad integer width {bits}")

    if not what:
        what = "value"

    if not isinstance(snum, str) or not _DECIMAL_INT_REGEX.fullmatch(snum):
        raise ErrorBadFormat(f"Bad {what} '{snum}': should be a decimal integer")

    num = int(snum)

    minval = -(1 << (bits - 1))
    maxval = (1 << (bits - 1)) - 1
    if num < minval or num > maxval:
        raise ErrorBadFormat(f"Bad {what} '{snum}': does not fit a {bits}-bit signed integer, "
                             f"should be in range [{minval}, {maxval}]")

    return num

def str_to_num(snum: str | int | float, what: str = "") -> int | float:
    """
    Convert a string to a numeric value, either 'int' or 'float'.

    Args:
        snum: The value to convert.
        what: A string describing the value to convert, for the possible error message.

    Returns:
        The converted numeric value.

    Raises:
        ErrorBadFormat: If 'snum' cannot be converted to a numeric value.
    """

    try:
        return int(str(snum), 0)
    except (ValueError, TypeError):
        try:
            return float(str(snum))
        except (ValueError, TypeError):
            if not what:
                what = "value"
            raise ErrorBadFormat(f"Bad {what} '{snum}': should be an integer or floating point "
                                 f"number") from None

def split_csv_line(csv_line: str, sep: str = ",") -> list[str]:
    """
    Split a comma-separated values line and return the list of non-empty values.

    Args:
        csv_line: The comma-separated line to split.
        sep: The separator character.

    Returns:
        List of values with white-spaces stripped.
    """

    result = []
    for val in csv_line.split(sep):
        val = val.strip()
        if val:
            result.append(val)
    return result

#!/usr/bin/env python3
#
# -*- coding: utf-8 -*-
# vim: ts=4 sw=4 tw=100 et ai si
#
# Copyright (C) 2020-2025 Intel Corporation
# SPDX-License-Identifier: BSD-3-Clause
#
# Author: Artem Bityutskiy <artem.bityutskiy@linux.intel.com>

"""Test the 'Trivial' module."""

from __future__ import annotations # Remove when switching to Python 3.10+.

import pytest
from sysctlcpulibs.helperlibs import Trivial
from sysctlcpulibs.helperlibs.Exceptions import Error, ErrorBadFormat

def test_str_to_int():
    """Test the 'str_to_int()' function."""

    assert Trivial.str_to_int("0") == 0
    assert Trivial.str_to_int("+17") == 17
    assert Trivial.str_to_int("-17") == -17
    assert Trivial.str_to_int("007") == 7
    assert Trivial.str_to_int("2147483647", bits=32) == 2147483647
    assert Trivial.str_to_int("-2147483648", bits=32) == -2147483648
    assert Trivial.str_to_int("9223372036854775807") == 9223372036854775807

@pytest.mark.parametrize("snum, bits", [("2147483648", 32), ("-2147483649", 32),
                                        ("9223372036854775808", 64), ("", 64), ("0x10", 64),
                                        ("1e3", 64), (" 1", 64), ("1\n", 64), ("١", 64)])
def test_str_to_int_bad(snum: str, bits: int):
    """Test the 'str_to_int()' function with bad input."""

    with pytest.raises(ErrorBadFormat):
        Trivial.str_to_int(snum, bits=bits, what="test value")

def test_str_to_int_bad_width():
    """Test the 'str_to_int()' function with a bad integer width."""

    with pytest.raises(Error):
        Trivial.str_to_int("1", bits=1)

def test_str_to_num():
    """Test the 'str_to_num()' function."""

    assert Trivial.str_to_num("8") == 8
    assert Trivial.str_to_num("0x10") == 16
    assert Trivial.str_to_num("2.5") == 2.5

    with pytest.raises(ErrorBadFormat):
        Trivial.str_to_num("eight")

def test_split_csv_line():
    """Test the 'split_csv_line()' function."""

    assert Trivial.split_csv_line("a, b,,c ") == ["a", "b", "c"]
    assert Trivial.split_csv_line("a:b", sep=":") == ["a", "b"]
    assert Trivial.split_csv_line("") == []

#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2026 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""Tests for miscellaneous softse utilities."""

import os

import pytest

from softse.exceptions import SoftSEError
from softse.utils.misc import Endianness, load_binary, write_file


def test_write_and_load(tmpdir: str) -> None:
    path = os.path.join(str(tmpdir), "nested", "dir", "data.bin")
    assert write_file(b"\x00\x01\x02", path, mode="wb") == 3
    assert load_binary(path) == b"\x00\x01\x02"

    text_path = os.path.join(str(tmpdir), "text.txt")
    write_file("hello", text_path)
    assert load_binary(text_path) == b"hello"


def test_load_missing_file(tmpdir: str) -> None:
    with pytest.raises(SoftSEError, match="Cannot load file"):
        load_binary(os.path.join(str(tmpdir), "missing.bin"))


def test_endianness() -> None:
    assert (1).to_bytes(2, Endianness.BIG.value) == b"\x00\x01"
    assert (1).to_bytes(2, Endianness.LITTLE.value) == b"\x01\x00"

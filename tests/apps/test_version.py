#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2026 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""softse version command test suite."""

from packaging.version import Version

from softse import __version__ as softse_version
from softse import get_softse_version, value_to_bool
from softse.apps import softse
from tests.cli_runner import CliRunner


def test_softse_version(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(softse.main, ["--version"])
    assert softse_version in result.output


def test_get_softse_version() -> None:
    assert isinstance(get_softse_version(), Version)
    assert str(get_softse_version()) == softse_version


def test_value_to_bool() -> None:
    assert value_to_bool("True")
    assert value_to_bool("1")
    assert not value_to_bool("false")
    assert not value_to_bool(None)
    assert value_to_bool(1)

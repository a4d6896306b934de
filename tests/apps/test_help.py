#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2026 NXP
#
# SPDX-License-Identifier: BSD-3-Clause
"""softse CLI help functionality testing module."""

from typing import Any

import pytest

from softse.apps import softse
from tests.cli_runner import CliRunner


def run_help(cli_runner: CliRunner, command_group: Any, help_option: bool) -> None:
    """Run help command test for CLI command.

    Help is requested either by the --help flag or by invoking the command
    without arguments.

    :param cli_runner: CLI test runner instance for executing commands.
    :param command_group: The CLI command group or command to test help functionality for.
    :param help_option: Use --help flag, otherwise no arguments are passed.
    """
    expected_code = cli_runner.get_help_error_code(use_help_flag=help_option)
    result = cli_runner.invoke(
        command_group, ["--help"] if help_option else None, expected_code=expected_code
    )
    assert "Show this message and exit." in result.output


@pytest.mark.parametrize("help_option", [True, False])
def test_softse_help(cli_runner: CliRunner, help_option: bool) -> None:
    run_help(cli_runner, softse.main, help_option)


@pytest.mark.parametrize("command", sorted(softse.main.commands))
def test_softse_commands_help(cli_runner: CliRunner, command: str) -> None:
    run_help(cli_runner, softse.main.commands[command], help_option=True)

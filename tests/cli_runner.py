#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2026 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""softse CLI testing utilities."""

import traceback
from typing import Any

import importlib_metadata
from click.testing import CliRunner as _CliRunner
from click.testing import Result
from packaging.version import Version

CLICK_RETURN_2_IF_NO_HELP = Version(importlib_metadata.version("click")) >= Version("8.2.0")


class CliRunner(_CliRunner):
    """Click CLI test runner checking the exit code of every invocation."""

    def invoke(self, *args: Any, expected_code: int = 0, **kwargs: Any) -> Result:
        """Invoke CLI command and check its exit code.

        :param args: Arguments to be passed to the parent invoke method.
        :param expected_code: Expected exit code (default: 0). Use -1 to expect any non-zero code.
        :param kwargs: Keyword arguments to be passed to the parent invoke method.
        :return: Result object from the CLI command execution.
        """
        result = super().invoke(*args, **kwargs)
        if expected_code == -1:
            assert result.exit_code != 0, self._build_error_message(result, expected_code)
        else:
            assert result.exit_code == expected_code, self._build_error_message(
                result, expected_code
            )
        return result

    @staticmethod
    def _build_error_message(result: Result, expected_code: int) -> str:
        error_msg = f"Expected code: {expected_code}, Actual code: {result.exit_code} \n"
        if result.exception:
            error_msg += f"{result.exception}\n"
        error_msg += result.output
        if result.exc_info and result.exc_info[2]:
            for item in traceback.format_tb(result.exc_info[2]):
                error_msg += item
        return error_msg

    @staticmethod
    def get_help_error_code(use_help_flag: bool) -> int:
        """Get exit code of a help message, click 8.2 returns 2 for no_args_is_help.

        :param use_help_flag: Whether the help flag was explicitly used.
        :return: Expected exit code.
        """
        return 2 if not use_help_flag and CLICK_RETURN_2_IF_NO_HELP else 0

#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2026 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""softse application utilities: data formatting, input parsing and error handling."""

import logging
import os
import re
import sys
from functools import wraps
from typing import Any, Callable, Optional

import click
import hexdump

from softse import SOFTSE_DEBUG_LOG_FILE, SOFTSE_DEBUG_LOGGING_DISABLED
from softse.exceptions import SoftSEError
from softse.utils.misc import load_binary

logger = logging.getLogger(__name__)


class SoftSEAppError(SoftSEError):
    """Non-fatal error of a softse command line application.

    :cvar fmt: Format string template for error message display.
    """

    fmt = "{description}"

    def __init__(self, desc: Optional[str] = None, error_code: int = 1) -> None:
        """Initialize the AppError.

        :param desc: Description to print out on command line, defaults to None
        :param error_code: Error code passed to OS, defaults to 1
        """
        super().__init__(desc)
        self.description = desc
        self.error_code = error_code


def _split_string(string: str, length: int) -> list:
    """Split the string into chunks of same length."""
    return [string[i : i + length] for i in range(0, len(string), length)]


def format_raw_data(data: bytes, use_hexdump: bool = False, line_length: int = 16) -> str:
    """Format bytes data into human-readable form.

    :param data: Data to format
    :param use_hexdump: Use hexdump with addresses and ASCII, defaults to False
    :param line_length: bytes per line, defaults to 16
    :return: formatted string (multilined if necessary)
    """
    if use_hexdump:
        return hexdump.hexdump(data, result="return")
    parts = [_split_string(line, 2) for line in _split_string(data.hex(), line_length * 2)]
    return "\n".join(" ".join(line) for line in parts)


def parse_hex_data(hex_data: str) -> bytes:
    """Parse hex string into bytes.

    Whitespace, ':' separators and an optional '0x' prefix are ignored.

    :param hex_data: input hex string, e.g: 0x1122, 11 22, 11:22
    :raises SoftSEAppError: Failure to parse given input
    :return: data parsed from input
    """
    hex_data = re.sub(r"[\s:]", "", hex_data)
    if hex_data.lower().startswith("0x"):
        hex_data = hex_data[2:]
    if not hex_data or len(hex_data) % 2 or not re.fullmatch(r"[0-9a-fA-F]*", hex_data):
        raise SoftSEAppError(f"Incorrect hex-data: '{hex_data}'")
    return bytes.fromhex(hex_data)


def load_hex_or_binary(value: str) -> bytes:
    """Load data given as a path to a binary file or as a hex string.

    :param value: Path to an existing file or hex string.
    :return: Loaded data.
    """
    if os.path.isfile(value):
        return load_binary(value)
    return parse_hex_data(value)


def catch_softse_error(function: Callable) -> Callable:
    """Catch and handle SoftSEError and other exceptions.

    SoftSEAppError exits with its own error code (default 1), SoftSEError and
    AssertionError with code 2 and any other exception with code 3. The full
    traceback goes to the debug log.

    :param function: The function to be decorated.
    :return: The decorated function.
    """

    @wraps(function)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return function(*args, **kwargs)
        except SoftSEAppError as app_exc:
            if app_exc.description:
                click.echo(f"{app_exc.__class__.__name__}: {app_exc}", err=True)
            if 0 < app_exc.error_code < 256:
                sys.exit(app_exc.error_code)
            sys.exit(1)
        except (AssertionError, SoftSEError) as softse_exc:
            click.echo(f"{softse_exc.__class__.__name__}: {softse_exc}", err=True)
            logger.debug(str(softse_exc), exc_info=True)
            if not SOFTSE_DEBUG_LOGGING_DISABLED:
                click.secho(
                    f"See debug log file: {SOFTSE_DEBUG_LOG_FILE} for more info", fg="yellow"
                )
            sys.exit(2)
        except (Exception, KeyboardInterrupt) as base_exc:  # pylint: disable=broad-except
            click.echo(f"GENERAL ERROR: {type(base_exc).__name__}: {base_exc}", err=True)
            logger.debug(str(base_exc), exc_info=True)
            if not SOFTSE_DEBUG_LOGGING_DISABLED:
                click.secho(
                    f"See debug log file: {SOFTSE_DEBUG_LOG_FILE} for more info.", fg="yellow"
                )
            sys.exit(3)

    return wrapper

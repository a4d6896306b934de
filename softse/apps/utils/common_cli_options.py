#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2026 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""CLI helper for Click."""

import logging
import os
from typing import Any, Callable, Optional, TypeVar, Union

import click

from softse import SOFTSE_KEYSTORE_DIR
from softse import __version__ as softse_version

FC = TypeVar("FC", bound=Union[Callable[..., Any], click.Command])
logger = logging.getLogger(__name__)


def softse_apps_common_options(options: FC) -> FC:
    """Common click options.

    Sets --help, --version; provides: `log_level: int` for logging.

    :return: click decorator
    """
    options = click.help_option("--help")(options)
    options = click.version_option(softse_version, "--version")(options)
    options = click.option(
        "-vv",
        "--debug",
        "log_level",
        flag_value=logging.DEBUG,
        help="Display more debugging information.",
    )(options)
    options = click.option(
        "-v",
        "--verbose",
        "log_level",
        flag_value=logging.INFO,
        help="Print more detailed information",
    )(options)
    return options


def softse_keystore_option(options: FC) -> FC:
    """Key store click option decorator.

    Provides: `keystore: str` a full path to the file key store root directory.

    :return: Click decorator
    """
    return click.option(
        "-k",
        "--keystore",
        type=click.Path(resolve_path=True, file_okay=False),
        default=SOFTSE_KEYSTORE_DIR,
        show_default=True,
        envvar="SOFTSE_KEYSTORE_DIR",
        help="Root directory of the file key store.",
    )(options)


def softse_output_option(
    required: bool = True,
    force: bool = False,
    help: Optional[str] = None,  # pylint: disable=redefined-builtin
) -> Callable:
    """Click decorator handling on output file.

    Provides: `output: str` a full path to the output file.
    The force option is not passed to click command.

    :param required: Output option is required, defaults to True
    :param force: Include --force option, defaults to False
    :param help: Customized help message, defaults to None
    :return: Click decorator
    """

    def callback(
        ctx: click.Context,
        param: click.Parameter,  # pylint: disable=unused-argument  # click's callback signature
        value: str,
    ) -> str:
        if ctx.resilient_parsing:
            return value
        if force and value and os.path.exists(value) and not ctx.params["force"]:
            click.echo(
                "Output file already exists. "
                "Please use --force is you want to overwrite existing files."
            )
            ctx.abort()
        if "force" in ctx.params:
            del ctx.params["force"]
        return value

    def decorator(func: Callable[[FC], FC]) -> Callable[[FC], FC]:
        if force:
            func = click.option(
                "--force",
                default=False,
                is_flag=True,
                help="Force overwriting of existing files.",
                is_eager=True,
            )(func)
        func = click.option(
            "-o",
            "--output",
            type=click.Path(resolve_path=True, dir_okay=False),
            required=required,
            help=help or "Path to a file, where to store the output.",
            callback=callback,
        )(func)
        return func

    return decorator

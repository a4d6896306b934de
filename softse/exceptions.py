#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2026 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""softse exception classes.

This module defines the base exception of the package and the generic
exceptions shared by the cryptographic core, the key store and the CLI.
"""

from typing import Optional


class SoftSEError(Exception):
    """softse base exception.

    All exceptions raised by the package derive from this class, so callers can
    catch every failure of a secure element operation with a single handler.

    :cvar fmt: Default error message format template.
    """

    fmt = "SoftSE: {description}"

    def __init__(self, desc: Optional[str] = None) -> None:
        """Initialize the base exception.

        :param desc: Optional description of the exception.
        """
        super().__init__()
        self.description = desc

    def __str__(self) -> str:
        return self.fmt.format(description=self.description or "Unknown Error")


class SoftSEValueError(SoftSEError, ValueError):
    """Invalid value provided to a softse operation."""


class SoftSELengthError(SoftSEError, ValueError):
    """Input data does not have the length required by the operation.

    Raised for example when a digest is not exactly 32 bytes long.
    """


class StorageError(SoftSEError):
    """Key store failure.

    Raised when the key store cannot be opened, or a blob cannot be read from
    or written to it. The core never retries a failed storage operation.
    """

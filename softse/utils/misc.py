#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2026 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""Miscellaneous functions used throughout softse."""

import logging
import os
from enum import Enum
from typing import Union

from softse.exceptions import SoftSEError

logger = logging.getLogger(__name__)


class Endianness(str, Enum):
    """Byte order of integer encodings.

    :cvar BIG: Big-endian byte order representation.
    :cvar LITTLE: Little-endian byte order representation.
    """

    BIG = "big"
    LITTLE = "little"


def load_binary(path: str) -> bytes:
    """Load binary file into bytes.

    :param path: Path to the binary file to load.
    :raises SoftSEError: The file cannot be read.
    :return: Content of the binary file as bytes.
    """
    logger.debug(f"Loading binary file from {path}")
    try:
        with open(path, "rb") as f:
            return f.read()
    except OSError as exc:
        raise SoftSEError(f"Cannot load file '{path}': {exc}") from exc


def write_file(data: Union[str, bytes], path: str, mode: str = "w", encoding: str = "utf-8") -> int:
    """Write data to a file, parent directories are created automatically.

    :param data: Data to write to the file.
    :param path: Path to the target file.
    :param mode: File writing mode ('w' for text, 'wb' for binary), defaults to 'w'.
    :param encoding: Text encoding, defaults to 'utf-8'.
    :return: Number of characters or bytes written to the file.
    """
    path = path.replace("\\", "/")
    folder = os.path.dirname(path)
    if folder and not os.path.exists(folder):
        os.makedirs(folder, exist_ok=True)

    logger.debug(f"Storing {'binary' if 'b' in mode else 'text'} file at {path}")
    with open(path, mode, encoding=None if "b" in mode else encoding) as f:
        return f.write(data)

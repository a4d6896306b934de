#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2026 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""softse - Software Secure Element core for bridge devices.

Generates and manages a single P-256 key pair, encodes it to and from standard
DER key containers, computes SHA-256 digests and produces/verifies ECDSA
signatures in the fixed 64-byte wire format used by the bridge command set.

The behavior of the package can be tuned by environment variables, see the
module level settings below.
"""

import os
from typing import Optional, Union

from packaging.version import Version, parse
from platformdirs import PlatformDirs


def get_softse_version() -> Version:
    """Get softse version information.

    :return: Parsed version object.
    """
    from .__version__ import __version__ as softse_version

    return parse(softse_version)


def value_to_bool(value: Optional[Union[bool, int, str]]) -> bool:
    """Convert value to boolean from various input formats.

    Supports conversion from string representations like "True", "true", "T", "1"
    and standard Python truthy/falsy values for other types.

    :param value: Value to convert to boolean (string, int, bool, or None).
    :return: Boolean representation of the input value.
    """
    if isinstance(value, str):
        return value in ("True", "true", "T", "1")
    return bool(value)


version = get_softse_version()

__author__ = "NXP"
__license__ = "BSD-3-Clause"
__version__ = str(version)

SOFTSE_VERSION_BASE = version.base_version
SOFTSE_PLATFORM_DIRS = PlatformDirs(
    appauthor="nxp",
    appname="softse",
    version=SOFTSE_VERSION_BASE,
)

# Root of the default file key store used by the command line tool
SOFTSE_KEYSTORE_DIR = os.environ.get(
    "SOFTSE_KEYSTORE_DIR", os.path.join(SOFTSE_PLATFORM_DIRS.user_data_dir, "keystore")
)

SOFTSE_DEBUG_LOGGING_DISABLED = value_to_bool(os.environ.get("SOFTSE_DEBUG_LOGGING_DISABLED"))
SOFTSE_DEBUG_LOG_FILE = os.environ.get(
    "SOFTSE_DEBUG_LOG_FILE", os.path.join(SOFTSE_PLATFORM_DIRS.user_log_dir, "debug.log")
)

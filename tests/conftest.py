#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2026 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""softse pytest configuration and shared test fixtures."""

import os

import pytest

from tests.cli_runner import CliRunner

os.environ["SOFTSE_DEBUG_LOGGING_DISABLED"] = "True"

# pylint: disable=wrong-import-position  # the environment has to be set before softse is loaded
from softse.keystore import FileKeyStore, MemoryKeyStore
from softse.secure_element import SecureElement


@pytest.fixture
def cli_runner() -> CliRunner:
    """Get CLI runner instance for testing.

    :return: CliRunner instance for testing CLI commands.
    """
    return CliRunner()


@pytest.fixture
def memory_keystore() -> MemoryKeyStore:
    """Get an empty in-memory key store."""
    return MemoryKeyStore()


@pytest.fixture
def file_keystore(tmpdir: str) -> FileKeyStore:
    """Get a file key store rooted in a temporary directory.

    :param tmpdir: Pytest temporary directory.
    :return: File key store instance.
    """
    return FileKeyStore(os.path.join(str(tmpdir), "keystore"))


@pytest.fixture
def secure_element(memory_keystore: MemoryKeyStore) -> SecureElement:
    """Get the secure element service backed by an in-memory key store.

    :param memory_keystore: Key store fixture.
    :return: Secure element service.
    """
    return SecureElement(keystore=memory_keystore)


@pytest.fixture
def key_pair(secure_element: SecureElement) -> tuple[bytes, bytes]:
    """Get a freshly generated private key blob and its raw public key."""
    return secure_element.generate_key_pair()

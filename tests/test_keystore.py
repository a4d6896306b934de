#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2026 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""softse key store tests."""

import os

import pytest

from softse.exceptions import SoftSEValueError, StorageError
from softse.keystore import FileKeyStore, KeyStore, MemoryKeyStore, validate_key_id


@pytest.fixture(params=["memory", "file"])
def keystore(request: pytest.FixtureRequest, tmpdir: str) -> KeyStore:
    """Get every key store backend."""
    if request.param == "memory":
        return MemoryKeyStore()
    return FileKeyStore(os.path.join(str(tmpdir), "store"))


@pytest.mark.parametrize("key_id", ["k", "se", "private_key-01", "a" * 15])
def test_validate_key_id(key_id: str) -> None:
    assert validate_key_id(key_id) == key_id


@pytest.mark.parametrize("key_id", ["", "a" * 16, "../key", "key id", "key.der", "klíč"])
def test_validate_key_id_invalid(key_id: str) -> None:
    with pytest.raises(SoftSEValueError):
        validate_key_id(key_id)


def test_write_read(keystore: KeyStore) -> None:
    """Test that a stored blob is read back unchanged.

    :param keystore: Key store backend.
    """
    data = bytes(range(121))
    with keystore.session("se") as store:
        assert store.is_opened
        assert store.write_bytes("private_key", data) == len(data)
    assert not keystore.is_opened
    with keystore.session("se") as store:
        assert store.read_bytes("private_key", 1024) == data


def test_overwrite(keystore: KeyStore) -> None:
    with keystore.session("se") as store:
        store.write_bytes("key", b"first")
        store.write_bytes("key", b"second")
        assert store.read_bytes("key", 16) == b"second"


def test_namespaces_are_separated(keystore: KeyStore) -> None:
    with keystore.session("ns1") as store:
        store.write_bytes("key", b"ns1 data")
    with keystore.session("ns2") as store:
        with pytest.raises(StorageError):
            store.read_bytes("key", 16)


def test_read_missing(keystore: KeyStore) -> None:
    with keystore.session("se") as store:
        with pytest.raises(StorageError, match="not found"):
            store.read_bytes("missing", 1024)


def test_read_too_big(keystore: KeyStore) -> None:
    with keystore.session("se") as store:
        store.write_bytes("key", bytes(200))
        with pytest.raises(StorageError):
            store.read_bytes("key", 199)
        assert len(store.read_bytes("key", 200)) == 200


def test_not_opened(keystore: KeyStore) -> None:
    with pytest.raises(StorageError):
        keystore.read_bytes("key", 16)
    with pytest.raises(StorageError):
        keystore.write_bytes("key", b"data")


def test_closed_after_error(keystore: KeyStore) -> None:
    with pytest.raises(StorageError):
        with keystore.session("se") as store:
            store.read_bytes("missing", 16)
    assert not keystore.is_opened


def test_file_layout(tmpdir: str) -> None:
    root = os.path.join(str(tmpdir), "store")
    with FileKeyStore(root).session("se") as store:
        store.write_bytes("private_key", b"\x30\x77")
    path = os.path.join(root, "se", "private_key.der")
    assert os.path.isfile(path)
    assert not os.path.exists(path + ".tmp")
    with open(path, "rb") as f:
        assert f.read() == b"\x30\x77"


def test_file_store_cannot_open(tmpdir: str) -> None:
    root = os.path.join(str(tmpdir), "file")
    with open(root, "wb") as f:
        f.write(b"not a directory")
    keystore = FileKeyStore(root)
    assert not keystore.open("se")
    with pytest.raises(StorageError, match="Cannot open"):
        with keystore.session("se"):
            pass

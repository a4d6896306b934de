#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2026 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""softse key store interface and backends.

The key store is the named-blob persistence boundary of the secure element:
the core hands it the encoded private key and reads it back later. Blobs are
grouped into namespaces, a store has to be opened on a namespace before use.
"""

import logging
import os
import re
from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import Iterator, Optional

from typing_extensions import Self

from softse.exceptions import SoftSEValueError, StorageError

logger = logging.getLogger(__name__)

KEY_ID_MAX_LENGTH = 15


def validate_key_id(key_id: str) -> str:
    """Validate key (or namespace) identifier.

    Identifiers are limited to 15 characters, the limit of the device
    preferences storage; only letters, digits, '_' and '-' are allowed.

    :param key_id: Identifier to check.
    :raises SoftSEValueError: Invalid identifier.
    :return: The identifier.
    """
    if not 0 < len(key_id) <= KEY_ID_MAX_LENGTH:
        raise SoftSEValueError(
            f"Key identifier must have 1 to {KEY_ID_MAX_LENGTH} characters: '{key_id}'"
        )
    if not re.fullmatch(r"[A-Za-z0-9_\-]+", key_id):
        raise SoftSEValueError(f"Key identifier contains invalid characters: '{key_id}'")
    return key_id


class KeyStore(ABC):
    """Abstract named-blob storage.

    Implementations perform blocking I/O; failures are reported as
    :class:`StorageError` and never retried by the caller.
    """

    @property
    @abstractmethod
    def is_opened(self) -> bool:
        """Indicates whether the store is open on a namespace."""

    @abstractmethod
    def open(self, namespace: str) -> bool:
        """Open the store on the namespace.

        :param namespace: Namespace of the blobs.
        :return: True if the store has been opened.
        """

    @abstractmethod
    def read_bytes(self, key_id: str, max_len: int) -> bytes:
        """Read blob from the store.

        :param key_id: Identifier of the blob.
        :param max_len: Maximal accepted size of the blob.
        :raises StorageError: The blob is missing, too big or cannot be read.
        :return: Stored blob.
        """

    @abstractmethod
    def write_bytes(self, key_id: str, data: bytes) -> int:
        """Write blob into the store.

        :param key_id: Identifier of the blob.
        :param data: Blob to store.
        :raises StorageError: The blob cannot be written.
        :return: Number of written bytes.
        """

    @abstractmethod
    def close(self) -> None:
        """Close the store, it may be opened again later."""

    @contextmanager
    def session(self, namespace: str) -> Iterator[Self]:
        """Open the store for the duration of a with block.

        :param namespace: Namespace of the blobs.
        :raises StorageError: The store cannot be opened.
        :yield: The opened store.
        """
        if not self.open(namespace):
            raise StorageError(f"Cannot open key store namespace '{namespace}'")
        try:
            yield self
        finally:
            self.close()

    def _check_opened(self) -> None:
        if not self.is_opened:
            raise StorageError("Key store is not opened")


class MemoryKeyStore(KeyStore):
    """Key store keeping the blobs in process memory."""

    def __init__(self) -> None:
        """Create empty in-memory key store."""
        self._data: dict[str, dict[str, bytes]] = {}
        self._namespace: Optional[str] = None

    @property
    def is_opened(self) -> bool:
        """Indicates whether the store is open on a namespace."""
        return self._namespace is not None

    def open(self, namespace: str) -> bool:
        """Open the store on the namespace.

        :param namespace: Namespace of the blobs.
        :return: True, the in-memory store can always be opened.
        """
        self._namespace = validate_key_id(namespace)
        self._data.setdefault(namespace, {})
        return True

    def read_bytes(self, key_id: str, max_len: int) -> bytes:
        """Read blob from the store.

        :param key_id: Identifier of the blob.
        :param max_len: Maximal accepted size of the blob.
        :raises StorageError: The blob is missing or too big.
        :return: Stored blob.
        """
        self._check_opened()
        assert self._namespace
        data = self._data[self._namespace].get(validate_key_id(key_id))
        if data is None:
            raise StorageError(f"Key '{key_id}' not found in namespace '{self._namespace}'")
        if len(data) > max_len:
            raise StorageError(f"Key '{key_id}' has {len(data)} bytes, maximum is {max_len}")
        return data

    def write_bytes(self, key_id: str, data: bytes) -> int:
        """Write blob into the store.

        :param key_id: Identifier of the blob.
        :param data: Blob to store.
        :return: Number of written bytes.
        """
        self._check_opened()
        assert self._namespace
        self._data[self._namespace][validate_key_id(key_id)] = bytes(data)
        return len(data)

    def close(self) -> None:
        """Close the store."""
        self._namespace = None

    def __str__(self) -> str:
        return f"Memory key store ({len(self._data)} namespaces)"


class FileKeyStore(KeyStore):
    """Key store keeping every blob in a file.

    Layout: ``<root>/<namespace>/<key_id>.der``; files are replaced atomically.

    :cvar FILE_EXTENSION: Extension of the blob files.
    """

    FILE_EXTENSION = ".der"

    def __init__(self, root: str) -> None:
        """Create file key store.

        :param root: Root directory of the store, created on open when missing.
        """
        self.root = root
        self._folder: Optional[str] = None

    @property
    def is_opened(self) -> bool:
        """Indicates whether the store is open on a namespace."""
        return self._folder is not None

    def open(self, namespace: str) -> bool:
        """Open the store on the namespace, its directory is created if needed.

        :param namespace: Namespace of the blobs.
        :return: True if the namespace directory is available.
        """
        folder = os.path.join(self.root, validate_key_id(namespace))
        try:
            os.makedirs(folder, exist_ok=True)
        except OSError as exc:
            logger.debug(f"Cannot create key store folder {folder}: {exc}")
            return False
        self._folder = folder
        return True

    def _key_path(self, key_id: str) -> str:
        self._check_opened()
        assert self._folder
        return os.path.join(self._folder, validate_key_id(key_id) + self.FILE_EXTENSION)

    def read_bytes(self, key_id: str, max_len: int) -> bytes:
        """Read blob from the store.

        :param key_id: Identifier of the blob.
        :param max_len: Maximal accepted size of the blob.
        :raises StorageError: The blob is missing, too big or cannot be read.
        :return: Stored blob.
        """
        path = self._key_path(key_id)
        try:
            with open(path, "rb") as f:
                data = f.read(max_len + 1)
        except FileNotFoundError as exc:
            raise StorageError(f"Key '{key_id}' not found in {self._folder}") from exc
        except OSError as exc:
            raise StorageError(f"Cannot read key '{key_id}': {exc}") from exc
        if len(data) > max_len:
            raise StorageError(f"Key '{key_id}' is bigger than {max_len} bytes")
        logger.debug(f"Loaded {len(data)} bytes from {path}")
        return data

    def write_bytes(self, key_id: str, data: bytes) -> int:
        """Write blob into the store.

        :param key_id: Identifier of the blob.
        :param data: Blob to store.
        :raises StorageError: The blob cannot be written.
        :return: Number of written bytes.
        """
        path = self._key_path(key_id)
        tmp_path = path + ".tmp"
        try:
            with open(tmp_path, "wb") as f:
                written = f.write(data)
            os.replace(tmp_path, path)
        except OSError as exc:
            raise StorageError(f"Cannot write key '{key_id}': {exc}") from exc
        logger.debug(f"Stored {written} bytes at {path}")
        return written

    def close(self) -> None:
        """Close the store."""
        self._folder = None

    def __str__(self) -> str:
        return f"File key store at {self.root}"

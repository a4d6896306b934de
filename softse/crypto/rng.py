#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2026 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""softse cryptographic random number generation.

This module provides the seeded random source used by key generation and
signing, an AES-256 CTR_DRBG (NIST SP 800-90A, without derivation function)
instantiated from an entropy source, together with thin wrappers around
Python's secrets module for general purpose random values.
"""

# Used security modules

import logging
from secrets import randbelow, token_bytes, token_hex
from types import TracebackType
from typing import Callable, Optional, Type

from cryptography.hazmat.primitives.ciphers import Cipher, CipherContext, algorithms, modes
from typing_extensions import Self

from softse.crypto.exceptions import RngSeedError

logger = logging.getLogger(__name__)

EntropySource = Callable[[int], bytes]


def random_bytes(length: int) -> bytes:
    """Generate cryptographically secure random bytes.

    :param length: The number of random bytes to generate.
    :raises ValueError: If length is negative.
    :return: Cryptographically secure random bytes of specified length.
    """
    return token_bytes(length)


def random_hex(length: int) -> str:
    """Generate random hexadecimal string of specified byte length.

    :param length: The length in bytes of the random data to generate.
    :return: Random hexadecimal string representation (twice the byte length).
    """
    return token_hex(length)


def rand_below(upper_bound: int) -> int:
    """Generate a random integer in the range [0, upper_bound).

    :param upper_bound: The exclusive upper bound for the random number.
    :return: Random integer between 0 and upper_bound - 1.
    """
    return randbelow(upper_bound)


class RandomSource:
    """Seeded cryptographically secure random source.

    AES-256 CTR_DRBG instantiated from an entropy source and an optional
    personalization string. The instance is meant to live for a single
    operation only; used as a context manager it is seeded on enter and its
    internal state is wiped on every exit path.

    :cvar KEY_SIZE: Size of the AES key in bytes.
    :cvar BLOCK_SIZE: Size of the AES block (the V counter) in bytes.
    :cvar SEED_SIZE: Size of the seed material (key + block) in bytes.
    :cvar MAX_REQUEST_SIZE: Maximal number of bytes served by one request.
    """

    KEY_SIZE = 32
    BLOCK_SIZE = 16
    SEED_SIZE = KEY_SIZE + BLOCK_SIZE
    MAX_REQUEST_SIZE = 1 << 16

    def __init__(
        self, personalization: bytes = b"", entropy_source: Optional[EntropySource] = None
    ) -> None:
        """Initialize the random source, it is not seeded yet.

        :param personalization: Personalization string mixed into the seed, up to 48 bytes.
        :param entropy_source: Callable returning the requested amount of entropy,
            defaults to the operating system CSPRNG.
        """
        self.personalization = personalization
        self.entropy_source = entropy_source or token_bytes
        self._key = bytearray(self.KEY_SIZE)
        self._counter = bytearray(self.BLOCK_SIZE)
        self._seeded = False

    def __enter__(self) -> Self:
        self.seed()
        return self

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]] = None,
        exc_value: Optional[BaseException] = None,
        traceback: Optional[TracebackType] = None,
    ) -> None:
        self.close()

    @property
    def is_seeded(self) -> bool:
        """Check whether the generator has been seeded."""
        return self._seeded

    def seed(self) -> None:
        """Seed the generator from the entropy source.

        :raises RngSeedError: The entropy source failed or the personalization is too long.
        """
        if len(self.personalization) > self.SEED_SIZE:
            raise RngSeedError(
                f"Personalization string is too long: {len(self.personalization)} bytes,"
                f" maximum is {self.SEED_SIZE}"
            )
        try:
            entropy = self.entropy_source(self.SEED_SIZE)
        except Exception as exc:
            raise RngSeedError(f"Entropy source failed: {exc}") from exc
        if not isinstance(entropy, (bytes, bytearray)) or len(entropy) < self.SEED_SIZE:
            raise RngSeedError("Entropy source returned insufficient data")

        seed_material = bytearray(entropy[: self.SEED_SIZE])
        for idx, value in enumerate(self.personalization):
            seed_material[idx] ^= value
        self._wipe()
        try:
            self._update(seed_material)
        finally:
            self._clear(seed_material)
        self._seeded = True
        logger.debug("Random source seeded")

    def next_bytes(self, length: int) -> bytes:
        """Get cryptographically unpredictable bytes.

        :param length: Number of bytes to return.
        :raises RngSeedError: The generator has not been seeded.
        :raises ValueError: Invalid requested length.
        :return: Random bytes.
        """
        if not self._seeded:
            raise RngSeedError("Random source has not been seeded")
        if length < 0 or length > self.MAX_REQUEST_SIZE:
            raise ValueError(f"Invalid number of requested random bytes: {length}")
        encryptor = self._block_encryptor()
        output = bytearray()
        while len(output) < length:
            self._increment_counter()
            output += encryptor.update(bytes(self._counter))
        self._update(bytearray(self.SEED_SIZE))
        return bytes(output[:length])

    def close(self) -> None:
        """Wipe the generator state, the instance must be seeded again before use."""
        self._wipe()
        self._seeded = False

    def _block_encryptor(self) -> CipherContext:
        # single block AES permutation keyed by the current DRBG key
        return Cipher(algorithms.AES(bytes(self._key)), modes.ECB()).encryptor()

    def _increment_counter(self) -> None:
        value = (int.from_bytes(self._counter, "big") + 1) % (1 << (8 * self.BLOCK_SIZE))
        self._counter[:] = value.to_bytes(self.BLOCK_SIZE, "big")

    def _update(self, provided_data: bytearray) -> None:
        encryptor = self._block_encryptor()
        temp = bytearray()
        while len(temp) < self.SEED_SIZE:
            self._increment_counter()
            temp += encryptor.update(bytes(self._counter))
        for idx in range(self.SEED_SIZE):
            temp[idx] ^= provided_data[idx]
        self._key[:] = temp[: self.KEY_SIZE]
        self._counter[:] = temp[self.KEY_SIZE : self.SEED_SIZE]
        self._clear(temp)

    def _wipe(self) -> None:
        self._clear(self._key)
        self._clear(self._counter)

    @staticmethod
    def _clear(buffer: bytearray) -> None:
        for idx in range(len(buffer)):
            buffer[idx] = 0

    def __repr__(self) -> str:
        return f"RandomSource(personalization={self.personalization!r}, seeded={self._seeded})"

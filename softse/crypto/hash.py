#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2026 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""softse SHA-256 hasher.

The secure element signs and verifies pre-computed 32-byte SHA-256 digests;
this module computes them through the cryptography library.
"""

# Used security modules

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import hashes

from softse.crypto.exceptions import HashUnavailable

DIGEST_SIZE = 32


def get_hash_algorithm() -> hashes.HashAlgorithm:
    """Get the SHA-256 algorithm instance used by the secure element.

    :return: SHA-256 algorithm instance.
    """
    return hashes.SHA256()


class Hash:
    """Incremental SHA-256 computation.

    Thin wrapper of the cryptography hash context, translating a missing
    primitive into the softse error taxonomy.
    """

    def __init__(self) -> None:
        """Initialize hash object.

        :raises HashUnavailable: SHA-256 is not provided by the backend.
        """
        try:
            self.hash_obj = hashes.Hash(get_hash_algorithm())
        except UnsupportedAlgorithm as exc:
            raise HashUnavailable(f"SHA-256 is not available: {exc}") from exc

    def update(self, data: bytes) -> None:
        """Update the hash object with new data.

        :param data: Binary data to be added to the hash calculation.
        """
        self.hash_obj.update(data)

    def finalize(self) -> bytes:
        """Finalize the hash computation and return the digest.

        After calling this method, the hash object cannot be used for further updates.

        :return: The computed 32-byte digest.
        """
        return self.hash_obj.finalize()


def sha256(message: bytes) -> bytes:
    """Compute SHA-256 digest of the message.

    :param message: Input data of arbitrary length.
    :raises HashUnavailable: SHA-256 is not provided by the backend.
    :return: 32-byte digest.
    """
    hash_obj = Hash()
    hash_obj.update(message)
    return hash_obj.finalize()

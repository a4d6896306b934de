#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2026 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""softse secure element service.

Orchestrates the random source, the key codec, the signature codec and the
hasher into the secure element command set: key pair generation, public key
export and import, ECDSA sign and verify over SHA-256 digests and hashing.

The service keeps no state between calls. Every call sets up its own working
state (random source, primitive key objects) and releases it when it returns,
whichever exit path is taken. Callers are responsible for serializing calls to
one device.
"""

import logging
from typing import Optional, Union

from softse.crypto.exceptions import EncodingError, InvalidKeyError
from softse.crypto.hash import sha256
from softse.crypto.keys import (
    PRIVATE_KEY_MAX_SIZE,
    PUBLIC_KEY_MAX_SIZE,
    EcKeyPair,
    EcPublicKey,
    decode_private_key_der,
    decode_public_key_der,
    decode_public_key_xy,
    encode_private_key_der,
    encode_public_key_xy,
)
from softse.crypto.rng import EntropySource, RandomSource
from softse.crypto.signature import der_to_raw_signature, raw_signature_to_der
from softse.exceptions import StorageError
from softse.keystore import KeyStore

logger = logging.getLogger(__name__)


class SecureElement:
    """Software secure element.

    Stateless service object; the key store and the entropy source are
    capabilities handed over at construction time.

    :cvar NAMESPACE: Key store namespace holding the private key blobs.
    :cvar KEYGEN_PERSONALIZATION: DRBG personalization string of key generation.
    :cvar SIGN_PERSONALIZATION: DRBG personalization string of signing.
    """

    NAMESPACE = "se"
    KEYGEN_PERSONALIZATION = b"gen_key"
    SIGN_PERSONALIZATION = b"ecdsa_sign"

    def __init__(
        self,
        keystore: Optional[KeyStore] = None,
        entropy_source: Optional[EntropySource] = None,
    ) -> None:
        """Create the secure element service.

        :param keystore: Key store used by the key-id based operations, optional.
        :param entropy_source: Entropy source of the random generator,
            defaults to the operating system CSPRNG.
        """
        self.keystore = keystore
        self.entropy_source = entropy_source

    def generate_key_pair(self, max_len: int = PRIVATE_KEY_MAX_SIZE) -> tuple[bytes, bytes]:
        """Generate a new P-256 key pair.

        The raw public key is taken from the generated key pair itself, not
        re-parsed from the encoded blob.

        :param max_len: Maximal size of the private key blob.
        :raises RngSeedError: Random generator cannot be seeded.
        :raises KeyGenError: Key generation failed.
        :raises BufferTooSmallError: The private key blob does not fit into max_len.
        :return: Tuple of private key blob and 64-byte raw public key.
        """
        with RandomSource(self.KEYGEN_PERSONALIZATION, self.entropy_source) as rng:
            key_pair = EcKeyPair.generate(rng)
        blob = encode_private_key_der(key_pair, max_len)
        public_key = encode_public_key_xy(key_pair)
        logger.debug(f"Generated {key_pair!r}, private key blob has {len(blob)} bytes")
        return blob, public_key

    def export_public_key_xy(self, blob: bytes) -> bytes:
        """Export raw public key from the key blob.

        :param blob: Private key blob, a public key blob is accepted as well.
        :raises InvalidKeyError: The blob is not a usable P-256 key.
        :return: 64-byte raw public key.
        """
        return encode_public_key_xy(self._load_public_key(blob))

    def import_public_key_as_der(self, raw: bytes, max_len: int = PUBLIC_KEY_MAX_SIZE) -> bytes:
        """Convert raw public key into a public key blob.

        :param raw: 64-byte raw public key.
        :param max_len: Maximal size of the public key blob.
        :raises InvalidPointError: The coordinates are not a point on P-256.
        :raises BufferTooSmallError: The blob does not fit into max_len.
        :return: SubjectPublicKeyInfo DER blob.
        """
        return decode_public_key_xy(raw, max_len)

    def sign(self, blob: bytes, digest: bytes) -> bytes:
        """Sign a SHA-256 digest with the private key blob.

        :param blob: Private key blob.
        :param digest: 32-byte digest.
        :raises InvalidKeyError: The blob is not a usable P-256 private key.
        :raises RngSeedError: Random generator cannot be seeded.
        :raises SignFailure: The primitive failed to sign.
        :return: 64-byte raw signature r||s.
        """
        key_pair = decode_private_key_der(blob)
        # The ECDSA nonce is drawn by the primitive from the OpenSSL CSPRNG,
        # the seeded source only guards against a failing entropy source.
        with RandomSource(self.SIGN_PERSONALIZATION, self.entropy_source):
            der_signature = key_pair.sign(digest)
        return der_to_raw_signature(der_signature)

    def verify(self, blob: bytes, digest: bytes, signature: bytes) -> bool:
        """Verify the raw signature of a SHA-256 digest.

        A signature that does not match is a regular negative result, not an error.

        :param blob: Public key blob, a private key blob is accepted as well.
        :param digest: 32-byte digest.
        :param signature: 64-byte raw signature r||s.
        :raises InvalidKeyError: The blob is not a usable P-256 key.
        :raises SignatureFormatError: Malformed signature.
        :return: True if the signature is valid, False otherwise.
        """
        public_key = self._load_public_key(blob)
        result = public_key.verify(digest, raw_signature_to_der(signature))
        logger.debug(f"Signature verification {'passed' if result else 'failed'}")
        return result

    def hash(self, message: bytes) -> bytes:
        """Compute SHA-256 digest of the message.

        :param message: Input data.
        :raises HashUnavailable: SHA-256 primitive is not available.
        :return: 32-byte digest.
        """
        return sha256(message)

    def generate_private_key(self, key_id: str) -> bytes:
        """Generate a key pair and store its private key blob under the key id.

        :param key_id: Identifier of the key in the key store.
        :raises StorageError: The key store is missing or failed.
        :return: 64-byte raw public key.
        """
        keystore = self._get_keystore()
        blob, public_key = self.generate_key_pair(PRIVATE_KEY_MAX_SIZE)
        with keystore.session(self.NAMESPACE) as store:
            written = store.write_bytes(key_id, blob)
        if written != len(blob):
            raise StorageError(f"Only {written} of {len(blob)} bytes of key '{key_id}' stored")
        logger.info(f"Private key '{key_id}' generated and stored")
        return public_key

    def generate_public_key(self, key_id: str) -> bytes:
        """Export the raw public key of a stored private key.

        :param key_id: Identifier of the key in the key store.
        :raises StorageError: The key store is missing or failed.
        :return: 64-byte raw public key.
        """
        return self.export_public_key_xy(self._load_blob(key_id))

    def sign_with_key(self, key_id: str, digest: bytes) -> bytes:
        """Sign a SHA-256 digest with a stored private key.

        :param key_id: Identifier of the key in the key store.
        :param digest: 32-byte digest.
        :return: 64-byte raw signature r||s.
        """
        return self.sign(self._load_blob(key_id), digest)

    def verify_with_key(self, key_id: str, digest: bytes, signature: bytes) -> bool:
        """Verify the raw signature with the public part of a stored private key.

        :param key_id: Identifier of the key in the key store.
        :param digest: 32-byte digest.
        :param signature: 64-byte raw signature r||s.
        :return: True if the signature is valid, False otherwise.
        """
        return self.verify(self._load_blob(key_id), digest, signature)

    def _get_keystore(self) -> KeyStore:
        if self.keystore is None:
            raise StorageError("No key store configured")
        return self.keystore

    def _load_blob(self, key_id: str) -> bytes:
        with self._get_keystore().session(self.NAMESPACE) as store:
            return store.read_bytes(key_id, PRIVATE_KEY_MAX_SIZE)

    @staticmethod
    def _load_public_key(blob: bytes) -> EcPublicKey:
        key: Union[EcKeyPair, EcPublicKey]
        try:
            key = decode_public_key_der(blob)
        except EncodingError as public_exc:
            try:
                key = decode_private_key_der(blob)
            except EncodingError:
                raise InvalidKeyError(
                    f"Cannot decode public or private key: {public_exc}"
                ) from public_exc
            return key.public_key
        return key

    def __repr__(self) -> str:
        return f"SecureElement(keystore={self.keystore})"

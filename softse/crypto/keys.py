#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2026 NXP
#
# SPDX-License-Identifier: BSD-3-Clause
"""softse P-256 key handling and key codec.

This module wraps the elliptic curve keys of the cryptography library and
converts them between the representations used by the secure element:

* private key blob - SEC1 ``ECPrivateKey`` DER (RFC 5915) with named curve
  parameters and the embedded public point, PKCS#8 wrapped keys are accepted
  on input,
* public key blob - X.509 ``SubjectPublicKeyInfo`` DER,
* raw public key - 64 bytes X||Y, each coordinate big-endian.

Only the SECP256R1 curve is supported.
"""

import logging
import math
from typing import Any, Callable, Optional, Union

from cryptography.exceptions import InvalidSignature, UnsupportedAlgorithm
from cryptography.hazmat.primitives.asymmetric import ec, utils
from cryptography.hazmat.primitives.serialization import (
    Encoding,
    NoEncryption,
    PrivateFormat,
    PublicFormat,
    load_der_private_key,
    load_der_public_key,
)
from typing_extensions import Self

from softse.crypto.crypto_types import KeyEncoding
from softse.crypto.exceptions import (
    BufferTooSmallError,
    EncodingError,
    InvalidPointError,
    KeyGenError,
    KeySetupError,
    NotAnECKeyError,
    SignFailure,
)
from softse.crypto.hash import DIGEST_SIZE, get_hash_algorithm
from softse.crypto.rng import RandomSource
from softse.exceptions import SoftSELengthError
from softse.utils.misc import Endianness

logger = logging.getLogger(__name__)

CURVE_NAME = "secp256r1"
COORDINATE_SIZE = 32
RAW_PUBLIC_KEY_SIZE = 2 * COORDINATE_SIZE
UNCOMPRESSED_POINT_TAG = 0x04

PRIVATE_KEY_MAX_SIZE = 1024
PUBLIC_KEY_MAX_SIZE = 128

# P-256 domain parameters, FIPS 186-4 D.1.2.3
P256_P = 0xFFFFFFFF00000001000000000000000000000000FFFFFFFFFFFFFFFFFFFFFFFF
P256_A = P256_P - 3
P256_B = 0x5AC635D8AA3A93E7B3EBBD55769886BC651D06B0CC53B0F63BCE3C3E27D2604B
P256_N = 0xFFFFFFFF00000000FFFFFFFFFFFFFFFFBCE6FAADA7179E84F3B9CAC2FC632551


def is_point_on_curve(coor_x: int, coor_y: int) -> bool:
    """Check that the affine point satisfies the P-256 curve equation.

    :param coor_x: X coordinate.
    :param coor_y: Y coordinate.
    :return: True if both coordinates are field elements and y^2 = x^3 + ax + b (mod p).
    """
    if not (0 <= coor_x < P256_P and 0 <= coor_y < P256_P):
        return False
    return (coor_y * coor_y - (coor_x**3 + P256_A * coor_x + P256_B)) % P256_P == 0


def _check_size(data: bytes, max_len: int, name: str) -> bytes:
    if len(data) > max_len:
        raise BufferTooSmallError(
            f"Encoded {name} needs {len(data)} bytes, only {max_len} bytes available"
        )
    return data


def _check_digest(digest: bytes) -> None:
    if len(digest) != DIGEST_SIZE:
        raise SoftSELengthError(
            f"Digest must be {DIGEST_SIZE} bytes long, got {len(digest)} bytes"
        )


def _load_der_key(loader: Callable[[bytes], Any], blob: bytes, name: str) -> Any:
    try:
        key = loader(bytes(blob))
    except UnsupportedAlgorithm as exc:
        raise NotAnECKeyError(f"Unsupported {name} type: {exc}") from exc
    except (ValueError, TypeError) as exc:
        raise EncodingError(f"Cannot decode DER {name}: {exc}") from exc
    if not isinstance(key, (ec.EllipticCurvePrivateKey, ec.EllipticCurvePublicKey)):
        raise NotAnECKeyError(f"The {name} is not an EC key: {type(key).__name__}")
    if not isinstance(key.curve, ec.SECP256R1):
        raise NotAnECKeyError(f"The {name} uses unsupported curve {key.curve.name}")
    return key


class KeyEccCommon:
    """Common properties of P-256 private and public keys."""

    key: Union[ec.EllipticCurvePrivateKey, ec.EllipticCurvePublicKey]

    @property
    def coordinate_size(self) -> int:
        """Get the coordinate size in bytes."""
        return math.ceil(self.key.key_size / 8)

    @property
    def signature_size(self) -> int:
        """Get the size of raw signature data in bytes."""
        return self.coordinate_size * 2

    @property
    def curve(self) -> str:
        """Get the name of the elliptic curve."""
        return self.key.curve.name


class EcPublicKey(KeyEccCommon):
    """P-256 public key."""

    key: ec.EllipticCurvePublicKey

    def __init__(self, key: ec.EllipticCurvePublicKey) -> None:
        """Create public key.

        :param key: Elliptic curve public key instance.
        """
        self.key = key

    @property
    def x(self) -> int:
        """Get the X coordinate of the public key point."""
        return self.key.public_numbers().x

    @property
    def y(self) -> int:
        """Get the Y coordinate of the public key point."""
        return self.key.public_numbers().y

    def export(
        self, encoding: KeyEncoding = KeyEncoding.RAW, max_len: Optional[int] = None
    ) -> bytes:
        """Export the public key to bytes in requested format.

        :param encoding: RAW for X||Y, DER or PEM for SubjectPublicKeyInfo.
        :param max_len: Maximal size of the output, unlimited if None.
        :raises BufferTooSmallError: The encoded key is longer than max_len.
        :return: Encoded public key.
        """
        if encoding == KeyEncoding.RAW:
            x_bytes = self.x.to_bytes(self.coordinate_size, Endianness.BIG.value)
            y_bytes = self.y.to_bytes(self.coordinate_size, Endianness.BIG.value)
            data = x_bytes + y_bytes
        else:
            data = self.key.public_bytes(
                KeyEncoding.get_cryptography_encodings(encoding),
                PublicFormat.SubjectPublicKeyInfo,
            )
        if max_len is not None:
            _check_size(data, max_len, "public key")
        return data

    def verify(self, digest: bytes, der_signature: bytes) -> bool:
        """Verify DER encoded ECDSA signature over a SHA-256 digest.

        :param digest: 32-byte pre-computed digest.
        :param der_signature: ASN.1 DER encoded signature.
        :raises SoftSELengthError: Digest has invalid length.
        :return: True if the signature matches, False otherwise.
        """
        _check_digest(digest)
        try:
            signature_algorithm = ec.ECDSA(utils.Prehashed(get_hash_algorithm()))
            self.key.verify(der_signature, digest, signature_algorithm)
            return True
        except InvalidSignature:
            return False

    @classmethod
    def recreate(cls, coor_x: int, coor_y: int) -> Self:
        """Recreate public key from coordinates.

        The point is checked against the curve equation before it is handed to
        the primitive library.

        :param coor_x: X coordinate of point on curve.
        :param coor_y: Y coordinate of point on curve.
        :raises InvalidPointError: The coordinates are not a point on P-256.
        :return: Public key.
        """
        if not is_point_on_curve(coor_x, coor_y):
            raise InvalidPointError("The coordinates do not form a point on the P-256 curve")
        point = (
            bytes([UNCOMPRESSED_POINT_TAG])
            + coor_x.to_bytes(COORDINATE_SIZE, Endianness.BIG.value)
            + coor_y.to_bytes(COORDINATE_SIZE, Endianness.BIG.value)
        )
        try:
            key = ec.EllipticCurvePublicKey.from_encoded_point(ec.SECP256R1(), point)
        except ValueError as exc:
            raise InvalidPointError(f"Cannot load the public point: {exc}") from exc
        return cls(key)

    @classmethod
    def from_raw(cls, raw: bytes) -> Self:
        """Recreate public key from the 64-byte X||Y wire form.

        :param raw: Raw public key.
        :raises InvalidPointError: Invalid length or the point is not on the curve.
        :return: Public key.
        """
        if len(raw) != RAW_PUBLIC_KEY_SIZE:
            raise InvalidPointError(
                f"Raw public key must be {RAW_PUBLIC_KEY_SIZE} bytes long, got {len(raw)}"
            )
        coor_x = int.from_bytes(raw[:COORDINATE_SIZE], Endianness.BIG.value)
        coor_y = int.from_bytes(raw[COORDINATE_SIZE:], Endianness.BIG.value)
        return cls.recreate(coor_x, coor_y)

    @classmethod
    def parse(cls, blob: bytes) -> Self:
        """Parse public key from SubjectPublicKeyInfo DER.

        :param blob: DER encoded public key.
        :raises EncodingError: The blob cannot be decoded.
        :raises NotAnECKeyError: The blob holds another key type or curve.
        :return: Public key.
        """
        return cls(_load_der_key(load_der_public_key, blob, "public key"))

    def __eq__(self, obj: Any) -> bool:
        return isinstance(obj, self.__class__) and (self.x, self.y) == (obj.x, obj.y)

    def __repr__(self) -> str:
        return f"ECC {self.curve} Public Key"

    def __str__(self) -> str:
        return f"ECC ({self.curve}) Public key: \nx({hex(self.x)}) \ny({hex(self.y)})"


class EcKeyPair(KeyEccCommon):
    """P-256 key pair: private scalar plus the public point.

    :cvar GENERATE_MAX_ATTEMPTS: Number of scalar candidates drawn before key generation fails.
    """

    key: ec.EllipticCurvePrivateKey

    GENERATE_MAX_ATTEMPTS = 30

    def __init__(self, key: ec.EllipticCurvePrivateKey) -> None:
        """Create key pair.

        :param key: ECC private key object from cryptography library.
        """
        self.key = key

    @classmethod
    def generate(cls, rng: RandomSource) -> Self:
        """Generate a new key pair from the seeded random source.

        Scalar candidates are drawn from the random source until one falls into
        the range [1, n - 1].

        :param rng: Seeded random source.
        :raises KeyGenError: No valid scalar was found.
        :raises KeySetupError: The primitive refused the scalar.
        :return: New key pair.
        """
        for _ in range(cls.GENERATE_MAX_ATTEMPTS):
            candidate = int.from_bytes(rng.next_bytes(COORDINATE_SIZE), Endianness.BIG.value)
            if 0 < candidate < P256_N:
                return cls.recreate(candidate)
        raise KeyGenError(
            f"No valid private scalar found in {cls.GENERATE_MAX_ATTEMPTS} attempts"
        )

    @classmethod
    def recreate(cls, d: int) -> Self:
        """Recreate key pair from private scalar.

        :param d: Private number D.
        :raises KeySetupError: Invalid scalar.
        :return: Key pair.
        """
        try:
            key = ec.derive_private_key(d, ec.SECP256R1())
        except (ValueError, TypeError) as exc:
            raise KeySetupError(f"Cannot set up the EC key: {exc}") from exc
        return cls(key)

    @classmethod
    def parse(cls, blob: bytes) -> Self:
        """Parse key pair from SEC1 or PKCS#8 DER private key.

        :param blob: DER encoded private key.
        :raises EncodingError: The blob cannot be decoded.
        :raises NotAnECKeyError: The blob holds another key type or curve.
        :return: Key pair.
        """
        key = _load_der_key(lambda data: load_der_private_key(data, None), blob, "private key")
        return cls(key)

    @property
    def d(self) -> int:
        """Get the private number D."""
        return self.key.private_numbers().private_value

    @property
    def public_key(self) -> EcPublicKey:
        """Get the public part of the key pair."""
        return EcPublicKey(self.key.public_key())

    def export(self, max_len: int = PRIVATE_KEY_MAX_SIZE) -> bytes:
        """Export the key pair as SEC1 DER.

        :param max_len: Maximal size of the output.
        :raises BufferTooSmallError: The encoded key is longer than max_len.
        :return: DER encoded private key.
        """
        data = self.key.private_bytes(
            encoding=Encoding.DER,
            format=PrivateFormat.TraditionalOpenSSL,
            encryption_algorithm=NoEncryption(),
        )
        return _check_size(data, max_len, "private key")

    def sign(self, digest: bytes) -> bytes:
        """Sign a pre-computed SHA-256 digest with ECDSA.

        :param digest: 32-byte digest.
        :raises SoftSELengthError: Digest has invalid length.
        :raises SignFailure: The primitive failed to sign.
        :return: ASN.1 DER encoded signature.
        """
        _check_digest(digest)
        try:
            return self.key.sign(digest, ec.ECDSA(utils.Prehashed(get_hash_algorithm())))
        except (ValueError, UnsupportedAlgorithm) as exc:
            raise SignFailure(f"ECDSA signing failed: {exc}") from exc

    def __eq__(self, obj: Any) -> bool:
        return isinstance(obj, self.__class__) and self.public_key == obj.public_key

    def __repr__(self) -> str:
        return f"ECC {self.curve} Key Pair"

    def __str__(self) -> str:
        return f"ECC ({self.curve}) Key pair: \n{self.public_key}"


def encode_private_key_der(key_pair: EcKeyPair, max_len: int = PRIVATE_KEY_MAX_SIZE) -> bytes:
    """Encode the key pair into the private key blob.

    :param key_pair: Key pair to encode.
    :param max_len: Maximal size of the blob.
    :raises BufferTooSmallError: The blob does not fit into max_len.
    :return: SEC1 DER private key blob.
    """
    return key_pair.export(max_len)


def decode_private_key_der(blob: bytes) -> EcKeyPair:
    """Decode the private key blob.

    :param blob: DER private key blob.
    :raises EncodingError: The blob does not parse.
    :raises NotAnECKeyError: The blob is not a P-256 key.
    :return: Key pair.
    """
    return EcKeyPair.parse(blob)


def decode_public_key_der(blob: bytes) -> EcPublicKey:
    """Decode the public key blob.

    :param blob: SubjectPublicKeyInfo DER blob.
    :raises EncodingError: The blob does not parse.
    :raises NotAnECKeyError: The blob is not a P-256 key.
    :return: Public key.
    """
    return EcPublicKey.parse(blob)


def encode_public_key_xy(key: Union[EcKeyPair, EcPublicKey]) -> bytes:
    """Get the raw X||Y public key.

    :param key: Key pair or public key.
    :return: 64-byte raw public key.
    """
    public_key = key.public_key if isinstance(key, EcKeyPair) else key
    return public_key.export(KeyEncoding.RAW)


def decode_public_key_xy(raw: bytes, max_len: int = PUBLIC_KEY_MAX_SIZE) -> bytes:
    """Convert the raw X||Y public key into public key blob.

    :param raw: 64-byte raw public key.
    :param max_len: Maximal size of the blob.
    :raises InvalidPointError: The coordinates are not a point on P-256.
    :raises BufferTooSmallError: The blob does not fit into max_len.
    :return: SubjectPublicKeyInfo DER blob.
    """
    public_key = EcPublicKey.from_raw(raw)
    logger.debug(f"Imported public point {public_key.x:#x}, {public_key.y:#x}")
    return public_key.export(KeyEncoding.DER, max_len=max_len)

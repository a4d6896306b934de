#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2026 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""softse cryptographic exceptions module.

Every cryptographic or encoding failure of the secure element core maps to
exactly one of the exception types defined here. None of them is transient,
so none of them is retried by the core.
"""

from softse.exceptions import SoftSEError


class SoftSECryptoError(SoftSEError):
    """General softse crypto error.

    Base exception class for all cryptographic operations of the core.
    """


class RngSeedError(SoftSECryptoError):
    """The entropy source or the random generator initialization failed."""


class KeySetupError(SoftSECryptoError):
    """The primitive library refused to set up an EC key context."""


class KeyGenError(SoftSECryptoError):
    """Generation of a P-256 key pair failed."""


class InvalidKeyError(SoftSECryptoError):
    """Key blob cannot be used as a key for the requested operation.

    Base class of the key decoding failures.
    """


class EncodingError(InvalidKeyError):
    """Key blob does not parse as a DER key container."""


class NotAnECKeyError(InvalidKeyError):
    """Key blob parses, but not to a P-256 elliptic curve key."""


class BufferTooSmallError(SoftSECryptoError):
    """Encoded output does not fit into the caller supplied maximum size."""


class InvalidPointError(SoftSECryptoError):
    """Coordinates do not form a valid point on the P-256 curve."""


class SignatureFormatError(SoftSECryptoError):
    """Malformed ECDSA signature (ASN.1 structure or raw wire form)."""


class LengthMismatchError(SignatureFormatError):
    """Signature integer does not fit into the fixed-size raw field."""


class EmptyIntegerError(SignatureFormatError):
    """Signature integer has an empty content field."""


class SignFailure(SoftSECryptoError):
    """The primitive signing step failed."""


class VerificationFailed(SoftSECryptoError):
    """Signature does not match the digest and the public key."""


class HashUnavailable(SoftSECryptoError):
    """The SHA-256 primitive is not available."""

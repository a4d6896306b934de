#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2026 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""softse ECDSA signature codec.

The cryptographic primitives produce and consume ECDSA signatures as an ASN.1
DER ``SEQUENCE { r INTEGER, s INTEGER }`` while the bridge wire format is the
fixed 64-byte r||s concatenation. This module converts between the two.

ASN.1 INTEGERs are two's complement, so the encoder keeps every integer minimal
and inserts one leading zero byte whenever the first content byte has its high
bit set. Without it a standard verifier reads the value as negative.
"""

import logging

from softse.crypto.exceptions import EmptyIntegerError, LengthMismatchError, SignatureFormatError

logger = logging.getLogger(__name__)

SEQUENCE_TAG = 0x30
INTEGER_TAG = 0x02
INTEGER_SIZE = 32
RAW_SIGNATURE_SIZE = 2 * INTEGER_SIZE


def _encode_length(length: int) -> bytes:
    if length < 0x80:
        return bytes([length])
    length_bytes = length.to_bytes((length.bit_length() + 7) // 8, "big")
    return bytes([0x80 | len(length_bytes)]) + length_bytes


def _read_length(der: bytes, offset: int) -> tuple[int, int]:
    if offset >= len(der):
        raise SignatureFormatError("Truncated signature: missing length")
    first = der[offset]
    offset += 1
    if first < 0x80:
        return first, offset
    octets = first & 0x7F
    if octets == 0 or octets > 2:
        raise SignatureFormatError(f"Unsupported length encoding 0x{first:02x}")
    if offset + octets > len(der):
        raise SignatureFormatError("Truncated signature: incomplete length")
    return int.from_bytes(der[offset : offset + octets], "big"), offset + octets


def _encode_integer(value: bytes) -> bytes:
    content = value.lstrip(b"\x00") or b"\x00"
    if content[0] & 0x80:
        content = b"\x00" + content
    return bytes([INTEGER_TAG]) + _encode_length(len(content)) + content


def _read_integer(der: bytes, offset: int, end: int, int_size: int) -> tuple[bytes, int]:
    if offset >= end or der[offset] != INTEGER_TAG:
        raise SignatureFormatError("Expected ASN.1 INTEGER in signature")
    length, offset = _read_length(der, offset + 1)
    if length == 0:
        raise EmptyIntegerError("Signature contains an empty INTEGER")
    if offset + length > end:
        raise SignatureFormatError("Truncated signature: INTEGER exceeds the sequence")
    value = der[offset : offset + length].lstrip(b"\x00")
    if len(value) > int_size:
        raise LengthMismatchError(
            f"Signature INTEGER has {len(value)} significant bytes, maximum is {int_size}"
        )
    return value.rjust(int_size, b"\x00"), offset + length


def raw_to_der(r: bytes, s: bytes) -> bytes:
    """Encode raw r and s values as ASN.1 DER signature.

    :param r: Big-endian r value.
    :param s: Big-endian s value.
    :raises SignatureFormatError: Empty r or s.
    :return: DER encoded SEQUENCE of two INTEGERs.
    """
    if not r or not s:
        raise SignatureFormatError("Signature components must not be empty")
    content = _encode_integer(bytes(r)) + _encode_integer(bytes(s))
    return bytes([SEQUENCE_TAG]) + _encode_length(len(content)) + content


def der_to_raw(der: bytes, int_size: int = INTEGER_SIZE) -> tuple[bytes, bytes]:
    """Decode ASN.1 DER signature into fixed-size r and s values.

    Leading zero bytes of every INTEGER are stripped and the value is padded
    with zeros on the left to ``int_size`` bytes.

    :param der: DER encoded signature.
    :param int_size: Size of the r and s fields in bytes.
    :raises SignatureFormatError: Malformed ASN.1 structure.
    :raises LengthMismatchError: An integer does not fit into int_size bytes.
    :raises EmptyIntegerError: An integer has no content bytes.
    :return: Tuple of r and s, each int_size bytes long.
    """
    der = bytes(der)
    if not der or der[0] != SEQUENCE_TAG:
        raise SignatureFormatError("Signature is not an ASN.1 SEQUENCE")
    length, offset = _read_length(der, 1)
    end = offset + length
    if end != len(der):
        raise SignatureFormatError(
            f"Signature SEQUENCE length {length} does not match the data length {len(der)}"
        )
    r, offset = _read_integer(der, offset, end, int_size)
    s, offset = _read_integer(der, offset, end, int_size)
    if offset != end:
        raise SignatureFormatError("Unexpected data after the signature integers")
    return r, s


def raw_signature_to_der(signature: bytes, int_size: int = INTEGER_SIZE) -> bytes:
    """Convert the r||s wire signature into ASN.1 DER.

    :param signature: Raw signature, 2 * int_size bytes.
    :param int_size: Size of the r and s fields in bytes.
    :raises SignatureFormatError: Invalid length of the raw signature.
    :return: DER encoded signature.
    """
    if len(signature) != 2 * int_size:
        raise SignatureFormatError(
            f"Raw signature must be {2 * int_size} bytes long, got {len(signature)}"
        )
    return raw_to_der(signature[:int_size], signature[int_size:])


def der_to_raw_signature(der: bytes, int_size: int = INTEGER_SIZE) -> bytes:
    """Convert ASN.1 DER signature into the r||s wire signature.

    :param der: DER encoded signature.
    :param int_size: Size of the r and s fields in bytes.
    :return: Raw signature, 2 * int_size bytes.
    """
    r, s = der_to_raw(der, int_size)
    return r + s

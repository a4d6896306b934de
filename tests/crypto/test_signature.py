#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2026 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""softse ECDSA signature codec tests.

The codec converts between the ASN.1 DER signature produced by the primitives
and the raw r||s wire form; the results are cross-checked against the DSS
signature helpers of the cryptography library.
"""

import pytest
from cryptography.hazmat.primitives.asymmetric.utils import (
    decode_dss_signature,
    encode_dss_signature,
)

from softse.crypto.exceptions import EmptyIntegerError, LengthMismatchError, SignatureFormatError
from softse.crypto.rng import random_bytes
from softse.crypto.signature import (
    INTEGER_SIZE,
    RAW_SIGNATURE_SIZE,
    der_to_raw,
    der_to_raw_signature,
    raw_signature_to_der,
    raw_to_der,
)

ZERO = bytes(INTEGER_SIZE)
ONE = bytes(INTEGER_SIZE - 1) + b"\x01"
ALL_FF = b"\xff" * INTEGER_SIZE
HIGH_BIT = b"\x80" + bytes(INTEGER_SIZE - 1)
LOW_HIGH_BIT = bytes(INTEGER_SIZE - 1) + b"\x80"


@pytest.mark.parametrize(
    "r,s",
    [
        (ZERO, ZERO),
        (ZERO, ONE),
        (ONE, ZERO),
        (ALL_FF, ALL_FF),
        (ALL_FF, HIGH_BIT),
        (HIGH_BIT, LOW_HIGH_BIT),
        (b"\x00\x7f" + b"\xff" * (INTEGER_SIZE - 2), ONE),
        (random_bytes(INTEGER_SIZE), random_bytes(INTEGER_SIZE)),
    ],
)
def test_der_raw_round_trip(r: bytes, s: bytes) -> None:
    """Test that raw values survive the DER encoding unchanged.

    The encoding is also compared to the DSS signature encoder of the
    cryptography library.

    :param r: Raw r value.
    :param s: Raw s value.
    """
    der = raw_to_der(r, s)
    assert der == encode_dss_signature(int.from_bytes(r, "big"), int.from_bytes(s, "big"))
    assert der_to_raw(der) == (r, s)
    assert der_to_raw_signature(raw_signature_to_der(r + s)) == r + s


def test_raw_to_der_minimal_encoding() -> None:
    assert raw_to_der(ONE, LOW_HIGH_BIT) == bytes.fromhex("300702010102020080")
    assert raw_to_der(ZERO, ZERO) == bytes.fromhex("3006020100020100")


def test_raw_to_der_high_bit_padding() -> None:
    der = raw_to_der(ALL_FF, HIGH_BIT)
    # two INTEGERs of 33 bytes each, the leading zero keeps them positive
    assert der[:5] == bytes.fromhex("3046022100")
    assert len(der) == 72
    r, s = decode_dss_signature(der)
    assert r == int.from_bytes(ALL_FF, "big")
    assert s == int.from_bytes(HIGH_BIT, "big")


def test_der_to_raw_decodes_library_signature() -> None:
    r_value = int.from_bytes(random_bytes(INTEGER_SIZE), "big")
    s_value = 0x1234
    r, s = der_to_raw(encode_dss_signature(r_value, s_value))
    assert int.from_bytes(r, "big") == r_value
    assert s == bytes(INTEGER_SIZE - 2) + b"\x12\x34"


def test_long_form_length() -> None:
    int_size = 66
    r = b"\xff" * int_size
    s = b"\x01" * int_size
    der = raw_to_der(r, s)
    assert der[:3] == bytes.fromhex("308189")
    assert der_to_raw(der, int_size) == (r, s)
    assert raw_signature_to_der(r + s, int_size) == der


@pytest.mark.parametrize(
    "der",
    [
        b"",
        bytes.fromhex("3100"),
        bytes.fromhex("30"),
        bytes.fromhex("3007020101"),
        bytes.fromhex("300602010102010100"),
        bytes.fromhex("3003040101"),
        bytes.fromhex("3004020501010000"),
        bytes.fromhex("300402050101"),
        bytes.fromhex("3080020101020101"),
        bytes.fromhex("3083000006020101020101"),
        bytes.fromhex("30080201010201010500"),
        bytes.fromhex("3003020101"),
    ],
    ids=[
        "empty",
        "not_sequence",
        "missing_length",
        "truncated",
        "trailing_data_after_sequence",
        "wrong_integer_tag",
        "sequence_length_mismatch",
        "integer_exceeds_sequence",
        "indefinite_length",
        "three_octet_length",
        "extra_element",
        "missing_s",
    ],
)
def test_der_to_raw_malformed(der: bytes) -> None:
    with pytest.raises(SignatureFormatError):
        der_to_raw(der)


def test_der_to_raw_empty_integer() -> None:
    with pytest.raises(EmptyIntegerError):
        der_to_raw(bytes.fromhex("30050200020101"))


def test_der_to_raw_integer_too_long() -> None:
    der = raw_to_der(b"\x01" + ALL_FF, ONE)
    with pytest.raises(LengthMismatchError):
        der_to_raw(der)
    assert der_to_raw(der, INTEGER_SIZE + 1)[0] == b"\x01" + ALL_FF


@pytest.mark.parametrize("length", [0, RAW_SIGNATURE_SIZE - 1, RAW_SIGNATURE_SIZE + 1])
def test_raw_signature_invalid_length(length: int) -> None:
    with pytest.raises(SignatureFormatError):
        raw_signature_to_der(bytes(length))


def test_raw_to_der_empty_component() -> None:
    with pytest.raises(SignatureFormatError):
        raw_to_der(b"", ONE)

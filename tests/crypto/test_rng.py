#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2026 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""softse random number generation tests."""

import pytest

from softse.crypto.exceptions import RngSeedError
from softse.crypto.rng import RandomSource, rand_below, random_bytes, random_hex


def fixed_entropy(value: int = 0xA5):
    """Get entropy source returning a constant pattern."""
    return lambda length: bytes([value]) * length


def test_random_bytes() -> None:
    """Test random bytes generation functionality."""
    random = random_bytes(16)
    assert isinstance(random, bytes)
    assert len(random) == 16
    assert random != random_bytes(16)


def test_random_hex_and_below() -> None:
    assert len(random_hex(8)) == 16
    assert all(0 <= rand_below(10) < 10 for _ in range(20))


def test_random_source_lengths() -> None:
    with RandomSource() as rng:
        assert rng.is_seeded
        assert rng.next_bytes(0) == b""
        assert len(rng.next_bytes(1)) == 1
        assert len(rng.next_bytes(100)) == 100
        assert rng.next_bytes(32) != rng.next_bytes(32)


def test_random_source_deterministic_with_fixed_entropy() -> None:
    """Test that the generator output depends only on the seed material.

    Two instances seeded with the same entropy and personalization produce the
    same stream; a different personalization string changes it.
    """
    with RandomSource(b"gen_key", fixed_entropy()) as rng_1:
        stream_1 = [rng_1.next_bytes(32) for _ in range(3)]
    with RandomSource(b"gen_key", fixed_entropy()) as rng_2:
        stream_2 = [rng_2.next_bytes(32) for _ in range(3)]
    with RandomSource(b"ecdsa_sign", fixed_entropy()) as rng_3:
        stream_3 = [rng_3.next_bytes(32) for _ in range(3)]

    assert stream_1 == stream_2
    assert stream_1 != stream_3
    assert len(set(stream_1)) == 3


def test_random_source_not_seeded() -> None:
    rng = RandomSource()
    assert not rng.is_seeded
    with pytest.raises(RngSeedError):
        rng.next_bytes(16)


def test_random_source_closed_on_exit() -> None:
    with RandomSource() as rng:
        rng.next_bytes(16)
    assert not rng.is_seeded
    with pytest.raises(RngSeedError):
        rng.next_bytes(16)


def test_random_source_closed_on_error() -> None:
    rng = RandomSource()
    with pytest.raises(ZeroDivisionError):
        with rng:
            raise ZeroDivisionError()
    assert not rng.is_seeded


def test_random_source_failing_entropy() -> None:
    def broken_entropy(length: int) -> bytes:
        raise OSError("no entropy")

    with pytest.raises(RngSeedError, match="Entropy source failed"):
        with RandomSource(entropy_source=broken_entropy):
            pass


def test_random_source_short_entropy() -> None:
    with pytest.raises(RngSeedError, match="insufficient"):
        RandomSource(entropy_source=lambda length: b"\x00" * (length - 1)).seed()


def test_random_source_long_personalization() -> None:
    with pytest.raises(RngSeedError, match="Personalization"):
        RandomSource(b"x" * (RandomSource.SEED_SIZE + 1)).seed()


@pytest.mark.parametrize("length", [-1, RandomSource.MAX_REQUEST_SIZE + 1])
def test_random_source_invalid_request(length: int) -> None:
    with RandomSource() as rng:
        with pytest.raises(ValueError):
            rng.next_bytes(length)

#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2026 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""softse cryptographic type definitions."""

from enum import Enum

from cryptography.hazmat.primitives.serialization import Encoding

from softse.exceptions import SoftSEValueError


class KeyEncoding(str, Enum):
    """Encodings of a public key handled by softse.

    RAW is the 64-byte X||Y wire form of the bridge command set, DER and PEM
    carry a standard SubjectPublicKeyInfo container.
    """

    RAW = "RAW"
    DER = "DER"
    PEM = "PEM"

    @staticmethod
    def get_cryptography_encodings(encoding: "KeyEncoding") -> Encoding:
        """Get cryptography library encoding from softse encoding.

        :param encoding: softse encoding type to convert.
        :raises SoftSEValueError: If the encoding format is not supported by cryptography.
        :return: Corresponding cryptography library encoding.
        """
        cryptography_encoding = {
            KeyEncoding.PEM: Encoding.PEM,
            KeyEncoding.DER: Encoding.DER,
        }.get(encoding)
        if cryptography_encoding is None:
            raise SoftSEValueError(f"{encoding.value} format is not supported by cryptography.")
        return cryptography_encoding

    @staticmethod
    def labels() -> list[str]:
        """Get names of all supported encodings.

        :return: List of encoding names.
        """
        return [encoding.value for encoding in KeyEncoding]

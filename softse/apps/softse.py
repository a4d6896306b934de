#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2026 NXP
#
# SPDX-License-Identifier: BSD-3-Clause
"""softse tool for working with the software secure element."""

import logging
import sys
from typing import Optional

import click

from softse.apps.utils import softse_logger
from softse.apps.utils.common_cli_options import (
    softse_apps_common_options,
    softse_keystore_option,
    softse_output_option,
)
from softse.apps.utils.utils import (
    SoftSEAppError,
    catch_softse_error,
    format_raw_data,
    load_hex_or_binary,
)
from softse.crypto.crypto_types import KeyEncoding
from softse.crypto.exceptions import VerificationFailed
from softse.crypto.hash import DIGEST_SIZE
from softse.crypto.keys import RAW_PUBLIC_KEY_SIZE, decode_public_key_der
from softse.keystore import FileKeyStore
from softse.secure_element import SecureElement
from softse.utils.misc import load_binary, write_file

logger = logging.getLogger(__name__)

key_id_option = click.option(
    "-i", "--key-id", required=True, type=str, help="Identifier of the key in the key store."
)
hexdump_option = click.option(
    "-x", "--hexdump", "use_hexdump", is_flag=True, default=False, help="Print data as hexdump."
)


def _get_digest(se: SecureElement, data: Optional[str], digest: Optional[str]) -> bytes:
    if bool(data) == bool(digest):
        raise SoftSEAppError("Exactly one of --data or --digest must be specified.")
    if data:
        return se.hash(load_binary(data))
    assert digest
    digest_bytes = load_hex_or_binary(digest)
    if len(digest_bytes) != DIGEST_SIZE:
        raise SoftSEAppError(f"Digest must be {DIGEST_SIZE} bytes long, got {len(digest_bytes)}")
    return digest_bytes


def _show(data: bytes, use_hexdump: bool, output: Optional[str]) -> None:
    click.echo(format_raw_data(data, use_hexdump=use_hexdump))
    if output:
        write_file(data, output, mode="wb")
        click.echo(f"Result has been stored in: {output}")


data_option = click.option(
    "-d",
    "--data",
    type=click.Path(exists=True, dir_okay=False),
    help="Path to the data to be hashed.",
)
digest_option = click.option(
    "-g",
    "--digest",
    type=str,
    metavar="HEX|FILE",
    help="Pre-computed SHA-256 digest, a hex string or a path to a binary file.",
)


@click.group(name="softse", no_args_is_help=True)
@softse_apps_common_options
@softse_keystore_option
@click.pass_context
def main(ctx: click.Context, log_level: int, keystore: str) -> None:
    """softse tool for working with the software secure element (P-256 keys, ECDSA, SHA-256)."""
    softse_logger.install(level=log_level)
    ctx.obj = SecureElement(keystore=FileKeyStore(keystore))


@main.command(name="generate-key", no_args_is_help=True)
@key_id_option
@hexdump_option
@softse_output_option(required=False, force=True, help="Store the raw public key X||Y.")
@click.pass_obj
def generate_key(se: SecureElement, key_id: str, use_hexdump: bool, output: str) -> None:
    """Generate a new key pair and store the private key in the key store.

    The raw public key (X||Y) is printed.
    """
    public_key = se.generate_private_key(key_id)
    click.echo(f"Key '{key_id}' has been generated, public key:")
    _show(public_key, use_hexdump, output)


@main.command(name="export-public", no_args_is_help=True)
@key_id_option
@click.option(
    "-e",
    "--encoding",
    type=click.Choice(KeyEncoding.labels(), case_sensitive=False),
    default=KeyEncoding.RAW.value,
    show_default=True,
    help="Encoding of the exported public key.",
)
@hexdump_option
@softse_output_option(required=False, force=True)
@click.pass_obj
def export_public(
    se: SecureElement, key_id: str, encoding: str, use_hexdump: bool, output: str
) -> None:
    """Export the public key of a stored key pair."""
    raw = se.generate_public_key(key_id)
    key_encoding = KeyEncoding(encoding.upper())
    if key_encoding == KeyEncoding.RAW:
        _show(raw, use_hexdump, output)
        return
    public_key = decode_public_key_der(se.import_public_key_as_der(raw))
    data = public_key.export(key_encoding)
    if key_encoding == KeyEncoding.PEM:
        click.echo(data.decode("utf-8"))
        if output:
            write_file(data, output, mode="wb")
            click.echo(f"Result has been stored in: {output}")
        return
    _show(data, use_hexdump, output)


@main.command(name="import-public", no_args_is_help=True)
@click.option(
    "-p",
    "--public-key",
    required=True,
    type=str,
    metavar="HEX|FILE",
    help="Raw public key X||Y, a hex string or a path to a binary file.",
)
@hexdump_option
@softse_output_option(required=False, force=True, help="Store the public key DER blob.")
@click.pass_obj
def import_public(se: SecureElement, public_key: str, use_hexdump: bool, output: str) -> None:
    """Convert raw public key X||Y into SubjectPublicKeyInfo DER."""
    blob = se.import_public_key_as_der(load_hex_or_binary(public_key))
    _show(blob, use_hexdump, output)


@main.command(name="sign", no_args_is_help=True)
@key_id_option
@data_option
@digest_option
@hexdump_option
@softse_output_option(required=False, force=True, help="Store the raw signature r||s.")
@click.pass_obj
def sign(
    se: SecureElement,
    key_id: str,
    data: Optional[str],
    digest: Optional[str],
    use_hexdump: bool,
    output: str,
) -> None:
    """Sign data (or its digest) with a stored private key.

    The raw signature r||s is printed.
    """
    signature = se.sign_with_key(key_id, _get_digest(se, data, digest))
    _show(signature, use_hexdump, output)


@main.command(name="verify", no_args_is_help=True)
@click.option("-i", "--key-id", type=str, help="Identifier of the key in the key store.")
@click.option(
    "-p",
    "--public-key",
    type=click.Path(exists=True, dir_okay=False),
    help="Public key file, SubjectPublicKeyInfo DER or raw X||Y.",
)
@data_option
@digest_option
@click.option(
    "-s",
    "--signature",
    required=True,
    type=str,
    metavar="HEX|FILE",
    help="Raw signature r||s, a hex string or a path to a binary file.",
)
@click.pass_obj
def verify(
    se: SecureElement,
    key_id: Optional[str],
    public_key: Optional[str],
    data: Optional[str],
    digest: Optional[str],
    signature: str,
) -> None:
    """Verify the raw signature of data (or its digest)."""
    if bool(key_id) == bool(public_key):
        raise SoftSEAppError("Exactly one of --key-id or --public-key must be specified.")
    digest_bytes = _get_digest(se, data, digest)
    signature_bytes = load_hex_or_binary(signature)
    if key_id:
        result = se.verify_with_key(key_id, digest_bytes, signature_bytes)
    else:
        assert public_key
        blob = load_binary(public_key)
        if len(blob) == RAW_PUBLIC_KEY_SIZE:
            blob = se.import_public_key_as_der(blob)
        result = se.verify(blob, digest_bytes, signature_bytes)
    if not result:
        raise VerificationFailed("Signature verification FAILED!")
    click.echo("Signature verification passed.")


@main.command(name="hash", no_args_is_help=True)
@click.option(
    "-d",
    "--data",
    required=True,
    type=click.Path(exists=True, dir_okay=False),
    help="Path to the data to be hashed.",
)
@hexdump_option
@softse_output_option(required=False, force=True, help="Store the digest.")
@click.pass_obj
def hash_command(se: SecureElement, data: str, use_hexdump: bool, output: str) -> None:
    """Compute SHA-256 digest of data."""
    _show(se.hash(load_binary(data)), use_hexdump, output)


@catch_softse_error
def safe_main() -> None:
    """Call the main function."""
    sys.exit(main())  # pylint: disable=no-value-for-parameter


if __name__ == "__main__":
    safe_main()

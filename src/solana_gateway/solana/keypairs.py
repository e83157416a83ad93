"""Keypair generation and signing-key text encodings.

A signing key travels as the 64-byte keypair blob (32-byte seed followed by
the 32-byte public key), encoded either as base64 or base58.
"""

from __future__ import annotations

import base64
import binascii
from enum import StrEnum

import base58
from solders.keypair import Keypair

from solana_gateway.errors import InvalidKeyEncodingError

KEYPAIR_LENGTH = 64
SEED_LENGTH = 32


class KeyEncoding(StrEnum):
    BASE64 = "base64"
    BASE58 = "base58"


def generate_keypair() -> Keypair:
    return Keypair()


def encode_signing_key(keypair: Keypair, encoding: KeyEncoding = KeyEncoding.BASE64) -> str:
    raw = bytes(keypair)
    if encoding == KeyEncoding.BASE58:
        return base58.b58encode(raw).decode("ascii")
    return base64.b64encode(raw).decode("ascii")


def _decode_text(text: str, encoding: KeyEncoding) -> bytes:
    if encoding == KeyEncoding.BASE58:
        return base58.b58decode(text)
    return base64.b64decode(text, validate=True)


def decode_signing_key(
    text: str,
    encoding: KeyEncoding = KeyEncoding.BASE64,
    *,
    field_name: str = "private_key",
) -> Keypair:
    candidate = text.strip()
    if not candidate:
        raise InvalidKeyEncodingError(f"{field_name} is required", field=field_name)

    try:
        raw = _decode_text(candidate, encoding)
    except (binascii.Error, ValueError) as exc:
        raise InvalidKeyEncodingError(
            f"{field_name} must be {encoding.value} encoded", field=field_name
        ) from exc

    if len(raw) != KEYPAIR_LENGTH:
        raise InvalidKeyEncodingError(
            f"{field_name} must decode to {KEYPAIR_LENGTH} bytes, got {len(raw)}",
            field=field_name,
        )

    keypair = Keypair.from_seed(raw[:SEED_LENGTH])
    # the trailing half must be the public key derived from the seed
    if bytes(keypair.pubkey()) != raw[SEED_LENGTH:]:
        raise InvalidKeyEncodingError(
            f"{field_name} public half does not match its secret seed", field=field_name
        )
    return keypair

from __future__ import annotations

import base64
import binascii

from solders.keypair import Keypair
from solders.pubkey import Pubkey
from solders.signature import Signature

from solana_gateway.errors import InvalidSignatureError

SIGNATURE_LENGTH = 64


def sign_message(keypair: Keypair, message: str) -> str:
    signature = keypair.sign_message(message.encode("utf-8"))
    return base64.b64encode(bytes(signature)).decode("ascii")


def verify_message(pubkey: Pubkey, message: str, signature_b64: str) -> bool:
    try:
        raw = base64.b64decode(signature_b64.strip(), validate=True)
    except (binascii.Error, ValueError) as exc:
        raise InvalidSignatureError("signature must be base64 encoded", field="signature") from exc

    if len(raw) != SIGNATURE_LENGTH:
        raise InvalidSignatureError(
            f"signature must decode to {SIGNATURE_LENGTH} bytes", field="signature"
        )

    return Signature.from_bytes(raw).verify(pubkey, message.encode("utf-8"))

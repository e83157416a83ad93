from __future__ import annotations

import base64

import pytest
from solders.keypair import Keypair

from solana_gateway.errors import InvalidSignatureError
from solana_gateway.solana.messages import sign_message, verify_message


def test_signed_message_verifies_against_signer() -> None:
    keypair = Keypair()

    signature = sign_message(keypair, "hello solana")

    assert verify_message(keypair.pubkey(), "hello solana", signature)
    assert not verify_message(keypair.pubkey(), "hello solana!", signature)
    assert not verify_message(Keypair().pubkey(), "hello solana", signature)


def test_verify_rejects_non_base64_signature() -> None:
    with pytest.raises(InvalidSignatureError):
        verify_message(Keypair().pubkey(), "msg", "%%%")


def test_verify_rejects_short_signature() -> None:
    short = base64.b64encode(b"\x00" * 10).decode()

    with pytest.raises(InvalidSignatureError) as exc_info:
        verify_message(Keypair().pubkey(), "msg", short)

    assert exc_info.value.field == "signature"

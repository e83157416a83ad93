from __future__ import annotations

import pytest
from solders.hash import Hash
from solders.keypair import Keypair
from solders.system_program import ID as SYSTEM_PROGRAM_ID
from solders.transaction import Transaction

from solana_gateway.domain.models import BlockReference
from solana_gateway.errors import InvalidAmountError
from solana_gateway.solana.instruction_codecs.transfer import (
    build_transfer,
    describe_transfer_instruction,
)

TRANSFER_INDEX = (2).to_bytes(4, "little")


def _reference() -> BlockReference:
    return BlockReference(blockhash=Hash.new_unique(), last_valid_block_height=500)


def test_build_transfer_signs_a_single_system_transfer() -> None:
    sender = Keypair()
    recipient = Keypair().pubkey()
    reference = _reference()

    signed = build_transfer(sender, recipient, 500_000_000, reference)
    transaction = Transaction.from_bytes(signed.payload)
    message = transaction.message

    assert str(transaction.signatures[0]) == signed.signature
    assert message.recent_blockhash == reference.blockhash
    assert message.account_keys[0] == sender.pubkey()
    assert len(message.instructions) == 1

    instruction = message.instructions[0]
    assert message.account_keys[instruction.program_id_index] == SYSTEM_PROGRAM_ID
    assert bytes(instruction.data) == TRANSFER_INDEX + (500_000_000).to_bytes(8, "little")
    assert transaction.signatures[0].verify(sender.pubkey(), bytes(message))


def test_build_transfer_is_deterministic_for_fixed_inputs() -> None:
    sender = Keypair()
    recipient = Keypair().pubkey()
    reference = _reference()

    first = build_transfer(sender, recipient, 10, reference)
    second = build_transfer(sender, recipient, 10, reference)

    assert first == second


@pytest.mark.parametrize("lamports", [0, -5, 2**64])
def test_build_transfer_rejects_unrepresentable_amounts(lamports: int) -> None:
    with pytest.raises(InvalidAmountError):
        build_transfer(Keypair(), Keypair().pubkey(), lamports, _reference())


def test_describe_transfer_instruction_lists_signer_then_recipient() -> None:
    sender = Keypair().pubkey()
    recipient = Keypair().pubkey()

    preview = describe_transfer_instruction(sender, recipient, 1_000)

    assert preview.program_id == str(SYSTEM_PROGRAM_ID)
    assert preview.accounts == (str(sender), str(recipient))
    assert preview.as_dict()["instruction_data"] == "AgAAAOgDAAAAAAAA"

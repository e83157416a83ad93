from __future__ import annotations

import base64
from dataclasses import dataclass
from typing import Any

from solders.instruction import Instruction
from solders.keypair import Keypair
from solders.pubkey import Pubkey
from solders.system_program import TransferParams, transfer
from solders.transaction import Transaction

from solana_gateway.domain.amounts import MAX_LAMPORTS
from solana_gateway.domain.models import BlockReference
from solana_gateway.errors import InvalidAmountError


@dataclass(slots=True, frozen=True)
class SignedTransfer:
    signature: str
    payload: bytes


@dataclass(slots=True, frozen=True)
class InstructionPreview:
    program_id: str
    accounts: tuple[str, ...]
    instruction_data: str

    def as_dict(self) -> dict[str, Any]:
        return {
            "program_id": self.program_id,
            "accounts": list(self.accounts),
            "instruction_data": self.instruction_data,
        }


def _ensure_lamports(lamports: int) -> None:
    if isinstance(lamports, bool) or not isinstance(lamports, int):
        raise InvalidAmountError("lamports must be an integer", field="lamports")
    if lamports <= 0:
        raise InvalidAmountError("lamports must be greater than 0", field="lamports")
    if lamports > MAX_LAMPORTS:
        raise InvalidAmountError("lamports exceeds the u64 range", field="lamports")


def transfer_instruction(sender: Pubkey, recipient: Pubkey, lamports: int) -> Instruction:
    _ensure_lamports(lamports)
    return transfer(TransferParams(from_pubkey=sender, to_pubkey=recipient, lamports=lamports))


def build_transfer(
    sender: Keypair,
    recipient: Pubkey,
    lamports: int,
    reference: BlockReference,
) -> SignedTransfer:
    """Assemble and sign a single system-program transfer.

    The sender pays the fee. The transaction is only valid while
    ``reference.blockhash`` is recent, which bounds replay.
    """
    instruction = transfer_instruction(sender.pubkey(), recipient, lamports)
    transaction = Transaction.new_signed_with_payer(
        [instruction],
        sender.pubkey(),
        [sender],
        reference.blockhash,
    )
    return SignedTransfer(
        signature=str(transaction.signatures[0]),
        payload=bytes(transaction),
    )


def describe_transfer_instruction(
    sender: Pubkey,
    recipient: Pubkey,
    lamports: int,
) -> InstructionPreview:
    instruction = transfer_instruction(sender, recipient, lamports)
    return InstructionPreview(
        program_id=str(instruction.program_id),
        accounts=tuple(str(meta.pubkey) for meta in instruction.accounts),
        instruction_data=base64.b64encode(bytes(instruction.data)).decode("ascii"),
    )

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import StrEnum
from typing import Any

from solders.hash import Hash


@dataclass(slots=True, frozen=True)
class CreatedAccount:
    public_key: str
    private_key: str | None
    message: str

    def as_dict(self) -> dict[str, Any]:
        return {
            "public_key": self.public_key,
            "private_key": self.private_key,
            "message": self.message,
        }


@dataclass(slots=True, frozen=True)
class ExportedKeypair:
    pubkey: str
    secret: str

    def as_dict(self) -> dict[str, Any]:
        return {"pubkey": self.pubkey, "secret": self.secret}


@dataclass(slots=True, frozen=True)
class AccountSnapshot:
    public_key: str
    balance_lamports: int
    executable: bool
    owner: str
    rent_epoch: int


@dataclass(slots=True, frozen=True)
class AccountInfo:
    snapshot: AccountSnapshot
    balance_sol: Decimal

    def as_dict(self) -> dict[str, Any]:
        return {
            "public_key": self.snapshot.public_key,
            "balance_sol": float(self.balance_sol),
            "balance_lamports": self.snapshot.balance_lamports,
            "executable": self.snapshot.executable,
            "owner": self.snapshot.owner,
            "rent_epoch": self.snapshot.rent_epoch,
        }


@dataclass(slots=True, frozen=True)
class BlockReference:
    blockhash: Hash
    last_valid_block_height: int


class ConfirmationStatus(StrEnum):
    CONFIRMED = "confirmed"
    FAILED = "failed"
    TIMED_OUT = "timed_out"


@dataclass(slots=True, frozen=True)
class ConfirmationResult:
    signature: str
    status: ConfirmationStatus
    error: str | None = None

    @property
    def confirmed(self) -> bool:
        return self.status == ConfirmationStatus.CONFIRMED


@dataclass(slots=True, frozen=True)
class AirdropOutcome:
    transaction_signature: str
    public_key: str
    amount_sol: Decimal
    amount_lamports: int
    message: str

    def as_dict(self) -> dict[str, Any]:
        return {
            "transaction_signature": self.transaction_signature,
            "public_key": self.public_key,
            "amount_sol": float(self.amount_sol),
            "amount_lamports": self.amount_lamports,
            "message": self.message,
        }


@dataclass(slots=True, frozen=True)
class TransferOutcome:
    transaction_signature: str
    from_public_key: str
    to_public_key: str
    amount_sol: Decimal
    amount_lamports: int
    message: str

    def as_dict(self) -> dict[str, Any]:
        return {
            "transaction_signature": self.transaction_signature,
            "from_public_key": self.from_public_key,
            "to_public_key": self.to_public_key,
            "amount_sol": float(self.amount_sol),
            "amount_lamports": self.amount_lamports,
            "message": self.message,
        }


@dataclass(slots=True, frozen=True)
class SignedMessage:
    signature: str
    public_key: str
    message: str

    def as_dict(self) -> dict[str, Any]:
        return {"signature": self.signature, "public_key": self.public_key, "message": self.message}


@dataclass(slots=True, frozen=True)
class MessageVerification:
    valid: bool
    message: str
    pubkey: str

    def as_dict(self) -> dict[str, Any]:
        return {"valid": self.valid, "message": self.message, "pubkey": self.pubkey}

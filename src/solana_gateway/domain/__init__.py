"""Value types and unit conversion for gateway operations."""

from solana_gateway.domain.amounts import LAMPORTS_PER_SOL, parse_sol, to_lamports, to_sol
from solana_gateway.domain.models import (
    AccountInfo,
    AccountSnapshot,
    AirdropOutcome,
    BlockReference,
    ConfirmationResult,
    ConfirmationStatus,
    CreatedAccount,
    TransferOutcome,
)

__all__ = [
    "LAMPORTS_PER_SOL",
    "AccountInfo",
    "AccountSnapshot",
    "AirdropOutcome",
    "BlockReference",
    "ConfirmationResult",
    "ConfirmationStatus",
    "CreatedAccount",
    "TransferOutcome",
    "parse_sol",
    "to_lamports",
    "to_sol",
]

"""Account, airdrop and transfer operations over a ledger client.

Each operation is a straight-line pipeline. All local validation runs before
the first call that can move lamports (an airdrop request or a transaction
submission), so a request that could be rejected locally never leaves a side
effect on the ledger. Failures are raised as ``GatewayError`` subclasses.
"""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from decimal import Decimal

from solders.signature import Signature

from solana_gateway.config import AppSettings
from solana_gateway.domain.amounts import SolAmount, parse_sol, to_lamports, to_sol
from solana_gateway.domain.models import (
    AccountInfo,
    AirdropOutcome,
    ConfirmationResult,
    ConfirmationStatus,
    CreatedAccount,
    ExportedKeypair,
    MessageVerification,
    SignedMessage,
    TransferOutcome,
)
from solana_gateway.errors import (
    AirdropNotConfirmedError,
    AmountExceedsLimitError,
    InsufficientFundsError,
    InvalidAmountError,
    InvalidPublicKeyError,
    TransactionNotConfirmedError,
    TransactionRejectedError,
)
from solana_gateway.observability.logging import get_logger
from solana_gateway.solana import messages
from solana_gateway.solana.instruction_codecs.transfer import (
    InstructionPreview,
    build_transfer,
    describe_transfer_instruction,
)
from solana_gateway.solana.keypairs import (
    KeyEncoding,
    decode_signing_key,
    encode_signing_key,
    generate_keypair,
)
from solana_gateway.solana.ledger_adapter import LedgerClient, SolanaLedgerAdapter
from solana_gateway.solana.pubkeys import parse_public_key
from solana_gateway.solana.rpc_client import RpcClientFactory

logger = get_logger("operations")

NEW_ACCOUNT_MESSAGE = (
    "Account created successfully. Note: This is a new keypair, "
    "it needs to be funded before use."
)


def _format_sol(amount: Decimal) -> str:
    return format(amount.normalize(), "f")


class GatewayService:
    def __init__(self, settings: AppSettings, ledger: LedgerClient) -> None:
        self._settings = settings
        self._ledger = ledger

    @property
    def settings(self) -> AppSettings:
        return self._settings

    def _to_lamports(self, amount_sol: SolAmount) -> int:
        return to_lamports(amount_sol, lamports_per_sol=self._settings.lamports_per_sol)

    def _to_sol(self, lamports: int) -> Decimal:
        return to_sol(lamports, lamports_per_sol=self._settings.lamports_per_sol)

    async def create_account(self, *, save_private_key: bool = False) -> CreatedAccount:
        keypair = generate_keypair()
        private_key = encode_signing_key(keypair) if save_private_key else None
        logger.info(
            "account_created",
            public_key=str(keypair.pubkey()),
            key_exported=save_private_key,
        )
        return CreatedAccount(
            public_key=str(keypair.pubkey()),
            private_key=private_key,
            message=NEW_ACCOUNT_MESSAGE,
        )

    async def get_account(self, public_key: str) -> AccountInfo:
        pubkey = parse_public_key(public_key, field_name="public_key")
        snapshot = await self._ledger.get_account_info(pubkey)
        return AccountInfo(
            snapshot=snapshot,
            balance_sol=self._to_sol(snapshot.balance_lamports),
        )

    async def airdrop(self, public_key: str, amount_sol: SolAmount) -> AirdropOutcome:
        pubkey = parse_public_key(public_key, field_name="public_key")
        amount = parse_sol(amount_sol)
        if amount <= 0:
            raise InvalidAmountError("amount_sol must be greater than 0", field="amount_sol")

        ceiling = self._settings.max_airdrop_sol
        if amount > ceiling:
            raise AmountExceedsLimitError(
                f"amount_sol must not exceed {ceiling} SOL", field="amount_sol"
            )

        lamports = self._to_lamports(amount)
        if lamports == 0:
            raise InvalidAmountError("amount_sol is smaller than one lamport", field="amount_sol")

        logger.info("airdrop_requested", public_key=str(pubkey), amount_lamports=lamports)
        signature = await self._ledger.request_airdrop(pubkey, lamports)
        confirmation = await self._await_confirmation(signature, operation="airdrop")

        if not confirmation.confirmed:
            raise AirdropNotConfirmedError(
                "airdrop was not confirmed; it may still land, re-check the balance",
                signature=confirmation.signature,
                reason=confirmation.error or confirmation.status.value,
            )

        return AirdropOutcome(
            transaction_signature=confirmation.signature,
            public_key=str(pubkey),
            amount_sol=amount,
            amount_lamports=lamports,
            message=f"Successfully airdropped {_format_sol(amount)} SOL to account",
        )

    async def transfer(
        self,
        from_private_key: str,
        to_public_key: str,
        amount_sol: SolAmount,
    ) -> TransferOutcome:
        sender = decode_signing_key(from_private_key, field_name="from_private_key")
        recipient = parse_public_key(to_public_key, field_name="to_public_key")
        amount = parse_sol(amount_sol)
        if amount <= 0:
            raise InvalidAmountError("amount_sol must be greater than 0", field="amount_sol")
        lamports = self._to_lamports(amount)
        if lamports == 0:
            raise InvalidAmountError("amount_sol is smaller than one lamport", field="amount_sol")

        if sender.pubkey() == recipient:
            logger.warning("self_transfer_requested", public_key=str(recipient))

        required = lamports + self._settings.transfer_fee_lamports
        balance = await self._ledger.get_balance(sender.pubkey())
        if balance < required:
            raise InsufficientFundsError(
                f"insufficient funds: balance {balance} lamports, "
                f"required {required} lamports including fee",
                field="from_private_key",
            )

        reference = await self._ledger.fetch_recent_blockhash()
        signed = build_transfer(sender, recipient, lamports, reference)

        logger.info(
            "transfer_submitting",
            from_public_key=str(sender.pubkey()),
            to_public_key=str(recipient),
            amount_lamports=lamports,
            signature=signed.signature,
        )
        signature = await self._ledger.submit_transaction(signed.payload)
        confirmation = await self._await_confirmation(signature, operation="transfer")

        if confirmation.status == ConfirmationStatus.FAILED:
            raise TransactionRejectedError(
                f"transaction failed on the ledger: {confirmation.error}",
                signature=confirmation.signature,
                reason=confirmation.error,
            )
        if not confirmation.confirmed:
            raise TransactionNotConfirmedError(
                "transfer was submitted but not confirmed; re-check balances before retrying",
                signature=confirmation.signature,
                reason=confirmation.status.value,
            )

        return TransferOutcome(
            transaction_signature=confirmation.signature,
            from_public_key=str(sender.pubkey()),
            to_public_key=str(recipient),
            amount_sol=amount,
            amount_lamports=lamports,
            message=f"Successfully transferred {_format_sol(amount)} SOL",
        )

    async def _await_confirmation(
        self, signature: Signature, *, operation: str
    ) -> ConfirmationResult:
        try:
            return await self._ledger.confirm_transaction(signature)
        except asyncio.CancelledError:
            logger.warning(
                "confirmation_abandoned",
                operation=operation,
                signature=str(signature),
                outcome="submitted_unconfirmed",
            )
            raise

    async def generate_keypair(self) -> ExportedKeypair:
        keypair = generate_keypair()
        return ExportedKeypair(
            pubkey=str(keypair.pubkey()),
            secret=encode_signing_key(keypair, KeyEncoding.BASE58),
        )

    async def sign_message(self, secret: str, message: str) -> SignedMessage:
        keypair = decode_signing_key(secret, KeyEncoding.BASE58, field_name="secret")
        return SignedMessage(
            signature=messages.sign_message(keypair, message),
            public_key=str(keypair.pubkey()),
            message=message,
        )

    async def verify_message(self, pubkey: str, message: str, signature: str) -> MessageVerification:
        public_key = parse_public_key(pubkey, field_name="pubkey")
        valid = messages.verify_message(public_key, message, signature)
        return MessageVerification(valid=valid, message=message, pubkey=str(public_key))

    async def preview_transfer(self, from_pubkey: str, to_pubkey: str, lamports: int) -> InstructionPreview:
        sender = parse_public_key(from_pubkey, field_name="from")
        recipient = parse_public_key(to_pubkey, field_name="to")
        if sender == recipient:
            raise InvalidPublicKeyError("from and to must be different accounts", field="to")
        return describe_transfer_instruction(sender, recipient, lamports)


@asynccontextmanager
async def open_gateway(settings: AppSettings) -> AsyncIterator[GatewayService]:
    adapter = SolanaLedgerAdapter.from_settings(RpcClientFactory(settings).create(), settings)
    try:
        yield GatewayService(settings, adapter)
    finally:
        await adapter.close()

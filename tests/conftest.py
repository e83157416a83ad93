from __future__ import annotations

from dataclasses import dataclass, field

import pytest
from solders.hash import Hash
from solders.pubkey import Pubkey
from solders.signature import Signature
from solders.transaction import Transaction

from solana_gateway.config import AppSettings
from solana_gateway.domain.models import (
    AccountSnapshot,
    BlockReference,
    ConfirmationResult,
    ConfirmationStatus,
)
from solana_gateway.errors import AccountNotFoundError
from solana_gateway.orchestration.operations import GatewayService

SYSTEM_OWNER = "11111111111111111111111111111111"
TRANSFER_FEE = 5_000


@dataclass
class FakeLedger:
    """In-memory ledger client that records every call it receives."""

    balances: dict[str, int] = field(default_factory=dict)
    confirmation: ConfirmationStatus = ConfirmationStatus.CONFIRMED
    confirmation_error: str | None = None
    airdrop_error: Exception | None = None
    submit_error: Exception | None = None
    read_error: Exception | None = None
    confirm_error: BaseException | None = None
    calls: list[str] = field(default_factory=list)
    submitted: list[Transaction] = field(default_factory=list)

    def fund(self, pubkey: Pubkey | str, lamports: int) -> None:
        self.balances[str(pubkey)] = self.balances.get(str(pubkey), 0) + lamports

    async def get_balance(self, pubkey: Pubkey) -> int:
        self.calls.append("get_balance")
        if self.read_error is not None:
            raise self.read_error
        return self.balances.get(str(pubkey), 0)

    async def get_account_info(self, pubkey: Pubkey) -> AccountSnapshot:
        self.calls.append("get_account_info")
        if self.read_error is not None:
            raise self.read_error
        if str(pubkey) not in self.balances:
            raise AccountNotFoundError(f"account {pubkey} not found", field="public_key")
        return AccountSnapshot(
            public_key=str(pubkey),
            balance_lamports=self.balances[str(pubkey)],
            executable=False,
            owner=SYSTEM_OWNER,
            rent_epoch=18446744073709551615,
        )

    async def request_airdrop(self, pubkey: Pubkey, lamports: int) -> Signature:
        self.calls.append("request_airdrop")
        if self.airdrop_error is not None:
            raise self.airdrop_error
        if self.confirmation == ConfirmationStatus.CONFIRMED:
            self.fund(pubkey, lamports)
        return Signature.new_unique()

    async def confirm_transaction(self, signature: Signature) -> ConfirmationResult:
        self.calls.append("confirm_transaction")
        if self.confirm_error is not None:
            raise self.confirm_error
        return ConfirmationResult(
            signature=str(signature),
            status=self.confirmation,
            error=self.confirmation_error,
        )

    async def fetch_recent_blockhash(self) -> BlockReference:
        self.calls.append("fetch_recent_blockhash")
        return BlockReference(blockhash=Hash.new_unique(), last_valid_block_height=1_000)

    def _settle(self, transaction: Transaction) -> None:
        message = transaction.message
        instruction = message.instructions[0]
        lamports = int.from_bytes(bytes(instruction.data)[4:12], "little")
        sender, recipient = (str(message.account_keys[index]) for index in instruction.accounts)
        self.balances[sender] -= lamports + TRANSFER_FEE
        self.fund(recipient, lamports)

    async def submit_transaction(self, payload: bytes) -> Signature:
        self.calls.append("submit_transaction")
        if self.submit_error is not None:
            raise self.submit_error
        transaction = Transaction.from_bytes(payload)
        self.submitted.append(transaction)
        if self.confirmation == ConfirmationStatus.CONFIRMED:
            self._settle(transaction)
        return transaction.signatures[0]


@pytest.fixture
def settings() -> AppSettings:
    return AppSettings(app_env="test", confirm_timeout_seconds=1.0)


@pytest.fixture
def fake_ledger() -> FakeLedger:
    return FakeLedger()


@pytest.fixture
def service(settings: AppSettings, fake_ledger: FakeLedger) -> GatewayService:
    return GatewayService(settings, fake_ledger)

"""Boundary to the Solana JSON-RPC node.

The adapter never retries. Transport failures surface as
``RpcUnavailableError`` and node-side rejections keep the node's reason.
``confirm_transaction`` is the only call that waits on ledger finality and it
always returns a terminal ``ConfirmationResult`` within its deadline.
"""

from __future__ import annotations

import asyncio
import time
from collections.abc import Awaitable, Callable
from typing import Protocol

import httpx
from solana.exceptions import SolanaRpcException
from solana.rpc.async_api import AsyncClient
from solana.rpc.commitment import Commitment
from solana.rpc.core import RPCException
from solana.rpc.types import TxOpts
from solders.pubkey import Pubkey
from solders.signature import Signature
from solders.transaction_status import TransactionConfirmationStatus

from solana_gateway.config import AppSettings
from solana_gateway.domain.models import (
    AccountSnapshot,
    BlockReference,
    ConfirmationResult,
    ConfirmationStatus,
)
from solana_gateway.errors import (
    AccountNotFoundError,
    AirdropLimitExceededError,
    AirdropRejectedError,
    RpcUnavailableError,
    TransactionRejectedError,
)
from solana_gateway.observability.logging import get_logger

logger = get_logger("ledger_adapter")

Clock = Callable[[], float]
Sleeper = Callable[[float], Awaitable[None]]

ACCEPTED_STATUSES: dict[str, tuple[TransactionConfirmationStatus, ...]] = {
    # status enum members do not hash, so membership is checked by equality
    "processed": (
        TransactionConfirmationStatus.Processed,
        TransactionConfirmationStatus.Confirmed,
        TransactionConfirmationStatus.Finalized,
    ),
    "confirmed": (
        TransactionConfirmationStatus.Confirmed,
        TransactionConfirmationStatus.Finalized,
    ),
    "finalized": (TransactionConfirmationStatus.Finalized,),
}


class LedgerClient(Protocol):
    async def get_balance(self, pubkey: Pubkey) -> int:
        ...

    async def get_account_info(self, pubkey: Pubkey) -> AccountSnapshot:
        ...

    async def request_airdrop(self, pubkey: Pubkey, lamports: int) -> Signature:
        ...

    async def confirm_transaction(self, signature: Signature) -> ConfirmationResult:
        ...

    async def fetch_recent_blockhash(self) -> BlockReference:
        ...

    async def submit_transaction(self, payload: bytes) -> Signature:
        ...


def _rpc_reason(exc: RPCException) -> str:
    detail = exc.args[0] if exc.args else exc
    message = getattr(detail, "message", None)
    return str(message) if message else str(detail)


def _unavailable(operation: str, exc: Exception) -> RpcUnavailableError:
    logger.error("rpc_unavailable", operation=operation, error=str(exc))
    return RpcUnavailableError(f"{operation} failed: ledger RPC unavailable", reason=str(exc))


def _is_rate_limited(exc: SolanaRpcException) -> bool:
    cause = exc.__cause__
    return isinstance(cause, httpx.HTTPStatusError) and cause.response.status_code == 429


class SolanaLedgerAdapter:
    def __init__(
        self,
        client: AsyncClient,
        *,
        commitment: str = "confirmed",
        confirm_timeout_seconds: float = 30.0,
        poll_interval_seconds: float = 0.5,
        clock: Clock = time.monotonic,
        sleep: Sleeper = asyncio.sleep,
    ) -> None:
        if commitment not in ACCEPTED_STATUSES:
            raise ValueError(f"unsupported commitment: {commitment}")
        self._client = client
        self._commitment = Commitment(commitment)
        self._accepted = ACCEPTED_STATUSES[commitment]
        self._confirm_timeout_seconds = confirm_timeout_seconds
        self._poll_interval_seconds = poll_interval_seconds
        self._clock = clock
        self._sleep = sleep

    @classmethod
    def from_settings(cls, client: AsyncClient, settings: AppSettings) -> SolanaLedgerAdapter:
        return cls(
            client,
            commitment=settings.solana_commitment,
            confirm_timeout_seconds=settings.confirm_timeout_seconds,
            poll_interval_seconds=settings.confirm_poll_interval_seconds,
        )

    async def close(self) -> None:
        await self._client.close()

    async def get_balance(self, pubkey: Pubkey) -> int:
        try:
            resp = await self._client.get_balance(pubkey)
        except (SolanaRpcException, RPCException) as exc:
            raise _unavailable("get_balance", exc) from exc
        return int(resp.value)

    async def get_account_info(self, pubkey: Pubkey) -> AccountSnapshot:
        try:
            resp = await self._client.get_account_info(pubkey)
        except (SolanaRpcException, RPCException) as exc:
            raise _unavailable("get_account_info", exc) from exc

        account = resp.value
        if account is None:
            raise AccountNotFoundError(f"account {pubkey} not found", field="public_key")

        return AccountSnapshot(
            public_key=str(pubkey),
            balance_lamports=int(account.lamports),
            executable=bool(account.executable),
            owner=str(account.owner),
            rent_epoch=int(account.rent_epoch),
        )

    async def request_airdrop(self, pubkey: Pubkey, lamports: int) -> Signature:
        try:
            resp = await self._client.request_airdrop(pubkey, lamports)
        except SolanaRpcException as exc:
            if _is_rate_limited(exc):
                raise AirdropLimitExceededError(
                    "airdrop rate limit reached", reason=str(exc)
                ) from exc
            raise _unavailable("request_airdrop", exc) from exc
        except RPCException as exc:
            reason = _rpc_reason(exc)
            if "limit" in reason.lower():
                raise AirdropLimitExceededError("airdrop limit exceeded", reason=reason) from exc
            raise AirdropRejectedError("airdrop rejected by the ledger", reason=reason) from exc
        return resp.value

    async def fetch_recent_blockhash(self) -> BlockReference:
        try:
            resp = await self._client.get_latest_blockhash()
        except (SolanaRpcException, RPCException) as exc:
            raise _unavailable("get_latest_blockhash", exc) from exc
        return BlockReference(
            blockhash=resp.value.blockhash,
            last_valid_block_height=int(resp.value.last_valid_block_height),
        )

    async def submit_transaction(self, payload: bytes) -> Signature:
        opts = TxOpts(skip_confirmation=True, preflight_commitment=self._commitment)
        try:
            resp = await self._client.send_raw_transaction(payload, opts=opts)
        except SolanaRpcException as exc:
            raise _unavailable("send_transaction", exc) from exc
        except RPCException as exc:
            reason = _rpc_reason(exc)
            logger.warning("transaction_rejected", reason=reason)
            raise TransactionRejectedError(
                f"transaction rejected: {reason}", reason=reason
            ) from exc
        return resp.value

    def _timed_out(self, signature: Signature, polls: int) -> ConfirmationResult:
        logger.warning(
            "confirmation_timed_out",
            signature=str(signature),
            timeout_seconds=self._confirm_timeout_seconds,
            polls=polls,
        )
        return ConfirmationResult(signature=str(signature), status=ConfirmationStatus.TIMED_OUT)

    async def confirm_transaction(self, signature: Signature) -> ConfirmationResult:
        deadline = self._clock() + self._confirm_timeout_seconds
        polls = 0
        while True:
            remaining = deadline - self._clock()
            if remaining <= 0:
                return self._timed_out(signature, polls)

            polls += 1
            try:
                # a single slow poll must not carry the wait past the deadline
                resp = await asyncio.wait_for(
                    self._client.get_signature_statuses([signature]), timeout=remaining
                )
            except TimeoutError:
                logger.warning("confirmation_poll_timed_out", signature=str(signature))
            except (SolanaRpcException, RPCException) as exc:
                logger.warning("confirmation_poll_error", signature=str(signature), error=str(exc))
            else:
                status = resp.value[0] if resp.value else None
                if status is not None:
                    if status.err is not None:
                        logger.warning(
                            "confirmation_failed", signature=str(signature), error=str(status.err)
                        )
                        return ConfirmationResult(
                            signature=str(signature),
                            status=ConfirmationStatus.FAILED,
                            error=str(status.err),
                        )
                    if status.confirmation_status in self._accepted:
                        logger.info("transaction_confirmed", signature=str(signature), polls=polls)
                        return ConfirmationResult(
                            signature=str(signature), status=ConfirmationStatus.CONFIRMED
                        )

            remaining = deadline - self._clock()
            if remaining <= 0:
                return self._timed_out(signature, polls)
            await self._sleep(min(self._poll_interval_seconds, remaining))

from __future__ import annotations

from solana.rpc.async_api import AsyncClient
from solana.rpc.commitment import Commitment

from solana_gateway.config import AppSettings


class RpcClientFactory:
    """Builds the one AsyncClient shared by every in-flight request."""

    def __init__(self, settings: AppSettings) -> None:
        self._settings = settings

    def create(self) -> AsyncClient:
        return AsyncClient(
            self._settings.solana_rpc_url,
            commitment=Commitment(self._settings.solana_commitment),
            timeout=self._settings.rpc_timeout_seconds,
        )

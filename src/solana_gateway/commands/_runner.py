from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from typing import Any, Protocol

from solana_gateway.config import AppSettings
from solana_gateway.errors import GatewayError
from solana_gateway.orchestration.operations import GatewayService, open_gateway
from solana_gateway.types import CommandResult, CommandStatus


class SupportsAsDict(Protocol):
    def as_dict(self) -> dict[str, Any]:
        ...


GatewayOperation = Callable[[GatewayService], Awaitable[SupportsAsDict]]


def run_gateway_operation(
    command: str,
    settings: AppSettings,
    operation: GatewayOperation,
) -> CommandResult:
    async def _run() -> SupportsAsDict:
        async with open_gateway(settings) as gateway:
            return await operation(gateway)

    try:
        result = asyncio.run(_run())
    except GatewayError as exc:
        return CommandResult.from_error(command, exc)

    return CommandResult(command=command, status=CommandStatus.EXECUTED, details=result.as_dict())

from __future__ import annotations

from argparse import Namespace

from solana_gateway.config import AppSettings
from solana_gateway.runtime.server import run_server
from solana_gateway.types import CommandResult, CommandStatus


def run_serve(args: Namespace, settings: AppSettings) -> CommandResult:
    overrides = {
        key: value
        for key, value in (("host", getattr(args, "host", None)), ("port", getattr(args, "port", None)))
        if value is not None
    }
    effective = settings.model_copy(update=overrides) if overrides else settings
    run_server(effective)
    return CommandResult(
        command="serve",
        status=CommandStatus.EXECUTED,
        details={"host": effective.host, "port": effective.port},
    )

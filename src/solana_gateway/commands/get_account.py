from __future__ import annotations

from argparse import Namespace

from solana_gateway.commands._runner import run_gateway_operation
from solana_gateway.config import AppSettings
from solana_gateway.types import CommandResult


def run_get_account(args: Namespace, settings: AppSettings) -> CommandResult:
    public_key = str(getattr(args, "public_key", ""))
    return run_gateway_operation(
        "get-account",
        settings,
        lambda gateway: gateway.get_account(public_key),
    )

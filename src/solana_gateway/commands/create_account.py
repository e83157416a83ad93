from __future__ import annotations

from argparse import Namespace

from solana_gateway.commands._runner import run_gateway_operation
from solana_gateway.config import AppSettings
from solana_gateway.types import CommandResult


def run_create_account(args: Namespace, settings: AppSettings) -> CommandResult:
    save_private_key = bool(getattr(args, "save_private_key", False))
    return run_gateway_operation(
        "create-account",
        settings,
        lambda gateway: gateway.create_account(save_private_key=save_private_key),
    )

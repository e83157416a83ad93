from __future__ import annotations

from argparse import Namespace

from solana_gateway.commands._runner import run_gateway_operation
from solana_gateway.config import AppSettings
from solana_gateway.types import CommandResult


def run_airdrop(args: Namespace, settings: AppSettings) -> CommandResult:
    public_key = str(getattr(args, "public_key", ""))
    amount_sol = str(getattr(args, "amount_sol", ""))
    return run_gateway_operation(
        "airdrop",
        settings,
        lambda gateway: gateway.airdrop(public_key, amount_sol),
    )

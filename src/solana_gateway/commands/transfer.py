from __future__ import annotations

import os
from argparse import Namespace

from solana_gateway.commands._runner import run_gateway_operation
from solana_gateway.config import AppSettings
from solana_gateway.types import CommandResult

PRIVATE_KEY_ENV = "SOLANA_GATEWAY_FROM_PRIVATE_KEY"


def _private_key_from(args: Namespace) -> str:
    raw_value = str(getattr(args, "from_private_key", "") or "").strip()
    if raw_value:
        return raw_value
    # keeps the key out of shell history and process listings
    return os.environ.get(PRIVATE_KEY_ENV, "").strip()


def run_transfer(args: Namespace, settings: AppSettings) -> CommandResult:
    private_key = _private_key_from(args)
    to_public_key = str(getattr(args, "to_public_key", ""))
    amount_sol = str(getattr(args, "amount_sol", ""))
    return run_gateway_operation(
        "transfer",
        settings,
        lambda gateway: gateway.transfer(private_key, to_public_key, amount_sol),
    )

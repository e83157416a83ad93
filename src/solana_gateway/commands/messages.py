from __future__ import annotations

from argparse import Namespace

from solana_gateway.commands._runner import run_gateway_operation
from solana_gateway.config import AppSettings
from solana_gateway.errors import InvalidRequestError
from solana_gateway.types import CommandResult, CommandStatus


def run_sign_message(args: Namespace, settings: AppSettings) -> CommandResult:
    message = str(getattr(args, "message", ""))
    if not message:
        return CommandResult.from_error(
            "sign-message", InvalidRequestError("message is required", field="message")
        )

    secret = str(getattr(args, "secret", ""))
    return run_gateway_operation(
        "sign-message",
        settings,
        lambda gateway: gateway.sign_message(secret, message),
    )


def run_verify_message(args: Namespace, settings: AppSettings) -> CommandResult:
    pubkey = str(getattr(args, "pubkey", ""))
    message = str(getattr(args, "message", ""))
    signature = str(getattr(args, "signature", ""))
    result = run_gateway_operation(
        "verify-message",
        settings,
        lambda gateway: gateway.verify_message(pubkey, message, signature),
    )
    if result.status == CommandStatus.EXECUTED and not result.details.get("valid", False):
        return CommandResult(command=result.command, status=CommandStatus.FAILED, details=result.details)
    return result

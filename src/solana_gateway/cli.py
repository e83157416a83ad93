from __future__ import annotations

import json
from argparse import ArgumentParser, Namespace
from collections.abc import Callable, Sequence

from solana_gateway.commands import (
    run_airdrop,
    run_create_account,
    run_get_account,
    run_serve,
    run_sign_message,
    run_transfer,
    run_verify_message,
)
from solana_gateway.config import AppSettings, get_settings
from solana_gateway.observability.logging import configure_logging
from solana_gateway.types import CommandResult

CommandHandler = Callable[[Namespace, AppSettings], CommandResult]

COMMAND_HANDLERS: dict[str, CommandHandler] = {
    "create-account": run_create_account,
    "get-account": run_get_account,
    "airdrop": run_airdrop,
    "transfer": run_transfer,
    "sign-message": run_sign_message,
    "verify-message": run_verify_message,
    "serve": run_serve,
}


def build_parser() -> ArgumentParser:
    parser = ArgumentParser(prog="solana-gateway", description="Solana account and transfer gateway")
    parser.add_argument("--json", action="store_true", help="emit machine-readable JSON output")

    subparsers = parser.add_subparsers(dest="command", required=True)

    create = subparsers.add_parser("create-account")
    create.add_argument("--save-private-key", action="store_true")

    account = subparsers.add_parser("get-account")
    account.add_argument("public_key")

    airdrop = subparsers.add_parser("airdrop")
    airdrop.add_argument("--public-key", required=True)
    airdrop.add_argument("--amount-sol", required=True)

    transfer = subparsers.add_parser("transfer")
    transfer.add_argument(
        "--from-private-key",
        default="",
        help="base64 keypair; falls back to SOLANA_GATEWAY_FROM_PRIVATE_KEY",
    )
    transfer.add_argument("--to-public-key", required=True)
    transfer.add_argument("--amount-sol", required=True)

    sign = subparsers.add_parser("sign-message")
    sign.add_argument("--secret", required=True, help="base58 keypair")
    sign.add_argument("--message", required=True)

    verify = subparsers.add_parser("verify-message")
    verify.add_argument("--pubkey", required=True)
    verify.add_argument("--message", required=True)
    verify.add_argument("--signature", required=True, help="base64 signature")

    serve = subparsers.add_parser("serve")
    serve.add_argument("--host", default=None)
    serve.add_argument("--port", type=int, default=None)

    return parser


def _emit_result(result: CommandResult, *, as_json: bool) -> None:
    if as_json:
        print(result.to_json())
        return

    print(f"{result.command}: {result.status.value}")
    if result.details:
        print(json.dumps(result.details, indent=2, sort_keys=True))


def entrypoint(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)
    settings = get_settings()
    configure_logging(settings.log_level, app_env=settings.app_env)

    handler = COMMAND_HANDLERS[str(args.command)]
    result = handler(args, settings)
    _emit_result(result, as_json=bool(args.json))
    return result.exit_code


if __name__ == "__main__":
    raise SystemExit(entrypoint())

"""Command handlers for the solana-gateway CLI."""

from solana_gateway.commands.airdrop import run_airdrop
from solana_gateway.commands.create_account import run_create_account
from solana_gateway.commands.get_account import run_get_account
from solana_gateway.commands.messages import run_sign_message, run_verify_message
from solana_gateway.commands.serve import run_serve
from solana_gateway.commands.transfer import run_transfer

__all__ = [
    "run_airdrop",
    "run_create_account",
    "run_get_account",
    "run_serve",
    "run_sign_message",
    "run_transfer",
    "run_verify_message",
]

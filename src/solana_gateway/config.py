from __future__ import annotations

from decimal import Decimal
from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    app_env: str = "local"
    log_level: str = "INFO"
    service_name: str = "solana-gateway"

    host: str = "0.0.0.0"
    port: int = 3000

    solana_rpc_url: str = "https://api.devnet.solana.com"
    solana_commitment: str = "confirmed"
    rpc_timeout_seconds: float = 10.0

    lamports_per_sol: int = 1_000_000_000
    max_airdrop_sol: Decimal = Decimal("5")
    transfer_fee_lamports: int = 5_000

    confirm_timeout_seconds: float = 30.0
    confirm_poll_interval_seconds: float = 0.5


@lru_cache(maxsize=1)
def get_settings() -> AppSettings:
    return AppSettings()

from decimal import Decimal

import pytest

from solana_gateway.config import AppSettings

def test_defaults_match_devnet_gateway(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("PORT", "SOLANA_RPC_URL", "SOLANA_COMMITMENT", "MAX_AIRDROP_SOL"):
        monkeypatch.delenv(name, raising=False)

    settings = AppSettings(_env_file=None)

    assert settings.port == 3000
    assert settings.solana_rpc_url == "https://api.devnet.solana.com"
    assert settings.solana_commitment == "confirmed"
    assert settings.lamports_per_sol == 1_000_000_000
    assert settings.max_airdrop_sol == Decimal("5")
    assert settings.transfer_fee_lamports == 5_000
    assert settings.confirm_timeout_seconds == 30.0

def test_environment_overrides_are_case_insensitive(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("MAX_AIRDROP_SOL", "2.5")
    monkeypatch.setenv("solana_rpc_url", "http://127.0.0.1:8899")

    settings = AppSettings(_env_file=None)

    assert settings.max_airdrop_sol == Decimal("2.5")
    assert settings.solana_rpc_url == "http://127.0.0.1:8899"

def test_settings_are_immutable() -> None:
    settings = AppSettings(_env_file=None)

    with pytest.raises(ValueError):
        settings.port = 8080  # type: ignore[misc]

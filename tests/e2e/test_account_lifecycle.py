from __future__ import annotations

import asyncio
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from solana_gateway.config import AppSettings
from solana_gateway.domain.models import ConfirmationStatus
from solana_gateway.errors import InsufficientFundsError
from solana_gateway.orchestration.operations import GatewayService
from solana_gateway.runtime.http_api import build_app

FEE = 5_000


def test_create_fund_and_transfer_over_http(settings: AppSettings, service: GatewayService) -> None:
    client = TestClient(build_app(settings, service))

    alice = client.post("/account/create", json={"save_private_key": True}).json()
    bob = client.post("/account/create").json()

    airdrop = client.post("/airdrop", json={"public_key": alice["public_key"], "amount_sol": 2.0})
    assert airdrop.status_code == 200
    assert airdrop.json()["amount_lamports"] == 2_000_000_000

    transfer = client.post(
        "/transfer",
        json={
            "from_private_key": alice["private_key"],
            "to_public_key": bob["public_key"],
            "amount_sol": 0.5,
        },
    )
    assert transfer.status_code == 200
    assert transfer.json()["amount_lamports"] == 500_000_000

    alice_info = client.get(f"/account/{alice['public_key']}").json()
    bob_info = client.get(f"/account/{bob['public_key']}").json()
    assert alice_info["balance_lamports"] == 1_500_000_000 - FEE
    assert bob_info["balance_lamports"] == 500_000_000
    assert bob_info["balance_sol"] == 0.5


def test_underfunded_transfer_leaves_balances_untouched(service: GatewayService, fake_ledger) -> None:
    alice = asyncio.run(service.create_account(save_private_key=True))
    bob = asyncio.run(service.create_account())
    fake_ledger.fund(alice.public_key, 500_000_000 + FEE - 1)

    with pytest.raises(InsufficientFundsError):
        asyncio.run(service.transfer(alice.private_key, bob.public_key, Decimal("0.5")))

    assert fake_ledger.balances == {alice.public_key: 500_000_000 + FEE - 1}


def test_unconfirmed_transfer_is_not_reported_as_success(
    service: GatewayService, fake_ledger
) -> None:
    alice = asyncio.run(service.create_account(save_private_key=True))
    bob = asyncio.run(service.create_account())
    fake_ledger.fund(alice.public_key, 2_000_000_000)
    fake_ledger.confirmation = ConfirmationStatus.TIMED_OUT

    client = TestClient(build_app(service.settings, service))
    response = client.post(
        "/transfer",
        json={
            "from_private_key": alice.private_key,
            "to_public_key": bob.public_key,
            "amount_sol": 1,
        },
    )

    assert response.status_code == 504
    assert response.json()["signature"]
    assert len(fake_ledger.submitted) == 1

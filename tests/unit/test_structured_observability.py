import io
import json
import sys

import pytest

from solana_gateway.observability.logging import configure_logging, get_logger


def _last_record(captured: str) -> dict[str, object]:
    lines = [line for line in captured.splitlines() if line.strip()]
    return json.loads(lines[-1])


def test_structured_logging_outputs_json_on_stderr(capsys: pytest.CaptureFixture[str]) -> None:
    configure_logging("DEBUG", app_env="production")
    logger = get_logger("test")

    logger.info("transfer_submitted", signature="5sig", amount_lamports=1_000)

    captured = capsys.readouterr()
    assert captured.out == ""
    record = _last_record(captured.err)
    assert record["event"] == "transfer_submitted"
    assert record["amount_lamports"] == 1_000
    assert record["level"] == "info"
    assert "timestamp" in record


def test_structured_logging_redacts_signing_keys(capsys: pytest.CaptureFixture[str]) -> None:
    configure_logging("DEBUG", app_env="production")
    logger = get_logger("test")

    logger.warning("transfer_rejected", from_private_key="c2VjcmV0", to_public_key="pub")

    record = _last_record(capsys.readouterr().err)
    assert record["from_private_key"] == "***REDACTED***"
    assert record["to_public_key"] == "pub"


def test_log_level_filters_lower_events(capsys: pytest.CaptureFixture[str]) -> None:
    configure_logging("WARNING", app_env="production")
    logger = get_logger("test")

    logger.info("airdrop_requested", public_key="pub")

    assert capsys.readouterr().err == ""


def test_logging_follows_a_replaced_stderr(monkeypatch: pytest.MonkeyPatch) -> None:
    configure_logging("DEBUG", app_env="production")
    first, second = io.StringIO(), io.StringIO()

    monkeypatch.setattr(sys, "stderr", first)
    get_logger("test").info("airdrop_requested", public_key="pub")
    first.close()
    monkeypatch.setattr(sys, "stderr", second)
    get_logger("test").info("airdrop_confirmed", public_key="pub")

    assert _last_record(second.getvalue())["event"] == "airdrop_confirmed"

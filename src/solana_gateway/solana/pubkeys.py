from __future__ import annotations

from solders.pubkey import Pubkey

from solana_gateway.errors import InvalidPublicKeyError


def parse_public_key(raw_value: str, *, field_name: str) -> Pubkey:
    candidate = raw_value.strip()
    if not candidate:
        raise InvalidPublicKeyError(f"{field_name} is required", field=field_name)

    try:
        return Pubkey.from_string(candidate)
    except ValueError as exc:
        raise InvalidPublicKeyError(
            f"{field_name} must be a valid Solana public key", field=field_name
        ) from exc

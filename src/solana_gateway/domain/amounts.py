"""SOL <-> lamport conversion.

Decimal SOL amounts are converted to integer lamports by rounding half up to
the nearest lamport, so a conversion never drops more than half a lamport.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation, Overflow, localcontext

from solana_gateway.errors import InvalidAmountError

LAMPORTS_PER_SOL = 1_000_000_000
MAX_LAMPORTS = 2**64 - 1

SolAmount = Decimal | int | float | str


def parse_sol(amount_sol: SolAmount, *, field_name: str = "amount_sol") -> Decimal:
    if isinstance(amount_sol, bool):
        raise InvalidAmountError(f"{field_name} must be a number", field=field_name)

    if isinstance(amount_sol, Decimal):
        value = amount_sol
    else:
        try:
            # str() keeps float literals such as 0.1 at their shortest repr
            value = Decimal(str(amount_sol).strip())
        except InvalidOperation as exc:
            raise InvalidAmountError(f"{field_name} must be a number", field=field_name) from exc

    if not value.is_finite():
        raise InvalidAmountError(f"{field_name} must be finite", field=field_name)
    if value < 0:
        raise InvalidAmountError(f"{field_name} must be non-negative", field=field_name)
    return value


def to_lamports(
    amount_sol: SolAmount,
    *,
    field_name: str = "amount_sol",
    lamports_per_sol: int = LAMPORTS_PER_SOL,
) -> int:
    value = parse_sol(amount_sol, field_name=field_name)
    with localcontext() as ctx:
        ctx.prec = 60
        try:
            scaled = value * lamports_per_sol
        except Overflow as exc:
            raise InvalidAmountError(f"{field_name} is too large", field=field_name) from exc
        if scaled > MAX_LAMPORTS:
            raise InvalidAmountError(f"{field_name} is too large", field=field_name)
        return int(scaled.quantize(Decimal(1), rounding=ROUND_HALF_UP))


def to_sol(lamports: int, *, lamports_per_sol: int = LAMPORTS_PER_SOL) -> Decimal:
    if lamports < 0:
        raise InvalidAmountError("lamports must be non-negative", field="lamports")
    return Decimal(lamports) / Decimal(lamports_per_sol)

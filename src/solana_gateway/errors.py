"""Typed failures raised by the gateway core.

Every failure carries a machine-distinguishable ``kind``. The kind maps to an
``ErrorCategory`` which the HTTP layer turns into a status code, so callers
never need to parse messages.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any


class ErrorKind(StrEnum):
    INVALID_KEY_ENCODING = "invalid_key_encoding"
    INVALID_PUBLIC_KEY = "invalid_public_key"
    INVALID_AMOUNT = "invalid_amount"
    AMOUNT_EXCEEDS_LIMIT = "amount_exceeds_limit"
    INVALID_SIGNATURE = "invalid_signature"
    INVALID_REQUEST = "invalid_request"
    ACCOUNT_NOT_FOUND = "account_not_found"
    INSUFFICIENT_FUNDS = "insufficient_funds"
    RPC_UNAVAILABLE = "rpc_unavailable"
    AIRDROP_LIMIT_EXCEEDED = "airdrop_limit_exceeded"
    AIRDROP_REJECTED = "airdrop_rejected"
    TRANSACTION_REJECTED = "transaction_rejected"
    AIRDROP_NOT_CONFIRMED = "airdrop_not_confirmed"
    TRANSACTION_NOT_CONFIRMED = "transaction_not_confirmed"
    INTERNAL = "internal"


class ErrorCategory(StrEnum):
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    REJECTED = "rejected"
    UPSTREAM = "upstream"
    UNCONFIRMED = "unconfirmed"
    INTERNAL = "internal"


CATEGORY_BY_KIND: dict[ErrorKind, ErrorCategory] = {
    ErrorKind.INVALID_KEY_ENCODING: ErrorCategory.VALIDATION,
    ErrorKind.INVALID_PUBLIC_KEY: ErrorCategory.VALIDATION,
    ErrorKind.INVALID_AMOUNT: ErrorCategory.VALIDATION,
    ErrorKind.AMOUNT_EXCEEDS_LIMIT: ErrorCategory.VALIDATION,
    ErrorKind.INVALID_SIGNATURE: ErrorCategory.VALIDATION,
    ErrorKind.INVALID_REQUEST: ErrorCategory.VALIDATION,
    ErrorKind.INSUFFICIENT_FUNDS: ErrorCategory.VALIDATION,
    ErrorKind.ACCOUNT_NOT_FOUND: ErrorCategory.NOT_FOUND,
    ErrorKind.AIRDROP_LIMIT_EXCEEDED: ErrorCategory.REJECTED,
    ErrorKind.AIRDROP_REJECTED: ErrorCategory.REJECTED,
    ErrorKind.TRANSACTION_REJECTED: ErrorCategory.REJECTED,
    ErrorKind.RPC_UNAVAILABLE: ErrorCategory.UPSTREAM,
    ErrorKind.AIRDROP_NOT_CONFIRMED: ErrorCategory.UNCONFIRMED,
    ErrorKind.TRANSACTION_NOT_CONFIRMED: ErrorCategory.UNCONFIRMED,
    ErrorKind.INTERNAL: ErrorCategory.INTERNAL,
}

HTTP_STATUS_BY_CATEGORY: dict[ErrorCategory, int] = {
    ErrorCategory.VALIDATION: 400,
    ErrorCategory.REJECTED: 400,
    ErrorCategory.NOT_FOUND: 404,
    ErrorCategory.UPSTREAM: 502,
    ErrorCategory.UNCONFIRMED: 504,
    ErrorCategory.INTERNAL: 500,
}


class GatewayError(Exception):
    kind: ErrorKind = ErrorKind.INTERNAL

    def __init__(
        self,
        message: str,
        *,
        field: str | None = None,
        signature: str | None = None,
        reason: str | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.field = field
        self.signature = signature
        self.reason = reason

    @property
    def category(self) -> ErrorCategory:
        return CATEGORY_BY_KIND[self.kind]

    @property
    def http_status(self) -> int:
        return HTTP_STATUS_BY_CATEGORY[self.category]

    def as_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"error": self.message, "kind": self.kind.value}
        if self.field is not None:
            payload["field"] = self.field
        if self.signature is not None:
            payload["signature"] = self.signature
        if self.reason is not None:
            payload["reason"] = self.reason
        return payload


class InvalidKeyEncodingError(GatewayError):
    kind = ErrorKind.INVALID_KEY_ENCODING


class InvalidPublicKeyError(GatewayError):
    kind = ErrorKind.INVALID_PUBLIC_KEY


class InvalidAmountError(GatewayError):
    kind = ErrorKind.INVALID_AMOUNT


class AmountExceedsLimitError(GatewayError):
    kind = ErrorKind.AMOUNT_EXCEEDS_LIMIT


class InvalidSignatureError(GatewayError):
    kind = ErrorKind.INVALID_SIGNATURE


class InvalidRequestError(GatewayError):
    kind = ErrorKind.INVALID_REQUEST


class AccountNotFoundError(GatewayError):
    kind = ErrorKind.ACCOUNT_NOT_FOUND


class InsufficientFundsError(GatewayError):
    kind = ErrorKind.INSUFFICIENT_FUNDS


class RpcUnavailableError(GatewayError):
    kind = ErrorKind.RPC_UNAVAILABLE


class AirdropLimitExceededError(GatewayError):
    kind = ErrorKind.AIRDROP_LIMIT_EXCEEDED


class AirdropRejectedError(GatewayError):
    kind = ErrorKind.AIRDROP_REJECTED


class TransactionRejectedError(GatewayError):
    kind = ErrorKind.TRANSACTION_REJECTED


class AirdropNotConfirmedError(GatewayError):
    """Airdrop was requested but never reached a confirmed state.

    The lamports may still land; callers should re-query the balance.
    """

    kind = ErrorKind.AIRDROP_NOT_CONFIRMED


class TransactionNotConfirmedError(GatewayError):
    """Transfer was submitted but confirmation did not finish in time.

    The transfer may still land; retrying blindly risks a double spend.
    """

    kind = ErrorKind.TRANSACTION_NOT_CONFIRMED


class InternalError(GatewayError):
    kind = ErrorKind.INTERNAL

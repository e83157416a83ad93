from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from decimal import Decimal
from typing import Annotated, Any

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field

from solana_gateway.config import AppSettings
from solana_gateway.errors import GatewayError, InternalError, InvalidRequestError
from solana_gateway.observability.logging import get_logger
from solana_gateway.orchestration.operations import GatewayService, open_gateway

logger = get_logger("http_api")


class CreateAccountRequest(BaseModel):
    save_private_key: bool = False


class AirdropRequest(BaseModel):
    public_key: str
    amount_sol: Decimal


class TransferRequest(BaseModel):
    from_private_key: str
    to_public_key: str
    amount_sol: Decimal


class SignMessageRequest(BaseModel):
    message: str = Field(min_length=1)
    secret: str = Field(min_length=1)


class VerifyMessageRequest(BaseModel):
    message: str = Field(min_length=1)
    signature: str = Field(min_length=1)
    pubkey: str = Field(min_length=1)


class SendSolRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    from_pubkey: str = Field(alias="from", min_length=1)
    to_pubkey: str = Field(alias="to", min_length=1)
    lamports: int = Field(gt=0)


def _error_response(exc: GatewayError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.http_status,
        content={**exc.as_dict(), "status": exc.http_status},
    )


def _service(request: Request) -> GatewayService:
    return request.app.state.service


Service = Annotated[GatewayService, Depends(_service)]


def build_app(settings: AppSettings, service: GatewayService | None = None) -> FastAPI:
    """Build the HTTP surface.

    When ``service`` is omitted the app owns its RPC client: it is opened on
    startup and closed on shutdown.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        if service is not None:
            yield
            return
        async with open_gateway(settings) as gateway:
            app.state.service = gateway
            logger.info("gateway_started", rpc_url=settings.solana_rpc_url)
            yield
        logger.info("gateway_stopped")

    app = FastAPI(title=settings.service_name, version="0.1.0", lifespan=lifespan)
    if service is not None:
        app.state.service = service

    @app.exception_handler(GatewayError)
    async def gateway_error(request: Request, exc: GatewayError) -> JSONResponse:
        logger.warning(
            "request_failed",
            path=request.url.path,
            kind=exc.kind.value,
            error=exc.message,
            signature=exc.signature,
        )
        return _error_response(exc)

    @app.exception_handler(RequestValidationError)
    async def request_validation_error(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        first = exc.errors()[0] if exc.errors() else {}
        location = [str(part) for part in first.get("loc", ()) if part != "body"]
        field = ".".join(location) or None
        message = f"{field}: {first.get('msg', 'invalid request')}" if field else "invalid request"
        return _error_response(InvalidRequestError(message, field=field))

    @app.exception_handler(Exception)
    async def unexpected_error(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("request_crashed", path=request.url.path)
        return _error_response(InternalError("internal server error"))

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok", "service": settings.service_name}

    @app.post("/account/create")
    async def create_account(
        gateway: Service, payload: CreateAccountRequest | None = None
    ) -> dict[str, Any]:
        request = payload or CreateAccountRequest()
        created = await gateway.create_account(save_private_key=request.save_private_key)
        return created.as_dict()

    @app.get("/account/{pubkey}")
    async def get_account(pubkey: str, gateway: Service) -> dict[str, Any]:
        return (await gateway.get_account(pubkey)).as_dict()

    @app.post("/airdrop")
    async def airdrop(payload: AirdropRequest, gateway: Service) -> dict[str, Any]:
        outcome = await gateway.airdrop(payload.public_key, payload.amount_sol)
        return outcome.as_dict()

    @app.post("/transfer")
    async def transfer(payload: TransferRequest, gateway: Service) -> dict[str, Any]:
        outcome = await gateway.transfer(
            payload.from_private_key, payload.to_public_key, payload.amount_sol
        )
        return outcome.as_dict()

    @app.post("/keypair")
    async def keypair(gateway: Service) -> dict[str, Any]:
        return {"success": True, "data": (await gateway.generate_keypair()).as_dict()}

    @app.post("/message/sign")
    async def sign_message(payload: SignMessageRequest, gateway: Service) -> dict[str, Any]:
        signed = await gateway.sign_message(payload.secret, payload.message)
        return {"success": True, "data": signed.as_dict()}

    @app.post("/message/verify")
    async def verify_message(payload: VerifyMessageRequest, gateway: Service) -> dict[str, Any]:
        verification = await gateway.verify_message(
            payload.pubkey, payload.message, payload.signature
        )
        return {"success": True, "data": verification.as_dict()}

    @app.post("/send/sol")
    async def send_sol(payload: SendSolRequest, gateway: Service) -> dict[str, Any]:
        preview = await gateway.preview_transfer(
            payload.from_pubkey, payload.to_pubkey, payload.lamports
        )
        return {"success": True, "data": preview.as_dict()}

    return app

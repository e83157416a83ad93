from __future__ import annotations

import uvicorn
from fastapi import FastAPI

from solana_gateway.config import AppSettings, get_settings
from solana_gateway.observability.logging import configure_logging, get_logger
from solana_gateway.runtime.http_api import build_app


def create_app(settings: AppSettings | None = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings.log_level, app_env=settings.app_env)
    return build_app(settings)


def run_server(settings: AppSettings | None = None) -> None:
    settings = settings or get_settings()
    app = create_app(settings)
    get_logger("server").info("server_listening", host=settings.host, port=settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    run_server()

"""
FastAPI application for the mini-ledger HTTP surface.

Wires the request logger, the validation error handler and the
account and transfer routers around a single shared :class:`Ledger`.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.responses import PlainTextResponse
from starlette.requests import Request

from mini_ledger.api.accounts import router as accounts_router
from mini_ledger.api.transfers import router as transfers_router
from mini_ledger.config import LedgerConfig
from mini_ledger.ledger import Ledger
from mini_ledger.logging import get_logger

logger = get_logger("mini_ledger.api")


def create_app(ledger: Ledger | None = None, config: LedgerConfig | None = None) -> FastAPI:
    """Build the application.

    Parameters
    ----------
    ledger : Ledger | None
        Ledger served by the routes. Built from ``config`` when omitted.
    config : LedgerConfig | None
        Used only when ``ledger`` is omitted; defaults to ``LedgerConfig()``.
    """
    if ledger is None:
        ledger = Ledger.from_config(config or LedgerConfig())

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("mini-ledger starting up")
        yield
        if ledger.sink is not None:
            ledger.sink.close()
        logger.info("mini-ledger shutting down")

    app = FastAPI(title="mini-ledger", version="0.1.0", lifespan=lifespan)
    app.state.ledger = ledger

    @app.exception_handler(RequestValidationError)
    async def invalid_request(request: Request, exc: RequestValidationError):
        logger.warning("Invalid request to %s: %s", request.url.path, exc.errors())
        return PlainTextResponse("invalid request", status_code=400)

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        response = await call_next(request)
        logger.info(
            "HTTP %s %s from %s -> %d",
            request.method,
            request.url.path,
            request.client.host if request.client else "?",
            response.status_code,
        )
        return response

    @app.get("/health")
    async def health():
        return {"status": "healthy"}

    app.include_router(accounts_router)
    app.include_router(transfers_router)
    return app

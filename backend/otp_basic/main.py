from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from otp_basic.api.routes.protected import router as protected_router
from otp_basic.api.routes.tokens import router as tokens_router
from otp_basic.core.config import Settings, get_settings
from otp_basic.core.errors import EntropyError, StorageError
from otp_basic.core.logging import configure_logging
from otp_basic.crypto.aead import SecretCipher
from otp_basic.db.session import build_engine
from otp_basic.security.gate import AuthGate
from otp_basic.security.totp import CodeEngine
from otp_basic.services.credentials import CredentialManager
from otp_basic.store.base import TokenStore
from otp_basic.store.memory import InMemoryTokenStore
from otp_basic.store.sql import SqlTokenStore

logger = logging.getLogger(__name__)


def build_store(settings: Settings) -> TokenStore:
    if settings.store_backend == "memory":
        logger.warning("Using in-memory token store; tokens will not survive a restart")
        return InMemoryTokenStore()

    cipher = None
    if settings.secret_encryption_key:
        cipher = SecretCipher.from_b64(settings.secret_encryption_key)
    engine = build_engine(settings.database_url, pool_timeout=settings.db_pool_timeout)
    return SqlTokenStore(engine, cipher=cipher)


def create_app(settings: Settings | None = None, store: TokenStore | None = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    store = store or build_store(settings)
    engine = CodeEngine(
        digits=settings.totp_digits,
        interval=settings.totp_interval,
        valid_window=settings.totp_valid_window,
    )
    manager = CredentialManager(store, engine=engine)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        store.close()

    app = FastAPI(title="OTP Basic", version="0.1.0", lifespan=lifespan)
    app.state.settings = settings
    app.state.credentials = manager
    app.state.auth_gate = AuthGate(manager)

    @app.exception_handler(StorageError)
    @app.exception_handler(EntropyError)
    async def _server_failure(request: Request, exc: Exception) -> JSONResponse:
        logger.error("Unhandled %s on %s", exc.__class__.__name__, request.url.path)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": "Internal server error"},
        )

    app.include_router(tokens_router)
    app.include_router(protected_router)

    @app.get("/health")
    def health():
        return {"status": "ok"}

    return app

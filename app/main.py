import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.api.api import api_router
from app.core.config import Settings, settings as default_settings
from app.core.database import engine
from app.core.logging_config import setup_logging
from app.core.security import CredentialVerifier
from app.middleware.auth import AuthMiddleware
from app.middleware.logging import LoggingMiddleware
from app.services.session.session_store import SessionStore, build_session_store

logger = logging.getLogger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    session_store: Optional[SessionStore] = None,
) -> FastAPI:
    """Build the API with explicitly supplied collaborators"""
    settings = settings or default_settings
    setup_logging(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(f"Storefront API starting ({settings.ENVIRONMENT})")
        yield
        await app.state.session_store.close()
        await engine.dispose()
        logger.info("Storefront API stopped")

    app = FastAPI(
        title="Storefront API",
        description="Categories, products and customer sessions",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.session_store = session_store or build_session_store(settings)
    app.state.credential_verifier = CredentialVerifier(rounds=settings.BCRYPT_ROUNDS)

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.error(f"Unexpected error on {request.method} {request.url.path}: {exc}", exc_info=True)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": "Internal server error"},
        )

    # Last added runs first
    app.add_middleware(AuthMiddleware, cookie_name=settings.SESSION_COOKIE_NAME)
    app.add_middleware(LoggingMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=settings.ALLOWED_METHODS,
        allow_headers=settings.ALLOWED_HEADERS,
    )

    app.include_router(api_router, prefix="/api")

    @app.get("/")
    async def root():
        return {"status": "ok", "message": "Storefront API", "version": "1.0.0"}

    @app.get("/health")
    async def health_check():
        return {
            "status": "healthy",
            "components": {
                "session_store": type(app.state.session_store).__name__,
            },
        }

    return app


app = create_app()

"""
FastAPI application factory. No business logic; only wiring and middleware.

Run with:
  uvicorn brainfeed.main:create_app --factory
"""

import logging

from dotenv import load_dotenv

load_dotenv()

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.orm import Session, sessionmaker

from brainfeed.api.v1 import router as v1_router
from brainfeed.core.config import Settings, get_settings
from brainfeed.core.database import create_db_engine, create_session_factory
from brainfeed.core.errors import setup_exception_handlers
from brainfeed.core.session import SessionManager
from brainfeed.core.signing import SignatureCodec

logger = logging.getLogger(__name__)


def create_app(
    settings: Settings | None = None,
    session_factory: sessionmaker[Session] | None = None,
) -> FastAPI:
    """
    Build the API with its collaborators attached to app.state.

    settings defaults to the environment; session_factory defaults to one bound
    to an engine for settings.DATABASE_URL.
    """
    settings = settings or get_settings()
    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%SZ",
    )
    if session_factory is None:
        session_factory = create_session_factory(create_db_engine(settings))

    app = FastAPI(
        title="Brainfeed API",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )
    app.state.settings = settings
    app.state.session_factory = session_factory
    app.state.session_manager = SessionManager(
        SignatureCodec(settings.SESSION_SECRET.get_secret_value()),
        max_age_seconds=settings.SESSION_MAX_AGE_SECONDS,
        cookie_name=settings.SESSION_COOKIE_NAME,
        secure_cookie=settings.APP_ENV == "prod",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if settings.APP_ENV == "dev" else [],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    setup_exception_handlers(app)
    app.include_router(v1_router, prefix=settings.API_V1_PREFIX)

    @app.get("/")
    def root() -> dict[str, str]:
        """Root route; minimal payload for discovery."""
        return {"message": "Brainfeed API"}

    logger.info("Application configured", extra={"app_env": settings.APP_ENV})
    return app

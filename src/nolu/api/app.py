"""FastAPI application factory.

API layer:
- Validates inputs, reads/writes DB through the domain services
- Returns payloads for the dashboard and public lookup UI
- Forbidden: statistics arithmetic
"""

from __future__ import annotations

import logging
import os
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator, Generator

from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from nolu import __version__
from nolu.accounts.auth import authenticate_token
from nolu.core.errors import AccountNotFoundError, InvalidTokenError
from nolu.db.repo import DbSession
from nolu.db.session import check_connection, get_session, init_db
from nolu.models.domain import AccountEntity

logger = logging.getLogger(__name__)

DEFAULT_CORS_ORIGINS = [
    "http://localhost:5173",  # Vite dev server
    "http://127.0.0.1:5173",
]

bearer_scheme = HTTPBearer(auto_error=False)


def get_db_session() -> Generator[DbSession, None, None]:
    """Dependency to get database session.

    Yields:
        Database session that is automatically closed after request.
    """
    session = get_session()
    try:
        yield session
    finally:
        session.close()


def get_bearer_token(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> str:
    """Extract the bearer token or fail with 401."""
    if credentials is None or not credentials.credentials:
        raise HTTPException(status_code=401, detail="Access token required")
    return credentials.credentials


def get_current_account(
    token: str = Depends(get_bearer_token),
    session: DbSession = Depends(get_db_session),
) -> AccountEntity:
    """Dependency resolving the bearer token to the calling account.

    Raises:
        HTTPException: 401 if no token, 403 if invalid/expired,
            404 if the account is gone.
    """
    try:
        return authenticate_token(session, token)
    except InvalidTokenError as e:
        raise HTTPException(status_code=403, detail=str(e)) from e
    except AccountNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e


def _cors_origins() -> list[str]:
    raw = os.environ.get("NOLU_CORS_ORIGINS")
    if not raw:
        return DEFAULT_CORS_ORIGINS
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


def _debug_enabled() -> bool:
    return os.environ.get("NOLU_DEBUG", "").lower() in ("1", "true", "yes")


def create_app(db_path: Path | None = None) -> FastAPI:
    """Create FastAPI application.

    Args:
        db_path: Optional path to database file. Defaults to NOLU_DB_PATH.

    Returns:
        Configured FastAPI application.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        init_db(db_path)
        yield

    app = FastAPI(
        title="Nolu Stats API",
        description="Match records and aggregated player statistics",
        version=__version__,
        lifespan=lifespan,
    )

    # Add CORS middleware for UI access
    app.add_middleware(
        CORSMiddleware,
        allow_origins=_cors_origins(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    if db_path is not None:

        def get_configured_session() -> Generator[DbSession, None, None]:
            session = get_session(db_path)
            try:
                yield session
            finally:
                session.close()

        app.dependency_overrides[get_db_session] = get_configured_session

    # Include routes
    from nolu.api.routes import accounts, auth, maps, matches, players

    app.include_router(auth.router, prefix="/api")
    app.include_router(accounts.router, prefix="/api")
    app.include_router(matches.router, prefix="/api")
    app.include_router(players.router, prefix="/api")
    app.include_router(maps.router, prefix="/api")

    @app.exception_handler(Exception)
    async def unhandled_error(request: Request, exc: Exception) -> JSONResponse:
        """Turn unexpected failures into a 500 without leaking details."""
        logger.exception(f"Unhandled error on {request.method} {request.url.path}")
        content: dict[str, str] = {"detail": "Internal server error"}
        if _debug_enabled():
            content["error"] = str(exc)
        return JSONResponse(status_code=500, content=content)

    # Health check endpoint
    @app.get("/health")
    def health_check(session: DbSession = Depends(get_db_session)):
        """Health check endpoint."""
        database = "connected" if check_connection(session) else "disconnected"
        return {"status": "ok", "database": database}

    return app


# Default app instance
app = create_app()

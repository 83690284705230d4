from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.middleware.base import BaseHTTPMiddleware

from shiptrack.core.config import get_settings
from shiptrack.core.logging import get_logger, setup_logging
from shiptrack.db.create_tables import create_all
from shiptrack.routers import ship_groups as ship_groups_router
from shiptrack.routers import users as users_router
from shiptrack.services.ship_group_service import ShipGroupService


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Inject baseline security headers (anti clickjacking, sniffing, referrer policy)."""

    def __init__(self, app, *, enforce_hsts: bool) -> None:
        super().__init__(app)
        self._enforce_hsts = enforce_hsts

    async def dispatch(self, request, call_next):
        response = await call_next(request)
        response.headers.setdefault("X-Frame-Options", "DENY")
        response.headers.setdefault("X-Content-Type-Options", "nosniff")
        response.headers.setdefault("Referrer-Policy", "no-referrer")
        if self._enforce_hsts:
            response.headers.setdefault("Strict-Transport-Security", "max-age=31536000; includeSubDomains")
        return response


settings = get_settings()
logger = get_logger("shiptrack.app")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown lifecycle hooks."""
    setup_logging(settings.log_level, json_output=settings.app_env == "prod")
    create_all()
    logger.info("Application starting", env=settings.app_env)
    yield
    logger.info("Application shutting down")


app = FastAPI(title="Shiptrack API", version="0.1.0", lifespan=lifespan)

if settings.cors_origins:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=sorted(settings.cors_origins),
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )
app.add_middleware(SecurityHeadersMiddleware, enforce_hsts=settings.app_env == "prod")


@app.exception_handler(SQLAlchemyError)
async def database_error_handler(request: Request, exc: SQLAlchemyError):
    logger.exception("Database error", path=request.url.path, exc_info=exc)
    return JSONResponse({"message": "Internal server error"}, status_code=500)


app.state.ship_group_service = ShipGroupService()


@app.get("/health", tags=["health"])
def health() -> dict[str, str]:
    return {"status": "ok", "env": settings.app_env}


app.include_router(users_router.router)
app.include_router(ship_groups_router.router)


def create_app() -> FastAPI:
    """Factory for uvicorn/gunicorn."""
    return app

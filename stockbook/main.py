import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import DataError
from starlette.exceptions import HTTPException as StarletteHTTPException

from stockbook.api.routes.auth import router as auth_router
from stockbook.api.routes.inventory import router as inventory_router
from stockbook.api.routes.reports import router as reports_router
from stockbook.api.routes.users import router as users_router
from stockbook.core.config import Settings, settings as default_settings
from stockbook.core.errors import Internal, MissingField, StockbookError, ValidationError
from stockbook.core.logging import configure_logging
from stockbook.db.database import Database
from stockbook.schemas.common import ErrorResponse, HealthResponse

logger = logging.getLogger(__name__)


def _error_response(status_code: int, msg: str, error: str | None = None) -> JSONResponse:
    body = ErrorResponse(msg=msg, error=error).model_dump(exclude_none=True)
    return JSONResponse(status_code=status_code, content=body)


def _format_validation_errors(exc: RequestValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = [str(part) for part in err.get("loc", ()) if part not in ("body", "query", "path")]
        field = ".".join(loc)
        parts.append(f"{field}: {err.get('msg')}" if field else str(err.get("msg")))
    return "; ".join(parts) or "Invalid request"


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(StockbookError)
    async def handle_domain_error(request: Request, exc: StockbookError):
        if exc.status_code >= 500:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
        return _error_response(exc.status_code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(request: Request, exc: RequestValidationError):
        missing = any(err.get("type") == "missing" for err in exc.errors())
        error = (MissingField if missing else ValidationError)(_format_validation_errors(exc))
        return _error_response(error.status_code, error.message)

    @app.exception_handler(DataError)
    async def handle_data_error(request: Request, exc: DataError):
        # Values the column types cannot hold, e.g. a stock counter pushed past int4.
        logger.warning("%s %s rejected by the store: %s", request.method, request.url.path, exc.orig)
        error = ValidationError("Value out of range")
        return _error_response(error.status_code, error.message)

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_error(request: Request, exc: StarletteHTTPException):
        return _error_response(exc.status_code, str(exc.detail))

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        logger.exception("%s %s crashed", request.method, request.url.path)
        error = Internal()
        detail = str(exc) if request.app.state.settings.expose_error_details else None
        return _error_response(error.status_code, error.message, detail)


def create_app(config: Settings | None = None, database: Database | None = None) -> FastAPI:
    config = config or default_settings
    configure_logging(config)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        owned = database is None
        app.state.database = database or Database(config.database_url)
        logger.info("%s started (setup_mode=%s)", config.app_name, config.setup_mode)
        try:
            yield
        finally:
            if owned:
                app.state.database.dispose()

    app = FastAPI(title=config.app_name, lifespan=lifespan)
    app.state.settings = config
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(config.cors_origins),
        allow_credentials="*" not in config.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)
    app.include_router(auth_router)
    app.include_router(inventory_router)
    app.include_router(reports_router)
    app.include_router(users_router)

    @app.get("/api/health", response_model=HealthResponse, tags=["System"])
    def health_check():
        return HealthResponse(
            success=True,
            message="Server is running",
            timestamp=datetime.now(timezone.utc).isoformat(),
        )

    return app


app = create_app()

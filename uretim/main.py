"""FastAPI application entrypoint for the Uretim reporting API."""

import logging
from contextlib import asynccontextmanager

from uretim.config import get_config
from uretim.logging_config import setup_logging

# Configure logging before anything else
setup_logging(log_level=get_config().api.log_level, log_file=get_config().api.log_file)
logger = logging.getLogger(__name__)

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException
from starlette.requests import Request
from starlette.responses import JSONResponse

from uretim.api.middleware.rate_limit import setup_rate_limiting
from uretim.api.routers import cache, reports
from uretim.database.connection import Database
from uretim.exceptions import ReportValidationError, UretimError
from uretim.models.responses import ApiResponse, exception_messages
from uretim.reporting.cache import ReportCache
from uretim.reporting.service import ReportingService
from uretim.store.entity_store import EntityStore


def _envelope(status_code: int, message: str, errors=None, headers=None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ApiResponse.error_result(message, errors).model_dump(mode="json"),
        headers=headers,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    config = get_config()
    config.db_path.parent.mkdir(parents=True, exist_ok=True)

    db = Database(config.db_path)
    await db.connect()
    logger.info("Connected to entity database at %s", config.db_path)

    cache_cfg = config.report_cache
    report_cache = (
        ReportCache(max_size=cache_cfg.max_size, ttl_seconds=cache_cfg.ttl_seconds)
        if cache_cfg.enabled
        else None
    )
    if report_cache is not None:
        logger.info(
            "Report cache enabled (max_size=%d, ttl=%ds)", cache_cfg.max_size, cache_cfg.ttl_seconds
        )

    app.state.config = config
    app.state.db = db
    app.state.reporting_service = ReportingService(EntityStore(db), cache=report_cache)

    yield

    await db.close()


def register_exception_handlers(app: FastAPI) -> None:
    """Render every error in the ``{success, message, data, errors}`` envelope.

    Server errors include the exception text in ``errors`` so operators can
    diagnose failures from the response alone.
    """

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        return _envelope(exc.status_code, str(exc.detail), headers=getattr(exc, "headers", None))

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        errors = [
            f"{'.'.join(str(part) for part in error.get('loc', ()))}: {error.get('msg', '')}"
            for error in exc.errors()
        ]
        return _envelope(400, "Invalid request parameters", errors)

    @app.exception_handler(ReportValidationError)
    async def report_validation_handler(request: Request, exc: ReportValidationError):
        return _envelope(400, str(exc))

    @app.exception_handler(UretimError)
    async def uretim_error_handler(request: Request, exc: UretimError):
        logger.error("Application error: %s", exc)
        return _envelope(500, "Internal server error", exception_messages(exc))

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception("Unhandled exception: %s", exc)
        return _envelope(500, "Internal server error", exception_messages(exc))


app = FastAPI(title="Uretim Reports", lifespan=lifespan)
setup_rate_limiting(app)
register_exception_handlers(app)

cors_origins = get_config().api.cors_origins
if cors_origins:
    from fastapi.middleware.cors import CORSMiddleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "DELETE"],
        allow_headers=["*"],
    )


@app.middleware("http")
async def add_api_version_header(request: Request, call_next):
    response = await call_next(request)
    if request.url.path.startswith("/api/"):
        response.headers["X-API-Version"] = "1"
    return response


app.include_router(reports.router)
app.include_router(cache.router)


@app.get("/health")
async def health():
    return {"status": "healthy"}

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from contextlib import asynccontextmanager
import logging
import uuid

from . import __version__
from .config import settings
from .database import create_tables
from .exceptions import BridgeError
from .schemas.sync import SyncResult
from .utils.logging_config import setup_logging, set_request_context, clear_request_context
from .routers import audit, availability, reservations, setup, sync

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events"""
    setup_logging(level=settings.log_level, json_format=settings.log_json)
    logger.info(f"Starting channel-bridge ({settings.environment})")
    create_tables()
    logger.info("Database ready")
    yield
    logger.info("Shutting down channel-bridge")


app = FastAPI(
    title="Channel Bridge API",
    description="Bidirectional PMS <-> channel-manager synchronization",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["X-Request-ID"],
)


# Request ID Middleware
class RequestIdMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get("X-Request-ID", str(uuid.uuid4())[:8])
        request.state.request_id = request_id
        set_request_context(request_id)
        try:
            response = await call_next(request)
        finally:
            clear_request_context()
        response.headers["X-Request-ID"] = request_id
        return response


app.add_middleware(RequestIdMiddleware)


@app.exception_handler(BridgeError)
async def bridge_error_handler(request: Request, exc: BridgeError):
    if exc.http_status >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.code} {exc.message}")
    else:
        logger.info(f"{request.method} {request.url.path} rejected: {exc.code} {exc.message}")
    return JSONResponse(
        status_code=exc.http_status,
        content=SyncResult.from_error(exc).model_dump(mode="json"),
    )


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=400,
        content=SyncResult(
            status="error",
            message="Invalid request",
            code="VALIDATION_ERROR",
            data={"errors": [{"loc": list(e.get("loc", [])), "msg": e.get("msg")} for e in exc.errors()]},
        ).model_dump(mode="json"),
    )


# Include routers
app.include_router(setup.router)
app.include_router(sync.router)
app.include_router(reservations.router)
app.include_router(availability.router)
app.include_router(audit.router)


@app.get("/")
async def root():
    return {
        "message": "Channel Bridge API",
        "version": __version__,
        "docs": "/docs",
        "status": "running",
    }


@app.get("/health")
async def health_check():
    return {"status": "healthy"}

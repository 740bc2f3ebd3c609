# /app/main.py

# --- Core FastAPI Imports ---
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

# --- Application-specific Imports ---
from .core import config
from .core.exceptions import StoreFailure, TrackerError
from .core.logging_config import setup_logging
from .db.database import init_db
from .routers import (
    admin_router,
    auth_router,
    faculty_router,
    groups_router,
    reports_router,
    students_router,
)

logger = logging.getLogger(__name__)


# --- Application Lifecycle Management ---
@asynccontextmanager
async def lifespan(app: FastAPI):
    # This code runs ONCE when the application starts up.
    setup_logging()
    init_db()
    logger.info("Assignment tracker API started")
    yield


# --- Exception Handlers ---
async def tracker_error_handler(request: Request, exc: TrackerError) -> JSONResponse:
    """Maps domain errors to their status code and a structured body."""
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    else:
        logger.warning("%s %s -> %d %s: %s", request.method, request.url.path, exc.status_code, exc.code, exc.message)
    return JSONResponse(status_code=exc.status_code, content=jsonable_encoder(exc.to_dict()))


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Request body/path/query validation failures are answered with 400, not 422."""
    errors = [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg"), "type": err.get("type")}
        for err in exc.errors()
    ]
    logger.warning("%s %s -> 400 validation: %s", request.method, request.url.path, errors)
    return JSONResponse(
        status_code=400,
        content={"detail": "Validation failed", "code": "VALIDATION_ERROR", "errors": errors},
    )


async def store_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    """Unexpected storage failures: log everything, tell the caller nothing."""
    logger.error("Storage failure on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(status_code=500, content=StoreFailure().to_dict())


def create_app() -> FastAPI:
    app = FastAPI(
        title="Assignment Tracker API",
        description="Students, faculty, two-person assignment groups and weekly progress reports.",
        version="1.0.0",
        lifespan=lifespan,
    )

    # --- Middleware Configuration ---
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(TrackerError, tracker_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(SQLAlchemyError, store_error_handler)

    # --- API Router Inclusion ---
    app.include_router(auth_router.router, prefix="/api/auth", tags=["Auth"])
    app.include_router(admin_router.router, prefix="/api/admin", tags=["Admin"])
    app.include_router(faculty_router.router, prefix="/api/faculty", tags=["Faculty"])
    app.include_router(students_router.router, prefix="/api/students", tags=["Students"])
    app.include_router(groups_router.router, prefix="/api/groups", tags=["Groups"])
    app.include_router(reports_router.router, prefix="/api/reports", tags=["Reports"])

    # --- Root / Health Check Endpoint ---
    @app.get("/", tags=["Health Check"])
    async def read_root():
        """A simple health check endpoint to confirm the API is online."""
        return {"status": "Assignment tracker is running!", "version": app.version}

    return app


app = create_app()

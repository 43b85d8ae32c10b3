"""
FastAPI application entry point.
Serves the topping menu and accepts orders from the Streamlit frontend.
"""
import sys
import logging
import threading
from contextlib import asynccontextmanager
from logging.handlers import RotatingFileHandler

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from backend.config import settings
from backend.core.metrics import metrics
from backend.api.v1.router import api_router

settings.LOG_DIR.mkdir(parents=True, exist_ok=True)

# Configure logging with both console and file handlers
log_level = logging.DEBUG if settings.DEBUG else logging.INFO
log_format = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

logging.basicConfig(
    level=log_level,
    format=log_format,
    handlers=[
        logging.StreamHandler(sys.stdout),
        RotatingFileHandler(
            settings.LOG_DIR / "backend.log",
            maxBytes=settings.LOG_MAX_BYTES,
            backupCount=settings.LOG_BACKUP_COUNT,
            encoding="utf-8"
        )
    ]
)
logger = logging.getLogger(__name__)


def _handle_thread_exception(args):
    """Log uncaught exceptions raised in worker threads."""
    logger.critical(
        f"UNCAUGHT EXCEPTION in thread '{args.thread.name}': {args.exc_type.__name__}: {args.exc_value}",
        exc_info=(args.exc_type, args.exc_value, args.exc_traceback)
    )


threading.excepthook = _handle_thread_exception


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Log startup and shutdown."""
    logger.info(f"Starting {settings.APP_NAME} v{settings.APP_VERSION}")
    logger.info(
        f"Order failure rate={settings.ORDER_FAILURE_RATE}, "
        f"require_topping={settings.REQUIRE_TOPPING}"
    )

    yield

    logger.info(f"Shutdown complete ({metrics.orders_received} orders received)")


# Create FastAPI application
app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Pizzeria - Order Backend",
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type", "X-Session-ID", "Accept"],
)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Count invalid orders and return the field errors."""
    if request.url.path.startswith("/api/v1/orders"):
        metrics.increment('orders_invalid')
    errors = [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg", ""), "type": err.get("type", "")}
        for err in exc.errors()
    ]
    logger.info(f"Invalid request on {request.method} {request.url.path}: {len(errors)} error(s)")
    return JSONResponse(status_code=422, content={"detail": errors})


# Global exception handler to prevent internal path exposure
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """
    Handle uncaught exceptions and return sanitized error messages.

    The full error is logged; the client only sees a generic message.
    """
    logger.error(
        f"Unhandled exception on {request.method} {request.url.path}: "
        f"{type(exc).__name__}: {str(exc)}",
        exc_info=True
    )

    error_message = "An internal error occurred. Please try again later."
    if isinstance(exc, ValueError):
        error_message = "Invalid input provided."
    elif isinstance(exc, TimeoutError):
        error_message = "The operation timed out. Please try again."

    return JSONResponse(
        status_code=500,
        content={"detail": error_message, "error_code": "INTERNAL_ERROR"}
    )


# Include API router
app.include_router(api_router)


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "name": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "docs": "/docs",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "backend.main:app",
        host=settings.API_HOST,
        port=settings.API_PORT,
        reload=settings.DEBUG,
    )

"""
Main FastAPI application for VidhiSahayak.
"""

import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException
import time

from vidhisahayak.core.config import get_config
from vidhisahayak.core.database import initialize_database, is_persistence_enabled
from vidhisahayak.core.response_utils import create_success_response, create_error_response, ResponseTimer
from vidhisahayak.schemas import StandardResponse
from vidhisahayak.services.llm_providers import initialize_provider_chain, get_provider_chain
from vidhisahayak.api.v1 import auth, chat, chat_sessions, categories, documents, lawyers, search, tts

logging.basicConfig(level=logging.INFO, format='%(asctime)s [%(levelname)s] %(message)s')

config = get_config()
logger = logging.getLogger(__name__)

API_VERSION_PREFIX = "/api/v1"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    logger.info("Starting VidhiSahayak application...")
    try:
        initialize_database()
        logger.info("Database initialization completed")
    except Exception as e:
        logger.warning(f"Database initialization failed during startup: {e}")
        logger.info("Application will continue - database will be retried on first access")

    initialize_provider_chain()

    logger.info("Application startup completed successfully")

    yield

    logger.info("Shutting down VidhiSahayak application...")


# Create FastAPI application
app = FastAPI(
    title=config.application.app_name,
    description=config.application.app_description,
    version=config.application.app_version,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.application.cors_origins,
    allow_credentials="*" not in config.application.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Request logging middleware
@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log all requests."""
    start_time = time.time()
    logger.info(f"Request: {request.method} {request.url.path}")

    response = await call_next(request)

    process_time = time.time() - start_time
    logger.info(f"Response: {request.method} {request.url.path} {response.status_code} - {process_time:.3f}s")
    return response


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """HTTP exception handler."""
    logger.warning(f"HTTP exception: {exc.status_code} - {exc.detail}")
    response = create_error_response(
        message=str(exc.detail),
        status_code=exc.status_code,
        errors=[str(exc.detail)],
        execution_time=0.0
    )
    if getattr(exc, "headers", None):
        response.headers.update(exc.headers)
    return response


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Request validation handler."""
    errors = [
        f"{'.'.join(str(part) for part in err.get('loc', ()))}: {err.get('msg')}"
        for err in exc.errors()
    ]
    logger.warning(f"Validation error on {request.url.path}: {errors}")
    return create_error_response(
        message="Invalid request",
        status_code=422,
        errors=errors,
        execution_time=0.0
    )


# Global exception handler
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Global exception handler."""
    logger.error(f"Unhandled exception: {exc}", exc_info=True)
    return create_error_response(
        message="Internal server error",
        status_code=500,
        execution_time=0.0
    )


@app.get("/health", response_model=StandardResponse)
@app.get(f"{API_VERSION_PREFIX}/health", response_model=StandardResponse)
async def health_check():
    """Application health check."""
    with ResponseTimer() as timer:
        health_data = {
            "status": "healthy",
            "timestamp": time.time(),
            "version": config.application.app_version,
            "environment": config.application.environment,
            "persistence": is_persistence_enabled(),
            "providers": get_provider_chain().configured_providers(),
        }

        return create_success_response(
            data=health_data,
            status_code=200,
            execution_time=timer.get_execution_time()
        )


# Include API routers
app.include_router(auth.router, prefix=f"{API_VERSION_PREFIX}/auth", tags=["Authentication"])
app.include_router(chat.router, prefix=f"{API_VERSION_PREFIX}/chat", tags=["Chat"])
app.include_router(chat_sessions.router, prefix=f"{API_VERSION_PREFIX}/chat", tags=["Chat Sessions"])
app.include_router(categories.router, prefix=f"{API_VERSION_PREFIX}/categories", tags=["Categories"])
app.include_router(documents.router, prefix=f"{API_VERSION_PREFIX}/documents", tags=["Documents"])
app.include_router(lawyers.router, prefix=f"{API_VERSION_PREFIX}/lawyers", tags=["Lawyers"])
app.include_router(search.router, prefix=f"{API_VERSION_PREFIX}/search", tags=["Search"])
app.include_router(tts.router, prefix=f"{API_VERSION_PREFIX}/tts", tags=["Text to Speech"])

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "vidhisahayak.main:app",
        host=config.application.api_host,
        port=config.application.api_port,
        reload=config.application.debug,
        log_level=config.application.debug and "debug" or "info"
    )

"""
Main FastAPI application for the Grocery Correction Proxy.
"""
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.config import settings
from app.routes import correction, health
from app.middleware.logging import RequestLoggingMiddleware
from app.services.correction import create_correction_service
from app.services.correction_base import ConfigurationError, CorrectionError, InternalFaultError
from app.utils.logger import get_logger

logger = get_logger("main")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.
    Handles startup and shutdown events.
    """
    # Startup
    logger.info("Starting Grocery Correction Proxy")
    logger.info(f"Environment: {'DEBUG' if settings.DEBUG else 'PRODUCTION'}")
    logger.info(f"Log level: {settings.LOG_LEVEL}")

    # A missing API key is reported per request, so startup continues without a service
    try:
        app.state.correction_service = create_correction_service()
        logger.info(
            f"Correction provider '{settings.CORRECTION_PROVIDER}' is configured",
            model=app.state.correction_service.get_model_name()
        )
    except ConfigurationError as e:
        app.state.correction_service = None
        logger.error(
            f"Correction provider '{settings.CORRECTION_PROVIDER}' is not configured: {e.message}"
        )
    except ValueError as e:
        raise RuntimeError(str(e)) from e

    yield

    # Shutdown
    logger.info("Shutting down Grocery Correction Proxy")
    app.state.correction_service = None


# Create FastAPI application
app = FastAPI(
    title="Grocery Correction Proxy",
    description="Corrects misspelled grocery items through an LLM completion service",
    version="1.0.0",
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc"
)

# With the wildcard origin the routes set the CORS headers themselves and
# answer every OPTIONS request with an empty 200. The middleware is only
# needed to match an explicit origin list.
if settings.cors_origins_list != ["*"]:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_methods=["POST", "OPTIONS"],
        allow_headers=["Content-Type"],
    )

# Add request logging middleware
app.add_middleware(RequestLoggingMiddleware)


@app.exception_handler(CorrectionError)
async def correction_error_handler(request: Request, exc: CorrectionError) -> JSONResponse:
    """Render correction failures as {"error": ..., ...} bodies."""
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict(),
        headers=settings.cors_headers
    )


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Render routing errors (404, 405) in the same {"error": ...} shape."""
    if exc.status_code == 405:
        message = "Method not allowed"
    else:
        message = str(exc.detail)

    headers = dict(settings.cors_headers)
    if exc.headers:
        headers.update(exc.headers)

    return JSONResponse(
        status_code=exc.status_code,
        content={"error": message},
        headers=headers
    )


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Render anything that escaped the routes as an internal fault."""
    logger.error(
        "Unhandled exception",
        path=request.url.path,
        error=str(exc),
        exc_info=True
    )
    fault = InternalFaultError(str(exc))
    return JSONResponse(
        status_code=fault.status_code,
        content=fault.to_dict(),
        headers=settings.cors_headers
    )


# Include routers
app.include_router(health.router, tags=["Health"])
app.include_router(correction.router, tags=["Correction"])


@app.get("/", include_in_schema=False)
async def root():
    """Root endpoint with service links."""
    return {
        "message": "Grocery Correction Proxy",
        "correct": correction.CORRECTION_PATH,
        "docs": "/docs",
        "health": "/health"
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.RELOAD,
        log_level=settings.LOG_LEVEL.lower()
    )

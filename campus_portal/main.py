from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from contextlib import asynccontextmanager
from slowapi.errors import RateLimitExceeded
from starlette.exceptions import HTTPException as StarletteHTTPException

from campus_portal.core.config import settings
from campus_portal.core.database import init_db, close_db, AsyncSessionLocal
from campus_portal.core.exceptions import PortalError, ServerError
from campus_portal.core.logging_config import logger
from campus_portal.core.middleware import (
    RequestLoggingMiddleware,
    SecurityHeadersMiddleware,
    RequestSizeLimitMiddleware,
)
from campus_portal.core.rate_limiter import limiter, rate_limit_exceeded_handler
from campus_portal.api.router import api_router
from campus_portal.api.endpoints import realtime
from campus_portal.db.seed_data import ensure_admin
from campus_portal.services.broadcast import BroadcastChannel
from campus_portal.services.file_storage import create_file_storage


def validate_critical_config():
    """Validate critical configuration at startup - fail fast outside development"""
    errors = []

    if not settings.DATABASE_URL:
        errors.append("DATABASE_URL is not set")

    if not settings.JWT_SECRET_KEY or settings.JWT_SECRET_KEY == "CHANGE_ME":
        if settings.is_dev_mode():
            logger.warning("[Startup] JWT_SECRET_KEY is using the default value (development only)")
        else:
            errors.append("JWT_SECRET_KEY is not set or using default value")

    if errors:
        for err in errors:
            logger.critical(f"[Startup] CRITICAL: {err}")
        raise RuntimeError(f"Missing critical configuration: {', '.join(errors)}")

    logger.info("[Startup] ✓ Critical configuration validated")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan event handler for startup and shutdown"""
    logger.info("=" * 60)
    logger.info(f"Starting {settings.APP_NAME}...")
    logger.info(f"Environment: {settings.ENVIRONMENT}")
    logger.info("=" * 60)

    validate_critical_config()

    # Store unavailable at startup is fatal: let the exception stop the process
    try:
        await init_db()
    except Exception as e:
        logger.critical(f"[Startup] Database connection failed: {e}")
        raise
    logger.info("[Startup] Database ready")

    async with AsyncSessionLocal() as db:
        await ensure_admin(db)

    yield

    logger.info(f"Shutting down {settings.APP_NAME}...")
    await app.state.broadcaster.close_all()
    await close_db()


app = FastAPI(
    title=settings.APP_NAME,
    description="Campus portal: sections, files, news and a Q&A assistant with realtime updates",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    lifespan=lifespan,
    redirect_slashes=False
)

# Process-wide services, reached by handlers through dependencies
app.state.broadcaster = BroadcastChannel()
app.state.file_storage = create_file_storage()

app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)

# Middleware (executed in reverse order - last added runs first)
app.add_middleware(RequestLoggingMiddleware)
app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(RequestSizeLimitMiddleware, max_size=settings.MAX_UPLOAD_SIZE)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["X-Request-ID", "X-Response-Time"],
)


@app.exception_handler(PortalError)
async def portal_exception_handler(request: Request, exc: PortalError):
    if isinstance(exc, ServerError):
        logger.log_error_with_context(exc, context=f"{request.method} {request.url.path}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Malformed bodies get the same 400 shape as missing fields"""
    fields = []
    for error in exc.errors():
        loc = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
        if loc and loc[0] not in fields:
            fields.append(loc[0])
    body = {"message": "Invalid request", "code": "VALIDATION_ERROR"}
    if fields:
        body["details"] = {"missing": fields}
    return JSONResponse(status_code=400, content=body)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": str(exc.detail), "code": f"HTTP_{exc.status_code}"},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.error(f"Global exception: {exc}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content={
            "message": "Server error",
            "code": "SERVER_ERROR",
            "error": str(exc),
        }
    )


@app.get("/health", tags=["Health"])
async def health_check():
    """Health check endpoint"""
    return {
        "status": "healthy",
        "app_name": settings.APP_NAME,
        "version": "1.0.0",
        "environment": settings.ENVIRONMENT,
        "realtime_sessions": app.state.broadcaster.session_count,
    }


app.include_router(api_router, prefix="/api")
app.include_router(realtime.router, tags=["Realtime"])
app.mount(settings.UPLOAD_URL_PREFIX, StaticFiles(directory=str(settings.upload_path)), name="uploads")


def run():
    import uvicorn
    uvicorn.run(
        "campus_portal.main:app",
        host=settings.SERVER_HOST,
        port=settings.SERVER_PORT,
        reload=settings.DEBUG
    )


if __name__ == "__main__":
    run()

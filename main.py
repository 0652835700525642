"""
SkinScan Backend - Webcam skin-type analysis service
Version: 1.0.0
"""

from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse
from fastapi.staticfiles import StaticFiles
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from config.settings import settings
from core.logging import logger
from core.monitoring import init_sentry
from core.dependencies import shutdown_services
from api.endpoints.analyze import router as analyze_router, limiter


PROJECT_ROOT = Path(__file__).resolve().parent


def resolve_static_dir() -> Path:
    static_dir = Path(settings.STATIC_DIR)
    if not static_dir.is_absolute():
        static_dir = PROJECT_ROOT / static_dir
    return static_dir


STATIC_DIR = resolve_static_dir()


# ========== Initialize Sentry (if configured) ==========
sentry_enabled = init_sentry()


# ========== FastAPI App Initialization ==========
app = FastAPI(
    title=settings.APP_TITLE,
    description=settings.APP_DESCRIPTION,
    version=settings.APP_VERSION
)

# Attach limiter to app state
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)


# ========== CORS Middleware ==========
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ========== Security Headers Middleware ==========
@app.middleware("http")
async def add_security_headers(request: Request, call_next):
    """
    Add security headers to all responses

    The page needs the user's camera, so Permissions-Policy grants camera
    access to this origin only.
    """
    response = await call_next(request)

    response.headers["Content-Security-Policy"] = (
        "default-src 'self'; "
        "img-src 'self' data: blob:; "
        "media-src 'self' blob: mediastream:; "
        "script-src 'self'; "
        "style-src 'self' 'unsafe-inline'; "
        "connect-src 'self'; "
        "frame-ancestors 'none';"
    )
    response.headers["X-Frame-Options"] = "DENY"
    response.headers["X-Content-Type-Options"] = "nosniff"
    response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
    response.headers["Permissions-Policy"] = (
        "camera=(self), geolocation=(), microphone=(), payment=(), usb=()"
    )

    if request.url.scheme == "https" or settings.ENVIRONMENT == "production":
        response.headers["Strict-Transport-Security"] = (
            "max-age=31536000; includeSubDomains"
        )

    if "Server" in response.headers:
        del response.headers["Server"]

    return response


# ========== Request Size Limit Middleware ==========
@app.middleware("http")
async def limit_upload_size(request: Request, call_next):
    """Reject request bodies larger than MAX_BODY_SIZE"""
    if request.method == "POST":
        content_length = request.headers.get("content-length")
        if content_length and content_length.isdigit() and int(content_length) > settings.MAX_BODY_SIZE:
            logger.warning(f"Request too large: {int(content_length)} bytes (max: {settings.MAX_BODY_SIZE})")
            return JSONResponse(
                status_code=413,
                content={
                    "success": False,
                    "error": "payload_too_large",
                    "message": f"Request too large. Maximum size is {settings.MAX_BODY_SIZE // (1024 * 1024)}MB"
                }
            )
    return await call_next(request)


# ========== Register Routers ==========
app.include_router(analyze_router, prefix="/api", tags=["analysis"])


# ========== Startup / Shutdown ==========
@app.on_event("startup")
async def startup_event():
    logger.info(f"{settings.APP_TITLE} v{settings.APP_VERSION} starting (static dir: {STATIC_DIR})")
    if sentry_enabled:
        logger.info("Sentry error tracking enabled")


@app.on_event("shutdown")
async def shutdown_event():
    shutdown_services()


# ========== Root Page ==========
@app.get("/", include_in_schema=False)
async def root():
    """Serve the main page"""
    return FileResponse(STATIC_DIR / "index.html")


# ========== Health Check Endpoint ==========
@app.get("/api/health")
async def health_check(deep: bool = False):
    """
    Health check endpoint

    Query parameters:
    - deep: If true, loads the face landmark model as part of the check
    """
    from core.health_check import get_health_check_service

    health_service = get_health_check_service()
    result = await health_service.comprehensive_health_check(
        STATIC_DIR,
        include_expensive_checks=deep
    )

    return {
        "status": result["status"],
        "version": settings.APP_VERSION,
        "environment": settings.ENVIRONMENT,
        "checks": result["checks"],
        "check_duration_ms": result["check_duration_ms"],
        "timestamp": result["timestamp"]
    }


# ========== Static Assets ==========
# Mounted last so the API routes above take precedence
app.mount("/", StaticFiles(directory=STATIC_DIR, check_dir=False), name="static")


# ========== Main Entry Point ==========
def run() -> None:
    import uvicorn
    logger.info(f"Server running on http://localhost:{settings.PORT}")
    uvicorn.run(app, host=settings.HOST, port=settings.PORT)


if __name__ == "__main__":
    run()

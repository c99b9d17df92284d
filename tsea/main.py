"""
TSEA Learning Platform

FastAPI application entry point.
"""

import html
import time
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncGenerator

from fastapi import FastAPI, Query, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import FileResponse, HTMLResponse, JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from tsea.api.deps import get_progress_engine
from tsea.api.middleware.rate_limit import API_PREFIX, RateLimitMiddleware
from tsea.api.middleware.request_id import REQUEST_ID_HEADER, RequestIdMiddleware
from tsea.api.middleware.security_headers import SecurityHeadersMiddleware
from tsea.api.v1 import router as api_v1_router
from tsea.config import get_settings
from tsea.database import close_db, init_db
from tsea.errors import ConfigurationError, NotFoundError, UpstreamError
from tsea.logging_config import configure_logging, get_logger
from tsea.schemas.common import HealthResponse

settings = get_settings()
logger = get_logger(__name__)

STATIC_DIR = Path(__file__).resolve().parent / "static"
STUB_PAGES = (
    "/docs/terms",
    "/docs/privacy",
    "/about",
    "/customers",
    "/faq",
    "/contact",
    "/assistant",
    "/login",
    "/signup",
    "/assistants",
)
IMMUTABLE_SUFFIXES = frozenset({".png", ".jpg", ".jpeg", ".svg", ".ico", ".css", ".js"})
IMMUTABLE_CACHE_CONTROL = "public, max-age=31536000, immutable"

_started_at = time.monotonic()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator:
    """
    Application lifespan handler.

    Logging is configured first; the curriculum is loaded at startup so a
    malformed document fails the boot instead of the first request.
    """
    configure_logging(
        log_level=settings.log_level,
        environment=settings.environment,
        debug=settings.debug,
    )

    logger.info("Starting %s v%s", settings.project_name, settings.version)
    await init_db()
    logger.info("Database initialized")
    engine = get_progress_engine()
    logger.info("Curriculum ready", extra={"modules": len(engine.curriculum.modules)})
    if not settings.ai_configured:
        logger.warning("OPENAI_API_KEY is not set; assistant chat will return 503")

    yield

    logger.info("Shutting down...")
    await close_db()
    logger.info("Database connections closed")


app = FastAPI(
    title=settings.project_name,
    description="""
    TSEA Learning Platform

    Trading education with tier-gated curriculum tracks and AI strategy assistants.

    ## Features

    - **Curriculum**: Tracks, modules, lessons and quizzes with per-user progress
    - **Tiers**: Basic, Pro and Elite plans gate which tracks are visible
    - **Assistants**: ICATOR, EVALUATE, DESIGN, GENERATE and EVOLVE personas
    - **Projects**: Saved strategy projects per learner
    """,
    version=settings.version,
    lifespan=lifespan,
    docs_url="/docs" if settings.debug else None,
    redoc_url="/redoc" if settings.debug else None,
)


class CachedStaticFiles(StaticFiles):
    """Static files with long-lived caching for fingerprintable asset types."""

    def file_response(self, full_path, stat_result, scope, status_code: int = 200):
        response = super().file_response(full_path, stat_result, scope, status_code)
        if Path(str(full_path)).suffix.lower() in IMMUTABLE_SUFFIXES:
            response.headers["Cache-Control"] = IMMUTABLE_CACHE_CONTROL
        return response


# add_middleware stacks innermost-first, so the last one added is outermost.
_cors_origins = [
    "http://localhost:3000",
    "http://localhost:5173",
    "http://127.0.0.1:3000",
]
if not (settings.debug or settings.environment == "development"):
    _cors_origins = ["https://tsea.example.com"] + _cors_origins

app.add_middleware(RateLimitMiddleware)
app.add_middleware(RequestIdMiddleware)
app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(GZipMiddleware, minimum_size=500)
app.add_middleware(
    CORSMiddleware,
    allow_origins=_cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _cors_headers(request: Request) -> dict:
    """CORS headers for error responses (500s can bypass the CORS middleware)."""
    origin = request.headers.get("origin") or ""
    allow_origin = origin if origin in _cors_origins else _cors_origins[0]
    return {
        "Access-Control-Allow-Origin": allow_origin,
        "Access-Control-Allow-Credentials": "true",
        "Access-Control-Allow-Methods": "*",
        "Access-Control-Allow-Headers": "*",
    }


def _error_response(request: Request, status_code: int, content: dict, headers: dict = None) -> JSONResponse:
    out_headers = _cors_headers(request)
    if headers:
        out_headers.update(headers)
    req_id = getattr(request.state, "request_id", None)
    if req_id:
        out_headers[REQUEST_ID_HEADER] = req_id
        content["request_id"] = req_id
    return JSONResponse(status_code=status_code, content=content, headers=out_headers)


def _page(title: str, body: str, status_code: int = 200) -> HTMLResponse:
    return HTMLResponse(
        f"""<!doctype html><meta charset="utf-8">
<title>{title}</title>
<link rel="stylesheet" href="/public/styles.css">
<div class="container" style="padding:40px 0">
{body}
</div>
""",
        status_code=status_code,
    )


def _not_found_page(request: Request) -> HTMLResponse:
    path = html.escape(request.url.path)
    return _page(
        "Not found",
        f"""<h1>404</h1>
<p>We couldn't find <code>{path}</code>.</p>
<p><a class="btn btn-primary" href="/">Go home</a></p>""",
        status_code=status.HTTP_404_NOT_FOUND,
    )


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """JSON errors for the API; an HTML page for unknown site paths."""
    if exc.status_code == status.HTTP_404_NOT_FOUND and not request.url.path.startswith(API_PREFIX):
        return _not_found_page(request)
    return _error_response(
        request,
        exc.status_code,
        {"detail": exc.detail},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Handle request validation errors."""
    errors = []
    for error in exc.errors():
        field = ".".join(str(loc) for loc in error["loc"])
        errors.append({
            "field": field,
            "message": error["msg"],
            "type": error["type"],
        })
    return _error_response(
        request,
        status.HTTP_422_UNPROCESSABLE_ENTITY,
        {"detail": "Validation error", "errors": errors},
    )


@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError):
    return _error_response(
        request,
        status.HTTP_404_NOT_FOUND,
        {"detail": exc.message, "code": f"{exc.kind}_not_found"},
    )


@app.exception_handler(ConfigurationError)
async def configuration_error_handler(request: Request, exc: ConfigurationError):
    return _error_response(
        request,
        status.HTTP_503_SERVICE_UNAVAILABLE,
        {"detail": exc.message, "code": "assistant_not_configured"},
    )


@app.exception_handler(UpstreamError)
async def upstream_error_handler(request: Request, exc: UpstreamError):
    content = {"detail": exc.message, "code": "upstream_error"}
    if exc.status_code is not None:
        content["upstream_status"] = exc.status_code
    return _error_response(request, status.HTTP_502_BAD_GATEWAY, content)


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """Handle unexpected exceptions."""
    logger.exception("Unhandled exception: %s", exc)
    if settings.debug:
        content = {"detail": str(exc), "type": type(exc).__name__}
    else:
        content = {"detail": "Internal server error"}
    return _error_response(request, status.HTTP_500_INTERNAL_SERVER_ERROR, content)


@app.get("/api/health", response_model=HealthResponse, tags=["Health"])
async def health_check():
    """Liveness with process uptime (seconds) and timestamp (ms)."""
    return HealthResponse(
        ok=True,
        uptime=round(time.monotonic() - _started_at, 3),
        ts=int(time.time() * 1000),
        version=settings.version,
        ai_configured=settings.ai_configured,
    )


@app.get("/", include_in_schema=False)
async def landing():
    return FileResponse(STATIC_DIR / "index.html")


async def stub_page():
    return FileResponse(STATIC_DIR / "stubs.html")


for _path in STUB_PAGES:
    app.add_api_route(_path, stub_page, methods=["GET"], include_in_schema=False)


@app.get("/checkout", include_in_schema=False)
async def checkout_page(plan: str = Query("pro"), coupon: str = Query("")):
    """Checkout stub; accepts ?plan=pro|elite and an optional coupon."""
    coupon_line = f"<p>Coupon: <strong>{html.escape(coupon)}</strong></p>" if coupon else ""
    return _page(
        "Checkout",
        f"""<h1>Checkout</h1>
<p>Plan: <strong>{html.escape(plan)}</strong></p>
{coupon_line}
<p class="muted">Payments are not connected yet.</p>
<p><a class="btn btn-primary" href="/">&larr; Back to site</a></p>""",
    )


app.mount("/public", CachedStaticFiles(directory=STATIC_DIR), name="public")

app.include_router(
    api_v1_router,
    prefix=settings.api_v1_prefix,
)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "tsea.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.debug,
    )

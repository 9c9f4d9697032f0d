"""
ViralRemix FastAPI Application.

REST API that turns competitor marketing text into platform-ready short-form
video content.

Features:
- Remix endpoint (Gemini analysis -> OpenAI generation)
- Per-client fixed-window rate limiting
- Health check endpoint
- Automatic OpenAPI documentation
"""

# Load environment variables FIRST before any other imports
from dotenv import load_dotenv
load_dotenv()

import json
import logging
from datetime import datetime
from typing import Any

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from . import __version__
from .models import ErrorResponse, HealthResponse, PipelineRequest, RemixResponse
from ..core.config import Config
from ..core.observability import setup_logfire
from ..services.rate_limiter import FixedWindowRateLimiter, client_id_from
from ..services.remix_pipeline import RemixPipeline

# ============================================================================
# Logging Configuration
# ============================================================================

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

# ============================================================================
# FastAPI Application Setup
# ============================================================================

app = FastAPI(
    title="ViralRemix API",
    description="Competitor content analysis and short-form video content generation",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json"
)

# ============================================================================
# CORS Configuration
# ============================================================================

# Browsers refuse credentials with a wildcard origin.
app.add_middleware(
    CORSMiddleware,
    allow_origins=Config.CORS_ORIGINS,
    allow_credentials="*" not in Config.CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ============================================================================
# Rate Limiting
# ============================================================================

# One limiter per process; tests replace it or call clear().
app.state.rate_limiter = FixedWindowRateLimiter()


def get_pipeline(request: Request) -> RemixPipeline:
    """Build the pipeline around the process-wide rate limiter."""
    return RemixPipeline(rate_limiter=request.app.state.rate_limiter)


async def _read_json_body(request: Request) -> Any:
    """Decoded JSON body, or None when the body is empty or not JSON."""
    raw = await request.body()
    if not raw:
        return None
    try:
        return json.loads(raw)
    except ValueError:
        logger.warning("Request body is not valid JSON")
        return None


# ============================================================================
# Remix Endpoint
# ============================================================================

@app.api_route(
    "/api/generate",
    methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
    response_model=RemixResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Missing or invalid input"},
        405: {"model": ErrorResponse, "description": "Method not allowed (POST only)"},
        429: {"model": ErrorResponse, "description": "Too many requests"},
        500: {"model": ErrorResponse, "description": "Configuration or upstream failure"}
    },
    openapi_extra={
        "requestBody": {
            "required": True,
            "content": {
                "application/json": {"schema": PipelineRequest.model_json_schema(by_alias=True)}
            }
        }
    },
    tags=["Remix"],
    summary="Analyze competitor content and generate platform scripts"
)
async def generate(request: Request, pipeline: RemixPipeline = Depends(get_pipeline)):
    """
    Run the two-stage remix pipeline.

    1. Gemini analyzes the competitor text (summary, structure, insights, ideas)
    2. OpenAI writes at least 2 variants per idea per requested platform

    **Rate Limits:**
    - 60 requests per minute per client (X-Forwarded-For, else peer address)
    - Configurable via RATE_LIMIT_MAX_REQUESTS / RATE_LIMIT_WINDOW_SECONDS

    **Request Body:**
    ```json
    {
        "rawText": "competitor video transcript",
        "niche": "fitness",
        "platforms": ["tiktok", "youtube_shorts"]
    }
    ```

    Failures return `{"error": "...", "detail": ...}` where `detail` carries the
    raw upstream text or envelope for diagnosis.
    """
    client_id = client_id_from(
        request.headers.get("x-forwarded-for"),
        request.client.host if request.client else None
    )
    body = await _read_json_body(request)

    outcome = await pipeline.handle(request.method, client_id, body)
    return JSONResponse(status_code=outcome.status_code, content=outcome.content)


# ============================================================================
# Health Check Endpoint
# ============================================================================

@app.get(
    "/health",
    response_model=HealthResponse,
    tags=["System"],
    summary="Health check endpoint"
)
async def health_check():
    """
    Check API health.

    Reports whether each upstream API key is present. Keys are read from the
    environment on every request, like the pipeline does.
    """
    services = {
        "gemini": "configured" if Config.gemini_api_key() else "missing_api_key",
        "openai": "configured" if Config.openai_api_key() else "missing_api_key",
    }

    overall_status = "healthy" if all(
        s == "configured" for s in services.values()
    ) else "degraded"

    return HealthResponse(
        status=overall_status,
        version=__version__,
        timestamp=datetime.now(),
        services=services
    )


# ============================================================================
# Error Handlers
# ============================================================================

@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Handle HTTP exceptions with consistent error format."""
    # Router-level 405s use the pipeline wording.
    error = "Method not allowed" if exc.status_code == 405 else str(exc.detail)
    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorResponse(error=error).model_dump(exclude_none=True),
        headers=getattr(exc, "headers", None)
    )


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """Handle unexpected exceptions."""
    logger.error(f"Unhandled exception: {exc}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content=ErrorResponse(error="Server failure", detail=str(exc)).model_dump()
    )


# ============================================================================
# Startup/Shutdown Events
# ============================================================================

@app.on_event("startup")
async def startup_event():
    """Log startup information."""
    setup_logfire()
    limiter = app.state.rate_limiter
    logger.info("="*60)
    logger.info("ViralRemix API Starting...")
    logger.info(f"API Version: {__version__}")
    logger.info("Docs available at: /docs")
    logger.info(f"Rate limit: {limiter.max_requests} req / {limiter.window_seconds:g}s per client")
    logger.info(f"Gemini model: {Config.GEMINI_MODEL}, OpenAI model: {Config.OPENAI_MODEL}")
    logger.info("="*60)


@app.on_event("shutdown")
async def shutdown_event():
    """Log shutdown information."""
    app.state.rate_limiter.clear()
    logger.info("ViralRemix API Shutting down...")


# ============================================================================
# Root Endpoint
# ============================================================================

@app.get("/", tags=["System"])
async def root():
    """
    API root endpoint with basic information.
    """
    return {
        "name": "ViralRemix API",
        "version": __version__,
        "description": "Competitor content analysis and short-form video content generation",
        "docs": "/docs",
        "health": "/health",
        "endpoints": {
            "remix": "/api/generate"
        }
    }

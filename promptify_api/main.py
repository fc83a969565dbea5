"""FastAPI application entry point"""

import sys
import logging
from datetime import datetime, timezone
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from promptify_api.core.config import settings
from promptify_api.models.errors import ApplicationError
from promptify_api.models.schemas import HealthResponse
from promptify_api.api import generate, sites

# Configure logging early with force=True to override any existing config
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    force=True,
    handlers=[
        logging.StreamHandler(sys.stdout)
    ]
)

logger = logging.getLogger(__name__)

SERVICE_NAME = "promptify-backend"

# Create FastAPI app
app = FastAPI(
    title=settings.api_title,
    version=settings.api_version,
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.origins,
    allow_credentials=False,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
)


@app.exception_handler(ApplicationError)
async def application_error_handler(request: Request, exc: ApplicationError) -> JSONResponse:
    """Render typed application errors as JSON bodies"""
    if exc.http_status >= 500:
        logger.error(f"[API] {request.method} {request.url.path} → {exc.code.value}: {exc.message}")
    else:
        logger.info(f"[API] {request.method} {request.url.path} → {exc.code.value}: {exc.message}")
    return JSONResponse(status_code=exc.http_status, content=exc.model_dump())


@app.on_event("startup")
async def startup_event():
    """Log startup diagnostic information"""
    logger.info("=" * 60)
    logger.info("PROMPTIFY GENERATOR API STARTING")
    logger.info("=" * 60)
    logger.info(f"Model: {settings.model} | max_attempts={settings.max_attempts} | max_output_tokens={settings.max_output_tokens}")
    logger.info(f"Sites: {settings.base_url}/sites/<id>/ (stored in {settings.sites_dir})")
    logger.info(f"CORS origins: {settings.origins}")
    if not settings.openai_api_key:
        logger.warning("OPENAI_API_KEY is not set; generation requests will fail")
    logger.info("=" * 60)


@app.get("/", response_class=PlainTextResponse)
async def root():
    return "Promptify Generator API is running. POST /generate-site or /api/generate"


@app.get("/health", response_model=HealthResponse)
@app.get("/api/health", response_model=HealthResponse)
async def health():
    """Health check for monitoring"""
    return HealthResponse(ok=True, service=SERVICE_NAME, time=datetime.now(timezone.utc).isoformat())


# Register API routes
app.include_router(generate.router, tags=["generate"])
app.include_router(sites.router, tags=["sites"])

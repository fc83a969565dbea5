"""Generate endpoints: multipart form upload and JSON payload"""
import logging
from typing import Any, Dict
from fastapi import APIRouter, BackgroundTasks, Body, Depends, Request
from pydantic import ValidationError
from starlette.datastructures import UploadFile
from promptify_api.core.asset_encoder import read_upload
from promptify_api.core.config import settings
from promptify_api.core.dependencies import get_pipeline, get_site_store
from promptify_api.core.site_store import SiteStore
from promptify_api.generator.generator_schemas import GenerationResult
from promptify_api.generator.pipeline import SOURCE_AI, GenerationPipeline
from promptify_api.models.errors import ApplicationError, ErrorCode, ModelCallError
from promptify_api.models.schemas import Brief, GenerateResponse, validation_details

router = APIRouter()
logger = logging.getLogger(__name__)


# Writes the generated document to the site store after the response is sent.
# Storage failures are logged; the caller already has the HTML.
def _persist_site(store: SiteStore, site_id: str, result: GenerationResult) -> None:
    meta = {
        "source": result.source,
        "state": result.state.value,
        "attempts": [
            {"index": a.index, "passed": a.passed, "check": a.check, "reason": a.reason}
            for a in result.attempts
        ],
        "forced_fallback": result.forced_fallback,
    }
    try:
        store.put(site_id, result.html, meta=meta)
    except OSError as e:
        logger.error(f"[Generate] ✗ Failed to persist {site_id}: {e}", exc_info=True)


# Builds a Brief, turning pydantic validation errors into a 400 INVALID_INPUT.
# raw=True accepts the loose request shapes; raw=False takes normalized field names.
def _brief_or_400(payload: Dict[str, Any], raw: bool = True) -> Brief:
    try:
        return Brief.from_raw(payload) if raw else Brief(**payload)
    except ValidationError as e:
        raise ApplicationError(
            code=ErrorCode.INVALID_INPUT,
            message="Invalid input",
            details=validation_details(e.errors()),
        )


async def _run_generation(
    brief: Brief,
    pipeline: GenerationPipeline,
    store: SiteStore,
    background_tasks: BackgroundTasks,
) -> GenerateResponse:
    try:
        result = await pipeline.generate(brief)
    except ModelCallError as e:
        logger.error(f"[Generate] ✗ Generation failed: {e}")
        raise ApplicationError(
            code=ErrorCode.GENERATION_FAILED,
            message="Generator could not produce an HTML page.",
            retryable=True,
            hint="The AI service is unavailable or rejected the request. Please try again.",
            details=str(e),
        )

    site_id = store.new_site_id()
    background_tasks.add_task(_persist_site, store, site_id, result)
    return GenerateResponse(
        id=site_id,
        url=f"{settings.base_url}/sites/{site_id}/",
        html=result.html,
        length=len(result.html),
        source=result.source,
        quality_gate="passed" if result.source == SOURCE_AI else "fallback",
        attempts=len(result.attempts),
    )


@router.post("/api/generate", response_model=GenerateResponse)
async def generate_from_form(
    request: Request,
    background_tasks: BackgroundTasks,
    pipeline: GenerationPipeline = Depends(get_pipeline),
    store: SiteStore = Depends(get_site_store),
) -> GenerateResponse:
    """
    Generate a site from a multipart form.

    Text fields: name, ticker, prompt, xurl, tgurl, colors[primary]/colors[accent]/colors[bg]
    (or primary/accent/bg). Files: logo, bg (images, size-limited).
    """
    form = await request.form()
    payload: Dict[str, Any] = {k: v for k, v in form.items() if isinstance(v, str)}

    logo = form.get("logo")
    background = form.get("bg")
    # The bg form key is the background image upload here, never a colour
    payload.pop("bg", None)
    payload.pop("logo", None)
    if isinstance(background, str):
        payload["colors[bg]"] = payload.get("colors[bg]") or background

    brief_fields = _brief_or_400(payload).model_dump()
    brief_fields["logo_asset"] = await read_upload(
        logo if isinstance(logo, UploadFile) else None, max_bytes=settings.max_upload_bytes)
    brief_fields["background_asset"] = await read_upload(
        background if isinstance(background, UploadFile) else None, max_bytes=settings.max_upload_bytes)
    brief = _brief_or_400(brief_fields, raw=False)

    return await _run_generation(brief, pipeline, store, background_tasks)


@router.post("/generate-site", response_model=GenerateResponse)
async def generate_from_json(
    background_tasks: BackgroundTasks,
    payload: Dict[str, Any] = Body(...),
    pipeline: GenerationPipeline = Depends(get_pipeline),
    store: SiteStore = Depends(get_site_store),
) -> GenerateResponse:
    """Generate a site from a JSON brief; assets are pre-encoded data:image URLs."""
    brief = _brief_or_400(payload)
    return await _run_generation(brief, pipeline, store, background_tasks)

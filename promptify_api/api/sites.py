"""GET /sites/{site_id}/ endpoint"""

from fastapi import APIRouter, Depends, Response
from promptify_api.core.dependencies import get_site_store
from promptify_api.core.site_store import SiteStore
from promptify_api.models.errors import ApplicationError, ErrorCode

router = APIRouter()


@router.get("/sites/{site_id}")
@router.get("/sites/{site_id}/")
async def get_site(site_id: str, store: SiteStore = Depends(get_site_store)) -> Response:
    """Serve a previously generated page."""
    html = store.get(site_id)
    if html is None:
        raise ApplicationError(code=ErrorCode.NOT_FOUND, message=f"Site not found: {site_id}")
    return Response(
        content=html,
        media_type="text/html",
        headers={
            "Cache-Control": "public, max-age=60",
            "X-Content-Type-Options": "nosniff"
        }
    )

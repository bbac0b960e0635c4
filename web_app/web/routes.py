"""Redirect route for short links."""

import logging

from fastapi import APIRouter, Request, status
from fastapi.responses import RedirectResponse

from shortlinks.common.url_builder import SHORT_PATH_PREFIX
from shortlinks.exceptions import ShortLinkError
from ..api.routes import error_response

router = APIRouter()
logger = logging.getLogger("shortlinks.web")


@router.get(
    f"{SHORT_PATH_PREFIX}/{{slug}}",
    status_code=status.HTTP_301_MOVED_PERMANENTLY,
    include_in_schema=False,
)
async def redirect_short_link(request: Request, slug: str):
    """Permanently redirect a slug to its original URL."""
    service = request.app.state.service

    if not service.generator.is_valid_slug(slug):
        return error_response(status.HTTP_404_NOT_FOUND, "Short link not found")

    try:
        original_url = await service.get_original_url(slug)
    except ShortLinkError as e:
        logger.error(f"Error resolving short link {slug}: {e}")
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")

    if not original_url:
        return error_response(status.HTTP_404_NOT_FOUND, "Short link not found")

    return RedirectResponse(url=original_url, status_code=status.HTTP_301_MOVED_PERMANENTLY)

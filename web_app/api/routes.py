"""API routes implementation."""

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse

from .schemas import (
    ShortenRequest,
    ShortenResponse,
    SlugStatusResponse,
    HealthResponse,
    ErrorResponse,
)
from shortlinks.exceptions import InvalidInputError, ShortLinkError

router = APIRouter()
logger = logging.getLogger("shortlinks.web")


def error_response(status_code: int, error: str) -> JSONResponse:
    """JSON error body shared by all routes."""
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=error).model_dump(exclude_none=True),
    )


@router.post(
    "/links",
    status_code=status.HTTP_201_CREATED,
    response_model=ShortenResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid URL"},
        500: {"model": ErrorResponse, "description": "Internal server error"},
    },
    summary="Create short link",
    description="Create a short link for an http(s) URL. A URL without scheme gets https://.",
)
async def create_short_link(request: Request, body: ShortenRequest):
    """Create a short link."""
    service = request.app.state.service

    try:
        link = await service.create_short_link(body.url)
    except InvalidInputError as e:
        return error_response(status.HTTP_400_BAD_REQUEST, str(e))
    except ShortLinkError as e:
        logger.error(f"Error creating short link: {e}")
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")
    except Exception:
        logger.exception("Unexpected error creating short link")
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")

    return ShortenResponse(short_url=link.short_url)


@router.get(
    "/links/{slug}",
    response_model=SlugStatusResponse,
    responses={
        500: {"model": ErrorResponse, "description": "Internal server error"},
    },
    summary="Check slug",
    description="Report whether a slug is currently mapped.",
)
async def get_slug_status(request: Request, slug: str):
    """Check whether a slug exists."""
    service = request.app.state.service

    try:
        exists = await service.slug_exists(slug)
    except ShortLinkError as e:
        logger.error(f"Error checking slug {slug}: {e}")
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")

    return SlugStatusResponse(slug=slug, exists=exists)


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check",
    description="Check if the service and its storage backend are healthy.",
)
async def health_check(request: Request):
    """Health check endpoint for load balancers and monitoring."""
    service = request.app.state.service

    health = await service.health_check()

    return HealthResponse(
        status="healthy" if health["overall"] else "unhealthy",
        storage="healthy" if health["storage"] else "unhealthy",
        backend=health["backend"],
        timestamp=datetime.now(timezone.utc),
    )

"""
Short URL endpoints.

POST creates a mapping for a long URL (rejecting duplicates), GET lists
every mapping. Business rules live in ShortUrlService; this module only
translates between HTTP and the service.
"""
from fastapi import APIRouter, Depends, HTTPException, status

from shortener.dependencies.registry import get_short_url_service
from shortener.schemas.common import ErrorResponse
from shortener.schemas.short_url import ShortUrlCreateRequest, UrlMappingResponse
from shortener.services.exceptions import (
    ShortUrlConflictError,
    ShortUrlError,
    ShortUrlValidationError,
)
from shortener.services.short_url import ShortUrlService

router = APIRouter(prefix="/short-url", tags=["short-url"])


def _to_http_exception(error: ShortUrlError) -> HTTPException:
    if isinstance(error, ShortUrlValidationError):
        status_code = status.HTTP_400_BAD_REQUEST
    elif isinstance(error, ShortUrlConflictError):
        status_code = status.HTTP_409_CONFLICT
    else:
        status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    return HTTPException(status_code=status_code, detail=error.to_payload())


@router.post(
    "",
    response_model=UrlMappingResponse,
    status_code=status.HTTP_200_OK,
    responses={
        400: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
def create_short_url(
    request: ShortUrlCreateRequest | None = None,
    service: ShortUrlService = Depends(get_short_url_service),
):
    """
    Create a short URL for a long URL.

    Args:
        request: Body with ``longUrl`` and an optional ``name``.
            A missing body is treated like a body without ``longUrl``.
        service: Request-scoped ShortUrlService

    Returns:
        The created mapping
    """
    request = request or ShortUrlCreateRequest()
    try:
        mapping = service.create_short_url(request.long_url, request.name)
    except ShortUrlError as e:
        raise _to_http_exception(e) from e
    return UrlMappingResponse.model_validate(mapping)


@router.get(
    "",
    response_model=list[UrlMappingResponse],
    status_code=status.HTTP_200_OK,
    responses={500: {"model": ErrorResponse}},
)
def list_short_urls(service: ShortUrlService = Depends(get_short_url_service)):
    """List every stored mapping, oldest first."""
    try:
        mappings = service.list_short_urls()
    except ShortUrlError as e:
        raise _to_http_exception(e) from e
    return [UrlMappingResponse.model_validate(m) for m in mappings]

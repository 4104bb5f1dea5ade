"""Shared utilities for router modules."""

from typing import Dict

from fastapi import HTTPException, Request, Response

from albumcat.errors import AlbumcatError, FieldValidationError, NotFoundError
from albumcat.models.responses import AlbumResponse, PhotoResponse
from albumcat.pagination import Page, pagination_headers
from albumcat.records import AlbumRecord, PhotoRecord

WARNING_HEADER = "X-Albumcat-Warning"


def _http_error(exc: AlbumcatError) -> HTTPException:
    """Translate a service error into an HTTP error."""
    if isinstance(exc, NotFoundError):
        return HTTPException(status_code=404, detail=str(exc))
    if isinstance(exc, FieldValidationError):
        return HTTPException(status_code=400, detail={"message": exc.message, "field": exc.field})
    return HTTPException(status_code=400, detail=str(exc))


def _serialize_album(record: AlbumRecord) -> AlbumResponse:
    return AlbumResponse.model_validate(record)


def _serialize_photo(record: PhotoRecord) -> PhotoResponse:
    return PhotoResponse.model_validate(record)


def _apply_page_headers(request: Request, response: Response, page: Page) -> None:
    headers: Dict[str, str] = pagination_headers(request.url, page)
    for name, value in headers.items():
        response.headers[name] = value

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from starlette.datastructures import QueryParams

from .adapters.photos import NoPhotosFound, PhotosAdapter, PhotosAdapterError
from .domain.models import Photo, ValidatedRequestParams
from .domain.result import Err
from .settings import AppSettings
from .validation import ALBUM_ID_PARAM, LIMIT_PARAM, OFFSET_PARAM, query_value, validate_photo_request

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class PhotoApiResult:
    status_code: int
    body: dict[str, Any]


def slice_photos(photos: list[Photo], offset: int, limit: int) -> list[Photo]:
    return photos[offset : min(offset + limit, len(photos))]


def _photos_body(photos: list[Photo]) -> dict[str, Any]:
    return {"photos": [photo.model_dump(mode="json", by_alias=True) for photo in photos]}


def _log_failure(params: ValidatedRequestParams, error: PhotosAdapterError) -> None:
    album_ids = ",".join(params.album_ids) if params.album_ids is not None else None
    LOGGER.error(
        "Request with %s=%s, %s=%s, %s=%s resulted in an error: %s: %s (cause: %r)",
        ALBUM_ID_PARAM,
        album_ids,
        OFFSET_PARAM,
        params.offset,
        LIMIT_PARAM,
        params.limit,
        type(error).__name__,
        error,
        getattr(error, "cause", None),
    )


async def handle_photo_request(
    query: QueryParams,
    *,
    adapter: PhotosAdapter,
    settings: AppSettings,
) -> PhotoApiResult:
    """Run one ``GET /api/photos`` request through validation, fetch and slicing.

    Invalid parameters give a 400 listing every failing field. Any upstream
    failure gives a 500 naming only the error kind; the parameters, the error
    and its cause go to the log.
    """
    photos_settings = settings.yaml.photos
    validated = validate_photo_request(
        query_value(query.getlist(ALBUM_ID_PARAM)),
        query_value(query.getlist(OFFSET_PARAM)),
        query_value(query.getlist(LIMIT_PARAM)),
        default_limit=photos_settings.default_limit,
        max_limit=photos_settings.max_limit,
    )
    if isinstance(validated, Err):
        return PhotoApiResult(
            status_code=400,
            body={
                "validationErrors": [
                    error.model_dump(mode="json", by_alias=True) for error in validated.error
                ]
            },
        )

    params = validated.value
    fetched = await adapter.get_photos(params.album_ids)
    if isinstance(fetched, Err):
        error = fetched.error
        if isinstance(error, NoPhotosFound) and not photos_settings.empty_result_is_error:
            LOGGER.info("Upstream returned no photos for %s=%s", ALBUM_ID_PARAM, params.album_ids)
            return PhotoApiResult(status_code=200, body=_photos_body([]))

        _log_failure(params, error)
        return PhotoApiResult(
            status_code=500,
            body={"error": f"An unexpected error occurred: {type(error).__name__}"},
        )

    return PhotoApiResult(
        status_code=200,
        body=_photos_body(slice_photos(fetched.value, params.offset, params.limit)),
    )

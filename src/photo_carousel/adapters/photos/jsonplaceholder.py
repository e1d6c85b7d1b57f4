from __future__ import annotations

import logging
from typing import Any, Sequence
from urllib.parse import urlencode

import httpx
from pydantic import TypeAdapter, ValidationError

from ...domain.models import Photo
from ...domain.result import Err, Ok, Result
from ...settings import BASE_PHOTO_URL, DEFAULT_REVALIDATE_SECONDS
from .base import BadPhotoResponse, NoPhotosFound, PhotosAdapterError, RequestFailed

LOGGER = logging.getLogger(__name__)

ALBUM_ID_QUERY_KEY = "albumId"

_PHOTO_LIST = TypeAdapter(list[Photo])


def build_request_url(album_ids: Sequence[str] | None, base_url: str = BASE_PHOTO_URL) -> str:
    if album_ids is None:
        return base_url

    params = [(ALBUM_ID_QUERY_KEY, album_id.strip()) for album_id in album_ids if album_id.strip()]
    if not params:
        return base_url
    return f"{base_url}?{urlencode(params)}"


async def fetch_json(
    client: httpx.AsyncClient,
    url: str,
    *,
    revalidate_seconds: int = DEFAULT_REVALIDATE_SECONDS,
) -> Result[Any, RequestFailed]:
    """GET ``url`` and decode the body as JSON.

    Transport errors, non-2xx statuses and undecodable bodies all become a
    ``RequestFailed`` whose ``cause`` tells them apart: the raised exception,
    or ``"HTTP <status> <reason>"`` for a bad status.
    """
    headers = {"Cache-Control": f"max-age={revalidate_seconds}"}
    try:
        response = await client.get(url, headers=headers)
        if not response.is_success:
            cause: Any = f"HTTP {response.status_code} {response.reason_phrase}"
            LOGGER.warning("Photo request to %s returned %s", url, cause)
            return Err(RequestFailed(url, cause))
        return Ok(response.json())
    except (httpx.HTTPError, httpx.StreamError, ValueError) as exc:
        LOGGER.warning("Photo request to %s failed: %r", url, exc)
        return Err(RequestFailed(url, exc))


def validate_photo_response(payload: Any) -> Result[list[Photo], BadPhotoResponse | NoPhotosFound]:
    try:
        photos = _PHOTO_LIST.validate_python(payload)
    except ValidationError as exc:
        return Err(BadPhotoResponse(cause=exc))

    if not photos:
        return Err(NoPhotosFound())
    return Ok(photos)


class JsonPlaceholderPhotosAdapter:
    def __init__(
        self,
        *,
        client: httpx.AsyncClient,
        base_url: str = BASE_PHOTO_URL,
        revalidate_seconds: int = DEFAULT_REVALIDATE_SECONDS,
    ) -> None:
        self._client = client
        self._base_url = base_url
        self._revalidate_seconds = revalidate_seconds

    @property
    def base_url(self) -> str:
        return self._base_url

    async def get_photos(
        self, album_ids: Sequence[str] | None = None
    ) -> Result[list[Photo], PhotosAdapterError]:
        url = build_request_url(album_ids, self._base_url)
        payload = await fetch_json(self._client, url, revalidate_seconds=self._revalidate_seconds)
        if isinstance(payload, Err):
            return payload
        return validate_photo_response(payload.value)

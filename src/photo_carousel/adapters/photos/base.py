from __future__ import annotations

from typing import Any, Protocol, Sequence

from ...domain.models import Photo
from ...domain.result import Result


class PhotosAdapterError(RuntimeError):
    """Base class for failures while loading photos from the upstream API."""


class RequestFailed(PhotosAdapterError):
    """The upstream request could not be completed or its body was not JSON."""

    def __init__(self, url: str, cause: Any = None) -> None:
        super().__init__(f"Request to {url} failed")
        self.url = url
        self.cause = cause


class BadPhotoResponse(PhotosAdapterError):
    """The upstream returned JSON that is not a list of photos."""

    def __init__(self, message: str = "Upstream response is not a list of photos", cause: Any = None) -> None:
        super().__init__(message)
        self.cause = cause


class NoPhotosFound(PhotosAdapterError):
    """The upstream returned a well-formed but empty list of photos."""

    def __init__(self, message: str = "Upstream returned no photos") -> None:
        super().__init__(message)
        self.cause = None


class PhotosAdapter(Protocol):
    async def get_photos(
        self, album_ids: Sequence[str] | None = None
    ) -> Result[list[Photo], PhotosAdapterError]:
        """Return the upstream photos, optionally restricted to some albums."""

from .base import BadPhotoResponse, NoPhotosFound, PhotosAdapter, PhotosAdapterError, RequestFailed
from .jsonplaceholder import (
    JsonPlaceholderPhotosAdapter,
    build_request_url,
    fetch_json,
    validate_photo_response,
)

__all__ = [
    "BadPhotoResponse",
    "JsonPlaceholderPhotosAdapter",
    "NoPhotosFound",
    "PhotosAdapter",
    "PhotosAdapterError",
    "RequestFailed",
    "build_request_url",
    "fetch_json",
    "validate_photo_response",
]
